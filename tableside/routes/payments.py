"""
Project: Tableside
Description:
Mock payment gateway. Charging always succeeds once the request passes
the checkout checks: the order is a draft with items, the table minimum
spend is met and the amount covers the total with tax and tips.
"""

import logging
import math

from flask import Blueprint, abort, jsonify

from .. import orders as lifecycle
from ..checkout import clamp_tip
from ..events import broadcast_status
from ..models import OrderStatus, new_id, now_iso
from ..store import get_store
from . import json_object
from .orders import order_summary

log = logging.getLogger(__name__)

bp = Blueprint("payments", __name__)

METHODS = ("card", "cash")


def _declined(order_id, message):
    log.info("Payment for order %s declined: %s", order_id, message)
    return jsonify({
        "success": False,
        "orderId": order_id,
        "paymentStatus": "failed",
        "message": message,
        "timestamp": now_iso(),
    }), 400


@bp.post("/process")
def process_payment():
    data = json_object()
    order_id = data.get("orderId")
    method = data.get("method", "card")
    if not order_id:
        abort(400, description="orderId is required")
    if method not in METHODS:
        abort(400, description=f"Unsupported payment method {method!r}")

    store = get_store()
    with store.lock:
        order = lifecycle.load_order(store, order_id)
        if order.status != OrderStatus.DRAFT:
            return _declined(order_id, f"Order is already {order.status.value}")
        if not order.items:
            return _declined(order_id, "Order has no items")
        if "tip" in data:
            try:
                order.additional_tip = clamp_tip(data["tip"])
            except ValueError as e:
                abort(400, description=str(e))

        summary = order_summary(store, order)
        if not summary["canCheckout"]:
            return _declined(order_id, f"Table minimum spend of ${summary['minimumSpend']:.2f} not reached")

        try:
            amount = round(float(data.get("amount", summary["total"])), 2)
        except (TypeError, ValueError):
            abort(400, description="amount must be a number")
        if not math.isfinite(amount):
            abort(400, description="amount must be a finite number")
        if amount < summary["total"]:
            return _declined(order_id, f"Amount {amount:.2f} does not cover total {summary['total']:.2f}")

        lifecycle.update_order(store, order_id, {"additionalTip": order.additional_tip, "tip": summary["totalTip"]})
        order = lifecycle.update_status(store, order_id, OrderStatus.PAID.value)

        payment = {
            "id": new_id(),
            "orderId": order_id,
            "transactionId": f"txn_{new_id().replace('-', '')[:16]}",
            "method": method,
            "amount": amount,
            "tip": summary["totalTip"],
            "paymentStatus": "completed",
            "timestamp": now_iso(),
        }
        store.payments.add(payment)

    broadcast_status(order)
    log.info("Order %s paid %.2f by %s", order_id, amount, method)
    return jsonify({
        "success": True,
        "orderId": order_id,
        "transactionId": payment["transactionId"],
        "paymentStatus": payment["paymentStatus"],
        "timestamp": payment["timestamp"],
        "amount": amount,
        "summary": summary,
        "order": order.to_dict(),
    })


@bp.get("/status/<order_id>")
def payment_status(order_id):
    payments = get_store().payments.filter(lambda p: p.get("orderId") == order_id)
    if not payments:
        abort(404, description="No payment found for order")
    payment = payments[-1]
    return jsonify({
        "success": payment["paymentStatus"] == "completed",
        "orderId": order_id,
        "transactionId": payment["transactionId"],
        "paymentStatus": payment["paymentStatus"],
        "timestamp": payment["timestamp"],
    })
