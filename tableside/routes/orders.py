"""
Project: Tableside
Description:
Order routes. The lifecycle rules live in tableside.orders; these handlers
translate HTTP bodies into those calls and push status changes out over
Socket.IO.
"""

from flask import Blueprint, current_app, jsonify, request

from .. import orders as lifecycle
from ..checkout import can_checkout, minimum_spend, summarize, venue_tax_rate
from ..events import broadcast_new_order, broadcast_status
from ..store import get_store
from . import json_object

bp = Blueprint("orders", __name__)


def _strict():
    return current_app.config.get("STRICT_STATUS_TRANSITIONS", True)


def order_summary(store, order):
    """Checkout figures for an order plus whether the table minimum allows paying."""
    table = store.tables.get(order.table_id) if order.table_id else None
    venue_id = order.venue_id or (table or {}).get("venueId")
    venue = store.venues.get(venue_id) if venue_id else None

    items = [i.to_dict() for i in order.items]
    summary = summarize(
        items,
        tax_rate=venue_tax_rate(venue, current_app.config["TAX_RATE"]),
        tip_rate=current_app.config["DEFAULT_TIP_RATE"],
        additional_tip=order.additional_tip,
    )
    minimum = minimum_spend(venue, table)
    prior = lifecycle.has_prior_order(store, order.table_id, exclude_id=order.id)
    summary.update({
        "orderId": order.id,
        "minimumSpend": minimum,
        "hasPriorOrder": prior,
        "canCheckout": bool(order.items) and can_checkout(summary["subtotal"], minimum, prior),
    })
    return summary


@bp.get("")
def list_orders():
    orders = lifecycle.list_orders(
        get_store(),
        table_id=request.args.get("tableId"),
        user_id=request.args.get("userId"),
        status=request.args.get("status"),
    )
    return jsonify([o.to_dict() for o in orders])


@bp.post("")
def create_order():
    data = json_object()
    order = lifecycle.create_order(get_store(), data)
    broadcast_new_order(order)
    return jsonify(order.to_dict()), 201


@bp.get("/<order_id>")
def get_order(order_id):
    return jsonify(lifecycle.load_order(get_store(), order_id).to_dict())


@bp.get("/<order_id>/summary")
def get_summary(order_id):
    store = get_store()
    order = lifecycle.load_order(store, order_id)
    return jsonify(order_summary(store, order))


@bp.route("/<order_id>", methods=["PATCH", "PUT"])
def update_order(order_id):
    store = get_store()
    data = json_object()
    before = lifecycle.load_order(store, order_id).status
    order = lifecycle.update_order(store, order_id, data, strict=_strict())
    if order.status != before:
        broadcast_status(order)
    return jsonify(order.to_dict())


@bp.patch("/<order_id>/status")
def update_status(order_id):
    store = get_store()
    data = json_object()
    if not data.get("status"):
        return jsonify({"message": "status is required"}), 400
    before = lifecycle.load_order(store, order_id).status
    order = lifecycle.update_status(store, order_id, data["status"], strict=_strict())
    if order.status != before:
        broadcast_status(order)
    return jsonify(order.to_dict())


@bp.post("/<order_id>/items")
def add_item(order_id):
    data = json_object()
    order = lifecycle.add_item(get_store(), order_id, data)
    return jsonify(order.to_dict())


@bp.patch("/<order_id>/items/<item_id>")
def update_item_quantity(order_id, item_id):
    data = json_object()
    if "quantity" not in data:
        return jsonify({"message": "quantity is required"}), 400
    order = lifecycle.set_item_quantity(get_store(), order_id, item_id, data["quantity"])
    return jsonify(order.to_dict())


@bp.delete("/<order_id>/items/<item_id>")
def remove_item(order_id, item_id):
    order = lifecycle.remove_item(get_store(), order_id, item_id)
    return jsonify(order.to_dict())
