"""
Project: Tableside
Description:
Socket.IO push channel. Guests subscribe to their own order, staff screens
subscribe to every order or to newly created ones. Delivery is
fire-and-forget: nothing is acknowledged or replayed.
"""

import logging

from flask_socketio import SocketIO, emit, join_room, leave_room

from .orders import list_orders
from .store import get_store

log = logging.getLogger(__name__)

# Created once without an app, bound inside create_app()
socketio = SocketIO(cors_allowed_origins="*")

ALL_ORDERS_ROOM = "orders:all"
NEW_ORDERS_ROOM = "orders:new"


def order_room(order_id):
    return f"order:{order_id}"


def _order_id(data):
    if isinstance(data, dict):
        return data.get("orderId")
    return data


@socketio.on("connect")
def on_connect(auth=None):
    log.debug("Socket client connected")


@socketio.on("subscribeToOrder")
def subscribe_to_order(data):
    order_id = _order_id(data)
    if not order_id:
        return {"ok": False, "error": "orderId is required"}
    join_room(order_room(order_id))
    log.debug("Socket client subscribed to order %s", order_id)
    return {"ok": True}


@socketio.on("unsubscribeFromOrder")
def unsubscribe_from_order(data):
    order_id = _order_id(data)
    if not order_id:
        return {"ok": False, "error": "orderId is required"}
    leave_room(order_room(order_id))
    return {"ok": True}


@socketio.on("subscribeToAllOrders")
def subscribe_to_all_orders(data=None):
    join_room(ALL_ORDERS_ROOM)
    orders = [o.to_dict() for o in list_orders(get_store())]
    emit("allOrders", {"orders": orders})
    return {"ok": True}


@socketio.on("unsubscribeFromAllOrders")
def unsubscribe_from_all_orders(data=None):
    leave_room(ALL_ORDERS_ROOM)
    return {"ok": True}


@socketio.on("subscribeToNewOrders")
def subscribe_to_new_orders(data=None):
    join_room(NEW_ORDERS_ROOM)
    return {"ok": True}


def broadcast_status(order):
    payload = {"orderId": order.id, "status": order.status.value, "orderNumber": order.order_number}
    socketio.emit("orderStatusUpdate", payload, to=[order_room(order.id), ALL_ORDERS_ROOM])
    log.debug("Pushed status %s for order %s", payload["status"], order.id)


def broadcast_new_order(order):
    socketio.emit("newOrder", order.to_dict(), to=NEW_ORDERS_ROOM)
