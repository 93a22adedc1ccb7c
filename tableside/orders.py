"""
Project: Tableside
Description:
Order lifecycle: creating draft orders, editing their items and moving
them through the status flow. Every function works against a Store and
persists the order before returning it; callers hold no references to
stored documents.
"""

import logging

from .checkout import clamp_tip
from .models import STATUS_FLOW, Order, OrderItem, OrderStatus

log = logging.getLogger(__name__)


class OrderError(Exception):
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class OrderNotFound(OrderError):
    status_code = 404


class InvalidTransition(OrderError):
    status_code = 409


class OrderLocked(OrderError):
    status_code = 409


def can_transition(current, new, strict=True):
    """Whether an order in `current` may move to `new`."""
    current, new = OrderStatus(current), OrderStatus(new)
    if not strict or current == new:
        return True
    if current.is_terminal:
        return False
    if new == OrderStatus.CANCELLED:
        return True
    return STATUS_FLOW.index(new) == STATUS_FLOW.index(current) + 1


def load_order(store, order_id):
    doc = store.orders.get(order_id)
    if doc is None:
        raise OrderNotFound("Order not found")
    return Order.from_dict(doc)


def save_order(store, order):
    order.recompute_total()
    order.touch()
    store.orders.save(order.to_dict())
    return order


def list_orders(store, table_id=None, user_id=None, status=None):
    orders = [Order.from_dict(d) for d in store.orders.list()]
    if table_id:
        orders = [o for o in orders if o.table_id == table_id]
    if user_id:
        orders = [o for o in orders if o.user_id == user_id]
    if status:
        orders = [o for o in orders if o.status.value == status]
    return orders


def create_order(store, data=None):
    data = dict(data or {})
    with store.lock:
        order = Order(
            order_number=store.next_order_number(),
            venue_id=data.pop("venueId", None),
            user_id=data.pop("userId", None),
            table_id=data.pop("tableId", None),
            type=data.pop("type", None),
        )
        for key in ("id", "orderNumber", "items", "status", "total", "createdAt", "updatedAt"):
            data.pop(key, None)
        order.tip = _tip(data.pop("tip", 0))
        order.additional_tip = _tip(data.pop("additionalTip", 0))
        order.extra = data
        store.orders.add(order.to_dict())

        if order.table_id:
            table = store.tables.get(order.table_id)
            if table is not None:
                table["currentOrder"] = order.id
                store.tables.save(table)

    log.info("Created order %s (%s) for table %s", order.order_number, order.id, order.table_id)
    return order


def _require_draft(order):
    if order.status != OrderStatus.DRAFT:
        raise OrderLocked(f"Order is {order.status.value}; items can only change while draft")


def add_item(store, order_id, item_data):
    item_data = dict(item_data or {})
    if not item_data.get("productId"):
        raise OrderError("productId is required")
    try:
        quantity = int(item_data.get("quantity", 1))
    except (TypeError, ValueError):
        raise OrderError("quantity must be an integer") from None
    if quantity < 1:
        raise OrderError("quantity must be at least 1")
    item_data["quantity"] = quantity
    item_data.pop("id", None)

    with store.lock:
        order = load_order(store, order_id)
        _require_draft(order)
        if "price" not in item_data:
            item_data["price"] = _product_price(store, item_data)
        try:
            item = OrderItem.from_dict(item_data)
        except (TypeError, ValueError):
            raise OrderError("price must be a number") from None

        existing = next((i for i in order.items if i.same_line(item)), None)
        if existing is not None:
            existing.quantity += item.quantity
        else:
            order.items.append(item)
        save_order(store, order)
    return order


def _product_price(store, item_data):
    product = store.products.get(item_data["productId"])
    if product is None:
        raise OrderError("price is required for unknown products")
    size = item_data.get("size")
    wanted = size.get("id") if isinstance(size, dict) else size
    for s in product.get("sizes", []):
        if wanted in (s.get("id"), s.get("name")):
            return s["currentPrice"]
    if product.get("price") is not None:
        return product["price"]
    raise OrderError("price could not be resolved for the selected size")


def remove_item(store, order_id, item_id):
    with store.lock:
        order = load_order(store, order_id)
        _require_draft(order)
        item = order.find_item(item_id)
        if item is None:
            raise OrderNotFound("Item not found")
        item.quantity -= 1
        if item.quantity <= 0:
            order.items.remove(item)
        save_order(store, order)
    return order


def set_item_quantity(store, order_id, item_id, quantity):
    try:
        quantity = int(quantity)
    except (TypeError, ValueError):
        raise OrderError("quantity must be an integer") from None
    if quantity < 0:
        raise OrderError("quantity cannot be negative")

    with store.lock:
        order = load_order(store, order_id)
        _require_draft(order)
        item = order.find_item(item_id)
        if item is None:
            raise OrderNotFound("Item not found")
        if quantity == 0:
            order.items.remove(item)
        else:
            item.quantity = quantity
        save_order(store, order)
    return order


def update_order(store, order_id, changes, strict=True):
    changes = dict(changes or {})
    status = changes.pop("status", None)

    with store.lock:
        order = load_order(store, order_id)
        if status is not None:
            new = OrderStatus.parse(status)
            if new is None:
                raise OrderError(f"Unknown order status {status!r}")
            if not can_transition(order.status, new, strict=strict):
                raise InvalidTransition(f"Cannot move order from {order.status.value} to {new.value}")

        if "tip" in changes:
            order.tip = _tip(changes["tip"])
        if "additionalTip" in changes:
            order.additional_tip = _tip(changes["additionalTip"])
        if "userId" in changes:
            order.user_id = changes["userId"]
        if "tableId" in changes:
            order.table_id = changes["tableId"]
        if "venueId" in changes:
            order.venue_id = changes["venueId"]
        if "type" in changes:
            order.type = changes["type"]
        save_order(store, order)

        if status is not None:
            order = update_status(store, order_id, status, strict=strict)
    return order


def _tip(value):
    try:
        return clamp_tip(value)
    except ValueError as e:
        raise OrderError(str(e)) from None


def update_status(store, order_id, status, strict=True):
    new = OrderStatus.parse(status)
    if new is None:
        raise OrderError(f"Unknown order status {status!r}")

    with store.lock:
        order = load_order(store, order_id)
        if order.status == new:
            return order
        if not can_transition(order.status, new, strict=strict):
            raise InvalidTransition(f"Cannot move order from {order.status.value} to {new.value}")
        previous = order.status
        order.status = new
        save_order(store, order)

        if new.is_terminal and order.table_id:
            table = store.tables.get(order.table_id)
            if table is not None and table.get("currentOrder") == order.id:
                table["currentOrder"] = None
                store.tables.save(table)

    log.info("Order %s moved %s -> %s", order.id, previous.value, new.value)
    return order


def has_prior_order(store, table_id, exclude_id=None):
    """True when the table already holds an order that got past draft."""
    if not table_id:
        return False
    for doc in store.orders.filter(lambda d: d.get("tableId") == table_id and d["id"] != exclude_id):
        if doc.get("status") not in (OrderStatus.DRAFT.value, OrderStatus.CANCELLED.value):
            return True
    return False
