"""
Project: Tableside
Description:
Client-side state containers for the guest app. Each holds the last data
fetched for one resource plus loading/error bookkeeping; the api_client
fills them and the notification feed patches the order state.
"""

from dataclasses import dataclass, field

from .checkout import can_checkout, minimum_spend, subtotal
from .models import OrderStatus, now_iso


@dataclass
class ResourceState:
    loading: bool = False
    error: str = None

    def start(self):
        self.loading = True
        self.error = None

    def fail(self, message):
        self.loading = False
        self.error = message

    def clear_error(self):
        self.error = None


@dataclass
class OrderState(ResourceState):
    current_order: dict = None
    order_history: list = field(default_factory=list)

    def set_current(self, order):
        self.loading = False
        self.current_order = order

    def set_history(self, orders):
        self.loading = False
        self.order_history = list(orders)

    def apply_status_response(self, order):
        """Server confirmed a status change; completed orders leave the cart for the history."""
        self.loading = False
        self.current_order = order
        if order.get("status") == OrderStatus.COMPLETED.value:
            self.order_history.insert(0, order)
            self.current_order = None

    def apply_status_update(self, order_id, status):
        """Merge a pushed status into the history entry and the current order."""
        stamp = now_iso()
        found = False
        for i, order in enumerate(self.order_history):
            if order.get("id") == order_id:
                self.order_history[i] = {**order, "status": status, "updatedAt": stamp}
                found = True
        if not found:
            # not known locally; the next history fetch picks it up
            self.loading = True

        if self.current_order and self.current_order.get("id") == order_id:
            self.current_order = {**self.current_order, "status": status, "updatedAt": stamp}
        return found

    def clear_cart(self):
        if self.current_order:
            self.current_order = {**self.current_order, "items": [], "total": 0}

    def remove_from_cart(self, item_id):
        if self.current_order:
            items = [i for i in self.current_order.get("items", []) if i.get("id") != item_id]
            self.current_order = {**self.current_order, "items": items, "total": round(subtotal(items), 2)}

    def set_item_quantity(self, item_id, quantity):
        if not self.current_order:
            return
        items = []
        for item in self.current_order.get("items", []):
            if item.get("id") == item_id:
                item = {**item, "quantity": quantity}
            items.append(item)
        self.current_order = {**self.current_order, "items": items, "total": round(subtotal(items), 2)}


@dataclass
class TableState(ResourceState):
    tables: list = field(default_factory=list)
    current_table: dict = None

    def select(self, table):
        self.loading = False
        self.current_table = table


@dataclass
class VenueState(ResourceState):
    current_venue: dict = None


@dataclass
class MenuState(ResourceState):
    products: list = field(default_factory=list)
    selected_product: dict = None


@dataclass
class ServiceRequestState(ResourceState):
    requests: list = field(default_factory=list)


def checkout_allowed(order_state, venue, table):
    """Minimum-spend gate as the cart screen applies it: only the first order at a table is gated."""
    order = order_state.current_order
    if not order or not order.get("items"):
        return False
    sub = subtotal(order["items"])
    return can_checkout(sub, minimum_spend(venue, table), has_prior_order=bool(order_state.order_history))
