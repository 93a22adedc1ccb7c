"""
Project: Tableside
Description:
REST client for the guest app. Each call updates the matching state
container: successful responses are stored, failures become a readable
string on `error`. Calls are not retried.
"""

import logging

import requests

from .client_state import MenuState, OrderState, ServiceRequestState, TableState, VenueState
from .config import Config

log = logging.getLogger(__name__)


def _error_message(response, fallback):
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        return body.get("message") or body.get("error") or fallback
    return fallback


class TablesideClient:
    def __init__(self, base_url=None, session=None, timeout=10):
        self.base_url = (base_url or Config.TABLESIDE_API_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.token = None

        self.orders = OrderState()
        self.tables = TableState()
        self.venue = VenueState()
        self.menu = MenuState()
        self.service_requests = ServiceRequestState()

    def _call(self, state, method, path, fallback, **kwargs):
        state.start()
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = self.session.request(
                method, self.base_url + path, headers=headers, timeout=self.timeout, **kwargs
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            message = _error_message(e.response, fallback)
            log.warning("%s %s failed: %s", method, path, message)
            state.fail(message)
            return None
        except requests.RequestException as e:
            log.warning("%s %s failed: %s", method, path, e)
            state.fail(fallback)
            return None
        state.loading = False
        return response.json()

    # auth

    def login(self, email, password):
        data = self._call(self.orders, "POST", "/auth/login", "Login failed",
                          json={"email": email, "password": password})
        if data:
            self.token = data.get("token")
            return data.get("user")
        return None

    # orders

    def create_order(self, venue_id, table_id, order_type="table"):
        order = self._call(self.orders, "POST", "/orders", "Failed to create order",
                           json={"venueId": venue_id, "tableId": table_id, "type": order_type})
        if order:
            self.orders.set_current(order)
        return order

    def get_orders(self, **filters):
        orders = self._call(self.orders, "GET", "/orders", "Failed to get orders", params=filters)
        if orders is not None:
            self.orders.set_history(orders)
        return orders

    def _current_update(self, order):
        if order:
            self.orders.set_current(order)
        return order

    def add_item(self, order_id, item):
        return self._current_update(self._call(
            self.orders, "POST", f"/orders/{order_id}/items", "Failed to add item", json=item))

    def remove_item(self, order_id, item_id):
        return self._current_update(self._call(
            self.orders, "DELETE", f"/orders/{order_id}/items/{item_id}", "Failed to remove item"))

    def update_item_quantity(self, order_id, item_id, quantity):
        return self._current_update(self._call(
            self.orders, "PATCH", f"/orders/{order_id}/items/{item_id}",
            "Failed to update item quantity", json={"quantity": quantity}))

    def update_order(self, order_id, changes):
        return self._current_update(self._call(
            self.orders, "PUT", f"/orders/{order_id}", "Failed to update order", json=changes))

    def update_order_status(self, order_id, status):
        order = self._call(self.orders, "PATCH", f"/orders/{order_id}/status",
                           "Failed to update order status", json={"status": status})
        if order:
            self.orders.apply_status_response(order)
        return order

    def order_summary(self, order_id):
        return self._call(self.orders, "GET", f"/orders/{order_id}/summary", "Failed to load order summary")

    def process_payment(self, method, amount=None, tip=None):
        order = self.orders.current_order
        if not order:
            self.orders.fail("No active order found")
            return None
        body = {"orderId": order["id"], "method": method}
        if amount is not None:
            body["amount"] = amount
        if tip is not None:
            body["tip"] = tip
        result = self._call(self.orders, "POST", "/payments/process", "Payment processing failed", json=body)
        if result and result.get("success"):
            self.orders.set_current(result["order"])
        return result

    # tables, venue, menu

    def fetch_table(self, table_id):
        table = self._call(self.tables, "GET", f"/tables/{table_id}", "Failed to fetch table")
        if table:
            self.tables.select(table)
        return table

    def fetch_venue_tables(self, venue_id):
        tables = self._call(self.tables, "GET", f"/tables/venue/{venue_id}", "Failed to fetch tables")
        if tables is not None:
            self.tables.tables = tables
        return tables

    def fetch_venue(self, venue_id):
        venue = self._call(self.venue, "GET", f"/venues/{venue_id}", "Failed to fetch venue")
        if venue:
            self.venue.current_venue = venue
        return venue

    def fetch_products(self):
        body = self._call(self.menu, "GET", "/menu/products", "Failed to fetch products")
        if body and body.get("success"):
            self.menu.products = body["data"]
            return body["data"]
        return None

    def fetch_product(self, product_id):
        body = self._call(self.menu, "GET", f"/menu/products/{product_id}", "Failed to fetch product")
        if body and body.get("success"):
            self.menu.selected_product = body["data"]
            return body["data"]
        return None

    def create_service_request(self, table_id, request_type, note=None):
        created = self._call(self.service_requests, "POST", f"/tables/{table_id}/service-requests",
                             "Failed to create service request", json={"type": request_type, "note": note})
        if created:
            self.service_requests.requests.append(created)
        return created
