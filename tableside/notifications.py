"""
Project: Tableside
Description:
Push-notification client. Listens for order status events from the
server and merges them into an OrderState. Events carry no sequence
numbers, so whichever arrives last wins.
"""

import logging
import time

import socketio
from socketio.exceptions import ConnectionError as SocketConnectionError

from .config import Config

log = logging.getLogger(__name__)


class OrderFeed:
    max_reconnect_attempts = 5
    reconnect_delay = 1.0

    def __init__(self, order_state, url=None, client=None, sleep=time.sleep):
        self.state = order_state
        self.url = url or Config.TABLESIDE_WS_URL
        self.sleep = sleep
        self.client = client or socketio.Client(
            reconnection=True,
            reconnection_attempts=self.max_reconnect_attempts,
            reconnection_delay=1,
            reconnection_delay_max=5,
        )
        self.subscribed_orders = set()
        self.callbacks = []
        self.reconnect_attempts = 0

        self.client.on("connect", self._on_connect)
        self.client.on("disconnect", self._on_disconnect)
        self.client.on("orderStatusUpdate", self._on_status_update)
        self.client.on("allOrders", self._on_all_orders)

    @property
    def connected(self):
        return bool(getattr(self.client, "connected", False))

    def connect(self):
        """Connect, retrying with linear backoff. Returns False once the attempts run out."""
        while True:
            try:
                self.client.connect(self.url, transports=["websocket"])
                return True
            except SocketConnectionError as e:
                if self.reconnect_attempts >= self.max_reconnect_attempts:
                    log.error("Giving up on %s after %d attempts: %s", self.url, self.reconnect_attempts, e)
                    return False
                self.reconnect_attempts += 1
                log.warning("Reconnecting to %s (%d/%d)", self.url,
                            self.reconnect_attempts, self.max_reconnect_attempts)
                self.sleep(self.reconnect_delay * self.reconnect_attempts)

    def on_status_update(self, callback):
        self.callbacks.append(callback)

    def subscribe_to_order(self, order_id):
        if order_id in self.subscribed_orders:
            log.debug("Already subscribed to order %s", order_id)
            return
        self.subscribed_orders.add(order_id)
        if self.connected:
            self.client.emit("subscribeToOrder", {"orderId": order_id})

    def unsubscribe_from_order(self, order_id):
        self.subscribed_orders.discard(order_id)
        if self.connected:
            self.client.emit("unsubscribeFromOrder", {"orderId": order_id})

    def subscribe_to_all_orders(self):
        if not self.connected:
            log.error("Socket not connected")
            return False
        self.client.emit("subscribeToAllOrders")
        return True

    def unsubscribe_from_all_orders(self):
        if not self.connected:
            return False
        self.client.emit("unsubscribeFromAllOrders")
        return True

    def close(self):
        if self.connected:
            self.unsubscribe_from_all_orders()
            for order_id in list(self.subscribed_orders):
                self.client.emit("unsubscribeFromOrder", {"orderId": order_id})
            self.client.disconnect()
        self.subscribed_orders.clear()
        self.callbacks.clear()

    def _on_connect(self):
        log.info("Connected to %s", self.url)
        self.reconnect_attempts = 0
        for order_id in self.subscribed_orders:
            self.client.emit("subscribeToOrder", {"orderId": order_id})

    def _on_disconnect(self, *args):
        log.info("Disconnected from %s", self.url)

    def _on_status_update(self, update):
        if not isinstance(update, dict):
            log.warning("Ignoring malformed status update %r", update)
            return
        order_id, status = update.get("orderId"), update.get("status")
        if not order_id or not status:
            log.warning("Ignoring malformed status update %r", update)
            return
        self.state.apply_status_update(order_id, status)
        for callback in self.callbacks:
            callback(update)

    def _on_all_orders(self, data):
        for order in (data or {}).get("orders", []):
            self.state.apply_status_update(order["id"], order["status"])
