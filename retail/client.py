"""
Client for the orders/inventory API, used by the order-entry tooling.

Every call is a thin wrapper: failures are logged and turned into a neutral
value ([] / None / False) for the caller to report as "Failed to ...".
There is no retry.
"""
import logging

import requests
from django.conf import settings

from Orders.rules import OrderRejected, check_order_request
from Reports.csv_codec import parse_csv

logger = logging.getLogger(__name__)

FULFILLED = "Fulfilled"


class RetailApiClient:
    def __init__(self, base_url=None, timeout=None, session=None):
        self.base_url = (base_url or getattr(settings, "RETAIL_API_BASE", "http://localhost:3001/api")).rstrip("/")
        self.timeout = timeout or getattr(settings, "RETAIL_API_TIMEOUT", 5)
        self.session = session or requests.Session()

    def _url(self, path):
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method, path, **kwargs):
        """Return the response, or None when the request failed or was not 2xx."""
        try:
            r = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException:
            logger.exception("%s %s failed", method, path)
            return None
        if not r.ok:
            logger.warning("%s %s returned %s", method, path, r.status_code)
            return None
        return r

    # ---- orders ----
    def get_orders(self, status=None):
        r = self._request("GET", "orders", params={"status": status} if status else None)
        if r is None:
            return []
        try:
            return r.json()
        except ValueError:
            logger.exception("Invalid JSON from GET orders")
            return []

    def create_order(self, payload):
        """POST a new order; the server assigns order_id. Returns the stored order or None."""
        r = self._request("POST", "orders", json=payload)
        if r is None:
            return None
        try:
            return r.json().get("order")
        except ValueError:
            logger.exception("Invalid JSON from POST orders")
            return None

    def update_order_status(self, order_id, status, fulfilled_by=None):
        updates = {"status": status}
        if fulfilled_by:
            updates["fulfilled_by"] = fulfilled_by
        return self._request("PATCH", f"orders/{order_id}", json=updates) is not None

    def delete_order(self, order_id):
        return self._request("DELETE", f"orders/{order_id}") is not None

    # ---- inventory ----
    def get_inventory(self):
        r = self._request("GET", "inventory")
        if r is None:
            return []
        try:
            return r.json()
        except ValueError:
            logger.exception("Invalid JSON from GET inventory")
            return []

    def update_stock(self, product_id, stock_level):
        return self._request("PATCH", f"inventory/{product_id}/stock", json={"stock_level": stock_level}) is not None

    # ---- csv fallback ----
    def fetch_csv(self, name):
        if not name.endswith(".csv"):
            name = f"{name}.csv"
        r = self._request("GET", f"data/{name}")
        if r is None:
            return []
        return parse_csv(r.text)

    # ---- order form operations ----
    def place_order(self, product, quantity, unit_price, channel="Website"):
        """
        Check the order against the product's current stock and send it.
        Raises OrderRejected without touching the API when a rule fails.
        """
        current = None
        if product:
            current = product.get("current_stock")
            if current is None:
                current = product.get("stock_level", 0)
        message = check_order_request(current, quantity, unit_price)
        if message:
            logger.warning("Order rejected before sending: %s", message)
            raise OrderRejected(message)
        return self.create_order({
            "channel": channel,
            "product_id": product["product_id"],
            "quantity": quantity,
            "unit_price": unit_price,
        })

    def mark_order(self, order_id, status):
        fulfilled_by = getattr(settings, "ORDER_FULFILLED_BY", "Staff") if status == FULFILLED else None
        return self.update_order_status(order_id, status, fulfilled_by)

    def set_available_stock(self, product, new_available):
        """Send an edit of available stock as stock_level = available + quantity_sold."""
        stock_level = new_available + (product.get("quantity_sold") or 0)
        return self.update_stock(product["product_id"], stock_level)
