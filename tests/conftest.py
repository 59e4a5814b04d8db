"""
Pytest fixtures shared by the API and model tests.
"""
from datetime import date

import pytest
from rest_framework.test import APIClient

from Inventory.models import Product
from Orders.models import Order


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def make_product(db):
    def _make(product_id="P001", name="Denim Jacket", stock_level=20, reorder_threshold=5):
        return Product.objects.create(
            product_id=product_id, name=name,
            stock_level=stock_level, reorder_threshold=reorder_threshold,
        )
    return _make


@pytest.fixture
def make_order(db):
    def _make(product, quantity=1, price=10.0, status="Pending", channel="Website",
              day=date(2026, 10, 1), fulfilled_by=""):
        return Order.objects.create(
            product=product, quantity=quantity, price=price, status=status,
            channel=channel, date=day, fulfilled_by=fulfilled_by,
        )
    return _make


@pytest.fixture
def jacket(make_product):
    return make_product()


@pytest.fixture
def order_rows():
    """Order records as the dashboard sees them after serialization."""
    return [
        {"order_id": 1, "channel": "Website", "product_id": "P001", "product_name": "Jacket",
         "quantity": 2, "price": 40.0, "status": "Fulfilled", "date": "2026-10-15"},
        {"order_id": 2, "channel": "Instagram", "product_id": "P002", "product_name": "Scarf",
         "quantity": 5, "price": 25.0, "status": "Fulfilled", "date": "2026-10-15"},
        {"order_id": 3, "channel": "Website", "product_id": "P002", "product_name": "Scarf",
         "quantity": 1, "price": 5.0, "status": "Pending", "date": "2026-10-16"},
        {"order_id": 4, "channel": "WhatsApp", "product_id": "P003", "product_name": "Boots",
         "quantity": 1, "price": 80.0, "status": "Cancelled", "date": "2026-10-01"},
        {"order_id": 5, "channel": "Website", "product_id": "P003", "product_name": "Boots",
         "quantity": 3, "price": 240.0, "status": "Fulfilled", "date": "2026-06-01"},
        {"order_id": 6, "channel": "Facebook", "product_id": "P001", "product_name": "Jacket",
         "quantity": 1, "price": 20.0, "status": "Fulfilled", "date": "2026-10-17"},
    ]
