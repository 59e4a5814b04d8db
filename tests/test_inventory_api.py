"""
Tests for the inventory and alert endpoints.
"""
import pytest

pytestmark = pytest.mark.django_db


class TestInventoryList:
    def test_derived_fields(self, api_client, jacket, make_order):
        make_order(jacket, quantity=12, status="Fulfilled")
        make_order(jacket, quantity=5, status="Pending")
        response = api_client.get("/api/inventory")
        assert response.status_code == 200
        assert response.json() == [{
            "product_id": "P001",
            "name": "Denim Jacket",
            "stock_level": 20,
            "quantity_sold": 12,
            "current_stock": 8,
            "reorder_threshold": 5,
            "stock_status": "WARNING",
        }]

    def test_filters(self, api_client, make_product):
        make_product("P001", stock_level=50, reorder_threshold=5)
        make_product("P002", stock_level=3, reorder_threshold=5)
        assert [p["product_id"] for p in api_client.get("/api/inventory?status=LOW").json()] == ["P002"]
        assert [p["product_id"] for p in api_client.get("/api/inventory?product_id=P001").json()] == ["P001"]
        assert api_client.get("/api/inventory?status=BAD").status_code == 400

    def test_retrieve(self, api_client, jacket):
        response = api_client.get("/api/inventory/P001")
        assert response.status_code == 200
        assert response.json()["current_stock"] == 20
        assert api_client.get("/api/inventory/NOPE").status_code == 404


class TestStockUpdate:
    def test_stock_level(self, api_client, jacket):
        response = api_client.patch("/api/inventory/P001/stock", {"stock_level": 42}, format="json")
        assert response.status_code == 200
        assert response.json()["stock_level"] == 42

    def test_available_stock_recomputes_level(self, api_client, jacket, make_order):
        make_order(jacket, quantity=7, status="Fulfilled")
        response = api_client.patch("/api/inventory/P001/stock", {"current_stock": 10}, format="json")
        body = response.json()
        assert body["stock_level"] == 17
        assert body["quantity_sold"] == 7
        assert body["current_stock"] == 10

    def test_delta(self, api_client, jacket):
        response = api_client.patch("/api/inventory/P001/stock", {"delta": 10}, format="json")
        assert response.json()["current_stock"] == 30

    def test_threshold_only(self, api_client, jacket):
        response = api_client.patch("/api/inventory/P001/stock", {"reorder_threshold": 15}, format="json")
        assert response.json()["stock_status"] == "WARNING"

    def test_invalid(self, api_client, jacket):
        assert api_client.patch("/api/inventory/P001/stock", {}, format="json").status_code == 400
        assert api_client.patch("/api/inventory/P001/stock", {"current_stock": -1}, format="json").status_code == 400
        both = {"stock_level": 1, "delta": 1}
        assert api_client.patch("/api/inventory/P001/stock", both, format="json").status_code == 400
        assert api_client.patch("/api/inventory/NOPE/stock", {"delta": 1}, format="json").status_code == 404


class TestSummaryAndPrices:
    def test_summary(self, api_client, make_product):
        make_product("P001", stock_level=50, reorder_threshold=5)
        make_product("P002", stock_level=4, reorder_threshold=5)
        body = api_client.get("/api/inventory/summary").json()
        assert body["total_items"] == 54
        assert body["low_stock_count"] == 1

    def test_average_price(self, api_client, jacket, make_order):
        make_order(jacket, quantity=2, price=50.0, status="Fulfilled")
        make_order(jacket, quantity=1, price=35.0, status="Fulfilled")
        make_order(jacket, quantity=1, price=999.0, status="Pending")
        body = api_client.get("/api/inventory/P001/average-price").json()
        assert body == {"product_id": "P001", "average_unit_price": 28.33}


class TestAlerts:
    def test_alerts_by_severity(self, api_client, make_product, make_order):
        make_product("P001", name="Jacket", stock_level=50, reorder_threshold=5)
        make_product("P002", name="Scarf", stock_level=8, reorder_threshold=5)
        make_product("P003", name="Boots", stock_level=3, reorder_threshold=5)
        boots_over = make_product("P004", name="Belt", stock_level=1, reorder_threshold=2)
        make_order(boots_over, quantity=3, status="Fulfilled")

        alerts = api_client.get("/api/alerts").json()
        assert [(a["product_id"], a["alert_type"], a["severity"]) for a in alerts] == [
            ("P004", "OVERSOLD", "High"),
            ("P003", "LOW_STOCK", "Medium"),
            ("P002", "REORDER_SOON", "Low"),
        ]
        assert alerts[0]["current_stock"] == -2
        assert "oversold by 2 units" in alerts[0]["message"]
