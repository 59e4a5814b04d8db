"""
Tests for the stock classifier and the summaries built on it.
"""
import pytest

from Inventory.stock import (
    StockStatus,
    classify_stock,
    count_at_risk,
    inventory_summary,
    is_at_risk,
    sort_by_severity,
    status_of,
)


class TestClassifyStock:
    """Test suite for classify_stock."""

    @pytest.mark.parametrize("stock,threshold,expected", [
        (-1, 5, StockStatus.OVERSOLD),
        (5, 5, StockStatus.LOW),
        (8, 5, StockStatus.WARNING),
        (10, 5, StockStatus.WARNING),
        (11, 5, StockStatus.OK),
    ])
    def test_documented_examples(self, stock, threshold, expected):
        assert classify_stock(stock, threshold) == expected

    def test_oversold_wins_over_low(self):
        """Negative stock is OVERSOLD even though it is also below the threshold."""
        assert classify_stock(-3, 10) == StockStatus.OVERSOLD

    def test_zero_threshold(self):
        assert classify_stock(0, 0) == StockStatus.LOW
        assert classify_stock(1, 0) == StockStatus.OK

    def test_always_one_of_four(self):
        for stock in range(-3, 25):
            for threshold in range(0, 8):
                assert classify_stock(stock, threshold) in set(StockStatus)

    def test_pure(self):
        assert [classify_stock(8, 5) for _ in range(3)] == [StockStatus.WARNING] * 3


class TestAtRisk:
    """LOW, WARNING and OVERSOLD count as at risk."""

    def test_predicate(self):
        assert is_at_risk(-1, 5)
        assert is_at_risk(5, 5)
        assert is_at_risk(10, 5)
        assert not is_at_risk(11, 5)

    def test_count_on_rows(self):
        rows = [
            {"current_stock": -2, "reorder_threshold": 5},
            {"current_stock": 4, "reorder_threshold": 5},
            {"current_stock": 9, "reorder_threshold": 5},
            {"current_stock": 50, "reorder_threshold": 5},
        ]
        assert count_at_risk(rows) == 3

    def test_sort_by_severity(self):
        rows = [
            {"product_id": "ok", "current_stock": 50, "reorder_threshold": 5},
            {"product_id": "warn", "current_stock": 9, "reorder_threshold": 5},
            {"product_id": "over", "current_stock": -1, "reorder_threshold": 5},
            {"product_id": "low", "current_stock": 2, "reorder_threshold": 5},
        ]
        assert [r["product_id"] for r in sort_by_severity(rows)] == ["over", "low", "warn", "ok"]

    def test_rows_without_current_stock_use_stock_level(self):
        rows = [
            {"stock_level": 50, "reorder_threshold": 5},
            {"stock_level": 8, "reorder_threshold": 5},
            {"current_stock": 0, "stock_level": 50, "reorder_threshold": 5},
        ]
        assert [status_of(r) for r in rows] == [StockStatus.OK, StockStatus.WARNING, StockStatus.LOW]
        assert count_at_risk(rows) == 2

    def test_summary(self):
        rows = [
            {"current_stock": -2, "reorder_threshold": 5},
            {"current_stock": 30, "reorder_threshold": 5},
        ]
        summary = inventory_summary(rows)
        assert summary["total_items"] == 28
        assert summary["low_stock_count"] == 1
        assert summary["by_status"] == {"OK": 1, "WARNING": 0, "LOW": 0, "OVERSOLD": 1}
