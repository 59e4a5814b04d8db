from django.db import models


class StockStatus(models.TextChoices):
    OK = "OK", "In Stock"
    WARNING = "WARNING", "Warning"
    LOW = "LOW", "Low Stock"
    OVERSOLD = "OVERSOLD", "Oversold"


AT_RISK = frozenset({StockStatus.WARNING, StockStatus.LOW, StockStatus.OVERSOLD})

# display order, most urgent first
SEVERITY_ORDER = {
    StockStatus.OVERSOLD: 1,
    StockStatus.LOW: 2,
    StockStatus.WARNING: 3,
    StockStatus.OK: 4,
}


def classify_stock(current_stock, reorder_threshold):
    """
    Classify a product's stock position. First match wins:
    negative stock is OVERSOLD, at or below the threshold is LOW,
    at or below twice the threshold is WARNING, anything above is OK.
    """
    if current_stock < 0:
        return StockStatus.OVERSOLD
    if current_stock <= reorder_threshold:
        return StockStatus.LOW
    if current_stock <= 2 * reorder_threshold:
        return StockStatus.WARNING
    return StockStatus.OK


def is_at_risk(current_stock, reorder_threshold):
    return classify_stock(current_stock, reorder_threshold) in AT_RISK


def stock_fields(item):
    """
    Read (current_stock, reorder_threshold) from a Product or a plain dict row.
    Rows without current_stock fall back to stock_level.
    """
    if isinstance(item, dict):
        current = item.get("current_stock")
        if current is None or current == "":
            current = item.get("stock_level")
        return int(current or 0), int(item.get("reorder_threshold") or 0)
    return item.current_stock(), item.reorder_threshold


def status_of(item):
    return classify_stock(*stock_fields(item))


def count_at_risk(items):
    """Number of items that are LOW, WARNING or OVERSOLD."""
    return sum(1 for item in items if is_at_risk(*stock_fields(item)))


def sort_by_severity(items):
    return sorted(items, key=lambda item: SEVERITY_ORDER.get(status_of(item), 99))


def inventory_summary(items):
    items = list(items)
    by_status = {status.value: 0 for status in StockStatus}
    total = 0
    for item in items:
        current, threshold = stock_fields(item)
        total += current
        by_status[classify_stock(current, threshold).value] += 1
    return {
        "total_items": total,
        "low_stock_count": sum(by_status[s.value] for s in AT_RISK),
        "by_status": by_status,
    }
