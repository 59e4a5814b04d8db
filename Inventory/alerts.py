"""
Low-stock alerts derived from the stock classifier.

Alerts are read-only signals for the dashboard. They are never stored;
every call recomputes them from the products it is given.
"""
from django.utils import timezone

from .stock import StockStatus, stock_fields, classify_stock

SEVERITY_RANK = {"High": 1, "Medium": 2, "Low": 3}

_RULES = {
    StockStatus.OVERSOLD: (
        "OVERSOLD",
        "High",
        "{name} is oversold by {deficit} units",
        "Reconcile pending orders and restock immediately",
    ),
    StockStatus.LOW: (
        "LOW_STOCK",
        "Medium",
        "{name} has {stock} units left (reorder at {threshold})",
        "Reorder now",
    ),
    StockStatus.WARNING: (
        "REORDER_SOON",
        "Low",
        "{name} is approaching its reorder point ({stock} units left)",
        "Plan a reorder",
    ),
}


def _name_and_id(item):
    if isinstance(item, dict):
        return item.get("name", ""), item.get("product_id", "")
    return item.name, item.product_id


def build_alerts(items, now=None):
    now = now or timezone.now()
    alerts = []
    for item in items:
        stock, threshold = stock_fields(item)
        rule = _RULES.get(classify_stock(stock, threshold))
        if rule is None:
            continue
        alert_type, severity, message, action = rule
        name, product_id = _name_and_id(item)
        alerts.append({
            "alert_type": alert_type,
            "severity": severity,
            "product_id": product_id,
            "product_name": name,
            "current_stock": stock,
            "message": message.format(name=name, stock=stock, threshold=threshold, deficit=-stock),
            "action_required": action,
            "timestamp": now.isoformat(),
        })
    alerts.sort(key=lambda a: (SEVERITY_RANK[a["severity"]], str(a["product_id"])))
    return alerts
