"""
Order aggregation for the analytics dashboard.

All functions work on plain order records: mappings with channel, product_id,
product_name, quantity, price, status and date. Rows serialized from the
database and rows parsed from the CSV exports are handled the same way.
Only Fulfilled orders count towards revenue and quantity.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone as dt_timezone

from django.utils import timezone

ALL = "All"
FULFILLED = "Fulfilled"
PENDING = "Pending"
CANCELLED = "Cancelled"

DATE_RANGES = {"All": None, "7d": 7, "30d": 30, "90d": 90}


@dataclass(frozen=True)
class OrderFilter:
    channel: str = ALL
    product_id: str = ALL
    date_range: str = ALL

    def __post_init__(self):
        if self.date_range not in DATE_RANGES:
            raise ValueError(f"date_range must be one of {', '.join(DATE_RANGES)}")

    def cutoff(self, now=None):
        days = DATE_RANGES[self.date_range]
        if days is None:
            return None
        now = now or timezone.now()
        if timezone.is_naive(now):
            now = timezone.make_aware(now, dt_timezone.utc)
        return now - timedelta(days=days)


def order_date(value):
    """
    Calendar date of an order's date field, or None when it cannot be read.
    Timestamps carrying an offset are converted to UTC before the day is taken.
    """
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = value.astimezone(dt_timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        parsed = datetime.fromisoformat(text[:-1] + "+00:00" if text.endswith("Z") else text)
    except ValueError:
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    if timezone.is_aware(parsed):
        parsed = parsed.astimezone(dt_timezone.utc)
    return parsed.date()


def _passes_cutoff(record, cutoff):
    day = order_date(record.get("date"))
    if day is None:
        return False
    return datetime.combine(day, time.min, tzinfo=dt_timezone.utc) >= cutoff


def filter_orders(orders, flt, now=None, ignore_product=False):
    """Conjunctive channel / product / date filter."""
    cutoff = flt.cutoff(now)
    result = []
    for record in orders:
        if flt.channel != ALL and record.get("channel") != flt.channel:
            continue
        if not ignore_product and flt.product_id != ALL and record.get("product_id") != flt.product_id:
            continue
        if cutoff is not None and not _passes_cutoff(record, cutoff):
            continue
        result.append(record)
    return result


def fulfilled(orders):
    return [o for o in orders if o.get("status") == FULFILLED]


def _rollup(orders, key):
    groups = {}
    for order in fulfilled(orders):
        k = key(order)
        if k is None:
            continue
        g = groups.setdefault(k, {"revenue": 0.0, "quantity_sold": 0, "orders_count": 0})
        g["revenue"] += float(order.get("price") or 0)
        g["quantity_sold"] += int(order.get("quantity") or 0)
        g["orders_count"] += 1
    return groups


def kpis(orders, flt, now=None):
    # counts follow the full filter, date range included
    filtered = filter_orders(orders, flt, now)
    done = fulfilled(filtered)
    return {
        "total_revenue": sum(float(o.get("price") or 0) for o in done),
        "fulfilled_orders": len(done),
        "pending_orders": sum(1 for o in filtered if o.get("status") == PENDING),
        "cancelled_orders": sum(1 for o in filtered if o.get("status") == CANCELLED),
    }


def daily_revenue(orders, limit=None):
    """Fulfilled revenue per calendar day, oldest first; keeps the last `limit` days when given."""
    groups = _rollup(orders, lambda o: order_date(o.get("date")))
    series = [{"date": day.isoformat(), **totals} for day, totals in sorted(groups.items())]
    if limit is not None:
        series = series[-limit:] if limit > 0 else []
    return series


def channel_performance(orders):
    groups = _rollup(orders, lambda o: o.get("channel"))
    return [{"channel": channel, **totals} for channel, totals in groups.items()]


def product_performance(orders):
    """Fulfilled totals per product, best seller by quantity first."""
    names = {}
    for order in fulfilled(orders):
        names[order.get("product_id")] = order.get("product_name", "")
    groups = _rollup(orders, lambda o: o.get("product_id"))
    rows = [
        {"product_id": pid, "product_name": names.get(pid, ""), **totals}
        for pid, totals in groups.items()
    ]
    rows.sort(key=lambda r: r["quantity_sold"], reverse=True)
    return rows


def top_products(orders, flt, now=None, limit=10):
    """
    Best sellers by quantity within the channel and date filters. The product
    filter is ignored so that picking one product keeps the leaderboard intact.
    """
    return product_performance(filter_orders(orders, flt, now, ignore_product=True))[:limit]


def product_options(orders):
    seen = {}
    for order in orders:
        seen.setdefault(order.get("product_id"), order.get("product_name", ""))
    return [{"id": pid, "name": name} for pid, name in seen.items()]


def channel_options(orders):
    return list(dict.fromkeys(o.get("channel") for o in orders))


def average_unit_price(orders, product_id):
    """Revenue over quantity for a product's fulfilled orders, 0 when it has none."""
    done = [o for o in fulfilled(orders) if o.get("product_id") == product_id]
    quantity = sum(int(o.get("quantity") or 0) for o in done)
    if not quantity:
        return 0
    return sum(float(o.get("price") or 0) for o in done) / quantity


def _round_half_up(value):
    return math.floor(value + 0.5)


def format_currency(value):
    """Short label for KPI cards. Rounds for display only."""
    if value == 0:
        return "$0"
    if value < 1000:
        return f"${_round_half_up(value)}"
    if value < 100000:
        return f"${value / 1000:.1f}k"
    if value < 1000000:
        return f"${_round_half_up(value / 1000)}k"
    return f"${value / 1000000:.2f}M"
