import logging

from django.http import Http404, HttpResponse

from Inventory.alerts import build_alerts
from Inventory.models import Product
from Inventory.serializers import ProductSerializer
from Orders import analytics
from Orders.models import Order
from Orders.serializers import OrderSerializer

from .csv_codec import to_csv

logger = logging.getLogger(__name__)


def _orders():
    return OrderSerializer(Order.objects.select_related("product"), many=True).data


def _orders_clean():
    return [
        {k: row[k] for k in ("order_id", "channel", "product_id", "product_name", "quantity",
                             "price", "status", "date", "fulfilled_by")}
        for row in _orders()
    ]


def _inventory_status():
    return ProductSerializer(Product.objects.with_stock(), many=True).data


def _alerts():
    return build_alerts(Product.objects.with_stock())


def _daily_revenue():
    return analytics.daily_revenue(_orders())


def _channel_performance():
    return analytics.channel_performance(_orders())


def _product_performance():
    return analytics.product_performance(_orders())


EXPORTS = {
    "Orders_Clean": _orders_clean,
    "Inventory_Status": _inventory_status,
    "Alerts": _alerts,
    "Daily_Revenue": _daily_revenue,
    "Channel_Performance": _channel_performance,
    "Product_Performance": _product_performance,
}


def csv_export(request, name):
    """GET /api/data/<name>.csv -- CSV fallback of the JSON endpoints."""
    build = EXPORTS.get(name)
    if build is None:
        raise Http404(f"No data file {name}.csv")
    response = HttpResponse(to_csv(build()), content_type="text/csv")
    response["Content-Disposition"] = f'inline; filename="{name}.csv"'
    logger.debug("Served %s.csv", name)
    return response
