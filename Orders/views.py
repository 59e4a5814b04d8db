import logging

from django.conf import settings
from rest_framework import status, viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from Inventory.alerts import build_alerts
from Inventory.models import Product
from Inventory.serializers import ProductSerializer
from Inventory.stock import inventory_summary, sort_by_severity

from . import analytics
from .models import InvalidTransition, Order
from .serializers import DashboardQuerySerializer, OrderSerializer, OrderStatusSerializer

logger = logging.getLogger(__name__)


class OrderViewSet(viewsets.ModelViewSet):
    """
    Order endpoints:
      - list (?status=, ?channel=, ?product_id=), oldest first
      - create: Pending order priced as unit_price * quantity, checked against current stock
      - partial_update: one-way status change to Fulfilled or Cancelled
      - destroy
    """
    serializer_class = OrderSerializer
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_queryset(self):
        qs = Order.objects.select_related("product")
        for param in ("status", "channel", "product_id"):
            value = self.request.query_params.get(param)
            if value:
                qs = qs.filter(**{param: value})
        return qs

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            logger.warning("Order rejected: %s", serializer.errors)
            raise ValidationError(serializer.errors)
        order = serializer.save()
        logger.info("Order #%s created: %s x%s via %s", order.order_id, order.product_id,
                    order.quantity, order.channel)
        return Response({"order": self.get_serializer(order).data}, status=status.HTTP_201_CREATED)

    def partial_update(self, request, *args, **kwargs):
        """
        Body: {"status": "Fulfilled"} or {"status": "Cancelled"}, optional "fulfilled_by".
        """
        order = self.get_object()
        payload = OrderStatusSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        try:
            order.transition(payload.validated_data["status"], payload.validated_data.get("fulfilled_by"))
        except InvalidTransition as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        logger.info("Order #%s marked as %s", order.order_id, order.status)
        return Response(self.get_serializer(order).data)

    def perform_destroy(self, instance):
        logger.info("Order #%s deleted", instance.order_id)
        instance.delete()


class DashboardView(APIView):
    """Everything the analytics dashboard draws, for one set of filters."""

    def get(self, request):
        query = DashboardQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        flt = analytics.OrderFilter(**query.validated_data)

        orders = OrderSerializer(Order.objects.select_related("product"), many=True).data
        products = list(Product.objects.with_stock())
        filtered = analytics.filter_orders(orders, flt)
        kpis = analytics.kpis(orders, flt)
        kpis["total_revenue_display"] = analytics.format_currency(kpis["total_revenue"])

        return Response({
            "filters": query.validated_data,
            "channels": ["All"] + analytics.channel_options(orders),
            "products": [{"id": "All", "name": "All Products"}] + analytics.product_options(orders),
            "kpis": kpis,
            "daily_revenue": analytics.daily_revenue(
                filtered, limit=getattr(settings, "DASHBOARD_MAX_POINTS", 60)),
            "channel_performance": analytics.channel_performance(filtered),
            "top_products": analytics.top_products(
                orders, flt, limit=getattr(settings, "DASHBOARD_TOP_PRODUCTS", 10)),
            "inventory": ProductSerializer(sort_by_severity(products), many=True).data,
            "inventory_summary": inventory_summary(products),
            "alerts": build_alerts(products),
        })
