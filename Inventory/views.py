import logging

from django.shortcuts import get_object_or_404
from rest_framework import mixins, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView

from Orders.analytics import average_unit_price
from Orders.models import Order
from Orders.serializers import OrderSerializer

from .alerts import build_alerts
from .models import Product
from .serializers import ProductSerializer, StockUpdateSerializer
from .stock import StockStatus, inventory_summary, status_of

logger = logging.getLogger(__name__)


class InventoryViewSet(mixins.ListModelMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    Inventory endpoints:
      - list/retrieve products with quantity_sold, current_stock and stock_status
      - stock: edit stock_level, available stock or apply a delta
      - average-price: suggested unit price for the order form
      - summary: totals and at-risk count for the summary cards
    """
    serializer_class = ProductSerializer
    lookup_value_regex = "[^/]+"

    # optional: ?product_id=P001
    def get_queryset(self):
        qs = Product.objects.with_stock()
        product_id = self.request.query_params.get("product_id")
        if product_id:
            qs = qs.filter(product_id=product_id)
        return qs

    # optional: ?status=LOW; status is derived so it is filtered in python
    def list(self, request, *args, **kwargs):
        products = self.get_queryset()
        status = request.query_params.get("status")
        if status:
            if status not in StockStatus.values:
                raise ValidationError({"status": f"must be one of {', '.join(StockStatus.values)}"})
            products = [p for p in products if status_of(p) == status]
        return Response(self.get_serializer(products, many=True).data)

    @action(detail=True, methods=["patch"], url_path="stock")
    def stock(self, request, pk=None):
        product = get_object_or_404(self.get_queryset(), pk=pk)
        payload = StockUpdateSerializer(data=request.data)
        payload.is_valid(raise_exception=True)
        data = payload.validated_data

        if "reorder_threshold" in data:
            product.reorder_threshold = data["reorder_threshold"]
            product.save(update_fields=["reorder_threshold", "updated_at"])
        if "stock_level" in data:
            product.stock_level = data["stock_level"]
            product.save(update_fields=["stock_level", "updated_at"])
        elif "current_stock" in data:
            product.set_available_stock(data["current_stock"])
        elif "delta" in data:
            product.adjust_available_stock(data["delta"])

        logger.info("Stock updated for %s: stock_level=%s current_stock=%s",
                    product.product_id, product.stock_level, product.current_stock())
        return Response(ProductSerializer(product).data)

    @action(detail=True, methods=["get"], url_path="average-price")
    def average_price(self, request, pk=None):
        product = get_object_or_404(Product, pk=pk)
        orders = OrderSerializer(Order.objects.filter(product=product).select_related("product"), many=True).data
        return Response({
            "product_id": product.product_id,
            "average_unit_price": round(average_unit_price(orders, product.product_id), 2),
        })

    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        return Response(inventory_summary(self.get_queryset()))


class AlertListView(APIView):
    def get(self, request):
        return Response(build_alerts(Product.objects.with_stock()))
