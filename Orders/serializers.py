from rest_framework import serializers

from Inventory.models import Product

from .models import Order
from .rules import check_order_request, order_total


class OrderSerializer(serializers.ModelSerializer):
    product_id = serializers.PrimaryKeyRelatedField(source="product", queryset=Product.objects.all())
    product_name = serializers.CharField(source="product.name", read_only=True)
    unit_price = serializers.FloatField(write_only=True)

    class Meta:
        model = Order
        fields = ("order_id", "channel", "product_id", "product_name", "quantity", "unit_price",
                  "price", "status", "date", "fulfilled_by")
        read_only_fields = ("order_id", "price", "status", "fulfilled_by")
        extra_kwargs = {"date": {"required": False}}

    def validate_quantity(self, value):
        if value < 1:
            raise serializers.ValidationError("Quantity must be at least 1")
        return value

    def validate(self, attrs):
        product = Product.objects.with_stock().get(pk=attrs["product"].pk)
        message = check_order_request(product.current_stock(), attrs["quantity"], attrs["unit_price"])
        if message:
            raise serializers.ValidationError({"detail": message})
        return attrs

    def create(self, validated_data):
        unit_price = validated_data.pop("unit_price")
        validated_data["price"] = order_total(unit_price, validated_data["quantity"])
        return Order.objects.create(**validated_data)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[Order.Status.FULFILLED, Order.Status.CANCELLED])
    fulfilled_by = serializers.CharField(required=False, allow_blank=True, max_length=64)


class DashboardQuerySerializer(serializers.Serializer):
    channel = serializers.CharField(default="All")
    product_id = serializers.CharField(default="All")
    date_range = serializers.ChoiceField(choices=["All", "7d", "30d", "90d"], default="All")
