from rest_framework import serializers

from .models import Product


class ProductSerializer(serializers.ModelSerializer):
    quantity_sold = serializers.SerializerMethodField(read_only=True)
    current_stock = serializers.SerializerMethodField(read_only=True)
    stock_status = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = Product
        fields = ("product_id", "name", "stock_level", "quantity_sold", "current_stock",
                  "reorder_threshold", "stock_status")
        read_only_fields = ("quantity_sold", "current_stock", "stock_status")

    def get_quantity_sold(self, obj):
        return obj.sold()

    def get_current_stock(self, obj):
        return obj.current_stock()

    def get_stock_status(self, obj):
        return obj.stock_status().value


class StockUpdateSerializer(serializers.Serializer):
    """
    Exactly one of:
      stock_level    -- new persisted stock_level
      current_stock  -- new available stock; stock_level is recomputed from it
      delta          -- change to available stock, clamped at zero
    reorder_threshold may be sent alongside any of them.
    """
    stock_level = serializers.IntegerField(required=False)
    current_stock = serializers.IntegerField(required=False, min_value=0)
    delta = serializers.IntegerField(required=False)
    reorder_threshold = serializers.IntegerField(required=False, min_value=0)

    def validate(self, attrs):
        given = [k for k in ("stock_level", "current_stock", "delta") if k in attrs]
        if len(given) > 1:
            raise serializers.ValidationError({"detail": "send only one of stock_level, current_stock, delta"})
        if not given and "reorder_threshold" not in attrs:
            raise serializers.ValidationError({"detail": "stock_level, current_stock or delta required"})
        return attrs
