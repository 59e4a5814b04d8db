from django.db import models
from django.db.models import Q, Sum
from django.db.models.functions import Coalesce

from .stock import classify_stock

FULFILLED = "Fulfilled"


class ProductQuerySet(models.QuerySet):
    def with_stock(self):
        """Annotate quantity_sold (fulfilled order quantity) on every product."""
        return self.annotate(
            quantity_sold=Coalesce(
                Sum("orders__quantity", filter=Q(orders__status=FULFILLED)), 0,
                output_field=models.IntegerField(),
            )
        )


class Product(models.Model):
    product_id = models.CharField(max_length=32, primary_key=True)
    name = models.CharField(max_length=255)
    stock_level = models.IntegerField(default=0)              # original stock, before sales
    reorder_threshold = models.PositiveIntegerField(default=0)  # set by the replenishment process
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProductQuerySet.as_manager()

    class Meta:
        ordering = ["product_id"]

    def sold(self):
        """Quantity sold through fulfilled orders; uses the with_stock() annotation when present."""
        sold = getattr(self, "quantity_sold", None)
        if sold is None:
            sold = self.orders.filter(status=FULFILLED).aggregate(total=Sum("quantity"))["total"] or 0
            self.quantity_sold = sold
        return sold

    def current_stock(self):
        """Return available stock. Negative means oversold."""
        return self.stock_level - self.sold()

    def stock_status(self):
        return classify_stock(self.current_stock(), self.reorder_threshold)

    def set_available_stock(self, new_available):
        """
        Persist an edit of the available stock. stock_level is recomputed so that
        current_stock equals new_available while quantity_sold keeps its history.
        """
        if new_available < 0:
            raise ValueError("available stock cannot be negative")
        self.stock_level = new_available + self.sold()
        self.save(update_fields=["stock_level", "updated_at"])
        return self.stock_level

    def adjust_available_stock(self, delta):
        return self.set_available_stock(max(0, self.current_stock() + delta))

    def __str__(self):
        return f"Product {self.product_id} {self.name} stock={self.stock_level} threshold={self.reorder_threshold}"
