from django.conf import settings
from django.db import models
from django.utils import timezone

from .rules import CHANNELS


class InvalidTransition(Exception):
    pass


class Order(models.Model):
    class Status(models.TextChoices):
        PENDING = "Pending"
        FULFILLED = "Fulfilled"
        CANCELLED = "Cancelled"

    TERMINAL = (Status.FULFILLED, Status.CANCELLED)

    order_id = models.BigAutoField(primary_key=True)
    channel = models.CharField(max_length=16, choices=[(c, c) for c in CHANNELS])
    product = models.ForeignKey("Inventory.Product", on_delete=models.PROTECT,
                                related_name="orders", db_column="product_id")
    quantity = models.PositiveIntegerField()
    price = models.FloatField()                          # line total: unit price * quantity
    status = models.CharField(max_length=16, choices=Status.choices, default=Status.PENDING)
    date = models.DateField(default=timezone.localdate)
    fulfilled_by = models.CharField(max_length=64, blank=True, default="")

    class Meta:
        ordering = ["date", "order_id"]

    def is_terminal(self):
        return self.status in self.TERMINAL

    def transition(self, status, fulfilled_by=None):
        """
        Move a Pending order to Fulfilled or Cancelled. Fulfilling records who
        did it; terminal orders never change again.
        """
        if self.is_terminal():
            raise InvalidTransition(f"Order #{self.order_id} is already {self.status}")
        if status not in self.TERMINAL:
            raise InvalidTransition(f"Cannot move order #{self.order_id} to {status}")
        self.status = status
        if status == self.Status.FULFILLED:
            self.fulfilled_by = fulfilled_by or getattr(settings, "ORDER_FULFILLED_BY", "Staff")
        self.save(update_fields=["status", "fulfilled_by"])

    def __str__(self):
        return f"Order #{self.order_id} {self.channel} product={self.product_id} qty={self.quantity} {self.status}"
