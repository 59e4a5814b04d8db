import logging
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from Inventory.models import Product
from Orders.analytics import order_date
from Orders.models import Order
from Orders.rules import CHANNELS
from Reports.csv_codec import parse_csv

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Load products and orders from the CSV data files (Inventory_Status.csv, Orders_Clean.csv)."

    def add_arguments(self, parser):
        parser.add_argument("--inventory", help="CSV with product_id,name,stock_level,reorder_threshold")
        parser.add_argument("--orders", help="CSV with order_id,channel,product_id,quantity,price,status,date")

    def handle(self, *args, **options):
        if not options["inventory"] and not options["orders"]:
            raise CommandError("give --inventory and/or --orders")
        with transaction.atomic():
            if options["inventory"]:
                count = self.load_products(self._read(options["inventory"]))
                self.stdout.write(f"Imported {count} products")
            if options["orders"]:
                count = self.load_orders(self._read(options["orders"]))
                self.stdout.write(f"Imported {count} orders")

    def _read(self, path):
        try:
            return parse_csv(Path(path).read_text(encoding="utf-8"))
        except OSError as exc:
            raise CommandError(f"Cannot read {path}: {exc}")

    def load_products(self, rows):
        count = 0
        for row in rows:
            if not row.get("product_id"):
                continue
            # create or update existing record keyed by product_id
            Product.objects.update_or_create(
                product_id=row["product_id"],
                defaults={
                    "name": row.get("name", ""),
                    "stock_level": row.get("stock_level", 0),
                    "reorder_threshold": max(row.get("reorder_threshold", 0), 0),
                },
            )
            count += 1
        logger.info("Imported %d products", count)
        return count

    def load_orders(self, rows):
        count = 0
        for row in rows:
            product = Product.objects.filter(pk=row.get("product_id")).first()
            day = order_date(row.get("date"))
            status = row.get("status") or Order.Status.PENDING
            if (product is None or day is None or row.get("quantity", 0) < 1
                    or row.get("channel") not in CHANNELS or status not in Order.Status.values):
                logger.warning("Skipping order row %s", row)
                continue
            defaults = {
                "channel": row["channel"],
                "product": product,
                "quantity": row["quantity"],
                "price": row.get("price", 0.0),
                "status": status,
                "date": day,
                "fulfilled_by": row.get("fulfilled_by", ""),
            }
            if row.get("order_id"):
                Order.objects.update_or_create(order_id=row["order_id"], defaults=defaults)
            else:
                Order.objects.create(**defaults)
            count += 1
        logger.info("Imported %d orders", count)
        return count
