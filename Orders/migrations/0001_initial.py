import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("Inventory", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("order_id", models.BigAutoField(primary_key=True, serialize=False)),
                ("channel", models.CharField(
                    choices=[("Website", "Website"), ("Instagram", "Instagram"),
                             ("WhatsApp", "WhatsApp"), ("Facebook", "Facebook")],
                    max_length=16,
                )),
                ("quantity", models.PositiveIntegerField()),
                ("price", models.FloatField()),
                ("status", models.CharField(
                    choices=[("Pending", "Pending"), ("Fulfilled", "Fulfilled"), ("Cancelled", "Cancelled")],
                    default="Pending",
                    max_length=16,
                )),
                ("date", models.DateField(default=django.utils.timezone.localdate)),
                ("fulfilled_by", models.CharField(blank=True, default="", max_length=64)),
                ("product", models.ForeignKey(
                    db_column="product_id",
                    on_delete=django.db.models.deletion.PROTECT,
                    related_name="orders",
                    to="Inventory.product",
                )),
            ],
            options={
                "ordering": ["date", "order_id"],
            },
        ),
    ]
