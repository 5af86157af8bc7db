# Generated migration for SalesRecord and PointsAccount

from decimal import Decimal

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="SalesRecord",
            fields=[
                (
                    "customer_code",
                    models.TextField(
                        help_text="Unique customer code from the sales system",
                        primary_key=True,
                        serialize=False,
                        verbose_name="customer code",
                    ),
                ),
                ("name", models.TextField(blank=True, verbose_name="name")),
                ("house", models.TextField(blank=True, verbose_name="house")),
                ("street", models.TextField(blank=True, verbose_name="street")),
                ("place", models.TextField(blank=True, verbose_name="place")),
                ("postal_code", models.TextField(blank=True, verbose_name="postal code")),
                ("mobile", models.TextField(blank=True, verbose_name="mobile")),
                (
                    "net_weight",
                    models.DecimalField(
                        decimal_places=3,
                        default=Decimal("0"),
                        help_text="Cumulative grams of gold purchased",
                        max_digits=18,
                        verbose_name="net weight",
                    ),
                ),
                (
                    "last_purchase_raw",
                    models.TextField(blank=True, verbose_name="last purchase (raw)"),
                ),
                (
                    "last_purchase_date",
                    models.DateField(blank=True, null=True, verbose_name="last purchase date"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "sales record",
                "verbose_name_plural": "sales records",
                "ordering": ["customer_code"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(net_weight__gte=0),
                        name="goldpoints_sales_net_weight_nonnegative",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PointsAccount",
            fields=[
                (
                    "customer",
                    models.OneToOneField(
                        db_column="customer_code",
                        on_delete=django.db.models.deletion.CASCADE,
                        primary_key=True,
                        related_name="points_account",
                        serialize=False,
                        to="goldpoints.salesrecord",
                        verbose_name="customer",
                    ),
                ),
                (
                    "total_points",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        help_text="Accrued points derived from net weight",
                        max_digits=18,
                        verbose_name="total points",
                    ),
                ),
                (
                    "claimed_points",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("0"),
                        help_text="Points already redeemed (never decreases)",
                        max_digits=18,
                        verbose_name="claimed points",
                    ),
                ),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
            ],
            options={
                "verbose_name": "points account",
                "verbose_name_plural": "points accounts",
                "ordering": ["customer_id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(total_points__gte=0),
                        name="goldpoints_points_total_nonnegative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(claimed_points__gte=0),
                        name="goldpoints_points_claimed_nonnegative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(claimed_points__lte=models.F("total_points")),
                        name="goldpoints_points_claimed_lte_total",
                    ),
                ],
            },
        ),
    ]
