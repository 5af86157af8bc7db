"""SalesRecord model — per-customer sales aggregate.

One row per customer, keyed by the retailer's customer code. Ingestion
overwrites rows in place (upsert); history is not kept. This table is the
source of truth for point derivation.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class SalesRecord(models.Model):
    """Cumulative gold purchases for one customer."""

    # Identification (natural key from the point-of-sale export)
    customer_code = models.TextField(
        _("customer code"),
        primary_key=True,
        help_text=_("Unique customer code from the sales system"),
    )
    name = models.TextField(_("name"), blank=True)

    # Address
    house = models.TextField(_("house"), blank=True)
    street = models.TextField(_("street"), blank=True)
    place = models.TextField(_("place"), blank=True)
    postal_code = models.TextField(_("postal code"), blank=True)

    # Contact
    mobile = models.TextField(_("mobile"), blank=True)

    # Aggregate
    net_weight = models.DecimalField(
        _("net weight"),
        max_digits=18,
        decimal_places=3,
        default=Decimal("0"),
        help_text=_("Cumulative grams of gold purchased"),
    )

    # Last purchase, as received and normalized
    last_purchase_raw = models.TextField(_("last purchase (raw)"), blank=True)
    last_purchase_date = models.DateField(_("last purchase date"), null=True, blank=True)

    # Audit
    created_at = models.DateTimeField(_("created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    class Meta:
        verbose_name = _("sales record")
        verbose_name_plural = _("sales records")
        ordering = ["customer_code"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(net_weight__gte=0),
                name="goldpoints_sales_net_weight_nonnegative",
            ),
        ]

    def __str__(self):
        if self.name:
            return f"{self.name} ({self.customer_code})"
        return self.customer_code

    @property
    def address(self) -> str:
        """Single-line address for display."""
        parts = [self.house, self.street, self.place, self.postal_code]
        return ", ".join(part for part in parts if part)
