"""PointsAccount model — accrued vs claimed points per customer.

The primary key is the customer code itself (one-to-one with SalesRecord,
cascading delete). ``unclaimed_points`` is derived on read and is never a
column, so it cannot drift from ``total_points - claimed_points``.
"""

from decimal import Decimal

from django.db import models
from django.utils.translation import gettext_lazy as _


class PointsAccountQuerySet(models.QuerySet):
    def claimable(self):
        """Accounts with a positive unclaimed balance."""
        return self.filter(total_points__gt=models.F("claimed_points"))


class PointsAccount(models.Model):
    """
    Customer points balance.

    total_points:   derived from SalesRecord.net_weight, overwritten by recompute
    claimed_points: only ever increased, by ClaimService
    """

    customer = models.OneToOneField(
        "goldpoints.SalesRecord",
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="points_account",
        db_column="customer_code",
        verbose_name=_("customer"),
    )

    total_points = models.DecimalField(
        _("total points"),
        max_digits=18,
        decimal_places=2,
        default=Decimal("0"),
        help_text=_("Accrued points derived from net weight"),
    )
    claimed_points = models.DecimalField(
        _("claimed points"),
        max_digits=18,
        decimal_places=2,
        default=Decimal("0"),
        help_text=_("Points already redeemed (never decreases)"),
    )

    updated_at = models.DateTimeField(_("updated at"), auto_now=True)

    objects = PointsAccountQuerySet.as_manager()

    class Meta:
        verbose_name = _("points account")
        verbose_name_plural = _("points accounts")
        ordering = ["customer_id"]
        constraints = [
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
        ]

    def __str__(self):
        return f"{self.customer_id}: {self.unclaimed_points}/{self.total_points}pts"

    @property
    def customer_code(self) -> str:
        return self.customer_id

    @property
    def unclaimed_points(self) -> Decimal:
        """Points still available to claim."""
        return self.total_points - self.claimed_points
