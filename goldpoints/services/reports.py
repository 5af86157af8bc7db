"""Reporting facade — read-only joined view of ledger and points."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from django.db.models import F

from goldpoints.models import SalesRecord
from goldpoints.utils import normalize_code

_ZERO = Decimal("0")


@dataclass(frozen=True)
class CustomerPoints:
    """Sales attributes plus points totals for one customer."""

    customer_code: str
    name: str
    house: str
    street: str
    place: str
    postal_code: str
    mobile: str
    net_weight: Decimal
    last_purchase_date: date | None
    total_points: Decimal
    claimed_points: Decimal

    @property
    def unclaimed_points(self) -> Decimal:
        return self.total_points - self.claimed_points

    def as_dict(self) -> dict:
        return {
            "customer_code": self.customer_code,
            "name": self.name,
            "house": self.house,
            "street": self.street,
            "place": self.place,
            "postal_code": self.postal_code,
            "mobile": self.mobile,
            "net_weight": str(self.net_weight),
            "last_purchase_date": (
                self.last_purchase_date.isoformat() if self.last_purchase_date else None
            ),
            "total_points": str(self.total_points),
            "claimed_points": str(self.claimed_points),
            "unclaimed_points": str(self.unclaimed_points),
        }


def _to_view(record: SalesRecord) -> CustomerPoints:
    account = getattr(record, "points_account", None)
    return CustomerPoints(
        customer_code=record.customer_code,
        name=record.name,
        house=record.house,
        street=record.street,
        place=record.place,
        postal_code=record.postal_code,
        mobile=record.mobile,
        net_weight=record.net_weight,
        last_purchase_date=record.last_purchase_date,
        total_points=account.total_points if account else _ZERO,
        claimed_points=account.claimed_points if account else _ZERO,
    )


def customer_points(customer_code: str) -> CustomerPoints | None:
    """Joined view for one customer, or None if not in the ledger."""
    try:
        record = SalesRecord.objects.select_related("points_account").get(
            customer_code=normalize_code(customer_code)
        )
    except SalesRecord.DoesNotExist:
        return None
    return _to_view(record)


def list_customer_points(
    code: str | None = None,
    code_prefix: str | None = None,
    only_claimable: bool = False,
    descending: bool = False,
    limit: int | None = None,
) -> list[CustomerPoints]:
    """
    Joined view for many customers, sorted by customer code.

    Args:
        code: Exact customer code
        code_prefix: Customer codes starting with this prefix
        only_claimable: Only customers with unclaimed points > 0
        descending: Reverse code order
        limit: Maximum results
    """
    qs = SalesRecord.objects.select_related("points_account")

    if code:
        qs = qs.filter(customer_code=normalize_code(code))
    if code_prefix:
        qs = qs.filter(customer_code__startswith=code_prefix)
    if only_claimable:
        qs = qs.filter(
            points_account__total_points__gt=F("points_account__claimed_points")
        )

    qs = qs.order_by("-customer_code" if descending else "customer_code")
    if limit:
        qs = qs[:limit]
    return [_to_view(record) for record in qs]
