"""Points engine — derives accrued points from sales weight.

recompute() overwrites total_points from current ledger state on every run,
so running it again with no ledger change is a no-op. It never writes
claimed_points.
"""

import logging
from decimal import ROUND_FLOOR, Decimal

from django.db import IntegrityError, transaction
from django.utils import timezone

from goldpoints.conf import goldpoints_settings
from goldpoints.models import PointsAccount, SalesRecord
from goldpoints.signals import points_recomputed
from goldpoints.utils import normalize_code

logger = logging.getLogger(__name__)


def derive_points(net_weight) -> Decimal:
    """
    Points for a cumulative net weight: one point per full GRAMS_PER_POINT.

    Fractions below the next boundary are dropped (95g -> 9, 9.99g -> 0).
    """
    weight = Decimal(str(net_weight))
    return (weight / goldpoints_settings.GRAMS_PER_POINT).to_integral_value(
        rounding=ROUND_FLOOR
    )


def get_account(customer_code: str) -> PointsAccount | None:
    """Get points account by customer code."""
    try:
        return PointsAccount.objects.select_related("customer").get(
            customer_id=normalize_code(customer_code)
        )
    except PointsAccount.DoesNotExist:
        return None


def _apply(record: SalesRecord) -> bool:
    """
    Write the derived total for one customer. Returns True if created.

    Runs in its own transaction. The update path touches only
    total_points/updated_at so a concurrent claim is never overwritten.
    """
    total = derive_points(record.net_weight)

    with transaction.atomic():
        exists = PointsAccount.objects.filter(customer_id=record.customer_code).exists()
        if not exists:
            try:
                with transaction.atomic():
                    PointsAccount.objects.create(
                        customer_id=record.customer_code,
                        total_points=total,
                        claimed_points=Decimal("0"),
                    )
                return True
            except IntegrityError:
                # Created by a concurrent recompute; fall through to update.
                if not PointsAccount.objects.filter(
                    customer_id=record.customer_code
                ).exists():
                    raise

        PointsAccount.objects.filter(customer_id=record.customer_code).update(
            total_points=total,
            updated_at=timezone.now(),
        )
    return False


def recompute_customer(customer_code: str) -> PointsAccount | None:
    """Recompute one customer's total. Returns None if not in the ledger."""
    customer_code = normalize_code(customer_code)
    try:
        record = SalesRecord.objects.only("customer_code", "net_weight").get(
            customer_code=customer_code
        )
    except SalesRecord.DoesNotExist:
        return None
    _apply(record)
    return get_account(customer_code)


def recompute() -> int:
    """
    Recompute total points for every customer in the ledger.

    Returns:
        Number of customers processed

    Raises:
        IntegrityError: If a weight correction would leave any customer's
            total below their claimed points. Every other customer is still
            recomputed; the error lists the rejected codes and is raised
            once the batch has finished.
    """
    processed = created = 0
    rejected = []
    first_error = None
    qs = SalesRecord.objects.only("customer_code", "net_weight").order_by("customer_code")

    for record in qs.iterator(chunk_size=goldpoints_settings.BATCH_CHUNK_SIZE):
        try:
            if _apply(record):
                created += 1
        except IntegrityError as exc:
            logger.error(
                "Recompute rejected for %s: total would fall below claimed points",
                record.customer_code,
            )
            rejected.append(record.customer_code)
            first_error = first_error or exc
            continue
        processed += 1

    updated = processed - created
    logger.info(
        "Recomputed points for %d customers (%d created, %d updated)",
        processed,
        created,
        updated,
    )
    points_recomputed.send(
        sender=PointsAccount,
        processed=processed,
        created=created,
        updated=updated,
    )

    if rejected:
        raise IntegrityError(
            f"Recompute rejected for {len(rejected)} customers with claimed points "
            f"above the new total: {', '.join(rejected)}"
        ) from first_error
    return processed
