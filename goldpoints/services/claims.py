"""Claim service — moves points from unclaimed to claimed.

The balance check and the increment form one atomic unit per customer:
the account row is locked for the duration of the transaction and the
increment itself is a guarded UPDATE that only matches while
``claimed_points + amount <= total_points``. Claims on different customers
never wait on each other.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal

from django.db import models, transaction
from django.db.models import F
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from goldpoints.exceptions import GoldpointsError
from goldpoints.models import PointsAccount
from goldpoints.signals import points_claimed
from goldpoints.utils import normalize_code, to_decimal

logger = logging.getLogger(__name__)

# Finest claim step the claimed_points column can store exactly
_CLAIM_PLACES = PointsAccount._meta.get_field("claimed_points").decimal_places


class ClaimRejection(models.TextChoices):
    """Why a claim was refused."""

    INVALID_AMOUNT = "INVALID_AMOUNT", _(
        "Claim amount must be positive, with at most two decimal places"
    )
    UNKNOWN_CUSTOMER = "UNKNOWN_CUSTOMER", _("Customer has no points account")
    INSUFFICIENT_POINTS = "INSUFFICIENT_POINTS", _("Insufficient points for claim")


@dataclass(frozen=True)
class ClaimResult:
    """Outcome of a claim request."""

    claimed: bool
    customer_code: str
    amount: Decimal | None
    reason: str | None = None
    message: str | None = None
    claimed_points: Decimal | None = None
    unclaimed_points: Decimal | None = None

    @classmethod
    def rejected(cls, customer_code, amount, reason: ClaimRejection, account=None):
        return cls(
            claimed=False,
            customer_code=customer_code,
            amount=amount,
            reason=reason.value,
            message=str(reason.label),
            claimed_points=account.claimed_points if account else None,
            unclaimed_points=account.unclaimed_points if account else None,
        )


def _too_precise(value: Decimal) -> bool:
    return value.normalize().as_tuple().exponent < -_CLAIM_PLACES


class ClaimService:
    """
    Service for point claims.

    Uses @classmethod for extensibility (consistent with other services).
    """

    @classmethod
    def claim(cls, customer_code: str, amount) -> ClaimResult:
        """
        Claim points for a customer.

        Args:
            customer_code: Customer code
            amount: Points to claim (positive number or numeric string, at
                most two decimal places)

        Returns:
            ClaimResult; ``claimed`` is False with ``reason`` set to a
            ClaimRejection value when nothing was changed.

        Raises:
            IntegrityError: If the stored invariant claimed <= total would
                be broken. Never caught here.
        """
        customer_code = normalize_code(customer_code)
        value = to_decimal(amount)
        if value is None or value <= 0 or _too_precise(value):
            logger.info("Claim rejected for %s: invalid amount %r", customer_code, amount)
            return ClaimResult.rejected(customer_code, value, ClaimRejection.INVALID_AMOUNT)

        with transaction.atomic():
            account = cls._lock_account(customer_code)
            if account is None:
                logger.info("Claim rejected for %s: no points account", customer_code)
                return ClaimResult.rejected(
                    customer_code, value, ClaimRejection.UNKNOWN_CUSTOMER
                )

            if account.unclaimed_points < value:
                logger.info(
                    "Claim rejected for %s: requested %s, available %s",
                    customer_code,
                    value,
                    account.unclaimed_points,
                )
                return ClaimResult.rejected(
                    customer_code, value, ClaimRejection.INSUFFICIENT_POINTS, account
                )

            updated = PointsAccount.objects.filter(
                customer_id=customer_code,
                claimed_points__lte=F("total_points") - value,
            ).update(
                claimed_points=F("claimed_points") + value,
                updated_at=timezone.now(),
            )
            account = PointsAccount.objects.get(customer_id=customer_code)

        if not updated:
            logger.warning(
                "Claim rejected for %s: balance changed during claim", customer_code
            )
            return ClaimResult.rejected(
                customer_code, value, ClaimRejection.INSUFFICIENT_POINTS, account
            )

        logger.info(
            "Claimed %s points for %s (unclaimed now %s)",
            value,
            customer_code,
            account.unclaimed_points,
        )
        points_claimed.send(sender=PointsAccount, account=account, amount=value)
        return ClaimResult(
            claimed=True,
            customer_code=customer_code,
            amount=value,
            claimed_points=account.claimed_points,
            unclaimed_points=account.unclaimed_points,
        )

    @classmethod
    def claim_or_raise(cls, customer_code: str, amount) -> ClaimResult:
        """
        Claim points, raising on rejection.

        Raises:
            GoldpointsError: INVALID_AMOUNT, UNKNOWN_CUSTOMER or INSUFFICIENT_POINTS
        """
        result = cls.claim(customer_code, amount)
        if not result.claimed:
            raise GoldpointsError(
                result.reason,
                customer_code=customer_code,
                requested=str(result.amount) if result.amount is not None else None,
                available=(
                    str(result.unclaimed_points)
                    if result.unclaimed_points is not None
                    else None
                ),
            )
        return result

    @classmethod
    def _lock_account(cls, customer_code: str) -> PointsAccount | None:
        """
        Get points account with row-level lock.

        MUST be called inside transaction.atomic().
        """
        try:
            return PointsAccount.objects.select_for_update().get(customer_id=customer_code)
        except PointsAccount.DoesNotExist:
            return None
