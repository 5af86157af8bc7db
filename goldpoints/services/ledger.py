"""Sales ledger service — upsert, lookup and batch date normalization.

Every upsert is its own transaction; nothing spans customers.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from django.db import IntegrityError, transaction
from django.utils import timezone

from goldpoints.conf import goldpoints_settings
from goldpoints.exceptions import GoldpointsError
from goldpoints.models import SalesRecord
from goldpoints.signals import sales_record_created, sales_record_updated
from goldpoints.utils import normalize_code, normalize_date, to_decimal

logger = logging.getLogger(__name__)


UPDATABLE_FIELDS = {
    "name",
    "house",
    "street",
    "place",
    "postal_code",
    "mobile",
}


@dataclass
class IngestionResult:
    """Counts from a bulk upsert."""

    created: int = 0
    updated: int = 0

    @property
    def total(self) -> int:
        return self.created + self.updated


def get(customer_code: str) -> SalesRecord | None:
    """Get sales record by customer code."""
    try:
        return SalesRecord.objects.get(customer_code=normalize_code(customer_code))
    except SalesRecord.DoesNotExist:
        return None


def list_all():
    """
    All sales records ordered by customer code.

    Returns a lazy QuerySet: nothing is fetched until iteration, and
    ``.all()`` on it gives a fresh pass over current rows.
    """
    return SalesRecord.objects.order_by("customer_code")


def iter_all(chunk_size: int | None = None) -> Iterator[SalesRecord]:
    """Stream every record in chunks, for batch consumers."""
    chunk_size = chunk_size or goldpoints_settings.BATCH_CHUNK_SIZE
    return list_all().iterator(chunk_size=chunk_size)


def _clean_weight(net_weight):
    weight = to_decimal(net_weight)
    if weight is None:
        raise GoldpointsError("INVALID_WEIGHT", net_weight=str(net_weight))
    if weight < 0:
        raise GoldpointsError("NEGATIVE_WEIGHT", net_weight=str(weight))
    return weight


def _lock_record(code: str) -> SalesRecord | None:
    """Fetch a record with a row lock. MUST be called inside transaction.atomic()."""
    return SalesRecord.objects.select_for_update().filter(customer_code=code).first()


def upsert(customer_code: str, net_weight, last_purchase: str | None = None, **fields):
    """
    Insert or overwrite the sales record for a customer.

    Args:
        customer_code: Natural key
        net_weight: Cumulative grams purchased (>= 0)
        last_purchase: Raw last-purchase date string, normalized on write
        **fields: Any of UPDATABLE_FIELDS; other keys are ignored

    Returns:
        Tuple of (SalesRecord, created: bool)

    Raises:
        GoldpointsError: INVALID_CUSTOMER_CODE, INVALID_WEIGHT, NEGATIVE_WEIGHT
    """
    code = normalize_code(customer_code)
    if not code:
        raise GoldpointsError("INVALID_CUSTOMER_CODE")
    weight = _clean_weight(net_weight)

    values = {
        key: ("" if value is None else str(value))
        for key, value in fields.items()
        if key in UPDATABLE_FIELDS
    }
    values["net_weight"] = weight
    if last_purchase is not None:
        values["last_purchase_raw"] = str(last_purchase)
        values["last_purchase_date"] = normalize_date(last_purchase)

    created = False
    changes = {}
    with transaction.atomic():
        record = _lock_record(code)
        if record is None:
            try:
                with transaction.atomic():
                    record = SalesRecord.objects.create(customer_code=code, **values)
                created = True
            except IntegrityError:
                # Inserted by a concurrent upsert; overwrite it instead.
                record = _lock_record(code)
                if record is None:
                    raise
        if not created:
            for key, value in values.items():
                old_value = getattr(record, key)
                if old_value != value:
                    changes[key] = {"old": old_value, "new": value}
                setattr(record, key, value)
            record.save()

    if created:
        logger.debug("Sales record created: %s", code)
        sales_record_created.send(sender=SalesRecord, record=record)
    else:
        logger.debug("Sales record updated: %s (%d changes)", code, len(changes))
        sales_record_updated.send(sender=SalesRecord, record=record, changes=changes)
    return record, created


def bulk_upsert(rows: Iterable[Mapping]) -> IngestionResult:
    """
    Ingestion entry point: upsert many rows keyed by customer code.

    Each row must carry ``customer_code`` and ``net_weight``. Rows are
    applied one at a time; a bad row raises and earlier rows stay applied.
    """
    result = IngestionResult()
    for index, row in enumerate(rows):
        if "customer_code" not in row or "net_weight" not in row:
            raise GoldpointsError("INVALID_ROW", row=index)
        data = dict(row)
        _, created = upsert(data.pop("customer_code"), data.pop("net_weight"), **data)
        if created:
            result.created += 1
        else:
            result.updated += 1

    logger.info(
        "Ingested %d sales rows (%d created, %d updated)",
        result.total,
        result.created,
        result.updated,
    )
    return result


def delete(customer_code: str) -> bool:
    """Delete a customer's sales record (and, by cascade, its points account)."""
    deleted, _ = SalesRecord.objects.filter(
        customer_code=normalize_code(customer_code)
    ).delete()
    return deleted > 0


def normalize_dates() -> int:
    """
    Re-parse every raw last-purchase string into last_purchase_date.

    Unparseable strings become None; the batch never stops on them.
    Returns the number of rows whose normalized date changed.
    """
    changed = 0
    scanned = 0
    qs = SalesRecord.objects.only("customer_code", "last_purchase_raw", "last_purchase_date")
    for record in qs.iterator(chunk_size=goldpoints_settings.BATCH_CHUNK_SIZE):
        scanned += 1
        parsed = normalize_date(record.last_purchase_raw)
        if parsed == record.last_purchase_date:
            continue
        SalesRecord.objects.filter(customer_code=record.customer_code).update(
            last_purchase_date=parsed,
            updated_at=timezone.now(),
        )
        changed += 1

    logger.info("Normalized purchase dates: %d scanned, %d changed", scanned, changed)
    return changed
