"""Tests for the sales ledger service."""

from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest

from goldpoints.exceptions import GoldpointsError
from goldpoints.models import PointsAccount, SalesRecord
from goldpoints.services import ledger
from goldpoints.signals import sales_record_created, sales_record_updated


pytestmark = pytest.mark.django_db


class TestUpsert:
    def test_creates_new_record(self, db):
        record, created = ledger.upsert(
            "C-010",
            "42.5",
            name="Meera",
            place="Kannur",
            last_purchase="05/03/2024",
        )

        assert created is True
        assert record.net_weight == Decimal("42.5")
        assert record.name == "Meera"
        assert record.last_purchase_raw == "05/03/2024"
        assert record.last_purchase_date == date(2024, 3, 5)

    def test_overwrites_existing_record(self, sales_record):
        record, created = ledger.upsert("C-001", 120, name="Asha M")

        assert created is False
        assert SalesRecord.objects.count() == 1
        record.refresh_from_db()
        assert record.net_weight == Decimal("120")
        assert record.name == "Asha M"
        # untouched fields survive
        assert record.street == "MG Road"

    def test_weight_is_overwritten_not_added(self, sales_record):
        ledger.upsert("C-001", 10)
        assert ledger.get("C-001").net_weight == Decimal("10")

    def test_create_race_falls_back_to_update(self, sales_record):
        """A row inserted after the existence check is overwritten, not a crash."""
        lock_record = ledger._lock_record
        calls = []

        def missing_on_first_lookup(code):
            calls.append(code)
            return None if len(calls) == 1 else lock_record(code)

        with patch.object(ledger, "_lock_record", side_effect=missing_on_first_lookup):
            record, created = ledger.upsert("C-001", 130, name="Asha M")

        assert created is False
        assert calls == ["C-001", "C-001"]
        assert SalesRecord.objects.count() == 1
        record.refresh_from_db()
        assert record.net_weight == Decimal("130")
        assert record.name == "Asha M"
        assert record.street == "MG Road"

    def test_customer_code_is_stripped(self, sales_record):
        _, created = ledger.upsert("  C-001 ", 20)

        assert created is False
        assert SalesRecord.objects.count() == 1

    def test_unparseable_date_is_stored_raw(self, db):
        record, _ = ledger.upsert("C-011", 5, last_purchase="sometime")
        assert record.last_purchase_raw == "sometime"
        assert record.last_purchase_date is None

    def test_unknown_fields_ignored(self, db):
        record, _ = ledger.upsert("C-012", 5, net_weight_bonus=10, mobile="98470")
        assert record.mobile == "98470"
        assert not hasattr(record, "net_weight_bonus")

    def test_negative_weight_rejected(self, db):
        with pytest.raises(GoldpointsError, match="NEGATIVE_WEIGHT"):
            ledger.upsert("C-013", "-0.5")
        assert not SalesRecord.objects.filter(pk="C-013").exists()

    @pytest.mark.parametrize("weight", ["abc", None, "", "NaN", "Infinity", True])
    def test_non_numeric_weight_rejected(self, db, weight):
        with pytest.raises(GoldpointsError, match="INVALID_WEIGHT"):
            ledger.upsert("C-014", weight)

    @pytest.mark.parametrize("code", ["", "   ", None])
    def test_missing_code_rejected(self, db, code):
        with pytest.raises(GoldpointsError, match="INVALID_CUSTOMER_CODE"):
            ledger.upsert(code, 1)

    def test_signals(self, db):
        created_events = []
        updated_events = []

        def on_created(sender, record, **kwargs):
            created_events.append(record.customer_code)

        def on_updated(sender, record, changes, **kwargs):
            updated_events.append(changes)

        sales_record_created.connect(on_created)
        sales_record_updated.connect(on_updated)
        try:
            ledger.upsert("C-015", 10)
            ledger.upsert("C-015", 20)
        finally:
            sales_record_created.disconnect(on_created)
            sales_record_updated.disconnect(on_updated)

        assert created_events == ["C-015"]
        assert updated_events[0]["net_weight"]["new"] == Decimal("20")


class TestBulkUpsert:
    def test_counts(self, sales_record):
        result = ledger.bulk_upsert(
            [
                {"customer_code": "C-001", "net_weight": "100"},
                {"customer_code": "C-020", "net_weight": "15", "name": "Lakshmi"},
                {"customer_code": "C-021", "net_weight": 0, "last_purchase": "2024-1-2"},
            ]
        )
        assert result.created == 2
        assert result.updated == 1
        assert result.total == 3
        assert ledger.get("C-021").last_purchase_date == date(2024, 1, 2)

    def test_missing_weight_raises(self, db):
        with pytest.raises(GoldpointsError, match="INVALID_ROW") as exc_info:
            ledger.bulk_upsert(
                [
                    {"customer_code": "C-030", "net_weight": 1},
                    {"customer_code": "C-031"},
                ]
            )
        assert exc_info.value.data["row"] == 1
        # first row stays applied
        assert ledger.get("C-030") is not None


class TestLookup:
    def test_get(self, sales_record):
        assert ledger.get("C-001") == sales_record

    def test_get_ignores_surrounding_whitespace(self, sales_record):
        assert ledger.get(" C-001 ") == sales_record

    def test_get_missing(self, db):
        assert ledger.get("NOPE") is None

    def test_list_all_is_ordered_and_restartable(self, sales_record_b, sales_record):
        records = ledger.list_all()
        assert [r.customer_code for r in records] == ["C-001", "C-002"]

        ledger.upsert("C-000", 1)
        assert [r.customer_code for r in records.all()] == ["C-000", "C-001", "C-002"]

    def test_iter_all(self, sales_record, sales_record_b):
        codes = [r.customer_code for r in ledger.iter_all(chunk_size=1)]
        assert codes == ["C-001", "C-002"]


class TestDelete:
    def test_delete_cascades_to_points(self, account):
        assert ledger.delete("C-001") is True
        assert not PointsAccount.objects.exists()

    def test_delete_ignores_surrounding_whitespace(self, sales_record):
        assert ledger.delete(" C-001") is True

    def test_delete_missing(self, db):
        assert ledger.delete("NOPE") is False


class TestNormalizeDates:
    def test_fills_dates_from_raw(self, sales_record, sales_record_b):
        SalesRecord.objects.create(customer_code="C-003", last_purchase_raw="garbage")

        changed = ledger.normalize_dates()

        assert changed == 2
        assert ledger.get("C-001").last_purchase_date == date(2024, 3, 5)
        assert ledger.get("C-002").last_purchase_date == date(2024, 1, 15)
        assert ledger.get("C-003").last_purchase_date is None

    def test_idempotent(self, sales_record):
        assert ledger.normalize_dates() == 1
        assert ledger.normalize_dates() == 0

    def test_clears_stale_date(self, sales_record):
        SalesRecord.objects.filter(pk="C-001").update(
            last_purchase_raw="", last_purchase_date=date(2020, 1, 1)
        )
        assert ledger.normalize_dates() == 1
        assert ledger.get("C-001").last_purchase_date is None
