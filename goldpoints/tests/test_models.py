"""Tests for Goldpoints models and their standing constraints."""

from decimal import Decimal

import pytest
from django.db import IntegrityError, transaction

from goldpoints.models import PointsAccount, SalesRecord


pytestmark = pytest.mark.django_db


class TestSalesRecord:
    def test_str_with_name(self, sales_record):
        assert str(sales_record) == "Asha Menon (C-001)"

    def test_str_without_name(self, db):
        record = SalesRecord.objects.create(customer_code="C-100", net_weight=1)
        assert str(record) == "C-100"

    def test_address(self, sales_record):
        assert sales_record.address == "12, MG Road, Thrissur, 680001"

    def test_long_customer_code(self, db):
        """Customer codes are not truncated to a fixed width."""
        code = "X" * 500
        SalesRecord.objects.create(customer_code=code, net_weight=1)
        assert SalesRecord.objects.get(customer_code=code).customer_code == code

    def test_negative_weight_rejected_by_database(self, db):
        with pytest.raises(IntegrityError), transaction.atomic():
            SalesRecord.objects.create(customer_code="NEG", net_weight=Decimal("-1"))


class TestPointsAccount:
    def test_unclaimed_is_derived(self, account):
        account.claimed_points = Decimal("4")
        account.save()
        account.refresh_from_db()
        assert account.unclaimed_points == Decimal("6")

    def test_str(self, account):
        account.refresh_from_db()
        assert str(account) == "C-001: 10.00/10.00pts"

    def test_primary_key_is_customer_code(self, account):
        assert account.pk == "C-001"
        assert account.customer_code == "C-001"

    def test_claimed_above_total_rejected(self, sales_record):
        """claimed <= total holds at the storage layer, independent of services."""
        with pytest.raises(IntegrityError), transaction.atomic():
            PointsAccount.objects.create(
                customer=sales_record,
                total_points=Decimal("5"),
                claimed_points=Decimal("6"),
            )

    def test_update_claimed_above_total_rejected(self, account):
        with pytest.raises(IntegrityError), transaction.atomic():
            PointsAccount.objects.filter(pk=account.pk).update(claimed_points=Decimal("11"))

        account.refresh_from_db()
        assert account.claimed_points == Decimal("0")

    def test_negative_claimed_rejected(self, sales_record):
        with pytest.raises(IntegrityError), transaction.atomic():
            PointsAccount.objects.create(
                customer=sales_record,
                total_points=Decimal("5"),
                claimed_points=Decimal("-1"),
            )

    def test_one_account_per_customer(self, account, sales_record):
        with pytest.raises(IntegrityError), transaction.atomic():
            PointsAccount.objects.create(customer=sales_record)

    def test_cascade_delete(self, account, sales_record):
        """Deleting the ledger row removes the points account."""
        sales_record.delete()
        assert not PointsAccount.objects.filter(pk="C-001").exists()

    def test_claimable_queryset(self, account, sales_record_b):
        PointsAccount.objects.create(
            customer=sales_record_b,
            total_points=Decimal("25"),
            claimed_points=Decimal("25"),
        )
        codes = list(PointsAccount.objects.claimable().values_list("pk", flat=True))
        assert codes == ["C-001"]
