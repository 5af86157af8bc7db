"""Pytest fixtures for Goldpoints tests."""

from decimal import Decimal

import pytest

from goldpoints.models import PointsAccount, SalesRecord


@pytest.fixture
def sales_record(db):
    """Customer with 95 grams purchased."""
    return SalesRecord.objects.create(
        customer_code="C-001",
        name="Asha Menon",
        house="12",
        street="MG Road",
        place="Thrissur",
        postal_code="680001",
        mobile="9847000001",
        net_weight=Decimal("95"),
        last_purchase_raw="05/03/2024",
    )


@pytest.fixture
def sales_record_b(db):
    """Second customer with 250.5 grams purchased."""
    return SalesRecord.objects.create(
        customer_code="C-002",
        name="Ravi Nair",
        place="Kochi",
        net_weight=Decimal("250.5"),
        last_purchase_raw="2024-1-15",
    )


@pytest.fixture
def account(sales_record):
    """Points account with 10 total, 0 claimed."""
    return PointsAccount.objects.create(
        customer=sales_record,
        total_points=Decimal("10"),
        claimed_points=Decimal("0"),
    )
