"""Goldpoints models.

- SalesRecord: per-customer sales aggregate (source of truth)
- PointsAccount: accrued/claimed points, one-to-one with SalesRecord
"""

from goldpoints.models.sales_record import SalesRecord
from goldpoints.models.points_account import PointsAccount

__all__ = [
    "SalesRecord",
    "PointsAccount",
]
