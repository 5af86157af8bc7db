"""
Goldpoints signals — public event API.

Emitted signals:
- sales_record_created: Emitted by services.ledger.upsert() on insert
- sales_record_updated: Emitted by services.ledger.upsert() on overwrite
- points_recomputed: Emitted by services.points.recompute()
- points_claimed: Emitted by ClaimService.claim() on success
"""

from django.dispatch import Signal

# Ledger signals (emitted by services)
sales_record_created = Signal()  # sender=SalesRecord, record=SalesRecord
sales_record_updated = Signal()  # sender=SalesRecord, record=SalesRecord, changes=dict

# Points signals
points_recomputed = Signal()  # sender=PointsAccount, processed=int, created=int, updated=int
points_claimed = Signal()  # sender=PointsAccount, account=PointsAccount, amount=Decimal
