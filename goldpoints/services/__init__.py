"""Goldpoints services.

- ledger: sales record upsert/lookup and date normalization
- points: points derivation and recompute
- claims: ClaimService
- reports: read-only joined views
"""

from goldpoints.services import ledger
from goldpoints.services import claims
from goldpoints.services import points
from goldpoints.services import reports

__all__ = ["ledger", "claims", "points", "reports"]
