"""
Goldpoints - loyalty points ledger for gold sales.

Usage:
    from goldpoints import ClaimService
    from goldpoints.services import ledger, points, reports

    ledger.upsert("C-001", "95.5", name="Asha", last_purchase="05/03/2024")
    points.recompute()
    result = ClaimService.claim("C-001", 5)
    if not result.claimed:
        print(result.reason)  # INSUFFICIENT_POINTS / UNKNOWN_CUSTOMER / INVALID_AMOUNT
    view = reports.customer_points("C-001")
"""


def __getattr__(name):
    if name == "ClaimService":
        from goldpoints.services.claims import ClaimService

        return ClaimService
    if name == "ClaimResult":
        from goldpoints.services.claims import ClaimResult

        return ClaimResult
    if name == "ClaimRejection":
        from goldpoints.services.claims import ClaimRejection

        return ClaimRejection
    if name == "GoldpointsError":
        from goldpoints.exceptions import GoldpointsError

        return GoldpointsError
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["ClaimService", "ClaimResult", "ClaimRejection", "GoldpointsError"]
__version__ = "0.1.0"
