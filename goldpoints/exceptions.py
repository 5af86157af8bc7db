"""Goldpoints exceptions."""


class BaseError(Exception):
    """
    Structured exception carrying a machine-readable code.

    Subclasses declare ``_default_messages`` keyed by code; extra keyword
    arguments are kept in ``data`` for callers and API responses.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "data": self.data}


class GoldpointsError(BaseError):
    """
    Structured exception for ledger, points and claim operations.

    Usage:
        try:
            ClaimService.claim_or_raise("C-001", 5)
        except GoldpointsError as e:
            if e.code == "INSUFFICIENT_POINTS":
                show_balance(e.data["available"])
    """

    _default_messages = {
        "CUSTOMER_NOT_FOUND": "Customer not found",
        "INVALID_CUSTOMER_CODE": "Customer code is required",
        "INVALID_WEIGHT": "Net weight must be a number",
        "NEGATIVE_WEIGHT": "Net weight cannot be negative",
        "INVALID_ROW": "Sales row is missing required fields",
        "INVALID_AMOUNT": "Claim amount must be positive, with at most two decimal places",
        "UNKNOWN_CUSTOMER": "Customer has no points account",
        "INSUFFICIENT_POINTS": "Insufficient points for claim",
    }
