"""Access policy protocol."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class AccessPolicy(Protocol):
    """
    Authorization check run before every HTTP interface call.

    Actions:
        "claim" - POST a claim
        "read"  - read customer points
    """

    def has_access(self, request, action: str) -> bool:
        """Return True if the caller may perform ``action``."""
        ...
