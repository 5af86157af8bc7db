"""Goldpoints protocols."""

from goldpoints.protocols.access import AccessPolicy

__all__ = [
    "AccessPolicy",
]
