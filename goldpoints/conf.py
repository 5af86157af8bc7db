"""
Goldpoints configuration.

Usage in settings.py:
    GOLDPOINTS = {
        "GRAMS_PER_POINT": 10,
        "ACCESS_POLICY": "myproject.policies.StaffOnly",
    }
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from django.conf import settings


@dataclass
class GoldpointsSettings:
    """Goldpoints configuration settings."""

    # Grams of net weight per accrued point
    GRAMS_PER_POINT: Decimal = Decimal("10")

    # Dotted path to the access policy checked before every HTTP call
    ACCESS_POLICY: str = "goldpoints.access.AllowAll"

    # Rows fetched per round-trip by batch jobs
    BATCH_CHUNK_SIZE: int = 500

    def __post_init__(self):
        self.GRAMS_PER_POINT = Decimal(str(self.GRAMS_PER_POINT))


def get_goldpoints_settings() -> GoldpointsSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "GOLDPOINTS", {})
    return GoldpointsSettings(**user_settings)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_goldpoints_settings(), name)


goldpoints_settings = _LazySettings()
