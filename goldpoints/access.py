"""Access policies for the HTTP interface.

Authentication and authorization belong to the surrounding platform; the
app only asks the configured policy before serving a request.
"""

from django.utils.module_loading import import_string

from goldpoints.conf import goldpoints_settings
from goldpoints.protocols.access import AccessPolicy

CLAIM = "claim"
READ = "read"


class AllowAll:
    """Default policy: every caller may read and claim."""

    def has_access(self, request, action: str) -> bool:
        return True


class AuthenticatedOnly:
    """Only authenticated users; reads and claims alike."""

    def has_access(self, request, action: str) -> bool:
        user = getattr(request, "user", None)
        return bool(user and user.is_authenticated)


def get_access_policy() -> AccessPolicy:
    """Instantiate the configured ACCESS_POLICY."""
    policy_class = import_string(goldpoints_settings.ACCESS_POLICY)
    return policy_class()


def has_access(request, action: str) -> bool:
    return get_access_policy().has_access(request, action)
