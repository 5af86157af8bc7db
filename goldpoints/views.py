"""
Goldpoints HTTP endpoints.

    POST claims/                  claim points for a customer
    GET  customers/               list customers with points (?code=, ?prefix=, ?claimable=1)
    GET  customers/<code>/        one customer with points

Every request is checked against the configured access policy first.
"""

from __future__ import annotations

import json
import logging

from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from goldpoints import access
from goldpoints.services import reports
from goldpoints.services.claims import ClaimRejection, ClaimService

logger = logging.getLogger("goldpoints.views")

_REJECTION_STATUS = {
    ClaimRejection.INVALID_AMOUNT: 400,
    ClaimRejection.UNKNOWN_CUSTOMER: 404,
    ClaimRejection.INSUFFICIENT_POINTS: 409,
}


def _forbidden(request, action: str) -> JsonResponse | None:
    if access.has_access(request, action):
        return None
    logger.warning("Access denied: action=%s path=%s", action, request.path)
    return JsonResponse({"error": "Forbidden"}, status=403)


@method_decorator(csrf_exempt, name="dispatch")
class ClaimView(View):
    """
    POST endpoint for point claims.

    Expects JSON body: {"customer_code": "C-001", "amount": "5"}
    """

    def post(self, request):
        denied = _forbidden(request, access.CLAIM)
        if denied:
            return denied

        try:
            data = json.loads(request.body)
        except (json.JSONDecodeError, ValueError):
            return JsonResponse({"error": "Invalid JSON"}, status=400)
        if not isinstance(data, dict):
            return JsonResponse({"error": "Invalid JSON"}, status=400)

        customer_code = data.get("customer_code")
        if not customer_code:
            return JsonResponse({"error": "customer_code is required"}, status=400)

        result = ClaimService.claim(str(customer_code), data.get("amount"))

        if not result.claimed:
            return JsonResponse(
                {
                    "status": "rejected",
                    "reason": result.reason,
                    "message": result.message,
                    "customer_code": result.customer_code,
                    "unclaimed_points": (
                        str(result.unclaimed_points)
                        if result.unclaimed_points is not None
                        else None
                    ),
                },
                status=_REJECTION_STATUS[ClaimRejection(result.reason)],
            )

        return JsonResponse(
            {
                "status": "claimed",
                "customer_code": result.customer_code,
                "amount": str(result.amount),
                "claimed_points": str(result.claimed_points),
                "unclaimed_points": str(result.unclaimed_points),
            }
        )


class CustomerPointsListView(View):
    """GET endpoint listing customers with their points."""

    def get(self, request):
        denied = _forbidden(request, access.READ)
        if denied:
            return denied

        rows = reports.list_customer_points(
            code=request.GET.get("code") or None,
            code_prefix=request.GET.get("prefix") or None,
            only_claimable=request.GET.get("claimable") in ("1", "true", "yes"),
            descending=request.GET.get("order") == "desc",
        )
        return JsonResponse({"results": [row.as_dict() for row in rows]})


class CustomerPointsDetailView(View):
    """GET endpoint for a single customer."""

    def get(self, request, customer_code):
        denied = _forbidden(request, access.READ)
        if denied:
            return denied

        view = reports.customer_points(customer_code)
        if view is None:
            return JsonResponse({"error": "Customer not found"}, status=404)
        return JsonResponse(view.as_dict())
