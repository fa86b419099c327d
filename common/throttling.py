"""Shared throttles.

Overrides DRF's ScopedRateThrottle rate lookup to read from Django settings
at request-time, so tests using override_settings reliably affect rates.
"""

from django.conf import settings
from rest_framework.throttling import ScopedRateThrottle

from .sessions import get_session_id


class StoreScopedRateThrottle(ScopedRateThrottle):
    def get_rate(self):
        rf = getattr(settings, "REST_FRAMEWORK", {})
        rates = rf.get("DEFAULT_THROTTLE_RATES", {})
        return rates.get(self.scope)

    def get_ident(self, request):
        # Shoppers behind one NAT are throttled per storefront session
        session_id = get_session_id(request)
        if session_id:
            return f"session:{session_id}"
        return super().get_ident(request)
