"""Storefront session identification.

Guest carts are keyed by an opaque identifier the frontend generates and
sends on every request in the ``X-Session-Id`` header.
"""

from drf_spectacular.utils import OpenApiParameter

SESSION_HEADER = "X-Session-Id"

# Matches Cart.session_id
SESSION_ID_MAX_LENGTH = 64

INVALID_SESSION_DETAIL = "Missing or invalid X-Session-Id."

SESSION_HEADER_PARAMETER = OpenApiParameter(
    name=SESSION_HEADER,
    location=OpenApiParameter.HEADER,
    required=True,
    description=f"Storefront session identifier (up to {SESSION_ID_MAX_LENGTH} characters)",
    type=str,
)


def get_session_id(request) -> str | None:
    """Return the request's session id, or None when it is absent or too long."""

    session_id = (request.headers.get(SESSION_HEADER) or "").strip()
    if not session_id or len(session_id) > SESSION_ID_MAX_LENGTH:
        return None
    return session_id
