"""Response error extraction for load test observability.

Parses the API's error envelope ``{"success": false, "message", "error"}``
into a compact, human-readable message.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response


def extract_error_detail(response: Response) -> str:
    """Extract a human-readable error message from an API error response."""
    try:
        body = response.json()
    except Exception:
        text = getattr(response, "text", "") or ""
        return text[:300] or "(empty response body)"

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])

    return str(body)[:300]


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
