"""httpx wrapper.

Why a wrapper:
- Standardizes base URL, timeouts and headers for every API call.
- Makes testing easy: a ``transport`` (e.g. ``httpx.MockTransport``) can be
  swapped in without touching the datasource.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` bound to the API base URL.

    No retries are configured: every request is single-shot.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/hal+json, application/json;q=0.9",
    }
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
