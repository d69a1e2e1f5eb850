"""
HTTP helpers.

This module centralizes how the request jar builds its `httpx.Client`.

Design goals:
- Small surface area (one client per jar, rebuilt when the proxy changes).
- Deterministic defaults (timeout + User-Agent + JSON accept header).
- No status handling here; the jar interprets responses.
"""

from __future__ import annotations

import httpx

DEFAULT_USER_AGENT = "rbxweb/0.1.0"

JSON_HEADERS = {
    "Accept": "application/json",
}


def build_client(
    *,
    timeout_seconds: float = 15,
    proxy: str | None = None,
    user_agent: str | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Return an `httpx.Client` with the jar's default headers.

    `transport` is injected by tests (`httpx.MockTransport`); when it is given the proxy
    is ignored because a mounted transport replaces the proxy transport anyway.
    """
    headers = {"User-Agent": user_agent or DEFAULT_USER_AGENT, **JSON_HEADERS}
    if transport is not None:
        return httpx.Client(timeout=timeout_seconds, headers=headers, transport=transport)
    return httpx.Client(timeout=timeout_seconds, headers=headers, proxy=proxy)


def parse_retry_after_seconds(value: str | None) -> float | None:
    """Parse a numeric `Retry-After` header value (HTTP-date values are ignored)."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds >= 0 else None


def join_ids(ids: list[int] | tuple[int, ...]) -> str:
    """Join numeric ids the way list query parameters expect them (`1,2,3`)."""
    return ",".join(str(int(i)) for i in ids)
