"""
Request jar: the single point of outbound HTTP dispatch.

This module is responsible only for:
- holding session state (credential cookie, anti-forgery token, outbound proxy),
- attaching headers and sending one HTTP call per request,
- interpreting responses (typed decoding, 429, error envelopes),
- replaying a call once after the service invalidates the anti-forgery token,
- walking cursor-paged listings.

Endpoint semantics live in `rbxweb.groups`, `rbxweb.users` and `rbxweb.thumbnails`.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter

from rbxweb.config.settings import Settings, get_settings
from rbxweb.core.errors import (
    AuthenticationError,
    DecodeError,
    NetworkError,
    RateLimited,
    RbxError,
    RemoteError,
    TokenAcquisitionError,
)
from rbxweb.core.http import build_client, parse_retry_after_seconds
from rbxweb.core.rate_limit import TokenBucketRateLimiter
from rbxweb.domain.models import ApiModel, ErrorEnvelope, PagedResponse, PageLimit

logger = logging.getLogger(__name__)

T = TypeVar("T")

CREDENTIAL_COOKIE = ".ROBLOSECURITY"
TOKEN_REQUEST_HEADER = "X-CSRF-TOKEN"
MUTATING_METHODS = frozenset({"POST", "PATCH", "PUT", "DELETE"})


class TokenState(str, Enum):
    ABSENT = "absent"
    ACQUIRING = "acquiring"
    PRESENT = "present"


@lru_cache(maxsize=256)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop `None` values and unwrap enums so httpx encodes the wire value."""
    out: dict[str, Any] = {}
    for key, value in (params or {}).items():
        if value is None:
            continue
        out[key] = value.value if isinstance(value, Enum) else value
    return out


class RequestJar:
    """Session state + HTTP dispatch for the web API.

    Read-only calls may run concurrently on one jar. The anti-forgery token is guarded by a
    re-entrant lock so concurrent callers that all observe an invalidated token trigger a
    single refresh.
    """

    def __init__(self, settings: Settings | None = None, *, transport: httpx.BaseTransport | None = None):
        self._settings = settings or get_settings()
        self._transport = transport
        self._roblosecurity: str | None = None
        self._proxy: str | None = None
        self._xsrf_token: str | None = None
        self._token_state = TokenState.ABSENT
        self._token_lock = threading.RLock()
        self._client: httpx.Client | None = None
        self._client_lock = threading.Lock()

        rate_limit = self._settings.rate_limit
        self._limiter: TokenBucketRateLimiter | None = None
        if rate_limit.max_requests_per_minute:
            self._limiter = TokenBucketRateLimiter(
                max_per_minute=rate_limit.max_requests_per_minute,
                burst=rate_limit.burst,
            )

    @classmethod
    def from_settings(
        cls, settings: Settings | None = None, *, transport: httpx.BaseTransport | None = None
    ) -> "RequestJar":
        """Build a jar configured with the credential/proxy found in settings (no I/O)."""
        settings = settings or get_settings()
        jar = cls(settings, transport=transport)
        jar.configure(credential=settings.auth.roblosecurity, proxy=settings.auth.proxy)
        return jar

    # =========================================================================
    # Session state
    # =========================================================================

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_authenticated(self) -> bool:
        return bool(self._roblosecurity)

    @property
    def proxy(self) -> str | None:
        return self._proxy

    @property
    def token_state(self) -> TokenState:
        return self._token_state

    @property
    def xsrf_token(self) -> str | None:
        return self._xsrf_token

    def endpoint(self, host: str, path: str) -> str:
        """Build an absolute URL on one of the configured hosts (`groups`, `users`, ...)."""
        base = getattr(self._settings.endpoints, host)
        return f"{base.rstrip('/')}{path}"

    def configure(self, credential: str | None = None, proxy: str | None = None) -> None:
        """Store the session credential and outbound proxy. Performs no I/O."""
        with self._token_lock:
            if credential != self._roblosecurity:
                self._xsrf_token = None
                self._token_state = TokenState.ABSENT
            self._roblosecurity = credential or None

        with self._client_lock:
            if proxy != self._proxy and self._client is not None:
                self._client.close()
                self._client = None
            self._proxy = proxy or None

    def close(self) -> None:
        with self._client_lock:
            if self._client is not None:
                self._client.close()
                self._client = None

    def __enter__(self) -> "RequestJar":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        with self._client_lock:
            if self._client is None:
                self._client = build_client(
                    timeout_seconds=self._settings.app.http_timeout_seconds,
                    proxy=self._proxy,
                    user_agent=self._settings.app.user_agent,
                    transport=self._transport,
                )
            return self._client

    def _cookie_headers(self) -> dict[str, str]:
        if not self._roblosecurity:
            return {}
        return {"Cookie": f"{CREDENTIAL_COOKIE}={self._roblosecurity};"}

    # =========================================================================
    # Anti-forgery token
    # =========================================================================

    def refresh_token(self) -> str:
        """Acquire a fresh anti-forgery token from the token endpoint and store it.

        Raises:
            AuthenticationError: If no credential is configured or the token endpoint answers 401.
            RateLimited: If the token endpoint answers 429 (not retried).
            TokenAcquisitionError: If no attempt (up to `auth.token_max_attempts`) returned the header.
            NetworkError: On transport failure.
        """
        auth = self._settings.auth
        with self._token_lock:
            if not self._roblosecurity:
                self._xsrf_token = None
                self._token_state = TokenState.ABSENT
                raise AuthenticationError("No session credential configured; cannot acquire an anti-forgery token.")

            self._token_state = TokenState.ACQUIRING
            max_attempts = int(auth.token_max_attempts)
            try:
                for attempt in range(1, max_attempts + 1):
                    response = self._send("POST", auth.token_url, headers=self._cookie_headers())
                    token = response.headers.get(auth.token_header)
                    if token:
                        self._xsrf_token = token
                        self._token_state = TokenState.PRESENT
                        logger.info("Acquired anti-forgery token (attempt %s/%s).", attempt, max_attempts)
                        return token
                    if response.status_code == 429:
                        raise self._rate_limited(response)
                    if response.status_code == 401:
                        raise AuthenticationError("Token endpoint rejected the session credential (HTTP 401).")
                    logger.warning(
                        "Token endpoint returned no %s header (status=%s, attempt %s/%s)",
                        auth.token_header,
                        response.status_code,
                        attempt,
                        max_attempts,
                    )
            except RbxError:
                self._xsrf_token = None
                self._token_state = TokenState.ABSENT
                raise

            self._xsrf_token = None
            self._token_state = TokenState.ABSENT
            raise TokenAcquisitionError(
                f"Anti-forgery token not returned after {max_attempts} attempts.",
                attempts=max_attempts,
            )

    def _ensure_token(self) -> None:
        with self._token_lock:
            if self._xsrf_token is None:
                self.refresh_token()

    def _refresh_after_invalidation(self, token_used: str | None) -> None:
        with self._token_lock:
            if self._xsrf_token is not None and self._xsrf_token != token_used:
                # Another caller already replaced the token this request was sent with.
                return
            self.refresh_token()

    def _signals_token_invalidation(self, envelope: ErrorEnvelope | None) -> bool:
        if envelope is None or not envelope.errors:
            return False
        message = envelope.errors[0].message.lower()
        return any(marker.lower() in message for marker in self._settings.auth.token_invalid_messages)

    # =========================================================================
    # Dispatch
    # =========================================================================

    def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        if self._limiter is not None:
            waited = self._limiter.acquire()
            if waited > 0:
                logger.warning("Client-side rate limit reached; waited %.2fs", waited)

        logger.debug("%s %s", method, url)
        try:
            return self._get_client().request(method, url, params=params or None, json=json, headers=headers)
        except httpx.RequestError as exc:
            raise NetworkError(f"{method} {url} failed: {exc}") from exc

    def _dispatch(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> tuple[httpx.Response, str | None]:
        method = method.upper()
        if method in MUTATING_METHODS and self._roblosecurity and self._xsrf_token is None:
            self._ensure_token()

        headers = self._cookie_headers()
        token = self._xsrf_token
        if token:
            headers[TOKEN_REQUEST_HEADER] = token
        if isinstance(json, ApiModel):
            json = json.to_wire()
        if json is not None:
            headers["Content-Type"] = "application/json"

        response = self._send(method, url, params=_clean_params(params), json=json, headers=headers)
        return response, token

    def request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request with session headers attached; no status interpretation.

        Raises:
            NetworkError: On transport failure.
        """
        response, _ = self._dispatch(method, url, params=params, json=json)
        return response

    def request_json(
        self,
        method: str,
        url: str,
        response_type: Any = None,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and decode a 2xx body as `response_type` (`None` skips decoding).

        A token-invalidation error envelope causes exactly one token refresh and one replay of
        the same verb; the replay's failure is raised as-is.

        Raises:
            RateLimited: On HTTP 429 (never retried here).
            RemoteError / AuthenticationError: On other non-2xx statuses.
            DecodeError: If the body does not match `response_type`.
        """
        replayed = False
        while True:
            response, token_used = self._dispatch(method, url, params=params, json=json)
            if response.is_success:
                return self._decode(response, response_type)
            if response.status_code == 429:
                raise self._rate_limited(response)

            envelope = self._parse_error_envelope(response)
            if not replayed and self._signals_token_invalidation(envelope):
                logger.warning(
                    "Anti-forgery token rejected for %s %s; refreshing and replaying once.",
                    method.upper(),
                    url,
                )
                replayed = True
                self._refresh_after_invalidation(token_used)
                continue
            raise self._error_from(response, envelope)

    # =========================================================================
    # Response interpretation
    # =========================================================================

    @staticmethod
    def _decode(response: httpx.Response, response_type: Any) -> Any:
        if response_type is None:
            return None
        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError(f"Response from {response.url} is not valid JSON: {exc}") from exc
        try:
            return _adapter(response_type).validate_python(payload)
        except ValueError as exc:
            raise DecodeError(
                f"Response from {response.url} does not match the expected shape.",
                details={"reason": str(exc)},
            ) from exc

    @staticmethod
    def _parse_error_envelope(response: httpx.Response) -> ErrorEnvelope | None:
        try:
            envelope = ErrorEnvelope.model_validate(response.json())
        except ValueError:
            return None
        return envelope if envelope.errors else None

    @staticmethod
    def _rate_limited(response: httpx.Response) -> RateLimited:
        retry_after = parse_retry_after_seconds(response.headers.get("Retry-After"))
        logger.warning("Rate limited by %s (retry_after=%s)", response.url.host, retry_after)
        return RateLimited("Too many requests.", retry_after=retry_after)

    @staticmethod
    def _error_from(response: httpx.Response, envelope: ErrorEnvelope | None) -> RbxError:
        status = response.status_code
        if envelope is not None:
            first = envelope.errors[0]
            return RemoteError(first.code, first.message, first.user_facing_message, status=status)
        if status in (401, 403):
            return AuthenticationError(f"HTTP {status}: credential missing or rejected.")
        return RemoteError(0, response.reason_phrase or f"HTTP {status}", status=status)

    def error_from_response(self, response: httpx.Response) -> RbxError:
        """Map a non-2xx raw response onto the error taxonomy."""
        if response.status_code == 429:
            return self._rate_limited(response)
        return self._error_from(response, self._parse_error_envelope(response))

    # =========================================================================
    # Verb helpers
    # =========================================================================

    def get_json(self, url: str, response_type: Any, *, params: dict[str, Any] | None = None) -> Any:
        return self.request_json("GET", url, response_type, params=params)

    def post_json(self, url: str, body: Any = None, response_type: Any = None, *, params: dict[str, Any] | None = None) -> Any:
        return self.request_json("POST", url, response_type, params=params, json=body)

    def patch_json(self, url: str, body: Any = None, response_type: Any = None, *, params: dict[str, Any] | None = None) -> Any:
        return self.request_json("PATCH", url, response_type, params=params, json=body)

    def delete_json(self, url: str, body: Any = None, response_type: Any = None, *, params: dict[str, Any] | None = None) -> Any:
        return self.request_json("DELETE", url, response_type, params=params, json=body)

    # =========================================================================
    # Pagination
    # =========================================================================

    def get_page(
        self,
        url: str,
        item_type: type[T],
        *,
        page_size: int,
        params: dict[str, Any] | None = None,
        cursor: str | None = None,
    ) -> PagedResponse[T]:
        """Fetch a single cursor page."""
        query = dict(params or {})
        query["limit"] = int(page_size)
        query["cursor"] = cursor or None
        return self.get_json(url, PagedResponse[item_type], params=query)

    def paginate(
        self,
        url: str,
        limit: PageLimit,
        item_type: type[T],
        *,
        params: dict[str, Any] | None = None,
        cursor: str | None = None,
    ) -> list[T]:
        """Return the items of a paged listing, eagerly materialized.

        A numeric `limit` issues one request of that size. `PageLimit.ALL` follows
        `nextPageCursor` with the largest page size until the service returns no cursor.
        """
        if not limit.is_all:
            return self.get_page(url, item_type, page_size=limit.value, params=params, cursor=cursor).data

        page_size = int(self._settings.paging.max_page_size)
        items: list[T] = []
        seen: set[str] = {cursor} if cursor else set()
        next_cursor = cursor
        while True:
            page = self.get_page(url, item_type, page_size=page_size, params=params, cursor=next_cursor)
            items.extend(page.data)
            next_cursor = page.next_page_cursor
            if not next_cursor:
                return items
            if next_cursor in seen:
                logger.warning("Cursor repeated while paging %s; stopping after %s items.", url, len(items))
                return items
            seen.add(next_cursor)
