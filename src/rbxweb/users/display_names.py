"""
Display name validation and changes.

Validation endpoints answer HTTP 400 with an error envelope when a name is rejected. That
is a result, not a failure, so these bindings read the raw response instead of going
through `RequestJar.request_json`.
"""

from __future__ import annotations

from pydantic import Field

from rbxweb.core.errors import DecodeError
from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiErrorDetail, ApiModel, ErrorEnvelope

# Required by the anonymous validation endpoint; any adult birthdate is accepted.
PLACEHOLDER_BIRTHDATE = "1999-12-31T23:00:00.000Z"


class DisplayNameValidation(ApiModel):
    """Outcome of a validation call.

    Error codes (in `errors`):
    - 1: Display name is too short.
    - 2: Display name is too long.
    - 3: Display name contains invalid characters.
    - 4: Display name has been moderated.
    - 6: Request must contain a birthdate.
    """

    is_valid: bool
    errors: list[ApiErrorDetail] = Field(default_factory=list)


def _validate(jar: RequestJar, url: str, params: dict[str, str]) -> DisplayNameValidation:
    response = jar.request("GET", url, params=params)
    if response.status_code == 200:
        return DisplayNameValidation(is_valid=True)
    if response.status_code == 400:
        try:
            envelope = ErrorEnvelope.model_validate(response.json())
        except ValueError as exc:
            raise DecodeError(f"Display name validation returned an unreadable 400 body: {exc}") from exc
        return DisplayNameValidation(is_valid=False, errors=envelope.errors)
    raise jar.error_from_response(response)


def validate_display_name(jar: RequestJar, display_name: str) -> DisplayNameValidation:
    """Validates a display name for a new account."""
    url = jar.endpoint("users", "/v1/display-names/validate")
    return _validate(jar, url, {"displayName": display_name, "birthdate": PLACEHOLDER_BIRTHDATE})


def validate_display_name_for_user(jar: RequestJar, display_name: str, user_id: int) -> DisplayNameValidation:
    """Validates a display name for an existing account."""
    url = jar.endpoint("users", f"/v1/users/{user_id}/display-names/validate")
    return _validate(jar, url, {"displayName": display_name})


def set_display_name(jar: RequestJar, user_id: int, display_name: str) -> None:
    """Changes the authenticated user's display name (the service allows one change per week).

    Rejected names raise `RemoteError` with the validation error codes.
    """
    url = jar.endpoint("users", f"/v1/users/{user_id}/display-names")
    jar.patch_json(url, {"newDisplayName": display_name})
