"""
User lookups and the authenticated account.

`whoami`, `age_bracket`, `country_code` and `roles` need a credential on the jar; the
other lookups work anonymously.
"""

from __future__ import annotations

from pydantic import Field

from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, DataWrapper, PartialUser


class User(ApiModel):
    id: int
    name: str
    display_name: str
    description: str = ""
    created: str
    is_banned: bool = False
    external_app_display_name: str | None = None
    has_verified_badge: bool = False


class BulkUser(ApiModel):
    id: int
    name: str
    display_name: str
    has_verified_badge: bool = False


class BulkUserByUsername(BulkUser):
    requested_username: str | None = None


def user_by_id(jar: RequestJar, user_id: int) -> User:
    """Gets a user's profile by id.

    Error codes:
    - 3: The user id is invalid.
    """
    url = jar.endpoint("users", f"/v1/users/{user_id}")
    return jar.get_json(url, User)


def whoami(jar: RequestJar) -> PartialUser:
    """Gets the user the jar's credential belongs to."""
    url = jar.endpoint("users", "/v1/users/authenticated")
    return jar.get_json(url, PartialUser)


def bulk_users_by_id(jar: RequestJar, user_ids: list[int], exclude_banned_users: bool = False) -> list[BulkUser]:
    """Gets users by id in one call; unknown ids are omitted from the result."""
    url = jar.endpoint("users", "/v1/users")
    body = {"userIds": [int(u) for u in user_ids], "excludeBannedUsers": exclude_banned_users}
    return jar.post_json(url, body, DataWrapper[list[BulkUser]]).data


def bulk_users_by_username(
    jar: RequestJar, usernames: list[str], exclude_banned_users: bool = False
) -> list[BulkUserByUsername]:
    """Gets users by username in one call; unknown names are omitted from the result."""
    url = jar.endpoint("users", "/v1/usernames/users")
    body = {"usernames": list(usernames), "excludeBannedUsers": exclude_banned_users}
    return jar.post_json(url, body, DataWrapper[list[BulkUserByUsername]]).data


class AgeBracket(ApiModel):
    age_bracket: int


class CountryCode(ApiModel):
    country_code: str


class UserRoles(ApiModel):
    roles: list[str] = Field(default_factory=list)


def age_bracket(jar: RequestJar) -> AgeBracket:
    url = jar.endpoint("users", "/v1/users/authenticated/age-bracket")
    return jar.get_json(url, AgeBracket)


def country_code(jar: RequestJar) -> CountryCode:
    url = jar.endpoint("users", "/v1/users/authenticated/country-code")
    return jar.get_json(url, CountryCode)


def roles(jar: RequestJar) -> UserRoles:
    url = jar.endpoint("users", "/v1/users/authenticated/roles")
    return jar.get_json(url, UserRoles)
