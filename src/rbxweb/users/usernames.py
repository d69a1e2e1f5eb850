"""Username history and username search."""

from __future__ import annotations

from pydantic import Field

from rbxweb.core.errors import InvalidArgument
from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, PageLimit, SortOrder


class UsernameHistoryEntry(ApiModel):
    name: str


def username_history(
    jar: RequestJar,
    user_id: int,
    limit: PageLimit = PageLimit.ALL,
    sort_order: SortOrder | None = None,
) -> list[UsernameHistoryEntry]:
    """Gets a user's previous usernames (every page by default).

    Error codes:
    - 3: The user id is invalid.
    """
    url = jar.endpoint("users", f"/v1/users/{user_id}/username-history")
    return jar.paginate(url, limit, UsernameHistoryEntry, params={"sortOrder": sort_order or SortOrder.ASC})


class UsernameSearchEntry(ApiModel):
    id: int
    name: str
    display_name: str
    previous_usernames: list[str] = Field(default_factory=list)
    has_verified_badge: bool = False


def username_search(jar: RequestJar, keyword: str, limit: PageLimit) -> list[UsernameSearchEntry]:
    """Searches users by keyword. One page only: the service rejects unbounded search paging.

    Error codes:
    - 5: The keyword was filtered.
    - 6: The keyword is too short.
    """
    if limit.is_all:
        raise InvalidArgument("username_search does not support PageLimit.ALL.")
    url = jar.endpoint("users", "/v1/users/search")
    return jar.paginate(url, limit, UsernameSearchEntry, params={"keyword": keyword})
