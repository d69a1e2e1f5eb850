"""
Group search.

`search` returns the raw cursor page (keyword echo + cursors) so callers can continue a
search themselves; the service forbids unbounded paging here.
"""

from __future__ import annotations

from pydantic import Field

from rbxweb.core.errors import InvalidArgument
from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, DataWrapper, PageLimit


class SearchGroup(ApiModel):
    id: int
    name: str
    description: str | None = None
    member_count: int = 0
    previous_name: str | None = None
    public_entry_allowed: bool = False
    created: str | None = None
    updated: str | None = None
    has_verified_badge: bool = False


class MinimalSearchGroup(ApiModel):
    id: int
    name: str
    member_count: int = 0
    has_verified_badge: bool = False


class GroupSearchResponse(ApiModel):
    keyword: str | None = None
    next_page_cursor: str | None = None
    previous_page_cursor: str | None = None
    results: list[SearchGroup] = Field(default_factory=list, alias="data")


def search(
    jar: RequestJar,
    keyword: str,
    *,
    prioritize_exact_match: bool | None = None,
    limit: PageLimit | None = None,
    cursor: str | None = None,
) -> GroupSearchResponse:
    """Searches groups by keyword.

    Error codes:
    - 2: Search term not appropriate.
    - 3: Search term was left empty.
    - 4: Search terms can be 2 to 50 characters long.
    """
    if limit is not None and limit.is_all:
        raise InvalidArgument("Group search does not support PageLimit.ALL; follow next_page_cursor instead.")

    url = jar.endpoint("groups", "/v1/groups/search")
    params = {
        "keyword": keyword,
        "prioritizeExactMatch": prioritize_exact_match,
        "limit": limit.value if limit is not None else None,
        "cursor": cursor,
    }
    return jar.get_json(url, GroupSearchResponse, params=params)


def search_lookup(jar: RequestJar, group_name: str) -> list[MinimalSearchGroup]:
    """Looks up groups by exact name."""
    url = jar.endpoint("groups", "/v1/groups/search/lookup")
    return jar.get_json(url, DataWrapper[list[MinimalSearchGroup]], params={"groupName": group_name}).data
