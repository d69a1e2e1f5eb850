"""Pending join requests for groups that require approval."""

from __future__ import annotations

from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, MinimalGroupUser, PageLimit, SortOrder


class JoinRequest(ApiModel):
    requester: MinimalGroupUser
    created: str


def join_requests(
    jar: RequestJar,
    group_id: int,
    limit: PageLimit,
    sort_order: SortOrder | None = None,
) -> list[JoinRequest]:
    """Gets pending join requests for a group.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 19: You have insufficient permissions for this request.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/join-requests")
    return jar.paginate(url, limit, JoinRequest, params={"sortOrder": sort_order or SortOrder.ASC})


def join_request(jar: RequestJar, group_id: int, user_id: int) -> JoinRequest | None:
    """Gets one user's pending join request; None when there is none."""
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/join-requests/users/{user_id}")
    return jar.get_json(url, JoinRequest | None)


def accept_join_requests(jar: RequestJar, group_id: int, user_ids: list[int]) -> None:
    """Accepts a batch of join requests.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 3: The user is invalid or does not exist.
    - 6: You are already in the maximum number of groups.
    - 18: The operation is temporarily unavailable. Please try again later.
    - 19: You have insufficient permissions for this request.
    - 20: The group join request is invalid.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/join-requests")
    jar.post_json(url, {"userIds": [int(u) for u in user_ids]})


def decline_join_requests(jar: RequestJar, group_id: int, user_ids: list[int]) -> None:
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/join-requests")
    jar.delete_json(url, {"userIds": [int(u) for u in user_ids]})


def accept_join_request(jar: RequestJar, group_id: int, user_id: int) -> None:
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/join-requests/users/{user_id}")
    jar.post_json(url)


def decline_join_request(jar: RequestJar, group_id: int, user_id: int) -> None:
    """Declines one user's join request.

    Error codes:
    - 3: The user is invalid or does not exist.
    - 4: You do not have permission to manage this member.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/join-requests/users/{user_id}")
    jar.delete_json(url)
