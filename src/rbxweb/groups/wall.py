"""Group wall posts (reading and moderation; posting is not supported)."""

from __future__ import annotations

from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, MinimalGroupUser, PageLimit, SortOrder


class WallPost(ApiModel):
    id: int
    poster: MinimalGroupUser | None = None
    body: str
    created: str
    updated: str


def wall_posts(
    jar: RequestJar,
    group_id: int,
    limit: PageLimit,
    sort_order: SortOrder | None = None,
    cursor: str | None = None,
) -> list[WallPost]:
    """Gets a group's wall posts.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 2: You do not have permission to access this group wall.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/wall/posts")
    return jar.paginate(url, limit, WallPost, params={"sortOrder": sort_order or SortOrder.ASC}, cursor=cursor)


def delete_wall_post(jar: RequestJar, group_id: int, post_id: int) -> None:
    """Deletes one wall post.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 2: You do not have permission to access this group wall.
    - 3: The group wall post id is invalid or does not exist.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/wall/posts/{post_id}")
    jar.delete_json(url)


def delete_wall_posts_by_user(jar: RequestJar, group_id: int, user_id: int) -> None:
    """Deletes every post by one user on a group's wall.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 2: You do not have permission to access this group wall.
    - 6: The user specified is invalid or does not exist.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/wall/users/{user_id}/posts")
    jar.delete_json(url)
