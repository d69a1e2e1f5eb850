"""Primary group (the group shown on a user's profile)."""

from __future__ import annotations

from rbxweb.core.jar import RequestJar
from rbxweb.groups.membership import GroupWithRole


def primary_group(jar: RequestJar, user_id: int) -> GroupWithRole | None:
    """Gets a user's primary group; None when the user has not set one.

    Error codes:
    - 4: User is invalid or does not exist.
    """
    url = jar.endpoint("groups", f"/v1/users/{user_id}/groups/primary/role")
    return jar.get_json(url, GroupWithRole | None)


def set_primary_group(jar: RequestJar, group_id: int) -> None:
    """Sets the authenticated user's primary group.

    Error codes:
    - 0: Authorization has been denied for this request.
    - 1: Group is invalid or does not exist.
    - 2: You aren't a member of the group specified.
    """
    url = jar.endpoint("groups", "/v1/user/groups/primary")
    jar.post_json(url, {"groupId": int(group_id)})


def remove_primary_group(jar: RequestJar) -> None:
    """Removes the authenticated user's primary group.

    Error codes:
    - 0: Authorization has been denied for this request.
    """
    url = jar.endpoint("groups", "/v1/user/groups/primary")
    jar.delete_json(url)
