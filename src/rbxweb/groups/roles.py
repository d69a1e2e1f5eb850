"""Group roles (rank sets) and their members."""

from __future__ import annotations

from pydantic import Field

from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, MinimalGroupUser, PageLimit, SortOrder


class GroupRole(ApiModel):
    id: int
    name: str
    description: str = ""
    rank: int
    member_count: int | None = None


class GroupRolesResponse(ApiModel):
    group_id: int
    roles: list[GroupRole] = Field(default_factory=list)


def roles(jar: RequestJar, group_id: int) -> list[GroupRole]:
    """Gets a group's roles, lowest rank first.

    Error codes:
    - 1: Group is invalid or does not exist.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/roles")
    return jar.get_json(url, GroupRolesResponse).roles


def users_on_role(
    jar: RequestJar,
    group_id: int,
    role_id: int,
    limit: PageLimit,
    sort_order: SortOrder | None = None,
) -> list[MinimalGroupUser]:
    """Gets the members holding a role.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 2: The roleset is invalid or does not exist.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/roles/{role_id}/users")
    return jar.paginate(url, limit, MinimalGroupUser, params={"sortOrder": sort_order or SortOrder.ASC})
