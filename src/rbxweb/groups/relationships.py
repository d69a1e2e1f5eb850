"""
Group relationships (enemies and allies).

`RelationshipType.ALL` is a compound value: listing and batch operations split it into one
call per concrete kind (enemies first, then allies) and merge the results. Operations that
target a single relationship reject it with `InvalidArgument`.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from rbxweb.core.errors import InvalidArgument
from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel
from rbxweb.groups.groups import Group


class RelationshipType(str, Enum):
    ENEMY = "Enemies"
    ALLY = "Allies"
    ALL = "All"

    @property
    def concrete(self) -> tuple["RelationshipType", ...]:
        if self is RelationshipType.ALL:
            return (RelationshipType.ENEMY, RelationshipType.ALLY)
        return (self,)


class GroupRelationships(ApiModel):
    group_id: int
    relationship_type: RelationshipType
    total_group_count: int = 0
    groups: list[Group] = Field(default_factory=list, alias="relatedGroups")
    next_row_index: int | None = None


MAX_ROWS = 1000


def _require_concrete(relationship_type: RelationshipType) -> None:
    if relationship_type is RelationshipType.ALL:
        raise InvalidArgument("This operation needs a concrete relationship type (Enemies or Allies).")


def _merge(group_id: int, parts: list[GroupRelationships]) -> GroupRelationships:
    groups: list[Group] = []
    for part in parts:
        groups.extend(part.groups)
    return GroupRelationships(
        group_id=group_id,
        relationship_type=RelationshipType.ALL,
        total_group_count=sum(part.total_group_count for part in parts),
        groups=groups,
    )


def _list(jar: RequestJar, group_id: int, relationship_type: RelationshipType, suffix: str) -> GroupRelationships:
    if relationship_type is RelationshipType.ALL:
        parts = [_list(jar, group_id, kind, suffix) for kind in relationship_type.concrete]
        return _merge(group_id, parts)

    url = jar.endpoint("groups", f"/v1/groups/{group_id}/relationships/{relationship_type.value}{suffix}")
    params = {"model.startRowIndex": 0, "model.maxRows": MAX_ROWS}
    return jar.get_json(url, GroupRelationships, params=params)


def relationships(jar: RequestJar, group_id: int, relationship_type: RelationshipType) -> GroupRelationships:
    """Gets the groups that are enemies, allies or both of a group.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 4: Group relationship type or request type is invalid.
    - 8: Invalid or missing pagination parameters.
    """
    return _list(jar, group_id, relationship_type, "")


def enemies(jar: RequestJar, group_id: int) -> GroupRelationships:
    return relationships(jar, group_id, RelationshipType.ENEMY)


def allies(jar: RequestJar, group_id: int) -> GroupRelationships:
    return relationships(jar, group_id, RelationshipType.ALLY)


def relationship_requests(jar: RequestJar, group_id: int, relationship_type: RelationshipType) -> GroupRelationships:
    """Gets pending enemy, ally or both relationship requests sent to a group.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 4: Group relationship type or request type is invalid.
    - 5: You don't have permission to manage this group's relationships.
    - 8: Invalid or missing pagination parameters.
    """
    return _list(jar, group_id, relationship_type, "/requests")


def enemy_requests(jar: RequestJar, group_id: int) -> GroupRelationships:
    return relationship_requests(jar, group_id, RelationshipType.ENEMY)


def ally_requests(jar: RequestJar, group_id: int) -> GroupRelationships:
    return relationship_requests(jar, group_id, RelationshipType.ALLY)


# =============================================================================
# Batch request management
# =============================================================================


def accept_requests(
    jar: RequestJar, group_id: int, group_ids: list[int], relationship_type: RelationshipType
) -> None:
    """Accepts a batch of relationship requests."""
    for kind in relationship_type.concrete:
        url = jar.endpoint("groups", f"/v1/groups/{group_id}/relationships/{kind.value}/requests")
        jar.post_json(url, {"groupIds": [int(g) for g in group_ids]})


def decline_requests(
    jar: RequestJar, group_id: int, group_ids: list[int], relationship_type: RelationshipType
) -> None:
    """Declines a batch of relationship requests."""
    for kind in relationship_type.concrete:
        url = jar.endpoint("groups", f"/v1/groups/{group_id}/relationships/{kind.value}/requests")
        jar.delete_json(url, {"groupIds": [int(g) for g in group_ids]})


# =============================================================================
# Single relationship management
# =============================================================================


def accept_request(
    jar: RequestJar, group_id: int, related_group_id: int, relationship_type: RelationshipType
) -> None:
    _require_concrete(relationship_type)
    url = jar.endpoint(
        "groups", f"/v1/groups/{group_id}/relationships/{relationship_type.value}/requests/{related_group_id}"
    )
    jar.post_json(url)


def decline_request(
    jar: RequestJar, group_id: int, related_group_id: int, relationship_type: RelationshipType
) -> None:
    _require_concrete(relationship_type)
    url = jar.endpoint(
        "groups", f"/v1/groups/{group_id}/relationships/{relationship_type.value}/requests/{related_group_id}"
    )
    jar.delete_json(url)


def remove(jar: RequestJar, group_id: int, target_group_id: int, relationship_type: RelationshipType) -> None:
    """Removes a group from another group's relationship list.

    Error codes:
    - 2: Invalid group.
    - 3: Target group is invalid or does not exist.
    - 8: You are blocked from communicating with this user.
    - 11: Relationship does not exist.
    """
    _require_concrete(relationship_type)
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/relationships/{relationship_type.value}/{target_group_id}")
    jar.delete_json(url)


def remove_enemy(jar: RequestJar, group_id: int, target_group_id: int) -> None:
    remove(jar, group_id, target_group_id, RelationshipType.ENEMY)


def remove_ally(jar: RequestJar, group_id: int, target_group_id: int) -> None:
    remove(jar, group_id, target_group_id, RelationshipType.ALLY)


def send_request(jar: RequestJar, group_id: int, target_group_id: int, relationship_type: RelationshipType) -> None:
    """Sends a relationship request to a group (declares enmity for `ENEMY`).

    Error codes:
    - 1: Group relationship type or request type is invalid.
    - 2: Invalid group.
    - 3: Target group is invalid or does not exist.
    - 4: Your group cannot establish a relationship with itself.
    - 5: Your group does not allow enemy declarations.
    - 6: Other group does not allow enemy declarations.
    - 7: Your group already has a relationship with the target group.
    - 8: You are blocked from communicating with this user.
    - 9: Insufficient permissions.
    """
    _require_concrete(relationship_type)
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/relationships/{relationship_type.value}/{target_group_id}")
    jar.post_json(url)


def send_enemy_request(jar: RequestJar, group_id: int, target_group_id: int) -> None:
    send_request(jar, group_id, target_group_id, RelationshipType.ENEMY)


def send_ally_request(jar: RequestJar, group_id: int, target_group_id: int) -> None:
    send_request(jar, group_id, target_group_id, RelationshipType.ALLY)
