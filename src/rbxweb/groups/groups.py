"""
Group info, settings and history.

Bindings here map one endpoint each; error codes listed in docstrings are the
`RemoteError.code` values the service documents for that endpoint.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, MinimalGroupUser, PageLimit, SortOrder
from rbxweb.groups.roles import GroupRole


class GroupShout(ApiModel):
    body: str = ""
    poster: MinimalGroupUser | None = None
    created: str
    updated: str


class Group(ApiModel):
    id: int
    name: str
    description: str = ""
    owner: MinimalGroupUser | None = None
    shout: GroupShout | None = None
    member_count: int = 0
    is_builders_club_only: bool = False
    public_entry_allowed: bool = False
    is_locked: bool | None = None
    has_verified_badge: bool = False


def group_by_id(jar: RequestJar, group_id: int) -> Group:
    """Gets a group by its group ID.

    Error codes:
    - 1: Group is invalid or does not exist.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}")
    return jar.get_json(url, Group)


# =============================================================================
# Audit log
# =============================================================================


class AuditLogActionType(str, Enum):
    """Action filters accepted by the audit-log endpoint."""

    DELETE_POST = "DeletePost"
    REMOVE_MEMBER = "RemoveMember"
    ACCEPT_JOIN_REQUEST = "AcceptJoinRequest"
    DECLINE_JOIN_REQUEST = "DeclineJoinRequest"
    POST_STATUS = "PostStatus"
    CHANGE_RANK = "ChangeRank"
    BUY_AD = "BuyAd"
    SEND_ALLY_REQUEST = "SendAllyRequest"
    CREATE_ENEMY = "CreateEnemy"
    ACCEPT_ALLY_REQUEST = "AcceptAllyRequest"
    DECLINE_ALLY_REQUEST = "DeclineAllyRequest"
    DELETE_ALLY = "DeleteAlly"
    DELETE_ENEMY = "DeleteEnemy"
    ADD_GROUP_PLACE = "AddGroupPlace"
    REMOVE_GROUP_PLACE = "RemoveGroupPlace"
    CREATE_ITEMS = "CreateItems"
    CONFIGURE_ITEMS = "ConfigureItems"
    SPEND_GROUP_FUNDS = "SpendGroupFunds"
    CHANGE_OWNER = "ChangeOwner"
    DELETE = "Delete"
    ADJUST_CURRENCY_AMOUNTS = "AdjustCurrencyAmounts"
    ABANDON = "Abandon"
    CLAIM = "Claim"
    RENAME = "Rename"
    CHANGE_DESCRIPTION = "ChangeDescription"
    INVITE_TO_CLAN = "InviteToClan"
    KICK_FROM_CLAN = "KickFromClan"
    CANCEL_CLAN_INVITE = "CancelClanInvite"
    BUY_CLAN = "BuyClan"
    CREATE_GROUP_ASSET = "CreateGroupAsset"
    UPDATE_GROUP_ASSET = "UpdateGroupAsset"
    CONFIGURE_GROUP_ASSET = "ConfigureGroupAsset"
    REVERT_GROUP_ASSET = "RevertGroupAsset"
    CREATE_GROUP_DEVELOPER_PRODUCT = "CreateGroupDeveloperProduct"
    CONFIGURE_GROUP_GAME = "ConfigureGroupGame"
    LOCK = "Lock"
    UNLOCK = "Unlock"
    CREATE_GAME_PASS = "CreateGamePass"
    CREATE_BADGE = "CreateBadge"
    CONFIGURE_BADGE = "ConfigureBadge"
    SAVE_PLACE = "SavePlace"
    PUBLISH_PLACE = "PublishPlace"
    UPDATE_ROLESET_RANK = "UpdateRolesetRank"
    UPDATE_ROLESET_DATA = "UpdateRolesetData"


class AuditLogActor(ApiModel):
    user: MinimalGroupUser
    role: GroupRole | None = None


class AuditLogEntry(ApiModel):
    actor: AuditLogActor
    # Display text (e.g. "Delete Post"), not the filter value.
    action_type: str
    description: dict[str, Any] | None = None
    created: str


def audit_log(
    jar: RequestJar,
    group_id: int,
    limit: PageLimit,
    user_id: int | None = None,
    action_type: AuditLogActionType | None = None,
    sort_order: SortOrder | None = None,
    cursor: str | None = None,
) -> list[AuditLogEntry]:
    """Gets the audit log for a group.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 23: Insufficient permissions to complete the request.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/audit-log")
    params = {
        "userId": user_id,
        "actionType": action_type,
        "sortOrder": sort_order or SortOrder.ASC,
    }
    return jar.paginate(url, limit, AuditLogEntry, params=params, cursor=cursor)


class GroupNameHistoryEntry(ApiModel):
    name: str
    created: str


def name_history(
    jar: RequestJar,
    group_id: int,
    limit: PageLimit,
    sort_order: SortOrder | None = None,
) -> list[GroupNameHistoryEntry]:
    """Gets a group's previous names.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 23: Insufficient permissions to complete the request.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/name-history")
    return jar.paginate(url, limit, GroupNameHistoryEntry, params={"sortOrder": sort_order or SortOrder.ASC})


# =============================================================================
# Settings
# =============================================================================


class GroupSettings(ApiModel):
    is_approval_required: bool
    is_builders_club_required: bool = False
    are_enemies_allowed: bool = False
    are_group_funds_visible: bool = False
    are_group_games_visible: bool = False
    is_group_name_change_enabled: bool = False


class UpdateGroupSettingsRequest(ApiModel):
    """Fields left as None are not sent and keep their current value."""

    is_approval_required: bool | None = None
    are_enemies_allowed: bool | None = None
    are_group_funds_visible: bool | None = None
    are_group_games_visible: bool | None = None


def group_settings(jar: RequestJar, group_id: int) -> GroupSettings:
    """Gets a group's settings.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 23: Insufficient permissions to complete the request.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/settings")
    return jar.get_json(url, GroupSettings)


def update_settings(jar: RequestJar, group_id: int, request: UpdateGroupSettingsRequest) -> None:
    """Updates a group's settings.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 23: Insufficient permissions to complete the request.
    - 31: Service is currently unavailable.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/settings")
    jar.patch_json(url, request)


class GroupPolicy(ApiModel):
    can_view_group: bool
    group_id: int


class GroupPolicies(ApiModel):
    groups: list[GroupPolicy] = Field(default_factory=list)


def compliance(jar: RequestJar, group_ids: list[int]) -> GroupPolicies:
    """Gets whether the authenticated user may view each group (regional policy)."""
    url = jar.endpoint("groups", "/v1/groups/policies")
    return jar.post_json(url, {"groupIds": [int(g) for g in group_ids]}, GroupPolicies)


class _DescriptionResponse(ApiModel):
    new_description: str = ""


def update_description(jar: RequestJar, group_id: int, description: str) -> str:
    """Updates a group's description and returns the description as stored (filtered).

    Error codes:
    - 1: Group is invalid or does not exist.
    - 18: The description is too long.
    - 23: Insufficient permissions to complete the request.
    - 29: Your group description was empty.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/description")
    return jar.patch_json(url, {"description": description}, _DescriptionResponse).new_description


def update_shout(jar: RequestJar, group_id: int, message: str) -> GroupShout:
    """Sets a group's shout (status). An empty message clears it.

    Error codes:
    - 1: Group is invalid or does not exist.
    - 5: You are not authorized to set the status of this group.
    - 6: Group status is set too often.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/status")
    return jar.patch_json(url, {"message": message}, GroupShout)
