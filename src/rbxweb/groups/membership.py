"""
Group membership: the authenticated user's standing in a group, and member management.
"""

from __future__ import annotations

from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, DataWrapper, MinimalGroupUser
from rbxweb.groups.groups import Group
from rbxweb.groups.roles import GroupRole


class GroupPostPermissions(ApiModel):
    view_wall: bool = False
    post_to_wall: bool = False
    delete_from_wall: bool = False
    view_status: bool = False
    post_to_status: bool = False


class GroupMembershipPermissions(ApiModel):
    change_rank: bool = False
    invite_members: bool = False
    remove_members: bool = False


class GroupManagementPermissions(ApiModel):
    manage_relationships: bool = False
    manage_clan: bool = False
    view_audit_logs: bool = False


class GroupEconomyPermissions(ApiModel):
    spend_group_funds: bool = False
    advertise_group: bool = False
    create_items: bool = False
    manage_items: bool = False
    add_group_places: bool = False
    manage_group_games: bool = False
    view_group_payouts: bool = False
    view_analytics: bool = False


class GroupOpenCloudPermissions(ApiModel):
    use_cloud_authentication: bool = False
    administer_cloud_authentication: bool = False


class GroupPermissions(ApiModel):
    group_posts_permissions: GroupPostPermissions
    group_membership_permissions: GroupMembershipPermissions
    group_management_permissions: GroupManagementPermissions
    group_economy_permissions: GroupEconomyPermissions
    group_open_cloud_permissions: GroupOpenCloudPermissions | None = None


class UserRole(ApiModel):
    user: MinimalGroupUser
    role: GroupRole


class GroupMembership(ApiModel):
    group_id: int
    is_primary: bool = False
    is_pending_join: bool = False
    user_role: UserRole | None = None
    permissions: GroupPermissions | None = None
    are_group_games_visible: bool = False
    are_group_funds_visible: bool = False
    are_enemies_allowed: bool = False
    can_configure: bool = False


def membership(jar: RequestJar, group_id: int) -> GroupMembership:
    """Gets the authenticated user's membership info for a group.

    Error codes:
    - 1: Group is invalid or does not exist.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/membership")
    return jar.get_json(url, GroupMembership)


def remove_user(jar: RequestJar, group_id: int, user_id: int) -> None:
    """Removes a user from a group.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 3: The user is invalid or does not exist.
    - 4: You do not have permission to manage this member.
    - 18: The operation is temporarily unavailable. Please try again later.
    - 25: 2-Step Verification is required to make further transactions.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/users/{user_id}")
    jar.delete_json(url)


def set_user_role(jar: RequestJar, group_id: int, user_id: int, role_id: int) -> None:
    """Changes a member's role.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 2: The roleset is invalid or does not exist.
    - 3: The user is invalid or does not exist.
    - 4: You do not have permission to manage this member.
    - 26: You cannot change your own role.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/users/{user_id}")
    jar.patch_json(url, {"roleId": int(role_id)})


class GroupWithRole(ApiModel):
    group: Group
    role: GroupRole
    is_primary_group: bool | None = None


def user_group_roles(jar: RequestJar, user_id: int) -> list[GroupWithRole]:
    """Gets every group a user belongs to, with the user's role in each."""
    url = jar.endpoint("groups", f"/v2/users/{user_id}/groups/roles")
    return jar.get_json(url, DataWrapper[list[GroupWithRole]]).data
