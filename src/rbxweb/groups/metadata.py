"""Service-wide group limits and configuration metadata (no group id needed)."""

from __future__ import annotations

from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel


class GroupConfigurationMetadata(ApiModel):
    name_max_length: int
    description_max_length: int
    icon_max_file_size_mb: int
    cost: int
    is_using_two_step_webview_component: bool = False


class RecurringPayoutsConfigurationMetadata(ApiModel):
    max_payout_partners: int


class RoleConfigurationMetadata(ApiModel):
    name_max_length: int
    description_max_length: int
    limit: int
    cost: int
    min_rank: int
    max_rank: int


class NameChangeConfigurationMetadata(ApiModel):
    cost: int
    cooldown_in_days: int
    ownership_cooldown_in_days: int


class GroupConfigMetadata(ApiModel):
    group_configuration: GroupConfigurationMetadata
    recurring_payouts_configuration: RecurringPayoutsConfigurationMetadata
    role_configuration: RoleConfigurationMetadata
    group_name_change_configuration: NameChangeConfigurationMetadata | None = None
    is_premium_payouts_enabled: bool = False
    is_default_emblem_policy_enabled: bool = False


class GroupMetadata(ApiModel):
    group_limit: int
    current_group_count: int
    group_status_max_length: int
    group_post_max_length: int
    is_group_wall_notifications_enabled: bool = False
    group_wall_notifications_subscribe_interval_in_milliseconds: int = 0
    are_profile_groups_hidden: bool = False
    is_group_details_policy_enabled: bool = False
    show_previous_group_names: bool = False


def config_metadata(jar: RequestJar) -> GroupConfigMetadata:
    url = jar.endpoint("groups", "/v1/groups/configuration/metadata")
    return jar.get_json(url, GroupConfigMetadata)


def metadata(jar: RequestJar) -> GroupMetadata:
    url = jar.endpoint("groups", "/v1/groups/metadata")
    return jar.get_json(url, GroupMetadata)
