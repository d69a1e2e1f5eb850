import json

import httpx

from rbxweb.core.errors import RateLimited
from rbxweb.domain.models import PageLimit, SortOrder
from rbxweb.groups import (
    groups,
    join_requests,
    membership,
    metadata,
    primary,
    relationships,
    revenue,
    roles,
    search,
    social_links,
    wall,
)
from rbxweb.groups.groups import AuditLogActionType
from rbxweb.groups.relationships import RelationshipType
from rbxweb.thumbnails import thumbnails
from rbxweb.thumbnails.types import ThumbnailState
from rbxweb.users import display_names, users

USER = {"userId": 2, "username": "mod", "displayName": "Mod"}


def _record(body=None, status: int = 200):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(status, json={} if body is None else body)

    return seen, handler


def test_audit_log_filters_and_decodes_entries(make_jar):
    entry = {
        "actor": {"user": USER, "role": {"id": 9, "name": "Admin", "rank": 254}},
        "actionType": "Delete Post",
        "description": {"PostDesc": "spam", "TargetId": 3},
        "created": "2024-01-01T00:00:00Z",
    }
    seen, handler = _record({"nextPageCursor": None, "data": [entry]})
    jar = make_jar(handler)

    log = groups.audit_log(
        jar, 7, PageLimit.LIMIT_25, user_id=2, action_type=AuditLogActionType.DELETE_POST, sort_order=SortOrder.DESC
    )

    params = seen[0].url.params
    assert seen[0].url.path == "/v1/groups/7/audit-log"
    assert params["userId"] == "2"
    assert params["actionType"] == "DeletePost"
    assert params["sortOrder"] == "Desc"
    assert params["limit"] == "25"
    assert log[0].actor.role is not None and log[0].actor.role.rank == 254
    assert log[0].description == {"PostDesc": "spam", "TargetId": 3}


def test_name_history_and_wall_posts_are_paged(make_jar):
    seen, handler = _record({"data": []})
    jar = make_jar(handler)

    groups.name_history(jar, 7, PageLimit.LIMIT_10)
    wall.wall_posts(jar, 7, PageLimit.LIMIT_50, cursor="w1")

    assert seen[0].url.path == "/v1/groups/7/name-history"
    assert seen[1].url.path == "/v1/groups/7/wall/posts"
    assert seen[1].url.params["cursor"] == "w1"
    assert seen[1].url.params["limit"] == "50"


def test_wall_deletions_use_delete(make_jar):
    seen, handler = _record()
    jar = make_jar(handler)

    wall.delete_wall_post(jar, 7, 100)
    wall.delete_wall_posts_by_user(jar, 7, 2)

    assert [(r.method, r.url.path) for r in seen] == [
        ("DELETE", "/v1/groups/7/wall/posts/100"),
        ("DELETE", "/v1/groups/7/wall/users/2/posts"),
    ]


def test_roles_unwraps_role_list(make_jar):
    body = {"groupId": 7, "roles": [{"id": 1, "name": "Guest", "rank": 0, "memberCount": 0}]}
    _, handler = _record(body)
    jar = make_jar(handler)

    result = roles.roles(jar, 7)

    assert [r.name for r in result] == ["Guest"]


def test_set_user_role_patches_role_id(make_jar):
    seen, handler = _record()
    jar = make_jar(handler)

    membership.set_user_role(jar, 7, 2, 55)
    membership.remove_user(jar, 7, 2)

    assert [(r.method, r.url.path) for r in seen] == [
        ("PATCH", "/v1/groups/7/users/2"),
        ("DELETE", "/v1/groups/7/users/2"),
    ]
    assert json.loads(seen[0].content) == {"roleId": 55}


def test_user_group_roles_uses_v2(make_jar):
    body = {
        "data": [
            {
                "group": {"id": 7, "name": "Builders", "memberCount": 3},
                "role": {"id": 1, "name": "Member", "rank": 1},
            }
        ]
    }
    seen, handler = _record(body)
    jar = make_jar(handler)

    result = membership.user_group_roles(jar, 2)

    assert seen[0].url.path == "/v2/users/2/groups/roles"
    assert result[0].group.name == "Builders"
    assert result[0].is_primary_group is None


def test_compliance_posts_group_ids(make_jar):
    seen, handler = _record({"groups": [{"canViewGroup": True, "groupId": 7}]})
    jar = make_jar(handler)

    policies = groups.compliance(jar, [7])

    assert (seen[0].method, seen[0].url.path) == ("POST", "/v1/groups/policies")
    assert json.loads(seen[0].content) == {"groupIds": [7]}
    assert policies.groups[0].can_view_group is True


def test_update_shout_returns_new_shout(make_jar):
    body = {"body": "hello", "poster": USER, "created": "2024-01-01", "updated": "2024-01-02"}
    seen, handler = _record(body)
    jar = make_jar(handler)

    shout = groups.update_shout(jar, 7, "hello")

    assert seen[0].url.path == "/v1/groups/7/status"
    assert shout.poster is not None and shout.poster.username == "mod"


def test_recurring_payouts_and_restrictions(make_jar):
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/payouts"):
            return httpx.Response(200, json={"data": [{"user": USER, "percentage": 12.5}]})
        return httpx.Response(200, json={"canUseRecurringPayout": True, "canUseOneTimePayout": False})

    jar = make_jar(handler)

    assert revenue.recurring_payouts(jar, 7)[0].percentage == 12.5
    assert revenue.payout_restrictions(jar, 7).can_use_one_time_payout is False


def test_group_metadata(make_jar):
    body = {
        "groupLimit": 100,
        "currentGroupCount": 3,
        "groupStatusMaxLength": 255,
        "groupPostMaxLength": 500,
    }
    seen, handler = _record(body)
    jar = make_jar(handler)

    result = metadata.metadata(jar)

    assert seen[0].url.path == "/v1/groups/metadata"
    assert result.group_limit == 100


def test_bulk_users_by_username(make_jar):
    seen, handler = _record({"data": [{"requestedUsername": "Roblox", "id": 1, "name": "Roblox", "displayName": "Roblox"}]})
    jar = make_jar(handler)

    found = users.bulk_users_by_username(jar, ["Roblox"], exclude_banned_users=True)

    assert seen[0].url.path == "/v1/usernames/users"
    assert json.loads(seen[0].content) == {"usernames": ["Roblox"], "excludeBannedUsers": True}
    assert found[0].requested_username == "Roblox"


def test_authenticated_user_lookups(make_jar):
    answers = {
        "/v1/users/authenticated": {"id": 1, "name": "me", "displayName": "Me"},
        "/v1/users/authenticated/age-bracket": {"ageBracket": 0},
        "/v1/users/authenticated/country-code": {"countryCode": "US"},
        "/v1/users/authenticated/roles": {"roles": ["Soothsayer"]},
    }
    jar = make_jar(lambda request: httpx.Response(200, json=answers[request.url.path]), credential="cookie-value")

    assert users.whoami(jar).display_name == "Me"
    assert users.age_bracket(jar).age_bracket == 0
    assert users.country_code(jar).country_code == "US"
    assert users.roles(jar).roles == ["Soothsayer"]


def test_set_display_name_patches(make_jar):
    seen, handler = _record()
    jar = make_jar(handler)

    display_names.set_display_name(jar, 1, "NewName")

    assert (seen[0].method, seen[0].url.path) == ("PATCH", "/v1/users/1/display-names")
    assert json.loads(seen[0].content) == {"newDisplayName": "NewName"}


def test_game_thumbnails_path_and_default_size(make_jar):
    seen, handler = _record({"data": [{"targetId": 9, "state": "Completed", "imageUrl": "https://tr.rbxcdn.com/g"}]})
    jar = make_jar(handler)

    result = thumbnails.game_thumbnails(jar, 42, [9, 10])

    assert seen[0].url.path == "/v1/games/42/thumbnails"
    assert seen[0].url.params["thumbnailIds"] == "9,10"
    assert seen[0].url.params["size"] == "768x432"
    assert result[0].target_id == 9


def test_membership_decodes_permission_tree(make_jar):
    body = {
        "groupId": 7,
        "isPrimary": True,
        "isPendingJoin": False,
        "userRole": {"user": USER, "role": {"id": 9, "name": "Admin", "rank": 254}},
        "permissions": {
            "groupPostsPermissions": {"viewWall": True, "postToWall": True, "deleteFromWall": True},
            "groupMembershipPermissions": {"changeRank": True, "inviteMembers": False, "removeMembers": True},
            "groupManagementPermissions": {"manageRelationships": True, "viewAuditLogs": True},
            "groupEconomyPermissions": {"spendGroupFunds": False, "viewGroupPayouts": True},
            "groupOpenCloudPermissions": {"useCloudAuthentication": True},
        },
        "areGroupGamesVisible": True,
        "areGroupFundsVisible": False,
        "areEnemiesAllowed": True,
        "canConfigure": True,
    }
    seen, handler = _record(body)
    jar = make_jar(handler, credential="cookie-value")

    result = membership.membership(jar, 7)

    assert (seen[0].method, seen[0].url.path) == ("GET", "/v1/groups/7/membership")
    assert result.user_role is not None and result.user_role.role.rank == 254
    assert result.permissions is not None
    assert result.permissions.group_membership_permissions.remove_members is True
    assert result.permissions.group_economy_permissions.view_group_payouts is True
    assert result.permissions.group_open_cloud_permissions is not None
    assert result.permissions.group_open_cloud_permissions.use_cloud_authentication is True
    assert result.can_configure is True


def test_config_metadata(make_jar):
    body = {
        "groupConfiguration": {
            "nameMaxLength": 50,
            "descriptionMaxLength": 1000,
            "iconMaxFileSizeMb": 20,
            "cost": 100,
        },
        "recurringPayoutsConfiguration": {"maxPayoutPartners": 10},
        "roleConfiguration": {
            "nameMaxLength": 100,
            "descriptionMaxLength": 1000,
            "limit": 40,
            "cost": 25,
            "minRank": 0,
            "maxRank": 255,
        },
        "groupNameChangeConfiguration": {"cost": 100, "cooldownInDays": 90, "ownershipCooldownInDays": 90},
        "isPremiumPayoutsEnabled": True,
    }
    seen, handler = _record(body)
    jar = make_jar(handler)

    result = metadata.config_metadata(jar)

    assert seen[0].url.path == "/v1/groups/configuration/metadata"
    assert result.group_configuration.name_max_length == 50
    assert result.role_configuration.max_rank == 255
    assert result.group_name_change_configuration is not None
    assert result.group_name_change_configuration.cooldown_in_days == 90
    assert result.is_premium_payouts_enabled is True


def test_search_lookup_unwraps_data(make_jar):
    seen, handler = _record({"data": [{"id": 7, "name": "Builders", "memberCount": 3, "hasVerifiedBadge": True}]})
    jar = make_jar(handler)

    found = search.search_lookup(jar, "Builders")

    assert seen[0].url.path == "/v1/groups/search/lookup"
    assert seen[0].url.params["groupName"] == "Builders"
    assert [(g.id, g.has_verified_badge) for g in found] == [(7, True)]


def test_join_requests_listing(make_jar):
    body = {"nextPageCursor": None, "data": [{"requester": USER, "created": "2024-01-01T00:00:00Z"}]}
    seen, handler = _record(body)
    jar = make_jar(handler)

    pending = join_requests.join_requests(jar, 7, PageLimit.LIMIT_10, sort_order=SortOrder.DESC)

    assert seen[0].url.path == "/v1/groups/7/join-requests"
    assert seen[0].url.params["limit"] == "10"
    assert seen[0].url.params["sortOrder"] == "Desc"
    assert pending[0].requester.user_id == 2


def test_accept_join_requests_batch_and_single(make_jar):
    seen, handler = _record()
    jar = make_jar(handler)

    join_requests.accept_join_requests(jar, 7, [1, 2])
    join_requests.accept_join_request(jar, 7, 3)

    assert [(r.method, r.url.path) for r in seen] == [
        ("POST", "/v1/groups/7/join-requests"),
        ("POST", "/v1/groups/7/join-requests/users/3"),
    ]
    assert json.loads(seen[0].content) == {"userIds": [1, 2]}
    assert seen[1].content == b""


def test_delete_social_link(make_jar):
    seen, handler = _record()
    jar = make_jar(handler)

    social_links.delete_social_link(jar, 7, 3)

    assert (seen[0].method, seen[0].url.path) == ("DELETE", "/v1/groups/7/social-links/3")


def test_remove_primary_group(make_jar):
    seen, handler = _record()
    jar = make_jar(handler)

    primary.remove_primary_group(jar)

    assert (seen[0].method, seen[0].url.path) == ("DELETE", "/v1/user/groups/primary")


def test_developer_product_and_game_pass_icons(make_jar):
    seen, handler = _record({"data": [{"targetId": 5, "state": "Completed", "imageUrl": "https://tr.rbxcdn.com/i"}]})
    jar = make_jar(handler)

    products = thumbnails.developer_product_icons(jar, [5, 6])
    passes = thumbnails.game_pass_icons(jar, [8], is_circular=True)

    assert seen[0].url.path == "/v1/developer-products/icons"
    assert seen[0].url.params["developerProductIds"] == "5,6"
    assert seen[0].url.params["size"] == "150x150"
    assert seen[1].url.path == "/v1/game-passes"
    assert seen[1].url.params["gamePassIds"] == "8"
    assert seen[1].url.params["isCircular"] == "true"
    assert products[0].target_id == 5 and passes[0].state is ThumbnailState.COMPLETED


def test_batch_decline_with_all_deletes_both_kinds(make_jar):
    seen, handler = _record()
    jar = make_jar(handler)

    relationships.decline_requests(jar, 9, [11], RelationshipType.ALL)

    assert [(r.method, r.url.path) for r in seen] == [
        ("DELETE", "/v1/groups/9/relationships/Enemies/requests"),
        ("DELETE", "/v1/groups/9/relationships/Allies/requests"),
    ]
    assert all(json.loads(r.content) == {"groupIds": [11]} for r in seen)


def test_error_from_response_maps_429(make_jar):
    seen, handler = _record({"errors": [{"code": 0, "message": "Too many requests"}]}, status=429)
    jar = make_jar(handler)

    response = jar.request("GET", jar.endpoint("groups", "/v1/groups/7"))
    error = jar.error_from_response(response)

    assert isinstance(error, RateLimited)
    assert error.retry_after is None
