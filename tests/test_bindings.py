import json

import httpx
import pytest

from rbxweb.core.errors import InvalidArgument, RemoteError
from rbxweb.domain.models import PageLimit
from rbxweb.groups import groups, join_requests, primary, search, social_links
from rbxweb.groups.groups import UpdateGroupSettingsRequest
from rbxweb.groups.social_links import SocialLink, SocialLinkType
from rbxweb.thumbnails import thumbnails
from rbxweb.thumbnails.types import ThumbnailFormat, ThumbnailState
from rbxweb.users import display_names, users

GROUP = {
    "id": 7,
    "name": "Builders",
    "description": "We build things",
    "owner": {"userId": 1, "username": "founder", "displayName": "Founder", "hasVerifiedBadge": True},
    "shout": None,
    "memberCount": 1200,
    "isBuildersClubOnly": False,
    "publicEntryAllowed": True,
    "hasVerifiedBadge": False,
}


class Recorder:
    def __init__(self, status: int = 200, body=None):
        self.status = status
        self.body = {} if body is None else body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def test_group_by_id_decodes_camel_case_fields(make_jar):
    recorder = Recorder(body=GROUP)
    jar = make_jar(recorder)

    group = groups.group_by_id(jar, 7)

    assert recorder.last.url.host == "groups.roblox.com"
    assert recorder.last.url.path == "/v1/groups/7"
    assert group.member_count == 1200
    assert group.public_entry_allowed is True
    assert group.owner is not None and group.owner.display_name == "Founder"
    assert group.owner.has_verified_badge is True
    assert group.shout is None


def test_update_settings_sends_only_set_fields(make_jar):
    recorder = Recorder()
    jar = make_jar(recorder)

    groups.update_settings(jar, 7, UpdateGroupSettingsRequest(is_approval_required=True))

    assert recorder.last.method == "PATCH"
    assert recorder.last.url.path == "/v1/groups/7/settings"
    assert json.loads(recorder.last.content) == {"isApprovalRequired": True}


def test_update_description_returns_stored_text(make_jar):
    recorder = Recorder(body={"newDescription": "filtered ###"})
    jar = make_jar(recorder)

    assert groups.update_description(jar, 7, "filtered text") == "filtered ###"
    assert json.loads(recorder.last.content) == {"description": "filtered text"}


def test_social_links_round_trip(make_jar):
    link = {"id": 3, "type": "Discord", "url": "https://discord.gg/x", "title": "Chat"}
    recorder = Recorder(body={"data": [link]})
    jar = make_jar(recorder)

    links = social_links.social_links(jar, 7)

    assert links == [SocialLink.model_validate(link)]
    assert links[0].link_type is SocialLinkType.DISCORD


def test_add_social_link_omits_unset_id(make_jar):
    recorder = Recorder(body={"id": 42, "type": "YouTube", "url": "https://youtube.com/x", "title": "Videos"})
    jar = make_jar(recorder)

    created = social_links.add_social_link(
        jar, 7, SocialLink(link_type=SocialLinkType.YOUTUBE, url="https://youtube.com/x", title="Videos")
    )

    assert json.loads(recorder.last.content) == {"type": "YouTube", "url": "https://youtube.com/x", "title": "Videos"}
    assert created.id == 42


def test_update_social_link_requires_id(make_jar):
    recorder = Recorder()
    jar = make_jar(recorder)

    with pytest.raises(InvalidArgument):
        social_links.update_social_link(jar, 7, SocialLink(link_type="Twitch", url="https://twitch.tv/x", title="Live"))
    assert recorder.requests == []


def test_primary_group_null_body_is_none(make_jar):
    jar = make_jar(lambda request: httpx.Response(200, text="null"))
    assert primary.primary_group(jar, 1) is None


def test_primary_group_decodes_group_with_role(make_jar):
    body = {"group": GROUP, "role": {"id": 50, "name": "Member", "rank": 1}, "isPrimaryGroup": True}
    recorder = Recorder(body=body)
    jar = make_jar(recorder)

    result = primary.primary_group(jar, 1)

    assert recorder.last.url.path == "/v1/users/1/groups/primary/role"
    assert result is not None and result.group.id == 7 and result.role.rank == 1


def test_set_primary_group_posts_group_id(make_jar):
    recorder = Recorder()
    jar = make_jar(recorder)

    primary.set_primary_group(jar, 7)

    assert (recorder.last.method, recorder.last.url.path) == ("POST", "/v1/user/groups/primary")
    assert json.loads(recorder.last.content) == {"groupId": 7}


def test_join_request_missing_is_none(make_jar):
    jar = make_jar(lambda request: httpx.Response(200, text="null"))
    assert join_requests.join_request(jar, 7, 1) is None


def test_decline_join_requests_sends_user_ids_with_delete(make_jar):
    recorder = Recorder()
    jar = make_jar(recorder)

    join_requests.decline_join_requests(jar, 7, [1, 2])

    assert recorder.last.method == "DELETE"
    assert json.loads(recorder.last.content) == {"userIds": [1, 2]}


def test_group_search_maps_data_to_results(make_jar):
    recorder = Recorder(
        body={"keyword": "build", "nextPageCursor": "n1", "data": [{"id": 7, "name": "Builders", "memberCount": 3}]}
    )
    jar = make_jar(recorder)

    page = search.search(jar, "build", limit=PageLimit.LIMIT_10)

    assert dict(recorder.last.url.params) == {"keyword": "build", "limit": "10"}
    assert page.next_page_cursor == "n1"
    assert [g.name for g in page.results] == ["Builders"]


def test_group_search_rejects_all(make_jar):
    jar = make_jar(Recorder())
    with pytest.raises(InvalidArgument):
        search.search(jar, "build", limit=PageLimit.ALL)


def test_bulk_users_by_id_posts_ids(make_jar):
    recorder = Recorder(body={"data": [{"id": 1, "name": "a", "displayName": "A"}]})
    jar = make_jar(recorder)

    found = users.bulk_users_by_id(jar, [1, 2])

    assert recorder.last.url.host == "users.roblox.com"
    assert json.loads(recorder.last.content) == {"userIds": [1, 2], "excludeBannedUsers": False}
    assert [u.name for u in found] == ["a"]


def test_user_by_id(make_jar):
    body = {
        "id": 1,
        "name": "builderman",
        "displayName": "Builderman",
        "description": "",
        "created": "2006-02-27T21:06:40.3Z",
        "isBanned": False,
        "hasVerifiedBadge": True,
    }
    jar = make_jar(Recorder(body=body))

    user = users.user_by_id(jar, 1)

    assert user.display_name == "Builderman"
    assert user.has_verified_badge is True


def test_thumbnails_send_joined_ids_and_wire_enums(make_jar):
    body = {
        "data": [
            {"targetId": 1, "state": "Completed", "imageUrl": "https://tr.rbxcdn.com/a", "version": "TN3"},
            {"targetId": 2, "state": "Pending", "imageUrl": None},
        ]
    }
    recorder = Recorder(body=body)
    jar = make_jar(recorder)

    result = thumbnails.asset_thumbnails(jar, [1, 2], image_format=ThumbnailFormat.WEBP)

    params = recorder.last.url.params
    assert recorder.last.url.host == "thumbnails.roblox.com"
    assert params["assetIds"] == "1,2"
    assert params["size"] == "420x420"
    assert params["format"] == "Webp"
    assert params["isCircular"] == "false"
    assert [t.state for t in result] == [ThumbnailState.COMPLETED, ThumbnailState.PENDING]
    assert result[1].image_url is None


def test_badge_icons_use_icon_endpoint(make_jar):
    recorder = Recorder(body={"data": []})
    jar = make_jar(recorder)

    thumbnails.badge_icons(jar, [5])

    assert recorder.last.url.path == "/v1/badges/icons"
    assert recorder.last.url.params["size"] == "150x150"


def test_display_name_validation_accepts_on_200(make_jar):
    recorder = Recorder()
    jar = make_jar(recorder)

    result = display_names.validate_display_name(jar, "Builder")

    assert result.is_valid is True
    assert recorder.last.url.params["birthdate"] == display_names.PLACEHOLDER_BIRTHDATE


def test_display_name_validation_reports_rejection_on_400(make_jar):
    body = {"errors": [{"code": 1, "message": "Display name is too short"}]}
    jar = make_jar(Recorder(status=400, body=body))

    result = display_names.validate_display_name_for_user(jar, "a", 1)

    assert result.is_valid is False
    assert [e.code for e in result.errors] == [1]


def test_display_name_validation_raises_on_other_errors(make_jar):
    jar = make_jar(Recorder(status=500, body={"errors": [{"code": 0, "message": "InternalServerError"}]}))
    with pytest.raises(RemoteError):
        display_names.validate_display_name(jar, "Builder")
