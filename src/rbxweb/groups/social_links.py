"""Group social links."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from rbxweb.core.errors import InvalidArgument
from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import ApiModel, DataWrapper


class SocialLinkType(str, Enum):
    FACEBOOK = "Facebook"
    TWITTER = "Twitter"
    YOUTUBE = "YouTube"
    TWITCH = "Twitch"
    GOOGLE_PLUS = "GooglePlus"
    DISCORD = "Discord"
    ROBLOX_GROUP = "RobloxGroup"
    AMAZON = "Amazon"
    GUILDED = "Guilded"


class SocialLink(ApiModel):
    # Assigned by the service; leave unset when adding a link.
    id: int | None = None
    link_type: SocialLinkType = Field(alias="type")
    url: str
    title: str


def social_links(jar: RequestJar, group_id: int) -> list[SocialLink]:
    """Gets a group's social links.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 11: Social links cannot be processed as this time.
    - 13: Only users who are over thirteen years of age may view social links.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/social-links")
    return jar.get_json(url, DataWrapper[list[SocialLink]]).data


def add_social_link(jar: RequestJar, group_id: int, social_link: SocialLink) -> SocialLink:
    """Adds a social link to a group and returns it with its id.

    Error codes:
    - 1: The group is invalid or does not exist.
    - 2: You do not have permission to configure this social link.
    - 3: The social link title is too long.
    - 4: The social link title cannot be empty.
    - 5: The social link url cannot be empty.
    - 7: The request was null.
    - 9: The social link type is invalid.
    - 11: Social links cannot be processed as this time.
    - 12: The social link title was moderated.
    """
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/social-links")
    return jar.post_json(url, social_link, SocialLink)


def update_social_link(jar: RequestJar, group_id: int, social_link: SocialLink) -> None:
    """Updates an existing social link (matched by `social_link.id`)."""
    if social_link.id is None:
        raise InvalidArgument("social_link.id is required to update a social link.")
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/social-links/{social_link.id}")
    jar.patch_json(url, social_link)


def delete_social_link(jar: RequestJar, group_id: int, social_link_id: int) -> None:
    url = jar.endpoint("groups", f"/v1/groups/{group_id}/social-links/{social_link_id}")
    jar.delete_json(url)
