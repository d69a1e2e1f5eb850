"""
Thumbnail and icon lookups.

All endpoints take comma-joined ids and answer `{ "data": [Thumbnail, ...] }`. Thumbnails
that are still rendering come back with `state=PENDING` and no image URL; callers poll again.

Error codes shared by these endpoints:
- 1: There are too many requested Ids.
- 2: The requested image format is invalid.
- 3: The requested size is invalid.
- 4: The requested Ids are invalid, of an invalid type or missing.
- 10: Circular thumbnail requests are not allowed.
"""

from __future__ import annotations

from typing import Any

from rbxweb.core.http import join_ids
from rbxweb.core.jar import RequestJar
from rbxweb.domain.models import DataWrapper
from rbxweb.thumbnails.types import Thumbnail, ThumbnailFormat, ThumbnailSize


def _fetch(jar: RequestJar, path: str, params: dict[str, Any]) -> list[Thumbnail]:
    url = jar.endpoint("thumbnails", path)
    return jar.get_json(url, DataWrapper[list[Thumbnail]], params=params).data


def asset_thumbnails(
    jar: RequestJar,
    asset_ids: list[int],
    size: ThumbnailSize = ThumbnailSize.SIZE_420X420,
    image_format: ThumbnailFormat = ThumbnailFormat.PNG,
    is_circular: bool = False,
) -> list[Thumbnail]:
    params = {
        "assetIds": join_ids(asset_ids),
        "returnPolicy": "PlaceHolder",
        "size": size,
        "format": image_format,
        "isCircular": is_circular,
    }
    return _fetch(jar, "/v1/assets", params)


def badge_icons(
    jar: RequestJar,
    badge_ids: list[int],
    image_format: ThumbnailFormat = ThumbnailFormat.PNG,
    is_circular: bool = False,
) -> list[Thumbnail]:
    """Badge icons only come in 150x150."""
    params = {
        "badgeIds": join_ids(badge_ids),
        "size": ThumbnailSize.SIZE_150X150,
        "format": image_format,
        "isCircular": is_circular,
    }
    return _fetch(jar, "/v1/badges/icons", params)


def developer_product_icons(
    jar: RequestJar,
    developer_product_ids: list[int],
    size: ThumbnailSize = ThumbnailSize.SIZE_150X150,
    image_format: ThumbnailFormat = ThumbnailFormat.PNG,
    is_circular: bool = False,
) -> list[Thumbnail]:
    params = {
        "developerProductIds": join_ids(developer_product_ids),
        "size": size,
        "format": image_format,
        "isCircular": is_circular,
    }
    return _fetch(jar, "/v1/developer-products/icons", params)


def game_pass_icons(
    jar: RequestJar,
    game_pass_ids: list[int],
    size: ThumbnailSize = ThumbnailSize.SIZE_150X150,
    image_format: ThumbnailFormat = ThumbnailFormat.PNG,
    is_circular: bool = False,
) -> list[Thumbnail]:
    params = {
        "gamePassIds": join_ids(game_pass_ids),
        "size": size,
        "format": image_format,
        "isCircular": is_circular,
    }
    return _fetch(jar, "/v1/game-passes", params)


def game_thumbnails(
    jar: RequestJar,
    universe_id: int,
    thumbnail_ids: list[int],
    size: ThumbnailSize = ThumbnailSize.SIZE_768X432,
    image_format: ThumbnailFormat = ThumbnailFormat.PNG,
    is_circular: bool = False,
) -> list[Thumbnail]:
    """Gets specific thumbnails of one experience (universe).

    Error codes (besides the shared ones):
    - 5: The requested universe does not exist.
    """
    params = {
        "thumbnailIds": join_ids(thumbnail_ids),
        "size": size,
        "format": image_format,
        "isCircular": is_circular,
    }
    return _fetch(jar, f"/v1/games/{universe_id}/thumbnails", params)
