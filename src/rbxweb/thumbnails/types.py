"""Thumbnail request knobs and the thumbnail record returned by every thumbnail endpoint."""

from __future__ import annotations

from enum import Enum

from rbxweb.domain.models import ApiModel


class ThumbnailSize(str, Enum):
    """All sizes the service knows; each endpoint accepts only a subset."""

    SIZE_30X30 = "30x30"
    SIZE_42X42 = "42x42"
    SIZE_50X50 = "50x50"
    SIZE_60X62 = "60x62"
    SIZE_75X75 = "75x75"
    SIZE_110X110 = "110x110"
    SIZE_140X140 = "140x140"
    SIZE_150X150 = "150x150"
    SIZE_160X100 = "160x100"
    SIZE_160X600 = "160x600"
    SIZE_250X250 = "250x250"
    SIZE_256X144 = "256x144"
    SIZE_300X250 = "300x250"
    SIZE_304X166 = "304x166"
    SIZE_384X216 = "384x216"
    SIZE_396X216 = "396x216"
    SIZE_420X420 = "420x420"
    SIZE_480X270 = "480x270"
    SIZE_512X512 = "512x512"
    SIZE_576X324 = "576x324"
    SIZE_700X700 = "700x700"
    SIZE_728X90 = "728x90"
    SIZE_768X432 = "768x432"
    SIZE_1200X80 = "1200x80"


class ThumbnailFormat(str, Enum):
    PNG = "Png"
    JPEG = "Jpeg"
    WEBP = "Webp"


class ThumbnailState(str, Enum):
    ERROR = "Error"
    COMPLETED = "Completed"
    IN_REVIEW = "InReview"
    PENDING = "Pending"
    BLOCKED = "Blocked"
    TEMPORARILY_UNAVAILABLE = "TemporarilyUnavailable"


class Thumbnail(ApiModel):
    target_id: int
    state: ThumbnailState
    # Only set once `state` is COMPLETED.
    image_url: str | None = None
    version: str | None = None
