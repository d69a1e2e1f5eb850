"""
Shared domain models (Pydantic).

These types are the contract between the request jar and the endpoint bindings:
- the response envelopes the service wraps payloads in (`DataWrapper`, `PagedResponse`,
  `ErrorEnvelope`),
- paging knobs (`PageLimit`, `SortOrder`),
- small user shapes embedded in group payloads.

Wire fields are camelCase; models expose snake_case attributes through alias generation
and accept either spelling on input.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for every wire model (camelCase aliases, unknown fields ignored)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Serialize for a request body (aliases, unset optionals dropped)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class DataWrapper(ApiModel, Generic[T]):
    """`{ "data": ... }` envelope."""

    data: T


class PagedResponse(ApiModel, Generic[T]):
    """Cursor page envelope `{ nextPageCursor, previousPageCursor, data: [...] }`."""

    next_page_cursor: str | None = None
    previous_page_cursor: str | None = None
    data: list[T] = Field(default_factory=list)


class ApiErrorDetail(ApiModel):
    code: int = 0
    message: str = ""
    user_facing_message: str | None = None


class ErrorEnvelope(ApiModel):
    """`{ "errors": [{ code, message, userFacingMessage }] }` envelope."""

    errors: list[ApiErrorDetail] = Field(default_factory=list)


class PageLimit(Enum):
    """Page sizes the service accepts, plus `ALL` (follow cursors until exhausted)."""

    LIMIT_10 = 10
    LIMIT_25 = 25
    LIMIT_50 = 50
    LIMIT_100 = 100
    ALL = "all"

    @property
    def is_all(self) -> bool:
        return self is PageLimit.ALL


class SortOrder(str, Enum):
    ASC = "Asc"
    DESC = "Desc"


class MinimalGroupUser(ApiModel):
    """User shape embedded in group payloads (owner, poster, requestor...)."""

    user_id: int
    username: str
    display_name: str
    has_verified_badge: bool = False


class PartialUser(ApiModel):
    id: int
    name: str
    display_name: str
