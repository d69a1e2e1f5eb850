"""
rbxweb - typed client for the Roblox web API (groups, users, thumbnails).

Layers:
- core: request jar (session/transport), error taxonomy, HTTP helpers
- domain: shared wire models, envelopes and paging enums
- groups / users / thumbnails: endpoint bindings, one function per remote operation
"""

from rbxweb.core.errors import (
    AuthenticationError,
    DecodeError,
    InvalidArgument,
    NetworkError,
    RateLimited,
    RbxError,
    RemoteError,
    TokenAcquisitionError,
)
from rbxweb.core.jar import RequestJar, TokenState
from rbxweb.domain.models import PageLimit, SortOrder

__version__ = "0.1.0"
__all__ = [
    "AuthenticationError",
    "DecodeError",
    "InvalidArgument",
    "NetworkError",
    "PageLimit",
    "RateLimited",
    "RbxError",
    "RemoteError",
    "RequestJar",
    "SortOrder",
    "TokenAcquisitionError",
    "TokenState",
]
