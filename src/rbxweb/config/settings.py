"""
Client settings (Pydantic).

Settings are loaded from `src/rbxweb/config/defaults.yaml`, then optionally overridden by:
- an external YAML file via `RBXWEB_CONFIG_PATH`
- environment variables (`RBXWEB_LOG_LEVEL`, `RBXWEB_ROBLOSECURITY`, `RBXWEB_PROXY`)

Design rule:
- Hosts, token acquisition knobs and paging limits live in YAML, not in the bindings.
"""

from __future__ import annotations

import os
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from rbxweb.core.env import load_dotenv_if_present


def _read_package_yaml(filename: str) -> dict[str, Any]:
    """Read a YAML file packaged inside `rbxweb.config`."""
    text = resources.files("rbxweb.config").joinpath(filename).read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {filename}; expected a mapping.")
    return data


def _read_yaml_file(path: str | Path) -> dict[str, Any]:
    """Read a YAML file from disk and return its mapping root."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid YAML root object for {path}; expected a mapping.")
    return data


class AppSettings(BaseModel):
    name: str = "rbxweb"
    http_timeout_seconds: float = 15
    log_level: str = "INFO"
    user_agent: str = "rbxweb/0.1.0"


class AuthSettings(BaseModel):
    roblosecurity: str | None = None
    proxy: str | None = None
    token_url: str = "https://auth.roblox.com/v2/logout"
    token_header: str = "x-csrf-token"
    token_max_attempts: int = Field(4, ge=1)
    token_invalid_messages: list[str] = Field(
        default_factory=lambda: ["token validation failed", "xsrf token invalid"]
    )


class EndpointSettings(BaseModel):
    groups: str = "https://groups.roblox.com"
    users: str = "https://users.roblox.com"
    thumbnails: str = "https://thumbnails.roblox.com"


class PagingSettings(BaseModel):
    max_page_size: int = Field(100, ge=1)


class RateLimitSettings(BaseModel):
    max_requests_per_minute: float | None = Field(default=None, gt=0)
    burst: float | None = Field(default=None, gt=0)


class Settings(BaseModel):
    app: AppSettings = Field(default_factory=AppSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    endpoints: EndpointSettings = Field(default_factory=EndpointSettings)
    paging: PagingSettings = Field(default_factory=PagingSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    """Overlay selected environment variables onto raw settings payload.

    Note: the whitelist is small on purpose; hosts and token knobs only come from YAML.
    """
    load_dotenv_if_present()
    data = dict(data)

    log_level = os.getenv("RBXWEB_LOG_LEVEL")
    if log_level:
        data.setdefault("app", {})["log_level"] = log_level

    roblosecurity = os.getenv("RBXWEB_ROBLOSECURITY")
    if roblosecurity:
        data.setdefault("auth", {})["roblosecurity"] = roblosecurity.strip()

    proxy = os.getenv("RBXWEB_PROXY")
    if proxy:
        data.setdefault("auth", {})["proxy"] = proxy.strip()

    return data


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load and validate settings without caching (explicit path wins over env)."""
    load_dotenv_if_present()
    path = config_path or os.getenv("RBXWEB_CONFIG_PATH")
    raw = _read_yaml_file(path) if path else _read_package_yaml("defaults.yaml")
    raw = _apply_env_overrides(raw)
    return Settings.model_validate(raw)


@lru_cache
def get_settings() -> Settings:
    """Load and validate settings (cached)."""
    return load_settings()


@lru_cache
def get_logging_config() -> dict[str, Any]:
    """Load logging configuration (cached)."""
    return _read_package_yaml("logging.yaml")
