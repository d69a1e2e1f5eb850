"""Shared fixtures: settings without ambient credentials and jars backed by `httpx.MockTransport`."""

from __future__ import annotations

import httpx
import pytest

from rbxweb.config.settings import Settings, get_settings
from rbxweb.core.jar import RequestJar

TOKEN_HOST = "auth.roblox.com"


@pytest.fixture
def settings() -> Settings:
    base = get_settings()
    auth = base.auth.model_copy(update={"roblosecurity": None, "proxy": None})
    return base.model_copy(update={"auth": auth})


@pytest.fixture
def make_jar(settings):
    jars: list[RequestJar] = []

    def _make(handler, credential: str | None = None) -> RequestJar:
        jar = RequestJar(settings, transport=httpx.MockTransport(handler))
        jar.configure(credential=credential)
        jars.append(jar)
        return jar

    yield _make
    for jar in jars:
        jar.close()


def is_token_request(request: httpx.Request) -> bool:
    return request.url.host == TOKEN_HOST and request.url.path == "/v2/logout"


def token_response(token: str) -> httpx.Response:
    return httpx.Response(
        403,
        headers={"x-csrf-token": token},
        json={"errors": [{"code": 0, "message": "Token Validation Failed"}]},
    )


def errors_body(code: int, message: str, user_message: str | None = None) -> dict:
    error = {"code": code, "message": message}
    if user_message is not None:
        error["userFacingMessage"] = user_message
    return {"errors": [error]}
