"""Pytest fixtures for Teamwork MCP tests."""
import json
import os
import sys

import httpx
import pytest

# Ensure the repository root is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from twapi import Engine
from twmcp import config as config_module
from twmcp.registry import Registry

SERVER = "https://example.teamwork.com"
TOKEN = "test-token-abc123"


class Upstream:
    """Recording stand-in for the Teamwork API, served through httpx.MockTransport.

    Replies are registered per (method, path); anything else gets ``200 {}``.
    """

    def __init__(self):
        self.requests = []
        self.routes = {}

    def reply(self, method, path, payload=None, status=200, content_type="application/json"):
        self.routes[(method, path)] = (status, payload, content_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, payload, content_type = self.routes.get(
            (request.method, request.url.path), (200, {}, "application/json")
        )
        if payload is None:
            content = b""
        elif isinstance(payload, bytes):
            content = payload
        else:
            content = json.dumps(payload).encode()
        headers = {"content-type": content_type} if content else {}
        return httpx.Response(status, content=content, headers=headers)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def upstream() -> Upstream:
    return Upstream()


@pytest.fixture
def engine(upstream: Upstream) -> Engine:
    """Engine bound to the recording upstream."""
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream.handler))
    return Engine(SERVER, TOKEN, client=client)


@pytest.fixture
def registry() -> Registry:
    """Catalog with every resource family registered."""
    from server import FAMILIES

    catalog = Registry()
    for family in FAMILIES:
        family.register(catalog)
    return catalog


@pytest.fixture
def teamwork_env(monkeypatch):
    """A valid environment for get_config()."""
    monkeypatch.setenv("TEAMWORK_SERVER", SERVER)
    monkeypatch.setenv("TEAMWORK_API_TOKEN", TOKEN)
    for name in ("PORT", "LOG_LEVEL", "AGENTIC_NAME", "AGENTIC_DSN"):
        monkeypatch.delenv(name, raising=False)
    config_module.clear_config_cache()
    yield
    config_module.clear_config_cache()
