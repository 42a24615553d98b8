"""Tests for the HTTP transport wrapper (http_app.py).

Uses Starlette's TestClient which works with any ASGI callable,
including our raw ASGI app (not just Starlette apps).
"""
import importlib

import pytest
from starlette.testclient import TestClient

INITIALIZE = {
    "jsonrpc": "2.0",
    "id": 1,
    "method": "initialize",
    "params": {
        "protocolVersion": "2025-03-26",
        "capabilities": {},
        "clientInfo": {"name": "test", "version": "0.1"},
    },
}


@pytest.fixture
def client(teamwork_env):
    """Create a test client for the raw ASGI app.

    We reload the module per test because StreamableHTTPSessionManager
    can only run() once per instance.
    """
    import http_app as mod

    importlib.reload(mod)
    with TestClient(mod.app, raise_server_exceptions=False) as c:
        yield c


def test_health_endpoint(client):
    """GET /health should return status ok, the server name and the catalog size."""
    import server

    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "server": "teamwork-mcp",
        "tools": len(server.registry.tools),
    }


def test_not_found(client):
    """Unknown paths should return 404."""
    response = client.get("/unknown")
    assert response.status_code == 404
    assert response.json()["error"] == "Not found"


def test_health_requires_get(client):
    response = client.post("/health")
    assert response.status_code == 404


def test_mcp_initialize(client):
    """POST /mcp should answer the initialize handshake with the server info."""
    response = client.post(
        "/mcp",
        json=INITIALIZE,
        headers={"Accept": "application/json, text/event-stream"},
        follow_redirects=False,
    )
    assert response.status_code == 200
    data = response.json()
    assert data["jsonrpc"] == "2.0"
    assert data["result"]["serverInfo"]["name"] == "Teamwork AI"
    assert "tools" in data["result"]["capabilities"]
    assert "resources" in data["result"]["capabilities"]


def test_mcp_lists_tools(client):
    """Stateless mode answers tools/list without a prior session."""
    response = client.post(
        "/mcp",
        json={"jsonrpc": "2.0", "id": 2, "method": "tools/list", "params": {}},
        headers={"Accept": "application/json, text/event-stream"},
    )
    assert response.status_code == 200
    names = {tool["name"] for tool in response.json()["result"]["tools"]}
    assert {"retrieve-tasks", "pause-timer", "assign-jobrole"} <= names


def test_shutdown_closes_engine(teamwork_env, monkeypatch):
    """Leaving the lifespan releases the shared Teamwork engine."""
    import http_app as mod
    import server

    importlib.reload(mod)
    monkeypatch.setattr(server, "_engine", None)
    with TestClient(mod.app) as c:
        server.get_engine()
        assert c.get("/health").status_code == 200
    assert server._engine is None
