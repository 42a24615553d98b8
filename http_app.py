"""
Streamable HTTP transport for the Teamwork MCP Server.

Raw ASGI app serving the server from server.py over HTTP. Run it with
``teamwork-mcp --mode http`` or directly:

    uvicorn http_app:app --host 0.0.0.0 --port 8080

Routes:
    GET  /health  -> liveness and catalog size
    *    /mcp     -> MCP Streamable HTTP (stateless, JSON responses)
"""
import contextlib
import json
import logging
import os
import sys

# Mirror the sys.path setup from server.py so all tool imports resolve
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from server import registry, reset_engine, server

logger = logging.getLogger("teamwork-mcp")

MCP_PATH = "/mcp"

session_manager = StreamableHTTPSessionManager(
    app=server, stateless=True, json_response=True,
)


async def send_json(send, status, payload):
    await send({
        "type": "http.response.start",
        "status": status,
        "headers": [[b"content-type", b"application/json"]],
    })
    await send({"type": "http.response.body", "body": json.dumps(payload).encode()})


async def health(scope, receive, send):
    await send_json(send, 200, {
        "status": "ok",
        "server": "teamwork-mcp",
        "tools": len(registry.tools),
    })


ROUTES = {
    ("GET", "/health"): health,
}


async def app(scope, receive, send):
    if scope["type"] == "lifespan":
        await lifespan(receive, send)
        return

    path = scope.get("path", "")
    if path == MCP_PATH or path.startswith(MCP_PATH + "/"):
        await session_manager.handle_request(scope, receive, send)
        return

    route = ROUTES.get((scope.get("method"), path))
    if route is None:
        await send_json(send, 404, {"error": "Not found"})
        return
    await route(scope, receive, send)


async def lifespan(receive, send):
    """Run the session manager for the life of the process.

    The shared Teamwork engine is closed after the session manager stops.
    """
    async with contextlib.AsyncExitStack() as stack:
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    stack.push_async_callback(reset_engine)
                    await stack.enter_async_context(session_manager.run())
                except Exception as e:
                    logger.error(f"HTTP startup failed: {e}")
                    await send({"type": "lifespan.startup.failed", "message": str(e)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await stack.aclose()
                await send({"type": "lifespan.shutdown.complete"})
                return
