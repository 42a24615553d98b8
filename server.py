#!/usr/bin/env python3
"""
Teamwork MCP Server

Exposes a Teamwork.com site to MCP clients as tools and resources.

Tools (one set per resource family):
- retrieve-<family>, retrieve-<scope>-<family>, retrieve-<item>
- create-<item>, update-<item>, delete-<item>
- pause-timer, resume-timer, complete-timer
- retrieve-me, assign-project-users, assign-jobrole, unassign-jobrole

Resources:
- twapi://<family>       every item of a family
- twapi://<family>/{id}  one item

Configuration comes from the environment, see twmcp/config.py.
"""
import argparse
import asyncio
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Resource, ResourceTemplate, TextContent, Tool

from twapi import Engine
from twmcp import (
    activities,
    comments,
    companies,
    industries,
    jobroles,
    milestones,
    projects,
    skills,
    tags,
    tasklists,
    tasks,
    teams,
    timelogs,
    timers,
    users,
)
from twmcp.config import ConfigError, get_config
from twmcp.registry import Registry

FAMILIES = (
    projects,
    tasks,
    tasklists,
    milestones,
    comments,
    timelogs,
    timers,
    companies,
    users,
    teams,
    tags,
    skills,
    jobroles,
    industries,
    activities,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    stream=sys.stderr
)
logger = logging.getLogger("teamwork-mcp")

server = Server("Teamwork AI", version="1.0.0")

registry = Registry()
for family in FAMILIES:
    family.register(registry)

_engine = None


def get_engine() -> Engine:
    """Shared engine, created on first use from the environment config."""
    global _engine
    if _engine is None:
        config = get_config()
        _engine = Engine(config.teamwork_server, config.teamwork_api_token)
    return _engine


async def reset_engine():
    """Close the shared engine so the next call builds a fresh one."""
    global _engine
    engine, _engine = _engine, None
    if engine is not None:
        await engine.aclose()


@server.list_tools()
async def list_tools() -> list[Tool]:
    return registry.tools


# Input validation is left to the binders so agents get field-level messages.
@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    text = await registry.call(get_engine(), name, arguments)
    return [TextContent(type="text", text=text)]


@server.list_resources()
async def list_resources() -> list[Resource]:
    return registry.resources


@server.list_resource_templates()
async def list_resource_templates() -> list[ResourceTemplate]:
    return registry.resource_templates


async def read_resource(req: types.ReadResourceRequest) -> types.ServerResult:
    # Registered directly: list reads answer with one entry per item URI,
    # which the decorator form cannot express.
    contents = await registry.read(get_engine(), str(req.params.uri))
    return types.ServerResult(types.ReadResourceResult(contents=contents))


server.request_handlers[types.ReadResourceRequest] = read_resource


async def main():
    logger.info("Starting Teamwork MCP Server (stdio)")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await reset_engine()


def main_sync():
    """Synchronous entry point for console scripts."""
    parser = argparse.ArgumentParser(description="Teamwork.com MCP server")
    parser.add_argument("--mode", choices=["stdio", "http"], default="stdio",
                        help="Transport to serve MCP over (default: stdio)")
    args = parser.parse_args()

    try:
        config = get_config()
    except ConfigError as e:
        logger.error(f"Invalid configuration:\n{e}")
        sys.exit(1)
    logging.getLogger().setLevel(config.logging_level)

    try:
        if args.mode == "http":
            import uvicorn
            import http_app
            logger.info(f"Starting Teamwork MCP Server (http) on port {config.port}")
            uvicorn.run(http_app.app, host="0.0.0.0", port=config.port, log_level=config.logging_level)
        else:
            asyncio.run(main())
    except KeyboardInterrupt:
        pass
    except Exception as e:
        logger.error(f"Server failed: {e}", exc_info=True)
        sys.exit(2)


if __name__ == "__main__":
    main_sync()
