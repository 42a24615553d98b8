"""Industry tools and resources. Industries are read-only."""
from mcp.types import Tool

from twapi import Engine, industries
from twmcp.registry import schema, to_text

TOOLS = [
    Tool(
        name="retrieve-industries",
        description="List the industries a company can be classified with.",
        inputSchema=schema(),
    ),
]


async def retrieve_industries(engine: Engine, arguments: dict) -> str:
    multiple = industries.Multiple()
    await engine.do(multiple)
    return to_text(multiple.response)


HANDLERS = {"retrieve-industries": retrieve_industries}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources("industries", "Industries companies can belong to", industries.Multiple)
