"""Tool and resource catalog shared by every resource family.

Each family module builds its ``Tool`` definitions and handlers and calls
``register(registry)``; the server then serves the aggregated catalog.

Handlers are plain coroutines ``handler(engine, arguments) -> str``. They
bind arguments with ``twmcp.params``, execute an entity and return either
the decoded payload as JSON text or a short status line.
"""
import json
import logging
import re
from typing import Any, Awaitable, Callable, Dict, List, Optional, Pattern, Tuple

from mcp.types import Resource, ResourceTemplate, TextResourceContents, Tool

from twapi import Engine
from twapi.entity import Entity

logger = logging.getLogger("teamwork-mcp")

SCHEME = "twapi://"
MIME_TYPE = "application/json"

Handler = Callable[[Engine, Dict[str, Any]], Awaitable[str]]
EntityFactory = Callable[[], Entity]


def to_text(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


def compile_template(template: str) -> Pattern:
    """Turn ``twapi://tasks/{id}`` into a regex with a numeric ``id`` group."""
    parts = re.split(r"\{(\w+)\}", template)
    pattern = ""
    for index, part in enumerate(parts):
        pattern += re.escape(part) if index % 2 == 0 else rf"(?P<{part}>\d+)"
    return re.compile(f"^{pattern}$")


# ---------------------------------------------------------------------------
# Schema fragments
# ---------------------------------------------------------------------------


def string(description: str, enum: Optional[Tuple[str, ...]] = None, fmt: Optional[str] = None) -> dict:
    prop = {"type": "string", "description": description}
    if enum:
        prop["enum"] = list(enum)
    if fmt:
        prop["format"] = fmt
    return prop


def integer(description: str, **extra) -> dict:
    return {"type": "integer", "description": description, **extra}


def number(description: str, **extra) -> dict:
    return {"type": "number", "description": description, **extra}


def boolean(description: str) -> dict:
    return {"type": "boolean", "description": description}


def integer_array(description: str) -> dict:
    return {"type": "array", "items": {"type": "integer"}, "description": description}


def string_array(description: str, enum: Optional[Tuple[str, ...]] = None) -> dict:
    items = {"type": "string"}
    if enum:
        items["enum"] = list(enum)
    return {"type": "array", "items": items, "description": description}


def date(description: str) -> dict:
    return string(f"{description} (YYYY-MM-DD)", fmt="date")


def obj(description: str, properties: Dict[str, dict], required: Tuple[str, ...] = ()) -> dict:
    prop = {"type": "object", "description": description, "properties": properties}
    if required:
        prop["required"] = list(required)
    return prop


def schema(properties: Optional[Dict[str, dict]] = None, required: Tuple[str, ...] = ()) -> dict:
    result = {"type": "object", "properties": properties or {}}
    if required:
        result["required"] = list(required)
    return result


PAGE = integer("Page number for pagination, starting at 1", minimum=1)
PAGE_SIZE = integer("Number of results per page", minimum=1)
SEARCH_TERM = string("Search term to filter by name or content")
TAG_IDS = integer_array("Filter by tag IDs")
MATCH_ALL_TAGS = boolean("When true, results must carry every given tag instead of any of them")

PAGINATION = {"page": PAGE, "page-size": PAGE_SIZE}


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


def _item_uri(list_uri: str, item: Dict[str, Any]) -> str:
    """Items without an id are addressed by the listing they came from."""
    if item.get("id") is None:
        return list_uri
    return f"{list_uri}/{item['id']}"

class Registry:
    """Aggregated tools, handlers and resources of every family."""

    def __init__(self):
        self.tools: List[Tool] = []
        self.handlers: Dict[str, Handler] = {}
        self.resources: List[Resource] = []
        self.resource_templates: List[ResourceTemplate] = []
        self._lists: Dict[str, EntityFactory] = {}
        self._templates: List[Tuple[Pattern, Callable[[int], Entity]]] = []

    def add_tool(self, tool: Tool, handler: Handler) -> None:
        if tool.name in self.handlers:
            raise ValueError(f"Duplicate tool: {tool.name}")
        self.tools.append(tool)
        self.handlers[tool.name] = handler

    def add_tools(self, tools: List[Tool], handlers: Dict[str, Handler]) -> None:
        for tool in tools:
            self.add_tool(tool, handlers[tool.name])

    def add_resources(
        self,
        family: str,
        description: str,
        multiple: EntityFactory,
        single: Optional[Callable[[int], Entity]] = None,
    ) -> None:
        """Expose ``twapi://<family>`` and, with ``single``, ``twapi://<family>/{id}``."""
        uri = SCHEME + family
        self.resources.append(Resource(
            uri=uri, name=family, description=description, mimeType=MIME_TYPE,
        ))
        self._lists[uri] = multiple
        if single is not None:
            template = uri + "/{id}"
            self.resource_templates.append(ResourceTemplate(
                uriTemplate=template, name=family, description=description, mimeType=MIME_TYPE,
            ))
            self._templates.append((compile_template(template), single))

    async def call(self, engine: Engine, name: str, arguments: Optional[Dict[str, Any]]) -> str:
        handler = self.handlers.get(name)
        if handler is None:
            raise ValueError(f"Unknown tool: {name}")
        logger.info(f"Tool: {name}")
        return await handler(engine, arguments or {})

    async def read(self, engine: Engine, uri: str) -> List[TextResourceContents]:
        uri = str(uri).rstrip("/")

        factory = self._lists.get(uri)
        if factory is not None:
            multiple = factory()
            await engine.do(multiple)
            return [
                TextResourceContents(uri=_item_uri(uri, item), mimeType=MIME_TYPE, text=to_text(item))
                for item in multiple.response
            ]

        for pattern, single_factory in self._templates:
            match = pattern.match(uri)
            if match:
                single = single_factory(int(match.group("id")))
                await engine.do(single)
                return [TextResourceContents(uri=uri, mimeType=MIME_TYPE, text=to_text(single.response))]

        raise ValueError(f"Unknown resource: {uri}")


# ---------------------------------------------------------------------------
# Handler helpers
# ---------------------------------------------------------------------------


def log_created(label: str) -> Callable[[int], None]:
    """Id callback that records the id the upstream assigned to a new item."""
    def callback(item_id: int) -> None:
        logger.info(f"Created {label} {item_id}")
    return callback
