"""Activity feed tools and resources."""
from mcp.types import Tool

from twapi import Engine, activities
from twmcp.params import (
    bind_group,
    optional_list_param,
    optional_numeric_param,
    optional_time_param,
    required_numeric_param,
    restrict_values,
)
from twmcp.registry import PAGINATION, integer, schema, string, string_array, to_text

FILTERS = {
    "start-date": string("Only activity after this instant (RFC 3339)", fmt="date-time"),
    "end-date": string("Only activity before this instant (RFC 3339)", fmt="date-time"),
    "log-item-types": string_array("Only these kinds of activity", enum=activities.LOG_ITEM_TYPES),
    **PAGINATION,
}

TOOLS = [
    Tool(
        name="retrieve-activities",
        description="List the latest activity across the site.",
        inputSchema=schema(FILTERS),
    ),
    Tool(
        name="retrieve-project-activities",
        description="List the latest activity of a project.",
        inputSchema=schema({"project-id": integer("Project ID"), **FILTERS}, required=("project-id",)),
    ),
]


async def _retrieve(engine: Engine, multiple: activities.Multiple, arguments: dict, *scope) -> str:
    filters = multiple.filters
    bind_group(
        arguments,
        *scope,
        optional_time_param(filters, "start-date"),
        optional_time_param(filters, "end-date"),
        optional_list_param(filters, "log-item-types", str, restrict_values(*activities.LOG_ITEM_TYPES)),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_activities(engine: Engine, arguments: dict) -> str:
    return await _retrieve(engine, activities.Multiple(), arguments)


async def retrieve_project_activities(engine: Engine, arguments: dict) -> str:
    multiple = activities.Multiple()
    return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, "project-id"))


HANDLERS = {
    "retrieve-activities": retrieve_activities,
    "retrieve-project-activities": retrieve_project_activities,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources("activities", "Latest activity across the site", activities.Multiple)
