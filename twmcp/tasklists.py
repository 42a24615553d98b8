"""Tasklist tools and resources."""
from mcp.types import Tool

from twapi import Engine, tasklists, with_id_callback
from twmcp.params import (
    bind_group,
    optional_numeric_param,
    optional_numeric_pointer_param,
    optional_param,
    optional_pointer_param,
    required_numeric_param,
    required_param,
)
from twmcp.registry import PAGINATION, SEARCH_TERM, integer, log_created, schema, string, to_text

TOOLS = [
    Tool(
        name="retrieve-tasklists",
        description="List tasklists across all projects.",
        inputSchema=schema({"search-term": SEARCH_TERM, **PAGINATION}),
    ),
    Tool(
        name="retrieve-project-tasklists",
        description="List the tasklists of a project.",
        inputSchema=schema(
            {"project-id": integer("Project ID"), "search-term": SEARCH_TERM, **PAGINATION},
            required=("project-id",),
        ),
    ),
    Tool(
        name="retrieve-tasklist",
        description="Get a tasklist by ID.",
        inputSchema=schema({"tasklist-id": integer("Tasklist ID")}, required=("tasklist-id",)),
    ),
    Tool(
        name="create-tasklist",
        description="Create a tasklist in a project.",
        inputSchema=schema(
            {
                "name": string("Tasklist name"),
                "project-id": integer("Project that will hold the tasklist"),
                "description": string("Tasklist description"),
                "milestone-id": integer("Milestone the tasklist is linked to"),
            },
            required=("name", "project-id"),
        ),
    ),
    Tool(
        name="update-tasklist",
        description="Update a tasklist. Only the given fields change.",
        inputSchema=schema(
            {
                "tasklist-id": integer("Tasklist ID"),
                "name": string("New tasklist name"),
                "description": string("Tasklist description"),
                "milestone-id": integer("Milestone the tasklist is linked to"),
            },
            required=("tasklist-id",),
        ),
    ),
    Tool(
        name="delete-tasklist",
        description="Delete a tasklist and its tasks.",
        inputSchema=schema({"tasklist-id": integer("Tasklist ID")}, required=("tasklist-id",)),
    ),
]


async def _retrieve(engine: Engine, multiple: tasklists.Multiple, arguments: dict, *scope) -> str:
    filters = multiple.filters
    bind_group(
        arguments,
        *scope,
        optional_param(filters, "search-term"),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_tasklists(engine: Engine, arguments: dict) -> str:
    return await _retrieve(engine, tasklists.Multiple(), arguments)


async def retrieve_project_tasklists(engine: Engine, arguments: dict) -> str:
    multiple = tasklists.Multiple()
    return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, "project-id"))


async def retrieve_tasklist(engine: Engine, arguments: dict) -> str:
    single = tasklists.Single()
    bind_group(arguments, required_numeric_param(single, "tasklist-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_tasklist(engine: Engine, arguments: dict) -> str:
    create = tasklists.Create()
    bind_group(
        arguments,
        required_param(create, "name"),
        required_numeric_param(create, "project-id"),
        optional_pointer_param(create, "description"),
        optional_numeric_pointer_param(create, "milestone-id"),
    )
    await engine.do(create, with_id_callback("tasklistId", log_created("tasklist")))
    return "Tasklist created successfully"


async def update_tasklist(engine: Engine, arguments: dict) -> str:
    update = tasklists.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "tasklist-id", attr="id"),
        optional_param(update, "name"),
        optional_pointer_param(update, "description"),
        optional_numeric_pointer_param(update, "milestone-id"),
    )
    await engine.do(update)
    return "Tasklist updated successfully"


async def delete_tasklist(engine: Engine, arguments: dict) -> str:
    delete = tasklists.Delete()
    bind_group(arguments, required_numeric_param(delete, "tasklist-id", attr="id"))
    await engine.do(delete)
    return "Tasklist deleted successfully"


HANDLERS = {
    "retrieve-tasklists": retrieve_tasklists,
    "retrieve-project-tasklists": retrieve_project_tasklists,
    "retrieve-tasklist": retrieve_tasklist,
    "create-tasklist": create_tasklist,
    "update-tasklist": update_tasklist,
    "delete-tasklist": delete_tasklist,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "tasklists", "Tasklists across all projects",
        tasklists.Multiple, lambda tasklist_id: tasklists.Single(id=tasklist_id),
    )
