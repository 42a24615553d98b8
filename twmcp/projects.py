"""Project tools and resources."""
from mcp.types import Tool

from twapi import Engine, projects, with_id_callback
from twmcp.params import (
    bind_group,
    optional_date_pointer_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    optional_pointer_param,
    required_numeric_param,
    required_param,
)
from twmcp.registry import (
    MATCH_ALL_TAGS,
    PAGINATION,
    SEARCH_TERM,
    TAG_IDS,
    date,
    integer,
    integer_array,
    log_created,
    schema,
    string,
    to_text,
)


def _project_properties() -> dict:
    return {
        "description": string("Project description"),
        "start-at": date("Start date"),
        "end-at": date("End date"),
        "company-id": integer("Company (client) the project belongs to"),
        "owner-id": integer("User who owns the project"),
        "tag-ids": integer_array("IDs of tags to apply"),
    }


TOOLS = [
    Tool(
        name="retrieve-projects",
        description="List projects, optionally filtered by search term and tags.",
        inputSchema=schema({
            "search-term": SEARCH_TERM,
            "tag-ids": TAG_IDS,
            "match-all-tags": MATCH_ALL_TAGS,
            **PAGINATION,
        }),
    ),
    Tool(
        name="retrieve-project",
        description="Get a project by ID.",
        inputSchema=schema({"project-id": integer("Project ID")}, required=("project-id",)),
    ),
    Tool(
        name="create-project",
        description="Create a project.",
        inputSchema=schema(
            {"name": string("Project name"), **_project_properties()},
            required=("name",),
        ),
    ),
    Tool(
        name="update-project",
        description="Update a project. Only the given fields change.",
        inputSchema=schema(
            {"project-id": integer("Project ID"), "name": string("New project name"), **_project_properties()},
            required=("project-id",),
        ),
    ),
    Tool(
        name="delete-project",
        description="Delete a project and everything in it.",
        inputSchema=schema({"project-id": integer("Project ID")}, required=("project-id",)),
    ),
]


async def retrieve_projects(engine: Engine, arguments: dict) -> str:
    multiple = projects.Multiple()
    filters = multiple.filters
    bind_group(
        arguments,
        optional_param(filters, "search-term"),
        optional_numeric_list_param(filters, "tag-ids"),
        optional_param(filters, "match-all-tags", bool),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_project(engine: Engine, arguments: dict) -> str:
    single = projects.Single()
    bind_group(arguments, required_numeric_param(single, "project-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_project(engine: Engine, arguments: dict) -> str:
    create = projects.Create()
    bind_group(
        arguments,
        required_param(create, "name"),
        optional_pointer_param(create, "description"),
        optional_date_pointer_param(create, "start-at"),
        optional_date_pointer_param(create, "end-at"),
        optional_numeric_param(create, "company-id"),
        optional_numeric_param(create, "owner-id"),
        optional_numeric_list_param(create, "tag-ids"),
    )
    await engine.do(create, with_id_callback("id", log_created("project")))
    return "Project created successfully"


async def update_project(engine: Engine, arguments: dict) -> str:
    update = projects.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "project-id", attr="id"),
        optional_param(update, "name"),
        optional_pointer_param(update, "description"),
        optional_date_pointer_param(update, "start-at"),
        optional_date_pointer_param(update, "end-at"),
        optional_numeric_param(update, "company-id"),
        optional_numeric_param(update, "owner-id"),
        optional_numeric_list_param(update, "tag-ids"),
    )
    await engine.do(update)
    return "Project updated successfully"


async def delete_project(engine: Engine, arguments: dict) -> str:
    delete = projects.Delete()
    bind_group(arguments, required_numeric_param(delete, "project-id", attr="id"))
    await engine.do(delete)
    return "Project deleted successfully"


HANDLERS = {
    "retrieve-projects": retrieve_projects,
    "retrieve-project": retrieve_project,
    "create-project": create_project,
    "update-project": update_project,
    "delete-project": delete_project,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "projects", "Projects of the site",
        projects.Multiple, lambda project_id: projects.Single(id=project_id),
    )
