"""Milestone tools and resources."""
from mcp.types import Tool

from twapi import Engine, milestones, with_id_callback
from twapi.entity import LegacyUserGroups
from twmcp.params import (
    bind_group,
    optional_date_pointer_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_object_param,
    optional_param,
    optional_pointer_param,
    required_date_param,
    required_numeric_param,
    required_object_param,
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
    obj,
    schema,
    string,
    to_text,
)

ASSIGNEES = obj(
    "Users, companies and teams responsible for the milestone",
    {
        "user-ids": integer_array("IDs of responsible users"),
        "company-ids": integer_array("IDs of responsible companies"),
        "team-ids": integer_array("IDs of responsible teams"),
    },
)

LIST_FILTERS = {
    "search-term": SEARCH_TERM,
    "tag-ids": TAG_IDS,
    "match-all-tags": MATCH_ALL_TAGS,
    **PAGINATION,
}


def _milestone_properties() -> dict:
    return {
        "description": string("Milestone description"),
        "due-date": date("Deadline"),
        "assignees": ASSIGNEES,
        "tasklist-ids": integer_array("IDs of tasklists linked to the milestone"),
        "tag-ids": integer_array("IDs of tags to apply"),
    }


TOOLS = [
    Tool(
        name="retrieve-milestones",
        description="List milestones across all projects.",
        inputSchema=schema(LIST_FILTERS),
    ),
    Tool(
        name="retrieve-project-milestones",
        description="List the milestones of a project.",
        inputSchema=schema({"project-id": integer("Project ID"), **LIST_FILTERS}, required=("project-id",)),
    ),
    Tool(
        name="retrieve-milestone",
        description="Get a milestone by ID.",
        inputSchema=schema({"milestone-id": integer("Milestone ID")}, required=("milestone-id",)),
    ),
    Tool(
        name="create-milestone",
        description="Create a milestone in a project.",
        inputSchema=schema(
            {
                "project-id": integer("Project that will hold the milestone"),
                "name": string("Milestone name"),
                **_milestone_properties(),
            },
            required=("project-id", "name", "due-date", "assignees"),
        ),
    ),
    Tool(
        name="update-milestone",
        description="Update a milestone. Only the given fields change.",
        inputSchema=schema(
            {
                "milestone-id": integer("Milestone ID"),
                "name": string("New milestone name"),
                **_milestone_properties(),
            },
            required=("milestone-id",),
        ),
    ),
    Tool(
        name="delete-milestone",
        description="Delete a milestone.",
        inputSchema=schema({"milestone-id": integer("Milestone ID")}, required=("milestone-id",)),
    ),
]


def _assignee_binders(groups: LegacyUserGroups) -> list:
    return [
        optional_numeric_list_param(groups, "user-ids"),
        optional_numeric_list_param(groups, "company-ids"),
        optional_numeric_list_param(groups, "team-ids"),
    ]


async def _retrieve(engine: Engine, multiple: milestones.Multiple, arguments: dict, *scope) -> str:
    filters = multiple.filters
    bind_group(
        arguments,
        *scope,
        optional_param(filters, "search-term"),
        optional_numeric_list_param(filters, "tag-ids"),
        optional_param(filters, "match-all-tags", bool),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_milestones(engine: Engine, arguments: dict) -> str:
    return await _retrieve(engine, milestones.Multiple(), arguments)


async def retrieve_project_milestones(engine: Engine, arguments: dict) -> str:
    multiple = milestones.Multiple()
    return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, "project-id"))


async def retrieve_milestone(engine: Engine, arguments: dict) -> str:
    single = milestones.Single()
    bind_group(arguments, required_numeric_param(single, "milestone-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_milestone(engine: Engine, arguments: dict) -> str:
    create = milestones.Create()
    bind_group(
        arguments,
        required_numeric_param(create, "project-id"),
        required_param(create, "name"),
        optional_pointer_param(create, "description"),
        required_date_param(create, "due-date", attr="due_at"),
        required_object_param(create, "assignees", LegacyUserGroups, _assignee_binders),
        optional_numeric_list_param(create, "tasklist-ids"),
        optional_numeric_list_param(create, "tag-ids"),
    )
    await engine.do(create, with_id_callback("milestoneId", log_created("milestone")))
    return "Milestone created successfully"


async def update_milestone(engine: Engine, arguments: dict) -> str:
    update = milestones.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "milestone-id", attr="id"),
        optional_param(update, "name"),
        optional_pointer_param(update, "description"),
        optional_date_pointer_param(update, "due-date", attr="due_at"),
        optional_object_param(update, "assignees", LegacyUserGroups, _assignee_binders),
        optional_numeric_list_param(update, "tasklist-ids"),
        optional_numeric_list_param(update, "tag-ids"),
    )
    await engine.do(update)
    return "Milestone updated successfully"


async def delete_milestone(engine: Engine, arguments: dict) -> str:
    delete = milestones.Delete()
    bind_group(arguments, required_numeric_param(delete, "milestone-id", attr="id"))
    await engine.do(delete)
    return "Milestone deleted successfully"


HANDLERS = {
    "retrieve-milestones": retrieve_milestones,
    "retrieve-project-milestones": retrieve_project_milestones,
    "retrieve-milestone": retrieve_milestone,
    "create-milestone": create_milestone,
    "update-milestone": update_milestone,
    "delete-milestone": delete_milestone,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "milestones", "Milestones across all projects",
        milestones.Multiple, lambda milestone_id: milestones.Single(id=milestone_id),
    )
