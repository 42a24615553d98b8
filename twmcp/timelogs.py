"""Timelog tools and resources."""
from mcp.types import Tool

from twapi import Engine, timelogs, with_id_callback
from twmcp.params import (
    bind_group,
    optional_date_pointer_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_numeric_pointer_param,
    optional_param,
    optional_pointer_param,
    optional_time_only_pointer_param,
    required_date_param,
    required_numeric_param,
    required_time_only_param,
    value_range,
)
from twmcp.registry import (
    MATCH_ALL_TAGS,
    PAGINATION,
    TAG_IDS,
    boolean,
    date,
    integer,
    integer_array,
    log_created,
    schema,
    string,
    to_text,
)

LIST_FILTERS = {"tag-ids": TAG_IDS, "match-all-tags": MATCH_ALL_TAGS, **PAGINATION}


def _timelog_properties() -> dict:
    return {
        "description": string("What the time was spent on"),
        "date": date("Date the work happened"),
        "time": string("Time the work started (HH:MM:SS)"),
        "is-utc": boolean("Whether time is in UTC; defaults to the user's timezone"),
        "hours": integer("Hours spent", minimum=0),
        "minutes": integer("Minutes spent, below 60", minimum=0),
        "billable": boolean("Whether the time is billable"),
        "user-id": integer("User the time is logged for; defaults to the authenticated user"),
        "tag-ids": integer_array("IDs of tags to apply"),
    }


TOOLS = [
    Tool(
        name="retrieve-timelogs",
        description="List timelogs across all projects.",
        inputSchema=schema(LIST_FILTERS),
    ),
    Tool(
        name="retrieve-project-timelogs",
        description="List the timelogs of a project.",
        inputSchema=schema({"project-id": integer("Project ID"), **LIST_FILTERS}, required=("project-id",)),
    ),
    Tool(
        name="retrieve-task-timelogs",
        description="List the timelogs of a task.",
        inputSchema=schema({"task-id": integer("Task ID"), **LIST_FILTERS}, required=("task-id",)),
    ),
    Tool(
        name="retrieve-timelog",
        description="Get a timelog by ID.",
        inputSchema=schema({"timelog-id": integer("Timelog ID")}, required=("timelog-id",)),
    ),
    Tool(
        name="create-timelog",
        description="Log time on a project or a task. Give exactly one of project-id and task-id.",
        inputSchema=schema(
            {
                **_timelog_properties(),
                "project-id": integer("Project to log time on"),
                "task-id": integer("Task to log time on"),
            },
            required=("date", "time", "hours", "minutes"),
        ),
    ),
    Tool(
        name="update-timelog",
        description="Update a timelog. Only the given fields change.",
        inputSchema=schema(
            {"timelog-id": integer("Timelog ID"), **_timelog_properties()},
            required=("timelog-id",),
        ),
    ),
    Tool(
        name="delete-timelog",
        description="Delete a timelog.",
        inputSchema=schema({"timelog-id": integer("Timelog ID")}, required=("timelog-id",)),
    ),
]


async def _retrieve(engine: Engine, multiple: timelogs.Multiple, arguments: dict, *scope) -> str:
    filters = multiple.filters
    bind_group(
        arguments,
        *scope,
        optional_numeric_list_param(filters, "tag-ids"),
        optional_param(filters, "match-all-tags", bool),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_timelogs(engine: Engine, arguments: dict) -> str:
    return await _retrieve(engine, timelogs.Multiple(), arguments)


async def retrieve_project_timelogs(engine: Engine, arguments: dict) -> str:
    multiple = timelogs.Multiple()
    return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, "project-id"))


async def retrieve_task_timelogs(engine: Engine, arguments: dict) -> str:
    multiple = timelogs.Multiple()
    return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, "task-id"))


async def retrieve_timelog(engine: Engine, arguments: dict) -> str:
    single = timelogs.Single()
    bind_group(arguments, required_numeric_param(single, "timelog-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


def _one_target(create: timelogs.Create):
    """Runs after the id binders: a timelog belongs to a project or a task."""
    def check(arguments: dict) -> list:
        if bool(create.project_id) == bool(create.task_id):
            return ['field "project-id": exactly one of project-id or task-id must be provided']
        return []
    return check


async def create_timelog(engine: Engine, arguments: dict) -> str:
    create = timelogs.Create()
    bind_group(
        arguments,
        optional_pointer_param(create, "description"),
        required_date_param(create, "date", attr="log_date"),
        required_time_only_param(create, "time", attr="log_time"),
        optional_param(create, "is-utc", bool),
        required_numeric_param(create, "hours", int, value_range(0)),
        required_numeric_param(create, "minutes", int, value_range(0)),
        optional_param(create, "billable", bool),
        optional_numeric_param(create, "project-id"),
        optional_numeric_param(create, "task-id"),
        optional_numeric_pointer_param(create, "user-id"),
        optional_numeric_list_param(create, "tag-ids"),
        _one_target(create),
    )
    await engine.do(create, with_id_callback("id", log_created("timelog")))
    return "Timelog created successfully"


async def update_timelog(engine: Engine, arguments: dict) -> str:
    update = timelogs.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "timelog-id", attr="id"),
        optional_pointer_param(update, "description"),
        optional_date_pointer_param(update, "date", attr="log_date"),
        optional_time_only_pointer_param(update, "time", attr="log_time"),
        optional_param(update, "is-utc", bool),
        optional_numeric_param(update, "hours", int, value_range(0)),
        optional_numeric_param(update, "minutes", int, value_range(0)),
        optional_param(update, "billable", bool),
        optional_numeric_pointer_param(update, "user-id"),
        optional_numeric_list_param(update, "tag-ids"),
    )
    await engine.do(update)
    return "Timelog updated successfully"


async def delete_timelog(engine: Engine, arguments: dict) -> str:
    delete = timelogs.Delete()
    bind_group(arguments, required_numeric_param(delete, "timelog-id", attr="id"))
    await engine.do(delete)
    return "Timelog deleted successfully"


HANDLERS = {
    "retrieve-timelogs": retrieve_timelogs,
    "retrieve-project-timelogs": retrieve_project_timelogs,
    "retrieve-task-timelogs": retrieve_task_timelogs,
    "retrieve-timelog": retrieve_timelog,
    "create-timelog": create_timelog,
    "update-timelog": update_timelog,
    "delete-timelog": delete_timelog,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "timelogs", "Timelogs across all projects",
        timelogs.Multiple, lambda timelog_id: timelogs.Single(id=timelog_id),
    )
