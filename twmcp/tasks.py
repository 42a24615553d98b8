"""Task tools and resources."""
from mcp.types import Tool

from twapi import Engine, tasks, with_id_callback
from twapi.entity import UserGroups
from twmcp.params import (
    bind_group,
    optional_date_pointer_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_numeric_pointer_param,
    optional_object_param,
    optional_param,
    optional_pointer_param,
    required_numeric_param,
    required_param,
    restrict_values,
    value_range,
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
    "Users, companies and teams the task is assigned to",
    {
        "user-ids": integer_array("IDs of assigned users"),
        "company-ids": integer_array("IDs of assigned companies"),
        "team-ids": integer_array("IDs of assigned teams"),
    },
)

LIST_FILTERS = {
    "search-term": SEARCH_TERM,
    "tag-ids": TAG_IDS,
    "match-all-tags": MATCH_ALL_TAGS,
    **PAGINATION,
}


def _task_properties(name_description: str) -> dict:
    return {
        "name": string(name_description),
        "description": string("Task description"),
        "priority": string("Task priority", enum=tasks.PRIORITIES),
        "progress": integer("Completion percentage", minimum=0, maximum=100),
        "start-at": date("Start date"),
        "due-at": date("Due date"),
        "estimated-minutes": integer("Estimated time in minutes", minimum=0),
        "assignees": ASSIGNEES,
        "tag-ids": integer_array("IDs of tags to apply"),
    }


TOOLS = [
    Tool(
        name="retrieve-tasks",
        description="List tasks across all projects, optionally filtered by search term and tags.",
        inputSchema=schema(LIST_FILTERS),
    ),
    Tool(
        name="retrieve-project-tasks",
        description="List the tasks of a project.",
        inputSchema=schema({"project-id": integer("Project ID"), **LIST_FILTERS}, required=("project-id",)),
    ),
    Tool(
        name="retrieve-tasklist-tasks",
        description="List the tasks of a tasklist.",
        inputSchema=schema({"tasklist-id": integer("Tasklist ID"), **LIST_FILTERS}, required=("tasklist-id",)),
    ),
    Tool(
        name="retrieve-task",
        description="Get a task by ID.",
        inputSchema=schema({"task-id": integer("Task ID")}, required=("task-id",)),
    ),
    Tool(
        name="create-task",
        description="Create a task in a tasklist.",
        inputSchema=schema(
            {"tasklist-id": integer("Tasklist that will hold the task"), **_task_properties("Task name")},
            required=("name", "tasklist-id"),
        ),
    ),
    Tool(
        name="update-task",
        description="Update a task. Only the given fields change.",
        inputSchema=schema(
            {
                "task-id": integer("Task ID"),
                "tasklist-id": integer("Move the task to this tasklist"),
                **_task_properties("New task name"),
            },
            required=("task-id",),
        ),
    ),
    Tool(
        name="delete-task",
        description="Delete a task.",
        inputSchema=schema({"task-id": integer("Task ID")}, required=("task-id",)),
    ),
]


def _filter_binders(filters: tasks.Filters) -> list:
    return [
        optional_param(filters, "search-term"),
        optional_numeric_list_param(filters, "tag-ids"),
        optional_param(filters, "match-all-tags", bool),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    ]


def _assignee_binders(groups: UserGroups) -> list:
    return [
        optional_numeric_list_param(groups, "user-ids"),
        optional_numeric_list_param(groups, "company-ids"),
        optional_numeric_list_param(groups, "team-ids"),
    ]


def _body_binders(entity) -> list:
    return [
        optional_pointer_param(entity, "description"),
        optional_pointer_param(entity, "priority", str, restrict_values(*tasks.PRIORITIES)),
        optional_numeric_pointer_param(entity, "progress", int, value_range(0, 100)),
        optional_date_pointer_param(entity, "start-at"),
        optional_date_pointer_param(entity, "due-at"),
        optional_numeric_pointer_param(entity, "estimated-minutes", int, value_range(0)),
        optional_object_param(entity, "assignees", UserGroups, _assignee_binders),
        optional_numeric_list_param(entity, "tag-ids"),
    ]


async def _retrieve(engine: Engine, multiple: tasks.Multiple, arguments: dict, *scope) -> str:
    bind_group(arguments, *scope, *_filter_binders(multiple.filters))
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_tasks(engine: Engine, arguments: dict) -> str:
    return await _retrieve(engine, tasks.Multiple(), arguments)


async def retrieve_project_tasks(engine: Engine, arguments: dict) -> str:
    multiple = tasks.Multiple()
    return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, "project-id"))


async def retrieve_tasklist_tasks(engine: Engine, arguments: dict) -> str:
    multiple = tasks.Multiple()
    return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, "tasklist-id"))


async def retrieve_task(engine: Engine, arguments: dict) -> str:
    single = tasks.Single()
    bind_group(arguments, required_numeric_param(single, "task-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_task(engine: Engine, arguments: dict) -> str:
    create = tasks.Create()
    bind_group(
        arguments,
        required_param(create, "name"),
        required_numeric_param(create, "tasklist-id"),
        *_body_binders(create),
    )
    await engine.do(create, with_id_callback("id", log_created("task")))
    return "Task created successfully"


async def update_task(engine: Engine, arguments: dict) -> str:
    update = tasks.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "task-id", attr="id"),
        optional_numeric_param(update, "tasklist-id"),
        optional_param(update, "name"),
        *_body_binders(update),
    )
    await engine.do(update)
    return "Task updated successfully"


async def delete_task(engine: Engine, arguments: dict) -> str:
    delete = tasks.Delete()
    bind_group(arguments, required_numeric_param(delete, "task-id", attr="id"))
    await engine.do(delete)
    return "Task deleted successfully"


HANDLERS = {
    "retrieve-tasks": retrieve_tasks,
    "retrieve-project-tasks": retrieve_project_tasks,
    "retrieve-tasklist-tasks": retrieve_tasklist_tasks,
    "retrieve-task": retrieve_task,
    "create-task": create_task,
    "update-task": update_task,
    "delete-task": delete_task,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "tasks", "Tasks across all projects",
        tasks.Multiple, lambda task_id: tasks.Single(id=task_id),
    )
