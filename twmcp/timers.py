"""Timer tools and resources, including the pause/resume/complete verbs."""
from mcp.types import Tool

from twapi import Engine, timers, with_id_callback
from twmcp.params import (
    bind_group,
    optional_numeric_param,
    optional_numeric_pointer_param,
    optional_param,
    optional_pointer_param,
    required_numeric_param,
    value_range,
)
from twmcp.registry import PAGINATION, boolean, integer, log_created, schema, string, to_text

TIMER_ID = {"timer-id": integer("Timer ID")}

TOOLS = [
    Tool(
        name="retrieve-timers",
        description="List timers, optionally only the running ones.",
        inputSchema=schema({
            "user-id": integer("Only timers of this user"),
            "task-id": integer("Only timers on this task"),
            "project-id": integer("Only timers on this project"),
            "running-timers-only": boolean("Only timers that are running"),
            **PAGINATION,
        }),
    ),
    Tool(
        name="retrieve-timer",
        description="Get a timer by ID.",
        inputSchema=schema(TIMER_ID, required=("timer-id",)),
    ),
    Tool(
        name="create-timer",
        description="Start a timer for the authenticated user on a project.",
        inputSchema=schema(
            {
                "project-id": integer("Project the timer runs on"),
                "description": string("What the timer is for"),
                "billable": boolean("Whether the tracked time is billable"),
                "running": boolean("Whether the timer starts running"),
                "seconds": integer("Initial elapsed seconds", minimum=0),
                "stop-running-timers": boolean("Stop the user's other running timers"),
                "task-id": integer("Task the timer runs on"),
            },
            required=("project-id",),
        ),
    ),
    Tool(
        name="update-timer",
        description="Update a timer. Only the given fields change.",
        inputSchema=schema(
            {
                **TIMER_ID,
                "description": string("What the timer is for"),
                "billable": boolean("Whether the tracked time is billable"),
                "running": boolean("Whether the timer is running"),
                "project-id": integer("Project the timer runs on"),
                "task-id": integer("Task the timer runs on"),
            },
            required=("timer-id",),
        ),
    ),
    Tool(
        name="pause-timer",
        description="Pause a running timer.",
        inputSchema=schema(TIMER_ID, required=("timer-id",)),
    ),
    Tool(
        name="resume-timer",
        description="Resume a paused timer.",
        inputSchema=schema(TIMER_ID, required=("timer-id",)),
    ),
    Tool(
        name="complete-timer",
        description="Complete a timer, turning the tracked time into a timelog.",
        inputSchema=schema(TIMER_ID, required=("timer-id",)),
    ),
    Tool(
        name="delete-timer",
        description="Delete a timer.",
        inputSchema=schema(TIMER_ID, required=("timer-id",)),
    ),
]


async def retrieve_timers(engine: Engine, arguments: dict) -> str:
    multiple = timers.Multiple()
    filters = multiple.filters
    bind_group(
        arguments,
        optional_numeric_param(filters, "user-id"),
        optional_numeric_param(filters, "task-id"),
        optional_numeric_param(filters, "project-id"),
        optional_param(filters, "running-timers-only", bool),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_timer(engine: Engine, arguments: dict) -> str:
    single = timers.Single()
    bind_group(arguments, required_numeric_param(single, "timer-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_timer(engine: Engine, arguments: dict) -> str:
    create = timers.Create()
    bind_group(
        arguments,
        required_numeric_param(create, "project-id"),
        optional_pointer_param(create, "description"),
        optional_param(create, "billable", bool),
        optional_param(create, "running", bool),
        optional_numeric_param(create, "seconds", int, value_range(0)),
        optional_param(create, "stop-running-timers", bool),
        optional_numeric_pointer_param(create, "task-id"),
    )
    await engine.do(create, with_id_callback("id", log_created("timer")))
    return "Timer created successfully"


async def update_timer(engine: Engine, arguments: dict) -> str:
    update = timers.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "timer-id", attr="id"),
        optional_pointer_param(update, "description"),
        optional_param(update, "billable", bool),
        optional_param(update, "running", bool),
        optional_numeric_param(update, "project-id"),
        optional_numeric_pointer_param(update, "task-id"),
    )
    await engine.do(update)
    return "Timer updated successfully"


def _verb(entity_type, done: str):
    async def handler(engine: Engine, arguments: dict) -> str:
        verb = entity_type()
        bind_group(arguments, required_numeric_param(verb, "timer-id", attr="id"))
        await engine.do(verb)
        return f"Timer {done} successfully"
    return handler


async def delete_timer(engine: Engine, arguments: dict) -> str:
    delete = timers.Delete()
    bind_group(arguments, required_numeric_param(delete, "timer-id", attr="id"))
    await engine.do(delete)
    return "Timer deleted successfully"


HANDLERS = {
    "retrieve-timers": retrieve_timers,
    "retrieve-timer": retrieve_timer,
    "create-timer": create_timer,
    "update-timer": update_timer,
    "pause-timer": _verb(timers.Pause, "paused"),
    "resume-timer": _verb(timers.Resume, "resumed"),
    "complete-timer": _verb(timers.Complete, "completed"),
    "delete-timer": delete_timer,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "timers", "Timers of the site",
        timers.Multiple, lambda timer_id: timers.Single(id=timer_id),
    )
