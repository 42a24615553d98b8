"""Job role tools and resources."""
from mcp.types import Tool

from twapi import Engine, InvalidArgumentError, jobroles, with_id_callback
from twmcp.params import (
    bind_group,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from twmcp.registry import (
    PAGINATION,
    SEARCH_TERM,
    boolean,
    integer,
    integer_array,
    log_created,
    schema,
    string,
    to_text,
)

JOBROLE_ID = {"jobrole-id": integer("Job role ID")}

TOOLS = [
    Tool(
        name="retrieve-jobroles",
        description="List job roles of the site.",
        inputSchema=schema({"search-term": SEARCH_TERM, **PAGINATION}),
    ),
    Tool(
        name="retrieve-jobrole",
        description="Get a job role by ID.",
        inputSchema=schema(JOBROLE_ID, required=("jobrole-id",)),
    ),
    Tool(
        name="create-jobrole",
        description="Create a job role.",
        inputSchema=schema({"name": string("Job role name")}, required=("name",)),
    ),
    Tool(
        name="update-jobrole",
        description="Rename a job role.",
        inputSchema=schema({**JOBROLE_ID, "name": string("New job role name")}, required=("jobrole-id",)),
    ),
    Tool(
        name="delete-jobrole",
        description="Delete a job role.",
        inputSchema=schema(JOBROLE_ID, required=("jobrole-id",)),
    ),
    Tool(
        name="assign-jobrole",
        description="Give a job role to users.",
        inputSchema=schema(
            {
                **JOBROLE_ID,
                "user-ids": integer_array("IDs of the users"),
                "is-primary": boolean("Make it the primary job role of those users"),
            },
            required=("jobrole-id", "user-ids"),
        ),
    ),
    Tool(
        name="unassign-jobrole",
        description="Take a job role away from users.",
        inputSchema=schema(
            {**JOBROLE_ID, "user-ids": integer_array("IDs of the users")},
            required=("jobrole-id", "user-ids"),
        ),
    ),
]


def _with_people() -> jobroles.Multiple:
    multiple = jobroles.Multiple()
    multiple.filters.include = ["users"]
    return multiple


async def retrieve_jobroles(engine: Engine, arguments: dict) -> str:
    multiple = _with_people()
    filters = multiple.filters
    bind_group(
        arguments,
        optional_param(filters, "search-term"),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_jobrole(engine: Engine, arguments: dict) -> str:
    single = jobroles.Single()
    bind_group(arguments, required_numeric_param(single, "jobrole-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_jobrole(engine: Engine, arguments: dict) -> str:
    create = jobroles.Create()
    bind_group(arguments, required_param(create, "name"))
    await engine.do(create, with_id_callback("id", log_created("job role")))
    return "Job role created successfully"


async def update_jobrole(engine: Engine, arguments: dict) -> str:
    update = jobroles.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "jobrole-id", attr="id"),
        optional_param(update, "name"),
    )
    await engine.do(update)
    return "Job role updated successfully"


async def delete_jobrole(engine: Engine, arguments: dict) -> str:
    delete = jobroles.Delete()
    bind_group(arguments, required_numeric_param(delete, "jobrole-id", attr="id"))
    await engine.do(delete)
    return "Job role deleted successfully"


async def _people(engine: Engine, entity: jobroles.AssignPeople, arguments: dict, *extra) -> None:
    bind_group(
        arguments,
        required_numeric_param(entity, "jobrole-id", attr="id"),
        optional_numeric_list_param(entity, "user-ids"),
        *extra,
    )
    if not entity.user_ids:
        raise InvalidArgumentError(['field "user-ids": is required'])
    await engine.do(entity)


async def assign_jobrole(engine: Engine, arguments: dict) -> str:
    assign = jobroles.AssignPeople()
    await _people(engine, assign, arguments, optional_param(assign, "is-primary", bool))
    return "Users assigned to job role successfully"


async def unassign_jobrole(engine: Engine, arguments: dict) -> str:
    await _people(engine, jobroles.UnassignPeople(), arguments)
    return "Users unassigned from job role successfully"


HANDLERS = {
    "retrieve-jobroles": retrieve_jobroles,
    "retrieve-jobrole": retrieve_jobrole,
    "create-jobrole": create_jobrole,
    "update-jobrole": update_jobrole,
    "delete-jobrole": delete_jobrole,
    "assign-jobrole": assign_jobrole,
    "unassign-jobrole": unassign_jobrole,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "jobroles", "Job roles of the site",
        _with_people, lambda jobrole_id: jobroles.Single(id=jobrole_id),
    )
