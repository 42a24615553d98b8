"""User (people) tools and resources."""
from mcp.types import Tool

from twapi import Engine, InvalidArgumentError, users, with_id_callback, workload
from twmcp.params import (
    bind_group,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_numeric_pointer_param,
    optional_param,
    optional_pointer_param,
    required_date_param,
    required_numeric_param,
    required_param,
    restrict_values,
)
from twmcp.registry import (
    PAGINATION,
    SEARCH_TERM,
    boolean,
    date,
    integer,
    integer_array,
    log_created,
    schema,
    string,
    to_text,
)

USER_TYPE = string("Kind of user", enum=users.USER_TYPES)

LIST_FILTERS = {"search-term": SEARCH_TERM, "type": USER_TYPE, **PAGINATION}


def _user_properties() -> dict:
    return {
        "first-name": string("First name"),
        "last-name": string("Last name"),
        "email": string("Email address"),
        "title": string("Job title"),
        "admin": boolean("Whether the user is a site administrator"),
        "type": USER_TYPE,
        "company-id": integer("Company the user belongs to"),
    }


TOOLS = [
    Tool(
        name="retrieve-users",
        description="List users of the site.",
        inputSchema=schema(LIST_FILTERS),
    ),
    Tool(
        name="retrieve-project-users",
        description="List the users of a project.",
        inputSchema=schema({"project-id": integer("Project ID"), **LIST_FILTERS}, required=("project-id",)),
    ),
    Tool(
        name="retrieve-user",
        description="Get a user by ID.",
        inputSchema=schema({"user-id": integer("User ID")}, required=("user-id",)),
    ),
    Tool(
        name="retrieve-me",
        description="Get the user that owns the API token.",
        inputSchema=schema(),
    ),
    Tool(
        name="create-user",
        description="Create a user.",
        inputSchema=schema(_user_properties(), required=("first-name", "last-name", "email")),
    ),
    Tool(
        name="update-user",
        description="Update a user. Only the given fields change.",
        inputSchema=schema({"user-id": integer("User ID"), **_user_properties()}, required=("user-id",)),
    ),
    Tool(
        name="delete-user",
        description="Delete a user.",
        inputSchema=schema({"user-id": integer("User ID")}, required=("user-id",)),
    ),
    Tool(
        name="assign-project-users",
        description="Add existing users to a project.",
        inputSchema=schema(
            {"project-id": integer("Project ID"), "user-ids": integer_array("IDs of the users to add")},
            required=("project-id", "user-ids"),
        ),
    ),
    Tool(
        name="retrieve-users-workload",
        description=(
            "Get the day-by-day workload of users between two dates. A user's capacity is the "
            "estimated time of their assigned tasks (minus unavailable time) against their "
            "working hours, which are included in the response; capacity above the working "
            "hours means the user is over capacity. A date missing from the response means "
            "the user has no tasks that day and is available."
        ),
        inputSchema=schema(
            {
                "start-date": date("First day of the period"),
                "end-date": date("Last day of the period"),
                "user-ids": integer_array("Only the workload of these users"),
                **PAGINATION,
            },
            required=("start-date", "end-date"),
        ),
    ),
]


async def _retrieve(engine: Engine, multiple: users.Multiple, arguments: dict, *scope) -> str:
    filters = multiple.filters
    bind_group(
        arguments,
        *scope,
        optional_param(filters, "search-term"),
        optional_param(filters, "type", str, restrict_values(*users.USER_TYPES)),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_users(engine: Engine, arguments: dict) -> str:
    return await _retrieve(engine, users.Multiple(), arguments)


async def retrieve_project_users(engine: Engine, arguments: dict) -> str:
    multiple = users.Multiple()
    return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, "project-id"))


async def retrieve_user(engine: Engine, arguments: dict) -> str:
    single = users.Single()
    bind_group(arguments, required_numeric_param(single, "user-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def retrieve_me(engine: Engine, arguments: dict) -> str:
    me = users.Me()
    await engine.do(me)
    return to_text(me.response)


def _profile_binders(entity) -> list:
    return [
        optional_pointer_param(entity, "title"),
        optional_param(entity, "admin", bool),
        optional_param(entity, "type", str, restrict_values(*users.USER_TYPES)),
        optional_numeric_pointer_param(entity, "company-id"),
    ]


async def create_user(engine: Engine, arguments: dict) -> str:
    create = users.Create()
    bind_group(
        arguments,
        required_param(create, "first-name"),
        required_param(create, "last-name"),
        required_param(create, "email"),
        *_profile_binders(create),
    )
    await engine.do(create, with_id_callback("id", log_created("user")))
    return "User created successfully"


async def update_user(engine: Engine, arguments: dict) -> str:
    update = users.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "user-id", attr="id"),
        optional_param(update, "first-name"),
        optional_param(update, "last-name"),
        optional_param(update, "email"),
        *_profile_binders(update),
    )
    await engine.do(update)
    return "User updated successfully"


async def delete_user(engine: Engine, arguments: dict) -> str:
    delete = users.Delete()
    bind_group(arguments, required_numeric_param(delete, "user-id", attr="id"))
    await engine.do(delete)
    return "User deleted successfully"


async def assign_project_users(engine: Engine, arguments: dict) -> str:
    assign = users.AddToProject()
    bind_group(
        arguments,
        required_numeric_param(assign, "project-id"),
        optional_numeric_list_param(assign, "user-ids"),
    )
    if not assign.user_ids:
        raise InvalidArgumentError(['field "user-ids": is required'])
    await engine.do(assign)
    return "Users assigned to project successfully"


async def retrieve_users_workload(engine: Engine, arguments: dict) -> str:
    report = workload.Single()
    filters = report.filters
    filters.include = [workload.WORKING_HOURS]
    bind_group(
        arguments,
        required_date_param(filters, "start-date"),
        required_date_param(filters, "end-date"),
        optional_numeric_list_param(filters, "user-ids"),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(report)
    return to_text(report.response)


HANDLERS = {
    "retrieve-users": retrieve_users,
    "retrieve-project-users": retrieve_project_users,
    "retrieve-user": retrieve_user,
    "retrieve-me": retrieve_me,
    "create-user": create_user,
    "update-user": update_user,
    "delete-user": delete_user,
    "assign-project-users": assign_project_users,
    "retrieve-users-workload": retrieve_users_workload,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "users", "Users of the site",
        users.Multiple, lambda user_id: users.Single(id=user_id),
    )
