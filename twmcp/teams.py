"""Team tools and resources."""
from mcp.types import Tool

from twapi import Engine, teams, with_id_callback
from twmcp.params import (
    bind_group,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_numeric_pointer_param,
    optional_param,
    optional_pointer_param,
    required_numeric_param,
    required_param,
)
from twmcp.registry import PAGINATION, SEARCH_TERM, integer, integer_array, log_created, schema, string, to_text


def _team_properties() -> dict:
    return {
        "handle": string("Short handle used to mention the team"),
        "description": string("Team description"),
        "company-id": integer("Company the team belongs to"),
        "project-id": integer("Project the team belongs to"),
        "user-ids": integer_array("IDs of the team members"),
    }


TOOLS = [
    Tool(
        name="retrieve-teams",
        description="List teams of the site.",
        inputSchema=schema({"search-term": SEARCH_TERM, **PAGINATION}),
    ),
    Tool(
        name="retrieve-team",
        description="Get a team by ID.",
        inputSchema=schema({"team-id": integer("Team ID")}, required=("team-id",)),
    ),
    Tool(
        name="create-team",
        description="Create a team.",
        inputSchema=schema(
            {
                "name": string("Team name"),
                "parent-team-id": integer("Team this one is nested under"),
                **_team_properties(),
            },
            required=("name",),
        ),
    ),
    Tool(
        name="update-team",
        description="Update a team. Only the given fields change.",
        inputSchema=schema(
            {"team-id": integer("Team ID"), "name": string("New team name"), **_team_properties()},
            required=("team-id",),
        ),
    ),
    Tool(
        name="delete-team",
        description="Delete a team.",
        inputSchema=schema({"team-id": integer("Team ID")}, required=("team-id",)),
    ),
]


async def retrieve_teams(engine: Engine, arguments: dict) -> str:
    multiple = teams.Multiple()
    filters = multiple.filters
    bind_group(
        arguments,
        optional_param(filters, "search-term"),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_team(engine: Engine, arguments: dict) -> str:
    single = teams.Single()
    bind_group(arguments, required_numeric_param(single, "team-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


def _team_binders(entity) -> list:
    return [
        optional_pointer_param(entity, "handle"),
        optional_pointer_param(entity, "description"),
        optional_numeric_pointer_param(entity, "company-id"),
        optional_numeric_pointer_param(entity, "project-id"),
        optional_numeric_list_param(entity, "user-ids"),
    ]


async def create_team(engine: Engine, arguments: dict) -> str:
    create = teams.Create()
    bind_group(
        arguments,
        required_param(create, "name"),
        optional_numeric_pointer_param(create, "parent-team-id"),
        *_team_binders(create),
    )
    await engine.do(create, with_id_callback("id", log_created("team")))
    return "Team created successfully"


async def update_team(engine: Engine, arguments: dict) -> str:
    update = teams.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "team-id", attr="id"),
        optional_param(update, "name"),
        *_team_binders(update),
    )
    await engine.do(update)
    return "Team updated successfully"


async def delete_team(engine: Engine, arguments: dict) -> str:
    delete = teams.Delete()
    bind_group(arguments, required_numeric_param(delete, "team-id", attr="id"))
    await engine.do(delete)
    return "Team deleted successfully"


HANDLERS = {
    "retrieve-teams": retrieve_teams,
    "retrieve-team": retrieve_team,
    "create-team": create_team,
    "update-team": update_team,
    "delete-team": delete_team,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "teams", "Teams of the site",
        teams.Multiple, lambda team_id: teams.Single(id=team_id),
    )
