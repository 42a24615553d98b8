"""Skill tools and resources."""
from mcp.types import Tool

from twapi import Engine, skills, with_id_callback
from twmcp.params import (
    bind_group,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    required_numeric_param,
    required_param,
)
from twmcp.registry import PAGINATION, SEARCH_TERM, integer, integer_array, log_created, schema, string, to_text

USER_IDS = integer_array("IDs of the users that have the skill")

TOOLS = [
    Tool(
        name="retrieve-skills",
        description="List skills of the site.",
        inputSchema=schema({"search-term": SEARCH_TERM, **PAGINATION}),
    ),
    Tool(
        name="retrieve-skill",
        description="Get a skill by ID.",
        inputSchema=schema({"skill-id": integer("Skill ID")}, required=("skill-id",)),
    ),
    Tool(
        name="create-skill",
        description="Create a skill and optionally give it to users.",
        inputSchema=schema({"name": string("Skill name"), "user-ids": USER_IDS}, required=("name",)),
    ),
    Tool(
        name="update-skill",
        description="Rename a skill or replace the users that have it.",
        inputSchema=schema(
            {"skill-id": integer("Skill ID"), "name": string("New skill name"), "user-ids": USER_IDS},
            required=("skill-id",),
        ),
    ),
    Tool(
        name="delete-skill",
        description="Delete a skill.",
        inputSchema=schema({"skill-id": integer("Skill ID")}, required=("skill-id",)),
    ),
]


async def retrieve_skills(engine: Engine, arguments: dict) -> str:
    multiple = skills.Multiple()
    filters = multiple.filters
    bind_group(
        arguments,
        optional_param(filters, "search-term"),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_skill(engine: Engine, arguments: dict) -> str:
    single = skills.Single()
    bind_group(arguments, required_numeric_param(single, "skill-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_skill(engine: Engine, arguments: dict) -> str:
    create = skills.Create()
    bind_group(
        arguments,
        required_param(create, "name"),
        optional_numeric_list_param(create, "user-ids"),
    )
    await engine.do(create, with_id_callback("id", log_created("skill")))
    return "Skill created successfully"


async def update_skill(engine: Engine, arguments: dict) -> str:
    update = skills.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "skill-id", attr="id"),
        optional_param(update, "name"),
        optional_numeric_list_param(update, "user-ids"),
    )
    await engine.do(update)
    return "Skill updated successfully"


async def delete_skill(engine: Engine, arguments: dict) -> str:
    delete = skills.Delete()
    bind_group(arguments, required_numeric_param(delete, "skill-id", attr="id"))
    await engine.do(delete)
    return "Skill deleted successfully"


HANDLERS = {
    "retrieve-skills": retrieve_skills,
    "retrieve-skill": retrieve_skill,
    "create-skill": create_skill,
    "update-skill": update_skill,
    "delete-skill": delete_skill,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "skills", "Skills of the site",
        skills.Multiple, lambda skill_id: skills.Single(id=skill_id),
    )
