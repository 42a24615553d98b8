"""Tag tools and resources."""
from mcp.types import Tool

from twapi import Engine, tags, with_id_callback
from twmcp.params import (
    bind_group,
    max_length,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_numeric_pointer_param,
    optional_param,
    required_numeric_param,
    required_param,
    restrict_values,
)
from twmcp.registry import PAGINATION, SEARCH_TERM, integer, integer_array, log_created, schema, string, to_text

NAME = string(f"Tag name, at most {tags.MAX_NAME_LENGTH} characters")
PROJECT_ID = integer("Project the tag is scoped to; site-wide when omitted")

TOOLS = [
    Tool(
        name="retrieve-tags",
        description="List tags, optionally filtered by item type or project.",
        inputSchema=schema({
            "search-term": SEARCH_TERM,
            "item-type": string("Only tags used on this kind of item", enum=tags.ITEM_TYPES),
            "project-ids": integer_array("Only tags scoped to these projects"),
            **PAGINATION,
        }),
    ),
    Tool(
        name="retrieve-tag",
        description="Get a tag by ID.",
        inputSchema=schema({"tag-id": integer("Tag ID")}, required=("tag-id",)),
    ),
    Tool(
        name="create-tag",
        description="Create a tag.",
        inputSchema=schema({"name": NAME, "project-id": PROJECT_ID}, required=("name",)),
    ),
    Tool(
        name="update-tag",
        description="Rename a tag or change its project.",
        inputSchema=schema(
            {"tag-id": integer("Tag ID"), "name": NAME, "project-id": PROJECT_ID},
            required=("tag-id",),
        ),
    ),
    Tool(
        name="delete-tag",
        description="Delete a tag.",
        inputSchema=schema({"tag-id": integer("Tag ID")}, required=("tag-id",)),
    ),
]


async def retrieve_tags(engine: Engine, arguments: dict) -> str:
    multiple = tags.Multiple()
    filters = multiple.filters
    bind_group(
        arguments,
        optional_param(filters, "search-term"),
        optional_param(filters, "item-type", str, restrict_values(*tags.ITEM_TYPES)),
        optional_numeric_list_param(filters, "project-ids"),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_tag(engine: Engine, arguments: dict) -> str:
    single = tags.Single()
    bind_group(arguments, required_numeric_param(single, "tag-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_tag(engine: Engine, arguments: dict) -> str:
    create = tags.Create()
    bind_group(
        arguments,
        required_param(create, "name", str, max_length(tags.MAX_NAME_LENGTH)),
        optional_numeric_pointer_param(create, "project-id"),
    )
    await engine.do(create, with_id_callback("id", log_created("tag")))
    return "Tag created successfully"


async def update_tag(engine: Engine, arguments: dict) -> str:
    update = tags.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "tag-id", attr="id"),
        optional_param(update, "name", str, max_length(tags.MAX_NAME_LENGTH)),
        optional_numeric_pointer_param(update, "project-id"),
    )
    await engine.do(update)
    return "Tag updated successfully"


async def delete_tag(engine: Engine, arguments: dict) -> str:
    delete = tags.Delete()
    bind_group(arguments, required_numeric_param(delete, "tag-id", attr="id"))
    await engine.do(delete)
    return "Tag deleted successfully"


HANDLERS = {
    "retrieve-tags": retrieve_tags,
    "retrieve-tag": retrieve_tag,
    "create-tag": create_tag,
    "update-tag": update_tag,
    "delete-tag": delete_tag,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "tags", "Tags of the site",
        tags.Multiple, lambda tag_id: tags.Single(id=tag_id),
    )
