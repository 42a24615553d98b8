"""Comment tools and resources.

Comments hang off files, file versions, milestones, notebooks and tasks;
every scoped listing has its own tool so agents do not have to guess the
object type.
"""
from mcp.types import Tool

from twapi import Engine, comments, with_id_callback
from twmcp.params import (
    bind_group,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_param,
    optional_pointer_param,
    required_numeric_param,
    required_object_param,
    required_param,
    restrict_values,
)
from twmcp.registry import (
    PAGINATION,
    SEARCH_TERM,
    integer,
    integer_array,
    log_created,
    obj,
    schema,
    string,
    to_text,
)

LIST_FILTERS = {
    "search-term": SEARCH_TERM,
    "user-ids": integer_array("Only comments posted by these users"),
    **PAGINATION,
}

CONTENT_TYPE = string("Format of the comment body", enum=comments.CONTENT_TYPES)

# (tool, scope argument, description of the scope)
SCOPES = (
    ("retrieve-file-comments", "file-id", "a file"),
    ("retrieve-milestone-comments", "milestone-id", "a milestone"),
    ("retrieve-notebook-comments", "notebook-id", "a notebook"),
    ("retrieve-task-comments", "task-id", "a task"),
)

TOOLS = [
    Tool(
        name="retrieve-comments",
        description="List comments across all projects.",
        inputSchema=schema(LIST_FILTERS),
    ),
    *[
        Tool(
            name=name,
            description=f"List the comments of {what}.",
            inputSchema=schema({key: integer(f"ID of {what}"), **LIST_FILTERS}, required=(key,)),
        )
        for name, key, what in SCOPES
    ],
    Tool(
        name="retrieve-comment",
        description="Get a comment by ID.",
        inputSchema=schema({"comment-id": integer("Comment ID")}, required=("comment-id",)),
    ),
    Tool(
        name="create-comment",
        description="Comment on a task, message, milestone, file or notebook.",
        inputSchema=schema(
            {
                "object": obj(
                    "The item to comment on",
                    {
                        "type": string("Type of the item", enum=comments.OBJECT_TYPES),
                        "id": integer("ID of the item"),
                    },
                    required=("type", "id"),
                ),
                "body": string("Comment text or HTML"),
                "content-type": CONTENT_TYPE,
            },
            required=("object", "body"),
        ),
    ),
    Tool(
        name="update-comment",
        description="Replace the body of a comment.",
        inputSchema=schema(
            {
                "comment-id": integer("Comment ID"),
                "body": string("New comment text or HTML"),
                "content-type": CONTENT_TYPE,
            },
            required=("comment-id", "body"),
        ),
    ),
    Tool(
        name="delete-comment",
        description="Delete a comment.",
        inputSchema=schema({"comment-id": integer("Comment ID")}, required=("comment-id",)),
    ),
]


def _object_binders(target: comments.Object) -> list:
    return [
        required_param(target, "type", str, restrict_values(*comments.OBJECT_TYPES)),
        required_numeric_param(target, "id"),
    ]


def _scoped(key: str):
    async def handler(engine: Engine, arguments: dict) -> str:
        multiple = comments.Multiple()
        return await _retrieve(engine, multiple, arguments, required_numeric_param(multiple.path, key))
    return handler


async def _retrieve(engine: Engine, multiple: comments.Multiple, arguments: dict, *scope) -> str:
    filters = multiple.filters
    bind_group(
        arguments,
        *scope,
        optional_param(filters, "search-term"),
        optional_numeric_list_param(filters, "user-ids"),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_comments(engine: Engine, arguments: dict) -> str:
    return await _retrieve(engine, comments.Multiple(), arguments)


async def retrieve_comment(engine: Engine, arguments: dict) -> str:
    single = comments.Single()
    bind_group(arguments, required_numeric_param(single, "comment-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_comment(engine: Engine, arguments: dict) -> str:
    create = comments.Create()
    bind_group(
        arguments,
        required_object_param(create, "object", comments.Object, _object_binders),
        required_param(create, "body", attr="text"),
        optional_pointer_param(create, "content-type", str, restrict_values(*comments.CONTENT_TYPES)),
    )
    await engine.do(create, with_id_callback("id", log_created("comment")))
    return "Comment created successfully"


async def update_comment(engine: Engine, arguments: dict) -> str:
    update = comments.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "comment-id", attr="id"),
        required_param(update, "body", attr="text"),
        optional_pointer_param(update, "content-type", str, restrict_values(*comments.CONTENT_TYPES)),
    )
    await engine.do(update)
    return "Comment updated successfully"


async def delete_comment(engine: Engine, arguments: dict) -> str:
    delete = comments.Delete()
    bind_group(arguments, required_numeric_param(delete, "comment-id", attr="id"))
    await engine.do(delete)
    return "Comment deleted successfully"


HANDLERS = {
    "retrieve-comments": retrieve_comments,
    **{name: _scoped(key) for name, key, _ in SCOPES},
    "retrieve-comment": retrieve_comment,
    "create-comment": create_comment,
    "update-comment": update_comment,
    "delete-comment": delete_comment,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "comments", "Comments across all projects",
        comments.Multiple, lambda comment_id: comments.Single(id=comment_id),
    )
