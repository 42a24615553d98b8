"""Company (client) tools and resources."""
from mcp.types import Tool

from twapi import Engine, companies, with_id_callback
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
from twmcp.registry import (
    MATCH_ALL_TAGS,
    PAGINATION,
    SEARCH_TERM,
    TAG_IDS,
    integer,
    integer_array,
    log_created,
    schema,
    string,
    to_text,
)

# Plain string attributes, by argument name.
TEXT_FIELDS = {
    "address-one": "First address line",
    "address-two": "Second address line",
    "city": "City",
    "state": "State or region",
    "zip": "Postal code",
    "country-code": "Two-letter ISO country code",
    "phone": "Phone number",
    "fax": "Fax number",
    "email-one": "Primary email address",
    "email-two": "Secondary email address",
    "email-three": "Tertiary email address",
    "website": "Website URL",
    "profile": "Free-form profile text",
}


def _company_properties() -> dict:
    return {
        **{key: string(description) for key, description in TEXT_FIELDS.items()},
        "manager-id": integer("User who manages the client relationship"),
        "industry-id": integer("Industry the company belongs to, see retrieve-industries"),
        "tag-ids": integer_array("IDs of tags to apply"),
    }


TOOLS = [
    Tool(
        name="retrieve-companies",
        description="List companies (clients), optionally filtered by search term and tags.",
        inputSchema=schema({
            "search-term": SEARCH_TERM,
            "tag-ids": TAG_IDS,
            "match-all-tags": MATCH_ALL_TAGS,
            **PAGINATION,
        }),
    ),
    Tool(
        name="retrieve-company",
        description="Get a company by ID.",
        inputSchema=schema({"company-id": integer("Company ID")}, required=("company-id",)),
    ),
    Tool(
        name="create-company",
        description="Create a company (client).",
        inputSchema=schema({"name": string("Company name"), **_company_properties()}, required=("name",)),
    ),
    Tool(
        name="update-company",
        description="Update a company. Only the given fields change.",
        inputSchema=schema(
            {"company-id": integer("Company ID"), "name": string("New company name"), **_company_properties()},
            required=("company-id",),
        ),
    ),
    Tool(
        name="delete-company",
        description="Delete a company.",
        inputSchema=schema({"company-id": integer("Company ID")}, required=("company-id",)),
    ),
]


def _detail_binders(details: companies.Details) -> list:
    return [
        *[optional_pointer_param(details, key) for key in TEXT_FIELDS],
        optional_numeric_pointer_param(details, "manager-id"),
        optional_numeric_pointer_param(details, "industry-id"),
        optional_numeric_list_param(details, "tag-ids"),
    ]


async def retrieve_companies(engine: Engine, arguments: dict) -> str:
    multiple = companies.Multiple()
    filters = multiple.filters
    bind_group(
        arguments,
        optional_param(filters, "search-term"),
        optional_numeric_list_param(filters, "tag-ids"),
        optional_param(filters, "match-all-tags", bool),
        optional_numeric_param(filters, "page"),
        optional_numeric_param(filters, "page-size"),
    )
    await engine.do(multiple)
    return to_text(multiple.response)


async def retrieve_company(engine: Engine, arguments: dict) -> str:
    single = companies.Single()
    bind_group(arguments, required_numeric_param(single, "company-id", attr="id"))
    await engine.do(single)
    return to_text(single.response)


async def create_company(engine: Engine, arguments: dict) -> str:
    create = companies.Create()
    bind_group(arguments, required_param(create.details, "name"), *_detail_binders(create.details))
    await engine.do(create, with_id_callback("id", log_created("company")))
    return "Company created successfully"


async def update_company(engine: Engine, arguments: dict) -> str:
    update = companies.Update()
    bind_group(
        arguments,
        required_numeric_param(update, "company-id", attr="id"),
        optional_param(update.details, "name"),
        *_detail_binders(update.details),
    )
    await engine.do(update)
    return "Company updated successfully"


async def delete_company(engine: Engine, arguments: dict) -> str:
    delete = companies.Delete()
    bind_group(arguments, required_numeric_param(delete, "company-id", attr="id"))
    await engine.do(delete)
    return "Company deleted successfully"


HANDLERS = {
    "retrieve-companies": retrieve_companies,
    "retrieve-company": retrieve_company,
    "create-company": create_company,
    "update-company": update_company,
    "delete-company": delete_company,
}


def register(registry) -> None:
    registry.add_tools(TOOLS, HANDLERS)
    registry.add_resources(
        "companies", "Companies (clients) of the site",
        companies.Multiple, lambda company_id: companies.Single(id=company_id),
    )
