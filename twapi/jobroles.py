"""Job roles and the people assigned to them."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import httpx

from .entity import (
    ABSENT,
    API_V3,
    Create as _Create,
    Delete as _Delete,
    Entity,
    Multiple as _Multiple,
    Opt,
    Single as _Single,
    Update as _Update,
    compact,
    new_request,
)

WEB_LINK = "/people/roles"


@dataclass
class Single(_Single):
    url = API_V3 + "/jobroles/{id}.json"
    envelope = "jobRole"
    web_link = WEB_LINK


@dataclass
class Filters:
    search_term: Optional[str] = None
    include: List[str] = field(default_factory=list)
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "jobRoles"
    web_link = WEB_LINK

    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        return API_V3 + "/jobroles.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "include": self.filters.include,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Create(_Create):
    envelope = "jobRole"

    name: str = ""

    def url_path(self) -> str:
        return API_V3 + "/jobroles.json"

    def payload(self) -> Dict[str, Any]:
        return {"name": self.name}


@dataclass
class Update(_Update):
    method = "PATCH"
    url = API_V3 + "/jobroles/{id}.json"
    envelope = "jobRole"

    name: Opt[str] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({"name": self.name})


@dataclass
class Delete(_Delete):
    url = API_V3 + "/jobroles/{id}.json"


@dataclass
class AssignPeople(Entity):
    """Give a job role to users, optionally as their primary role."""

    method = "POST"

    id: int = 0
    user_ids: List[int] = field(default_factory=list)
    is_primary: bool = False

    def build_request(self, server: str) -> httpx.Request:
        return new_request(
            self.method, server, f"{API_V3}/jobroles/{self.id}/people.json",
            body={"users": list(self.user_ids), "isPrimary": self.is_primary},
        )


@dataclass
class UnassignPeople(AssignPeople):
    method = "DELETE"
