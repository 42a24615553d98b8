"""Users (people) of the site, the authenticated user and project membership."""
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

WEB_LINK = "/app/people/{id}"

USER_TYPES = ("account", "collaborator", "contact")


@dataclass
class Single(_Single):
    url = API_V3 + "/people/{id}.json"
    envelope = "person"
    web_link = WEB_LINK


@dataclass
class Me(_Single):
    """The user that owns the API token."""

    url = API_V3 + "/me.json"
    envelope = "person"
    web_link = WEB_LINK


@dataclass
class Path:
    project_id: Optional[int] = None


@dataclass
class Filters:
    search_term: Optional[str] = None
    type: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "people"
    web_link = WEB_LINK

    path: Path = field(default_factory=Path)
    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        if self.path.project_id:
            return f"{API_V3}/projects/{self.path.project_id}/people.json"
        return API_V3 + "/people.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "userType": self.filters.type,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Create(_Create):
    envelope = "person"

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    title: Opt[str] = ABSENT
    admin: Opt[bool] = ABSENT
    type: Opt[str] = ABSENT
    company_id: Opt[int] = ABSENT

    def url_path(self) -> str:
        return "/people.json"

    def payload(self) -> Dict[str, Any]:
        return compact({
            "first-name": self.first_name,
            "last-name": self.last_name,
            "title": self.title,
            "email-address": self.email,
            "administrator": self.admin,
            "user-type": self.type,
            "company-id": self.company_id,
        })


@dataclass
class Update(_Update):
    url = "/people/{id}.json"
    envelope = "person"

    first_name: Opt[str] = ABSENT
    last_name: Opt[str] = ABSENT
    email: Opt[str] = ABSENT
    title: Opt[str] = ABSENT
    admin: Opt[bool] = ABSENT
    type: Opt[str] = ABSENT
    company_id: Opt[int] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({
            "first-name": self.first_name,
            "last-name": self.last_name,
            "title": self.title,
            "email-address": self.email,
            "administrator": self.admin,
            "user-type": self.type,
            "company-id": self.company_id,
        })


@dataclass
class Delete(_Delete):
    url = "/people/{id}.json"


@dataclass
class AddToProject(Entity):
    """Add existing users to a project."""

    project_id: int = 0
    user_ids: List[int] = field(default_factory=list)

    def build_request(self, server: str) -> httpx.Request:
        return new_request(
            "PUT", server, f"{API_V3}/projects/{self.project_id}/people.json",
            body={"userIds": list(self.user_ids)},
        )
