"""Tasklists group tasks inside a project."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .entity import (
    ABSENT,
    API_V3,
    Create as _Create,
    Delete as _Delete,
    Multiple as _Multiple,
    Opt,
    Single as _Single,
    Update as _Update,
    compact,
)

WEB_LINK = "/app/tasklists/{id}"


@dataclass
class Single(_Single):
    url = API_V3 + "/tasklists/{id}.json"
    envelope = "tasklist"
    web_link = WEB_LINK


@dataclass
class Path:
    project_id: Optional[int] = None


@dataclass
class Filters:
    search_term: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "tasklists"
    web_link = WEB_LINK

    path: Path = field(default_factory=Path)
    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        if self.path.project_id:
            return f"{API_V3}/projects/{self.path.project_id}/tasklists.json"
        return API_V3 + "/tasklists.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


# The legacy endpoints wrap tasklists in a "todo-list" envelope.
@dataclass
class Create(_Create):
    envelope = "todo-list"

    project_id: int = 0
    name: str = ""
    description: Opt[str] = ABSENT
    milestone_id: Opt[int] = ABSENT

    def url_path(self) -> str:
        return f"/projects/{self.project_id}/tasklists.json"

    def payload(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "description": self.description,
            "milestone-Id": self.milestone_id,
        })


@dataclass
class Update(_Update):
    url = "/tasklists/{id}.json"
    envelope = "todo-list"

    name: Opt[str] = ABSENT
    description: Opt[str] = ABSENT
    milestone_id: Opt[int] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "description": self.description,
            "milestone-Id": self.milestone_id,
        })


@dataclass
class Delete(_Delete):
    url = "/tasklists/{id}.json"
