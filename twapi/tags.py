"""Tags that can be attached to projects, tasks and most other items."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

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

# Tags have no page of their own; the link points to the settings screen.
WEB_LINK = "/app/settings/tags"

MAX_NAME_LENGTH = 50

ITEM_TYPES = (
    "project", "task", "tasklist", "milestone", "message",
    "timelog", "notebook", "file", "company", "link",
)


@dataclass
class Single(_Single):
    url = API_V3 + "/tags/{id}.json"
    envelope = "tag"
    web_link = WEB_LINK


@dataclass
class Filters:
    search_term: Optional[str] = None
    item_type: Optional[str] = None
    project_ids: List[int] = field(default_factory=list)
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "tags"
    web_link = WEB_LINK

    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        return API_V3 + "/tags.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "itemType": self.filters.item_type,
            "projectIds": self.filters.project_ids,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Create(_Create):
    envelope = "tag"

    name: str = ""
    project_id: Opt[int] = ABSENT

    def url_path(self) -> str:
        return API_V3 + "/tags.json"

    def payload(self) -> Dict[str, Any]:
        return compact({"name": self.name, "projectId": self.project_id})


@dataclass
class Update(_Update):
    method = "PATCH"
    url = API_V3 + "/tags/{id}.json"
    envelope = "tag"

    name: Opt[str] = ABSENT
    project_id: Opt[int] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({"name": self.name, "projectId": self.project_id})


@dataclass
class Delete(_Delete):
    url = API_V3 + "/tags/{id}.json"
