"""Projects: the top-level containers of tasklists, milestones and time."""
from dataclasses import dataclass, field
from datetime import date
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
    legacy_date,
)

WEB_LINK = "/app/projects/{id}"


@dataclass
class Single(_Single):
    url = API_V3 + "/projects/{id}.json"
    envelope = "project"
    web_link = WEB_LINK


@dataclass
class Filters:
    search_term: Optional[str] = None
    tag_ids: List[int] = field(default_factory=list)
    match_all_tags: Optional[bool] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "projects"
    web_link = WEB_LINK

    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        return API_V3 + "/projects.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "projectTagIds": self.filters.tag_ids,
            "matchAllProjectTags": self.filters.match_all_tags,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Create(_Create):
    envelope = "project"

    name: str = ""
    company_id: int = 0
    description: Opt[str] = ABSENT
    start_at: Opt[date] = ABSENT
    end_at: Opt[date] = ABSENT
    owner_id: Opt[int] = ABSENT
    tag_ids: List[int] = field(default_factory=list)

    def url_path(self) -> str:
        return "/projects.json"

    def payload(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "description": self.description,
            "start-date": legacy_date(self.start_at),
            "end-date": legacy_date(self.end_at),
            "companyId": self.company_id,
            "projectOwnerId": self.owner_id,
            "tagIds": self.tag_ids or ABSENT,
        })


@dataclass
class Update(_Update):
    url = "/projects/{id}.json"
    envelope = "project"

    name: Opt[str] = ABSENT
    description: Opt[str] = ABSENT
    start_at: Opt[date] = ABSENT
    end_at: Opt[date] = ABSENT
    company_id: Opt[int] = ABSENT
    owner_id: Opt[int] = ABSENT
    tag_ids: Opt[List[int]] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "description": self.description,
            "start-date": legacy_date(self.start_at),
            "end-date": legacy_date(self.end_at),
            "companyId": self.company_id,
            "projectOwnerId": self.owner_id,
            "tagIds": self.tag_ids,
        })


@dataclass
class Delete(_Delete):
    url = "/projects/{id}.json"
