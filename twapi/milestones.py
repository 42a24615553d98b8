"""Milestones: project checkpoints with a deadline and responsible parties."""
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from .entity import (
    ABSENT,
    API_V3,
    Create as _Create,
    Delete as _Delete,
    LegacyUserGroups,
    Multiple as _Multiple,
    Opt,
    Single as _Single,
    Update as _Update,
    compact,
    legacy_date,
)

WEB_LINK = "/app/milestones/{id}"


@dataclass
class Single(_Single):
    url = API_V3 + "/milestones/{id}.json"
    envelope = "milestone"
    web_link = WEB_LINK


@dataclass
class Path:
    project_id: Optional[int] = None


@dataclass
class Filters:
    search_term: Optional[str] = None
    tag_ids: List[int] = field(default_factory=list)
    match_all_tags: Optional[bool] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "milestones"
    web_link = WEB_LINK

    path: Path = field(default_factory=Path)
    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        if self.path.project_id:
            return f"{API_V3}/projects/{self.path.project_id}/milestones.json"
        return API_V3 + "/milestones.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "tagIds": self.filters.tag_ids,
            "matchAllTags": self.filters.match_all_tags,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Create(_Create):
    envelope = "milestone"

    project_id: int = 0
    name: str = ""
    due_at: Optional[date] = None
    assignees: LegacyUserGroups = field(default_factory=LegacyUserGroups)
    description: Opt[str] = ABSENT
    tasklist_ids: Opt[List[int]] = ABSENT
    tag_ids: Opt[List[int]] = ABSENT

    def url_path(self) -> str:
        return f"/projects/{self.project_id}/milestones.json"

    def payload(self) -> Dict[str, Any]:
        return compact({
            "title": self.name,
            "description": self.description,
            "deadline": legacy_date(self.due_at),
            "tasklistIds": self.tasklist_ids,
            "tagIds": self.tag_ids,
            "responsible-party-ids": self.assignees,
        })


@dataclass
class Update(_Update):
    url = "/milestones/{id}.json"
    envelope = "milestone"

    name: Opt[str] = ABSENT
    description: Opt[str] = ABSENT
    due_at: Opt[date] = ABSENT
    assignees: Opt[LegacyUserGroups] = ABSENT
    tasklist_ids: Opt[List[int]] = ABSENT
    tag_ids: Opt[List[int]] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({
            "title": self.name,
            "description": self.description,
            "deadline": legacy_date(self.due_at),
            "tasklistIds": self.tasklist_ids,
            "tagIds": self.tag_ids,
            "responsible-party-ids": self.assignees,
        })


@dataclass
class Delete(_Delete):
    url = "/milestones/{id}.json"
