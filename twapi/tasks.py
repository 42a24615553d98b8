"""Tasks: units of work that live inside a tasklist."""
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
    UserGroups,
    compact,
)

WEB_LINK = "/app/tasks/{id}"

PRIORITIES = ("low", "medium", "high")


@dataclass
class Single(_Single):
    url = API_V3 + "/tasks/{id}.json"
    envelope = "task"
    web_link = WEB_LINK


@dataclass
class Path:
    project_id: Optional[int] = None
    tasklist_id: Optional[int] = None


@dataclass
class Filters:
    search_term: Optional[str] = None
    tag_ids: List[int] = field(default_factory=list)
    match_all_tags: Optional[bool] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    """Tasks across the site, or scoped to a project or a tasklist."""

    envelope = "tasks"
    web_link = WEB_LINK

    path: Path = field(default_factory=Path)
    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        if self.path.project_id:
            return f"{API_V3}/projects/{self.path.project_id}/tasks.json"
        if self.path.tasklist_id:
            return f"{API_V3}/tasklists/{self.path.tasklist_id}/tasks.json"
        return API_V3 + "/tasks.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "tagIds": self.filters.tag_ids,
            "matchAllTags": self.filters.match_all_tags,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


def _task_fields(entity) -> Dict[str, Any]:
    return {
        "name": entity.name,
        "description": entity.description,
        "priority": entity.priority,
        "progress": entity.progress,
        "startAt": entity.start_at,
        "dueAt": entity.due_at,
        "estimatedMinutes": entity.estimated_minutes,
        "assignees": entity.assignees,
        "tagIds": entity.tag_ids,
    }


@dataclass
class Create(_Create):
    envelope = "task"

    tasklist_id: int = 0
    name: str = ""
    description: Opt[str] = ABSENT
    priority: Opt[str] = ABSENT
    progress: Opt[int] = ABSENT
    start_at: Opt[date] = ABSENT
    due_at: Opt[date] = ABSENT
    estimated_minutes: Opt[int] = ABSENT
    assignees: Opt[UserGroups] = ABSENT
    tag_ids: Opt[List[int]] = ABSENT

    def url_path(self) -> str:
        return f"{API_V3}/tasklists/{self.tasklist_id}/tasks.json"

    def payload(self) -> Dict[str, Any]:
        return compact(_task_fields(self))


@dataclass
class Update(_Update):
    method = "PATCH"
    url = API_V3 + "/tasks/{id}.json"
    envelope = "task"

    tasklist_id: Opt[int] = ABSENT
    name: Opt[str] = ABSENT
    description: Opt[str] = ABSENT
    priority: Opt[str] = ABSENT
    progress: Opt[int] = ABSENT
    start_at: Opt[date] = ABSENT
    due_at: Opt[date] = ABSENT
    estimated_minutes: Opt[int] = ABSENT
    assignees: Opt[UserGroups] = ABSENT
    tag_ids: Opt[List[int]] = ABSENT

    def payload(self) -> Dict[str, Any]:
        fields = _task_fields(self)
        fields["tasklistId"] = self.tasklist_id
        return compact(fields)


@dataclass
class Delete(_Delete):
    url = API_V3 + "/tasks/{id}.json"
