"""Timelogs: time entries logged against a project or a task."""
from dataclasses import dataclass, field
from datetime import date, time
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


@dataclass
class Single(_Single):
    url = API_V3 + "/time/{id}.json"
    envelope = "timelog"


@dataclass
class Path:
    project_id: Optional[int] = None
    task_id: Optional[int] = None


@dataclass
class Filters:
    tag_ids: List[int] = field(default_factory=list)
    match_all_tags: Optional[bool] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "timelogs"

    path: Path = field(default_factory=Path)
    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        if self.path.project_id:
            return f"{API_V3}/projects/{self.path.project_id}/time.json"
        if self.path.task_id:
            return f"{API_V3}/tasks/{self.path.task_id}/time.json"
        return API_V3 + "/time.json"

    def query(self) -> Dict[str, Any]:
        return {
            "tagIds": self.filters.tag_ids,
            "matchAllTags": self.filters.match_all_tags,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Create(_Create):
    """Log time on a task when ``task_id`` is set, otherwise on the project."""

    envelope = "timelog"

    project_id: int = 0
    task_id: int = 0
    log_date: Optional[date] = None
    log_time: Optional[time] = None
    hours: int = 0
    minutes: int = 0
    is_utc: bool = False
    billable: bool = False
    description: Opt[str] = ABSENT
    user_id: Opt[int] = ABSENT
    tag_ids: Opt[List[int]] = ABSENT

    def url_path(self) -> str:
        if self.task_id:
            return f"{API_V3}/tasks/{self.task_id}/time.json"
        return f"{API_V3}/projects/{self.project_id}/time.json"

    def payload(self) -> Dict[str, Any]:
        return compact({
            "description": self.description,
            "date": self.log_date,
            "time": self.log_time,
            "isUTC": self.is_utc,
            "hours": self.hours,
            "minutes": self.minutes,
            "isBillable": self.billable,
            "userId": self.user_id,
            "tagIds": self.tag_ids,
        })


@dataclass
class Update(_Update):
    method = "PATCH"
    url = API_V3 + "/time/{id}.json"
    envelope = "timelog"

    description: Opt[str] = ABSENT
    log_date: Opt[date] = ABSENT
    log_time: Opt[time] = ABSENT
    is_utc: Opt[bool] = ABSENT
    hours: Opt[int] = ABSENT
    minutes: Opt[int] = ABSENT
    billable: Opt[bool] = ABSENT
    user_id: Opt[int] = ABSENT
    tag_ids: Opt[List[int]] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({
            "description": self.description,
            "date": self.log_date,
            "time": self.log_time,
            "isUTC": self.is_utc,
            "hours": self.hours,
            "minutes": self.minutes,
            "isBillable": self.billable,
            "userId": self.user_id,
            "tagIds": self.tag_ids,
        })


@dataclass
class Delete(_Delete):
    url = API_V3 + "/time/{id}.json"
