"""Timers: running clocks owned by the authenticated user.

Besides the usual CRUD operations, a timer can be paused, resumed and
completed. Those verbs POST an empty body to a sub-path of the timer.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

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


@dataclass
class Single(_Single):
    url = API_V3 + "/timers/{id}.json"
    envelope = "timer"


@dataclass
class Filters:
    user_id: Optional[int] = None
    task_id: Optional[int] = None
    project_id: Optional[int] = None
    running_timers_only: Optional[bool] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "timers"

    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        return API_V3 + "/timers.json"

    def query(self) -> Dict[str, Any]:
        return {
            "userId": self.filters.user_id,
            "taskId": self.filters.task_id,
            "projectId": self.filters.project_id,
            "runningTimersOnly": self.filters.running_timers_only,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Create(_Create):
    envelope = "timer"

    project_id: int = 0
    description: Opt[str] = ABSENT
    billable: Opt[bool] = ABSENT
    running: Opt[bool] = ABSENT
    seconds: Opt[int] = ABSENT
    stop_running_timers: Opt[bool] = ABSENT
    task_id: Opt[int] = ABSENT

    def url_path(self) -> str:
        return API_V3 + "/me/timers.json"

    def payload(self) -> Dict[str, Any]:
        return compact({
            "description": self.description,
            "isBillable": self.billable,
            "isRunning": self.running,
            "seconds": self.seconds,
            "stopRunningTimers": self.stop_running_timers,
            "projectId": self.project_id,
            "taskId": self.task_id,
        })


@dataclass
class Update(_Update):
    url = API_V3 + "/me/timers/{id}.json"
    envelope = "timer"

    description: Opt[str] = ABSENT
    billable: Opt[bool] = ABSENT
    running: Opt[bool] = ABSENT
    project_id: Opt[int] = ABSENT
    task_id: Opt[int] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({
            "description": self.description,
            "isBillable": self.billable,
            "isRunning": self.running,
            "projectId": self.project_id,
            "taskId": self.task_id,
        })


@dataclass
class Delete(_Delete):
    url = API_V3 + "/me/timers/{id}.json"


@dataclass
class _Verb(Entity):
    verb = ""

    id: int = 0

    def build_request(self, server: str) -> httpx.Request:
        return new_request("POST", server, f"{API_V3}/me/timers/{self.id}/{self.verb}.json")


@dataclass
class Pause(_Verb):
    verb = "pause"


@dataclass
class Resume(_Verb):
    verb = "resume"


@dataclass
class Complete(_Verb):
    verb = "complete"
