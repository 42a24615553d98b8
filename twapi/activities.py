"""Latest activity feed, site-wide or for one project."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .entity import API_V3, Multiple as _Multiple

LOG_ITEM_TYPES = (
    "message",
    "comment",
    "task",
    "tasklist",
    "taskgroup",
    "milestone",
    "file",
    "form",
    "notebook",
    "timelog",
    "task_comment",
    "notebook_comment",
    "file_comment",
    "link_comment",
    "milestone_comment",
    "project",
    "link",
    "billingInvoice",
    "risk",
    "projectUpdate",
    "reacted",
    "budget",
)


@dataclass
class Path:
    project_id: Optional[int] = None


@dataclass
class Filters:
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    log_item_types: List[str] = field(default_factory=list)
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "activities"

    path: Path = field(default_factory=Path)
    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        if self.path.project_id:
            return f"{API_V3}/projects/{self.path.project_id}/latestactivity.json"
        return API_V3 + "/latestactivity.json"

    def query(self) -> Dict[str, Any]:
        return {
            "startDate": self.filters.start_date,
            "endDate": self.filters.end_date,
            "activityTypes": self.filters.log_item_types,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }
