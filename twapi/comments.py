"""Comments attached to files, milestones, notebooks and tasks."""
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

# Object types a comment can be attached to.
OBJECT_TYPES = ("tasks", "messages", "milestones", "files", "notebooks")

CONTENT_TYPES = ("TEXT", "HTML")


def _web_link(server: str, comment: Dict[str, Any]) -> None:
    obj = comment.get("object")
    if "id" not in comment or not isinstance(obj, dict):
        return
    comment["webLink"] = f"{server.rstrip('/')}/#{obj.get('type')}/{obj.get('id')}?c={comment['id']}"


@dataclass
class Single(_Single):
    url = API_V3 + "/comments/{id}.json"
    envelope = "comments"

    def populate_web_link(self, server: str) -> None:
        _web_link(server, self.response)


@dataclass
class Path:
    file_id: Optional[int] = None
    file_version_id: Optional[int] = None
    milestone_id: Optional[int] = None
    notebook_id: Optional[int] = None
    task_id: Optional[int] = None


@dataclass
class Filters:
    search_term: Optional[str] = None
    user_ids: List[int] = field(default_factory=list)
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "comments"

    path: Path = field(default_factory=Path)
    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        scopes = (
            ("files", self.path.file_id),
            ("fileversions", self.path.file_version_id),
            ("milestones", self.path.milestone_id),
            ("notebooks", self.path.notebook_id),
            ("tasks", self.path.task_id),
        )
        for kind, object_id in scopes:
            if object_id:
                return f"{API_V3}/{kind}/{object_id}/comments.json"
        return API_V3 + "/comments.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "userIds": self.filters.user_ids,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }

    def populate_web_link(self, server: str) -> None:
        for comment in self.response:
            _web_link(server, comment)


@dataclass
class Object:
    """The item a comment belongs to, e.g. ``Object("tasks", 123)``."""

    type: str = ""
    id: int = 0


@dataclass
class Create(_Create):
    envelope = "comment"

    object: Object = field(default_factory=Object)
    text: str = ""
    content_type: Opt[str] = ABSENT

    def url_path(self) -> str:
        return f"/{self.object.type}/{self.object.id}/comments.json"

    def payload(self) -> Dict[str, Any]:
        return compact({"body": self.text, "contentType": self.content_type})


@dataclass
class Update(_Update):
    url = "/comments/{id}.json"
    envelope = "comment"

    text: str = ""
    content_type: Opt[str] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({"body": self.text, "content-type": self.content_type})


@dataclass
class Delete(_Delete):
    url = "/comments/{id}.json"
