"""Skills that users can be tagged with."""
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


@dataclass
class Single(_Single):
    url = API_V3 + "/skills/{id}.json"
    envelope = "skill"


@dataclass
class Filters:
    search_term: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "skills"

    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        return API_V3 + "/skills.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Create(_Create):
    envelope = "skill"

    name: str = ""
    user_ids: List[int] = field(default_factory=list)

    def url_path(self) -> str:
        return API_V3 + "/skills.json"

    def payload(self) -> Dict[str, Any]:
        return {"name": self.name, "userIds": list(self.user_ids)}


@dataclass
class Update(_Update):
    method = "PATCH"
    url = API_V3 + "/skills/{id}.json"
    envelope = "skill"

    name: Opt[str] = ABSENT
    user_ids: Opt[List[int]] = ABSENT

    def payload(self) -> Dict[str, Any]:
        return compact({"name": self.name, "userIds": self.user_ids})


@dataclass
class Delete(_Delete):
    url = API_V3 + "/skills/{id}.json"
