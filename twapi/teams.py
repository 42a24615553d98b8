"""Teams, served by the legacy endpoints.

Legacy responses may carry ids as numeric strings ("123"); decoding turns
every id field into an int so teams serialise like the other resources.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .entity import (
    ABSENT,
    Create as _Create,
    Delete as _Delete,
    LegacyNumericList,
    Multiple as _Multiple,
    Opt,
    Single as _Single,
    Update as _Update,
    compact,
    legacy_number,
)

WEB_LINK = "/app/teams/{id}"

_ID_FIELDS = ("id", "projectId", "createdByUserId", "updatedByUserId")
_NESTED = ("company", "parentTeam", "rootTeam")


def normalize(team: Dict[str, Any]) -> Dict[str, Any]:
    for key in _ID_FIELDS:
        if team.get(key) not in (None, ""):
            team[key] = legacy_number(team[key])
    for key in _NESTED:
        nested = team.get(key)
        if isinstance(nested, dict) and nested.get("id") not in (None, ""):
            nested["id"] = legacy_number(nested["id"])
    for member in team.get("members") or []:
        if isinstance(member, dict) and member.get("id") not in (None, ""):
            member["id"] = legacy_number(member["id"])
    return team


@dataclass
class Single(_Single):
    url = "/teams/{id}.json"
    envelope = "team"
    web_link = WEB_LINK

    def normalize(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return normalize(item)


@dataclass
class Filters:
    search_term: Optional[str] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "teams"
    web_link = WEB_LINK

    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        return "/teams.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }

    def normalize(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return normalize(item)


def _user_ids(value):
    if not value:
        return ABSENT
    return LegacyNumericList(value)


@dataclass
class Create(_Create):
    envelope = "team"

    name: str = ""
    handle: Opt[str] = ABSENT
    description: Opt[str] = ABSENT
    parent_team_id: Opt[int] = ABSENT
    company_id: Opt[int] = ABSENT
    project_id: Opt[int] = ABSENT
    user_ids: List[int] = field(default_factory=list)

    def url_path(self) -> str:
        return "/teams.json"

    def payload(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "handle": self.handle,
            "description": self.description,
            "parentTeamId": self.parent_team_id,
            "companyId": self.company_id,
            "projectId": self.project_id,
            "userIds": _user_ids(self.user_ids),
        })


@dataclass
class Update(_Update):
    url = "/teams/{id}.json"
    envelope = "team"

    name: Opt[str] = ABSENT
    handle: Opt[str] = ABSENT
    description: Opt[str] = ABSENT
    company_id: Opt[int] = ABSENT
    project_id: Opt[int] = ABSENT
    user_ids: List[int] = field(default_factory=list)

    def payload(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "handle": self.handle,
            "description": self.description,
            "companyId": self.company_id,
            "projectId": self.project_id,
            "userIds": _user_ids(self.user_ids),
        })


@dataclass
class Delete(_Delete):
    url = "/teams/{id}.json"
