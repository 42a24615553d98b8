"""Entity contract shared by every Teamwork resource family.

An entity describes one remote call. It knows how to build its own
``httpx.Request`` (method, path, query, JSON body) and how to decode the raw
response body into its response fields. The engine never sees a URL string,
only entities.

Helpers in this module:
- ``ABSENT`` marks optional body fields that must not be sent at all
- ``compact`` builds a JSON body from a mapping, dropping absent values
- ``encode_query`` renders typed filters into query parameters
- ``Single``/``Multiple``/``Create``/``Update``/``Delete`` are the base
  operations each family specialises
"""
import json
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from typing import Any, ClassVar, Dict, List, Optional, TypeVar, Union

import httpx

from .errors import DecodeError

API_V3 = "/projects/api/v3"


class _Absent:
    """Singleton marker for "leave unchanged" optional fields."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = _Absent()

T = TypeVar("T")
# An optional body field: either a value (None means JSON null) or ABSENT.
Opt = Union[T, _Absent]


# ---------------------------------------------------------------------------
# Value encoding
# ---------------------------------------------------------------------------


def format_instant(value: datetime) -> str:
    """Render a datetime as RFC 3339 in UTC (naive values are taken as UTC)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


def to_json(value: Any) -> Any:
    """Convert typed values (dates, times, nested mappings) to JSON values."""
    if hasattr(value, "to_json"):
        return value.to_json()
    if isinstance(value, datetime):
        return format_instant(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.strftime("%H:%M:%S")
    if isinstance(value, dict):
        return compact(value)
    if isinstance(value, (list, tuple)):
        return [to_json(item) for item in value]
    return value


def compact(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Build a JSON object from ``fields``, omitting ABSENT values."""
    return {key: to_json(value) for key, value in fields.items() if value is not ABSENT}


def _query_value(value: Any) -> Optional[str]:
    if value is None or value is ABSENT:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, datetime):
        return format_instant(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        return ",".join(_query_value(item) or "" for item in value)
    if isinstance(value, str):
        return value or None
    return str(value)


def encode_query(params: Dict[str, Any]) -> List[tuple]:
    """Encode filters as query pairs.

    Strings are passed as-is, numbers in base 10, booleans as true/false,
    lists comma-joined and dates/instants in their wire formats. None,
    ABSENT, empty strings and empty lists are omitted.
    """
    pairs = []
    for key, value in params.items():
        encoded = _query_value(value)
        if encoded is not None:
            pairs.append((key, encoded))
    return pairs


class LegacyDate(date):
    """Calendar date in the ``YYYYMMDD`` form used by the v1 endpoints."""

    @classmethod
    def from_date(cls, value: date) -> "LegacyDate":
        return cls(value.year, value.month, value.day)

    def to_json(self) -> str:
        return self.strftime("%Y%m%d")


class LegacyNumericList(list):
    """List of ids sent as a comma-separated string."""

    def to_json(self) -> str:
        return ",".join(str(item) for item in self)


@dataclass
class LegacyUserGroups:
    """Users, companies and teams encoded as ``"1,2,c3,t4"``."""

    user_ids: List[int] = field(default_factory=list)
    company_ids: List[int] = field(default_factory=list)
    team_ids: List[int] = field(default_factory=list)

    def to_json(self) -> str:
        parts = [str(i) for i in self.user_ids]
        parts += [f"c{i}" for i in self.company_ids]
        parts += [f"t{i}" for i in self.team_ids]
        return ",".join(parts)


@dataclass
class UserGroups:
    """Assignees object of the v3 endpoints."""

    user_ids: List[int] = field(default_factory=list)
    company_ids: List[int] = field(default_factory=list)
    team_ids: List[int] = field(default_factory=list)

    def to_json(self) -> dict:
        return {
            "userIds": list(self.user_ids),
            "companyIds": list(self.company_ids),
            "teamIds": list(self.team_ids),
        }


def legacy_date(value: Opt[date]) -> Opt[date]:
    if value is ABSENT or value is None:
        return value
    return LegacyDate.from_date(value)


def legacy_number(value: Any) -> int:
    """Decode an id that may arrive as a JSON number or a numeric string."""
    if isinstance(value, bool):
        raise DecodeError(f"invalid legacy number: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise DecodeError(f"invalid legacy number: {value!r}")


# ---------------------------------------------------------------------------
# Request / response plumbing
# ---------------------------------------------------------------------------


def new_request(
    method: str,
    server: str,
    path: str,
    query: Optional[Dict[str, Any]] = None,
    body: Optional[Any] = None,
) -> httpx.Request:
    """Materialise a request. Authentication is added later by the engine."""
    headers = {"Accept": "application/json"}
    content = None
    if body is not None:
        headers["Content-Type"] = "application/json"
        content = json.dumps(body).encode()
    return httpx.Request(
        method,
        server.rstrip("/") + path,
        params=encode_query(query) if query else None,
        headers=headers,
        content=content,
    )


def load_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError as e:
        raise DecodeError(f"invalid JSON response: {e}") from e


def unwrap(data: Any, key: str, expected: type) -> Any:
    """Return ``data[key]`` checking that it holds the expected JSON type."""
    if not isinstance(data, dict) or key not in data:
        raise DecodeError(f'missing "{key}" envelope in response')
    value = data[key]
    if not isinstance(value, expected):
        raise DecodeError(f'unexpected type for "{key}" envelope')
    return value


@dataclass
class Page:
    """Pagination metadata from ``meta.page``."""

    page_offset: Optional[int] = None
    page_size: Optional[int] = None
    count: Optional[int] = None
    has_more: bool = False

    @classmethod
    def from_json(cls, meta: Any) -> Optional["Page"]:
        if not isinstance(meta, dict) or not isinstance(meta.get("page"), dict):
            return None
        page = meta["page"]
        return cls(
            page_offset=page.get("pageOffset"),
            page_size=page.get("pageSize"),
            count=page.get("count"),
            has_more=bool(page.get("hasMore", False)),
        )


class Entity:
    """Capability set the engine relies on."""

    def build_request(self, server: str) -> httpx.Request:
        raise NotImplementedError

    def decode_response(self, body: bytes) -> None:
        """Populate response fields. Write operations have nothing to decode."""

    def populate_web_link(self, server: str) -> None:
        """Add browser links to decoded items, when the resource has them."""

    def reset(self) -> None:
        """Clear response fields so the entity can be executed again."""


def _web_link(server: str, template: str, item: Any) -> None:
    if isinstance(item, dict) and "id" in item:
        item["webLink"] = server.rstrip("/") + template.format_map(item)


@dataclass
class Single(Entity):
    """GET one resource by id."""

    url: ClassVar[str] = ""
    envelope: ClassVar[str] = ""
    web_link: ClassVar[Optional[str]] = None

    id: int = 0
    response: Dict[str, Any] = field(default_factory=dict)

    def build_request(self, server: str) -> httpx.Request:
        return new_request("GET", server, self.url.format(id=self.id))

    def decode_response(self, body: bytes) -> None:
        self.response = self.normalize(unwrap(load_json(body), self.envelope, dict))

    def normalize(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return item

    def populate_web_link(self, server: str) -> None:
        if self.web_link:
            _web_link(server, self.web_link, self.response)

    def reset(self) -> None:
        self.response = {}


@dataclass
class Multiple(Entity):
    """GET a list; subclasses add ``path`` and ``filters`` fields."""

    envelope: ClassVar[str] = ""
    web_link: ClassVar[Optional[str]] = None

    response: List[Dict[str, Any]] = field(default_factory=list)
    meta: Optional[Page] = None

    def url_path(self) -> str:
        raise NotImplementedError

    def query(self) -> Dict[str, Any]:
        return {}

    def build_request(self, server: str) -> httpx.Request:
        return new_request("GET", server, self.url_path(), query=self.query())

    def decode_response(self, body: bytes) -> None:
        data = load_json(body)
        items = unwrap(data, self.envelope, list)
        self.response = [self.normalize(item) for item in items]
        self.meta = Page.from_json(data.get("meta"))

    def normalize(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return item

    def populate_web_link(self, server: str) -> None:
        if self.web_link:
            for item in self.response:
                _web_link(server, self.web_link, item)

    def reset(self) -> None:
        self.response = []
        self.meta = None


class Write(Entity):
    """POST/PUT/PATCH carrying a single-key envelope body."""

    method: ClassVar[str] = "POST"
    envelope: ClassVar[str] = ""

    def url_path(self) -> str:
        raise NotImplementedError

    def payload(self) -> Dict[str, Any]:
        raise NotImplementedError

    def body(self) -> Dict[str, Any]:
        return {self.envelope: self.payload()}

    def build_request(self, server: str) -> httpx.Request:
        return new_request(self.method, server, self.url_path(), body=self.body())


class Create(Write):
    method = "POST"


@dataclass
class Update(Write):
    method: ClassVar[str] = "PUT"
    url: ClassVar[str] = ""

    id: int = 0

    def url_path(self) -> str:
        return self.url.format(id=self.id)


@dataclass
class Delete(Entity):
    url: ClassVar[str] = ""

    id: int = 0

    def build_request(self, server: str) -> httpx.Request:
        return new_request("DELETE", server, self.url.format(id=self.id))
