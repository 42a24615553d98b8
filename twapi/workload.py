"""Day-by-day capacity of users over a date range."""
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

import httpx

from .entity import API_V3, Single as _Single, load_json, new_request
from .errors import DecodeError

WORKING_HOURS = "users.workingHours.workingHoursEntry"


@dataclass
class Filters:
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    user_ids: List[int] = field(default_factory=list)
    page: Optional[int] = None
    page_size: Optional[int] = None
    include: List[str] = field(default_factory=list)


@dataclass
class Single(_Single):
    """The workload report.

    The whole response is kept: ``workload`` holds the per-user dates and
    ``included`` the working hours requested through ``filters.include``.
    Dates where a user has no capacity and is available are left out.
    """

    url = API_V3 + "/workload.json"

    filters: Filters = field(default_factory=Filters)

    def build_request(self, server: str) -> httpx.Request:
        return new_request("GET", server, self.url, query={
            "startDate": self.filters.start_date,
            "endDate": self.filters.end_date,
            "userIds": self.filters.user_ids,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
            "include": self.filters.include,
            "omitEmptyDateEntries": True,
        })

    def decode_response(self, body: bytes) -> None:
        data = load_json(body)
        if not isinstance(data, dict) or not isinstance(data.get("workload"), dict):
            raise DecodeError('missing "workload" envelope in response')
        self.response = data
