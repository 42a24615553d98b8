"""Companies (clients) registered in the site."""
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

WEB_LINK = "/app/clients/{id}"


@dataclass
class Single(_Single):
    url = API_V3 + "/companies/{id}.json"
    envelope = "company"
    web_link = WEB_LINK


@dataclass
class Filters:
    search_term: Optional[str] = None
    tag_ids: List[int] = field(default_factory=list)
    match_all_tags: Optional[bool] = None
    page: Optional[int] = None
    page_size: Optional[int] = None


@dataclass
class Multiple(_Multiple):
    envelope = "companies"
    web_link = WEB_LINK

    filters: Filters = field(default_factory=Filters)

    def url_path(self) -> str:
        return API_V3 + "/companies.json"

    def query(self) -> Dict[str, Any]:
        return {
            "searchTerm": self.filters.search_term,
            "tagIds": self.filters.tag_ids,
            "matchAllTags": self.filters.match_all_tags,
            "page": self.filters.page,
            "pageSize": self.filters.page_size,
        }


@dataclass
class Details:
    """Company attributes shared by create and update."""

    name: Opt[str] = ABSENT
    address_one: Opt[str] = ABSENT
    address_two: Opt[str] = ABSENT
    city: Opt[str] = ABSENT
    state: Opt[str] = ABSENT
    zip: Opt[str] = ABSENT
    country_code: Opt[str] = ABSENT
    phone: Opt[str] = ABSENT
    fax: Opt[str] = ABSENT
    email_one: Opt[str] = ABSENT
    email_two: Opt[str] = ABSENT
    email_three: Opt[str] = ABSENT
    website: Opt[str] = ABSENT
    profile: Opt[str] = ABSENT
    manager_id: Opt[int] = ABSENT
    industry_id: Opt[int] = ABSENT
    tag_ids: Opt[List[int]] = ABSENT

    def to_json(self) -> Dict[str, Any]:
        return compact({
            "name": self.name,
            "addressOne": self.address_one,
            "addressTwo": self.address_two,
            "city": self.city,
            "state": self.state,
            "zip": self.zip,
            "countrycode": self.country_code,
            "phone": self.phone,
            "fax": self.fax,
            "emailOne": self.email_one,
            "emailTwo": self.email_two,
            "emailThree": self.email_three,
            "website": self.website,
            "profile": self.profile,
            "clientManagedBy": self.manager_id,
            "industryCatId": self.industry_id,
            "tagIds": self.tag_ids,
        })


@dataclass
class Create(_Create):
    envelope = "company"

    details: Details = field(default_factory=Details)

    def url_path(self) -> str:
        return API_V3 + "/companies.json"

    def payload(self) -> Dict[str, Any]:
        return self.details.to_json()


@dataclass
class Update(_Update):
    method = "PATCH"
    url = API_V3 + "/companies/{id}.json"
    envelope = "company"

    details: Details = field(default_factory=Details)

    def payload(self) -> Dict[str, Any]:
        return self.details.to_json()


@dataclass
class Delete(_Delete):
    url = API_V3 + "/companies/{id}.json"
