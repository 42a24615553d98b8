"""Tests for twmcp.params: typed argument binding and validation."""
from datetime import date, datetime, time, timedelta
from types import SimpleNamespace

import pytest

from twapi import InvalidArgumentError
from twapi.entity import ABSENT
from twmcp.params import (
    bind_group,
    max_length,
    optional_date_pointer_param,
    optional_list_param,
    optional_numeric_list_param,
    optional_numeric_param,
    optional_numeric_pointer_param,
    optional_object_param,
    optional_param,
    optional_pointer_param,
    optional_time_only_pointer_param,
    optional_time_param,
    required_date_param,
    required_numeric_param,
    required_object_param,
    required_param,
    required_time_only_param,
    restrict_values,
    type_name,
    value_range,
)


def target(**fields):
    return SimpleNamespace(**fields)


def problems_of(arguments, *binders):
    with pytest.raises(InvalidArgumentError) as exc_info:
        bind_group(arguments, *binders)
    return exc_info.value.problems


# ---------------------------------------------------------------------------
# Scalars
# ---------------------------------------------------------------------------


class TestRequiredParam:
    def test_binds_string(self):
        t = target(name="")
        bind_group({"name": "Launch"}, required_param(t, "name"))
        assert t.name == "Launch"

    def test_missing(self):
        t = target(name="")
        assert problems_of({}, required_param(t, "name")) == ['field "name": is required']

    def test_null_counts_as_missing(self):
        t = target(name="")
        assert problems_of({"name": None}, required_param(t, "name")) == ['field "name": is required']

    def test_wrong_type(self):
        t = target(name="")
        assert problems_of({"name": 5}, required_param(t, "name")) == [
            'field "name": expected string, got number'
        ]

    def test_boolean(self):
        t = target(admin=False)
        bind_group({"admin": True}, required_param(t, "admin", bool))
        assert t.admin is True


class TestOptionalParam:
    def test_absent_leaves_target_untouched(self):
        t = target(description=ABSENT)
        bind_group({}, optional_param(t, "description"))
        assert t.description is ABSENT

    def test_null_leaves_target_untouched(self):
        t = target(description=ABSENT)
        bind_group({"description": None}, optional_param(t, "description"))
        assert t.description is ABSENT

    def test_dash_key_maps_to_underscore_attribute(self):
        t = target(search_term=None)
        bind_group({"search-term": "docs"}, optional_param(t, "search-term"))
        assert t.search_term == "docs"

    def test_explicit_attr(self):
        t = target(log_date=None)
        bind_group({"date": "2024-03-01"}, required_date_param(t, "date", attr="log_date"))
        assert t.log_date == date(2024, 3, 1)


class TestPointerParam:
    def test_null_is_stored(self):
        t = target(description=ABSENT)
        bind_group({"description": None}, optional_pointer_param(t, "description"))
        assert t.description is None

    def test_value_is_stored(self):
        t = target(description=ABSENT)
        bind_group({"description": "text"}, optional_pointer_param(t, "description"))
        assert t.description == "text"

    def test_numeric_pointer_null(self):
        t = target(owner_id=ABSENT)
        bind_group({"owner-id": None}, optional_numeric_pointer_param(t, "owner-id"))
        assert t.owner_id is None


class TestNumericParam:
    def test_integral_float_is_int(self):
        t = target(id=0)
        bind_group({"id": 12.0}, required_numeric_param(t, "id"))
        assert t.id == 12 and isinstance(t.id, int)

    def test_fractional_rejected_for_int(self):
        t = target(id=0)
        assert problems_of({"id": 1.5}, required_numeric_param(t, "id")) == [
            'field "id": expected integer, got fractional number'
        ]

    def test_boolean_is_not_a_number(self):
        t = target(id=0)
        assert problems_of({"id": True}, required_numeric_param(t, "id")) == [
            'field "id": expected number, got boolean'
        ]

    def test_string_is_not_a_number(self):
        t = target(page=None)
        assert problems_of({"page": "2"}, optional_numeric_param(t, "page")) == [
            'field "page": expected number, got string'
        ]

    def test_out_of_int64_range(self):
        t = target(id=0)
        assert problems_of({"id": 1 << 64}, required_numeric_param(t, "id")) == [
            'field "id": number out of range'
        ]

    def test_float_kind(self):
        t = target(hours=None)
        bind_group({"hours": 2}, optional_numeric_param(t, "hours", float))
        assert t.hours == 2.0 and isinstance(t.hours, float)


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


class TestListParams:
    def test_numeric_list(self):
        t = target(tag_ids=[])
        bind_group({"tag-ids": [1, 2.0, 3]}, optional_numeric_list_param(t, "tag-ids"))
        assert t.tag_ids == [1, 2, 3]

    def test_bad_element_reports_index(self):
        t = target(tag_ids=[])
        assert problems_of({"tag-ids": [1, "x"]}, optional_numeric_list_param(t, "tag-ids")) == [
            'field "tag-ids": element 1: expected number, got string'
        ]

    def test_not_an_array(self):
        t = target(tag_ids=[])
        assert problems_of({"tag-ids": 7}, optional_numeric_list_param(t, "tag-ids")) == [
            'field "tag-ids": expected array, got number'
        ]

    def test_string_list_with_allowed_values(self):
        t = target(types=[])
        binder = optional_list_param(t, "types", str, restrict_values("task", "comment"))
        bind_group({"types": ["task"]}, binder)
        assert t.types == ["task"]
        assert problems_of({"types": ["task", "file"]}, binder) == [
            "field \"types\": invalid value 'file', must be one of: task, comment"
        ]


# ---------------------------------------------------------------------------
# Dates and times
# ---------------------------------------------------------------------------


class TestDates:
    def test_date(self):
        t = target(due_at=ABSENT)
        bind_group({"due-at": "2025-12-31"}, optional_date_pointer_param(t, "due-at"))
        assert t.due_at == date(2025, 12, 31)

    def test_date_null(self):
        t = target(due_at=ABSENT)
        bind_group({"due-at": None}, optional_date_pointer_param(t, "due-at"))
        assert t.due_at is None

    def test_bad_date(self):
        t = target(due_at=ABSENT)
        assert problems_of({"due-at": "31/12/2025"}, optional_date_pointer_param(t, "due-at")) == [
            "field \"due-at\": expected date in YYYY-MM-DD format, got '31/12/2025'"
        ]

    def test_required_date_missing(self):
        t = target(log_date=None)
        assert problems_of({}, required_date_param(t, "date", attr="log_date")) == [
            'field "date": is required'
        ]

    def test_time_only(self):
        t = target(log_time=None)
        bind_group({"time": "09:30:00"}, required_time_only_param(t, "time", attr="log_time"))
        assert t.log_time == time(9, 30)

    def test_time_only_pointer_rejects_bad_format(self):
        t = target(log_time=ABSENT)
        assert problems_of({"time": "9am"}, optional_time_only_pointer_param(t, "time", attr="log_time")) == [
            "field \"time\": expected time in HH:MM:SS format, got '9am'"
        ]

    def test_instant_utc(self):
        t = target(start_date=None)
        bind_group({"start-date": "2024-01-02T03:04:05Z"}, optional_time_param(t, "start-date"))
        assert t.start_date.utcoffset() == timedelta(0)
        assert t.start_date.replace(tzinfo=None) == datetime(2024, 1, 2, 3, 4, 5)

    def test_instant_with_offset(self):
        t = target(start_date=None)
        bind_group({"start-date": "2024-01-02T03:04:05+02:00"}, optional_time_param(t, "start-date"))
        assert t.start_date.utcoffset() == timedelta(hours=2)

    @pytest.mark.parametrize("value,micros", [
        ("2023-10-01T00:00:00.1Z", 100000),
        ("2023-10-01T00:00:00.12345Z", 123450),
        ("2023-10-01T00:00:00.123456789Z", 123456),
    ])
    def test_instant_fraction_of_any_length(self, value, micros):
        t = target(start_date=None)
        bind_group({"start-date": value}, optional_time_param(t, "start-date"))
        assert t.start_date.microsecond == micros

    def test_instant_without_zone_rejected(self):
        t = target(start_date=None)
        assert problems_of({"start-date": "2024-01-02T03:04:05"}, optional_time_param(t, "start-date")) == [
            "field \"start-date\": expected RFC 3339 date-time, got '2024-01-02T03:04:05'"
        ]


# ---------------------------------------------------------------------------
# Nested objects
# ---------------------------------------------------------------------------


def _group_fields(group):
    return [
        optional_numeric_list_param(group, "user-ids"),
        optional_numeric_list_param(group, "company-ids"),
    ]


def _group():
    return target(user_ids=[], company_ids=[])


class TestObjectParams:
    def test_binds_nested_fields(self):
        t = target(assignees=ABSENT)
        bind_group(
            {"assignees": {"user-ids": [1, 2]}},
            optional_object_param(t, "assignees", _group, _group_fields),
        )
        assert t.assignees.user_ids == [1, 2]
        assert t.assignees.company_ids == []

    def test_absent_optional_object(self):
        t = target(assignees=ABSENT)
        bind_group({}, optional_object_param(t, "assignees", _group, _group_fields))
        assert t.assignees is ABSENT

    def test_required_object_missing(self):
        t = target(assignees=ABSENT)
        assert problems_of({}, required_object_param(t, "assignees", _group, _group_fields)) == [
            'field "assignees": is required'
        ]

    def test_nested_problems_are_prefixed(self):
        t = target(assignees=ABSENT)
        problems = problems_of(
            {"assignees": {"user-ids": "1", "company-ids": [True]}},
            optional_object_param(t, "assignees", _group, _group_fields),
        )
        assert problems == [
            'field "assignees": field "user-ids": expected array, got string',
            'field "assignees": field "company-ids": element 0: expected number, got boolean',
        ]
        assert t.assignees is ABSENT

    def test_not_an_object(self):
        t = target(assignees=ABSENT)
        assert problems_of({"assignees": [1]}, optional_object_param(t, "assignees", _group, _group_fields)) == [
            'field "assignees": expected object, got array'
        ]


# ---------------------------------------------------------------------------
# Checks and grouping
# ---------------------------------------------------------------------------


class TestChecks:
    def test_restrict_values(self):
        t = target(priority=ABSENT)
        binder = optional_param(t, "priority", str, restrict_values("low", "medium", "high"))
        assert problems_of({"priority": "urgent"}, binder) == [
            "field \"priority\": invalid value 'urgent', must be one of: low, medium, high"
        ]
        assert t.priority is ABSENT

    def test_value_range(self):
        t = target(progress=ABSENT)
        binder = optional_numeric_param(t, "progress", int, value_range(0, 100))
        bind_group({"progress": 100}, binder)
        assert t.progress == 100
        assert problems_of({"progress": 101}, binder) == ['field "progress": must be at most 100']
        assert problems_of({"progress": -1}, binder) == ['field "progress": must be at least 0']

    def test_max_length(self):
        t = target(name="")
        binder = required_param(t, "name", str, max_length(3))
        bind_group({"name": "abc"}, binder)
        assert problems_of({"name": "abcd"}, binder) == ['field "name": must have at most 3 characters']


class TestBindGroup:
    def test_collects_every_problem(self):
        t = target(name="", tasklist_id=0, priority=ABSENT)
        with pytest.raises(InvalidArgumentError) as exc_info:
            bind_group(
                {"priority": 3},
                required_param(t, "name"),
                required_numeric_param(t, "tasklist-id"),
                optional_param(t, "priority"),
            )
        error = exc_info.value
        assert error.problems == [
            'field "name": is required',
            'field "tasklist-id": is required',
            'field "priority": expected string, got number',
        ]
        assert str(error).startswith("invalid parameters: ")

    def test_none_arguments(self):
        t = target(page=None)
        bind_group(None, optional_numeric_param(t, "page"))
        assert t.page is None


class TestTypeName:
    @pytest.mark.parametrize("value,expected", [
        (None, "null"),
        (True, "boolean"),
        (1, "number"),
        (1.5, "number"),
        ("x", "string"),
        ([], "array"),
        ({}, "object"),
    ])
    def test_json_names(self, value, expected):
        assert type_name(value) == expected
