"""Tests for the entity families: request shape and response decoding."""
import json
from datetime import date, datetime, time, timezone

import pytest

from twapi import ABSENT, DecodeError
from twapi import (
    activities,
    comments,
    companies,
    industries,
    jobroles,
    milestones,
    projects,
    skills,
    tags,
    tasklists,
    tasks,
    teams,
    timelogs,
    timers,
    users,
    workload,
)
from twapi.entity import (
    LegacyDate,
    LegacyNumericList,
    LegacyUserGroups,
    UserGroups,
    compact,
    encode_query,
    legacy_number,
)

from conftest import SERVER


def build(entity):
    return entity.build_request(SERVER)


def body_of(entity):
    return json.loads(build(entity).content)


def path_of(entity):
    return build(entity).url.path


# ---------------------------------------------------------------------------
# Encoding helpers
# ---------------------------------------------------------------------------


class TestEncodeQuery:
    def test_scalar_values(self):
        assert encode_query({"searchTerm": "docs", "page": 2, "matchAllTags": True}) == [
            ("searchTerm", "docs"), ("page", "2"), ("matchAllTags", "true"),
        ]

    def test_lists_are_comma_joined(self):
        assert encode_query({"tagIds": [1, 2, 3]}) == [("tagIds", "1,2,3")]

    def test_empty_values_are_omitted(self):
        assert encode_query({"a": None, "b": "", "c": [], "d": ABSENT, "e": False}) == [("e", "false")]

    def test_instant_is_rfc3339_utc(self):
        instant = datetime(2024, 1, 2, 5, 4, 5, tzinfo=timezone.utc)
        assert encode_query({"startDate": instant}) == [("startDate", "2024-01-02T05:04:05Z")]


class TestLegacyEncoding:
    def test_legacy_date(self):
        assert LegacyDate(2023, 1, 1).to_json() == "20230101"

    def test_legacy_numeric_list(self):
        assert LegacyNumericList([4, 5]).to_json() == "4,5"

    def test_legacy_user_groups(self):
        groups = LegacyUserGroups(user_ids=[1, 2], company_ids=[3], team_ids=[4])
        assert groups.to_json() == "1,2,c3,t4"

    def test_user_groups(self):
        assert UserGroups(user_ids=[1]).to_json() == {"userIds": [1], "companyIds": [], "teamIds": []}

    def test_compact_drops_absent_but_keeps_null(self):
        assert compact({"a": ABSENT, "b": None, "c": date(2024, 5, 6)}) == {"b": None, "c": "2024-05-06"}

    @pytest.mark.parametrize("raw,expected", [(5, 5), ("12", 12), (7.0, 7)])
    def test_legacy_number(self, raw, expected):
        assert legacy_number(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", True, 1.5, None])
    def test_legacy_number_rejects(self, raw):
        with pytest.raises(DecodeError):
            legacy_number(raw)


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


class TestProjects:
    def test_multiple_query(self):
        entity = projects.Multiple()
        entity.filters.search_term = "alpha"
        entity.filters.tag_ids = [3, 4]
        request = build(entity)
        assert request.url.path == "/projects/api/v3/projects.json"
        assert request.url.params["searchTerm"] == "alpha"
        assert request.url.params["projectTagIds"] == "3,4"

    def test_create_uses_legacy_dates(self):
        entity = projects.Create(name="Launch", start_at=date(2023, 1, 1), tag_ids=[9])
        request = build(entity)
        assert request.method == "POST"
        assert request.url.path == "/projects.json"
        assert json.loads(request.content) == {
            "project": {"name": "Launch", "start-date": "20230101", "companyId": 0, "tagIds": [9]}
        }

    def test_update_sends_only_set_fields(self):
        entity = projects.Update(id=5, description=None)
        request = build(entity)
        assert request.method == "PUT"
        assert request.url.path == "/projects/5.json"
        assert json.loads(request.content) == {"project": {"description": None}}

    def test_delete(self):
        request = build(projects.Delete(id=5))
        assert request.method == "DELETE"
        assert request.url.path == "/projects/5.json"
        assert request.content == b""


# ---------------------------------------------------------------------------
# Tasks, tasklists, milestones
# ---------------------------------------------------------------------------


class TestTasks:
    @pytest.mark.parametrize("path,expected", [
        (tasks.Path(), "/projects/api/v3/tasks.json"),
        (tasks.Path(project_id=1), "/projects/api/v3/projects/1/tasks.json"),
        (tasks.Path(tasklist_id=2), "/projects/api/v3/tasklists/2/tasks.json"),
    ])
    def test_multiple_scopes(self, path, expected):
        assert path_of(tasks.Multiple(path=path)) == expected

    def test_create_body(self):
        entity = tasks.Create(
            tasklist_id=3, name="Write docs", priority="high",
            due_at=date(2025, 2, 1), assignees=UserGroups(user_ids=[7]),
        )
        assert path_of(entity) == "/projects/api/v3/tasklists/3/tasks.json"
        assert body_of(entity) == {"task": {
            "name": "Write docs",
            "priority": "high",
            "dueAt": "2025-02-01",
            "assignees": {"userIds": [7], "companyIds": [], "teamIds": []},
        }}

    def test_update_is_patch_and_can_move_tasklist(self):
        entity = tasks.Update(id=4, tasklist_id=8, progress=50)
        request = build(entity)
        assert request.method == "PATCH"
        assert json.loads(request.content) == {"task": {"progress": 50, "tasklistId": 8}}


class TestTasklists:
    def test_create_uses_todo_list_envelope(self):
        entity = tasklists.Create(project_id=2, name="Sprint", milestone_id=6)
        assert path_of(entity) == "/projects/2/tasklists.json"
        assert body_of(entity) == {"todo-list": {"name": "Sprint", "milestone-Id": 6}}

    def test_project_scope(self):
        entity = tasklists.Multiple(path=tasklists.Path(project_id=2))
        assert path_of(entity) == "/projects/api/v3/projects/2/tasklists.json"


class TestMilestones:
    def test_create_body(self):
        entity = milestones.Create(
            project_id=1, name="Beta", due_at=date(2024, 6, 30),
            assignees=LegacyUserGroups(user_ids=[1], team_ids=[2]), tasklist_ids=[10, 11],
        )
        assert path_of(entity) == "/projects/1/milestones.json"
        assert body_of(entity) == {"milestone": {
            "title": "Beta",
            "deadline": "20240630",
            "tasklistIds": [10, 11],
            "responsible-party-ids": "1,t2",
        }}

    def test_update_clears_deadline_with_null(self):
        entity = milestones.Update(id=3, due_at=None)
        assert body_of(entity) == {"milestone": {"deadline": None}}


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------


class TestComments:
    @pytest.mark.parametrize("path,expected", [
        (comments.Path(), "/projects/api/v3/comments.json"),
        (comments.Path(file_id=1), "/projects/api/v3/files/1/comments.json"),
        (comments.Path(milestone_id=2), "/projects/api/v3/milestones/2/comments.json"),
        (comments.Path(notebook_id=3), "/projects/api/v3/notebooks/3/comments.json"),
        (comments.Path(task_id=4), "/projects/api/v3/tasks/4/comments.json"),
    ])
    def test_multiple_scopes(self, path, expected):
        assert path_of(comments.Multiple(path=path)) == expected

    def test_create_on_object(self):
        entity = comments.Create(object=comments.Object("tasks", 123), text="Looks good")
        assert path_of(entity) == "/tasks/123/comments.json"
        assert body_of(entity) == {"comment": {"body": "Looks good"}}

    def test_update_body(self):
        entity = comments.Update(id=5, text="<p>new</p>", content_type="HTML")
        request = build(entity)
        assert request.method == "PUT"
        assert request.url.path == "/comments/5.json"
        assert json.loads(request.content) == {"comment": {"body": "<p>new</p>", "content-type": "HTML"}}

    def test_web_link(self):
        entity = comments.Single(id=9)
        entity.decode_response(json.dumps(
            {"comments": {"id": 9, "object": {"type": "tasks", "id": 123}}}
        ).encode())
        entity.populate_web_link(SERVER)
        assert entity.response["webLink"] == f"{SERVER}/#tasks/123?c=9"


# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------


class TestTimelogs:
    def test_create_on_task(self):
        entity = timelogs.Create(
            task_id=5, log_date=date(2024, 3, 1), log_time=time(9, 0), hours=1, minutes=30, billable=True,
        )
        assert path_of(entity) == "/projects/api/v3/tasks/5/time.json"
        assert body_of(entity) == {"timelog": {
            "date": "2024-03-01",
            "time": "09:00:00",
            "isUTC": False,
            "hours": 1,
            "minutes": 30,
            "isBillable": True,
        }}

    def test_create_on_project(self):
        entity = timelogs.Create(project_id=2, log_date=date(2024, 3, 1), log_time=time(9, 0))
        assert path_of(entity) == "/projects/api/v3/projects/2/time.json"

    def test_update_is_patch(self):
        request = build(timelogs.Update(id=6, hours=2))
        assert request.method == "PATCH"
        assert request.url.path == "/projects/api/v3/time/6.json"
        assert json.loads(request.content) == {"timelog": {"hours": 2}}


class TestTimers:
    def test_create_targets_me(self):
        entity = timers.Create(project_id=3, running=True)
        assert path_of(entity) == "/projects/api/v3/me/timers.json"
        assert body_of(entity) == {"timer": {"isRunning": True, "projectId": 3}}

    @pytest.mark.parametrize("verb,cls", [
        ("pause", timers.Pause), ("resume", timers.Resume), ("complete", timers.Complete),
    ])
    def test_verbs_post_without_body(self, verb, cls):
        request = build(cls(id=11))
        assert request.method == "POST"
        assert request.url.path == f"/projects/api/v3/me/timers/11/{verb}.json"
        assert request.content == b""

    def test_multiple_filters(self):
        entity = timers.Multiple(filters=timers.Filters(running_timers_only=True, user_id=4))
        params = build(entity).url.params
        assert params["runningTimersOnly"] == "true"
        assert params["userId"] == "4"


# ---------------------------------------------------------------------------
# People and organisation
# ---------------------------------------------------------------------------


class TestCompanies:
    def test_create_details(self):
        entity = companies.Create(details=companies.Details(
            name="Acme", country_code="PT", manager_id=4, industry_id=2,
        ))
        assert path_of(entity) == "/projects/api/v3/companies.json"
        assert body_of(entity) == {"company": {
            "name": "Acme", "countrycode": "PT", "clientManagedBy": 4, "industryCatId": 2,
        }}

    def test_update_is_patch(self):
        assert build(companies.Update(id=1)).method == "PATCH"


class TestUsers:
    def test_me(self):
        assert path_of(users.Me()) == "/projects/api/v3/me.json"

    def test_create_body(self):
        entity = users.Create(first_name="Ada", last_name="Lovelace", email="ada@example.com", admin=True)
        assert path_of(entity) == "/people.json"
        assert body_of(entity) == {"person": {
            "first-name": "Ada",
            "last-name": "Lovelace",
            "email-address": "ada@example.com",
            "administrator": True,
        }}

    def test_add_to_project(self):
        request = build(users.AddToProject(project_id=8, user_ids=[1, 2]))
        assert request.method == "PUT"
        assert request.url.path == "/projects/api/v3/projects/8/people.json"
        assert json.loads(request.content) == {"userIds": [1, 2]}

    def test_type_filter(self):
        entity = users.Multiple(filters=users.Filters(type="contact"))
        assert build(entity).url.params["userType"] == "contact"


class TestWorkload:
    def test_query(self):
        entity = workload.Single(filters=workload.Filters(
            start_date=date(2023, 1, 1),
            end_date=date(2023, 1, 31),
            user_ids=[1, 2, 3],
            page=1,
            page_size=10,
            include=[workload.WORKING_HOURS],
        ))
        request = build(entity)
        params = request.url.params
        assert request.method == "GET"
        assert request.url.path == "/projects/api/v3/workload.json"
        assert params["startDate"] == "2023-01-01"
        assert params["endDate"] == "2023-01-31"
        assert params["userIds"] == "1,2,3"
        assert params["pageSize"] == "10"
        assert params["include"] == "users.workingHours.workingHoursEntry"
        assert params["omitEmptyDateEntries"] == "true"

    def test_keeps_included_records(self):
        entity = workload.Single()
        entity.decode_response(json.dumps({
            "workload": {"users": [{"userId": 4, "dates": {}}]},
            "included": {"users": {"4": {"id": 4, "lengthOfDay": 8}}},
        }).encode())
        assert entity.response["workload"]["users"][0]["userId"] == 4
        assert entity.response["included"]["users"]["4"]["lengthOfDay"] == 8

    def test_missing_workload(self):
        with pytest.raises(DecodeError, match="workload"):
            workload.Single().decode_response(b'{"users": []}')


class TestTeams:
    def test_legacy_ids_are_normalized(self):
        entity = teams.Multiple()
        entity.decode_response(json.dumps({"teams": [{
            "id": "12",
            "company": {"id": "3"},
            "members": [{"id": "40"}],
            "parentTeam": {"id": ""},
        }]}).encode())
        team = entity.response[0]
        assert team["id"] == 12
        assert team["company"]["id"] == 3
        assert team["members"][0]["id"] == 40
        assert team["parentTeam"]["id"] == ""

    def test_bad_legacy_id_is_decode_error(self):
        entity = teams.Single(id=1)
        with pytest.raises(DecodeError):
            entity.decode_response(b'{"team": {"id": "abc"}}')

    def test_create_user_ids_as_string(self):
        entity = teams.Create(name="Core", user_ids=[1, 2])
        assert path_of(entity) == "/teams.json"
        assert body_of(entity) == {"team": {"name": "Core", "userIds": "1,2"}}

    def test_create_without_users(self):
        assert body_of(teams.Create(name="Core")) == {"team": {"name": "Core"}}


class TestTags:
    def test_create(self):
        entity = tags.Create(name="urgent", project_id=2)
        assert body_of(entity) == {"tag": {"name": "urgent", "projectId": 2}}

    def test_web_link_points_to_settings(self):
        entity = tags.Single(id=3)
        entity.decode_response(b'{"tag": {"id": 3}}')
        entity.populate_web_link(SERVER)
        assert entity.response["webLink"] == f"{SERVER}/app/settings/tags"


class TestSkills:
    def test_create_always_sends_user_ids(self):
        assert body_of(skills.Create(name="Python")) == {"skill": {"name": "Python", "userIds": []}}


class TestJobRoles:
    def test_assign(self):
        request = build(jobroles.AssignPeople(id=5, user_ids=[1], is_primary=True))
        assert request.method == "POST"
        assert request.url.path == "/projects/api/v3/jobroles/5/people.json"
        assert json.loads(request.content) == {"users": [1], "isPrimary": True}

    def test_unassign_uses_delete(self):
        request = build(jobroles.UnassignPeople(id=5, user_ids=[1]))
        assert request.method == "DELETE"
        assert json.loads(request.content) == {"users": [1], "isPrimary": False}

    def test_include(self):
        entity = jobroles.Multiple(filters=jobroles.Filters(include=["users"]))
        assert build(entity).url.params["include"] == "users"

    def test_envelope_is_camel_case(self):
        entity = jobroles.Multiple()
        entity.decode_response(b'{"jobRoles": [{"id": 1, "name": "Dev"}]}')
        assert entity.response == [{"id": 1, "name": "Dev"}]


class TestIndustries:
    def test_legacy_path(self):
        assert path_of(industries.Multiple()) == "/industries.json"


class TestActivities:
    def test_project_scope_and_filters(self):
        entity = activities.Multiple(
            path=activities.Path(project_id=7),
            filters=activities.Filters(
                start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
                log_item_types=["task", "comment"],
            ),
        )
        request = build(entity)
        assert request.url.path == "/projects/api/v3/projects/7/latestactivity.json"
        assert request.url.params["startDate"] == "2024-01-01T00:00:00Z"
        assert request.url.params["activityTypes"] == "task,comment"

    def test_site_wide(self):
        assert path_of(activities.Multiple()) == "/projects/api/v3/latestactivity.json"
