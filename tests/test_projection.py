"""
Read-side projection: live age / SLA fields, filtering and issue detail.
"""

from datetime import timedelta

import pytest

from app.core.errors import NotFound
from app.models.issue import IssueStatus
from app.services import lifecycle
from app.services.projection import (
    age_in_hours,
    get_issue_detail,
    is_sla_breached,
    list_issues,
    project_issue,
)
from app.utils.time import utcnow


class TestDerivedFields:
    def test_age_is_floored_hours(self):
        now = utcnow()
        assert age_in_hours(now, now) == 0
        assert age_in_hours(now - timedelta(minutes=59), now) == 0
        assert age_in_hours(now - timedelta(hours=2, minutes=59), now) == 2

    def test_sla_boundary(self):
        assert is_sla_breached(48, IssueStatus.NEW) is False
        assert is_sla_breached(49, IssueStatus.NEW) is True
        assert is_sla_breached(49, IssueStatus.RESOLVED) is False
        assert is_sla_breached(49, IssueStatus.REJECTED) is True

    def test_issue_49_hours_old_is_breached_until_resolved(self, db, make_issue):
        obj = make_issue(hours_ago=49)
        out = project_issue(obj)
        assert out.age_in_hours == 49
        assert out.sla_breached is True

        obj = lifecycle.update_status(db, obj.id, "RESOLVED")
        assert project_issue(obj).sla_breached is False

    @pytest.mark.parametrize("status", ["NEW", "IN_PROGRESS", "RESOLVED"])
    def test_issue_47_hours_old_is_never_breached(self, db, make_issue, status):
        obj = make_issue(hours_ago=47)
        if status != "NEW":
            obj = lifecycle.update_status(db, obj.id, status)
        assert project_issue(obj).sla_breached is False

    def test_fresh_issue(self, make_issue):
        out = project_issue(make_issue())
        assert out.status == "NEW"
        assert out.age_in_hours == 0
        assert out.sla_breached is False
        assert out.assigned_to is None
        assert out.location.city == "Ranchi"
        assert out.reporter.name == "Rajesh Kumar"

    def test_assigned_to_projection(self, db, make_issue):
        obj = lifecycle.update_status(
            db, make_issue().id, "ACKNOWLEDGED",
            assigned_department="SANITATION", assigned_officer_name="Amit Singh",
        )
        out = project_issue(obj)
        assert out.assigned_to.department == "SANITATION"
        assert out.assigned_to.officer_name == "Amit Singh"
        dumped = out.model_dump(by_alias=True)
        assert dumped["assignedTo"] == {"department": "SANITATION", "officerName": "Amit Singh"}
        assert set(["reportedDate", "updatedDate", "slaBreached", "ageInHours"]) <= set(dumped)


class TestListIssues:
    def test_sorted_newest_first(self, db, make_issue):
        old = make_issue(hours_ago=10)
        new = make_issue(hours_ago=1)
        mid = make_issue(hours_ago=5)
        assert [i.id for i in list_issues(db)] == [new.id, mid.id, old.id]

    def test_filters_compose_with_and(self, db, make_issue):
        target = make_issue(category="GARBAGE", location={"city": "Ranchi"})
        make_issue(category="GARBAGE", location={"city": "Dhanbad"})
        make_issue(category="WATER", location={"city": "Ranchi"})
        lifecycle.update_status(db, target.id, "ACKNOWLEDGED")

        assert [i.id for i in list_issues(db, status="ACKNOWLEDGED", category="GARBAGE", city="Ranchi")] == [target.id]
        assert len(list_issues(db, category="GARBAGE")) == 2
        assert len(list_issues(db, city="Ranchi")) == 2
        assert len(list_issues(db, status="NEW")) == 2
        assert list_issues(db, status="NEW", category="GARBAGE", city="Ranchi") == []

    def test_unknown_filter_values_match_nothing(self, db, make_issue):
        make_issue()
        assert list_issues(db, status="CLOSED") == []
        assert list_issues(db, category="GRAFFITI") == []
        assert list_issues(db, city="Atlantis") == []


class TestIssueDetail:
    def test_includes_history_in_order(self, db, make_issue):
        obj = make_issue(hours_ago=6)
        start = utcnow() - timedelta(hours=4)
        lifecycle.update_status(db, obj.id, "ACKNOWLEDGED", assigned_department="ROADS", now=start)
        lifecycle.update_status(db, obj.id, "IN_PROGRESS", assigned_department="ROADS", now=start + timedelta(hours=1))

        detail = get_issue_detail(db, obj.id)
        assert [h.status for h in detail.history] == ["NEW", "ACKNOWLEDGED", "IN_PROGRESS"]
        assert detail.history[0].updated_by == "System"
        assert detail.history[1].department == "ROADS"
        stamps = [h.timestamp for h in detail.history]
        assert stamps == sorted(stamps)

    def test_unknown_issue(self, db):
        with pytest.raises(NotFound):
            get_issue_detail(db, "ISS-2024-404")

    def test_repeated_reads_are_identical_except_age(self, db, make_issue):
        obj = make_issue(hours_ago=3)
        first = get_issue_detail(db, obj.id)
        second = get_issue_detail(db, obj.id, now=utcnow() + timedelta(hours=2))

        assert second.age_in_hours >= first.age_in_hours
        a = first.model_dump(exclude={"age_in_hours"})
        b = second.model_dump(exclude={"age_in_hours"})
        assert a == b
