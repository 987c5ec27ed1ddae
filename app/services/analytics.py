#app\services\analytics.py
"""Fleet KPIs and department performance.

Everything is computed from one statement: each issue row joined with the
timestamps of its first response and its first resolution, both taken as
MIN() aggregates over the history ledger. A single report therefore never
mixes two states of the same issue, and an issue that was reopened and
resolved again counts its first resolution only.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from app.models.issue import Department, Issue, IssueStatus
from app.models.issue_history import IssueHistory
from app.schemas.analytics import AnalyticsOut, DepartmentPerformanceOut, KpiOut
from app.services.projection import age_in_hours, is_sla_breached
from app.utils.time import as_utc, days_between, hours_between, utcnow

RESPONSE_STATUSES = (IssueStatus.ACKNOWLEDGED, IssueStatus.IN_PROGRESS)


@dataclass
class IssueTimeline:
    status: IssueStatus
    reported_date: datetime
    assigned_department: Optional[Department] = None
    first_response_at: Optional[datetime] = None
    first_resolved_at: Optional[datetime] = None

    @property
    def response_hours(self) -> Optional[float]:
        if self.first_response_at is None:
            return None
        return hours_between(self.reported_date, self.first_response_at)

    @property
    def resolution_days(self) -> Optional[float]:
        if self.first_resolved_at is None:
            return None
        return days_between(self.reported_date, self.first_resolved_at)


def _first_entry(statuses, label: str):
    return (
        select(IssueHistory.issue_id, func.min(IssueHistory.timestamp).label(label))
        .where(IssueHistory.status.in_(statuses))
        .group_by(IssueHistory.issue_id)
        .subquery()
    )


def load_timelines(db: Session) -> List[IssueTimeline]:
    responded = _first_entry(RESPONSE_STATUSES, "first_response_at")
    resolved = _first_entry((IssueStatus.RESOLVED,), "first_resolved_at")
    rows = db.execute(
        select(
            Issue.status,
            Issue.reported_date,
            Issue.assigned_department,
            responded.c.first_response_at,
            resolved.c.first_resolved_at,
        )
        .select_from(Issue)
        .outerjoin(responded, responded.c.issue_id == Issue.id)
        .outerjoin(resolved, resolved.c.issue_id == Issue.id)
    ).all()

    return [
        IssueTimeline(
            status=status,
            reported_date=as_utc(reported),
            assigned_department=department,
            first_response_at=as_utc(response_at),
            first_resolved_at=as_utc(resolved_at),
        )
        for status, reported, department, response_at, resolved_at in rows
    ]


def _mean(values: List[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


def format_response_time(hours: Optional[float]) -> str:
    if not hours or hours <= 0:
        return "0 hours"
    if hours >= 24:
        return f"{hours / 24:.1f} days"
    return f"{hours:.1f} hours"


def format_resolution_time(days: Optional[float], empty: str = "0 days") -> str:
    if not days or days <= 0:
        return empty
    if days < 1:
        return f"{days * 24:.1f} hours"
    return f"{days:.1f} days"


def resolved_percentage(resolved: int, handled: int) -> float:
    if handled == 0:
        return 0.0
    return round(resolved / handled * 100, 2)


def summarize(timelines: List[IssueTimeline], now: Optional[datetime] = None) -> AnalyticsOut:
    now = now or utcnow()

    resolved = 0
    open_breached = 0
    for tl in timelines:
        status = tl.status
        if status == IssueStatus.RESOLVED:
            resolved += 1
        elif is_sla_breached(age_in_hours(tl.reported_date, now), status):
            open_breached += 1

    avg_response = _mean([tl.response_hours for tl in timelines if tl.response_hours is not None])
    avg_resolution = _mean([tl.resolution_days for tl in timelines if tl.resolution_days is not None])

    kpi = KpiOut(
        total_issues=len(timelines),
        resolved_issues=resolved,
        avg_response_time=format_response_time(avg_response),
        avg_resolution_time=format_resolution_time(avg_resolution),
        open_sla_breached=open_breached,
    )

    by_department: Dict[str, List[IssueTimeline]] = {}
    for tl in timelines:
        if tl.assigned_department is None:
            continue
        by_department.setdefault(tl.assigned_department.value, []).append(tl)

    performance = []
    for department, items in by_department.items():
        handled = len(items)
        done = sum(1 for tl in items if tl.status == IssueStatus.RESOLVED)
        avg_days = _mean([tl.resolution_days for tl in items if tl.resolution_days is not None])
        performance.append(DepartmentPerformanceOut(
            department=department,
            issues_handled=handled,
            avg_resolution_time=format_resolution_time(avg_days, empty="N/A"),
            resolved_percentage=resolved_percentage(done, handled),
        ))
    performance.sort(key=lambda p: (-p.issues_handled, p.department))

    return AnalyticsOut(kpi=kpi, department_performance=performance)


def compute_analytics(db: Session, now: Optional[datetime] = None) -> AnalyticsOut:
    return summarize(load_timelines(db), now)
