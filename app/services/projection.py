#app\services\projection.py
import math
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.errors import NotFound
from app.models.issue import Issue, IssueCategory, IssueStatus
from app.models.issue_history import IssueHistory
from app.schemas.issue import (
    AssignedTo,
    HistoryEntryOut,
    IssueDetailOut,
    IssueOut,
    Location,
    Reporter,
)
from app.utils.time import as_utc, hours_between, utcnow


def age_in_hours(reported_date: datetime, now: Optional[datetime] = None) -> int:
    return math.floor(hours_between(reported_date, now or utcnow()))


def is_sla_breached(age_hours: int, status: IssueStatus) -> bool:
    return age_hours > settings.sla_hours and status != IssueStatus.RESOLVED


def assigned_to(obj: Issue) -> Optional[AssignedTo]:
    if not obj.assigned_department:
        return None
    return AssignedTo(
        department=obj.assigned_department.value,
        officer_name=obj.assigned_officer_name,
    )


def project_issue(obj: Issue, now: Optional[datetime] = None) -> IssueOut:
    """External view of an issue. Age and SLA state are derived from the clock on every call."""
    age = age_in_hours(obj.reported_date, now)
    return IssueOut(
        id=obj.id,
        title=obj.title,
        description=obj.description,
        category=obj.category.value,
        status=obj.status.value,
        location=Location(
            address=obj.address,
            ward=obj.ward,
            city=obj.city,
            lat=obj.latitude,
            lng=obj.longitude,
        ),
        reporter=Reporter(name=obj.reporter_name, phone=obj.reporter_phone),
        assigned_to=assigned_to(obj),
        images=list(obj.images or []),
        reported_date=as_utc(obj.reported_date),
        updated_date=as_utc(obj.updated_date),
        sla_breached=is_sla_breached(age, obj.status),
        age_in_hours=age,
    )


def project_history(entry: IssueHistory) -> HistoryEntryOut:
    return HistoryEntryOut(
        timestamp=as_utc(entry.timestamp),
        status=entry.status.value,
        updated_by=entry.updated_by,
        department=entry.department,
        notes=entry.notes,
    )


def issue_history(db: Session, issue_id: str) -> List[IssueHistory]:
    return (
        db.query(IssueHistory)
        .filter(IssueHistory.issue_id == issue_id)
        .order_by(IssueHistory.timestamp.asc(), IssueHistory.id.asc())
        .all()
    )


def list_issues(
    db: Session,
    status: Optional[str] = None,
    category: Optional[str] = None,
    city: Optional[str] = None,
    now: Optional[datetime] = None,
) -> List[IssueOut]:
    q = db.query(Issue)
    # a value outside the enum is an equality filter that matches nothing
    if status:
        if status not in IssueStatus.__members__:
            return []
        q = q.filter(Issue.status == IssueStatus(status))
    if category:
        if category not in IssueCategory.__members__:
            return []
        q = q.filter(Issue.category == IssueCategory(category))
    if city:
        q = q.filter(Issue.city == city)

    now = now or utcnow()
    issues = q.order_by(Issue.reported_date.desc(), Issue.id.desc()).all()
    return [project_issue(i, now) for i in issues]


def get_issue_detail(db: Session, issue_id: str, now: Optional[datetime] = None) -> IssueDetailOut:
    obj = db.query(Issue).filter(Issue.id == issue_id).first()
    if not obj:
        raise NotFound("Issue not found")
    out = project_issue(obj, now)
    return IssueDetailOut(
        **out.model_dump(),
        history=[project_history(h) for h in issue_history(db, issue_id)],
    )
