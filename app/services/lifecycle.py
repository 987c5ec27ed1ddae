#app\services\lifecycle.py
"""Issue lifecycle: intake and status updates.

This module is the only writer of an issue's status, assignment and
updated_date, and the only code that appends to the issue_history ledger.
Any recognised status is accepted from any current status.
"""
import logging
from datetime import datetime
from typing import Optional, Union
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.errors import InternalError, NotFound, ValidationError
from app.models.issue import Department, Issue, IssueCategory, IssueStatus
from app.models.issue_history import IssueHistory
from app.schemas.auth import Actor
from app.schemas.issue import IssueCreate
from app.services.issue_ids import issue_id_prefix, next_issue_id, resync_sequence
from app.utils.time import as_utc, utcnow

SYSTEM_ACTOR = "System"
UNKNOWN_DEPARTMENT = "UNKNOWN"
INTAKE_NOTE = "Issue reported by citizen"


def _parse_status(value: Union[str, IssueStatus, None]) -> IssueStatus:
    if not value:
        raise ValidationError("Status is required")
    try:
        return IssueStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


def _parse_department(value: Union[str, Department, None]) -> Optional[Department]:
    if not value:
        return None
    try:
        return Department(value)
    except ValueError:
        raise ValidationError("Invalid department")


def create_issue(
    db: Session,
    data: IssueCreate,
    actor: Optional[Actor] = None,
    now: Optional[datetime] = None,
) -> Issue:
    if not (data.title or "").strip() or not data.description or not data.category or data.location is None or data.reporter is None:
        raise ValidationError("Missing required fields")
    try:
        category = IssueCategory(data.category)
    except ValueError:
        raise ValidationError("Invalid category")

    now = as_utc(now) if now else utcnow()
    prefix = issue_id_prefix(now)

    for attempt in range(1, settings.issue_id_max_attempts + 1):
        try:
            if attempt > 1:
                resync_sequence(db, prefix)
            obj = Issue(
                id=next_issue_id(db, now),
                title=data.title,
                description=data.description,
                category=category,
                status=IssueStatus.NEW,
                address=data.location.address,
                ward=data.location.ward,
                city=data.location.city,
                latitude=data.location.lat,
                longitude=data.location.lng,
                reporter_name=data.reporter.name,
                reporter_phone=data.reporter.phone,
                images=list(data.images),
                authority_id=actor.user_id if actor else None,
                reported_date=now,
                updated_date=now,
            )
            db.add(obj)
            db.flush()
            db.add(IssueHistory(
                issue_id=obj.id,
                timestamp=now,
                status=IssueStatus.NEW,
                updated_by=SYSTEM_ACTOR,
                department=category.value,
                notes=INTAKE_NOTE,
            ))
            db.commit()
        except IntegrityError:
            db.rollback()
            logging.warning(f"Issue id collision under {prefix} (attempt {attempt}), retrying")
            continue
        except SQLAlchemyError as e:
            db.rollback()
            logging.error(f"Create issue failed: {e}", exc_info=True)
            raise InternalError() from e

        db.refresh(obj)
        logging.info(f"Issue {obj.id} reported in {obj.city or 'unknown city'}")
        return obj

    logging.error(f"Could not allocate an issue id under {prefix} after {settings.issue_id_max_attempts} attempts")
    raise InternalError()


def update_status(
    db: Session,
    issue_id: str,
    status: Union[str, IssueStatus, None],
    assigned_department: Union[str, Department, None] = None,
    assigned_officer_name: Optional[str] = None,
    notes: Optional[str] = None,
    actor: Optional[Actor] = None,
    now: Optional[datetime] = None,
) -> Issue:
    new_status = _parse_status(status)
    department = _parse_department(assigned_department)

    obj = db.query(Issue).filter(Issue.id == issue_id).with_for_update().first()
    if not obj:
        raise NotFound("Issue not found")

    now = as_utc(now) if now else utcnow()

    # omitted assignment clears it
    obj.status = new_status
    obj.assigned_department = department
    obj.assigned_officer_name = assigned_officer_name or None
    obj.updated_date = now

    db.add(IssueHistory(
        issue_id=obj.id,
        timestamp=now,
        status=new_status,
        updated_by=(actor.email if actor else None) or SYSTEM_ACTOR,
        department=department.value if department else UNKNOWN_DEPARTMENT,
        notes=notes or f"Status updated to {new_status.value}",
    ))
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logging.error(f"Update status failed for {issue_id}: {e}", exc_info=True)
        raise InternalError() from e

    db.refresh(obj)
    logging.info(f"Issue {obj.id} moved to {new_status.value}")
    return obj
