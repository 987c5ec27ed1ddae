# File: app/routers/issues.py
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List, Optional
from app.db.session import get_db
from app.schemas.analytics import AnalyticsOut
from app.schemas.auth import Actor
from app.schemas.issue import (
    IssueCreate,
    IssueDetailOut,
    IssueOut,
    StatusUpdate,
    StatusUpdateOut,
)
from app.core.ratelimit import issue_create_limit, limiter
from app.core.security import get_current_actor, get_optional_actor
from app.services import lifecycle
from app.services.analytics import compute_analytics
from app.services.projection import assigned_to, get_issue_detail, list_issues, project_issue
from app.utils.time import as_utc

router = APIRouter(prefix="/issues", tags=["issues"])


@router.get("", response_model=List[IssueOut], dependencies=[Depends(get_current_actor)])
def get_issues(
    db: Session = Depends(get_db),
    status: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    city: Optional[str] = Query(default=None),
):
    return list_issues(db, status=status, category=category, city=city)


# declared before /{issue_id} so "analytics" is not taken for an id
@router.get("/analytics", response_model=AnalyticsOut, dependencies=[Depends(get_current_actor)])
def analytics(db: Session = Depends(get_db)):
    return compute_analytics(db)


@router.get("/{issue_id}", response_model=IssueDetailOut, dependencies=[Depends(get_current_actor)])
def get_issue(issue_id: str, db: Session = Depends(get_db)):
    return get_issue_detail(db, issue_id)


@router.post("", response_model=IssueOut, status_code=201)
@limiter.limit(issue_create_limit)
def create_issue(
    request: Request,
    body: IssueCreate,
    db: Session = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
):
    obj = lifecycle.create_issue(db, body, actor=actor)
    return project_issue(obj)


@router.put("/{issue_id}/status", response_model=StatusUpdateOut)
def update_status(
    issue_id: str,
    body: StatusUpdate,
    db: Session = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    obj = lifecycle.update_status(
        db,
        issue_id,
        body.status,
        assigned_department=body.assigned_department,
        assigned_officer_name=body.assigned_officer_name,
        notes=body.notes,
        actor=actor,
    )
    return StatusUpdateOut(
        id=obj.id,
        status=obj.status.value,
        assigned_to=assigned_to(obj),
        updated_date=as_utc(obj.updated_date),
    )
