#app\services\issue_ids.py
from datetime import datetime
from sqlalchemy import select, update
from sqlalchemy.orm import Session
from app.core.config import settings
from app.models.issue import Issue
from app.models.issue_sequence import IssueSequence


def issue_id_prefix(now: datetime) -> str:
    return f"{settings.issue_id_prefix}-{now.year}"


def format_issue_id(prefix: str, value: int) -> str:
    return f"{prefix}-{value:03d}"


def highest_sequence(db: Session, prefix: str) -> int:
    """Largest numeric suffix among existing ids carrying this prefix (0 if none)."""
    highest = 0
    for issue_id in db.execute(select(Issue.id).where(Issue.id.like(f"{prefix}-%"))).scalars():
        suffix = issue_id[len(prefix) + 1:]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return highest


def next_issue_id(db: Session, now: datetime) -> str:
    """Advance the per-year counter inside the caller's transaction.

    The increment is a single UPDATE, so concurrent creators queue on the
    counter row until the first one commits or rolls back. The very first
    creation of a year inserts the row; two of those racing collide on the
    primary key and the loser retries (see lifecycle.create_issue).
    """
    prefix = issue_id_prefix(now)
    result = db.execute(
        update(IssueSequence)
        .where(IssueSequence.prefix == prefix)
        .values(last_value=IssueSequence.last_value + 1)
    )
    if result.rowcount:
        value = db.execute(
            select(IssueSequence.last_value).where(IssueSequence.prefix == prefix)
        ).scalar_one()
    else:
        value = highest_sequence(db, prefix) + 1
        db.add(IssueSequence(prefix=prefix, last_value=value))
        db.flush()
    return format_issue_id(prefix, value)


def resync_sequence(db: Session, prefix: str) -> None:
    """Move the counter past any id already present (rows written outside the counter)."""
    highest = highest_sequence(db, prefix)
    db.execute(
        update(IssueSequence)
        .where(IssueSequence.prefix == prefix, IssueSequence.last_value < highest)
        .values(last_value=highest)
    )
