# File: app/models/issue_history.py
from __future__ import annotations
from datetime import datetime
from sqlalchemy import String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base
from app.models.issue import IssueStatus

class IssueHistory(Base):
    """One ledger row per status-affecting action. Rows are only ever inserted."""
    __tablename__ = "issue_history"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    issue_id: Mapped[str] = mapped_column(ForeignKey("issues.id"), index=True, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    status: Mapped[IssueStatus] = mapped_column(Enum(IssueStatus), nullable=False)
    updated_by: Mapped[str] = mapped_column(String(255), nullable=False)
    # free text: a Department, a category at intake, or "UNKNOWN"
    department: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[str | None] = mapped_column(String(2000), nullable=True)
