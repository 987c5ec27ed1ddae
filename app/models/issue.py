# File: app/models/issue.py
from __future__ import annotations
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import String, Float, Enum, DateTime, ForeignKey, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base

class IssueStatus(PyEnum):
    NEW = "NEW"
    ACKNOWLEDGED = "ACKNOWLEDGED"
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    REJECTED = "REJECTED"

class IssueCategory(PyEnum):
    POTHOLES = "POTHOLES"
    GARBAGE = "GARBAGE"
    STREETLIGHTS = "STREETLIGHTS"
    WATER = "WATER"
    SEWAGE = "SEWAGE"
    OTHER = "OTHER"

class Department(PyEnum):
    ROADS = "ROADS"
    SANITATION = "SANITATION"
    WATER = "WATER"
    ELECTRICITY = "ELECTRICITY"
    OTHER = "OTHER"

class Issue(Base):
    __tablename__ = "issues"

    # ISS-<year>-<seq>, see app.services.issue_ids
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), index=True)
    description: Mapped[str] = mapped_column(String(4000))
    category: Mapped[IssueCategory] = mapped_column(Enum(IssueCategory), index=True)
    status: Mapped[IssueStatus] = mapped_column(Enum(IssueStatus), default=IssueStatus.NEW, index=True)

    address: Mapped[str | None] = mapped_column(String(300), nullable=True)
    ward: Mapped[str | None] = mapped_column(String(120), nullable=True)
    city: Mapped[str | None] = mapped_column(String(120), index=True, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)

    reporter_name: Mapped[str | None] = mapped_column(String(120), nullable=True)
    reporter_phone: Mapped[str | None] = mapped_column(String(30), nullable=True)

    assigned_department: Mapped[Department | None] = mapped_column(Enum(Department), index=True, nullable=True)
    assigned_officer_name: Mapped[str | None] = mapped_column(String(120), nullable=True)

    images: Mapped[list] = mapped_column(JSON, default=list)

    # back-reference only; anonymous reports have no authority
    authority_id: Mapped[int | None] = mapped_column(ForeignKey("authorities.id", ondelete="SET NULL"), nullable=True)

    reported_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
    updated_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))

Index("ix_issues_status_category_city", Issue.status, Issue.category, Issue.city)
