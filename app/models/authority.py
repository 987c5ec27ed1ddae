# File: app\models\authority.py
# Project: civic-issue-tracker-backend
# Auto-added for reference

from __future__ import annotations
from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import String, DateTime, Enum, func
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base

class MunicipalityType(PyEnum):
    municipal_corporation = "Municipal Corporation"
    municipal_council = "Municipal Council"
    nagar_panchayat = "Nagar Panchayat"

class Authority(Base):
    __tablename__ = "authorities"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    phone: Mapped[str] = mapped_column(String(30), nullable=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    municipality_type: Mapped[MunicipalityType] = mapped_column(Enum(MunicipalityType), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
