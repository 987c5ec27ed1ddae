# File: app\models\issue_sequence.py
# Project: civic-issue-tracker-backend
# Auto-added for reference

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column
from app.db.base import Base

class IssueSequence(Base):
    __tablename__ = "issue_sequences"

    # one row per id prefix, e.g. "ISS-2024"
    prefix: Mapped[str] = mapped_column(String(20), primary_key=True)
    last_value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
