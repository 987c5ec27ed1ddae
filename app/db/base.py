# File: app\db\base.py
# Project: civic-issue-tracker-backend
# Auto-added for reference

from sqlalchemy.orm import DeclarativeBase

class Base(DeclarativeBase):
    pass
