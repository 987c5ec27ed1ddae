# File: app\db\init_db.py
# Project: civic-issue-tracker-backend
# Auto-added for reference

from app.db.base import Base
from app.db.session import engine

# register every mapped table on Base.metadata
from app.models import authority, issue, issue_history, issue_sequence  # noqa: F401

def init_db(bind=None):
    """Create missing tables. Production schemas are managed by alembic."""
    Base.metadata.create_all(bind=bind or engine)
