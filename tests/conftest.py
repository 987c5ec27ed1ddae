"""
Shared pytest fixtures for the civic issue tracker test suite.

Provides:
    - _setup_db: fresh SQLite schema for every test (autouse)
    - db: SQLAlchemy session bound to the test database
    - client: FastAPI TestClient
    - authority / auth_headers: a registered municipal account and its bearer header
    - make_issue: factory creating issues through the lifecycle engine
"""

import os
import tempfile
from datetime import timedelta

# Settings are read at import time, so the environment must be in place
# before anything under app/ is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="civic-tracker-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.security import hash_password, make_token  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.init_db import init_db  # noqa: E402
from app.db.session import SessionLocal, engine  # noqa: E402
from app.main import app  # noqa: E402
from app.models.authority import Authority, MunicipalityType  # noqa: E402
from app.schemas.issue import IssueCreate  # noqa: E402
from app.services import lifecycle  # noqa: E402
from app.utils.time import utcnow  # noqa: E402


AUTHORITY_EMAIL = "officer@ranchi.gov.in"
AUTHORITY_PASSWORD = "s3cure-pass"


def issue_payload(**overrides) -> dict:
    """camelCase body accepted by POST /issues."""
    payload = {
        "title": "Large pothole on Main Road",
        "description": "Deep pothole near the bus stand causing accidents.",
        "category": "POTHOLES",
        "location": {
            "address": "Main Road, near Bus Stand",
            "ward": "Ward 12",
            "city": "Ranchi",
            "lat": 23.3441,
            "lng": 85.3096,
        },
        "reporter": {"name": "Rajesh Kumar", "phone": "+91-98765-43210"},
        "images": [],
    }
    payload.update(overrides)
    return payload


# ── DB fixtures ──────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _setup_db():
    """Drop and recreate every table before each test."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield


@pytest.fixture()
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture()
def client():
    return TestClient(app)


# ── Convenience fixtures ─────────────────────────────────────────────────


@pytest.fixture()
def authority(db):
    a = Authority(
        name="Ranchi Municipal Officer",
        email=AUTHORITY_EMAIL,
        hashed_password=hash_password(AUTHORITY_PASSWORD),
        phone="+91-90000-00000",
        city="Ranchi",
        municipality_type=MunicipalityType.municipal_corporation,
    )
    db.add(a)
    db.commit()
    db.refresh(a)
    return a


@pytest.fixture()
def auth_headers(authority):
    return {"Authorization": f"Bearer {make_token(authority.id, authority.email)}"}


@pytest.fixture()
def make_issue(db):
    """Create an issue reported `hours_ago` hours before now (default: just now)."""
    def _make(hours_ago: float = 0, actor=None, **overrides):
        now = utcnow() - timedelta(hours=hours_ago)
        return lifecycle.create_issue(db, IssueCreate(**issue_payload(**overrides)), actor=actor, now=now)
    return _make
