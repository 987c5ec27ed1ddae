# File: app\db\seed.py
# Project: civic-issue-tracker-backend
# Auto-added for reference
#
# Usage: python -m app.db.seed

import logging
import random
from datetime import timedelta
from sqlalchemy.orm import Session
from app.db.init_db import init_db
from app.db.session import SessionLocal
from app.schemas.auth import Actor
from app.schemas.issue import IssueCreate, Location, Reporter
from app.services import lifecycle
from app.utils.time import utcnow

SAMPLE_ISSUES = [
    {
        "title": "Large pothole on Main Road near Bus Stand",
        "description": "There is a deep pothole causing traffic issues and accidents. Urgent repair needed.",
        "category": "POTHOLES", "status": "NEW",
        "address": "Main Road, near Bus Stand", "ward": "Ward 12", "city": "Ranchi",
        "lat": 23.3441, "lng": 85.3096,
        "reporter_name": "Rajesh Kumar", "reporter_phone": "+91-98765-43210",
    },
    {
        "title": "Garbage pile near Market Area",
        "description": "Uncollected garbage for 5 days. Creating health hazard and bad smell.",
        "category": "GARBAGE", "status": "ACKNOWLEDGED",
        "address": "Market Road, Sector 5", "ward": "Ward 8", "city": "Jamshedpur",
        "lat": 22.8046, "lng": 86.2029,
        "reporter_name": "Priya Sharma", "reporter_phone": "+91-97654-32109",
        "department": "SANITATION", "officer": "Amit Singh",
    },
    {
        "title": "Street light not working on Park Street",
        "description": "All street lights are off for the past week. Dark area causing safety issues.",
        "category": "STREETLIGHTS", "status": "IN_PROGRESS",
        "address": "Park Street, Block C", "ward": "Ward 15", "city": "Ranchi",
        "lat": 23.3629, "lng": 85.3346,
        "reporter_name": "Sunita Devi", "reporter_phone": "+91-99876-54321",
        "department": "ELECTRICITY", "officer": "Manoj Yadav",
    },
    {
        "title": "Water pipe leakage causing road damage",
        "description": "Underground water pipe leaking heavily. Water wastage and road getting damaged.",
        "category": "WATER", "status": "RESOLVED",
        "address": "MG Road, near School", "ward": "Ward 3", "city": "Dhanbad",
        "lat": 23.7957, "lng": 86.4304,
        "reporter_name": "Vikash Tiwari", "reporter_phone": "+91-96543-21098",
        "department": "WATER", "officer": "Ravi Mishra",
    },
    {
        "title": "Sewage overflow in residential area",
        "description": "Blocked sewage line causing overflow in streets. Health emergency.",
        "category": "SEWAGE", "status": "ACKNOWLEDGED",
        "address": "Housing Colony, Sector 9", "ward": "Ward 20", "city": "Ranchi",
        "lat": 23.3725, "lng": 85.3235,
        "reporter_name": "Anita Kumari", "reporter_phone": "+91-94567-89012",
        "department": "SANITATION", "officer": "Santosh Kumar",
    },
    {
        "title": "Multiple potholes on Highway stretch",
        "description": "Several potholes on 2km highway stretch causing vehicle damage",
        "category": "POTHOLES", "status": "IN_PROGRESS",
        "address": "NH-33, near Toll Plaza", "ward": "Ward 25", "city": "Jamshedpur",
        "lat": 22.7925, "lng": 86.1842,
        "reporter_name": "Deepak Singh", "reporter_phone": "+91-98765-12345",
        "department": "ROADS", "officer": "Ajay Verma",
    },
    {
        "title": "No water supply for 3 days",
        "description": "Entire area without water supply. Facing severe crisis.",
        "category": "WATER", "status": "IN_PROGRESS",
        "address": "Satellite Town, Phase 2", "ward": "Ward 18", "city": "Dhanbad",
        "lat": 23.8103, "lng": 86.4402,
        "reporter_name": "Ramesh Gupta", "reporter_phone": "+91-93456-78901",
        "department": "WATER", "officer": "Suresh Pandey",
    },
    {
        "title": "Broken street light near park",
        "description": "Street light pole damaged and leaning dangerously",
        "category": "STREETLIGHTS", "status": "NEW",
        "address": "Central Park Road", "ward": "Ward 5", "city": "Ranchi",
        "lat": 23.3550, "lng": 85.3200,
        "reporter_name": "Sanjay Kumar", "reporter_phone": "+91-91234-56789",
    },
]

# offsets from the report time at which each stage is recorded
STAGES = [
    ("ACKNOWLEDGED", timedelta(hours=2), "Issue acknowledged and assigned"),
    ("IN_PROGRESS", timedelta(hours=12), "Work started on the issue"),
    ("RESOLVED", timedelta(hours=48), "Issue resolved successfully"),
]
STAGE_ORDER = [s[0] for s in STAGES]
# off the main path: acknowledged first, then closed out
REJECTED_STAGE = ("REJECTED", timedelta(hours=12), "Issue rejected after review")


def stages_for(target: str):
    if target == "NEW":
        return []
    if target in STAGE_ORDER:
        return STAGES[: STAGE_ORDER.index(target) + 1]
    if target == "REJECTED":
        return [STAGES[0], REJECTED_STAGE]
    raise ValueError(f"Unknown sample status: {target}")


def seed_issue(db: Session, sample: dict, reported_at, now=None):
    now = now or utcnow()
    obj = lifecycle.create_issue(
        db,
        IssueCreate(
            title=sample["title"],
            description=sample["description"],
            category=sample["category"],
            location=Location(
                address=sample["address"], ward=sample["ward"], city=sample["city"],
                lat=sample["lat"], lng=sample["lng"],
            ),
            reporter=Reporter(name=sample["reporter_name"], phone=sample["reporter_phone"]),
        ),
        now=reported_at,
    )

    officer = sample.get("officer")
    department = sample.get("department")
    for status, offset, note in stages_for(sample["status"]):
        obj = lifecycle.update_status(
            db,
            obj.id,
            status,
            assigned_department=department,
            assigned_officer_name=officer,
            notes=note,
            actor=Actor(email=officer) if officer else None,
            # a recent report cannot have later stages in the future
            now=min(reported_at + offset, now),
        )
    return obj


def seed(db: Session, samples=SAMPLE_ISSUES, rng=None):
    rng = rng or random.Random()
    now = utcnow()
    created = []
    for sample in samples:
        # random report time within the last 7 days
        reported_at = now - timedelta(seconds=rng.uniform(0, 7 * 24 * 3600))
        obj = seed_issue(db, sample, reported_at, now=now)
        logging.info(f"Created issue: {obj.id} - {obj.title}")
        created.append(obj)
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    db = SessionLocal()
    try:
        issues = seed(db)
        logging.info(f"Successfully seeded {len(issues)} issues")
    finally:
        db.close()
