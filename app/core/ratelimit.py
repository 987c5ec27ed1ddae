# File: app\core\ratelimit.py
# Project: civic-issue-tracker-backend
# Auto-added for reference

from slowapi import Limiter
from slowapi.util import get_remote_address
from app.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

def issue_create_limit() -> str:
    return settings.issue_create_rate_limit
