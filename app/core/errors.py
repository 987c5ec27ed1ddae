# app/core/errors.py


class IssueTrackerError(Exception):
    """Base class for errors raised by the issue lifecycle and analytics services."""
    status_code = 500

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationError(IssueTrackerError):
    status_code = 400


class NotFound(IssueTrackerError):
    status_code = 404


class InternalError(IssueTrackerError):
    status_code = 500

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(detail)
