from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime


class CamelModel(BaseModel):
    """Wire format is camelCase (reportedDate, assignedDepartment, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Location(CamelModel):
    address: Optional[str] = None
    ward: Optional[str] = None
    city: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class Reporter(CamelModel):
    name: Optional[str] = None
    phone: Optional[str] = None


# Required-ness is checked by the lifecycle engine so that a missing field
# is reported the same way whether it comes over HTTP or from a script.
class IssueCreate(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    location: Optional[Location] = None
    reporter: Optional[Reporter] = None
    images: List[str] = Field(default_factory=list)


class StatusUpdate(CamelModel):
    status: Optional[str] = None
    assigned_department: Optional[str] = None
    assigned_officer_name: Optional[str] = None
    notes: Optional[str] = None


class AssignedTo(CamelModel):
    department: str
    officer_name: Optional[str] = None


class IssueOut(CamelModel):
    id: str
    title: str
    description: str
    category: str
    status: str

    location: Location
    reporter: Reporter
    assigned_to: Optional[AssignedTo] = None

    images: List[str] = []

    reported_date: datetime
    updated_date: datetime

    # computed at read time, never stored
    sla_breached: bool
    age_in_hours: int


class HistoryEntryOut(CamelModel):
    timestamp: datetime
    status: str
    updated_by: str
    department: str
    notes: Optional[str] = None


class IssueDetailOut(IssueOut):
    history: List[HistoryEntryOut] = []


class StatusUpdateOut(CamelModel):
    id: str
    status: str
    assigned_to: Optional[AssignedTo] = None
    updated_date: datetime
