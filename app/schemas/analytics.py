#app\schemas\analytics.py
from pydantic import Field
from typing import List
from app.schemas.issue import CamelModel


class KpiOut(CamelModel):
    total_issues: int
    resolved_issues: int
    avg_response_time: str
    avg_resolution_time: str
    open_sla_breached: int = Field(alias="openSLABreached")


class DepartmentPerformanceOut(CamelModel):
    department: str
    issues_handled: int
    avg_resolution_time: str
    resolved_percentage: float


class AnalyticsOut(CamelModel):
    kpi: KpiOut
    department_performance: List[DepartmentPerformanceOut]
