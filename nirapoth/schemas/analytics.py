from typing import List, Optional

from pydantic import Field

from nirapoth.schemas.common import ApiModel


class DashboardStats(ApiModel):
    total_users: int = 0
    total_violations: int = 0
    total_reports: int = 0
    pending_reports: int = 0
    total_revenue: float = 0.0
    active_accidents: int = 0
    active_cameras: int = 0


class RevenuePoint(ApiModel):
    month: str
    revenue: float = 0.0
    fines: int = 0


class ViolationPoint(ApiModel):
    hour: Optional[str] = None
    date: Optional[str] = None
    count: int = 0


class TypeBreakdown(ApiModel):
    type: str
    count: int = 0
    percentage: Optional[float] = None


class SubmissionPoint(ApiModel):
    date: str
    reports: int = 0
    approved: int = 0
    rejected: int = 0


class AnalyticsSnapshot(ApiModel):
    """Everything the admin analytics dashboard shows in one refresh."""
    dashboard: Optional[DashboardStats] = None
    revenue: List[RevenuePoint] = Field(default_factory=list)
    violations: List[ViolationPoint] = Field(default_factory=list)
    violation_types: List[TypeBreakdown] = Field(default_factory=list)
    user_submissions: List[SubmissionPoint] = Field(default_factory=list)
