from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from nirapoth.core.constants import AppealStatus, ReportStatus, ReviewAction
from nirapoth.schemas.common import ApiModel, CountByKey, Location, LocationData, PersonRef, Record


class CitizenReport(Record):
    citizen_id: Optional[str] = None
    vehicle_plate: str
    violation_type: str
    description: Optional[str] = None
    evidence_url: List[str] = Field(default_factory=list)
    location_id: Optional[str] = None
    status: ReportStatus = ReportStatus.PENDING
    review_notes: Optional[str] = None
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    reward_amount: Optional[float] = None
    penalty_amount: Optional[float] = None

    # Appeal
    appeal_submitted: bool = False
    appeal_reason: Optional[str] = None
    appeal_status: Optional[AppealStatus] = None
    appeal_reviewed_by: Optional[str] = None
    appeal_reviewed_at: Optional[datetime] = None
    appeal_notes: Optional[str] = None
    additional_penalty_applied: bool = False
    additional_penalty_amount: Optional[float] = None

    location: Optional[Location] = None
    citizen: Optional[PersonRef] = None
    reviewer: Optional[PersonRef] = None
    appeal_reviewer: Optional[PersonRef] = None

    @field_validator("appeal_submitted", "additional_penalty_applied", mode="before")
    @classmethod
    def none_is_false(cls, v):
        return bool(v)


class CreateReportData(ApiModel):
    vehicle_plate: str
    violation_type: str
    description: Optional[str] = None
    evidence_urls: List[str]
    location_data: LocationData

    @field_validator("vehicle_plate")
    @classmethod
    def normalize_plate(cls, v: str) -> str:
        """Plates are submitted uppercased"""
        return v.strip().upper()


class ReviewReportData(ApiModel):
    action: ReviewAction
    review_notes: str


class AppealData(ApiModel):
    appeal_reason: str
    evidence_urls: List[str]


class ReportStats(ApiModel):
    total_reports: int = 0
    pending_reports: int = 0
    approved_reports: int = 0
    rejected_reports: int = 0
    total_rewards_earned: float = 0.0
    total_penalties_paid: float = 0.0
    approval_rate: float = 0.0


class AdminReportStats(ReportStats):
    total_rewards_distributed: float = 0.0
    total_penalties_collected: float = 0.0
    avg_review_time: float = 0.0
    reports_by_type: List[CountByKey] = Field(default_factory=list)
    reports_by_status: List[CountByKey] = Field(default_factory=list)


class ReviewStats(ApiModel):
    pending_count: int = 0
    reviewed_today: int = 0
    approval_rate: float = 0.0
    avg_review_time: float = 0.0
