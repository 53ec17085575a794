from datetime import datetime
from typing import Optional

from nirapoth.core.constants import FineStatus, ViolationStatus
from nirapoth.schemas.common import ApiModel, Location, Record, VehicleRef


class ViolationType(Record):
    """A traffic rule with its base penalty ("rule" on the wire)."""
    code: str
    title: str
    description: Optional[str] = None
    penalty: Optional[float] = None
    is_active: bool = True


class FineRef(ApiModel):
    id: str
    amount: float
    status: FineStatus = FineStatus.UNPAID
    due_date: Optional[datetime] = None
    issued_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None


class Violation(Record):
    rule_id: Optional[str] = None
    vehicle_id: Optional[str] = None
    location_id: Optional[str] = None
    description: Optional[str] = None
    status: ViolationStatus = ViolationStatus.PENDING
    evidence_url: Optional[str] = None
    rule: Optional[ViolationType] = None
    vehicle: Optional[VehicleRef] = None
    location: Optional[Location] = None
    fine: Optional[FineRef] = None


class CreateViolationData(ApiModel):
    rule_id: str
    vehicle_id: str
    location_id: Optional[str] = None
    description: Optional[str] = None
    evidence_url: Optional[str] = None


class UpdateViolationStatusData(ApiModel):
    status: ViolationStatus
    notes: Optional[str] = None


class CreateViolationTypeData(ApiModel):
    code: str
    title: str
    description: str
    penalty: Optional[float] = None


class UpdateViolationTypeData(ApiModel):
    code: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    penalty: Optional[float] = None
    is_active: Optional[bool] = None


class ViolationStats(ApiModel):
    total_violations: int = 0
    pending_violations: int = 0
    confirmed_violations: int = 0
    disputed_violations: int = 0
    resolved_violations: int = 0
    total_fines: int = 0
    paid_fines: int = 0
    unpaid_fines: int = 0
    total_revenue: float = 0.0
