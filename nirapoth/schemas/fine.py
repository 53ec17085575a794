from datetime import datetime
from typing import Optional

from nirapoth.core.constants import FineStatus
from nirapoth.schemas.common import ApiModel, Record
from nirapoth.schemas.violation import Violation


class Fine(Record):
    violation_id: str
    amount: float
    status: FineStatus = FineStatus.UNPAID
    due_date: Optional[datetime] = None
    issued_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    violation: Optional[Violation] = None


class CreateFineData(ApiModel):
    violation_id: str
    amount: float
    due_date: Optional[datetime] = None


class UpdateFineData(ApiModel):
    amount: Optional[float] = None
    status: Optional[FineStatus] = None
    due_date: Optional[datetime] = None


class FineStats(ApiModel):
    total_fines: int = 0
    unpaid_fines: int = 0
    paid_fines: int = 0
    cancelled_fines: int = 0
    disputed_fines: int = 0
    total_amount: float = 0.0
    paid_amount: float = 0.0
    unpaid_amount: float = 0.0
