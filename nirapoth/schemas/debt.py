from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from nirapoth.core.constants import DebtStatus, PaymentMethod
from nirapoth.schemas.common import ApiModel, Record


class OutstandingDebt(Record):
    user_id: Optional[str] = None
    original_amount: float
    current_amount: float
    late_fees: float = 0.0
    due_date: Optional[datetime] = None
    last_penalty_date: Optional[datetime] = None
    weeks_past_due: int = 0
    status: DebtStatus = DebtStatus.OUTSTANDING
    paid_amount: float = 0.0
    paid_at: Optional[datetime] = None
    payment_reference: Optional[str] = None
    notes: Optional[str] = None

    @property
    def remaining(self) -> float:
        return round(self.current_amount - self.paid_amount, 2)


class DebtSummary(ApiModel):
    debts: List[OutstandingDebt] = Field(default_factory=list)
    total_debt: float = 0.0
    total_late_fees: float = 0.0
    debt_count: int = 0
    oldest_due_date: Optional[datetime] = None


class TotalDebt(ApiModel):
    total_debt: float = 0.0
    has_debt: Optional[bool] = None

    @model_validator(mode="after")
    def derive_has_debt(self):
        if self.has_debt is None:
            self.has_debt = self.total_debt > 0
        return self


class DebtPaymentData(ApiModel):
    debt_id: str
    amount: float = Field(..., gt=0)
    payment_method: PaymentMethod
    payment_reference: Optional[str] = None
