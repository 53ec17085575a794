from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from nirapoth.core.constants import PaymentMethod, PaymentStatus
from nirapoth.schemas.common import ApiModel, PersonRef, Record
from nirapoth.schemas.fine import Fine


class Payment(Record):
    user_id: Optional[str] = None
    fine_id: Optional[str] = None
    amount: float
    transaction_id: Optional[str] = None
    payment_method: Optional[PaymentMethod] = None
    payment_status: PaymentStatus = PaymentStatus.PENDING
    paid_at: Optional[datetime] = None
    description: Optional[str] = None
    user: Optional[PersonRef] = None
    fine: Optional[Fine] = None

    @model_validator(mode="before")
    @classmethod
    def accept_short_names(cls, data):
        """Some endpoints send ``status``/``method`` instead of the long names"""
        if isinstance(data, dict):
            data = dict(data)
            if "paymentStatus" not in data and "payment_status" not in data and data.get("status"):
                data["paymentStatus"] = data["status"]
            if "paymentMethod" not in data and "payment_method" not in data and data.get("method"):
                data["paymentMethod"] = data["method"]
        return data

    @property
    def status(self) -> PaymentStatus:
        return self.payment_status


class CreatePaymentData(ApiModel):
    fine_id: str
    amount: float = Field(..., gt=0)
    payment_method: PaymentMethod
    transaction_id: Optional[str] = None


class UpdatePaymentStatusData(ApiModel):
    payment_id: str
    status: PaymentStatus
    notes: Optional[str] = None


class PaymentInitRequest(ApiModel):
    fine_id: Optional[str] = None
    fine_ids: Optional[List[str]] = None
    amount: float = Field(..., gt=0)


class PaymentInitResponse(ApiModel):
    gateway_url: Optional[str] = Field(default=None, alias="gatewayPageURL")
    session_key: Optional[str] = None
    transaction_id: str


class TransactionVerification(ApiModel):
    verified: bool
    payment_status: Optional[str] = None
    fine_status: Optional[str] = None
    reason: Optional[str] = None


class PaymentStats(ApiModel):
    total_payments: int = 0
    completed_payments: int = 0
    pending_payments: int = 0
    failed_payments: int = 0
    refunded_payments: int = 0
    total_revenue: float = 0.0
