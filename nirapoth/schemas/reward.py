from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from nirapoth.core.constants import (
    RewardSource,
    RewardTransactionType,
    TransactionStatus,
    WithdrawalMethod,
    WithdrawalStatus,
)
from nirapoth.schemas.common import ApiModel, Record


class RewardTransaction(Record):
    user_id: Optional[str] = None
    amount: float
    type: RewardTransactionType
    source: RewardSource = RewardSource.SYSTEM
    related_report_id: Optional[str] = None
    related_violation_id: Optional[str] = None
    description: str = ""
    status: TransactionStatus = TransactionStatus.COMPLETED
    processed_at: Optional[datetime] = None


class RewardBalance(ApiModel):
    user_id: Optional[str] = None
    total_earned: float = 0.0
    total_penalties: float = 0.0
    total_fine_payments: float = 0.0
    total_outstanding_debt: float = 0.0
    total_debt_payments: float = 0.0
    current_balance: float = 0.0
    pending_rewards: float = 0.0
    withdrawable_amount: float = 0.0
    last_updated: Optional[datetime] = None


class TransactionsByType(ApiModel):
    type: str
    count: int = 0
    total: float = 0.0


class EarningsPoint(ApiModel):
    month: str
    earnings: float = 0.0
    penalties: float = 0.0
    net: float = 0.0


class RewardStats(ApiModel):
    total_transactions: int = 0
    total_earned: float = 0.0
    total_penalties: float = 0.0
    net_balance: float = 0.0
    approved_reports: int = 0
    rejected_reports: int = 0
    average_reward: float = 0.0
    this_month_earnings: float = 0.0
    last_month_earnings: float = 0.0
    transactions_by_type: List[TransactionsByType] = Field(default_factory=list)
    earnings_trend: List[EarningsPoint] = Field(default_factory=list)


class AccountDetails(ApiModel):
    account_number: Optional[str] = None
    account_name: Optional[str] = None
    bank_name: Optional[str] = None
    mobile_number: Optional[str] = None


class WithdrawalRequest(Record):
    user_id: Optional[str] = None
    amount: float
    method: WithdrawalMethod
    account_details: Any = None
    status: WithdrawalStatus = WithdrawalStatus.PENDING
    requested_at: Optional[datetime] = None
    processed_at: Optional[datetime] = None
    processed_by: Optional[str] = None
    notes: Optional[str] = None


class CreateWithdrawalData(ApiModel):
    amount: float = Field(..., gt=0)
    method: WithdrawalMethod
    account_details: AccountDetails = Field(default_factory=AccountDetails)


class ProcessWithdrawalData(ApiModel):
    status: WithdrawalStatus
    notes: Optional[str] = None


class ManualTransactionData(ApiModel):
    user_id: str
    amount: float = Field(..., gt=0)
    type: RewardTransactionType
    description: str


class AdminRewardStats(ApiModel):
    total_rewards_distributed: float = 0.0
    total_penalties_collected: float = 0.0
    pending_withdrawals: int = 0
    pending_withdrawal_amount: float = 0.0
    total_users: int = 0
    active_users: int = 0
    avg_reward_per_report: float = 0.0
