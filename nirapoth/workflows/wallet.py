"""
Citizen wallet: withdrawing earned rewards and paying off outstanding debt.

Debt grows by a weekly late fee on the backend, so only full payments of
the remaining amount are accepted.
"""
import logging
from typing import Optional

from nirapoth.core.constants import DEBT_LATE_FEE_PERCENT_PER_WEEK, PaymentMethod, WithdrawalMethod
from nirapoth.core.errors import ClientValidationError, RequestError
from nirapoth.core.feedback import FeedbackChannel
from nirapoth.schemas.debt import DebtPaymentData, OutstandingDebt
from nirapoth.schemas.reward import AccountDetails, CreateWithdrawalData, RewardBalance, WithdrawalRequest
from nirapoth.store.store import Store

logger = logging.getLogger(__name__)

WITHDRAWAL_REQUESTED = "Withdrawal request submitted successfully"
DEBT_PAID = "Payment Successful!"
LATE_FEE_COPY = (
    f"A late fee of {DEBT_LATE_FEE_PERCENT_PER_WEEK}% is added every week your debt stays unpaid. "
    f"Pay it in full to stop it from growing."
)


def format_amount(amount: float) -> str:
    return f"৳{amount:,.2f}"


def validate_withdrawal(balance: Optional[RewardBalance], amount: Optional[float]) -> float:
    if not amount or amount <= 0:
        raise ClientValidationError("amount", "Please enter a valid amount")
    if balance is None or amount > balance.withdrawable_amount:
        raise ClientValidationError("amount", "Insufficient withdrawable balance")
    return amount


def validate_debt_payment(debt: Optional[OutstandingDebt], amount: Optional[float]) -> float:
    if debt is None:
        raise ClientValidationError("debt_id", "Please select a debt")
    if not amount or amount < 1:
        raise ClientValidationError("amount", "Minimum payment is ৳1")
    if round(amount, 2) != debt.remaining:
        raise ClientValidationError(
            "amount",
            f"You must pay the full amount of {format_amount(debt.remaining)}. Partial payments are not allowed.",
        )
    return amount


class WalletWorkflow:
    def __init__(self, store: Store, feedback: Optional[FeedbackChannel] = None):
        self.store = store
        self.feedback = feedback or store.feedback

    def _invalid(self, error: ClientValidationError) -> None:
        self.feedback.error(error.message)
        logger.info("[WALLET] Rejected locally: %s", error.message)

    async def request_withdrawal(
        self,
        amount: float,
        method: WithdrawalMethod = WithdrawalMethod.MOBILE_BANKING,
        account_details: Optional[AccountDetails] = None,
    ) -> WithdrawalRequest:
        rewards = self.store.rewards
        if rewards.balance is None:
            await rewards.fetch_balance()
        try:
            amount = validate_withdrawal(rewards.balance, amount)
        except ClientValidationError as e:
            self._invalid(e)
            raise

        data = CreateWithdrawalData(amount=amount, method=method, account_details=account_details or AccountDetails())
        toast = self.feedback.loading("Submitting withdrawal request...")
        try:
            result = await rewards.request_withdrawal(data, unwrap=True)
        except RequestError as e:
            self.feedback.request_error(e, e.server_message or "Failed to submit withdrawal request")
            raise
        finally:
            self.feedback.dismiss(toast.id)

        withdrawal = result.payload
        logger.info("[WALLET] Withdrawal %s requested for %s", withdrawal.id, format_amount(amount))
        self.feedback.success(WITHDRAWAL_REQUESTED)
        return withdrawal

    async def pay_debt(
        self,
        debt_id: str,
        amount: float,
        payment_method: PaymentMethod = PaymentMethod.ONLINE,
        payment_reference: Optional[str] = None,
    ) -> OutstandingDebt:
        debts = self.store.debts
        debt = debts.state.data.find(debt_id) if debts.state.data else None
        try:
            amount = validate_debt_payment(debt, amount)
        except ClientValidationError as e:
            self._invalid(e)
            raise

        data = DebtPaymentData(debt_id=debt_id, amount=amount, payment_method=payment_method,
                               payment_reference=payment_reference)
        toast = self.feedback.loading("Processing payment...")
        try:
            result = await debts.pay_debt(data, unwrap=True)
        except RequestError as e:
            self.feedback.request_error(e, e.server_message or "Failed to process payment")
            raise
        finally:
            self.feedback.dismiss(toast.id)

        # Paying debt moves the reward balance back up.
        await self.store.rewards.refresh_stats()
        logger.info("[WALLET] Debt %s paid (%s)", debt_id, format_amount(amount))
        self.feedback.success(DEBT_PAID)
        return result.payload
