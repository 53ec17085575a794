from typing import Any, Mapping, Optional

from nirapoth.core.feedback import FeedbackChannel
from nirapoth.schemas.reward import CreateWithdrawalData, ManualTransactionData, ProcessWithdrawalData
from nirapoth.services.reward_service import RewardApi
from nirapoth.store.actions import FETCH, STATS
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import thunk

BALANCE = "balance"
WITHDRAWALS = "withdrawals"


class RewardsSlice(ResourceSlice):
    """
    Reward transactions, balance and withdrawals.

    The list holds the citizen's own transactions, or every transaction when
    ``admin`` is set. Balance, stats and withdrawals live under ``stats``.
    """

    name = "reward"

    def __init__(
        self,
        api: RewardApi,
        feedback: Optional[FeedbackChannel] = None,
        limit: Optional[int] = None,
        admin: bool = False,
    ):
        super().__init__(api, feedback, limit)
        self.admin = admin

    @property
    def balance(self):
        return self.state.stats.get(BALANCE)

    @thunk("reward/fetchMyTransactions", "Failed to fetch transactions", kind=FETCH)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        endpoint = self.api.get_all_transactions if self.admin else self.api.get_my_transactions
        return await endpoint(self.query_params(params))

    @thunk("reward/fetchMyBalance", "Failed to fetch balance", kind=STATS, stats_key=BALANCE)
    async def fetch_balance(self):
        return await self.api.get_my_balance()

    @thunk("reward/fetchMyStats", "Failed to fetch stats", kind=STATS, stats_key="rewards")
    async def fetch_stats(self):
        return await self.api.get_my_stats()

    @thunk("reward/fetchMyWithdrawals", "Failed to fetch withdrawals", kind=STATS, stats_key=WITHDRAWALS)
    async def fetch_withdrawals(self):
        return await self.api.get_my_withdrawals()

    @thunk("reward/fetchAllWithdrawals", "Failed to fetch withdrawals", kind=STATS, stats_key="allWithdrawals")
    async def fetch_all_withdrawals(self, status: Optional[str] = None):
        return await self.api.get_all_withdrawals(status)

    @thunk("reward/fetchAdminStats", "Failed to fetch reward stats", kind=STATS, stats_key="admin")
    async def fetch_admin_stats(self):
        return await self.api.get_admin_stats()

    @thunk("reward/requestWithdrawal", "Failed to request withdrawal", refresh_stats=True)
    async def request_withdrawal(self, data: CreateWithdrawalData):
        return await self.api.request_withdrawal(data)

    @thunk("reward/cancelWithdrawal", "Failed to cancel withdrawal", refresh_stats=True)
    async def cancel_withdrawal(self, withdrawal_id: str):
        return await self.api.cancel_withdrawal(withdrawal_id)

    @thunk("reward/processWithdrawal", "Failed to process withdrawal", refresh_stats=True)
    async def process_withdrawal(self, withdrawal_id: str, data: ProcessWithdrawalData):
        return await self.api.process_withdrawal(withdrawal_id, data)

    @thunk("reward/createManualTransaction", "Failed to create transaction", refetch=True, refresh_stats=True)
    async def create_manual_transaction(self, data: ManualTransactionData):
        return await self.api.create_manual_transaction(data)
