from typing import Any, List, Mapping, Optional

from nirapoth.schemas.common import ResourceList
from nirapoth.schemas.reward import (
    AdminRewardStats,
    CreateWithdrawalData,
    ManualTransactionData,
    ProcessWithdrawalData,
    RewardBalance,
    RewardStats,
    RewardTransaction,
    WithdrawalRequest,
)
from nirapoth.services.api_client import ResourceApi

Params = Optional[Mapping[str, Any]]


class RewardApi(ResourceApi):

    async def get_my_balance(self) -> RewardBalance:
        return await self._one("GET", "/rewards/balance", RewardBalance)

    async def get_my_transactions(self, params: Params = None) -> ResourceList[RewardTransaction]:
        return await self._list("/rewards/transactions", "transactions", RewardTransaction, params)

    async def get_my_stats(self) -> RewardStats:
        return await self._one("GET", "/rewards/stats", RewardStats)

    async def request_withdrawal(self, data: CreateWithdrawalData) -> WithdrawalRequest:
        return await self._one("POST", "/rewards/withdraw", WithdrawalRequest, json=data)

    async def get_my_withdrawals(self) -> List[WithdrawalRequest]:
        return await self._many("/rewards/withdrawals", WithdrawalRequest)

    async def cancel_withdrawal(self, withdrawal_id: str) -> str:
        await self.client.call("DELETE", f"/rewards/withdrawals/{withdrawal_id}")
        return withdrawal_id

    # Admin

    async def get_all_transactions(self, params: Params = None) -> ResourceList[RewardTransaction]:
        return await self._list("/admin/rewards/transactions", "transactions", RewardTransaction, params)

    async def get_all_withdrawals(self, status: Optional[str] = None) -> List[WithdrawalRequest]:
        return await self._many("/admin/rewards/withdrawals", WithdrawalRequest, params={"status": status})

    async def process_withdrawal(self, withdrawal_id: str, data: ProcessWithdrawalData) -> WithdrawalRequest:
        return await self._one("PUT", f"/admin/rewards/withdrawals/{withdrawal_id}", WithdrawalRequest, json=data)

    async def get_admin_stats(self) -> AdminRewardStats:
        return await self._one("GET", "/admin/rewards/stats", AdminRewardStats)

    async def create_manual_transaction(self, data: ManualTransactionData) -> RewardTransaction:
        return await self._one("POST", "/admin/rewards/manual", RewardTransaction, json=data)
