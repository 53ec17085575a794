from datetime import datetime
from typing import Optional

from nirapoth.schemas.common import ResourceList
from nirapoth.schemas.debt import DebtPaymentData, DebtSummary, TotalDebt
from nirapoth.store.actions import DETAIL, FETCH, PATCH, STATS, Action, Fulfilled
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.state import ResourceState
from nirapoth.store.thunk import thunk

TOTAL = "total"


class DebtState(ResourceState):
    total_debt: float = 0.0
    total_late_fees: float = 0.0
    oldest_due_date: Optional[datetime] = None

    @property
    def has_debt(self) -> bool:
        return self.total_debt > 0


class DebtSlice(ResourceSlice):
    """The citizen's outstanding debts; the list endpoint returns a summary."""

    name = "debt"
    state_class = DebtState

    def reduce(self, state: DebtState, action: Action) -> DebtState:
        if isinstance(action, Fulfilled) and isinstance(action.payload, DebtSummary):
            summary = action.payload
            listing = ResourceList.build(summary.debts, total=summary.debt_count or len(summary.debts),
                                         limit=len(summary.debts))
            reduced = super().reduce(state, action.model_copy(update={"payload": listing}))
            if reduced.data is not listing:
                return reduced
            return reduced.model_copy(update={
                "total_debt": summary.total_debt,
                "total_late_fees": summary.total_late_fees,
                "oldest_due_date": summary.oldest_due_date,
            })

        state = super().reduce(state, action)
        if isinstance(action, Fulfilled) and isinstance(action.payload, TotalDebt):
            state = state.model_copy(update={"total_debt": action.payload.total_debt})
        return state

    @thunk("debt/fetchMyDebts", "Failed to fetch debts", kind=FETCH)
    async def fetch(self):
        return await self.api.get_my_debts()

    @thunk("debt/fetchTotalDebt", "Failed to fetch total debt", kind=STATS, stats_key=TOTAL)
    async def fetch_total_debt(self):
        return await self.api.get_total_debt()

    @thunk("debt/fetchDebtDetails", "Failed to fetch debt details", kind=DETAIL, notify=False)
    async def fetch_debt(self, debt_id: str):
        return await self.api.get_debt(debt_id)

    @thunk("debt/makePayment", "Failed to process payment", kind=PATCH, refetch=True, refresh_stats=True)
    async def pay_debt(self, data: DebtPaymentData):
        return await self.api.pay_debt(data)
