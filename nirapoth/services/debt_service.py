from nirapoth.schemas.debt import DebtPaymentData, DebtSummary, OutstandingDebt, TotalDebt
from nirapoth.services.api_client import ResourceApi


class DebtApi(ResourceApi):
    """Outstanding debts left when penalties exceed the reward balance."""

    async def get_my_debts(self) -> DebtSummary:
        return await self._one("GET", "/rewards/debts", DebtSummary)

    async def get_total_debt(self) -> TotalDebt:
        return await self._one("GET", "/rewards/debts/total", TotalDebt)

    async def pay_debt(self, data: DebtPaymentData) -> OutstandingDebt:
        return await self._one("POST", "/rewards/pay-debt", OutstandingDebt, json=data)

    async def get_debt(self, debt_id: str) -> OutstandingDebt:
        return await self._one("GET", f"/rewards/debts/{debt_id}", OutstandingDebt)
