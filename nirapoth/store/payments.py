from typing import Any, Mapping, Optional

from nirapoth.schemas.payment import CreatePaymentData, PaymentInitRequest, UpdatePaymentStatusData
from nirapoth.store.actions import DETAIL, FETCH, MUTATION, PATCH, STATS
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import thunk


class PaymentsSlice(ResourceSlice):
    name = "payments"

    @thunk("payments/fetchPayments", "Failed to fetch payments", kind=FETCH)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        return await self.api.list(self.query_params(params))

    @thunk("payments/fetchPaymentById", "Failed to fetch payment", kind=DETAIL, notify=False)
    async def fetch_payment(self, payment_id: str):
        return await self.api.get(payment_id)

    @thunk("payments/fetchStats", "Failed to fetch payment stats", kind=STATS, stats_key="payments")
    async def fetch_stats(self):
        return await self.api.get_stats()

    @thunk("payments/fetchUnpaidFines", "Failed to fetch unpaid fines", kind=STATS, stats_key="unpaid_fines")
    async def fetch_unpaid_fines(self):
        return await self.api.get_unpaid_fines()

    @thunk("payments/createPayment", "Failed to record payment", refetch=True, refresh_stats=True)
    async def create_payment(self, data: CreatePaymentData):
        return await self.api.create(data)

    @thunk("payments/updateStatus", "Failed to update payment status", kind=PATCH, refresh_stats=True)
    async def update_status(self, data: UpdatePaymentStatusData):
        return await self.api.update_status(data)

    @thunk("payments/initOnline", "Failed to start online payment", kind=MUTATION)
    async def init_online_payment(self, data: PaymentInitRequest):
        return await self.api.init_online_payment(data)

    @thunk("payments/verify", "Failed to verify transaction", kind=MUTATION, refetch=True, refresh_stats=True)
    async def verify_transaction(self, transaction_id: str):
        return await self.api.verify_transaction(transaction_id)
