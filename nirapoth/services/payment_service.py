from typing import Any, List, Mapping, Optional

from nirapoth.schemas.common import ResourceList
from nirapoth.schemas.fine import Fine
from nirapoth.schemas.payment import (
    CreatePaymentData,
    Payment,
    PaymentInitRequest,
    PaymentInitResponse,
    PaymentStats,
    TransactionVerification,
    UpdatePaymentStatusData,
)
from nirapoth.services.api_client import ResourceApi


class PaymentApi(ResourceApi):
    """Payments against fines. The gateway itself is driven by the backend."""

    async def list(self, params: Optional[Mapping[str, Any]] = None) -> ResourceList[Payment]:
        return await self._list("/payments", "payments", Payment, params)

    async def get_my_payments(self) -> List[Payment]:
        return await self._many("/payments/my-payments", Payment)

    async def get_unpaid_fines(self) -> List[Fine]:
        return await self._many("/payments/unpaid-fines", Fine)

    async def get(self, payment_id: str) -> Payment:
        return await self._one("GET", f"/payments/{payment_id}", Payment)

    async def create(self, data: CreatePaymentData) -> Payment:
        return await self._one("POST", "/payments", Payment, json=data)

    async def update_status(self, data: UpdatePaymentStatusData) -> Payment:
        return await self._one("PUT", "/payments/status", Payment, json=data)

    async def get_stats(self) -> PaymentStats:
        return await self._one("GET", "/payments/stats", PaymentStats)

    async def init_online_payment(self, data: PaymentInitRequest) -> PaymentInitResponse:
        return await self._one("POST", "/payments/init-online", PaymentInitResponse, json=data)

    async def verify_transaction(self, transaction_id: str) -> TransactionVerification:
        return await self._one("GET", f"/payments/verify/{transaction_id}", TransactionVerification)
