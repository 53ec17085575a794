from typing import Any, List, Mapping, Optional

from nirapoth.schemas.common import ResourceList
from nirapoth.schemas.fine import CreateFineData, Fine, FineStats, UpdateFineData
from nirapoth.services.api_client import ResourceApi


class FineApi(ResourceApi):

    async def list(self, params: Optional[Mapping[str, Any]] = None) -> ResourceList[Fine]:
        return await self._list("/fines", "fines", Fine, params)

    async def get(self, fine_id: str) -> Fine:
        return await self._one("GET", f"/fines/{fine_id}", Fine)

    async def get_stats(self) -> FineStats:
        return await self._one("GET", "/fines/stats", FineStats)

    async def get_overdue(self) -> List[Fine]:
        return await self._many("/fines/overdue", Fine)

    async def get_my_fines(self) -> List[Fine]:
        return await self._many("/fines/my-fines", Fine)

    async def create(self, data: CreateFineData) -> Fine:
        return await self._one("POST", "/fines", Fine, json=data)

    async def update(self, fine_id: str, data: UpdateFineData) -> Fine:
        return await self._one("PUT", f"/fines/{fine_id}", Fine, json=data)

    async def delete(self, fine_id: str) -> str:
        await self.client.call("DELETE", f"/fines/{fine_id}")
        return fine_id
