from typing import Any, Mapping, Optional

from nirapoth.schemas.fine import CreateFineData, UpdateFineData
from nirapoth.store.actions import DETAIL, FETCH, PATCH, REMOVE, STATS
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import thunk


class FinesSlice(ResourceSlice):
    name = "fines"

    @thunk("fines/fetchFines", "Failed to fetch fines", kind=FETCH)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        return await self.api.list(self.query_params(params))

    @thunk("fines/fetchFineById", "Failed to fetch fine", kind=DETAIL, notify=False)
    async def fetch_fine(self, fine_id: str):
        return await self.api.get(fine_id)

    @thunk("fines/fetchStats", "Failed to fetch fine stats", kind=STATS, stats_key="fines")
    async def fetch_stats(self):
        return await self.api.get_stats()

    @thunk("fines/fetchOverdue", "Failed to fetch overdue fines", kind=STATS, stats_key="overdue")
    async def fetch_overdue(self):
        return await self.api.get_overdue()

    @thunk("fines/fetchMyFines", "Failed to fetch your fines", kind=STATS, stats_key="mine")
    async def fetch_my_fines(self):
        return await self.api.get_my_fines()

    @thunk("fines/createFine", "Failed to create fine", refetch=True, refresh_stats=True)
    async def create_fine(self, data: CreateFineData):
        return await self.api.create(data)

    @thunk("fines/updateFine", "Failed to update fine", kind=PATCH, refresh_stats=True)
    async def update_fine(self, fine_id: str, data: UpdateFineData):
        return await self.api.update(fine_id, data)

    @thunk("fines/deleteFine", "Failed to delete fine", kind=REMOVE, refetch=True, refresh_stats=True)
    async def delete_fine(self, fine_id: str):
        return await self.api.delete(fine_id)
