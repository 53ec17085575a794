from typing import Any, Mapping, Optional

from nirapoth.schemas.accident import DispatchEmergencyData
from nirapoth.store.actions import DETAIL, FETCH, PATCH, STATS
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import thunk


class AccidentsSlice(ResourceSlice):
    name = "accidents"

    @thunk("accidents/fetchAccidents", "Failed to fetch accidents", kind=FETCH)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        return await self.api.list(self.query_params(params))

    @thunk("accidents/fetchAccidentById", "Failed to fetch accident", kind=DETAIL, notify=False)
    async def fetch_accident(self, accident_id: str):
        return await self.api.get(accident_id)

    @thunk("accidents/fetchStats", "Failed to fetch accident stats", kind=STATS, stats_key="accidents")
    async def fetch_stats(self):
        return await self.api.get_stats()

    @thunk("accidents/fetchActive", "Failed to fetch active accidents", kind=STATS, stats_key="active")
    async def fetch_active(self):
        return await self.api.get_active()

    @thunk("accidents/dispatchEmergency", "Failed to dispatch emergency services", kind=PATCH,
           refresh_stats=True)
    async def dispatch_emergency(self, data: DispatchEmergencyData):
        return await self.api.dispatch_emergency(data)

    @thunk("accidents/markResolved", "Failed to resolve accident", kind=PATCH, refresh_stats=True)
    async def mark_resolved(self, accident_id: str, notes: Optional[str] = None):
        return await self.api.mark_resolved(accident_id, notes)
