from typing import Any, List, Mapping, Optional

from nirapoth.schemas.accident import Accident, AccidentStats, DispatchEmergencyData
from nirapoth.schemas.common import ResourceList
from nirapoth.services.api_client import ResourceApi


class AccidentApi(ResourceApi):
    """Camera-detected accidents and emergency dispatch."""

    async def list(self, params: Optional[Mapping[str, Any]] = None) -> ResourceList[Accident]:
        return await self._list("/accidents", "accidents", Accident, params)

    async def get(self, accident_id: str) -> Accident:
        return await self._one("GET", f"/accidents/{accident_id}", Accident)

    async def get_stats(self) -> AccidentStats:
        return await self._one("GET", "/accidents/stats", AccidentStats)

    async def dispatch_emergency(self, data: DispatchEmergencyData) -> Accident:
        return await self._one("POST", "/accidents/dispatch", Accident, json=data)

    async def mark_resolved(self, accident_id: str, notes: Optional[str] = None) -> Accident:
        body = {"notes": notes} if notes else {}
        return await self._one("PUT", f"/accidents/{accident_id}/resolve", Accident, json=body)

    async def get_active(self) -> List[Accident]:
        return await self._many("/accidents/active", Accident)
