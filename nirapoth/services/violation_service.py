from typing import Any, List, Mapping, Optional

from nirapoth.schemas.common import ResourceList
from nirapoth.schemas.fine import CreateFineData, Fine
from nirapoth.schemas.violation import (
    CreateViolationData,
    CreateViolationTypeData,
    UpdateViolationStatusData,
    UpdateViolationTypeData,
    Violation,
    ViolationStats,
    ViolationType,
)
from nirapoth.services.api_client import ResourceApi


class ViolationApi(ResourceApi):

    async def list(self, params: Optional[Mapping[str, Any]] = None) -> ResourceList[Violation]:
        return await self._list("/violations", "violations", Violation, params)

    async def get(self, violation_id: str) -> Violation:
        return await self._one("GET", f"/violations/{violation_id}", Violation)

    async def create(self, data: CreateViolationData) -> Violation:
        return await self._one("POST", "/violations", Violation, json=data)

    async def update_status(self, violation_id: str, data: UpdateViolationStatusData) -> Violation:
        return await self._one("PUT", f"/violations/{violation_id}/status", Violation, json=data)

    async def create_fine(self, violation_id: str, data: CreateFineData) -> Fine:
        return await self._one("POST", f"/violations/{violation_id}/fine", Fine, json=data)

    async def get_stats(self) -> ViolationStats:
        return await self._one("GET", "/violations/stats", ViolationStats)

    # Violation types ("rules" on the backend)

    async def list_types(self) -> List[ViolationType]:
        return await self._many("/violations/rules", ViolationType)

    async def create_type(self, data: CreateViolationTypeData) -> ViolationType:
        return await self._one("POST", "/violations/rules", ViolationType, json=data)

    async def update_type(self, rule_id: str, data: UpdateViolationTypeData) -> ViolationType:
        return await self._one("PUT", f"/violations/rules/{rule_id}", ViolationType, json=data)

    async def delete_type(self, rule_id: str) -> str:
        await self.client.call("DELETE", f"/violations/rules/{rule_id}")
        return rule_id
