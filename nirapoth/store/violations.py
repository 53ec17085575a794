from typing import Any, Mapping, Optional

from nirapoth.schemas.fine import CreateFineData
from nirapoth.schemas.violation import (
    CreateViolationData,
    CreateViolationTypeData,
    UpdateViolationStatusData,
    UpdateViolationTypeData,
)
from nirapoth.store.actions import DETAIL, FETCH, MUTATION, PATCH, STATS
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import thunk


class ViolationsSlice(ResourceSlice):
    name = "violations"

    @thunk("violations/fetchViolations", "Failed to fetch violations", kind=FETCH)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        return await self.api.list(self.query_params(params))

    @thunk("violations/fetchViolationById", "Failed to fetch violation", kind=DETAIL, notify=False)
    async def fetch_violation(self, violation_id: str):
        return await self.api.get(violation_id)

    @thunk("violations/fetchStats", "Failed to fetch violation stats", kind=STATS, stats_key="violations")
    async def fetch_stats(self):
        return await self.api.get_stats()

    @thunk("violations/fetchRules", "Failed to fetch violation rules", kind=STATS, stats_key="rules")
    async def fetch_rules(self):
        return await self.api.list_types()

    @thunk("violations/createViolation", "Failed to create violation", refetch=True, refresh_stats=True)
    async def create_violation(self, data: CreateViolationData):
        return await self.api.create(data)

    @thunk("violations/updateStatus", "Failed to update violation status", kind=PATCH, refresh_stats=True)
    async def update_status(self, violation_id: str, data: UpdateViolationStatusData):
        return await self.api.update_status(violation_id, data)

    @thunk("violations/createFine", "Failed to create fine", kind=MUTATION, refetch=True)
    async def create_fine(self, violation_id: str, data: CreateFineData):
        return await self.api.create_fine(violation_id, data)

    # Rules are a small unpaginated list kept under ``stats["rules"]``.

    @thunk("violations/createRule", "Failed to create rule", refresh_stats=True)
    async def create_rule(self, data: CreateViolationTypeData):
        return await self.api.create_type(data)

    @thunk("violations/updateRule", "Failed to update rule", refresh_stats=True)
    async def update_rule(self, rule_id: str, data: UpdateViolationTypeData):
        return await self.api.update_type(rule_id, data)

    @thunk("violations/deleteRule", "Failed to delete rule", refresh_stats=True)
    async def delete_rule(self, rule_id: str):
        return await self.api.delete_type(rule_id)
