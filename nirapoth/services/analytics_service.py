from typing import List

from nirapoth.schemas.analytics import (
    DashboardStats,
    RevenuePoint,
    SubmissionPoint,
    TypeBreakdown,
    ViolationPoint,
)
from nirapoth.services.api_client import ResourceApi


class AnalyticsApi(ResourceApi):
    """Read-only aggregates behind the admin dashboards."""

    async def get_dashboard_stats(self) -> DashboardStats:
        return await self._one("GET", "/analytics/dashboard-stats", DashboardStats)

    async def get_revenue(self, months: int = 6) -> List[RevenuePoint]:
        return await self._many("/analytics/revenue", RevenuePoint, params={"months": months})

    async def get_violations(self, hours: int = 24) -> List[ViolationPoint]:
        return await self._many("/analytics/violations", ViolationPoint, params={"hours": hours})

    async def get_violation_types(self) -> List[TypeBreakdown]:
        return await self._many("/analytics/violation-types", TypeBreakdown)

    async def get_user_submissions(self, days: int = 7) -> List[SubmissionPoint]:
        return await self._many("/analytics/user-submissions", SubmissionPoint, params={"days": days})
