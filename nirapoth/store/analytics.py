import asyncio
from typing import Any, Mapping, Optional

from nirapoth.schemas.analytics import AnalyticsSnapshot
from nirapoth.store.actions import STATS
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import thunk

SNAPSHOT = "snapshot"


class AnalyticsSlice(ResourceSlice):
    """Admin dashboard charts. No list; everything lives in ``stats``."""

    name = "analytics"

    @thunk("analytics/fetchSnapshot", "Failed to fetch analytics", kind=STATS, stats_key=SNAPSHOT)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        params = dict(params or {})
        dashboard, revenue, violations, types, submissions = await asyncio.gather(
            self.api.get_dashboard_stats(),
            self.api.get_revenue(params.get("months", 6)),
            self.api.get_violations(params.get("hours", 24)),
            self.api.get_violation_types(),
            self.api.get_user_submissions(params.get("days", 7)),
        )
        return AnalyticsSnapshot(
            dashboard=dashboard,
            revenue=revenue,
            violations=violations,
            violation_types=types,
            user_submissions=submissions,
        )

    @thunk("analytics/fetchDashboardStats", "Failed to fetch dashboard stats", kind=STATS, stats_key="dashboard")
    async def fetch_dashboard_stats(self):
        return await self.api.get_dashboard_stats()
