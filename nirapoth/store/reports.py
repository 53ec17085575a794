from typing import Any, Mapping, Optional

from nirapoth.core.constants import UserRole
from nirapoth.core.feedback import FeedbackChannel
from nirapoth.schemas.report import AppealData, CreateReportData, ReviewReportData
from nirapoth.services.report_service import CitizenReportApi
from nirapoth.store.actions import DETAIL, FETCH, MUTATION, PATCH, REMOVE, STATS
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import thunk

MINE = "mine"
PENDING_REVIEW = "pending"
PENDING_APPEALS = "appeals"
ALL = "all"

LIST_ENDPOINTS = {
    MINE: "get_my_reports",
    PENDING_REVIEW: "get_pending_reports",
    PENDING_APPEALS: "get_pending_appeals",
    ALL: "get_all_reports",
}
SCOPES = tuple(LIST_ENDPOINTS)


def scope_for_role(role: Optional[str]) -> str:
    if role == UserRole.POLICE.value:
        return PENDING_REVIEW
    if role in (UserRole.ADMIN.value, UserRole.SUPER_ADMIN.value):
        return ALL
    return MINE


class ReportsSlice(ResourceSlice):
    """
    Citizen reports as seen by one audience.

    ``scope`` picks the list endpoint: the citizen's own reports, the police
    review queue, the pending appeals queue, or every report (admin).
    """

    name = "citizenReports"

    def __init__(
        self,
        api: CitizenReportApi,
        feedback: Optional[FeedbackChannel] = None,
        scope: str = MINE,
        limit: Optional[int] = None,
    ):
        if scope not in SCOPES:
            raise ValueError(f"Unknown report scope: {scope}")
        super().__init__(api, feedback, limit)
        self.scope = scope

    def _list_endpoint(self):
        return getattr(self.api, LIST_ENDPOINTS[self.scope])

    @thunk("citizenReports/fetch", "Failed to fetch reports", kind=FETCH)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        return await self._list_endpoint()(self.query_params(params))

    @thunk("citizenReports/fetchReportById", "Failed to fetch report", kind=DETAIL, notify=False)
    async def fetch_report(self, report_id: str):
        return await self.api.get_report(report_id)

    @thunk("citizenReports/fetchMyStats", "Failed to fetch stats", kind=STATS, stats_key="mine")
    async def fetch_my_stats(self):
        return await self.api.get_my_stats()

    @thunk("citizenReports/fetchReviewStats", "Failed to fetch review stats", kind=STATS, stats_key="review")
    async def fetch_review_stats(self):
        return await self.api.get_review_stats()

    @thunk("citizenReports/fetchAdminStats", "Failed to fetch report stats", kind=STATS, stats_key="admin")
    async def fetch_admin_stats(self):
        return await self.api.get_admin_stats()

    @thunk("citizenReports/createReport", "Failed to create report", kind=MUTATION, refetch=True, refresh_stats=True)
    async def create_report(self, data: CreateReportData):
        return await self.api.create_report(data)

    @thunk("citizenReports/deleteReport", "Failed to delete report", kind=REMOVE, refetch=True, refresh_stats=True)
    async def delete_report(self, report_id: str):
        return await self.api.delete_report(report_id)

    @thunk("citizenReports/submitAppeal", "Failed to submit appeal", kind=PATCH, refetch=True, refresh_stats=True)
    async def submit_appeal(self, report_id: str, data: AppealData):
        return await self.api.submit_appeal(report_id, data)

    @thunk("citizenReports/reviewReport", "Failed to review report", kind=PATCH, refetch=True, refresh_stats=True)
    async def review_report(self, report_id: str, data: ReviewReportData):
        return await self.api.review_report(report_id, data)

    @thunk("citizenReports/reviewAppeal", "Failed to review appeal", kind=PATCH, refetch=True, refresh_stats=True)
    async def review_appeal(self, report_id: str, data: ReviewReportData):
        return await self.api.review_appeal(report_id, data)
