from typing import Any, Mapping, Optional

from nirapoth.schemas.common import ResourceList
from nirapoth.schemas.report import (
    AdminReportStats,
    AppealData,
    CitizenReport,
    CreateReportData,
    ReportStats,
    ReviewReportData,
    ReviewStats,
)
from nirapoth.services.api_client import ResourceApi

Params = Optional[Mapping[str, Any]]


class CitizenReportApi(ResourceApi):
    """Citizen violation reports, their review by police and the appeal flow."""

    async def create_report(self, data: CreateReportData) -> CitizenReport:
        return await self._one("POST", "/citizen-reports/create", CitizenReport, json=data)

    async def get_my_reports(self, params: Params = None) -> ResourceList[CitizenReport]:
        return await self._list("/citizen-reports/my-reports", "reports", CitizenReport, params)

    async def get_report(self, report_id: str) -> CitizenReport:
        return await self._one("GET", f"/citizen-reports/{report_id}", CitizenReport)

    async def get_my_stats(self) -> ReportStats:
        return await self._one("GET", "/citizen-reports/my-stats", ReportStats)

    async def delete_report(self, report_id: str) -> str:
        await self.client.call("DELETE", f"/citizen-reports/{report_id}")
        return report_id

    async def submit_appeal(self, report_id: str, data: AppealData) -> CitizenReport:
        return await self._one("POST", f"/citizen-reports/{report_id}/appeal", CitizenReport, json=data)

    # Police

    async def get_pending_reports(self, params: Params = None) -> ResourceList[CitizenReport]:
        return await self._list("/police/pending-reports", "reports", CitizenReport, params)

    async def review_report(self, report_id: str, data: ReviewReportData) -> CitizenReport:
        return await self._one("POST", f"/police/review/{report_id}", CitizenReport, json=data)

    async def get_review_stats(self) -> ReviewStats:
        return await self._one("GET", "/police/review-stats", ReviewStats)

    async def get_pending_appeals(self, params: Params = None) -> ResourceList[CitizenReport]:
        return await self._list("/police/pending-appeals", "reports", CitizenReport, params)

    async def review_appeal(self, report_id: str, data: ReviewReportData) -> CitizenReport:
        return await self._one("POST", f"/police/review-appeal/{report_id}", CitizenReport, json=data)

    # Admin

    async def get_all_reports(self, params: Params = None) -> ResourceList[CitizenReport]:
        return await self._list("/admin/citizen-reports", "reports", CitizenReport, params)

    async def get_admin_stats(self) -> AdminReportStats:
        return await self._one("GET", "/admin/citizen-reports/stats", AdminReportStats)
