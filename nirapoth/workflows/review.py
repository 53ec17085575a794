"""
Police review of citizen reports and the citizen appeal that may follow.

Lifecycle of one report::

    PENDING --approve--> APPROVED
    PENDING --reject---> REJECTED --appeal--> PENDING_APPEAL --approve--> APPROVED
                                                             --reject---> REJECTED_FINAL

A report can be appealed once. Rewards and penalties are computed by the
backend; the percentages here only appear in the confirmation copy.
"""
import enum
import logging
from typing import Iterable, List, Optional

from nirapoth.core.constants import (
    FALSE_REPORT_PENALTY_PERCENT,
    REJECTED_APPEAL_PENALTY_PERCENT,
    REVIEW_REWARD_PERCENT,
    AppealStatus,
    ReportStatus,
    ReviewAction,
)
from nirapoth.core.errors import ClientValidationError, RequestError, UploadError
from nirapoth.core.feedback import FeedbackChannel
from nirapoth.schemas.report import AppealData, CitizenReport, ReviewReportData
from nirapoth.services.media_service import EvidenceFile, MediaUploader
from nirapoth.store.store import Store

logger = logging.getLogger(__name__)


class ReviewStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    PENDING_APPEAL = "PENDING_APPEAL"
    REJECTED_FINAL = "REJECTED_FINAL"


class Transition(str, enum.Enum):
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    SUBMIT_APPEAL = "SUBMIT_APPEAL"
    APPROVE_APPEAL = "APPROVE_APPEAL"
    REJECT_APPEAL = "REJECT_APPEAL"


TRANSITIONS = {
    (ReviewStatus.PENDING, Transition.APPROVE): ReviewStatus.APPROVED,
    (ReviewStatus.PENDING, Transition.REJECT): ReviewStatus.REJECTED,
    (ReviewStatus.REJECTED, Transition.SUBMIT_APPEAL): ReviewStatus.PENDING_APPEAL,
    (ReviewStatus.PENDING_APPEAL, Transition.APPROVE_APPEAL): ReviewStatus.APPROVED,
    (ReviewStatus.PENDING_APPEAL, Transition.REJECT_APPEAL): ReviewStatus.REJECTED_FINAL,
}

CONFIRMATION_COPY = {
    Transition.APPROVE: (
        f"This will file a case against the vehicle and reward the citizen with "
        f"{REVIEW_REWARD_PERCENT:g}% of the fine amount."
    ),
    Transition.REJECT: (
        f"This will impose a {FALSE_REPORT_PENALTY_PERCENT:g}% penalty on the citizen "
        f"for submitting a false report."
    ),
    Transition.SUBMIT_APPEAL: (
        f"If your appeal is rejected, an additional {REJECTED_APPEAL_PENALTY_PERCENT:g}% penalty "
        f"will be applied to your account. Only submit an appeal if you have strong evidence."
    ),
    Transition.APPROVE_APPEAL: "Approving this appeal will waive the citizen's penalty.",
    Transition.REJECT_APPEAL: (
        f"Rejecting this appeal will apply an additional {REJECTED_APPEAL_PENALTY_PERCENT:g}% penalty "
        f"to the citizen."
    ),
}

SUCCESS_COPY = {
    Transition.APPROVE: f"Report approved! Citizen will receive {REVIEW_REWARD_PERCENT:g}% reward.",
    Transition.REJECT: f"Report rejected. Citizen will receive {FALSE_REPORT_PENALTY_PERCENT:g}% penalty.",
    Transition.SUBMIT_APPEAL: "Appeal submitted successfully! You'll be notified of the decision within 7 days.",
    Transition.APPROVE_APPEAL: "Appeal approved. The citizen's penalty has been waived.",
    Transition.REJECT_APPEAL: (
        f"Appeal rejected. An additional {REJECTED_APPEAL_PENALTY_PERCENT:g}% penalty has been applied."
    ),
}


def review_status(report: CitizenReport) -> ReviewStatus:
    if report.appeal_submitted:
        if report.appeal_status in (None, AppealStatus.PENDING):
            return ReviewStatus.PENDING_APPEAL
        if report.appeal_status == AppealStatus.APPROVED:
            return ReviewStatus.APPROVED
        return ReviewStatus.REJECTED_FINAL
    return ReviewStatus(report.status.value)


def next_status(current: ReviewStatus, transition: Transition) -> Optional[ReviewStatus]:
    return TRANSITIONS.get((current, transition))


def confirmation_copy(transition: Transition) -> str:
    return CONFIRMATION_COPY[Transition(transition)]


def _require_notes(notes: Optional[str], message: str = "Please provide review notes") -> str:
    notes = (notes or "").strip()
    if not notes:
        raise ClientValidationError("review_notes", message)
    return notes


def validate_review(report: CitizenReport, action: ReviewAction, notes: Optional[str]) -> ReviewReportData:
    """Check a police decision on a pending report before it is sent."""
    try:
        action = ReviewAction(action)
    except ValueError:
        raise ClientValidationError("action", "Invalid review action")
    notes = _require_notes(notes)
    if review_status(report) != ReviewStatus.PENDING:
        raise ClientValidationError("status", "This report has already been reviewed")
    return ReviewReportData(action=action, review_notes=notes)


def validate_appeal(report: CitizenReport, reason: Optional[str], evidence: Iterable) -> str:
    """Check an appeal before anything is uploaded or sent.

    The once-only rule is checked first so a second appeal never reaches the
    network, whatever else is wrong with it.
    """
    if report.appeal_submitted:
        raise ClientValidationError("appeal", "An appeal has already been submitted for this report")
    if report.status != ReportStatus.REJECTED:
        raise ClientValidationError("status", "Only rejected reports can be appealed")
    reason = (reason or "").strip()
    if not reason:
        raise ClientValidationError("appeal_reason", "Please provide a reason for your appeal")
    if not list(evidence):
        raise ClientValidationError("evidence", "Please upload supporting evidence")
    return reason


def validate_appeal_review(report: CitizenReport, action: ReviewAction, notes: Optional[str]) -> ReviewReportData:
    try:
        action = ReviewAction(action)
    except ValueError:
        raise ClientValidationError("action", "Invalid review action")
    notes = _require_notes(notes)
    if review_status(report) != ReviewStatus.PENDING_APPEAL:
        raise ClientValidationError("appeal", "This report has no pending appeal")
    return ReviewReportData(action=action, review_notes=notes)


class ReviewWorkflow:
    """Runs review and appeal transitions against the store with user feedback."""

    def __init__(self, store: Store, uploader: Optional[MediaUploader] = None,
                 feedback: Optional[FeedbackChannel] = None):
        self.store = store
        self.uploader = uploader or MediaUploader()
        self.feedback = feedback or store.feedback

    def _invalid(self, error: ClientValidationError) -> None:
        self.feedback.error(error.message)
        logger.info("[REVIEW] Rejected locally: %s", error.message)

    async def _send(self, transition: Transition, send, failure_message: str, loading_message: str):
        toast = self.feedback.loading(loading_message)
        try:
            report = await send()
        except RequestError as e:
            self.feedback.request_error(e, e.server_message or failure_message)
            raise
        finally:
            self.feedback.dismiss(toast.id)
        self.feedback.success(SUCCESS_COPY[transition])
        logger.info("[REVIEW] %s -> %s on report %s", transition.value, review_status(report).value, report.id)
        return report

    async def approve(self, report: CitizenReport, notes: str) -> CitizenReport:
        return await self._review(report, ReviewAction.APPROVED, notes)

    async def reject(self, report: CitizenReport, notes: str) -> CitizenReport:
        return await self._review(report, ReviewAction.REJECTED, notes)

    async def _review(self, report: CitizenReport, action: ReviewAction, notes: str) -> CitizenReport:
        try:
            data = validate_review(report, action, notes)
        except ClientValidationError as e:
            self._invalid(e)
            raise
        transition = Transition.APPROVE if action == ReviewAction.APPROVED else Transition.REJECT
        return await self._send(
            transition,
            lambda: self._unwrap(self.store.reports.review_report(report.id, data, unwrap=True)),
            "Failed to submit review",
            "Submitting review...",
        )

    async def review_appeal(self, report: CitizenReport, action: ReviewAction, notes: str) -> CitizenReport:
        try:
            data = validate_appeal_review(report, action, notes)
        except ClientValidationError as e:
            self._invalid(e)
            raise
        transition = Transition.APPROVE_APPEAL if data.action == ReviewAction.APPROVED else Transition.REJECT_APPEAL
        updated = await self._send(
            transition,
            lambda: self._unwrap(self.store.appeals.review_appeal(report.id, data, unwrap=True)),
            "Failed to review appeal",
            "Submitting appeal decision...",
        )
        # The decided report also changes status in the main list and its counts.
        await self.store.reports.refresh()
        await self.store.reports.refresh_stats()
        return updated

    async def submit_appeal(self, report: CitizenReport, reason: str,
                            evidence: List[EvidenceFile]) -> CitizenReport:
        try:
            reason = validate_appeal(report, reason, evidence)
        except ClientValidationError as e:
            self._invalid(e)
            raise

        try:
            uploaded = await self.uploader.upload_many(evidence, folder="appeal-evidence")
        except UploadError as e:
            logger.error("[REVIEW] Appeal evidence upload failed: %s", e)
            self.feedback.error("Failed to upload evidence. Please try again.")
            raise

        data = AppealData(appeal_reason=reason, evidence_urls=[media.url for media in uploaded])
        return await self._send(
            Transition.SUBMIT_APPEAL,
            lambda: self._unwrap(self.store.reports.submit_appeal(report.id, data, unwrap=True)),
            "Failed to submit appeal",
            "Submitting appeal...",
        )

    @staticmethod
    async def _unwrap(call) -> CitizenReport:
        result = await call
        return result.payload
