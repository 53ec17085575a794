"""Citizen violation report: capture location, upload evidence, submit."""
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from nirapoth.core.constants import ViolationType
from nirapoth.core.errors import ClientValidationError, RequestError, UploadError
from nirapoth.core.feedback import FeedbackChannel
from nirapoth.schemas.common import LocationData
from nirapoth.schemas.report import CitizenReport, CreateReportData
from nirapoth.services.geocoding_service import reverse_geocode
from nirapoth.services.media_service import EvidenceFile, MediaUploader
from nirapoth.store.reports import MINE
from nirapoth.store.store import Store

logger = logging.getLogger(__name__)

DEFAULT_DIVISION = "Dhaka"
EVIDENCE_FOLDER = "citizen-reports"
SUBMITTED_MESSAGE = "Report submitted successfully! You'll be notified once it's reviewed."

Geocoder = Callable[[float, float], Awaitable[LocationData]]


@dataclass
class ViolationReportForm:
    vehicle_plate: str = ""
    violation_type: str = ""
    description: str = ""
    evidence: List[EvidenceFile] = field(default_factory=list)
    location: Optional[LocationData] = None
    submitting: bool = field(default=False, init=False)

    def validate(self) -> None:
        """Raise ``ClientValidationError`` for the first missing field, in form order."""
        if not self.vehicle_plate.strip():
            raise ClientValidationError("vehicle_plate", "Please enter vehicle plate number")
        if not self.violation_type:
            raise ClientValidationError("violation_type", "Please select violation type")
        if self.violation_type not in ViolationType.__members__:
            raise ClientValidationError("violation_type", "Please select a valid violation type")
        if not self.evidence:
            raise ClientValidationError("evidence", "Please upload at least one photo or video as evidence")
        for file in self.evidence:
            if not file.is_image_or_video:
                raise ClientValidationError("evidence", f"{file.filename}: only images and videos are allowed")
        if self.location is None or not self.location.has_coordinates:
            raise ClientValidationError("location", "Please capture location")


async def capture_location(
    latitude: float,
    longitude: float,
    geocoder: Geocoder = reverse_geocode,
    feedback: Optional[FeedbackChannel] = None,
) -> LocationData:
    location = await geocoder(latitude, longitude)
    if feedback is not None:
        if location.address:
            feedback.success("Location captured successfully!")
        else:
            feedback.warning("Location captured, but could not get address details")
    return location


async def submit_violation_report(
    form: ViolationReportForm,
    store: Store,
    uploader: Optional[MediaUploader] = None,
    geocoder: Geocoder = reverse_geocode,
    feedback: Optional[FeedbackChannel] = None,
) -> CitizenReport:
    """
    Validate, upload evidence and create the report, then refresh "my reports".

    Raises:
        - ClientValidationError: A field is missing or a submission is already running.
        - UploadError: Evidence could not be uploaded; nothing was sent to the backend.
        - RequestError: The backend refused the report.
    """
    feedback = feedback or store.feedback
    uploader = uploader or MediaUploader()

    if form.submitting:
        raise ClientValidationError("form", "Please wait, your report is being submitted")

    try:
        form.validate()
    except ClientValidationError as e:
        feedback.error(e.message)
        raise

    form.submitting = True
    try:
        location = form.location
        if not location.address:
            location = await geocoder(location.latitude, location.longitude)
        location = location.model_copy(update={"division": location.division or DEFAULT_DIVISION})

        toast = feedback.loading("Uploading evidence...")
        try:
            uploaded = await uploader.upload_many(form.evidence, folder=EVIDENCE_FOLDER)
        except UploadError as e:
            logger.error("[REPORT] Evidence upload failed: %s", e)
            feedback.error("Failed to upload evidence. Please try again.")
            raise
        finally:
            feedback.dismiss(toast.id)

        data = CreateReportData(
            vehicle_plate=form.vehicle_plate.upper(),
            violation_type=form.violation_type,
            description=form.description.strip() or None,
            evidence_urls=[media.url for media in uploaded],
            location_data=LocationData.model_validate(location.model_dump()),
        )

        toast = feedback.loading("Submitting report...")
        try:
            result = await store.reports.create_report(data, unwrap=True)
        except RequestError as e:
            feedback.request_error(e, e.server_message or "Failed to submit report")
            raise
        finally:
            feedback.dismiss(toast.id)

        report = result.payload
        if not store.reports.has_fetched and store.reports.scope == MINE:
            await store.reports.fetch()
        logger.info("[REPORT] Submitted %s for %s", report.id, report.vehicle_plate)
        feedback.success(SUBMITTED_MESSAGE)
        return report
    finally:
        form.submitting = False
