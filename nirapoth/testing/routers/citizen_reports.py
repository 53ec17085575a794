from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from nirapoth.schemas.report import AppealData, CreateReportData
from nirapoth.testing.auth import get_db, require_roles
from nirapoth.testing.db import envelope, newest_first, paginate, utcnow

router = APIRouter(prefix="/citizen-reports", tags=["citizen-reports"])

citizen_only = require_roles("CITIZEN")


def get_owned_report(db, report_id: str, user: dict) -> dict:
    report = db.reports.get(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    if user["role"] == "CITIZEN" and report["citizenId"] != user["id"]:
        raise HTTPException(status_code=403, detail="Access denied")
    return report


@router.post("/create", status_code=201)
async def create_report(data: CreateReportData, user: dict = Depends(citizen_only), db=Depends(get_db)):
    """Create a citizen report awaiting police review"""
    if not data.evidence_urls:
        raise HTTPException(status_code=400, detail="At least one evidence file is required")
    if not data.location_data.has_coordinates:
        raise HTTPException(status_code=400, detail="Location coordinates are required")

    report = db.add_report(
        user["id"],
        data.vehicle_plate,
        data.violation_type,
        data.evidence_urls,
        data.location_data.model_dump(by_alias=True),
        description=data.description,
    )
    db.notify(user["id"], "Report Submitted",
              f"Your report for {report['vehiclePlate']} is awaiting review.", "REPORT_SUBMITTED",
              related=report)
    return envelope(report, "Report submitted successfully")


@router.get("/my-reports")
async def get_my_reports(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = Query(None),
    user: dict = Depends(citizen_only),
    db=Depends(get_db),
):
    reports = [r for r in db.reports.values() if r["citizenId"] == user["id"]]
    if status:
        reports = [r for r in reports if r["status"] == status]
    return envelope(paginate(newest_first(reports), page, limit, "reports"))


@router.get("/my-stats")
async def get_my_stats(user: dict = Depends(citizen_only), db=Depends(get_db)):
    reports = [r for r in db.reports.values() if r["citizenId"] == user["id"]]
    return envelope(db.report_stats(reports))


@router.get("/{report_id}")
async def get_report(
    report_id: str,
    user: dict = Depends(require_roles("CITIZEN", "POLICE", "ADMIN", "SUPER_ADMIN")),
    db=Depends(get_db),
):
    return envelope(get_owned_report(db, report_id, user))


@router.delete("/{report_id}")
async def delete_report(report_id: str, user: dict = Depends(citizen_only), db=Depends(get_db)):
    report = get_owned_report(db, report_id, user)
    if report["status"] != "PENDING":
        raise HTTPException(status_code=400, detail="Only pending reports can be deleted")
    del db.reports[report_id]
    return envelope(None, "Report deleted")


@router.post("/{report_id}/appeal")
async def submit_appeal(report_id: str, data: AppealData, user: dict = Depends(citizen_only), db=Depends(get_db)):
    report = get_owned_report(db, report_id, user)

    # 1. One appeal per report, and only against a rejection
    if report["appealSubmitted"]:
        raise HTTPException(status_code=400, detail="An appeal has already been submitted for this report")
    if report["status"] != "REJECTED":
        raise HTTPException(status_code=400, detail="Only rejected reports can be appealed")

    # 2. Appeals need a reason and evidence
    if not data.appeal_reason.strip():
        raise HTTPException(status_code=400, detail="Appeal reason is required")
    if not data.evidence_urls:
        raise HTTPException(status_code=400, detail="Supporting evidence is required")

    report.update({
        "appealSubmitted": True,
        "appealReason": data.appeal_reason.strip(),
        "appealEvidenceUrl": list(data.evidence_urls),
        "appealStatus": "PENDING",
        "appealSubmittedAt": utcnow(),
        "updatedAt": utcnow(),
    })
    db.notify(user["id"], "Appeal Submitted", "Your appeal is awaiting review.", "APPEAL_SUBMITTED",
              related=report)
    return envelope(report, "Appeal submitted successfully")
