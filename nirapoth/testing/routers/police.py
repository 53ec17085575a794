from datetime import datetime, timezone

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from nirapoth.testing.auth import get_db, require_roles
from nirapoth.testing.db import envelope, newest_first, paginate

router = APIRouter(prefix="/police", tags=["police"])

reviewer = require_roles("POLICE", "ADMIN", "SUPER_ADMIN")


def read_decision(body: dict) -> tuple:
    """Accept ``action`` or ``status`` for the decision and require notes."""
    action = body.get("action") or body.get("status")
    if action not in ("APPROVED", "REJECTED"):
        raise HTTPException(status_code=400, detail="Action must be APPROVED or REJECTED")
    notes = (body.get("reviewNotes") or body.get("notes") or "").strip()
    if not notes:
        raise HTTPException(status_code=400, detail="Review notes are required")
    return action, notes


@router.get("/pending-reports")
async def get_pending_reports(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user: dict = Depends(reviewer),
    db=Depends(get_db),
):
    reports = [r for r in db.reports.values() if r["status"] == "PENDING"]
    return envelope(paginate(newest_first(reports), page, limit, "reports"))


@router.post("/review/{report_id}")
async def review_report(report_id: str, body: dict = Body(...), user: dict = Depends(reviewer),
                        db=Depends(get_db)):
    action, notes = read_decision(body)
    report = db.reports.get(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    if report["status"] != "PENDING":
        raise HTTPException(status_code=400, detail="Report has already been reviewed")
    db.review_report(report, user["id"], action, notes)
    return envelope(report, f"Report {action.lower()}")


@router.get("/review-stats")
async def get_review_stats(user: dict = Depends(reviewer), db=Depends(get_db)):
    today = datetime.now(timezone.utc).date().isoformat()
    reports = list(db.reports.values())
    reviewed = [r for r in reports if r.get("reviewedAt")]
    approved = sum(1 for r in reviewed if r["status"] == "APPROVED")
    return envelope({
        "pendingCount": sum(1 for r in reports if r["status"] == "PENDING"),
        "reviewedToday": sum(1 for r in reviewed if r["reviewedAt"].startswith(today)),
        "approvalRate": round(approved / len(reviewed) * 100, 2) if reviewed else 0,
        "avgReviewTime": 0,
    })


@router.get("/pending-appeals")
async def get_pending_appeals(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user: dict = Depends(reviewer),
    db=Depends(get_db),
):
    reports = [r for r in db.reports.values() if r["appealSubmitted"] and r["appealStatus"] == "PENDING"]
    return envelope(paginate(newest_first(reports), page, limit, "reports"))


@router.post("/review-appeal/{report_id}")
async def review_appeal(report_id: str, body: dict = Body(...), user: dict = Depends(reviewer),
                        db=Depends(get_db)):
    action, notes = read_decision(body)
    report = db.reports.get(report_id)
    if not report:
        raise HTTPException(status_code=404, detail="Report not found")
    if not report["appealSubmitted"] or report["appealStatus"] != "PENDING":
        raise HTTPException(status_code=400, detail="No pending appeal for this report")
    db.review_appeal(report, user["id"], action, notes)
    return envelope(report, f"Appeal {action.lower()}")
