from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from nirapoth.schemas.fine import CreateFineData, UpdateFineData
from nirapoth.testing.auth import get_db, require_roles
from nirapoth.testing.db import count_where, envelope, newest_first, paginate, utcnow

router = APIRouter(prefix="/fines", tags=["fines"])

staff = require_roles("POLICE", "ADMIN", "SUPER_ADMIN")
citizen_only = require_roles("CITIZEN")


def get_fine_or_404(db, fine_id: str) -> dict:
    fine = db.fines.get(fine_id)
    if not fine:
        raise HTTPException(status_code=404, detail="Fine not found")
    return fine


def fines_of(db, user_id: str) -> list:
    plates = {r["vehiclePlate"] for r in db.reports.values() if r["citizenId"] == user_id}
    paid_by_user = {p["fineId"] for p in db.payments.values() if p["userId"] == user_id}
    return [
        f for f in db.fines.values()
        if f["id"] in paid_by_user
        or db.violations.get(f["violationId"], {}).get("vehicle", {}).get("plateNo") in plates
    ]


@router.get("")
async def list_fines(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = Query(None),
    user: dict = Depends(staff),
    db=Depends(get_db),
):
    fines = list(db.fines.values())
    if status:
        fines = [f for f in fines if f["status"] == status]
    return envelope(paginate(newest_first(fines), page, limit, "fines"))


@router.get("/stats")
async def get_stats(user: dict = Depends(staff), db=Depends(get_db)):
    fines = list(db.fines.values())
    return envelope({
        "totalFines": len(fines),
        "unpaidFines": count_where(fines, status="UNPAID"),
        "paidFines": count_where(fines, status="PAID"),
        "cancelledFines": count_where(fines, status="CANCELLED"),
        "disputedFines": count_where(fines, status="DISPUTED"),
        "totalAmount": sum(f["amount"] for f in fines),
        "paidAmount": sum(f["amount"] for f in fines if f["status"] == "PAID"),
        "unpaidAmount": sum(f["amount"] for f in fines if f["status"] == "UNPAID"),
    })


@router.get("/overdue")
async def get_overdue(user: dict = Depends(staff), db=Depends(get_db)):
    now = datetime.now(timezone.utc).isoformat()
    return envelope([f for f in db.fines.values() if f["status"] == "UNPAID" and f["dueDate"] < now])


@router.get("/my-fines")
async def get_my_fines(user: dict = Depends(citizen_only), db=Depends(get_db)):
    return envelope(fines_of(db, user["id"]))


@router.get("/{fine_id}")
async def get_fine(fine_id: str, user: dict = Depends(staff), db=Depends(get_db)):
    return envelope(get_fine_or_404(db, fine_id))


@router.post("", status_code=201)
async def create_fine(data: CreateFineData, user: dict = Depends(staff), db=Depends(get_db)):
    if data.violation_id not in db.violations:
        raise HTTPException(status_code=404, detail="Violation not found")
    due = data.due_date.isoformat() if data.due_date else None
    return envelope(db.add_fine(data.violation_id, data.amount, due_date=due))


@router.put("/{fine_id}")
async def update_fine(fine_id: str, data: UpdateFineData, user: dict = Depends(staff), db=Depends(get_db)):
    fine = get_fine_or_404(db, fine_id)
    fine.update(data.model_dump(by_alias=True, exclude_none=True, mode="json"))
    fine["updatedAt"] = utcnow()
    return envelope(fine)


@router.delete("/{fine_id}")
async def delete_fine(fine_id: str, user: dict = Depends(staff), db=Depends(get_db)):
    fine = get_fine_or_404(db, fine_id)
    if fine["status"] == "PAID":
        raise HTTPException(status_code=400, detail="Paid fines cannot be deleted")
    del db.fines[fine_id]
    return envelope(None, "Fine deleted")
