from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from nirapoth.schemas.camera import CameraData
from nirapoth.testing.auth import get_db, require_roles
from nirapoth.testing.db import count_where, envelope, newest_first, paginate, utcnow

router = APIRouter(prefix="/cameras", tags=["cameras"])

staff = require_roles("POLICE", "ADMIN", "SUPER_ADMIN")
admin_only = require_roles("ADMIN", "SUPER_ADMIN")

STATUSES = ("ACTIVE", "INACTIVE", "MAINTENANCE", "OFFLINE")


def get_camera_or_404(db, camera_id: str) -> dict:
    camera = db.cameras.get(camera_id)
    if not camera:
        raise HTTPException(status_code=404, detail="Camera not found")
    return camera


@router.get("")
async def list_cameras(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status: Optional[str] = Query(None),
    stationId: Optional[str] = Query(None),
    user: dict = Depends(staff),
    db=Depends(get_db),
):
    cameras = list(db.cameras.values())
    if status:
        cameras = [c for c in cameras if c["status"] == status]
    if stationId:
        cameras = [c for c in cameras if c["stationId"] == stationId]
    return envelope(paginate(newest_first(cameras), page, limit, "cameras"))


@router.get("/stats")
async def get_stats(user: dict = Depends(staff), db=Depends(get_db)):
    cameras = list(db.cameras.values())
    active = count_where(cameras, status="ACTIVE")
    return envelope({
        "total": len(cameras),
        "active": active,
        "inactive": count_where(cameras, status="INACTIVE"),
        "maintenance": count_where(cameras, status="MAINTENANCE"),
        "offline": count_where(cameras, status="OFFLINE"),
        "operationalRate": f"{active / len(cameras) * 100:.1f}" if cameras else "0",
    })


@router.get("/stations")
async def list_stations(user: dict = Depends(staff), db=Depends(get_db)):
    return envelope(list(db.stations.values()))


@router.get("/{camera_id}")
async def get_camera(camera_id: str, user: dict = Depends(staff), db=Depends(get_db)):
    return envelope(get_camera_or_404(db, camera_id))


@router.post("", status_code=201)
async def create_camera(data: CameraData, user: dict = Depends(admin_only), db=Depends(get_db)):
    if not data.stream_url:
        raise HTTPException(status_code=400, detail="Stream URL is required")
    camera = db.add_camera(data.name or "Camera", data.station_id,
                           status=data.status.value if data.status else "ACTIVE")
    camera["streamUrl"] = data.stream_url
    return envelope(camera)


@router.put("/{camera_id}")
async def update_camera(camera_id: str, data: CameraData, user: dict = Depends(admin_only), db=Depends(get_db)):
    camera = get_camera_or_404(db, camera_id)
    camera.update(data.model_dump(by_alias=True, exclude_none=True, mode="json"))
    camera["updatedAt"] = utcnow()
    return envelope(camera)


@router.patch("/{camera_id}/status")
async def update_status(camera_id: str, body: dict = Body(...), user: dict = Depends(staff), db=Depends(get_db)):
    camera = get_camera_or_404(db, camera_id)
    if body.get("status") not in STATUSES:
        raise HTTPException(status_code=400, detail="Invalid camera status")
    camera.update({"status": body["status"], "updatedAt": utcnow()})
    return envelope(camera)


@router.delete("/{camera_id}")
async def delete_camera(camera_id: str, user: dict = Depends(admin_only), db=Depends(get_db)):
    get_camera_or_404(db, camera_id)
    del db.cameras[camera_id]
    return envelope(None, "Camera deleted")
