from datetime import datetime
from typing import Optional

from nirapoth.core.constants import CameraStatus
from nirapoth.schemas.common import ApiModel, Location, Record, StationRef


class PoliceStation(ApiModel):
    id: str
    name: str
    code: Optional[str] = None
    address: Optional[str] = None
    contact: Optional[str] = None


class Camera(Record):
    name: Optional[str] = None
    stream_url: str
    installed_at: Optional[datetime] = None
    status: CameraStatus = CameraStatus.ACTIVE
    location_id: Optional[str] = None
    location: Optional[Location] = None
    station_id: Optional[str] = None
    station: Optional[StationRef] = None
    fire_service_id: Optional[str] = None
    fire_service: Optional[StationRef] = None


class CameraData(ApiModel):
    name: Optional[str] = None
    stream_url: Optional[str] = None
    status: Optional[CameraStatus] = None
    location_id: Optional[str] = None
    station_id: Optional[str] = None
    fire_service_id: Optional[str] = None


class CameraStats(ApiModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    maintenance: int = 0
    offline: int = 0
    operational_rate: str = "0"
