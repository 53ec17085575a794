from datetime import datetime
from typing import Optional

from nirapoth.core.constants import AccidentSeverity, AccidentStatus, EmergencyService
from nirapoth.schemas.common import ApiModel, LocationData, Record


class Accident(Record):
    severity: AccidentSeverity
    status: AccidentStatus = AccidentStatus.ACTIVE
    description: str = ""
    detected_at: Optional[datetime] = None
    location: Optional[LocationData] = None
    camera_id: Optional[str] = None
    snapshot_url: Optional[str] = None
    has_fire: bool = False
    ambulance_dispatched: bool = False
    fire_service_dispatched: bool = False
    resolved_at: Optional[datetime] = None


class DispatchEmergencyData(ApiModel):
    service_type: EmergencyService
    accident_id: str
    estimated_arrival: Optional[int] = None  # minutes


class AccidentStats(ApiModel):
    total_accidents: int = 0
    active_accidents: int = 0
    responding_accidents: int = 0
    resolved_today: int = 0
    critical_accidents: int = 0
    average_response_time: float = 0.0  # minutes
