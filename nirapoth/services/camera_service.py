from typing import Any, List, Mapping, Optional

from nirapoth.core.constants import CameraStatus
from nirapoth.schemas.camera import Camera, CameraData, CameraStats, PoliceStation
from nirapoth.schemas.common import ResourceList
from nirapoth.services.api_client import ResourceApi


class CameraApi(ResourceApi):

    async def list(self, params: Optional[Mapping[str, Any]] = None) -> ResourceList[Camera]:
        return await self._list("/cameras", "cameras", Camera, params)

    async def get(self, camera_id: str) -> Camera:
        return await self._one("GET", f"/cameras/{camera_id}", Camera)

    async def create(self, data: CameraData) -> Camera:
        return await self._one("POST", "/cameras", Camera, json=data)

    async def update(self, camera_id: str, data: CameraData) -> Camera:
        return await self._one("PUT", f"/cameras/{camera_id}", Camera, json=data)

    async def delete(self, camera_id: str) -> str:
        await self.client.call("DELETE", f"/cameras/{camera_id}")
        return camera_id

    async def get_stats(self) -> CameraStats:
        return await self._one("GET", "/cameras/stats", CameraStats)

    async def update_status(self, camera_id: str, status: CameraStatus) -> Camera:
        return await self._one("PATCH", f"/cameras/{camera_id}/status", Camera, json={"status": status.value})

    async def list_stations(self) -> List[PoliceStation]:
        return await self._many("/cameras/stations", PoliceStation)
