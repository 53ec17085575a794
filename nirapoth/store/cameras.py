from typing import Any, Mapping, Optional

from nirapoth.core.constants import CameraStatus
from nirapoth.schemas.camera import CameraData
from nirapoth.store.actions import DETAIL, FETCH, PATCH, REMOVE, STATS
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.thunk import thunk


class CamerasSlice(ResourceSlice):
    name = "cameras"

    @thunk("cameras/fetchCameras", "Failed to fetch cameras", kind=FETCH)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        return await self.api.list(self.query_params(params))

    @thunk("cameras/fetchCameraById", "Failed to fetch camera", kind=DETAIL, notify=False)
    async def fetch_camera(self, camera_id: str):
        return await self.api.get(camera_id)

    @thunk("cameras/fetchStats", "Failed to fetch camera stats", kind=STATS, stats_key="cameras")
    async def fetch_stats(self):
        return await self.api.get_stats()

    @thunk("cameras/fetchStations", "Failed to fetch police stations", kind=STATS, stats_key="stations")
    async def fetch_stations(self):
        return await self.api.list_stations()

    @thunk("cameras/createCamera", "Failed to create camera", refetch=True, refresh_stats=True)
    async def create_camera(self, data: CameraData):
        return await self.api.create(data)

    @thunk("cameras/updateCamera", "Failed to update camera", kind=PATCH)
    async def update_camera(self, camera_id: str, data: CameraData):
        return await self.api.update(camera_id, data)

    @thunk("cameras/updateStatus", "Failed to update camera status", kind=PATCH, refresh_stats=True)
    async def update_status(self, camera_id: str, status: CameraStatus):
        return await self.api.update_status(camera_id, status)

    @thunk("cameras/deleteCamera", "Failed to delete camera", kind=REMOVE, refetch=True, refresh_stats=True)
    async def delete_camera(self, camera_id: str):
        return await self.api.delete(camera_id)
