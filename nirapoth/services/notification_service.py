from typing import Any, Mapping, Optional

from nirapoth.schemas.common import ResourceList
from nirapoth.schemas.notification import (
    BroadcastNotificationData,
    CreateNotificationData,
    Notification,
    NotificationStats,
)
from nirapoth.services.api_client import ResourceApi


class NotificationApi(ResourceApi):

    async def list(self, params: Optional[Mapping[str, Any]] = None) -> ResourceList[Notification]:
        return await self._list("/notifications", "notifications", Notification, params)

    async def get_unread_count(self) -> int:
        data = await self.client.call("GET", "/notifications/unread-count")
        return int((data or {}).get("count", 0))

    async def get_stats(self) -> NotificationStats:
        return await self._one("GET", "/notifications/stats", NotificationStats)

    async def mark_as_read(self, notification_id: str) -> Notification:
        return await self._one("PUT", f"/notifications/{notification_id}/read", Notification)

    async def mark_all_as_read(self) -> None:
        await self.client.call("PUT", "/notifications/read-all")

    async def delete(self, notification_id: str) -> str:
        await self.client.call("DELETE", f"/notifications/{notification_id}")
        return notification_id

    async def delete_all_read(self) -> None:
        await self.client.call("DELETE", "/notifications/read")

    # Admin

    async def create(self, data: CreateNotificationData) -> Notification:
        return await self._one("POST", "/notifications", Notification, json=data)

    async def broadcast(self, data: BroadcastNotificationData) -> Any:
        return await self.client.call("POST", "/notifications/broadcast", json=data)

    async def send_to_role(self, data: BroadcastNotificationData) -> Any:
        return await self.client.call("POST", "/notifications/send-to-role", json=data)
