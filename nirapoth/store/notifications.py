from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from nirapoth.store.actions import FETCH, MUTATION, PATCH, REMOVE, STATS, Action, Fulfilled, PatchItem
from nirapoth.store.optimistic import optimistic_update
from nirapoth.store.slice import ResourceSlice
from nirapoth.store.state import ResourceState
from nirapoth.store.thunk import ThunkResult, thunk

UNREAD = "unread"


class NotificationState(ResourceState):
    unread_count: int = 0


class UnreadCountChanged(Action):
    """Either shift the count by ``delta`` or set it to ``value``."""

    delta: int = 0
    value: Optional[int] = None


class MarkAllRead(Action):
    read_at: datetime


class NotificationsSlice(ResourceSlice):
    name = "notifications"
    state_class = NotificationState

    def reduce(self, state: NotificationState, action: Action) -> NotificationState:
        if isinstance(action, UnreadCountChanged):
            count = action.value if action.value is not None else state.unread_count + action.delta
            return state.model_copy(update={"unread_count": max(0, count)})

        if isinstance(action, MarkAllRead):
            if state.data is None:
                return state
            items = [
                n if n.is_read else n.model_copy(update={"is_read": True, "read_at": action.read_at})
                for n in state.data.items
            ]
            return state.model_copy(update={"data": state.data.model_copy(update={"items": items})})

        state = super().reduce(state, action)
        if isinstance(action, Fulfilled) and action.stats_key == UNREAD:
            state = state.model_copy(update={"unread_count": int(action.payload or 0)})
        return state

    @thunk("notifications/fetchNotifications", "Failed to fetch notifications", kind=FETCH)
    async def fetch(self, params: Optional[Mapping[str, Any]] = None):
        return await self.api.list(self.query_params(params))

    @thunk("notifications/fetchUnreadCount", "Failed to fetch unread count", kind=STATS, stats_key=UNREAD)
    async def fetch_unread_count(self):
        return await self.api.get_unread_count()

    @thunk("notifications/fetchStats", "Failed to fetch notification stats", kind=STATS, stats_key="notifications")
    async def fetch_stats(self):
        return await self.api.get_stats()

    @thunk("notifications/markAsRead", "Failed to mark notification as read", kind=PATCH)
    async def _confirm_read(self, notification_id: str):
        return await self.api.mark_as_read(notification_id)

    @thunk("notifications/markAllAsRead", "Failed to mark all as read", kind=MUTATION)
    async def _confirm_all_read(self):
        return await self.api.mark_all_as_read()

    @thunk("notifications/deleteNotification", "Failed to delete notification", kind=REMOVE,
           refetch=True, refresh_stats=True)
    async def delete(self, notification_id: str):
        return await self.api.delete(notification_id)

    @thunk("notifications/deleteAllRead", "Failed to delete read notifications", kind=MUTATION,
           refetch=True, refresh_stats=True)
    async def delete_all_read(self):
        return await self.api.delete_all_read()

    async def mark_as_read(self, notification_id: str) -> ThunkResult:
        before = self.state.data.find(notification_id) if self.state.data else None
        unread_count = self.state.unread_count
        apply, rollback = [], []
        if before is not None and not before.is_read:
            read = before.model_copy(update={"is_read": True, "read_at": datetime.now(timezone.utc)})
            apply = [PatchItem(item=read), UnreadCountChanged(delta=-1)]
            rollback = [PatchItem(item=before), UnreadCountChanged(value=unread_count)]
        return await optimistic_update(self, apply, rollback, lambda: self._confirm_read(notification_id))

    async def mark_all_as_read(self) -> ThunkResult:
        unread = [n for n in self.state.items if not n.is_read]
        apply = [MarkAllRead(read_at=datetime.now(timezone.utc)), UnreadCountChanged(value=0)]
        rollback = [PatchItem(item=n) for n in unread]
        rollback.append(UnreadCountChanged(value=self.state.unread_count))
        return await optimistic_update(self, apply, rollback, self._confirm_all_read)
