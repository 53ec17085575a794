import re
from datetime import datetime
from typing import Any, List, Optional

from bs4 import BeautifulSoup
from pydantic import Field, field_validator

from nirapoth.core.constants import NotificationPriority, NotificationType
from nirapoth.schemas.common import ApiModel, CountByKey, Record


class Notification(Record):
    user_id: Optional[str] = None
    title: str
    message: str
    type: NotificationType = NotificationType.INFO
    priority: NotificationPriority = NotificationPriority.NORMAL
    is_read: bool = False
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[str] = None
    action_url: Optional[str] = None
    action_label: Optional[str] = None
    metadata: Any = None
    expires_at: Optional[datetime] = None
    read_at: Optional[datetime] = None

    @field_validator("message")
    @classmethod
    def format_message(cls, v):
        """Format HTML message to plain text"""
        if v and "<" in v:
            soup = BeautifulSoup(v, "html.parser")
            plain_text = soup.get_text(" ", strip=True)
            return re.sub(r"\s+", " ", plain_text).strip()
        return v


class CreateNotificationData(ApiModel):
    title: str
    message: str
    type: NotificationType
    priority: Optional[NotificationPriority] = None
    data: Any = None
    target_user_id: Optional[str] = None
    target_role: Optional[str] = None


class BroadcastNotificationData(ApiModel):
    title: str
    message: str
    type: NotificationType
    priority: Optional[NotificationPriority] = None
    role: Optional[str] = None


class NotificationStats(ApiModel):
    total: int = 0
    unread: int = 0
    by_type: List[CountByKey] = Field(default_factory=list)
    by_priority: List[CountByKey] = Field(default_factory=list)
