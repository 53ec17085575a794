"""Transient user-facing messages (toasts) emitted by workflows and slices."""
import itertools
import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional

from nirapoth.core.errors import RequestError

logger = logging.getLogger(__name__)

INFO = "info"
SUCCESS = "success"
WARNING = "warning"
ERROR = "error"
LOADING = "loading"

_LOG_LEVELS = {
    INFO: logging.INFO,
    SUCCESS: logging.INFO,
    LOADING: logging.DEBUG,
    WARNING: logging.WARNING,
    ERROR: logging.ERROR,
}

STATUS_MESSAGES = {
    403: "You don't have permission to perform this action.",
    404: "The requested resource was not found.",
    500: "Server error. Please try again later.",
}


@dataclass(frozen=True)
class Feedback:
    id: int
    level: str
    message: str


Listener = Callable[[Feedback], None]


def message_for_error(error: RequestError, custom_message: Optional[str] = None) -> Optional[str]:
    """Pick the copy shown for a failed request; ``None`` means stay silent.

    401 is left to the authentication layer.
    """
    if error.status_code == 401:
        return None
    if error.status_code in STATUS_MESSAGES:
        return STATUS_MESSAGES[error.status_code]
    if error.status_code == 400:
        return custom_message or error.message or "Invalid request. Please check your input."
    if error.status_code == 422:
        return custom_message or error.message or "Validation error. Please check your input."
    return custom_message or error.message


class FeedbackChannel:
    def __init__(self, history_size: int = 50):
        self._ids = itertools.count(1)
        self._listeners: List[Listener] = []
        self.history: Deque[Feedback] = deque(maxlen=history_size)
        self.active_loading: dict = {}

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def emit(self, level: str, message: str) -> Feedback:
        item = Feedback(id=next(self._ids), level=level, message=message)
        self.history.append(item)
        logger.log(_LOG_LEVELS.get(level, logging.INFO), "[%s] %s", level.upper(), message)
        for listener in list(self._listeners):
            listener(item)
        return item

    def info(self, message: str) -> Feedback:
        return self.emit(INFO, message)

    def success(self, message: str) -> Feedback:
        return self.emit(SUCCESS, message)

    def warning(self, message: str) -> Feedback:
        return self.emit(WARNING, message)

    def error(self, message: str) -> Feedback:
        return self.emit(ERROR, message)

    def loading(self, message: str) -> Feedback:
        item = self.emit(LOADING, message)
        self.active_loading[item.id] = item
        return item

    def dismiss(self, feedback_id: int) -> None:
        self.active_loading.pop(feedback_id, None)

    def request_error(self, error: RequestError, custom_message: Optional[str] = None) -> Optional[Feedback]:
        message = message_for_error(error, custom_message)
        if message is None:
            return None
        return self.error(message)

    def messages(self, level: Optional[str] = None) -> List[str]:
        return [f.message for f in self.history if level is None or f.level == level]
