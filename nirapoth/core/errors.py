"""
Error taxonomy shared by the API client, the store and the workflows.

- ClientValidationError: local form checks, raised before any network call.
- UploadError: the media host was unreachable or refused a file.
- RequestError: network failure or a non-2xx response from the backend.
- GeocodingError: reverse geocoding failed; callers degrade instead of failing.
"""
from typing import Any, List, Optional

NETWORK_ERROR_MESSAGE = "Network error. Please check your connection."
DEFAULT_ERROR_MESSAGE = "An unexpected error occurred"


class NiraPothError(Exception):
    """Base class for every error raised by this package."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientValidationError(NiraPothError):
    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


class UploadError(NiraPothError):
    def __init__(self, message: str, filename: Optional[str] = None):
        super().__init__(message)
        self.filename = filename


class GeocodingError(NiraPothError):
    pass


class RequestError(NiraPothError):
    def __init__(
        self,
        message: str,
        status_code: int = 0,
        errors: Optional[List[Any]] = None,
        details: Any = None,
        server_message: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []
        self.details = details
        # Message taken verbatim from the response body, if it carried one.
        self.server_message = server_message

    @property
    def is_network_error(self) -> bool:
        return self.status_code == 0

    @classmethod
    def from_response_body(cls, status_code: int, body: Any) -> "RequestError":
        """Build an error from a non-2xx body, preferring its ``message``."""
        server_message = None
        errors: List[Any] = []
        if isinstance(body, dict):
            server_message = body.get("message") or body.get("error") or body.get("detail")
            errors = body.get("errors") or []
        elif isinstance(body, str) and body.strip():
            server_message = body.strip()
        if server_message is not None and not isinstance(server_message, str):
            server_message = str(server_message)
        return cls(
            server_message or DEFAULT_ERROR_MESSAGE,
            status_code=status_code,
            errors=errors,
            details=body,
            server_message=server_message,
        )

    @classmethod
    def network(cls, cause: Optional[BaseException] = None) -> "RequestError":
        return cls(NETWORK_ERROR_MESSAGE, status_code=0, details=repr(cause) if cause else None)

    def __repr__(self) -> str:
        return f"<RequestError {self.status_code}: {self.message}>"


def get_error_message(error: Any, fallback: str = "An error occurred") -> str:
    """Extract a user-facing message from an error, a string, or a response body."""
    if isinstance(error, str):
        return error or fallback
    if isinstance(error, NiraPothError):
        return error.message or fallback
    if isinstance(error, dict):
        return error.get("message") or error.get("error") or fallback
    if isinstance(error, BaseException) and str(error):
        return str(error)
    return fallback
