"""
ButtonUp Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error scenarios an endpoint can hit.
Why:   Routes stay free of try/except blocks; global handlers (main.py) turn
       each exception type into the right status code and a JSON body.
How:   Each exception carries a message (returned to the client as `error`),
       optional `details` (also returned), and a context dict (logged only).

Exception Hierarchy:
    ButtonUpError (base)
    ├── ClientInputError              → 400 Bad Request
    ├── UnauthorizedError             → 401 Unauthorized
    ├── NotFoundError                 → 404 Not Found
    ├── ConfigurationError            → 500 Internal Server Error
    └── UpstreamError                 → 500 Internal Server Error
        ├── StorageError              (Supabase Storage gateway)
        │   └── StorageObjectNotFoundError → 404 Not Found
        └── ContentError              (Notion gateway)
"""

from typing import Any, Dict, Optional


class ButtonUpError(Exception):
    """
    Base exception for all ButtonUp application errors.

    Attributes:
        message:  Client-facing error description (returned as `error`)
        details:  Optional secondary description (returned as `details`)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.details = details
        self.context = context or {}
        super().__init__(self.message)


class ClientInputError(ButtonUpError):
    """
    Raised when a required request parameter is missing or unusable.

    HTTP: 400 Bad Request

    Why not FastAPI's required Query(...):
        A missing required query parameter would produce FastAPI's 422 with a
        validation array. Clients of this API expect 400 with a plain
        `{"error": "..."}` body, so presence is checked by hand.
    """

    def __init__(
        self,
        message: str = "Invalid request",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class UnauthorizedError(ButtonUpError):
    """Raised when a shared-secret bearer token is missing or wrong. HTTP 401."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message=message)


class NotFoundError(ButtonUpError):
    """
    Raised when a requested resource does not exist.

    HTTP: 404 Not Found
    When: Unknown IndexNow verification key.
    """

    def __init__(
        self,
        message: str = "The requested resource was not found",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(ButtonUpError):
    """
    Raised when an endpoint needs a setting that was never configured.

    HTTP: 500 Internal Server Error
    Example: GET /api/indexnow/{key} with INDEXNOW_API_KEY unset.
    """

    def __init__(
        self,
        message: str = "Service is not configured",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, details=details, context=context)


class UpstreamError(ButtonUpError):
    """
    Raised when a hosted service (Supabase, Notion) fails.

    HTTP: 500 Internal Server Error

    The message is taken from the upstream error when it carries one, so
    operators and clients see e.g. "Bucket not found" instead of a generic
    string. Use `from_exception` to build it.
    """

    @classmethod
    def from_exception(
        cls,
        exc: BaseException,
        fallback: str,
        context: Optional[Dict[str, Any]] = None,
    ) -> "UpstreamError":
        return cls(message=describe_error(exc, fallback), context=context)


class StorageError(UpstreamError):
    """Raised by the storage gateway when Supabase Storage fails."""


class StorageObjectNotFoundError(StorageError):
    """
    Raised when a delete targets an object that is not in the bucket.

    HTTP: 404 Not Found

    Supabase answers a delete of a missing object with an empty result
    rather than an error. We surface that as 404 so repeated deletes are
    visible to the caller instead of silently reporting success.
    """

    def __init__(self, file_name: str):
        super().__init__(
            message=f"File '{file_name}' was not found",
            context={"file_name": file_name},
        )
        self.file_name = file_name


class ContentError(UpstreamError):
    """Raised by the content gateway when the Notion API fails."""


def describe_error(exc: BaseException, fallback: str) -> str:
    """
    Extract a human-readable message from an arbitrary SDK exception.

    Supabase's StorageApiError and Notion's APIResponseError both expose a
    `message` attribute; anything else falls back to str(exc), then to the
    supplied fallback text.
    """
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or fallback
