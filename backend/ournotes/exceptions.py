"""
OurNotes — Custom Exception Hierarchy
=======================================

What:  Application-specific exceptions for the expected failure outcomes.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) translate the
       server-side ones into `{"error": <message>}` JSON responses; the client
       package records NetworkError messages on its context.
Who:   Raised by services and the client API wrapper.

Exception Hierarchy:
    OurNotesError (base)
    ├── ValidationError   → 400 Bad Request (missing/invalid field)
    ├── NotFoundError     → 404 Not Found (no row with that id)
    ├── StoreError        → 500 Internal Server Error (row store failed)
    └── NetworkError      → client side only (service unreachable or non-2xx)
"""

from typing import Any, Dict, Optional


class OurNotesError(Exception):
    """
    Base exception for all OurNotes application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(OurNotesError):
    """
    Raised when a request body lacks a required field or carries a bad value.

    HTTP:    400 Bad Request. No statement is issued before this is raised.

    Example response:
        {"error": "Text, date, and person are required"}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(OurNotesError):
    """
    Raised when an update or delete statement affected zero rows.

    HTTP:    404 Not Found, always with the message "Note not found".
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message="Note not found", context=ctx)
        self.resource_id = resource_id


class StoreError(OurNotesError):
    """
    Raised when the row store fails during an operation.

    HTTP:    500 Internal Server Error.

    The message is a generic per-kind sentence ("Failed to fetch map notes").
    Driver details go into `context` for the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NetworkError(OurNotesError):
    """
    Raised by the client API wrapper when the Note Service cannot be used.

    Covers transport failures (status_code is None) and non-2xx responses
    (status_code holds the HTTP status). Never escapes a cache operation.
    """

    def __init__(
        self,
        message: str = "Network request failed",
        status_code: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if status_code is not None:
            ctx["status_code"] = status_code
        super().__init__(message=message, context=ctx)
        self.status_code = status_code
