"""
NoteKeeper Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the standard {message, data: null} envelope with the matching
       HTTP status code.
Who:   Raised by routes, services and the repository; caught by global handlers.

Exception Hierarchy:
    NoteKeeperError (base)     → 500 Internal Server Error
    ├── ValidationError        → 400 Bad Request (client can fix)
    ├── NotFoundError          → 404 Not Found
    ├── StorageError           → 500 Internal Server Error
    └── InjectedFaultError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class NoteKeeperError(Exception):
    """
    Base exception for all NoteKeeper application errors.

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


class ValidationError(NoteKeeperError):
    """
    Raised when client input fails validation.

    When:    Blank or missing title, no search terms, empty PATCH body.
    HTTP:    400 Bad Request
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


class NotFoundError(NoteKeeperError):
    """
    Raised when a requested note does not exist.

    The repository reports a missing note as None; the route turns that
    into this exception with an operation-specific message.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        message: str = "Note not found",
        note_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if note_id:
            ctx["note_id"] = note_id
        super().__init__(message=message, context=ctx)
        self.note_id = note_id


class StorageError(NoteKeeperError):
    """
    Raised when the backing JSON file cannot be read or written.

    When:    Disk full, permission denied, corrupt file at startup.
    HTTP:    500 Internal Server Error

    The message sent to the client stays generic; the path and OS error
    travel in `context` and are only logged.
    """

    def __init__(
        self,
        message: str = "Note storage is unavailable. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class InjectedFaultError(NoteKeeperError):
    """Raised by the update fault injector. HTTP: 500."""

    def __init__(
        self,
        message: str = "The error devil called you!",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
