# core/errors.py

"""
Internal exceptions raised by model validators.

Public model methods never let these escape: they are caught at the method boundary
and converted to a failed `Response` via `Response.from_error()`, which keeps the
`ErrorCode` and the offending values in `data`.
"""

from __future__ import annotations

from typing import Any

from core.response import ErrorCode


class TrackerError(Exception):
    """Base exception for all tracker validation failures."""

    def __init__(
        self,
        message: str,
        error: ErrorCode,
        data: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error = error
        self.data = data or {}


class ValidationError(TrackerError, ValueError):
    """Raised when a value is out of range or malformed."""


class ConflictError(TrackerError):
    """Raised when an identity (code, id, or name) is already taken."""


class NotFoundError(TrackerError, LookupError):
    """Raised when a referenced class or assignment does not exist."""
