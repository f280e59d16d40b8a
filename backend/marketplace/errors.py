"""Error taxonomy for calls against the marketplace backend."""
from __future__ import annotations

from typing import Optional


class ApiError(Exception):
    """Base class for backend call failures.

    `code` is a short machine-readable reason, `status_code` the HTTP status
    when a response was received.
    """

    def __init__(self, code: str, *, status_code: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message or code)
        self.code = code
        self.status_code = status_code
        self.message = message or code


class NetworkFailure(ApiError):
    """Request could not complete or returned a non-success status."""


class NotFound(ApiError):
    """The backend answered 404: the record legitimately does not exist."""


__all__ = ["ApiError", "NetworkFailure", "NotFound"]
