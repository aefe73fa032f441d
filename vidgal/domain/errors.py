"""Typed failures raised by the discovery sources.

Every failure carries an ErrorKind so the pipeline can decide on fallback by
branching on the kind instead of on the exception class.
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    FETCH_ERROR = "FETCH_ERROR"
    FORMAT_ERROR = "FORMAT_ERROR"
    EMPTY = "EMPTY"


class DiscoveryError(Exception):
    """Base class for all source failures."""

    kind: ErrorKind = ErrorKind.FETCH_ERROR

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.url = url


class NotFoundError(DiscoveryError):
    """The manifest resource answered with 404."""

    kind = ErrorKind.NOT_FOUND


class FetchError(DiscoveryError):
    """Non-success HTTP status, or the request never got a response (status is None)."""

    kind = ErrorKind.FETCH_ERROR

    def __init__(self, message: str, url: Optional[str] = None, status: Optional[int] = None):
        super().__init__(message, url=url)
        self.status = status


class FormatError(DiscoveryError):
    """Manifest body is not JSON, or not a list / {"files": [...]} payload."""

    kind = ErrorKind.FORMAT_ERROR


class EmptyError(DiscoveryError):
    """Directory listing contained no candidate media links."""

    kind = ErrorKind.EMPTY
