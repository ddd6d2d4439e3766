#!/usr/bin/env python3

from typing import Optional


class MediaDirectoryError(Exception):
    """Base class for errors raised by the media directory engine."""


class ParseError(MediaDirectoryError):
    """A path could not be resolved into a node chain."""

    def __init__(self, path: str, token: Optional[str] = None, reason: str = ""):
        """Initialize the parse error.

        Args:
            path: The path that failed to parse
            token: The offending token, if any
            reason: Human readable explanation
        """
        self.path = path
        self.token = token
        self.reason = reason
        message = f"Cannot parse path {path!r}"
        if token is not None:
            message += f" at token {token!r}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class StoreUnavailableError(MediaDirectoryError):
    """The backing store could not be opened."""


class QueryError(MediaDirectoryError):
    """The backing store was opened but a query failed."""


class RegistryInconsistencyError(MediaDirectoryError):
    """The static node kind registry is malformed."""
