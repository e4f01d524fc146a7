"""Exceptions raised by funcdoc calling layers.

The extraction and synthesis core never raises; these cover configuration,
file reading and the optional remote documentation step.
"""

from __future__ import annotations


class FuncdocError(Exception):
    """Base exception for funcdoc operations."""

    pass


class ConfigError(FuncdocError):
    """Raised when a configuration value is invalid."""

    pass


class SourceReadError(FuncdocError):
    """Raised when a source unit cannot be read."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class RemoteDocumentationError(FuncdocError):
    """Raised when the remote documentation source fails or returns junk."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
