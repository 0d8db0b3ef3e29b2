"""
tracegrid.errors - Exception hierarchy.

Matrix computation is total over in-memory data; the only failures are
upstream (the symbol source) or configuration problems.
"""

from __future__ import annotations


class TraceGridError(Exception):
    """Base exception for tracegrid."""


class SymbolSourceUnavailableError(TraceGridError):
    """The upstream symbol source could not be reached or read.

    Fatal for the current build request; no partial matrix is produced.
    """

    def __init__(self, message: str, *, location: str | None = None) -> None:
        super().__init__(message)
        self.location = location


class ConfigError(TraceGridError):
    """A configuration file could not be read or parsed."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


__all__ = [
    "TraceGridError",
    "SymbolSourceUnavailableError",
    "ConfigError",
]
