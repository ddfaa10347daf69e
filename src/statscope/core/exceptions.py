"""Custom exceptions for statscope."""

from __future__ import annotations

from typing import Any


class StatscopeError(Exception):
    """Base exception for all statscope errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class SnapshotParseError(StatscopeError):
    """Raised when a snapshot file cannot be read or one of its lines fails to decode.

    The loader drops the whole file when this is raised.
    """

    def __init__(self, message: str, path: str, line: int | None = None) -> None:
        details: dict[str, Any] = {"path": path}
        if line is not None:
            details["line"] = line
        super().__init__(message, details)
        self.path = path
        self.line = line


class CatalogLoadError(StatscopeError):
    """Raised when the snapshot directory itself cannot be listed."""

    def __init__(self, message: str, path: str) -> None:
        super().__init__(message, {"path": path})
        self.path = path


class EmptyCatalogError(StatscopeError):
    """Raised at startup when no snapshot could be loaded."""

    pass


class CollectionError(StatscopeError):
    """Raised when the snapshot collection step fails or times out."""

    pass
