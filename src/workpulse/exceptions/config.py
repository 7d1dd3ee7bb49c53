"""Configuration exceptions: paths, settings, date ranges."""

from datetime import date
from pathlib import Path
from typing import Any

from .base import WorkpulseError


class ConfigurationError(WorkpulseError):
    """Base class for configuration-related errors.

    Always fatal: raised before any output artifact is written.
    """

    stage = "configuration"


class InvalidPathError(ConfigurationError):
    """Raised when a provided path is invalid."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"Invalid path: {path}", details={"path": str(path), "reason": reason})
        self.path = path
        self.reason = reason


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class InvalidDateRangeError(ConfigurationError):
    """Raised when a custom date range is incomplete, unparsable or reversed."""

    def __init__(self, reason: str, start: Any = None, end: Any = None):
        details = {"reason": reason}
        if start is not None:
            details["start"] = start.isoformat() if isinstance(start, date) else str(start)
        if end is not None:
            details["end"] = end.isoformat() if isinstance(end, date) else str(end)
        super().__init__(f"Invalid date range: {reason}", details=details)
        self.reason = reason
        self.start = start
        self.end = end
