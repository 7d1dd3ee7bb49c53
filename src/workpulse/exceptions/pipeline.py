"""Stage errors raised while scanning, extracting history and rendering."""

from pathlib import Path
from typing import Optional, Sequence

from .base import WorkpulseError


class ScanError(WorkpulseError):
    """Base class for filesystem inventory errors."""

    stage = "scan"


class FileAccessError(ScanError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ExtractionError(WorkpulseError):
    """Base class for version-control history errors."""

    stage = "extraction"


class RepositoryResolutionError(ExtractionError):
    """Raised when a path is not inside a git working copy and no fallback works."""

    def __init__(self, path: Path, reason: str, fallback: Optional[Path] = None):
        details = {"path": str(path), "reason": reason}
        if fallback is not None:
            details["fallback"] = str(fallback)
        super().__init__(f"Not a git repository: {path}", details=details)
        self.path = path
        self.reason = reason
        self.fallback = fallback


class ExternalToolError(ExtractionError):
    """Raised when the git binary is missing, times out or exits non-zero."""

    def __init__(self, command: Sequence[str], reason: str, returncode: Optional[int] = None):
        details = {"command": " ".join(command), "reason": reason}
        if returncode is not None:
            details["returncode"] = str(returncode)
        super().__init__(f"External tool failed: {command[0] if command else '?'}", details=details)
        self.command = list(command)
        self.reason = reason
        self.returncode = returncode


class RenderError(WorkpulseError):
    """Base class for report rendering errors."""

    stage = "rendering"


class SerializationError(RenderError):
    """Raised when a report artifact cannot be written."""

    def __init__(self, fmt: str, path: Path, reason: str):
        super().__init__(
            f"Cannot write {fmt} report: {path}",
            details={"format": fmt, "path": str(path), "reason": reason},
        )
        self.fmt = fmt
        self.path = path
        self.reason = reason
