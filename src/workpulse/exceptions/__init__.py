"""Exception hierarchy for workpulse."""

from .base import WorkpulseError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidDateRangeError,
    InvalidPathError,
)
from .pipeline import (
    ExternalToolError,
    ExtractionError,
    FileAccessError,
    RenderError,
    RepositoryResolutionError,
    ScanError,
    SerializationError,
)

__all__ = [
    "WorkpulseError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "InvalidDateRangeError",
    "ScanError",
    "FileAccessError",
    "ExtractionError",
    "RepositoryResolutionError",
    "ExternalToolError",
    "RenderError",
    "SerializationError",
]
