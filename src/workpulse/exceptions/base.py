"""Base exception for workpulse."""

from typing import Dict, Optional


class WorkpulseError(Exception):
    """Base exception for all workpulse errors.

    ``stage`` names the pipeline stage the error belongs to so the CLI can
    say where a run failed (configuration, scan, extraction, rendering).
    """

    stage = "run"

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message
