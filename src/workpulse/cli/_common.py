"""Shared CLI helpers."""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from ..exceptions import ConfigurationError, RepositoryResolutionError, WorkpulseError

console = Console()


class ExitCode:
    """Process exit codes.

      0: Success
      1: Unexpected failure
      2: Configuration error (bad range, bad option, missing catalog file)
      3: Repository resolution failed with --require-repo
      4: One or more formats failed to write
    """

    SUCCESS = 0
    INTERNAL_ERROR = 1
    CONFIG_ERROR = 2
    REPO_ERROR = 3
    WRITE_ERROR = 4


def exit_code_for(error: WorkpulseError) -> int:
    if isinstance(error, ConfigurationError):
        return ExitCode.CONFIG_ERROR
    if isinstance(error, RepositoryResolutionError):
        return ExitCode.REPO_ERROR
    return ExitCode.INTERNAL_ERROR


def print_error(error: WorkpulseError) -> None:
    """One line naming the failing stage, then the details."""
    console.print(f"[red]Error ({error.stage}):[/red] {escape(error.message)}")
    for key, value in error.details.items():
        console.print(f"  [dim]{key}:[/dim] {escape(str(value))}")


def split_formats(values: Optional[List[str]]) -> Optional[List[str]]:
    """Flatten repeated and comma-separated ``--format`` values."""
    if not values:
        return None
    formats: List[str] = []
    for value in values:
        formats.extend(part.strip() for part in value.split(",") if part.strip())
    return formats or None


def flag(value: bool) -> Optional[bool]:
    """``True`` or ``None``: an unset flag must not mask config file values."""
    return True if value else None
