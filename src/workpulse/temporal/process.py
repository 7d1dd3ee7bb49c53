"""Process port for external commands.

Parsers never call ``subprocess`` directly; they go through a
``CommandRunner`` so tests can feed canned git output.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol, Sequence

from ..exceptions import ExternalToolError
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    stdout: str
    returncode: int
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class CommandRunner(Protocol):
    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        """Run ``args`` and capture output.

        Raises:
            ExternalToolError: if the program is missing or times out
        """
        ...


class SubprocessRunner:
    """Blocking subprocess call with captured stdout."""

    def __init__(self, timeout_seconds: int = 120):
        self.timeout_seconds = timeout_seconds

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        try:
            proc = subprocess.run(
                list(args),
                cwd=str(cwd) if cwd is not None else None,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout_seconds,
            )
        except FileNotFoundError:
            raise ExternalToolError(args, "executable not found on PATH")
        except subprocess.TimeoutExpired:
            raise ExternalToolError(args, f"timed out after {self.timeout_seconds}s")
        except OSError as e:
            raise ExternalToolError(args, str(e))

        if proc.returncode != 0:
            logger.debug("%s exited %d: %s", args[0], proc.returncode, proc.stderr.strip())
        return CommandResult(stdout=proc.stdout, returncode=proc.returncode, stderr=proc.stderr)
