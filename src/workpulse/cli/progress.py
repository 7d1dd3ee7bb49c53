"""Progress display for the report pipeline."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)


@dataclass
class Phase:
    """A phase in the report pipeline."""

    name: str
    weight: int  # Relative weight for progress calculation
    description: str


PHASES = [
    Phase("scan", 40, "Scanning files"),
    Phase("history", 30, "Reading git history"),
    Phase("estimate", 10, "Estimating effort"),
    Phase("render", 20, "Writing reports"),
]

_INDEX = {p.name: i for i, p in enumerate(PHASES)}


class ReportProgress:
    """Advisory progress bar fed by ``(phase, detail)`` callbacks.

    Scan and history may report concurrently; the bar only moves forward.
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._current_phase = 0

    def start(self) -> None:
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold]{task.description}"),
            BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task(PHASES[0].description, total=100)

    def __call__(self, phase: str, detail: str = "") -> None:
        self.update(phase, detail)

    def update(self, phase: str, detail: str = "") -> None:
        if self._progress is None or self._task_id is None:
            return
        idx = _INDEX.get(phase)
        if idx is None:
            return
        self._current_phase = max(self._current_phase, idx)
        completed = sum(PHASES[i].weight for i in range(self._current_phase))

        message = PHASES[idx].description
        if detail:
            message = f"{message}: {detail}"
        if len(message) > 60:
            message = message[:57] + "..."
        self._progress.update(self._task_id, completed=completed, description=message)

    def finish(self) -> None:
        if self._progress is not None and self._task_id is not None:
            self._progress.update(self._task_id, completed=100, description="[green]Done[/]")
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def __enter__(self) -> "ReportProgress":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.finish()
