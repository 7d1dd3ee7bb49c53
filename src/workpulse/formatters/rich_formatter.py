"""Rich terminal summary for workpulse runs."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..models import AlternativeEffort, FilesystemSnapshot, Report
from .base import format_number

console = Console(stderr=True)


def _delta_label(value: Optional[float]) -> str:
    if value is None:
        return ""
    if value > 0:
        return f"[green]{format_number(value, signed=True)}[/green]"
    elif value < 0:
        return f"[red]{format_number(value)}[/red]"
    else:
        return "[dim]0[/dim]"


class RichSummary:
    """Summary panel plus compact tables, printed after a report run."""

    def __init__(self, out: Optional[Console] = None, show_catalog: bool = True):
        self.console = out or console
        self.show_catalog = show_catalog

    def render(self, report: Report) -> None:
        self._print_header(report)
        self._print_activity(report)
        if report.filesystem_snapshot is not None:
            self.print_snapshot(report.filesystem_snapshot)
        if self.show_catalog:
            alt = report.alternative_for("git")
            if alt is not None and alt.rows:
                self.print_alternative(alt)
        for warning in report.warnings:
            self.console.print(f"[yellow]warning:[/yellow] {escape(warning)}")

    def _print_header(self, report: Report) -> None:
        rng = report.date_range
        effort = report.effort_estimate
        floor = " [dim](30 min floor)[/dim]" if effort.breakdown.get("floor_applied") else ""
        body = (
            f"[bold]{escape(rng.label)}[/bold]  {rng.start:%Y-%m-%d} to {rng.end:%Y-%m-%d} ({rng.days} days)\n"
            f"Target: {escape(report.target_root)}\n"
            f"Estimated effort: [bold cyan]{effort.minutes} min[/bold cyan] "
            f"({effort.hours:.2f} h){floor}"
        )
        self.console.print()
        self.console.print(
            Panel(body, title="[bold cyan]WORKPULSE[/bold cyan]", border_style="cyan", expand=False)
        )

    def _print_activity(self, report: Report) -> None:
        activity = report.git_activity
        if not activity.available:
            reason = activity.unavailable_reason or "unknown reason"
            self.console.print(f"[yellow]Version-control history unavailable:[/yellow] {escape(reason)}")
            return

        deltas = report.baseline_delta.deltas if report.baseline_delta else {}
        table = Table(title="Version control", show_header=True, header_style="bold")
        table.add_column("Metric")
        table.add_column("Value", justify="right")
        if deltas:
            table.add_column("vs baseline", justify="right")

        rows = [
            ("Commits", activity.commit_count, "commit_count"),
            ("Files changed", activity.files_changed, "files_changed"),
            ("Lines added", activity.raw_lines_added, "raw_lines_added"),
            ("Lines removed", activity.raw_lines_removed, "raw_lines_removed"),
            ("Lines modified (inferred)", activity.partitioned_modified, "partitioned_modified"),
            ("Estimated minutes", report.effort_estimate.minutes, "estimated_minutes"),
        ]
        for label, value, key in rows:
            cells = [label, f"{value:,}"]
            if deltas:
                cells.append(_delta_label(deltas.get(key)))
            table.add_row(*cells)
        self.console.print(table)

    def print_snapshot(self, snap: FilesystemSnapshot) -> None:
        table = Table(title=f"Filesystem: {escape(snap.root)}", show_header=True, header_style="bold")
        table.add_column("Metric")
        table.add_column("Value", justify="right")
        table.add_row("Items", f"{snap.total_items:,}")
        table.add_row("Files", f"{snap.total_files:,}")
        table.add_row("Folders", f"{snap.total_folders:,}")
        table.add_row("Shortcuts", f"{snap.total_shortcuts:,}")
        table.add_row("Links / reparse points", f"{snap.total_reparse_points:,}")
        table.add_row("Lines", f"{snap.sum_lines:,}")
        table.add_row("Characters", f"{snap.sum_chars:,}")
        table.add_row("Bytes", f"{snap.sum_size_bytes:,}")
        if snap.top_extensions:
            table.add_row(
                "Top extensions",
                ", ".join(f"{ext} ({count})" for ext, count in snap.top_extensions),
            )
        if snap.unreadable_dirs:
            table.add_row("[yellow]Unreadable folders[/yellow]", str(snap.unreadable_dirs))
        self.console.print(table)
        if snap.filters_applied:
            self.console.print(f"[dim]Excluded: {', '.join(snap.filters_applied)}[/dim]")

    def print_alternative(self, alt: AlternativeEffort) -> None:
        table = Table(
            title=f"Effort cross-reference ({alt.view} view, basis {format_number(alt.basis)} lines)",
            show_header=True,
            header_style="bold",
        )
        table.add_column("Methodology")
        table.add_column("Hours/line", justify="right")
        table.add_column("Hours", justify="right")
        for row in alt.rows:
            table.add_row(escape(row.label), f"{row.factor:g}", f"{row.estimated_hours:.1f}")
        self.console.print(table)
