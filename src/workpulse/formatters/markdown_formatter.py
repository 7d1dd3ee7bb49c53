"""Markdown formatter for workpulse."""

from typing import Iterable, List, Sequence

from ..models import AlternativeEffort, Report
from .base import BaseFormatter, format_number


def _cell(text: object) -> str:
    return str(text).replace("|", "\\|").replace("\n", " ")


def _table(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> List[str]:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(c) for c in row) + " |")
    return lines


class MarkdownFormatter(BaseFormatter):
    """Structured text report, readable in a terminal or a code host."""

    name = "markdown"
    extension = ".md"

    def format(self, report: Report) -> str:
        lines: List[str] = []
        rng = report.date_range
        lines.append(f"# Workspace activity: {rng.label or 'report'}")
        lines.append("")
        span = f"{rng.start:%Y-%m-%d %H:%M:%S} to {rng.end:%Y-%m-%d %H:%M:%S}"
        lines.append(f"- **Range:** {span} ({rng.days} days)")
        lines.append(f"- **Target:** `{report.target_root}`")
        lines.append(f"- **Generated:** {report.generated_at:%Y-%m-%d %H:%M:%S}")
        if report.tool_version:
            lines.append(f"- **workpulse:** {report.tool_version}")
        lines.append("")

        self._summary(report, lines)
        self._history(report, lines)
        self._filesystem(report, lines)
        for alt in report.alternative_effort:
            self._alternative(alt, lines)
        self._baseline(report, lines)

        if report.warnings:
            lines.append("## Warnings")
            lines.append("")
            lines.extend(f"- {w}" for w in report.warnings)
            lines.append("")

        return "\n".join(lines).rstrip("\n") + "\n"

    def _summary(self, report: Report, lines: List[str]) -> None:
        activity = report.git_activity
        effort = report.effort_estimate
        lines.append("## Summary")
        lines.append("")
        rows = [
            ("Commits", activity.commit_count),
            ("Files changed", activity.files_changed),
            ("Lines added (raw)", activity.raw_lines_added),
            ("Lines removed (raw)", activity.raw_lines_removed),
            ("Lines added (net of modified)", activity.partitioned_added),
            ("Lines modified (inferred)", activity.partitioned_modified),
            ("Lines removed (net of modified)", activity.partitioned_removed),
            ("Estimated effort", f"{effort.minutes} min ({effort.hours:.2f} h)"),
        ]
        lines.extend(_table(["Metric", "Value"], rows))
        lines.append("")
        if effort.breakdown.get("floor_applied"):
            lines.append("_The 30 minute minimum for a period with commits was applied._")
            lines.append("")
        if not activity.available:
            reason = activity.unavailable_reason or "unknown reason"
            lines.append(f"_Version-control history unavailable: {reason}_")
            lines.append("")

    def _history(self, report: Report, lines: List[str]) -> None:
        activity = report.git_activity
        lines.append("## Version control")
        lines.append("")
        if activity.repo_root:
            scope = "all branches" if activity.all_branches else (activity.ref or "HEAD")
            lines.append(f"Repository `{activity.repo_root}` ({scope})")
            lines.append("")

        if activity.daily_rollups:
            lines.append("### Daily activity")
            lines.append("")
            rows = [
                (d.date.isoformat(), d.commits, d.files_changed, d.lines_added, d.lines_removed, d.lines_modified)
                for d in activity.daily_rollups
            ]
            lines.extend(_table(["Date", "Commits", "Files", "Added", "Removed", "Modified"], rows))
            lines.append("")

        commits = report.recent_commits
        if not commits:
            lines.append("No commits in this range.")
            lines.append("")
            return

        shown = len(commits)
        title = "### Commits"
        if activity.commit_count > shown:
            title += f" (latest {shown} of {activity.commit_count})"
        lines.append(title)
        lines.append("")
        rows = [
            (f"`{c.short_hash}`", f"{c.timestamp_local:%Y-%m-%d %H:%M}", c.author, c.subject)
            for c in commits
        ]
        lines.extend(_table(["Commit", "Time", "Author", "Subject"], rows))
        lines.append("")

    def _filesystem(self, report: Report, lines: List[str]) -> None:
        snap = report.filesystem_snapshot
        if snap is None:
            return
        lines.append("## Filesystem")
        lines.append("")
        rows = [
            ("Items", snap.total_items),
            ("Files", snap.total_files),
            ("Folders", snap.total_folders),
            ("Shortcuts", snap.total_shortcuts),
            ("Links / reparse points", snap.total_reparse_points),
            ("Lines", snap.sum_lines),
            ("Characters", snap.sum_chars),
            ("Size (bytes)", snap.sum_size_bytes),
            ("Last modified", f"{snap.last_modified:%Y-%m-%d %H:%M:%S}" if snap.last_modified else "n/a"),
        ]
        lines.extend(_table(["Metric", "Value"], rows))
        lines.append("")
        if snap.top_extensions:
            lines.append("### Top extensions")
            lines.append("")
            lines.extend(_table(["Extension", "Files"], snap.top_extensions))
            lines.append("")
        if snap.filters_applied:
            lines.append("Excluded: " + ", ".join(snap.filters_applied))
            lines.append("")

    def _alternative(self, alt: AlternativeEffort, lines: List[str]) -> None:
        title = "version control" if alt.view == "git" else alt.view
        lines.append(f"## Alternative effort ({title} view)")
        lines.append("")
        lines.append(f"Lines basis: {format_number(alt.basis)}")
        lines.append("")
        rows = []
        for row in alt.rows:
            refs = ", ".join(f"<{link}>" for link in row.reference_links)
            rows.append((row.label, f"{row.factor:g}", f"{row.estimated_hours:.1f}", refs))
        lines.extend(_table(["Methodology", "Hours per line", "Estimated hours", "References"], rows))
        lines.append("")

    def _baseline(self, report: Report, lines: List[str]) -> None:
        delta = report.baseline_delta
        if delta is None:
            return
        lines.append("## Change since baseline")
        lines.append("")
        src = f"`{delta.baseline_path}`"
        if delta.baseline_generated_at:
            src += f" ({delta.baseline_generated_at})"
        lines.append(f"Baseline: {src}")
        lines.append("")
        rows = ((k, format_number(v, signed=True)) for k, v in delta.deltas.items())
        lines.extend(_table(["Metric", "Delta"], rows))
        lines.append("")
