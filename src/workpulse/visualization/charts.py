"""Build the per-day series behind the two HTML bar+line charts.

Each chart is a list of day labels with one bar value and one trend value
per label. The HTML template only draws what it is given: alignment of the
trend to the bar labels happens here, not in JavaScript.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List

from ..models import DailyRollup, Report
from ..temporal.rollups import commits_per_day, lines_basis, partition


@dataclass
class ChartSeries:
    title: str
    labels: List[str] = field(default_factory=list)
    bars: List[float] = field(default_factory=list)
    trend: List[float] = field(default_factory=list)
    bar_label: str = ""
    trend_label: str = "Lines basis"
    empty: bool = False
    empty_label: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _rollup_basis(rollup: DailyRollup) -> float:
    added, removed, modified = partition(rollup.lines_added, rollup.lines_removed)
    return lines_basis(added, modified, removed)


def build_git_chart(report: Report) -> ChartSeries:
    """Files changed per day, with the per-day lines basis as trend.

    Falls back to commit counts per day (derived from the commit list) when
    the rollups carry no file counts, e.g. history made only of empty
    commits. Days without rollup data get a trend value of 0.
    """
    activity = report.git_activity
    chart = ChartSeries(title="Version-control activity")

    rollups = {r.date: r for r in activity.daily_rollups}
    if rollups and any(r.files_changed for r in rollups.values()):
        days: List[date] = sorted(rollups)
        chart.bars = [rollups[d].files_changed for d in days]
        chart.bar_label = "Files changed"
    else:
        counts = commits_per_day(activity.commits)
        days = list(counts)
        chart.bars = list(counts.values())
        chart.bar_label = "Commits"

    chart.labels = [d.isoformat() for d in days]
    chart.trend = [_rollup_basis(rollups[d]) if d in rollups else 0.0 for d in days]

    if not chart.labels or not any(chart.bars):
        chart.empty = True
        chart.empty_label = "No version-control activity in this range"
    return chart


def build_filesystem_chart(report: Report) -> ChartSeries:
    """Files last modified per day inside the range, with their summed lines."""
    chart = ChartSeries(
        title="Filesystem activity",
        bar_label="Files modified",
        trend_label="Lines in modified files",
    )
    snapshot = report.filesystem_snapshot
    per_day: Dict[date, List[int]] = {}
    if snapshot is not None:
        for record in snapshot.files:
            if not report.date_range.contains(record.last_modified):
                continue
            bucket = per_day.setdefault(record.last_modified.date(), [0, 0])
            bucket[0] += 1
            bucket[1] += record.line_count or 0

    days = sorted(per_day)
    chart.labels = [d.isoformat() for d in days]
    chart.bars = [per_day[d][0] for d in days]
    chart.trend = [float(per_day[d][1]) for d in days]

    if not chart.labels:
        chart.empty = True
        chart.empty_label = (
            "No filesystem inventory" if snapshot is None else "No files modified in this range"
        )
    return chart
