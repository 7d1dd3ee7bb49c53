"""Combine walker, extractor and estimation output into one ``Report``."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, List, Optional

from . import __version__
from .baseline import BaselineMetrics, compute_deltas
from .estimation import estimate, evaluate_views
from .models import DateRange, EffortFactor, FilesystemSnapshot, GitActivity, Report


def assemble(
    date_range: DateRange,
    git_activity: GitActivity,
    snapshot: Optional[FilesystemSnapshot],
    *,
    catalog: Iterable[EffortFactor],
    baseline: Optional[BaselineMetrics] = None,
    generated_at: Optional[datetime] = None,
    target_root: str = "",
    commit_list_limit: int = 20,
    warnings: Optional[List[str]] = None,
) -> Report:
    """Run both effort models and the baseline comparison.

    The primary estimate uses version-control activity only; the catalog is
    evaluated once per view. Neither model reads the other's output.
    """
    report = Report(
        date_range=date_range,
        git_activity=git_activity,
        effort_estimate=estimate(git_activity),
        generated_at=generated_at or datetime.now().replace(microsecond=0),
        target_root=target_root,
        filesystem_snapshot=snapshot,
        alternative_effort=evaluate_views(git_activity, snapshot, catalog),
        commit_list_limit=commit_list_limit,
        warnings=list(warnings or []),
        tool_version=__version__,
    )
    if baseline is not None:
        report.baseline_delta = compute_deltas(report, baseline)
    return report
