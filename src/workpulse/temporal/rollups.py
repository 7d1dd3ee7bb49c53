"""Aggregate per-commit diff stats into totals and calendar-day buckets."""

from __future__ import annotations

from collections import OrderedDict
from datetime import date
from typing import Iterable, Tuple

from ..models import Commit, DailyRollup, DiffStat, GitActivity


def partition(raw_added: int, raw_removed: int) -> Tuple[int, int, int]:
    """Split raw counts into ``(added, removed, modified)``.

    ``modified = min(added, removed)`` is inferred overlap, not a line-level
    diff: one edited line and an unrelated add/remove pair look the same.
    """
    modified = min(raw_added, raw_removed)
    return raw_added - modified, raw_removed - modified, modified


def lines_basis(added: float, modified: float, removed: float) -> float:
    """Blended change volume: ``max(0, added + modified/2 - removed/2)``."""
    return max(0.0, added + 0.5 * modified - 0.5 * removed)


def build_activity(
    commits: Iterable[Tuple[Commit, DiffStat]],
    repo_root: str | None = None,
    ref: str | None = None,
    all_branches: bool = False,
) -> GitActivity:
    """Sum diff stats into global totals and per-day rollups.

    The partition is applied once to the global totals, never per commit.
    """
    activity = GitActivity(repo_root=repo_root, ref=ref, all_branches=all_branches)
    days: dict[date, DailyRollup] = {}

    for commit, stat in commits:
        activity.commits.append(commit)
        activity.diff_stats.append(stat)
        activity.raw_lines_added += stat.raw_lines_added
        activity.raw_lines_removed += stat.raw_lines_removed
        activity.files_changed += stat.files_changed

        day = commit.timestamp_local.date()
        bucket = days.get(day)
        if bucket is None:
            bucket = days[day] = DailyRollup(date=day)
        bucket.commits += 1
        bucket.files_changed += stat.files_changed
        bucket.lines_added += stat.raw_lines_added
        bucket.lines_removed += stat.raw_lines_removed

    for bucket in days.values():
        bucket.lines_modified = min(bucket.lines_added, bucket.lines_removed)

    activity.commit_count = len(activity.commits)
    (
        activity.partitioned_added,
        activity.partitioned_removed,
        activity.partitioned_modified,
    ) = partition(activity.raw_lines_added, activity.raw_lines_removed)
    activity.daily_rollups = [days[d] for d in sorted(days)]
    return activity


def commits_per_day(commits: Iterable[Commit]) -> "OrderedDict[date, int]":
    """Commit counts keyed by local calendar day, oldest first."""
    counts: dict[date, int] = {}
    for commit in commits:
        day = commit.timestamp_local.date()
        counts[day] = counts.get(day, 0) + 1
    return OrderedDict((d, counts[d]) for d in sorted(counts))
