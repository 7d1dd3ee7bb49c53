"""Data models for workpulse.

Every record is a plain dataclass so a ``Report`` can be serialised to JSON
without any ORM machinery (see ``serialization.py``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

from .exceptions import InvalidDateRangeError

SCHEMA_VERSION = 1


@dataclass(frozen=True)
class DateRange:
    """Inclusive reporting window at day granularity."""

    start: datetime
    end: datetime
    label: str = ""

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidDateRangeError("start is after end", self.start.date(), self.end.date())

    @classmethod
    def from_dates(cls, start: date, end: date, label: str = "") -> "DateRange":
        """Build a range covering ``start 00:00:00`` through ``end 23:59:59``."""
        if start > end:
            raise InvalidDateRangeError("start is after end", start, end)
        return cls(
            start=datetime(start.year, start.month, start.day, 0, 0, 0),
            end=datetime(end.year, end.month, end.day, 23, 59, 59),
            label=label,
        )

    def contains(self, moment: datetime) -> bool:
        return self.start <= moment <= self.end

    @property
    def days(self) -> int:
        return (self.end.date() - self.start.date()).days + 1


# ── Filesystem ────────────────────────────────────────────────────


@dataclass
class TextMetrics:
    lines: int
    chars: int


@dataclass
class FileRecord:
    """One retained file.

    ``line_count``/``char_count`` are ``None`` for binary or unreadable files;
    ``0`` means an empty text file.
    """

    absolute_path: str
    relative_path: str
    size_bytes: int
    last_modified: datetime
    is_binary: bool
    line_count: Optional[int] = None
    char_count: Optional[int] = None

    @property
    def measured(self) -> bool:
        return self.line_count is not None


@dataclass
class FilesystemSnapshot:
    root: str
    total_items: int = 0
    total_files: int = 0
    total_folders: int = 0
    total_shortcuts: int = 0
    total_reparse_points: int = 0
    sum_lines: int = 0
    sum_chars: int = 0
    sum_size_bytes: int = 0
    last_modified: Optional[datetime] = None
    top_extensions: List[Tuple[str, int]] = field(default_factory=list)
    files: List[FileRecord] = field(default_factory=list)
    links: List[str] = field(default_factory=list)  # relative paths, never expanded
    filters_applied: List[str] = field(default_factory=list)
    unreadable_dirs: int = 0


# ── Version control ───────────────────────────────────────────────


@dataclass(frozen=True)
class Commit:
    hash: str
    timestamp_local: datetime
    subject: str
    author: str

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


@dataclass
class DiffStat:
    commit_hash: str
    files_changed: int = 0
    raw_lines_added: int = 0
    raw_lines_removed: int = 0


@dataclass
class DailyRollup:
    date: date
    commits: int = 0
    files_changed: int = 0
    lines_added: int = 0
    lines_removed: int = 0
    lines_modified: int = 0


@dataclass
class GitActivity:
    """Aggregated history for one date window.

    The partitioned counts follow ``partitioned_modified = min(added, removed)``
    computed once from the global totals. This is an approximation: it cannot
    tell a rewritten line from an unrelated add/remove pair.
    """

    commit_count: int = 0
    commits: List[Commit] = field(default_factory=list)  # newest first
    diff_stats: List[DiffStat] = field(default_factory=list)
    raw_lines_added: int = 0
    raw_lines_removed: int = 0
    partitioned_added: int = 0
    partitioned_removed: int = 0
    partitioned_modified: int = 0
    files_changed: int = 0
    daily_rollups: List[DailyRollup] = field(default_factory=list)
    repo_root: Optional[str] = None
    ref: Optional[str] = None
    all_branches: bool = False
    available: bool = True
    unavailable_reason: Optional[str] = None

    @classmethod
    def empty(
        cls,
        reason: Optional[str] = None,
        repo_root: Optional[str] = None,
        ref: Optional[str] = None,
        all_branches: bool = False,
    ) -> "GitActivity":
        """Degraded all-zero activity used when git cannot be queried."""
        return cls(
            repo_root=repo_root,
            ref=ref,
            all_branches=all_branches,
            available=False,
            unavailable_reason=reason,
        )


# ── Estimation ────────────────────────────────────────────────────


@dataclass
class EffortEstimate:
    minutes: int = 0
    breakdown: Dict[str, float] = field(default_factory=dict)

    @property
    def hours(self) -> float:
        return round(self.minutes / 60.0, 2)


@dataclass(frozen=True)
class EffortFactor:
    """One entry of the alternative-effort catalog (hours per basis unit)."""

    key: str
    label: str
    factor: float
    reference_links: Tuple[str, ...] = ()
    description: str = ""


@dataclass
class AlternativeEffortRow:
    key: str
    label: str
    factor: float
    estimated_hours: float
    reference_links: List[str] = field(default_factory=list)
    description_html: str = ""


@dataclass
class AlternativeEffort:
    """Catalog evaluated for one view ("git" or "filesystem")."""

    view: str
    basis: float
    rows: List[AlternativeEffortRow] = field(default_factory=list)


# ── Report ────────────────────────────────────────────────────────


@dataclass
class BaselineDelta:
    baseline_path: str
    baseline_generated_at: Optional[str] = None
    deltas: Dict[str, float] = field(default_factory=dict)


@dataclass
class Report:
    """Complete result of one run, rendered to 1..N artifacts then discarded."""

    date_range: DateRange
    git_activity: GitActivity
    effort_estimate: EffortEstimate
    generated_at: datetime
    target_root: str = ""
    filesystem_snapshot: Optional[FilesystemSnapshot] = None
    alternative_effort: List[AlternativeEffort] = field(default_factory=list)
    baseline_delta: Optional[BaselineDelta] = None
    commit_list_limit: int = 20
    warnings: List[str] = field(default_factory=list)
    tool_version: str = ""
    schema_version: int = SCHEMA_VERSION

    def alternative_for(self, view: str) -> Optional[AlternativeEffort]:
        for alt in self.alternative_effort:
            if alt.view == view:
                return alt
        return None

    @property
    def recent_commits(self) -> List[Commit]:
        return self.git_activity.commits[: self.commit_list_limit]
