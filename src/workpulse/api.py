"""Public API for workpulse.

This module provides the main entry points. Most callers want ``run()``,
which builds the report and writes every requested format.

Example:
    >>> from workpulse import load_config, run
    >>>
    >>> config = load_config(target="/path/to/repo", period="month", formats=["html", "json"])
    >>> report, result = run(config)
    >>> report.effort_estimate.minutes
    412
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from .assembler import assemble
from .baseline import load_baseline
from .config import ReportConfig
from .estimation import load_catalog
from .exceptions import ExternalToolError, InvalidPathError, RepositoryResolutionError
from .export import ExportResult, export_report
from .logging_config import get_logger
from .models import DateRange, FilesystemSnapshot, GitActivity, Report
from .periods import resolve_date_range
from .scanning import scan
from .temporal import CommandRunner, GitExtractor, SubprocessRunner

logger = get_logger(__name__)

# (phase, detail); phases: scan, history, estimate, render
PhaseCallback = Callable[[str, str], None]


def _notify(on_progress: Optional[PhaseCallback], phase: str, detail: str = "") -> None:
    if on_progress is None:
        return
    try:
        on_progress(phase, detail)
    except Exception as e:
        logger.debug(f"Progress callback failed: {e}")


def resolve_repository(
    extractor: GitExtractor, config: ReportConfig, warnings: List[str]
) -> Optional[Path]:
    """Repository top level for the target, or ``None`` to degrade.

    Raises:
        RepositoryResolutionError: Only when ``config.require_repo`` is set
    """
    fallback = Path(config.fallback_root).expanduser() if config.fallback_root else None
    try:
        return extractor.resolve_root(config.target_path, fallback=fallback)
    except RepositoryResolutionError as e:
        if config.require_repo:
            raise
        message = f"{e.message}; version-control metrics skipped"
    except ExternalToolError as e:
        if config.require_repo:
            raise RepositoryResolutionError(config.target_path, e.reason, fallback=fallback) from e
        message = f"git unavailable ({e.reason}); version-control metrics skipped"
    logger.warning(message)
    warnings.append(message)
    return None


def collect_history(
    extractor: GitExtractor,
    repo_root: Optional[Path],
    date_range: DateRange,
    config: ReportConfig,
    on_progress: Optional[PhaseCallback] = None,
) -> GitActivity:
    if repo_root is None:
        return GitActivity.empty(reason="not a git repository")
    _notify(on_progress, "history", str(repo_root))
    activity = extractor.extract(
        repo_root, date_range, ref=config.ref, all_branches=config.all_branches
    )
    _notify(on_progress, "history", f"{activity.commit_count} commits")
    return activity


def collect_snapshot(
    config: ReportConfig, on_progress: Optional[PhaseCallback] = None
) -> FilesystemSnapshot:
    def forward(files_seen: int, current: str) -> None:
        _notify(on_progress, "scan", f"{files_seen} files ({current})")

    snapshot = scan(config.target_path, config.filter_policy, on_progress=forward)
    _notify(on_progress, "scan", f"{snapshot.total_files} files")
    return snapshot


def generate_report(
    config: ReportConfig,
    runner: Optional[CommandRunner] = None,
    now: Optional[datetime] = None,
    on_progress: Optional[PhaseCallback] = None,
) -> Report:
    """Build the in-memory report for ``config``.

    Configuration problems (bad range, missing catalog file, bad target)
    raise before any work is done. A missing repository or an unusable git
    degrade to a filesystem-only report with a warning.

    Args:
        config: Validated run configuration
        runner: Process port for git; a ``SubprocessRunner`` by default
        now: Clock override used for the period and ``generated_at``
        on_progress: Advisory ``(phase, detail)`` callback

    Raises:
        ConfigurationError: If the period, catalog or target is invalid
        RepositoryResolutionError: If ``require_repo`` is set and no repository is found
    """
    now = (now or datetime.now()).replace(microsecond=0)
    date_range = resolve_date_range(config.period, config.start, config.end, today=now.date())
    catalog = load_catalog(config.catalog_path)

    target = config.target_path
    if not target.is_dir():
        raise InvalidPathError(target, "does not exist" if not target.exists() else "not a directory")

    logger.info(f"Reporting on {target} for {date_range.label}")
    warnings: List[str] = []
    extractor = GitExtractor(runner or SubprocessRunner(config.git_timeout_seconds))
    repo_root = resolve_repository(extractor, config, warnings)

    if config.parallel:
        # The walker and the extractor only read the tree
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="workpulse") as pool:
            snap_future = pool.submit(collect_snapshot, config, on_progress)
            git_future = pool.submit(collect_history, extractor, repo_root, date_range, config, on_progress)
            snapshot = snap_future.result()
            activity = git_future.result()
    else:
        snapshot = collect_snapshot(config, on_progress)
        activity = collect_history(extractor, repo_root, date_range, config, on_progress)

    if repo_root is not None and not activity.available:
        warnings.append(f"git history unavailable: {activity.unavailable_reason}")
    if snapshot.unreadable_dirs:
        warnings.append(f"{snapshot.unreadable_dirs} folder(s) could not be read and were skipped")

    baseline = None
    if config.baseline_path:
        baseline = load_baseline(config.baseline_path)
        if baseline is None:
            warnings.append(f"baseline {config.baseline_path} could not be used; no deltas reported")

    _notify(on_progress, "estimate")
    report = assemble(
        date_range,
        activity,
        snapshot,
        catalog=catalog,
        baseline=baseline,
        generated_at=now,
        target_root=str(target),
        commit_list_limit=config.max_commits_listed,
        warnings=warnings,
    )
    logger.info(
        f"Report ready: {activity.commit_count} commits, "
        f"{snapshot.total_files} files, {report.effort_estimate.minutes} min"
    )
    return report


def run(
    config: ReportConfig,
    runner: Optional[CommandRunner] = None,
    now: Optional[datetime] = None,
    on_progress: Optional[PhaseCallback] = None,
) -> Tuple[Report, ExportResult]:
    """Generate the report and write every configured format."""
    report = generate_report(config, runner=runner, now=now, on_progress=on_progress)
    _notify(on_progress, "render", ", ".join(config.formats))
    result = export_report(report, config.formats, config.output_dir, config.output_path)
    return report, result
