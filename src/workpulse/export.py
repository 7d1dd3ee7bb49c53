"""Write a report to disk in one or more formats.

Every format is rendered and written on its own: a failure in one is
recorded as a ``SerializationError`` and the remaining formats still run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .exceptions import SerializationError
from .formatters import FORMATTERS, get_formatter, normalize_format
from .logging_config import get_logger
from .models import Report

logger = get_logger(__name__)

FILENAME_PREFIX = "workpulse-report"

# Suffixes replaced by the real per-format extension
_REPLACEABLE_SUFFIXES = {".placeholder"} | {cls.extension for cls in FORMATTERS.values()}


@dataclass
class FormatOutcome:
    fmt: str
    path: Optional[Path] = None
    error: Optional[SerializationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ExportResult:
    outcomes: List[FormatOutcome] = field(default_factory=list)

    @property
    def written(self) -> Dict[str, Path]:
        return {o.fmt: o.path for o in self.outcomes if o.ok and o.path is not None}

    @property
    def failures(self) -> Dict[str, SerializationError]:
        return {o.fmt: o.error for o in self.outcomes if o.error is not None}

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self.outcomes)


def base_name(report: Report) -> str:
    return f"{FILENAME_PREFIX}-{report.generated_at:%Y%m%d-%H%M%S}"


def target_path(
    report: Report,
    fmt: str,
    output_dir: Union[str, Path],
    output_path: Union[str, Path, None] = None,
) -> Path:
    """Where ``fmt`` would be written, before uniquifying.

    With ``output_path`` its name is kept and only a placeholder or known
    format suffix is swapped for the format's extension; otherwise the name
    embeds the generation timestamp.
    """
    ext = get_formatter(fmt).extension
    if output_path is not None:
        p = Path(output_path)
        if p.suffix.lower() in _REPLACEABLE_SUFFIXES:
            return p.with_suffix(ext)
        return p.with_name(p.name + ext)
    return Path(output_dir) / f"{base_name(report)}{ext}"


def write_exclusive(path: Path, text: str) -> Path:
    """Write ``text`` to ``path``, or to the first free ``stem-N.ext`` beside it.

    Files are opened with mode ``"x"`` so a name taken by another writer
    between attempts is skipped instead of overwritten.
    """
    candidate, n = path, 0
    while True:
        try:
            handle = candidate.open("x", encoding="utf-8")
        except FileExistsError:
            n += 1
            candidate = path.with_name(f"{path.stem}-{n}{path.suffix}")
            continue
        try:
            with handle:
                handle.write(text)
        except (OSError, UnicodeError):
            candidate.unlink()
            raise
        return candidate


def write_format(
    report: Report,
    fmt: str,
    output_dir: Union[str, Path],
    output_path: Union[str, Path, None] = None,
) -> Path:
    """Render and write one format.

    Raises:
        SerializationError: If rendering or writing fails
    """
    path = target_path(report, fmt, output_dir, output_path)
    try:
        text = get_formatter(fmt).format(report)
        path.parent.mkdir(parents=True, exist_ok=True)
        path = write_exclusive(path, text)
    except (OSError, UnicodeError, ValueError, TypeError) as e:
        raise SerializationError(fmt, str(path), str(e)) from e
    logger.info(f"Wrote {fmt} report to {path}")
    return path


def export_report(
    report: Report,
    formats: Iterable[str],
    output_dir: Union[str, Path],
    output_path: Union[str, Path, None] = None,
) -> ExportResult:
    """Write ``report`` once per requested format. Never raises for write failures."""
    result = ExportResult()
    seen = set()
    for name in formats:
        fmt = normalize_format(name)
        if fmt in seen:
            continue
        seen.add(fmt)
        try:
            path = write_format(report, fmt, output_dir, output_path)
        except SerializationError as e:
            logger.error(e.message)
            result.outcomes.append(FormatOutcome(fmt=fmt, error=e))
        else:
            result.outcomes.append(FormatOutcome(fmt=fmt, path=path))
    return result
