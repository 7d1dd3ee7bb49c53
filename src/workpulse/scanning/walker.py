"""Iterative filesystem inventory.

Walks a directory tree with an explicit stack (no call-stack recursion),
never follows symlinks or reparse points, and aggregates per-file text
metrics into a ``FilesystemSnapshot``.
"""

from __future__ import annotations

import os
import stat
import time
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Union

from ..exceptions import FileAccessError, InvalidPathError
from ..logging_config import get_logger
from ..models import FileRecord, FilesystemSnapshot
from .filters import FilterPolicy, extension_of, is_shortcut_name
from .text_metrics import FileKind, classify, measure

logger = get_logger(__name__)

TOP_EXTENSIONS = 8

# Minimum seconds between progress callbacks
PROGRESS_INTERVAL = 0.25

ProgressCallback = Callable[[int, str], None]

_REPARSE_FLAG = getattr(stat, "FILE_ATTRIBUTE_REPARSE_POINT", 0x400)


def _is_link(entry: os.DirEntry) -> bool:
    """Symlink, junction or any other Windows reparse point."""
    if entry.is_symlink():
        return True
    try:
        st = entry.stat(follow_symlinks=False)
    except OSError:
        return False
    return bool(getattr(st, "st_file_attributes", 0) & _REPARSE_FLAG)


def scan(
    root: Union[str, Path],
    policy: Optional[FilterPolicy] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> FilesystemSnapshot:
    """Inventory ``root`` and return root-level totals plus a file manifest.

    Args:
        root: Directory to walk
        policy: Exclusion policy (defaults exclude VCS metadata, compressed
            archives and archive/temp names)
        on_progress: Advisory ``(files_seen, current_dir)`` callback,
            throttled; exceptions from it are logged and ignored

    Raises:
        InvalidPathError: If ``root`` does not exist or is not a directory
    """
    policy = policy or FilterPolicy()
    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise InvalidPathError(root_path, "does not exist")
    if not root_path.is_dir():
        raise InvalidPathError(root_path, "not a directory")

    snapshot = FilesystemSnapshot(root=str(root_path), filters_applied=policy.applied)
    extensions: Counter[str] = Counter()
    latest_mtime: Optional[float] = None
    last_progress = 0.0

    stack: list[Path] = [root_path]
    while stack:
        current = stack.pop()

        if on_progress is not None:
            now = time.monotonic()
            if now - last_progress >= PROGRESS_INTERVAL:
                last_progress = now
                try:
                    on_progress(snapshot.total_files, str(current))
                except Exception:
                    logger.debug("Progress callback failed", exc_info=True)

        try:
            with os.scandir(current) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", current, e)
            snapshot.unreadable_dirs += 1
            continue

        subdirs: list[Path] = []
        for entry in entries:
            name = entry.name

            if _is_link(entry):
                snapshot.total_items += 1
                snapshot.total_reparse_points += 1
                snapshot.links.append(_relative(entry.path, root_path))
                continue

            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False

            if is_dir:
                if policy.excludes_dir(name):
                    continue
                snapshot.total_items += 1
                snapshot.total_folders += 1
                subdirs.append(Path(entry.path))
                continue

            if policy.excludes_file(name):
                continue

            try:
                record = _inventory_file(entry, root_path)
            except FileAccessError as e:
                logger.debug("Skipping file: %s", e)
                continue

            snapshot.total_items += 1
            snapshot.total_files += 1
            if is_shortcut_name(name):
                snapshot.total_shortcuts += 1
            snapshot.sum_size_bytes += record.size_bytes
            if record.measured:
                snapshot.sum_lines += record.line_count
                snapshot.sum_chars += record.char_count or 0
            extensions[extension_of(name)] += 1
            snapshot.files.append(record)

            mtime = record.last_modified.timestamp()
            if latest_mtime is None or mtime > latest_mtime:
                latest_mtime = mtime

        # Reversed so directories pop in name order
        stack.extend(reversed(subdirs))

    snapshot.top_extensions = extensions.most_common(TOP_EXTENSIONS)
    if latest_mtime is not None:
        snapshot.last_modified = datetime.fromtimestamp(latest_mtime)

    logger.debug(
        "Scanned %s: %d files, %d folders, %d lines",
        root_path,
        snapshot.total_files,
        snapshot.total_folders,
        snapshot.sum_lines,
    )
    return snapshot


def _inventory_file(entry: os.DirEntry, root: Path) -> FileRecord:
    """Record for one file; unreadable content leaves the metrics ``None``.

    Raises:
        FileAccessError: If the file cannot be stat-ed
    """
    try:
        st = entry.stat(follow_symlinks=False)
    except OSError as e:
        raise FileAccessError(Path(entry.path), str(e)) from e

    kind = classify(entry.path)
    line_count = char_count = None
    if kind is FileKind.TEXT:
        metrics = measure(entry.path)
        if metrics is not None:
            line_count = metrics.lines
            char_count = metrics.chars

    return FileRecord(
        absolute_path=entry.path,
        relative_path=_relative(entry.path, root),
        size_bytes=st.st_size,
        last_modified=datetime.fromtimestamp(st.st_mtime),
        is_binary=kind is FileKind.BINARY,
        line_count=line_count,
        char_count=char_count,
    )


def _relative(path: str, root: Path) -> str:
    try:
        return Path(path).relative_to(root).as_posix()
    except ValueError:
        return Path(path).as_posix()
