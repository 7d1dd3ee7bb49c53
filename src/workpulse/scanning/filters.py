"""Exclusion policy for the filesystem walker.

Three independent categories are excluded by default. Each flag on
``FilterPolicy`` re-includes one of them.
"""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass

# Version-control metadata directories (matched on any path segment).
VCS_DIR_NAMES = frozenset({".git", ".hg", ".svn", ".bzr", "_darcs", "CVS", ".fslckout"})

COMPRESSED_EXTENSIONS = frozenset(
    {
        ".zip",
        ".gz",
        ".tgz",
        ".bz2",
        ".tbz2",
        ".xz",
        ".txz",
        ".7z",
        ".rar",
        ".tar",
        ".zst",
        ".lz",
        ".lzma",
        ".lz4",
        ".cab",
        ".z",
    }
)

# Case-insensitive glob patterns for archive/temp names (files or directories).
ARCHIVE_TEMP_PATTERNS = (
    "archive",
    "archives",
    "archived",
    "_archive*",
    "*_archive",
    "tmp",
    "temp",
    ".tmp",
    "*.tmp",
    "*.temp",
    "*.bak",
    "*.old",
    "*.swp",
    "*~",
    "~$*",
)

# Matched on directory names only; files such as old_parser.py are kept.
ARCHIVE_DIR_PATTERNS = ("old_*",)

# Shell shortcut files; counted as files and additionally as shortcuts.
SHORTCUT_EXTENSIONS = frozenset({".lnk", ".url", ".desktop", ".webloc"})

NO_EXTENSION = "(none)"


def extension_of(name: str) -> str:
    """Lowercase extension including the dot; ``(none)`` when absent.

    Dotfiles such as ``.gitignore`` have no extension.
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem or not ext:
        return NO_EXTENSION
    return f".{ext.lower()}"


def is_vcs_name(name: str) -> bool:
    return name in VCS_DIR_NAMES


def is_compressed_name(name: str) -> bool:
    return extension_of(name) in COMPRESSED_EXTENSIONS


def is_archive_temp_name(name: str, is_dir: bool = False) -> bool:
    lower = name.lower()
    patterns = ARCHIVE_TEMP_PATTERNS + ARCHIVE_DIR_PATTERNS if is_dir else ARCHIVE_TEMP_PATTERNS
    return any(fnmatch.fnmatchcase(lower, pattern) for pattern in patterns)


def is_shortcut_name(name: str) -> bool:
    return extension_of(name) in SHORTCUT_EXTENSIONS


@dataclass(frozen=True)
class FilterPolicy:
    """Which normally-excluded categories to keep."""

    include_vcs: bool = False
    include_compressed: bool = False
    include_archive_temp: bool = False

    def excludes_dir(self, name: str) -> bool:
        if not self.include_vcs and is_vcs_name(name):
            return True
        if not self.include_archive_temp and is_archive_temp_name(name, is_dir=True):
            return True
        return False

    def excludes_file(self, name: str) -> bool:
        # A ".git" file marks a worktree or submodule link
        if not self.include_vcs and is_vcs_name(name):
            return True
        if not self.include_compressed and is_compressed_name(name):
            return True
        if not self.include_archive_temp and is_archive_temp_name(name):
            return True
        return False

    @property
    def applied(self) -> list[str]:
        """Names of the active exclusions, for the report."""
        active = []
        if not self.include_vcs:
            active.append("vcs-metadata")
        if not self.include_compressed:
            active.append("compressed-archives")
        if not self.include_archive_temp:
            active.append("archive-temp-paths")
        return active
