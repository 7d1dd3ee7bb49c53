"""Version-control history: process port, git log parsing and daily rollups."""

from .git_extractor import GitExtractor
from .process import CommandResult, CommandRunner, SubprocessRunner
from .rollups import build_activity, commits_per_day, lines_basis, partition

__all__ = [
    "CommandResult",
    "CommandRunner",
    "GitExtractor",
    "SubprocessRunner",
    "build_activity",
    "commits_per_day",
    "lines_basis",
    "partition",
]
