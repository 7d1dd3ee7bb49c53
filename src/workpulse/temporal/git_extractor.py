"""Extract git history for a date window via the process port."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from ..exceptions import ExternalToolError, RepositoryResolutionError
from ..logging_config import get_logger
from ..models import Commit, DateRange, DiffStat, GitActivity
from .process import CommandRunner, SubprocessRunner
from .rollups import build_activity

logger = get_logger(__name__)

# Record and unit separators keep subjects with "|" or tabs intact
RECORD_SEP = "\x1e"
FIELD_SEP = "\x1f"
# Committer time: the same clock git uses for --since/--until
LOG_FORMAT = "%x1e%H%x1f%ct%x1f%an%x1f%s"

_NO_COMMITS_MARKERS = (
    "does not have any commits yet",
    "bad default revision 'HEAD'",
    "bad revision 'HEAD'",
)


class GitExtractor:
    """Parse ``git log --numstat`` into a ``GitActivity``."""

    def __init__(self, runner: Optional[CommandRunner] = None, git: str = "git"):
        self.runner = runner or SubprocessRunner()
        self.git = git

    # ── Repository resolution ──────────────────────────────────

    def resolve_root(self, path: Path, fallback: Optional[Path] = None) -> Path:
        """Return the working-copy top level containing ``path``.

        Falls back to ``fallback`` when ``path`` is not inside a repository.

        Raises:
            RepositoryResolutionError: if neither resolves
            ExternalToolError: if git itself cannot be run
        """
        top = self._toplevel(path)
        if top is not None:
            return top
        if fallback is not None:
            top = self._toplevel(fallback)
            if top is not None:
                logger.warning("%s is not a git repository; using fallback %s", path, top)
                return top
        raise RepositoryResolutionError(
            path, "not inside a git working copy", fallback=fallback
        )

    def _toplevel(self, path: Path) -> Optional[Path]:
        path = Path(path)
        if path.is_file():
            path = path.parent
        if not path.is_dir():
            return None
        result = self.runner.run([self.git, "-C", str(path), "rev-parse", "--show-toplevel"])
        if not result.ok:
            return None
        top = result.stdout.strip()
        return Path(top).resolve() if top else None

    # ── History ────────────────────────────────────────────────

    def log_args(
        self,
        repo_root: Path,
        date_range: DateRange,
        ref: Optional[str] = None,
        all_branches: bool = False,
    ) -> List[str]:
        args = [
            self.git,
            "-C",
            str(repo_root),
            "log",
            f"--format={LOG_FORMAT}",
            "--numstat",
        ]
        # Epoch-aligned starts only hurt git's date parser
        if date_range.start.year > 1970:
            args.append(f"--since={date_range.start:%Y-%m-%d %H:%M:%S}")
        args.append(f"--until={date_range.end:%Y-%m-%d %H:%M:%S}")
        if all_branches:
            args.append("--all")
        else:
            args.append(ref or "HEAD")
        args.append("--")
        return args

    def extract(
        self,
        repo_root: Path,
        date_range: DateRange,
        ref: Optional[str] = None,
        all_branches: bool = False,
    ) -> GitActivity:
        """List commits in ``date_range`` with their numeric diff stats.

        Never raises for tool problems: a missing binary, a timeout or a
        failing ``git log`` yield ``GitActivity.empty()``.
        """
        root = str(repo_root)
        effective_ref = None if all_branches else (ref or "HEAD")
        args = self.log_args(Path(repo_root), date_range, ref=ref, all_branches=all_branches)

        try:
            result = self.runner.run(args)
        except ExternalToolError as e:
            logger.warning("git unavailable, history skipped: %s", e)
            return GitActivity.empty(
                reason=str(e), repo_root=root, ref=effective_ref, all_branches=all_branches
            )

        if not result.ok:
            stderr = result.stderr.strip()
            if any(marker in stderr for marker in _NO_COMMITS_MARKERS):
                logger.info("Repository %s has no commits yet", root)
                return GitActivity(repo_root=root, ref=effective_ref, all_branches=all_branches)
            logger.warning("git log failed (exit %d): %s", result.returncode, stderr)
            return GitActivity.empty(
                reason=f"git log exited {result.returncode}: {stderr}",
                repo_root=root,
                ref=effective_ref,
                all_branches=all_branches,
            )

        pairs = list(self.parse_log(result.stdout))
        logger.debug("Parsed %d commits from %s", len(pairs), root)
        return build_activity(pairs, repo_root=root, ref=effective_ref, all_branches=all_branches)

    # ── Parsing ────────────────────────────────────────────────

    def parse_log(self, raw: str) -> Iterator[Tuple[Commit, DiffStat]]:
        """Yield ``(commit, diffstat)`` pairs from delimited numstat output.

        Numstat rows read ``added<TAB>removed<TAB>path``. Binary diffs show
        ``-`` placeholders: they count as a changed file but add no lines.
        """
        commit: Optional[Commit] = None
        stat: Optional[DiffStat] = None

        # str.splitlines() would also split on \x1e/\x1f
        for line in raw.split("\n"):
            line = line.rstrip("\r")
            if not line.strip():
                continue

            if line.startswith(RECORD_SEP):
                if commit is not None and stat is not None:
                    yield commit, stat
                commit, stat = self._parse_header(line[len(RECORD_SEP):])
                continue

            if stat is None:
                continue
            self._apply_numstat(line, stat)

        if commit is not None and stat is not None:
            yield commit, stat

    def _parse_header(self, text: str) -> Tuple[Optional[Commit], Optional[DiffStat]]:
        parts = text.split(FIELD_SEP, 3)
        if len(parts) < 3:
            logger.debug("Skipping malformed commit header: %r", text)
            return None, None
        try:
            timestamp = datetime.fromtimestamp(int(parts[1]))
        except (ValueError, OverflowError, OSError):
            logger.debug("Skipping commit with bad timestamp: %r", text)
            return None, None
        commit = Commit(
            hash=parts[0],
            timestamp_local=timestamp,
            author=parts[2],
            subject=parts[3] if len(parts) > 3 else "",
        )
        return commit, DiffStat(commit_hash=commit.hash)

    @staticmethod
    def _apply_numstat(line: str, stat: DiffStat) -> None:
        parts = line.split("\t", 2)
        if len(parts) != 3:
            logger.debug("Skipping malformed numstat line: %r", line)
            return
        added, removed = parts[0].strip(), parts[1].strip()
        if not (_is_count(added) and _is_count(removed)):
            logger.debug("Skipping malformed numstat line: %r", line)
            return
        stat.files_changed += 1
        if added.isdigit():
            stat.raw_lines_added += int(added)
        if removed.isdigit():
            stat.raw_lines_removed += int(removed)


def _is_count(value: str) -> bool:
    return value == "-" or value.isdigit()
