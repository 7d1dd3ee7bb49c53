"""Shared test fixtures for workpulse tests."""

import os
import shutil
import subprocess
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

import pytest

from workpulse.exceptions import ExternalToolError
from workpulse.temporal import CommandResult


def pytest_addoption(parser):
    """Add --run-slow option for slow tests."""
    parser.addoption(
        "--run-slow",
        action="store_true",
        default=False,
        help="run slow tests",
    )


def pytest_configure(config):
    """Configure slow marker."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests unless --run-slow is given."""
    if config.getoption("--run-slow"):
        return
    skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


# ── Fake git ─────────────────────────────────────────────────────────


class FakeRunner:
    """Canned ``CommandRunner``: answers rev-parse and log, records every call."""

    def __init__(
        self,
        toplevel: Optional[str] = None,
        log_output: str = "",
        log_returncode: int = 0,
        log_stderr: str = "",
        missing: bool = False,
    ):
        self.toplevel = toplevel
        self.log_output = log_output
        self.log_returncode = log_returncode
        self.log_stderr = log_stderr
        self.missing = missing
        self.calls: List[List[str]] = []

    def run(self, args: Sequence[str], cwd: Optional[Path] = None) -> CommandResult:
        self.calls.append(list(args))
        if self.missing:
            raise ExternalToolError(args, "executable not found on PATH")
        if "rev-parse" in args:
            if self.toplevel is None:
                return CommandResult("", 128, "fatal: not a git repository")
            return CommandResult(self.toplevel + "\n", 0)
        if "log" in args:
            return CommandResult(self.log_output, self.log_returncode, self.log_stderr)
        return CommandResult("", 1, "unexpected command")

    @property
    def log_calls(self) -> List[List[str]]:
        return [c for c in self.calls if "log" in c]


NumstatRow = Tuple[str, str, str]


def log_record(
    sha: str,
    when: datetime,
    subject: str = "change",
    author: str = "Alice",
    numstat: Sequence[NumstatRow] = (),
) -> str:
    """One commit as ``git log --format=%x1e%H%x1f%ct%x1f%an%x1f%s --numstat`` prints it."""
    header = f"\x1e{sha}\x1f{int(when.timestamp())}\x1f{author}\x1f{subject}\n"
    body = "".join(f"{a}\t{r}\t{p}\n" for a, r, p in numstat)
    return header + ("\n" + body if body else "")


# ── Filesystem ───────────────────────────────────────────────────────


@pytest.fixture
def make_tree(tmp_path):
    """Build a directory tree from ``{relative_path: str | bytes}``."""

    def build(files: Dict[str, Union[str, bytes]], root: Optional[Path] = None) -> Path:
        base = root or tmp_path / "tree"
        base.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = base / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_bytes(content.encode("utf-8"))
        return base

    return build


# ── Real git ─────────────────────────────────────────────────────────

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


def _git(repo: Path, *args: str, env_extra: Optional[Dict[str, str]] = None) -> str:
    env = dict(os.environ, GIT_CONFIG_NOSYSTEM="1", GIT_TERMINAL_PROMPT="0")
    env.update(env_extra or {})
    proc = subprocess.run(
        [
            "git",
            "-c", "user.name=Test User",
            "-c", "user.email=test@example.com",
            "-c", "commit.gpgsign=false",
            "-C", str(repo),
            *args,
        ],
        capture_output=True,
        text=True,
        env=env,
        check=True,
    )
    return proc.stdout


@pytest.fixture
def git_repo(tmp_path):
    """Empty git repository; ``repo.commit(files, message)`` adds a commit."""
    repo = tmp_path / "repo"
    repo.mkdir()
    _git(repo, "init", "-q")

    class Repo:
        path = repo

        def commit(
            self,
            files: Dict[str, str],
            message: str = "change",
            author_date: Optional[str] = None,
            committer_date: Optional[str] = None,
        ) -> None:
            for rel, content in files.items():
                target = repo / rel
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_bytes(content.encode("utf-8"))
            _git(repo, "add", "-A")
            dates = {}
            if author_date:
                dates["GIT_AUTHOR_DATE"] = author_date
            if committer_date:
                dates["GIT_COMMITTER_DATE"] = committer_date
            _git(repo, "commit", "-q", "-m", message, env_extra=dates)

    return Repo()


# ── Reports ──────────────────────────────────────────────────────────


def build_report(with_snapshot: bool = True, baseline=None, warnings=()):
    """Small but complete ``Report``: three commits over two days, two files."""
    from workpulse.assembler import assemble
    from workpulse.estimation import DEFAULT_CATALOG
    from workpulse.models import Commit, DateRange, DiffStat, FileRecord, FilesystemSnapshot
    from workpulse.temporal import build_activity

    date_range = DateRange.from_dates(
        datetime(2024, 3, 4).date(), datetime(2024, 3, 10).date(), "Last 7 days"
    )
    pairs = [
        (Commit("c" * 40, datetime(2024, 3, 6, 15, 0), "wire | report", "Alice"),
         DiffStat("c" * 40, 2, 8, 2)),
        (Commit("b" * 40, datetime(2024, 3, 6, 9, 0), "tidy <script>", "Bob"),
         DiffStat("b" * 40, 1, 2, 6)),
        (Commit("a" * 40, datetime(2024, 3, 4, 12, 0), "initial", "Alice"),
         DiffStat("a" * 40, 1, 5, 0)),
    ]
    activity = build_activity(pairs, repo_root="/work/repo")

    snapshot = None
    if with_snapshot:
        snapshot = FilesystemSnapshot(
            root="/work/repo",
            total_items=3,
            total_files=2,
            total_folders=1,
            sum_lines=120,
            sum_chars=3000,
            sum_size_bytes=3100,
            last_modified=datetime(2024, 3, 6, 15, 0),
            top_extensions=[(".py", 1), (".png", 1)],
            files=[
                FileRecord("/work/repo/src/app.py", "src/app.py", 3000,
                           datetime(2024, 3, 6, 15, 0), False, 120, 3000),
                FileRecord("/work/repo/logo.png", "logo.png", 100,
                           datetime(2023, 1, 1, 8, 0), True),
            ],
        )

    return assemble(
        date_range,
        activity,
        snapshot,
        catalog=DEFAULT_CATALOG,
        baseline=baseline,
        generated_at=datetime(2024, 3, 10, 18, 30, 0),
        target_root="/work/repo",
        warnings=list(warnings),
    )
