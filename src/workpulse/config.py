"""Configuration loading and management for workpulse.

All run options live in one frozen ``ReportConfig`` built once at startup.
Components receive values from it explicitly and never read the
environment or the working directory themselves. Sources are merged in
priority order:
    1. Defaults (defined in ReportConfig)
    2. Global config (~/.workpulse.toml)
    3. Project config (./workpulse.toml)
    4. Explicit config file (--config)
    5. Environment variables (WORKPULSE_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(period="month", formats=["html", "json"])
    >>> config.period
    'month'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError, InvalidDateRangeError
from .formatters import normalize_format
from .periods import normalize_period, parse_date
from .scanning.filters import FilterPolicy

Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "WORKPULSE_"


def default_output_dir() -> str:
    """``reports/`` beneath the installed package."""
    return str(Path(__file__).resolve().parent / "reports")


@dataclass(frozen=True)
class ReportConfig:
    """Everything one report run needs.

    Attributes:
        Target:
            target: Directory to analyze (resolved to its git top level)
            fallback_root: Root to use when ``target`` is not inside a repository
            require_repo: Fail instead of degrading to a filesystem-only report

        Period:
            period: day | week | month | all | custom
            start, end: ISO dates, required for ``custom``

        History:
            ref: Ref to walk (default HEAD); ignored with ``all_branches``
            all_branches: Union of every branch
            git_timeout_seconds: Timeout for the git subprocess

        Filesystem filters (each re-includes a category excluded by default):
            include_vcs, include_compressed, include_archive_temp

        Estimation:
            catalog_path: JSON catalog replacing the built-in productivity factors
            baseline_path: Prior JSON report used for delta annotations

        Output:
            formats: markdown | json | csv | html
            output_dir: Directory for timestamped artifacts
            output_path: Explicit artifact path (extension fixed per format)
            max_commits_listed: Cap on commits listed in detail

        Runtime:
            parallel: Run the walker and the extractor on two threads
            verbosity: quiet | normal | verbose
    """

    target: str = "."
    fallback_root: Optional[str] = None
    require_repo: bool = False

    period: str = "week"
    start: Optional[str] = None
    end: Optional[str] = None

    ref: Optional[str] = None
    all_branches: bool = False
    git_timeout_seconds: int = 120

    include_vcs: bool = False
    include_compressed: bool = False
    include_archive_temp: bool = False

    catalog_path: Optional[str] = None
    baseline_path: Optional[str] = None

    formats: List[str] = field(default_factory=lambda: ["html"])
    output_dir: str = field(default_factory=default_output_dir)
    output_path: Optional[str] = None
    max_commits_listed: int = 20

    parallel: bool = True
    verbosity: Verbosity = "normal"

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        # Normalizing here keeps the dataclass frozen for every other caller
        object.__setattr__(self, "period", normalize_period(self.period))

        if self.period == "custom":
            start = parse_date(self.start, "start")
            end = parse_date(self.end, "end")
            if start is None or end is None:
                raise InvalidDateRangeError("custom period requires both start and end", start, end)
            if start > end:
                raise InvalidDateRangeError("start is after end", start, end)

        if not self.formats:
            raise InvalidConfigError("formats", self.formats, "at least one format is required")
        normalized = []
        for fmt in self.formats:
            try:
                name = normalize_format(fmt)
            except ValueError as e:
                raise InvalidConfigError("formats", fmt, str(e))
            if name not in normalized:
                normalized.append(name)
        object.__setattr__(self, "formats", normalized)

        if self.max_commits_listed < 0:
            raise InvalidConfigError(
                "max_commits_listed", self.max_commits_listed, "must be non-negative"
            )
        if self.git_timeout_seconds < 1:
            raise InvalidConfigError(
                "git_timeout_seconds", self.git_timeout_seconds, "must be at least 1"
            )
        if self.verbosity not in ("quiet", "normal", "verbose"):
            raise InvalidConfigError(
                "verbosity", self.verbosity, "expected quiet, normal or verbose"
            )

    @property
    def filter_policy(self) -> FilterPolicy:
        return FilterPolicy(
            include_vcs=self.include_vcs,
            include_compressed=self.include_compressed,
            include_archive_temp=self.include_archive_temp,
        )

    @property
    def target_path(self) -> Path:
        return Path(self.target).expanduser().resolve()


def load_config(
    config_file: Optional[Path] = None, discover: bool = True, **overrides: Any
) -> ReportConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        discover: Look for ``~/.workpulse.toml`` and ``./workpulse.toml``
        **overrides: Direct overrides (typically from CLI flags); ``None``
            values are ignored so unset flags never mask file values

    Returns:
        Validated ReportConfig instance

    Raises:
        ConfigurationError: If a config file or value is invalid
    """
    merged: dict = {}

    if discover:
        global_config = Path.home() / ".workpulse.toml"
        if global_config.exists():
            merged.update(_load_toml_checked(global_config, "global config"))

        project_config = Path.cwd() / "workpulse.toml"
        if project_config.exists():
            merged.update(_load_toml_checked(project_config, "project config"))

    if config_file is not None:
        if not Path(config_file).exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_checked(Path(config_file), "config file"))

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    for key in ("target", "fallback_root", "catalog_path", "baseline_path", "output_dir", "output_path"):
        if isinstance(merged.get(key), Path):
            merged[key] = str(merged[key])
    if isinstance(merged.get("formats"), str):
        merged["formats"] = _split_list(merged["formats"])

    try:
        return ReportConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_toml_checked(path: Path, what: str) -> dict:
    try:
        return _load_toml_file(path)
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Invalid {what} '{path}': {e}")


def _split_list(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from WORKPULSE_* environment variables.

    Examples:
        WORKPULSE_PERIOD=month
        WORKPULSE_FORMATS=html,json
        WORKPULSE_OUTPUT_DIR=/tmp/reports
        WORKPULSE_ALL_BRANCHES=true
        WORKPULSE_GIT_TIMEOUT_SECONDS=30

    Returns:
        Dict of field_name -> parsed_value for any WORKPULSE_* vars found.
    """
    type_hints = get_type_hints(ReportConfig)

    result: dict[str, Any] = {}

    for field_name in ReportConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list or type_hint is list:
        return _split_list(value)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or the 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)
