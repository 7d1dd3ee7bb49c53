"""Compare a run against a previously written JSON report."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

import jsonschema

from .logging_config import get_logger
from .models import BaselineDelta, Report
from .serialization import HEADLINE_METRICS, headline_metrics

logger = get_logger(__name__)

_COUNT = {"type": "number", "minimum": 0}

BASELINE_SCHEMA = {
    "type": "object",
    "required": ["git_activity", "effort_estimate"],
    "properties": {
        "generated_at": {"type": "string"},
        "git_activity": {
            "type": "object",
            "required": [
                "commit_count",
                "raw_lines_added",
                "raw_lines_removed",
                "partitioned_modified",
                "files_changed",
            ],
            "properties": {
                "commit_count": _COUNT,
                "raw_lines_added": _COUNT,
                "raw_lines_removed": _COUNT,
                "partitioned_modified": _COUNT,
                "files_changed": _COUNT,
            },
        },
        "effort_estimate": {
            "type": "object",
            "required": ["minutes"],
            "properties": {"minutes": _COUNT},
        },
    },
}


@dataclass
class BaselineMetrics:
    path: str
    generated_at: Optional[str] = None
    metrics: Dict[str, float] = field(default_factory=dict)


def load_baseline(path: Union[str, Path]) -> Optional[BaselineMetrics]:
    """Load headline metrics from a prior JSON report.

    Returns:
        The metrics, or ``None`` (with a warning logged) when the file is
        missing, unparsable or not a workpulse JSON report.
    """
    p = Path(path)
    if not p.exists():
        logger.warning(f"Baseline file not found: {p}")
        return None

    try:
        with open(p, encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Cannot read baseline {p}: {e}")
        return None

    try:
        jsonschema.validate(instance=raw, schema=BASELINE_SCHEMA)
    except jsonschema.ValidationError as e:
        logger.warning(f"Baseline {p} is not a workpulse JSON report: {e.message}")
        return None

    metrics = {name: raw[section][key] for name, (section, key) in HEADLINE_METRICS.items()}
    logger.info(f"Loaded baseline from {p}")
    return BaselineMetrics(path=str(p), generated_at=raw.get("generated_at"), metrics=metrics)


def compute_deltas(report: Report, baseline: BaselineMetrics) -> BaselineDelta:
    """``current - baseline`` for every headline metric."""
    current = headline_metrics(report)
    deltas = {name: current[name] - baseline.metrics.get(name, 0) for name in current}
    return BaselineDelta(
        baseline_path=baseline.path,
        baseline_generated_at=baseline.generated_at,
        deltas=deltas,
    )
