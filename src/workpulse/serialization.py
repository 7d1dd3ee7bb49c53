"""Convert a ``Report`` into a JSON-safe tree.

The tree written by the JSON formatter is the same one ``baseline`` reads
back, so the key names here are a file format: change them together with
``baseline.BASELINE_SCHEMA``.
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from typing import Any, Dict

from .models import Report

# Metric name -> (section, key) in the serialized tree
HEADLINE_METRICS = {
    "commit_count": ("git_activity", "commit_count"),
    "raw_lines_added": ("git_activity", "raw_lines_added"),
    "raw_lines_removed": ("git_activity", "raw_lines_removed"),
    "partitioned_modified": ("git_activity", "partitioned_modified"),
    "files_changed": ("git_activity", "files_changed"),
    "estimated_minutes": ("effort_estimate", "minutes"),
}


def _jsonable(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    if is_dataclass(value) and not isinstance(value, type):
        return _jsonable(asdict(value))
    return value


def report_to_dict(report: Report) -> Dict[str, Any]:
    """Full-fidelity tree: every field of the report, dates as ISO strings."""
    data = _jsonable(asdict(report))

    data["effort_estimate"]["hours"] = report.effort_estimate.hours
    snapshot = data.get("filesystem_snapshot")
    if snapshot is not None:
        snapshot["top_extensions"] = [
            {"extension": ext, "count": count}
            for ext, count in report.filesystem_snapshot.top_extensions
        ]

    # Stable key order: identification first
    ordered = {
        "schema_version": data.pop("schema_version"),
        "tool_version": data.pop("tool_version"),
        "generated_at": data.pop("generated_at"),
        "target_root": data.pop("target_root"),
        "date_range": data.pop("date_range"),
    }
    ordered.update(data)
    return ordered


def headline_metrics(report: Report) -> Dict[str, int]:
    """The flat metrics compared against a baseline and written to CSV."""
    activity = report.git_activity
    return {
        "commit_count": activity.commit_count,
        "raw_lines_added": activity.raw_lines_added,
        "raw_lines_removed": activity.raw_lines_removed,
        "partitioned_modified": activity.partitioned_modified,
        "files_changed": activity.files_changed,
        "estimated_minutes": report.effort_estimate.minutes,
    }
