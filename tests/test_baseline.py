"""Tests for baseline loading and delta computation."""

import json

from conftest import build_report
from workpulse.baseline import BaselineMetrics, compute_deltas, load_baseline
from workpulse.formatters import JsonFormatter


def _save(tmp_path, data, name="baseline.json"):
    path = tmp_path / name
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


class TestLoadBaseline:
    def test_reads_own_json_output(self, tmp_path):
        report = build_report()
        path = _save(tmp_path, JsonFormatter().format(report))

        baseline = load_baseline(path)

        assert baseline is not None
        assert baseline.path == str(path)
        assert baseline.generated_at == "2024-03-10T18:30:00"
        assert baseline.metrics == {
            "commit_count": 3,
            "raw_lines_added": 15,
            "raw_lines_removed": 8,
            "partitioned_modified": 8,
            "files_changed": 4,
            "estimated_minutes": 162,
        }

    def test_missing_file(self, tmp_path):
        assert load_baseline(tmp_path / "nope.json") is None

    def test_invalid_json(self, tmp_path):
        assert load_baseline(_save(tmp_path, "{")) is None

    def test_foreign_json(self, tmp_path):
        assert load_baseline(_save(tmp_path, {"files": []})) is None

    def test_negative_counts_rejected(self, tmp_path):
        data = json.loads(JsonFormatter().format(build_report()))
        data["git_activity"]["commit_count"] = -4
        assert load_baseline(_save(tmp_path, data)) is None


class TestComputeDeltas:
    def test_current_minus_baseline(self):
        report = build_report()
        baseline = BaselineMetrics(
            path="old.json",
            generated_at="2024-03-03T18:30:00",
            metrics={
                "commit_count": 1,
                "raw_lines_added": 20,
                "raw_lines_removed": 8,
                "partitioned_modified": 2,
                "files_changed": 4,
                "estimated_minutes": 100,
            },
        )
        delta = compute_deltas(report, baseline)

        assert delta.baseline_path == "old.json"
        assert delta.deltas == {
            "commit_count": 2,
            "raw_lines_added": -5,
            "raw_lines_removed": 0,
            "partitioned_modified": 6,
            "files_changed": 0,
            "estimated_minutes": 62,
        }

    def test_assembled_report_carries_deltas(self, tmp_path):
        path = _save(tmp_path, JsonFormatter().format(build_report()))
        report = build_report(baseline=load_baseline(path))

        assert report.baseline_delta is not None
        assert set(report.baseline_delta.deltas.values()) == {0}

    def test_no_baseline_no_delta(self):
        assert build_report().baseline_delta is None
