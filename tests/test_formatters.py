"""Tests for the markdown, JSON and CSV formatters."""

import csv
import io
import json

import pytest

from conftest import build_report
from workpulse.baseline import BaselineMetrics
from workpulse.formatters import (
    CsvFormatter,
    HtmlFormatter,
    JsonFormatter,
    MarkdownFormatter,
    get_formatter,
    normalize_format,
)
from workpulse.formatters.base import format_number


class TestGetFormatter:
    def test_known_formatters(self):
        assert isinstance(get_formatter("markdown"), MarkdownFormatter)
        assert isinstance(get_formatter("json"), JsonFormatter)
        assert isinstance(get_formatter("csv"), CsvFormatter)
        assert isinstance(get_formatter("html"), HtmlFormatter)

    def test_aliases(self):
        assert normalize_format("md") == "markdown"
        assert normalize_format("TEXT") == "markdown"
        assert normalize_format("htm") == "html"

    def test_unknown_formatter(self):
        with pytest.raises(ValueError, match="Unknown format"):
            get_formatter("xml")


class TestJsonFormatter:
    def test_top_level_keys(self):
        data = json.loads(JsonFormatter().format(build_report()))
        assert list(data)[:5] == [
            "schema_version",
            "tool_version",
            "generated_at",
            "target_root",
            "date_range",
        ]
        assert data["schema_version"] == 1
        assert data["date_range"]["start"] == "2024-03-04T00:00:00"
        assert data["date_range"]["end"] == "2024-03-10T23:59:59"

    def test_full_fidelity(self):
        data = json.loads(JsonFormatter().format(build_report()))
        activity = data["git_activity"]
        assert activity["commit_count"] == 3
        assert len(activity["commits"]) == 3
        assert activity["daily_rollups"][0] == {
            "date": "2024-03-04",
            "commits": 1,
            "files_changed": 1,
            "lines_added": 5,
            "lines_removed": 0,
            "lines_modified": 0,
        }
        assert data["effort_estimate"]["minutes"] == 162
        assert data["effort_estimate"]["hours"] == 2.7
        assert data["filesystem_snapshot"]["top_extensions"][0] == {"extension": ".py", "count": 1}
        assert [alt["view"] for alt in data["alternative_effort"]] == ["git", "filesystem"]

    def test_without_snapshot(self):
        data = json.loads(JsonFormatter().format(build_report(with_snapshot=False)))
        assert data["filesystem_snapshot"] is None


class TestCsvFormatter:
    def _rows(self, report):
        reader = csv.reader(io.StringIO(CsvFormatter().format(report)))
        rows = list(reader)
        assert rows[0] == ["metric", "value"]
        return dict(rows[1:])

    def test_headline_rows(self):
        rows = self._rows(build_report())
        assert rows["period_start"] == "2024-03-04"
        assert rows["period_end"] == "2024-03-10"
        assert rows["commit_count"] == "3"
        assert rows["raw_lines_added"] == "15"
        assert rows["partitioned_modified"] == "8"
        assert rows["estimated_minutes"] == "162"
        assert rows["estimated_hours"] == "2.70"
        assert rows["sum_lines"] == "120"
        assert rows["git_lines_basis"] == "11"
        assert rows["filesystem_lines_basis"] == "120"

    def test_no_filesystem_rows_without_snapshot(self):
        rows = self._rows(build_report(with_snapshot=False))
        assert "sum_lines" not in rows
        assert rows["filesystem_lines_basis"] == "0"

    def test_delta_rows(self):
        baseline = BaselineMetrics(path="b.json", metrics={"commit_count": 5})
        rows = self._rows(build_report(baseline=baseline))
        assert rows["delta_commit_count"] == "-2"
        assert rows["delta_estimated_minutes"] == "162"


class TestMarkdownFormatter:
    def test_sections(self):
        text = MarkdownFormatter().format(build_report(warnings=["git is slow"]))
        assert text.startswith("# Workspace activity: Last 7 days\n")
        for heading in (
            "## Summary",
            "## Version control",
            "### Daily activity",
            "### Commits",
            "## Filesystem",
            "## Alternative effort (version control view)",
            "## Alternative effort (filesystem view)",
            "## Warnings",
        ):
            assert heading in text
        assert "- git is slow" in text
        assert "| Estimated effort | 162 min (2.70 h) |" in text

    def test_pipes_in_subjects_are_escaped(self):
        text = MarkdownFormatter().format(build_report())
        assert "wire \\| report" in text

    def test_commit_list_limit(self):
        report = build_report()
        report.commit_list_limit = 2
        text = MarkdownFormatter().format(report)
        assert "### Commits (latest 2 of 3)" in text
        assert "`aaaaaaa`" not in text

    def test_no_commits(self):
        report = build_report()
        report.git_activity.commits.clear()
        text = MarkdownFormatter().format(report)
        assert "No commits in this range." in text

    def test_baseline_section(self):
        baseline = BaselineMetrics(path="b.json", metrics={"commit_count": 1})
        text = MarkdownFormatter().format(build_report(baseline=baseline))
        assert "## Change since baseline" in text
        assert "| commit_count | +2 |" in text

    def test_without_snapshot(self):
        text = MarkdownFormatter().format(build_report(with_snapshot=False))
        assert "## Filesystem" not in text


class TestLargeNumbers:
    def _report(self):
        report = build_report()
        report.alternative_for("filesystem").basis = 1234567.0
        report.alternative_for("git").basis = 2500.5
        return report

    def _csv_rows(self, report):
        return dict(list(csv.reader(io.StringIO(CsvFormatter().format(report))))[1:])

    def test_csv_basis_is_plain_number(self):
        rows = self._csv_rows(self._report())
        assert rows["filesystem_lines_basis"] == "1234567"
        assert rows["git_lines_basis"] == "2500.5"

    def test_markdown_basis_is_plain_number(self):
        text = MarkdownFormatter().format(self._report())
        assert "Lines basis: 1234567" in text
        assert "e+06" not in text

    def test_large_delta(self):
        baseline = BaselineMetrics(path="b.json", metrics={"estimated_minutes": 3000000})
        report = build_report(baseline=baseline)
        assert self._csv_rows(report)["delta_estimated_minutes"] == "-2999838"
        assert "| estimated_minutes | -2999838 |" in MarkdownFormatter().format(report)


@pytest.mark.parametrize(
    "value,signed,expected",
    [
        (1234567, False, "1234567"),
        (1234567.0, False, "1234567"),
        (12345678.3, False, "12345678.3"),
        (0.5, False, "0.5"),
        (0, True, "+0"),
        (2, True, "+2"),
        (-2999838, True, "-2999838"),
        (-1.4, True, "-1.4"),
    ],
)
def test_format_number(value, signed, expected):
    assert format_number(value, signed=signed) == expected


def test_markdown_range_shows_day_count():
    text = MarkdownFormatter().format(build_report())
    assert "- **Range:** 2024-03-04 00:00:00 to 2024-03-10 23:59:59 (7 days)" in text
