"""Tests for the chart series and the standalone HTML report."""

import json
import re
from datetime import datetime

from conftest import build_report
from workpulse.models import Commit, DailyRollup, FileRecord
from workpulse.visualization import build_filesystem_chart, build_git_chart, generate_html
from workpulse.visualization.report import MANIFEST_PAGE_SIZE, build_report_data, embed_json


def _embedded(html):
    match = re.search(r"const DATA = (.*?);\n", html)
    assert match is not None
    return json.loads(match.group(1))


class TestGitChart:
    def test_files_changed_per_day(self):
        chart = build_git_chart(build_report())
        assert chart.labels == ["2024-03-04", "2024-03-06"]
        assert chart.bars == [1, 3]
        assert chart.bar_label == "Files changed"
        # 03-06: 10 added, 8 removed -> 2 + 8/2 = 6
        assert chart.trend == [5.0, 6.0]
        assert not chart.empty

    def test_falls_back_to_commit_counts(self):
        report = build_report()
        for rollup in report.git_activity.daily_rollups:
            rollup.files_changed = 0
        chart = build_git_chart(report)
        assert chart.bar_label == "Commits"
        assert chart.bars == [1, 2]
        assert len(chart.trend) == len(chart.labels)

    def test_trend_zero_for_days_without_rollups(self):
        report = build_report()
        report.git_activity.daily_rollups = [DailyRollup(date=datetime(2024, 3, 6).date())]
        report.git_activity.commits.append(Commit("d" * 40, datetime(2024, 3, 8, 9), "x", "A"))
        chart = build_git_chart(report)
        assert chart.labels == ["2024-03-04", "2024-03-06", "2024-03-08"]
        assert chart.trend == [0.0, 0.0, 0.0]

    def test_empty(self):
        report = build_report()
        report.git_activity.daily_rollups = []
        report.git_activity.commits = []
        chart = build_git_chart(report)
        assert chart.empty
        assert chart.labels == []
        assert chart.empty_label


class TestFilesystemChart:
    def test_only_files_modified_in_range(self):
        chart = build_filesystem_chart(build_report())
        assert chart.labels == ["2024-03-06"]
        assert chart.bars == [1]
        assert chart.trend == [120.0]

    def test_without_snapshot(self):
        chart = build_filesystem_chart(build_report(with_snapshot=False))
        assert chart.empty
        assert chart.empty_label == "No filesystem inventory"


class TestReportData:
    def test_manifest_most_recent_first(self):
        data = build_report_data(build_report())
        assert [f["path"] for f in data["manifest"]] == ["src/app.py", "logo.png"]
        assert data["manifest"][1]["lines"] is None
        assert data["manifest_page_size"] == MANIFEST_PAGE_SIZE

    def test_large_manifest_fully_embedded(self):
        report = build_report()
        template = report.filesystem_snapshot.files[0]
        report.filesystem_snapshot.files = [
            FileRecord(template.absolute_path, f"src/f{i}.py", 10, datetime(2024, 3, 6, 15, 0), False, 1, 10)
            for i in range(1500)
        ]
        data = _embedded(generate_html(report))
        assert len(data["manifest"]) == 1500
        assert data["manifest"][-1]["path"] == "src/f1499.py"
        assert data["manifest_page_size"] == MANIFEST_PAGE_SIZE

    def test_both_views_present(self):
        data = build_report_data(build_report())
        assert set(data["alternative"]) == {"git", "filesystem"}
        assert set(data["charts"]) == {"git", "filesystem"}
        assert data["summary"]["commit_count"] == 3


class TestGenerateHtml:
    def test_standalone_document(self):
        html = generate_html(build_report())
        assert html.lstrip().startswith("<!DOCTYPE html>")
        assert "http://" not in html.replace("http://www.w3.org/2000/svg", "")
        assert 'data-view="git"' in html
        assert 'data-view="filesystem"' in html

    def test_embedded_data_round_trips(self):
        data = _embedded(generate_html(build_report()))
        assert data["summary"]["estimated_minutes"] == 162
        assert data["charts"]["git"]["bars"] == [1, 3]

    def test_markup_in_data_cannot_close_script(self):
        report = build_report()
        report.warnings.append("</script><img src=x onerror=alert(1)>")
        html = generate_html(report)
        assert "</script><img" not in html
        assert "tidy <script>" not in html
        assert _embedded(html)["warnings"][-1] == "</script><img src=x onerror=alert(1)>"

    def test_embed_json_escapes_line_separators(self):
        text = embed_json({"s": "a\u2028b\u2029c<"})
        assert "\u2028" not in text
        assert "\u2029" not in text
        assert json.loads(text) == {"s": "a\u2028b\u2029c<"}
