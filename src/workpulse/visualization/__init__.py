"""Visualization layer: chart series and the self-contained HTML report."""

from .charts import ChartSeries, build_filesystem_chart, build_git_chart
from .report import build_report_data, generate_html

__all__ = [
    "ChartSeries",
    "build_filesystem_chart",
    "build_git_chart",
    "build_report_data",
    "generate_html",
]
