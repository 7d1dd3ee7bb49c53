"""HTML formatter for workpulse."""

from ..models import Report
from ..visualization.report import generate_html
from .base import BaseFormatter


class HtmlFormatter(BaseFormatter):
    """Self-contained interactive page with charts and tables."""

    name = "html"
    extension = ".html"

    def format(self, report: Report) -> str:
        return generate_html(report)
