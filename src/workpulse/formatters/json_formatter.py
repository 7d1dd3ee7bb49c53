"""JSON formatter for workpulse."""

import json

from ..models import Report
from ..serialization import report_to_dict
from .base import BaseFormatter


class JsonFormatter(BaseFormatter):
    """Render the full report tree as JSON; readable back as a baseline."""

    name = "json"
    extension = ".json"

    def format(self, report: Report) -> str:
        return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False) + "\n"
