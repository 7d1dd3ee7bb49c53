"""
workpulse - workspace activity analyzer and report generator

Mines git history for a date window, inventories the working tree, derives
labor-effort estimates from both and renders the result as markdown, JSON,
CSV or a self-contained HTML page.
"""

__version__ = "0.1.0"

from .api import generate_report, run
from .config import ReportConfig, load_config
from .models import Report

__all__ = [
    "generate_report",  # Build the in-memory report
    "run",  # Build and write every configured format
    "ReportConfig",
    "Report",
    "load_config",
]
