"""CSV formatter for workpulse."""

import csv
import io

from ..models import Report
from ..serialization import headline_metrics
from .base import BaseFormatter, format_number


class CsvFormatter(BaseFormatter):
    """Flat ``metric,value`` rows: range, headline git metrics, effort, filesystem totals."""

    name = "csv"
    extension = ".csv"

    def format(self, report: Report) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(["metric", "value"])

        rng = report.date_range
        writer.writerow(["period_label", rng.label])
        writer.writerow(["period_start", rng.start.date().isoformat()])
        writer.writerow(["period_end", rng.end.date().isoformat()])
        writer.writerow(["generated_at", report.generated_at.isoformat(timespec="seconds")])

        for name, value in headline_metrics(report).items():
            writer.writerow([name, value])
        writer.writerow(["estimated_hours", f"{report.effort_estimate.hours:.2f}"])

        activity = report.git_activity
        writer.writerow(["partitioned_added", activity.partitioned_added])
        writer.writerow(["partitioned_removed", activity.partitioned_removed])

        snap = report.filesystem_snapshot
        if snap is not None:
            writer.writerow(["total_items", snap.total_items])
            writer.writerow(["total_files", snap.total_files])
            writer.writerow(["total_folders", snap.total_folders])
            writer.writerow(["total_shortcuts", snap.total_shortcuts])
            writer.writerow(["total_reparse_points", snap.total_reparse_points])
            writer.writerow(["sum_lines", snap.sum_lines])
            writer.writerow(["sum_chars", snap.sum_chars])
            writer.writerow(["sum_size_bytes", snap.sum_size_bytes])

        for alt in report.alternative_effort:
            writer.writerow([f"{alt.view}_lines_basis", format_number(alt.basis)])

        if report.baseline_delta is not None:
            for name, delta in report.baseline_delta.deltas.items():
                writer.writerow([f"delta_{name}", format_number(delta)])

        return output.getvalue()
