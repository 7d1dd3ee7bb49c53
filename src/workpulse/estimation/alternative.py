"""Catalog-driven alternative effort model.

Independent of the primary model: it converts a "lines basis" into hours
for each catalog entry and never feeds back into ``effort.estimate``.
"""

from __future__ import annotations

import html
from typing import Iterable, List, Optional

from ..models import (
    AlternativeEffort,
    AlternativeEffortRow,
    EffortFactor,
    FilesystemSnapshot,
    GitActivity,
)
from ..temporal.rollups import lines_basis

GIT_VIEW = "git"
FILESYSTEM_VIEW = "filesystem"


def git_basis(activity: GitActivity) -> float:
    """``max(0, added + 0.5*modified - 0.5*removed)`` over partitioned counts."""
    return lines_basis(
        activity.partitioned_added,
        activity.partitioned_modified,
        activity.partitioned_removed,
    )


def filesystem_basis(snapshot: Optional[FilesystemSnapshot]) -> float:
    """Total measured lines of the inventoried tree; 0 without a snapshot."""
    if snapshot is None:
        return 0.0
    return float(max(0, snapshot.sum_lines))


def estimate_alternative(basis: float, catalog: Iterable[EffortFactor]) -> List[AlternativeEffortRow]:
    """One row per catalog entry with ``round(basis * factor, 1)`` hours."""
    basis = max(0.0, basis)
    rows = []
    for entry in catalog:
        rows.append(
            AlternativeEffortRow(
                key=entry.key,
                label=entry.label,
                factor=entry.factor,
                estimated_hours=round(basis * entry.factor, 1),
                reference_links=list(entry.reference_links),
                description_html=html.escape(entry.description),
            )
        )
    return rows


def evaluate_views(
    activity: GitActivity,
    snapshot: Optional[FilesystemSnapshot],
    catalog: Iterable[EffortFactor],
) -> List[AlternativeEffort]:
    """Evaluate the catalog for the version-control and filesystem views."""
    catalog = list(catalog)
    views = []
    for view, basis in (
        (GIT_VIEW, git_basis(activity)),
        (FILESYSTEM_VIEW, filesystem_basis(snapshot)),
    ):
        views.append(AlternativeEffort(view=view, basis=basis, rows=estimate_alternative(basis, catalog)))
    return views
