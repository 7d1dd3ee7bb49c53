"""Effort estimation: the fixed-coefficient model and the catalog model."""

from .alternative import (
    FILESYSTEM_VIEW,
    GIT_VIEW,
    estimate_alternative,
    evaluate_views,
    filesystem_basis,
    git_basis,
)
from .catalog import DEFAULT_CATALOG, load_catalog
from .effort import FLOOR_MINUTES, estimate

__all__ = [
    "DEFAULT_CATALOG",
    "FILESYSTEM_VIEW",
    "FLOOR_MINUTES",
    "GIT_VIEW",
    "estimate",
    "estimate_alternative",
    "evaluate_views",
    "filesystem_basis",
    "git_basis",
    "load_catalog",
]
