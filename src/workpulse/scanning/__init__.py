"""Filesystem inventory: text metrics, exclusion policy and the iterative walker."""

from .filters import FilterPolicy
from .text_metrics import FileKind, classify, measure
from .walker import scan

__all__ = [
    "FileKind",
    "FilterPolicy",
    "classify",
    "measure",
    "scan",
]
