"""Base formatter interface for workpulse report artifacts."""

from abc import ABC, abstractmethod

from ..models import Report


class BaseFormatter(ABC):
    """Abstract base class for file formatters.

    ``name`` identifies the format on the command line, ``extension`` is the
    suffix of the file it is written to.
    """

    name: str = ""
    extension: str = ""

    @abstractmethod
    def format(self, report: Report) -> str:
        """Return the full artifact text for ``report``."""


def format_number(value: float, signed: bool = False) -> str:
    """Plain decimal text: whole numbers without a fraction, others to one place.

    Never uses exponent notation, so large line counts survive intact.
    """
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int):
        return f"{value:+d}" if signed else f"{value:d}"
    return f"{value:+.1f}" if signed else f"{value:.1f}"
