"""Output formatters for workpulse."""

from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .html_formatter import HtmlFormatter
from .json_formatter import JsonFormatter
from .markdown_formatter import MarkdownFormatter
from .rich_formatter import RichSummary

FORMATTERS = {
    "markdown": MarkdownFormatter,
    "json": JsonFormatter,
    "csv": CsvFormatter,
    "html": HtmlFormatter,
}

ALIASES = {
    "md": "markdown",
    "text": "markdown",
    "htm": "html",
}


def normalize_format(name: str) -> str:
    """Canonical format name for ``name`` (case-insensitive, aliases resolved).

    Raises:
        ValueError: If name is not recognized
    """
    key = name.strip().lower().lstrip(".")
    key = ALIASES.get(key, key)
    if key not in FORMATTERS:
        choices = ", ".join(sorted(set(FORMATTERS) | set(ALIASES)))
        raise ValueError(f"Unknown format: {name!r}. Choose from: {choices}")
    return key


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "markdown", "json", "csv", "html" or an alias ("md", "text")

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    return FORMATTERS[normalize_format(name)]()


__all__ = [
    "BaseFormatter",
    "CsvFormatter",
    "HtmlFormatter",
    "JsonFormatter",
    "MarkdownFormatter",
    "RichSummary",
    "get_formatter",
    "normalize_format",
]
