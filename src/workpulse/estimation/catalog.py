"""Productivity-factor catalog for the alternative effort model.

The catalog is data: each entry maps one unit of lines basis to hours under
a particular developer/work-context assumption. A JSON file can replace the
built-in entries; it is validated entry by entry and bad entries are dropped.

File shape::

    [
      {"label": "Senior developer", "factor": 0.025,
       "references": ["https://..."], "description": "..."},
      ...
    ]

``{"entries": [...]}`` is accepted as well.
"""

from __future__ import annotations

import json
import math
import re
from pathlib import Path
from typing import Any, List, Optional, Union

import jsonschema

from ..exceptions import ConfigurationError
from ..logging_config import get_logger
from ..models import EffortFactor

logger = get_logger(__name__)

_LINKS = {"type": "array", "items": {"type": "string", "minLength": 1}}

ENTRY_SCHEMA = {
    "type": "object",
    "required": ["label", "factor"],
    "properties": {
        "key": {"type": "string", "minLength": 1},
        "label": {"type": "string", "minLength": 1, "pattern": r"\S"},
        "factor": {"type": "number", "minimum": 0},
        "references": _LINKS,
        "reference_links": _LINKS,
        "referenceLinks": _LINKS,
        "description": {"type": "string"},
    },
}

DEFAULT_CATALOG: tuple[EffortFactor, ...] = (
    EffortFactor(
        key="ai_assisted",
        label="AI-assisted development",
        factor=0.01,
        reference_links=("https://en.wikipedia.org/wiki/GitHub_Copilot",),
        description=(
            "Roughly 100 lines of basis per hour when an assistant drafts most code "
            "and the developer reviews and integrates it."
        ),
    ),
    EffortFactor(
        key="senior_coding",
        label="Senior developer, coding only",
        factor=0.025,
        reference_links=("https://en.wikipedia.org/wiki/Programming_productivity",),
        description=(
            "About 40 lines per hour of focused implementation in a familiar codebase; "
            "excludes design, review and testing time."
        ),
    ),
    EffortFactor(
        key="mid_coding",
        label="Mid-level developer, coding only",
        factor=0.04,
        reference_links=("https://en.wikipedia.org/wiki/Programming_productivity",),
        description="About 25 lines per hour of implementation with occasional lookups.",
    ),
    EffortFactor(
        key="junior_coding",
        label="Junior developer, coding only",
        factor=0.07,
        reference_links=("https://en.wikipedia.org/wiki/Programming_productivity",),
        description="About 14 lines per hour including frequent research and rework.",
    ),
    EffortFactor(
        key="legacy_maintenance",
        label="Maintenance of unfamiliar legacy code",
        factor=0.12,
        reference_links=("https://en.wikipedia.org/wiki/Software_maintenance",),
        description=(
            "Reading and understanding existing code dominates; each changed line "
            "carries investigation overhead."
        ),
    ),
    EffortFactor(
        key="industry_lifecycle",
        label="Industry average, full lifecycle",
        factor=0.25,
        reference_links=(
            "https://en.wikipedia.org/wiki/Code_Complete",
            "https://en.wikipedia.org/wiki/Source_lines_of_code",
        ),
        description=(
            "Delivered-code rates of roughly 10 to 50 lines per staff day once "
            "requirements, design, testing and documentation are included."
        ),
    ),
    EffortFactor(
        key="cocomo_organic",
        label="COCOMO basic (organic), linearized",
        factor=0.36,
        reference_links=(
            "https://en.wikipedia.org/wiki/COCOMO",
            "https://en.wikipedia.org/wiki/The_Mythical_Man-Month",
        ),
        description=(
            "2.4 person-months per KLOC at 152 hours per person-month; the exponent "
            "is dropped so the factor stays linear."
        ),
    ),
)


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")
    return slug or "entry"


def parse_entry(raw: Any) -> Optional[EffortFactor]:
    """Validate one raw catalog entry; ``None`` if it does not fit the schema."""
    try:
        jsonschema.validate(instance=raw, schema=ENTRY_SCHEMA)
    except jsonschema.ValidationError as e:
        logger.warning("Skipping catalog entry %r: %s", _preview(raw), e.message)
        return None

    factor = float(raw["factor"])
    if not math.isfinite(factor):
        logger.warning("Skipping catalog entry %r: factor is not finite", _preview(raw))
        return None

    links = raw.get("references") or raw.get("reference_links") or raw.get("referenceLinks") or []
    label = raw["label"].strip()
    return EffortFactor(
        key=raw.get("key") or slugify(label),
        label=label,
        factor=factor,
        reference_links=tuple(links),
        description=raw.get("description", ""),
    )


def parse_catalog(data: Any) -> List[EffortFactor]:
    """Parse a decoded JSON document, skipping invalid entries individually."""
    if isinstance(data, dict) and isinstance(data.get("entries"), list):
        data = data["entries"]
    if not isinstance(data, list):
        logger.warning("Catalog must be a JSON list of entries, got %s", type(data).__name__)
        return []

    entries: List[EffortFactor] = []
    seen: set[str] = set()
    for raw in data:
        entry = parse_entry(raw)
        if entry is None:
            continue
        key = entry.key
        suffix = 2
        while key in seen:
            key = f"{entry.key}_{suffix}"
            suffix += 1
        if key != entry.key:
            entry = EffortFactor(key, entry.label, entry.factor, entry.reference_links, entry.description)
        seen.add(key)
        entries.append(entry)
    return entries


def load_catalog(path: Union[str, Path, None]) -> List[EffortFactor]:
    """Load a catalog file, or the built-in catalog when ``path`` is ``None``.

    A readable file with at least one valid entry fully replaces the
    built-in catalog. Unparsable JSON or zero valid entries fall back to the
    built-in catalog with a warning.

    Raises:
        ConfigurationError: If ``path`` is given but cannot be read
    """
    if path is None:
        return list(DEFAULT_CATALOG)

    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read effort catalog: {p}", details={"path": str(p), "reason": str(e)}
        )

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Effort catalog %s is not valid JSON (%s); using built-in catalog", p, e)
        return list(DEFAULT_CATALOG)

    entries = parse_catalog(data)
    if not entries:
        logger.warning("Effort catalog %s has no valid entries; using built-in catalog", p)
        return list(DEFAULT_CATALOG)

    logger.info("Loaded %d effort catalog entries from %s", len(entries), p)
    return entries


def _preview(raw: Any) -> str:
    if isinstance(raw, dict):
        return str(raw.get("label") or raw.get("key") or "<unnamed>")
    return repr(raw)[:40]
