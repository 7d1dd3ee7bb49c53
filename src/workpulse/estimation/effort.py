"""Primary fixed-coefficient effort model."""

from __future__ import annotations

import math

from ..models import EffortEstimate, GitActivity

# Minutes per unit of change
MINUTES_PER_ADDED_LINE = 5.0
MINUTES_PER_MODIFIED_LINE = 3.0
MINUTES_PER_REMOVED_LINE = 1.5
MINUTES_PER_COMMIT = 15.0

# Both multipliers always apply
COMPLEXITY_MULTIPLIER = 1.2
INTEGRATION_MULTIPLIER = 1.3

FLOOR_MINUTES = 30


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimate(activity: GitActivity) -> EffortEstimate:
    """Estimated minutes of work behind ``activity``.

    ``(pa*5 + pm*3 + pr*1.5 + commits*15) * 1.2 * 1.3``, floored at 30
    minutes when there is at least one commit, rounded to a whole minute.
    Pure: the same activity always yields the same estimate.
    """
    added = activity.partitioned_added * MINUTES_PER_ADDED_LINE
    modified = activity.partitioned_modified * MINUTES_PER_MODIFIED_LINE
    removed = activity.partitioned_removed * MINUTES_PER_REMOVED_LINE
    commits = activity.commit_count * MINUTES_PER_COMMIT

    base = added + modified + removed + commits
    minutes = base * COMPLEXITY_MULTIPLIER * INTEGRATION_MULTIPLIER

    floor_applied = activity.commit_count > 0 and minutes < FLOOR_MINUTES
    if floor_applied:
        minutes = float(FLOOR_MINUTES)

    return EffortEstimate(
        minutes=_round_half_up(minutes),
        breakdown={
            "added_minutes": added,
            "modified_minutes": modified,
            "removed_minutes": removed,
            "commit_minutes": commits,
            "base_minutes": base,
            "complexity_multiplier": COMPLEXITY_MULTIPLIER,
            "integration_multiplier": INTEGRATION_MULTIPLIER,
            "floor_applied": 1.0 if floor_applied else 0.0,
        },
    )
