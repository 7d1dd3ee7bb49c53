"""Tests for the fixed-coefficient effort model."""

import pytest

from workpulse.estimation import FLOOR_MINUTES, estimate
from workpulse.models import GitActivity


def _activity(added=0, removed=0, modified=0, commits=0):
    return GitActivity(
        commit_count=commits,
        partitioned_added=added,
        partitioned_removed=removed,
        partitioned_modified=modified,
    )


class TestEstimate:
    def test_single_ten_line_commit(self):
        # (10*5 + 1*15) * 1.2 * 1.3 = 65 * 1.56 = 101.4
        assert estimate(_activity(added=10, commits=1)).minutes == 101

    def test_no_commits_is_zero(self):
        result = estimate(_activity())
        assert result.minutes == 0
        assert result.breakdown["floor_applied"] == 0.0

    def test_floor_for_tiny_commit(self):
        # 1 commit, nothing else: 15 * 1.56 = 23.4 -> floored to 30
        result = estimate(_activity(commits=1))
        assert result.minutes == FLOOR_MINUTES
        assert result.breakdown["floor_applied"] == 1.0

    @pytest.mark.parametrize(
        "added,removed,modified,commits",
        [(0, 0, 0, 1), (0, 1, 0, 1), (1, 0, 0, 1), (0, 0, 0, 5), (500, 300, 200, 12)],
    )
    def test_floor_holds_with_commits(self, added, removed, modified, commits):
        assert estimate(_activity(added, removed, modified, commits)).minutes >= 30

    def test_all_terms(self):
        # (4*5 + 2*3 + 2*1.5 + 1*15) * 1.56 = 44 * 1.56 = 68.64
        result = estimate(_activity(added=4, removed=2, modified=2, commits=1))
        assert result.minutes == 69
        assert result.breakdown["base_minutes"] == pytest.approx(44.0)
        assert result.breakdown["modified_minutes"] == pytest.approx(6.0)

    def test_rounds_half_up(self):
        # 1 removed line, 0 commits: 1.5 * 1.56 = 2.34; 5 removed: 7.5 * 1.56 = 11.7
        assert estimate(_activity(removed=1)).minutes == 2
        assert estimate(_activity(removed=5)).minutes == 12

    def test_pure(self):
        activity = _activity(added=37, removed=11, modified=5, commits=3)
        assert estimate(activity).minutes == estimate(activity).minutes

    def test_hours(self):
        assert estimate(_activity(added=10, commits=1)).hours == pytest.approx(1.68)
