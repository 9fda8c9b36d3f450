"""
Unit tests for the goal status transition function and progress clamping.
"""

import pytest

from goalcoach.models.goal import GoalStatusEnum
from goalcoach.services.goal_status import clamp_progress, derive_status

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# clamp_progress
# ---------------------------------------------------------------------------

def test_clamp_progress_caps_at_target():
    assert clamp_progress(13, 10) == 10


def test_clamp_progress_keeps_partial_total():
    assert clamp_progress(4.5, 10) == 4.5


def test_clamp_progress_never_negative():
    assert clamp_progress(-3, 10) == 0


# ---------------------------------------------------------------------------
# derive_status
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("current, progress, target, expected", [
    (GoalStatusEnum.not_started, 0, 10, GoalStatusEnum.not_started),
    (GoalStatusEnum.not_started, 3, 10, GoalStatusEnum.in_progress),
    (GoalStatusEnum.not_started, 10, 10, GoalStatusEnum.completed),
    (GoalStatusEnum.in_progress, 10, 10, GoalStatusEnum.completed),
    (GoalStatusEnum.in_progress, 0, 10, GoalStatusEnum.not_started),
    (GoalStatusEnum.completed, 5, 10, GoalStatusEnum.in_progress),
])
def test_derive_status_follows_progress(current, progress, target, expected):
    assert derive_status(current, progress, target) == expected


def test_abandoned_is_terminal_even_when_target_reached():
    assert derive_status(GoalStatusEnum.abandoned, 10, 10) == GoalStatusEnum.abandoned
    assert derive_status(GoalStatusEnum.abandoned, 0, 10) == GoalStatusEnum.abandoned


def test_shrinking_target_completes_goal():
    # 6 logged against a target lowered from 10 to 5
    progress = clamp_progress(6, 5)
    assert derive_status(GoalStatusEnum.in_progress, progress, 5) == GoalStatusEnum.completed
