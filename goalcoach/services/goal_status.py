from goalcoach.models.goal import GoalStatusEnum


def clamp_progress(total: float, target_value: float) -> float:
    """current_progress is the summed progress bounded to [0, target_value]."""
    return max(0.0, min(float(total), float(target_value)))


def derive_status(current_status: GoalStatusEnum, current_progress: float, target_value: float) -> GoalStatusEnum:
    """Goal status after any progress or target change.

    abandoned is terminal and only reachable through an explicit abandon.
    Every other status follows from the progress alone, in both directions:
    an in_progress goal whose total drops to 0 goes back to not_started, and a
    completed goal whose total falls below a raised target reopens as
    in_progress. Status never disagrees with current_progress.
    """
    if current_status == GoalStatusEnum.abandoned:
        return GoalStatusEnum.abandoned
    if target_value > 0 and current_progress >= target_value:
        return GoalStatusEnum.completed
    if current_progress > 0:
        return GoalStatusEnum.in_progress
    return GoalStatusEnum.not_started
