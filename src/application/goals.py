from __future__ import annotations

import math

from domain.constants import GOAL_REACHED, NO_ESTIMATE
from domain.models import GoalProgress


def progress(current: float, goal: float) -> float:
    """Percent of `goal` covered by `current`, capped at 100. `goal` must be positive."""
    return min(current / goal * 100, 100)


def periods_remaining(current: float, goal: float, periodic_allocation: float) -> str:
    """
    Estimate how many months of `periodic_allocation` are still needed to reach `goal`.

    Returns "—" when no allocation is set and "Goal reached ✓" once current >= goal.
    """
    if periodic_allocation <= 0:
        return NO_ESTIMATE
    remaining = goal - current
    if remaining <= 0:
        return GOAL_REACHED
    months = math.ceil(remaining / periodic_allocation)
    return "1 month" if months == 1 else f"{months} months"


def goal_progress(
    name: str,
    current: float,
    goal: float,
    periodic_allocation: float,
    milestone: float | None = None,
) -> GoalProgress:
    return GoalProgress(
        name=name,
        total=current,
        goal=goal,
        percent=progress(current, goal),
        remaining=periods_remaining(current, goal, periodic_allocation),
        complete=current >= goal,
        milestone_percent=progress(milestone, goal) if milestone else None,
    )
