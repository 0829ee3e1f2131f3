from __future__ import annotations

from application.goals import progress
from domain.constants import EMERGENCY_GOAL, MONTHLY_EMERGENCY_MINIMUM, TRAINING_TARGET, WEEKLY_ACTION_TARGET
from domain.models import StatusLabel, StatusSignal
from domain.schemas import Strategy


def count_actions(strategy: Strategy) -> int:
    return len(strategy.leverage.tags) + len(strategy.decision.tags) + len(strategy.frontend.tags)


def leverage_signal(strategy: Strategy) -> StatusSignal:
    actions = count_actions(strategy)
    if actions >= WEEKLY_ACTION_TARGET:
        label = StatusLabel.STABLE
    elif actions > 0:
        label = StatusLabel.MONITORING
    else:
        label = StatusLabel.ACTION_REQUIRED
    return StatusSignal(label=label, value=actions, percent=progress(actions, WEEKLY_ACTION_TARGET))


def health_signal(sessions: int) -> StatusSignal:
    if sessions >= TRAINING_TARGET:
        label = StatusLabel.STABLE
    elif sessions == 1:
        label = StatusLabel.MONITORING
    else:
        label = StatusLabel.ACTION_REQUIRED
    return StatusSignal(label=label, value=sessions, percent=progress(sessions, TRAINING_TARGET))


def wealth_signal(contribution: float, target: float = MONTHLY_EMERGENCY_MINIMUM) -> StatusSignal:
    if contribution >= target:
        label = StatusLabel.STABLE
    elif contribution > 0:
        label = StatusLabel.MONITORING
    else:
        label = StatusLabel.ACTION_REQUIRED
    return StatusSignal(label=label, value=contribution, percent=progress(contribution, EMERGENCY_GOAL))
