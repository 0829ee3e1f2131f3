from __future__ import annotations

from domain.constants import NO_LEVERAGE, TRAINING_TARGET
from domain.models import Verdict, WeekSummary
from domain.schemas import LegacyWeeklyRecord, Strategy, WeekEntry


def classify_strategy(strategy: Strategy) -> Verdict:
    # Training is the floor: nothing else counts until it is met.
    if strategy.energy < TRAINING_TARGET:
        return Verdict.DO_BETTER
    if not strategy.leverage.has_progress or not strategy.frontend.has_progress:
        return Verdict.PARTIAL_PROGRESS
    return Verdict.ON_TRACK


def classify_week(entry: WeekEntry) -> Verdict:
    """Weeks recorded before the strategy block existed are reported as on track."""
    if isinstance(entry, LegacyWeeklyRecord):
        return Verdict.ON_TRACK
    return classify_strategy(entry.strategy)


def describe_week(entry: WeekEntry) -> WeekSummary:
    if isinstance(entry, LegacyWeeklyRecord):
        outcomes: list[str] = []
        energy = 0
    else:
        outcomes = entry.strategy.leverage.to_list(NO_LEVERAGE)
        energy = entry.strategy.energy

    outcome_text = ", ".join(outcomes) if outcomes else "No key outcomes"
    if energy == 0:
        training_text = "no training"
    elif energy == 1:
        training_text = "min training"
    else:
        training_text = "training met"
    return WeekSummary(outcome_text=outcome_text, training_text=training_text)
