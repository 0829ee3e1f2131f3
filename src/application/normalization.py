from __future__ import annotations

from domain.constants import NO_DECISION, NO_FRONTEND, NO_LEVERAGE
from domain.schemas import LegacyWeeklyRecord, Strategy, TagSelection, WeekEntry, WeeklyRecord


def upgrade_week(entry: WeekEntry) -> WeeklyRecord:
    """
    Bring a week up to the current shape so it can be edited.

    Legacy answers are carried into the strategy block. Classification does not
    go through this path: a stored legacy week keeps its legacy verdict.
    """
    if isinstance(entry, WeeklyRecord):
        return entry

    sessions = entry.muay_thai_sessions or 0
    strategy = Strategy(
        leverage=TagSelection.from_list(entry.job_progress, NO_LEVERAGE),
        decision=TagSelection.from_list(entry.decision_ownership, NO_DECISION),
        frontend=TagSelection.from_list(entry.frontend_output, NO_FRONTEND),
        energy=max(0, min(sessions, 2)),
    )
    return WeeklyRecord(
        id=entry.id,
        week_ending=entry.week_ending,
        strategy=strategy,
        review_notes=entry.review_notes,
        daily_logs=entry.daily_logs,
        submitted=entry.submitted,
    )


def is_legacy(entry: WeekEntry) -> bool:
    return isinstance(entry, LegacyWeeklyRecord)
