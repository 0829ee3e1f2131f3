from __future__ import annotations

import logging
import time
from datetime import date

from application.aggregator import (
    GOAL_SELECTORS,
    goal_totals,
    preview_total,
    latest_month,
    latest_week,
    submitted_months,
    submitted_weeks,
)
from application.debt_health import assess_month
from application.finance_summary import summarize_month
from application.goals import goal_progress
from application.monthly_rules import evaluate_month
from application.normalization import upgrade_week
from application.periods import current_month
from application.status import health_signal, leverage_signal, wealth_signal
from application.validator import IntegrityValidator
from application.verdict import classify_week, describe_week
from domain.constants import CAR_GOAL, CAR_MILESTONE, EMERGENCY_GOAL, LIFESTYLE_LOCK_THRESHOLD, TRAVEL_GOAL
from domain.models import GoalProgress
from domain.schemas import (
    AppData,
    DashboardSnapshot,
    MonthHistoryRow,
    MonthlyRecord,
    WeekEntry,
    WeekHistoryRow,
    WeekOverview,
)

logger = logging.getLogger(__name__)

GOALS: dict[str, float] = {
    "emergency": EMERGENCY_GOAL,
    "car": CAR_GOAL,
    "travel": TRAVEL_GOAL,
}

MILESTONES: dict[str, float] = {
    "emergency": LIFESTYLE_LOCK_THRESHOLD,
    "car": CAR_MILESTONE,
}


class WeeklyReviewEngine:
    """Turns a stored AppData snapshot into everything the dashboard displays."""

    def __init__(self, validator: IntegrityValidator | None = None):
        self._validator = validator or IntegrityValidator()

    def run(self, data: AppData, today: date) -> DashboardSnapshot:
        logger.info("Engine run start weeks=%d months=%d today=%s", len(data.weeks), len(data.months), today)
        t0 = time.perf_counter()

        t = time.perf_counter()
        goals = self._goals(data)
        emergency_total = goals[0].total
        logger.info("Goal progress complete in %.3fs goals=%d", time.perf_counter() - t, len(goals))

        t = time.perf_counter()
        latest = latest_week(data.weeks)
        week_history = [self._history_row(w) for w in submitted_weeks(data.weeks)]
        logger.info("Weekly verdicts complete in %.3fs history=%d", time.perf_counter() - t, len(week_history))

        t = time.perf_counter()
        month_history = [
            MonthHistoryRow(
                month=m.month,
                emergency_fund=m.emergency_fund,
                travel_fund=m.travel_fund,
                submitted_at=m.submitted_at,
                status=evaluate_month(m),
            )
            for m in submitted_months(data.months)
        ]
        month = current_month(data, today)
        finance = summarize_month(month)
        month_goals = self._month_goals(data, month)
        debt_health = assess_month(month)
        logger.info(
            "Monthly evaluation complete in %.3fs history=%d debt_band=%s",
            time.perf_counter() - t,
            len(month_history),
            debt_health.band.value if debt_health else "n/a",
        )

        t = time.perf_counter()
        issues = self._validator.validate(data)
        logger.info("Validation complete in %.3fs issues=%d", time.perf_counter() - t, len(issues))

        snapshot = DashboardSnapshot(
            generated_on=today,
            goals=goals,
            lifestyle_locked=emergency_total < LIFESTYLE_LOCK_THRESHOLD,
            wealth=wealth_signal(month.emergency_fund),
            current_week=self._overview(latest) if latest is not None else None,
            week_history=week_history,
            month_history=month_history,
            current_month=month.month,
            month_goals=month_goals,
            finance=finance,
            debt_health=debt_health,
            issues=issues,
        )
        logger.info("Engine run complete in %.3fs", time.perf_counter() - t0)
        return snapshot

    def _goals(self, data: AppData) -> list[GoalProgress]:
        totals = goal_totals(data)
        # Months-remaining uses the most recent month's allocation, submitted or not.
        allocation_month = latest_month(data.months)
        results = []
        for name, goal in GOALS.items():
            allocation = GOAL_SELECTORS[name](allocation_month) if allocation_month is not None else 0
            milestone = LIFESTYLE_LOCK_THRESHOLD if name == "emergency" else None
            results.append(goal_progress(name, totals[name], goal, allocation, milestone))
        return results

    def _month_goals(self, data: AppData, month: MonthlyRecord) -> list[GoalProgress]:
        """Projections for the month being edited: its contribution counted live, its allocation as the pace."""
        return [
            goal_progress(
                name,
                preview_total(data, month, GOAL_SELECTORS[name]),
                goal,
                GOAL_SELECTORS[name](month),
                MILESTONES.get(name),
            )
            for name, goal in GOALS.items()
        ]

    def _overview(self, entry: WeekEntry) -> WeekOverview:
        week = upgrade_week(entry)
        return WeekOverview(
            id=week.id,
            submitted=week.submitted,
            verdict=classify_week(entry),
            leverage=leverage_signal(week.strategy),
            health=health_signal(week.strategy.energy),
        )

    def _history_row(self, entry: WeekEntry) -> WeekHistoryRow:
        summary = describe_week(entry)
        return WeekHistoryRow(
            id=entry.id,
            verdict=classify_week(entry),
            outcome_text=summary.outcome_text,
            training_text=summary.training_text,
        )
