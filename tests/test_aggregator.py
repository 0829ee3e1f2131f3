from __future__ import annotations

import unittest

from application.aggregator import (
    GOAL_SELECTORS,
    goal_totals,
    latest_month,
    latest_submitted_week,
    latest_week,
    preview_total,
    submitted_months,
    submitted_weeks,
    total_for_goal,
)
from domain.schemas import AppData, MonthlyRecord, Strategy, WeeklyRecord


def _week(key: str, submitted: bool) -> WeeklyRecord:
    return WeeklyRecord(id=key, strategy=Strategy(), submitted=submitted)


class GoalTotalsTests(unittest.TestCase):
    def test_unsubmitted_months_are_excluded(self) -> None:
        months = [
            MonthlyRecord(month="2026-01", submitted=True, emergency_fund=1_000),
            MonthlyRecord(month="2026-02", submitted=False, emergency_fund=5_000),
        ]
        self.assertEqual(total_for_goal(months, GOAL_SELECTORS["emergency"]), 1_000)

    def test_goal_totals_use_same_rule_for_each_goal(self) -> None:
        data = AppData(months={
            "2026-01": MonthlyRecord(month="2026-01", submitted=True, emergency_fund=50_000, car_fund=20_000, travel_fund=250),
            "2026-02": MonthlyRecord(month="2026-02", submitted=True, emergency_fund=60_000, car_fund=0, travel_fund=100),
            "2026-03": MonthlyRecord(month="2026-03", emergency_fund=70_000, car_fund=30_000, travel_fund=300),
        })
        self.assertEqual(goal_totals(data), {"emergency": 110_000, "car": 20_000, "travel": 350})

    def test_empty_data(self) -> None:
        self.assertEqual(goal_totals(AppData()), {"emergency": 0, "car": 0, "travel": 0})


class PreviewTotalTests(unittest.TestCase):
    def setUp(self) -> None:
        self.data = AppData(months={
            "2026-01": MonthlyRecord(month="2026-01", submitted=True, emergency_fund=1_000),
            "2026-02": MonthlyRecord(month="2026-02", submitted=True, emergency_fund=2_000),
        })
        self.selector = GOAL_SELECTORS["emergency"]

    def test_submitted_month_is_not_counted_twice(self) -> None:
        month = self.data.months["2026-02"]
        self.assertEqual(preview_total(self.data, month, self.selector), 3_000)

    def test_in_progress_month_is_added_live(self) -> None:
        month = MonthlyRecord(month="2026-03", emergency_fund=500)
        self.assertEqual(preview_total(self.data, month, self.selector), 3_500)


class LatestRecordTests(unittest.TestCase):
    def test_latest_submitted_week(self) -> None:
        weeks = {
            "2026-03-01": _week("2026-03-01", True),
            "2026-03-15": _week("2026-03-15", False),
            "2026-03-08": _week("2026-03-08", True),
        }
        self.assertEqual(latest_submitted_week(weeks).id, "2026-03-08")
        self.assertEqual(latest_week(weeks).id, "2026-03-15")
        self.assertEqual([w.id for w in submitted_weeks(weeks)], ["2026-03-08", "2026-03-01"])

    def test_latest_submitted_week_none(self) -> None:
        self.assertIsNone(latest_submitted_week({}))
        self.assertIsNone(latest_submitted_week({"2026-03-15": _week("2026-03-15", False)}))
        self.assertIsNone(latest_week({}))

    def test_latest_month_ignores_submission_state(self) -> None:
        months = {
            "2026-01": MonthlyRecord(month="2026-01", submitted=True),
            "2026-02": MonthlyRecord(month="2026-02"),
        }
        self.assertEqual(latest_month(months).month, "2026-02")
        self.assertEqual([m.month for m in submitted_months(months)], ["2026-01"])
        self.assertIsNone(latest_month({}))


if __name__ == "__main__":
    unittest.main()
