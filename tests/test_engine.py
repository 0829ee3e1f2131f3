from __future__ import annotations

import unittest
from datetime import date, datetime, timezone

from application.engine import WeeklyReviewEngine
from application.validator import IntegrityValidator
from domain.constants import GOAL_REACHED, NO_ESTIMATE
from domain.models import DebtBand, RuleStatus, StatusLabel, Verdict
from domain.schemas import AppData


def _sample_data() -> AppData:
    return AppData.model_validate({
        "weeks": {
            "2026-02-22": {
                "id": "2026-02-22",
                "weekEnding": "Sun Feb 22 2026",
                "jobProgress": ["Applied"],
                "decisionOwnership": ["No decision ownership"],
                "frontendOutput": [],
                "muayThaiSessions": 1,
                "submitted": True,
            },
            "2026-03-01": {
                "id": "2026-03-01",
                "strategy": {
                    "leverage": ["Job application sent"],
                    "decision": ["Made call"],
                    "frontend": ["Shipped feature"],
                    "energy": 2,
                },
                "submitted": True,
            },
            "2026-03-08": {
                "id": "2026-03-08",
                "strategy": {"leverage": ["No progress this week"], "energy": 1},
            },
        },
        "months": {
            "2026-01": {
                "month": "2026-01",
                "emergencyFund": 150_000,
                "carFund": 20_000,
                "travelFund": 300,
                "submitted": True,
                "submittedDate": "2026-01-31T18:00:00Z",
            },
            "2026-02": {
                "month": "2026-02",
                "emergencyFund": 100_000,
                "carFund": 10_000,
                "travelFund": 250,
                "submitted": True,
                "submittedDate": "2026-02-28T18:00:00Z",
            },
            "2026-03": {
                "month": "2026-03",
                "emergencyFund": 50_000,
                "travelFund": 0,
                "income": 200_000,
                "debts": [{"label": "Tala", "type": "Mobile Loan", "monthlyPayment": 80_000, "interestRate": 30}],
            },
        },
    })


class WeeklyReviewEngineTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = WeeklyReviewEngine(validator=IntegrityValidator())

    def test_engine_returns_dashboard_snapshot(self) -> None:
        snapshot = self.engine.run(_sample_data(), date(2026, 3, 4))

        self.assertEqual(snapshot.generated_on, date(2026, 3, 4))
        self.assertEqual([g.name for g in snapshot.goals], ["emergency", "car", "travel"])

        emergency, car, travel = snapshot.goals
        # The unsubmitted March contribution is not counted yet.
        self.assertEqual(emergency.total, 250_000)
        self.assertEqual(emergency.remaining, "22 months")
        self.assertIsNotNone(emergency.milestone_percent)
        self.assertEqual(car.total, 30_000)
        self.assertEqual(car.remaining, NO_ESTIMATE)
        self.assertEqual(travel.total, 550)
        self.assertTrue(snapshot.lifestyle_locked)
        self.assertEqual(snapshot.wealth.label, StatusLabel.STABLE)

        self.assertIsNotNone(snapshot.current_week)
        self.assertEqual(snapshot.current_week.id, "2026-03-08")
        self.assertEqual(snapshot.current_week.verdict, Verdict.DO_BETTER)
        self.assertEqual(snapshot.current_week.health.label, StatusLabel.MONITORING)

        self.assertEqual([row.id for row in snapshot.week_history], ["2026-03-01", "2026-02-22"])
        self.assertEqual(snapshot.week_history[0].verdict, Verdict.ON_TRACK)
        self.assertEqual(snapshot.week_history[0].outcome_text, "Job application sent")
        self.assertEqual(snapshot.week_history[0].training_text, "training met")
        self.assertEqual(snapshot.week_history[1].verdict, Verdict.ON_TRACK)
        self.assertEqual(snapshot.week_history[1].outcome_text, "No key outcomes")

        self.assertEqual([row.month for row in snapshot.month_history], ["2026-02", "2026-01"])
        self.assertEqual(snapshot.month_history[0].status, RuleStatus.MET)

        self.assertEqual(snapshot.current_month, "2026-03")
        self.assertEqual(snapshot.finance.income, 200_000)
        self.assertIsNotNone(snapshot.debt_health)
        self.assertEqual(snapshot.debt_health.band, DebtBand.WARNING)
        self.assertEqual(snapshot.issues, [])

    def test_month_goals_count_the_edited_month_live(self) -> None:
        snapshot = self.engine.run(_sample_data(), date(2026, 3, 4))
        emergency, car, travel = snapshot.month_goals

        self.assertEqual([g.name for g in snapshot.month_goals], ["emergency", "car", "travel"])
        self.assertEqual(emergency.total, 300_000)
        self.assertEqual(emergency.remaining, "21 months")
        self.assertAlmostEqual(emergency.milestone_percent, 400_000 / 1_350_000 * 100)
        self.assertEqual(car.total, 30_000)
        self.assertEqual(car.remaining, NO_ESTIMATE)
        self.assertAlmostEqual(car.milestone_percent, 1_000_000 / 1_500_000 * 100)
        self.assertEqual(travel.total, 550)
        self.assertIsNone(travel.milestone_percent)

    def test_month_goals_do_not_double_count_a_submitted_month(self) -> None:
        data = AppData.model_validate({
            "months": {
                "2026-01": {
                    "month": "2026-01",
                    "emergencyFund": 100_000,
                    "submitted": True,
                    "submittedDate": "2026-01-31T18:00:00Z",
                },
            },
        })
        snapshot = self.engine.run(data, date(2026, 1, 15))

        self.assertEqual(snapshot.goals[0].total, 100_000)
        self.assertEqual(snapshot.month_goals[0].total, 100_000)
        self.assertEqual(snapshot.month_goals[0].remaining, "13 months")

    def test_engine_on_empty_data(self) -> None:
        snapshot = self.engine.run(AppData(), date(2026, 3, 4))

        self.assertEqual([g.total for g in snapshot.goals], [0, 0, 0])
        self.assertTrue(all(g.remaining == NO_ESTIMATE for g in snapshot.goals))
        self.assertIsNone(snapshot.current_week)
        self.assertEqual(snapshot.week_history, [])
        self.assertEqual(snapshot.month_history, [])
        self.assertIsNone(snapshot.debt_health)
        self.assertEqual(snapshot.wealth.label, StatusLabel.ACTION_REQUIRED)

    def test_goal_reached_once_total_covers_goal(self) -> None:
        data = AppData.model_validate({
            "months": {
                "2026-01": {
                    "month": "2026-01",
                    "travelFund": 2_000,
                    "submitted": True,
                    "submittedDate": datetime(2026, 1, 31, tzinfo=timezone.utc).isoformat(),
                },
            },
        })
        snapshot = self.engine.run(data, date(2026, 1, 15))
        travel = snapshot.goals[2]

        self.assertTrue(travel.complete)
        self.assertEqual(travel.percent, 100)
        self.assertEqual(travel.remaining, GOAL_REACHED)

    def test_validation_issues_are_reported(self) -> None:
        data = AppData.model_validate({
            "months": {"2026-03": {"month": "2026-04", "emergencyFund": -1}},
        })
        snapshot = self.engine.run(data, date(2026, 3, 4))

        self.assertEqual(
            sorted(issue.code for issue in snapshot.issues),
            ["MONTH_KEY_MISMATCH", "NEGATIVE_AMOUNT"],
        )


if __name__ == "__main__":
    unittest.main()
