from __future__ import annotations

import unittest

from application.normalization import is_legacy, upgrade_week
from domain.schemas import LegacyWeeklyRecord, Strategy, WeeklyRecord


class UpgradeWeekTests(unittest.TestCase):
    def test_current_week_passes_through(self) -> None:
        week = WeeklyRecord(id="2026-03-08", strategy=Strategy(energy=1))
        self.assertIs(upgrade_week(week), week)
        self.assertFalse(is_legacy(week))

    def test_legacy_answers_move_into_strategy(self) -> None:
        legacy = LegacyWeeklyRecord(
            id="2025-06-01",
            week_ending="Sun Jun 01 2025",
            job_progress=["Applied", "Applied"],
            decision_ownership=["No decision ownership"],
            frontend_output=[],
            muay_thai_sessions=5,
            review_notes="busy week",
            submitted=True,
        )
        week = upgrade_week(legacy)

        self.assertTrue(is_legacy(legacy))
        self.assertEqual(week.id, "2025-06-01")
        self.assertEqual(week.strategy.leverage.tags, ("Applied",))
        self.assertTrue(week.strategy.decision.none_recorded)
        self.assertFalse(week.strategy.frontend.has_progress)
        self.assertEqual(week.strategy.energy, 2)
        self.assertEqual(week.review_notes, "busy week")
        self.assertTrue(week.submitted)

    def test_missing_sessions_mean_no_training(self) -> None:
        week = upgrade_week(LegacyWeeklyRecord(id="2025-06-01"))
        self.assertEqual(week.strategy.energy, 0)


if __name__ == "__main__":
    unittest.main()
