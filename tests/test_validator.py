from __future__ import annotations

import unittest
from datetime import datetime, timezone

from application.validator import IntegrityValidator
from domain.schemas import AppData, DebtEntry, MonthlyRecord, Strategy, WeeklyRecord


class IntegrityValidatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.validator = IntegrityValidator()

    def test_clean_snapshot_has_no_issues(self) -> None:
        data = AppData(
            weeks={"2026-03-08": WeeklyRecord(id="2026-03-08", strategy=Strategy())},
            months={
                "2026-03": MonthlyRecord(
                    month="2026-03",
                    submitted=True,
                    submitted_at=datetime(2026, 3, 31, tzinfo=timezone.utc),
                ),
            },
        )
        self.assertEqual(self.validator.validate(data), [])

    def test_week_key_problems(self) -> None:
        data = AppData(weeks={
            "2026-03-09": WeeklyRecord(id="2026-03-09", strategy=Strategy()),
            "week-1": WeeklyRecord(id="week-1", strategy=Strategy()),
            "2026-03-15": WeeklyRecord(id="2026-03-08", strategy=Strategy()),
        })
        codes = {issue.code for issue in self.validator.validate(data)}

        self.assertEqual(codes, {"WEEK_KEY_NOT_SUNDAY", "WEEK_KEY_FORMAT", "WEEK_KEY_MISMATCH"})

    def test_month_problems(self) -> None:
        data = AppData(months={
            "2026-13": MonthlyRecord(month="2026-13"),
            "2026-04": MonthlyRecord(month="2026-05", submitted=True),
        })
        codes = [issue.code for issue in self.validator.validate(data)]

        self.assertIn("MONTH_KEY_FORMAT", codes)
        self.assertIn("MONTH_KEY_MISMATCH", codes)
        self.assertIn("SUBMITTED_WITHOUT_TIMESTAMP", codes)

    def test_negative_amounts_are_warnings(self) -> None:
        data = AppData(months={
            "2026-03": MonthlyRecord(
                month="2026-03",
                emergency_fund=-5_000,
                debts=[DebtEntry(label="Loan", monthly_payment=-100)],
            ),
        })
        issues = self.validator.validate(data)

        self.assertEqual([i.code for i in issues], ["NEGATIVE_AMOUNT", "NEGATIVE_AMOUNT"])
        self.assertTrue(all(i.severity == "warn" for i in issues))
        self.assertEqual(issues[0].path, "months[2026-03].emergencyFund")
        self.assertEqual(issues[1].path, "months[2026-03].debts[0].monthlyPayment")


if __name__ == "__main__":
    unittest.main()
