from __future__ import annotations

import re
from datetime import date

from domain.models import ValidationIssue
from domain.schemas import AppData, MonthlyRecord


class IntegrityValidator:
    """
    Deterministic checks over an AppData snapshot.

    Nothing here is fatal; issues are reported alongside the derived values:
      - Week keys are ISO Sundays and match the record id
      - Month keys are YYYY-MM and match the record month
      - Amounts are non-negative (reported, never rejected)
      - Submitted months carry a submission timestamp
    """

    _MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

    def validate(self, data: AppData) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []

        for key, week in data.weeks.items():
            path = f"weeks[{key}]"
            if week.id != key:
                issues.append(ValidationIssue(
                    code="WEEK_KEY_MISMATCH",
                    message=f"Week stored under {key!r} has id {week.id!r}",
                    path=f"{path}.id",
                ))
            try:
                sunday = date.fromisoformat(key)
            except ValueError:
                issues.append(ValidationIssue(
                    code="WEEK_KEY_FORMAT",
                    message=f"Week key {key!r} is not an ISO date",
                    path=path,
                ))
                continue
            if sunday.weekday() != 6:
                issues.append(ValidationIssue(
                    code="WEEK_KEY_NOT_SUNDAY",
                    message=f"Week key {key!r} is a {sunday.strftime('%A')}, expected a Sunday",
                    path=path,
                    severity="warn",
                ))

        for key, month in data.months.items():
            path = f"months[{key}]"
            if not self._MONTH_RE.match(key):
                issues.append(ValidationIssue(
                    code="MONTH_KEY_FORMAT",
                    message=f"Month key {key!r} is not YYYY-MM",
                    path=path,
                ))
            if month.month != key:
                issues.append(ValidationIssue(
                    code="MONTH_KEY_MISMATCH",
                    message=f"Month stored under {key!r} has month {month.month!r}",
                    path=f"{path}.month",
                ))
            if month.submitted and month.submitted_at is None:
                issues.append(ValidationIssue(
                    code="SUBMITTED_WITHOUT_TIMESTAMP",
                    message=f"Month {key} is submitted but has no submission date",
                    path=f"{path}.submittedDate",
                    severity="warn",
                ))
            issues.extend(self._negative_amounts(month, path))

        return issues

    def _negative_amounts(self, month: MonthlyRecord, path: str) -> list[ValidationIssue]:
        amounts: list[tuple[str, float]] = [
            ("emergencyFund", month.emergency_fund),
            ("carFund", month.car_fund),
            ("travelFund", month.travel_fund),
            ("income", month.income),
        ]
        amounts.extend((f"expenses.{name}", value) for name, value in month.expenses.model_dump(by_alias=True).items())
        amounts.extend((f"extraIncome[{i}].amount", e.amount) for i, e in enumerate(month.extra_income))
        amounts.extend((f"oneOffs[{i}].amount", o.amount) for i, o in enumerate(month.one_offs))
        for i, budget in enumerate(month.budgets):
            amounts.append((f"budgets[{i}].limit", budget.limit))
            amounts.extend((f"budgets[{i}].items[{j}].amount", it.amount) for j, it in enumerate(budget.items))
        for i, debt in enumerate(month.debts):
            amounts.append((f"debts[{i}].balance", debt.balance))
            amounts.append((f"debts[{i}].monthlyPayment", debt.monthly_payment))
            amounts.append((f"debts[{i}].interestRate", debt.interest_rate))

        return [
            ValidationIssue(
                code="NEGATIVE_AMOUNT",
                message=f"Negative amount {value} at {field}",
                path=f"{path}.{field}",
                severity="warn",
            )
            for field, value in amounts
            if value < 0
        ]
