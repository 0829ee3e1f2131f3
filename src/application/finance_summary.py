from __future__ import annotations

from domain.constants import BUDGET_NEAR_LIMIT_PERCENT, LOCAL_PER_FOREIGN
from domain.models import BreakdownItem, BudgetStatus, FinanceSummary
from domain.schemas import BudgetEntry, MonthlyRecord

# Variable categories are tracked as flexible budgets, not here.
FIXED_FIELDS: tuple[tuple[str, str], ...] = (
    ("rent", "Rent"),
    ("house_keeping", "House Keeping"),
    ("water", "Water"),
    ("internet", "Internet"),
    ("electricity", "Electricity"),
    ("phone", "Phone & Subs"),
)


def budget_status(entry: BudgetEntry) -> BudgetStatus:
    spent = entry.spent
    has_limit = entry.limit > 0
    percent = min(spent / entry.limit * 100, 100) if has_limit else 0.0
    over = has_limit and spent > entry.limit
    return BudgetStatus(
        category=entry.category,
        limit=entry.limit,
        spent=spent,
        remaining=entry.limit - spent if has_limit else 0.0,
        percent=percent,
        over=over,
        near=has_limit and not over and percent >= BUDGET_NEAR_LIMIT_PERCENT,
    )


def fixed_breakdown(month: MonthlyRecord) -> list[BreakdownItem]:
    items = [BreakdownItem(label, getattr(month.expenses, name)) for name, label in FIXED_FIELDS]
    items.extend(BreakdownItem(d.display_name, d.monthly_payment) for d in month.debts if d.monthly_payment > 0)
    return sorted((i for i in items if i.value > 0), key=lambda i: i.value, reverse=True)


def summarize_month(month: MonthlyRecord) -> FinanceSummary:
    income = month.total_income
    fixed_total = float(sum(getattr(month.expenses, name) for name, _ in FIXED_FIELDS))
    budget_total = float(sum(b.spent for b in month.budgets))
    one_off_total = float(sum(o.amount for o in month.one_offs))
    debt_total = month.debt_payments
    savings_local = month.emergency_fund + month.car_fund
    savings_foreign = month.travel_fund
    total_out = (
        fixed_total + budget_total + one_off_total + debt_total + savings_local + savings_foreign * LOCAL_PER_FOREIGN
    )
    return FinanceSummary(
        month=month.month,
        income=income,
        fixed_total=fixed_total,
        budget_total=budget_total,
        one_off_total=one_off_total,
        debt_total=debt_total,
        savings_local=savings_local,
        savings_foreign=savings_foreign,
        total_out=total_out,
        leftover=income - total_out,
        budgets=[budget_status(b) for b in month.budgets],
        fixed_breakdown=fixed_breakdown(month),
    )
