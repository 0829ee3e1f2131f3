from __future__ import annotations

from typing import Callable, Iterable, Mapping

from domain.schemas import AppData, MonthlyRecord, WeekEntry

MonthSelector = Callable[[MonthlyRecord], float]

GOAL_SELECTORS: dict[str, MonthSelector] = {
    "emergency": lambda m: m.emergency_fund,
    "car": lambda m: m.car_fund,
    "travel": lambda m: m.travel_fund,
}


def total_for_goal(records: Iterable[MonthlyRecord], selector: MonthSelector) -> float:
    """Sum a contribution over submitted months only; months still being edited never count."""
    return float(sum(selector(m) for m in records if m.submitted))


def goal_totals(data: AppData) -> dict[str, float]:
    months = list(data.months.values())
    return {name: total_for_goal(months, selector) for name, selector in GOAL_SELECTORS.items()}


def preview_total(data: AppData, month: MonthlyRecord, selector: MonthSelector) -> float:
    """
    Running total with `month` shown as a live contribution.

    If the stored copy of `month` is already submitted it is in the aggregate
    once; it is subtracted before the live value is added back.
    """
    total = total_for_goal(data.months.values(), selector)
    stored = data.months.get(month.month)
    if stored is not None and stored.submitted:
        total -= selector(stored)
    return total + selector(month)


def _by_key_desc(records: Mapping[str, object]) -> list[str]:
    return sorted(records.keys(), reverse=True)


def latest_week(weeks: Mapping[str, WeekEntry]) -> WeekEntry | None:
    keys = _by_key_desc(weeks)
    return weeks[keys[0]] if keys else None


def latest_submitted_week(weeks: Mapping[str, WeekEntry]) -> WeekEntry | None:
    for key in _by_key_desc(weeks):
        if weeks[key].submitted:
            return weeks[key]
    return None


def submitted_weeks(weeks: Mapping[str, WeekEntry]) -> list[WeekEntry]:
    return [weeks[key] for key in _by_key_desc(weeks) if weeks[key].submitted]


def latest_month(months: Mapping[str, MonthlyRecord]) -> MonthlyRecord | None:
    keys = _by_key_desc(months)
    return months[keys[0]] if keys else None


def submitted_months(months: Mapping[str, MonthlyRecord]) -> list[MonthlyRecord]:
    return [months[key] for key in _by_key_desc(months) if months[key].submitted]
