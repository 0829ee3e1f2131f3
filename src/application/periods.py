from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone

from application.normalization import upgrade_week
from domain.schemas import AppData, MonthlyRecord, Strategy, WeeklyRecord

logger = logging.getLogger(__name__)


class RecordLockedError(ValueError):
    """Raised when a submitted week or month would be overwritten."""


def week_key(day: date) -> str:
    """ISO date of the Sunday ending the week that contains `day`."""
    sunday = day + timedelta(days=6 - day.weekday())
    return sunday.isoformat()


def month_key(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"


def new_week(key: str) -> WeeklyRecord:
    sunday = date.fromisoformat(key)
    return WeeklyRecord(
        id=key,
        week_ending=sunday.strftime("%a %b %d %Y"),
        strategy=Strategy(),
    )


def new_month(key: str) -> MonthlyRecord:
    return MonthlyRecord(month=key)


def current_week(data: AppData, today: date) -> WeeklyRecord:
    """
    The week the user should be filling in.

    Starts at the week containing `today` and moves forward past weeks that are
    already submitted. An existing week is upgraded to the current shape; a
    missing one is created empty (but not stored).
    """
    day = today
    while True:
        key = week_key(day)
        existing = data.weeks.get(key)
        if existing is None:
            return new_week(key)
        if not existing.submitted:
            return upgrade_week(existing)
        day += timedelta(days=7)


def current_month(data: AppData, today: date) -> MonthlyRecord:
    return get_month(data, month_key(today))


def get_month(data: AppData, key: str) -> MonthlyRecord:
    existing = data.months.get(key)
    return existing if existing is not None else new_month(key)


def put_week(data: AppData, week: WeeklyRecord) -> AppData:
    stored = data.weeks.get(week.id)
    if stored is not None and stored.submitted:
        raise RecordLockedError(f"Week {week.id} is already submitted")
    return data.model_copy(update={"weeks": {**data.weeks, week.id: week}})


def put_month(data: AppData, month: MonthlyRecord) -> AppData:
    stored = data.months.get(month.month)
    if stored is not None and stored.submitted:
        raise RecordLockedError(f"Month {month.month} is already submitted")
    return data.model_copy(update={"months": {**data.months, month.month: month}})


def submit_week(data: AppData, week: WeeklyRecord) -> AppData:
    updated = put_week(data, week.model_copy(update={"submitted": True}))
    logger.info("Week submitted id=%s", week.id)
    return updated


def submit_month(data: AppData, month: MonthlyRecord, now: datetime | None = None) -> AppData:
    stamp = now or datetime.now(timezone.utc)
    updated = put_month(data, month.model_copy(update={"submitted": True, "submitted_at": stamp}))
    logger.info("Month submitted month=%s", month.month)
    return updated
