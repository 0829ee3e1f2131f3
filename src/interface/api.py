from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable

from fastapi import Depends, FastAPI, HTTPException

from application.debt_health import assess_month
from application.engine import WeeklyReviewEngine
from application.monthly_rules import evaluate_month
from application.normalization import upgrade_week
from application.periods import (
    RecordLockedError,
    current_month,
    current_week,
    get_month,
    month_key,
    put_month,
    put_week,
    submit_month,
    submit_week,
)
from application.verdict import classify_week
from domain.schemas import AppData, DashboardSnapshot, MonthlyRecord, WeeklyRecord
from infrastructure.persistence.store import Store, StoreError
from interface.cli import build_engine, build_store

logger = logging.getLogger(__name__)

app = FastAPI(title="Weekly Review API")

_store: Store | None = None
_engine: WeeklyReviewEngine | None = None


def get_store() -> Store:
    global _store
    if _store is None:
        _store = build_store()
    return _store


def get_engine() -> WeeklyReviewEngine:
    global _engine
    if _engine is None:
        _engine = build_engine()
    return _engine


def get_today() -> date:
    return date.today()


def _dump(record: WeeklyRecord | MonthlyRecord) -> dict[str, Any]:
    return record.model_dump(mode="json", by_alias=True)


def _persist(store: Store, change: Callable[[AppData], AppData]) -> AppData:
    data = store.load()
    try:
        updated = change(data)
    except RecordLockedError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    try:
        store.save(updated)
    except StoreError as exc:
        logger.exception("Store save failed")
        raise HTTPException(status_code=503, detail=str(exc)) from exc
    return updated


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/dashboard", response_model=DashboardSnapshot)
def dashboard(
    store: Store = Depends(get_store),
    engine: WeeklyReviewEngine = Depends(get_engine),
    today: date = Depends(get_today),
) -> DashboardSnapshot:
    return engine.run(store.load(), today)


@app.get("/weeks/current")
def get_current_week(store: Store = Depends(get_store), today: date = Depends(get_today)) -> dict:
    week = current_week(store.load(), today)
    return {"week": _dump(week), "verdict": classify_week(week).value}


@app.put("/weeks/{week_id}")
def update_week(week_id: str, week: WeeklyRecord, store: Store = Depends(get_store)) -> dict:
    if week.id != week_id:
        raise HTTPException(status_code=400, detail=f"Body id {week.id!r} does not match path {week_id!r}")
    _persist(store, lambda data: put_week(data, week))
    return {"week": _dump(week), "verdict": classify_week(week).value}


@app.post("/weeks/{week_id}/submit")
def submit_week_endpoint(
    week_id: str,
    store: Store = Depends(get_store),
    today: date = Depends(get_today),
) -> dict:
    stored = store.load().weeks.get(week_id)
    if stored is None:
        raise HTTPException(status_code=404, detail=f"Week {week_id} not found")
    updated = _persist(store, lambda data: submit_week(data, upgrade_week(stored)))
    return {
        "week_id": week_id,
        "verdict": classify_week(updated.weeks[week_id]).value,
        "next_week_id": current_week(updated, today).id,
    }


@app.get("/months/current")
def get_current_month(store: Store = Depends(get_store), today: date = Depends(get_today)) -> dict:
    return {"month": _dump(current_month(store.load(), today))}


@app.get("/months/{month_id}")
def get_month_endpoint(month_id: str, store: Store = Depends(get_store)) -> dict:
    return {"month": _dump(get_month(store.load(), month_id))}


@app.put("/months/{month_id}")
def update_month(month_id: str, month: MonthlyRecord, store: Store = Depends(get_store)) -> dict:
    if month.month != month_id:
        raise HTTPException(status_code=400, detail=f"Body month {month.month!r} does not match path {month_id!r}")
    _persist(store, lambda data: put_month(data, month))
    return {"month": _dump(month)}


@app.post("/months/{month_id}/submit")
def submit_month_endpoint(month_id: str, store: Store = Depends(get_store)) -> dict:
    stored = store.load().months.get(month_id)
    if stored is None:
        raise HTTPException(status_code=404, detail=f"Month {month_id} not found")
    updated = _persist(store, lambda data: submit_month(data, stored))
    submitted = updated.months[month_id]
    year, mon = (int(part) for part in month_id.split("-"))
    next_month = month_key(date(year + mon // 12, mon % 12 + 1, 1))
    return {
        "month": _dump(submitted),
        "status": evaluate_month(submitted).value,
        "next_month_id": next_month,
    }


@app.post("/debt-health")
def debt_health(month: MonthlyRecord) -> dict:
    return {"month": month.month, "debt_health": assess_month(month)}
