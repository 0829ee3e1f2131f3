from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    field_serializer,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from domain.constants import NO_DECISION, NO_FRONTEND, NO_LEVERAGE, FrontendTag
from domain.models import (
    DebtHealth,
    DebtType,
    FinanceSummary,
    GoalProgress,
    RuleStatus,
    StatusSignal,
    ValidationIssue,
    Verdict,
)


class RecordModel(BaseModel):
    """Base for persisted records: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # Older snapshots store null for fields that were never filled in.
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class TagSelection(BaseModel):
    """
    Tags recorded for one weekly prompt.

    Either a set of real tags, an explicit "none recorded" marker, or nothing
    answered yet. Real tags and the marker never coexist.
    """

    model_config = ConfigDict(frozen=True)

    tags: tuple[str, ...] = ()
    none_recorded: bool = False

    @model_validator(mode="after")
    def validate_exclusive(self) -> "TagSelection":
        if self.none_recorded and self.tags:
            raise ValueError("none_recorded cannot be combined with real tags")
        return self

    @classmethod
    def from_list(cls, values: Any, sentinel: str) -> "TagSelection":
        if isinstance(values, str):
            values = [values] if values else []
        if not isinstance(values, (list, tuple)):
            values = []
        items = [str(v) for v in values if v]
        if sentinel in items:
            return cls(none_recorded=True)
        return cls(tags=tuple(dict.fromkeys(items)))

    def to_list(self, sentinel: str) -> list[str]:
        return [sentinel] if self.none_recorded else list(self.tags)

    @property
    def has_progress(self) -> bool:
        return bool(self.tags)


def _coerce_selection(value: Any, sentinel: str) -> Any:
    if isinstance(value, (TagSelection, dict)):
        return value
    return TagSelection.from_list(value, sentinel)


class Strategy(RecordModel):
    leverage: TagSelection = Field(default_factory=TagSelection)
    decision: TagSelection = Field(default_factory=TagSelection)
    frontend: TagSelection = Field(default_factory=TagSelection)
    energy: int = Field(default=0, ge=0, le=2, description="Training sessions this week.")

    @field_validator("leverage", mode="before")
    @classmethod
    def parse_leverage(cls, value: Any) -> Any:
        return _coerce_selection(value, NO_LEVERAGE)

    @field_validator("decision", mode="before")
    @classmethod
    def parse_decision(cls, value: Any) -> Any:
        return _coerce_selection(value, NO_DECISION)

    @field_validator("frontend", mode="before")
    @classmethod
    def parse_frontend(cls, value: Any) -> Any:
        return _coerce_selection(value, NO_FRONTEND)

    @field_serializer("leverage")
    def dump_leverage(self, value: TagSelection) -> list[str]:
        return value.to_list(NO_LEVERAGE)

    @field_serializer("decision")
    def dump_decision(self, value: TagSelection) -> list[str]:
        return value.to_list(NO_DECISION)

    @field_serializer("frontend")
    def dump_frontend(self, value: TagSelection) -> list[str]:
        return value.to_list(NO_FRONTEND)


class Recalibration(RecordModel):
    weight: Literal["Low Energy", "Friction", "Scope"]
    word: Literal["Smaller", "Rest", "Steady"]


class DayLog(RecordModel):
    date: str
    frontend_tags: List[FrontendTag] = Field(default_factory=list)


def _as_list(value: Any) -> list[Any]:
    if isinstance(value, list):
        return value
    if isinstance(value, str) and value != "":
        return [value]
    return []


class WeeklyRecord(RecordModel):
    id: str = Field(description="ISO date of the Sunday that ends the week, e.g. 2026-03-01.")
    week_ending: str = ""
    strategy: Strategy
    recalibration: Optional[Recalibration] = None
    review_notes: str = ""
    daily_logs: Dict[str, DayLog] = Field(default_factory=dict)
    submitted: bool = False


class LegacyWeeklyRecord(RecordModel):
    """Week stored before the `strategy` block existed."""

    id: str
    week_ending: str = ""
    job_progress: List[str] = Field(default_factory=list)
    decision_ownership: List[str] = Field(default_factory=list)
    frontend_output: List[str] = Field(default_factory=list)
    muay_thai_sessions: Optional[int] = None
    review_notes: str = ""
    daily_logs: Dict[str, DayLog] = Field(default_factory=dict)
    submitted: bool = False

    @field_validator("job_progress", "decision_ownership", "frontend_output", mode="before")
    @classmethod
    def sanitize_list(cls, value: Any) -> list[Any]:
        return _as_list(value)


def _week_shape(value: Any) -> str:
    if isinstance(value, dict):
        return "current" if value.get("strategy") is not None else "legacy"
    return "current" if isinstance(value, WeeklyRecord) else "legacy"


WeekEntry = Annotated[
    Union[Annotated[WeeklyRecord, Tag("current")], Annotated[LegacyWeeklyRecord, Tag("legacy")]],
    Discriminator(_week_shape),
]


class LineEntry(RecordModel):
    id: str = ""
    label: str = ""
    amount: float = 0


class FixedExpenses(RecordModel):
    rent: float = 0
    food: float = 0
    transport: float = 0
    water: float = 0
    internet: float = 0
    electricity: float = 0
    phone: float = 0
    personal: float = 0
    social: float = 0
    misc: float = 0
    house_keeping: float = 0

    @model_validator(mode="before")
    @classmethod
    def migrate_utilities(cls, data: Any) -> Any:
        # A single "utilities" figure predates the water/internet/electricity split.
        if isinstance(data, dict) and "utilities" in data and "water" not in data:
            data = dict(data)
            data["internet"] = data.pop("utilities") or 0
        return data


class BudgetEntry(RecordModel):
    id: str = ""
    category: str = ""
    limit: float = 0
    items: List[LineEntry] = Field(default_factory=list)

    @property
    def spent(self) -> float:
        return float(sum(item.amount for item in self.items))


class DebtEntry(RecordModel):
    id: str = ""
    label: str = ""
    type: DebtType = DebtType.PERSONAL_LOAN
    balance: float = 0
    monthly_payment: float = 0
    interest_rate: float = Field(default=0, description="Annual interest rate, percent.")

    @property
    def display_name(self) -> str:
        return self.label or self.type.value


class MonthlyRecord(RecordModel):
    month: str = Field(description="Calendar month key, YYYY-MM.")
    emergency_fund: float = 0
    travel_fund: float = 0
    car_fund: float = 0
    submitted: bool = False
    submitted_at: Optional[datetime] = Field(default=None, alias="submittedDate")
    income: float = 0
    extra_income: List[LineEntry] = Field(default_factory=list)
    expenses: FixedExpenses = Field(default_factory=FixedExpenses)
    budgets: List[BudgetEntry] = Field(default_factory=list)
    one_offs: List[LineEntry] = Field(default_factory=list)
    debts: List[DebtEntry] = Field(default_factory=list)

    @property
    def total_income(self) -> float:
        return float(self.income + sum(entry.amount for entry in self.extra_income))

    @property
    def debt_payments(self) -> float:
        return float(sum(debt.monthly_payment for debt in self.debts))


class AppData(BaseModel):
    weeks: Dict[str, WeekEntry] = Field(default_factory=dict)
    months: Dict[str, MonthlyRecord] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def default_collections(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {"weeks": data.get("weeks") or {}, "months": data.get("months") or {}}
        return data


class WeekOverview(BaseModel):
    id: str
    submitted: bool
    verdict: Verdict
    leverage: StatusSignal
    health: StatusSignal


class WeekHistoryRow(BaseModel):
    id: str
    verdict: Verdict
    outcome_text: str
    training_text: str


class MonthHistoryRow(BaseModel):
    month: str
    emergency_fund: float
    travel_fund: float
    submitted_at: Optional[datetime] = None
    status: RuleStatus


class DashboardSnapshot(BaseModel):
    generated_on: date
    goals: List[GoalProgress] = Field(default_factory=list)
    lifestyle_locked: bool
    wealth: StatusSignal
    current_week: Optional[WeekOverview] = None
    week_history: List[WeekHistoryRow] = Field(default_factory=list)
    month_history: List[MonthHistoryRow] = Field(default_factory=list)
    current_month: str
    month_goals: List[GoalProgress] = Field(default_factory=list)
    finance: FinanceSummary
    debt_health: Optional[DebtHealth] = None
    issues: List[ValidationIssue] = Field(default_factory=list)
