from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Verdict(str, Enum):
    ON_TRACK = "On track"
    PARTIAL_PROGRESS = "Partial progress"
    DO_BETTER = "Do better"


class RuleStatus(str, Enum):
    MET = "MET"
    PARTIAL = "PARTIAL"
    DIDNT_MEET = "DIDN'T MEET"


class DebtBand(str, Enum):
    EXCELLENT = "Excellent"
    HEALTHY = "Healthy"
    CAUTION = "Caution"
    WARNING = "Warning"
    CRITICAL = "Critical"


class Severity(str, Enum):
    INFO = "info"
    WARN = "warn"
    DANGER = "danger"


class StatusLabel(str, Enum):
    STABLE = "STABLE"
    MONITORING = "MONITORING"
    ACTION_REQUIRED = "ACTION REQUIRED"


class DebtType(str, Enum):
    CREDIT_CARD = "Credit Card"
    MOBILE_LOAN = "Mobile Loan"
    PERSONAL_LOAN = "Personal Loan"
    CAR_LOAN = "Car Loan"
    STUDENT_LOAN = "Student Loan"
    BUSINESS_LOAN = "Business Loan"
    MORTGAGE = "Mortgage"
    OTHER = "Other"


@dataclass(frozen=True)
class Advisory:
    severity: Severity
    text: str


@dataclass(frozen=True)
class DebtHealth:
    dti: float
    band: DebtBand
    monthly_payments: float
    advisories: list[Advisory] = field(default_factory=list)


@dataclass(frozen=True)
class GoalProgress:
    name: str
    total: float
    goal: float
    percent: float
    remaining: str
    complete: bool
    milestone_percent: float | None = None


@dataclass(frozen=True)
class StatusSignal:
    label: StatusLabel
    value: float
    percent: float


@dataclass(frozen=True)
class WeekSummary:
    outcome_text: str
    training_text: str


@dataclass(frozen=True)
class BudgetStatus:
    category: str
    limit: float
    spent: float
    remaining: float
    percent: float
    over: bool
    near: bool


@dataclass(frozen=True)
class BreakdownItem:
    label: str
    value: float


@dataclass(frozen=True)
class FinanceSummary:
    month: str
    income: float
    fixed_total: float
    budget_total: float
    one_off_total: float
    debt_total: float
    savings_local: float
    savings_foreign: float
    total_out: float
    leftover: float
    budgets: list[BudgetStatus] = field(default_factory=list)
    fixed_breakdown: list[BreakdownItem] = field(default_factory=list)


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    message: str
    path: str = ""
    severity: str = "error"  # "error" | "warn"
