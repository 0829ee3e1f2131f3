from __future__ import annotations

from domain.constants import MONTHLY_EMERGENCY_MINIMUM, MONTHLY_TRAVEL_MINIMUM
from domain.models import RuleStatus
from domain.schemas import MonthlyRecord


def evaluate_month(month: MonthlyRecord) -> RuleStatus:
    """Check one month's contributions against the fixed per-month savings minimums."""
    emergency_met = month.emergency_fund >= MONTHLY_EMERGENCY_MINIMUM
    travel_met = month.travel_fund >= MONTHLY_TRAVEL_MINIMUM
    if emergency_met and travel_met:
        return RuleStatus.MET
    if emergency_met or travel_met:
        return RuleStatus.PARTIAL
    return RuleStatus.DIDNT_MEET
