from __future__ import annotations

import logging
import math
from typing import Iterable

from domain.models import Advisory, DebtBand, DebtHealth, DebtType, Severity
from domain.schemas import DebtEntry, MonthlyRecord

logger = logging.getLogger(__name__)

# Upper bounds are exclusive; anything at or above the last bound is critical.
_BANDS: tuple[tuple[float, DebtBand], ...] = (
    (15, DebtBand.EXCELLENT),
    (28, DebtBand.HEALTHY),
    (36, DebtBand.CAUTION),
    (50, DebtBand.WARNING),
)

HIGH_RATE_THRESHOLD = 20
CONSOLIDATION_RATE_THRESHOLD = 15
CONSOLIDATION_MIN_DEBTS = 3


def debt_to_income(monthly_payments: float, income: float) -> float | None:
    """DTI percent, or None when there is nothing to assess."""
    if monthly_payments <= 0 or income <= 0:
        return None
    return monthly_payments / income * 100


def band_for(dti: float) -> DebtBand:
    for upper, band in _BANDS:
        if dti < upper:
            return band
    return DebtBand.CRITICAL


def _ratio_advisory(dti: float) -> Advisory:
    pct = math.floor(dti + 0.5)
    if dti >= 50:
        return Advisory(
            Severity.DANGER,
            f"CRITICAL: {pct}% of your income goes to debt payments. Stop all non-essential spending "
            "and seek debt restructuring advice from your bank immediately.",
        )
    if dti >= 36:
        return Advisory(
            Severity.WARN,
            f"WARNING: Your debt-to-income ratio ({pct}%) is in the danger zone. Lenders consider above 36% "
            "high risk. Do not take on any new debt until this is below 30%.",
        )
    if dti >= 28:
        return Advisory(
            Severity.WARN,
            f"CAUTION: Your DTI of {pct}% is elevated. Prioritise paying down high-interest debt "
            "before building savings goals further.",
        )
    return Advisory(
        Severity.INFO,
        f"Your debt-to-income ratio is {pct}%, within a healthy range. "
        "Keep up payments and avoid new consumer debt.",
    )


def build_advisories(dti: float, debts: list[DebtEntry]) -> list[Advisory]:
    """Advisories in display order: one ratio advisory, then any debt-mix advisories."""
    advisories = [_ratio_advisory(dti)]

    if any(d.type == DebtType.MOBILE_LOAN for d in debts):
        advisories.append(Advisory(
            Severity.DANGER,
            "Mobile loans (M-Shwari, Tala, Branch, etc.) carry effective annual rates of 90-180%. "
            "These are the most expensive money you can borrow. Pay these off first before everything "
            "else, even before saving.",
        ))

    high_rate = [d for d in debts if d.interest_rate > HIGH_RATE_THRESHOLD and d.type != DebtType.MOBILE_LOAN]
    if high_rate:
        names = ", ".join(d.display_name for d in high_rate)
        advisories.append(Advisory(
            Severity.DANGER,
            f'"{names}" carries interest above {HIGH_RATE_THRESHOLD}% p.a. and is bad debt. Use the Avalanche '
            "method: pay minimums on all debts, then throw every extra shilling at the highest-rate debt first.",
        ))

    if any(d.type == DebtType.CREDIT_CARD for d in debts):
        advisories.append(Advisory(
            Severity.WARN,
            "Never carry a credit card balance month to month. The compounding interest erases any rewards "
            "benefit. Always pay the full statement balance before the due date.",
        ))

    if len(debts) >= CONSOLIDATION_MIN_DEBTS and any(d.interest_rate > CONSOLIDATION_RATE_THRESHOLD for d in debts):
        advisories.append(Advisory(
            Severity.INFO,
            "With multiple debts, ask your bank about debt consolidation. A single personal loan at a lower "
            "rate can simplify payments and reduce total interest paid.",
        ))

    return advisories


def assess_debts(income: float, debts: Iterable[DebtEntry]) -> DebtHealth | None:
    debts = list(debts)
    payments = float(sum(d.monthly_payment for d in debts))
    dti = debt_to_income(payments, income)
    if dti is None:
        logger.debug("Debt health skipped payments=%.2f income=%.2f", payments, income)
        return None

    band = band_for(dti)
    advisories = build_advisories(dti, debts)
    logger.debug("Debt health dti=%.1f band=%s advisories=%d", dti, band.value, len(advisories))
    return DebtHealth(dti=dti, band=band, monthly_payments=payments, advisories=advisories)


def assess_month(month: MonthlyRecord) -> DebtHealth | None:
    return assess_debts(month.total_income, month.debts)
