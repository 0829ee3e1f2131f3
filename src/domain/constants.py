from __future__ import annotations

from typing import Literal

LEVERAGE_OPTIONS = (
    "Job application sent",
    "Portfolio updated",
    "Case study updated",
    "Recruiter outreach",
    "Interview prep",
    "Interview completed",
    "Offer discussion",
    "No progress this week",
)

DECISION_OPTIONS = (
    "Led product decision",
    "Turned feedback into decision",
    "Documented trade-offs",
    "Aligned stakeholders",
    "Observed but did not lead",
    "No decision ownership",
)

FRONTEND_OPTIONS = (
    "Coded new feature",
    "Improved existing code",
    "Refactored code",
    "Practiced basics",
    "Debugged issues",
    "No frontend work",
)

FrontendTag = Literal[
    "Coded new feature",
    "Refactored code",
    "Practiced basics",
    "Tutorial",
    "Other",
]

# The last option of each list is its "none" sentinel.
NO_LEVERAGE = LEVERAGE_OPTIONS[-1]
NO_DECISION = DECISION_OPTIONS[-1]
NO_FRONTEND = FRONTEND_OPTIONS[-1]

# Goals: emergency and car in local currency (KES), travel in foreign currency (USD).
EMERGENCY_GOAL = 1_350_000
CAR_GOAL = 1_500_000
TRAVEL_GOAL = 1_500
LIFESTYLE_LOCK_THRESHOLD = 400_000
CAR_MILESTONE = 1_000_000
LOCAL_PER_FOREIGN = 130

# Per-month minimum contributions.
MONTHLY_EMERGENCY_MINIMUM = 50_000
MONTHLY_TRAVEL_MINIMUM = 250

TRAINING_TARGET = 2
WEEKLY_ACTION_TARGET = 4

BUDGET_NEAR_LIMIT_PERCENT = 80

NO_ESTIMATE = "—"
GOAL_REACHED = "Goal reached ✓"
