"""DebtSummit debt payoff planning package."""

from __future__ import annotations

from .config import BaseConfig
from .models import Debt, PaymentEntry, PayoffPlan, PayoffStep, Strategy
from .services.debts import compare_strategies, plan_payoff, prioritize, simulate

__all__ = [
    "BaseConfig",
    "Debt",
    "PaymentEntry",
    "PayoffPlan",
    "PayoffStep",
    "Strategy",
    "compare_strategies",
    "plan_payoff",
    "prioritize",
    "simulate",
]
