"""Domain model exports."""

from .debt import Debt, Strategy, new_debt_id
from .schedule import PaymentEntry, PayoffPlan, PayoffStep

__all__ = [
    "Debt",
    "Strategy",
    "new_debt_id",
    "PaymentEntry",
    "PayoffStep",
    "PayoffPlan",
]
