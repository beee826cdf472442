"""Payoff schedule value objects."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from .debt import Strategy


@dataclass(frozen=True, slots=True)
class PaymentEntry:
    """One allocation inside a simulated month."""

    debt_id: str
    debt_name: str
    amount: float
    is_extra: bool = False


@dataclass(frozen=True, slots=True)
class PayoffStep:
    """A single simulated month of the payoff schedule.

    ``total_paid`` and ``total_interest`` are cumulative from month 1.
    ``balances`` maps each debt id to its end-of-month balance.
    """

    month: int
    date: str
    remaining_balance: float
    total_paid: float
    total_interest: float
    payments: tuple[PaymentEntry, ...] = ()
    balances: Mapping[str, float] = field(default_factory=dict, hash=False)

    def balance_for(self, debt_id: str) -> float:
        return self.balances.get(debt_id, 0.0)


@dataclass(frozen=True, slots=True)
class PayoffPlan:
    """Schedule plus summary metrics for one strategy run."""

    strategy: Strategy
    steps: tuple[PayoffStep, ...]
    total_paid: float
    total_interest: float
    minimum_only_interest: float
    interest_avoided: float
    final_balance: float
    paid_off: bool

    @property
    def months(self) -> int:
        return self.steps[-1].month if self.steps else 0

    @property
    def payoff_date(self) -> Optional[str]:
        """Date label of the final step, or None for an empty schedule."""

        return self.steps[-1].date if self.steps else None
