"""Debt payoff calculators.

Month-by-month simulation of snowball and avalanche repayment. Every public
function is pure: inputs are copied before the simulation touches them, and
each call builds its schedule from scratch.
"""

from __future__ import annotations

import calendar
import copy
import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Iterable, Optional

from ..models import Debt, PaymentEntry, PayoffPlan, PayoffStep, Strategy

logger = logging.getLogger(__name__)

MAX_MONTHS = 360  # 30 years
BASELINE_MAX_MONTHS = 600
BALANCE_EPSILON = 0.01

SortKey = Callable[[Debt], float]


def _by_balance(debt: Debt) -> float:
    return debt.balance


def _by_rate_descending(debt: Debt) -> float:
    return -debt.interest_rate


_SORT_KEYS: dict[Strategy, SortKey] = {
    Strategy.SNOWBALL: _by_balance,
    Strategy.AVALANCHE: _by_rate_descending,
}


def strategy_sort_key(strategy: Strategy | str) -> SortKey:
    """Return the sort key implementing ``strategy``'s priority order."""

    return _SORT_KEYS[Strategy.parse(strategy)]


def prioritize(debts: Iterable[Debt], strategy: Strategy | str) -> list[Debt]:
    """Return debts in payoff priority order at their current balances.

    ``sorted`` is stable, so ties keep the caller's input order.
    """

    return sorted(debts, key=strategy_sort_key(strategy))


def focus_debt(
    debts: Iterable[Debt], strategy: Strategy | str, *, epsilon: float = BALANCE_EPSILON
) -> Optional[Debt]:
    """Return the active debt that receives extra payments, if any."""

    active = [debt for debt in debts if debt.balance > epsilon]
    if not active:
        return None
    return prioritize(active, strategy)[0]


def month_label(start: date, offset: int) -> str:
    """Return the short ``"Mon YY"`` label ``offset`` months after ``start``."""

    month_index = start.month - 1 + offset
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    return f"{calendar.month_abbr[month]} {year % 100:02d}"


def _working_copy(debts: Iterable[Debt], epsilon: float) -> list[Debt]:
    working = copy.deepcopy(list(debts))
    for debt in working:
        # Sub-cent residue counts as settled.
        if debt.balance <= epsilon:
            debt.balance = 0.0
    return working


def _aggregate_balance(debts: Iterable[Debt]) -> float:
    return max(0.0, sum(debt.balance for debt in debts))


def _accrue_and_pay_minimums(debts: list[Debt]) -> tuple[float, float, list[PaymentEntry]]:
    """Apply one month of interest and minimum payments in place.

    Returns ``(interest_accrued, amount_paid, payment_entries)``.
    """

    interest_total = 0.0
    paid_total = 0.0
    entries: list[PaymentEntry] = []
    for debt in debts:
        if debt.balance <= 0:
            continue

        interest = debt.balance * debt.monthly_rate
        debt.balance += interest
        interest_total += interest

        payment = min(debt.balance, debt.minimum_payment)
        debt.balance -= payment
        paid_total += payment
        if payment > 0:
            entries.append(PaymentEntry(debt_id=debt.id, debt_name=debt.name, amount=payment))
    return interest_total, paid_total, entries


def _apply_extra_payment(focus: Debt, additional: float, entries: list[PaymentEntry]) -> float:
    """Pay ``additional`` toward ``focus`` and fold it into this month's entries."""

    payment = min(focus.balance, max(additional, 0.0))
    if payment <= 0:
        return 0.0

    focus.balance -= payment
    for index, entry in enumerate(entries):
        if entry.debt_id == focus.id:
            entries[index] = replace(entry, amount=entry.amount + payment, is_extra=True)
            break
    else:
        entries.append(
            PaymentEntry(debt_id=focus.id, debt_name=focus.name, amount=payment, is_extra=True)
        )
    return payment


def simulate(
    debts: Iterable[Debt],
    strategy: Strategy | str,
    extra_payment: float,
    windfall: float = 0.0,
    max_months: int = MAX_MONTHS,
    epsilon: float = BALANCE_EPSILON,
    *,
    start: date | None = None,
) -> list[PayoffStep]:
    """Project a month-by-month payoff schedule.

    Each month every open debt accrues interest and receives its minimum
    payment; ``extra_payment`` (plus ``windfall`` in month 1) then goes to the
    strategy's focus debt. The schedule ends with the first month whose
    aggregate balance is at or below ``epsilon``, or after ``max_months``
    months. A final ``remaining_balance`` above ``epsilon`` means the debts
    were not paid off within the cap.
    """

    strategy = Strategy.parse(strategy)
    working = _working_copy(debts, epsilon)
    if not working or _aggregate_balance(working) <= epsilon:
        return []

    start = start or date.today()
    steps: list[PayoffStep] = []
    total_paid = 0.0
    total_interest = 0.0
    month = 0

    while month < max_months:
        month += 1

        interest, paid, entries = _accrue_and_pay_minimums(working)
        total_paid += paid

        focus = focus_debt(working, strategy, epsilon=epsilon)
        if focus is not None:
            additional = extra_payment + (windfall if month == 1 else 0.0)
            total_paid += _apply_extra_payment(focus, additional, entries)

        total_interest += interest
        remaining = _aggregate_balance(working)
        steps.append(
            PayoffStep(
                month=month,
                date=month_label(start, month),
                remaining_balance=remaining,
                total_paid=total_paid,
                total_interest=total_interest,
                payments=tuple(entries),
                balances={debt.id: max(0.0, debt.balance) for debt in working},
            )
        )
        if remaining <= epsilon:
            break

    if steps and steps[-1].remaining_balance > epsilon:
        logger.warning(
            "Payoff not reached within month cap",
            extra={
                "strategy": strategy.value,
                "max_months": max_months,
                "remaining_balance": round(steps[-1].remaining_balance, 2),
            },
        )
    return steps


def minimum_only_interest(
    debts: Iterable[Debt],
    max_months: int = BASELINE_MAX_MONTHS,
    epsilon: float = BALANCE_EPSILON,
) -> float:
    """Total interest paid when only minimum payments are ever made."""

    working = _working_copy(debts, epsilon)
    total_interest = 0.0
    month = 0
    while month < max_months and _aggregate_balance(working) > epsilon:
        month += 1
        interest, _, _ = _accrue_and_pay_minimums(working)
        total_interest += interest
    return total_interest


def interest_avoided(minimum_only_total: float, actual_total: float) -> float:
    """Interest saved versus the minimum-only baseline, never negative."""

    return max(0.0, minimum_only_total - actual_total)


def plan_payoff(
    debts: Iterable[Debt],
    strategy: Strategy | str,
    extra_payment: float,
    windfall: float = 0.0,
    *,
    max_months: int = MAX_MONTHS,
    baseline_max_months: int = BASELINE_MAX_MONTHS,
    epsilon: float = BALANCE_EPSILON,
    start: date | None = None,
) -> PayoffPlan:
    """Simulate ``strategy`` and summarize it against the minimum-only baseline."""

    debt_list = list(debts)
    strategy = Strategy.parse(strategy)
    steps = simulate(
        debt_list,
        strategy,
        extra_payment,
        windfall,
        max_months=max_months,
        epsilon=epsilon,
        start=start,
    )
    baseline = minimum_only_interest(debt_list, max_months=baseline_max_months, epsilon=epsilon)

    if steps:
        last = steps[-1]
        total_paid, total_interest, final_balance = (
            last.total_paid,
            last.total_interest,
            last.remaining_balance,
        )
    else:
        total_paid = total_interest = final_balance = 0.0

    return PayoffPlan(
        strategy=strategy,
        steps=tuple(steps),
        total_paid=total_paid,
        total_interest=total_interest,
        minimum_only_interest=baseline,
        interest_avoided=interest_avoided(baseline, total_interest),
        final_balance=final_balance,
        paid_off=final_balance <= epsilon,
    )


def compare_strategies(
    debts: Iterable[Debt],
    extra_payment: float,
    windfall: float = 0.0,
    **options,
) -> dict[Strategy, PayoffPlan]:
    """Plan every strategy over the same debts; keyword options go to ``plan_payoff``."""

    debt_list = list(debts)
    return {
        strategy: plan_payoff(debt_list, strategy, extra_payment, windfall, **options)
        for strategy in Strategy
    }
