"""Reporting utilities for DebtSummit.

Everything here reads a finished schedule and never changes its values.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from matplotlib.figure import Figure

from ..models import Debt, PayoffStep
from .debts import BALANCE_EPSILON

PAID_OFF_THRESHOLD = 0.05


def format_currency(amount: float) -> str:
    """Format ``amount`` as US dollars, e.g. ``$1,234.56``."""

    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def subsample_steps(steps: Sequence[PayoffStep], every: int = 3) -> list[PayoffStep]:
    """Keep every ``every``-th step plus the last one, for display density."""

    every = max(1, every)
    last = len(steps) - 1
    return [step for idx, step in enumerate(steps) if idx % every == 0 or idx == last]


def monthly_log_rows(steps: Sequence[PayoffStep], *, epsilon: float = BALANCE_EPSILON) -> list[dict]:
    """Build table rows for the monthly payment log."""

    rows: list[dict] = []
    previous: Optional[PayoffStep] = None
    for step in steps:
        cleared = step.remaining_balance <= epsilon
        rows.append(
            {
                "month": step.month,
                "date": step.date,
                "payments": [
                    f"{p.debt_name}: {format_currency(p.amount)}{' (extra)' if p.is_extra else ''}"
                    for p in step.payments
                ],
                "remaining": "DEBT FREE" if cleared else format_currency(step.remaining_balance),
                "total_paid": format_currency(step.total_paid),
                "total_interest": format_currency(step.total_interest),
                "just_cleared": cleared
                and previous is not None
                and previous.remaining_balance > epsilon,
            }
        )
        previous = step
    return rows


@dataclass(slots=True)
class DebtProgress:
    """Per-debt view of how much of the starting balance is gone."""

    debt: Debt
    current_balance: float
    progress: float  # percent of the starting balance repaid

    @property
    def is_paid(self) -> bool:
        return self.current_balance <= PAID_OFF_THRESHOLD


def debt_progress(debts: Sequence[Debt], step: Optional[PayoffStep]) -> list[DebtProgress]:
    """Return per-debt balances as of ``step`` (starting balances when None)."""

    progress: list[DebtProgress] = []
    for debt in debts:
        current = debt.balance if step is None else step.balance_for(debt.id)
        if debt.balance > 0:
            pct = (debt.balance - current) / debt.balance * 100
        else:
            pct = 100.0
        progress.append(DebtProgress(debt=debt, current_balance=current, progress=pct))
    return progress


def build_payoff_chart(steps: Sequence[PayoffStep], *, title: str = "Debt Payoff Projection") -> Figure:
    """Create a matplotlib line chart of the aggregate remaining balance.

    Milestones mark the months where half and three quarters of the starting
    balance are gone, and a star marks the debt-free month.
    """

    fig, ax = plt.subplots(figsize=(10, 6))

    if not steps:
        ax.text(0.5, 0.5, "No payoff schedule", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
        return fig

    totals = [step.remaining_balance for step in steps]
    timeline = [step.date for step in steps]
    x_vals = list(range(len(totals)))

    ax.plot(x_vals, totals, marker="o", color="#4F46E5", linewidth=2.5, markersize=5)
    ax.fill_between(x_vals, totals, color="#E0E7FF", alpha=0.5)

    initial = totals[0]
    if len(totals) > 1 and initial > 0:
        for fraction, label, color, offset in (
            (0.5, "50% Paid!", "#22C55E", 30),
            (0.25, "75% Paid!", "#16A34A", 20),
        ):
            for i, total in enumerate(totals):
                if total <= initial * fraction:
                    ax.axvline(x=i, color=color, linestyle="--", alpha=0.6, linewidth=1.5)
                    ax.annotate(
                        label,
                        (i, total),
                        xytext=(10, offset),
                        textcoords="offset points",
                        fontsize=9,
                        color=color,
                        fontweight="bold",
                    )
                    break

    if totals[-1] <= BALANCE_EPSILON:
        ax.scatter([x_vals[-1]], [0], s=200, c="gold", marker="*", zorder=5, edgecolors="#F59E0B")
        ax.annotate(
            "DEBT FREE!",
            (x_vals[-1], 0),
            xytext=(0, 25),
            textcoords="offset points",
            ha="center",
            fontsize=12,
            fontweight="bold",
            color="#16A34A",
        )

    ax.grid(True, linestyle="--", alpha=0.3)
    ax.set_axisbelow(True)
    ax.set_title(title, fontsize=14, fontweight="bold", pad=15)
    ax.set_ylabel("Remaining Balance ($)", fontsize=11)
    ax.set_xlabel("Month", fontsize=11)

    # Set ticks before labels
    tick_step = max(1, len(x_vals) // 8)
    ax.set_xticks(x_vals[::tick_step])
    ax.set_xticklabels(timeline[::tick_step], rotation=45, ha="right")
    ax.yaxis.set_major_formatter(mticker.FuncFormatter(lambda x, p: f"${x:,.0f}"))

    last = steps[-1]
    textstr = (
        f"Months to Payoff: {last.month}\n"
        f"Total Paid: {format_currency(last.total_paid)}\n"
        f"Total Interest: {format_currency(last.total_interest)}"
    )
    props = dict(boxstyle="round", facecolor="lavender", alpha=0.8)
    ax.text(0.98, 0.98, textstr, transform=ax.transAxes, fontsize=9,
            verticalalignment="top", horizontalalignment="right", bbox=props)

    fig.tight_layout()
    return fig
