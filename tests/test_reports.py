"""Tests for schedule presentation helpers."""

from __future__ import annotations

from matplotlib.figure import Figure

from debtsummit.models import PaymentEntry, PayoffStep, Strategy
from debtsummit.services.debts import simulate
from debtsummit.services.reports import (
    build_payoff_chart,
    debt_progress,
    format_currency,
    monthly_log_rows,
    subsample_steps,
)


def _steps(count: int) -> list[PayoffStep]:
    return [
        PayoffStep(
            month=i + 1,
            date=f"M{i + 1}",
            remaining_balance=float(count - i - 1) * 100,
            total_paid=float(i + 1) * 100,
            total_interest=float(i + 1),
        )
        for i in range(count)
    ]


def test_format_currency():
    assert format_currency(1234.5) == "$1,234.50"
    assert format_currency(0) == "$0.00"
    assert format_currency(-12) == "-$12.00"


def test_subsample_keeps_every_third_and_last():
    steps = _steps(11)

    sampled = subsample_steps(steps, every=3)

    assert [s.month for s in sampled] == [1, 4, 7, 10, 11]
    # Values are passed through untouched
    assert sampled[-1] is steps[-1]


def test_subsample_without_duplicate_last():
    assert [s.month for s in subsample_steps(_steps(10), every=3)] == [1, 4, 7, 10]
    assert subsample_steps([], every=3) == []
    assert len(subsample_steps(_steps(5), every=0)) == 5


def test_monthly_log_marks_debt_free_once():
    steps = _steps(3)
    steps[0] = PayoffStep(
        month=1,
        date="M1",
        remaining_balance=200.0,
        total_paid=100.0,
        total_interest=1.0,
        payments=(
            PaymentEntry(debt_id="a", debt_name="Visa", amount=50.0),
            PaymentEntry(debt_id="b", debt_name="Car", amount=50.0, is_extra=True),
        ),
    )

    rows = monthly_log_rows(steps)

    assert rows[0]["payments"] == ["Visa: $50.00", "Car: $50.00 (extra)"]
    assert rows[0]["remaining"] == "$200.00"
    assert rows[-1]["remaining"] == "DEBT FREE"
    assert [r["just_cleared"] for r in rows] == [False, False, True]


def test_debt_progress_reads_simulated_balances(example_debts, start_date):
    steps = simulate(example_debts, Strategy.SNOWBALL, 100.0, start=start_date)

    start = debt_progress(example_debts, None)
    assert [p.current_balance for p in start] == [1000.0, 500.0]
    assert all(p.progress == 0.0 for p in start)

    first = {p.debt.id: p for p in debt_progress(example_debts, steps[0])}
    assert first["A"].current_balance == steps[0].balance_for("A")
    assert round(first["A"].progress, 1) == 3.0  # 1000 -> 970

    final = debt_progress(example_debts, steps[-1])
    assert all(p.is_paid for p in final)
    assert all(round(p.progress) == 100 for p in final)


def test_build_payoff_chart_returns_figure(sample_debts, start_date):
    steps = simulate(sample_debts, Strategy.AVALANCHE, 200.0, start=start_date)

    fig = build_payoff_chart(steps)

    assert isinstance(fig, Figure)
    ax = fig.axes[0]
    assert ax.get_title() == "Debt Payoff Projection"
    assert len(ax.lines[0].get_xdata()) == len(steps)


def test_build_payoff_chart_placeholder_when_empty():
    fig = build_payoff_chart([])

    texts = [t.get_text() for t in fig.axes[0].texts]
    assert "No payoff schedule" in texts
