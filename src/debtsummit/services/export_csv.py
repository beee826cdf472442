"""CSV export helpers for DebtSummit."""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from ..models import PaymentEntry, PayoffStep

SCHEDULE_HEADERS = ["month", "date", "remaining_balance", "total_paid", "total_interest", "payments"]
TEMPLATE_HEADERS = ["Name", "Balance", "Interest Rate", "Minimum Payment"]
TEMPLATE_ROWS = [
    ["Visa Card", "5000", "18.99", "150"],
    ["Car Loan", "12000", "4.5", "350"],
]


def _money(value: float) -> str:
    return f"{value:.2f}"


def format_payments(payments: Iterable[PaymentEntry]) -> str:
    """Render a month's payments as ``name: amount`` pairs; ``*`` marks extra."""

    parts = []
    for entry in payments:
        marker = "*" if entry.is_extra else ""
        parts.append(f"{entry.debt_name}: {_money(entry.amount)}{marker}")
    return "; ".join(parts)


def export_schedule_csv(*, steps: Iterable[PayoffStep], output_path: Path) -> Path:
    """Write a payoff schedule to CSV at `output_path`.

    Columns are deterministic: month, date, remaining_balance, total_paid,
    total_interest, payments. Returns the path written.
    """

    output_path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.DictWriter(fh, fieldnames=SCHEDULE_HEADERS, quoting=csv.QUOTE_MINIMAL)
        writer.writeheader()
        for step in steps:
            writer.writerow(
                {
                    "month": step.month,
                    "date": step.date,
                    "remaining_balance": _money(step.remaining_balance),
                    "total_paid": _money(step.total_paid),
                    "total_interest": _money(step.total_interest),
                    "payments": format_payments(step.payments),
                }
            )

    return output_path


def write_template_csv(output_path: Path) -> Path:
    """Write the starter CSV users can fill in before a bulk import."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh)
        writer.writerow(TEMPLATE_HEADERS)
        writer.writerows(TEMPLATE_ROWS)
    return output_path
