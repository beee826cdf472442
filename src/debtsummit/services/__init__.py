"""Service module exports."""

from . import advice, debts, export_csv, import_csv, reports

__all__ = [
    "advice",
    "debts",
    "export_csv",
    "import_csv",
    "reports",
]
