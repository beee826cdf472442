"""CSV ingestion utilities for bulk debt import."""

from __future__ import annotations

import io
import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Mapping, Optional

import pandas as pd

from ..models import Debt, new_debt_id

logger = logging.getLogger(__name__)

MISSING_COLUMNS_MESSAGE = (
    "Could not find required columns. Please ensure your CSV has headers for "
    "Name, Balance, Interest Rate, and Minimum Payment."
)

# Resolution order matters: each field claims a distinct column, and the
# numeric fields go first so "Debt Name" style headers are left for the name.
FIELD_KEYWORDS: dict[str, tuple[str, ...]] = {
    "interest_rate": ("rate", "interest", "apr", "percent"),
    "minimum_payment": ("minimum", "min", "payment", "monthly"),
    "balance": ("balance", "amount", "total", "current", "debt"),
    "name": ("name", "debt", "description", "label", "account"),
}

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


@dataclass(slots=True)
class ColumnMapping:
    """Maps debt fields to CSV headers."""

    name: str | None = None
    balance: str | None = None
    interest_rate: str | None = None
    minimum_payment: str | None = None

    @property
    def complete(self) -> bool:
        return None not in (self.name, self.balance, self.interest_rate, self.minimum_payment)


@dataclass
class ImportResult:
    """Result of an import operation."""

    debts: list[Debt] = field(default_factory=list)
    skipped: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def created(self) -> int:
        return len(self.debts)


def detect_columns(headers: Iterable[str]) -> ColumnMapping:
    """Match arbitrary headers to debt fields by case-insensitive keyword."""

    header_list = [str(h) for h in headers]
    claimed: set[str] = set()
    mapping = ColumnMapping()
    for field_name, keywords in FIELD_KEYWORDS.items():
        for keyword in keywords:
            match = next(
                (h for h in header_list if h not in claimed and keyword in h.lower()),
                None,
            )
            if match is not None:
                setattr(mapping, field_name, match)
                claimed.add(match)
                break
    return mapping


def parse_number(raw: object) -> Optional[float]:
    """Parse a loosely formatted number such as ``"$5,000"`` or ``"18.99%"``.

    Returns None when nothing numeric remains.
    """

    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        cleaned = _NON_NUMERIC.sub("", str(raw))
        try:
            value = float(cleaned)
        except ValueError:
            return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def normalize_frame(*, source: Path | io.StringIO, encoding: str = "utf-8-sig") -> pd.DataFrame:
    """Load CSV content into a string-typed DataFrame with trimmed headers."""

    frame = pd.read_csv(
        source,
        encoding=encoding,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    frame.columns = [str(c).strip() for c in frame.columns]
    return frame


def debts_from_rows(rows: Iterable[Mapping[str, object]], mapping: ColumnMapping) -> ImportResult:
    """Convert dict-like rows into Debt records, skipping unusable rows.

    Errors name rows the way a spreadsheet would with blank lines removed: the
    header is row 1 and the first data row is row 2. Blank lines are dropped by
    ``normalize_frame`` and do not advance the count.
    """

    result = ImportResult()
    for row_num, row in enumerate(rows, start=2):
        name = str(row.get(mapping.name) or "").strip() if mapping.name else ""
        balance = parse_number(row.get(mapping.balance)) if mapping.balance else None
        rate = parse_number(row.get(mapping.interest_rate)) if mapping.interest_rate else None
        minimum = parse_number(row.get(mapping.minimum_payment)) if mapping.minimum_payment else None

        if not name:
            result.errors.append(f"Row {row_num}: missing debt name")
            result.skipped += 1
            continue
        if balance is None or rate is None or minimum is None:
            result.errors.append(f"Row {row_num}: could not parse numbers for '{name}'")
            result.skipped += 1
            continue
        if balance < 0 or rate < 0 or minimum < 0:
            result.errors.append(f"Row {row_num}: negative values are not allowed for '{name}'")
            result.skipped += 1
            continue

        result.debts.append(
            Debt(
                id=new_debt_id(),
                name=name,
                balance=balance,
                interest_rate=rate,
                minimum_payment=minimum,
            )
        )
    return result


def _import_frame(frame: pd.DataFrame) -> ImportResult:
    mapping = detect_columns(frame.columns)
    logger.info("CSV headers mapped", extra={"headers": list(frame.columns), "mapping": repr(mapping)})

    rows = frame.to_dict(orient="records")
    result = debts_from_rows(rows, mapping)
    if not result.debts:
        result.errors.insert(0, MISSING_COLUMNS_MESSAGE)
    logger.info(
        "Debt import finished",
        extra={"created": result.created, "skipped": result.skipped},
    )
    return result


def import_debts_csv(csv_path: Path) -> ImportResult:
    """Parse a debt CSV file; problems are reported in ``errors``, not raised."""

    logger.info(f"Starting debt import from: {csv_path}")
    try:
        frame = normalize_frame(source=Path(csv_path))
    except (OSError, UnicodeDecodeError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        logger.warning(f"Failed to read debt CSV {csv_path}: {exc}")
        return ImportResult(errors=["Failed to read the file. Please try a different CSV."])
    return _import_frame(frame)


def import_debts_text(text: str) -> ImportResult:
    """Parse debt CSV content held in memory."""

    try:
        frame = normalize_frame(source=io.StringIO(text))
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        logger.warning(f"Failed to parse debt CSV text: {exc}")
        return ImportResult(errors=["Error parsing the file content. Please check your CSV format."])
    return _import_frame(frame)
