"""Transaction row parsing and normalization helpers."""

from __future__ import annotations

import datetime
import logging
import math
import re
from typing import Any, Iterable, Sequence

import pandas as pd

from categories import DEFAULT_CATEGORY, INCOME_CATEGORY

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".csv", ".xlsx")

TRANSACTION_COLUMNS = [
    "Date",
    "Bank",
    "Card",
    "Merchant",
    "Amount",
    "Category",
    "Notes",
    "Currency",
    "Type",
]

# Positional layout of the Transactions sheet. Columns 6 and 8 are unused.
COL_DATE = 0
COL_BANK = 1
COL_CARD = 2
COL_MERCHANT = 3
COL_AMOUNT = 4
COL_CATEGORY = 5
COL_NOTES = 7
COL_CURRENCY = 9
COL_TYPE = 10

DEFAULT_MERCHANT = "Unknown"
DEFAULT_CURRENCY = "SGD"

_DATE_PATTERN = re.compile(r"^(\d{1,2})[/\-.](\d{1,2})[/\-.](\d{4})(?:\s+(\d{1,2}):(\d{2}))?")
_AMOUNT_NOISE = re.compile(r"^S?\$|[\s,]")


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def _cell(cells: Sequence[Any], index: int) -> Any:
    return cells[index] if index < len(cells) else None


def _cell_text(cells: Sequence[Any], index: int) -> str:
    value = _cell(cells, index)
    if _is_missing(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        # Spreadsheet exports turn card digits like 3115 into 3115.0.
        return str(int(value))
    return str(value).strip()


def _bounded(stamp: pd.Timestamp) -> pd.Timestamp | None:
    # Transactions frames use nanosecond datetimes; anything outside that range is unusable.
    if stamp.tzinfo is not None:
        stamp = stamp.tz_localize(None)
    if stamp < pd.Timestamp.min or stamp > pd.Timestamp.max:
        return None
    return stamp


def parse_date(raw: Any) -> pd.Timestamp | None:
    """Parse a day-first D/M/YYYY [H:MM] string or any generic date-time.

    Returns None when the value cannot be turned into a real calendar timestamp.
    """
    if _is_missing(raw):
        return None
    if isinstance(raw, (datetime.datetime, datetime.date)):
        try:
            return _bounded(pd.Timestamp(raw))
        except (ValueError, OverflowError):
            return None

    text = str(raw).strip()
    match = _DATE_PATTERN.match(text)
    if match:
        day, month, year, hour, minute = match.groups()
        try:
            return _bounded(
                pd.Timestamp(
                    datetime.datetime(int(year), int(month), int(day), int(hour or 0), int(minute or 0))
                )
            )
        except (ValueError, OverflowError):
            return None

    try:
        parsed = pd.to_datetime(text, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(parsed):
        return None
    return _bounded(parsed)


def parse_amount(raw: Any) -> float | None:
    """Return a finite positive amount, or None for anything else."""
    if _is_missing(raw) or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        cleaned = _AMOUNT_NOISE.sub("", str(raw).strip())
        value = float(pd.to_numeric(cleaned, errors="coerce"))
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def _parse_row(row: Any) -> dict[str, Any] | None:
    try:
        cells = list(row)
    except TypeError:
        return None

    date = parse_date(_cell(cells, COL_DATE))
    amount = parse_amount(_cell(cells, COL_AMOUNT))
    if date is None or amount is None:
        return None

    category = _cell_text(cells, COL_CATEGORY) or DEFAULT_CATEGORY
    # Any explicit kind other than "income" (in any case) counts as spending.
    # Mixed-case "Income" is treated as income, unlike a strict lowercase match.
    kind = _cell_text(cells, COL_TYPE).lower()
    if kind:
        kind = "income" if kind == "income" else "spending"
    else:
        kind = "income" if category == INCOME_CATEGORY else "spending"

    return {
        "Date": date,
        "Bank": _cell_text(cells, COL_BANK),
        "Card": _cell_text(cells, COL_CARD),
        "Merchant": _cell_text(cells, COL_MERCHANT) or DEFAULT_MERCHANT,
        "Amount": amount,
        "Category": category,
        "Notes": _cell_text(cells, COL_NOTES),
        "Currency": _cell_text(cells, COL_CURRENCY).upper() or DEFAULT_CURRENCY,
        "Type": kind,
    }


def build_transactions_frame(records: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Build a typed transactions frame, empty frames included."""
    df = pd.DataFrame(list(records), columns=TRANSACTION_COLUMNS)
    df["Date"] = pd.to_datetime(df["Date"])
    df["Amount"] = df["Amount"].astype(float)
    return df


def parse_transactions(rows: Iterable[Sequence[Any]] | None) -> pd.DataFrame:
    """Turn raw sheet rows (header first) into a transactions frame.

    Rows with an unusable date or a non-positive/non-numeric amount are
    dropped. This never raises for bad row content.
    """
    body = list(rows)[1:] if rows is not None else []
    records = []
    for row in body:
        record = _parse_row(row)
        if record is not None:
            records.append(record)

    dropped = len(body) - len(records)
    if dropped:
        logger.debug("Dropped %d of %d rows with unusable date or amount", dropped, len(body))
    return build_transactions_frame(records)


def read_export_rows(uploaded_file: Any) -> list[list[Any]]:
    """Read every row (header included) of a CSV or XLSX export of the sheet."""
    name = str(getattr(uploaded_file, "name", "")).lower()
    if name.endswith(".xlsx"):
        frame = pd.read_excel(uploaded_file, sheet_name=0, header=None, dtype=object)
        frame = frame.astype(object).where(pd.notna(frame), "")
    elif name.endswith(".csv"):
        try:
            frame = pd.read_csv(uploaded_file, header=None, dtype=str, keep_default_na=False)
        except pd.errors.EmptyDataError:
            return []
    else:
        raise ValueError(
            f"Unsupported file type: {name or '<unknown>'}. Supported: csv, xlsx."
        )
    return frame.values.tolist()


def load_transactions(uploaded_file: Any) -> pd.DataFrame:
    """Load and parse transactions from a sheet export."""
    return parse_transactions(read_export_rows(uploaded_file))
