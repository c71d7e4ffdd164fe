"""Google Sheets source for raw transaction rows."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)

SHEETS_VALUES_URL = "https://sheets.googleapis.com/v4/spreadsheets/{spreadsheet_id}/values/{sheet_range}"
DEFAULT_SHEET_NAME = "Transactions"


class SheetSourceError(RuntimeError):
    """Raised when raw rows cannot be retrieved from the sheet."""


def _safe_json_response(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def fetch_sheet_rows(
    spreadsheet_id: str,
    api_key: str,
    sheet_name: str = DEFAULT_SHEET_NAME,
    timeout: float = 10.0,
) -> list[list[Any]]:
    """Fetch every row of a sheet tab, header row included."""
    sheet_id = str(spreadsheet_id or "").strip()
    key = str(api_key or "").strip()
    if not sheet_id or not key:
        raise SheetSourceError("Both fields required")

    url = SHEETS_VALUES_URL.format(
        spreadsheet_id=quote(sheet_id, safe=""),
        sheet_range=quote(sheet_name, safe=""),
    )
    try:
        response = requests.get(url, params={"key": key}, timeout=timeout)
    except requests.RequestException as exc:
        logger.warning("Sheet request failed: %s", exc)
        raise SheetSourceError(str(exc)) from exc

    if not response.ok:
        logger.warning("Sheet request returned HTTP %s", response.status_code)
        raise SheetSourceError(f"HTTP {response.status_code}")

    values = _safe_json_response(response).get("values")
    if not values:
        raise SheetSourceError(f"No data found in {sheet_name} sheet")

    logger.info("Fetched %d rows from sheet %s", len(values), sheet_name)
    return values
