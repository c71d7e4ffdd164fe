"""LeakLedger Streamlit entrypoint."""

from __future__ import annotations

import datetime
import logging

import pandas as pd
import streamlit as st

from analytics import (
    MONTH_ABBREVIATIONS,
    budget_usage_pct,
    calculate_stats,
    category_breakdown,
    filter_by_period,
    top_merchants,
)
from cards import recommend_cards
from dashboard_views import (
    render_cards,
    render_leakages,
    render_metric_guide,
    render_overview,
    render_transactions,
)
from demo_data import generate_demo_transactions
from leakages import assumed_income, detect_leakages, potential_savings
from parsing import SUPPORTED_EXTENSIONS, load_transactions, parse_transactions
from settings import Settings, configure_logging, load_settings
from sheets_source import SheetSourceError, fetch_sheet_rows

st.set_page_config(page_title="LeakLedger", page_icon="\U0001f4b3", layout="wide")

logger = logging.getLogger(__name__)

PERIOD_LABELS = {"mtd": "MTD", "ytd": "YTD", "all": "All"}


def _load_from_sheet(settings: Settings) -> pd.DataFrame | None:
    spreadsheet_id = st.sidebar.text_input("Spreadsheet ID", value=settings.spreadsheet_id)
    api_key = st.sidebar.text_input("API key", value=settings.api_key, type="password")
    if not st.sidebar.button("Connect / refresh"):
        return st.session_state.get("transactions")

    try:
        rows = fetch_sheet_rows(
            spreadsheet_id,
            api_key,
            sheet_name=settings.sheet_name,
            timeout=settings.request_timeout,
        )
    except SheetSourceError as exc:
        st.session_state.pop("transactions", None)
        st.error(f"Failed to connect: {exc}")
        return None

    transactions = parse_transactions(rows)
    st.session_state["transactions"] = transactions
    return transactions


def _load_from_file() -> pd.DataFrame | None:
    uploaded = st.sidebar.file_uploader(
        "Upload sheet export",
        type=[ext.replace(".", "") for ext in SUPPORTED_EXTENSIONS],
    )
    if uploaded is None:
        return None
    try:
        return load_transactions(uploaded)
    except ValueError as exc:
        st.error(f"Could not read file: {exc}")
        return None


def _prepare_transactions(settings: Settings) -> tuple[pd.DataFrame | None, bool]:
    st.sidebar.header("Data Setup")
    source = st.sidebar.radio("Source", ["Google Sheet", "File export", "Demo"])
    if source == "Demo":
        return generate_demo_transactions(), True
    if source == "File export":
        return _load_from_file(), False
    return _load_from_sheet(settings), False


def _select_period() -> tuple[str, int | None]:
    st.sidebar.header("Period")
    options = list(PERIOD_LABELS) + [f"month:{idx}" for idx in range(1, 13)]
    choice = st.sidebar.radio(
        "Show",
        options,
        format_func=lambda key: PERIOD_LABELS.get(key) or MONTH_ABBREVIATIONS[int(key.split(":")[1]) - 1],
        horizontal=True,
    )
    if choice.startswith("month:"):
        return "month", int(choice.split(":")[1])
    return choice, None


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    st.title("LeakLedger")
    view = st.sidebar.radio("Navigate", ["Dashboard", "Leakages", "Cards", "Transactions", "Metric Guide"])

    transactions, is_demo = _prepare_transactions(settings)
    if view == "Metric Guide":
        render_metric_guide()
        return
    if transactions is None:
        st.info("Connect a Google Sheet, upload an export, or pick Demo from the sidebar to start.")
        return
    if is_demo:
        st.caption("DEMO data")

    period, month = _select_period()
    now = datetime.datetime.now()
    filtered = filter_by_period(transactions, period, month=month, now=now)
    if filtered.empty:
        st.warning("No transactions in the selected period.")
        return

    stats = calculate_stats(filtered, now=now)
    logger.debug("Computed stats for %d transactions (%s)", len(filtered), period)

    if view == "Dashboard":
        render_overview(
            stats,
            category_breakdown(stats["category_totals"], stats["total_spending"]),
            top_merchants(filtered),
            budget_usage_pct(stats["total_spending"], stats["total_income"]),
        )
    elif view == "Leakages":
        findings = detect_leakages(filtered, assumed_income(stats["total_income"], settings.fallback_income))
        render_leakages(findings, potential_savings(findings))
    elif view == "Cards":
        render_cards(recommend_cards(stats["category_totals"], stats["total_spending"]))
    elif view == "Transactions":
        render_transactions(filtered)


if __name__ == "__main__":
    main()
