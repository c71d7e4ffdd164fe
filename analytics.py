"""Analytics helpers for period filtering, dashboard KPIs and trends."""

from __future__ import annotations

import datetime
from typing import Any

import pandas as pd

PERIOD_CHOICES = ("mtd", "ytd", "month", "all")
MONTH_ABBREVIATIONS = [
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
]
DAILY_WINDOW_DAYS = 14


def _resolve_now(now: datetime.datetime | None) -> datetime.datetime:
    return now if now is not None else datetime.datetime.now()


def _spending(df: pd.DataFrame) -> pd.DataFrame:
    return df[df["Type"] != "income"]


def _income(df: pd.DataFrame) -> pd.DataFrame:
    return df[df["Type"] == "income"]


def filter_by_period(
    df: pd.DataFrame,
    period: str,
    month: int | None = None,
    now: datetime.datetime | None = None,
) -> pd.DataFrame:
    """Return the transactions inside a period, relative to ``now``.

    ``period`` is one of ``mtd``, ``ytd``, ``month`` (with ``month`` in 1..12,
    always in the current year) or ``all``.
    """
    if period not in PERIOD_CHOICES:
        raise ValueError(f"Unknown period: {period!r}. Expected one of: {', '.join(PERIOD_CHOICES)}.")
    if period == "all":
        return df.copy()

    current = _resolve_now(now)
    dates = df["Date"]
    if period == "mtd":
        mask = (dates.dt.month == current.month) & (dates.dt.year == current.year)
    elif period == "ytd":
        mask = dates.dt.year == current.year
    else:
        if month is None or not 1 <= int(month) <= 12:
            raise ValueError(f"Month must be between 1 and 12, got {month!r}.")
        mask = (dates.dt.month == int(month)) & (dates.dt.year == current.year)
    return df.loc[mask].copy()


def category_totals(df: pd.DataFrame) -> dict[str, float]:
    """Spending per category, in order of first appearance."""
    grouped = _spending(df).groupby("Category", sort=False)["Amount"].sum()
    return {str(name): float(total) for name, total in grouped.items()}


def bank_totals(df: pd.DataFrame) -> dict[str, float]:
    """Spending per issuing bank, in order of first appearance."""
    grouped = _spending(df).groupby("Bank", sort=False)["Amount"].sum()
    return {str(name): float(total) for name, total in grouped.items()}


def monthly_trend(df: pd.DataFrame) -> pd.DataFrame:
    """Income and expenses per calendar month, oldest first.

    Months without transactions are absent rather than zero-filled.
    """
    columns = ["Period", "Month", "Income", "Expenses"]
    if df.empty:
        return pd.DataFrame(columns=columns)

    work = df.copy()
    work["Year"] = work["Date"].dt.year.astype(int)
    work["MonthNum"] = work["Date"].dt.month.astype(int)
    is_income = work["Type"] == "income"
    work["Income"] = work["Amount"].where(is_income, 0.0)
    work["Expenses"] = work["Amount"].where(~is_income, 0.0)
    summary = (
        work.groupby(["Year", "MonthNum"])
        .agg(Income=("Income", "sum"), Expenses=("Expenses", "sum"))
        .sort_index()
        .reset_index()
    )
    summary["Period"] = [f"{year:04d}-{month:02d}" for year, month in zip(summary["Year"], summary["MonthNum"])]
    summary["Month"] = [MONTH_ABBREVIATIONS[month - 1] for month in summary["MonthNum"]]
    return summary[columns]


def daily_spending_trend(
    df: pd.DataFrame,
    now: datetime.datetime | None = None,
    days: int = DAILY_WINDOW_DAYS,
) -> pd.DataFrame:
    """Spending per day over a rolling window ending today, zero-filled."""
    today = _resolve_now(now).date()
    window = [today - datetime.timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    spending = _spending(df)
    by_day = spending.groupby(spending["Date"].dt.date)["Amount"].sum()
    return pd.DataFrame(
        {
            "Date": window,
            "Label": [day.strftime("%d/%m") for day in window],
            "Amount": [float(by_day.get(day, 0.0)) for day in window],
        }
    )


def calculate_stats(df: pd.DataFrame, now: datetime.datetime | None = None) -> dict[str, Any]:
    """Return the summary statistics bundle for a transaction set."""
    spending = _spending(df)
    income = _income(df)
    total_spending = float(spending["Amount"].sum())
    total_income = float(income["Amount"].sum())
    spending_count = int(len(spending))

    return {
        "total_spending": total_spending,
        "total_income": total_income,
        "net_cashflow": total_income - total_spending,
        "spending_count": spending_count,
        "income_count": int(len(income)),
        "avg_transaction": (total_spending / spending_count) if spending_count else 0.0,
        "category_totals": category_totals(df),
        "bank_totals": bank_totals(df),
        "monthly_trend": monthly_trend(df),
        "daily_spending": daily_spending_trend(df, now=now),
    }


def category_breakdown(totals: dict[str, float], total_spending: float) -> pd.DataFrame:
    """Categories with positive spend, largest first, with share of total."""
    rows = [(name, amount) for name, amount in totals.items() if amount > 0]
    out = pd.DataFrame(rows, columns=["Category", "Amount"])
    out = out.sort_values("Amount", ascending=False, kind="stable").reset_index(drop=True)
    out["SharePct"] = [
        (amount / total_spending * 100.0) if total_spending else 0.0 for amount in out["Amount"]
    ]
    return out


def top_merchants(df: pd.DataFrame, top_n: int = 8) -> pd.DataFrame:
    """Top merchants by total spending."""
    grouped = (
        _spending(df)
        .groupby("Merchant", sort=False)
        .agg(Total=("Amount", "sum"), Transactions=("Amount", "size"))
        .sort_values("Total", ascending=False, kind="stable")
        .head(top_n)
        .reset_index()
    )
    return grouped


def budget_usage_pct(total_spending: float, total_income: float) -> float:
    """Spending as a share of income, capped at 100%."""
    if total_income <= 0:
        return 0.0
    return min(100.0, total_spending / total_income * 100.0)
