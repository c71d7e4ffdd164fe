import datetime

import numpy as np
import pandas as pd
import pytest

from analytics import (
    budget_usage_pct,
    calculate_stats,
    category_breakdown,
    daily_spending_trend,
    filter_by_period,
    monthly_trend,
    top_merchants,
)
from parsing import build_transactions_frame

NOW = datetime.datetime(2026, 3, 15, 12, 0)


def _txn(date, merchant, amount, category="Others", kind="spending", bank="DBS", currency="SGD") -> dict:
    return {
        "Date": pd.Timestamp(date),
        "Bank": bank,
        "Card": "",
        "Merchant": merchant,
        "Amount": amount,
        "Category": category,
        "Notes": "",
        "Currency": currency,
        "Type": kind,
    }


def _sample_df() -> pd.DataFrame:
    return build_transactions_frame(
        [
            _txn("2026-01-10", "Din Tai Fung", 40.0, "Dining", bank="DBS"),
            _txn("2026-01-25", "Salary", 3000.0, "Income & Refunds", kind="income"),
            _txn("2026-03-02", "NTUC FairPrice", 60.0, "Groceries", bank="UOB"),
            _txn("2026-03-14 19:30", "Grab", 15.0, "Transport", bank="UOB"),
            _txn("2026-03-15 08:00", "Starbucks", 5.0, "Dining", bank="OCBC"),
            _txn("2026-03-15 09:00", "Refund", 20.0, "Income & Refunds", kind="income"),
            _txn("2025-03-15", "Old Shop", 100.0, "Shopping", bank="DBS"),
        ]
    )


def test_filter_by_period_selects_windows() -> None:
    df = _sample_df()

    mtd = filter_by_period(df, "mtd", now=NOW)
    ytd = filter_by_period(df, "ytd", now=NOW)
    january = filter_by_period(df, "month", month=1, now=NOW)
    everything = filter_by_period(df, "all", now=NOW)

    assert set(mtd["Merchant"]) == {"NTUC FairPrice", "Grab", "Starbucks", "Refund"}
    assert len(ytd) == 6
    assert set(january["Merchant"]) == {"Din Tai Fung", "Salary"}
    assert len(everything) == len(df)


def test_filter_by_period_specific_month_uses_current_year_only() -> None:
    out = filter_by_period(_sample_df(), "month", month=3, now=NOW)
    assert "Old Shop" not in set(out["Merchant"])
    assert len(out) == 4


def test_filter_by_period_rejects_bad_selector() -> None:
    with pytest.raises(ValueError, match="Unknown period"):
        filter_by_period(_sample_df(), "week", now=NOW)
    with pytest.raises(ValueError, match="Month must be"):
        filter_by_period(_sample_df(), "month", month=13, now=NOW)
    with pytest.raises(ValueError, match="Month must be"):
        filter_by_period(_sample_df(), "month", now=NOW)


def test_filter_by_period_does_not_mutate_input() -> None:
    df = _sample_df()
    before = df.copy()
    out = filter_by_period(df, "all", now=NOW)
    out.loc[:, "Amount"] = 0.0
    pd.testing.assert_frame_equal(df, before)


def test_calculate_stats_totals() -> None:
    stats = calculate_stats(_sample_df(), now=NOW)

    assert stats["total_spending"] == 220.0
    assert stats["total_income"] == 3020.0
    assert stats["net_cashflow"] == stats["total_income"] - stats["total_spending"]
    assert stats["spending_count"] == 5
    assert stats["income_count"] == 2
    assert stats["avg_transaction"] == 44.0
    assert stats["bank_totals"] == {"DBS": 140.0, "UOB": 75.0, "OCBC": 5.0}


def test_category_totals_exclude_income_and_sum_to_spending() -> None:
    stats = calculate_stats(_sample_df(), now=NOW)
    totals = stats["category_totals"]

    assert "Income & Refunds" not in totals
    assert list(totals) == ["Dining", "Groceries", "Transport", "Shopping"]
    assert totals["Dining"] == 45.0
    assert sum(totals.values()) == pytest.approx(stats["total_spending"])


def test_calculate_stats_on_empty_frame() -> None:
    stats = calculate_stats(build_transactions_frame([]), now=NOW)

    assert stats["total_spending"] == 0.0
    assert stats["total_income"] == 0.0
    assert stats["net_cashflow"] == 0.0
    assert stats["avg_transaction"] == 0.0
    assert stats["category_totals"] == {}
    assert stats["bank_totals"] == {}
    assert stats["monthly_trend"].empty
    assert len(stats["daily_spending"]) == 14
    assert float(stats["daily_spending"]["Amount"].sum()) == 0.0


def test_calculate_stats_is_idempotent() -> None:
    df = _sample_df()
    first = calculate_stats(df, now=NOW)
    second = calculate_stats(df, now=NOW)

    for key in ("total_spending", "total_income", "net_cashflow", "avg_transaction", "category_totals", "bank_totals"):
        assert first[key] == second[key]
    pd.testing.assert_frame_equal(first["monthly_trend"], second["monthly_trend"])
    pd.testing.assert_frame_equal(first["daily_spending"], second["daily_spending"])


def test_monthly_trend_skips_empty_months() -> None:
    df = build_transactions_frame(
        [
            _txn("2026-03-04", "Grab", 10.0, "Transport"),
            _txn("2026-01-05", "Salary", 500.0, "Income & Refunds", kind="income"),
            _txn("2026-01-06", "Cafe", 20.0, "Dining"),
        ]
    )

    out = monthly_trend(df)

    assert list(out["Month"]) == ["Jan", "Mar"]
    assert list(out["Period"]) == ["2026-01", "2026-03"]
    assert list(out["Income"]) == [500.0, 0.0]
    assert list(out["Expenses"]) == [20.0, 10.0]


def test_monthly_trend_orders_across_years() -> None:
    df = build_transactions_frame(
        [
            _txn("2026-01-04", "A", 10.0),
            _txn("2025-12-30", "B", 10.0),
        ]
    )
    out = monthly_trend(df)
    assert list(out["Period"]) == ["2025-12", "2026-01"]
    assert list(out["Month"]) == ["Dec", "Jan"]


def test_monthly_trend_zero_pads_early_years() -> None:
    dates = np.array(["2026-01-04", "0999-03-01", "0001-01-15"], dtype="datetime64[s]")
    df = pd.DataFrame(
        {
            "Date": pd.Series(dates),
            "Amount": [10.0, 20.0, 30.0],
            "Type": ["spending", "spending", "income"],
        }
    )

    out = monthly_trend(df)

    assert list(out["Period"]) == ["0001-01", "0999-03", "2026-01"]
    assert list(out["Month"]) == ["Jan", "Mar", "Jan"]
    assert list(out["Income"]) == [30.0, 0.0, 0.0]
    assert list(out["Expenses"]) == [0.0, 20.0, 10.0]


def test_daily_spending_trend_covers_fourteen_days_ending_today() -> None:
    out = daily_spending_trend(_sample_df(), now=NOW)

    assert len(out) == 14
    assert out["Date"].iloc[0] == datetime.date(2026, 3, 2)
    assert out["Date"].iloc[-1] == datetime.date(2026, 3, 15)
    assert out["Label"].iloc[-1] == "15/03"
    by_day = dict(zip(out["Date"], out["Amount"]))
    assert by_day[datetime.date(2026, 3, 15)] == 5.0
    assert by_day[datetime.date(2026, 3, 14)] == 15.0
    assert by_day[datetime.date(2026, 3, 2)] == 60.0
    assert by_day[datetime.date(2026, 3, 10)] == 0.0


def test_category_breakdown_sorts_and_computes_share() -> None:
    out = category_breakdown({"Dining": 25.0, "Travel": 75.0, "Empty": 0.0}, 100.0)

    assert list(out["Category"]) == ["Travel", "Dining"]
    assert list(out["SharePct"]) == [75.0, 25.0]


def test_top_merchants_ranks_spending_only() -> None:
    df = build_transactions_frame(
        [
            _txn("2026-03-01", "Starbucks", 8.0, "Dining"),
            _txn("2026-03-02", "Starbucks", 9.0, "Dining"),
            _txn("2026-03-03", "Klook", 250.0, "Travel"),
            _txn("2026-03-04", "Salary", 5000.0, "Income & Refunds", kind="income"),
        ]
    )

    out = top_merchants(df, top_n=5)

    assert list(out["Merchant"]) == ["Klook", "Starbucks"]
    assert list(out["Transactions"]) == [1, 2]
    assert float(out.loc[1, "Total"]) == 17.0


def test_budget_usage_pct_caps_and_handles_no_income() -> None:
    assert budget_usage_pct(500.0, 1000.0) == 50.0
    assert budget_usage_pct(5000.0, 1000.0) == 100.0
    assert budget_usage_pct(500.0, 0.0) == 0.0
