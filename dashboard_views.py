"""Streamlit page renderers."""

from __future__ import annotations

from typing import Any

import pandas as pd
import streamlit as st

from categories import category_icon
from metric_guide import METRIC_GUIDE

SEVERITY_BADGES = {"high": "🔴 High", "medium": "🟠 Medium"}


def _fmt_sgd(value: float) -> str:
    return f"${value:,.2f}"


def _fmt_compact(value: float) -> str:
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    return f"{value:.0f}"


def render_kpis(stats: dict[str, Any], budget_pct: float) -> None:
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Spending", _fmt_sgd(stats["total_spending"]), f"{stats['spending_count']} txns", delta_color="off")
    c2.metric("Income", _fmt_sgd(stats["total_income"]), f"{stats['income_count']} txns", delta_color="off")
    c3.metric("Net cashflow", _fmt_sgd(stats["net_cashflow"]))
    c4.metric("Avg spend / tx", _fmt_sgd(stats["avg_transaction"]))
    if stats["total_income"] > 0:
        st.progress(budget_pct / 100.0, text=f"{budget_pct:.0f}% of income spent")


def render_overview(
    stats: dict[str, Any],
    breakdown: pd.DataFrame,
    merchants: pd.DataFrame,
    budget_pct: float,
) -> None:
    st.header("Dashboard")
    render_kpis(stats, budget_pct)

    left, right = st.columns(2)
    with left:
        st.markdown("### Spending by category")
        if breakdown.empty:
            st.info("No spending in this period.")
        else:
            table = breakdown.copy()
            table["Category"] = [f"{category_icon(name)} {name}" for name in table["Category"]]
            st.dataframe(
                table,
                use_container_width=True,
                hide_index=True,
                column_config={
                    "Amount": st.column_config.NumberColumn(format="$%.2f"),
                    "SharePct": st.column_config.ProgressColumn("Share", format="%.0f%%", min_value=0, max_value=100),
                },
            )
    with right:
        st.markdown("### Daily spending (last 14 days)")
        st.bar_chart(stats["daily_spending"].set_index("Label")[["Amount"]])

    st.markdown("### Monthly tracking")
    trend = stats["monthly_trend"]
    if trend.empty:
        st.info("No monthly data yet.")
    else:
        st.bar_chart(trend.set_index("Period")[["Income", "Expenses"]])

    a, b = st.columns(2)
    with a:
        st.markdown("### Top merchants")
        st.dataframe(merchants, use_container_width=True, hide_index=True)
    with b:
        st.markdown("### Spending by bank")
        banks = pd.Series(stats["bank_totals"], name="Amount").rename_axis("Bank").reset_index()
        st.dataframe(banks, use_container_width=True, hide_index=True)


def render_leakages(findings: pd.DataFrame, savings: float) -> None:
    st.header("Leakages")
    if findings.empty:
        st.success("No leakages detected for this period.")
        return

    st.markdown(f"Potential savings: **{_fmt_sgd(savings)}**")
    for _, row in findings.iterrows():
        with st.container(border=True):
            st.markdown(f"**{row['Title']}** · {SEVERITY_BADGES.get(row['Severity'], row['Severity'])}")
            st.caption(row["Description"])
            st.markdown(f"Estimated impact: **{_fmt_sgd(float(row['Amount']))}**")


def render_cards(recommendations: pd.DataFrame) -> None:
    st.header("Card recommendations")
    st.caption("Ranked by projected monthly value after spreading the annual fee.")
    for rank, (_, row) in enumerate(recommendations.iterrows(), start=1):
        with st.container(border=True):
            st.markdown(f"**#{rank} {row['Card']}** · {row['Bank']} · {row['Type']}")
            c1, c2, c3 = st.columns(3)
            c1.metric("Net / month", _fmt_sgd(float(row["NetValue"])))
            c2.metric("Gross / month", _fmt_sgd(float(row["GrossValue"])))
            c3.metric("Annual fee", f"${_fmt_compact(float(row['AnnualFee']))}")
            if isinstance(row["Note"], str) and row["Note"]:
                st.caption(f"⚡ {row['Note']}")
            if not row["MeetsMinSpend"]:
                st.warning(f"Requires min. spend of ${row['MinSpend']:.0f}/month")
            for line in row["Benefits"]:
                st.markdown(f"- {line}")


def render_transactions(df: pd.DataFrame, limit: int = 120) -> None:
    st.header("Transactions")
    latest = df.sort_values("Date", ascending=False, kind="stable").head(limit).copy()
    latest["Signed"] = latest["Amount"].where(latest["Type"] == "income", -latest["Amount"])
    st.dataframe(
        latest[["Date", "Merchant", "Category", "Bank", "Card", "Signed", "Currency", "Notes"]],
        use_container_width=True,
        hide_index=True,
        column_config={"Signed": st.column_config.NumberColumn("Amount", format="%.2f")},
    )


def render_metric_guide() -> None:
    st.header("Metric Guide")
    st.dataframe(pd.DataFrame(METRIC_GUIDE), use_container_width=True, hide_index=True)
