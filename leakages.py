"""Heuristic detection of recurring and avoidable spending ("leakages")."""

from __future__ import annotations

import pandas as pd

DEFAULT_ASSUMED_INCOME = 5000.0

RECURRING_MIN_OCCURRENCES = 3
RECURRING_MAX_AVG = 50.0
RECURRING_MIN_TOTAL = 30.0
RECURRING_HIGH_TOTAL = 100.0

DISCRETIONARY_CATEGORIES = ("Dining", "Entertainment", "Shopping", "Online Services")
DISCRETIONARY_INCOME_SHARE = 0.3

DINING_MAX_VISITS = 20
DINING_SAVINGS_SHARE = 0.25

HOME_CURRENCY = "SGD"
FX_FEE_RATE = 0.035

FINDING_COLUMNS = ["Severity", "Title", "Description", "Amount"]


def assumed_income(total_income: float, fallback: float = DEFAULT_ASSUMED_INCOME) -> float:
    """Income used for ratio checks; falls back when the period has none."""
    return total_income if total_income else fallback


def _finding(severity: str, title: str, description: str, amount: float) -> dict[str, object]:
    return {"Severity": severity, "Title": title, "Description": description, "Amount": float(amount)}


def _recurring_merchants(spending: pd.DataFrame) -> list[dict[str, object]]:
    findings = []
    grouped = spending.groupby("Merchant", sort=False)["Amount"].agg(["size", "sum"])
    for merchant, row in grouped.iterrows():
        count = int(row["size"])
        if count < RECURRING_MIN_OCCURRENCES:
            continue
        total = float(row["sum"])
        avg = total / count
        if avg < RECURRING_MAX_AVG and total > RECURRING_MIN_TOTAL:
            findings.append(
                _finding(
                    "high" if total > RECURRING_HIGH_TOTAL else "medium",
                    f"Recurring: {merchant}",
                    f"{count} transactions avg ${avg:.2f}, total ${total:.2f}. Review this subscription.",
                    total,
                )
            )
    return findings


def _discretionary_overspend(spending: pd.DataFrame, income: float) -> list[dict[str, object]]:
    total = float(spending.loc[spending["Category"].isin(DISCRETIONARY_CATEGORIES), "Amount"].sum())
    if income > 0 and total / income > DISCRETIONARY_INCOME_SHARE:
        return [
            _finding(
                "high",
                "Discretionary > 30% of income",
                f"${total:.0f} on non-essentials ({total / income * 100:.0f}% of income).",
                total,
            )
        ]
    return []


def _dining_frequency(spending: pd.DataFrame) -> list[dict[str, object]]:
    dining = spending[spending["Category"] == "Dining"]
    if len(dining) <= DINING_MAX_VISITS:
        return []
    total = float(dining["Amount"].sum())
    savings = total * DINING_SAVINGS_SHARE
    return [
        _finding(
            "medium",
            f"Dining out {len(dining)}× this period",
            f"${total:.0f} total. Cooking 5 more meals could save ~${savings:.0f}.",
            savings,
        )
    ]


def _foreign_currency(spending: pd.DataFrame) -> list[dict[str, object]]:
    foreign = spending[spending["Currency"] != HOME_CURRENCY]
    if foreign.empty:
        return []
    fees = float(foreign["Amount"].sum()) * FX_FEE_RATE
    return [
        _finding(
            "medium",
            f"{len(foreign)} foreign currency txns",
            f"~${fees:.0f} in fees. Use multi-currency card (Wise, YouTrip).",
            fees,
        )
    ]


def detect_leakages(df: pd.DataFrame, income: float) -> pd.DataFrame:
    """Run every leakage check and rank findings by estimated amount.

    All four checks always run; ties keep the order in which checks emit.
    """
    spending = df[df["Type"] != "income"]
    findings = (
        _recurring_merchants(spending)
        + _discretionary_overspend(spending, income)
        + _dining_frequency(spending)
        + _foreign_currency(spending)
    )
    out = pd.DataFrame(findings, columns=FINDING_COLUMNS)
    return out.sort_values("Amount", ascending=False, kind="stable").reset_index(drop=True)


def potential_savings(findings: pd.DataFrame) -> float:
    return float(findings["Amount"].sum()) if not findings.empty else 0.0
