"""Human-readable metric definitions for the app."""

METRIC_GUIDE = [
    {
        "Metric": "Spending",
        "Meaning": "Total outgoing amount in the selected period.",
        "Formula": "sum(Amount where Type = spending)",
    },
    {
        "Metric": "Income",
        "Meaning": "Total incoming amount (salary, refunds) in the selected period.",
        "Formula": "sum(Amount where Type = income)",
    },
    {
        "Metric": "Net cashflow",
        "Meaning": "How much you gained or lost overall in the selected period.",
        "Formula": "Income - Spending",
    },
    {
        "Metric": "Avg spend / tx",
        "Meaning": "Average amount of a spending transaction.",
        "Formula": "Spending / count(spending transactions)",
    },
    {
        "Metric": "Budget used",
        "Meaning": "Spending as a share of income, capped at 100%.",
        "Formula": "min(100, Spending / Income * 100)",
    },
    {
        "Metric": "Daily spending",
        "Meaning": "Spending per day over the last 14 days including today.",
        "Formula": "sum(Amount) per calendar day",
    },
    {
        "Metric": "Recurring merchant",
        "Meaning": "Merchant seen 3+ times with small tickets; often a subscription.",
        "Formula": "count >= 3, avg < 50, total > 30",
    },
    {
        "Metric": "Discretionary share",
        "Meaning": "Dining, Entertainment, Shopping and Online Services against income.",
        "Formula": "Discretionary / Income > 30%",
    },
    {
        "Metric": "Dining savings",
        "Meaning": "Estimated saving from cooking more when dining out over 20 times.",
        "Formula": "Dining * 25%",
    },
    {
        "Metric": "FX fees",
        "Meaning": "Estimated foreign transaction fees on non-SGD spending.",
        "Formula": "Foreign spend * 3.5%",
    },
    {
        "Metric": "Card gross value",
        "Meaning": "Projected monthly cashback, or miles valued at 1.8 cents each.",
        "Formula": "sum(min(spend * rate, cap)) per category",
    },
    {
        "Metric": "Card net value",
        "Meaning": "Gross value after spreading the annual fee over 12 months.",
        "Formula": "Gross - AnnualFee / 12",
    },
]
