"""Demo transactions for trying the dashboard without a sheet."""

from __future__ import annotations

import datetime
import math

import pandas as pd

from categories import INCOME_CATEGORY
from parsing import DEFAULT_CURRENCY, build_transactions_frame

DEMO_ITEMS = [
    ("Din Tai Fung", "Dining", 45.8),
    ("NTUC FairPrice", "Groceries", 67.3),
    ("Grab", "Transport", 12.5),
    ("Netflix", "Entertainment", 15.98),
    ("Starbucks", "Dining", 8.9),
    ("Shell", "Petrol", 85.0),
    ("Guardian", "Healthcare", 23.4),
    ("Shopee", "Shopping", 34.5),
    ("SP Services", "Utilities", 120.0),
    ("Singtel", "Utilities", 45.0),
    ("Klook", "Travel", 250.0),
    ("ActiveSG", "Fitness", 2.5),
    ("AIA", "Insurance", 180.0),
    ("McDonald's", "Dining", 9.5),
    ("Cold Storage", "Groceries", 55.2),
    ("Spotify", "Entertainment", 9.99),
    ("Grab", "Transport", 15.3),
    ("Toast Box", "Dining", 6.8),
    ("Amazon", "Shopping", 42.0),
    ("Comfort Taxi", "Transport", 18.0),
    ("Salary Credit", INCOME_CATEGORY, 5200.0),
    ("Shopee Refund", INCOME_CATEGORY, 15.0),
    ("Starbucks", "Dining", 7.5),
    ("Starbucks", "Dining", 8.2),
    ("Adobe", "Online Services", 28.0),
    ("Crystal Jade", "Dining", 38.0),
    ("NTUC FairPrice", "Groceries", 82.1),
    ("OCBC ATM", "ATM Cash", 200.0),
]
DEMO_BANKS = ["DBS", "UOB", "OCBC"]
DEMO_CARDS = ["3115", "0076", "4949"]


def generate_demo_transactions(now: datetime.datetime | None = None) -> pd.DataFrame:
    """Build a demo transactions frame spread over the month before ``now``."""
    current = now if now is not None else datetime.datetime.now()
    records = []
    for idx, (merchant, category, amount) in enumerate(DEMO_ITEMS):
        records.append(
            {
                "Date": current - datetime.timedelta(days=math.floor(idx * 1.1)),
                "Bank": DEMO_BANKS[idx % 3],
                "Card": DEMO_CARDS[idx % 3],
                "Merchant": merchant,
                "Amount": amount,
                "Category": category,
                "Notes": "",
                "Currency": DEFAULT_CURRENCY,
                "Type": "income" if category == INCOME_CATEGORY else "spending",
            }
        )
    return build_transactions_frame(records)
