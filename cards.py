"""Singapore credit card rulebook and monthly value ranking.

Each card maps spending categories to a reward rule. Cashback rules hold a
fraction of spend and an optional monthly cap in SGD; miles rules hold
miles per dollar (mpd). Two wildcard keys exist besides category names:
``ALL_CATEGORIES`` applies to every category and ``DEFAULT_RATE`` is the
fallback when nothing else matches.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

import pandas as pd

from categories import category_icon

ALL_CATEGORIES = "_all"
DEFAULT_RATE = "_default"

MILE_VALUE_SGD = 0.018
CASHBACK_BENEFIT_MIN_RATE = 0.03
MILES_BENEFIT_MIN_MPD = 1.5
MAX_BENEFIT_LINES = 5

RECOMMENDATION_COLUMNS = [
    "Card",
    "Bank",
    "Type",
    "GrossValue",
    "NetValue",
    "AnnualFee",
    "MinSpend",
    "MeetsMinSpend",
    "Benefits",
    "Note",
]


@dataclass(frozen=True)
class RewardRule:
    """
    Reward rate for one category on one card.

    Fields:
    - rate: fraction of spend for cashback cards, miles per dollar for miles cards
    - cap: optional monthly cashback cap in SGD
    """
    rate: float
    cap: Optional[float] = None


@dataclass(frozen=True)
class Card:
    """
    Static card definition.

    Fields:
    - name: display name, also the rulebook key
    - bank: issuing bank
    - reward_type: 'cashback' | 'miles'
    - annual_fee: annual fee in SGD
    - min_spend: minimum monthly spend to unlock rewards (0 means none)
    - rewards: category (or wildcard key) -> RewardRule
    - note: optional qualification note
    """
    name: str
    bank: str
    reward_type: str  # 'cashback' | 'miles'
    annual_fee: float
    min_spend: float
    rewards: Mapping[str, RewardRule] = field(default_factory=dict)
    note: Optional[str] = None


def _card(name: str, bank: str, reward_type: str, fee: float, min_spend: float, rewards: dict, note=None) -> Card:
    return Card(name, bank, reward_type, fee, min_spend, MappingProxyType(rewards), note)


_CARDS = [
    _card(
        "DBS Live Fresh", "DBS", "cashback", 194, 600,
        {
            "Online Services": RewardRule(0.05, 20),
            "Entertainment": RewardRule(0.05, 20),
            "Dining": RewardRule(0.05, 20),
            "Shopping": RewardRule(0.05, 20),
            DEFAULT_RATE: RewardRule(0.003),
        },
    ),
    _card(
        "DBS Altitude", "DBS", "miles", 193, 0,
        {"Travel": RewardRule(3.0), DEFAULT_RATE: RewardRule(1.2)},
    ),
    _card(
        "OCBC 365", "OCBC", "cashback", 194, 800,
        {
            "Dining": RewardRule(0.06, 80),
            "Groceries": RewardRule(0.03, 80),
            "Transport": RewardRule(0.03, 80),
            "Petrol": RewardRule(0.229, 25),
            DEFAULT_RATE: RewardRule(0.003),
        },
    ),
    _card(
        "UOB One", "UOB", "cashback", 193, 500,
        {ALL_CATEGORIES: RewardRule(0.10, 50), DEFAULT_RATE: RewardRule(0.003)},
        note="5 txns + salary credit to UOB",
    ),
    _card(
        "UOB PRVI Miles", "UOB", "miles", 257, 0,
        {"Travel": RewardRule(2.4), "Dining": RewardRule(2.4), DEFAULT_RATE: RewardRule(1.4)},
    ),
    _card(
        "Citi Cash Back+", "Citi", "cashback", 194, 800,
        {
            "Dining": RewardRule(0.08, 25),
            "Groceries": RewardRule(0.08, 25),
            "Petrol": RewardRule(0.08, 25),
            DEFAULT_RATE: RewardRule(0.003),
        },
    ),
    _card(
        "HSBC Revolution", "HSBC", "cashback", 0, 0,
        {
            "Dining": RewardRule(0.04),
            "Online Services": RewardRule(0.04),
            "Entertainment": RewardRule(0.04),
            DEFAULT_RATE: RewardRule(0.003),
        },
    ),
    _card(
        "AMEX True Cashback", "AMEX", "cashback", 0, 0,
        {ALL_CATEGORIES: RewardRule(0.015), DEFAULT_RATE: RewardRule(0.015)},
    ),
    _card(
        "SC Simply Cash", "SC", "cashback", 193, 0,
        {
            "Dining": RewardRule(0.06, 60),
            "Groceries": RewardRule(0.06, 60),
            "Petrol": RewardRule(0.06, 60),
            DEFAULT_RATE: RewardRule(0.015),
        },
    ),
]

CARD_RULEBOOK: dict[str, Card] = {card.name: card for card in _CARDS}


def resolve_reward_rule(card: Card, category: str) -> RewardRule | None:
    """Category rule, else the card-wide rule, else the default rate."""
    for key in (category, ALL_CATEGORIES, DEFAULT_RATE):
        rule = card.rewards.get(key)
        if rule is not None:
            return rule
    return None


def evaluate_card(card: Card, totals: Mapping[str, float], total_spending: float) -> dict[str, object]:
    """Project one card's monthly reward value for a category spend mix."""
    gross = 0.0
    benefits: list[str] = []

    for category, amount in totals.items():
        rule = resolve_reward_rule(card, category)
        if rule is None:
            continue

        if card.reward_type == "cashback":
            earned = amount * rule.rate
            if rule.cap:
                earned = min(earned, rule.cap)
            gross += earned
            if rule.rate >= CASHBACK_BENEFIT_MIN_RATE:
                benefits.append(
                    f"{category_icon(category)} {category}: {rule.rate * 100:.0f}% → ${earned:.2f}"
                )
        else:
            miles = amount * rule.rate
            gross += miles * MILE_VALUE_SGD
            if rule.rate >= MILES_BENEFIT_MIN_MPD:
                benefits.append(f"{category_icon(category)} {category}: {rule.rate:g} mpd → {miles:.0f} mi")

    return {
        "Card": card.name,
        "Bank": card.bank,
        "Type": card.reward_type,
        "GrossValue": gross,
        "NetValue": gross - card.annual_fee / 12,
        "AnnualFee": card.annual_fee,
        "MinSpend": card.min_spend,
        "MeetsMinSpend": (not card.min_spend) or total_spending >= card.min_spend,
        "Benefits": benefits[:MAX_BENEFIT_LINES],
        "Note": card.note,
    }


def recommend_cards(
    totals: Mapping[str, float],
    total_spending: float,
    rulebook: Mapping[str, Card] | None = None,
    top_n: int = 5,
) -> pd.DataFrame:
    """Rank cards by net monthly value (gross reward minus fee / 12).

    Equal net values keep rulebook order.
    """
    if rulebook is None:
        rulebook = CARD_RULEBOOK

    rows = [evaluate_card(card, totals, total_spending) for card in rulebook.values()]
    out = pd.DataFrame(rows, columns=RECOMMENDATION_COLUMNS)
    out = out.sort_values("NetValue", ascending=False, kind="stable").head(top_n)
    return out.reset_index(drop=True)
