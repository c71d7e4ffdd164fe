"""Category display table shared by the reward benefit lines and the dashboard."""

FALLBACK_COLOR = "#868E96"
FALLBACK_ICON = "•"

CATEGORY_CONFIG = {
    "Dining": {"color": "#FF6B6B", "icon": "🍽️"},
    "Groceries": {"color": "#51CF66", "icon": "🛒"},
    "Transport": {"color": "#339AF0", "icon": "🚗"},
    "Shopping": {"color": "#F06595", "icon": "🛍️"},
    "Entertainment": {"color": "#845EF7", "icon": "🎬"},
    "Fitness": {"color": "#20C997", "icon": "💪"},
    "Healthcare": {"color": "#FF8787", "icon": "🏥"},
    "Insurance": {"color": "#868E96", "icon": "🛡️"},
    "Utilities": {"color": "#22B8CF", "icon": "⚡"},
    "Travel": {"color": "#FCC419", "icon": "✈️"},
    "Petrol": {"color": "#94D82D", "icon": "⛽"},
    "Online Services": {"color": "#BE4BDB", "icon": "💻"},
    "Bills & Payments": {"color": "#ADB5BD", "icon": "📄"},
    "Transfers": {"color": "#74C0FC", "icon": "🔄"},
    "Education": {"color": "#4DABF7", "icon": "📚"},
    "Government": {"color": "#FA5252", "icon": "🏛️"},
    "Advertising & Marketing": {"color": "#E599F7", "icon": "📢"},
    "Income & Refunds": {"color": "#69DB7C", "icon": "💰"},
    "ATM Cash": {"color": "#FFD43B", "icon": "🏧"},
    "Others": {"color": "#868E96", "icon": "📦"},
}

INCOME_CATEGORY = "Income & Refunds"
DEFAULT_CATEGORY = "Others"


def category_color(category: str) -> str:
    return CATEGORY_CONFIG.get(category, {}).get("color", FALLBACK_COLOR)


def category_icon(category: str) -> str:
    return CATEGORY_CONFIG.get(category, {}).get("icon", FALLBACK_ICON)
