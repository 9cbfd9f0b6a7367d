from decimal import Decimal

APP_NAME = "Budget Manager"
APP_WIDTH = 1200
APP_HEIGHT = 750
DB_FILE = "budget.db"
DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# Full-history window used when a caller asks for "all time" totals
ALL_TIME_START = "2000-01-01"
ALL_TIME_END = "2099-12-31"

ZERO = Decimal("0.00")
CENT = Decimal("0.01")
# Largest single amount; its cents stay well inside SQLite's 64-bit INTEGER
MAX_AMOUNT = Decimal("999999999999.99")

KIND_EXPENSE = "expense"
KIND_INCOME = "income"
CATEGORY_KINDS = (KIND_EXPENSE, KIND_INCOME)

PERIOD_WEEKLY = "weekly"
PERIOD_MONTHLY = "monthly"
PERIOD_YEARLY = "yearly"
BUDGET_PERIODS = (PERIOD_WEEKLY, PERIOD_MONTHLY, PERIOD_YEARLY)

MAX_TREND_MONTHS = 120

# Budget status tiers, in percent of the budget amount spent
NEAR_LIMIT_PERCENT = Decimal("70")
OVER_BUDGET_PERCENT = Decimal("90")

STATUS_ON_TRACK = "On Track"
STATUS_NEAR_LIMIT = "Near Limit"
STATUS_OVER_BUDGET = "Over Budget"

STATUS_COLORS = {
    STATUS_ON_TRACK:    "#4CAF50",
    STATUS_NEAR_LIMIT:  "#FF9800",
    STATUS_OVER_BUDGET: "#F44336",
}

KIND_COLORS = {
    KIND_INCOME:  "#4CAF50",
    KIND_EXPENSE: "#F44336",
}

DEFAULT_CATEGORY_COLOR = "#3498db"

DEFAULT_CATEGORIES = [
    {"name": "Food & Dining",     "kind": KIND_EXPENSE, "color_hex": "#FF9800"},
    {"name": "Transportation",    "kind": KIND_EXPENSE, "color_hex": "#2196F3"},
    {"name": "Shopping",          "kind": KIND_EXPENSE, "color_hex": "#E91E63"},
    {"name": "Entertainment",     "kind": KIND_EXPENSE, "color_hex": "#FF5722"},
    {"name": "Bills & Utilities", "kind": KIND_EXPENSE, "color_hex": "#9C27B0"},
    {"name": "Healthcare",        "kind": KIND_EXPENSE, "color_hex": "#00BCD4"},
    {"name": "Education",         "kind": KIND_EXPENSE, "color_hex": "#3F51B5"},
    {"name": "Travel",            "kind": KIND_EXPENSE, "color_hex": "#795548"},
    {"name": "Salary",            "kind": KIND_INCOME,  "color_hex": "#4CAF50"},
    {"name": "Freelance",         "kind": KIND_INCOME,  "color_hex": "#8BC34A"},
    {"name": "Investment",        "kind": KIND_INCOME,  "color_hex": "#009688"},
    {"name": "Business",          "kind": KIND_INCOME,  "color_hex": "#CDDC39"},
    {"name": "Other Income",      "kind": KIND_INCOME,  "color_hex": "#888888"},
]

DEFAULT_SETTINGS = [
    ("appearance_mode", "system"),
    ("currency_symbol", "$"),
    ("date_format", "MM/DD/YYYY"),
]
