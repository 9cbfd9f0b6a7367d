import calendar
from datetime import date, datetime, timedelta

from budget_manager.services.errors import ValidationError
from budget_manager.utils.constants import (
    DATE_FORMAT, MONTH_FORMAT, PERIOD_MONTHLY, PERIOD_WEEKLY, PERIOD_YEARLY,
)

DATE_FORMAT_OPTIONS = ["MM/DD/YYYY", "DD/MM/YYYY", "YYYY-MM-DD", "DD.MM.YYYY", "MM-DD-YYYY"]

# Display format key -> strftime pattern
_STRFTIME_MAP = dict(zip(
    DATE_FORMAT_OPTIONS,
    ["%m/%d/%Y", "%d/%m/%Y", "%Y-%m-%d", "%d.%m.%Y", "%m-%d-%Y"],
))
_ISO_PATTERNS = ("%Y-%m-%d", "%Y/%m/%d", "%Y.%m.%d")


def today() -> date:
    return date.today()


def today_str() -> str:
    return format_date(today())


def current_month_str() -> str:
    return today().strftime(MONTH_FORMAT)


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def parse_date(date_str: str) -> date | None:
    """Parse YYYY-MM-DD (or / and . separated), None if it doesn't parse."""
    if not date_str:
        return None
    for pattern in _ISO_PATTERNS:
        try:
            return datetime.strptime(date_str, pattern).date()
        except ValueError:
            pass
    return None


def require_date(value, field: str = "date") -> str:
    """Normalise a date or date string to YYYY-MM-DD, raising ValidationError."""
    if isinstance(value, date):
        return format_date(value)
    d = parse_date(str(value).strip()) if value else None
    if d is None:
        raise ValidationError(f"Invalid {field}: {value!r}. Use YYYY-MM-DD.")
    return format_date(d)


def add_months(d: date, n: int) -> date:
    """Move d by n calendar months; a day past the target month's end becomes its last day."""
    year, month0 = divmod(d.year * 12 + d.month - 1 + n, 12)
    last_day = calendar.monthrange(year, month0 + 1)[1]
    return date(year, month0 + 1, min(d.day, last_day))


def _month_start(month_str: str) -> date:
    try:
        return datetime.strptime(month_str or "", MONTH_FORMAT).date()
    except ValueError:
        raise ValidationError(f"Invalid month: {month_str!r}. Use YYYY-MM.") from None


def month_range(month_str: str) -> tuple[str, str]:
    """First and last day of a YYYY-MM month as storage strings."""
    first = _month_start(month_str)
    last = add_months(first, 1) - timedelta(days=1)
    return format_date(first), format_date(last)


def shift_month(month_str: str, n: int) -> str:
    return add_months(_month_start(month_str), n).strftime(MONTH_FORMAT)


def last_n_months(n: int, ref: date | None = None) -> list[str]:
    """The n YYYY-MM keys ending with ref's month, oldest first."""
    first = (ref or today()).replace(day=1)
    return [add_months(first, -i).strftime(MONTH_FORMAT) for i in range(n - 1, -1, -1)]


def friendly_month(month_str: str) -> str:
    """'2026-02' -> 'February 2026'; unparseable input is returned as is."""
    try:
        return _month_start(month_str).strftime("%B %Y")
    except ValidationError:
        return month_str


def period_end_date(start: date, period: str) -> date:
    """Last day (inclusive) of a budget period beginning on start."""
    if period == PERIOD_WEEKLY:
        return start + timedelta(days=6)
    if period == PERIOD_MONTHLY:
        return add_months(start, 1) - timedelta(days=1)
    if period == PERIOD_YEARLY:
        return add_months(start, 12) - timedelta(days=1)
    raise ValidationError(f"Invalid period: {period!r}.")


def format_display_date(date_str: str, fmt_key: str = "MM/DD/YYYY") -> str:
    d = parse_date(date_str)
    if d is None:
        return date_str
    return d.strftime(_STRFTIME_MAP.get(fmt_key, "%m/%d/%Y"))


def parse_display_date(display_str: str, fmt_key: str) -> date | None:
    """Parse text typed in the chosen display format, falling back to ISO."""
    if not display_str:
        return None
    try:
        return datetime.strptime(display_str.strip(), _STRFTIME_MAP.get(fmt_key, "%m/%d/%Y")).date()
    except ValueError:
        return parse_date(display_str)
