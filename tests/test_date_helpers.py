from datetime import date

import pytest

from budget_manager.services.errors import ValidationError
from budget_manager.utils.date_helpers import (
    add_months, format_display_date, friendly_month, last_n_months, month_range,
    parse_display_date, period_end_date, require_date, shift_month,
)


@pytest.mark.parametrize("start, period, end", [
    (date(2024, 1, 15), "monthly", date(2024, 2, 14)),
    (date(2024, 1, 31), "monthly", date(2024, 2, 28)),
    (date(2024, 12, 1), "monthly", date(2024, 12, 31)),
    (date(2024, 1, 1), "weekly", date(2024, 1, 7)),
    (date(2024, 12, 29), "weekly", date(2025, 1, 4)),
    (date(2024, 1, 1), "yearly", date(2024, 12, 31)),
    (date(2023, 7, 10), "yearly", date(2024, 7, 9)),
])
def test_period_end_date(start, period, end):
    assert period_end_date(start, period) == end


def test_period_end_date_rejects_unknown_period():
    with pytest.raises(ValidationError):
        period_end_date(date(2024, 1, 1), "daily")


def test_add_months_clamps_to_month_end():
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)
    assert add_months(date(2024, 3, 15), -3) == date(2023, 12, 15)


def test_month_navigation():
    assert month_range("2024-02") == ("2024-02-01", "2024-02-29")
    assert month_range("2023-12") == ("2023-12-01", "2023-12-31")
    assert shift_month("2024-01", -1) == "2023-12"
    assert shift_month("2024-12", 1) == "2025-01"
    assert friendly_month("2026-02") == "February 2026"
    assert friendly_month("soon") == "soon"


def test_month_range_rejects_bad_month():
    with pytest.raises(ValidationError):
        month_range("2024-13")


def test_last_n_months_is_oldest_first():
    assert last_n_months(3, date(2024, 2, 15)) == ["2023-12", "2024-01", "2024-02"]
    assert last_n_months(1, date(2024, 2, 15)) == ["2024-02"]


def test_require_date_normalises():
    assert require_date("2024-01-05") == "2024-01-05"
    assert require_date(" 2024/01/05 ") == "2024-01-05"
    assert require_date(date(2024, 1, 5)) == "2024-01-05"


@pytest.mark.parametrize("raw", ["", None, "yesterday", "2024-13-01", "2024-02-30"])
def test_require_date_rejects(raw):
    with pytest.raises(ValidationError):
        require_date(raw)


def test_display_format_round_trip():
    assert format_display_date("2024-03-09", "DD/MM/YYYY") == "09/03/2024"
    assert parse_display_date("09/03/2024", "DD/MM/YYYY") == date(2024, 3, 9)
