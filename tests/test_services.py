from datetime import date
from decimal import Decimal

import pytest

from budget_manager.services.errors import ValidationError
from budget_manager.services.transaction_filter import TransactionFilter


# ── Categories ──────────────────────────────────────────────────────────────

def test_create_category_normalises_input(category_service):
    cat = category_service.create("  Pets ", "expense", "a1b2c3")
    assert cat.name == "Pets"
    assert cat.color_hex == "#a1b2c3"


@pytest.mark.parametrize("name, kind, color", [
    ("", "expense", "#ffffff"),
    ("Pets", "transfer", "#ffffff"),
    ("Pets", "expense", "not-a-color"),
    ("salary", "income", "#ffffff"),   # duplicate, case-insensitive
])
def test_create_category_rejects(category_service, name, kind, color):
    with pytest.raises(ValidationError):
        category_service.create(name, kind, color)


def test_get_by_kind(category_service):
    income = category_service.get_by_kind("income")
    assert {c.name for c in income} == {"Salary", "Freelance", "Investment", "Business", "Other Income"}
    with pytest.raises(ValidationError):
        category_service.get_by_kind("both")


def test_rename_used_category_but_not_change_kind(sample_data, category_service, food):
    renamed = category_service.update(food.id, "Food", "expense", food.color_hex)
    assert renamed.name == "Food"
    with pytest.raises(ValidationError):
        category_service.update(food.id, "Food", "income", food.color_hex)


def test_change_kind_of_unused_category(category_service):
    cat = category_service.create("Gifts", "expense")
    assert category_service.update(cat.id, "Gifts", "income", cat.color_hex).kind == "income"


def test_update_missing_category(category_service):
    with pytest.raises(ValidationError):
        category_service.update(9999, "Nope", "expense", "#ffffff")


# ── Transactions ────────────────────────────────────────────────────────────

def test_create_expense(tx_service, food):
    tx = tx_service.create("expense", str(food.id), "12.30", "2024-03-04", "  Lunch ")
    assert tx.id is not None
    assert tx.amount == Decimal("12.30")
    assert tx.description == "Lunch"
    assert tx_service.get_by_id("expense", tx.id) == tx


@pytest.mark.parametrize("kind, amount, day, description", [
    ("expense", "0", "2024-03-04", "Lunch"),
    ("expense", "-3", "2024-03-04", "Lunch"),
    ("expense", "1.999", "2024-03-04", "Lunch"),
    ("expense", "abc", "2024-03-04", "Lunch"),
    ("expense", "5", "04/03/2024x", "Lunch"),
    ("expense", "5", "2024-03-04", "   "),
    ("expense", "99999999999999999999", "2024-03-04", "Lunch"),
    ("expense", "1e30", "2024-03-04", "Lunch"),
    ("expense", "5", "2024-03-04", 123),
    ("transfer", "5", "2024-03-04", "Lunch"),
])
def test_create_transaction_rejects(tx_service, food, kind, amount, day, description):
    with pytest.raises(ValidationError):
        tx_service.create(kind, food.id, amount, day, description)
    assert tx_service.get_all() == []


def test_category_kind_must_match(tx_service, food, salary):
    with pytest.raises(ValidationError):
        tx_service.create("income", food.id, "10", "2024-03-04", "Refund")
    with pytest.raises(ValidationError):
        tx_service.create("expense", salary.id, "10", "2024-03-04", "Oops")


def test_missing_category(tx_service):
    with pytest.raises(ValidationError):
        tx_service.create("expense", 9999, "10", "2024-03-04", "Ghost")
    with pytest.raises(ValidationError):
        tx_service.create("expense", None, "10", "2024-03-04", "Ghost")


def test_update_uses_same_validation(tx_service, food):
    tx = tx_service.create("expense", food.id, "10", "2024-03-04", "Lunch")
    updated = tx_service.update("expense", tx.id, food.id, "11.50", "2024-03-05", "Late lunch")
    assert updated.amount == Decimal("11.50")
    assert updated.date == "2024-03-05"
    with pytest.raises(ValidationError):
        tx_service.update("expense", tx.id, food.id, "0", "2024-03-05", "Late lunch")
    with pytest.raises(ValidationError):
        tx_service.update("expense", 9999, food.id, "1", "2024-03-05", "Nope")


def test_delete_transaction(sample_data, tx_service):
    tx = tx_service.get_all("income")[0]
    assert tx_service.delete("income", tx.id) is True
    assert tx_service.get_by_id("income", tx.id) is None
    assert tx_service.delete("income", tx.id) is False


def test_get_all_merges_kinds_newest_first(sample_data, tx_service):
    rows = tx_service.get_all()
    assert len(rows) == 7
    assert {tx.kind for tx in rows} == {"expense", "income"}
    assert [tx.date for tx in rows] == sorted((tx.date for tx in rows), reverse=True)


def test_get_recent(sample_data, tx_service):
    recent = tx_service.get_recent(3)
    assert [tx.date for tx in recent] == ["2024-02-29", "2024-02-02", "2024-01-31"]


# ── Filtering ───────────────────────────────────────────────────────────────

def test_search_coffee_in_january(sample_data, tx_service):
    f = TransactionFilter.from_params({
        "search": "coffee", "dateFrom": "2024-01-01", "dateTo": "2024-01-31",
    })
    rows = tx_service.search(f)
    assert [tx.description for tx in rows] == ["COFFEE beans", "Morning coffee"]


def test_filters_are_anded(sample_data, tx_service, food, travel):
    assert len(tx_service.search(TransactionFilter(category_id=travel.id))) == 1
    assert tx_service.search(TransactionFilter(category_id=travel.id, search="coffee")) == []
    income_only = tx_service.search(TransactionFilter(kind="income"))
    assert [tx.kind for tx in income_only] == ["income", "income"]
    feb_food = tx_service.search(TransactionFilter(category_id=food.id, date_from="2024-02-01"))
    assert [tx.description for tx in feb_food] == ["Coffee with Sam"]


def test_empty_filter_returns_everything(sample_data, tx_service):
    assert len(tx_service.search(TransactionFilter())) == 7


@pytest.mark.parametrize("params", [
    {"category": "food"},
    {"type": "transfer"},
    {"dateFrom": "last week"},
    {"dateTo": "2024-02-31"},
])
def test_malformed_filter_params(params):
    with pytest.raises(ValidationError):
        TransactionFilter.from_params(params)


def test_filter_type_all_means_no_constraint():
    assert TransactionFilter.from_params({"type": "all"}).kind == ""
    assert TransactionFilter.from_params({}).category_id is None


# ── Budgets ─────────────────────────────────────────────────────────────────

def test_budget_end_date_is_derived(budget_service, food):
    b = budget_service.create(food.id, "300", "monthly", "2024-01-15")
    assert b.end_date == "2024-02-14"
    weekly = budget_service.create(food.id, "50", "weekly", "2024-01-01")
    assert weekly.end_date == "2024-01-07"


def test_budget_spent_covers_its_own_window(sample_data, budget_service, food):
    b = budget_service.create(food.id, "100.00", "monthly", "2024-01-01")
    assert b.spent_amount == Decimal("70.40")
    assert b.status == "Near Limit"
    assert b.remaining == Decimal("29.60")


def test_budget_status_list(sample_data, budget_service, food, travel):
    budget_service.create(food.id, "1000", "monthly", "2024-01-01")
    budget_service.create(travel.id, "100", "monthly", "2024-01-01")
    statuses = {b.category_name: b.status for b in budget_service.get_budget_status()}
    assert statuses == {"Food & Dining": "On Track", "Travel": "Over Budget"}


def test_active_budgets(budget_service, food, travel):
    budget_service.create(food.id, "100", "monthly", "2024-01-01")
    budget_service.create(travel.id, "100", "weekly", "2024-02-01")
    active = budget_service.get_active_budget_status(date(2024, 1, 20))
    assert [b.category_name for b in active] == ["Food & Dining"]


@pytest.mark.parametrize("amount, period, start", [
    ("0", "monthly", "2024-01-01"),
    ("100", "daily", "2024-01-01"),
    ("100", "monthly", "soon"),
])
def test_budget_validation(budget_service, food, amount, period, start):
    with pytest.raises(ValidationError):
        budget_service.create(food.id, amount, period, start)


def test_budget_needs_expense_category(budget_service, salary):
    with pytest.raises(ValidationError):
        budget_service.create(salary.id, "100", "monthly", "2024-01-01")


def test_update_and_delete_budget(budget_service, food):
    b = budget_service.create(food.id, "100", "monthly", "2024-01-01")
    updated = budget_service.update(b.id, food.id, "250", "yearly", "2024-01-01")
    assert updated.amount == Decimal("250.00")
    assert updated.end_date == "2024-12-31"
    assert budget_service.delete(b.id) is True
    assert budget_service.get_by_id(b.id) is None


# ── Reports ─────────────────────────────────────────────────────────────────

def test_report_totals_on_empty_database(report_service):
    assert report_service.get_total("expense", "2024-01-01", "2024-12-31") == Decimal("0.00")
    assert report_service.get_totals_by_category("income", "2024-01-01", "2024-12-31") == {}
    assert report_service.get_chart_data() == {"labels": [], "values": []}
    assert report_service.get_summary().savings_rate == 0


def test_totals_by_category(sample_data, report_service):
    assert report_service.get_totals_by_category("expense", "2024-01-01", "2024-01-31") == {
        "Travel": Decimal("120.00"),
        "Food & Dining": Decimal("70.40"),
    }


def test_expense_plus_income_equals_transaction_list(sample_data, report_service, tx_service):
    start, end = "2024-01-10", "2024-02-10"
    combined = report_service.get_total("expense", start, end) + report_service.get_total("income", start, end)
    listed = sum(
        (tx.amount for tx in tx_service.search(TransactionFilter(date_from=start, date_to=end))),
        Decimal("0.00"),
    )
    assert combined == listed


def test_summary_for_range(sample_data, report_service):
    s = report_service.get_summary("2024-01-01", "2024-01-31")
    assert s.total_income == Decimal("2500.00")
    assert s.total_expenses == Decimal("190.40")
    assert s.net_balance == Decimal("2309.60")


def test_chart_data(sample_data, report_service):
    assert report_service.get_chart_data("2024-01-01", "2024-01-31") == {
        "labels": ["Travel", "Food & Dining"],
        "values": [120.0, 70.4],
    }


def test_monthly_trend_is_zero_filled(sample_data, report_service):
    trend = report_service.get_monthly_trend(3, today=date(2024, 2, 15))
    assert [m["month"] for m in trend] == ["2023-12", "2024-01", "2024-02"]
    assert [m["income"] for m in trend] == [Decimal("0.00"), Decimal("2500.00"), Decimal("2500.00")]
    assert [m["expense"] for m in trend] == [Decimal("0.00"), Decimal("190.40"), Decimal("5.00")]
    assert trend[2]["net"] == Decimal("2495.00")


def test_report_range_validation(report_service):
    with pytest.raises(ValidationError):
        report_service.get_summary("2024-02-01", "2024-01-01")
    with pytest.raises(ValidationError):
        report_service.get_total("transfer")
    with pytest.raises(ValidationError):
        report_service.get_monthly_trend(0)
    with pytest.raises(ValidationError):
        report_service.get_monthly_trend(100000)


def test_export_csv(sample_data, report_service):
    rows = report_service.export_csv(TransactionFilter(date_from="2024-02-01"))
    assert rows[0] == ["Date", "Type", "Category", "Description", "Amount"]
    assert rows[1:] == [
        ["2024-02-29", "income", "Salary", "February salary", "2500.00"],
        ["2024-02-02", "expense", "Food & Dining", "Coffee with Sam", "5.00"],
    ]
