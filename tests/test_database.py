from decimal import Decimal

import pytest

from budget_manager.services.errors import StorageError
from budget_manager.utils.constants import DEFAULT_CATEGORIES


def test_initialize_seeds_defaults(db, category_dao):
    names = {c.name for c in category_dao.get_all()}
    assert names == {c["name"] for c in DEFAULT_CATEGORIES}
    assert db.get_setting("currency_symbol") == "$"


def test_initialize_is_idempotent(db, category_dao):
    db.initialize()
    assert len(category_dao.get_all()) == len(DEFAULT_CATEGORIES)


def test_settings_round_trip(db):
    db.set_setting("currency_symbol", "€")
    assert db.get_setting("currency_symbol") == "€"
    assert db.get_setting("missing", "fallback") == "fallback"


def test_failed_write_rolls_back_and_raises_storage_error(db, category_dao):
    with pytest.raises(StorageError):
        with db.write() as conn:
            conn.execute("INSERT INTO categories(name, kind) VALUES ('Pets', 'expense')")
            conn.execute("INSERT INTO categories(name, kind) VALUES ('Oops', 'transfer')")
    assert category_dao.get_by_name("Pets") is None


def test_database_rejects_non_positive_amounts(db, food):
    with pytest.raises(StorageError):
        with db.write() as conn:
            conn.execute(
                "INSERT INTO expenses(category_id, amount_cents, description, date) "
                "VALUES (?, 0, 'free', '2024-01-01')",
                (food.id,),
            )


def test_empty_range_aggregates(expense_dao, income_dao):
    assert expense_dao.get_total("2024-01-01", "2024-12-31") == Decimal("0.00")
    assert income_dao.get_total("2024-01-01", "2024-12-31") == Decimal("0.00")
    assert expense_dao.get_totals_by_category("2024-01-01", "2024-12-31") == []
    assert expense_dao.get_monthly_totals("2024-01-01", "2024-12-31") == {}


def test_range_bounds_are_inclusive(sample_data, expense_dao):
    assert expense_dao.get_total("2024-01-03", "2024-01-03") == Decimal("4.50")
    assert expense_dao.get_total("2024-01-01", "2024-01-31") == Decimal("190.40")


def test_total_for_one_category(sample_data, expense_dao, food, travel):
    assert expense_dao.get_total("2024-01-01", "2024-01-31", food.id) == Decimal("70.40")
    assert expense_dao.get_total("2024-01-01", "2024-01-31", travel.id) == Decimal("120.00")


def test_totals_by_category_largest_first(sample_data, expense_dao):
    rows = expense_dao.get_totals_by_category("2024-01-01", "2024-01-31")
    assert [(r["category"], r["total"]) for r in rows] == [
        ("Travel", Decimal("120.00")),
        ("Food & Dining", Decimal("70.40")),
    ]


def test_monthly_totals(sample_data, expense_dao, income_dao):
    assert expense_dao.get_monthly_totals("2024-01-01", "2024-02-29") == {
        "2024-01": Decimal("190.40"),
        "2024-02": Decimal("5.00"),
    }
    assert income_dao.get_monthly_totals("2024-02-01", "2024-02-29") == {
        "2024-02": Decimal("2500.00"),
    }


def test_get_all_newest_first(sample_data, expense_dao):
    dates = [tx.date for tx in expense_dao.get_all()]
    assert dates == sorted(dates, reverse=True)


def test_transaction_row_carries_category(sample_data, expense_dao):
    tx = expense_dao.get_recent(1)[0]
    assert tx.kind == "expense"
    assert tx.category_name == "Food & Dining"
    assert tx.amount == Decimal("5.00")


def test_delete_category_cascades(sample_data, category_dao, expense_dao, budget_dao, food):
    budget_dao.create(food.id, Decimal("100.00"), "monthly", "2024-01-01", "2024-01-31")
    assert category_dao.is_referenced(food.id)

    assert category_dao.delete(food.id) is True

    assert all(tx.category_id != food.id for tx in expense_dao.get_all())
    assert budget_dao.get_all() == []
    assert category_dao.get_by_id(food.id) is None


def test_delete_missing_rows_returns_false(category_dao, expense_dao, income_dao, budget_dao):
    assert category_dao.delete(9999) is False
    assert expense_dao.delete(9999) is False
    assert income_dao.delete(9999) is False
    assert budget_dao.delete(9999) is False


def test_category_cache_sees_new_rows(category_dao):
    before = len(category_dao.get_all())
    category_dao.create("Pets", "expense", "#123456")
    assert len(category_dao.get_all()) == before + 1


def test_active_budgets(budget_dao, food, travel):
    budget_dao.create(food.id, Decimal("100.00"), "monthly", "2024-01-01", "2024-01-31")
    budget_dao.create(travel.id, Decimal("500.00"), "yearly", "2024-01-01", "2024-12-31")
    active = budget_dao.get_active("2024-02-10")
    assert [b.category_name for b in active] == ["Travel"]
