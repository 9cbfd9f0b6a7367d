import pytest

from budget_manager.database.budget_dao import BudgetDAO
from budget_manager.database.category_dao import CategoryDAO
from budget_manager.database.db_manager import DatabaseManager
from budget_manager.database.transaction_dao import ExpenseDAO, IncomeDAO
from budget_manager.main import build_services


@pytest.fixture
def db(tmp_path):
    manager = DatabaseManager(str(tmp_path / "budget.db"))
    manager.initialize()
    yield manager
    manager.close()


@pytest.fixture
def category_dao(db):
    return CategoryDAO(db)


@pytest.fixture
def expense_dao(db):
    return ExpenseDAO(db)


@pytest.fixture
def income_dao(db):
    return IncomeDAO(db)


@pytest.fixture
def budget_dao(db):
    return BudgetDAO(db)


@pytest.fixture
def services(db):
    return build_services(db)


@pytest.fixture
def category_service(services):
    return services["category_service"]


@pytest.fixture
def tx_service(services):
    return services["tx_service"]


@pytest.fixture
def budget_service(services):
    return services["budget_service"]


@pytest.fixture
def report_service(services):
    return services["report_service"]


@pytest.fixture
def food(category_dao):
    return category_dao.get_by_name("Food & Dining")


@pytest.fixture
def travel(category_dao):
    return category_dao.get_by_name("Travel")


@pytest.fixture
def salary(category_dao):
    return category_dao.get_by_name("Salary")


@pytest.fixture
def sample_data(tx_service, food, travel, salary):
    """A small January/February 2024 ledger."""
    tx_service.create("expense", food.id, "4.50", "2024-01-03", "Morning coffee")
    tx_service.create("expense", food.id, "62.10", "2024-01-12", "Groceries")
    tx_service.create("expense", food.id, "3.80", "2024-01-28", "COFFEE beans")
    tx_service.create("expense", travel.id, "120.00", "2024-01-20", "Train tickets")
    tx_service.create("expense", food.id, "5.00", "2024-02-02", "Coffee with Sam")
    tx_service.create("income", salary.id, "2500.00", "2024-01-31", "January salary")
    tx_service.create("income", salary.id, "2500.00", "2024-02-29", "February salary")


@pytest.fixture
def client(services):
    from budget_manager.web.api import create_app

    app = create_app(**services)
    app.config["TESTING"] = True
    return app.test_client()


