import pytest

from budget_manager.services.errors import StorageError


def test_list_categories(client):
    resp = client.get("/api/categories")
    assert resp.status_code == 200
    assert len(resp.get_json()) == 13

    income = client.get("/api/categories?type=income").get_json()
    assert {c["type"] for c in income} == {"income"}
    assert len(income) == 5


def test_list_categories_bad_type(client):
    resp = client.get("/api/categories?type=both")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_create_update_delete_category(client):
    resp = client.post("/api/categories", json={"name": "Pets", "type": "expense", "color": "#112233"})
    assert resp.status_code == 201
    cat = resp.get_json()
    assert cat["name"] == "Pets"

    resp = client.put(f"/api/categories/{cat['id']}", json={"name": "Pet Care"})
    assert resp.status_code == 200
    assert resp.get_json()["name"] == "Pet Care"
    assert resp.get_json()["color"] == "#112233"

    assert client.delete(f"/api/categories/{cat['id']}").status_code == 204
    assert client.delete(f"/api/categories/{cat['id']}").status_code == 404
    assert client.put(f"/api/categories/{cat['id']}", json={"name": "x"}).status_code == 404


def test_duplicate_category_is_rejected(client):
    resp = client.post("/api/categories", json={"name": "SALARY", "type": "income"})
    assert resp.status_code == 400


@pytest.mark.parametrize("payload", [
    {"name": 5, "type": "expense"},
    {"name": "Pets", "type": "expense", "color": 123},
    {"name": "Pets", "type": ["expense"]},
])
def test_category_fields_must_be_text(client, payload):
    resp = client.post("/api/categories", json=payload)
    assert resp.status_code == 400
    assert resp.get_json()["error"]


def test_rename_category_to_non_text(client, food):
    assert client.put(f"/api/categories/{food.id}", json={"name": 5}).status_code == 400


def test_post_requires_json_object(client):
    resp = client.post("/api/transactions", data="nope", content_type="text/plain")
    assert resp.status_code == 400


def test_create_and_fetch_transaction(client, food):
    resp = client.post("/api/transactions", json={
        "type": "expense", "categoryId": food.id, "amount": 12.5,
        "description": "Lunch", "date": "2024-03-01",
    })
    assert resp.status_code == 201
    tx = resp.get_json()
    assert tx["amount"] == 12.5
    assert tx["category"] == "Food & Dining"

    fetched = client.get(f"/api/expenses/{tx['id']}")
    assert fetched.status_code == 200
    assert fetched.get_json()["description"] == "Lunch"

    # Expense ids are not income ids
    assert client.get(f"/api/income/{tx['id']}").status_code == 404

    assert client.delete(f"/api/expenses/{tx['id']}").status_code == 204
    assert client.get(f"/api/expenses/{tx['id']}").status_code == 404


@pytest.mark.parametrize("payload", [
    {"type": "expense", "amount": -1, "description": "x", "date": "2024-03-01"},
    {"type": "expense", "amount": "5", "description": "", "date": "2024-03-01"},
    {"type": "expense", "amount": "5", "description": "x", "date": "March 1st"},
    {"type": "transfer", "amount": "5", "description": "x", "date": "2024-03-01"},
    {"type": "expense", "amount": "99999999999999999999", "description": "x", "date": "2024-03-01"},
    {"type": "expense", "amount": "1e30", "description": "x", "date": "2024-03-01"},
    {"type": "expense", "amount": "5", "description": 123, "date": "2024-03-01"},
    {"type": 1, "amount": "5", "description": "x", "date": "2024-03-01"},
    {"type": ["expense"], "amount": "5", "description": "x", "date": "2024-03-01"},
])
def test_create_transaction_validation(client, food, payload):
    resp = client.post("/api/transactions", json={"categoryId": food.id, **payload})
    assert resp.status_code == 400
    assert resp.get_json()["error"]


def test_income_needs_income_category(client, food):
    resp = client.post("/api/transactions", json={
        "type": "income", "categoryId": food.id, "amount": "5",
        "description": "x", "date": "2024-03-01",
    })
    assert resp.status_code == 400


def test_filter_transactions(client, sample_data):
    resp = client.get("/api/transactions?search=coffee&dateFrom=2024-01-01&dateTo=2024-01-31")
    assert resp.status_code == 200
    assert [t["description"] for t in resp.get_json()] == ["COFFEE beans", "Morning coffee"]

    income = client.get("/api/transactions?type=income").get_json()
    assert [t["date"] for t in income] == ["2024-02-29", "2024-01-31"]


def test_filter_transactions_bad_params(client):
    assert client.get("/api/transactions?category=abc").status_code == 400
    assert client.get("/api/transactions?dateFrom=tomorrow").status_code == 400


def test_budgets(client, sample_data, food):
    resp = client.post("/api/budgets", json={
        "categoryId": food.id, "amount": "100", "period": "monthly", "startDate": "2024-01-15",
    })
    assert resp.status_code == 201
    budget = resp.get_json()
    assert budget["endDate"] == "2024-02-14"
    # 3.80 on 01-28 plus 5.00 on 02-02
    assert budget["spent"] == 8.8
    assert budget["status"] == "On Track"

    listed = client.get("/api/budgets").get_json()
    assert [b["id"] for b in listed] == [budget["id"]]

    assert client.delete(f"/api/budgets/{budget['id']}").status_code == 204
    assert client.delete(f"/api/budgets/{budget['id']}").status_code == 404


def test_budget_validation(client, salary):
    resp = client.post("/api/budgets", json={
        "categoryId": salary.id, "amount": "100", "period": "monthly", "startDate": "2024-01-01",
    })
    assert resp.status_code == 400


def test_budget_period_must_be_text(client, food):
    resp = client.post("/api/budgets", json={
        "categoryId": food.id, "amount": "100", "period": 30, "startDate": "2024-01-01",
    })
    assert resp.status_code == 400


def test_summary(client, sample_data):
    assert client.get("/api/summary").get_json() == {
        "totalIncome": 5000.0,
        "totalExpenses": 195.4,
        "netBalance": 4804.6,
        "savingsRate": 96.1,
    }
    jan = client.get("/api/summary?start=2024-01-01&end=2024-01-31").get_json()
    assert jan["totalExpenses"] == 190.4


def test_summary_empty(client):
    assert client.get("/api/summary").get_json() == {
        "totalIncome": 0.0, "totalExpenses": 0.0, "netBalance": 0.0, "savingsRate": 0.0,
    }


def test_chart_data(client, sample_data):
    data = client.get("/api/chart-data?start=2024-01-01&end=2024-01-31").get_json()
    assert data == {"labels": ["Travel", "Food & Dining"], "values": [120.0, 70.4]}
    assert client.get("/api/chart-data?start=2030-01-01").get_json() == {"labels": [], "values": []}


def test_monthly_data_shape(client):
    data = client.get("/api/monthly-data?months=4").get_json()
    assert len(data["months"]) == len(data["income"]) == len(data["expenses"]) == 4
    assert data["income"] == [0.0] * 4


def test_monthly_data_bad_months(client):
    assert client.get("/api/monthly-data?months=abc").status_code == 400
    assert client.get("/api/monthly-data?months=0").status_code == 400
    assert client.get("/api/monthly-data?months=100000").status_code == 400
    assert client.get("/api/monthly-data?months=121").status_code == 400
    assert client.get("/api/monthly-data?months=120").status_code == 200


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "not found"}


def test_storage_failure_is_500(client, services, monkeypatch):
    def broken():
        raise StorageError("disk I/O error")

    monkeypatch.setattr(services["category_service"], "get_all", broken)
    resp = client.get("/api/categories")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "storage failure"}
