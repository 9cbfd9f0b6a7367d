"""JSON HTTP front end over the same services the desktop app uses."""
import logging

from flask import Flask, jsonify, request

from budget_manager.services.budget_service import BudgetService
from budget_manager.services.category_service import CategoryService
from budget_manager.services.errors import StorageError, ValidationError
from budget_manager.services.report_service import ReportService
from budget_manager.services.transaction_filter import TransactionFilter
from budget_manager.services.transaction_service import TransactionService
from budget_manager.utils.constants import KIND_EXPENSE, KIND_INCOME

logger = logging.getLogger(__name__)


def create_app(
    category_service: CategoryService,
    tx_service: TransactionService,
    budget_service: BudgetService,
    report_service: ReportService,
) -> Flask:
    app = Flask(__name__)
    app.json.sort_keys = False

    # ── Errors ──

    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return jsonify({"error": str(e)}), 400

    @app.errorhandler(StorageError)
    def handle_storage(e):
        logger.error("Storage failure while handling %s %s: %s", request.method, request.path, e)
        return jsonify({"error": "storage failure"}), 500

    @app.errorhandler(404)
    def handle_not_found(_e):
        return jsonify({"error": "not found"}), 404

    @app.errorhandler(405)
    def handle_bad_method(_e):
        return jsonify({"error": "method not allowed"}), 405

    def body() -> dict:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Request body must be a JSON object.")
        return data

    def not_found():
        return jsonify({"error": "not found"}), 404

    # ── Categories ──

    @app.get("/api/categories")
    def list_categories():
        kind = request.args.get("type")
        categories = category_service.get_by_kind(kind) if kind else category_service.get_all()
        return jsonify([c.to_dict() for c in categories])

    @app.post("/api/categories")
    def create_category():
        data = body()
        category = category_service.create(
            data.get("name"), data.get("type"), data.get("color") or None,
        )
        return jsonify(category.to_dict()), 201

    @app.put("/api/categories/<int:category_id>")
    def update_category(category_id):
        current = category_service.get_by_id(category_id)
        if current is None:
            return not_found()
        data = body()
        category = category_service.update(
            category_id,
            data.get("name", current.name),
            data.get("type", current.kind),
            data.get("color", current.color_hex),
        )
        return jsonify(category.to_dict())

    @app.delete("/api/categories/<int:category_id>")
    def delete_category(category_id):
        if not category_service.delete(category_id):
            return not_found()
        return "", 204

    # ── Transactions ──

    @app.get("/api/transactions")
    def list_transactions():
        tx_filter = TransactionFilter.from_params(request.args)
        return jsonify([tx.to_dict() for tx in tx_service.search(tx_filter)])

    @app.post("/api/transactions")
    def create_transaction():
        data = body()
        kind = data.get("type") or ""
        if not isinstance(kind, str):
            raise ValidationError(f"Invalid transaction type: {kind!r}.")
        kind = kind.strip().lower()
        tx = tx_service.create(
            kind,
            data.get("categoryId"),
            data.get("amount"),
            data.get("date"),
            data.get("description"),
        )
        return jsonify(tx.to_dict()), 201

    def _register_kind(path: str, kind: str):
        def get_one(tx_id):
            tx = tx_service.get_by_id(kind, tx_id)
            return jsonify(tx.to_dict()) if tx else not_found()

        def delete_one(tx_id):
            if not tx_service.delete(kind, tx_id):
                return not_found()
            return "", 204

        app.add_url_rule(f"/api/{path}/<int:tx_id>", f"get_{kind}", get_one, methods=["GET"])
        app.add_url_rule(f"/api/{path}/<int:tx_id>", f"delete_{kind}", delete_one, methods=["DELETE"])

    _register_kind("expenses", KIND_EXPENSE)
    _register_kind("income", KIND_INCOME)

    # ── Budgets ──

    @app.get("/api/budgets")
    def list_budgets():
        if request.args.get("active") in ("1", "true"):
            budgets = budget_service.get_active_budget_status()
        else:
            budgets = budget_service.get_budget_status()
        return jsonify([b.to_dict() for b in budgets])

    @app.post("/api/budgets")
    def create_budget():
        data = body()
        budget = budget_service.create(
            data.get("categoryId"),
            data.get("amount"),
            data.get("period"),
            data.get("startDate"),
        )
        return jsonify(budget.to_dict()), 201

    @app.delete("/api/budgets/<int:budget_id>")
    def delete_budget(budget_id):
        if not budget_service.delete(budget_id):
            return not_found()
        return "", 204

    # ── Reports ──

    @app.get("/api/chart-data")
    def chart_data():
        return jsonify(report_service.get_chart_data(
            request.args.get("start"), request.args.get("end"),
        ))

    @app.get("/api/summary")
    def summary():
        return jsonify(report_service.get_summary(
            request.args.get("start"), request.args.get("end"),
        ).to_dict())

    @app.get("/api/monthly-data")
    def monthly_data():
        raw = request.args.get("months", "6")
        try:
            months = int(raw)
        except ValueError:
            raise ValidationError(f"Invalid months value: {raw!r}.") from None
        trend = report_service.get_monthly_trend(months)
        return jsonify({
            "months": [m["month"] for m in trend],
            "income": [float(m["income"]) for m in trend],
            "expenses": [float(m["expense"]) for m in trend],
        })

    return app
