import argparse
import logging
import sys

from budget_manager.database.budget_dao import BudgetDAO
from budget_manager.database.category_dao import CategoryDAO
from budget_manager.database.db_manager import DatabaseManager
from budget_manager.database.transaction_dao import ExpenseDAO, IncomeDAO
from budget_manager.services.budget_service import BudgetService
from budget_manager.services.category_service import CategoryService
from budget_manager.services.errors import StorageError
from budget_manager.services.report_service import ReportService
from budget_manager.services.transaction_service import TransactionService
from budget_manager.utils.app_config import resolve_db_path
from budget_manager.utils.constants import APP_NAME

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="budget-manager", description=APP_NAME)
    parser.add_argument("--db", metavar="PATH", help="SQLite file to use (overrides the configured folder)")
    parser.add_argument("--serve", action="store_true", help="run the JSON HTTP API instead of the desktop app")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=5000)
    parser.add_argument("--debug", action="store_true", help="verbose logging")
    return parser.parse_args(argv)


def build_services(db: DatabaseManager) -> dict:
    """Wire DAOs and services over one open database."""
    category_dao = CategoryDAO(db)
    expense_dao = ExpenseDAO(db)
    income_dao = IncomeDAO(db)
    budget_dao = BudgetDAO(db)

    tx_svc = TransactionService(expense_dao, income_dao, category_dao)
    return {
        "category_service": CategoryService(category_dao),
        "tx_service": tx_svc,
        "budget_service": BudgetService(budget_dao, expense_dao, category_dao),
        "report_service": ReportService(expense_dao, income_dao, tx_svc),
    }


def run_server(services: dict, host: str, port: int):
    from budget_manager.web.api import create_app

    app = create_app(**services)
    logger.info("Serving %s API on http://%s:%s", APP_NAME, host, port)
    # One sqlite connection is shared, so requests must be handled one at a time
    app.run(host=host, port=port, threaded=False)


def run_desktop(db: DatabaseManager, services: dict):
    import customtkinter as ctk
    from budget_manager.ui.app_window import AppWindow

    ctk.set_appearance_mode(db.get_setting("appearance_mode", "system"))
    ctk.set_default_color_theme("blue")

    app = AppWindow(
        db=db,
        date_format=db.get_setting("date_format", "MM/DD/YYYY"),
        currency=db.get_setting("currency_symbol", "$"),
        **services,
    )

    def on_close():
        db.close()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_close)
    app.mainloop()


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )

    db = DatabaseManager(resolve_db_path(args.db))
    try:
        db.initialize()
    except StorageError as e:
        logger.error("Could not initialise database %s: %s", db.db_path, e)
        return 1

    services = build_services(db)
    if args.serve:
        try:
            run_server(services, args.host, args.port)
        finally:
            db.close()
    else:
        run_desktop(db, services)
    return 0


if __name__ == "__main__":
    sys.exit(main())
