import logging

import customtkinter as ctk

from budget_manager.database.db_manager import DatabaseManager
from budget_manager.services.budget_service import BudgetService
from budget_manager.services.category_service import CategoryService
from budget_manager.services.errors import StorageError, ValidationError
from budget_manager.services.report_service import ReportService
from budget_manager.services.transaction_service import TransactionService
from budget_manager.ui.components.alert_banner import BANNER_ERROR, AlertBanner
from budget_manager.ui.tabs.budgets_tab import BudgetsTab
from budget_manager.ui.tabs.categories_tab import CategoriesTab
from budget_manager.ui.tabs.dashboard_tab import DashboardTab
from budget_manager.ui.tabs.reports_tab import ReportsTab
from budget_manager.ui.tabs.settings_tab import SettingsTab
from budget_manager.ui.tabs.transactions_tab import TransactionsTab
from budget_manager.utils.constants import APP_HEIGHT, APP_NAME, APP_WIDTH

logger = logging.getLogger(__name__)

_TAB_NAMES = ["Dashboard", "Transactions", "Budgets", "Reports", "Categories", "Settings"]

# Which tabs to reload after a change of each kind
_REFRESH_SCOPES: dict[str, set[str]] = {
    "transaction": {"dashboard", "transactions", "budgets", "reports"},
    "budget":      {"dashboard", "budgets"},
    "category":    {"dashboard", "transactions", "categories"},
    "full":        {"dashboard", "transactions", "budgets", "reports", "categories", "settings"},
}


class AppWindow(ctk.CTk):
    def __init__(
        self,
        db: DatabaseManager,
        category_service: CategoryService,
        tx_service: TransactionService,
        budget_service: BudgetService,
        report_service: ReportService,
        date_format: str = "MM/DD/YYYY",
        currency: str = "$",
        **kwargs,
    ):
        super().__init__(**kwargs)
        self._db = db
        self._cat_svc = category_service
        self._tx_svc = tx_service
        self._budget_svc = budget_service
        self._report_svc = report_service
        self._date_format = date_format
        self._currency = currency

        self.title(APP_NAME)
        self.minsize(APP_WIDTH, APP_HEIGHT)
        self.geometry(f"{APP_WIDTH}x{APP_HEIGHT}")

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        self._banner_frame = ctk.CTkFrame(self, fg_color="transparent", height=0)
        self._banner_frame.grid(row=0, column=0, sticky="ew", padx=8, pady=(4, 0))
        self._build_tabs()

    def _build_tabs(self):
        self._tabview = ctk.CTkTabview(self)
        self._tabview.grid(row=1, column=0, sticky="nsew", padx=8, pady=(0, 8))
        for name in _TAB_NAMES:
            self._tabview.add(name)
            self._tabview.tab(name).grid_columnconfigure(0, weight=1)
            self._tabview.tab(name).grid_rowconfigure(0, weight=1)

        prefs = {"date_format": self._date_format, "currency": self._currency}
        self._tabs = {
            "dashboard": DashboardTab(
                self._tabview.tab("Dashboard"),
                tx_service=self._tx_svc,
                budget_service=self._budget_svc,
                report_service=self._report_svc,
                **prefs,
            ),
            "transactions": TransactionsTab(
                self._tabview.tab("Transactions"),
                tx_service=self._tx_svc,
                category_service=self._cat_svc,
                notify_refresh=self.notify_tabs_refresh,
                **prefs,
            ),
            "budgets": BudgetsTab(
                self._tabview.tab("Budgets"),
                budget_service=self._budget_svc,
                notify_refresh=self.notify_tabs_refresh,
                **prefs,
            ),
            "reports": ReportsTab(
                self._tabview.tab("Reports"),
                report_service=self._report_svc,
                **prefs,
            ),
            "categories": CategoriesTab(
                self._tabview.tab("Categories"),
                category_service=self._cat_svc,
                notify_refresh=self.notify_tabs_refresh,
            ),
            "settings": SettingsTab(
                self._tabview.tab("Settings"),
                db=self._db,
                on_preferences_changed=self._apply_preferences,
            ),
        }
        for tab in self._tabs.values():
            tab.grid(row=0, column=0, sticky="nsew")

    # ── Refresh ──────────────────────────────────────────────────────────────
    def notify_tabs_refresh(self, scope: str = "full"):
        for name in _REFRESH_SCOPES.get(scope, _REFRESH_SCOPES["full"]):
            self._tabs[name].refresh()

    def _apply_preferences(self, date_format: str, currency: str):
        self._date_format, self._currency = date_format, currency
        for tab in self._tabs.values():
            if hasattr(tab, "set_preferences"):
                tab.set_preferences(date_format, currency)

    # ── Errors ───────────────────────────────────────────────────────────────
    def report_callback_exception(self, exc, val, tb):
        """Tk routes uncaught callback errors here; show them instead of dying silently."""
        if isinstance(val, (StorageError, ValidationError)):
            logger.error("Operation failed: %s", val)
            self.show_error(str(val))
            return
        logger.error("Unexpected error in UI callback", exc_info=(exc, val, tb))
        self.show_error(f"Unexpected error: {val}")

    def show_error(self, message: str):
        for w in self._banner_frame.winfo_children():
            w.destroy()
        AlertBanner(self._banner_frame, message=message, color=BANNER_ERROR).pack(fill="x", pady=2)
