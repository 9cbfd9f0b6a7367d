import customtkinter as ctk

from budget_manager.models.summary import Summary
from budget_manager.services.budget_service import BudgetService
from budget_manager.services.report_service import ReportService
from budget_manager.services.transaction_service import TransactionService
from budget_manager.utils.constants import KIND_COLORS, STATUS_COLORS
from budget_manager.utils.currency import format_currency, format_signed
from budget_manager.utils.date_helpers import (
    current_month_str, format_display_date, friendly_month, month_range, shift_month,
)

_RECENT_LIMIT = 10


class DashboardTab(ctk.CTkFrame):
    """Month summary cards, latest entries and the budgets running today."""

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        budget_service: BudgetService,
        report_service: ReportService,
        date_format: str = "MM/DD/YYYY",
        currency: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._budget_svc = budget_service
        self._report_svc = report_service
        self._date_format = date_format
        self._currency = currency
        self._month = current_month_str()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_month_nav()
        self._cards = ctk.CTkFrame(self, fg_color="transparent")
        self._cards.grid(row=1, column=0, sticky="ew", padx=16, pady=12)
        self._cards.grid_columnconfigure((0, 1, 2, 3), weight=1)
        self._build_lists()
        self._load()

    def refresh(self):
        self._load()

    def set_preferences(self, date_format: str, currency: str):
        self._date_format, self._currency = date_format, currency
        self._load()

    def _build_month_nav(self):
        nav = ctk.CTkFrame(self, fg_color="transparent")
        nav.grid(row=0, column=0, sticky="ew", padx=16, pady=(12, 0))
        ctk.CTkButton(nav, text="◀", width=28, command=lambda: self._shift(-1)).pack(side="left")
        self._month_label = ctk.CTkLabel(
            nav, text="", width=150, anchor="center",
            font=ctk.CTkFont(size=15, weight="bold"),
        )
        self._month_label.pack(side="left", padx=8)
        ctk.CTkButton(nav, text="▶", width=28, command=lambda: self._shift(1)).pack(side="left")

    def _shift(self, step: int):
        self._month = shift_month(self._month, step)
        self._load()

    def _build_lists(self):
        bottom = ctk.CTkFrame(self, fg_color="transparent")
        bottom.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        bottom.grid_columnconfigure((0, 1), weight=1)
        bottom.grid_rowconfigure(0, weight=1)

        self._recent_frame = ctk.CTkScrollableFrame(bottom, label_text="Recent Transactions")
        self._recent_frame.grid(row=0, column=0, sticky="nsew", padx=(0, 8))
        self._budget_frame = ctk.CTkScrollableFrame(bottom, label_text="Active Budgets")
        self._budget_frame.grid(row=0, column=1, sticky="nsew", padx=(8, 0))

    def _load(self):
        self._month_label.configure(text=friendly_month(self._month))
        start, end = month_range(self._month)
        self._show_cards(self._report_svc.get_summary(start, end))
        self._show_recent()
        self._show_budgets()

    def _show_cards(self, summary: Summary):
        for w in self._cards.winfo_children():
            w.destroy()
        net_color = "#2196F3" if summary.net_balance >= 0 else "#FF9800"
        cards = [
            ("Income", format_currency(summary.total_income, self._currency), "#4CAF50"),
            ("Expenses", format_currency(summary.total_expenses, self._currency), "#F44336"),
            ("Net", format_signed(summary.net_balance, self._currency), net_color),
            ("Savings Rate", f"{summary.savings_rate:.1f}%", net_color),
        ]
        for col, (label, text, color) in enumerate(cards):
            card = ctk.CTkFrame(self._cards, fg_color=("gray90", "gray20"), corner_radius=10)
            card.grid(row=0, column=col, padx=6, sticky="ew")
            card.grid_columnconfigure(0, weight=1)
            ctk.CTkLabel(card, text=label, text_color="gray60").grid(row=0, column=0, pady=(12, 0))
            ctk.CTkLabel(
                card, text=text, text_color=color,
                font=ctk.CTkFont(size=20, weight="bold"),
            ).grid(row=1, column=0, pady=(4, 12))

    def _show_recent(self):
        for w in self._recent_frame.winfo_children():
            w.destroy()
        recent = self._tx_svc.get_recent(_RECENT_LIMIT)
        if not recent:
            ctk.CTkLabel(self._recent_frame, text="No transactions yet.", text_color="gray60").pack(pady=20)
            return
        for idx, tx in enumerate(recent):
            bg = ("gray90", "gray20") if idx % 2 == 0 else ("gray86", "gray24")
            row = ctk.CTkFrame(self._recent_frame, fg_color=bg, corner_radius=4)
            row.pack(fill="x", pady=1)
            row.grid_columnconfigure(1, weight=1)
            ctk.CTkLabel(
                row, text=format_display_date(tx.date, self._date_format), width=85, anchor="w",
            ).grid(row=0, column=0, padx=6, pady=3)
            ctk.CTkLabel(row, text=tx.description or tx.category_name, anchor="w").grid(
                row=0, column=1, padx=4, sticky="ew"
            )
            ctk.CTkLabel(
                row, text=format_signed(tx.signed_amount, self._currency),
                text_color=KIND_COLORS[tx.kind], anchor="e", width=100,
            ).grid(row=0, column=2, padx=6)

    def _show_budgets(self):
        for w in self._budget_frame.winfo_children():
            w.destroy()
        budgets = self._budget_svc.get_active_budget_status()
        if not budgets:
            ctk.CTkLabel(
                self._budget_frame, text="No budgets running today.", text_color="gray60",
            ).pack(pady=20)
            return
        for b in budgets:
            f = ctk.CTkFrame(self._budget_frame, fg_color="transparent")
            f.pack(fill="x", pady=4, padx=4)
            top = ctk.CTkFrame(f, fg_color="transparent")
            top.pack(fill="x")
            ctk.CTkLabel(top, text=f"{b.category_name} ({b.period})", anchor="w").pack(side="left")
            ctk.CTkLabel(
                top, anchor="e", text_color="gray60",
                text=f"{format_currency(b.spent_amount, self._currency)} / "
                     f"{format_currency(b.amount, self._currency)}",
            ).pack(side="right")
            bar = ctk.CTkProgressBar(f, progress_color=STATUS_COLORS[b.status])
            bar.pack(fill="x", pady=2)
            bar.set(float(b.progress) / 100)
