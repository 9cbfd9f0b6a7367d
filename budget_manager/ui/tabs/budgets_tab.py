import customtkinter as ctk

from budget_manager.models.budget import Budget
from budget_manager.services.budget_service import BudgetService
from budget_manager.ui.components.budget_form import BudgetForm
from budget_manager.ui.components.confirm_dialog import ConfirmDialog
from budget_manager.utils.constants import STATUS_COLORS
from budget_manager.utils.currency import format_currency
from budget_manager.utils.date_helpers import format_display_date, today_str


class BudgetsTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        budget_service: BudgetService,
        notify_refresh,
        date_format: str = "MM/DD/YYYY",
        currency: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = budget_service
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._currency = currency
        self._active_only = ctk.BooleanVar(value=False)

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkButton(bar, text="+ Add Budget", command=self._open_form).pack(side="left", padx=8, pady=6)
        ctk.CTkSwitch(
            bar, text="Active only", variable=self._active_only, command=self._load,
        ).pack(side="left", padx=8)

        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=1, column=0, sticky="nsew", padx=8, pady=8)
        self._scroll.grid_columnconfigure(0, weight=1)
        self._load()

    def refresh(self):
        self._load()

    def set_preferences(self, date_format: str, currency: str):
        self._date_format, self._currency = date_format, currency
        self._load()

    def _load(self):
        for w in self._scroll.winfo_children():
            w.destroy()
        if self._active_only.get():
            budgets = self._svc.get_active_budget_status()
        else:
            budgets = self._svc.get_budget_status()
        if not budgets:
            ctk.CTkLabel(
                self._scroll,
                text="No budgets yet. Click '+ Add Budget' to create one.",
                text_color="gray60",
            ).grid(row=0, column=0, pady=40)
            return
        on = today_str()
        for idx, b in enumerate(budgets):
            self._add_card(idx, b, b.is_active(on))

    def _add_card(self, idx: int, b: Budget, active: bool):
        color = STATUS_COLORS[b.status]
        card = ctk.CTkFrame(self._scroll, fg_color=("gray90", "gray20"), corner_radius=8)
        card.grid(row=idx, column=0, sticky="ew", padx=4, pady=4)
        card.grid_columnconfigure(0, weight=1)

        hdr = ctk.CTkFrame(card, fg_color="transparent")
        hdr.grid(row=0, column=0, sticky="ew", padx=12, pady=(10, 4))
        hdr.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(
            hdr, text=f"{b.category_name}  ·  {b.period.title()}" + ("" if active else "  (inactive)"),
            font=ctk.CTkFont(size=13, weight="bold"), anchor="w",
            text_color=None if active else "gray60",
        ).grid(row=0, column=0, sticky="w")
        ctk.CTkLabel(hdr, text=f"{b.status}  {b.percentage:.1f}%", text_color=color).grid(
            row=0, column=1, padx=(8, 0)
        )
        ctk.CTkButton(
            hdr, text="Edit", width=50, height=24,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=lambda budget=b: self._open_form(budget),
        ).grid(row=0, column=2, padx=(8, 0))
        ctk.CTkButton(
            hdr, text="Del", width=38, height=24,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda budget=b: self._delete(budget),
        ).grid(row=0, column=3, padx=(4, 0))

        window = (f"{format_display_date(b.start_date, self._date_format)} to "
                  f"{format_display_date(b.end_date, self._date_format)}")
        ctk.CTkLabel(
            card, anchor="w", text_color="gray60",
            text=f"{window}   Spent {format_currency(b.spent_amount, self._currency)} of "
                 f"{format_currency(b.amount, self._currency)}   "
                 f"Remaining {format_currency(b.remaining, self._currency)}",
        ).grid(row=1, column=0, padx=12, sticky="ew")

        bar = ctk.CTkProgressBar(card, progress_color=color)
        bar.grid(row=2, column=0, padx=12, pady=(4, 10), sticky="ew")
        bar.set(float(b.progress) / 100)

    def _open_form(self, budget: Budget | None = None):
        form = BudgetForm(
            self.winfo_toplevel(), self._svc, budget=budget, date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("budget")

    def _delete(self, budget: Budget):
        dlg = ConfirmDialog(
            self.winfo_toplevel(), "Delete Budget",
            f"Delete the {budget.period} budget for {budget.category_name}?",
        )
        if dlg.result:
            self._svc.delete(budget.id)
            self._notify_refresh("budget")
