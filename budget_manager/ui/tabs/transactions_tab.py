import customtkinter as ctk

from budget_manager.models.transaction import Transaction
from budget_manager.services.category_service import CategoryService
from budget_manager.services.errors import ValidationError
from budget_manager.services.transaction_filter import TransactionFilter
from budget_manager.services.transaction_service import TransactionService
from budget_manager.ui.components.confirm_dialog import ConfirmDialog
from budget_manager.ui.components.date_picker import DatePickerWidget
from budget_manager.ui.components.transaction_form import TransactionForm
from budget_manager.utils.constants import KIND_COLORS, KIND_EXPENSE, KIND_INCOME
from budget_manager.utils.currency import format_currency, format_signed
from budget_manager.utils.date_helpers import format_display_date

_MAX_RENDERED_ROWS = 100
_ALL_CATEGORIES = "All categories"
_COLUMNS = [("Date", 85), ("Type", 72), ("Category", 140),
            ("Description", 220), ("Amount", 100), ("", 100)]


class TransactionsTab(ctk.CTkFrame):
    """Combined expense and income list with search, category, type and date filters."""

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        notify_refresh,
        date_format: str = "MM/DD/YYYY",
        currency: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._notify_refresh = notify_refresh
        self._date_format = date_format
        self._currency = currency

        self._search_var = ctk.StringVar()
        self._search_var.trace_add("write", lambda *_: self._load())
        self._kind_var = ctk.StringVar(value="all")
        self._category_var = ctk.StringVar(value=_ALL_CATEGORIES)
        self._status_var = ctk.StringVar()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(3, weight=1)

        self._build_filter_bar()
        self._build_header()
        self._scroll = ctk.CTkScrollableFrame(self)
        self._scroll.grid(row=3, column=0, sticky="nsew", padx=8, pady=(0, 4))
        self._scroll.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(self, textvariable=self._status_var, text_color="gray60", anchor="w").grid(
            row=4, column=0, sticky="ew", padx=12, pady=(0, 6)
        )
        self.refresh()

    def refresh(self):
        self._reload_categories()
        self._load()

    def set_preferences(self, date_format: str, currency: str):
        self._date_format, self._currency = date_format, currency
        self._load()

    # ── Filters ─────────────────────────────────────────────────────────────
    def _build_filter_bar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        ctk.CTkEntry(bar, textvariable=self._search_var, placeholder_text="Search…", width=160).pack(
            side="left", padx=(8, 4), pady=6
        )
        ctk.CTkSegmentedButton(
            bar, values=["all", KIND_EXPENSE, KIND_INCOME], variable=self._kind_var,
            command=lambda _v: self._load(),
        ).pack(side="left", padx=4)
        self._category_combo = ctk.CTkComboBox(
            bar, variable=self._category_var, width=160, state="readonly",
            command=lambda _v: self._load(),
        )
        self._category_combo.pack(side="left", padx=4)

        ctk.CTkLabel(bar, text="From").pack(side="left", padx=(8, 2))
        self._from_picker = DatePickerWidget(
            bar, date_format=self._date_format, allow_empty=True, on_change=self._load,
        )
        self._from_picker.pack(side="left")
        ctk.CTkLabel(bar, text="To").pack(side="left", padx=(8, 2))
        self._to_picker = DatePickerWidget(
            bar, date_format=self._date_format, allow_empty=True, on_change=self._load,
        )
        self._to_picker.pack(side="left")

        ctk.CTkButton(
            bar, text="Clear", width=60,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=self._clear_filters,
        ).pack(side="left", padx=8)

        ctk.CTkButton(bar, text="+ Income", width=88,
                      command=lambda: self._open_form(initial_kind=KIND_INCOME)).pack(side="right", padx=(2, 8))
        ctk.CTkButton(bar, text="+ Expense", width=88,
                      command=lambda: self._open_form(initial_kind=KIND_EXPENSE)).pack(side="right", padx=2)

    def _reload_categories(self):
        self._categories = self._cat_svc.get_all()
        self._category_combo.configure(values=[_ALL_CATEGORIES] + [c.name for c in self._categories])
        if self._category_var.get() not in {c.name for c in self._categories}:
            self._category_var.set(_ALL_CATEGORIES)

    def _clear_filters(self):
        self._category_var.set(_ALL_CATEGORIES)
        self._kind_var.set("all")
        self._from_picker.set("")
        self._to_picker.set("")
        self._search_var.set("")

    def _current_filter(self) -> TransactionFilter:
        name = self._category_var.get()
        category_id = next((c.id for c in self._categories if c.name == name), None)
        return TransactionFilter.from_params({
            "search": self._search_var.get(),
            "category": str(category_id) if category_id is not None else "",
            "type": self._kind_var.get(),
            "dateFrom": self._from_picker.get(),
            "dateTo": self._to_picker.get(),
        })

    # ── List ────────────────────────────────────────────────────────────────
    def _build_header(self):
        hdr = ctk.CTkFrame(self, fg_color=("gray82", "gray22"), corner_radius=0)
        hdr.grid(row=2, column=0, sticky="ew", padx=8, pady=(4, 0))
        for i, (label, width) in enumerate(_COLUMNS):
            ctk.CTkLabel(
                hdr, text=label, width=width, anchor="w", font=ctk.CTkFont(weight="bold"),
            ).grid(row=0, column=i, padx=4, pady=4, sticky="w")

    def _load(self):
        if not hasattr(self, "_scroll"):
            return
        for w in self._scroll.winfo_children():
            w.destroy()
        try:
            rows = self._tx_svc.search(self._current_filter())
        except ValidationError as e:
            self._status_var.set(str(e))
            return

        if not rows:
            self._status_var.set("")
            ctk.CTkLabel(self._scroll, text="No matching transactions.", text_color="gray60").grid(
                row=0, column=0, pady=20
            )
            return

        for idx, tx in enumerate(rows[:_MAX_RENDERED_ROWS]):
            self._add_row(idx, tx)
        if len(rows) > _MAX_RENDERED_ROWS:
            self._status_var.set(
                f"Showing {_MAX_RENDERED_ROWS} of {len(rows)} transactions. Narrow the filters to see more."
            )
        else:
            self._status_var.set(f"{len(rows)} transaction{'s' if len(rows) != 1 else ''}")

    def _add_row(self, idx: int, tx: Transaction):
        bg = ("gray92", "gray17") if idx % 2 == 0 else ("gray88", "gray21")
        row = ctk.CTkFrame(self._scroll, fg_color=bg, corner_radius=4)
        row.grid(row=idx, column=0, sticky="ew", pady=1, padx=2)

        color = KIND_COLORS[tx.kind]
        cells = [
            (format_display_date(tx.date, self._date_format), "w", None),
            (tx.kind.title(), "w", color),
            (tx.category_name, "w", None),
            (tx.description, "w", None),
            (format_signed(tx.signed_amount, self._currency), "e", color),
        ]
        for col, (text, anchor, text_color) in enumerate(cells):
            label = ctk.CTkLabel(row, text=text, width=_COLUMNS[col][1], anchor=anchor)
            if text_color:
                label.configure(text_color=text_color)
            label.grid(row=0, column=col, padx=4, pady=4)

        acts = ctk.CTkFrame(row, fg_color="transparent")
        acts.grid(row=0, column=len(cells), padx=(4, 6))
        ctk.CTkButton(acts, text="Edit", width=44, height=24,
                      command=lambda t=tx: self._open_form(transaction=t)).pack(side="left", padx=2)
        ctk.CTkButton(acts, text="Del", width=38, height=24,
                      fg_color="#F44336", hover_color="#D32F2F",
                      command=lambda t=tx: self._delete(t)).pack(side="left")

    # ── Actions ─────────────────────────────────────────────────────────────
    def _open_form(self, initial_kind: str = KIND_EXPENSE, transaction: Transaction | None = None):
        form = TransactionForm(
            self.winfo_toplevel(), self._tx_svc, self._cat_svc,
            initial_kind=initial_kind, transaction=transaction,
            date_format=self._date_format,
        )
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("transaction")

    def _delete(self, tx: Transaction):
        dlg = ConfirmDialog(
            self.winfo_toplevel(), f"Delete {tx.kind.title()}",
            f"Delete '{tx.description}' ({format_currency(tx.amount, self._currency)})?",
        )
        if dlg.result:
            self._tx_svc.delete(tx.kind, tx.id)
            self._notify_refresh("transaction")
