import customtkinter as ctk

from budget_manager.models.transaction import Transaction
from budget_manager.services.category_service import CategoryService
from budget_manager.services.transaction_service import TransactionService
from budget_manager.ui.components.date_picker import DatePickerWidget
from budget_manager.ui.components.form_dialog import FormDialog
from budget_manager.utils.constants import CATEGORY_KINDS, KIND_EXPENSE
from budget_manager.utils.date_helpers import today_str


class TransactionForm(FormDialog):
    """Add or edit an expense or income entry."""

    _last_date: str = today_str()  # sticky between adds, reset on launch

    def __init__(
        self,
        master,
        tx_service: TransactionService,
        category_service: CategoryService,
        initial_kind: str = KIND_EXPENSE,
        transaction: Transaction | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        kind = transaction.kind if transaction else initial_kind
        super().__init__(
            master, f"{'Edit' if transaction else 'Add'} {kind.title()}", **kwargs
        )
        self._tx_svc = tx_service
        self._cat_svc = category_service
        self._transaction = transaction

        self._kind_var = ctk.StringVar(value=kind)
        if transaction is None:
            # Kind is fixed once saved: the two kinds live in separate tables
            kinds = ctk.CTkFrame(self, fg_color="transparent")
            for k in CATEGORY_KINDS:
                ctk.CTkRadioButton(
                    kinds, text=k.title(), variable=self._kind_var, value=k,
                    command=self._load_categories,
                ).pack(side="left", padx=4)
            self._field("Type:", kinds)

        self._cat_var = ctk.StringVar()
        self._cat_combo = self._field("Category:", ctk.CTkComboBox(
            self, variable=self._cat_var, width=220, state="readonly",
        ))
        self._load_categories()
        if transaction:
            self._cat_var.set(transaction.category_name)

        self._amount_var = ctk.StringVar(value=f"{transaction.amount:.2f}" if transaction else "")
        self._field("Amount:", ctk.CTkEntry(self, textvariable=self._amount_var, width=220))

        self._date_picker = self._field("Date:", DatePickerWidget(
            self,
            initial_date=transaction.date if transaction else TransactionForm._last_date,
            date_format=date_format,
        ))

        self._desc_var = ctk.StringVar(value=transaction.description if transaction else "")
        self._field("Description:", ctk.CTkEntry(self, textvariable=self._desc_var, width=220))

        self._finish(on_delete=self._delete if transaction else None)

    def _load_categories(self):
        self._categories = self._cat_svc.get_by_kind(self._kind_var.get())
        names = [c.name for c in self._categories]
        self._cat_combo.configure(values=names)
        self._cat_var.set(names[0] if names else "")

    def _selected_category_id(self) -> int | None:
        name = self._cat_var.get()
        return next((c.id for c in self._categories if c.name == name), None)

    def _submit(self):
        kind = self._kind_var.get()
        fields = dict(
            category_id=self._selected_category_id(),
            amount=self._amount_var.get(),
            date=self._date_picker.get(),
            description=self._desc_var.get(),
        )
        if self._transaction:
            self._tx_svc.update(kind, self._transaction.id, **fields)
        else:
            self._tx_svc.create(kind, **fields)
        TransactionForm._last_date = self._date_picker.get()

    def _delete(self):
        self._tx_svc.delete(self._transaction.kind, self._transaction.id)
