import customtkinter as ctk

from budget_manager.models.budget import Budget
from budget_manager.services.budget_service import BudgetService
from budget_manager.ui.components.date_picker import DatePickerWidget
from budget_manager.ui.components.form_dialog import FormDialog
from budget_manager.utils.constants import BUDGET_PERIODS, PERIOD_MONTHLY
from budget_manager.utils.date_helpers import (
    format_display_date, format_date, parse_date, period_end_date, today_str,
)


class BudgetForm(FormDialog):
    """Add or edit a spending limit for an expense category over one period."""

    def __init__(
        self,
        master,
        budget_service: BudgetService,
        budget: Budget | None = None,
        date_format: str = "MM/DD/YYYY",
        **kwargs,
    ):
        super().__init__(master, "Edit Budget" if budget else "New Budget", **kwargs)
        self._svc = budget_service
        self._budget = budget
        self._date_format = date_format

        self._categories = budget_service.get_expense_categories()
        names = [c.name for c in self._categories]
        self._cat_var = ctk.StringVar(
            value=budget.category_name if budget else (names[0] if names else "")
        )
        self._field("Category:", ctk.CTkComboBox(
            self, values=names, variable=self._cat_var, width=220, state="readonly",
        ))

        self._amount_var = ctk.StringVar(value=f"{budget.amount:.2f}" if budget else "")
        self._field("Limit:", ctk.CTkEntry(self, textvariable=self._amount_var, width=220))

        self._period_var = ctk.StringVar(value=budget.period if budget else PERIOD_MONTHLY)
        self._field("Period:", ctk.CTkSegmentedButton(
            self, values=list(BUDGET_PERIODS), variable=self._period_var,
            command=lambda _v: self._update_end_label(),
        ))

        self._start_picker = self._field("Start date:", DatePickerWidget(
            self,
            initial_date=budget.start_date if budget else today_str(),
            date_format=date_format,
            on_change=self._update_end_label,
        ))

        self._end_label = self._field("Ends:", ctk.CTkLabel(self, text="", anchor="w"))
        self._update_end_label()

        self._finish(on_delete=self._delete if budget else None)

    def _update_end_label(self):
        start = parse_date(self._start_picker.get())
        if start is None:
            self._end_label.configure(text="")
            return
        end = format_date(period_end_date(start, self._period_var.get()))
        self._end_label.configure(text=format_display_date(end, self._date_format))

    def _submit(self):
        name = self._cat_var.get()
        category_id = next((c.id for c in self._categories if c.name == name), None)
        fields = dict(
            category_id=category_id,
            amount=self._amount_var.get(),
            period=self._period_var.get(),
            start_date=self._start_picker.get(),
        )
        if self._budget:
            self._svc.update(self._budget.id, **fields)
        else:
            self._svc.create(**fields)

    def _delete(self):
        self._svc.delete(self._budget.id)
