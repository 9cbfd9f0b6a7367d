from tkinter import colorchooser

import customtkinter as ctk

from budget_manager.models.category import Category
from budget_manager.services.category_service import CategoryService
from budget_manager.ui.components.confirm_dialog import ConfirmDialog
from budget_manager.ui.components.form_dialog import FormDialog
from budget_manager.utils.constants import CATEGORY_KINDS, DEFAULT_CATEGORY_COLOR, KIND_EXPENSE


class CategoryForm(FormDialog):
    """Add or edit a category."""

    def __init__(
        self,
        master,
        category_service: CategoryService,
        category: Category | None = None,
        **kwargs,
    ):
        super().__init__(master, "Edit Category" if category else "New Category", **kwargs)
        self._svc = category_service
        self._category = category

        self._name_var = ctk.StringVar(value=category.name if category else "")
        self._field("Name:", ctk.CTkEntry(self, textvariable=self._name_var, width=220))

        self._kind_var = ctk.StringVar(value=category.kind if category else KIND_EXPENSE)
        self._field("Type:", ctk.CTkComboBox(
            self, values=list(CATEGORY_KINDS), variable=self._kind_var,
            width=220, state="readonly",
        ))

        color_row = ctk.CTkFrame(self, fg_color="transparent")
        self._color_var = ctk.StringVar(
            value=category.color_hex if category else DEFAULT_CATEGORY_COLOR
        )
        entry = ctk.CTkEntry(color_row, textvariable=self._color_var, width=100)
        entry.pack(side="left")
        entry.bind("<FocusOut>", self._sync_swatch)
        self._swatch = ctk.CTkLabel(
            color_row, text="", width=32, height=24, corner_radius=4,
            fg_color=self._color_var.get(),
        )
        self._swatch.pack(side="left", padx=(8, 0))
        ctk.CTkButton(
            color_row, text="Pick", width=60,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self._pick_color,
        ).pack(side="left", padx=(8, 0))
        self._field("Color:", color_row)

        self._finish(on_delete=self._delete if category else None)

    def _pick_color(self):
        _rgb, hex_value = colorchooser.askcolor(
            color=self._color_var.get(), parent=self, title="Category Color"
        )
        if hex_value:
            self._color_var.set(hex_value)
            self._swatch.configure(fg_color=hex_value)

    def _sync_swatch(self, _event=None):
        color = self._color_var.get().strip()
        if not color.startswith("#"):
            color = "#" + color
        if len(color) in (4, 7) and all(c in "0123456789abcdefABCDEF" for c in color[1:]):
            self._swatch.configure(fg_color=color)

    def _submit(self):
        name, kind, color = self._name_var.get(), self._kind_var.get(), self._color_var.get()
        if self._category:
            self._svc.update(self._category.id, name, kind, color)
        else:
            self._svc.create(name, kind, color)

    def _delete(self):
        dlg = ConfirmDialog(
            self, "Delete Category",
            f"Delete '{self._category.name}'?\n\n"
            "All of its expenses, income and budgets are deleted with it.",
        )
        if not dlg.result:
            return False
        self._svc.delete(self._category.id)
