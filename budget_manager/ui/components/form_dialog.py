import logging

import customtkinter as ctk

from budget_manager.services.errors import StorageError, ValidationError
from budget_manager.ui.components.confirm_dialog import center_over

logger = logging.getLogger(__name__)


class FormDialog(ctk.CTkToplevel):
    """Base for the add/edit popups: label/field grid, red error line, footer.

    Subclasses build their fields with _field(), then call _finish() and
    implement _submit(). An action returning False leaves the form open;
    `saved` is True once a save or delete went through.
    """

    def __init__(self, master, title: str, **kwargs):
        super().__init__(master, **kwargs)
        self.saved = False
        self.title(title)
        self.resizable(False, False)
        self.grid_columnconfigure(1, weight=1)
        self._row = 0

    def _field(self, label: str, widget):
        pady = (16, 4) if self._row == 0 else 4
        ctk.CTkLabel(self, text=label).grid(
            row=self._row, column=0, padx=(16, 8), pady=pady, sticky="e"
        )
        widget.grid(row=self._row, column=1, padx=(0, 16), pady=pady, sticky="ew")
        self._row += 1
        return widget

    def _finish(self, on_delete=None):
        self._error_var = ctk.StringVar()
        ctk.CTkLabel(
            self, textvariable=self._error_var,
            text_color="#F44336", wraplength=300, anchor="w", justify="left",
        ).grid(row=self._row, column=0, columnspan=2, padx=16, pady=(0, 4), sticky="ew")
        self._row += 1

        footer = ctk.CTkFrame(self, fg_color="transparent")
        footer.grid(row=self._row, column=0, columnspan=2, padx=16, pady=(4, 16), sticky="ew")
        ctk.CTkButton(
            footer, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left")
        if on_delete is not None:
            ctk.CTkButton(
                footer, text="Delete", width=80,
                fg_color="#F44336", hover_color="#D32F2F",
                command=lambda: self._attempt(on_delete),
            ).pack(side="left", padx=8)
        ctk.CTkButton(
            footer, text="Save", width=90,
            command=lambda: self._attempt(self._submit),
        ).pack(side="right")

        self.bind("<Return>", lambda _e: self._attempt(self._submit))
        self.bind("<Escape>", lambda _e: self.destroy())
        self.transient(self.master)
        self.grab_set()
        center_over(self, self.master)

    def _submit(self):
        raise NotImplementedError

    def _attempt(self, action):
        try:
            if action() is False:
                return
        except ValidationError as e:
            self._error_var.set(str(e))
            return
        except StorageError as e:
            self._error_var.set(f"Could not save: {e}")
            return
        self.saved = True
        self.destroy()
