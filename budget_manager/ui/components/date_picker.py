import tkinter as tk
from datetime import date
from tkinter import ttk

import customtkinter as ctk
from tkcalendar import Calendar

from budget_manager.utils.date_helpers import (
    format_date, format_display_date, parse_date, parse_display_date,
)

_DARK = {"bg": "#2b2b2b", "fg": "#ffffff"}
_LIGHT = {"bg": "#ffffff", "fg": "#000000"}
_SELECT_BG = "#1f6aa5"


class DatePickerWidget(ctk.CTkFrame):
    """Entry showing the user's date format, plus a tkcalendar popup.

    get() hands back ISO 'YYYY-MM-DD' (or the raw text when it cannot be
    parsed, so the service reports the error); set() takes ISO.
    """

    def __init__(self, master, initial_date: str | None = None,
                 date_format: str = "MM/DD/YYYY", allow_empty: bool = False,
                 on_change=None, **kwargs):
        super().__init__(master, fg_color="transparent", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self._date_format = date_format
        self._allow_empty = allow_empty
        self._on_change = on_change
        self._popup: ctk.CTkToplevel | None = None

        self._var = tk.StringVar(
            value=format_display_date(initial_date, date_format) if initial_date else ""
        )
        self._entry = ctk.CTkEntry(self, textvariable=self._var, width=110)
        self._entry.grid(row=0, column=0, sticky="ew")
        self._entry.bind("<FocusOut>", self._normalize)
        self._entry.bind("<Return>", self._normalize)

        ctk.CTkButton(self, text="📅", width=32, command=self._toggle_popup).grid(
            row=0, column=1, padx=(4, 0)
        )

    def get(self) -> str:
        raw = self._var.get().strip()
        if not raw:
            return ""
        d = self._parse(raw)
        return format_date(d) if d else raw

    def set(self, date_str: str):
        d = parse_date(date_str) if date_str else None
        if d:
            self._var.set(format_display_date(format_date(d), self._date_format))
        else:
            self._var.set(date_str or "")
        self._mark(valid=True)
        if self._on_change:
            self._on_change()

    def _parse(self, raw: str) -> date | None:
        d = parse_display_date(raw, self._date_format)
        if d is None:
            d = parse_date(raw.replace("/", "-").replace(".", "-"))
        return d

    def _normalize(self, _event=None):
        raw = self._var.get().strip()
        if not raw:
            self._mark(valid=self._allow_empty)
            return
        d = self._parse(raw)
        if d:
            self._var.set(format_display_date(format_date(d), self._date_format))
        self._mark(valid=d is not None)
        if d and self._on_change:
            self._on_change()

    def _mark(self, valid: bool):
        self._entry.configure(border_color=("gray65", "gray35") if valid else "#F44336")

    def _toggle_popup(self):
        if self._popup and self._popup.winfo_exists():
            self._close_popup()
            return

        popup = ctk.CTkToplevel(self)
        popup.overrideredirect(True)
        popup.resizable(False, False)
        self._popup = popup

        colors = _DARK if ctk.get_appearance_mode() == "Dark" else _LIGHT
        style = ttk.Style(popup)
        style.theme_use("default")
        style.configure("Calendar.Treeview", background=colors["bg"],
                        foreground=colors["fg"], fieldbackground=colors["bg"])

        raw = self._var.get().strip()
        current = (self._parse(raw) if raw else None) or date.today()

        cal = Calendar(
            popup,
            selectmode="day",
            year=current.year, month=current.month, day=current.day,
            date_pattern="yyyy-mm-dd",
            background=colors["bg"], foreground=colors["fg"],
            headersbackground=colors["bg"], headersforeground=colors["fg"],
            selectbackground=_SELECT_BG,
            weekendbackground=colors["bg"], weekendforeground=colors["fg"],
            othermonthforeground="gray60",
            bordercolor=colors["bg"],
        )
        cal.pack(padx=4, pady=4)
        cal.bind("<<CalendarSelected>>", lambda _e: self._pick(cal.get_date()))

        self._entry.update_idletasks()
        x = self._entry.winfo_rootx()
        y = self._entry.winfo_rooty() + self._entry.winfo_height() + 2
        popup.geometry(f"+{x}+{y}")
        popup.bind("<Escape>", lambda _e: self._close_popup())

    def _pick(self, iso: str):
        self.set(iso)
        self._close_popup()

    def _close_popup(self):
        if self._popup is not None:
            if self._popup.winfo_exists():
                self._popup.destroy()
            self._popup = None
