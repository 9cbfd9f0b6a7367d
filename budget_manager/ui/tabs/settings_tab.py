import logging
from tkinter import filedialog

import customtkinter as ctk

from budget_manager.database.db_manager import DatabaseManager
from budget_manager.utils.app_config import get_db_folder, set_db_folder
from budget_manager.utils.date_helpers import DATE_FORMAT_OPTIONS

logger = logging.getLogger(__name__)

_APPEARANCE_OPTIONS = ["System", "Light", "Dark"]
_DEFAULT_FOLDER_TEXT = "(default: working folder)"


class SettingsTab(ctk.CTkFrame):
    """Database location plus the preferences kept in app_settings."""

    def __init__(
        self,
        master,
        db: DatabaseManager,
        on_preferences_changed,   # callable(date_format, currency)
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._db = db
        self._on_preferences_changed = on_preferences_changed

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        scroll = ctk.CTkScrollableFrame(self, fg_color="transparent")
        scroll.grid(row=0, column=0, sticky="nsew")
        scroll.grid_columnconfigure(0, weight=1)

        self._build_db_section(scroll)
        self._build_preferences_section(scroll)
        self.refresh()

    def refresh(self):
        appearance = self._db.get_setting("appearance_mode", "system")
        self._appearance_var.set(appearance.title())
        self._currency_var.set(self._db.get_setting("currency_symbol", "$"))
        date_fmt = self._db.get_setting("date_format", "MM/DD/YYYY")
        if date_fmt in DATE_FORMAT_OPTIONS:
            self._date_fmt_var.set(date_fmt)

    # ── Database ──────────────────────────────────────────────────────────────

    def _build_db_section(self, parent):
        section = self._section(parent, "Database", row=0)
        section.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            section, text=f"In use: {self._db.db_path}",
            text_color="gray60", font=ctk.CTkFont(size=11), anchor="w",
        ).grid(row=0, column=0, columnspan=3, sticky="w", padx=8, pady=(4, 6))

        self._folder_var = ctk.StringVar(value=get_db_folder() or _DEFAULT_FOLDER_TEXT)
        ctk.CTkEntry(section, textvariable=self._folder_var, state="readonly", width=340).grid(
            row=1, column=0, padx=(8, 4), pady=4, sticky="ew"
        )
        ctk.CTkButton(section, text="Browse…", width=90, command=self._browse_folder).grid(
            row=1, column=1, padx=4
        )
        ctk.CTkButton(
            section, text="Reset to Default", width=120,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=lambda: self._set_folder(None),
        ).grid(row=1, column=2, padx=(4, 8))

        self._restart_label = ctk.CTkLabel(
            section, text="", text_color="#FF9800", font=ctk.CTkFont(size=11), anchor="w",
        )
        self._restart_label.grid(row=2, column=0, columnspan=3, sticky="w", padx=8, pady=(0, 6))

    def _browse_folder(self):
        path = filedialog.askdirectory(title="Choose database folder")
        if path:
            self._set_folder(path)

    def _set_folder(self, path: str | None):
        set_db_folder(path)
        self._folder_var.set(path or _DEFAULT_FOLDER_TEXT)
        self._restart_label.configure(text="Restart the app to open the database in the new folder.")

    # ── Preferences ───────────────────────────────────────────────────────────

    def _build_preferences_section(self, parent):
        section = self._section(parent, "Preferences", row=1)

        self._appearance_var = ctk.StringVar()
        self._currency_var = ctk.StringVar()
        self._date_fmt_var = ctk.StringVar()
        fields = [
            ("Appearance:", ctk.CTkComboBox(
                section, values=_APPEARANCE_OPTIONS, variable=self._appearance_var,
                width=180, state="readonly",
            )),
            ("Currency Symbol:", ctk.CTkEntry(section, textvariable=self._currency_var, width=60)),
            ("Date Format:", ctk.CTkComboBox(
                section, values=DATE_FORMAT_OPTIONS, variable=self._date_fmt_var,
                width=180, state="readonly",
            )),
        ]
        for r, (label, widget) in enumerate(fields):
            ctk.CTkLabel(section, text=label, anchor="e", width=120).grid(
                row=r, column=0, padx=(8, 4), pady=6, sticky="e"
            )
            widget.grid(row=r, column=1, padx=4, pady=6, sticky="w")

        ctk.CTkButton(section, text="Save Settings", width=140, command=self._save).grid(
            row=len(fields), column=0, columnspan=2, pady=(10, 8)
        )
        self._status_var = ctk.StringVar()
        ctk.CTkLabel(
            section, textvariable=self._status_var, text_color="#4CAF50", font=ctk.CTkFont(size=11),
        ).grid(row=len(fields) + 1, column=0, columnspan=2, pady=(0, 8))

    def _save(self):
        appearance = self._appearance_var.get().lower()
        currency = self._currency_var.get().strip() or "$"
        date_fmt = self._date_fmt_var.get()

        self._db.set_setting("appearance_mode", appearance)
        self._db.set_setting("currency_symbol", currency)
        self._db.set_setting("date_format", date_fmt)
        logger.info("Saved preferences: appearance=%s currency=%s date_format=%s",
                    appearance, currency, date_fmt)

        ctk.set_appearance_mode(appearance)
        self._on_preferences_changed(date_fmt, currency)
        self._status_var.set("Settings saved.")

    @staticmethod
    def _section(parent, title: str, row: int) -> ctk.CTkFrame:
        outer = ctk.CTkFrame(parent, corner_radius=8)
        outer.grid(row=row, column=0, sticky="ew", padx=12, pady=8)
        outer.grid_columnconfigure(0, weight=1)
        ctk.CTkLabel(outer, text=title, font=ctk.CTkFont(size=14, weight="bold"), anchor="w").grid(
            row=0, column=0, sticky="w", padx=12, pady=(10, 4)
        )
        inner = ctk.CTkFrame(outer, fg_color="transparent")
        inner.grid(row=1, column=0, sticky="ew", padx=4, pady=(0, 8))
        return inner
