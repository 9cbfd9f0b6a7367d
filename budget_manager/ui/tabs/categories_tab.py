import customtkinter as ctk

from budget_manager.models.category import Category
from budget_manager.services.category_service import CategoryService
from budget_manager.ui.components.category_form import CategoryForm
from budget_manager.ui.components.confirm_dialog import ConfirmDialog
from budget_manager.utils.constants import CATEGORY_KINDS


class CategoriesTab(ctk.CTkFrame):
    def __init__(
        self,
        master,
        category_service: CategoryService,
        notify_refresh,
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._svc = category_service
        self._notify_refresh = notify_refresh

        self.grid_columnconfigure((0, 1), weight=1)
        self.grid_rowconfigure(1, weight=1)

        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, columnspan=2, sticky="ew", padx=8, pady=(8, 0))
        ctk.CTkButton(bar, text="+ Add Category", command=self._open_form).pack(
            side="left", padx=8, pady=6
        )

        # One column per kind
        self._lists = {}
        for col, kind in enumerate(CATEGORY_KINDS):
            scroll = ctk.CTkScrollableFrame(self, label_text=f"{kind.title()} Categories")
            scroll.grid(row=1, column=col, sticky="nsew", padx=8, pady=8)
            scroll.grid_columnconfigure(0, weight=1)
            self._lists[kind] = scroll
        self._load()

    def refresh(self):
        self._load()

    def _load(self):
        for scroll in self._lists.values():
            for w in scroll.winfo_children():
                w.destroy()
        rows = {kind: 0 for kind in CATEGORY_KINDS}
        for cat in self._svc.get_all():
            self._add_row(self._lists[cat.kind], rows[cat.kind], cat)
            rows[cat.kind] += 1
        for kind, count in rows.items():
            if not count:
                ctk.CTkLabel(self._lists[kind], text="None yet.", text_color="gray60").grid(
                    row=0, column=0, pady=20
                )

    def _add_row(self, parent, idx: int, cat: Category):
        row = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=8)
        row.grid(row=idx, column=0, sticky="ew", padx=4, pady=3)
        row.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(row, text="", width=28, height=28, corner_radius=4, fg_color=cat.color_hex).grid(
            row=0, column=0, padx=(10, 0), pady=8
        )
        ctk.CTkLabel(
            row, text=cat.name, anchor="w", font=ctk.CTkFont(size=13, weight="bold"),
        ).grid(row=0, column=1, padx=8, sticky="w")

        buttons = ctk.CTkFrame(row, fg_color="transparent")
        buttons.grid(row=0, column=2, padx=(4, 10), pady=6)
        ctk.CTkButton(
            buttons, text="Edit", width=60, height=26,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=lambda c=cat: self._open_form(c),
        ).pack(side="left", padx=(0, 4))
        ctk.CTkButton(
            buttons, text="Delete", width=65, height=26,
            fg_color="#F44336", hover_color="#D32F2F",
            command=lambda c=cat: self._delete(c),
        ).pack(side="left")

    def _open_form(self, category: Category | None = None):
        form = CategoryForm(self.winfo_toplevel(), self._svc, category=category)
        self.wait_window(form)
        if form.saved:
            self._notify_refresh("category")

    def _delete(self, cat: Category):
        dlg = ConfirmDialog(
            self.winfo_toplevel(), "Delete Category",
            f"Delete '{cat.name}'?\n\nAll of its expenses, income and budgets are deleted with it.",
        )
        if dlg.result:
            self._svc.delete(cat.id)
            self._notify_refresh("full")
