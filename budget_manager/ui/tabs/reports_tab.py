import csv
import logging
import tkinter as tk
from tkinter import filedialog

import customtkinter as ctk
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from budget_manager.services.errors import ValidationError
from budget_manager.services.report_service import ReportService
from budget_manager.services.transaction_filter import TransactionFilter
from budget_manager.ui.components.date_picker import DatePickerWidget
from budget_manager.utils.constants import KIND_COLORS, KIND_EXPENSE, KIND_INCOME
from budget_manager.utils.currency import format_currency
from budget_manager.utils.date_helpers import current_month_str, month_range

logger = logging.getLogger(__name__)

_TREND_MONTHS = 6
_LEGEND_ROWS = 8


class ReportsTab(ctk.CTkFrame):
    """Totals, expense breakdown pie and monthly trend bars for a date range.

    An empty From/To means the whole history on that side.
    """

    def __init__(
        self,
        master,
        report_service: ReportService,
        date_format: str = "MM/DD/YYYY",
        currency: str = "$",
        **kwargs,
    ):
        super().__init__(master, fg_color="transparent", **kwargs)
        self._report_svc = report_service
        self._date_format = date_format
        self._currency = currency
        self._error_var = ctk.StringVar()

        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(2, weight=1)

        self._build_toolbar()
        self._summary_frame = ctk.CTkFrame(self, fg_color="transparent")
        self._summary_frame.grid(row=1, column=0, sticky="ew", padx=16, pady=10)
        self._summary_frame.grid_columnconfigure((0, 1, 2, 3), weight=1)
        self._build_charts()
        self._load()

    def refresh(self):
        self._load()

    def set_preferences(self, date_format: str, currency: str):
        self._date_format, self._currency = date_format, currency
        self._load()

    def _build_toolbar(self):
        bar = ctk.CTkFrame(self, fg_color=("gray88", "gray18"), corner_radius=8)
        bar.grid(row=0, column=0, sticky="ew", padx=8, pady=(8, 0))

        start, end = month_range(current_month_str())
        ctk.CTkLabel(bar, text="From").pack(side="left", padx=(12, 4), pady=8)
        self._from_picker = DatePickerWidget(
            bar, initial_date=start, date_format=self._date_format,
            allow_empty=True, on_change=self._load,
        )
        self._from_picker.pack(side="left")
        ctk.CTkLabel(bar, text="To").pack(side="left", padx=(12, 4))
        self._to_picker = DatePickerWidget(
            bar, initial_date=end, date_format=self._date_format,
            allow_empty=True, on_change=self._load,
        )
        self._to_picker.pack(side="left")
        ctk.CTkButton(
            bar, text="All Time", width=80,
            fg_color="transparent", border_width=1, text_color=("gray10", "gray90"),
            command=self._all_time,
        ).pack(side="left", padx=12)
        ctk.CTkLabel(bar, textvariable=self._error_var, text_color="#F44336").pack(side="left", padx=8)

        ctk.CTkButton(bar, text="Export CSV", command=self._export_csv).pack(side="right", padx=8)

    def _all_time(self):
        self._from_picker.set("")
        self._to_picker.set("")

    def _build_charts(self):
        charts = ctk.CTkFrame(self, fg_color="transparent")
        charts.grid(row=2, column=0, sticky="nsew", padx=16, pady=(0, 12))
        charts.grid_columnconfigure(0, weight=3)
        charts.grid_columnconfigure(1, weight=2)
        charts.grid_rowconfigure(0, weight=1)

        self._bar_fig, self._bar_ax, self._bar_canvas, _ = self._chart_panel(
            charts, 0, f"Income vs Expenses (last {_TREND_MONTHS} months)", (5, 3)
        )
        self._pie_fig, self._pie_ax, self._pie_canvas, pie_outer = self._chart_panel(
            charts, 1, "Expense Breakdown", (3, 3)
        )
        self._legend_frame = ctk.CTkFrame(pie_outer, fg_color="transparent")
        self._legend_frame.pack(fill="x", padx=8, pady=(0, 8))

    @staticmethod
    def _chart_panel(parent, col: int, title: str, size):
        outer = ctk.CTkFrame(parent, fg_color=("gray90", "gray20"), corner_radius=8)
        outer.grid(row=0, column=col, sticky="nsew", padx=(0, 8) if col == 0 else 0)
        ctk.CTkLabel(outer, text=title, font=ctk.CTkFont(size=13, weight="bold")).pack(pady=(10, 0))
        fig = Figure(figsize=size, dpi=80, tight_layout=True)
        ax = fig.add_subplot(111)
        canvas = FigureCanvasTkAgg(fig, master=outer)
        canvas.get_tk_widget().pack(fill="both", expand=True, padx=8, pady=(4, 10))
        return fig, ax, canvas, outer

    @staticmethod
    def _style_ax(ax, fig):
        is_dark = ctk.get_appearance_mode() == "Dark"
        bg = "#2b2b2b" if is_dark else "#e4e4e4"
        fg = "#aaaaaa" if is_dark else "#444444"
        fig.patch.set_facecolor(bg)
        ax.set_facecolor(bg)
        ax.tick_params(colors=fg, labelsize=8)
        for spine in ax.spines.values():
            spine.set_edgecolor(fg)

    def _range(self) -> tuple[str | None, str | None]:
        return self._from_picker.get() or None, self._to_picker.get() or None

    def _load(self):
        if not hasattr(self, "_legend_frame"):
            return
        start, end = self._range()
        try:
            summary = self._report_svc.get_summary(start, end)
            breakdown = self._report_svc.get_category_breakdown(start, end)
        except ValidationError as e:
            self._error_var.set(str(e))
            return
        self._error_var.set("")

        for w in self._summary_frame.winfo_children():
            w.destroy()
        net_color = "#2196F3" if summary.net_balance >= 0 else "#FF9800"
        for i, (label, text, color) in enumerate([
            ("Income", format_currency(summary.total_income, self._currency), KIND_COLORS[KIND_INCOME]),
            ("Expenses", format_currency(summary.total_expenses, self._currency), KIND_COLORS[KIND_EXPENSE]),
            ("Net", format_currency(summary.net_balance, self._currency), net_color),
            ("Savings Rate", f"{summary.savings_rate:.1f}%", net_color),
        ]):
            card = ctk.CTkFrame(self._summary_frame, fg_color=("gray90", "gray20"), corner_radius=10)
            card.grid(row=0, column=i, padx=6, sticky="ew")
            ctk.CTkLabel(card, text=label, text_color="gray60").pack(pady=(10, 0), padx=16)
            ctk.CTkLabel(
                card, text=text, text_color=color, font=ctk.CTkFont(size=18, weight="bold"),
            ).pack(pady=(4, 10), padx=16)

        # Draw after layout so the canvases have their real size
        self.after(50, self._draw_trend)
        self.after(50, lambda b=breakdown: self._draw_breakdown(b))

        for w in self._legend_frame.winfo_children():
            w.destroy()
        for item in breakdown[:_LEGEND_ROWS]:
            row = ctk.CTkFrame(self._legend_frame, fg_color="transparent")
            row.pack(fill="x", pady=1)
            tk.Label(row, bg=item["color_hex"], width=2).pack(side="left", padx=(0, 4))
            ctk.CTkLabel(
                row, text=f"{item['category']}: {format_currency(item['total'], self._currency)}",
                anchor="w", font=ctk.CTkFont(size=11),
            ).pack(side="left")

    def _draw_trend(self):
        ax = self._bar_ax
        ax.clear()
        self._style_ax(ax, self._bar_fig)

        trend = self._report_svc.get_monthly_trend(_TREND_MONTHS)
        if not any(m["income"] or m["expense"] for m in trend):
            ax.text(0.5, 0.5, "No data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._bar_canvas.draw_idle()
            return

        x = list(range(len(trend)))
        w = 0.35
        ax.bar([i - w / 2 for i in x], [float(m["income"]) for m in trend], w,
               color=KIND_COLORS[KIND_INCOME], label="Income")
        ax.bar([i + w / 2 for i in x], [float(m["expense"]) for m in trend], w,
               color=KIND_COLORS[KIND_EXPENSE], label="Expenses")
        ax.set_xticks(x)
        ax.set_xticklabels([m["month"][2:] for m in trend])
        ax.yaxis.set_major_formatter(
            lambda v, _: f"{v / 1000:.0f}k" if abs(v) >= 1000 else f"{v:.0f}"
        )
        ax.legend(fontsize=8)
        self._bar_canvas.draw_idle()

    def _draw_breakdown(self, breakdown: list[dict]):
        ax = self._pie_ax
        ax.clear()
        self._style_ax(ax, self._pie_fig)
        if not breakdown:
            ax.text(0.5, 0.5, "No expense data", ha="center", va="center",
                    transform=ax.transAxes, color="gray")
            self._pie_canvas.draw_idle()
            return
        ax.pie(
            [float(d["total"]) for d in breakdown],
            colors=[d["color_hex"] for d in breakdown],
            startangle=90,
        )
        ax.set_aspect("equal")
        self._pie_canvas.draw_idle()

    def _export_csv(self):
        start, end = self._range()
        try:
            rows = self._report_svc.export_csv(
                TransactionFilter.from_params({"dateFrom": start, "dateTo": end})
            )
        except ValidationError as e:
            self._error_var.set(str(e))
            return

        path = filedialog.asksaveasfilename(
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
            initialfile=f"transactions_{start or 'start'}_{end or 'end'}.csv",
        )
        if not path:
            return
        with open(path, "w", newline="", encoding="utf-8") as f:
            csv.writer(f).writerows(rows)
        logger.info("Exported %d transactions to %s", len(rows) - 1, path)
