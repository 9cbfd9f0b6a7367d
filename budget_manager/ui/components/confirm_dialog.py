import customtkinter as ctk


class ConfirmDialog(ctk.CTkToplevel):
    """Modal yes/no prompt. Blocks until closed; read the answer from .result."""

    def __init__(self, master, title: str, message: str,
                 confirm_text: str = "Delete", **kwargs):
        super().__init__(master, **kwargs)
        self.title(title)
        self.result = False
        self.resizable(False, False)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, wraplength=380, justify="left", padx=20, pady=16,
        ).grid(row=0, column=0, sticky="ew")

        buttons = ctk.CTkFrame(self, fg_color="transparent")
        buttons.grid(row=1, column=0, padx=20, pady=(0, 16), sticky="e")

        ctk.CTkButton(
            buttons, text="Cancel", width=90,
            fg_color="transparent", border_width=1,
            text_color=("gray10", "gray90"),
            command=self.destroy,
        ).pack(side="left", padx=(0, 8))

        ctk.CTkButton(
            buttons, text=confirm_text, width=90,
            fg_color="#F44336", hover_color="#D32F2F",
            command=self._confirm,
        ).pack(side="left")

        self.bind("<Escape>", lambda _e: self.destroy())
        self.transient(master)
        self.grab_set()
        center_over(self, master)
        self.wait_window()

    def _confirm(self):
        self.result = True
        self.destroy()


def center_over(window, master):
    """Place a toplevel over the middle of its master window."""
    window.update_idletasks()
    cx = master.winfo_rootx() + master.winfo_width() // 2
    cy = master.winfo_rooty() + master.winfo_height() // 2
    w, h = window.winfo_width(), window.winfo_height()
    window.geometry(f"+{cx - w // 2}+{cy - h // 2}")
