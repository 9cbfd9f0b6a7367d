import customtkinter as ctk

BANNER_INFO = "#2196F3"
BANNER_ERROR = "#F44336"


class AlertBanner(ctk.CTkFrame):
    """Coloured strip above the tabs for errors and notices.

    Closes itself after `timeout_ms` when given, otherwise stays until dismissed.
    """

    def __init__(self, master, message: str, color: str = BANNER_INFO,
                 action_text: str | None = None, action_cmd=None,
                 timeout_ms: int | None = None, **kwargs):
        super().__init__(master, fg_color=color, corner_radius=6, **kwargs)
        self.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            self, text=message, text_color="white",
            anchor="w", justify="left", wraplength=900, padx=10, pady=6,
        ).grid(row=0, column=0, sticky="ew")

        actions = ctk.CTkFrame(self, fg_color="transparent")
        actions.grid(row=0, column=1, padx=(0, 4))

        if action_text and action_cmd:
            ctk.CTkButton(
                actions, text=action_text, width=60, height=24,
                fg_color="transparent", border_width=1, border_color="white",
                text_color="white", command=self._run_action(action_cmd),
            ).pack(side="left", padx=2)

        ctk.CTkButton(
            actions, text="✕", width=28, height=24,
            fg_color="transparent", text_color="white",
            command=self.destroy,
        ).pack(side="left")

        if timeout_ms:
            self.after(timeout_ms, self._expire)

    def _run_action(self, cmd):
        def _wrapped():
            cmd()
            self.destroy()
        return _wrapped

    def _expire(self):
        if self.winfo_exists():
            self.destroy()
