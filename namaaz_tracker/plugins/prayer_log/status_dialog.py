import tkinter as tk
from tkinter import ttk
from typing import Optional

from namaaz_tracker.core.log_store import STATUSES, STATUS_NONE
from namaaz_tracker.core.scoring import FRIDAY_JUMA_POINTS, PRAYER_POINTS

STATUS_LABELS = {
    "jamaat": "Jamaat (congregation)",
    "individual": "Individual",
    "qaza": "Qaza (made up later)",
    "none": "Not prayed",
}


class StatusDialog(tk.Toplevel):
    """Modal status picker. After wait(), .result is the chosen status or None if cancelled."""

    def __init__(self, parent, date_text: str, prayer_name: str, current_status: str, juma: bool = False):
        super().__init__(parent)
        self.title(f"Log {prayer_name}")
        self.transient(parent)
        self.resizable(False, False)
        self.result: Optional[str] = None
        self.status_var = tk.StringVar(value=current_status if current_status in STATUSES else STATUS_NONE)

        body = tk.Frame(self, padx=15, pady=10)
        body.pack(fill=tk.BOTH, expand=True)

        tk.Label(body, text=date_text, font=("Arial", 11)).pack(anchor='w')
        tk.Label(body, text=prayer_name, font=("Arial", 14, "bold")).pack(anchor='w', pady=(0, 8))

        # Display order: best first
        for status in ("jamaat", "individual", "qaza", "none"):
            points = FRIDAY_JUMA_POINTS if juma and status != STATUS_NONE else PRAYER_POINTS[status]
            ttk.Radiobutton(
                body,
                text=f"{STATUS_LABELS[status]} - {points} pts",
                value=status,
                variable=self.status_var,
            ).pack(anchor='w', pady=1)

        buttons = tk.Frame(body)
        buttons.pack(fill=tk.X, pady=(10, 0))
        ttk.Button(buttons, text="Cancel", command=self._cancel).pack(side=tk.RIGHT)
        ttk.Button(buttons, text="Save", command=self._save).pack(side=tk.RIGHT, padx=(0, 5))

        self.bind('<Return>', lambda e: self._save())
        self.bind('<Escape>', lambda e: self._cancel())
        self.protocol("WM_DELETE_WINDOW", self._cancel)

    def _save(self) -> None:
        self.result = self.status_var.get()
        self.destroy()

    def _cancel(self) -> None:
        self.result = None
        self.destroy()

    def wait(self) -> Optional[str]:
        """Block (modally) until the dialog closes and return the chosen status"""
        self.grab_set()
        self.focus_set()
        self.wait_window(self)
        return self.result
