import tkinter as tk
import tkinter.messagebox as messagebox
from tkinter import ttk
from typing import Dict, Any

from namaaz_tracker.core.component_base import TrackerComponent, COLORS
from namaaz_tracker.core.log_store import format_readable_date
from namaaz_tracker.core.scoring import is_juma
from .status_dialog import StatusDialog


class DailyPrayerComponent(TrackerComponent):
    name = "Daily"

    def __init__(self, app, config: Dict[str, Any]):
        super().__init__(app, config)
        self.rows_frame = None
        self.date_label = None

    def initialize(self, parent: tk.Widget) -> None:
        super().initialize(parent)
        padding = self.get_padding('medium')

        header = tk.Frame(self.frame)
        header.pack(fill=tk.X, pady=(0, padding))

        ttk.Button(header, text="< Prev", command=lambda: self.state.step_day(-1)).pack(side=tk.LEFT)
        ttk.Button(header, text="Next >", command=lambda: self.state.step_day(1)).pack(side=tk.RIGHT)
        ttk.Button(header, text="Today", command=self.state.go_to_today).pack(side=tk.RIGHT, padx=padding)

        self.date_label = self.create_label(header, font_size='title', bold=True)
        self.date_label.pack(side=tk.LEFT, expand=True)

        self.rows_frame = tk.Frame(self.frame)
        self.rows_frame.pack(fill=tk.BOTH, expand=True)
        self.rows_frame.columnconfigure(1, weight=1)

        self.update()

    def update(self) -> None:
        if self.rows_frame is None or not self.rows_frame.winfo_exists():
            return
        day = self.state.daily_date
        daily_log = self.state.view_day(day)
        self.date_label.config(text=format_readable_date(day))

        for widget in self.rows_frame.winfo_children():
            widget.destroy()

        padding = self.get_padding('small')
        for row, (prayer_name, record) in enumerate(daily_log.items()):
            title = f"{prayer_name} (Juma)" if is_juma(day, prayer_name) else prayer_name
            self.create_label(self.rows_frame, text=title, font_size='heading', bold=True, anchor='w').grid(
                row=row, column=0, sticky='w', padx=padding, pady=padding)

            status_text = f"Status: {record.status}"
            if record.is_logged:
                status_text += f" ({record.points} pts)"
            self.create_label(self.rows_frame, text=status_text, color=COLORS['muted'], anchor='w').grid(
                row=row, column=1, sticky='w', padx=padding)

            button = tk.Button(
                self.rows_frame,
                text="Logged" if record.is_logged else "Log Prayer",
                width=12,
                command=lambda p=prayer_name: self._log_prayer(p),
            )
            if record.is_logged:
                button.config(bg=COLORS['logged'], fg='white', activebackground=COLORS['logged'])
            button.grid(row=row, column=2, sticky='e', padx=padding, pady=padding)

    def _log_prayer(self, prayer_name: str) -> None:
        """Open the status dialog and record the choice"""
        day = self.state.daily_date
        daily_log = self.state.view_day(day)
        dialog = StatusDialog(
            self.frame.winfo_toplevel(),
            date_text=format_readable_date(day),
            prayer_name=prayer_name,
            current_status=daily_log[prayer_name].status,
            juma=is_juma(day, prayer_name),
        )
        status = dialog.wait()
        if status is None:
            return
        if not self.state.log_prayer(day, prayer_name, status):
            messagebox.showwarning(
                "Not saved",
                "Your entry was recorded but could not be saved to disk. It will be lost when the app closes.",
            )
