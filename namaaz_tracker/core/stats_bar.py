import tkinter as tk
from tkinter import ttk

from .component_base import COLORS


class StatsBar(tk.Frame):
    """Header strip with total points, current streak and a save-failure warning."""

    def __init__(self, parent, app):
        super().__init__(parent)
        self.app = app

        self.bg_color = parent.cget('bg')
        self.configure(bg=self.bg_color)

        self.left_frame = tk.Frame(self, bg=self.bg_color)
        self.left_frame.pack(side=tk.LEFT, fill=tk.Y, padx=10, pady=5)

        self.right_frame = tk.Frame(self, bg=self.bg_color)
        self.right_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=10, pady=5)

        self.points_label = tk.Label(self.left_frame, text="Total Points: 0", font=("Arial", 14, "bold"),
                                     bg=self.bg_color, fg=COLORS['text'])
        self.points_label.pack(side=tk.LEFT, padx=(0, 20))

        self.streak_label = tk.Label(self.left_frame, text="Current Streak: 0 days", font=("Arial", 14, "bold"),
                                     bg=self.bg_color, fg=COLORS['text'])
        self.streak_label.pack(side=tk.LEFT)

        self.warning_label = tk.Label(self.right_frame, text="", font=("Arial", 10),
                                      bg=self.bg_color, fg=COLORS['warning'])
        self.warning_label.pack(side=tk.RIGHT)

        separator = ttk.Separator(self, orient='horizontal')
        separator.pack(side=tk.BOTTOM, fill=tk.X)

    def refresh(self) -> None:
        state = self.app.state
        snapshot = state.stats()
        self.points_label.config(text=f"Total Points: {snapshot.total_points}")
        days = "day" if snapshot.current_streak == 1 else "days"
        self.streak_label.config(text=f"Current Streak: {snapshot.current_streak} {days}")
        if state.last_save_ok:
            self.warning_label.config(text="")
        else:
            self.warning_label.config(text="Could not save - changes will be lost on exit")
