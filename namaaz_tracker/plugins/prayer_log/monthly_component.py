import tkinter as tk
from tkinter import ttk
from typing import Dict, Any

from namaaz_tracker.core.calendar_grid import (
    DAYS_PER_WEEK,
    DayCell,
    month_title,
    project_month,
    weekday_headers,
)
from namaaz_tracker.core.component_base import TrackerComponent, COLORS
from namaaz_tracker.core.log_store import parse_date_key

PROGRESS_WIDTH = 60
PROGRESS_HEIGHT = 6


class MonthlyCalendarComponent(TrackerComponent):
    name = "Monthly"

    def __init__(self, app, config: Dict[str, Any]):
        super().__init__(app, config)
        self.grid_frame = None
        self.title_label = None

    def initialize(self, parent: tk.Widget) -> None:
        super().initialize(parent)
        padding = self.get_padding('medium')

        header = tk.Frame(self.frame)
        header.pack(fill=tk.X, pady=(0, padding))
        ttk.Button(header, text="< Prev", command=lambda: self.state.step_month(-1)).pack(side=tk.LEFT)
        ttk.Button(header, text="Next >", command=lambda: self.state.step_month(1)).pack(side=tk.RIGHT)
        self.title_label = self.create_label(header, font_size='title', bold=True)
        self.title_label.pack(side=tk.LEFT, expand=True)

        self.grid_frame = tk.Frame(self.frame)
        self.grid_frame.pack(fill=tk.BOTH, expand=True)
        for column in range(DAYS_PER_WEEK):
            self.grid_frame.columnconfigure(column, weight=1, uniform="day")

        self.update()

    def update(self) -> None:
        if self.grid_frame is None or not self.grid_frame.winfo_exists():
            return
        shown = self.state.monthly_date
        self.title_label.config(text=month_title(shown.year, shown.month))

        for widget in self.grid_frame.winfo_children():
            widget.destroy()

        for column, weekday in enumerate(weekday_headers(self.app.first_weekday)):
            self.create_label(self.grid_frame, text=weekday, font_size='small', bold=True,
                              color=COLORS['muted']).grid(row=0, column=column, pady=(0, 4))

        # Never materializes days; only the daily view does that
        cells = project_month(shown.year, shown.month, self.state.store, first_weekday=self.app.first_weekday)
        for index, cell in enumerate(cells):
            row, column = divmod(index, DAYS_PER_WEEK)
            if cell.is_empty:
                tk.Frame(self.grid_frame).grid(row=row + 1, column=column, sticky='nsew')
                continue
            self._create_day_cell(cell).grid(row=row + 1, column=column, sticky='nsew', padx=2, pady=2)

    def _create_day_cell(self, cell: DayCell) -> tk.Frame:
        bg = COLORS['today'] if cell.is_today else None
        day_frame = tk.Frame(self.grid_frame, relief=tk.GROOVE, borderwidth=1, cursor="hand2")
        if bg:
            day_frame.configure(bg=bg)

        number = self.create_label(day_frame, text=str(cell.day_number), font_size='body', bold=cell.is_today)
        if bg:
            number.configure(bg=bg)
        number.pack(anchor='nw', padx=4, pady=(2, 0))

        bar = tk.Canvas(day_frame, width=PROGRESS_WIDTH, height=PROGRESS_HEIGHT,
                        bg=COLORS['progress_bg'], highlightthickness=0)
        filled = int(PROGRESS_WIDTH * cell.percentage / 100)
        if filled:
            color = COLORS['completed'] if cell.is_complete else COLORS['progress']
            bar.create_rectangle(0, 0, filled, PROGRESS_HEIGHT, fill=color, width=0)
        bar.pack(padx=4, pady=4)

        day = parse_date_key(cell.date_key)
        for widget in (day_frame, number, bar):
            widget.bind('<Button-1>', lambda e, d=day: self.app.open_day(d))
        return day_frame
