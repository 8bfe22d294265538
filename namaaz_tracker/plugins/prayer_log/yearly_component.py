import tkinter as tk
from tkinter import ttk
from typing import Dict, Any

from namaaz_tracker.core.calendar_grid import DAYS_PER_WEEK, MonthGrid, project_year
from namaaz_tracker.core.component_base import TrackerComponent, COLORS
from namaaz_tracker.core.log_store import PRAYER_NAMES, parse_date_key

CARDS_PER_ROW = 4


class YearlyCalendarComponent(TrackerComponent):
    name = "Yearly"

    def __init__(self, app, config: Dict[str, Any]):
        super().__init__(app, config)
        self.cards_frame = None
        self.title_label = None

    def initialize(self, parent: tk.Widget) -> None:
        super().initialize(parent)
        padding = self.get_padding('medium')

        header = tk.Frame(self.frame)
        header.pack(fill=tk.X, pady=(0, padding))
        ttk.Button(header, text="< Prev", command=lambda: self.state.step_year(-1)).pack(side=tk.LEFT)
        ttk.Button(header, text="Next >", command=lambda: self.state.step_year(1)).pack(side=tk.RIGHT)
        self.title_label = self.create_label(header, font_size='title', bold=True)
        self.title_label.pack(side=tk.LEFT, expand=True)

        self.cards_frame = tk.Frame(self.frame)
        self.cards_frame.pack(fill=tk.BOTH, expand=True)
        for column in range(CARDS_PER_ROW):
            self.cards_frame.columnconfigure(column, weight=1, uniform="month")

        self.update()

    def update(self) -> None:
        if self.cards_frame is None or not self.cards_frame.winfo_exists():
            return
        year = self.state.yearly_date.year
        self.title_label.config(text=str(year))

        for widget in self.cards_frame.winfo_children():
            widget.destroy()

        grids = project_year(year, self.state.store, first_weekday=self.app.first_weekday)
        for index, grid in enumerate(grids):
            row, column = divmod(index, CARDS_PER_ROW)
            self._create_month_card(grid).grid(row=row, column=column, sticky='nsew', padx=3, pady=3)

    def _create_month_card(self, grid: MonthGrid) -> tk.Frame:
        card = tk.Frame(self.cards_frame, relief=tk.GROOVE, borderwidth=1)
        self.create_label(card, text=grid.title, font_size='small', bold=True).grid(
            row=0, column=0, columnspan=DAYS_PER_WEEK, pady=(2, 2))

        fonts = self.get_responsive_fonts()
        for index, cell in enumerate(grid.cells):
            if cell.is_empty:
                continue
            row, column = divmod(index, DAYS_PER_WEEK)
            if cell.is_complete:
                color = COLORS['completed']
            elif cell.completed_count:
                color = COLORS['progress']
            else:
                color = COLORS['muted']
            label = tk.Label(
                card,
                text=f"{cell.day_number}\n{cell.completed_count}/{len(PRAYER_NAMES)}",
                font=("Arial", fonts['tiny']),
                fg=color,
                cursor="hand2",
            )
            if cell.is_today:
                label.configure(bg=COLORS['today'])
            label.grid(row=row + 1, column=column, padx=1)
            label.bind('<Button-1>', lambda e, d=parse_date_key(cell.date_key): self.app.open_day(d))
        return card
