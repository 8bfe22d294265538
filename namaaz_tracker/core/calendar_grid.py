"""
Projects the prayer log onto month and year grids for the calendar views.
Read-only: projecting never creates or changes entries in the store.
"""
import calendar
from collections import namedtuple
from datetime import date
from typing import List, Optional

from .log_store import PRAYER_NAMES, PrayerLogStore, format_date_key

SUNDAY = calendar.SUNDAY
MONDAY = calendar.MONDAY

WEEKDAY_NAMES = {
    "sunday": SUNDAY,
    "monday": MONDAY,
}

DAYS_PER_WEEK = 7


class DayCell(namedtuple(
    "DayCell",
    [
        "day_number",       # 1..31, None for padding
        "date_key",         # "YYYY-MM-DD", None for padding
        "completed_count",  # 0..5
        "is_today",
        "is_empty",         # leading placeholder before the 1st
    ],
    defaults=(None, None, 0, False, False),
)):
    __slots__ = ()

    @property
    def percentage(self) -> float:
        return self.completed_count / len(PRAYER_NAMES) * 100

    @property
    def is_complete(self) -> bool:
        return not self.is_empty and self.completed_count == len(PRAYER_NAMES)


MonthGrid = namedtuple("MonthGrid", ["year", "month", "title", "cells"])

EMPTY_CELL = DayCell(is_empty=True)


def first_weekday_from_config(value, default: int = SUNDAY) -> int:
    """Map a config value ('sunday' or 'monday') to a calendar weekday constant."""
    if isinstance(value, str):
        return WEEKDAY_NAMES.get(value.strip().lower(), default)
    return default


def weekday_headers(first_weekday: int = SUNDAY) -> List[str]:
    """Short weekday names in column order, e.g. ['Sun', 'Mon', ...]."""
    return [calendar.day_abbr[(first_weekday + i) % DAYS_PER_WEEK] for i in range(DAYS_PER_WEEK)]


def leading_empty_count(year: int, month: int, first_weekday: int = SUNDAY) -> int:
    """Number of placeholders before the 1st so it lands under its weekday column."""
    return (date(year, month, 1).weekday() - first_weekday) % DAYS_PER_WEEK


def project_month(
    year: int,
    month: int,
    store: PrayerLogStore,
    today: Optional[date] = None,
    first_weekday: int = SUNDAY,
) -> List[DayCell]:
    """Leading empty cells followed by one DayCell per day of the month."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1-12, got {month}")
    today_key = format_date_key(today or date.today())

    cells = [EMPTY_CELL] * leading_empty_count(year, month, first_weekday)
    _, days_in_month = calendar.monthrange(year, month)
    for day_number in range(1, days_in_month + 1):
        date_key = format_date_key(date(year, month, day_number))
        daily_log = store.get(date_key)
        cells.append(DayCell(
            day_number=day_number,
            date_key=date_key,
            completed_count=daily_log.completed_count if daily_log else 0,
            is_today=date_key == today_key,
            is_empty=False,
        ))
    return cells


def month_grid(
    year: int,
    month: int,
    store: PrayerLogStore,
    today: Optional[date] = None,
    first_weekday: int = SUNDAY,
) -> MonthGrid:
    """One month's cells titled with the month name."""
    cells = project_month(year, month, store, today=today, first_weekday=first_weekday)
    return MonthGrid(year=year, month=month, title=calendar.month_name[month], cells=cells)


def project_year(
    year: int,
    store: PrayerLogStore,
    today: Optional[date] = None,
    first_weekday: int = SUNDAY,
) -> List[MonthGrid]:
    """Twelve month grids, January first."""
    today = today or date.today()
    return [month_grid(year, month, store, today=today, first_weekday=first_weekday) for month in range(1, 13)]


def trailing_padding(cells: List[DayCell]) -> int:
    """Empty cells needed after the last day to fill the final week row."""
    return (-len(cells)) % DAYS_PER_WEEK


def month_title(year: int, month: int) -> str:
    """e.g. 'March 2024'"""
    return f"{calendar.month_name[month]} {year}"
