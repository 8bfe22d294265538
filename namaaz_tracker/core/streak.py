"""
Consecutive-day streak - pure function, no storage access.
"""
from datetime import date, datetime, timedelta
from typing import Union

from .log_store import PrayerLogStore, format_date_key


def current_streak(store: PrayerLogStore, today: Union[date, datetime]) -> int:
    """
    Count consecutive days ending at today (inclusive) with all five prayers logged.
    Stops at the first missing or incomplete day, so cost is O(streak length).
    """
    if isinstance(today, datetime):
        today = today.date()

    streak = 0
    day = today
    while True:
        daily_log = store.get(format_date_key(day))
        if daily_log is None or not daily_log.is_complete:
            return streak
        streak += 1
        try:
            day = day - timedelta(days=1)
        except OverflowError:
            # Walked past date.min
            return streak
