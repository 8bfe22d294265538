"""
Application state: the in-memory prayer log, its storage, and the dates each view is showing.
Write path is mutate -> persist -> notify, serialized by a lock.
"""
import calendar
import logging
import threading
from collections import namedtuple
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Union

from .log_store import (
    DailyLog,
    PRAYER_NAMES,
    PrayerLogStore,
    canonical_date_key,
    format_date_key,
    normalize_status,
    parse_date_key,
)
from .scoring import points_for, total_points
from .storage import PrayerLogStorage
from .streak import current_streak

StatsSnapshot = namedtuple("StatsSnapshot", ["total_points", "current_streak"])


def get_or_init_day(store: PrayerLogStore, date_key: str) -> DailyLog:
    """Return the day's log, creating an all-'none' day if the date was never touched."""
    date_key = canonical_date_key(date_key)
    daily_log = store.get(date_key)
    if daily_log is None:
        daily_log = DailyLog()
        store.put(date_key, daily_log)
    return daily_log


def set_prayer_status(store: PrayerLogStore, date_key: str, prayer_name: str, status: str) -> DailyLog:
    """Set status and its derived points together, materializing the day first if needed."""
    if prayer_name not in PRAYER_NAMES:
        raise ValueError(f"Unknown prayer: {prayer_name}")
    date_key = canonical_date_key(date_key)
    day = parse_date_key(date_key)
    daily_log = get_or_init_day(store, date_key)
    status = normalize_status(status)
    record = daily_log[prayer_name]
    record.status, record.points = status, points_for(day, prayer_name, status)
    store.dirty = True
    return daily_log


def add_months(day: date, months: int) -> date:
    """First of the month `months` away from day's month."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def add_years(day: date, years: int) -> date:
    """Same day in another year; Feb 29 falls back to Feb 28."""
    year = day.year + years
    last_day = calendar.monthrange(year, day.month)[1]
    return date(year, day.month, min(day.day, last_day))


class TrackerState:
    """Owns the prayer log and the navigation dates. Constructed once at startup and
    passed to the views and the API."""

    def __init__(self, storage: Optional[PrayerLogStorage] = None, today: Optional[date] = None):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.storage = storage
        self.store = storage.load() if storage else PrayerLogStore()
        self.last_save_ok = True
        self.change_callbacks: List[Callable] = []
        self._lock = threading.RLock()

        today = today or date.today()
        self.daily_date = today
        self.monthly_date = today.replace(day=1)
        self.yearly_date = today

    def register_change_callback(self, callback: Callable) -> None:
        """Register a callback(state) to be called after each mutation or navigation"""
        self.change_callbacks.append(callback)

    def _notify(self) -> None:
        for callback in list(self.change_callbacks):
            try:
                callback(self)
            except Exception as e:
                self.logger.error(f"Error in state change callback: {e}", exc_info=True)

    def _persist(self) -> bool:
        if self.storage is None:
            return True
        self.last_save_ok = self.storage.save(self.store)
        return self.last_save_ok

    # --- Reads ---

    def stats(self, today: Optional[Union[date, datetime]] = None) -> StatsSnapshot:
        """Total points and current streak, recomputed from the store."""
        with self._lock:
            return StatsSnapshot(
                total_points=total_points(self.store),
                current_streak=current_streak(self.store, today or date.today()),
            )

    def view_day(self, day: Union[date, str]) -> DailyLog:
        """Daily-view read: materializes the day, saving it if it is new.
        Listeners are notified only when that save flips last_save_ok."""
        date_key = canonical_date_key(day) if isinstance(day, str) else format_date_key(day)
        with self._lock:
            created = date_key not in self.store
            daily_log = get_or_init_day(self.store, date_key)
            was_ok = self.last_save_ok
            if created:
                self._persist()
            changed = self.last_save_ok != was_ok
        if changed:
            self._notify()
        return daily_log

    # --- Writes ---

    def log_prayer(self, day: Union[date, str], prayer_name: str, status: str) -> bool:
        """Record a status, persist, then notify listeners. Returns whether the save succeeded."""
        date_key = day if isinstance(day, str) else format_date_key(day)
        with self._lock:
            set_prayer_status(self.store, date_key, prayer_name, status)
            self.logger.info(f"Logged {prayer_name} on {date_key} as {normalize_status(status)}")
            saved = self._persist()
        self._notify()
        return saved

    # --- Navigation ---

    def step_day(self, days: int) -> date:
        self.daily_date = self.daily_date + timedelta(days=days)
        self._notify()
        return self.daily_date

    def step_month(self, months: int) -> date:
        self.monthly_date = add_months(self.monthly_date, months)
        self._notify()
        return self.monthly_date

    def step_year(self, years: int) -> date:
        self.yearly_date = add_years(self.yearly_date, years)
        self._notify()
        return self.yearly_date

    def show_day(self, day: date) -> None:
        """Point the daily view at a date (e.g. a calendar cell click)."""
        self.daily_date = day
        self._notify()

    def go_to_today(self, today: Optional[date] = None) -> None:
        today = today or date.today()
        self.daily_date = today
        self.monthly_date = today.replace(day=1)
        self.yearly_date = today
        self._notify()
