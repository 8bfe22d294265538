"""
Shared fixtures: temporary SQLite database, prayer log builders, and an app stand-in for API tests.
"""
from datetime import date
from types import SimpleNamespace

import pytest

from namaaz_tracker.core import db
from namaaz_tracker.core.calendar_grid import SUNDAY
from namaaz_tracker.core.log_store import (
    DailyLog,
    PRAYER_NAMES,
    PrayerLogStore,
    PrayerRecord,
    STATUS_JAMAAT,
    STATUS_NONE,
    format_date_key,
)
from namaaz_tracker.core.scoring import points_for

# Known weekdays
MONDAY_DATE = date(2024, 3, 4)
FRIDAY_DATE = date(2024, 3, 1)
SUNDAY_DATE = date(2024, 3, 10)


def make_day(day: date, status: str = STATUS_JAMAAT, logged: int = 5) -> DailyLog:
    """A day with the first `logged` prayers set to status and the rest 'none'."""
    records = {}
    for index, name in enumerate(PRAYER_NAMES):
        record_status = status if index < logged else STATUS_NONE
        records[name] = PrayerRecord(record_status, points_for(day, name, record_status))
    return DailyLog(records)


def make_store(*days, status: str = STATUS_JAMAAT) -> PrayerLogStore:
    """Store with every given date fully logged."""
    store = PrayerLogStore()
    for day in days:
        store.put(format_date_key(day), make_day(day, status))
    store.dirty = False
    return store


@pytest.fixture
def database(tmp_path):
    """Fresh file-backed SQLite database per test."""
    db.close_db()
    db.init_db(db_url=f"sqlite:///{tmp_path / 'test.db'}")
    yield
    db.close_db()


@pytest.fixture
def tracker_app(database):
    """Minimal object with what the API reads from TrackerApp."""
    from namaaz_tracker.core.state import TrackerState
    from namaaz_tracker.core.storage import PrayerLogStorage
    from namaaz_tracker.core.plugin_manager import PluginManager

    plugin_manager = PluginManager()
    plugin_manager.discover_plugins()
    return SimpleNamespace(
        state=TrackerState(PrayerLogStorage()),
        config=SimpleNamespace(data={"components": {"Daily": {"enable": True}}}),
        plugin_manager=plugin_manager,
        first_weekday=SUNDAY,
    )
