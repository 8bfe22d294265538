"""
Points rules for logged prayers.
"""
from datetime import date, datetime
from typing import Union

from .log_store import (
    PrayerLogStore,
    STATUS_INDIVIDUAL,
    STATUS_JAMAAT,
    STATUS_NONE,
    STATUS_QAZA,
    parse_date_key,
)

PRAYER_POINTS = {
    STATUS_JAMAAT: 5,
    STATUS_INDIVIDUAL: 3,
    STATUS_QAZA: 2,
    STATUS_NONE: 0,
}

# Flat bonus for any logged Dhuhr on a Friday, whatever the status
FRIDAY_JUMA_POINTS = 10
JUMA_PRAYER = "Dhuhr"
FRIDAY = 4  # date.weekday()


def is_juma(day: Union[date, datetime], prayer_name: str) -> bool:
    """True for the Dhuhr slot of a Friday."""
    return prayer_name == JUMA_PRAYER and day.weekday() == FRIDAY


def points_for(day: Union[date, datetime], prayer_name: str, status: str) -> int:
    """Points earned by one prayer. Unknown statuses score 0."""
    if status == STATUS_NONE or status not in PRAYER_POINTS:
        return 0
    if is_juma(day, prayer_name):
        return FRIDAY_JUMA_POINTS
    return PRAYER_POINTS[status]


def total_points(store: PrayerLogStore) -> int:
    """Sum of points over every logged prayer, re-derived from (date, prayer, status)."""
    total = 0
    for date_key, daily_log in store.items():
        day = parse_date_key(date_key)
        for prayer_name, record in daily_log.items():
            if record.is_logged:
                total += points_for(day, prayer_name, record.status)
    return total
