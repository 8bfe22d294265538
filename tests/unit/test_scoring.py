"""
Unit tests for the scoring rules: base table, Friday Juma bonus, and totals.
"""
import random
from datetime import datetime

import pytest

from namaaz_tracker.core.log_store import PRAYER_NAMES, PrayerLogStore, STATUSES
from namaaz_tracker.core.scoring import (
    FRIDAY_JUMA_POINTS,
    PRAYER_POINTS,
    is_juma,
    points_for,
    total_points,
)
from namaaz_tracker.core.state import set_prayer_status
from tests.conftest import FRIDAY_DATE, MONDAY_DATE, make_day, make_store


class TestPointsFor:
    """Points for a single prayer."""

    @pytest.mark.parametrize("status,expected", [
        ("none", 0),
        ("qaza", 2),
        ("individual", 3),
        ("jamaat", 5),
    ])
    def test_base_table_on_weekday(self, status, expected):
        assert points_for(MONDAY_DATE, "Fajr", status) == expected

    @pytest.mark.parametrize("prayer", PRAYER_NAMES)
    def test_every_prayer_uses_base_table_on_weekday(self, prayer):
        for status in STATUSES:
            assert points_for(MONDAY_DATE, prayer, status) == PRAYER_POINTS[status]

    @pytest.mark.parametrize("status", ["individual", "jamaat", "qaza"])
    def test_friday_dhuhr_is_flat_bonus(self, status):
        assert points_for(FRIDAY_DATE, "Dhuhr", status) == FRIDAY_JUMA_POINTS == 10

    def test_friday_dhuhr_not_prayed_scores_zero(self):
        assert points_for(FRIDAY_DATE, "Dhuhr", "none") == 0

    @pytest.mark.parametrize("prayer", ["Fajr", "Asr", "Maghrib", "Isha"])
    def test_other_friday_prayers_use_base_table(self, prayer):
        assert points_for(FRIDAY_DATE, prayer, "jamaat") == 5
        assert points_for(FRIDAY_DATE, prayer, "qaza") == 2

    def test_unknown_status_scores_zero(self):
        assert points_for(MONDAY_DATE, "Fajr", "sometimes") == 0
        assert points_for(FRIDAY_DATE, "Dhuhr", "sometimes") == 0

    def test_datetime_uses_its_calendar_date(self):
        assert points_for(datetime(2024, 3, 1, 23, 59), "Dhuhr", "qaza") == 10

    def test_is_juma(self):
        assert is_juma(FRIDAY_DATE, "Dhuhr")
        assert not is_juma(FRIDAY_DATE, "Asr")
        assert not is_juma(MONDAY_DATE, "Dhuhr")


class TestTotalPoints:
    """Aggregate points across the whole log."""

    def test_empty_store(self):
        assert total_points(PrayerLogStore()) == 0

    def test_weekday_all_jamaat(self):
        assert total_points(make_store(MONDAY_DATE)) == 25

    def test_friday_all_jamaat(self):
        # 4 * 5 + Juma bonus
        assert total_points(make_store(FRIDAY_DATE)) == 30

    def test_unlogged_prayers_do_not_count(self):
        store = PrayerLogStore()
        store.put("2024-03-04", make_day(MONDAY_DATE, "individual", logged=2))
        assert total_points(store) == 6

    def test_rederives_instead_of_trusting_cached_points(self):
        store = make_store(MONDAY_DATE)
        store.get("2024-03-04")["Fajr"].points = 999
        assert total_points(store) == 25

    def test_past_friday_edit_gets_bonus(self):
        store = PrayerLogStore()
        set_prayer_status(store, "2024-03-01", "Dhuhr", "individual")
        assert store.get("2024-03-01")["Dhuhr"].points == 10
        assert total_points(store) == 10

    def test_independent_of_key_order(self):
        days = [MONDAY_DATE, FRIDAY_DATE] + [d for d in (
            datetime(2024, 1, n).date() for n in range(1, 20))]
        store = make_store(*days)
        expected = total_points(store)

        shuffled = list(store.items())
        random.Random(7).shuffle(shuffled)
        assert total_points(PrayerLogStore(dict(shuffled))) == expected
