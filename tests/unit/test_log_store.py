"""
Unit tests for prayer log types and blob (de)serialization.
"""
import json
from datetime import date, datetime

import pytest

from namaaz_tracker.core.log_store import (
    DailyLog,
    PRAYER_NAMES,
    PrayerLogStore,
    PrayerRecord,
    canonical_date_key,
    format_date_key,
    format_readable_date,
    normalize_status,
    parse_date_key,
)
from namaaz_tracker.core.scoring import total_points
from namaaz_tracker.core.streak import current_streak
from tests.conftest import FRIDAY_DATE, SUNDAY_DATE, make_day, make_store


class TestDateKeys:

    def test_format(self):
        assert format_date_key(date(2024, 3, 1)) == "2024-03-01"

    def test_datetime_is_truncated(self):
        assert format_date_key(datetime(2024, 3, 1, 23, 30)) == "2024-03-01"

    def test_parse_round_trip(self):
        assert parse_date_key("2024-03-01") == date(2024, 3, 1)

    @pytest.mark.parametrize("bad", ["", "2024-13-01", "2024/03/01", "yesterday", None])
    def test_parse_rejects_malformed(self, bad):
        with pytest.raises(ValueError):
            parse_date_key(bad)

    def test_canonical_pads(self):
        assert canonical_date_key("2024-3-1") == "2024-03-01"

    def test_readable(self):
        assert format_readable_date(FRIDAY_DATE) == "Friday, March 1, 2024"


class TestDailyLog:

    def test_new_day_has_all_prayers_unlogged(self):
        daily_log = DailyLog()
        assert list(daily_log) == list(PRAYER_NAMES)
        assert all(record == PrayerRecord("none", 0) for _, record in daily_log.items())
        assert daily_log.completed_count == 0

    def test_completed_count(self):
        assert make_day(SUNDAY_DATE, logged=3).completed_count == 3
        assert make_day(SUNDAY_DATE).is_complete

    def test_rejects_unknown_prayer(self):
        with pytest.raises(ValueError):
            DailyLog({"Tahajjud": PrayerRecord("jamaat", 5)})

    def test_to_dict_shape(self):
        data = make_day(SUNDAY_DATE, logged=1).to_dict()
        assert data["Fajr"] == {"status": "jamaat", "points": 5}
        assert data["Isha"] == {"status": "none", "points": 0}


class TestNormalizeStatus:

    @pytest.mark.parametrize("value", ["none", "individual", "jamaat", "qaza"])
    def test_known(self, value):
        assert normalize_status(value) == value

    @pytest.mark.parametrize("value", ["JAMAAT", "late", "", None, 5])
    def test_unknown_is_none(self, value):
        assert normalize_status(value) == "none"


class TestFromDict:
    """Defensive loading of stored data."""

    def test_round_trip_preserves_stats(self):
        store = make_store(SUNDAY_DATE, date(2024, 3, 9), FRIDAY_DATE)
        store.put("2024-02-01", make_day(date(2024, 2, 1), "qaza", logged=2))

        reloaded = PrayerLogStore.from_dict(json.loads(json.dumps(store.to_dict())))

        assert reloaded == store
        assert total_points(reloaded) == total_points(store)
        assert current_streak(reloaded, SUNDAY_DATE) == current_streak(store, SUNDAY_DATE) == 2

    def test_unknown_status_becomes_none(self):
        store = PrayerLogStore.from_dict({"2024-03-04": {"Fajr": {"status": "late", "points": 4}}})
        record = store.get("2024-03-04")["Fajr"]
        assert record == PrayerRecord("none", 0)

    def test_missing_prayers_are_filled(self):
        store = PrayerLogStore.from_dict({"2024-03-04": {"Fajr": {"status": "jamaat"}}})
        daily_log = store.get("2024-03-04")
        assert daily_log["Fajr"] == PrayerRecord("jamaat", 5)
        assert daily_log["Isha"] == PrayerRecord("none", 0)

    def test_points_are_rederived(self):
        store = PrayerLogStore.from_dict({"2024-03-01": {"Dhuhr": {"status": "qaza", "points": 2}}})
        assert store.get("2024-03-01")["Dhuhr"].points == 10

    def test_unknown_prayers_dropped(self):
        store = PrayerLogStore.from_dict({"2024-03-04": {"Witr": {"status": "jamaat", "points": 5}}})
        assert "Witr" not in store.get("2024-03-04")
        assert total_points(store) == 0

    def test_bad_entries_skipped(self):
        store = PrayerLogStore.from_dict({
            "not-a-date": {"Fajr": {"status": "jamaat"}},
            "2024-03-05": "garbage",
            "2024-03-04": {"Fajr": "garbage", "Asr": {"status": "individual"}},
        })
        assert store.date_keys() == ["2024-03-04"]
        assert store.get("2024-03-04")["Fajr"].status == "none"
        assert store.get("2024-03-04")["Asr"].points == 3

    def test_same_day_under_two_keys_is_merged(self, caplog):
        store = PrayerLogStore.from_dict({
            "2024-03-04": {"Fajr": {"status": "jamaat"}, "Isha": {"status": "qaza"}},
            "2024-3-4": {"Asr": {"status": "jamaat"}, "Isha": {"status": "individual"}},
        })
        assert store.date_keys() == ["2024-03-04"]
        daily_log = store.get("2024-03-04")
        assert daily_log["Fajr"] == PrayerRecord("jamaat", 5)
        assert daily_log["Asr"] == PrayerRecord("jamaat", 5)
        assert daily_log["Isha"] == PrayerRecord("qaza", 2)
        assert total_points(store) == 12
        assert "merging" in caplog.text

    @pytest.mark.parametrize("payload", [None, [], "text", 3])
    def test_non_object_payload_is_empty(self, payload):
        assert len(PrayerLogStore.from_dict(payload)) == 0

    def test_loaded_store_is_clean(self):
        store = PrayerLogStore.from_dict({"2024-03-04": {"Fajr": {"status": "jamaat"}}})
        assert not store.dirty
