"""
Prayer log data types: statuses, per-prayer records, daily logs and the date-keyed store.
The store serializes to one JSON-compatible dict: {date_key: {prayer_name: {status, points}}}.
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)

STATUS_NONE = "none"
STATUS_INDIVIDUAL = "individual"
STATUS_JAMAAT = "jamaat"
STATUS_QAZA = "qaza"

STATUSES = (STATUS_NONE, STATUS_INDIVIDUAL, STATUS_JAMAAT, STATUS_QAZA)

PRAYER_NAMES = ("Fajr", "Dhuhr", "Asr", "Maghrib", "Isha")

DATE_KEY_FORMAT = "%Y-%m-%d"


def normalize_status(value: Any) -> str:
    """Return value if it is a known status, otherwise 'none'."""
    if isinstance(value, str) and value in STATUSES:
        return value
    return STATUS_NONE


def format_date_key(day: Union[date, datetime]) -> str:
    """YYYY-MM-DD key for a calendar date. Datetimes are truncated, no timezone conversion."""
    if isinstance(day, datetime):
        day = day.date()
    return day.isoformat()


def parse_date_key(date_key: str) -> date:
    """Parse a YYYY-MM-DD key. Raises ValueError if malformed."""
    if not isinstance(date_key, str):
        raise ValueError(f"Date key must be a string, got {type(date_key).__name__}")
    return datetime.strptime(date_key, DATE_KEY_FORMAT).date()


def canonical_date_key(date_key: str) -> str:
    """Validate a key and return it in zero-padded YYYY-MM-DD form."""
    return format_date_key(parse_date_key(date_key))


def format_readable_date(day: date) -> str:
    """e.g. 'Friday, March 1, 2024'"""
    return f"{day.strftime('%A')}, {day.strftime('%B')} {day.day}, {day.year}"


class PrayerRecord:
    """Status of one prayer plus the points it earned (derived from the scoring rule)."""

    __slots__ = ("status", "points")

    def __init__(self, status: str = STATUS_NONE, points: int = 0):
        self.status = status
        self.points = points

    @property
    def is_logged(self) -> bool:
        return self.status != STATUS_NONE

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "points": self.points}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrayerRecord):
            return NotImplemented
        return self.status == other.status and self.points == other.points

    def __repr__(self) -> str:
        return f"PrayerRecord(status={self.status!r}, points={self.points})"


class DailyLog:
    """All five prayers for one date. Always holds every name in PRAYER_NAMES."""

    def __init__(self, records: Optional[Dict[str, PrayerRecord]] = None):
        self._records: Dict[str, PrayerRecord] = {
            name: PrayerRecord() for name in PRAYER_NAMES
        }
        if records:
            for name, record in records.items():
                if name not in self._records:
                    raise ValueError(f"Unknown prayer: {name}")
                self._records[name] = record

    def __getitem__(self, prayer_name: str) -> PrayerRecord:
        return self._records[prayer_name]

    def __contains__(self, prayer_name: object) -> bool:
        return prayer_name in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(PRAYER_NAMES)

    def items(self) -> List[Tuple[str, PrayerRecord]]:
        return [(name, self._records[name]) for name in PRAYER_NAMES]

    @property
    def completed_count(self) -> int:
        """Number of prayers with a status other than 'none' (0..5)."""
        return sum(1 for record in self._records.values() if record.is_logged)

    @property
    def is_complete(self) -> bool:
        return self.completed_count == len(PRAYER_NAMES)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: record.to_dict() for name, record in self.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], date_key: str = "") -> "DailyLog":
        """Build from stored data. Unknown statuses become 'none', missing prayers are filled in.
        Points are taken as stored; callers re-derive them with the scoring rule."""
        records = {}
        for name, raw in data.items():
            if name not in PRAYER_NAMES:
                logger.warning(f"Dropping unknown prayer {name!r} on {date_key}")
                continue
            if not isinstance(raw, dict):
                logger.warning(f"Ignoring malformed record for {name} on {date_key}: {raw!r}")
                continue
            status = normalize_status(raw.get("status"))
            if status != raw.get("status"):
                logger.warning(f"Unknown status {raw.get('status')!r} for {name} on {date_key}, using 'none'")
            points = raw.get("points", 0)
            if not isinstance(points, int) or isinstance(points, bool):
                points = 0
            records[name] = PrayerRecord(status, points)
        return cls(records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DailyLog):
            return NotImplemented
        return self._records == other._records

    def __repr__(self) -> str:
        return f"DailyLog({self.to_dict()!r})"


def _merge_days(first: DailyLog, second: DailyLog) -> DailyLog:
    """Combine two logs for the same date: a logged status wins over 'none', first wins ties."""
    merged = {}
    for name, record in first.items():
        merged[name] = record if record.is_logged or not second[name].is_logged else second[name]
    return DailyLog(merged)


class PrayerLogStore:
    """Date-keyed mapping of DailyLog. Missing dates are absent, not empty."""

    def __init__(self, days: Optional[Dict[str, DailyLog]] = None):
        self._days: Dict[str, DailyLog] = dict(days) if days else {}
        self.dirty = False

    def get(self, date_key: str) -> Optional[DailyLog]:
        """Return the day's log, or None if the date was never touched."""
        return self._days.get(date_key)

    def put(self, date_key: str, daily_log: DailyLog) -> None:
        self._days[date_key] = daily_log
        self.dirty = True

    def __contains__(self, date_key: object) -> bool:
        return date_key in self._days

    def __len__(self) -> int:
        return len(self._days)

    def __iter__(self) -> Iterator[str]:
        return iter(self._days)

    def items(self) -> List[Tuple[str, DailyLog]]:
        return list(self._days.items())

    def date_keys(self) -> List[str]:
        return sorted(self._days)

    def to_dict(self) -> Dict[str, Dict[str, Dict[str, Any]]]:
        return {date_key: self._days[date_key].to_dict() for date_key in sorted(self._days)}

    @classmethod
    def from_dict(cls, data: Any) -> "PrayerLogStore":
        """Build a store from the stored blob. Malformed dates and days are skipped with a warning."""
        # Imported here: scoring depends on this module
        from .scoring import points_for

        store = cls()
        if not isinstance(data, dict):
            logger.warning(f"Stored prayer log is not an object ({type(data).__name__}); starting empty")
            return store
        for date_key, day_data in data.items():
            try:
                day = parse_date_key(date_key)
            except ValueError:
                logger.warning(f"Skipping stored entry with invalid date key: {date_key!r}")
                continue
            if not isinstance(day_data, dict):
                logger.warning(f"Skipping malformed day {date_key}: {day_data!r}")
                continue
            daily_log = DailyLog.from_dict(day_data, date_key)
            for name, record in daily_log.items():
                record.points = points_for(day, name, record.status)
            canonical = format_date_key(day)
            existing = store._days.get(canonical)
            if existing is not None:
                logger.warning(f"Stored entries {canonical} and {date_key!r} are the same day; merging them")
                daily_log = _merge_days(existing, daily_log)
            store._days[canonical] = daily_log
        return store

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrayerLogStore):
            return NotImplemented
        return self._days == other._days

    def __repr__(self) -> str:
        return f"PrayerLogStore({len(self._days)} days)"
