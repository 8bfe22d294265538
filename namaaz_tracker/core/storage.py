"""
Service layer: persist the whole prayer log as one JSON blob under a fixed key.
Failures are logged and reported to the caller, never raised.
"""
import json
import logging
from datetime import datetime, timezone
from typing import Optional, Tuple

from sqlalchemy import select

from namaaz_tracker.core.db import session_scope
from namaaz_tracker.core.log_store import PrayerLogStore
from namaaz_tracker.core.models import KeyValueEntry

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "namaazTrackerData"


def load_blob(key: str) -> Optional[Tuple[str, int]]:
    """Return (json_text, revision) stored under key, or None if nothing was saved yet."""
    with session_scope() as session:
        row = session.execute(
            select(KeyValueEntry).where(KeyValueEntry.key == key)
        ).scalars().first()
        if row is None:
            return None
        return row.value, row.revision


def save_blob(key: str, text: str, expected_revision: Optional[int] = None) -> int:
    """Insert or replace the blob under key and return the new revision.
    If the stored revision differs from expected_revision another writer got there
    first; the write still goes through (last writer wins) and a warning is logged."""
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    with session_scope() as session:
        row = session.execute(
            select(KeyValueEntry).where(KeyValueEntry.key == key)
        ).scalars().first()
        if row is None:
            session.add(KeyValueEntry(key=key, value=text, revision=1, created_at=now, updated_at=now))
            return 1
        if expected_revision is not None and row.revision != expected_revision:
            logger.warning(
                f"Stored data for {key!r} is at revision {row.revision}, expected {expected_revision}; "
                f"another instance wrote in between and its changes will be overwritten"
            )
        row.value = text
        row.revision = row.revision + 1
        row.updated_at = now
        return row.revision


class PrayerLogStorage:
    """Loads and saves a PrayerLogStore, remembering the revision it last saw."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY):
        self.key = key
        self.revision: Optional[int] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    def load(self) -> PrayerLogStore:
        """Hydrate the store. Any read failure yields an empty store."""
        try:
            stored = load_blob(self.key)
            if stored is None:
                self.logger.info(f"No saved prayer log under {self.key!r}; starting empty")
                self.revision = 0
                return PrayerLogStore()
            text, self.revision = stored
            store = PrayerLogStore.from_dict(json.loads(text))
            self.logger.info(f"Loaded prayer log: {len(store)} days (revision {self.revision})")
            return store
        except Exception as e:
            self.logger.error(f"Could not load prayer log, starting with an empty one: {e}")
            return PrayerLogStore()

    def save(self, store: PrayerLogStore) -> bool:
        """Write the store. Returns False (and leaves store.dirty set) on failure."""
        try:
            text = json.dumps(store.to_dict())
            self.revision = save_blob(self.key, text, self.revision)
            store.dirty = False
            self.logger.debug(f"Saved prayer log: {len(store)} days (revision {self.revision})")
            return True
        except Exception as e:
            self.logger.error(f"Could not save prayer log; changes are only in memory: {e}")
            return False
