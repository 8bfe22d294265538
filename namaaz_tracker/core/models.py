"""
Core DB models: a small key-value table holding serialized application blobs.
"""
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Integer, Text

from namaaz_tracker.core.db import Base


def _utc_now() -> datetime:
    """UTC now as naive datetime for DateTime(timezone=False) columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class KeyValueEntry(Base):
    """One serialized blob under a fixed key. revision increments on every write."""
    __tablename__ = "key_value_entries"

    key = Column(String(255), primary_key=True)
    value = Column(Text, nullable=False)  # JSON text
    revision = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=False), default=_utc_now, nullable=False)
    updated_at = Column(DateTime(timezone=False), default=_utc_now, onupdate=_utc_now, nullable=False)
