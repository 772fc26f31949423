"""Utilidades para buckets de tiempo del historial."""

from __future__ import annotations

from datetime import datetime


def floor_to_bucket(ts: datetime, bucket_minutes: int = 5) -> datetime:
    """Trunca un timestamp al inicio de su bucket (14:07:31 -> 14:05:00).

    Conserva tzinfo. bucket_minutes debe dividir 60.
    """
    minute = (ts.minute // bucket_minutes) * bucket_minutes
    return ts.replace(minute=minute, second=0, microsecond=0)
