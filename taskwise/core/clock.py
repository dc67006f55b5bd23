"""Wall-clock access for time-sensitive calculations."""
from __future__ import annotations

from datetime import datetime, timezone


def resolve_now(now: datetime | None = None) -> datetime:
    """Return ``now`` when the caller pinned it, else the current UTC time."""
    if now is not None:
        return now
    return datetime.now(timezone.utc)


def as_aware(moment: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with aware ones."""
    return moment if moment.tzinfo is not None else moment.replace(tzinfo=timezone.utc)
