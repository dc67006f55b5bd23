"""Hourly slot grid used by the week scheduler."""
from __future__ import annotations

import logging
import math
from datetime import date, time
from typing import List

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.scheduling import TimeSlot
from taskwise.services.scheduling.energy_patterns import energy_pattern_for

logger = logging.getLogger(__name__)

SLOT_MINUTES = 60
MINUTES_PER_DAY = 24 * 60


def lunch_hours(preferences: UserPreferences) -> range:
    """Hours blocked by lunch: from the lunch start hour for ceil(duration / 60) hours."""
    if not preferences.lunch_break:
        return range(0)
    first = preferences.lunch_start.hour
    return range(first, first + math.ceil(preferences.lunch_duration / 60))


def generate_time_slots(day: date, preferences: UserPreferences) -> List[TimeSlot]:
    """Build one slot per whole hour in [work start hour, work end hour).

    Lunch hours become unavailable ``lunch`` slots tagged Low; every other hour is an available
    ``work`` slot labelled from the energy table of ``preferences.energy_type``. Minutes in the
    work window bounds are ignored.
    """
    start_hour = preferences.work_start_time.hour
    end_hour = preferences.work_end_time.hour
    pattern = energy_pattern_for(preferences.energy_type)
    blocked = lunch_hours(preferences)

    slots: List[TimeSlot] = []
    for hour in range(start_hour, end_hour):
        start, end = time(hour=hour), time(hour=hour + 1)
        if hour in blocked:
            slots.append(TimeSlot(start=start, end=end, available=False, energy_level="Low", type="lunch"))
            continue
        slots.append(
            TimeSlot(start=start, end=end, available=True, energy_level=pattern.level_for(hour), type="work")
        )

    logger.debug(
        "Generated %d slots for %s (%s, %02d-%02d)",
        len(slots),
        day.isoformat(),
        preferences.energy_type,
        start_hour,
        end_hour,
    )
    return slots


def slot_minutes(slot: TimeSlot) -> int:
    """Slot length in minutes; an end before the start wraps past midnight."""
    span = (slot.end.hour * 60 + slot.end.minute) - (slot.start.hour * 60 + slot.start.minute)
    return span % MINUTES_PER_DAY
