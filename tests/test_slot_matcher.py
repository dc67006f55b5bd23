from __future__ import annotations

from datetime import date, datetime, time, timezone

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.scheduling import TimeSlot
from taskwise.api.schemas.task import Task
from taskwise.services.scheduling import find_best_slot, generate_time_slots
from taskwise.services.scheduling.slot_matcher import deadline_bonus, score_slot
from taskwise.services.scheduling.time_slots import slot_minutes

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)
PREFS = UserPreferences()


def _task(**overrides) -> Task:
    fields = {"title": "Task", "duration": 60}
    fields.update(overrides)
    return Task(**fields)


def _slot(hour: int, energy: str, **overrides) -> TimeSlot:
    fields = {"start": time(hour), "end": time(hour + 1), "available": True, "energy_level": energy, "type": "work"}
    fields.update(overrides)
    return TimeSlot(**fields)


def test_high_priority_high_energy_prefers_peak_slot() -> None:
    slots = generate_time_slots(NOW.date(), PREFS)
    match = find_best_slot(_task(priority="High", energy_level="High"), slots, PREFS, now=NOW)

    assert match is not None
    assert match.slot.start == time(9)
    assert match.score == 15
    assert match.confidence == 75


def test_energy_fit_scores() -> None:
    assert score_slot(_task(energy_level="Medium"), _slot(13, "Medium")) == 10
    assert score_slot(_task(energy_level="Medium"), _slot(9, "High")) == 7
    assert score_slot(_task(energy_level="High"), _slot(13, "Medium")) == 7
    assert score_slot(_task(energy_level="Low"), _slot(9, "High")) == 5
    assert score_slot(_task(energy_level="High"), _slot(14, "Low")) == 0


def test_deadline_bonus_steps() -> None:
    assert deadline_bonus(None) == 0
    assert deadline_bonus(-3) == 8
    assert deadline_bonus(1) == 8
    assert deadline_bonus(3) == 5
    assert deadline_bonus(7) == 2
    assert deadline_bonus(8) == 0


def test_confidence_is_capped_at_100() -> None:
    task = _task(priority="High", energy_level="High", deadline=date(2026, 10, 20))
    match = find_best_slot(task, [_slot(9, "High")], PREFS, now=NOW)

    assert match.score == 23
    assert match.confidence == 100


def test_ties_keep_first_slot() -> None:
    slots = [_slot(14, "Low"), _slot(15, "Low"), _slot(16, "Low")]
    match = find_best_slot(_task(energy_level="Low"), slots, PREFS, now=NOW)

    assert match.slot.start == time(14)


def test_unavailable_and_lunch_slots_are_skipped() -> None:
    slots = [
        _slot(9, "High", available=False),
        _slot(12, "Low", type="lunch", available=False),
        _slot(13, "Medium"),
    ]
    match = find_best_slot(_task(energy_level="High"), slots, PREFS, now=NOW)

    assert match.slot.start == time(13)


def test_task_longer_than_slot_has_no_match() -> None:
    slots = generate_time_slots(NOW.date(), PREFS)

    assert find_best_slot(_task(duration=90), slots, PREFS, now=NOW) is None
    assert find_best_slot(_task(), [], PREFS, now=NOW) is None


def test_confidence_stays_within_bounds() -> None:
    slots = generate_time_slots(NOW.date(), PREFS)
    for priority in ("High", "Medium", "Low"):
        for energy in ("High", "Medium", "Low"):
            for deadline in (None, date(2026, 10, 19), date(2026, 10, 25)):
                match = find_best_slot(
                    _task(priority=priority, energy_level=energy, deadline=deadline), slots, PREFS, now=NOW
                )
                assert 0 <= match.confidence <= 100


def test_slot_ending_at_midnight_is_a_full_hour() -> None:
    late = TimeSlot(start=time(23), end=time(0), available=True, energy_level="Low", type="work")

    assert slot_minutes(late) == 60
    match = find_best_slot(_task(energy_level="Low"), [late], PREFS, now=NOW)
    assert match is not None
    assert match.slot.start == time(23)
