from __future__ import annotations

from datetime import date, time

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.scheduling import ScheduledTask, SchedulingResult
from taskwise.api.schemas.task import Task
from taskwise.services.scheduling import generate_suggestions


def _placed(hour: int, energy: str = "Medium", day: date = date(2026, 10, 21)) -> ScheduledTask:
    return ScheduledTask(
        title=f"task at {hour}",
        duration=60,
        energy_level=energy,
        scheduled=True,
        scheduled_time=time(hour),
        scheduled_date=day,
        confidence=60,
    )


def test_six_tasks_on_a_day_is_not_overloaded() -> None:
    result = SchedulingResult(scheduled_tasks=[_placed(hour) for hour in range(9, 15)])

    assert generate_suggestions(result, UserPreferences()) == []


def test_seven_tasks_on_a_day_is_overloaded() -> None:
    result = SchedulingResult(scheduled_tasks=[_placed(hour) for hour in range(9, 16)])

    assert generate_suggestions(result, UserPreferences()) == [
        "Wednesday is overloaded with 7 tasks. Consider redistributing some tasks."
    ]


def test_high_priority_leftovers_are_counted() -> None:
    result = SchedulingResult(
        unscheduled_tasks=[
            Task(title="a", duration=120, priority="High"),
            Task(title="b", duration=120, priority="High"),
            Task(title="c", duration=120, priority="Low"),
        ]
    )

    [suggestion] = generate_suggestions(result, UserPreferences())
    assert suggestion.startswith("2 high-priority tasks couldn't be scheduled.")


def test_morning_rule_only_for_morning_people() -> None:
    result = SchedulingResult(scheduled_tasks=[_placed(9, "High"), _placed(14, "High"), _placed(15, "High")])

    assert len(generate_suggestions(result, UserPreferences(energy_type="morning"))) == 1
    assert generate_suggestions(result, UserPreferences(energy_type="afternoon")) == []


def test_long_break_frequency_hint() -> None:
    result = SchedulingResult()

    assert generate_suggestions(result, UserPreferences(break_frequency=120)) == []
    assert len(generate_suggestions(result, UserPreferences(break_frequency=121))) == 1
