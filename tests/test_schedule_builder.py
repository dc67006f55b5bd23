from __future__ import annotations

from datetime import date, datetime, time, timezone

from taskwise.api.schemas.preferences import WorkSchedule
from taskwise.api.schemas.task import Task
from taskwise.services.schedule_builder import ScheduleBuilder

# Wednesday
NOW = datetime(2026, 10, 21, 10, 0, tzinfo=timezone.utc)
TODAY = NOW.date()


def _scheduled(start: time, duration: int, day: date = TODAY, **overrides) -> Task:
    fields = {
        "title": f"task {start}",
        "duration": duration,
        "scheduled": True,
        "scheduled_time": start,
        "scheduled_date": day,
    }
    fields.update(overrides)
    return Task(**fields)


def _builder(*tasks: Task, schedule: WorkSchedule | None = None) -> ScheduleBuilder:
    return ScheduleBuilder(list(tasks), schedule or WorkSchedule(), now=NOW)


def test_weekly_schedule_starts_on_monday() -> None:
    week = _builder(_scheduled(time(9), 90, completed=True), _scheduled(time(14), 30)).build_weekly_schedule()

    assert [entry.calendar_date for entry in week] == [date(2026, 10, 19 + offset) for offset in range(7)]
    assert week[0].day == "Mon"
    assert week[0].date_label == "Oct 19"
    wednesday = week[2]
    assert wednesday.tasks == 2
    assert wednesday.hours == 2.0
    assert wednesday.completion_rate == 50
    assert week[0].completion_rate == 0


def test_daily_slots_are_half_hourly() -> None:
    task = _scheduled(time(9), 60)
    slots = _builder(task).generate_daily_time_slots()

    assert len(slots) == 16
    assert slots[0].start == time(9) and slots[-1].start == time(16, 30)
    assert [slot.type for slot in slots[:3]] == ["work", "work", "free"]
    assert slots[0].task.id == task.id
    lunch = [slot.start for slot in slots if slot.type == "lunch"]
    assert lunch == [time(12), time(12, 30)]
    assert not any(slot.available for slot in slots if slot.type != "free")


def test_find_available_slots_uses_non_overlapping_runs() -> None:
    builder = _builder(_scheduled(time(9), 60))

    hours = builder.find_available_slots(60)

    assert [slot.start for slot in hours] == [time(10), time(11), time(13), time(14), time(15), time(16)]
    assert all(slot.duration == 60 for slot in hours)


def test_find_available_slots_must_fit_before_end_of_day() -> None:
    builder = _builder(_scheduled(time(13), 180))

    assert [slot.start for slot in builder.find_available_slots(90)] == [time(9), time(10, 30)]
    assert builder.find_available_slots(600) == []


def test_workload_thresholds() -> None:
    # Default capacity: 8 hours minus a 60 minute lunch.
    assert _builder().work_day_minutes() == 420
    assert _builder().analyze_workload() == "light"
    assert _builder(_scheduled(time(9), 210)).analyze_workload() == "moderate"
    assert _builder(_scheduled(time(9), 336)).analyze_workload() == "heavy"
    assert _builder(_scheduled(time(9), 420)).analyze_workload() == "overloaded"


def test_workload_with_no_capacity() -> None:
    schedule = WorkSchedule(start_time=time(9), end_time=time(9))

    assert _builder(schedule=schedule).analyze_workload() == "light"
    assert _builder(_scheduled(time(9), 30), schedule=schedule).analyze_workload() == "overloaded"


def test_schedule_suggestions_are_capped_at_three() -> None:
    unscheduled_high = Task(title="urgent", duration=60, priority="High")
    suggestions = _builder(_scheduled(time(9), 420), unscheduled_high).generate_schedule_suggestions()

    assert suggestions == [
        "Consider rescheduling some tasks to reduce workload",
        "Take regular breaks to maintain productivity",
        "1 high-priority tasks need scheduling",
    ]


def test_light_day_with_pending_work() -> None:
    suggestions = _builder(Task(title="pending", duration=30)).generate_schedule_suggestions()

    assert suggestions[0] == "7 available slots for new tasks"
    assert suggestions[1] == "Good opportunity to tackle pending tasks"
    assert suggestions[2] == "Peak energy time - good for challenging tasks"


def test_schedule_efficiency() -> None:
    fitting_done = _scheduled(time(9), 60, energy_level="High", completed=True)
    medium_open = _scheduled(time(13), 60, energy_level="Medium")

    assert _builder().calculate_schedule_efficiency() == 0
    assert _builder(fitting_done).calculate_schedule_efficiency() == 100
    assert _builder(fitting_done, medium_open).calculate_schedule_efficiency() == 50
