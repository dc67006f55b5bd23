"""Day and week views over already-scheduled tasks (30-minute grid)."""
from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence

from taskwise.api.schemas.planning import DailyTimeSlot, WeeklyScheduleDay, Workload
from taskwise.api.schemas.preferences import WorkSchedule
from taskwise.api.schemas.task import Task
from taskwise.core.clock import resolve_now
from taskwise.services.analytics_calculator import round_half_up

DAY_SLOT_MINUTES = 30
MAX_DAY_SUGGESTIONS = 3


def to_minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def from_minutes(total: int) -> time:
    return time(hour=total // 60, minute=total % 60)


class ScheduleBuilder:
    """Visualisation-side slot model.

    Independent from the hourly grid the week scheduler books against: this one is half-hourly
    and reflects what is already on the calendar.
    """

    def __init__(self, tasks: Sequence[Task], work_schedule: WorkSchedule, *, now: datetime | None = None) -> None:
        self.tasks = list(tasks)
        self.work_schedule = work_schedule
        self.now = resolve_now(now)

    @property
    def today(self) -> date:
        return self.now.date()

    def _scheduled_on(self, day: date) -> List[Task]:
        return [task for task in self.tasks if task.scheduled and task.scheduled_date == day]

    def _week_dates(self) -> List[date]:
        monday = self.today - timedelta(days=self.today.weekday())
        return [monday + timedelta(days=offset) for offset in range(7)]

    def build_weekly_schedule(self) -> List[WeeklyScheduleDay]:
        week = []
        for day in self._week_dates():
            scheduled = self._scheduled_on(day)
            completed = sum(1 for task in scheduled if task.completed)
            total_minutes = sum(task.duration for task in scheduled)
            week.append(
                WeeklyScheduleDay(
                    day=day.strftime("%a"),
                    date_label=f"{day.strftime('%b')} {day.day}",
                    calendar_date=day,
                    tasks=len(scheduled),
                    hours=round_half_up(total_minutes / 60 * 10) / 10,
                    scheduled_tasks=scheduled,
                    completion_rate=round_half_up(completed / len(scheduled) * 100) if scheduled else 0,
                )
            )
        return week

    def _in_lunch(self, minute: int) -> bool:
        if not self.work_schedule.lunch_break:
            return False
        lunch_start = to_minutes(self.work_schedule.lunch_start)
        return lunch_start <= minute < lunch_start + self.work_schedule.lunch_duration

    def generate_daily_time_slots(self, day: Optional[date] = None) -> List[DailyTimeSlot]:
        day = day or self.today
        day_tasks = sorted(
            (task for task in self._scheduled_on(day) if task.scheduled_time is not None),
            key=lambda task: task.scheduled_time,
        )
        slots: List[DailyTimeSlot] = []
        for hour in range(self.work_schedule.start_time.hour, self.work_schedule.end_time.hour):
            for minute in range(0, 60, DAY_SLOT_MINUTES):
                at = hour * 60 + minute
                occupant = next(
                    (
                        task
                        for task in day_tasks
                        if to_minutes(task.scheduled_time) <= at < to_minutes(task.scheduled_time) + task.duration
                    ),
                    None,
                )
                lunch = self._in_lunch(at)
                if occupant is not None:
                    slot_type = "work"
                elif lunch:
                    slot_type = "lunch"
                else:
                    slot_type = "free"
                slots.append(
                    DailyTimeSlot(
                        start=from_minutes(at),
                        duration=DAY_SLOT_MINUTES,
                        task=occupant,
                        type=slot_type,
                        available=occupant is None and not lunch,
                    )
                )
        return slots

    def find_available_slots(self, duration: int, day: Optional[date] = None) -> List[DailyTimeSlot]:
        """Starts of non-overlapping free runs long enough for ``duration`` minutes."""
        slots = self.generate_daily_time_slots(day)
        needed = max(1, math.ceil(duration / DAY_SLOT_MINUTES))
        found: List[DailyTimeSlot] = []
        index = 0
        while index + needed <= len(slots):
            if all(slot.available for slot in slots[index:index + needed]):
                found.append(slots[index].model_copy(update={"duration": duration}))
                index += needed
            else:
                index += 1
        return found

    def work_day_minutes(self) -> int:
        total = to_minutes(self.work_schedule.end_time) - to_minutes(self.work_schedule.start_time)
        if self.work_schedule.lunch_break:
            total -= self.work_schedule.lunch_duration
        return total

    def analyze_workload(self, day: Optional[date] = None) -> Workload:
        booked = sum(task.duration for task in self._scheduled_on(day or self.today))
        capacity = self.work_day_minutes()
        if capacity <= 0:
            return "overloaded" if booked else "light"
        utilization = booked / capacity
        if utilization >= 1.0:
            return "overloaded"
        if utilization >= 0.8:
            return "heavy"
        if utilization >= 0.5:
            return "moderate"
        return "light"

    def generate_schedule_suggestions(self, day: Optional[date] = None) -> List[str]:
        day = day or self.today
        suggestions: List[str] = []
        workload = self.analyze_workload(day)
        unscheduled = [task for task in self.tasks if not task.scheduled]
        free_hours = self.find_available_slots(60, day)

        if workload == "overloaded":
            suggestions.append("Consider rescheduling some tasks to reduce workload")
            suggestions.append("Take regular breaks to maintain productivity")
        elif workload == "heavy":
            suggestions.append("High workload day - prioritize most important tasks")
            suggestions.append("Consider shorter breaks between tasks")
        elif workload == "light":
            if unscheduled:
                suggestions.append(f"{len(free_hours)} available slots for new tasks")
                suggestions.append("Good opportunity to tackle pending tasks")
        else:
            suggestions.append("Well-balanced schedule")
            if len(free_hours) > 2:
                suggestions.append("Room for additional tasks if needed")

        high_priority = sum(1 for task in unscheduled if task.priority == "High")
        if high_priority:
            suggestions.append(f"{high_priority} high-priority tasks need scheduling")

        if 9 <= self.now.hour <= 11:
            suggestions.append("Peak energy time - good for challenging tasks")
        elif 14 <= self.now.hour <= 16:
            suggestions.append("Afternoon focus time - ideal for deep work")

        return suggestions[:MAX_DAY_SUGGESTIONS]

    def calculate_schedule_efficiency(self, day: Optional[date] = None) -> int:
        """Blend of completion (60%) and energy-to-hour fit (40%) for one day, 0-100."""
        day_tasks = self._scheduled_on(day or self.today)
        if not day_tasks:
            return 0
        completion = sum(1 for task in day_tasks if task.completed) / len(day_tasks)
        energy_fit = sum(1 for task in day_tasks if _energy_fits_hour(task)) / len(day_tasks)
        return round_half_up((completion * 0.6 + energy_fit * 0.4) * 100)


def _energy_fits_hour(task: Task) -> bool:
    if task.scheduled_time is None:
        return False
    hour = task.scheduled_time.hour
    if task.energy_level == "High":
        return 8 <= hour <= 11 or 14 <= hour <= 16
    if task.energy_level == "Low":
        return hour < 8 or hour > 17
    return False
