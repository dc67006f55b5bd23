"""Splice break entries between scheduled tasks."""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.scheduling import ScheduledTask
from taskwise.core.clock import resolve_now


def _start_of(task: ScheduledTask) -> datetime:
    return datetime.combine(task.scheduled_date, task.scheduled_time)


def make_break(after: ScheduledTask, starts_at: datetime, duration: int, now: datetime) -> ScheduledTask:
    return ScheduledTask(
        id=f"break-{after.id}",
        title="Break",
        category="Personal",
        priority="Low",
        duration=duration,
        energy_level="Low",
        scheduled=True,
        scheduled_time=starts_at.time(),
        scheduled_date=after.scheduled_date,
        completed=False,
        created_at=now,
        updated_at=now,
        confidence=100,
        conflicts=[],
    )


def insert_breaks(
    scheduled_tasks: Sequence[ScheduledTask],
    preferences: UserPreferences,
    *,
    now: datetime | None = None,
) -> List[ScheduledTask]:
    """
    Return a new list with a break after each task that earned one.

    A task earns a break when it lasted at least ``break_frequency`` minutes and the gap before the
    next task (in the given order) fits ``break_duration``. One pass; inserted breaks are never
    themselves followed by another break.
    """
    now = resolve_now(now)
    with_breaks: List[ScheduledTask] = []
    for task, following in zip(scheduled_tasks, list(scheduled_tasks[1:]) + [None]):
        with_breaks.append(task)
        if following is None:
            continue
        task_end = _start_of(task) + timedelta(minutes=task.duration)
        gap_minutes = (_start_of(following) - task_end) / timedelta(minutes=1)
        if gap_minutes >= preferences.break_duration and task.duration >= preferences.break_frequency:
            with_breaks.append(make_break(task, task_end, preferences.break_duration, now))
    return with_breaks
