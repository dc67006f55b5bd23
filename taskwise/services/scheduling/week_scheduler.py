"""Greedy seven-day scheduler and its optimization presets."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Dict, List, Sequence

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.scheduling import OptimizationMode, ScheduledTask, SchedulingResult, TimeSlot
from taskwise.api.schemas.task import Task
from taskwise.core.clock import resolve_now
from taskwise.core.errors import InvalidInputError
from taskwise.services.scheduling.slot_matcher import find_best_slot
from taskwise.services.scheduling.suggestions import generate_suggestions
from taskwise.services.scheduling.time_slots import generate_time_slots
from taskwise.services.scheduling.urgency import calculate_urgency

logger = logging.getLogger(__name__)

HORIZON_DAYS = 7
MIN_CONFIDENCE = 50
BALANCED_MAX_BREAK_FREQUENCY = 90


def sort_by_urgency(tasks: Sequence[Task], *, now: datetime) -> List[Task]:
    """Most urgent first; equal urgency keeps input order."""
    return sorted(tasks, key=lambda task: calculate_urgency(task, now=now), reverse=True)


def build_week_grid(start_date: date, preferences: UserPreferences) -> Dict[date, List[TimeSlot]]:
    grid: Dict[date, List[TimeSlot]] = {}
    for offset in range(HORIZON_DAYS):
        day = start_date + timedelta(days=offset)
        grid[day] = generate_time_slots(day, preferences)
    return grid


def schedule_week(
    tasks: Sequence[Task],
    preferences: UserPreferences,
    start_date: date | None = None,
    *,
    now: datetime | None = None,
) -> SchedulingResult:
    """
    Place tasks into the hourly grid of the seven days starting at ``start_date``.

    Tasks are tried in urgency order. Each task takes the best slot of the first day whose match
    beats the confidence floor, and that slot is consumed. Placement is single-pass: nothing is
    moved once placed, and tasks with no acceptable day go to ``unscheduled_tasks`` unchanged.
    """
    now = resolve_now(now)
    start_date = start_date or now.date()
    grid = build_week_grid(start_date, preferences)
    result = SchedulingResult()

    for task in sort_by_urgency(tasks, now=now):
        placed = False
        for day, slots in grid.items():
            match = find_best_slot(task, slots, preferences, now=now)
            if match is None or match.confidence <= MIN_CONFIDENCE:
                continue
            match.slot.available = False
            result.scheduled_tasks.append(
                ScheduledTask.model_validate(
                    {
                        **task.model_dump(),
                        "scheduled": True,
                        "scheduled_time": match.slot.start,
                        "scheduled_date": day,
                        "confidence": match.confidence,
                        "conflicts": [],
                    }
                )
            )
            logger.debug(
                "Placed task %s on %s at %s (confidence %.0f)",
                task.id,
                day.isoformat(),
                match.slot.start.strftime("%H:%M"),
                match.confidence,
            )
            placed = True
            break
        if not placed:
            logger.debug("Task %s could not be placed this week", task.id)
            result.unscheduled_tasks.append(task)

    result.suggestions = generate_suggestions(result, preferences)
    logger.info(
        "Scheduled week from %s: %d placed, %d unplaced, %d suggestions",
        start_date.isoformat(),
        len(result.scheduled_tasks),
        len(result.unscheduled_tasks),
        len(result.suggestions),
    )
    return result


def optimize_schedule(
    tasks: Sequence[Task],
    preferences: UserPreferences,
    mode: OptimizationMode,
    *,
    start_date: date | None = None,
    now: datetime | None = None,
) -> SchedulingResult:
    """Run ``schedule_week`` under one of the productivity / balance / frontload presets."""
    now = resolve_now(now)
    if mode == "productivity":
        preferences = preferences.model_copy(update={"scheduling_style": "aggressive"})
    elif mode == "balance":
        preferences = preferences.model_copy(
            update={
                "scheduling_style": "balanced",
                "break_frequency": min(preferences.break_frequency, BALANCED_MAX_BREAK_FREQUENCY),
            }
        )
    elif mode == "frontload":
        tasks = sort_by_urgency(tasks, now=now)
    else:
        raise InvalidInputError(f"unknown optimization mode {mode!r}", field="mode")

    logger.info("Optimizing %d tasks with mode=%s", len(tasks), mode)
    return schedule_week(tasks, preferences, start_date, now=now)
