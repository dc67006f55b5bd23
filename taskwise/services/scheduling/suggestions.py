"""Human-readable hints derived from one scheduling run."""
from __future__ import annotations

from datetime import date
from typing import Dict, List

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.scheduling import SchedulingResult

OVERLOAD_TASKS_PER_DAY = 6
MORNING_HOURS = range(8, 12)
MORNING_SHARE = 0.7
LONG_BREAK_FREQUENCY = 120


def generate_suggestions(result: SchedulingResult, preferences: UserPreferences) -> List[str]:
    suggestions: List[str] = []

    tasks_by_day: Dict[date, int] = {}
    for task in result.scheduled_tasks:
        tasks_by_day[task.scheduled_date] = tasks_by_day.get(task.scheduled_date, 0) + 1
    for day, count in tasks_by_day.items():
        if count > OVERLOAD_TASKS_PER_DAY:
            suggestions.append(
                f"{day.strftime('%A')} is overloaded with {count} tasks. Consider redistributing some tasks."
            )

    high_priority_left = sum(1 for task in result.unscheduled_tasks if task.priority == "High")
    if high_priority_left:
        suggestions.append(
            f"{high_priority_left} high-priority tasks couldn't be scheduled. "
            "Consider extending work hours or reducing task load."
        )

    high_energy = [task for task in result.scheduled_tasks if task.energy_level == "High"]
    in_morning = [task for task in high_energy if task.scheduled_time.hour in MORNING_HOURS]
    if preferences.energy_type == "morning" and len(in_morning) < len(high_energy) * MORNING_SHARE:
        suggestions.append("Consider scheduling more high-energy tasks in the morning when you're most productive.")

    if preferences.break_frequency > LONG_BREAK_FREQUENCY:
        suggestions.append(
            "Your break frequency is quite long. Consider shorter, more frequent breaks for better focus."
        )

    return suggestions
