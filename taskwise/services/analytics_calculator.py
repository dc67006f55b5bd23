"""Productivity analytics recomputed from the task list."""
from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Sequence

from taskwise.api.schemas.analytics import (
    AIInsight,
    CategoryShare,
    EnergyPerformancePoint,
    Goal,
    PerformanceMetrics,
    WeeklyProgressDay,
)
from taskwise.api.schemas.task import Task
from taskwise.core.clock import as_aware, resolve_now

CATEGORY_COLORS: Dict[str, str] = {
    "Work": "#6366f1",
    "Personal": "#ec4899",
    "Health": "#10b981",
    "Learning": "#8b5cf6",
}
FALLBACK_CATEGORY_COLOR = "#94a3b8"

STREAK_LOOKBACK_DAYS = 30
STREAK_DAY_THRESHOLD = 0.7
ENERGY_CHART_HOURS = range(6, 15)
DEFAULT_TIME_ACCURACY = 80
WEEKLY_FOCUS_HOURS_TARGET = 25


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def baseline_energy(hour: int) -> int:
    """Typical energy curve used when charting performance by hour."""
    if 8 <= hour <= 11:
        return 85
    if 14 <= hour <= 16:
        return 75
    if hour <= 7 or hour >= 20:
        return 30
    if 12 <= hour <= 13:
        return 60
    return 50


def hour_label(hour: int) -> str:
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"


class AnalyticsCalculator:
    """Derives progress, distribution, metrics, insights and goals from one task list.

    Every figure is relative to ``now`` (defaults to the current UTC time), so two calculators
    built from the same tasks and the same ``now`` agree exactly.
    """

    def __init__(self, tasks: Sequence[Task], *, now: datetime | None = None, weekly_goal: int = 85) -> None:
        self.tasks = list(tasks)
        self.now = as_aware(resolve_now(now))
        self.weekly_goal = weekly_goal

    @property
    def today(self) -> date:
        return self.now.date()

    def _local_date(self, moment: datetime) -> date:
        return as_aware(moment).astimezone(self.now.tzinfo).date()

    def _date_range(self, days: int = 7) -> List[date]:
        return [self.today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

    def _progress_tasks_on(self, day: date) -> List[Task]:
        # A scheduled date wins over the completion date.
        matches = []
        for task in self.tasks:
            if task.scheduled_date is not None:
                if task.scheduled_date == day:
                    matches.append(task)
            elif task.completed_at is not None and self._local_date(task.completed_at) == day:
                matches.append(task)
        return matches

    def _activity_on(self, day: date) -> List[Task]:
        return [
            task
            for task in self.tasks
            if task.scheduled_date == day
            or (task.completed_at is not None and self._local_date(task.completed_at) == day)
        ]

    def calculate_weekly_progress(self) -> List[WeeklyProgressDay]:
        progress = []
        for day in self._date_range(7):
            day_tasks = self._progress_tasks_on(day)
            completed = sum(1 for task in day_tasks if task.completed)
            planned = len(day_tasks)
            progress.append(
                WeeklyProgressDay(
                    day=day.strftime("%a"),
                    date_label=f"{day.strftime('%b')} {day.day}",
                    completed=completed,
                    planned=planned,
                    productivity=round_half_up(completed / planned * 100) if planned else 0,
                )
            )
        return progress

    def calculate_category_distribution(self) -> List[CategoryShare]:
        completed = [task for task in self.tasks if task.completed]
        if not completed:
            return [CategoryShare(name=name, value=0, color=color, count=0) for name, color in CATEGORY_COLORS.items()]

        counts: Dict[str, int] = {}
        for task in completed:
            counts[task.category] = counts.get(task.category, 0) + 1
        return [
            CategoryShare(
                name=category,
                value=round_half_up(count / len(completed) * 100),
                color=CATEGORY_COLORS.get(category, FALLBACK_CATEGORY_COLOR),
                count=count,
            )
            for category, count in counts.items()
        ]

    def _task_hour(self, task: Task) -> Optional[int]:
        if task.scheduled_time is not None:
            return task.scheduled_time.hour
        if task.completed_at is not None:
            return as_aware(task.completed_at).astimezone(self.now.tzinfo).hour
        return None

    def calculate_energy_performance(self) -> List[EnergyPerformancePoint]:
        points = []
        for hour in ENERGY_CHART_HOURS:
            hour_tasks = [task for task in self.tasks if self._task_hour(task) == hour]
            completed = sum(1 for task in hour_tasks if task.completed)
            energy = baseline_energy(hour)
            performance = completed / len(hour_tasks) * 100 if hour_tasks else energy * 0.8
            points.append(
                EnergyPerformancePoint(
                    time=hour_label(hour),
                    energy=energy,
                    performance=round_half_up(performance),
                    task_count=len(hour_tasks),
                )
            )
        return points

    def calculate_time_accuracy(self) -> int:
        """Compare planned duration with the time from scheduled start to completion."""
        scores = []
        for task in self.tasks:
            if not (task.completed and task.completed_at and task.scheduled_date and task.scheduled_time):
                continue
            started = datetime.combine(task.scheduled_date, task.scheduled_time, tzinfo=self.now.tzinfo)
            elapsed = (as_aware(task.completed_at) - started) / timedelta(minutes=1)
            if elapsed < 0:
                continue
            scores.append(max(0.0, 100 - abs(elapsed - task.duration) / task.duration * 100))
        if not scores:
            return DEFAULT_TIME_ACCURACY
        return round_half_up(sum(scores) / len(scores))

    def calculate_current_streak(self) -> int:
        """Consecutive days back from today at >= 70% completion; days without tasks are skipped."""
        streak = 0
        for offset in range(STREAK_LOOKBACK_DAYS):
            day_tasks = self._activity_on(self.today - timedelta(days=offset))
            if not day_tasks:
                continue
            ratio = sum(1 for task in day_tasks if task.completed) / len(day_tasks)
            if ratio < STREAK_DAY_THRESHOLD:
                break
            streak += 1
        return streak

    def completion_rate_for_period(self, days: int, offset: int = 0) -> float:
        """Completion percentage of tasks created in the ``days`` before (now - ``offset`` days)."""
        end = self.now - timedelta(days=offset)
        start = end - timedelta(days=days)
        period = [task for task in self.tasks if start <= as_aware(task.created_at) <= end]
        if not period:
            return 0.0
        return sum(1 for task in period if task.completed) / len(period) * 100

    def calculate_performance_metrics(self) -> PerformanceMetrics:
        completed = [task for task in self.tasks if task.completed]
        total = len(self.tasks)
        trend = self.completion_rate_for_period(7) - self.completion_rate_for_period(14, 7)
        return PerformanceMetrics(
            completion_rate=round_half_up(len(completed) / total * 100) if total else 0,
            time_accuracy=self.calculate_time_accuracy(),
            productivity_trend=round_half_up(trend * 10) / 10,
            weekly_goal=self.weekly_goal,
            current_streak=self.calculate_current_streak(),
            total_tasks_completed=len(completed),
            average_task_duration=(
                round_half_up(sum(task.duration for task in completed) / len(completed)) if completed else 0
            ),
        )

    def generate_ai_insights(self) -> List[AIInsight]:
        if not self.tasks:
            return [
                AIInsight(
                    type="suggestion",
                    title="Welcome to TaskWise!",
                    description="Start by adding your first task to begin tracking your productivity",
                    color="text-blue-500",
                    priority=1,
                    created_at=self.now,
                ),
                AIInsight(
                    type="pattern",
                    title="Optimize Your Day",
                    description="Use AI planning to automatically schedule tasks based on your energy levels",
                    color="text-green-500",
                    priority=2,
                    created_at=self.now,
                ),
            ]

        metrics = self.calculate_performance_metrics()
        weekly = self.calculate_weekly_progress()
        insights: List[AIInsight] = []

        best_day = weekly[0]
        for entry in weekly[1:]:
            if entry.productivity > best_day.productivity:
                best_day = entry
        if best_day.productivity > 80:
            insights.append(
                AIInsight(
                    type="peak",
                    title="Peak Performance",
                    description=f"Most productive on {best_day.day}s with {best_day.productivity}% completion",
                    color="text-green-500",
                    priority=1,
                    created_at=self.now,
                )
            )

        if metrics.completion_rate < 60:
            insights.append(
                AIInsight(
                    type="warning",
                    title="Low Completion Rate",
                    description=f"Only {metrics.completion_rate}% of tasks completed this week",
                    color="text-red-500",
                    priority=3,
                    created_at=self.now,
                )
            )

        if metrics.current_streak >= 7:
            insights.append(
                AIInsight(
                    type="pattern",
                    title="Strong Momentum",
                    description=f"{metrics.current_streak} day completion streak!",
                    color="text-blue-500",
                    priority=1,
                    created_at=self.now,
                )
            )

        if metrics.productivity_trend > 5:
            insights.append(
                AIInsight(
                    type="suggestion",
                    title="Improving Trend",
                    description=f"Productivity up {metrics.productivity_trend}% this week",
                    color="text-green-500",
                    priority=2,
                    created_at=self.now,
                )
            )

        return sorted(insights, key=lambda insight: insight.priority)[:4]

    def generate_default_goals(self) -> List[Goal]:
        if not self.tasks:
            return [
                Goal(id="weekly-tasks", name="Add your first tasks", progress=0, target=5, current=0, type="tasks"),
                Goal(id="completion-rate", name="Achieve 80% completion rate", progress=0, target=80, current=0, type="rate"),
                Goal(id="daily-streak", name="Start a completion streak", progress=0, target=3, current=0, type="streak"),
                Goal(id="weekly-hours", name="Plan 10 hours of focused work", progress=0, target=10, current=0, type="hours"),
            ]

        metrics = self.calculate_performance_metrics()
        weekly = self.calculate_weekly_progress()
        planned = sum(day.planned for day in weekly)
        completed = sum(day.completed for day in weekly)
        focus_hours = completed * (metrics.average_task_duration / 60)

        return [
            Goal(
                id="weekly-tasks",
                name="Complete tasks this week",
                progress=round_half_up(completed / max(planned, 1) * 100),
                target=max(planned, 10),
                current=completed,
                type="tasks",
            ),
            Goal(
                id="completion-rate",
                name="Maintain completion rate",
                progress=metrics.completion_rate,
                target=85,
                current=metrics.completion_rate,
                type="rate",
            ),
            Goal(
                id="daily-streak",
                name="Daily completion streak",
                progress=min(metrics.current_streak / 7 * 100, 100),
                target=7,
                current=metrics.current_streak,
                type="streak",
            ),
            Goal(
                id="weekly-hours",
                name="Focus hours this week",
                progress=round_half_up(focus_hours / WEEKLY_FOCUS_HOURS_TARGET * 100),
                target=WEEKLY_FOCUS_HOURS_TARGET,
                current=round_half_up(focus_hours),
                type="hours",
            ),
        ]
