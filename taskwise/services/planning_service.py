"""Planning session: optimization runs, their history, and schedule suggestions."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional, Sequence
from uuid import uuid4

from taskwise.api.schemas.planning import (
    DailyTimeSlot,
    DayPlan,
    OptimizationRecord,
    OptimizationStats,
    ScheduleSuggestion,
    SuggestionType,
    WeeklyScheduleDay,
)
from taskwise.api.schemas.preferences import UserPreferences, WorkSchedule
from taskwise.api.schemas.scheduling import OptimizationMode, SchedulingResult
from taskwise.api.schemas.task import Task
from taskwise.core.clock import as_aware, resolve_now
from taskwise.core.errors import InvalidInputError
from taskwise.services.analytics_calculator import round_half_up
from taskwise.services.schedule_builder import ScheduleBuilder
from taskwise.services.scheduling import optimize_schedule

logger = logging.getLogger(__name__)

SUGGESTION_TTL = timedelta(hours=24)
HEAVY_DAY_HOURS = 8
FREE_HOURS_HINT = 3
CONSECUTIVE_WORK_SLOTS = 4

ProgressCallback = Callable[[str, float], None]


@dataclass
class OptimizationRun:
    record: OptimizationRecord
    result: SchedulingResult


@dataclass
class PlanningSession:
    history: List[OptimizationRecord] = field(default_factory=list)
    suggestions: List[ScheduleSuggestion] = field(default_factory=list)
    weekly_schedule: List[WeeklyScheduleDay] = field(default_factory=list)
    daily_slots: List[DailyTimeSlot] = field(default_factory=list)
    current_date: Optional[date] = None
    is_optimizing: bool = False

    @property
    def last_optimization(self) -> Optional[OptimizationRecord]:
        return self.history[-1] if self.history else None

    def refresh(
        self,
        tasks: Sequence[Task],
        work_schedule: WorkSchedule,
        *,
        now: datetime | None = None,
    ) -> DayPlan:
        """Rebuild the week and day views and top up the automatic suggestions."""
        now = resolve_now(now)
        day = self.current_date or now.date()
        builder = ScheduleBuilder(tasks, work_schedule, now=now)
        self.weekly_schedule = builder.build_weekly_schedule()
        self.daily_slots = builder.generate_daily_time_slots(day)
        free_hours = builder.find_available_slots(60, day)

        fresh: List[ScheduleSuggestion] = []
        today = next((entry for entry in self.weekly_schedule if entry.calendar_date == day), None)
        if today is not None and today.hours > HEAVY_DAY_HOURS:
            fresh.append(
                self._suggestion(
                    "workload_warning",
                    "Heavy Workload",
                    f"{today.hours} hours scheduled today. Consider rescheduling some tasks.",
                    1,
                    now,
                )
            )
        if len(free_hours) > FREE_HOURS_HINT:
            fresh.append(
                self._suggestion(
                    "time_slot",
                    "Available Time Slots",
                    f"{len(free_hours)} free hours available for new tasks.",
                    2,
                    now,
                )
            )
        if sum(1 for slot in self.daily_slots if slot.type == "work") > CONSECUTIVE_WORK_SLOTS:
            fresh.append(
                self._suggestion(
                    "break_reminder",
                    "Break Reminder",
                    "Consider scheduling breaks between long work sessions.",
                    2,
                    now,
                )
            )

        self.clear_old_suggestions(now=now)
        self.suggestions.extend(fresh)
        return DayPlan(
            day=day,
            slots=self.daily_slots,
            workload=builder.analyze_workload(day),
            efficiency=builder.calculate_schedule_efficiency(day),
            suggestions=builder.generate_schedule_suggestions(day),
            free_slots=free_hours,
        )

    def run_optimization(
        self,
        tasks: Sequence[Task],
        preferences: UserPreferences,
        mode: OptimizationMode,
        *,
        start_date: date | None = None,
        now: datetime | None = None,
        progress: Optional[ProgressCallback] = None,
    ) -> OptimizationRun:
        """Schedule the unscheduled tasks under ``mode`` and record the run."""
        now = resolve_now(now)
        pending = [task for task in tasks if not task.scheduled]
        self.is_optimizing = True
        _report(progress, "started", 0.0)
        try:
            result = optimize_schedule(pending, preferences, mode, start_date=start_date, now=now)
        except InvalidInputError:
            logger.warning("Optimization rejected (mode=%s)", mode)
            raise
        finally:
            self.is_optimizing = False
        _report(progress, "scheduled", 1.0)

        placed = result.scheduled_tasks
        efficiency = round_half_up(sum(task.confidence for task in placed) / len(placed)) if placed else 0
        record = self._record(mode, len(placed), efficiency, now)
        self.history.append(record)
        logger.info("Optimization %s (%s): %d tasks, efficiency %d", record.id, mode, len(placed), efficiency)
        return OptimizationRun(record=record, result=result)

    def rate_optimization(self, record_id: str, rating: float) -> Optional[OptimizationRecord]:
        for index, record in enumerate(self.history):
            if record.id == record_id:
                self.history[index] = record.model_copy(update={"user_rating": rating})
                return self.history[index]
        return None

    def optimization_stats(self) -> OptimizationStats:
        if not self.history:
            return OptimizationStats(total_optimizations=0, average_efficiency=0, average_rating=0)
        rated = [record.user_rating for record in self.history if record.user_rating is not None]
        return OptimizationStats(
            total_optimizations=len(self.history),
            average_efficiency=round_half_up(sum(record.efficiency for record in self.history) / len(self.history)),
            average_rating=round_half_up(sum(rated) / len(rated) * 10) / 10 if rated else 0,
        )

    def add_suggestion(
        self,
        kind: SuggestionType,
        title: str,
        description: str,
        priority: int,
        *,
        now: datetime | None = None,
    ) -> ScheduleSuggestion:
        suggestion = self._suggestion(kind, title, description, priority, resolve_now(now))
        self.suggestions.append(suggestion)
        return suggestion

    def dismiss_suggestion(self, suggestion_id: str) -> bool:
        for index, suggestion in enumerate(self.suggestions):
            if suggestion.id == suggestion_id:
                self.suggestions[index] = suggestion.model_copy(update={"dismissed": True})
                return True
        return False

    def clear_old_suggestions(self, *, now: datetime | None = None) -> None:
        cutoff = as_aware(resolve_now(now)) - SUGGESTION_TTL
        self.suggestions = [s for s in self.suggestions if not s.dismissed and as_aware(s.created_at) > cutoff]

    @staticmethod
    def _suggestion(
        kind: SuggestionType, title: str, description: str, priority: int, now: datetime
    ) -> ScheduleSuggestion:
        return ScheduleSuggestion(
            id=str(uuid4()),
            type=kind,
            title=title,
            description=description,
            priority=priority,
            created_at=now,
        )

    @staticmethod
    def _record(mode: OptimizationMode, count: int, efficiency: int, now: datetime) -> OptimizationRecord:
        return OptimizationRecord(
            id=str(uuid4()),
            type=mode,
            created_at=now,
            tasks_optimized=count,
            efficiency=efficiency,
        )


def _report(progress: Optional[ProgressCallback], stage: str, fraction: float) -> None:
    if progress is not None:
        progress(stage, fraction)
