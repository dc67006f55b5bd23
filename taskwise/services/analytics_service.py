"""Cached analytics snapshot with user-managed goals."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, List, Optional, Sequence
from uuid import uuid4

from taskwise.api.schemas.analytics import AIInsight, AnalyticsSnapshot, Goal, GoalType, InsightType
from taskwise.api.schemas.task import Task
from taskwise.core.clock import as_aware, resolve_now
from taskwise.services.analytics_calculator import AnalyticsCalculator

logger = logging.getLogger(__name__)


@dataclass
class AnalyticsState:
    cache_validity_hours: int = 1
    weekly_goal: int = 85
    snapshot: Optional[AnalyticsSnapshot] = None
    custom_goals: List[Goal] = field(default_factory=list)
    read_insights: List[str] = field(default_factory=list)
    # Task board revision the snapshot was computed from.
    board_revision: Optional[int] = None

    def is_stale(self, *, now: datetime | None = None, revision: Optional[int] = None) -> bool:
        """Stale when missing, older than the validity window, or built from another board revision."""
        if self.snapshot is None:
            return True
        if revision is not None and revision != self.board_revision:
            return True
        age = as_aware(resolve_now(now)) - as_aware(self.snapshot.calculated_at)
        return age >= timedelta(hours=self.cache_validity_hours)

    def refresh(
        self,
        tasks: Sequence[Task],
        *,
        now: datetime | None = None,
        revision: Optional[int] = None,
    ) -> AnalyticsSnapshot:
        """Recompute everything from ``tasks`` and replace the cached snapshot."""
        now = resolve_now(now)
        calculator = AnalyticsCalculator(tasks, now=now, weekly_goal=self.weekly_goal)
        self.snapshot = AnalyticsSnapshot(
            weekly_progress=calculator.calculate_weekly_progress(),
            category_distribution=calculator.calculate_category_distribution(),
            energy_performance=calculator.calculate_energy_performance(),
            performance_metrics=calculator.calculate_performance_metrics(),
            insights=calculator.generate_ai_insights(),
            goals=calculator.generate_default_goals(),
            calculated_at=now,
        )
        self.board_revision = revision
        self.read_insights = []
        logger.debug("Analytics refreshed for %d tasks (revision %s)", len(tasks), revision)
        return self.snapshot

    def current(
        self,
        tasks: Sequence[Task],
        *,
        now: datetime | None = None,
        force: bool = False,
        revision: Optional[int] = None,
    ) -> AnalyticsSnapshot:
        if force or self.is_stale(now=now, revision=revision):
            return self.refresh(tasks, now=now, revision=revision)
        return self.snapshot

    def insights(self, insight_type: Optional[InsightType] = None) -> List[AIInsight]:
        if self.snapshot is None:
            return []
        unread = [item for item in self.snapshot.insights if item.title not in self.read_insights]
        if insight_type is None:
            return unread
        return [item for item in unread if item.type == insight_type]

    def mark_insight_read(self, title: str) -> None:
        self.read_insights.append(title)

    def goals(self, goal_type: Optional[GoalType] = None) -> List[Goal]:
        defaults = self.snapshot.goals if self.snapshot is not None else []
        merged = defaults + self.custom_goals
        if goal_type is None:
            return merged
        return [goal for goal in merged if goal.type == goal_type]

    def add_goal(self, **fields: Any) -> Goal:
        goal = Goal(id=f"custom-{uuid4()}", **fields)
        self.custom_goals.append(goal)
        return goal

    def update_goal(self, goal_id: str, **changes: Any) -> Optional[Goal]:
        for index, goal in enumerate(self.custom_goals):
            if goal.id == goal_id:
                self.custom_goals[index] = Goal.model_validate({**goal.model_dump(), **changes})
                return self.custom_goals[index]
        return None

    def delete_goal(self, goal_id: str) -> bool:
        remaining = [goal for goal in self.custom_goals if goal.id != goal_id]
        removed = len(remaining) != len(self.custom_goals)
        self.custom_goals = remaining
        return removed
