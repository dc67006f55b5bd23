"""Explicit application state handed to the engine and the HTTP layer."""
from __future__ import annotations

from dataclasses import dataclass, field

from taskwise.api.schemas.analytics import AnalyticsSnapshot
from taskwise.core.config import settings
from taskwise.services.analytics_service import AnalyticsState
from taskwise.services.planning_service import PlanningSession
from taskwise.services.settings_service import SettingsState
from taskwise.services.task_board import TaskBoard


def _analytics_state() -> AnalyticsState:
    return AnalyticsState(cache_validity_hours=settings.analytics_cache_hours, weekly_goal=settings.weekly_goal)


@dataclass
class Workspace:
    tasks: TaskBoard = field(default_factory=TaskBoard)
    settings: SettingsState = field(default_factory=SettingsState)
    analytics: AnalyticsState = field(default_factory=_analytics_state)
    planning: PlanningSession = field(default_factory=PlanningSession)

    def analytics_snapshot(self, *, force: bool = False) -> AnalyticsSnapshot:
        """Analytics for the board as it is now; recomputed after any task change."""
        return self.analytics.current(self.tasks.all(), force=force, revision=self.tasks.revision)
