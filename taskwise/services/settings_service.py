"""User settings: work schedule, scheduling preferences, categories, export/import."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, ValidationError

from taskwise.api.schemas.preferences import AIPreferences, UserPreferences, WorkSchedule
from taskwise.core.clock import resolve_now

logger = logging.getLogger(__name__)

EXPORT_VERSION = "1.0"
Theme = Literal["light", "dark", "system"]


class Category(BaseModel):
    id: str
    name: str
    color: str
    icon: str


class NotificationSettings(BaseModel):
    task_reminders: bool = True
    break_reminders: bool = True
    daily_summary: bool = True
    weekly_report: bool = False


def default_categories() -> List[Category]:
    return [
        Category(id="1", name="Work", color="#6366f1", icon="briefcase"),
        Category(id="2", name="Personal", color="#ec4899", icon="home"),
        Category(id="3", name="Health", color="#10b981", icon="heart"),
        Category(id="4", name="Learning", color="#8b5cf6", icon="book"),
    ]


@dataclass
class SettingsState:
    work_schedule: WorkSchedule = field(default_factory=WorkSchedule)
    ai_preferences: AIPreferences = field(default_factory=AIPreferences)
    categories: List[Category] = field(default_factory=default_categories)
    notifications: NotificationSettings = field(default_factory=NotificationSettings)
    theme: Theme = "system"

    def preferences(self) -> UserPreferences:
        return UserPreferences.from_settings(self.work_schedule, self.ai_preferences)

    def update_work_schedule(self, **changes: Any) -> WorkSchedule:
        self.work_schedule = WorkSchedule.model_validate({**self.work_schedule.model_dump(), **changes})
        return self.work_schedule

    def update_ai_preferences(self, **changes: Any) -> AIPreferences:
        self.ai_preferences = AIPreferences.model_validate({**self.ai_preferences.model_dump(), **changes})
        return self.ai_preferences

    def add_category(self, name: str, color: str, icon: str) -> Category:
        category = Category(id=str(uuid4()), name=name, color=color, icon=icon)
        self.categories.append(category)
        return category

    def update_category(self, category_id: str, **changes: Any) -> Optional[Category]:
        for index, category in enumerate(self.categories):
            if category.id == category_id:
                self.categories[index] = category.model_copy(update=changes)
                return self.categories[index]
        return None

    def delete_category(self, category_id: str) -> bool:
        remaining = [category for category in self.categories if category.id != category_id]
        removed = len(remaining) != len(self.categories)
        self.categories = remaining
        return removed

    def export_data(self, *, now: datetime | None = None) -> str:
        payload = {
            "work_schedule": self.work_schedule.model_dump(mode="json"),
            "ai_preferences": self.ai_preferences.model_dump(mode="json"),
            "categories": [category.model_dump() for category in self.categories],
            "notifications": self.notifications.model_dump(),
            "theme": self.theme,
            "export_date": resolve_now(now).isoformat(),
            "version": EXPORT_VERSION,
        }
        return json.dumps(payload, indent=2)

    def import_data(self, data: str) -> bool:
        """Replace settings from an export document; False on any malformed input."""
        try:
            imported: Dict[str, Any] = json.loads(data)
        except (TypeError, ValueError):
            logger.warning("Settings import rejected: not valid JSON")
            return False
        if not isinstance(imported, dict) or not imported.get("work_schedule") or not imported.get("categories"):
            logger.warning("Settings import rejected: work_schedule and categories are required")
            return False

        try:
            work_schedule = WorkSchedule.model_validate(
                {**WorkSchedule().model_dump(), **imported["work_schedule"]}
            )
            ai_preferences = AIPreferences.model_validate(
                {**AIPreferences().model_dump(), **(imported.get("ai_preferences") or {})}
            )
            categories = [Category.model_validate(item) for item in imported["categories"]]
            notifications = NotificationSettings.model_validate(
                {**NotificationSettings().model_dump(), **(imported.get("notifications") or {})}
            )
            theme = imported.get("theme") or "system"
            if theme not in ("light", "dark", "system"):
                raise ValueError(f"unknown theme {theme!r}")
        except (ValidationError, TypeError, ValueError) as exc:
            logger.warning("Settings import rejected: %s", exc)
            return False

        self.work_schedule = work_schedule
        self.ai_preferences = ai_preferences
        self.categories = categories
        self.notifications = notifications
        self.theme = theme
        return True

    def clear_all(self) -> None:
        self.work_schedule = WorkSchedule()
        self.ai_preferences = AIPreferences()
        self.categories = default_categories()
        self.notifications = NotificationSettings()
        self.theme = "system"
