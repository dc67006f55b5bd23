"""In-memory task list owned by the caller and passed into the engine explicitly."""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping

from taskwise.api.schemas.scheduling import SchedulingResult
from taskwise.api.schemas.task import Priority, Task
from taskwise.core.clock import resolve_now
from taskwise.core.errors import InvalidInputError
from taskwise.services.scheduling.validation import parse_task

logger = logging.getLogger(__name__)


class TaskNotFoundError(KeyError):
    """Raised when a task id is not on the board."""


class TaskBoard:
    def __init__(self, tasks: Iterable[Task] = ()) -> None:
        self._tasks: Dict[str, Task] = {task.id: task for task in tasks}
        # Bumped on every change so derived views can tell they are out of date.
        self.revision = 0

    def __len__(self) -> int:
        return len(self._tasks)

    def all(self) -> List[Task]:
        return list(self._tasks.values())

    def get(self, task_id: str) -> Task:
        try:
            return self._tasks[task_id]
        except KeyError:
            raise TaskNotFoundError(task_id) from None

    def add(self, data: Mapping[str, Any], *, now: datetime | None = None) -> Task:
        """Create an unscheduled, incomplete task from raw fields."""
        now = resolve_now(now)
        fields = {
            **dict(data),
            "scheduled": False,
            "scheduled_time": None,
            "scheduled_date": None,
            "completed": False,
            "completed_at": None,
            "created_at": now,
            "updated_at": now,
        }
        fields.pop("id", None)
        task = parse_task(fields)
        self._tasks[task.id] = task
        self.revision += 1
        logger.debug("Added task %s (%s)", task.id, task.title)
        return task

    def update(self, task_id: str, changes: Mapping[str, Any], *, now: datetime | None = None) -> Task:
        current = self.get(task_id)
        if "id" in changes:
            raise InvalidInputError("task id cannot be changed", field="id")
        merged = {**current.model_dump(), **dict(changes), "updated_at": resolve_now(now)}
        task = parse_task(merged)
        self._tasks[task.id] = task
        self.revision += 1
        return task

    def delete(self, task_id: str) -> Task:
        task = self.get(task_id)
        del self._tasks[task_id]
        self.revision += 1
        return task

    def complete(self, task_id: str, *, now: datetime | None = None) -> Task:
        now = resolve_now(now)
        return self.update(task_id, {"completed": True, "completed_at": now}, now=now)

    def uncomplete(self, task_id: str, *, now: datetime | None = None) -> Task:
        return self.update(task_id, {"completed": False, "completed_at": None}, now=now)

    def today(self, *, now: datetime | None = None) -> List[Task]:
        today: date = resolve_now(now).date()
        return [task for task in self._tasks.values() if task.scheduled_date == today]

    def unscheduled(self) -> List[Task]:
        return [task for task in self._tasks.values() if not task.scheduled]

    def by_category(self, category: str) -> List[Task]:
        return [task for task in self._tasks.values() if task.category == category]

    def by_priority(self, priority: Priority) -> List[Task]:
        return [task for task in self._tasks.values() if task.priority == priority]

    def apply_schedule(self, result: SchedulingResult, *, now: datetime | None = None) -> List[Task]:
        """Write placements from ``result`` back onto the board; unknown ids are ignored."""
        now = resolve_now(now)
        updated: List[Task] = []
        for placed in result.scheduled_tasks:
            if placed.id not in self._tasks:
                logger.debug("Skipping placement for unknown task %s", placed.id)
                continue
            updated.append(
                self.update(
                    placed.id,
                    {
                        "scheduled": True,
                        "scheduled_time": placed.scheduled_time,
                        "scheduled_date": placed.scheduled_date,
                    },
                    now=now,
                )
            )
        return updated

