"""Boundary parsing: raw payloads in, validated models out."""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from pydantic import BaseModel, ValidationError

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.task import Task
from taskwise.core.errors import InvalidInputError


def _to_invalid_input(exc: ValidationError) -> InvalidInputError:
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    return InvalidInputError(first.get("msg", "invalid value"), field=field)


def _parse(model: type[BaseModel], data: Any) -> Any:
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise _to_invalid_input(exc) from exc


def parse_task(data: Mapping[str, Any] | Task) -> Task:
    """Validate one task; non-positive durations and bad time strings raise InvalidInputError."""
    return _parse(Task, data)


def parse_tasks(items: Iterable[Mapping[str, Any] | Task]) -> List[Task]:
    return [parse_task(item) for item in items]


def parse_preferences(data: Mapping[str, Any] | UserPreferences | None) -> UserPreferences:
    if data is None:
        return UserPreferences()
    return _parse(UserPreferences, data)
