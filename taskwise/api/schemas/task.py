"""Schemas for tasks."""
from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Any, List, Literal, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

Priority = Literal["High", "Medium", "Low"]
EnergyLevel = Literal["High", "Medium", "Low"]

DEFAULT_CATEGORIES = ("Work", "Personal", "Health", "Learning")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _coerce_deadline(value: Any) -> Optional[date]:
    """Accept dates, datetimes and ISO strings; anything unparseable means "no deadline"."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


class Task(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: str = "Work"
    priority: Priority = "Medium"
    duration: int = Field(gt=0, description="Duration in minutes")
    deadline: Optional[date] = None
    energy_level: EnergyLevel = "Medium"
    scheduled: bool = False
    scheduled_time: Optional[time] = None
    scheduled_date: Optional[date] = None
    completed: bool = False
    completed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @field_validator("deadline", mode="before")
    @classmethod
    def _lenient_deadline(cls, value: Any) -> Optional[date]:
        return _coerce_deadline(value)

    @model_validator(mode="after")
    def _scheduled_needs_slot(self) -> "Task":
        if self.scheduled and (self.scheduled_time is None or self.scheduled_date is None):
            raise ValueError("a scheduled task needs both scheduled_time and scheduled_date")
        return self


class TaskCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    category: str = "Work"
    priority: Priority = "Medium"
    duration: int = Field(gt=0)
    deadline: Optional[date] = None
    energy_level: EnergyLevel = "Medium"

    @field_validator("deadline", mode="before")
    @classmethod
    def _lenient_deadline(cls, value: Any) -> Optional[date]:
        return _coerce_deadline(value)


class TaskUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[Priority] = None
    duration: Optional[int] = Field(default=None, gt=0)
    deadline: Optional[date] = None
    energy_level: Optional[EnergyLevel] = None
    scheduled: Optional[bool] = None
    scheduled_time: Optional[time] = None
    scheduled_date: Optional[date] = None

    @field_validator("deadline", mode="before")
    @classmethod
    def _lenient_deadline(cls, value: Any) -> Optional[date]:
        return _coerce_deadline(value)


class TaskListResponse(BaseModel):
    tasks: List[Task]
    request_id: str
