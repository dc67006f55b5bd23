"""Schemas for work-schedule and scheduling preferences."""
from __future__ import annotations

from datetime import time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

EnergyType = Literal["morning", "afternoon", "evening", "flexible"]
SchedulingStyle = Literal["aggressive", "balanced", "relaxed", "custom"]


class WorkSchedule(BaseModel):
    start_time: time = time(9, 0)
    end_time: time = time(17, 0)
    break_duration: int = Field(default=15, ge=0)
    lunch_break: bool = True
    lunch_start: time = time(12, 0)
    lunch_duration: int = Field(default=60, ge=0)


class AIPreferences(BaseModel):
    energy_pattern: EnergyType = "morning"
    scheduling_style: SchedulingStyle = "balanced"
    break_frequency: int = Field(default=90, gt=0)


class UserPreferences(BaseModel):
    """Scheduling configuration, fixed for the duration of one run."""

    model_config = ConfigDict(frozen=True)

    energy_type: EnergyType = "morning"
    work_start_time: time = time(9, 0)
    work_end_time: time = time(17, 0)
    break_duration: int = Field(default=15, ge=0)
    lunch_break: bool = True
    lunch_start: time = time(12, 0)
    lunch_duration: int = Field(default=60, ge=0)
    # Recorded and forwarded; slot generation and scoring do not read it.
    scheduling_style: SchedulingStyle = "balanced"
    break_frequency: int = Field(default=90, gt=0)

    @model_validator(mode="after")
    def _window_is_ordered(self) -> "UserPreferences":
        if self.work_end_time < self.work_start_time:
            raise ValueError("work_end_time must not be earlier than work_start_time")
        return self

    @classmethod
    def from_settings(cls, work_schedule: WorkSchedule, ai_preferences: AIPreferences) -> "UserPreferences":
        return cls(
            energy_type=ai_preferences.energy_pattern,
            work_start_time=work_schedule.start_time,
            work_end_time=work_schedule.end_time,
            break_duration=work_schedule.break_duration,
            lunch_break=work_schedule.lunch_break,
            lunch_start=work_schedule.lunch_start,
            lunch_duration=work_schedule.lunch_duration,
            scheduling_style=ai_preferences.scheduling_style,
            break_frequency=ai_preferences.break_frequency,
        )
