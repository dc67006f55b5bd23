"""Schemas for the scheduling engine inputs and outputs."""
from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.task import EnergyLevel, Task

SlotType = Literal["work", "break", "lunch"]
OptimizationMode = Literal["productivity", "balance", "frontload"]


class TimeSlot(BaseModel):
    start: time
    end: time
    available: bool
    energy_level: EnergyLevel
    type: SlotType


class ScheduledTask(Task):
    scheduled_time: time
    scheduled_date: date
    confidence: float = Field(ge=0, le=100)
    # Reserved for conflict detection; always empty today.
    conflicts: List[str] = Field(default_factory=list)


class SchedulingResult(BaseModel):
    scheduled_tasks: List[ScheduledTask] = Field(default_factory=list)
    unscheduled_tasks: List[Task] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)
    conflicts: List[str] = Field(default_factory=list)


class SlotMatchPayload(BaseModel):
    slot: TimeSlot
    confidence: float


class TimeSlotsRequest(BaseModel):
    day: date
    preferences: UserPreferences = Field(default_factory=UserPreferences)


class TimeSlotsResponse(BaseModel):
    day: date
    slots: List[TimeSlot]
    request_id: str


class UrgencyRequest(BaseModel):
    task: Task
    now: Optional[datetime] = None


class UrgencyResponse(BaseModel):
    task_id: str
    urgency: float
    request_id: str


class BestSlotRequest(BaseModel):
    task: Task
    slots: List[TimeSlot]
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    now: Optional[datetime] = None


class BestSlotResponse(BaseModel):
    match: Optional[SlotMatchPayload]
    request_id: str


class ScheduleWeekRequest(BaseModel):
    tasks: List[Task]
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    start_date: Optional[date] = None
    now: Optional[datetime] = None


class OptimizeRequest(BaseModel):
    tasks: List[Task]
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    mode: OptimizationMode
    start_date: Optional[date] = None
    now: Optional[datetime] = None


class SchedulingResponse(BaseModel):
    result: SchedulingResult
    request_id: str


class InsertBreaksRequest(BaseModel):
    scheduled_tasks: List[ScheduledTask]
    preferences: UserPreferences = Field(default_factory=UserPreferences)
    now: Optional[datetime] = None


class InsertBreaksResponse(BaseModel):
    scheduled_tasks: List[ScheduledTask]
    breaks_inserted: int
    request_id: str
