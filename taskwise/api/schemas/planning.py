"""Schemas for the planning view: day slots, week overview, optimization history."""
from __future__ import annotations

from datetime import date, datetime, time
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from taskwise.api.schemas.scheduling import OptimizationMode, SchedulingResult
from taskwise.api.schemas.task import Task

Workload = Literal["light", "moderate", "heavy", "overloaded"]
DailySlotType = Literal["work", "break", "lunch", "free"]
SuggestionType = Literal["time_slot", "task_reorder", "break_reminder", "workload_warning"]


class DailyTimeSlot(BaseModel):
    start: time
    duration: int
    task: Optional[Task] = None
    type: DailySlotType
    available: bool


class WeeklyScheduleDay(BaseModel):
    day: str
    date_label: str
    calendar_date: date
    tasks: int
    hours: float
    scheduled_tasks: List[Task]
    completion_rate: int


class OptimizationRecord(BaseModel):
    id: str
    type: OptimizationMode
    created_at: datetime
    tasks_optimized: int
    efficiency: int
    user_rating: Optional[float] = None


class ScheduleSuggestion(BaseModel):
    id: str
    type: SuggestionType
    title: str
    description: str
    priority: int
    created_at: datetime
    dismissed: bool = False


class OptimizationStats(BaseModel):
    total_optimizations: int
    average_efficiency: int
    average_rating: float


class DayPlan(BaseModel):
    day: date
    slots: List[DailyTimeSlot]
    workload: Workload
    efficiency: int
    suggestions: List[str]
    free_slots: List[DailyTimeSlot]


class DayPlanResponse(BaseModel):
    plan: DayPlan
    week: List[WeeklyScheduleDay]
    suggestions: List[ScheduleSuggestion]
    request_id: str


class PlanningOptimizeRequest(BaseModel):
    mode: OptimizationMode
    start_date: Optional[date] = None


class PlanningOptimizeResponse(BaseModel):
    record: OptimizationRecord
    result: SchedulingResult
    request_id: str


class RateOptimizationRequest(BaseModel):
    rating: float = Field(ge=0, le=5)


class OptimizationHistoryResponse(BaseModel):
    history: List[OptimizationRecord]
    stats: OptimizationStats
    request_id: str
