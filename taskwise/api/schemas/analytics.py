"""Schemas for analytics payloads."""
from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

InsightType = Literal["peak", "pattern", "suggestion", "warning"]
GoalType = Literal["tasks", "hours", "rate", "streak"]


class WeeklyProgressDay(BaseModel):
    day: str
    date_label: str
    completed: int
    planned: int
    productivity: int


class CategoryShare(BaseModel):
    name: str
    value: int
    color: str
    count: int


class EnergyPerformancePoint(BaseModel):
    time: str
    energy: int
    performance: int
    task_count: int


class PerformanceMetrics(BaseModel):
    completion_rate: int = 0
    time_accuracy: int = 0
    productivity_trend: float = 0.0
    weekly_goal: int = 85
    current_streak: int = 0
    total_tasks_completed: int = 0
    average_task_duration: int = 0


class AIInsight(BaseModel):
    type: InsightType
    title: str
    description: str
    color: str
    priority: int
    created_at: datetime


class Goal(BaseModel):
    id: str
    name: str
    progress: float
    target: float
    current: float
    type: GoalType
    deadline: Optional[date] = None


class GoalCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    progress: float = 0
    target: float = Field(gt=0)
    current: float = 0
    type: GoalType
    deadline: Optional[date] = None


class GoalUpdateRequest(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    progress: Optional[float] = None
    target: Optional[float] = Field(default=None, gt=0)
    current: Optional[float] = None
    deadline: Optional[date] = None


class AnalyticsSnapshot(BaseModel):
    weekly_progress: List[WeeklyProgressDay]
    category_distribution: List[CategoryShare]
    energy_performance: List[EnergyPerformancePoint]
    performance_metrics: PerformanceMetrics
    insights: List[AIInsight]
    goals: List[Goal]
    calculated_at: datetime


class AnalyticsResponse(BaseModel):
    analytics: AnalyticsSnapshot
    request_id: str


class InsightListResponse(BaseModel):
    insights: List[AIInsight]
    request_id: str


class GoalListResponse(BaseModel):
    goals: List[Goal]
    request_id: str
