"""Analytics endpoints."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import BaseModel

from taskwise.api.deps import get_workspace
from taskwise.api.schemas.analytics import (
    AnalyticsResponse,
    Goal,
    GoalCreateRequest,
    GoalListResponse,
    GoalType,
    GoalUpdateRequest,
    InsightListResponse,
    InsightType,
)
from taskwise.observability.metrics import log_metric
from taskwise.observability.tracing import trace
from taskwise.services.workspace import Workspace

router = APIRouter(prefix="/analytics", tags=["analytics"])


class InsightReadRequest(BaseModel):
    title: str


@router.get("", response_model=AnalyticsResponse)
def get_analytics(
    request: Request,
    force: bool = Query(False, description="Recompute even if the cache is fresh"),
    workspace: Workspace = Depends(get_workspace),
) -> AnalyticsResponse:
    request_id = getattr(request.state, "request_id", None)
    start_time = datetime.now(timezone.utc)
    with trace("analytics.get", metadata={"tasks": len(workspace.tasks), "force": force}, request_id=request_id):
        snapshot = workspace.analytics_snapshot(force=force)

    latency_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
    log_metric("analytics.get.latency_ms", latency_ms)
    log_metric("analytics.completion_rate", snapshot.performance_metrics.completion_rate)
    return AnalyticsResponse(analytics=snapshot, request_id=request_id or "")


@router.get("/insights", response_model=InsightListResponse)
def list_insights(
    request: Request,
    type: Optional[InsightType] = Query(None),
    workspace: Workspace = Depends(get_workspace),
) -> InsightListResponse:
    request_id = getattr(request.state, "request_id", None)
    workspace.analytics_snapshot()
    return InsightListResponse(insights=workspace.analytics.insights(type), request_id=request_id or "")


@router.post("/insights/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_insight_read(payload: InsightReadRequest, workspace: Workspace = Depends(get_workspace)) -> Response:
    workspace.analytics.mark_insight_read(payload.title)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/goals", response_model=GoalListResponse)
def list_goals(
    request: Request,
    type: Optional[GoalType] = Query(None),
    workspace: Workspace = Depends(get_workspace),
) -> GoalListResponse:
    request_id = getattr(request.state, "request_id", None)
    workspace.analytics_snapshot()
    return GoalListResponse(goals=workspace.analytics.goals(type), request_id=request_id or "")


@router.post("/goals", response_model=Goal, status_code=status.HTTP_201_CREATED)
def create_goal(payload: GoalCreateRequest, workspace: Workspace = Depends(get_workspace)) -> Goal:
    return workspace.analytics.add_goal(**payload.model_dump())


@router.patch("/goals/{goal_id}", response_model=Goal)
def update_goal(goal_id: str, payload: GoalUpdateRequest, workspace: Workspace = Depends(get_workspace)) -> Goal:
    goal = workspace.analytics.update_goal(goal_id, **payload.model_dump(exclude_unset=True))
    if goal is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return goal


@router.delete("/goals/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_goal(goal_id: str, workspace: Workspace = Depends(get_workspace)) -> Response:
    if not workspace.analytics.delete_goal(goal_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Goal not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
