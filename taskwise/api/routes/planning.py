"""Planning endpoints backed by the workspace."""
from __future__ import annotations

import asyncio
import logging
from datetime import date
from time import perf_counter
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from taskwise.api.deps import get_workspace
from taskwise.api.schemas.planning import (
    DayPlanResponse,
    OptimizationHistoryResponse,
    OptimizationRecord,
    OptimizationStats,
    PlanningOptimizeRequest,
    PlanningOptimizeResponse,
    RateOptimizationRequest,
)
from taskwise.core.config import settings
from taskwise.core.errors import InvalidInputError
from taskwise.observability.metrics import log_metric, log_scheduling_metrics
from taskwise.observability.tracing import trace
from taskwise.services.workspace import Workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/planning", tags=["planning"])


@router.post("/optimize", response_model=PlanningOptimizeResponse)
async def optimize_workspace(
    request: Request,
    payload: PlanningOptimizeRequest,
    workspace: Workspace = Depends(get_workspace),
) -> PlanningOptimizeResponse:
    """Schedule every unscheduled task on the board and write the placements back."""
    request_id = getattr(request.state, "request_id", None)
    if settings.optimization_delay_seconds > 0:
        await asyncio.sleep(settings.optimization_delay_seconds)

    start = perf_counter()
    pending = len(workspace.tasks.unscheduled())
    with trace("planning.optimize", metadata={"mode": payload.mode, "pending": pending}, request_id=request_id):
        try:
            run = workspace.planning.run_optimization(
                workspace.tasks.all(),
                workspace.settings.preferences(),
                payload.mode,
                start_date=payload.start_date,
                progress=lambda stage, fraction: logger.debug("optimize %s (%.0f%%)", stage, fraction * 100),
            )
        except InvalidInputError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
        workspace.tasks.apply_schedule(run.result)

    log_scheduling_metrics(f"planning.optimize.{payload.mode}", run.result, (perf_counter() - start) * 1000)
    return PlanningOptimizeResponse(record=run.record, result=run.result, request_id=request_id or "")


@router.get("/history", response_model=OptimizationHistoryResponse)
def optimization_history(request: Request, workspace: Workspace = Depends(get_workspace)) -> OptimizationHistoryResponse:
    request_id = getattr(request.state, "request_id", None)
    return OptimizationHistoryResponse(
        history=workspace.planning.history,
        stats=workspace.planning.optimization_stats(),
        request_id=request_id or "",
    )


@router.get("/stats", response_model=OptimizationStats)
def optimization_stats(workspace: Workspace = Depends(get_workspace)) -> OptimizationStats:
    return workspace.planning.optimization_stats()


@router.post("/history/{record_id}/rating", response_model=OptimizationRecord)
def rate_optimization(
    record_id: str,
    payload: RateOptimizationRequest,
    workspace: Workspace = Depends(get_workspace),
) -> OptimizationRecord:
    record = workspace.planning.rate_optimization(record_id, payload.rating)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Optimization not found")
    log_metric("planning.optimization.rating", payload.rating, metadata={"mode": record.type})
    return record


@router.get("/day", response_model=DayPlanResponse)
def day_plan(
    request: Request,
    day: Optional[date] = Query(None, description="Defaults to today"),
    workspace: Workspace = Depends(get_workspace),
) -> DayPlanResponse:
    request_id = getattr(request.state, "request_id", None)
    workspace.planning.current_date = day
    with trace("planning.day", metadata={"day": day.isoformat() if day else None}, request_id=request_id):
        plan = workspace.planning.refresh(workspace.tasks.all(), workspace.settings.work_schedule)
    return DayPlanResponse(
        plan=plan,
        week=workspace.planning.weekly_schedule,
        suggestions=workspace.planning.suggestions,
        request_id=request_id or "",
    )


@router.post("/suggestions/{suggestion_id}/dismiss", status_code=status.HTTP_204_NO_CONTENT)
def dismiss_suggestion(suggestion_id: str, workspace: Workspace = Depends(get_workspace)) -> None:
    if not workspace.planning.dismiss_suggestion(suggestion_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Suggestion not found")
