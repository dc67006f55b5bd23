"""Stateless scheduling engine endpoints."""
from __future__ import annotations

from time import perf_counter

from fastapi import APIRouter, HTTPException, Request, status

from taskwise.api.schemas.scheduling import (
    BestSlotRequest,
    BestSlotResponse,
    InsertBreaksRequest,
    InsertBreaksResponse,
    OptimizeRequest,
    ScheduleWeekRequest,
    SchedulingResponse,
    SlotMatchPayload,
    TimeSlotsRequest,
    TimeSlotsResponse,
    UrgencyRequest,
    UrgencyResponse,
)
from taskwise.core.errors import InvalidInputError
from taskwise.observability.metrics import log_metric, log_scheduling_metrics
from taskwise.observability.tracing import trace
from taskwise.services.scheduling import (
    calculate_urgency,
    find_best_slot,
    generate_time_slots,
    insert_breaks,
    optimize_schedule,
    schedule_week,
)

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.post("/slots", response_model=TimeSlotsResponse)
def time_slots(request: Request, payload: TimeSlotsRequest) -> TimeSlotsResponse:
    request_id = getattr(request.state, "request_id", None)
    with trace("schedule.slots", metadata={"energy_type": payload.preferences.energy_type}, request_id=request_id):
        slots = generate_time_slots(payload.day, payload.preferences)
    return TimeSlotsResponse(day=payload.day, slots=slots, request_id=request_id or "")


@router.post("/urgency", response_model=UrgencyResponse)
def urgency(request: Request, payload: UrgencyRequest) -> UrgencyResponse:
    request_id = getattr(request.state, "request_id", None)
    value = calculate_urgency(payload.task, now=payload.now)
    return UrgencyResponse(task_id=payload.task.id, urgency=value, request_id=request_id or "")


@router.post("/best-slot", response_model=BestSlotResponse)
def best_slot(request: Request, payload: BestSlotRequest) -> BestSlotResponse:
    request_id = getattr(request.state, "request_id", None)
    with trace("schedule.best_slot", metadata={"task_id": payload.task.id}, request_id=request_id):
        match = find_best_slot(payload.task, payload.slots, payload.preferences, now=payload.now)
    return BestSlotResponse(
        match=SlotMatchPayload(slot=match.slot, confidence=match.confidence) if match else None,
        request_id=request_id or "",
    )


@router.post("/week", response_model=SchedulingResponse)
def week(request: Request, payload: ScheduleWeekRequest) -> SchedulingResponse:
    request_id = getattr(request.state, "request_id", None)
    metadata = {"tasks": len(payload.tasks), "energy_type": payload.preferences.energy_type}
    start = perf_counter()
    with trace("schedule.week", metadata=metadata, request_id=request_id):
        result = schedule_week(payload.tasks, payload.preferences, payload.start_date, now=payload.now)

    log_scheduling_metrics("schedule.week", result, (perf_counter() - start) * 1000)
    return SchedulingResponse(result=result, request_id=request_id or "")


@router.post("/optimize", response_model=SchedulingResponse)
def optimize(request: Request, payload: OptimizeRequest) -> SchedulingResponse:
    request_id = getattr(request.state, "request_id", None)
    metadata = {"tasks": len(payload.tasks), "mode": payload.mode}
    start = perf_counter()
    with trace("schedule.optimize", metadata=metadata, request_id=request_id):
        try:
            result = optimize_schedule(
                payload.tasks,
                payload.preferences,
                payload.mode,
                start_date=payload.start_date,
                now=payload.now,
            )
        except InvalidInputError as exc:
            raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))

    log_scheduling_metrics(f"schedule.optimize.{payload.mode}", result, (perf_counter() - start) * 1000)
    return SchedulingResponse(result=result, request_id=request_id or "")


@router.post("/breaks", response_model=InsertBreaksResponse)
def breaks(request: Request, payload: InsertBreaksRequest) -> InsertBreaksResponse:
    request_id = getattr(request.state, "request_id", None)
    with trace("schedule.breaks", metadata={"tasks": len(payload.scheduled_tasks)}, request_id=request_id):
        with_breaks = insert_breaks(payload.scheduled_tasks, payload.preferences, now=payload.now)

    inserted = len(with_breaks) - len(payload.scheduled_tasks)
    log_metric("schedule.breaks.inserted", inserted)
    return InsertBreaksResponse(scheduled_tasks=with_breaks, breaks_inserted=inserted, request_id=request_id or "")
