"""Task board endpoints."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from taskwise.api.deps import get_workspace
from taskwise.api.schemas.task import Priority, Task, TaskCreateRequest, TaskListResponse, TaskUpdateRequest
from taskwise.core.errors import InvalidInputError
from taskwise.observability.metrics import log_metric
from taskwise.services.task_board import TaskNotFoundError
from taskwise.services.workspace import Workspace

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=TaskListResponse)
def list_tasks(
    request: Request,
    category: Optional[str] = Query(None),
    priority: Optional[Priority] = Query(None),
    unscheduled: bool = Query(False, description="Only tasks without a slot"),
    today: bool = Query(False, description="Only tasks scheduled for today"),
    workspace: Workspace = Depends(get_workspace),
) -> TaskListResponse:
    request_id = getattr(request.state, "request_id", None)
    board = workspace.tasks
    if today:
        tasks = board.today()
    elif unscheduled:
        tasks = board.unscheduled()
    else:
        tasks = board.all()
    if category:
        tasks = [task for task in tasks if task.category == category]
    if priority:
        tasks = [task for task in tasks if task.priority == priority]
    return TaskListResponse(tasks=tasks, request_id=request_id or "")


@router.post("", response_model=Task, status_code=status.HTTP_201_CREATED)
def create_task(payload: TaskCreateRequest, workspace: Workspace = Depends(get_workspace)) -> Task:
    try:
        task = workspace.tasks.add(payload.model_dump())
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    log_metric("tasks.created", 1, metadata={"category": task.category})
    return task


@router.get("/{task_id}", response_model=Task)
def get_task(task_id: str, workspace: Workspace = Depends(get_workspace)) -> Task:
    try:
        return workspace.tasks.get(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


@router.patch("/{task_id}", response_model=Task)
def update_task(task_id: str, payload: TaskUpdateRequest, workspace: Workspace = Depends(get_workspace)) -> Task:
    try:
        return workspace.tasks.update(task_id, payload.model_dump(exclude_unset=True))
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: str, workspace: Workspace = Depends(get_workspace)) -> Response:
    try:
        workspace.tasks.delete(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{task_id}/complete", response_model=Task)
def complete_task(task_id: str, workspace: Workspace = Depends(get_workspace)) -> Task:
    try:
        task = workspace.tasks.complete(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    log_metric("tasks.completed", 1, metadata={"category": task.category})
    return task


@router.post("/{task_id}/uncomplete", response_model=Task)
def uncomplete_task(task_id: str, workspace: Workspace = Depends(get_workspace)) -> Task:
    try:
        return workspace.tasks.uncomplete(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
