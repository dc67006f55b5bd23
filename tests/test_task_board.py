from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest

from taskwise.api.schemas.scheduling import ScheduledTask, SchedulingResult
from taskwise.core.errors import InvalidInputError
from taskwise.services.task_board import TaskBoard, TaskNotFoundError

NOW = datetime(2026, 10, 19, 8, 0, tzinfo=timezone.utc)


@pytest.fixture()
def board() -> TaskBoard:
    return TaskBoard()


def test_add_creates_unscheduled_incomplete_task(board: TaskBoard) -> None:
    task = board.add(
        {"id": "ignored", "title": "Write tests", "duration": 30, "scheduled": True, "completed": True},
        now=NOW,
    )

    assert task.id != "ignored"
    assert task.scheduled is False and task.scheduled_time is None
    assert task.completed is False and task.completed_at is None
    assert task.created_at == NOW == task.updated_at
    assert board.get(task.id) == task
    assert len(board) == 1


def test_add_rejects_invalid_fields(board: TaskBoard) -> None:
    with pytest.raises(InvalidInputError):
        board.add({"title": "Nothing", "duration": 0})
    assert len(board) == 0


def test_update_validates_and_stamps(board: TaskBoard) -> None:
    task = board.add({"title": "Write tests", "duration": 30}, now=NOW)
    later = NOW + timedelta(hours=1)

    updated = board.update(task.id, {"priority": "High"}, now=later)

    assert updated.priority == "High"
    assert updated.updated_at == later
    with pytest.raises(InvalidInputError):
        board.update(task.id, {"scheduled": True}, now=later)
    with pytest.raises(InvalidInputError):
        board.update(task.id, {"id": "other"})


def test_complete_and_uncomplete(board: TaskBoard) -> None:
    task = board.add({"title": "Write tests", "duration": 30}, now=NOW)

    done = board.complete(task.id, now=NOW)
    assert done.completed is True
    assert done.completed_at == NOW

    undone = board.uncomplete(task.id, now=NOW)
    assert undone.completed is False
    assert undone.completed_at is None


def test_missing_task_raises(board: TaskBoard) -> None:
    with pytest.raises(TaskNotFoundError):
        board.get("nope")
    with pytest.raises(TaskNotFoundError):
        board.delete("nope")


def test_filters(board: TaskBoard) -> None:
    work = board.add({"title": "Deploy", "duration": 30, "priority": "High"}, now=NOW)
    gym = board.add({"title": "Gym", "duration": 60, "category": "Health"}, now=NOW)
    board.update(gym.id, {"scheduled": True, "scheduled_time": time(7), "scheduled_date": NOW.date()})

    assert [t.id for t in board.by_category("Health")] == [gym.id]
    assert [t.id for t in board.by_priority("High")] == [work.id]
    assert [t.id for t in board.unscheduled()] == [work.id]
    assert [t.id for t in board.today(now=NOW)] == [gym.id]
    assert board.today(now=NOW + timedelta(days=1)) == []


def test_apply_schedule_writes_placements_back(board: TaskBoard) -> None:
    task = board.add({"title": "Deploy", "duration": 30}, now=NOW)
    placed = ScheduledTask.model_validate(
        {
            **task.model_dump(),
            "scheduled": True,
            "scheduled_time": time(10),
            "scheduled_date": date(2026, 10, 20),
            "confidence": 60,
        }
    )
    stray = placed.model_copy(update={"id": "not-on-board"})

    updated = board.apply_schedule(SchedulingResult(scheduled_tasks=[placed, stray]), now=NOW)

    assert [t.id for t in updated] == [task.id]
    stored = board.get(task.id)
    assert stored.scheduled is True
    assert stored.scheduled_time == time(10)
    assert stored.scheduled_date == date(2026, 10, 20)


def test_delete_removes_task(board: TaskBoard) -> None:
    task = board.add({"title": "Deploy", "duration": 30}, now=NOW)

    assert board.delete(task.id).id == task.id
    assert board.all() == []


def test_revision_moves_on_every_change(board: TaskBoard) -> None:
    assert board.revision == 0
    task = board.add({"title": "Deploy", "duration": 30}, now=NOW)
    board.complete(task.id, now=NOW)
    board.get(task.id)
    board.unscheduled()
    assert board.revision == 2

    board.delete(task.id)
    assert board.revision == 3
