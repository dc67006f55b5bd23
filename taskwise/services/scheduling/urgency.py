"""Urgency scoring used to order scheduling attempts."""
from __future__ import annotations

import math
from datetime import date, datetime, time, timedelta
from typing import Dict

from taskwise.api.schemas.task import Priority, Task
from taskwise.core.clock import resolve_now

PRIORITY_WEIGHTS: Dict[Priority, int] = {"High": 10, "Medium": 5, "Low": 1}
DEADLINE_BONUS = 10

_ONE_DAY = timedelta(days=1)


def days_until(deadline: date, now: datetime) -> int:
    """Days from ``now`` to the start of the deadline day, rounded up.

    Zero or negative once the deadline day has begun.
    """
    deadline_start = datetime.combine(deadline, time.min, tzinfo=now.tzinfo)
    return math.ceil((deadline_start - now) / _ONE_DAY)


def calculate_urgency(task: Task, *, now: datetime | None = None) -> float:
    """Priority weight plus 10 / days-to-deadline (floored at one day); higher sorts first."""
    urgency = float(PRIORITY_WEIGHTS[task.priority])
    if task.deadline is not None:
        urgency += DEADLINE_BONUS / max(1, days_until(task.deadline, resolve_now(now)))
    return urgency
