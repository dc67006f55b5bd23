"""Score candidate slots for a task and pick the best fit."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from taskwise.api.schemas.preferences import UserPreferences
from taskwise.api.schemas.scheduling import TimeSlot
from taskwise.api.schemas.task import Task
from taskwise.core.clock import resolve_now
from taskwise.services.scheduling.time_slots import slot_minutes
from taskwise.services.scheduling.urgency import days_until

logger = logging.getLogger(__name__)

# A score of 20 maps to full confidence.
FULL_CONFIDENCE_SCORE = 20

EXACT_ENERGY_BONUS = 10
ADJACENT_ENERGY_BONUS = 7
LOW_ENERGY_BONUS = 5
HIGH_PRIORITY_PEAK_BONUS = 5

_ADJACENT_ENERGY = {("High", "Medium"), ("Medium", "High")}


@dataclass
class SlotMatch:
    slot: TimeSlot
    confidence: float
    score: int


def is_candidate(task: Task, slot: TimeSlot) -> bool:
    """Open work slots that are at least as long as the task; tasks are never split."""
    return slot.available and slot.type == "work" and task.duration <= slot_minutes(slot)


def deadline_bonus(days_to_deadline: Optional[int]) -> int:
    if days_to_deadline is None:
        return 0
    if days_to_deadline <= 1:
        return 8
    if days_to_deadline <= 3:
        return 5
    if days_to_deadline <= 7:
        return 2
    return 0


def score_slot(task: Task, slot: TimeSlot, days_to_deadline: Optional[int] = None) -> int:
    score = 0
    if task.energy_level == slot.energy_level:
        score += EXACT_ENERGY_BONUS
    elif (task.energy_level, slot.energy_level) in _ADJACENT_ENERGY:
        score += ADJACENT_ENERGY_BONUS
    elif task.energy_level == "Low":
        score += LOW_ENERGY_BONUS

    if task.priority == "High" and slot.energy_level == "High":
        score += HIGH_PRIORITY_PEAK_BONUS

    return score + deadline_bonus(days_to_deadline)


def confidence_for(score: int) -> float:
    return min(100.0, score / FULL_CONFIDENCE_SCORE * 100)


def find_best_slot(
    task: Task,
    slots: Sequence[TimeSlot],
    preferences: UserPreferences,
    *,
    now: datetime | None = None,
) -> Optional[SlotMatch]:
    """
    Return the highest-scoring candidate slot for ``task`` with its confidence, or None.

    Ties keep the earliest slot in ``slots``. ``preferences`` does not change the scoring
    weights; energy labels were already applied when the slots were generated.
    """
    candidates: List[TimeSlot] = [slot for slot in slots if is_candidate(task, slot)]
    if not candidates:
        logger.debug("No candidate slots for task %s (%d min)", task.id, task.duration)
        return None

    days_left = days_until(task.deadline, resolve_now(now)) if task.deadline is not None else None
    best_slot, best_score = candidates[0], score_slot(task, candidates[0], days_left)
    for slot in candidates[1:]:
        score = score_slot(task, slot, days_left)
        if score > best_score:
            best_slot, best_score = slot, score

    logger.debug(
        "Best slot for task %s (%s energy, style=%s): %s score=%d",
        task.id,
        task.energy_level,
        preferences.scheduling_style,
        best_slot.start.strftime("%H:%M"),
        best_score,
    )
    return SlotMatch(slot=best_slot, confidence=confidence_for(best_score), score=best_score)
