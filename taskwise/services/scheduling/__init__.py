"""Task-to-slot scheduling engine."""
from taskwise.services.scheduling.breaks import insert_breaks
from taskwise.services.scheduling.slot_matcher import SlotMatch, find_best_slot
from taskwise.services.scheduling.suggestions import generate_suggestions
from taskwise.services.scheduling.time_slots import generate_time_slots
from taskwise.services.scheduling.urgency import calculate_urgency
from taskwise.services.scheduling.validation import parse_preferences, parse_task, parse_tasks
from taskwise.services.scheduling.week_scheduler import optimize_schedule, schedule_week

__all__ = [
    "SlotMatch",
    "calculate_urgency",
    "find_best_slot",
    "generate_suggestions",
    "generate_time_slots",
    "insert_breaks",
    "optimize_schedule",
    "parse_preferences",
    "parse_task",
    "parse_tasks",
    "schedule_week",
]
