"""Lightweight metrics helpers."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from taskwise.api.schemas.scheduling import SchedulingResult
from taskwise.observability.tracing import trace

logger = logging.getLogger(__name__)


def log_metric(name: str, value: float | int, metadata: Optional[Dict[str, Any]] = None) -> None:
    """Record a metric as a short Opik trace; a no-op when Opik is disabled."""
    payload: Dict[str, Any] = {"value": value}
    if metadata:
        payload.update(metadata)
    logger.debug("metric %s=%s", name, value)
    with trace(f"metric:{name}", metadata=payload):
        pass


def log_scheduling_metrics(prefix: str, result: SchedulingResult, latency_ms: float) -> None:
    """Emit the standard counters for one scheduling run."""
    scheduled = len(result.scheduled_tasks)
    unscheduled = len(result.unscheduled_tasks)
    mean_confidence = (
        round(sum(task.confidence for task in result.scheduled_tasks) / scheduled, 1) if scheduled else 0.0
    )
    log_metric(f"{prefix}.scheduled", scheduled)
    log_metric(f"{prefix}.unscheduled", unscheduled)
    log_metric(f"{prefix}.mean_confidence", mean_confidence)
    log_metric(f"{prefix}.suggestions", len(result.suggestions))
    log_metric(f"{prefix}.latency_ms", latency_ms)
