"""Tracing utilities wrapping Opik."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from taskwise.observability import client as opik_client

logger = logging.getLogger(__name__)


def get_opik_client():
    return opik_client.get_opik_client()


@contextmanager
def trace(
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None,
) -> Iterator[Optional[Any]]:
    """
    Open an Opik trace around a block of work.

    Yields the trace handle, or None when Opik is disabled so callers can guard updates.
    Exceptions raised inside the block are attached to the trace and re-raised.
    """
    client = get_opik_client()
    opik_trace = None

    if client:
        trace_metadata = {k: v for k, v in (metadata or {}).items() if v not in (None, "", [], {})}
        if request_id:
            trace_metadata.setdefault("request_id", request_id)
        try:
            opik_trace = client.trace(name=name, metadata=trace_metadata or None)
        except Exception as exc:  # pragma: no cover - backend failure
            logger.debug("Unable to start Opik trace %s: %s", name, exc)
            opik_trace = None

    try:
        yield opik_trace
    except Exception as exc:
        if opik_trace:
            try:
                opik_trace.update(error_info={"message": str(exc)})
            except Exception:  # pragma: no cover
                logger.debug("Failed to attach error info to Opik trace %s", name, exc_info=True)
        raise
    finally:
        if opik_trace:
            try:
                opik_trace.end()
            except Exception:  # pragma: no cover
                logger.debug("Failed to close Opik trace %s cleanly", name, exc_info=True)
