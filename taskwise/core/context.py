"""Request-scoped context shared by the middleware and the log filter."""
from __future__ import annotations

from contextvars import ContextVar

# Set by RequestIDMiddleware for the lifetime of one API call.
request_id_ctx_var: ContextVar[str | None] = ContextVar("taskwise_request_id", default=None)


def get_request_id() -> str | None:
    """Return the id of the API request being served, or None outside a request."""
    return request_id_ctx_var.get()
