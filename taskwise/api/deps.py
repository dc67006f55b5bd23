"""FastAPI dependencies."""
from __future__ import annotations

from fastapi import Request

from taskwise.services.workspace import Workspace


def get_workspace(request: Request) -> Workspace:
    """Return the process-wide workspace, creating it on first use."""
    workspace = getattr(request.app.state, "workspace", None)
    if workspace is None:
        workspace = Workspace()
        request.app.state.workspace = workspace
    return workspace
