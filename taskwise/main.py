"""Main FastAPI application for the TaskWise scheduler."""
from fastapi import FastAPI, Request

from taskwise.api.routes.analytics import router as analytics_router
from taskwise.api.routes.planning import router as planning_router
from taskwise.api.routes.schedule import router as schedule_router
from taskwise.api.routes.settings import router as settings_router
from taskwise.api.routes.task import router as task_router
from taskwise.core.config import settings
from taskwise.core.logging import configure_logging
from taskwise.core.middleware import RequestIDMiddleware
from taskwise.observability.client import init_opik
from taskwise.observability.tracing import trace

configure_logging(log_level=settings.log_level)

app = FastAPI(title=settings.app_name, version="0.1.0")
app.add_middleware(RequestIDMiddleware)
app.include_router(schedule_router)
app.include_router(task_router)
app.include_router(planning_router)
app.include_router(analytics_router)
app.include_router(settings_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()


@app.get("/health", tags=["health"], summary="Readiness probe")
async def health_check(request: Request) -> dict[str, str]:
    """Return a simple status payload so automation can probe the API."""
    with trace("http.health_check", metadata={"route": "/health"}, request_id=request.state.request_id):
        return {"status": "ok"}
