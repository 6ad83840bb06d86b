"""
Family Allowance — FastAPI Application.

This is the entry point for the application.
All routers are registered here, and the due-order worker
is started and stopped with the application.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from family_allowance.config import get_settings
from family_allowance.api.health import router as health_router
from family_allowance.api.accounts import router as accounts_router
from family_allowance.api.scheduled_orders import router as orders_router
from family_allowance.models.base import SessionLocal
from family_allowance.worker import DueOrderWorker

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    worker = None
    if settings.SCHEDULER_ENABLED:
        worker = DueOrderWorker(
            SessionLocal,
            interval_seconds=settings.DUE_CHECK_INTERVAL_SECONDS,
        )
        worker.start()
    app.state.worker = worker
    try:
        yield
    finally:
        if worker is not None:
            worker.stop()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Child allowance accounts with recurring payments",
    lifespan=lifespan,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(orders_router)
