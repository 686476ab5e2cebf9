"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from trade_journal.config.settings import get_settings
from trade_journal.config.logging_config import setup_logging
from trade_journal.repositories.snapshot_feed import SnapshotFeed
from trade_journal.repositories.sqlalchemy.database import init_db, reset_database
from trade_journal.api.routers import events_router, dashboard_router
from trade_journal.core.exceptions import AppError

_ERROR_STATUS = {
    "NOT_FOUND": 404,
    "STORE_ERROR": 503,
    "EXTRACTION_ERROR": 503,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    app.state.snapshot_feed = SnapshotFeed()
    yield
    # Shutdown
    app.state.snapshot_feed.clear()
    reset_database()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Trade journal with daily P/L, win rate and compounding projections",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(events_router)
app.include_router(dashboard_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=_ERROR_STATUS.get(exc.code, 400),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
