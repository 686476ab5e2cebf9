"""API routers package."""

from trade_journal.api.routers.events import router as events_router
from trade_journal.api.routers.dashboard import router as dashboard_router

__all__ = [
    "events_router",
    "dashboard_router",
]
