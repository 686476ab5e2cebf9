"""View models for engine and service outputs."""

from trade_journal.domain.views.journal import (
    DailyResolution,
    HistoryEntry,
    ProjectionResult,
    AggregateStats,
    CalendarDay,
    CalendarMonth,
    DashboardSnapshot,
    ImageUpload,
    ImportSummary,
)

__all__ = [
    "DailyResolution",
    "HistoryEntry",
    "ProjectionResult",
    "AggregateStats",
    "CalendarDay",
    "CalendarMonth",
    "DashboardSnapshot",
    "ImageUpload",
    "ImportSummary",
]
