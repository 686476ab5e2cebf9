"""View models for journal aggregation outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from trade_journal.domain.models import LedgerEvent


@dataclass(frozen=True)
class DailyResolution:
    """Resolved P/L for one calendar date."""

    change_value: Decimal = field(default_factory=lambda: Decimal("0"))
    change_percentage: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class HistoryEntry:
    """An event annotated with the account balance after its day was applied."""

    event: LedgerEvent
    running_balance: Decimal


@dataclass
class ProjectionResult:
    """What-if compounding replay from an alternate starting amount."""

    starting_amount: Decimal = field(default_factory=lambda: Decimal("0"))
    final_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    total_profit: Decimal = field(default_factory=lambda: Decimal("0"))
    total_percentage: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class AggregateStats:
    """Account-wide totals."""

    total_realized_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    current_balance: Decimal = field(default_factory=lambda: Decimal("0"))
    win_rate: Decimal = field(default_factory=lambda: Decimal("0"))
    trading_days: int = 0
    winning_days: int = 0


@dataclass
class CalendarDay:
    """One cell of the month calendar."""

    date: date
    resolution: Optional[DailyResolution] = None
    event_count: int = 0


@dataclass
class CalendarMonth:
    """Month grid of resolved daily P/L (Sunday-first)."""

    year: int
    month: int
    leading_blanks: int
    days: list[CalendarDay] = field(default_factory=list)
    net_change: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass
class DashboardSnapshot:
    """Everything the dashboard renders, recomputed from one event snapshot."""

    stats: AggregateStats
    history: list[HistoryEntry] = field(default_factory=list)
    projection: Optional[ProjectionResult] = None


@dataclass
class ImageUpload:
    """Raw image handed to the extraction provider."""

    filename: str
    content: bytes
    content_type: str = "image/png"


@dataclass
class ImportSummary:
    """Summary of an image extraction batch."""

    imported_count: int = 0
    error_count: int = 0
    errors: list[str] = field(default_factory=list)
    events: list[LedgerEvent] = field(default_factory=list)
