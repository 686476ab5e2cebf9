"""
Ledger aggregation engine.

Pure functions over a snapshot of LedgerEvents: grouping by date, daily P/L
resolution, running balance (historical and what-if compounding), and
account-wide statistics. Nothing here touches the store or raises on bad
numbers; ratios with a zero denominator are reported as 0.
"""

import calendar
from collections import defaultdict
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Sequence

from trade_journal.core.exceptions import ValidationError
from trade_journal.domain.models import LedgerEvent
from trade_journal.domain.views import (
    AggregateStats,
    CalendarDay,
    CalendarMonth,
    DailyResolution,
    DashboardSnapshot,
    HistoryEntry,
    ProjectionResult,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def group_by_date(events: Iterable[LedgerEvent]) -> dict[date, list[LedgerEvent]]:
    """Bucket events by calendar date, keeping input order within each bucket."""
    buckets: dict[date, list[LedgerEvent]] = defaultdict(list)
    for event in events:
        buckets[event.date].append(event)
    return dict(buckets)


def authoritative_summary(bucket: Sequence[LedgerEvent]) -> Optional[LedgerEvent]:
    """Return the latest-inserted DAILY_SUMMARY in a day bucket, if any."""
    for event in reversed(bucket):
        if event.is_summary:
            return event
    return None


def resolve_daily_pnl(bucket: Sequence[LedgerEvent]) -> DailyResolution:
    """
    Resolve one day's dollar and percent change.

    A DAILY_SUMMARY overrides confirmation math for its date. Otherwise the
    dollar change is the sum over confirmations and the percentage is
    weighted by the summed cost basis.
    """
    summary = authoritative_summary(bucket)
    if summary is not None:
        return DailyResolution(
            change_value=summary.change_value,
            change_percentage=summary.change_percentage,
        )

    total_change = ZERO
    total_cost = ZERO
    for event in bucket:
        if event.is_confirmation:
            total_change += event.change_value
            total_cost += event.cost_at_open

    percentage = total_change / total_cost * HUNDRED if total_cost > ZERO else ZERO
    return DailyResolution(change_value=total_change, change_percentage=percentage)


def resolve_all(events: Iterable[LedgerEvent]) -> dict[date, DailyResolution]:
    """Resolve every date present in the events, ascending by date."""
    buckets = group_by_date(events)
    return {day: resolve_daily_pnl(buckets[day]) for day in sorted(buckets)}


def annotate_history(
    events: Iterable[LedgerEvent],
    starting_balance: Any,
) -> list[HistoryEntry]:
    """
    Annotate each event with the account balance after its day.

    Days are replayed oldest first. A summary day snaps the balance to the
    reported end-of-day balance; other days add the resolved dollar change.
    Returned most recent first.
    """
    buckets = group_by_date(events)
    running = _to_decimal(starting_balance)
    entries: list[HistoryEntry] = []

    for day in sorted(buckets):
        bucket = buckets[day]
        summary = authoritative_summary(bucket)
        if summary is not None:
            running = summary.end_of_day_balance
        else:
            running += resolve_daily_pnl(bucket).change_value
        entries.extend(HistoryEntry(event=event, running_balance=running) for event in bucket)

    entries.sort(key=lambda entry: entry.event.date, reverse=True)
    return entries


def project_compounding(events: Iterable[LedgerEvent], starting_amount: Any) -> ProjectionResult:
    """
    Replay every day's resolved percentage against a hypothetical amount.

    Negative or non-numeric amounts give an all-zero result.
    """
    amount = _coerce_amount(starting_amount)
    if amount is None:
        return ProjectionResult()

    balance = amount
    for resolution in resolve_all(events).values():
        balance *= 1 + resolution.change_percentage / HUNDRED

    profit = balance - amount
    percentage = profit / amount * HUNDRED if amount > ZERO else ZERO
    return ProjectionResult(
        starting_amount=amount,
        final_balance=balance,
        total_profit=profit,
        total_percentage=percentage,
    )


def win_rate(events: Iterable[LedgerEvent]) -> Decimal:
    """Percentage of trading days with a positive resolved change."""
    resolutions = resolve_all(events)
    winning = _count_winning(resolutions.values())
    return _ratio(winning, len(resolutions))


def compute_stats(events: Iterable[LedgerEvent], starting_capital: Any) -> AggregateStats:
    """Compute realized P/L, current balance and win rate."""
    buckets = group_by_date(events)
    days = sorted(buckets)
    resolutions = [resolve_daily_pnl(buckets[day]) for day in days]

    total = sum((r.change_value for r in resolutions), ZERO)

    current_balance = _to_decimal(starting_capital) + total
    for day in reversed(days):
        summary = authoritative_summary(buckets[day])
        if summary is not None:
            current_balance = summary.end_of_day_balance
            break

    winning = _count_winning(resolutions)
    return AggregateStats(
        total_realized_pnl=total,
        current_balance=current_balance,
        win_rate=_ratio(winning, len(resolutions)),
        trading_days=len(resolutions),
        winning_days=winning,
    )


def month_calendar(events: Iterable[LedgerEvent], year: int, month: int) -> CalendarMonth:
    """Build a Sunday-first month grid of resolved daily P/L."""
    if not 1 <= month <= 12 or not 1 <= year <= 9999:
        raise ValidationError(f"Invalid calendar month: {year}-{month}")

    first_weekday, day_count = calendar.monthrange(year, month)
    buckets = group_by_date(events)

    days: list[CalendarDay] = []
    net_change = ZERO
    for day_number in range(1, day_count + 1):
        day = date(year, month, day_number)
        bucket = buckets.get(day)
        if bucket:
            resolution = resolve_daily_pnl(bucket)
            net_change += resolution.change_value
            days.append(CalendarDay(date=day, resolution=resolution, event_count=len(bucket)))
        else:
            days.append(CalendarDay(date=day))

    return CalendarMonth(
        year=year,
        month=month,
        # calendar.monthrange counts Monday as 0
        leading_blanks=(first_weekday + 1) % 7,
        days=days,
        net_change=net_change,
    )


def recompute(
    events: Sequence[LedgerEvent],
    starting_capital: Any,
    projection_amount: Any = None,
) -> DashboardSnapshot:
    """Recompute every dashboard figure from one event snapshot."""
    projection = None
    if projection_amount is not None:
        projection = project_compounding(events, projection_amount)
    return DashboardSnapshot(
        stats=compute_stats(events, starting_capital),
        history=annotate_history(events, starting_capital),
        projection=projection,
    )


def _count_winning(resolutions: Iterable[DailyResolution]) -> int:
    return sum(1 for r in resolutions if r.change_value > ZERO)


def _ratio(part: int, whole: int) -> Decimal:
    if whole == 0:
        return ZERO
    return Decimal(part) / Decimal(whole) * HUNDRED


def _coerce_amount(value: Any) -> Optional[Decimal]:
    """Parse a user-entered amount; None for negative or non-numeric input."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not amount.is_finite() or amount < ZERO:
        return None
    return amount


def _to_decimal(value: Any) -> Decimal:
    amount = _coerce_amount(value)
    if amount is not None:
        return amount
    # Negative balances are valid here, unlike projection inputs
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        return ZERO
    return amount if amount.is_finite() else ZERO
