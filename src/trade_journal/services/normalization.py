"""Normalization of raw extracted or manually entered records into LedgerEvents."""

import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Mapping, Optional

from trade_journal.core.exceptions import ValidationError
from trade_journal.core.timezone import normalize_date
from trade_journal.domain.models import EventType, LedgerEvent

CENTS = Decimal("0.01")
ZERO = Decimal("0")

_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_NON_ALPHA = re.compile(r"[^a-z]")

_TYPE_ALIASES = {
    "tradeconfirmation": EventType.TRADE_CONFIRMATION,
    "trade": EventType.TRADE_CONFIRMATION,
    "confirmation": EventType.TRADE_CONFIRMATION,
    "dailysummary": EventType.DAILY_SUMMARY,
    "summary": EventType.DAILY_SUMMARY,
}


def parse_amount(value: Any) -> Decimal:
    """
    Parse a loosely formatted number into a 2dp Decimal.

    Plain and exponent notation are read as-is. Otherwise currency symbols,
    thousands separators and percent signs are stripped, and accounting
    parentheses mark a negative. Missing, unparseable, non-finite or
    out-of-range values become 0.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    else:
        number = _parse_text(str(value))
    if number is None or not number.is_finite():
        return ZERO
    return _to_cents(number)


def _parse_text(text: str) -> Optional[Decimal]:
    text = text.strip()
    negative = len(text) > 1 and text[0] == "(" and text[-1] == ")"
    if negative:
        text = text[1:-1]
    try:
        number = Decimal(text)
    except InvalidOperation:
        cleaned = _NON_NUMERIC.sub("", text)
        if not cleaned:
            return None
        try:
            number = Decimal(cleaned)
        except InvalidOperation:
            return None
    if negative and number.is_finite():
        number = -abs(number)
    return number


def _to_cents(value: Decimal) -> Decimal:
    # Values too wide for the decimal context cannot be held to the cent
    try:
        return value.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ZERO


def parse_event_type(value: Any) -> Optional[EventType]:
    """Match a discriminant like 'tradeConfirmation' or 'DAILY_SUMMARY'."""
    if isinstance(value, EventType):
        return value
    if not isinstance(value, str):
        return None
    return _TYPE_ALIASES.get(_NON_ALPHA.sub("", value.lower()))


def _field(raw: Mapping[str, Any], camel: str, snake: str) -> Any:
    if camel in raw:
        return raw[camel]
    return raw.get(snake)


def normalize_event(raw: Mapping[str, Any]) -> LedgerEvent:
    """
    Coerce a raw record into a well-formed LedgerEvent.

    Raises ValidationError only when the record type cannot be determined.
    """
    discriminant = None
    for key in ("imageType", "image_type", "type", "event_type", "eventType"):
        if raw.get(key) is not None:
            discriminant = raw[key]
            break

    event_type = parse_event_type(discriminant)
    if event_type is None:
        raise ValidationError(f"Unrecognized record type: {discriminant!r}")

    event_date = normalize_date(raw.get("date"))
    change_value = parse_amount(_field(raw, "changeValue", "change_value"))
    change_percentage = parse_amount(_field(raw, "changePercentage", "change_percentage"))

    if event_type == EventType.DAILY_SUMMARY:
        return _normalize_summary(raw, event_date, change_value, change_percentage)
    return _normalize_confirmation(raw, event_date, change_value, change_percentage)


def _normalize_confirmation(raw, event_date, change_value, change_percentage) -> LedgerEvent:
    ticker = _field(raw, "ticker", "ticker") or ""
    ticker = str(ticker).strip().upper()
    cost = abs(parse_amount(_field(raw, "costAtOpen", "cost_at_open")))
    credit = abs(parse_amount(_field(raw, "creditAtClose", "credit_at_close")))

    # Recover the basis from value and percentage when the image omitted it
    if cost == ZERO and change_value != ZERO and change_percentage != ZERO:
        cost = _to_cents(abs(change_value / (change_percentage / 100)))
        if credit == ZERO:
            credit = _to_cents(abs(cost + change_value))

    if change_value == ZERO and cost != ZERO and credit != ZERO:
        change_value = _to_cents(credit - cost)

    if change_percentage == ZERO and cost > ZERO:
        change_percentage = _to_cents(change_value / cost * 100)

    return LedgerEvent.trade_confirmation(
        date=event_date,
        ticker=ticker,
        cost_at_open=cost,
        credit_at_close=credit,
        change_value=change_value,
        change_percentage=change_percentage,
    )


def _normalize_summary(raw, event_date, change_value, change_percentage) -> LedgerEvent:
    balance = abs(parse_amount(_field(raw, "endOfDayBalance", "end_of_day_balance")))

    if change_percentage == ZERO and change_value != ZERO and balance != ZERO:
        opening = balance - change_value
        if opening > ZERO:
            change_percentage = _to_cents(change_value / opening * 100)

    return LedgerEvent.daily_summary(
        date=event_date,
        change_value=change_value,
        change_percentage=change_percentage,
        end_of_day_balance=balance,
    )
