"""Enumerations for domain models."""

from enum import Enum


class EventType(str, Enum):
    """Kinds of ledger events."""

    TRADE_CONFIRMATION = "TRADE_CONFIRMATION"
    DAILY_SUMMARY = "DAILY_SUMMARY"
