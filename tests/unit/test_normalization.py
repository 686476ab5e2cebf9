"""
Unit tests for record normalization.

Tests cover:
- Number parsing from formatted strings
- Date coercion and fallback to today
- Trade confirmation derivations
- Daily summary derivations
- Unknown record types
"""

from datetime import date, datetime
from decimal import Decimal

import pytest

from trade_journal.core.exceptions import ValidationError
from trade_journal.core.timezone import normalize_date, today_eastern
from trade_journal.domain.models import EventType
from trade_journal.services.normalization import (
    normalize_event,
    parse_amount,
    parse_event_type,
)


# =============================================================================
# NUMBER PARSING TESTS
# =============================================================================


class TestParseAmount:
    """Tests for lenient number parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("$1,234.56", Decimal("1234.56")),
            ("-$20.00", Decimal("-20.00")),
            ("+4.5%", Decimal("4.50")),
            (" 12 ", Decimal("12.00")),
            (7, Decimal("7.00")),
            (3.14159, Decimal("3.14")),
            (Decimal("2.005"), Decimal("2.01")),
        ],
    )
    def test_formatted_values(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [None, "", "n/a", "--", "1.2.3", float("nan"), float("inf"), True])
    def test_garbage_becomes_zero(self, raw):
        assert parse_amount(raw) == Decimal("0")

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1.5e3", Decimal("1500.00")),
            ("2E-2", Decimal("0.02")),
            (1e3, Decimal("1000.00")),
        ],
    )
    def test_exponent_notation(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("(1,250.00)", Decimal("-1250.00")),
            ("($20)", Decimal("-20.00")),
            ("(-5)", Decimal("-5.00")),
        ],
    )
    def test_accounting_parentheses_are_negative(self, raw, expected):
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", [1e30, "1e30", Decimal("1E+30"), 10**30, "(snan)"])
    def test_out_of_range_becomes_zero(self, raw):
        """
        GIVEN a number too wide to hold at cent precision
        WHEN I parse it
        THEN it degrades to zero instead of raising
        """
        assert parse_amount(raw) == Decimal("0")

    def test_wide_values_within_range_are_kept(self):
        assert parse_amount("12345678901234567890.5") == Decimal("12345678901234567890.50")


# =============================================================================
# DATE TESTS
# =============================================================================


class TestNormalizeDate:
    """Tests for date coercion."""

    def test_iso_string(self):
        assert normalize_date("2024-03-05") == date(2024, 3, 5)

    def test_loose_string(self):
        assert normalize_date("Mar 5, 2024") == date(2024, 3, 5)

    def test_date_and_datetime(self):
        assert normalize_date(date(2024, 3, 5)) == date(2024, 3, 5)
        assert normalize_date(datetime(2024, 3, 5, 15, 30)) == date(2024, 3, 5)

    @pytest.mark.parametrize("raw", [None, "", "not a date", "1899-01-01", "3024-01-01", 42])
    def test_falls_back_to_today(self, raw):
        assert normalize_date(raw) == today_eastern()


# =============================================================================
# TYPE DISCRIMINANT TESTS
# =============================================================================


class TestParseEventType:
    """Tests for matching the record discriminant."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("tradeConfirmation", EventType.TRADE_CONFIRMATION),
            ("TRADE_CONFIRMATION", EventType.TRADE_CONFIRMATION),
            ("trade confirmation", EventType.TRADE_CONFIRMATION),
            ("dailySummary", EventType.DAILY_SUMMARY),
            ("DAILY_SUMMARY", EventType.DAILY_SUMMARY),
            (EventType.DAILY_SUMMARY, EventType.DAILY_SUMMARY),
        ],
    )
    def test_known_types(self, raw, expected):
        assert parse_event_type(raw) == expected

    @pytest.mark.parametrize("raw", [None, "receipt", 3])
    def test_unknown_types(self, raw):
        assert parse_event_type(raw) is None

    def test_unknown_type_rejected(self):
        """
        GIVEN a record whose type is not recognized
        WHEN I normalize it
        THEN a ValidationError is raised
        """
        with pytest.raises(ValidationError) as exc_info:
            normalize_event({"imageType": "receipt"})

        assert "receipt" in exc_info.value.message

    def test_missing_type_rejected(self):
        with pytest.raises(ValidationError):
            normalize_event({"date": "2024-01-01", "changeValue": 5})


# =============================================================================
# TRADE CONFIRMATION TESTS
# =============================================================================


class TestNormalizeConfirmation:
    """Tests for trade confirmation normalization."""

    def test_complete_record(self):
        """
        GIVEN a fully populated extracted trade
        WHEN I normalize it
        THEN fields are cleaned, ticker uppercased and amounts absolute
        """
        event = normalize_event({
            "imageType": "tradeConfirmation",
            "date": "2024-01-01",
            "ticker": " nvda ",
            "costAtOpen": "-$1,000.00",
            "creditAtClose": "$1,050.00",
            "changeValue": "$50.00",
            "changePercentage": "5%",
        })

        assert event.event_type == EventType.TRADE_CONFIRMATION
        assert event.date == date(2024, 1, 1)
        assert event.ticker == "NVDA"
        assert event.cost_at_open == Decimal("1000.00")
        assert event.credit_at_close == Decimal("1050.00")
        assert event.change_value == Decimal("50.00")
        assert event.change_percentage == Decimal("5.00")
        assert event.event_id is None

    def test_derives_change_from_cost_and_credit(self):
        event = normalize_event({
            "type": "TRADE_CONFIRMATION",
            "date": "2024-01-01",
            "cost_at_open": "200",
            "credit_at_close": "180",
        })

        assert event.change_value == Decimal("-20.00")
        assert event.change_percentage == Decimal("-10.00")

    def test_derives_cost_from_change_and_percentage(self):
        """
        GIVEN a trade with change and percentage but no cost
        WHEN I normalize it
        THEN cost is |change / (percentage / 100)| and credit follows
        """
        event = normalize_event({
            "imageType": "tradeConfirmation",
            "date": "2024-01-01",
            "changeValue": "-25",
            "changePercentage": "-12.5",
        })

        assert event.cost_at_open == Decimal("200.00")
        assert event.credit_at_close == Decimal("175.00")
        assert event.change_value == Decimal("-25.00")
        assert event.change_percentage == Decimal("-12.50")

    def test_missing_everything(self):
        event = normalize_event({"imageType": "tradeConfirmation", "date": "garbage"})

        assert event.ticker == ""
        assert event.cost_at_open == 0
        assert event.change_value == 0
        assert event.change_percentage == 0
        assert event.date == today_eastern()

    def test_derived_credit_is_never_negative(self):
        """
        GIVEN a trade that lost more than its basis and omits cost and credit
        WHEN I normalize it
        THEN the derived credit is stored as an absolute value
        """
        event = normalize_event({
            "imageType": "tradeConfirmation",
            "date": "2024-01-01",
            "changeValue": "-10",
            "changePercentage": "-200",
        })

        assert event.cost_at_open == Decimal("5.00")
        assert event.credit_at_close == Decimal("5.00")
        assert event.change_value == Decimal("-10.00")

    def test_oversized_numbers_do_not_raise(self):
        event = normalize_event({
            "imageType": "tradeConfirmation",
            "date": "2024-01-01",
            "changeValue": 1e30,
            "costAtOpen": "100",
            "creditAtClose": "110",
        })

        assert event.change_value == Decimal("10.00")
        assert event.change_percentage == Decimal("10.00")

    def test_oversized_derived_percentage_degrades_to_zero(self):
        event = normalize_event({
            "imageType": "tradeConfirmation",
            "date": "2024-01-01",
            "costAtOpen": "0.01",
            "changeValue": "99999999999999999999999999",
        })

        assert event.change_percentage == Decimal("0")


# =============================================================================
# DAILY SUMMARY TESTS
# =============================================================================


class TestNormalizeSummary:
    """Tests for daily summary normalization."""

    def test_complete_record(self):
        event = normalize_event({
            "imageType": "dailySummary",
            "date": "2024-01-02",
            "changeValue": "-$20.00",
            "changePercentage": "-4%",
            "endOfDayBalance": "$480.00",
        })

        assert event.event_type == EventType.DAILY_SUMMARY
        assert event.change_value == Decimal("-20.00")
        assert event.change_percentage == Decimal("-4.00")
        assert event.end_of_day_balance == Decimal("480.00")
        assert event.ticker == ""
        assert event.cost_at_open == 0

    def test_derives_percentage_from_balance(self):
        """
        GIVEN a summary with change 20 and balance 520 but no percentage
        WHEN I normalize it
        THEN the percentage is 20 / 500 * 100
        """
        event = normalize_event({
            "imageType": "dailySummary",
            "date": "2024-01-02",
            "changeValue": "20",
            "endOfDayBalance": "520",
        })

        assert event.change_percentage == Decimal("4.00")
