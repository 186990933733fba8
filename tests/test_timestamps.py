"""
Tests for timestamp parsing and the parse-once cache.
"""

from datetime import date, time, timedelta

import pytest

from gnucash_ledger.ledger import (
    TimestampCache,
    UnparsableTimestampError,
    parse_timestamp,
)


class TestParseTimestamp:
    """Tests for the fixed 'yyyy-MM-dd HH:mm:ss Z' format."""

    def test_parses_with_offset(self):
        """Date, time and UTC offset are all kept."""
        parsed = parse_timestamp("2001-09-18 00:00:00 +0200")
        assert parsed.date() == date(2001, 9, 18)
        assert parsed.time() == time(0, 0, 0)
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_negative_offset(self):
        """Offsets west of UTC parse too."""
        parsed = parse_timestamp("2020-02-29 23:59:59 -0530")
        assert parsed.utcoffset() == -timedelta(hours=5, minutes=30)

    def test_garbage_raises_with_raw_value(self):
        """The error carries the original string."""
        with pytest.raises(UnparsableTimestampError, match="not-a-date") as excinfo:
            parse_timestamp("not-a-date")
        assert excinfo.value.raw_value == "not-a-date"

    def test_error_names_transaction(self):
        """The owning transaction id is part of the message when known."""
        with pytest.raises(UnparsableTimestampError) as excinfo:
            parse_timestamp("not-a-date", transaction_id="trn-7", field_name="date_posted")
        message = str(excinfo.value)
        assert "trn-7" in message
        assert "date_posted" in message
        assert excinfo.value.transaction_id == "trn-7"

    @pytest.mark.parametrize("raw", [
        "2001-9-18 00:00:00 +0200",     # one-digit month
        "2001-09-18 00:00:00 +02:00",   # colon in offset
        "2001-09-18 00:00:00",          # no offset
        "2001-13-18 00:00:00 +0200",    # month 13
        "2001-02-30 00:00:00 +0200",    # no such day
        "2001-09-18T00:00:00 +0200",    # ISO separator
        "٢٠٠١-09-18 00:00:00 +0200",  # Arabic-Indic digits
        "",
    ])
    def test_strict_format(self, raw):
        """Anything but the exact format is rejected."""
        with pytest.raises(UnparsableTimestampError):
            parse_timestamp(raw)

    def test_missing_value(self):
        """None is a missing mandatory timestamp."""
        with pytest.raises(UnparsableTimestampError):
            parse_timestamp(None)

    def test_is_value_error(self):
        """Callers catching ValueError still see it."""
        with pytest.raises(ValueError):
            parse_timestamp("nope")


class TestTimestampCache:
    """Tests for the lazy, parse-once cell."""

    def test_parses_once(self):
        """The raw source is read until the first successful parse, then never."""
        calls = []

        def source():
            calls.append(1)
            return "2001-09-18 00:00:00 +0200"

        cache = TimestampCache("date_posted", source, "trn-1")
        assert not cache.is_cached

        first = cache.get()
        second = cache.get()

        assert first is second
        assert len(calls) == 1
        assert cache.is_cached

    def test_failure_not_cached(self):
        """A failed parse raises every time and is retried on the next read."""
        values = iter(["garbage", "2001-09-18 00:00:00 +0200"])
        cache = TimestampCache("date_entered", lambda: next(values), "trn-1")

        with pytest.raises(UnparsableTimestampError, match="garbage"):
            cache.get()
        assert not cache.is_cached

        assert cache.get().year == 2001
