"""
Unit tests for display formatting helpers.
"""

import pytest
import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from thbill_dashboard.formatting import (
    format_number,
    format_currency,
    format_percent,
    format_signed_percent,
    format_compact_usd,
    parse_timestamp,
    format_date,
    format_stars,
)


class TestNumberFormats:

    @pytest.mark.unit
    @pytest.mark.parametrize("func", [
        format_number,
        format_currency,
        format_percent,
        format_signed_percent,
        format_compact_usd,
    ])
    def test_none_renders_dash(self, func):
        assert func(None) == "-"

    @pytest.mark.unit
    def test_number_and_currency(self):
        assert format_number(1234567.891, 2) == "1,234,567.89"
        assert format_currency(980) == "$980"
        assert format_currency(-1500.5, 2) == "-$1,500.50"

    @pytest.mark.unit
    def test_percentages(self):
        assert format_percent(98.0) == "98.00%"
        assert format_signed_percent(0.1234) == "+0.1234%"
        assert format_signed_percent(-0.5, 2) == "-0.50%"

    @pytest.mark.unit
    @pytest.mark.parametrize("value,expected", [
        (1_850_000, "$1.85M"),
        (420_000, "$420.0K"),
        (999, "$999"),
    ])
    def test_compact_usd(self, value, expected):
        assert format_compact_usd(value) == expected


class TestTimestamps:

    @pytest.mark.unit
    def test_naive_timestamp_is_utc(self):
        assert parse_timestamp("2026-10-17T11:45:00") == datetime(2026, 10, 17, 11, 45, tzinfo=timezone.utc)

    @pytest.mark.unit
    def test_zulu_and_offset_normalized(self):
        assert parse_timestamp("2026-10-17T11:45:00Z") == datetime(2026, 10, 17, 11, 45, tzinfo=timezone.utc)
        assert parse_timestamp("2026-10-17T13:45:00+02:00") == datetime(2026, 10, 17, 11, 45, tzinfo=timezone.utc)

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, "", "yesterday"])
    def test_unparseable_timestamps(self, value):
        assert parse_timestamp(value) is None
        assert format_date(value) == "-"

    @pytest.mark.unit
    def test_format_date(self):
        assert format_date("2026-10-17T11:45:00") == "Oct 17, 2026, 11:45 AM UTC"
        assert format_date("2026-03-05T18:07:00Z") == "Mar 5, 2026, 06:07 PM UTC"


class TestStars:

    @pytest.mark.unit
    @pytest.mark.parametrize("stars,expected", [
        (0, "☆☆☆☆☆"),
        (3, "★★★☆☆"),
        (5, "★★★★★"),
        (7, "★★★★★"),
    ])
    def test_format_stars(self, stars, expected):
        assert format_stars(stars) == expected
