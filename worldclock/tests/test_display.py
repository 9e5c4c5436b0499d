"""Tests for board row layout."""
from datetime import datetime, timezone

import pytest

from worldclock.core.display import (
    compute_column_widths, format_header, format_row, format_rows, format_time_travel, is_asleep,
)
from worldclock.core.schemas import ColumnWidths, LocationRecord


class TestIsAsleep:
    @pytest.mark.parametrize("hour, asleep", [
        (0, True), (7, True), (8, False), (12, False), (21, False), (22, True), (23, True),
    ])
    def test_waking_window_is_half_open(self, settings, hour, asleep):
        assert is_asleep(hour, settings) is asleep


class TestColumnWidths:
    def test_maxima(self, instant, london, tokyo):
        widths = compute_column_widths([london, tokyo], instant)
        assert widths.location == len("London")
        assert widths.date == len("Thursday 15 January")
        assert widths.abbreviation == 3
        assert widths.offset == 0

    def test_offset_only_in_detail_mode(self, instant, london, kolkata):
        widths = compute_column_widths([london, kolkata], instant, detail_mode=True)
        assert widths.offset == len("UTC+5:30")

    def test_missing_abbreviation_counts_as_empty(self, instant, dubai):
        assert compute_column_widths([dubai], instant).abbreviation == 0

    def test_empty(self, instant):
        assert compute_column_widths([], instant) == ColumnWidths()


class TestFormatRow:
    def test_compact_rows(self, instant, settings, london, tokyo):
        rows = format_rows([london, tokyo], instant, settings=settings)
        assert rows == [
            "  ☀ 12:00 🇬🇧 London Thursday 15 January",
            "  ☀ 21:00 🇯🇵 Tokyo  Thursday 15 January",
        ]

    def test_detail_rows(self, instant, settings, london, kolkata):
        rows = format_rows([london, kolkata], instant, detail_mode=True, settings=settings)
        assert rows == [
            "  ☀ 12:00 🇬🇧 London  Thursday 15 January GMT UTC+0",
            "  ☀ 17:30 🇮🇳 Kolkata Thursday 15 January IST UTC+5:30",
        ]

    def test_home_marker_and_relative_offsets(self, instant, settings, london, tokyo):
        rows = format_rows([london, tokyo], instant, home=london, detail_mode=True, settings=settings)
        assert rows == [
            "⌂ ☀ 12:00 🇬🇧 London Thursday 15 January GMT +0",
            "  ☀ 21:00 🇯🇵 Tokyo  Thursday 15 January JST +9",
        ]

    def test_home_matched_by_value(self, instant, settings, london):
        copy = LocationRecord(**london.model_dump())
        widths = compute_column_widths([london], instant)
        assert format_row(london, instant, widths, home=copy, settings=settings).startswith("⌂ ")

    def test_sleeping_city(self, instant, settings, new_york):
        widths = compute_column_widths([new_york], instant)
        assert format_row(new_york, instant, widths, settings=settings) == "  ☾ 07:00 🇺🇸 New York Thursday 15 January"

    def test_dst_marker(self, settings, new_york, london):
        summer = datetime(2026, 7, 1, 12, 0, tzinfo=timezone.utc)
        rows = format_rows([new_york, london], summer, detail_mode=True, settings=settings)
        assert rows[0].endswith("EDT UTC-4 ✦")
        assert rows[1].endswith("BST UTC+1 ✦")

    def test_no_dst_marker_in_winter(self, instant, settings, new_york):
        row = format_rows([new_york], instant, detail_mode=True, settings=settings)[0]
        assert "✦" not in row

    def test_missing_abbreviation_keeps_columns_aligned(self, instant, settings, dubai, london):
        rows = format_rows([dubai, london], instant, detail_mode=True, settings=settings)
        assert rows[0] == "  ☀ 16:00 🇦🇪 Dubai  Thursday 15 January     UTC+4"
        assert rows[1] == "  ☀ 12:00 🇬🇧 London Thursday 15 January GMT UTC+0"

    def test_fallback_flag(self, instant, settings):
        record = LocationRecord(city="Somewhere", timezone="UTC")
        widths = compute_column_widths([record], instant)
        assert "🌐 Somewhere" in format_row(record, instant, widths, settings=settings)

    def test_no_records_no_rows(self, instant, settings):
        assert format_rows([], instant, settings=settings) == []


class TestHeader:
    def test_live_header(self, instant):
        assert format_header(instant) == "Thursday 15 January 2026 12:00 UTC"

    def test_time_travel_header(self, instant):
        assert format_header(instant, 4500) == "Thursday 15 January 2026 12:00 UTC (time travel: +1h 15m)"

    @pytest.mark.parametrize("seconds, expected", [
        (3600, "+1h"), (-1800, "-30m"), (-5400, "-1h 30m"), (900, "+15m"),
    ])
    def test_format_time_travel(self, seconds, expected):
        assert format_time_travel(seconds) == expected
