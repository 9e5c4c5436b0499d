"""Fixed-width board rows, one per location.

Row layout, single-space separated and left aligned:

    home  wake  HH:MM  flag  name  Weekday DD Month  [abbr  offset  dst]

The bracketed columns only appear in detail mode. Name, date and the
detail columns are padded to the widest value on the board so columns
line up.
"""
from datetime import datetime, timezone
from typing import List, NamedTuple, Optional, Sequence

from worldclock.core.config import Settings, get_settings
from worldclock.core.offsets import format_offset
from worldclock.core.schemas import ColumnWidths, LocationRecord
from worldclock.core.time_utils import resolve_local_time

DATE_FORMAT = "%A %d %B"
TIME_FORMAT = "%H:%M"


class RowFields(NamedTuple):
    time: str
    name: str
    date: str
    abbreviation: str
    offset: str
    is_dst: bool
    hour: int


def is_asleep(hour: int, settings: Optional[Settings] = None) -> bool:
    """Outside the waking window [wake_start_hour, wake_end_hour)."""
    settings = settings or get_settings()
    return hour < settings.wake_start_hour or hour >= settings.wake_end_hour


def row_fields(record: LocationRecord, instant: datetime, home: Optional[LocationRecord] = None) -> RowFields:
    local_time = resolve_local_time(instant, record.timezone)
    local = local_time.local_wall_clock
    return RowFields(
        time=local.strftime(TIME_FORMAT),
        name=record.display_name,
        date=local.strftime(DATE_FORMAT),
        abbreviation=local_time.abbreviation or "",
        offset=format_offset(record, instant, home),
        is_dst=local_time.is_dst,
        hour=local.hour,
    )


def compute_column_widths(
    records: Sequence[LocationRecord],
    instant: datetime,
    home: Optional[LocationRecord] = None,
    detail_mode: bool = False,
) -> ColumnWidths:
    widths = ColumnWidths()
    for record in records:
        fields = row_fields(record, instant, home)
        widths.location = max(widths.location, len(fields.name))
        widths.date = max(widths.date, len(fields.date))
        widths.abbreviation = max(widths.abbreviation, len(fields.abbreviation))
        if detail_mode:
            widths.offset = max(widths.offset, len(fields.offset))
    return widths


def format_row(
    city: LocationRecord,
    instant: datetime,
    widths: ColumnWidths,
    detail_mode: bool = False,
    home: Optional[LocationRecord] = None,
    settings: Optional[Settings] = None,
) -> str:
    settings = settings or get_settings()
    fields = row_fields(city, instant, home)

    columns = [
        settings.home_glyph if home is not None and city == home else " " * len(settings.home_glyph),
        settings.asleep_glyph if is_asleep(fields.hour, settings) else settings.awake_glyph,
        fields.time,
        city.flag or settings.fallback_flag,
        fields.name.ljust(widths.location),
        fields.date.ljust(widths.date),
    ]
    if detail_mode:
        columns += [
            fields.abbreviation.ljust(widths.abbreviation),
            fields.offset.ljust(widths.offset),
            settings.dst_glyph if fields.is_dst else " " * len(settings.dst_glyph),
        ]
    return " ".join(columns).rstrip()


def format_rows(
    records: Sequence[LocationRecord],
    instant: datetime,
    home: Optional[LocationRecord] = None,
    detail_mode: bool = False,
    settings: Optional[Settings] = None,
) -> List[str]:
    """Rows for already-sorted records. No records, no rows."""
    widths = compute_column_widths(records, instant, home, detail_mode)
    return [format_row(record, instant, widths, detail_mode, home, settings) for record in records]


def format_time_travel(offset_seconds: int) -> str:
    """'+1h 15m', '-30m', '+2h'"""
    sign = "-" if offset_seconds < 0 else "+"
    hours, minutes = divmod(abs(offset_seconds) // 60, 60)
    if hours and minutes:
        return f"{sign}{hours}h {minutes}m"
    if hours:
        return f"{sign}{hours}h"
    return f"{sign}{minutes}m"


def format_header(instant: datetime, offset_seconds: int = 0) -> str:
    utc = instant.astimezone(timezone.utc)
    header = f"{utc.strftime('%A %d %B %Y %H:%M')} UTC"
    if offset_seconds:
        header += f" (time travel: {format_time_travel(offset_seconds)})"
    return header
