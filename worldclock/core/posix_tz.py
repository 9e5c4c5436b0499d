"""POSIX TZ rule strings as tzinfo objects.

Platforms without the IANA database get identifiers such as
'CET-1CEST,M3.5.0,M10.5.0/3' from the identifier resolver. PosixTimezone
makes those usable anywhere a ZoneInfo would be.

Grammar: std offset [dst [offset] [,start[/time],end[/time]]]
  - names are 3+ letters or quoted, e.g. <+04>
  - offsets are hours west of UTC, e.g. EST5 is UTC-5
  - rules are Jn (1-365, no leap day), n (0-365) or Mm.w.d
"""
import calendar
import re
from datetime import date, datetime, time, timedelta, tzinfo
from typing import NamedTuple, Optional, Tuple

_NAME_RE = re.compile(r"<([A-Za-z0-9+\-]+)>|([A-Za-z]{3,})")
_OFFSET_RE = re.compile(r"([+-]?)(\d{1,3})(?::(\d{1,2})(?::(\d{1,2}))?)?")
_RULE_RE = re.compile(r"M(\d{1,2})\.(\d)\.(\d)|J(\d{1,3})|(\d{1,3})")

# Used when a DST name is given without rules
DEFAULT_RULES = "M3.2.0,M11.1.0"
DEFAULT_TRANSITION_TIME = timedelta(hours=2)


class TransitionRule(NamedTuple):
    """One DST boundary, expressed in local wall time."""
    kind: str  # "M", "J" or "n"
    month: int = 0
    week: int = 0
    weekday: int = 0  # 0 = Sunday
    day: int = 0
    time: timedelta = DEFAULT_TRANSITION_TIME

    def date_in(self, year: int) -> date:
        if self.kind == "J":
            result = date(year, 1, 1) + timedelta(days=self.day - 1)
            if calendar.isleap(year) and self.day >= 60:
                result += timedelta(days=1)
            return result
        if self.kind == "n":
            return date(year, 1, 1) + timedelta(days=self.day)

        first = date(year, self.month, 1)
        first_weekday = (first.weekday() + 1) % 7
        day = 1 + (self.weekday - first_weekday) % 7 + (self.week - 1) * 7
        days_in_month = calendar.monthrange(year, self.month)[1]
        while day > days_in_month:
            day -= 7
        return first.replace(day=day)

    def wall_time_in(self, year: int) -> datetime:
        return datetime.combine(self.date_in(year), time()) + self.time


def _parse_name(text: str, pos: int) -> Tuple[str, int]:
    match = _NAME_RE.match(text, pos)
    if not match:
        raise ValueError(f"Invalid POSIX TZ string {text!r}: expected zone name at {pos}")
    return match.group(1) or match.group(2), match.end()


def _parse_duration(text: str, pos: int) -> Tuple[timedelta, int]:
    match = _OFFSET_RE.match(text, pos)
    if not match:
        raise ValueError(f"Invalid POSIX TZ string {text!r}: expected offset at {pos}")
    sign = -1 if match.group(1) == "-" else 1
    duration = timedelta(
        hours=int(match.group(2)),
        minutes=int(match.group(3) or 0),
        seconds=int(match.group(4) or 0),
    )
    return sign * duration, match.end()


def _parse_rule(text: str, pos: int) -> Tuple[TransitionRule, int]:
    match = _RULE_RE.match(text, pos)
    if not match:
        raise ValueError(f"Invalid POSIX TZ string {text!r}: expected rule at {pos}")
    month, week, weekday, julian, zero_based = match.groups()
    if month is not None:
        rule = TransitionRule("M", month=int(month), week=int(week), weekday=int(weekday))
        if not (1 <= rule.month <= 12 and 1 <= rule.week <= 5 and 0 <= rule.weekday <= 6):
            raise ValueError(f"Invalid POSIX TZ string {text!r}: bad rule {match.group(0)!r}")
    elif julian is not None:
        rule = TransitionRule("J", day=int(julian))
        if not 1 <= rule.day <= 365:
            raise ValueError(f"Invalid POSIX TZ string {text!r}: bad rule {match.group(0)!r}")
    else:
        rule = TransitionRule("n", day=int(zero_based))
        if not 0 <= rule.day <= 365:
            raise ValueError(f"Invalid POSIX TZ string {text!r}: bad rule {match.group(0)!r}")

    pos = match.end()
    if text.startswith("/", pos):
        rule_time, pos = _parse_duration(text, pos + 1)
        rule = rule._replace(time=rule_time)
    return rule, pos


class PosixTimezone(tzinfo):
    """tzinfo driven by a single POSIX TZ rule string."""

    def __init__(self, tz_string: str):
        self.tz_string = tz_string
        self.dst_name: Optional[str] = None
        self.start: Optional[TransitionRule] = None
        self.end: Optional[TransitionRule] = None

        self.std_name, pos = _parse_name(tz_string, 0)
        west, pos = _parse_duration(tz_string, pos)
        self.std_offset = -west
        self.dst_offset = self.std_offset

        if pos < len(tz_string):
            self.dst_name, pos = _parse_name(tz_string, pos)
            if pos < len(tz_string) and tz_string[pos] != ",":
                west, pos = _parse_duration(tz_string, pos)
                self.dst_offset = -west
            else:
                self.dst_offset = self.std_offset + timedelta(hours=1)

            rules = tz_string[pos + 1:] if pos < len(tz_string) else DEFAULT_RULES
            if pos < len(tz_string) and tz_string[pos] != ",":
                raise ValueError(f"Invalid POSIX TZ string {tz_string!r}: expected ',' at {pos}")
            self.start, rule_pos = _parse_rule(rules, 0)
            if not rules.startswith(",", rule_pos):
                raise ValueError(f"Invalid POSIX TZ string {tz_string!r}: expected two rules")
            self.end, rule_pos = _parse_rule(rules, rule_pos + 1)
            if rule_pos != len(rules):
                raise ValueError(f"Invalid POSIX TZ string {tz_string!r}: trailing {rules[rule_pos:]!r}")

    @property
    def has_dst(self) -> bool:
        return self.start is not None

    def __repr__(self):
        return f"PosixTimezone({self.tz_string!r})"

    def _is_dst_utc(self, utc: datetime) -> bool:
        """Whether DST is in effect at a naive UTC datetime."""
        if not self.has_dst:
            return False
        year = (utc + self.std_offset).year
        # Start is written in standard time, end in daylight time
        start = self.start.wall_time_in(year) - self.std_offset
        end = self.end.wall_time_in(year) - self.dst_offset
        if start < end:
            return start <= utc < end
        return not (end <= utc < start)

    def _lookup(self, dt: datetime) -> Tuple[timedelta, bool]:
        """Offset and DST state for a local wall time, honouring fold."""
        if not self.has_dst:
            return self.std_offset, False

        wall = dt.replace(tzinfo=None)
        valid_std = not self._is_dst_utc(wall - self.std_offset)
        valid_dst = self._is_dst_utc(wall - self.dst_offset)

        if valid_std and valid_dst:
            # Repeated hour: fold=0 is the first occurrence (larger offset)
            first_is_dst = self.dst_offset > self.std_offset
            use_dst = first_is_dst if dt.fold == 0 else not first_is_dst
        elif valid_std or valid_dst:
            use_dst = valid_dst
        else:
            # Skipped hour: fold=0 keeps the offset from before the jump
            before_is_dst = self.dst_offset < self.std_offset
            use_dst = before_is_dst if dt.fold == 0 else not before_is_dst

        return (self.dst_offset, True) if use_dst else (self.std_offset, False)

    def utcoffset(self, dt):
        if dt is None:
            return self.std_offset
        return self._lookup(dt)[0]

    def dst(self, dt):
        if dt is None or not self._lookup(dt)[1]:
            return timedelta(0)
        return self.dst_offset - self.std_offset

    def tzname(self, dt):
        if dt is not None and self._lookup(dt)[1]:
            return self.dst_name
        return self.std_name

    def fromutc(self, dt):
        if dt.tzinfo is not self:
            raise ValueError("fromutc: dt.tzinfo is not self")
        utc = dt.replace(tzinfo=None)
        is_dst = self._is_dst_utc(utc)
        offset = self.dst_offset if is_dst else self.std_offset
        other = self.std_offset if is_dst else self.dst_offset
        wall = utc + offset

        fold = 0
        if self.has_dst and offset < other:
            # Same wall time reachable from the other offset earlier on
            earlier = wall - other
            if self._is_dst_utc(earlier) != is_dst:
                fold = 1
        return wall.replace(tzinfo=self, fold=fold)
