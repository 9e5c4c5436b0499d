"""Manual time travel for the clock board.

The board normally shows "now" and refreshes itself. Stepping or jumping
in time stores a signed offset in seconds and pauses auto-refresh until
the user refreshes again, which drops the offset back to zero.
"""
from datetime import datetime, timedelta
from typing import Optional

from pydantic import BaseModel, ConfigDict

from worldclock.core.time_utils import get_current_time

QUARTER_HOUR = 15 * 60
HOUR = 60 * 60


def round_to_quarter_hour(instant: datetime) -> datetime:
    """Round down to the last :00/:15/:30/:45 boundary."""
    return instant.replace(minute=instant.minute - instant.minute % 15, second=0, microsecond=0)


def compute_reference_instant(manual_offset_seconds: int = 0, now: Optional[datetime] = None) -> datetime:
    """The instant every row is computed for: now shifted by the manual offset.

    A non-zero offset snaps to the quarter hour so time travel shows round times.
    """
    instant = (now or get_current_time()) + timedelta(seconds=manual_offset_seconds)
    if manual_offset_seconds:
        instant = round_to_quarter_hour(instant)
    return instant


class TimeOffsetController(BaseModel):
    """Manual offset plus auto-refresh state. Every operation returns a new controller."""
    model_config = ConfigDict(frozen=True)

    offset_seconds: int = 0
    auto_refresh: bool = True

    def step(self, seconds: int, count: int = 1) -> "TimeOffsetController":
        return TimeOffsetController(offset_seconds=self.offset_seconds + seconds * count, auto_refresh=False)

    def step_quarter_hours(self, count: int = 1) -> "TimeOffsetController":
        """Move by count * 15 minutes; negative counts go back."""
        return self.step(QUARTER_HOUR, count)

    def step_hours(self, count: int = 1) -> "TimeOffsetController":
        return self.step(HOUR, count)

    def jump_to(self, target: datetime, now: Optional[datetime] = None) -> "TimeOffsetController":
        """Travel to an explicit date and time."""
        delta = target - (now or get_current_time())
        return TimeOffsetController(offset_seconds=round(delta.total_seconds()), auto_refresh=False)

    def start_auto_refresh(self) -> "TimeOffsetController":
        return TimeOffsetController()

    def reference_instant(self, now: Optional[datetime] = None) -> datetime:
        return compute_reference_instant(self.offset_seconds, now)
