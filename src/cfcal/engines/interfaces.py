"""
cfcal.engines.interfaces
------------------------
Boundary between the calendar arithmetic (rules) and everything built on it
(instants, codec, ranges).

Day numbers:
Each rule maps (year, month, day) to a signed integer day count. Julian,
proleptic Gregorian and the mixed standard calendar share the Julian Day Number
axis, so their day numbers are directly comparable; the idealized calendars
(noleap, all_leap, 360_day) count days from their own 0000-01-01. Only the
differences between day numbers of one calendar carry meaning outside a rule.
"""

from __future__ import annotations

from typing import Protocol

from ..core.types import CalendarDate, CalendarKind


class CalendarRuleProtocol(Protocol):
    """
    Pure year/month/day arithmetic for one calendar kind.
    date_to_daynumber and daynumber_to_date are exact inverses.
    """
    kind: CalendarKind

    def is_leap(self, year: int) -> bool:
        """Leap-year predicate (always False for 360_day)."""
        ...

    def days_in_month(self, year: int, month: int) -> int:
        """Number of days actually in the month (21 for 1582-10 in the standard calendar)."""
        ...

    def days_in_year(self, year: int) -> int:
        ...

    def last_day(self, year: int, month: int) -> int:
        """Largest valid day label of the month (31 for 1582-10 in the standard calendar)."""
        ...

    def is_valid(self, year: int, month: int, day: int) -> bool:
        ...

    def validate(self, date: CalendarDate) -> None:
        """Raise InvalidDateError unless (year, month, day) exists."""
        ...

    def ymd_to_daynumber(self, year: int, month: int, day: int) -> int:
        ...

    def daynumber_to_ymd(self, n: int) -> tuple[int, int, int]:
        ...

    def date_to_daynumber(self, date: CalendarDate) -> int:
        """Validated day number of date (time-of-day fields ignored)."""
        ...

    def daynumber_to_date(self, n: int) -> CalendarDate:
        """Midnight CalendarDate of day number n."""
        ...

    def day_of_year(self, year: int, month: int, day: int) -> int:
        """1-based ordinal of the day within its year."""
        ...
