"""
cfcal.engines.rules
-------------------
Concrete calendar rules. Every rule implements CalendarRuleProtocol with
exact integer arithmetic and astronomical year numbering (year 0 exists,
year -1 precedes it), extended proleptically in both directions.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import Tuple

from ..core.errors import InvalidDateError
from ..core.time import (
    JDN_GREGORIAN_START,
    gregorian_to_jdn,
    jdn_to_gregorian,
    julian_to_jdn,
    jdn_to_julian,
)
from ..core.types import CalendarDate, CalendarKind

_MONTH_LENGTHS = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _cumulative(lengths: Tuple[int, ...]) -> Tuple[int, ...]:
    out = [0]
    for n in lengths:
        out.append(out[-1] + n)
    return tuple(out)


_CUM_NOLEAP = _cumulative(_MONTH_LENGTHS)
_CUM_ALL_LEAP = _cumulative((31, 29) + _MONTH_LENGTHS[2:])


class _Rule:
    """Shared derived quantities; subclasses provide is_leap and the day-number maps."""
    kind: CalendarKind

    def is_leap(self, year: int) -> bool:
        raise NotImplementedError

    def ymd_to_daynumber(self, year: int, month: int, day: int) -> int:
        raise NotImplementedError

    def daynumber_to_ymd(self, n: int) -> Tuple[int, int, int]:
        raise NotImplementedError

    def days_in_month(self, year: int, month: int) -> int:
        if not (1 <= month <= 12):
            raise InvalidDateError(f"month must be in 1..12, got {month}")
        if month == 2:
            return 29 if self.is_leap(year) else 28
        return _MONTH_LENGTHS[month - 1]

    def days_in_year(self, year: int) -> int:
        return self.ymd_to_daynumber(year + 1, 1, 1) - self.ymd_to_daynumber(year, 1, 1)

    def last_day(self, year: int, month: int) -> int:
        """Largest valid day label of the month."""
        return self.days_in_month(year, month)

    def is_valid(self, year: int, month: int, day: int) -> bool:
        return 1 <= month <= 12 and 1 <= day <= self.last_day(year, month)

    def validate(self, date: CalendarDate) -> None:
        if not self.is_valid(date.year, date.month, date.day):
            raise InvalidDateError(f"{date.year:04d}-{date.month:02d}-{date.day:02d} does not exist in the {self.kind} calendar")

    def date_to_daynumber(self, date: CalendarDate) -> int:
        self.validate(date)
        return self.ymd_to_daynumber(date.year, date.month, date.day)

    def daynumber_to_date(self, n: int) -> CalendarDate:
        return CalendarDate(*self.daynumber_to_ymd(n))

    def day_of_year(self, year: int, month: int, day: int) -> int:
        if not self.is_valid(year, month, day):
            raise InvalidDateError(f"{year:04d}-{month:02d}-{day:02d} does not exist in the {self.kind} calendar")
        return self.ymd_to_daynumber(year, month, day) - self.ymd_to_daynumber(year, 1, 1) + 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class JulianRule(_Rule):
    kind = CalendarKind.JULIAN

    def is_leap(self, year: int) -> bool:
        return year % 4 == 0

    def ymd_to_daynumber(self, year: int, month: int, day: int) -> int:
        return julian_to_jdn(year, month, day)

    def daynumber_to_ymd(self, n: int) -> Tuple[int, int, int]:
        return jdn_to_julian(n)


class GregorianRule(_Rule):
    kind = CalendarKind.PROLEPTIC_GREGORIAN

    def is_leap(self, year: int) -> bool:
        return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)

    def ymd_to_daynumber(self, year: int, month: int, day: int) -> int:
        return gregorian_to_jdn(year, month, day)

    def daynumber_to_ymd(self, n: int) -> Tuple[int, int, int]:
        return jdn_to_gregorian(n)


class MixedRule(_Rule):
    """
    Julian up to 1582-10-04, Gregorian from 1582-10-15. The two dates are
    consecutive day numbers; 1582-10-05..1582-10-14 do not exist.
    """
    kind = CalendarKind.STANDARD

    LAST_JULIAN = (1582, 10, 4)
    FIRST_GREGORIAN = (1582, 10, 15)

    def __init__(self) -> None:
        self._julian = JulianRule()
        self._gregorian = GregorianRule()

    def _side(self, year: int, month: int, day: int) -> _Rule:
        if (year, month, day) >= self.FIRST_GREGORIAN:
            return self._gregorian
        return self._julian

    def is_leap(self, year: int) -> bool:
        # 1582 is common under both rules
        if year < self.FIRST_GREGORIAN[0]:
            return self._julian.is_leap(year)
        return self._gregorian.is_leap(year)

    def days_in_month(self, year: int, month: int) -> int:
        if (year, month) == self.FIRST_GREGORIAN[:2]:
            return self.ymd_to_daynumber(year, month + 1, 1) - self.ymd_to_daynumber(year, month, 1)
        return super().days_in_month(year, month)

    def last_day(self, year: int, month: int) -> int:
        # day labels in 1582-10 still run to 31
        return super().days_in_month(year, month)

    def is_valid(self, year: int, month: int, day: int) -> bool:
        if not super().is_valid(year, month, day):
            return False
        return not (self.LAST_JULIAN < (year, month, day) < self.FIRST_GREGORIAN)

    def ymd_to_daynumber(self, year: int, month: int, day: int) -> int:
        return self._side(year, month, day).ymd_to_daynumber(year, month, day)

    def daynumber_to_ymd(self, n: int) -> Tuple[int, int, int]:
        if n >= JDN_GREGORIAN_START:
            return jdn_to_gregorian(n)
        return jdn_to_julian(n)


class _FixedYearRule(_Rule):
    """Calendars whose years all have the same month table."""
    cumulative: Tuple[int, ...]

    @property
    def year_length(self) -> int:
        return self.cumulative[-1]

    def days_in_month(self, year: int, month: int) -> int:
        if not (1 <= month <= 12):
            raise InvalidDateError(f"month must be in 1..12, got {month}")
        return self.cumulative[month] - self.cumulative[month - 1]

    def days_in_year(self, year: int) -> int:
        return self.year_length

    def ymd_to_daynumber(self, year: int, month: int, day: int) -> int:
        return self.year_length * year + self.cumulative[month - 1] + day - 1

    def daynumber_to_ymd(self, n: int) -> Tuple[int, int, int]:
        year, doy = divmod(n, self.year_length)
        month = bisect_right(self.cumulative, doy)
        return year, month, doy - self.cumulative[month - 1] + 1


class NoLeapRule(_FixedYearRule):
    kind = CalendarKind.NOLEAP
    cumulative = _CUM_NOLEAP

    def is_leap(self, year: int) -> bool:
        return False


class AllLeapRule(_FixedYearRule):
    kind = CalendarKind.ALL_LEAP
    cumulative = _CUM_ALL_LEAP

    def is_leap(self, year: int) -> bool:
        return True


class Day360Rule(_FixedYearRule):
    """Twelve 30-day months; there is no leap concept and day 31 never exists."""
    kind = CalendarKind.DAY360
    cumulative = tuple(30 * i for i in range(13))

    def is_leap(self, year: int) -> bool:
        return False
