"""
cfcal.engines.instant
---------------------
Calendar-tagged time points stored as ``origin + offset``.

An Instant never normalises its representation: the offset keeps the
resolution it was built with, and arithmetic that would need a finer one
fails instead of widening or rounding. Instants of one calendar compare and
subtract regardless of their origins; mixing calendars raises
CalendarMismatchError.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Optional, Tuple, Union

from ..core.duration import Duration, Resolution, checked, unit_resolution
from ..core.errors import CalendarMismatchError, InexactConversionError, InvalidDateError
from ..core.time import SECONDS_PER_DAY, hms_to_seconds, seconds_to_hms
from ..core.types import SUBSECOND_FIELDS, CalendarDate, CalendarKind, Origin
from .factory import get_rule, resolve_kind
from .interfaces import CalendarRuleProtocol
from .specs import DEFAULT_ORIGIN, DEFAULT_UNIT

CalendarLike = Union[CalendarKind, str]
UnitLike = Union[str, Resolution]
OriginLike = Union[Origin, CalendarDate, Tuple[int, ...], None]

_ATTO_PER_SECOND = 10 ** 18


def resolve_unit(unit: UnitLike) -> Resolution:
    """Unit name ('seconds', 'day', ...) or an explicit (factor, exponent)."""
    if isinstance(unit, str):
        return unit_resolution(unit)
    factor, exponent = unit
    if factor <= 0:
        raise ValueError(f"factor must be positive, got {factor}")
    return (int(factor), int(exponent))


def resolve_origin(kind: CalendarKind, origin: OriginLike) -> Origin:
    if origin is None:
        return Origin(DEFAULT_ORIGIN, kind)
    if isinstance(origin, Origin):
        if origin.kind is not kind:
            raise CalendarMismatchError(f"origin is in the {origin.kind} calendar, expected {kind}")
        return origin
    if isinstance(origin, CalendarDate):
        return Origin(origin, kind)
    return Origin(CalendarDate(*origin), kind)


def date_position(rule: CalendarRuleProtocol, date: CalendarDate) -> Duration:
    """
    Exact position of date relative to day number 0 of its calendar, at
    whole seconds or at the finest sub-second field that is set.
    """
    dn = rule.date_to_daynumber(date)
    secs = dn * SECONDS_PER_DAY + hms_to_seconds(date.hour, date.minute, date.second)
    exp = date.finest_subsecond()
    if exp == 0:
        return Duration(secs, 1, 0)
    scale = 10 ** (-exp)
    sub = date.subsecond_attoseconds // (_ATTO_PER_SECOND // scale)
    return Duration(checked(secs * scale + sub), 1, exp)


def position_to_date(rule: CalendarRuleProtocol, position: Duration) -> CalendarDate:
    """Inverse of date_position: integer division at the duration's own resolution."""
    days, rem = divmod(position.seconds_exact, SECONDS_PER_DAY)
    whole = rem.numerator // rem.denominator
    atto = (rem - whole) * _ATTO_PER_SECOND
    if atto.denominator != 1:
        raise InexactConversionError(f"{position!r} has a resolution finer than one attosecond")
    y, m, d = rule.daynumber_to_ymd(int(days))
    h, mi, s = seconds_to_hms(whole)
    sub = []
    a = int(atto)
    for _ in SUBSECOND_FIELDS:
        a, part = divmod(a, 1000)
        sub.append(part)
    return CalendarDate(y, m, d, h, mi, s, *reversed(sub))


def default_unit(*dates: CalendarDate) -> Resolution:
    """DEFAULT_UNIT, or the finest sub-second field set on any of dates if that is finer."""
    factor, exponent = unit_resolution(DEFAULT_UNIT)
    finest = min(d.finest_subsecond() for d in dates)
    if finest < exponent:
        return (1, finest)
    return (factor, exponent)


@dataclass(frozen=True, eq=False)
class Instant:
    origin: Origin
    offset: Duration

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    @classmethod
    def from_date(
        cls,
        calendar: CalendarLike,
        date: CalendarDate,
        *,
        unit: Optional[UnitLike] = None,
        origin: OriginLike = None,
    ) -> "Instant":
        kind = resolve_kind(calendar)
        rule = get_rule(kind)
        org = resolve_origin(kind, origin)
        res = resolve_unit(unit) if unit is not None else default_unit(date, org.date)
        delta = date_position(rule, date).sub_exact(date_position(rule, org.date))
        return cls(org, delta.rescale(*res))

    @classmethod
    def from_fields(
        cls,
        calendar: CalendarLike,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        millisecond: int = 0,
        microsecond: int = 0,
        nanosecond: int = 0,
        picosecond: int = 0,
        femtosecond: int = 0,
        attosecond: int = 0,
        *,
        unit: Optional[UnitLike] = None,
        origin: OriginLike = None,
    ) -> "Instant":
        date = CalendarDate(
            year, month, day, hour, minute, second,
            millisecond, microsecond, nanosecond, picosecond, femtosecond, attosecond,
        )
        return cls.from_date(calendar, date, unit=unit, origin=origin)

    # ---------------------------------------------------------
    # Representation
    # ---------------------------------------------------------

    @property
    def kind(self) -> CalendarKind:
        return self.origin.kind

    @property
    def rule(self) -> CalendarRuleProtocol:
        return get_rule(self.kind)

    @property
    def resolution(self) -> Resolution:
        return self.offset.resolution

    @property
    def unit(self) -> Optional[str]:
        return self.offset.unit

    def position(self) -> Duration:
        """Exact offset from day number 0 of the calendar."""
        return date_position(self.rule, self.origin.date).add_exact(self.offset)

    @cached_property
    def _fields(self) -> CalendarDate:
        return position_to_date(self.rule, self.position())

    def to_fields(self) -> CalendarDate:
        return self._fields

    fields = to_fields

    year = property(lambda self: self._fields.year)
    month = property(lambda self: self._fields.month)
    day = property(lambda self: self._fields.day)
    hour = property(lambda self: self._fields.hour)
    minute = property(lambda self: self._fields.minute)
    second = property(lambda self: self._fields.second)
    millisecond = property(lambda self: self._fields.millisecond)
    microsecond = property(lambda self: self._fields.microsecond)
    nanosecond = property(lambda self: self._fields.nanosecond)
    picosecond = property(lambda self: self._fields.picosecond)
    femtosecond = property(lambda self: self._fields.femtosecond)
    attosecond = property(lambda self: self._fields.attosecond)

    def day_of_year(self) -> int:
        f = self._fields
        return self.rule.day_of_year(f.year, f.month, f.day)

    def days_in_month(self) -> int:
        f = self._fields
        return self.rule.days_in_month(f.year, f.month)

    def days_in_year(self) -> int:
        return self.rule.days_in_year(self._fields.year)

    def is_leap_year(self) -> bool:
        return self.rule.is_leap(self._fields.year)

    def isoformat(self) -> str:
        return self._fields.isoformat()

    # ---------------------------------------------------------
    # Arithmetic
    # ---------------------------------------------------------

    def _check_kind(self, other: "Instant") -> None:
        if other.kind is not self.kind:
            raise CalendarMismatchError(
                f"cannot combine a {self.kind} instant with a {other.kind} instant"
            )

    def add_period(self, d: Duration) -> "Instant":
        return Instant(self.origin, self.offset.add(d))

    def sub_period(self, d: Duration) -> "Instant":
        return Instant(self.origin, self.offset.sub(d))

    def difference(self, other: "Instant") -> Duration:
        """self - other, exact, at the common resolution of both."""
        self._check_kind(other)
        if self.origin == other.origin:
            return self.offset.sub_exact(other.offset)
        return self.position().sub_exact(other.position())

    def compare(self, other: "Instant") -> int:
        """-1, 0 or 1."""
        d = self.difference(other)
        return (d.mantissa > 0) - (d.mantissa < 0)

    def add_months(self, n: int, *, clamp: bool = False) -> "Instant":
        """
        Shift the month field by n keeping day and time of day. A day that does
        not exist in the target month raises InvalidDateError unless clamp=True,
        which moves it to the last day of that month. A clamped day that falls
        in the 1582 reform gap of the standard calendar moves forward to
        1582-10-15.
        """
        f = self._fields
        y, m0 = divmod(f.month - 1 + n, 12)
        y += f.year
        m = m0 + 1
        day = f.day
        if clamp:
            last = self.rule.last_day(y, m)
            day = min(day, last)
            while day < last and not self.rule.is_valid(y, m, day):
                day += 1
        if not self.rule.is_valid(y, m, day):
            raise InvalidDateError(f"{y:04d}-{m:02d}-{day:02d} does not exist in the {self.kind} calendar")
        return self._with_ymd(y, m, day)

    def add_years(self, n: int, *, clamp: bool = False) -> "Instant":
        return self.add_months(12 * n, clamp=clamp)

    def _with_ymd(self, y: int, m: int, d: int) -> "Instant":
        f = self._fields.as_tuple()
        date = CalendarDate(y, m, d, *f[3:])
        return Instant.from_date(self.kind, date, unit=self.resolution, origin=self.origin)

    # operators

    def __add__(self, other):
        if isinstance(other, Duration):
            return self.add_period(other)
        return NotImplemented

    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, Duration):
            return self.sub_period(other)
        if isinstance(other, Instant):
            return self.difference(other)
        return NotImplemented

    def __eq__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.compare(other) == 0

    def __ne__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.compare(other) != 0

    def __lt__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        return hash((self.kind, self.position().seconds_exact))

    def __repr__(self) -> str:
        u = self.unit or f"{self.offset.factor}e{self.offset.exponent}s"
        return (
            f"Instant('{self.kind}', '{self.isoformat()}', unit='{u}', "
            f"origin='{self.origin.date.isoformat()}')"
        )


def _constructor(name: str, kind: CalendarKind) -> Callable[..., Instant]:
    def make(*fields: int, unit: Optional[UnitLike] = None, origin: OriginLike = None) -> Instant:
        return Instant.from_fields(kind, *fields, unit=unit, origin=origin)

    make.__doc__ = (
        f"Instant in the {kind} calendar from (year, month, day[, hour, minute, second, "
        "millisecond, ..., attosecond]) fields."
    )
    make.__name__ = make.__qualname__ = name
    return make


DateTimeStandard = _constructor("DateTimeStandard", CalendarKind.STANDARD)
DateTimeJulian = _constructor("DateTimeJulian", CalendarKind.JULIAN)
DateTimeProlepticGregorian = _constructor("DateTimeProlepticGregorian", CalendarKind.PROLEPTIC_GREGORIAN)
DateTimeNoLeap = _constructor("DateTimeNoLeap", CalendarKind.NOLEAP)
DateTimeAllLeap = _constructor("DateTimeAllLeap", CalendarKind.ALL_LEAP)
DateTime360Day = _constructor("DateTime360Day", CalendarKind.DAY360)
