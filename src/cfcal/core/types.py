from __future__ import annotations
import operator
from dataclasses import dataclass, fields
from enum import Enum
from typing import Tuple

from .errors import InvalidDateError

# Sub-second field names, coarse to fine; each field holds 0..999.
SUBSECOND_FIELDS: Tuple[str, ...] = (
    "millisecond",
    "microsecond",
    "nanosecond",
    "picosecond",
    "femtosecond",
    "attosecond",
)


class CalendarKind(Enum):
    JULIAN = "julian"
    PROLEPTIC_GREGORIAN = "proleptic_gregorian"
    STANDARD = "standard"
    NOLEAP = "noleap"
    ALL_LEAP = "all_leap"
    DAY360 = "360_day"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class CalendarDate:
    """
    Broken-down calendar fields. Range checks on the time-of-day fields happen
    here; whether (year, month, day) exists depends on the calendar and is
    checked by the calendar rule.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0
    microsecond: int = 0
    nanosecond: int = 0
    picosecond: int = 0
    femtosecond: int = 0
    attosecond: int = 0

    def __post_init__(self) -> None:
        # Accept numpy integers etc.; store plain ints in the frozen instance
        for f in fields(self):
            v = getattr(self, f.name)
            if isinstance(v, bool):
                raise TypeError(f"{f.name} must be an int, got {v!r}")
            object.__setattr__(self, f.name, operator.index(v))
        if not (0 <= self.hour < 24):
            raise InvalidDateError(f"hour must be in 0..23, got {self.hour}")
        if not (0 <= self.minute < 60):
            raise InvalidDateError(f"minute must be in 0..59, got {self.minute}")
        if not (0 <= self.second < 60):
            raise InvalidDateError(f"second must be in 0..59, got {self.second}")
        for name in SUBSECOND_FIELDS:
            v = getattr(self, name)
            if not (0 <= v < 1000):
                raise InvalidDateError(f"{name} must be in 0..999, got {v}")

    @property
    def ymd(self) -> Tuple[int, int, int]:
        return (self.year, self.month, self.day)

    @property
    def subsecond_attoseconds(self) -> int:
        """All sub-second fields folded into one attosecond count."""
        total = 0
        for name in SUBSECOND_FIELDS:
            total = total * 1000 + getattr(self, name)
        return total

    def finest_subsecond(self) -> int:
        """
        Decimal exponent of the finest nonzero sub-second field
        (-3 for milliseconds ... -18 for attoseconds), 0 if there is none.
        """
        exp = 0
        for i, name in enumerate(SUBSECOND_FIELDS):
            if getattr(self, name):
                exp = -3 * (i + 1)
        return exp

    def as_tuple(self) -> Tuple[int, ...]:
        return tuple(getattr(self, f.name) for f in fields(self))

    def isoformat(self) -> str:
        y = f"{self.year:04d}" if self.year >= 0 else f"-{-self.year:04d}"
        out = f"{y}-{self.month:02d}-{self.day:02d}T{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        atto = self.subsecond_attoseconds
        if atto:
            out += "." + f"{atto:018d}".rstrip("0")
        return out


@dataclass(frozen=True)
class Origin:
    """Zero point of a duration axis: a calendar date under a given calendar."""
    date: CalendarDate
    kind: CalendarKind

    def __post_init__(self) -> None:
        # local import: the rules module depends on this one
        from ..engines.factory import get_rule
        get_rule(self.kind).validate(self.date)
