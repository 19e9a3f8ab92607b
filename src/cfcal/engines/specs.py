"""
cfcal.engines.specs
-------------------
Pure data describing the supported calendars, their CF-convention names and
the package-wide defaults.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

from ..core.types import CalendarDate, CalendarKind

YMD = Tuple[int, int, int]

# Unit and origin used when a caller does not pin them
DEFAULT_UNIT = "milliseconds"
DEFAULT_ORIGIN = CalendarDate(0, 1, 1)


@dataclass(frozen=True)
class CalendarSpec:
    kind: CalendarKind
    name: str
    aliases: Tuple[str, ...] = ()
    description: str = ""
    # (last day of the old rule, first day of the new rule)
    switchover: Optional[Tuple[YMD, YMD]] = None

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.name,) + self.aliases

    def info(self) -> Dict[str, Any]:
        out = asdict(self)
        out["kind"] = self.kind.value
        return out


STANDARD_SPEC = CalendarSpec(
    kind=CalendarKind.STANDARD,
    name="standard",
    aliases=("gregorian",),
    description="Julian calendar up to 1582-10-04, Gregorian from 1582-10-15",
    switchover=((1582, 10, 4), (1582, 10, 15)),
)

PROLEPTIC_GREGORIAN_SPEC = CalendarSpec(
    kind=CalendarKind.PROLEPTIC_GREGORIAN,
    name="proleptic_gregorian",
    description="Gregorian leap rules extended to all years",
)

JULIAN_SPEC = CalendarSpec(
    kind=CalendarKind.JULIAN,
    name="julian",
    description="Every fourth year is a leap year",
)

NOLEAP_SPEC = CalendarSpec(
    kind=CalendarKind.NOLEAP,
    name="noleap",
    aliases=("365_day",),
    description="Gregorian months, February always has 28 days",
)

ALL_LEAP_SPEC = CalendarSpec(
    kind=CalendarKind.ALL_LEAP,
    name="all_leap",
    aliases=("366_day",),
    description="Gregorian months, February always has 29 days",
)

DAY360_SPEC = CalendarSpec(
    kind=CalendarKind.DAY360,
    name="360_day",
    description="Twelve months of 30 days",
)

ALL_SPECS: Dict[str, CalendarSpec] = {
    s.name: s
    for s in (
        STANDARD_SPEC,
        PROLEPTIC_GREGORIAN_SPEC,
        JULIAN_SPEC,
        NOLEAP_SPEC,
        ALL_LEAP_SPEC,
        DAY360_SPEC,
    )
}

SPEC_BY_KIND: Dict[CalendarKind, CalendarSpec] = {s.kind: s for s in ALL_SPECS.values()}
