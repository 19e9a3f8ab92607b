from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from .core.duration import Duration
from .core.engine import CalendarRegistry
from .core.types import CalendarDate, CalendarKind
from .engines import rounding as _rounding
from .engines.codec import UnitOriginSpec, parse_unit_origin
from .engines.codec import decode as _decode, encode as _encode
from .engines.convert import convert as _convert, reinterpret as _reinterpret
from .engines.factory import get_rule, resolve_kind
from .engines.instant import CalendarLike, Instant, OriginLike, UnitLike
from .engines.ranges import InstantRange
from .engines.specs import CalendarSpec

_registry: Optional[CalendarRegistry] = None

def set_registry(reg: CalendarRegistry) -> None:
    global _registry
    _registry = reg

def _reg() -> CalendarRegistry:
    if _registry is None:
        raise RuntimeError("Calendar registry not initialized")
    return _registry

# ============================================================
# Calendars
# ============================================================

def list_calendars() -> List[str]:
    return _reg().list()

def get_calendar(name: str) -> CalendarSpec:
    return _reg().get(name)

def calendar_info(calendar: CalendarLike) -> Dict[str, Any]:
    if isinstance(calendar, CalendarKind):
        from .engines.specs import SPEC_BY_KIND
        return SPEC_BY_KIND[calendar].info()
    return _reg().get(calendar).info()

def register_calendar(name: str, calendar: CalendarLike, *, overwrite: bool = False) -> None:
    """Registers an extra name (e.g. a dataset's spelling) for an existing calendar."""
    from .engines.specs import SPEC_BY_KIND
    _reg().register(name, SPEC_BY_KIND[resolve_kind(calendar)], overwrite=overwrite)

def is_leap_year(calendar: CalendarLike, year: int) -> bool:
    return get_rule(resolve_kind(calendar)).is_leap(year)

def days_in_month(calendar: CalendarLike, year: int, month: int) -> int:
    return get_rule(resolve_kind(calendar)).days_in_month(year, month)

def days_in_year(calendar: CalendarLike, year: int) -> int:
    return get_rule(resolve_kind(calendar)).days_in_year(year)

def day_of_year(instant: Instant) -> int:
    return instant.day_of_year()

# ============================================================
# Instants
# ============================================================

def instant(
    calendar: CalendarLike,
    year: int,
    month: int,
    day: int,
    *time_fields: int,
    unit: Optional[UnitLike] = None,
    origin: OriginLike = None,
) -> Instant:
    return Instant.from_fields(calendar, year, month, day, *time_fields, unit=unit, origin=origin)

def to_fields(x: Instant) -> CalendarDate:
    return x.to_fields()

def difference(a: Instant, b: Instant) -> Duration:
    return a.difference(b)

def compare(a: Instant, b: Instant) -> int:
    return a.compare(b)

def add_months(x: Instant, n: int, *, clamp: bool = False) -> Instant:
    return x.add_months(n, clamp=clamp)

def add_years(x: Instant, n: int, *, clamp: bool = False) -> Instant:
    return x.add_years(n, clamp=clamp)

# ============================================================
# Codec
# ============================================================

def parse_units(spec: str, calendar: CalendarLike = CalendarKind.STANDARD) -> UnitOriginSpec:
    return parse_unit_origin(spec, calendar)

def decode(values, units: Union[str, UnitOriginSpec], calendar: Optional[CalendarLike] = None):
    return _decode(values, units, calendar)

def encode(instants, units: Union[str, UnitOriginSpec], calendar: Optional[CalendarLike] = None) -> List[int]:
    return _encode(instants, units, calendar)

# ============================================================
# Rounding, ranges, conversion
# ============================================================

def floor(x: Instant, unit: Duration) -> Instant:
    return _rounding.floor(x, unit)

def ceil(x: Instant, unit: Duration) -> Instant:
    return _rounding.ceil(x, unit)

def round(x: Instant, unit: Duration) -> Instant:
    return _rounding.round(x, unit)

def make_range(start: Instant, step: Duration, stop: Instant) -> InstantRange:
    return InstantRange(start, step, stop)

def length(r: InstantRange) -> int:
    return len(r)

def step(r: InstantRange) -> Duration:
    return r.step

def convert(target: Any, x: Instant, *, rounding: Optional[str] = None):
    return _convert(target, x, rounding=rounding)

def reinterpret(target: Any, x: Optional[Instant] = None, *,
                unit: Optional[UnitLike] = None, origin: OriginLike = None) -> Instant:
    return _reinterpret(target, x, unit=unit, origin=origin)
