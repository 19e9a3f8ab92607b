"""
cfcal.engines.convert
---------------------
Moving instants between calendars, representations and host date types.

Crossing calendars keeps the field values (year, month, day, time of day), not
the physical instant: 1582-10-04 Julian becomes 1582-10-04 proleptic Gregorian.
Host types (datetime.datetime, datetime.date, numpy.datetime64) have a fixed
resolution; converting a value they cannot hold exactly raises
PrecisionLossError unless an explicit rounding mode is requested.
"""

from __future__ import annotations

import datetime as _dt
import logging
from typing import Any, Optional, Union

from ..core.duration import Duration, unit_resolution
from ..core.errors import DurationOverflowError, InvalidDateError, PrecisionLossError
from ..core.time import SECONDS_PER_DAY, gregorian_to_jdn, hms_to_seconds, jdn_to_gregorian
from ..core.types import CalendarDate, CalendarKind, Origin
from . import rounding
from .factory import get_rule, resolve_kind
from .instant import CalendarLike, Instant, OriginLike, UnitLike, resolve_origin, resolve_unit
from .specs import DEFAULT_ORIGIN

logger = logging.getLogger(__name__)

JDN_UNIX_EPOCH = 2440588  # 1970-01-01 (Gregorian)

_ROUNDING = {"floor": rounding.floor, "ceil": rounding.ceil, "round": rounding.round}
_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def _is_datetime64(target: Any) -> bool:
    try:
        import numpy as np
    except ImportError:
        return False
    return target is np.datetime64


def _apply_rounding(instant: Instant, unit: Duration, mode: Optional[str]) -> Instant:
    if mode is None:
        return instant
    if mode not in _ROUNDING:
        raise ValueError(f"rounding must be one of {sorted(_ROUNDING)}, got {mode!r}")
    return _ROUNDING[mode](instant, unit)


# ============================================================
# Calendar -> calendar
# ============================================================

def to_calendar(instant: Instant, calendar: CalendarLike) -> Instant:
    """
    Same fields under another calendar, at the same resolution. The source
    origin is reused when it exists in the target calendar, else DEFAULT_ORIGIN.
    """
    kind = resolve_kind(calendar)
    if kind is instant.kind:
        return instant
    rule = get_rule(kind)
    org = instant.origin.date
    if not rule.is_valid(*org.ymd):
        org = DEFAULT_ORIGIN
    logger.debug("converting %s instant to %s (origin %s)", instant.kind, kind, org.isoformat())
    return Instant.from_date(kind, instant.to_fields(), unit=instant.resolution, origin=org)


# ============================================================
# Host types
# ============================================================

def _on_host_grid(instant: Instant) -> Instant:
    """The same instant counted from midnight of its origin date."""
    org = Origin(CalendarDate(*instant.origin.date.ymd), instant.kind)
    if org == instant.origin:
        return instant
    return Instant(org, instant.difference(Instant(org, Duration.zero(instant.resolution))))


def _host_fields(instant: Instant, unit: str, rounding_mode: Optional[str]) -> CalendarDate:
    # host grids are anchored at midnight, not at the instant's origin
    if rounding_mode is not None:
        instant = _on_host_grid(instant)
    x = _apply_rounding(instant, Duration.of(1, unit), rounding_mode)
    f = x.to_fields()
    limit = unit_resolution(unit)[1] if unit in ("milliseconds", "microseconds", "nanoseconds") else 0
    if f.finest_subsecond() < limit:
        raise PrecisionLossError(
            f"{f.isoformat()} is not a whole number of {unit}; round it first or pass rounding="
        )
    if unit == "days" and (f.hour, f.minute, f.second) != (0, 0, 0):
        raise PrecisionLossError(f"{f.isoformat()} is not midnight; round it first or pass rounding=")
    if not get_rule(CalendarKind.PROLEPTIC_GREGORIAN).is_valid(*f.ymd):
        raise InvalidDateError(f"{f.isoformat()} does not exist in the proleptic Gregorian calendar")
    return f


def to_datetime(instant: Instant, *, rounding: Optional[str] = None) -> _dt.datetime:
    f = _host_fields(instant, "microseconds", rounding)
    if not (_dt.MINYEAR <= f.year <= _dt.MAXYEAR):
        raise InvalidDateError(f"year {f.year} is outside the datetime range")
    return _dt.datetime(f.year, f.month, f.day, f.hour, f.minute, f.second, f.millisecond * 1000 + f.microsecond)


def to_date(instant: Instant, *, rounding: Optional[str] = None) -> _dt.date:
    f = _host_fields(instant, "days", rounding)
    if not (_dt.MINYEAR <= f.year <= _dt.MAXYEAR):
        raise InvalidDateError(f"year {f.year} is outside the date range")
    return _dt.date(f.year, f.month, f.day)


def to_datetime64(instant: Instant, *, rounding: Optional[str] = None):
    """numpy.datetime64 with nanosecond resolution."""
    from .codec import _need_numpy
    np = _need_numpy()
    f = _host_fields(instant, "nanoseconds", rounding)
    secs = (gregorian_to_jdn(*f.ymd) - JDN_UNIX_EPOCH) * SECONDS_PER_DAY + hms_to_seconds(f.hour, f.minute, f.second)
    ns = secs * 10 ** 9 + (f.millisecond * 1000 + f.microsecond) * 1000 + f.nanosecond
    if not (_INT64_MIN < ns <= _INT64_MAX):
        raise DurationOverflowError(f"{f.isoformat()} is outside the datetime64[ns] range")
    return np.datetime64(ns, "ns")


def convert(target: Any, instant: Instant, *, rounding: Optional[str] = None):
    """
    target: a CalendarKind or calendar name, datetime.datetime, datetime.date
    or numpy.datetime64. rounding ('floor', 'ceil', 'round') only applies to
    host targets and rounds to the host resolution first.
    """
    if target is _dt.datetime:
        return to_datetime(instant, rounding=rounding)
    if target is _dt.date:
        return to_date(instant, rounding=rounding)
    if _is_datetime64(target):
        return to_datetime64(instant, rounding=rounding)
    return to_calendar(instant, target)


def from_datetime(
    value: Union[_dt.date, Any],
    calendar: CalendarLike = CalendarKind.STANDARD,
    *,
    unit: Optional[UnitLike] = None,
    origin: OriginLike = None,
) -> Instant:
    """Instant with the fields of a naive datetime/date or a numpy.datetime64."""
    if isinstance(value, _dt.datetime):
        if value.tzinfo is not None:
            raise InvalidDateError("timezone-aware datetimes are not supported")
        ms, us = divmod(value.microsecond, 1000)
        date = CalendarDate(value.year, value.month, value.day, value.hour, value.minute, value.second, ms, us)
    elif isinstance(value, _dt.date):
        date = CalendarDate(value.year, value.month, value.day)
    else:
        from .codec import _need_numpy
        np = _need_numpy()
        if not isinstance(value, np.datetime64):
            raise TypeError(f"expected datetime, date or numpy.datetime64, got {type(value).__name__}")
        if np.isnat(value):
            raise InvalidDateError("NaT has no calendar fields")
        ns = int(value.astype("datetime64[ns]").astype(np.int64))
        days, rem = divmod(ns, SECONDS_PER_DAY * 10 ** 9)
        secs, sub = divmod(rem, 10 ** 9)
        y, m, d = jdn_to_gregorian(JDN_UNIX_EPOCH + days)
        hh, mm = divmod(secs, 3600)
        mm, ss = divmod(mm, 60)
        ms, rest = divmod(sub, 10 ** 6)
        us, ns_ = divmod(rest, 1000)
        date = CalendarDate(y, m, d, hh, mm, ss, ms, us, ns_)
    return Instant.from_date(calendar, date, unit=unit, origin=origin)


# ============================================================
# Same instant, new representation
# ============================================================

def _is_unit(target: Any) -> bool:
    if isinstance(target, str):
        return True
    return isinstance(target, tuple) and len(target) == 2


def reinterpret(
    target: Union[Instant, UnitLike, OriginLike],
    instant: Optional[Instant] = None,
    *,
    unit: Optional[UnitLike] = None,
    origin: OriginLike = None,
) -> Instant:
    """
    The same physical instant with another unit and/or origin. Exact or
    InexactConversionError.

    reinterpret("days", x) and reinterpret((1970, 1, 1), x) take the new unit
    or origin first; a 2-tuple is a (factor, exponent) unit, longer tuples,
    CalendarDate and Origin are origins. reinterpret(x, unit=..., origin=...)
    changes both at once.
    """
    if isinstance(target, Instant):
        if instant is not None:
            raise TypeError("reinterpret() takes one instant")
        instant = target
    elif instant is None:
        raise TypeError("reinterpret() needs the instant to re-express")
    elif unit is not None or origin is not None:
        raise TypeError("pass the new unit or origin either first or by keyword, not both")
    elif _is_unit(target):
        unit = target
    else:
        origin = target
    org = resolve_origin(instant.kind, origin) if origin is not None else instant.origin
    res = resolve_unit(unit) if unit is not None else instant.resolution
    zero = Instant(org, Duration.zero(res))
    return Instant(org, instant.difference(zero).rescale(*res))
