"""
cfcal.engines.codec
-------------------
Numeric time axes ("<unit> since <origin>") <-> Instants.

decode builds one Instant per raw value with the value as the mantissa at the
unit's resolution; encode is its exact inverse. Neither direction rounds:
values that cannot be represented exactly raise InexactConversionError, and
callers that want lossy behaviour must floor/ceil/round first.
"""

from __future__ import annotations

import logging
import math
import numbers
import re
from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from fractions import Fraction
from typing import Any, Iterable, Iterator, List, Optional, Union

from ..core.duration import UNITS, Duration, Resolution, normalize_unit
from ..core.errors import CalendarMismatchError, InexactConversionError, MalformedSpecError
from ..core.types import CalendarDate, CalendarKind, Origin
from .factory import resolve_kind
from .instant import CalendarLike, Instant

logger = logging.getLogger(__name__)

_SPEC_RE = re.compile(
    r"""
    ^\s*(?P<unit>[A-Za-z]+)\s+since\s+
    (?P<year>[+-]?\d+)-(?P<month>\d{1,2})-(?P<day>\d{1,2})
    (?:
        (?:\s+|T)
        (?P<hour>\d{1,2}):(?P<minute>\d{1,2})
        (?::(?P<second>\d{1,2})(?:\.(?P<frac>\d{1,18}))?)?
    )?
    (?:\s*(?:Z|UTC|[+-]0?0:?00))?
    \s*$
    """,
    re.VERBOSE | re.IGNORECASE,
)


def _need_numpy():
    try:
        import numpy as np
    except ImportError as e:
        raise RuntimeError('Array codec needs numpy. Install: pip install "cfcal[numpy]"') from e
    return np


@dataclass(frozen=True)
class UnitOriginSpec:
    unit: str
    origin: Origin

    @property
    def kind(self) -> CalendarKind:
        return self.origin.kind

    @property
    def resolution(self) -> Resolution:
        return UNITS[self.unit]

    def origin_instant(self) -> Instant:
        return Instant(self.origin, Duration.zero(self.resolution))

    def __str__(self) -> str:
        return f"{self.unit} since {self.origin.date.isoformat()}"


_DATE_RE = re.compile(
    r"^\s*([+-]?\d+)-(\d{1,2})-(\d{1,2})"
    r"(?:[T ](\d{1,2}):(\d{1,2})(?::(\d{1,2})(?:\.(\d{1,18}))?)?)?\s*$"
)


def _fraction_to_subfields(frac: str) -> List[int]:
    digits = frac.ljust(18, "0")
    return [int(digits[i:i + 3]) for i in range(0, 18, 3)]


def parse_date(text: str) -> CalendarDate:
    """'YYYY-MM-DD[THH:MM[:SS[.fraction]]]' -> CalendarDate (no calendar check)."""
    m = _DATE_RE.match(text)
    if m is None:
        raise MalformedSpecError(f"Cannot parse date '{text}': expected YYYY-MM-DD[THH:MM:SS[.fff]]")
    y, mo, d, h, mi, s, frac = m.groups()
    sub = _fraction_to_subfields(frac) if frac else [0] * 6
    return CalendarDate(int(y), int(mo), int(d), int(h or 0), int(mi or 0), int(s or 0), *sub)


def parse_unit_origin(spec: str, calendar: CalendarLike = CalendarKind.STANDARD) -> UnitOriginSpec:
    """
    Parse "<unit> since <YYYY-MM-DD>[ <HH:MM[:SS[.fraction]]>]".

    The origin is validated under calendar. A trailing zero UTC offset
    ("UTC", "Z", "+00:00") is tolerated; anything else raises MalformedSpecError.
    """
    kind = resolve_kind(calendar)
    m = _SPEC_RE.match(spec)
    if m is None:
        raise MalformedSpecError(f"Cannot parse time units '{spec}': expected '<unit> since <YYYY-MM-DD>[ <HH:MM:SS>]'")
    unit = normalize_unit(m.group("unit"))

    g = m.groupdict()
    sub = _fraction_to_subfields(g["frac"]) if g["frac"] else [0] * 6
    # grammatical but nonexistent origins (2001-02-29, 25:00) raise InvalidDateError
    date = CalendarDate(
        int(g["year"]), int(g["month"]), int(g["day"]),
        int(g["hour"] or 0), int(g["minute"] or 0), int(g["second"] or 0),
        *sub,
    )
    out = UnitOriginSpec(unit=unit, origin=Origin(date, kind))
    logger.debug("parsed %r as %s (%s calendar)", spec, out, kind)
    return out


def _resolve_spec(spec: Union[str, UnitOriginSpec], calendar: Optional[CalendarLike]) -> UnitOriginSpec:
    if isinstance(spec, UnitOriginSpec):
        if calendar is not None and resolve_kind(calendar) is not spec.kind:
            raise CalendarMismatchError(
                f"units '{spec}' were parsed for the {spec.kind} calendar, not {resolve_kind(calendar)}"
            )
        return spec
    return parse_unit_origin(spec, CalendarKind.STANDARD if calendar is None else calendar)


def value_to_duration(value: Any, resolution: Resolution) -> Duration:
    """
    Raw axis value -> Duration. Integers (and integral floats) become the
    mantissa directly; other exact values go to the coarsest finer unit that
    holds them without remainder.
    """
    if isinstance(value, bool):
        raise TypeError(f"Cannot decode boolean value {value!r}")
    if isinstance(value, numbers.Integral):
        return Duration(int(value), *resolution)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise InexactConversionError(f"Cannot decode non-finite value {value!r}")
        q = Fraction(value)
    elif isinstance(value, Fraction):
        q = value
    else:
        x = float(value)
        if not math.isfinite(x):
            raise InexactConversionError(f"Cannot decode non-finite value {value!r}")
        q = Fraction(x)
    if q.denominator == 1:
        return Duration(q.numerator, *resolution)

    factor, exponent = resolution
    seconds = q * factor * Fraction(10) ** exponent
    step = factor * Fraction(10) ** exponent
    for f, e in UNITS.values():
        unit_seconds = f * Fraction(10) ** e
        if unit_seconds >= step:
            continue
        n = seconds / unit_seconds
        if n.denominator == 1:
            return Duration(n.numerator, f, e)
    raise InexactConversionError(f"{value!r} cannot be represented exactly in any supported unit")


class DecodedTimes(Sequence):
    """
    Lazy, restartable view decoding raw values on access. Order and length
    mirror the input one to one.
    """

    def __init__(self, values: Iterable[Any], spec: UnitOriginSpec):
        if not isinstance(values, Sequence) and not hasattr(values, "__getitem__"):
            values = tuple(values)
        self._values = values
        self.spec = spec

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return DecodedTimes(self._values[i], self.spec)
        return Instant(self.spec.origin, value_to_duration(self._values[i], self.spec.resolution))

    def __iter__(self) -> Iterator[Instant]:
        origin, res = self.spec.origin, self.spec.resolution
        for v in self._values:
            yield Instant(origin, value_to_duration(v, res))

    def __repr__(self) -> str:
        return f"DecodedTimes(len={len(self)}, units='{self.spec}')"


def decode(values: Iterable[Any], spec: Union[str, UnitOriginSpec], calendar: Optional[CalendarLike] = None) -> DecodedTimes:
    return DecodedTimes(values, _resolve_spec(spec, calendar))


def encode_one(instant: Instant, spec: UnitOriginSpec) -> int:
    if instant.kind is not spec.kind:
        raise CalendarMismatchError(f"cannot encode a {instant.kind} instant with {spec.kind} units")
    d = instant.difference(spec.origin_instant())
    return d.rescale(*spec.resolution).mantissa


def encode(instants: Iterable[Instant], spec: Union[str, UnitOriginSpec], calendar: Optional[CalendarLike] = None) -> List[int]:
    s = _resolve_spec(spec, calendar)
    return [encode_one(x, s) for x in instants]


# ============================================================
# numpy arrays
# ============================================================

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


def decode_array(values: Any, spec: Union[str, UnitOriginSpec], calendar: Optional[CalendarLike] = None):
    """
    Object ndarray of Instants with the shape of values. Masked entries of a
    numpy masked array decode to None.
    """
    np = _need_numpy()
    s = _resolve_spec(spec, calendar)
    arr = np.asarray(values)
    mask = np.ma.getmaskarray(values) if isinstance(values, np.ma.MaskedArray) else None
    out = np.empty(arr.shape, dtype=object)
    for idx, v in np.ndenumerate(arr):
        if mask is not None and mask[idx]:
            out[idx] = None
            continue
        out[idx] = Instant(s.origin, value_to_duration(v.item() if hasattr(v, "item") else v, s.resolution))
    return out


def encode_array(instants: Any, spec: Union[str, UnitOriginSpec], calendar: Optional[CalendarLike] = None):
    """
    int64 ndarray of encoded values with the shape of instants (object dtype
    when a value does not fit in int64). None entries come back masked.
    """
    np = _need_numpy()
    s = _resolve_spec(spec, calendar)
    arr = np.asarray(instants, dtype=object)
    flat = [None if x is None else encode_one(x, s) for x in arr.ravel()]
    fits = all(x is None or _INT64_MIN <= x <= _INT64_MAX for x in flat)
    dtype = np.int64 if fits else object
    data = np.array([0 if x is None else x for x in flat], dtype=dtype).reshape(arr.shape)
    if any(x is None for x in flat):
        mask = np.array([x is None for x in flat], dtype=bool).reshape(arr.shape)
        return np.ma.masked_array(data, mask=mask)
    return data
