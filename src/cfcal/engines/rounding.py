"""
cfcal.engines.rounding
----------------------
floor / ceil / round of an Instant to a multiple of a duration, counted from
the Instant's own origin.

With d the offset and u the unit (both at their common resolution):
  floor = origin + (d // u) * u          (toward -inf, also for d < 0)
  ceil  = floor, plus u if d is not a multiple of u
  round = ceil when the remainder is at least u/2, else floor
so ties always go up, for offsets before the origin as well.
"""

from __future__ import annotations

from typing import Tuple

from ..core.duration import Duration, Resolution
from ..core.errors import InvalidStepError
from .instant import Instant


def _split(instant: Instant, unit: Duration) -> Tuple[int, int, int, Resolution]:
    """(quotient, remainder, unit mantissa, resolution) of offset / unit."""
    if unit.mantissa <= 0:
        raise InvalidStepError(f"rounding unit must be positive, got {unit!r}")
    d, u, res = Duration.align(instant.offset, unit)
    q, r = divmod(d, u)
    return q, r, u, res


def _rebuild(instant: Instant, mantissa: int, res: Resolution) -> Instant:
    """Instant at the original resolution when the result allows it, else at res."""
    f, e = instant.resolution
    scale = (f // res[0]) * 10 ** (e - res[1])
    if mantissa % scale == 0:
        return Instant(instant.origin, Duration(mantissa // scale, f, e))
    return Instant(instant.origin, Duration(mantissa, *res))


def floor(instant: Instant, unit: Duration) -> Instant:
    q, _, u, res = _split(instant, unit)
    return _rebuild(instant, q * u, res)


def ceil(instant: Instant, unit: Duration) -> Instant:
    q, r, u, res = _split(instant, unit)
    if r:
        q += 1
    return _rebuild(instant, q * u, res)


def round(instant: Instant, unit: Duration) -> Instant:
    q, r, u, res = _split(instant, unit)
    if 2 * r >= u:
        q += 1
    return _rebuild(instant, q * u, res)
