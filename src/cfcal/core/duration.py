"""
cfcal.core.duration
-------------------
Exact scaled-integer durations: ``mantissa * factor * 10**exponent`` seconds.

Two durations are commensurable when (factor, exponent) match. Nothing is
normalised implicitly: combining incommensurable values goes through an
explicit rescale that fails unless it is an exact integer operation, and every
intermediate mantissa is range-checked against MANTISSA_BITS.
"""

from __future__ import annotations

import math
import numbers
import operator
from dataclasses import dataclass
from fractions import Fraction
from typing import Dict, Tuple

from .errors import DurationOverflowError, InexactConversionError, MalformedSpecError

MANTISSA_BITS = 128
MANTISSA_MAX = 2 ** (MANTISSA_BITS - 1) - 1
MANTISSA_MIN = -(2 ** (MANTISSA_BITS - 1))

Resolution = Tuple[int, int]  # (factor, exponent)

UNITS: Dict[str, Resolution] = {
    "days": (86400, 0),
    "hours": (3600, 0),
    "minutes": (60, 0),
    "seconds": (1, 0),
    "milliseconds": (1, -3),
    "microseconds": (1, -6),
    "nanoseconds": (1, -9),
    "picoseconds": (1, -12),
    "femtoseconds": (1, -15),
    "attoseconds": (1, -18),
}

# Finest first; used to pick the coarsest exact representation of a value
SUBSECOND_UNITS = ("milliseconds", "microseconds", "nanoseconds", "picoseconds", "femtoseconds", "attoseconds")


def normalize_unit(name: str) -> str:
    """'Day', 'days' -> 'days'. Raises MalformedSpecError for anything else."""
    key = name.strip().lower()
    if key in UNITS:
        return key
    if key + "s" in UNITS:
        return key + "s"
    raise MalformedSpecError(f"Unknown time unit '{name}'. Available: {list(UNITS)}")


def unit_resolution(name: str) -> Resolution:
    return UNITS[normalize_unit(name)]


def unit_name(resolution: Resolution) -> str | None:
    for name, res in UNITS.items():
        if res == resolution:
            return name
    return None


def checked(value: int) -> int:
    if value > MANTISSA_MAX or value < MANTISSA_MIN:
        raise DurationOverflowError(
            f"Duration mantissa {value} exceeds the signed {MANTISSA_BITS}-bit range"
        )
    return value


def common_resolution(a: Resolution, b: Resolution) -> Resolution:
    """Finest resolution both a and b are integer multiples of."""
    return (math.gcd(a[0], b[0]), min(a[1], b[1]))


@dataclass(frozen=True, eq=False)
class Duration:
    mantissa: int
    factor: int = 1
    exponent: int = 0

    def __post_init__(self) -> None:
        for name in ("mantissa", "factor", "exponent"):
            v = getattr(self, name)
            if isinstance(v, bool):
                raise TypeError(f"{name} must be an int, got {v!r}")
            object.__setattr__(self, name, operator.index(v))
        if self.factor <= 0:
            raise ValueError(f"factor must be positive, got {self.factor}")
        checked(self.mantissa)

    # ---------------------------------------------------------
    # Construction
    # ---------------------------------------------------------

    @classmethod
    def of(cls, value: int, unit: str) -> "Duration":
        f, e = unit_resolution(unit)
        return cls(value, f, e)

    @classmethod
    def zero(cls, resolution: Resolution = (1, 0)) -> "Duration":
        return cls(0, *resolution)

    # ---------------------------------------------------------
    # Representation
    # ---------------------------------------------------------

    @property
    def resolution(self) -> Resolution:
        return (self.factor, self.exponent)

    @property
    def unit(self) -> str | None:
        """Enumerated unit name of this resolution, if it has one."""
        return unit_name(self.resolution)

    @property
    def seconds_exact(self) -> Fraction:
        return self.mantissa * self.factor * Fraction(10) ** self.exponent

    def commensurable(self, other: "Duration") -> bool:
        return self.resolution == other.resolution

    def rescale(self, factor: int, exponent: int) -> "Duration":
        """Same value at another resolution. Exact or InexactConversionError."""
        if (factor, exponent) == self.resolution:
            return self
        num = self.mantissa * self.factor
        den = factor
        if self.exponent >= exponent:
            num *= 10 ** (self.exponent - exponent)
        else:
            den *= 10 ** (exponent - self.exponent)
        q, r = divmod(num, den)
        if r:
            raise InexactConversionError(
                f"{self!r} is not a whole multiple of {factor}e{exponent} seconds"
            )
        return Duration(checked(q), factor, exponent)

    def rescale_to(self, unit: str) -> "Duration":
        return self.rescale(*unit_resolution(unit))

    def widen(self, resolution: Resolution) -> int:
        """
        Mantissa at a finer resolution that divides this one exactly
        (see common_resolution). Multiplication only; range-checked.
        """
        f, e = resolution
        if self.factor % f or self.exponent < e:
            raise InexactConversionError(f"{resolution} does not divide the resolution of {self!r}")
        return checked(self.mantissa * (self.factor // f) * 10 ** (self.exponent - e))

    @staticmethod
    def align(a: "Duration", b: "Duration") -> Tuple[int, int, Resolution]:
        """Both mantissas at the common resolution, and that resolution."""
        res = common_resolution(a.resolution, b.resolution)
        return a.widen(res), b.widen(res), res

    # ---------------------------------------------------------
    # Arithmetic (result keeps the left operand's resolution)
    # ---------------------------------------------------------

    def add(self, other: "Duration") -> "Duration":
        b = other.rescale(*self.resolution)
        return Duration(checked(self.mantissa + b.mantissa), self.factor, self.exponent)

    def sub(self, other: "Duration") -> "Duration":
        b = other.rescale(*self.resolution)
        return Duration(checked(self.mantissa - b.mantissa), self.factor, self.exponent)

    def add_exact(self, other: "Duration") -> "Duration":
        """Sum at the common (finer) resolution; never inexact."""
        ma, mb, res = Duration.align(self, other)
        return Duration(checked(ma + mb), *res)

    def sub_exact(self, other: "Duration") -> "Duration":
        ma, mb, res = Duration.align(self, other)
        return Duration(checked(ma - mb), *res)

    def negate(self) -> "Duration":
        return Duration(checked(-self.mantissa), self.factor, self.exponent)

    def scale_by_integer(self, k: int) -> "Duration":
        return Duration(checked(self.mantissa * operator.index(k)), self.factor, self.exponent)

    def compare(self, other: "Duration") -> int:
        ma, mb, _ = Duration.align(self, other)
        return (ma > mb) - (ma < mb)

    def divmod(self, other: "Duration") -> Tuple[int, "Duration"]:
        """Floor quotient and remainder (remainder at the common resolution)."""
        ma, mb, res = Duration.align(self, other)
        if mb == 0:
            raise ZeroDivisionError("division by a zero duration")
        q, r = divmod(ma, mb)
        return q, Duration(r, *res)

    # operators

    def __add__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.sub(other)

    def __neg__(self) -> "Duration":
        return self.negate()

    def __pos__(self) -> "Duration":
        return self

    def __abs__(self) -> "Duration":
        return self.negate() if self.mantissa < 0 else self

    def __mul__(self, k):
        if isinstance(k, bool) or not isinstance(k, numbers.Integral):
            return NotImplemented
        return self.scale_by_integer(k)

    __rmul__ = __mul__

    def __floordiv__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.divmod(other)[0]

    def __mod__(self, other):
        if not isinstance(other, Duration):
            return NotImplemented
        return self.divmod(other)[1]

    def __bool__(self) -> bool:
        return self.mantissa != 0

    def __eq__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self.compare(other) >= 0

    def __hash__(self) -> int:
        return hash(self.seconds_exact)

    def __repr__(self) -> str:
        u = self.unit
        if u is not None:
            return f"Duration({self.mantissa}, unit='{u}')"
        return f"Duration(mantissa={self.mantissa}, factor={self.factor}, exponent={self.exponent})"

    def __str__(self) -> str:
        u = self.unit
        if u is not None:
            return f"{self.mantissa} {u}"
        return f"{self.mantissa} x {self.factor}e{self.exponent} s"


def days(n: int) -> Duration:
    return Duration.of(n, "days")

def hours(n: int) -> Duration:
    return Duration.of(n, "hours")

def minutes(n: int) -> Duration:
    return Duration.of(n, "minutes")

def seconds(n: int) -> Duration:
    return Duration.of(n, "seconds")

def milliseconds(n: int) -> Duration:
    return Duration.of(n, "milliseconds")

def microseconds(n: int) -> Duration:
    return Duration.of(n, "microseconds")

def nanoseconds(n: int) -> Duration:
    return Duration.of(n, "nanoseconds")

def picoseconds(n: int) -> Duration:
    return Duration.of(n, "picoseconds")

def femtoseconds(n: int) -> Duration:
    return Duration.of(n, "femtoseconds")

def attoseconds(n: int) -> Duration:
    return Duration.of(n, "attoseconds")
