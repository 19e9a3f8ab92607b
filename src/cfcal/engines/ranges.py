"""
cfcal.engines.ranges
--------------------
Finite arithmetic sequences of Instants. Nothing is materialised: the length
comes from exact duration division and element i is start + i * step.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Iterator

from ..core.duration import Duration
from ..core.errors import CalendarMismatchError, InvalidStepError, OutOfRangeError
from .instant import Instant


class InstantRange(Sequence):
    """start, start + step, ... up to and including stop when it is hit exactly."""

    def __init__(self, start: Instant, step: Duration, stop: Instant):
        if start.kind is not stop.kind:
            raise CalendarMismatchError(f"range bounds are in different calendars: {start.kind} and {stop.kind}")
        if not isinstance(step, Duration):
            raise TypeError(f"step must be a Duration, got {type(step).__name__}")
        if step.mantissa == 0:
            raise InvalidStepError("range step must be nonzero")
        # elements live at the start's resolution; fail now rather than at element 1
        step.rescale(*start.resolution)
        self.start = start
        self.stop = stop
        self._step = step
        q = stop.difference(start) // step
        self._len = q + 1 if q >= 0 else 0

    @property
    def step(self) -> Duration:
        return self._step

    @property
    def last(self) -> Instant:
        if self._len == 0:
            raise OutOfRangeError("empty range has no last element")
        return self[self._len - 1]

    def __len__(self) -> int:
        return self._len

    def _nth(self, i: int) -> Instant:
        return self.start + self._step * i

    def __getitem__(self, i):
        if isinstance(i, slice):
            idx = range(self._len)[i]
            if len(idx) == 0:
                # empty: stop one step before start
                return InstantRange(self.start, self._step, self.start - self._step)
            return InstantRange(self._nth(idx.start), self._step * idx.step, self._nth(idx[-1]))
        n = self._len
        if i < 0:
            i += n
        if not (0 <= i < n):
            raise OutOfRangeError(f"index {i} out of range for length {n}")
        return self._nth(i)

    def __iter__(self) -> Iterator[Instant]:
        x = self.start
        for _ in range(self._len):
            yield x
            x = x + self._step

    def __reversed__(self) -> Iterator[Instant]:
        for i in range(self._len - 1, -1, -1):
            yield self._nth(i)

    def __contains__(self, x) -> bool:
        if not isinstance(x, Instant) or x.kind is not self.start.kind or self._len == 0:
            return False
        q, r = x.difference(self.start).divmod(self._step)
        return r.mantissa == 0 and 0 <= q < self._len

    def __eq__(self, other) -> bool:
        if not isinstance(other, InstantRange):
            return NotImplemented
        if self._len != other._len or self.start.kind is not other.start.kind:
            return False
        if self._len == 0:
            return True
        return self.start == other.start and (self._len == 1 or self._step == other._step)

    def __hash__(self):
        return hash((self.start.kind, self._len))

    def __repr__(self) -> str:
        return f"InstantRange(start={self.start!r}, step={self._step!r}, length={self._len})"


def make_range(start: Instant, step: Duration, stop: Instant) -> InstantRange:
    return InstantRange(start, step, stop)
