"""
cfcal.engines.factory
---------------------
Turns calendar kinds (or their specs) into live rule objects.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Union

from cfcal.core.types import CalendarKind
from cfcal.engines.interfaces import CalendarRuleProtocol
from cfcal.engines.rules import (
    AllLeapRule,
    Day360Rule,
    GregorianRule,
    JulianRule,
    MixedRule,
    NoLeapRule,
)


def make_rule(kind: CalendarKind) -> CalendarRuleProtocol:
    """Builds a fresh rule for the given kind."""
    if kind is CalendarKind.JULIAN:
        return JulianRule()
    if kind is CalendarKind.PROLEPTIC_GREGORIAN:
        return GregorianRule()
    if kind is CalendarKind.STANDARD:
        return MixedRule()
    if kind is CalendarKind.NOLEAP:
        return NoLeapRule()
    if kind is CalendarKind.ALL_LEAP:
        return AllLeapRule()
    if kind is CalendarKind.DAY360:
        return Day360Rule()
    raise TypeError(f"Unknown calendar kind: {kind!r}")


@lru_cache(maxsize=None)
def get_rule(kind: CalendarKind) -> CalendarRuleProtocol:
    """Shared rule instance for kind. Rules are stateless, so sharing is safe."""
    return make_rule(kind)


def resolve_kind(calendar: Union[CalendarKind, str]) -> CalendarKind:
    """CalendarKind or any registered calendar name (case-insensitive)."""
    if isinstance(calendar, CalendarKind):
        return calendar
    from cfcal.api import get_calendar
    return get_calendar(calendar).kind
