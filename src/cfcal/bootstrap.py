from __future__ import annotations
from cfcal.core.engine import CalendarRegistry
from cfcal.engines.specs import ALL_SPECS

def build_registry() -> CalendarRegistry:
    calendars = {}
    for spec in ALL_SPECS.values():
        for name in spec.names:
            calendars[name] = spec
    return CalendarRegistry(calendars)
