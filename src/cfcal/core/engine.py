from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List

from ..engines.specs import CalendarSpec

logger = logging.getLogger(__name__)


@dataclass
class CalendarRegistry:
    """Calendar names (canonical and aliases, lower-case) -> CalendarSpec."""
    _calendars: Dict[str, CalendarSpec]

    def get(self, name: str) -> CalendarSpec:
        key = name.strip().lower()
        if key not in self._calendars:
            raise KeyError(f"Unknown calendar '{name}'. Available: {sorted(self._calendars)}")
        return self._calendars[key]

    def list(self) -> List[str]:
        return sorted(self._calendars.keys())

    def register(self, name: str, spec: CalendarSpec, *, overwrite: bool = False) -> None:
        key = name.strip().lower()
        if (not overwrite) and (key in self._calendars):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        logger.debug("registering calendar name %r -> %s", key, spec.kind)
        self._calendars[key] = spec
