"""cfcal public API.

Calendar-exact instants for CF-style numeric time axes: six calendars,
exact scaled-integer durations, "<unit> since <origin>" encode/decode,
rounding, ranges and cross-calendar conversion.
"""

import logging

# Initialize registry on import
from . import api_init as _api_init  # noqa: F401

from .api import (
    list_calendars,
    get_calendar,
    calendar_info,
    register_calendar,
    is_leap_year,
    days_in_month,
    days_in_year,
    day_of_year,
    instant,
    to_fields,
    difference,
    compare,
    add_months,
    add_years,
    parse_units,
    decode,
    encode,
    floor,
    ceil,
    round,
    make_range,
    length,
    step,
    convert,
    reinterpret,
)
from .core.duration import (
    Duration,
    days,
    hours,
    minutes,
    seconds,
    milliseconds,
    microseconds,
    nanoseconds,
    picoseconds,
    femtoseconds,
    attoseconds,
)
from .core.errors import (
    CfcalError,
    InvalidDateError,
    MalformedSpecError,
    CalendarMismatchError,
    InexactConversionError,
    DurationOverflowError,
    InvalidStepError,
    OutOfRangeError,
    PrecisionLossError,
)
from .core.types import CalendarDate, CalendarKind, Origin
from .engines.codec import UnitOriginSpec, decode_array, encode_array
from .engines.convert import from_datetime
from .engines.instant import (
    Instant,
    DateTimeStandard,
    DateTimeJulian,
    DateTimeProlepticGregorian,
    DateTimeNoLeap,
    DateTimeAllLeap,
    DateTime360Day,
)
from .engines.ranges import InstantRange

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "list_calendars",
    "get_calendar",
    "calendar_info",
    "register_calendar",
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "day_of_year",
    "instant",
    "to_fields",
    "difference",
    "compare",
    "add_months",
    "add_years",
    "parse_units",
    "decode",
    "encode",
    "decode_array",
    "encode_array",
    "floor",
    "ceil",
    "round",
    "make_range",
    "length",
    "step",
    "convert",
    "reinterpret",
    "from_datetime",
    "Duration",
    "days",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
    "microseconds",
    "nanoseconds",
    "picoseconds",
    "femtoseconds",
    "attoseconds",
    "CfcalError",
    "InvalidDateError",
    "MalformedSpecError",
    "CalendarMismatchError",
    "InexactConversionError",
    "DurationOverflowError",
    "InvalidStepError",
    "OutOfRangeError",
    "PrecisionLossError",
    "CalendarDate",
    "CalendarKind",
    "Origin",
    "UnitOriginSpec",
    "Instant",
    "InstantRange",
    "DateTimeStandard",
    "DateTimeJulian",
    "DateTimeProlepticGregorian",
    "DateTimeNoLeap",
    "DateTimeAllLeap",
    "DateTime360Day",
]
