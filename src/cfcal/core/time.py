from __future__ import annotations
from typing import Tuple

SECONDS_PER_DAY = 86400

# JDN of the first Gregorian day (1582-10-15) in the mixed calendar; the
# previous JDN is the last Julian day (1582-10-04).
JDN_GREGORIAN_START = 2299161


def gregorian_to_jdn(y: int, m: int, d: int) -> int:
    """Proleptic Gregorian date -> Julian Day Number (Fliegel-Van Flandern)."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return d + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045


def jdn_to_gregorian(jdn: int) -> Tuple[int, int, int]:
    """Inverse of gregorian_to_jdn. Floor division keeps it valid for any integer."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return year, month, day


def julian_to_jdn(y: int, m: int, d: int) -> int:
    """Proleptic Julian date -> Julian Day Number."""
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    return d + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - 32083


def jdn_to_julian(jdn: int) -> Tuple[int, int, int]:
    """Inverse of julian_to_jdn."""
    c = jdn + 32082
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = d - 4800 + (m // 10)
    return year, month, day


def hms_to_seconds(hour: int, minute: int, second: int) -> int:
    return (hour * 60 + minute) * 60 + second


def seconds_to_hms(s: int) -> Tuple[int, int, int]:
    """Seconds within a day (0..86399) -> (hour, minute, second)."""
    minutes, second = divmod(s, 60)
    hour, minute = divmod(minutes, 60)
    return hour, minute, second
