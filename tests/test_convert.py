# tests/test_convert.py

import datetime

import pytest

import cfcal
from cfcal import (
    CalendarKind,
    CalendarMismatchError,
    DateTime360Day,
    DateTimeJulian,
    DateTimeNoLeap,
    DateTimeProlepticGregorian,
    DateTimeStandard,
    InexactConversionError,
    InvalidDateError,
    PrecisionLossError,
    days,
)


def test_fields_survive_calendar_change():
    j = DateTimeJulian(1582, 10, 4, 6)
    g = cfcal.convert("proleptic_gregorian", j)
    assert g.kind is CalendarKind.PROLEPTIC_GREGORIAN
    assert g.to_fields() == j.to_fields()
    assert g.resolution == j.resolution
    assert g == DateTimeProlepticGregorian(1582, 10, 4, 6)

    n = cfcal.convert(CalendarKind.NOLEAP, DateTimeStandard(2001, 3, 1))
    assert n == DateTimeNoLeap(2001, 3, 1)

    same = DateTimeStandard(2000, 1, 1)
    assert cfcal.convert("gregorian", same) is same


def test_missing_dates_in_target():
    with pytest.raises(InvalidDateError):
        cfcal.convert("standard", DateTime360Day(2000, 2, 30))
    with pytest.raises(InvalidDateError):
        cfcal.convert("360_day", DateTimeNoLeap(2000, 1, 31))
    with pytest.raises(InvalidDateError):
        cfcal.convert("standard", DateTimeJulian(1582, 10, 10))
    assert cfcal.convert("360_day", DateTimeNoLeap(2000, 1, 15)) == DateTime360Day(2000, 1, 15)


def test_origin_fallback():
    # 2000-02-30 does not exist in the target, so the default origin is used
    x = DateTime360Day(2000, 3, 1, origin=(2000, 2, 30))
    y = cfcal.convert("noleap", x)
    assert y.origin.date.ymd == (0, 1, 1)
    assert y == DateTimeNoLeap(2000, 3, 1)

    z = cfcal.convert("noleap", DateTime360Day(2000, 3, 1, origin=(1990, 1, 1)))
    assert z.origin.date.ymd == (1990, 1, 1)


def test_to_datetime():
    x = DateTimeStandard(2000, 1, 2, 3, 4, 5, 6, 7)
    assert cfcal.convert(datetime.datetime, x) == datetime.datetime(2000, 1, 2, 3, 4, 5, 6007)
    assert cfcal.convert(datetime.date, DateTimeStandard(2000, 1, 2)) == datetime.date(2000, 1, 2)
    assert cfcal.convert(datetime.datetime, DateTimeNoLeap(2001, 3, 1)) == datetime.datetime(2001, 3, 1)


def test_precision_is_checked_on_values():
    fine = DateTimeStandard(2000, 1, 1, 0, 0, 0, 0, 0, 1, origin=(2000, 1, 1))
    with pytest.raises(PrecisionLossError):
        cfcal.convert(datetime.datetime, fine)
    assert cfcal.convert(datetime.datetime, fine, rounding="floor") == datetime.datetime(2000, 1, 1)
    assert cfcal.convert(datetime.datetime, fine, rounding="ceil") == datetime.datetime(2000, 1, 1, 0, 0, 0, 1)
    with pytest.raises(ValueError):
        cfcal.convert(datetime.datetime, fine, rounding="nearest")

    # nanosecond resolution but a whole number of microseconds
    whole = DateTimeStandard(2000, 1, 1, 0, 0, 0, 0, 0, 1, origin=(2000, 1, 1)) + cfcal.nanoseconds(999)
    assert cfcal.convert(datetime.datetime, whole) == datetime.datetime(2000, 1, 1, 0, 0, 0, 1)

    with pytest.raises(PrecisionLossError):
        cfcal.convert(datetime.date, DateTimeStandard(2000, 1, 2, 12))
    assert cfcal.convert(datetime.date, DateTimeStandard(2000, 1, 2, 12, origin=(2000, 1, 1)),
                         rounding="round") == datetime.date(2000, 1, 3)


def test_host_range_and_calendar():
    with pytest.raises(InvalidDateError):
        cfcal.convert(datetime.datetime, DateTime360Day(2000, 2, 30))
    with pytest.raises(InvalidDateError):
        cfcal.convert(datetime.datetime, DateTimeStandard(0, 1, 1))


def test_from_datetime():
    x = cfcal.from_datetime(datetime.datetime(2000, 1, 1, 12, 0, 0, 1500))
    assert x.kind is CalendarKind.STANDARD
    assert x.to_fields().millisecond == 1
    assert x.to_fields().microsecond == 500
    assert x.unit == "microseconds"

    d = cfcal.from_datetime(datetime.date(2000, 2, 29), "julian", unit="days", origin=(2000, 1, 1))
    assert d.offset == days(59)

    with pytest.raises(InvalidDateError):
        cfcal.from_datetime(datetime.datetime(2000, 1, 1, tzinfo=datetime.timezone.utc))
    with pytest.raises(InvalidDateError):
        cfcal.from_datetime(datetime.date(2000, 2, 29), "noleap")


def test_datetime64():
    np = pytest.importorskip("numpy")
    x = DateTimeStandard(2000, 1, 1, 0, 0, 0, 0, 0, 5)
    assert cfcal.convert(np.datetime64, x) == np.datetime64("2000-01-01T00:00:00.000000005")

    y = cfcal.from_datetime(np.datetime64("1969-12-31T23:59:59.5"))
    assert y.to_fields().ymd == (1969, 12, 31)
    assert y.to_fields().second == 59
    assert y.to_fields().millisecond == 500

    with pytest.raises(InvalidDateError):
        cfcal.from_datetime(np.datetime64("NaT"))
    with pytest.raises(cfcal.DurationOverflowError):
        cfcal.convert(np.datetime64, DateTimeStandard(3000, 1, 1))


def test_reinterpret():
    x = DateTimeStandard(2000, 1, 2, origin=(2000, 1, 1))
    y = cfcal.reinterpret(x, unit="days", origin=(1999, 12, 31))
    assert y == x
    assert y.offset.mantissa == 2
    assert y.unit == "days"

    z = cfcal.reinterpret(x, origin=(1970, 1, 1))
    assert z.resolution == x.resolution
    assert z == x

    with pytest.raises(InexactConversionError):
        cfcal.reinterpret(DateTimeStandard(2000, 1, 1, 12, origin=(2000, 1, 1)), unit="days")
    with pytest.raises(CalendarMismatchError):
        cfcal.reinterpret(x, origin=cfcal.Origin(cfcal.CalendarDate(2000, 1, 1), CalendarKind.JULIAN))


def test_host_rounding_uses_midnight_grid():
    # a noon origin does not shift the day boundaries of datetime.date
    x = DateTimeStandard(2000, 1, 2, 6, origin=(2000, 1, 1, 12))
    assert cfcal.convert(datetime.date, x, rounding="floor") == datetime.date(2000, 1, 2)
    assert cfcal.convert(datetime.date, x, rounding="ceil") == datetime.date(2000, 1, 3)
    assert cfcal.convert(datetime.date, x, rounding="round") == datetime.date(2000, 1, 2)

    # an origin with nanosecond fields still rounds onto whole microseconds
    origin = (2000, 1, 1, 0, 0, 0, 0, 0, 500)
    y = DateTimeStandard(2000, 1, 1, 0, 0, 0, 0, 3, 250, origin=origin)
    assert cfcal.convert(datetime.datetime, y, rounding="floor") == datetime.datetime(2000, 1, 1, 0, 0, 0, 3)
    assert cfcal.convert(datetime.datetime, y, rounding="ceil") == datetime.datetime(2000, 1, 1, 0, 0, 0, 4)
    with pytest.raises(PrecisionLossError):
        cfcal.convert(datetime.datetime, y)


def test_reinterpret_target_first():
    x = DateTimeStandard(2000, 1, 2, origin=(2000, 1, 1))
    y = cfcal.reinterpret("days", x)
    assert y == x
    assert y.unit == "days"
    assert y.offset.mantissa == 1

    z = cfcal.reinterpret((1970, 1, 1), x)
    assert z.origin.date.ymd == (1970, 1, 1)
    assert z == x
    assert cfcal.reinterpret(cfcal.CalendarDate(1999, 12, 31), x).offset == cfcal.days(2)
    assert cfcal.reinterpret((1, 0), x).unit == "seconds"

    with pytest.raises(TypeError):
        cfcal.reinterpret("days", x, origin=(1970, 1, 1))
    with pytest.raises(TypeError):
        cfcal.reinterpret("days")
