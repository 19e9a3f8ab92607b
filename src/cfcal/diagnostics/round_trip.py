#!/usr/bin/env python3
"""
Randomized round-trip checks:
  fields -> Instant -> fields        (every calendar)
  raw -> decode -> encode -> raw     (every calendar, several units)
"""
from __future__ import annotations

import argparse
import random
from typing import List

import cfcal
from cfcal.core.types import CalendarDate


def parse_calendars(s: str) -> List[str]:
    # "standard,julian" -> ["standard", "julian"]
    return [x.strip() for x in s.split(",") if x.strip()]


def random_date(rng: random.Random, calendar: str, y0: int, y1: int) -> CalendarDate:
    y = rng.randint(y0, y1)
    m = rng.randint(1, 12)
    n = cfcal.get_calendar(calendar)
    last = cfcal.days_in_month(n.kind, y, m)
    if n.kind is cfcal.CalendarKind.STANDARD and (y, m) == (1582, 10):
        d = rng.choice([*range(1, 5), *range(15, 32)])
    else:
        d = rng.randint(1, last)
    return CalendarDate(
        y, m, d,
        rng.randint(0, 23), rng.randint(0, 59), rng.randint(0, 59),
        rng.randint(0, 999), rng.randint(0, 999),
    )


def fields_round_trip(calendar: str, N: int, y0: int, y1: int, seed: int, *, max_failures: int) -> int:
    rng = random.Random(seed)
    failures = 0
    for _ in range(N):
        d0 = random_date(rng, calendar, y0, y1)
        x = cfcal.Instant.from_date(calendar, d0, origin=(1850, 1, 1))
        d1 = x.to_fields()
        if d1 != d0:
            failures += 1
            print("\nFAIL (fields)")
            print("calendar:", calendar)
            print("d0:", d0)
            print("instant:", repr(x))
            print("d1:", d1)
            if failures >= max_failures:
                return failures
    return failures


def codec_round_trip(calendar: str, N: int, seed: int, *, max_failures: int) -> int:
    rng = random.Random(seed)
    failures = 0
    for units in ("days since 1850-01-01", "hours since 2000-01-01 12:00:00",
                  "seconds since 1970-01-01", "microseconds since 1582-10-04"):
        raw = [rng.randint(-10 ** 9, 10 ** 9) for _ in range(N)]
        back = cfcal.encode(cfcal.decode(raw, units, calendar), units, calendar)
        if back != raw:
            failures += 1
            bad = next(i for i, (a, b) in enumerate(zip(raw, back)) if a != b)
            print("\nFAIL (codec)")
            print("calendar:", calendar, "units:", units)
            print("raw:", raw[bad], "back:", back[bad])
            if failures >= max_failures:
                return failures
    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests over all calendars.")
    p.add_argument("--calendars", type=str, default="standard,proleptic_gregorian,julian,noleap,all_leap,360_day",
                   help="Comma-separated calendar list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--start-year", type=int, default=-4000)
    p.add_argument("--end-year", type=int, default=4000)
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    total_fail = 0
    for cal in parse_calendars(args.calendars):
        print(f"Testing {cal} ...")
        total_fail += fields_round_trip(cal, args.N, args.start_year, args.end_year, args.seed,
                                        max_failures=args.max_failures)
        total_fail += codec_round_trip(cal, args.N, args.seed, max_failures=args.max_failures)

    if total_fail == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {total_fail}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
