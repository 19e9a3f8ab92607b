from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import sys


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def _parse_step(s: str):
    """'1 day', '10 seconds', '-6 hours' -> Duration."""
    from cfcal.core.duration import Duration
    from cfcal.core.errors import MalformedSpecError
    parts = s.split()
    try:
        count = int(parts[0]) if len(parts) == 2 else None
    except ValueError:
        count = None
    if count is None:
        raise MalformedSpecError(f"step must look like '<integer> <unit>', got {s!r}")
    return Duration.of(count, parts[1])


def cmd_decode(argv: list[str]) -> int:
    import cfcal

    p = argparse.ArgumentParser(prog="cfcal decode", description="Raw axis values -> calendar dates")
    p.add_argument("units", help="'<unit> since <origin>'")
    p.add_argument("values", nargs="+", help="raw numbers (integers or exact decimals)")
    p.add_argument("--calendar", default="standard")
    args = p.parse_args(argv)

    from decimal import Decimal
    raw = [int(v) if v.lstrip("+-").isdigit() else Decimal(v) for v in args.values]
    for x in cfcal.decode(raw, args.units, args.calendar):
        print(x.isoformat())
    return 0


def cmd_encode(argv: list[str]) -> int:
    import cfcal
    from cfcal.engines.codec import parse_date

    p = argparse.ArgumentParser(prog="cfcal encode", description="Calendar dates -> raw axis values")
    p.add_argument("units", help="'<unit> since <origin>'")
    p.add_argument("dates", nargs="+", help="YYYY-MM-DD[THH:MM:SS[.fff]]")
    p.add_argument("--calendar", default="standard")
    args = p.parse_args(argv)

    xs = [cfcal.Instant.from_date(args.calendar, parse_date(d)) for d in args.dates]
    for v in cfcal.encode(xs, args.units, args.calendar):
        print(v)
    return 0


def cmd_range(argv: list[str]) -> int:
    import cfcal
    from cfcal.engines.codec import parse_date

    p = argparse.ArgumentParser(prog="cfcal range", description="Evenly stepped dates from start to stop (inclusive)")
    p.add_argument("start", help="YYYY-MM-DD[THH:MM:SS]")
    p.add_argument("stop", help="YYYY-MM-DD[THH:MM:SS]")
    p.add_argument("step", help="'<integer> <unit>', e.g. '6 hours'")
    p.add_argument("--calendar", default="standard")
    p.add_argument("--count", action="store_true", help="only print the number of elements")
    args = p.parse_args(argv)

    start = cfcal.Instant.from_date(args.calendar, parse_date(args.start))
    stop = cfcal.Instant.from_date(args.calendar, parse_date(args.stop))
    r = cfcal.make_range(start, _parse_step(args.step), stop)
    if args.count:
        print(len(r))
        return 0
    for x in r:
        print(x.isoformat())
    return 0


def cmd_info(argv: list[str]) -> int:
    import cfcal

    p = argparse.ArgumentParser(prog="cfcal info", description="Describe a calendar, or list calendar names")
    p.add_argument("calendar", nargs="?")
    args = p.parse_args(argv)

    if args.calendar is None:
        for name in cfcal.list_calendars():
            print(name)
        return 0
    print(json.dumps(cfcal.calendar_info(args.calendar), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    p = argparse.ArgumentParser(prog="cfcal")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("decode", help="Raw axis values -> calendar dates.")
    sub.add_parser("encode", help="Calendar dates -> raw axis values.")
    sub.add_parser("range", help="Evenly stepped dates between two bounds.")
    sub.add_parser("info", help="Calendar names and rules.")

    d = sub.add_parser("diag", help="Diagnostics tools")
    d.add_argument("tool", choices=["round-trip"], help="Which diagnostic to run")

    args, rest = p.parse_known_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")

    from cfcal.core.errors import CfcalError

    try:
        if args.cmd == "decode":
            return cmd_decode(rest)
        if args.cmd == "encode":
            return cmd_encode(rest)
        if args.cmd == "range":
            return cmd_range(rest)
        if args.cmd == "info":
            return cmd_info(rest)
        if args.cmd == "diag":
            tool_map = {
                "round-trip": "cfcal.diagnostics.round_trip",
            }
            return _run_module_main(tool_map[args.tool], rest)
    except (CfcalError, KeyError) as e:
        print(f"cfcal: error: {e}", file=sys.stderr)
        return 2

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
