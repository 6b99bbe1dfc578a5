from __future__ import annotations

import argparse
from datetime import date, datetime, timezone
import logging
import os
import sys
import re
import importlib
import inspect


_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

LOG_LEVEL_ENV = "LUNARPHASE_LOG_LEVEL"


def _parse_ymd(s: str) -> date:
    return date.fromisoformat(s)


def _parse_instant(s: str) -> datetime:
    """ISO date or datetime; naive values are taken as UTC."""
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _configure_logging(level: str | None) -> None:
    name = (level or os.environ.get(LOG_LEVEL_ENV, "") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


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


def cmd_day(argv: list[str]) -> int:
    import lunarphase

    p = argparse.ArgumentParser(prog="lunarphase day", description="Named lunar phase of a UTC calendar day")
    p.add_argument("date", help="YYYY-MM-DD")
    args = p.parse_args(argv)

    try:
        d = _parse_ymd(args.date)
    except ValueError as e:
        p.error(str(e))
    ph = lunarphase.daily_lunar_phase(d)
    print(f"{d.isoformat()}  {ph.emoji}  {ph.label}")
    return 0


def cmd_phase(argv: list[str]) -> int:
    import lunarphase
    from lunarphase.core.time import moment_from_datetime
    from lunarphase.reference import lunar, solar

    p = argparse.ArgumentParser(prog="lunarphase phase", description="Lunar phase angle and longitudes at an instant.")
    p.add_argument("instant", nargs="?", default=None, help="ISO datetime (UTC if no offset); default: now")
    args = p.parse_args(argv)

    t = _parse_instant(args.instant) if args.instant else datetime.now(timezone.utc)
    m = moment_from_datetime(t)
    angle = lunarphase.lunar_phase(t)
    ph = lunarphase.daily_lunar_phase(t.astimezone(timezone.utc).date())
    nxt = lunarphase.next_phase_event(t)

    print("Time Input:")
    print(f"  UTC    = {t.astimezone(timezone.utc).isoformat()}")
    print(f"  moment = {m:.6f} (R.D.)")
    print()
    print("Longitudes (degrees):")
    print(f"  Sun    = {solar.solar_longitude(m):.6f}")
    print(f"  Moon   = {lunar.lunar_longitude(m):.6f}")
    print(f"  Phase  = {angle:.6f}")
    print()
    print(f"Day phase : {ph.emoji} {ph.label}")
    if nxt is not None:
        print(f"Next      : {nxt.phase.emoji} {nxt.phase.label} at {nxt.when.isoformat()}")
    return 0


def cmd_events(argv: list[str]) -> int:
    import lunarphase
    from lunarphase import Bound

    p = argparse.ArgumentParser(
        prog="lunarphase events",
        description="List principal phases between START and END (reverse order if START > END).",
    )
    p.add_argument("start", help="ISO date/datetime (UTC if no offset)")
    p.add_argument("end", help="ISO date/datetime (UTC if no offset)")
    p.add_argument("--daily", action="store_true", help="Report days instead of instants (dates only)")
    p.add_argument("--inclusive", action="store_true", help="Include END (default: half-open range)")
    args = p.parse_args(argv)

    if args.daily:
        start, end = _parse_ymd(args.start), _parse_ymd(args.end)
        end_b = Bound.inclusive(end) if args.inclusive else Bound.exclusive(end)
        for ev in lunarphase.daily_lunar_phase_events(start, end_b):
            print(f"{ev.day.isoformat()}  {ev.phase.emoji}  {ev.phase.label}")
        return 0

    start, end = _parse_instant(args.start), _parse_instant(args.end)
    end_b = Bound.inclusive(end) if args.inclusive else Bound.exclusive(end)
    for ev in lunarphase.lunar_phase_events(start, end_b):
        print(f"{ev.when.isoformat(timespec='seconds')}  {ev.phase.emoji}  {ev.phase.label}")
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shorthand: `lunarphase YYYY-MM-DD`
    if argv and _DATE_RE.match(argv[0]):
        _configure_logging(None)
        return cmd_day(argv)

    p = argparse.ArgumentParser(prog="lunarphase", description="Lunar phase toolkit CLI.")
    p.add_argument("--log-level", default=None, help=f"Logging level (default: ${LOG_LEVEL_ENV} or WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("day", help="Named lunar phase of a UTC day")
    sub.add_parser("phase", help="Lunar phase angle at an instant")
    sub.add_parser("events", help="List principal phases in a range")

    # ephem diagnostics
    p_ephem = sub.add_parser("ephem", help="Ephemeris-based diagnostics")
    p_ephem.add_argument(
        "tool",
        choices=["validate-events"],
        help="Which ephemeris diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)
    _configure_logging(args.log_level)

    if args.cmd == "day":
        return cmd_day(rest)

    if args.cmd == "phase":
        return cmd_phase(rest)

    if args.cmd == "events":
        return cmd_events(rest)

    if args.cmd == "ephem":
        tool_map = {
            "validate-events": "lunarphase.diagnostics.validate_events",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
