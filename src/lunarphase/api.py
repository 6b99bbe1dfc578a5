from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from .core.time import (
    datetime_from_moment,
    moment_from_date,
    moment_from_datetime,
)
from .core.types import Bound, Direction, Phase, PhaseEvent, PrincipalPhase, as_bound
from .events import DailyPhaseEventIter, PhaseEventIter
from .reference import phase as _phase

DatetimeBound = Union[datetime, Bound[datetime], None]
DateBound = Union[date, Bound[date], None]


def lunar_phase(t: datetime) -> float:
    """
    Lunar phase angle at instant `t` (timezone-aware), in degrees [0,360).

    New moon is 0, first quarter 90, full moon 180, last quarter 270.
    """
    return _phase.lunar_phase(moment_from_datetime(t))


def daily_lunar_phase(d: date) -> Phase:
    """
    Phase for UTC calendar day `d`: the principal phase that occurs during the
    day, or the intermediate phase the day falls in.
    """
    t = moment_from_date(d)
    return Phase.from_range(_phase.lunar_phase(t), _phase.lunar_phase(t + 1.0))


def lunar_phase_events(start: DatetimeBound = None, end: DatetimeBound = None) -> PhaseEventIter:
    """
    Principal phases (and their instants) between `start` and `end`.

    Runs backward in time when start > end. Bare datetimes follow the usual
    half-open convention (start included, end excluded); pass a `Bound` for
    anything else, or None for the representable extreme.
    """
    return PhaseEventIter(
        as_bound(start, excluded_by_default=False),
        as_bound(end, excluded_by_default=True),
    )


def daily_lunar_phase_events(start: DateBound = None, end: DateBound = None) -> DailyPhaseEventIter:
    """
    Principal phases between two UTC days, reporting the day of each event.

    Both days are covered in full: the start day from its first instant and
    the end day up to its last, so events on a bare end day are reported too.
    Runs backward when start > end.
    """
    return DailyPhaseEventIter(
        as_bound(start, excluded_by_default=False),
        as_bound(end, excluded_by_default=True),
    )


def next_phase_event(t: datetime, direction: Direction = Direction.FORWARD) -> Optional[PhaseEvent]:
    """
    First principal phase at or after `t` (at or before it for REVERSE).

    None when that instant falls outside the datetime range.
    """
    m = moment_from_datetime(t)
    phase = PrincipalPhase.upcoming(_phase.lunar_phase(m), direction)
    when = datetime_from_moment(_phase.lunar_phase_search(phase.angle, m, direction))
    if when is None:
        return None
    return PhaseEvent(phase, when)


def new_moon_at_or_after(t: datetime) -> Optional[datetime]:
    """Instant of the first new moon at or after `t`; None past the datetime range."""
    return datetime_from_moment(_phase.new_moon_at_or_after(moment_from_datetime(t)))


def new_moon_before(t: datetime) -> Optional[datetime]:
    """Instant of the last new moon before `t`; None before the datetime range."""
    return datetime_from_moment(_phase.new_moon_before(moment_from_datetime(t)))
