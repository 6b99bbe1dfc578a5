"""
Iterators over principal-phase events.

`PhaseEventIter` walks successive principal phases between two UTC instants,
forward when start <= end and backward otherwise. `DailyPhaseEventIter`
does the same over calendar days and reports the UTC date of each event.

Both are single-owner iterators and are fused: after the first
StopIteration every further next() raises StopIteration again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Union

from .core.time import (
    MAX_TIME,
    MIN_TIME,
    as_utc,
    datetime_from_moment,
    first_instant,
    last_instant,
    moment_from_datetime,
    shift_days,
)
from .core.types import Bound, DailyPhaseEvent, Direction, PhaseEvent, PrincipalPhase
from .reference.phase import lunar_phase, lunar_phase_search

logger = logging.getLogger(__name__)

# an excluded bound this close (degrees) to a quarter is moved one day into the range
BOUNDARY_EPS_DEG = 1e-5


def _near_quarter(dt: datetime) -> bool:
    x = lunar_phase(moment_from_datetime(dt)) % 90.0
    return x < BOUNDARY_EPS_DEG or x > 90.0 - BOUNDARY_EPS_DEG


# ============================================================
# Cursor states
# ============================================================

@dataclass(frozen=True)
class _Active:
    start: datetime  # where the next search begins
    end: datetime    # inclusive limit for reported events


@dataclass(frozen=True)
class _Exhausted:
    pass


_EXHAUSTED = _Exhausted()
_State = Union[_Active, _Exhausted]


class PhaseEventIter(Iterator[PhaseEvent]):
    """
    Successive principal phases between `start` and `end`.

    Bounds are `Bound`s of UTC-aware datetimes. Unbounded ends default to the
    representable extremes, chosen so that the default range runs forward.
    """

    def __init__(self, start: Bound[datetime], end: Bound[datetime]):
        start_dt, start_excl = start.resolve(MIN_TIME)
        end_dt, end_excl = end.resolve(MAX_TIME)
        start_dt, end_dt = as_utc(start_dt), as_utc(end_dt)

        self.direction = Direction.between(start_dt, end_dt)
        step = self.direction.step

        if start_excl and _near_quarter(start_dt):
            logger.debug("excluded start %s sits on a quarter; moving it one day", start_dt)
            start_dt = shift_days(start_dt, step)
        if end_excl and _near_quarter(end_dt):
            logger.debug("excluded end %s sits on a quarter; moving it one day", end_dt)
            end_dt = shift_days(end_dt, self.direction.reversed().step)

        self._state: _State = _Active(start_dt, end_dt)
        logger.debug("phase iterator %s .. %s (%s)", start_dt, end_dt, self.direction.name)

    @property
    def exhausted(self) -> bool:
        return isinstance(self._state, _Exhausted)

    def __iter__(self) -> "PhaseEventIter":
        return self

    def __next__(self) -> PhaseEvent:
        state = self._state
        if isinstance(state, _Exhausted):
            raise StopIteration

        t = moment_from_datetime(state.start)
        phase = PrincipalPhase.upcoming(lunar_phase(t), self.direction)
        found = datetime_from_moment(lunar_phase_search(phase.angle, t, self.direction))

        if found is not None and self._within(found, state.end):
            # resume one day past the event; leaving the datetime range ends the walk
            try:
                self._state = _Active(found + timedelta(days=self.direction.step), state.end)
            except OverflowError:
                self._state = _EXHAUSTED
            return PhaseEvent(phase, found)

        logger.debug("phase iterator exhausted at %s", state.start)
        self._state = _EXHAUSTED
        raise StopIteration

    def _within(self, when: datetime, end: datetime) -> bool:
        if self.direction is Direction.FORWARD:
            return when <= end
        return when >= end

    def __repr__(self) -> str:
        return f"PhaseEventIter(state={self._state!r}, direction={self.direction.name})"


# ============================================================
# Day granularity
# ============================================================

class DailyPhaseEventIter(Iterator[DailyPhaseEvent]):
    """
    Principal phases between two calendar days (UTC), reported by day.

    The start day is anchored at its first instant and the end day at its
    last (mirrored when running backward), so both days are covered in full.
    Exclusion flags are passed through to the instant-level iterator.
    """

    def __init__(self, start: Bound[date], end: Bound[date]):
        start_d, start_excl = start.resolve(date.min)
        end_d, end_excl = end.resolve(date.max)

        if Direction.between(start_d, end_d) is Direction.FORWARD:
            lo, hi = first_instant(start_d), last_instant(end_d)
        else:
            lo, hi = last_instant(start_d), first_instant(end_d)
        self._inner = PhaseEventIter(Bound(lo, start_excl), Bound(hi, end_excl))

    @property
    def exhausted(self) -> bool:
        return self._inner.exhausted

    def __iter__(self) -> "DailyPhaseEventIter":
        return self

    def __next__(self) -> DailyPhaseEvent:
        event = next(self._inner)
        return DailyPhaseEvent(event.phase, event.when.date())

    def __repr__(self) -> str:
        return f"DailyPhaseEventIter(inner={self._inner!r})"
