"""lunarphase public API.

Lunar phase angles and principal-phase events (new moon, first quarter,
full moon, last quarter) after Reingold & Dershowitz, *Calendrical
Calculations*. Accurate to about two minutes near the present; accuracy
degrades far from it.

Keep this surface small: users should mostly interact with functions re-exported here.
"""

from .api import (
    lunar_phase,
    daily_lunar_phase,
    lunar_phase_events,
    daily_lunar_phase_events,
    next_phase_event,
    new_moon_at_or_after,
    new_moon_before,
)
from .core.errors import LunarPhaseError, InvariantViolation, EphemerisUnavailableError
from .core.types import Bound, Direction, Phase, PrincipalPhase, PhaseEvent, DailyPhaseEvent
from .events import PhaseEventIter, DailyPhaseEventIter

__all__ = [
    "lunar_phase",
    "daily_lunar_phase",
    "lunar_phase_events",
    "daily_lunar_phase_events",
    "next_phase_event",
    "new_moon_at_or_after",
    "new_moon_before",
    "Bound",
    "Direction",
    "Phase",
    "PrincipalPhase",
    "PhaseEvent",
    "DailyPhaseEvent",
    "PhaseEventIter",
    "DailyPhaseEventIter",
    "LunarPhaseError",
    "InvariantViolation",
    "EphemerisUnavailableError",
]
