from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Generic, NamedTuple, Optional, Tuple, TypeVar

from .errors import InvariantViolation

T = TypeVar("T")

NEW_MOON = 0.0
NEW_MOON_HIGH = 360.0
FIRST_QUARTER = 90.0
FULL_MOON = 180.0
LAST_QUARTER = 270.0


class Direction(Enum):
    """Direction of travel along the time axis."""
    FORWARD = 1
    REVERSE = -1

    @classmethod
    def between(cls, start, end) -> "Direction":
        """FORWARD when start <= end (an empty range counts as forward)."""
        return cls.FORWARD if start <= end else cls.REVERSE

    @property
    def step(self) -> int:
        """+1 / -1: signed unit for one step (e.g. one day) in this direction."""
        return self.value

    def reversed(self) -> "Direction":
        return Direction.REVERSE if self is Direction.FORWARD else Direction.FORWARD


class Phase(Enum):
    """The eight principal and intermediate phases of the Moon."""
    NEW_MOON = "new_moon"
    WAXING_CRESCENT = "waxing_crescent"
    FIRST_QUARTER = "first_quarter"
    WAXING_GIBBOUS = "waxing_gibbous"
    FULL_MOON = "full_moon"
    WANING_GIBBOUS = "waning_gibbous"
    LAST_QUARTER = "last_quarter"
    WANING_CRESCENT = "waning_crescent"

    @property
    def emoji(self) -> str:
        return _EMOJI[self]

    @property
    def is_principal(self) -> bool:
        return self in _PRINCIPAL_OF

    @property
    def principal(self) -> Optional["PrincipalPhase"]:
        """The matching PrincipalPhase, or None for an intermediate phase."""
        return _PRINCIPAL_OF.get(self)

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    @classmethod
    def from_range(cls, start_deg: float, end_deg: float) -> "Phase":
        """
        Phase of a span that starts at phase angle start_deg and ends at end_deg.

        Both angles must already be wrapped to [0,360). The span always moves
        forward, so end < start means it passed through 0. A principal phase
        is reported when its angle lies in [start, end); otherwise the
        intermediate phase of the quadrant containing start.
        """
        for x in (start_deg, end_deg):
            if not (0.0 <= x < 360.0):
                raise InvariantViolation(f"phase angle not in [0,360): {x!r}")
        if end_deg < start_deg:
            end_deg += 360.0

        def crosses(angle: float) -> bool:
            return start_deg <= angle < end_deg

        if crosses(NEW_MOON) or crosses(NEW_MOON_HIGH):
            return cls.NEW_MOON
        if crosses(FIRST_QUARTER):
            return cls.FIRST_QUARTER
        if crosses(FULL_MOON):
            return cls.FULL_MOON
        if crosses(LAST_QUARTER):
            return cls.LAST_QUARTER

        if start_deg < FIRST_QUARTER:
            return cls.WAXING_CRESCENT
        if start_deg < FULL_MOON:
            return cls.WAXING_GIBBOUS
        if start_deg < LAST_QUARTER:
            return cls.WANING_GIBBOUS
        return cls.WANING_CRESCENT


class PrincipalPhase(Enum):
    """The four principal phases of the Moon, valued by their phase angle."""
    NEW_MOON = 0.0
    FIRST_QUARTER = 90.0
    FULL_MOON = 180.0
    LAST_QUARTER = 270.0

    @property
    def angle(self) -> float:
        return float(self.value)

    @property
    def phase(self) -> Phase:
        return Phase[self.name]

    @property
    def emoji(self) -> str:
        return self.phase.emoji

    @property
    def label(self) -> str:
        return self.phase.label

    @classmethod
    def upcoming(cls, angle_deg: float, direction: Direction) -> "PrincipalPhase":
        """
        First principal phase reached from phase angle `angle_deg` when moving
        in `direction` (an exact hit counts as reached).
        """
        if direction is Direction.FORWARD:
            if angle_deg <= FIRST_QUARTER:
                return cls.FIRST_QUARTER
            if angle_deg <= FULL_MOON:
                return cls.FULL_MOON
            if angle_deg <= LAST_QUARTER:
                return cls.LAST_QUARTER
            return cls.NEW_MOON

        if angle_deg >= LAST_QUARTER:
            return cls.LAST_QUARTER
        if angle_deg >= FULL_MOON:
            return cls.FULL_MOON
        if angle_deg >= FIRST_QUARTER:
            return cls.FIRST_QUARTER
        return cls.NEW_MOON


_EMOJI = {
    Phase.NEW_MOON: "\U0001F311",
    Phase.WAXING_CRESCENT: "\U0001F312",
    Phase.FIRST_QUARTER: "\U0001F313",
    Phase.WAXING_GIBBOUS: "\U0001F314",
    Phase.FULL_MOON: "\U0001F315",
    Phase.WANING_GIBBOUS: "\U0001F316",
    Phase.LAST_QUARTER: "\U0001F317",
    Phase.WANING_CRESCENT: "\U0001F318",
}

_PRINCIPAL_OF = {p.phase: p for p in PrincipalPhase}


# ============================================================
# Range bounds
# ============================================================

@dataclass(frozen=True)
class Bound(Generic[T]):
    """
    One end of a range: included, excluded, or unbounded (value is None).
    """
    value: Optional[T] = None
    excluded: bool = False

    @classmethod
    def inclusive(cls, value: T) -> "Bound[T]":
        return cls(value, False)

    @classmethod
    def exclusive(cls, value: T) -> "Bound[T]":
        return cls(value, True)

    @classmethod
    def unbounded(cls) -> "Bound[T]":
        return cls(None, False)

    @property
    def is_unbounded(self) -> bool:
        return self.value is None

    def resolve(self, default: T) -> Tuple[T, bool]:
        """(value, excluded), with `default` standing in for an unbounded end."""
        if self.value is None:
            return default, False
        return self.value, self.excluded


def as_bound(x, *, excluded_by_default: bool) -> Bound:
    """None -> unbounded, Bound -> itself, bare value -> included/excluded per default."""
    if x is None:
        return Bound.unbounded()
    if isinstance(x, Bound):
        return x
    return Bound(x, excluded_by_default)


class PhaseEvent(NamedTuple):
    """A principal phase and the UTC instant it occurs."""
    phase: PrincipalPhase
    when: datetime


class DailyPhaseEvent(NamedTuple):
    """A principal phase and the UTC calendar day it falls on."""
    phase: PrincipalPhase
    day: date
