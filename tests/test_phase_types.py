# tests/test_phase_types.py

import pytest
from datetime import date

from lunarphase import Bound, Direction, Phase, PrincipalPhase
from lunarphase.core.errors import InvariantViolation
from lunarphase.core.types import as_bound


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (359.0, 1.0, Phase.NEW_MOON),
        (0.0, 2.0, Phase.NEW_MOON),
        (37.0, 39.0, Phase.WAXING_CRESCENT),
        (88.0, 90.0, Phase.WAXING_CRESCENT),
        (89.0, 91.0, Phase.FIRST_QUARTER),
        (90.0, 92.0, Phase.FIRST_QUARTER),
        (132.0, 134.0, Phase.WAXING_GIBBOUS),
        (178.0, 180.0, Phase.WAXING_GIBBOUS),
        (179.0, 181.0, Phase.FULL_MOON),
        (180.0, 182.0, Phase.FULL_MOON),
        (216.0, 218.0, Phase.WANING_GIBBOUS),
        (268.0, 270.0, Phase.WANING_GIBBOUS),
        (269.0, 271.0, Phase.LAST_QUARTER),
        (270.0, 272.0, Phase.LAST_QUARTER),
        (314.0, 316.0, Phase.WANING_CRESCENT),
        (358.0, 0.0, Phase.WANING_CRESCENT),
    ],
)
def test_from_range(start, end, expected):
    assert Phase.from_range(start, end) is expected


@pytest.mark.parametrize("start, end", [(-1.0, 2.0), (360.0, 2.0), (0.0, 360.0), (float("nan"), 1.0)])
def test_from_range_rejects_unwrapped_angles(start, end):
    with pytest.raises(InvariantViolation):
        Phase.from_range(start, end)


def test_phase_members():
    assert len(Phase) == 8
    assert next(iter(Phase)) is Phase.NEW_MOON
    assert Phase.FULL_MOON.emoji == "\U0001F315"
    assert Phase.WANING_CRESCENT.label == "waning crescent"
    assert [p for p in Phase if p.is_principal] == [
        Phase.NEW_MOON, Phase.FIRST_QUARTER, Phase.FULL_MOON, Phase.LAST_QUARTER,
    ]
    assert Phase.WAXING_GIBBOUS.principal is None
    assert Phase.LAST_QUARTER.principal is PrincipalPhase.LAST_QUARTER


def test_principal_phase_members():
    assert [p.angle for p in PrincipalPhase] == [0.0, 90.0, 180.0, 270.0]
    for p in PrincipalPhase:
        assert p.phase.principal is p
        assert p.emoji == p.phase.emoji
    assert PrincipalPhase.FIRST_QUARTER.emoji == "\U0001F313"


@pytest.mark.parametrize(
    "angle, forward, reverse",
    [
        (0.0, PrincipalPhase.FIRST_QUARTER, PrincipalPhase.NEW_MOON),
        (45.0, PrincipalPhase.FIRST_QUARTER, PrincipalPhase.NEW_MOON),
        (90.0, PrincipalPhase.FIRST_QUARTER, PrincipalPhase.FIRST_QUARTER),
        (135.0, PrincipalPhase.FULL_MOON, PrincipalPhase.FIRST_QUARTER),
        (180.0, PrincipalPhase.FULL_MOON, PrincipalPhase.FULL_MOON),
        (269.9, PrincipalPhase.LAST_QUARTER, PrincipalPhase.FULL_MOON),
        (300.0, PrincipalPhase.NEW_MOON, PrincipalPhase.LAST_QUARTER),
        (359.9, PrincipalPhase.NEW_MOON, PrincipalPhase.LAST_QUARTER),
    ],
)
def test_upcoming(angle, forward, reverse):
    assert PrincipalPhase.upcoming(angle, Direction.FORWARD) is forward
    assert PrincipalPhase.upcoming(angle, Direction.REVERSE) is reverse


def test_direction():
    assert Direction.between(1, 2) is Direction.FORWARD
    assert Direction.between(2, 2) is Direction.FORWARD
    assert Direction.between(3, 2) is Direction.REVERSE
    assert Direction.FORWARD.step == 1
    assert Direction.REVERSE.step == -1
    assert Direction.FORWARD.reversed() is Direction.REVERSE


def test_bounds():
    d = date(2020, 10, 1)
    assert Bound.inclusive(d).resolve(date.min) == (d, False)
    assert Bound.exclusive(d).resolve(date.min) == (d, True)
    assert Bound.unbounded().resolve(date.min) == (date.min, False)
    assert Bound.unbounded().is_unbounded

    assert as_bound(None, excluded_by_default=True).is_unbounded
    assert as_bound(d, excluded_by_default=True) == Bound.exclusive(d)
    assert as_bound(d, excluded_by_default=False) == Bound.inclusive(d)
    assert as_bound(Bound.inclusive(d), excluded_by_default=True) == Bound.inclusive(d)
