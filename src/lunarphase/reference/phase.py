# reference/phase.py

from __future__ import annotations

from ..core.types import Direction
from . import astro_args as aa
from .lunar import MEAN_SYNODIC_MONTH, lunar_longitude, nth_new_moon
from .solar import solar_longitude

SEARCH_HALF_WINDOW_DAYS = 2.0


def lunar_phase(t: float) -> float:
    """
    Lunar phase angle (Moon − Sun longitude, degrees, [0,360)) at universal moment t.

    0 = new moon, 90 = first quarter, 180 = full moon, 270 = last quarter.

    Close to new moon the longitude difference may land on the wrong side
    of the 0/360 seam; it is then replaced by the angle implied by the time
    elapsed since the nearest computed new moon.
    """
    phi = aa.wrap_deg(lunar_longitude(t) - solar_longitude(t))
    t0 = nth_new_moon(0)
    n = aa.iround((t - t0) / MEAN_SYNODIC_MONTH)
    phi_prime = 360.0 * aa.frac01((t - nth_new_moon(n)) / MEAN_SYNODIC_MONTH)
    if abs(phi - phi_prime) > 180.0:
        return phi_prime
    return phi


# ------------------------------------------------------------
# Phase search
# ------------------------------------------------------------

def lunar_phase_at_or_before(phase_deg: float, t: float) -> float:
    """Last moment at or before t at which the lunar phase equals phase_deg."""
    tau = t - MEAN_SYNODIC_MONTH / 360.0 * aa.wrap_deg(lunar_phase(t) - phase_deg)
    start = tau - SEARCH_HALF_WINDOW_DAYS
    end = min(t, tau + SEARCH_HALF_WINDOW_DAYS)
    return aa.inv_angle(lunar_phase, phase_deg, start, end)


def lunar_phase_at_or_after(phase_deg: float, t: float) -> float:
    """First moment at or after t at which the lunar phase equals phase_deg."""
    tau = t + MEAN_SYNODIC_MONTH / 360.0 * aa.wrap_deg(phase_deg - lunar_phase(t))
    start = max(t, tau - SEARCH_HALF_WINDOW_DAYS)
    end = tau + SEARCH_HALF_WINDOW_DAYS
    return aa.inv_angle(lunar_phase, phase_deg, start, end)


def lunar_phase_search(phase_deg: float, t: float, direction: Direction) -> float:
    """at-or-after (FORWARD) / at-or-before (REVERSE) search for phase_deg from t."""
    if direction is Direction.FORWARD:
        return lunar_phase_at_or_after(phase_deg, t)
    return lunar_phase_at_or_before(phase_deg, t)


# ------------------------------------------------------------
# New moons around a moment
# ------------------------------------------------------------

def _lunation_near(t: float) -> int:
    """Index of the new moon preceding t, estimated from the mean month."""
    t0 = nth_new_moon(0)
    return aa.iround((t - t0) / MEAN_SYNODIC_MONTH - lunar_phase(t) / 360.0)


def new_moon_at_or_after(t: float) -> float:
    """Moment of the first new moon at or after t."""
    n = _lunation_near(t)
    while nth_new_moon(n - 1) >= t:
        n -= 1
    while nth_new_moon(n) < t:
        n += 1
    return nth_new_moon(n)


def new_moon_before(t: float) -> float:
    """Moment of the last new moon strictly before t."""
    n = _lunation_near(t)
    while nth_new_moon(n + 1) < t:
        n += 1
    while nth_new_moon(n) >= t:
        n -= 1
    return nth_new_moon(n)
