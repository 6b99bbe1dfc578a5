from __future__ import annotations

"""
lunarphase.reference.deltat

Ephemeris correction (ΔT = dynamical time − universal time), in days.

Piecewise polynomials by Gregorian year, as tabulated in *Calendrical
Calculations* (after Espenak–Meeus for the pre-1600 and post-1986 ranges).
Each range is inclusive at both ends; years outside every range use the
long-term parabola.

The two conversions below evaluate ΔT at their own argument, so they are
first-order inverses only: `universal_from_dynamical(dynamical_from_universal(t))`
differs from `t` when ΔT changes between t and t+ΔT (at most at a year
boundary, by far less than a second).
"""

from typing import Tuple

from .astro_args import J2000, T_centuries, poly
from .calendar import fixed_from_gregorian, gregorian_year_from_fixed


SECONDS_PER_DAY = 86400.0

# (first_year, last_year, origin, scale, coeffs) with u = (year - origin) / scale,
# result in seconds.
_YEAR_MODELS: Tuple[Tuple[int, int, float, float, Tuple[float, ...]], ...] = (
    (2006, 2050, 2000.0, 1.0, (62.92, 0.32217, 0.005589)),
    (1987, 2005, 2000.0, 1.0, (63.86, 0.3345, -0.060374, 0.0017275, 0.000651814, 0.00002373599)),
    (1700, 1799, 1700.0, 1.0, (8.118780842, -0.005092142, 0.003336121, -0.0000266484)),
    (1600, 1699, 1600.0, 1.0, (120.0, -0.9808, -0.01532, 0.000140272128)),
    (500, 1599, 1000.0, 100.0, (1574.2, -556.01, 71.23472, 0.319781, -0.8503463, -0.005050998, 0.0083572073)),
    (-499, 499, 0.0, 100.0, (10583.6, -1014.41, 33.78311, -5.952053, -0.1798452, 0.022174192, 0.0090316521)),
)

# Century-based models over days from 1900-01-01 to July 1 of the year; result in days.
_CENTURY_MODELS: Tuple[Tuple[int, int, Tuple[float, ...]], ...] = (
    (1900, 1986, (-0.00002, 0.000297, 0.025184, -0.181133, 0.553040, -0.861938, 0.677066, -0.212591)),
    (1800, 1899, (
        -0.000009, 0.003844, 0.083563, 0.865736, 4.867575, 15.845535,
        31.332267, 38.291999, 28.316289, 11.636204, 2.043794,
    )),
)


def _centuries_since_1900(year: int) -> float:
    return (fixed_from_gregorian(year, 7, 1) - fixed_from_gregorian(1900, 1, 1)) / 36525.0


def ephemeris_correction(t: float) -> float:
    """ΔT in days for moment t (selected by the Gregorian year of t)."""
    year_i = gregorian_year_from_fixed(t)
    year = float(year_i)

    if 2051 <= year_i <= 2150:
        # bridges the 2006..2050 polynomial into the long-term parabola
        u = (year - 1820.0) / 100.0
        return (-20.0 + 32.0 * u * u + 0.5628 * (2150.0 - year)) / SECONDS_PER_DAY

    for first, last, coeffs in _CENTURY_MODELS:
        if first <= year_i <= last:
            return poly(_centuries_since_1900(year_i), coeffs)

    for first, last, origin, scale, coeffs in _YEAR_MODELS:
        if first <= year_i <= last:
            u = (year - origin) / scale
            return poly(u, coeffs) / SECONDS_PER_DAY

    return poly((year - 1820.0) / 100.0, (-20.0, 0.0, 32.0)) / SECONDS_PER_DAY


def dynamical_from_universal(t: float) -> float:
    return t + ephemeris_correction(t)


def universal_from_dynamical(t: float) -> float:
    return t - ephemeris_correction(t)


def julian_centuries(t: float) -> float:
    """Julian centuries (dynamical time) from J2000.0 for universal moment t."""
    return T_centuries(dynamical_from_universal(t))


__all__ = [
    "J2000",
    "ephemeris_correction",
    "dynamical_from_universal",
    "universal_from_dynamical",
    "julian_centuries",
]
