# reference/lunar.py

from __future__ import annotations

from . import astro_args as aa
from .deltat import julian_centuries, universal_from_dynamical
from .tables import (
    LUNAR_LONGITUDE_CORRECTION_TABLE,
    NTH_NEW_MOON_ADDITIONAL_TABLE,
    NTH_NEW_MOON_CORRECTION_TABLE,
)


MEAN_SYNODIC_MONTH = 29.530588861

# n = 24724 is the new moon of 2000-01-06; n = 0 falls in January of year 1
_NEW_MOON_OFFSET = 24724
_MONTHS_PER_CENTURY = 1236.85


# ------------------------------------------------------------
# Mean elements (c = Julian centuries, dynamical)
# ------------------------------------------------------------

def mean_lunar_longitude(c: float) -> float:
    return aa.wrap_deg(aa.poly(c, (218.3164477, 481267.88123421, -0.0015786, 1.0 / 538841.0, -(1.0 / 65194000.0))))

def lunar_elongation(c: float) -> float:
    return aa.wrap_deg(aa.poly(c, (297.8501921, 445267.1114034, -0.0018819, 1.0 / 545868.0, -(1.0 / 113065000.0))))

def solar_anomaly(c: float) -> float:
    return aa.wrap_deg(aa.poly(c, (357.5291092, 35999.0502909, -0.0001536, 1.0 / 24490000.0)))

def lunar_anomaly(c: float) -> float:
    return aa.wrap_deg(aa.poly(c, (134.9633964, 477198.8675055, 0.0087414, 1.0 / 69699.0, -(1.0 / 14712000.0))))

def moon_node(c: float) -> float:
    return aa.wrap_deg(aa.poly(c, (93.2720950, 483202.0175233, -0.0036539, -(1.0 / 3526000.0), 1.0 / 863310000.0)))

def eccentricity_factor(c: float) -> float:
    """Earth orbit eccentricity factor E (multiplies terms involving the solar anomaly)."""
    return aa.poly(c, (1.0, -0.002516, -0.0000074))


# ------------------------------------------------------------
# Lunar longitude
# ------------------------------------------------------------

def lunar_longitude(t: float) -> float:
    """
    Geocentric lunar longitude (degrees, [0,360)) at universal moment t.

    Mean longitude + 59-term series (microdegrees, E-weighted by |solar anomaly multiple|)
    + Venus, Jupiter and flat-Earth terms + nutation.
    """
    c = julian_centuries(t)
    l_mean = mean_lunar_longitude(c)
    elong = lunar_elongation(c)
    m_sun = solar_anomaly(c)
    m_moon = lunar_anomaly(c)
    node = moon_node(c)
    e = eccentricity_factor(c)

    def term(row) -> float:
        v, w, x, y, z = row
        return v * aa.powi(e, abs(x)) * aa.sin_deg(w * elong + float(x) * m_sun + y * m_moon + z * node)

    correction = aa.sigma(LUNAR_LONGITUDE_CORRECTION_TABLE, term) / 1000000.0
    venus = 0.003958 * aa.sin_deg(119.75 + c * 131.849)
    jupiter = 0.000318 * aa.sin_deg(53.09 + c * 479264.29)
    flat_earth = 0.001962 * aa.sin_deg(l_mean - node)
    return aa.wrap_deg(l_mean + correction + venus + jupiter + flat_earth + aa.nutation(c))


# ------------------------------------------------------------
# New moons
# ------------------------------------------------------------

def nth_new_moon(n: int) -> float:
    """
    Universal moment of the n-th new moon (n = 0 in January of year 1,
    n = 24724 on 2000-01-06).

    The series is evaluated in dynamical time and converted back at the end.
    """
    k = float(n - _NEW_MOON_OFFSET)
    c = k / _MONTHS_PER_CENTURY
    approx = aa.J2000 + aa.poly(c, (
        5.09766,
        MEAN_SYNODIC_MONTH * _MONTHS_PER_CENTURY,
        0.00015437,
        -0.000000150,
        0.00000000073,
    ))
    e = eccentricity_factor(c)
    m_sun = aa.poly(c, (2.5534, _MONTHS_PER_CENTURY * 29.10535670, -0.0000014, -0.00000011))
    m_moon = aa.poly(c, (201.5643, 385.81693528 * _MONTHS_PER_CENTURY, 0.0107582, 0.00001238, -0.000000058))
    f_moon = aa.poly(c, (160.7108, 390.67050284 * _MONTHS_PER_CENTURY, -0.0016118, -0.00000227, 0.000000011))
    omega = aa.poly(c, (124.7746, -1.56375588 * _MONTHS_PER_CENTURY, 0.0020672, 0.00000215))

    def corr_term(row) -> float:
        v, w, x, y, z = row
        return v * aa.powi(e, w) * aa.sin_deg(x * m_sun + y * m_moon + z * f_moon)

    correction = -0.00017 * aa.sin_deg(omega) + aa.sigma(NTH_NEW_MOON_CORRECTION_TABLE, corr_term)
    extra = 0.000325 * aa.sin_deg(aa.poly(c, (299.77, 132.8475848, -0.009173)))
    additional = aa.sigma(NTH_NEW_MOON_ADDITIONAL_TABLE, lambda row: row[2] * aa.sin_deg(row[0] + row[1] * k))
    return universal_from_dynamical(approx + correction + extra + additional)
