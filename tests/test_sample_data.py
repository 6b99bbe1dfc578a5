# tests/test_sample_data.py

import random

import pytest

from lunarphase.reference.calendar import fixed_from_gregorian, gregorian_from_fixed
from lunarphase.reference.deltat import SECONDS_PER_DAY, ephemeris_correction
from lunarphase.reference.lunar import MEAN_SYNODIC_MONTH, lunar_longitude
from lunarphase.reference.phase import (
    lunar_phase_at_or_after,
    lunar_phase_at_or_before,
    new_moon_at_or_after,
)
from lunarphase.reference.solar import solar_longitude

# (R.D., (y, m, d), ephemeris correction, solar longitude at noon,
#  lunar longitude, new moon at or after)
# Calendrical Calculations, Appendix C.
SAMPLE_DATA = [
    (-214193.0, (-586, 7, 24), 0.214169, 119.473431, 244.853905, -214174.605828),
    (-61387.0, (-168, 12, 5), 0.143632, 254.248961, 208.856738, -61382.995328),
    (25469.0, (70, 9, 24), 0.114444, 181.435996, 213.746842, 25495.809776),
    (49217.0, (135, 10, 2), 0.107183, 188.663922, 292.046243, 49238.502448),
    (171307.0, (470, 1, 8), 0.069498, 289.091566, 156.819014, 171318.435313),
    (210155.0, (576, 5, 20), 0.057506, 59.119741, 108.055632, 210180.691849),
    (253427.0, (694, 11, 10), 0.044758, 228.314554, 39.356097, 253442.859367),
    (369740.0, (1013, 4, 25), 0.017397, 34.460769, 98.565851, 369763.746413),
    (400085.0, (1096, 5, 24), 0.012796, 63.187995, 332.958296, 400091.578343),
    (434355.0, (1190, 3, 23), 0.008869, 2.457591, 92.259651, 434376.578106),
    (452605.0, (1240, 3, 10), 0.007262, 350.475934, 78.132029, 452627.191972),
    (470160.0, (1288, 4, 2), 0.005979, 13.49822, 274.946995, 470167.57836),
    (473837.0, (1298, 4, 27), 0.00574, 37.40392, 128.362844, 473858.853276),
    (507850.0, (1391, 6, 12), 0.003875, 81.02813, 89.51845, 507878.666842),
    (524156.0, (1436, 2, 3), 0.003157, 313.860498, 24.607322, 524179.247062),
    (544676.0, (1492, 4, 9), 0.002393, 19.95443, 53.485956, 544702.753873),
    (567118.0, (1553, 9, 19), 0.001731, 176.059431, 187.89852, 567146.513181),
    (569477.0, (1560, 3, 5), 0.001669, 344.922951, 320.172362, 569479.203258),
    (601716.0, (1648, 6, 10), 0.000615, 79.964921, 314.042566, 601727.033557),
    (613424.0, (1680, 6, 30), 0.000177, 99.302317, 145.474065, 613449.762129),
    (626596.0, (1716, 7, 24), 0.000101, 121.535304, 185.030507, 626620.369801),
    (645554.0, (1768, 6, 19), 0.000171, 88.567428, 142.189132, 645579.076748),
    (664224.0, (1819, 8, 2), 0.000136, 129.289884, 253.743375, 664242.886718),
    (671401.0, (1839, 3, 27), 0.000061, 6.14691, 151.648685, 671418.970538),
    (694799.0, (1903, 4, 19), 0.000014, 28.251993, 287.987743, 694807.563371),
    (704424.0, (1929, 8, 25), 0.000276, 151.780633, 25.626707, 704433.491182),
    (708842.0, (1941, 9, 29), 0.000296, 185.945867, 290.2883, 708863.597),
    (709409.0, (1943, 4, 19), 0.000302, 28.555607, 189.913142, 709424.404929),
    (709580.0, (1943, 10, 7), 0.000302, 193.347892, 284.93173, 709602.082686),
    (727274.0, (1992, 3, 17), 0.000675, 357.151254, 152.339044, 727291.2094),
    (728714.0, (1996, 2, 25), 0.000712, 336.170692, 51.662265, 728737.447691),
    (744313.0, (2038, 11, 10), 0.000963, 228.184879, 26.68206, 744329.573999),
    (764652.0, (2094, 7, 18), 0.002913, 116.439352, 175.500822, 764676.191273),
]

SEARCH_TOL_DAYS = 2e-5


def _trunc6(x: float) -> int:
    """Value in millionths, truncated toward zero."""
    return int(x * 1_000_000.0)


@pytest.mark.parametrize("rd, ymd", [(row[0], row[1]) for row in SAMPLE_DATA])
def test_calendar_against_sample(rd, ymd):
    assert gregorian_from_fixed(rd) == ymd
    assert fixed_from_gregorian(*ymd) == int(rd)


@pytest.mark.parametrize("rd, ephem, solar_l, lunar_l", [(r[0], r[2], r[3], r[4]) for r in SAMPLE_DATA])
def test_ephemeris_and_longitudes(rd, ephem, solar_l, lunar_l):
    assert _trunc6(ephemeris_correction(rd)) == _trunc6(ephem)
    assert _trunc6(solar_longitude(rd + 0.5)) == _trunc6(solar_l)
    assert _trunc6(lunar_longitude(rd)) == _trunc6(lunar_l)


@pytest.mark.parametrize("rd, expected", [(r[0], r[5]) for r in SAMPLE_DATA])
def test_new_moon_at_or_after(rd, expected):
    new_moon = new_moon_at_or_after(rd)
    assert _trunc6(new_moon) == _trunc6(expected)
    assert new_moon >= rd


@pytest.mark.parametrize("rd", [r[0] for r in SAMPLE_DATA])
def test_phase_search_finds_new_moon(rd):
    """
    The bisection searches land on the series new moon from either side.
    """
    new_moon = new_moon_at_or_after(rd)
    assert abs(lunar_phase_at_or_before(0.0, new_moon + 0.001) - new_moon) < SEARCH_TOL_DAYS
    assert abs(lunar_phase_at_or_before(0.0, rd + MEAN_SYNODIC_MONTH) - new_moon) < SEARCH_TOL_DAYS
    assert abs(lunar_phase_at_or_after(0.0, new_moon - 0.001) - new_moon) < SEARCH_TOL_DAYS
    assert abs(lunar_phase_at_or_after(0.0, rd) - new_moon) < SEARCH_TOL_DAYS


@pytest.mark.parametrize(
    "year, seconds",
    [
        (-500, 17203.68),
        (-499, 17185.5839),
        (499, 5719.8774),
        (500, 5710.0447),
        (1599, 120.6973),
        (1600, 120.0),
        (1799, 14.4551),
        (1800, 13.6233),
        (1899, -2.2768),
        (1900, -1.5493),
        (1986, 55.5528),
        (1987, 55.3164),
        (2005, 64.7206),
        (2006, 65.0542),
        (2050, 93.001),
        (2051, 206.4724),
        (2150, 328.48),
        (2151, 330.5952),
    ],
)
def test_ephemeris_correction_range_edges(year, seconds):
    """
    Each year range includes both of its end years; years outside every
    range use the long-term parabola.
    """
    t = float(fixed_from_gregorian(year, 7, 1))
    assert ephemeris_correction(t) * SECONDS_PER_DAY == pytest.approx(seconds, abs=1e-3)


@pytest.mark.parametrize("angle", [90.0, 180.0, 270.0])
def test_search_symmetry_at_quarters(angle):
    random.seed(42)
    for _ in range(100):
        t = random.uniform(700000.0, 760000.0)
        after = lunar_phase_at_or_after(angle, t)
        assert after >= t
        assert abs(lunar_phase_at_or_before(angle, after + 1e-3) - after) < SEARCH_TOL_DAYS


def test_search_symmetry_at_new_moon():
    """
    Near 0 deg the phase switches between the longitude difference and the
    angle implied by the nearest computed new moon, so the two searches can
    settle on slightly different roots (about 1.2e-4 days seen). 1e-3 days
    bounds that disagreement.
    """
    random.seed(42)
    for _ in range(100):
        t = random.uniform(700000.0, 760000.0)
        after = lunar_phase_at_or_after(0.0, t)
        assert after >= t
        assert abs(lunar_phase_at_or_before(0.0, after + 1e-3) - after) < 1e-3
