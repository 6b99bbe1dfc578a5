# reference/solar.py

from __future__ import annotations

from . import astro_args as aa
from .deltat import julian_centuries
from .tables import SOLAR_LONGITUDE_TABLE

# 180/pi scaled by 1e-6: table amplitudes are in micro-radians
_AMPLITUDE_TO_DEG = 0.000005729577951308232


def solar_longitude(t: float) -> float:
    """
    Apparent geocentric solar longitude (degrees, [0,360)) at universal moment t.

    Mean longitude + 49-term periodic series, then aberration and nutation.
    """
    c = julian_centuries(t)
    periodic = aa.sigma(SOLAR_LONGITUDE_TABLE, lambda row: row[0] * aa.sin_deg(row[1] + row[2] * c))
    lam = 282.7771834 + 36000.76953744 * c + _AMPLITUDE_TO_DEG * periodic
    return aa.wrap_deg(lam + aa.aberration(c) + aa.nutation(c))
