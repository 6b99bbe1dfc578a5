#ephemeris/de422.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Protocol, Tuple

from . import require_ephemeris
from ..core.time import jd_from_moment, moment_from_jd
from ..reference.deltat import dynamical_from_universal, universal_from_dynamical


def wrap180(deg: float) -> float:
    """Signed angle in [-180,180)."""
    return (deg + 180.0) % 360.0 - 180.0


EPS_J2000_DEG = 23.439291111
EMRAT_DEFAULT = 81.30056907419062

# DE422 coverage (JD TT), minus a day of margin at each end
DE422_JD_MIN = 625648.5 + 1.0
DE422_JD_MAX = 2816816.5 - 1.0


class ElongationProvider(Protocol):
    """Anything that yields Moon − Sun ecliptic longitude (deg) at a TT Julian Date."""
    def elong_deg(self, jd_tt: float) -> float: ...


# ============================================================
# DE422 geometry
# ============================================================

def _equator_to_ecliptic():
    """Rotation about x by the J2000 obliquity: ICRF equator -> ecliptic."""
    import numpy as np
    e = math.radians(EPS_J2000_DEG)
    c, s = math.cos(e), math.sin(e)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])


def _emrat(de422_mod) -> float:
    """Earth/Moon mass ratio from the kernel's constants.npy, if the package ships one."""
    import pathlib
    import numpy as np
    path = pathlib.Path(de422_mod.__file__).resolve().parent / "constants.npy"
    if not path.exists():
        return EMRAT_DEFAULT
    constants = np.load(str(path), allow_pickle=True).item()
    return float(constants.get("EMRAT", constants.get("emrat", EMRAT_DEFAULT)))


@dataclass
class DE422Elongation:
    """
    Geocentric ecliptic elongation λ_moon − λ_sun (deg) from DE422.

    Requires optional deps:
      pip install "lunarphase[ephemeris]"
    """
    eph: object
    emrat: float = EMRAT_DEFAULT
    rotation: object = field(default_factory=_equator_to_ecliptic, repr=False)

    @classmethod
    def load(cls) -> "DE422Elongation":
        require_ephemeris()
        import de422  # type: ignore
        from jplephem import Ephemeris  # type: ignore

        return cls(eph=Ephemeris(de422), emrat=_emrat(de422))

    def longitudes(self, jd_tt: float) -> Tuple[float, float]:
        """(λ_sun, λ_moon) in degrees, geocentric, mean ecliptic of J2000."""
        import numpy as np
        emb = np.asarray(self.eph.compute("earthmoon", jd_tt)[:3], dtype=float)
        moon = np.asarray(self.eph.compute("moon", jd_tt)[:3], dtype=float)  # geocentric
        sun = np.asarray(self.eph.compute("sun", jd_tt)[:3], dtype=float)    # barycentric

        earth = emb - moon / (self.emrat + 1.0)
        sun_ecl = self.rotation @ (sun - earth)
        moon_ecl = self.rotation @ moon
        lon_sun = math.degrees(math.atan2(sun_ecl[1], sun_ecl[0])) % 360.0
        lon_moon = math.degrees(math.atan2(moon_ecl[1], moon_ecl[0])) % 360.0
        return lon_sun, lon_moon

    def elong_deg(self, jd_tt: float) -> float:
        lon_sun, lon_moon = self.longitudes(jd_tt)
        return (lon_moon - lon_sun) % 360.0


# ============================================================
# Target crossings
# ============================================================

def solve_target_near(
    el: ElongationProvider,
    jd_guess: float,
    target_deg: float,
    halfwidth_days: float = 1.0,
    tol_days: float = 1e-9,
) -> float:
    """
    TT Julian Date near jd_guess where the elongation equals target_deg.

    Brackets the sign change of wrap180(elong - target), widening the window
    up to ten days, then refines with the Illinois variant of regula falsi.
    Raises ValueError when no crossing is bracketed.
    """
    def f(jd: float) -> float:
        return wrap180(el.elong_deg(jd) - target_deg)

    w = halfwidth_days
    a, b = jd_guess - w, jd_guess + w
    fa, fb = f(a), f(b)
    while fa * fb > 0 and w < 10.0:
        w *= 2.0
        a, b = jd_guess - w, jd_guess + w
        fa, fb = f(a), f(b)
    if fa * fb > 0:
        raise ValueError(f"no elongation crossing of {target_deg} deg near JD {jd_guess}")
    if fa == 0.0:
        return a
    if fb == 0.0:
        return b

    side = 0
    c = 0.5 * (a + b)
    for _ in range(200):
        c = (a * fb - b * fa) / (fb - fa)
        fc = f(c)
        if abs(fc) < 1e-9 or (b - a) < tol_days:
            return c
        if fa * fc < 0:
            b, fb = c, fc
            if side == -1:
                fa *= 0.5
            side = -1
        else:
            a, fa = c, fc
            if side == 1:
                fb *= 0.5
            side = 1
    return c


def true_phase_moment(el: ElongationProvider, t_guess: float, target_deg: float) -> float:
    """
    Universal moment at which the ephemeris elongation reaches target_deg,
    searched near universal moment t_guess.
    """
    jd_tt = jd_from_moment(dynamical_from_universal(t_guess))
    root = solve_target_near(el, jd_tt, target_deg)
    return universal_from_dynamical(moment_from_jd(root))
