from __future__ import annotations

import math
import sys
from typing import Callable, Iterable, Sequence, TypeVar

Row = TypeVar("Row")


# ------------------------------------------------------------
# Units & helpers
# ------------------------------------------------------------

def sin_deg(x_deg: float) -> float:
    """sin of an angle given in degrees."""
    return math.sin(math.radians(x_deg))

def cos_deg(x_deg: float) -> float:
    """cos of an angle given in degrees."""
    return math.cos(math.radians(x_deg))

def wrap_deg(x_deg: float) -> float:
    """Wrap degrees to [0,360) (floored modulo)."""
    y = x_deg % 360.0
    # tiny negative inputs round up to exactly 360.0
    if y >= 360.0:
        y -= 360.0
    return y

def frac01(x: float) -> float:
    """Return fractional part in [0,1)."""
    y = x % 1.0
    if y >= 1.0:
        y -= 1.0
    return y

def iround(x: float) -> int:
    """Round half away from zero (builtin round() is half-to-even)."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))

def poly(x: float, coeffs: Sequence[float]) -> float:
    """Horner evaluation for Σ coeffs[k] x^k."""
    acc = 0.0
    for c in reversed(coeffs):
        acc = acc * x + c
    return acc

def powi(x: float, n: int) -> float:
    """x**n for integer n >= 0 by repeated squaring (sign of negative x kept for odd n)."""
    if n < 0:
        return 1.0 / powi(x, -n)
    acc = 1.0
    while n:
        if n & 1:
            acc *= x
        x *= x
        n >>= 1
    return acc

def sigma(table: Iterable[Row], fn: Callable[[Row], float]) -> float:
    """
    Left-fold sum of fn(row) over the table, in table order.

    Must stay a plain loop: builtin sum() compensates rounding on 3.12+.
    """
    acc = 0.0
    for row in table:
        acc += fn(row)
    return acc


# ------------------------------------------------------------
# Angle inversion
# ------------------------------------------------------------

ANGLE_EPS_DEG = 1e-5


def inv_angle(f: Callable[[float], float], target_deg: float, start: float, end: float) -> float:
    """
    Bisection for f(t) ≡ target (mod 360) on [start, end].

    The bracket is halved by looking at the wrapped distance
    d = wrap(f(mid) - target): d in [0,180) means f has already passed the
    target, so the root lies in the lower half; d in [180,360) means it is
    still ahead.

    The caller must bracket exactly one crossing. If it does not, the result
    is whichever end the bisection collapses onto.
    """
    while True:
        if abs(start - end) < sys.float_info.epsilon:
            return start
        mid = (start + end) / 2.0
        if mid == start or mid == end:
            # no representable midpoint left
            return mid
        d = wrap_deg(f(mid) - target_deg)
        if d < ANGLE_EPS_DEG or d > 360.0 - ANGLE_EPS_DEG:
            return mid
        if d < 180.0:
            end = mid
        else:
            start = mid


# ------------------------------------------------------------
# Time variable (dynamical time, moments)
# ------------------------------------------------------------

J2000 = 730120.5  # moment of 2000-01-01 12:00


def T_centuries(t_tt: float) -> float:
    """Julian centuries from J2000.0, for a moment already in dynamical time."""
    return (t_tt - J2000) / 36525.0


# ------------------------------------------------------------
# Shared perturbations (c = Julian centuries, dynamical)
# ------------------------------------------------------------

def nutation(c: float) -> float:
    """Nutation in longitude (degrees)."""
    a = poly(c, (124.90, -1934.134, 0.002063))
    b = poly(c, (201.11, 72001.5377, 0.00057))
    return -0.004778 * sin_deg(a) - 0.0003667 * sin_deg(b)

def aberration(c: float) -> float:
    """Annual aberration (degrees)."""
    return 0.0000974 * cos_deg(177.63 + 35999.01848 * c) - 0.005575
