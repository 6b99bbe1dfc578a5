from __future__ import annotations

import math
from typing import Tuple

from ..core.errors import InvariantViolation


# ============================================================
# Proleptic Gregorian date <-> R.D. (fixed day number)
#
# R.D. 1 is Monday, January 1, 1 (proleptic Gregorian). Years use
# astronomical numbering, so year 0 is 1 BCE and negative years are fine;
# nothing here goes through `datetime`.
# ============================================================

GregorianDate = Tuple[int, int, int]


def is_gregorian_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 400) not in (100, 200, 300)


def fixed_from_gregorian(year: int, month: int, day: int) -> int:
    """
    Gregorian (year, month, day) -> R.D.

    Closed form: days in prior years, plus days in prior months assuming
    30-day February, corrected by -1 (leap) or -2 (common) after February.
    """
    if not (1 <= month <= 12) or not (1 <= day <= 31):
        raise InvariantViolation(f"malformed Gregorian date: {year}-{month}-{day}")

    y1 = year - 1
    if month <= 2:
        correction = 0
    elif is_gregorian_leap_year(year):
        correction = -1
    else:
        correction = -2

    return (
        365 * y1 + y1 // 4 - y1 // 100 + y1 // 400
        + (367 * month - 362) // 12
        + correction
        + day
    )


def gregorian_new_year(year: int) -> int:
    return fixed_from_gregorian(year, 1, 1)


def gregorian_year_from_fixed(date: float) -> int:
    """
    Gregorian year containing R.D. `date` (a moment is floored).

    Decomposes the day count into 400-, 100-, 4- and 1-year cycles.
    """
    d0 = int(math.floor(date - 1.0))
    n400, d1 = divmod(d0, 146097)
    n100, d2 = divmod(d1, 36524)
    n4, d3 = divmod(d2, 1461)
    n1 = d3 // 365
    year = 400 * n400 + 100 * n100 + 4 * n4 + n1
    # last day of a leap cycle belongs to the year just counted
    if n100 == 4 or n1 == 4:
        return year
    return year + 1


def gregorian_from_fixed(date: float) -> GregorianDate:
    """R.D. (or moment, floored) -> Gregorian (year, month, day)."""
    year = gregorian_year_from_fixed(date)
    rd = int(math.floor(date))
    prior_days = rd - gregorian_new_year(year)

    if rd < fixed_from_gregorian(year, 3, 1):
        correction = 0
    elif is_gregorian_leap_year(year):
        correction = 1
    else:
        correction = 2

    month = (12 * (prior_days + correction) + 373) // 367
    day = rd - fixed_from_gregorian(year, month, 1) + 1
    if month < 1 or day < 1:
        raise InvariantViolation(f"negative calendar component for R.D. {rd}: month={month} day={day}")
    return (year, month, day)
