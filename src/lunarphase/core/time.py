from __future__ import annotations
import math
from datetime import MAXYEAR, MINYEAR, date, datetime, time, timedelta, timezone
from typing import Optional

from .errors import InvariantViolation
from ..reference.calendar import fixed_from_gregorian, gregorian_from_fixed

# Representable range: whatever `datetime` can hold, in UTC.
MIN_TIME = datetime.min.replace(tzinfo=timezone.utc)
MAX_TIME = datetime.max.replace(tzinfo=timezone.utc)

JD_EPOCH = 1721424.5  # JD at R.D. 0, 00:00 UTC

# Moments near the present resolve ~10 µs; conversions back to datetime are
# quantized to this step so that millisecond timestamps round-trip exactly.
_MS_PER_DAY = 86_400_000.0


def as_utc(dt: datetime) -> datetime:
    """Timezone-aware datetime -> same instant in UTC. Naive datetimes are rejected."""
    if dt.tzinfo is None or dt.utcoffset() is None:
        raise InvariantViolation("datetime must be timezone-aware (UTC)")
    return dt.astimezone(timezone.utc)


def moment_from_datetime(dt: datetime) -> float:
    """datetime (aware) -> moment (R.D. + fraction of a UTC day)."""
    dt = as_utc(dt)
    day_seconds = float(dt.hour * 3600 + dt.minute * 60 + dt.second) + dt.microsecond / 1_000_000.0
    return float(fixed_from_gregorian(dt.year, dt.month, dt.day)) + day_seconds / 86400.0


def datetime_from_moment(t: float) -> Optional[datetime]:
    """
    moment -> UTC datetime (millisecond resolution).

    Returns None if the instant is not representable as a `datetime`.
    """
    if not math.isfinite(t):
        return None
    rd = math.floor(t)
    ms = round((t - rd) * _MS_PER_DAY)
    y, m, d = gregorian_from_fixed(rd)
    if not (MINYEAR <= y <= MAXYEAR):
        return None
    try:
        return datetime(y, m, d, tzinfo=timezone.utc) + timedelta(milliseconds=ms)
    except OverflowError:
        return None


def moment_from_date(d: date) -> float:
    """date -> moment of its 00:00 UTC."""
    return float(fixed_from_gregorian(d.year, d.month, d.day))


def date_from_moment(t: float) -> Optional[date]:
    """moment -> UTC calendar date, or None if outside the `date` range."""
    if not math.isfinite(t):
        return None
    y, m, d = gregorian_from_fixed(t)
    if not (MINYEAR <= y <= MAXYEAR):
        return None
    return date(y, m, d)


def first_instant(d: date) -> datetime:
    return datetime.combine(d, time.min, tzinfo=timezone.utc)


def last_instant(d: date) -> datetime:
    return datetime.combine(d, time.max, tzinfo=timezone.utc)


def shift_days(dt: datetime, days: int) -> datetime:
    """dt + days, saturating at MIN_TIME / MAX_TIME instead of overflowing."""
    try:
        return dt + timedelta(days=days)
    except OverflowError:
        return MAX_TIME if days > 0 else MIN_TIME


# ============================================================
# Julian Date
# ============================================================

def jd_from_moment(t: float) -> float:
    return t + JD_EPOCH


def moment_from_jd(jd: float) -> float:
    return jd - JD_EPOCH
