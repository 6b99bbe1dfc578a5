"""Ephemeris adapters/providers (optional).

Thin wrappers around JPL ephemeris files, used only to measure the series
model against a numerically integrated ephemeris.
Install with:
  pip install "lunarphase[ephemeris]"
"""

from ..core.errors import EphemerisUnavailableError


def require_ephemeris():
    """Raise a clear error if ephemeris extras aren't installed."""
    try:
        import jplephem  # noqa: F401
        import de422  # noqa: F401
    except ImportError as e:
        raise EphemerisUnavailableError('Ephemeris support requires: pip install "lunarphase[ephemeris]"') from e
