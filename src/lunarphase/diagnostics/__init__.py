"""Diagnostics package.

- validate_events: optional (requires ephemeris + diagnostics extras)
"""

__all__ = ["validate_events"]
