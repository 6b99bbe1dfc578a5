class LunarPhaseError(Exception):
    """Base error."""

class InvariantViolation(LunarPhaseError, ValueError):
    """Raised when a caller breaks an input contract (malformed date, naive datetime, ...)."""

class EphemerisUnavailableError(LunarPhaseError, RuntimeError):
    """Raised when the optional ephemeris extras (jplephem + de422) are not installed."""
