"""
Exceptions raised by the orbit engine.
"""

from typing import Optional


class TrackingError(Exception):
    """Base class for orbit engine errors."""


class TLEParseError(TrackingError, ValueError):
    """A TLE line or field could not be parsed."""

    def __init__(self, field: str, message: str, value: Optional[str] = None):
        self.field = field
        self.value = value
        detail = f"{field}: {message}"
        if value is not None:
            detail += f" (got {value!r})"
        super().__init__(detail)


class ConvergenceError(TrackingError, ArithmeticError):
    """Kepler's equation did not converge within the iteration limit."""

    def __init__(self, mean_anomaly: float, eccentricity: float, iterations: int):
        self.mean_anomaly = mean_anomaly
        self.eccentricity = eccentricity
        self.iterations = iterations
        super().__init__(
            f"Kepler solve did not converge after {iterations} iterations "
            f"(M={mean_anomaly:.6f} rad, e={eccentricity:.7f})"
        )


class InvalidDateError(TrackingError, ValueError):
    """Calendar fields out of range or outside the supported date window."""
