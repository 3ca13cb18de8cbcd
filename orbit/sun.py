"""
Low-precision solar ephemeris in the Plan13 geocentric frame.
"""

import logging
import math
from dataclasses import dataclass

import numpy as np

from .constants import AU, CNS, EQC1, EQC2, G0, MAS0, MASD, RE, SNS, WE, WW, YG
from .timebase import DateTime, coerce_time, day_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SunState:
    """Sun direction and position at one instant, produced by predict_sun()."""

    time: DateTime
    celestial_direction: np.ndarray  # SUN, unit vector, inertial
    direction: np.ndarray  # H, unit vector, geocentric
    position: np.ndarray  # H * AU, km
    true_longitude: float  # TAS, rad
    gha_aries: float  # GHAE at `time`, rad

    @property
    def range(self) -> float:
        return AU


def predict_sun(when=None) -> SunState:
    """
    Compute the Sun's position at `when`.

    Mean longitude and mean anomaly advance linearly from the reference
    epoch; a two-term equation of centre gives the true longitude.
    """
    when = coerce_time(when)

    # Elapsed time since YG, Jan 0.0
    T = when.elapsed_days(DateTime(day_number(YG, 1, 0), 0.0))

    GHAE = math.radians(G0) + T * WE  # GHA Aries
    MRSE = math.radians(G0) + T * WW + math.pi  # Mean RA Sun
    MASE = math.radians(MAS0 + T * MASD)  # Mean anomaly of the Sun
    TAS = MRSE + EQC1 * math.sin(MASE) + EQC2 * math.sin(2.0 * MASE)

    C, S = math.cos(TAS), math.sin(TAS)
    SUN = np.array([C, S * CNS, S * SNS])

    C, S = math.cos(-GHAE), math.sin(-GHAE)
    H = np.array([
        SUN[0] * C - SUN[1] * S,
        SUN[0] * S + SUN[1] * C,
        SUN[2],
    ])
    position = H * AU

    for vec in (SUN, H, position):
        vec.setflags(write=False)

    logger.debug(f"Sun @ {when}: TAS={math.degrees(TAS) % 360.0:.4f}deg")

    return SunState(
        time=when,
        celestial_direction=SUN,
        direction=H,
        position=position,
        true_longitude=TAS,
        gha_aries=GHAE,
    )


def is_sunlit(state, sun: SunState) -> bool:
    """
    Whether a satellite is outside the Earth's shadow.

    Uses a cylindrical shadow of radius RE along the anti-Sun direction.

    Args:
        state: SatelliteState (or anything with a geocentric `position`)
        sun: SunState at the same instant
    """
    r_sat = np.asarray(state.position, dtype=np.float64)
    u_sun = sun.direction

    L = np.dot(r_sat, u_sun)
    if L > 0:  # Sun side
        return True

    # Distance from the Earth-Sun axis
    D = np.linalg.norm(r_sat - L * u_sun)
    return bool(D > RE)
