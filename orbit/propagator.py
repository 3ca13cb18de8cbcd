"""
Plan13 orbit propagation.

Advances the mean elements with linear J2 precession and a first-order
drag model, solves Kepler's equation by Newton's method and rotates the
orbital-plane state into the rotating geocentric frame.
"""

import logging
import math
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .constants import RE, WE
from .elements import OrbitalElementSet
from .errors import ConvergenceError
from .timebase import DateTime, coerce_time

logger = logging.getLogger(__name__)

KEPLER_TOLERANCE = 1e-5  # rad
KEPLER_MAX_ITERATIONS = 100

TWO_PI = 2.0 * math.pi


@dataclass(frozen=True, eq=False)
class SatelliteState:
    """
    Satellite state at one instant, produced by predict().

    Vectors are numpy arrays in km and km/s.
    """

    time: DateTime
    position: np.ndarray  # S, geocentric (Earth-fixed)
    velocity: np.ndarray  # V, geocentric
    celestial_position: np.ndarray  # SAT, inertial
    celestial_velocity: np.ndarray  # VEL, inertial
    plane_position: Tuple[float, float]  # Sx, Sy in the orbit plane
    plane_velocity: Tuple[float, float]  # Vx, Vy in the orbit plane
    range: float  # RS, distance from Earth centre
    mean_anomaly: float
    eccentric_anomaly: float
    revolution: int  # RN, current orbit number
    gha_aries: float  # GHAA at `time`, rad

    @property
    def altitude_km(self) -> float:
        """Height above a spherical Earth of equatorial radius."""
        return self.range - RE


def solve_kepler(mean_anomaly: float, eccentricity: float,
                 tolerance: float = KEPLER_TOLERANCE,
                 max_iterations: int = KEPLER_MAX_ITERATIONS) -> Tuple[float, int]:
    """
    Solve M = E - e*sin(E) for the eccentric anomaly by Newton's method.

    Starts from E = M and stops once the correction is below `tolerance`.

    Args:
        mean_anomaly: M in radians
        eccentricity: e in [0, 1)
        tolerance: Correction threshold in radians
        max_iterations: Iteration cap

    Returns:
        (eccentric_anomaly, iterations)

    Raises:
        ConvergenceError: cap reached before the correction fell below tolerance
    """
    ea = mean_anomaly
    for iteration in range(1, max_iterations + 1):
        dnom = 1.0 - eccentricity * math.cos(ea)
        d = (ea - eccentricity * math.sin(ea) - mean_anomaly) / dnom
        ea -= d
        if abs(d) < tolerance:
            if iteration > 20:
                logger.warning(f"Slow Kepler convergence: {iteration} iterations (e={eccentricity:.4f})")
            return ea, iteration

    raise ConvergenceError(mean_anomaly, eccentricity, max_iterations)


def predict(elements: OrbitalElementSet, when=None,
            max_iterations: int = KEPLER_MAX_ITERATIONS) -> SatelliteState:
    """
    Compute the satellite state at `when`.

    Args:
        elements: Parsed element set
        when: DateTime or datetime to propagate to (default: now)
        max_iterations: Kepler iteration cap

    Returns:
        SatelliteState

    Raises:
        ConvergenceError: Kepler's equation did not converge
    """
    when = coerce_time(when)
    ec = elements.eccentricity

    # Elapsed time since epoch, days
    T = when.elapsed_days(elements.epoch)

    # Linear drag terms
    DT = elements.dc * T / 2.0
    KD = 1.0 + 4.0 * DT
    KDP = 1.0 - 7.0 * DT

    # Mean anomaly at `when`, whole revolutions stripped
    M = elements.mean_anomaly + elements.mean_motion * T * (1.0 - 3.0 * DT)
    DR = math.floor(M / TWO_PI)
    M -= DR * TWO_PI
    RN = elements.revolution + int(DR)

    EA, iterations = solve_kepler(M, ec, max_iterations=max_iterations)
    C_EA = math.cos(EA)
    S_EA = math.sin(EA)
    DNOM = 1.0 - ec * C_EA

    A = elements.a0 * KD
    B = elements.b0 * KD
    RS = A * DNOM

    # Position and velocity in the plane of the ellipse
    Sx = A * (C_EA - ec)
    Sy = B * S_EA
    Vx = -A * S_EA / DNOM * elements.n0
    Vy = B * C_EA / DNOM * elements.n0

    AP = elements.arg_perigee + elements.wd * T * KDP
    CW, SW = math.cos(AP), math.sin(AP)
    RAAN = elements.raan + elements.qd * T * KDP
    CQ, SQ = math.cos(RAAN), math.sin(RAAN)
    CI, SI = math.cos(elements.inclination), math.sin(elements.inclination)

    # Plane -> celestial, [C] = [RAAN][IN][AP]
    C = np.array([
        [CW * CQ - SW * CI * SQ, -SW * CQ - CW * CI * SQ, SI * SQ],
        [CW * SQ + SW * CI * CQ, -SW * SQ + CW * CI * CQ, -SI * CQ],
        [SW * SI, CW * SI, CI],
    ])

    # Plane z components are zero
    SAT = C[:, :2] @ np.array([Sx, Sy])
    VEL = C[:, :2] @ np.array([Vx, Vy])

    # Celestial -> geocentric by the GHA of Aries at elapsed time T
    GHAA = elements.ghae + WE * T
    CG, SG = math.cos(-GHAA), math.sin(-GHAA)
    R = np.array([
        [CG, -SG, 0.0],
        [SG, CG, 0.0],
        [0.0, 0.0, 1.0],
    ])

    S = R @ SAT
    V = R @ VEL

    logger.debug(f"{elements.name or elements.catalog_number} @ {when}: "
                 f"T={T:.6f}d RN={RN} EA={EA:.6f} ({iterations} it) RS={RS:.3f}km")

    for vec in (S, V, SAT, VEL):
        vec.setflags(write=False)

    return SatelliteState(
        time=when,
        position=S,
        velocity=V,
        celestial_position=SAT,
        celestial_velocity=VEL,
        plane_position=(Sx, Sy),
        plane_velocity=(Vx, Vy),
        range=RS,
        mean_anomaly=M,
        eccentric_anomaly=EA,
        revolution=RN,
        gha_aries=GHAA,
    )
