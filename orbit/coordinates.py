"""
Coordinate transforms from the geocentric frame.
Supports: ground track (lat/lon), topocentric look angles (az/alt),
range, range rate and Doppler shift.
"""

import numpy as np
from typing import Tuple

from .constants import RE, FL, C_KM_S
from .observer import Observer

E2 = 2 * FL - FL ** 2  # Eccentricity squared


def _position(target) -> np.ndarray:
    position = getattr(target, 'position', target)
    return np.asarray(position, dtype=np.float64)


def ground_track(state) -> Tuple[float, float]:
    """
    Sub-point of a propagated state.

    Args:
        state: SatelliteState or SunState

    Returns:
        (latitude, longitude) in degrees, geocentric latitude
    """
    x, y, z = _position(state)
    lat = np.degrees(np.arcsin(np.clip(z / state.range, -1.0, 1.0)))
    lng = np.degrees(np.arctan2(y, x))
    return float(lat), float(lng)


def _ellipsoid_height(p, z, lat, N):
    # p/cos(lat) is singular on the polar axis
    if abs(lat) > np.pi / 4:
        return z / np.sin(lat) - N * (1 - E2)
    return p / np.cos(lat) - N


def geodetic_sub_point(state) -> Tuple[float, float, float]:
    """
    Geodetic sub-point on the Plan13 ellipsoid.
    Uses iterative method (Bowring's formula).

    Args:
        state: SatelliteState, SunState or geocentric position (km)

    Returns:
        (lat, lon, height) in degrees and km
    """
    x, y, z = _position(state)

    lon = np.arctan2(y, x)
    p = np.sqrt(x**2 + y**2)

    # Initial latitude estimate
    lat = np.arctan2(z, p * (1 - E2))

    for _ in range(5):
        N = RE / np.sqrt(1 - E2 * np.sin(lat) ** 2)
        alt = _ellipsoid_height(p, z, lat, N)
        lat = np.arctan2(z, p * (1 - E2 * N / (N + alt)))

    N = RE / np.sqrt(1 - E2 * np.sin(lat) ** 2)
    alt = _ellipsoid_height(p, z, lat, N)

    return float(np.degrees(lat)), float(np.degrees(lon)), float(alt)


def line_of_sight(target, observer: Observer) -> np.ndarray:
    """
    Unit vector from the observer to the target.

    Returns:
        Unit LOS vector [x, y, z]
    """
    los = _position(target) - observer.O
    los_norm = np.linalg.norm(los)

    if los_norm == 0:
        return np.zeros(3)

    return los / los_norm


def slant_range(target, observer: Observer) -> float:
    """Distance from observer to target in km."""
    return float(np.linalg.norm(_position(target) - observer.O))


def look_angles(target, observer: Observer) -> Tuple[float, float]:
    """
    Altitude and azimuth of a target seen from the observer.

    Args:
        target: SatelliteState, SunState or geocentric position (km)
        observer: Ground station

    Returns:
        (altitude, azimuth) in degrees; azimuth in [0, 360)
    """
    R = line_of_sight(target, observer)

    u = np.dot(R, observer.U)
    e = np.dot(R, observer.E)
    n = np.dot(R, observer.N)

    azimuth = np.degrees(np.arctan2(e, n))
    if azimuth < 0.0:
        azimuth += 360.0
    # tiny negative angles round up to 360.0
    if azimuth >= 360.0:
        azimuth = 0.0
    altitude = np.degrees(np.arcsin(np.clip(u, -1.0, 1.0)))

    return float(altitude), float(azimuth)


def range_rate(state, observer: Observer) -> float:
    """
    Rate of change of the observer-satellite distance.

    Resolves the satellite-minus-observer velocity along the unit range
    vector. Positive when receding.

    Returns:
        Range rate in km/s
    """
    R = line_of_sight(state, observer)
    return float(np.dot(np.asarray(state.velocity) - observer.V, R))


def doppler_shift(frequency: float, rate_km_s: float) -> float:
    """
    Doppler shift of a carrier for a given range rate.

    Doppler formula:
        f_doppler = -f_carrier * range_rate / c

    Args:
        frequency: Carrier frequency in Hz
        rate_km_s: Range rate in km/s

    Returns:
        Doppler shift in Hz
    """
    return -(frequency / C_KM_S) * rate_km_s


def corrected_frequencies(downlink: float, uplink: float, rate_km_s: float) -> Tuple[float, float]:
    """
    Frequencies to tune for a satellite moving at `rate_km_s`.

    Returns:
        (receive frequency, transmit frequency) in the units given
    """
    rx = downlink + doppler_shift(downlink, rate_km_s)
    tx = uplink - doppler_shift(uplink, rate_km_s)
    return rx, tx


def footprint_radius(state) -> float:
    """Angular radius of the visibility circle around the sub-point, degrees."""
    return float(np.degrees(np.arccos(RE / state.range)))
