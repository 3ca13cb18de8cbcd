"""
Cross-check of Plan13 look angles against SGP4.
Uses Skyfield for the reference propagation.
"""

import logging
from typing import Dict, Optional, Tuple

from skyfield.api import load, EarthSatellite, wgs84

from orbit import DateTime, Observer, calendar_date, look_angles, parse_tle, slant_range

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 86400.0


class SGP4Reference:
    """SGP4 look angles from Skyfield, sharing one timescale."""

    def __init__(self):
        self.ts = load.timescale()

    def time(self, when: DateTime):
        """Skyfield Time for `when`, keeping sub-second precision."""
        year, month, day = calendar_date(when.day_number)
        return self.ts.utc(year, month, day, 0, 0, when.day_fraction * SECONDS_PER_DAY)

    def look_angles(self, line1: str, line2: str, observer: Observer,
                    when: DateTime) -> Tuple[float, float, float]:
        """
        SGP4 altitude/azimuth of a satellite.

        Args:
            line1, line2: TLE lines
            observer: Ground station
            when: Instant (UTC)

        Returns:
            (altitude, azimuth, distance) in degrees and km
        """
        sat = EarthSatellite(line1, line2, ts=self.ts)
        site = wgs84.latlon(observer.latitude_deg, observer.longitude_deg,
                            elevation_m=observer.height_m)

        alt, az, distance = (sat - site).at(self.time(when)).altaz()
        return alt.degrees, az.degrees, distance.km


def reference_look_angles(line1: str, line2: str, observer: Observer, when: DateTime,
                          reference: Optional[SGP4Reference] = None) -> Tuple[float, float, float]:
    """SGP4 (altitude, azimuth, distance) for one instant; see SGP4Reference.look_angles."""
    if reference is None:
        reference = SGP4Reference()
    return reference.look_angles(line1, line2, observer, when)


def angle_difference(a: float, b: float) -> float:
    """Smallest absolute difference between two angles in degrees."""
    return abs((a - b + 180.0) % 360.0 - 180.0)


def compare_look_angles(name: str, line1: str, line2: str, observer: Observer,
                        when: DateTime, reference: Optional[SGP4Reference] = None) -> Dict:
    """
    Compare Plan13 and SGP4 look angles for one instant.

    Returns:
        Dict with plan13/sgp4 alt, az, range and their differences
    """
    elements = parse_tle(name, line1, line2)
    state = elements.predict(when)
    alt, az = look_angles(state, observer)

    ref_alt, ref_az, ref_range = reference_look_angles(line1, line2, observer, when, reference)

    result = {
        'name': name,
        'time': str(when),
        'plan13_alt': alt,
        'plan13_az': az,
        'plan13_range': slant_range(state, observer),
        'sgp4_alt': ref_alt,
        'sgp4_az': ref_az,
        'sgp4_range': ref_range,
        'd_alt': abs(alt - ref_alt),
        'd_az': angle_difference(az, ref_az),
    }
    logger.debug(f"Crosscheck {name} @ {when}: dalt={result['d_alt']:.3f} daz={result['d_az']:.3f}")
    return result
