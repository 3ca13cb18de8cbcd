"""
Plan13 orbit engine: time base, TLE elements, propagation,
coordinate transforms and solar ephemeris.
"""

from .errors import TrackingError, TLEParseError, ConvergenceError, InvalidDateError
from .timebase import DateTime, day_number, calendar_date, coerce_time
from .observer import Observer
from .elements import OrbitalElementSet, parse_tle
from .propagator import SatelliteState, solve_kepler, predict
from .coordinates import (
    ground_track, geodetic_sub_point, line_of_sight, look_angles, slant_range,
    range_rate, doppler_shift, corrected_frequencies, footprint_radius
)
from .sun import SunState, predict_sun, is_sunlit

__all__ = [
    'TrackingError', 'TLEParseError', 'ConvergenceError', 'InvalidDateError',
    'DateTime', 'day_number', 'calendar_date', 'coerce_time',
    'Observer',
    'OrbitalElementSet', 'parse_tle',
    'SatelliteState', 'solve_kepler', 'predict',
    'ground_track', 'geodetic_sub_point', 'line_of_sight', 'look_angles', 'slant_range',
    'range_rate', 'doppler_shift', 'corrected_frequencies', 'footprint_radius',
    'SunState', 'predict_sun', 'is_sunlit',
]
