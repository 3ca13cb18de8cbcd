"""
Host-side helpers for the Plan13 tracker: logging, station configuration,
TLE catalog files and SGP4 cross-checks.
"""

from .logging_config import setup_logging
from .config import StationConfig, load_config
from .tle import TLEManager
from .crosscheck import SGP4Reference, reference_look_angles, compare_look_angles, angle_difference

__all__ = [
    'setup_logging',
    'StationConfig', 'load_config',
    'TLEManager',
    'SGP4Reference', 'reference_look_angles', 'compare_look_angles', 'angle_difference',
]
