"""
Two-line element set parsing and the derived Plan13 orbit constants.

Field columns follow the NORAD two-line format. Angles are stored in
radians, mean motion in rad/day and the decay rate in rad/day^2.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Sequence

from .constants import GM, J2, RE, WE, YG, G0
from .errors import TLEParseError
from .timebase import DateTime, day_number

logger = logging.getLogger(__name__)

MIN_LINE_LENGTH = 68

# (line, start, end) column slices, 0-based and end-exclusive
TLE_FIELDS = {
    'catalog_number': (2, 2, 7),
    'epoch_year': (1, 18, 20),
    'epoch_day': (1, 20, 32),
    'decay_rate': (1, 33, 43),
    'inclination': (2, 8, 16),
    'raan': (2, 17, 25),
    'eccentricity': (2, 26, 33),
    'arg_perigee': (2, 34, 42),
    'mean_anomaly': (2, 43, 51),
    'mean_motion': (2, 52, 63),
    'revolution': (2, 63, 68),
}


@dataclass(frozen=True)
class OrbitalElementSet:
    """
    Mean orbital elements of one satellite plus cached derived constants.

    Build with parse_tle(); every field is fixed at construction.
    """

    name: str
    catalog_number: int
    epoch_year: int
    epoch_day: float
    decay_rate: float  # M2, rad/day^2
    inclination: float  # IN, rad
    raan: float  # RA, rad
    eccentricity: float  # EC
    arg_perigee: float  # WP, rad
    mean_anomaly: float  # MA, rad
    mean_motion: float  # MM, rad/day
    revolution: int  # RV

    # Derived
    epoch: DateTime = field(init=False)
    n0: float = field(init=False)  # Mean motion, rad/s
    a0: float = field(init=False)  # Semi-major axis, km
    b0: float = field(init=False)  # Semi-minor axis, km
    pc: float = field(init=False)  # Precession constant, rad/day
    qd: float = field(init=False)  # Node precession rate, rad/day
    wd: float = field(init=False)  # Perigee precession rate, rad/day
    dc: float = field(init=False)  # Drag coefficient, 1/day
    ghae: float = field(init=False)  # GHA Aries at epoch, rad

    line1: str = field(default='', compare=False, repr=False)
    line2: str = field(default='', compare=False, repr=False)

    def __post_init__(self):
        derived = {}

        # Epoch as day number of Jan 0 plus whole days, and fraction
        whole_days = int(self.epoch_day)
        derived['epoch'] = DateTime(day_number(self.epoch_year, 1, 0) + whole_days,
                                    self.epoch_day - whole_days)

        n0 = self.mean_motion / 86400.0
        a0 = (GM / (n0 * n0)) ** (1.0 / 3.0)
        b0 = a0 * math.sqrt(1.0 - self.eccentricity * self.eccentricity)
        pc = RE * a0 / (b0 * b0)
        pc = 1.5 * J2 * pc * pc * self.mean_motion
        ci = math.cos(self.inclination)

        derived['n0'] = n0
        derived['a0'] = a0
        derived['b0'] = b0
        derived['pc'] = pc
        derived['qd'] = -pc * ci
        derived['wd'] = pc * (5.0 * ci * ci - 1.0) / 2.0
        derived['dc'] = -2.0 * self.decay_rate / (3.0 * self.mean_motion)

        epoch = derived['epoch']
        teg = epoch.elapsed_days(DateTime(day_number(YG, 1, 0), 0.0))
        derived['ghae'] = math.radians(G0) + teg * WE

        for key, value in derived.items():
            object.__setattr__(self, key, value)

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> 'OrbitalElementSet':
        """Parse a 2-line or 3-line (name first) TLE block."""
        lines = [line for line in lines if line.strip()]
        if len(lines) == 3:
            return parse_tle(lines[0].strip(), lines[1], lines[2])
        if len(lines) == 2:
            return parse_tle('', lines[0], lines[1])
        raise TLEParseError('block', f"expected 2 or 3 lines, got {len(lines)}")

    @property
    def period_days(self) -> float:
        """Anomalistic period at epoch."""
        return 2.0 * math.pi / self.mean_motion

    def predict(self, when=None):
        """Propagate to `when` (default now); see orbit.propagator.predict."""
        from .propagator import predict
        return predict(self, when)


def _extract(lines: dict, name: str, convert: Callable):
    line_no, start, end = TLE_FIELDS[name]
    text = lines[line_no][start:end]
    if not text.strip():
        raise TLEParseError(name, f"empty field in line {line_no} columns {start + 1}-{end}", text)
    try:
        return convert(text)
    except ValueError as e:
        raise TLEParseError(name, f"invalid number in line {line_no} columns {start + 1}-{end}", text) from e


def _check_line(line: str, number: int) -> str:
    if line is None:
        raise TLEParseError(f'line{number}', "missing line")
    line = line.rstrip()
    if len(line) < MIN_LINE_LENGTH:
        raise TLEParseError(f'line{number}', f"too short ({len(line)} < {MIN_LINE_LENGTH} characters)")
    if line[0] != str(number):
        raise TLEParseError(f'line{number}', f"line number must be {number}", line[0])
    return line


def parse_tle(name: str, line1: str, line2: str) -> OrbitalElementSet:
    """
    Parse a two-line element set.

    Args:
        name: Satellite name (the optional line 0)
        line1: First element line
        line2: Second element line

    Returns:
        OrbitalElementSet with derived constants computed

    Raises:
        TLEParseError: a line is malformed or a field is not numeric
    """
    lines = {1: _check_line(line1, 1), 2: _check_line(line2, 2)}

    year = _extract(lines, 'epoch_year', int)
    # Historical NORAD convention
    if year < 58:
        year += 2000
    else:
        year += 1900

    eccentricity = _extract(lines, 'eccentricity', float) / 1e7
    if not 0.0 <= eccentricity < 1.0:
        raise TLEParseError('eccentricity', "must be in [0, 1)", lines[2][26:33])

    revs_per_day = _extract(lines, 'mean_motion', float)
    if revs_per_day <= 0.0:
        raise TLEParseError('mean_motion', "must be positive", lines[2][52:63])

    elements = OrbitalElementSet(
        name=name.strip(),
        catalog_number=_extract(lines, 'catalog_number', int),
        epoch_year=year,
        epoch_day=_extract(lines, 'epoch_day', float),
        # Scaled by 2*pi rather than converted from degrees
        decay_rate=2.0 * math.pi * _extract(lines, 'decay_rate', float),
        inclination=math.radians(_extract(lines, 'inclination', float)),
        raan=math.radians(_extract(lines, 'raan', float)),
        eccentricity=eccentricity,
        arg_perigee=math.radians(_extract(lines, 'arg_perigee', float)),
        mean_anomaly=math.radians(_extract(lines, 'mean_anomaly', float)),
        mean_motion=2.0 * math.pi * revs_per_day,
        revolution=_extract(lines, 'revolution', int),
        line1=lines[1],
        line2=lines[2],
    )

    logger.debug(f"Parsed TLE {elements.name or elements.catalog_number}: "
                 f"epoch={elements.epoch} a0={elements.a0:.3f}km e={eccentricity:.7f}")
    return elements
