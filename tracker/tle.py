"""
TLE catalog file loading.
Parses name/line1/line2 blocks into Plan13 element sets.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from orbit import OrbitalElementSet, TLEParseError, parse_tle

logger = logging.getLogger(__name__)


class TLEManager:
    """Element sets read from a three-line TLE text file."""

    def __init__(self, tle_file: str):
        """
        Initialize TLE manager with TLE file.

        Args:
            tle_file: Path to TLE file
        """
        self.tle_file = Path(tle_file)
        self.satellites: Dict[str, OrbitalElementSet] = {}

        self._load_tles()

    def _load_tles(self):
        """Load TLE data from file."""
        if not self.tle_file.exists():
            logger.error(f"TLE file not found: {self.tle_file}")
            raise FileNotFoundError(f"TLE file not found: {self.tle_file}")

        with open(self.tle_file, 'r') as f:
            lines = [line.rstrip('\r\n') for line in f if line.strip()]

        # Groups of 3 lines: name, line1, line2
        i = 0
        while i < len(lines) - 2:
            name = lines[i].strip()
            line1 = lines[i + 1]
            line2 = lines[i + 2]

            if not (line1.startswith('1 ') and line2.startswith('2 ')):
                logger.warning(f"Skipping unexpected line {i + 1} in {self.tle_file}: {lines[i]!r}")
                i += 1
                continue

            try:
                self.satellites[name] = parse_tle(name, line1, line2)
                logger.debug(f"Loaded TLE: {name}")
            except TLEParseError as e:
                logger.warning(f"Failed to parse TLE for {name}: {e}")

            i += 3

        logger.info(f"Loaded {len(self.satellites)} satellites from {self.tle_file}")

    def get_satellite(self, name: str) -> Optional[OrbitalElementSet]:
        """Get element set by name (exact, then case-insensitive)."""
        sat = self.satellites.get(name)
        if sat is None:
            wanted = name.strip().lower()
            for key, value in self.satellites.items():
                if key.lower() == wanted:
                    return value
        return sat

    def list_satellites(self) -> List[str]:
        """Get list of available satellite names."""
        return list(self.satellites.keys())
