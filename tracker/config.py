"""
Station configuration from the environment or a .env file.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from orbit import Observer

logger = logging.getLogger(__name__)

DEFAULT_STEP_SECONDS = 10.0


@dataclass
class StationConfig:
    """Ground station and tracking settings."""

    name: str
    latitude: float  # degrees
    longitude: float  # degrees
    height_m: float = 0.0
    tle_file: Optional[str] = None
    step_seconds: float = DEFAULT_STEP_SECONDS
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def observer(self) -> Observer:
        return Observer(self.name, self.latitude, self.longitude, self.height_m)


def _env_float(key: str, default: Optional[float] = None) -> Optional[float]:
    value = os.getenv(key)
    if value is None or value.strip() == '':
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ValueError(f"{key} must be a number, got {value!r}") from e


def load_config(name: Optional[str] = None, latitude: Optional[float] = None,
                longitude: Optional[float] = None, height_m: Optional[float] = None,
                tle_file: Optional[str] = None, step_seconds: Optional[float] = None,
                log_level: Optional[str] = None, log_file: Optional[str] = None,
                dotenv_path: Optional[str] = None) -> StationConfig:
    """
    Build station configuration.

    Explicit arguments take precedence over environment variables
    (STATION_NAME, STATION_LAT, STATION_LON, STATION_HEIGHT_M, TLE_FILE,
    TRACK_STEP_SECONDS, LOG_LEVEL, LOG_FILE), which may come from a .env file.

    Raises:
        ValueError: latitude/longitude missing or a numeric variable is malformed
    """
    load_dotenv(dotenv_path)

    if latitude is None:
        latitude = _env_float('STATION_LAT')
    if longitude is None:
        longitude = _env_float('STATION_LON')
    if latitude is None or longitude is None:
        raise ValueError(
            "Station position not found. Set STATION_LAT and STATION_LON "
            "in .env file or pass --lat/--lon."
        )

    config = StationConfig(
        name=name or os.getenv('STATION_NAME', 'station'),
        latitude=latitude,
        longitude=longitude,
        height_m=height_m if height_m is not None else _env_float('STATION_HEIGHT_M', 0.0),
        tle_file=tle_file or os.getenv('TLE_FILE') or None,
        step_seconds=step_seconds if step_seconds is not None
        else _env_float('TRACK_STEP_SECONDS', DEFAULT_STEP_SECONDS),
        log_level=log_level or os.getenv('LOG_LEVEL', 'INFO'),
        log_file=log_file or os.getenv('LOG_FILE') or None,
    )

    if config.step_seconds <= 0:
        raise ValueError(f"Tracking step must be positive, got {config.step_seconds}")

    logger.debug(f"Station config: {config}")
    return config
