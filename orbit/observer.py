"""
Ground station frame: topocentric basis and rotating geocentric position.
"""

import logging

import numpy as np

from .constants import RE, RP, W0

logger = logging.getLogger(__name__)


class Observer:
    """
    Fixed ground site on an oblate, rotating Earth.

    Attributes:
        U, E, N: Unit up/east/north vectors (geocentric frame)
        O: Site position (km)
        V: Site velocity due to Earth rotation (km/s)
    """

    def __init__(self, name: str, latitude: float, longitude: float, height: float = 0.0):
        """
        Args:
            name: Station name
            latitude: Geodetic latitude in degrees (north positive)
            longitude: Longitude in degrees (east positive)
            height: Height above the ellipsoid in meters
        """
        if not -90.0 <= latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {latitude}")

        self.name = name
        self.latitude_deg = float(latitude)
        self.longitude_deg = float(longitude)
        self.height_m = float(height)

        self.LA = np.radians(latitude)
        self.LO = np.radians(longitude)
        self.HT = height / 1000.0

        CL, SL = np.cos(self.LA), np.sin(self.LA)
        CO, SO = np.cos(self.LO), np.sin(self.LO)

        self.U = np.array([CL * CO, CL * SO, SL])
        self.E = np.array([-SO, CO, 0.0])
        self.N = np.array([-SL * CO, -SL * SO, CL])

        # Radii of curvature on the ellipsoid
        D = np.sqrt(RE * RE * CL * CL + RP * RP * SL * SL)
        Rx = RE * RE / D + self.HT
        Rz = RP * RP / D + self.HT

        self.O = np.array([Rx * self.U[0], Rx * self.U[1], Rz * self.U[2]])
        self.V = np.array([-self.O[1] * W0, self.O[0] * W0, 0.0])

        for vec in (self.U, self.E, self.N, self.O, self.V):
            vec.setflags(write=False)

        logger.debug(f"Observer {name}: lat={latitude:.4f} lon={longitude:.4f} height={height:.1f}m")

    def __repr__(self):
        return (f"Observer({self.name!r}, {self.latitude_deg}, "
                f"{self.longitude_deg}, {self.height_m})")
