"""
Plan13 physical and astronomical constants.

Units are kilometres, seconds and days as used by the G3RUH algorithm.
Sidereal and solar data refer to the 2014 reference epoch.
"""

import math

# WGS-84 Earth ellipsoid
RE = 6378.137  # Equatorial radius (km)
FL = 1.0 / 298.257224  # Flattening
RP = RE * (1.0 - FL)  # Polar radius (km)

GM = 3.986e5  # Earth's gravitational constant (km^3/s^2)
J2 = 1.08263e-3  # 2nd zonal coefficient of the gravity field

YM = 365.25  # Mean year (days)
YT = 365.2421874  # Tropical year (days)
WW = 2.0 * math.pi / YT  # Earth's rotation rate, rad/whole day
WE = 2.0 * math.pi + WW  # Earth's rotation rate, rad/day
W0 = WE / 86400.0  # Earth's rotation rate, rad/s

# Sidereal and solar data, valid from 2014 onwards
YG = 2014  # Reference year, Jan 0.0
G0 = 99.5828  # GHA Aries at YG (deg)
MAS0 = 356.4105  # Mean anomaly of the Sun at YG (deg)
MASD = 0.98560028  # Mean anomaly rate of the Sun (deg/day)
INS = math.radians(23.4375)  # Obliquity of the ecliptic
CNS = math.cos(INS)
SNS = math.sin(INS)
EQC1 = 0.03340  # Sun's equation of centre terms
EQC2 = 0.00035

AU = 149597870.7  # Astronomical unit (km)
C_KM_S = 299792.458  # Speed of light (km/s)
