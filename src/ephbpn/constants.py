"""
The `constants` module defines the angular, time and frame-bias constants of the
IAU 2006/2000A precession-nutation model.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
2pi. Units: *rad*
"""
D2PI = 2.0 * PI

"""
Constant to convert arcseconds to radians. Equal to pi/648000. Units: *rad/as*
"""
AS2R = PI / 648000.0

"""
Constant to convert milliarcseconds to radians. Units: *rad/mas*
"""
MAS2R = AS2R / 1000.0

"""
Constant to convert 0.1 microarcsecond (the unit of the nutation amplitudes) to radians.
Units: *rad/(0.1 uas)*
"""
U2R = AS2R / 1e7

"""
Arcseconds in a full circle. Units: *as*
"""
TURNAS = 1296000.0

# Time Constants

"""
Julian Date of the J2000.0 epoch. Units: *days*
"""
DJ00 = 2451545.0

"""
Days per Julian century. Units: *days*
"""
DJC = 36525.0

"""
Offset between the Gregorian day count and Julian Date used by :func:`ephbpn.time.caldate_to_jd`.
Units: *days*
"""
JD_GREGORIAN_OFFSET = 1721088.5

# Frame Bias

"""
Offsets of the mean J2000.0 pole and equinox from the ICRS, as fixed rotations
about the x, y and z axes. Units: *mas*

References:

1. IERS Conventions 2003, Chapter 5 (pole offsets 17.3 +/- 0.2 mas and
   5.1 +/- 0.2 mas, equinox offset 78 +/- 10 mas).
"""
BIAS_X_MAS = -5.1
BIAS_Y_MAS = -17.3
BIAS_Z_MAS = 78.0

"""
Mean obliquity of the ecliptic at J2000.0, IAU 2006. Units: *as*
"""
OBLIQUITY_J2000 = 84381.406
