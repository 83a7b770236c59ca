"""
Constants declarations for geoframes
"""

# WGS84 Ellipsoid Constants
WGS84_A = 6378137.0  # Major axis (meters)
WGS84_F = 1 / 298.257223563  # Flattening

# GRS80 Ellipsoid Constants
GRS80_A = 6378137.0
GRS80_F = 1 / 298.257222100882711243162837

# Universal Transverse Mercator
UTM_SCALE_FACTOR = 0.9996  # k0, on the central meridian
UTM_FALSE_EASTING = 500_000.0
UTM_FALSE_NORTHING_SOUTH = 10_000_000.0
UTM_ZONE_WIDTH = 6.0  # degrees
UTM_MIN_LATITUDE = -80.0
UTM_MAX_LATITUDE = 84.0
