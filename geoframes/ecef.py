"""
Conversions between geodetic (latitude, longitude, altitude) coordinates and
Earth-Centered-Earth-Fixed cartesian coordinates.
"""

__all__ = ['ellipsoid_to_ecef', 'ecef_to_ellipsoid']

import numpy as np
import numpy.typing as npt

from geoframes.ellipsoid import Ellipsoid, WGS84
from geoframes.utils.functions import as_points, validate_latitudes

# Fixed-point refinements applied to Bowring's latitude estimate
_ITERATIONS = 4


def ellipsoid_to_ecef(points: npt.ArrayLike, ellipsoid: Ellipsoid = WGS84) -> np.ndarray:
    """
    Convert geodetic coordinates to ECEF coordinates.

    Args:
        points:
            A batch of (latitude, longitude, altitude) points; angles in
            degrees, altitude in meters above the ellipsoid

        ellipsoid:
            The reference ellipsoid (default WGS84)

    Returns:
        np.ndarray of shape (N, 3) of (X, Y, Z) in meters
    """
    ell = as_points(points)
    validate_latitudes(ell[:, 0])

    lat = np.deg2rad(ell[:, 0])
    lon = np.deg2rad(ell[:, 1])
    alt = ell[:, 2]

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    # Radius of curvature in the prime vertical
    N = ellipsoid.a / np.sqrt(1 - ellipsoid.e2 * sin_lat * sin_lat)

    x = (N + alt) * cos_lat * cos_lon
    y = (N + alt) * cos_lat * sin_lon
    z = (N * (1 - ellipsoid.e2) + alt) * sin_lat
    return np.stack([x, y, z], axis=-1)


def ecef_to_ellipsoid(points: npt.ArrayLike, ellipsoid: Ellipsoid = WGS84) -> np.ndarray:
    """
    Convert ECEF coordinates to geodetic coordinates.

    Latitude is seeded with Bowring's closed-form estimate and refined by a
    fixed number of fixed-point iterations. Points on the polar axis are
    assigned a longitude of 0.

    Args:
        points:
            A batch of (X, Y, Z) points, in meters

        ellipsoid:
            The reference ellipsoid (default WGS84)

    Returns:
        np.ndarray of shape (N, 3) of (latitude, longitude, altitude); angles
        in degrees, altitude in meters
    """
    xyz = as_points(points)
    x, y, z = xyz[:, 0], xyz[:, 1], xyz[:, 2]
    a, b, e2 = ellipsoid.a, ellipsoid.b, ellipsoid.e2

    p = np.hypot(x, y)
    # atan2(+-0, -0) would give +-pi on the polar axis
    lon = np.where(p == 0, 0., np.arctan2(y, x))

    theta = np.arctan2(z * a, p * b)
    sin_theta = np.sin(theta)
    cos_theta = np.cos(theta)
    lat = np.arctan2(
        z + ellipsoid.ep2 * b * sin_theta ** 3,
        p - e2 * a * cos_theta ** 3,
    )

    for _ in range(_ITERATIONS):
        sin_lat = np.sin(lat)
        N = a / np.sqrt(1 - e2 * sin_lat * sin_lat)
        lat = np.arctan2(z + e2 * N * sin_lat, p)

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    # Finite at the poles, unlike p / cos(lat) - N
    alt = p * cos_lat + z * sin_lat - a * np.sqrt(1 - e2 * sin_lat * sin_lat)

    return np.stack([np.rad2deg(lat), np.rad2deg(lon), alt], axis=-1)
