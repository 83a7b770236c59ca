"""
Conversions between ECEF coordinates and a local East-North-Up tangent plane.

The two directions take different origin parameters. Forward conversions take
only (lat0, lon0), which orient the axes, and measure every point from the
first point of the batch. Inverse conversions take (lat0, lon0, alt0) and add
back the ECEF position of that origin. A round trip is exact when
(lat0, lon0, alt0) are the geodetic coordinates of the forward batch's first
point, which is how a local frame is normally anchored at a reference fix.
"""

__all__ = ['ecef_to_enu', 'enu_rotation', 'enu_to_ecef']

import numpy as np
import numpy.typing as npt

from geoframes.ecef import ellipsoid_to_ecef
from geoframes.ellipsoid import Ellipsoid, WGS84
from geoframes.utils.functions import as_points, validate_latitudes


def enu_rotation(lat0: float, lon0: float) -> np.ndarray:
    """
    The rotation from ECEF-frame deltas to East/North/Up axes at a given origin.

    Args:
        lat0:
            Origin latitude, in degrees

        lon0:
            Origin longitude, in degrees

    Returns:
        np.ndarray of shape (3, 3), whose rows are the East, North and Up unit vectors
    """
    validate_latitudes(lat0)
    lat = np.deg2rad(lat0)
    lon = np.deg2rad(lon0)

    sin_lat = np.sin(lat)
    cos_lat = np.cos(lat)
    sin_lon = np.sin(lon)
    cos_lon = np.cos(lon)

    return np.array([
        [-sin_lon, cos_lon, 0.],
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [cos_lat * cos_lon, cos_lat * sin_lon, sin_lat],
    ])


def ecef_to_enu(points: npt.ArrayLike, lat0: float, lon0: float) -> np.ndarray:
    """
    Convert ECEF coordinates to ENU coordinates, with axes oriented at
    (lat0, lon0) and measured from the first point of the batch.

    (lat0, lon0) are normally the geodetic coordinates of that first point.
    The origin altitude is not a parameter: it is implied by the first point.

    Args:
        points:
            A batch of (X, Y, Z) points, in meters

        lat0:
            Origin latitude, in degrees

        lon0:
            Origin longitude, in degrees

    Returns:
        np.ndarray of shape (N, 3) of (east, north, up) in meters
    """
    xyz = as_points(points)
    R = enu_rotation(lat0, lon0)
    if not len(xyz):
        return xyz

    # Row-vector form of R @ (xyz - xyz[0])
    return (xyz - xyz[0]) @ R.T


def enu_to_ecef(
    points: npt.ArrayLike,
    lat0: float,
    lon0: float,
    alt0: float,
    ellipsoid: Ellipsoid = WGS84
) -> np.ndarray:
    """
    Convert ENU coordinates about the origin (lat0, lon0, alt0) to ECEF coordinates.

    Args:
        points:
            A batch of (east, north, up) points, in meters

        lat0:
            Origin latitude, in degrees

        lon0:
            Origin longitude, in degrees

        alt0:
            Origin altitude, in meters above the ellipsoid

        ellipsoid:
            The reference ellipsoid (default WGS84)

    Returns:
        np.ndarray of shape (N, 3) of (X, Y, Z) in meters
    """
    enu = as_points(points)
    R = enu_rotation(lat0, lon0)
    origin = ellipsoid_to_ecef([lat0, lon0, alt0], ellipsoid)

    return enu @ R + origin
