"""
Universal Transverse Mercator projection.

The transverse Mercator is evaluated with Krueger's series in the third
flattening, carried to sixth order as described in C. F. F. Karney,
"Transverse Mercator with an accuracy of a few nanometers" (J. Geodesy, 2011).
Within a UTM zone the series agree with the exact projection to well under
10 nanometers.

A batch is always projected in a single zone. Unless a zone is supplied, it
is the zone of the first point in the batch; points from neighbouring zones
are projected (with growing distortion) relative to that zone's central
meridian rather than their own.
"""

__all__ = [
    'central_meridian', 'ellipsoid_to_utm', 'utm_to_ellipsoid', 'utm_zone'
]

from functools import lru_cache
import math
from typing import Optional, Tuple

import numpy as np
import numpy.typing as npt

from geoframes._const import (
    UTM_FALSE_EASTING, UTM_FALSE_NORTHING_SOUTH, UTM_MAX_LATITUDE, UTM_MIN_LATITUDE,
    UTM_SCALE_FACTOR, UTM_ZONE_WIDTH
)
from geoframes.ellipsoid import Ellipsoid, WGS84
from geoframes.utils.functions import as_points, normalize_longitude, validate_latitudes
from geoframes.utils.logging import warn_once

_MAX_NEWTON_ITERATIONS = 10
_NEWTON_TOLERANCE = math.sqrt(np.finfo(float).eps) / 10


def utm_zone(longitude: float) -> int:
    """
    The UTM zone (1-60) containing a longitude. Longitudes outside [-180, 180)
    are wrapped first.

    Args:
        longitude:
            The longitude, in degrees

    Returns:
        int
    """
    if not math.isfinite(longitude):
        raise ValueError(f'Cannot determine the UTM zone of longitude {longitude}')

    return int(((longitude + 180.) % 360.) // UTM_ZONE_WIDTH) + 1


def central_meridian(zone: int) -> float:
    """The longitude (in degrees) of a UTM zone's central meridian"""
    _validate_zone(zone)
    return zone * UTM_ZONE_WIDTH - 183.


def _validate_zone(zone: int) -> None:
    try:
        valid = not isinstance(zone, bool) and int(zone) == zone and 1 <= zone <= 60
    except (TypeError, ValueError, OverflowError):
        valid = False

    if not valid:
        raise ValueError(f'UTM zone must be an integer in [1, 60], got {zone!r}')


@lru_cache(maxsize=16)
def _krueger_coefficients(
    ellipsoid: Ellipsoid
) -> Tuple[float, Tuple[float, ...], Tuple[float, ...]]:
    """
    Rectifying radius and the forward (alpha) and inverse (beta) Krueger series
    coefficients for an ellipsoid.

    Returns:
        (A, alpha, beta), where alpha and beta hold the coefficients of
        sin(2j * xi) for j = 1..6
    """
    n = ellipsoid.n
    n2 = n * n

    A = ellipsoid.a / (1 + n) * (1 + n2 * (1 / 4 + n2 * (1 / 64 + n2 / 256)))

    alpha = (
        n * (1 / 2 + n * (-2 / 3 + n * (5 / 16 + n * (41 / 180 + n * (
            -127 / 288 + n * 7891 / 37800))))),
        n ** 2 * (13 / 48 + n * (-3 / 5 + n * (557 / 1440 + n * (281 / 630 + n * (
            -1983433 / 1935360))))),
        n ** 3 * (61 / 240 + n * (-103 / 140 + n * (15061 / 26880 + n * 167603 / 181440))),
        n ** 4 * (49561 / 161280 + n * (-179 / 168 + n * 6601661 / 7257600)),
        n ** 5 * (34729 / 80640 + n * -3418889 / 1995840),
        n ** 6 * 212378941 / 319334400,
    )
    beta = (
        n * (1 / 2 + n * (-2 / 3 + n * (37 / 96 + n * (-1 / 360 + n * (
            -81 / 512 + n * 96199 / 604800))))),
        n ** 2 * (1 / 48 + n * (1 / 15 + n * (-437 / 1440 + n * (46 / 105 + n * (
            -1118711 / 3870720))))),
        n ** 3 * (17 / 480 + n * (-37 / 840 + n * (-209 / 4480 + n * 5569 / 90720))),
        n ** 4 * (4397 / 161280 + n * (-11 / 504 + n * -830251 / 7257600)),
        n ** 5 * (4583 / 161280 + n * -108847 / 3991680),
        n ** 6 * 20648693 / 638668800,
    )
    return A, alpha, beta


def _conformal_tau(tau: np.ndarray, e: float) -> np.ndarray:
    """tan of the conformal latitude, given tan of the geodetic latitude"""
    sigma = np.sinh(e * np.arctanh(e * tau / np.hypot(1., tau)))
    return tau * np.hypot(1., sigma) - sigma * np.hypot(1., tau)


def _geodetic_tau(taup: np.ndarray, e: float) -> np.ndarray:
    """
    Invert _conformal_tau by Newton's method. Converges in two or three
    iterations for any latitude.
    """
    e2m = 1 - e * e
    tau = taup.copy()
    for _ in range(_MAX_NEWTON_ITERATIONS):
        taupi = _conformal_tau(tau, e)
        dtau = (
            (taup - taupi) / np.hypot(1., taupi)
            * (1 + e2m * tau * tau) / (e2m * np.hypot(1., tau))
        )
        tau = tau + dtau
        if np.all(np.abs(dtau) < _NEWTON_TOLERANCE * np.maximum(1., np.abs(taup))):
            break

    return tau


def _check_batch(ell: np.ndarray, zone: int) -> None:
    """Warn about points that do not belong in a single UTM zone batch"""
    lat, lon = ell[:, 0], ell[:, 1]
    finite = np.isfinite(lon)
    zones = ((lon[finite] + 180.) % 360.) // UTM_ZONE_WIDTH + 1
    if np.any(zones != zone):
        warn_once(
            'UTM batch spans multiple zones; all points are projected in zone %s. '
            '(this warning will not repeat)',
            zone
        )

    if np.any((lat < UTM_MIN_LATITUDE) | (lat > UTM_MAX_LATITUDE)):
        warn_once(
            'Latitudes outside the UTM band [%s, %s] are projected but not covered by UTM. '
            '(this warning will not repeat)',
            UTM_MIN_LATITUDE, UTM_MAX_LATITUDE
        )


def ellipsoid_to_utm(
    points: npt.ArrayLike,
    ellipsoid: Ellipsoid = WGS84,
    zone: Optional[int] = None,
) -> Tuple[np.ndarray, int]:
    """
    Project geodetic coordinates to UTM.

    All points in a batch are projected in the same zone, which is the zone
    of the first point unless given explicitly. Callers must not mix points
    from different zones in one batch; doing so is not an error, but those
    points will be projected relative to the wrong central meridian.

    If the first point lies south of the equator, the whole batch receives the
    southern hemisphere false northing of 10,000,000 m.

    Args:
        points:
            A batch of (latitude, longitude, altitude) points; angles in
            degrees, altitude in meters

        ellipsoid:
            The reference ellipsoid (default WGS84)

        zone: (Optional)
            Force projection into this zone instead of the first point's zone

    Returns:
        Tuple of (np.ndarray of shape (N, 3) of (easting, northing, height),
        the zone number)
    """
    ell = as_points(points)
    validate_latitudes(ell[:, 0])

    if zone is None:
        if not len(ell):
            raise ValueError('Cannot determine the UTM zone of an empty batch.')
        zone = utm_zone(ell[0, 1])
    else:
        _validate_zone(zone)
        zone = int(zone)

    _check_batch(ell, zone)

    A, alpha, _ = _krueger_coefficients(ellipsoid)
    e = ellipsoid.e

    dlon = ell[:, 1] - central_meridian(zone)
    # Wrap only out-of-range offsets
    in_range = (dlon >= -180.) & (dlon < 180.)
    dlon = np.where(in_range, dlon, normalize_longitude(dlon))

    lam = np.deg2rad(dlon)
    tau = np.tan(np.deg2rad(ell[:, 0]))
    taup = _conformal_tau(tau, e)

    cos_lam = np.cos(lam)
    xip = np.arctan2(taup, cos_lam)
    etap = np.arcsinh(np.sin(lam) / np.hypot(taup, cos_lam))

    xi = xip.copy()
    eta = etap.copy()
    for j, coeff in enumerate(alpha, start=1):
        xi += coeff * np.sin(2 * j * xip) * np.cosh(2 * j * etap)
        eta += coeff * np.cos(2 * j * xip) * np.sinh(2 * j * etap)

    easting = UTM_FALSE_EASTING + UTM_SCALE_FACTOR * A * eta
    northing = UTM_SCALE_FACTOR * A * xi
    if len(ell) and ell[0, 0] < 0:
        northing = northing + UTM_FALSE_NORTHING_SOUTH

    return np.stack([easting, northing, ell[:, 2]], axis=-1), zone


def utm_to_ellipsoid(
    points: npt.ArrayLike,
    zone: int,
    is_northern_hemisphere: bool = True,
    ellipsoid: Ellipsoid = WGS84,
) -> np.ndarray:
    """
    Convert UTM coordinates back to geodetic coordinates.

    Args:
        points:
            A batch of (easting, northing, height) points, in meters

        zone:
            The UTM zone (1-60) of the whole batch

        is_northern_hemisphere:
            (Default True) If False, northings are taken to include the southern
            hemisphere false northing of 10,000,000 m

        ellipsoid:
            The reference ellipsoid (default WGS84)

    Returns:
        np.ndarray of shape (N, 3) of (latitude, longitude, altitude); angles
        in degrees, altitude in meters
    """
    _validate_zone(zone)
    utm = as_points(points)
    A, _, beta = _krueger_coefficients(ellipsoid)

    northing = utm[:, 1]
    if not is_northern_hemisphere:
        northing = northing - UTM_FALSE_NORTHING_SOUTH

    xi = northing / (UTM_SCALE_FACTOR * A)
    eta = (utm[:, 0] - UTM_FALSE_EASTING) / (UTM_SCALE_FACTOR * A)

    xip = xi.copy()
    etap = eta.copy()
    for j, coeff in enumerate(beta, start=1):
        xip -= coeff * np.sin(2 * j * xi) * np.cosh(2 * j * eta)
        etap -= coeff * np.cos(2 * j * xi) * np.sinh(2 * j * eta)

    sinh_etap = np.sinh(etap)
    cos_xip = np.cos(xip)
    taup = np.sin(xip) / np.hypot(sinh_etap, cos_xip)
    lam = np.arctan2(sinh_etap, cos_xip)

    tau = _geodetic_tau(taup, ellipsoid.e)
    lat = np.rad2deg(np.arctan(tau))
    lon = np.rad2deg(lam) + central_meridian(zone)

    return np.stack([lat, lon, utm[:, 2]], axis=-1)
