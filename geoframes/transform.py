"""
Batch conversions between geodetic, ECEF, ENU and UTM coordinates
"""

__all__ = ['GeodeticTransform']

from typing import Optional, Tuple, Union

import numpy as np
import numpy.typing as npt
from pydantic import validate_call

from geoframes.ecef import ecef_to_ellipsoid, ellipsoid_to_ecef
from geoframes.ellipsoid import Ellipsoid, get_ellipsoid
from geoframes.enu import ecef_to_enu, enu_to_ecef
from geoframes.utm import ellipsoid_to_utm, utm_to_ellipsoid
from geoframes.utils.mixins import LoggingMixin


class GeodeticTransform(LoggingMixin):
    """
    Converts batches of points between coordinate frames on a single reference
    ellipsoid.

    Every conversion accepts an ordered batch of 3-component points (a list of
    3-sequences or an (N, 3) array) and returns an (N, 3) float array whose
    rows correspond to the input rows. Angles are in degrees and lengths in
    meters throughout.

    Frames:
        ellipsoid: (latitude, longitude, altitude above the ellipsoid)
        ECEF: (X, Y, Z), earth-centered earth-fixed
        ENU: (east, north, up), relative to a local origin
        UTM: (easting, northing, height), plus a zone number

    Args:
        ellipsoid:
            (Default 'WGS84') A preset name ('WGS84' or 'GRS80') or a custom Ellipsoid
    """

    @validate_call(config=dict(arbitrary_types_allowed=True))
    def __init__(self, ellipsoid: Union[str, Ellipsoid] = 'WGS84'):
        super().__init__()
        self._ellipsoid = get_ellipsoid(ellipsoid)
        self.logger.debug('Using ellipsoid %r', self._ellipsoid)

    def __repr__(self):
        return f'<GeodeticTransform {self._ellipsoid.name}>'

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    def ellipsoid_to_ecef(self, points: npt.ArrayLike) -> np.ndarray:
        """Convert (lat, lon, alt) points to ECEF (X, Y, Z)"""
        return ellipsoid_to_ecef(points, self._ellipsoid)

    def ecef_to_ellipsoid(self, points: npt.ArrayLike) -> np.ndarray:
        """Convert ECEF (X, Y, Z) points to (lat, lon, alt)"""
        return ecef_to_ellipsoid(points, self._ellipsoid)

    def ecef_to_enu(self, points: npt.ArrayLike, lat0: float, lon0: float) -> np.ndarray:
        """
        Convert ECEF points to ENU, with axes oriented at (lat0, lon0) and
        measured from the first point of the batch.
        """
        return ecef_to_enu(points, lat0, lon0)

    def ellipsoid_to_enu(self, points: npt.ArrayLike, lat0: float, lon0: float) -> np.ndarray:
        """
        Convert (lat, lon, alt) points to ENU, as for ecef_to_enu. The first
        point, including its altitude, is the translation origin.
        """
        xyz = ellipsoid_to_ecef(points, self._ellipsoid)
        return ecef_to_enu(xyz, lat0, lon0)

    def enu_to_ecef(
        self,
        points: npt.ArrayLike,
        lat0: float,
        lon0: float,
        alt0: float
    ) -> np.ndarray:
        """
        Convert ENU points about the origin (lat0, lon0, alt0) to ECEF.

        Inverts ecef_to_enu when (lat0, lon0, alt0) are the geodetic
        coordinates of the first point of the forward batch.
        """
        return enu_to_ecef(points, lat0, lon0, alt0, self._ellipsoid)

    def enu_to_ellipsoid(
        self,
        points: npt.ArrayLike,
        lat0: float,
        lon0: float,
        alt0: float
    ) -> np.ndarray:
        """Convert ENU points about the origin (lat0, lon0, alt0) to (lat, lon, alt)"""
        return ecef_to_ellipsoid(
            enu_to_ecef(points, lat0, lon0, alt0, self._ellipsoid),
            self._ellipsoid
        )

    def ellipsoid_to_utm(
        self,
        points: npt.ArrayLike,
        zone: Optional[int] = None
    ) -> Tuple[np.ndarray, int]:
        """
        Project (lat, lon, alt) points to UTM.

        The whole batch is projected in one zone: the zone of its first point,
        unless a zone is given. Points from other zones must be converted in a
        separate call.

        Returns:
            Tuple of ((N, 3) array of (easting, northing, height), zone)
        """
        return ellipsoid_to_utm(points, self._ellipsoid, zone=zone)

    def utm_to_ellipsoid(
        self,
        points: npt.ArrayLike,
        zone: int,
        is_northern_hemisphere: bool = True
    ) -> np.ndarray:
        """Convert UTM points of a single zone and hemisphere to (lat, lon, alt)"""
        return utm_to_ellipsoid(points, zone, is_northern_hemisphere, self._ellipsoid)
