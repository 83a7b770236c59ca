
from geoframes._version import __version__  # noqa: F401
from geoframes.utils.logging import LOGGER
from geoframes.ellipsoid import Ellipsoid, GRS80, WGS84, get_ellipsoid
from geoframes.ecef import ecef_to_ellipsoid, ellipsoid_to_ecef
from geoframes.enu import ecef_to_enu, enu_rotation, enu_to_ecef
from geoframes.utm import central_meridian, ellipsoid_to_utm, utm_to_ellipsoid, utm_zone
from geoframes.transform import GeodeticTransform
from geoframes.points import Point3D, Point3DMap

__all__ = [
    'Ellipsoid',
    'GeodeticTransform',
    'GRS80',
    'LOGGER',
    'Point3D',
    'Point3DMap',
    'WGS84',
    'central_meridian',
    'ecef_to_ellipsoid',
    'ecef_to_enu',
    'ellipsoid_to_ecef',
    'ellipsoid_to_utm',
    'enu_rotation',
    'enu_to_ecef',
    'get_ellipsoid',
    'utm_to_ellipsoid',
    'utm_zone',
]
