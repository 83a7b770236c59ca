"""
Reference ellipsoids approximating the shape of the earth
"""

__all__ = ['Ellipsoid', 'ELLIPSOID_NAMES', 'GRS80', 'WGS84', 'get_ellipsoid']

import math
from typing import Annotated, Dict, Union

from pydantic import Field, validate_call

from geoframes._const import GRS80_A, GRS80_F, WGS84_A, WGS84_F


class Ellipsoid:
    """
    An immutable reference ellipsoid, defined by its semi-major axis (meters)
    and flattening. All derived constants are carried at full double precision.
    """

    @validate_call
    def __init__(
        self,
        semi_major_axis: Annotated[float, Field(gt=0, allow_inf_nan=False)],
        flattening: Annotated[float, Field(gt=0, lt=1)],
        name: str = 'custom',
    ):
        self._a = semi_major_axis
        self._f = flattening
        self._name = name

        self._b = semi_major_axis * (1 - flattening)
        self._e2 = flattening * (2 - flattening)
        self._e = math.sqrt(self._e2)
        self._ep2 = self._e2 / (1 - self._e2)
        self._n = flattening / (2 - flattening)

    def __eq__(self, other):
        if not isinstance(other, Ellipsoid):
            return False

        return self.a == other.a and self.f == other.f

    def __hash__(self):
        return hash((self.a, self.f))

    def __repr__(self):
        return f'<Ellipsoid {self.name} (a={self.a}, f=1/{1 / self.f:.12g})>'

    @property
    def name(self) -> str:
        return self._name

    @property
    def a(self) -> float:
        """Semi-major axis, in meters"""
        return self._a

    @property
    def f(self) -> float:
        """Flattening"""
        return self._f

    @property
    def b(self) -> float:
        """Semi-minor axis, in meters"""
        return self._b

    @property
    def e2(self) -> float:
        """First eccentricity squared"""
        return self._e2

    @property
    def e(self) -> float:
        """First eccentricity"""
        return self._e

    @property
    def ep2(self) -> float:
        """Second eccentricity squared"""
        return self._ep2

    @property
    def n(self) -> float:
        """Third flattening"""
        return self._n


WGS84 = Ellipsoid(WGS84_A, WGS84_F, name='WGS84')
GRS80 = Ellipsoid(GRS80_A, GRS80_F, name='GRS80')

_PRESETS: Dict[str, Ellipsoid] = {
    'WGS84': WGS84,
    'GRS80': GRS80,
}
ELLIPSOID_NAMES = tuple(_PRESETS)


def get_ellipsoid(ellipsoid: Union[str, Ellipsoid]) -> Ellipsoid:
    """
    Resolve an ellipsoid selector to an Ellipsoid.

    Args:
        ellipsoid:
            Either a preset name ('WGS84' or 'GRS80', case insensitive) or an
            Ellipsoid instance, which is returned unchanged.

    Returns:
        Ellipsoid
    """
    if isinstance(ellipsoid, Ellipsoid):
        return ellipsoid

    try:
        return _PRESETS[ellipsoid.upper()]
    except (AttributeError, KeyError):
        raise ValueError(
            f'Unknown ellipsoid {ellipsoid!r}. Options: {list(ELLIPSOID_NAMES)}'
        ) from None
