"""
Plain storage for reconstructed 3D points, so that batch conversions can be
applied to them. These structures hold vectors only; they never convert.
"""

__all__ = ['Point3D', 'Point3DMap']

from typing import Callable, Iterable, List, Optional, Sequence, Tuple

import numpy as np
import numpy.typing as npt

from geoframes.utils.functions import as_points


class Point3D:
    """
    A 3D point with its color, reprojection error and track of observations.

    Args:
        xyz:
            The position, as a 3-vector in whatever frame the caller tracks

        color:
            RGB color, 0-255 per channel

        error:
            Mean reprojection error. Negative values mean the error is unknown.

        track:
            Observations of this point, as (image_id, point2D_idx) pairs
    """

    def __init__(
        self,
        xyz: npt.ArrayLike = (0., 0., 0.),
        color: npt.ArrayLike = (0, 0, 0),
        error: float = -1.,
        track: Optional[Iterable[Tuple[int, int]]] = None,
    ):
        self.xyz = xyz
        self.color = color
        self.error = float(error)
        self.track: List[Tuple[int, int]] = [
            (int(image_id), int(point2d_idx)) for image_id, point2d_idx in (track or [])
        ]

    def __eq__(self, other):
        if not isinstance(other, Point3D):
            return False

        return (
            np.array_equal(self.xyz, other.xyz) and
            np.array_equal(self.color, other.color) and
            self.error == other.error and
            self.track == other.track
        )

    def __repr__(self):
        return (
            f'<Point3D(xyz={self.xyz.tolist()}, error={self.error}, '
            f'track_length={len(self.track)})>'
        )

    @property
    def xyz(self) -> np.ndarray:
        return self._xyz

    @xyz.setter
    def xyz(self, value: npt.ArrayLike):
        arr = np.array(value, dtype=np.float64)
        if arr.shape != (3,):
            raise ValueError(f'xyz must be a 3-vector, got shape {arr.shape}')
        self._xyz = arr

    @property
    def color(self) -> np.ndarray:
        return self._color

    @color.setter
    def color(self, value: npt.ArrayLike):
        arr = np.array(value)
        if arr.shape != (3,) or np.any((arr < 0) | (arr > 255)):
            raise ValueError(f'color must be 3 channels in [0, 255], got {value!r}')
        self._color = arr.astype(np.uint8)

    @property
    def has_error(self) -> bool:
        return self.error >= 0

    def add_observation(self, image_id: int, point2d_idx: int) -> None:
        """Append an observation to the track"""
        self.track.append((int(image_id), int(point2d_idx)))


class Point3DMap(dict):
    """
    A mapping of point id to Point3D, with batch access to the point positions.

    Every insertion, including through the constructor, update and setdefault,
    checks that the value is a Point3D and stores the key as an int.
    """

    def __init__(self, *args, **kwargs):
        super().__init__()
        self.update(*args, **kwargs)

    def __setitem__(self, key: int, value: Point3D):
        if not isinstance(value, Point3D):
            raise TypeError(f'Point3DMap values must be Point3D, not {type(value)}')
        super().__setitem__(int(key), value)

    def update(self, *args, **kwargs) -> None:
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def setdefault(self, key: int, default: Optional[Point3D] = None) -> Point3D:
        if int(key) not in self:
            self[key] = default
        return self[int(key)]

    def xyz_array(self) -> Tuple[List[int], np.ndarray]:
        """
        All point positions as one batch.

        Returns:
            Tuple of (point ids, (N, 3) array of positions in the same order)
        """
        ids = list(self.keys())
        return ids, as_points([self[point_id].xyz for point_id in ids])

    def set_xyz(self, ids: Sequence[int], xyz: npt.ArrayLike) -> None:
        """
        Write a batch of positions back to the points with the given ids.

        Args:
            ids:
                Point ids, in the order of the rows of xyz

            xyz:
                (N, 3) array of positions
        """
        arr = as_points(xyz)
        if len(ids) != len(arr):
            raise ValueError(f'Got {len(ids)} point ids but {len(arr)} positions')

        for point_id, row in zip(ids, arr):
            self[point_id].xyz = row

    def apply(self, conversion: Callable[[np.ndarray], np.ndarray]) -> None:
        """
        Replace every point position with the output of a batch conversion,
        e.g. GeodeticTransform().ecef_to_ellipsoid
        """
        if not self:
            return

        ids, xyz = self.xyz_array()
        self.set_xyz(ids, conversion(xyz))
