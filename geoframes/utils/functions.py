"""Module for miscellaneous multi-use functions"""

__all__ = [
    'as_points', 'degrees_to_dms', 'dms_to_degrees', 'normalize_longitude',
    'round_half_up', 'validate_latitudes'
]

from typing import Literal, Tuple, Union

import numpy as np
import numpy.typing as npt


def as_points(points: npt.ArrayLike) -> np.ndarray:
    """
    Coerces a batch of points into a float64 array of shape (N, 3).

    A flat 3-vector is treated as a batch of one point. An empty sequence
    becomes an empty (0, 3) batch.

    Args:
        points:
            A list of 3-sequences, or an array of shape (N, 3)

    Returns:
        np.ndarray of shape (N, 3)
    """
    arr = np.array(points, dtype=np.float64)
    if arr.ndim == 1:
        if arr.size == 0:
            return arr.reshape(0, 3)
        arr = arr.reshape(1, -1)

    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(
            f'Points must be 3-component vectors of shape (N, 3), got shape {arr.shape}'
        )

    return arr


def validate_latitudes(latitudes: npt.ArrayLike) -> None:
    """
    Raises a ValueError if any latitude lies outside [-90, 90]. NaN values
    are not considered out of range and are left to propagate.
    """
    lat = np.asarray(latitudes, dtype=np.float64)
    # Comparisons against NaN are always False
    invalid = np.abs(lat) > 90.
    if np.any(invalid):
        raise ValueError(
            f'Latitude must be within [-90, 90] degrees, got {lat[invalid].ravel()[0]}'
        )


def normalize_longitude(lon: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """Wraps longitudes (in degrees) into the range [-180, 180)"""
    return (lon + 180.) % 360. - 180.


def dms_to_degrees(
    degrees: float,
    minutes: float = 0.,
    seconds: float = 0.,
    hemisphere: str = 'N'
) -> float:
    """
    Converts a Degrees Minutes Seconds value to decimal degrees.

    Args:
        degrees:
            Whole degrees (unsigned)

        minutes:
            Minutes of arc

        seconds:
            Seconds of arc

        hemisphere:
            One of 'N', 'S', 'E', 'W'. Southern and western values are negative.

    Returns:
        float
    """
    hemisphere = hemisphere.upper()
    if hemisphere not in ('N', 'S', 'E', 'W'):
        raise ValueError(f"Hemisphere must be one of 'N', 'S', 'E', 'W', not {hemisphere!r}")

    mult = -1 if hemisphere in ('S', 'W') else 1
    return mult * (degrees + minutes / 60 + seconds / 3600)


def degrees_to_dms(
    value: float,
    axis: Literal['lat', 'lon'] = 'lat'
) -> Tuple[int, int, float, str]:
    """
    Convert a value (latitude or longitude) in decimal degrees to a tuple of
    degrees, minutes, seconds, hemisphere

    Returns:
        converted value as (degrees, minutes, seconds, hemisphere)
    """
    minutes, seconds = divmod(abs(value) * 3600, 60)
    degrees, minutes = divmod(minutes, 60)
    if axis == 'lat':
        hemisphere = 'N' if value >= 0 else 'S'
    else:
        hemisphere = 'E' if value >= 0 else 'W'

    return int(degrees), int(minutes), round_half_up(seconds, 5), hemisphere


def round_half_up(value: float, precision) -> float:
    """
    Rounds numbers to the nearest whole, where a value exactly between the two nearest
    wholes is rounded to the higher whole.

    Args:
        value:
            The float value to be rounded
        precision:
            The precision to round the float value to

    """
    mod = value + 10 ** -(precision + 12)

    return round(mod, precision)
