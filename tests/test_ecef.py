import math

import numpy as np
import pytest
from pytest import approx

from geoframes.ecef import ecef_to_ellipsoid, ellipsoid_to_ecef
from geoframes.ellipsoid import GRS80, WGS84
from tests.functions import ECEF_GRS80, ECEF_WGS84, ELL, assert_points_near


def test_ellipsoid_to_ecef_wgs84():
    assert_points_near(ellipsoid_to_ecef(ELL, WGS84), ECEF_WGS84, 1e-8)


def test_ellipsoid_to_ecef_grs80():
    assert_points_near(ellipsoid_to_ecef(ELL, GRS80), ECEF_GRS80, 1e-8)


def test_ellipsoid_to_ecef_special_points():
    # Equator / prime meridian
    assert_points_near(ellipsoid_to_ecef([(0., 0., 0.)]), [(WGS84.a, 0., 0.)], 1e-9)

    # Equator, 90E, 100m up
    assert_points_near(ellipsoid_to_ecef([(0., 90., 100.)]), [(0., WGS84.a + 100., 0.)], 1e-8)

    # North pole
    assert_points_near(ellipsoid_to_ecef([(90., 0., 0.)]), [(0., 0., WGS84.b)], 1e-8)


def test_ellipsoid_to_ecef_batch_shapes():
    # Flat 3-vector is a batch of one
    assert ellipsoid_to_ecef(ELL[0]).shape == (1, 3)

    assert ellipsoid_to_ecef(np.array(ELL)).shape == (2, 3)
    assert ellipsoid_to_ecef([]).shape == (0, 3)

    with pytest.raises(ValueError):
        ellipsoid_to_ecef([(1., 2.)])

    with pytest.raises(ValueError):
        ellipsoid_to_ecef(np.zeros((2, 3, 1)))


def test_ellipsoid_to_ecef_preserves_order():
    reversed_xyz = ellipsoid_to_ecef(ELL[::-1])
    assert_points_near(reversed_xyz, ECEF_WGS84[::-1], 1e-8)


def test_ellipsoid_to_ecef_invalid_latitude():
    with pytest.raises(ValueError):
        ellipsoid_to_ecef([(90.5, 0., 0.)])

    with pytest.raises(ValueError):
        ellipsoid_to_ecef([ELL[0], (-91., 0., 0.)])


def test_ellipsoid_to_ecef_non_finite():
    xyz = ellipsoid_to_ecef([(math.nan, 0., 0.), ELL[0]])
    assert np.all(np.isnan(xyz[0]))
    assert_points_near(xyz[1:], ECEF_WGS84[:1], 1e-8)

    xyz = ellipsoid_to_ecef([(0., 0., math.inf)])
    assert xyz[0, 0] == math.inf


def test_ecef_to_ellipsoid_wgs84():
    assert_points_near(ecef_to_ellipsoid(ECEF_WGS84, WGS84), ELL, 1e-5)


def test_ecef_to_ellipsoid_grs80():
    assert_points_near(ecef_to_ellipsoid(ECEF_GRS80, GRS80), ELL, 1e-5)


def test_ecef_to_ellipsoid_altitude_precision():
    # Sub-millimeter height, latitude well under 1e-5 degrees
    ell = ecef_to_ellipsoid(ECEF_WGS84)
    for actual, expected in zip(ell, ELL):
        assert actual[0] == approx(expected[0], abs=1e-9)
        assert actual[1] == approx(expected[1], abs=1e-9)
        assert actual[2] == approx(expected[2], abs=1e-4)


def test_ecef_round_trip():
    xyz = [
        (4.177239709080851e6, 0.855153779931214e6, 4.728267404656370e6),
        (4.177218660490202e6, 0.855175931351848e6, 4.728281850269709e6),
    ]
    for ellipsoid in (WGS84, GRS80):
        xyz2 = ellipsoid_to_ecef(ecef_to_ellipsoid(xyz, ellipsoid), ellipsoid)
        assert_points_near(xyz2, xyz, 1e-5)


def test_ellipsoid_round_trip_wide_range():
    ell = [
        (-33.8688, 151.2093, 58.),
        (64.1466, -21.9426, 0.),
        (-77.8419, 166.6863, 10.),
        (0., -179.5, -100.),
        (35.6762, 139.6503, 20_000.),
        (89.9, 45., 3000.),
        (12.5, 44.9, 400_000.),
    ]
    ell2 = ecef_to_ellipsoid(ellipsoid_to_ecef(ell))
    for actual, expected in zip(ell2, ell):
        assert actual[0] == approx(expected[0], abs=1e-9)
        assert actual[1] == approx(expected[1], abs=1e-9)
        assert actual[2] == approx(expected[2], abs=1e-5)


def test_ecef_to_ellipsoid_polar_axis():
    ell = ecef_to_ellipsoid([(0., 0., WGS84.b + 10.), (-0., 0., -WGS84.b)])
    assert_points_near(ell, [(90., 0., 10.), (-90., 0., 0.)], 1e-6)


def test_ecef_to_ellipsoid_earth_center_does_not_raise():
    ell = ecef_to_ellipsoid([(0., 0., 0.)])
    assert ell.shape == (1, 3)


def test_ecef_to_ellipsoid_non_finite():
    ell = ecef_to_ellipsoid([(math.nan, 1., 1.), ECEF_WGS84[0]])
    assert np.all(np.isnan(ell[0]))
    assert_points_near(ell[1:], ELL[:1], 1e-5)
