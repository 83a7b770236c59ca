import logging

import numpy as np
import pytest
from pytest import approx

from geoframes import GeodeticTransform
from geoframes.ellipsoid import Ellipsoid, GRS80, WGS84
from geoframes.utils.logging import clear_warnings
from tests.functions import (
    ECEF_GRS80, ECEF_WGS84, ELL, ELL_ZONE_33, UTM_GRS80, UTM_WGS84, assert_points_near
)


def test_construction():
    assert GeodeticTransform().ellipsoid is WGS84
    assert GeodeticTransform('WGS84').ellipsoid is WGS84
    assert GeodeticTransform('GRS80').ellipsoid is GRS80

    custom = Ellipsoid(6378388.0, 1 / 297, name='Hayford')
    assert GeodeticTransform(custom).ellipsoid is custom

    assert repr(GeodeticTransform('GRS80')) == '<GeodeticTransform GRS80>'


def test_construction_invalid():
    with pytest.raises(ValueError):
        GeodeticTransform('Airy')

    with pytest.raises(ValueError):
        GeodeticTransform(1.5)


def test_construction_logs_ellipsoid(caplog):
    with caplog.at_level(logging.DEBUG, logger='geoframes'):
        GeodeticTransform('GRS80')
    assert 'GRS80' in caplog.text


def test_ellipsoid_to_ecef():
    assert_points_near(GeodeticTransform('WGS84').ellipsoid_to_ecef(ELL), ECEF_WGS84, 1e-8)
    assert_points_near(GeodeticTransform('GRS80').ellipsoid_to_ecef(ELL), ECEF_GRS80, 1e-8)


def test_ecef_to_ellipsoid():
    assert_points_near(GeodeticTransform('WGS84').ecef_to_ellipsoid(ECEF_WGS84), ELL, 1e-5)
    assert_points_near(GeodeticTransform('GRS80').ecef_to_ellipsoid(ECEF_GRS80), ELL, 1e-5)


def test_ellipsoid_to_enu():
    tform = GeodeticTransform('WGS84')

    ori_ell = tform.ecef_to_ellipsoid([ECEF_WGS84[0]])[0]
    ref_enu = tform.ecef_to_enu(ECEF_WGS84, ori_ell[0], ori_ell[1])

    enu = tform.ellipsoid_to_enu(ELL, ori_ell[0], ori_ell[1])
    assert_points_near(enu, ref_enu, 1e-8)


def test_enu_to_ecef():
    tform = GeodeticTransform('WGS84')
    lat0, lon0, alt0 = ELL[0]

    enu = tform.ellipsoid_to_enu(ELL, lat0, lon0)
    xyz = tform.enu_to_ecef(enu, lat0, lon0, alt0)
    assert_points_near(xyz, ECEF_WGS84, 1e-8)


def test_enu_to_ellipsoid():
    tform = GeodeticTransform('WGS84')
    lat0, lon0, alt0 = tform.ecef_to_ellipsoid(ECEF_WGS84)[0]

    enu = tform.ecef_to_enu(ECEF_WGS84, lat0, lon0)
    assert_points_near(tform.enu_to_ecef(enu, lat0, lon0, alt0), ECEF_WGS84, 1e-8)

    ell = tform.enu_to_ellipsoid(enu, lat0, lon0, alt0)
    assert_points_near(ell, ELL, 1e-5)


def test_enu_origin_parameters():
    tform = GeodeticTransform()
    lat0, lon0, alt0 = ELL[0]

    # Forward: the first point of the batch is the origin
    enu = tform.ellipsoid_to_enu([ELL[0]], lat0, lon0)
    assert_points_near(enu, [(0., 0., 0.)], 1e-8)

    # Inverse: the origin comes from (lat0, lon0, alt0)
    xyz = tform.enu_to_ecef([(0., 0., 0.)], lat0, lon0, alt0)
    assert_points_near(xyz, ECEF_WGS84[:1], 1e-8)

    # An origin altitude other than the first point's shifts the batch along Up
    ell = tform.enu_to_ellipsoid(tform.ellipsoid_to_enu(ELL, lat0, lon0), lat0, lon0, 0.)
    for actual, expected in zip(ell, ELL):
        assert actual[2] == approx(expected[2] - alt0, abs=1e-3)


def test_ellipsoid_to_utm():
    utm, zone = GeodeticTransform('WGS84').ellipsoid_to_utm([*ELL, ELL_ZONE_33])
    assert zone == 32
    assert_points_near(utm, UTM_WGS84, 1e-8)

    utm, zone = GeodeticTransform('GRS80').ellipsoid_to_utm([*ELL, ELL_ZONE_33])
    assert zone == 32
    assert_points_near(utm, UTM_GRS80, 1e-8)

    _, zone = GeodeticTransform().ellipsoid_to_utm([ELL_ZONE_33])
    assert zone == 33

    utm, zone = GeodeticTransform().ellipsoid_to_utm([ELL_ZONE_33], zone=32)
    assert zone == 32
    assert_points_near(utm, UTM_WGS84[2:], 1e-8)
    clear_warnings()


def test_utm_to_ellipsoid():
    ell = GeodeticTransform('WGS84').utm_to_ellipsoid(UTM_WGS84, 32, True)
    assert_points_near(ell, [*ELL, ELL_ZONE_33], 1e-8)

    ell = GeodeticTransform('GRS80').utm_to_ellipsoid(UTM_GRS80, 32, True)
    assert_points_near(ell, [*ELL, ELL_ZONE_33], 1e-8)

    # The two ellipsoids differ by well under a nanodegree here
    ell = GeodeticTransform('WGS84').utm_to_ellipsoid(UTM_GRS80, 32)
    assert_points_near(ell, [*ELL, ELL_ZONE_33], 1e-8)


def test_conversions_preserve_order_and_count():
    tform = GeodeticTransform()
    ell = np.array([
        (10., 20., 30.),
        (-10., -20., 0.),
        (45., 100., 1000.),
        (0., 0., 0.),
    ])
    xyz = tform.ellipsoid_to_ecef(ell)
    assert xyz.shape == (4, 3)

    for i, row in enumerate(ell):
        assert_points_near(tform.ellipsoid_to_ecef([row]), xyz[i:i + 1], 1e-9)

    assert_points_near(tform.ecef_to_ellipsoid(xyz), ell, 1e-6)


def test_conversions_accept_empty_batches():
    tform = GeodeticTransform()
    assert tform.ellipsoid_to_ecef([]).shape == (0, 3)
    assert tform.ecef_to_ellipsoid([]).shape == (0, 3)
    assert tform.ecef_to_enu([], 0., 0.).shape == (0, 3)
    assert tform.ellipsoid_to_enu([], 0., 0.).shape == (0, 3)
    assert tform.enu_to_ecef([], 0., 0., 0.).shape == (0, 3)
    assert tform.enu_to_ellipsoid([], 0., 0., 0.).shape == (0, 3)
    assert tform.utm_to_ellipsoid([], 32).shape == (0, 3)
