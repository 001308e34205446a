# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the low-precision sun position."""
import math
from datetime import datetime, timedelta, timezone

import pytest

from suncompass.domain.approximate import approximate_sun_position
from suncompass.domain.spa import compute_sun_position
from suncompass.domain.sun_position import GeoCoordinate, PositionField

MUNICH = GeoCoordinate(latitude_deg=48.1, longitude_deg=11.6)


class TestMunichExample:
    """6 August 2006, 06:00 UTC in Munich."""

    @pytest.fixture
    def position(self):
        return approximate_sun_position(datetime(2006, 8, 6, 6, 0), MUNICH)

    def test_height(self, position):
        assert position.height_deg == pytest.approx(19.109, abs=2e-3)

    def test_azimuth(self, position):
        assert position.azimuth_deg == pytest.approx(85.938, abs=2e-3)

    def test_only_azimuth_and_height(self, position):
        assert position.present_fields() == {PositionField.AZIMUTH, PositionField.HEIGHT}
        assert position.shadow is None

    def test_instant_preserved(self, position):
        assert position.instant == datetime(2006, 8, 6, 6, 0)


class TestTimeZones:

    def test_aware_matches_naive_utc(self):
        naive = approximate_sun_position(datetime(2006, 8, 6, 6, 0), MUNICH)
        aware = approximate_sun_position(
            datetime(2006, 8, 6, 8, 0, tzinfo=timezone(timedelta(hours=2))), MUNICH,
        )
        assert aware.azimuth_deg == pytest.approx(naive.azimuth_deg, abs=1e-9)
        assert aware.height_deg == pytest.approx(naive.height_deg, abs=1e-9)


class TestAgreementWithSpa:

    @pytest.mark.parametrize("hour", [6, 9, 12, 15, 18])
    def test_close_to_full_algorithm(self, hour):
        instant = datetime(2016, 7, 9, hour, tzinfo=timezone.utc)
        rough = approximate_sun_position(instant, MUNICH)
        exact = compute_sun_position(
            instant, 0.0, MUNICH, 0.0, [PositionField.AZIMUTH, PositionField.HEIGHT],
        )
        assert rough.height_deg == pytest.approx(exact.height_deg, abs=0.05)
        assert rough.azimuth_deg == pytest.approx(exact.azimuth_deg, abs=0.05)

    def test_no_refraction_deep_below_horizon(self):
        position = approximate_sun_position(datetime(2016, 12, 21, 23, 0), MUNICH)
        assert position.height_deg < -30.0


class TestExtremeGeometry:
    """Poles and the subsolar point stay inside the asin domain."""

    @pytest.mark.parametrize("latitude, longitude", [
        (90.0, 0.0),
        (-90.0, 0.0),
        (23.44, 0.0),
        (23.44, -0.4),
        (0.0, 180.0),
    ])
    @pytest.mark.parametrize("hour", [0, 6, 12, 18])
    def test_height_in_range(self, latitude, longitude, hour):
        position = approximate_sun_position(
            datetime(2016, 6, 21, hour, tzinfo=timezone.utc),
            GeoCoordinate(latitude, longitude),
        )
        assert math.isfinite(position.height_deg)
        assert -90.0 <= position.height_deg <= 90.6
        assert 0.0 <= position.azimuth_deg <= 360.0

    def test_near_zenith_at_subsolar_point(self):
        position = approximate_sun_position(
            datetime(2016, 6, 21, 12, tzinfo=timezone.utc), GeoCoordinate(23.44, 0.0),
        )
        assert position.height_deg > 89.0
