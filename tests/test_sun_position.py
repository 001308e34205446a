# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the sun position value types and the computation mask."""
from datetime import datetime

import pytest

from suncompass.domain.sun_position import (
    ALL_POSITION_FIELDS,
    ComputationMask,
    GeoCoordinate,
    ObserverConditions,
    PositionField,
    Shadow,
    SunPosition,
    build_sun_position,
)


class TestGeoCoordinate:

    def test_valid(self):
        loc = GeoCoordinate(latitude_deg=39.742476, longitude_deg=-105.1786)
        assert loc.latitude_deg == 39.742476

    def test_poles_and_antimeridian_accepted(self):
        GeoCoordinate(90.0, 180.0)
        GeoCoordinate(-90.0, -180.0)

    @pytest.mark.parametrize("lat,lon", [(90.5, 0.0), (-91.0, 0.0), (0.0, 181.0), (0.0, -180.5)])
    def test_out_of_range_rejected(self, lat, lon):
        with pytest.raises(ValueError):
            GeoCoordinate(lat, lon)

    def test_frozen(self):
        loc = GeoCoordinate(0.0, 0.0)
        with pytest.raises(AttributeError):
            loc.latitude_deg = 1.0


class TestObserverConditions:

    def test_defaults(self):
        conditions = ObserverConditions()
        assert conditions.pressure_mbar == 1010.0
        assert conditions.temperature_c == 10.0
        assert conditions.slope_deg == 30.0
        assert conditions.surface_azimuth_deg == -10.0
        assert conditions.building_height_m == 10.0


class TestComputationMask:
    """Requested fields pull in the fields they are computed from."""

    def test_empty(self):
        assert ComputationMask.from_fields([]).fields == frozenset()

    def test_all(self):
        assert ComputationMask.from_fields(ALL_POSITION_FIELDS).fields == ALL_POSITION_FIELDS

    def test_zenith_implies_height(self):
        mask = ComputationMask.from_fields([PositionField.ZENITH])
        assert mask.fields == {PositionField.ZENITH, PositionField.HEIGHT}

    def test_incidence_implies_azimuth_height_zenith(self):
        mask = ComputationMask.from_fields([PositionField.INCIDENCE])
        assert mask.fields == {
            PositionField.INCIDENCE, PositionField.AZIMUTH,
            PositionField.HEIGHT, PositionField.ZENITH,
        }

    def test_shadow_direction_implies_azimuth_only(self):
        mask = ComputationMask.from_fields([PositionField.SHADOW_DIRECTION])
        assert mask.fields == {PositionField.SHADOW_DIRECTION, PositionField.AZIMUTH}

    def test_shadow_length_implies_height(self):
        mask = ComputationMask.from_fields([PositionField.SHADOW_LENGTH])
        assert mask.fields == {PositionField.SHADOW_LENGTH, PositionField.HEIGHT}

    def test_ascension_alone(self):
        mask = ComputationMask.from_fields([PositionField.ASCENSION])
        assert mask.ascension
        assert not mask.height
        assert not mask.azimuth

    def test_accepts_field_values(self):
        mask = ComputationMask.from_fields(["zenith"])
        assert mask.zenith and mask.height


class TestSunPosition:

    def test_get_and_present_fields(self):
        pos = SunPosition(
            instant=datetime(2020, 1, 1),
            azimuth_deg=120.0,
            shadow=Shadow(direction_deg=-60.0),
        )
        assert pos.get(PositionField.AZIMUTH) == 120.0
        assert pos.get(PositionField.SHADOW_DIRECTION) == -60.0
        assert pos.get(PositionField.SHADOW_LENGTH) is None
        assert pos.get(PositionField.HEIGHT) is None
        assert pos.present_fields() == {PositionField.AZIMUTH, PositionField.SHADOW_DIRECTION}

    def test_frozen(self):
        pos = SunPosition(instant=datetime(2020, 1, 1))
        with pytest.raises(AttributeError):
            pos.height_deg = 10.0


class TestBuildSunPosition:

    def test_no_shadow_without_shadow_fields(self):
        pos = build_sun_position(datetime(2020, 1, 1), {PositionField.HEIGHT: 10.0})
        assert pos.height_deg == 10.0
        assert pos.shadow is None

    def test_shadow_assembled(self):
        pos = build_sun_position(datetime(2020, 1, 1), {
            PositionField.SHADOW_LENGTH: 5.0,
            PositionField.HEIGHT: 63.4,
        })
        assert pos.shadow == Shadow(direction_deg=None, length_m=5.0)
        assert pos.present_fields() == {PositionField.SHADOW_LENGTH, PositionField.HEIGHT}
