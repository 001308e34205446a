# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the vectorized day sampling engine."""
import math
from datetime import date, timedelta

import numpy as np
import pytest

from suncompass.domain.julian import Resolution, julian_days_for_day
from suncompass.domain.spa import compute_sun_position
from suncompass.domain.spa_batch import (
    compute_sun_position_arrays,
    compute_sun_positions,
)
from suncompass.domain.sun_position import (
    ALL_POSITION_FIELDS,
    GeoCoordinate,
    PositionField,
)

HAMBURG = GeoCoordinate(latitude_deg=53.3249, longitude_deg=10.0)
GOLDEN = GeoCoordinate(latitude_deg=39.742476, longitude_deg=-105.1786)

_ANGLE_FIELDS = (
    PositionField.ASCENSION,
    PositionField.AZIMUTH,
    PositionField.HEIGHT,
    PositionField.ZENITH,
    PositionField.INCIDENCE,
    PositionField.SHADOW_DIRECTION,
)


def _assert_matches_scalar(positions, offset, location, elevation, **kwargs):
    for pos in positions:
        scalar = compute_sun_position(pos.instant, offset, location, elevation, **kwargs)
        for field in _ANGLE_FIELDS:
            assert pos.get(field) == pytest.approx(scalar.get(field), abs=1e-6), field
        if abs(scalar.height_deg) > 1.0:
            assert pos.shadow.length_m == pytest.approx(scalar.shadow.length_m, rel=1e-6)


class TestScalarEquivalence:
    """Every sample agrees with compute_sun_position at the same instant."""

    def test_hourly_day(self):
        positions = compute_sun_positions(
            date(2016, 7, 9), None, Resolution.HOUR, 2.0, HAMBURG, 0.0,
        )
        _assert_matches_scalar(positions, 2.0, HAMBURG, 0.0)

    def test_minute_window_with_conditions(self):
        conditions = dict(
            pressure_mbar=820.0, temperature_c=11.0,
            slope_deg=15.0, surface_azimuth_deg=20.0, building_height_m=3.0,
        )
        positions = compute_sun_positions(
            date(2003, 10, 17), 12, Resolution.MINUTE, -7.0, GOLDEN, 1830.14,
            **conditions,
        )
        _assert_matches_scalar(positions[::7], -7.0, GOLDEN, 1830.14, **conditions)

    def test_second_window_sampled(self):
        positions = compute_sun_positions(
            date(1994, 1, 2), 7, Resolution.SECOND, 0.0,
            GeoCoordinate(35.0, 0.0), 0.0,
        )
        _assert_matches_scalar(positions[::997], 0.0, GeoCoordinate(35.0, 0.0), 0.0)


    def test_naive_scalar_instant_matches_sample(self):
        positions = compute_sun_positions(
            date(2016, 7, 9), 12, Resolution.HOUR, 2.0, HAMBURG, 0.0, [PositionField.AZIMUTH],
        )
        sample = positions[0]
        scalar = compute_sun_position(
            sample.instant.replace(tzinfo=None), 2.0, HAMBURG, 0.0, [PositionField.AZIMUTH],
        )
        assert scalar.instant == sample.instant
        assert scalar.instant.utcoffset() == timedelta(hours=2)
        assert scalar.instant.isoformat() == sample.instant.isoformat()
        assert scalar.azimuth_deg == pytest.approx(sample.azimuth_deg, abs=1e-6)


class TestSampling:

    @pytest.mark.parametrize("resolution,count", [
        (Resolution.HOUR, 24),
        (Resolution.MINUTE, 1440),
    ])
    def test_whole_day_counts(self, resolution, count):
        positions = compute_sun_positions(
            date(2016, 7, 9), None, resolution, 2.0, HAMBURG, 0.0,
            [PositionField.HEIGHT],
        )
        assert len(positions) == count

    def test_hour_window_count(self):
        positions = compute_sun_positions(
            date(2016, 7, 9), 14, Resolution.MINUTE, 2.0, HAMBURG, 0.0,
        )
        assert len(positions) == 120
        assert positions[0].instant.hour == 13
        assert positions[-1].instant.hour == 14
        assert positions[-1].instant.minute == 59

    def test_midnight_window_truncated(self):
        positions = compute_sun_positions(
            date(2016, 7, 9), 0, Resolution.HOUR, 2.0, HAMBURG, 0.0,
        )
        assert len(positions) == 1
        assert positions[0].instant.hour == 0

    def test_instants_ascending_and_aware(self):
        positions = compute_sun_positions(
            date(2016, 7, 9), None, Resolution.HOUR, 2.0, HAMBURG, 0.0,
        )
        for earlier, later in zip(positions, positions[1:]):
            assert later.instant - earlier.instant == timedelta(hours=1)
        assert positions[0].instant.utcoffset() == timedelta(hours=2)

    def test_invalid_hour_rejected(self):
        with pytest.raises(ValueError):
            compute_sun_positions(date(2016, 7, 9), 24, Resolution.HOUR, 2.0, HAMBURG, 0.0)


class TestFieldMask:

    def test_only_requested_fields(self):
        positions = compute_sun_positions(
            date(2016, 7, 9), None, Resolution.HOUR, 2.0, HAMBURG, 0.0,
            [PositionField.AZIMUTH],
        )
        assert all(p.present_fields() == {PositionField.AZIMUTH} for p in positions)

    def test_implied_fields_present(self):
        positions = compute_sun_positions(
            date(2016, 7, 9), 12, Resolution.HOUR, 2.0, HAMBURG, 0.0,
            [PositionField.INCIDENCE],
        )
        expected = {
            PositionField.INCIDENCE, PositionField.AZIMUTH,
            PositionField.HEIGHT, PositionField.ZENITH,
        }
        assert all(p.present_fields() == expected for p in positions)


class TestArrays:

    def test_keys_follow_mask(self):
        jd = julian_days_for_day(date(2016, 7, 9), None, 2.0, Resolution.HOUR)
        arrays = compute_sun_position_arrays(jd, HAMBURG, 0.0, [PositionField.ZENITH])
        assert set(arrays) == {PositionField.ZENITH, PositionField.HEIGHT}
        assert all(len(values) == 24 for values in arrays.values())

    def test_all_fields(self):
        jd = julian_days_for_day(date(2016, 7, 9), None, 2.0, Resolution.HOUR)
        arrays = compute_sun_position_arrays(jd, HAMBURG, 0.0, ALL_POSITION_FIELDS)
        assert set(arrays) == ALL_POSITION_FIELDS
        np.testing.assert_allclose(
            arrays[PositionField.ZENITH], 90.0 - arrays[PositionField.HEIGHT], atol=1e-12,
        )

    def test_night_refraction_dropped(self):
        """Deep below the horizon the height is purely geometric."""
        jd = julian_days_for_day(date(2016, 12, 21), 0, 1.0, Resolution.HOUR)
        low = compute_sun_position_arrays(jd, HAMBURG, 0.0, [PositionField.HEIGHT],
                                          pressure_mbar=500.0)
        high = compute_sun_position_arrays(jd, HAMBURG, 0.0, [PositionField.HEIGHT],
                                           pressure_mbar=1100.0)
        assert low[PositionField.HEIGHT][0] < -30.0
        assert low[PositionField.HEIGHT][0] == high[PositionField.HEIGHT][0]

    def test_shadow_length_finite_above_horizon(self):
        jd = julian_days_for_day(date(2016, 7, 9), 14, 2.0, Resolution.MINUTE)
        arrays = compute_sun_position_arrays(jd, HAMBURG, 0.0, [PositionField.SHADOW_LENGTH])
        assert all(math.isfinite(v) and v > 0.0 for v in arrays[PositionField.SHADOW_LENGTH])


class TestTopocentricStageSkipping:
    """Only height and azimuth need the topocentric declination."""

    def _count_arctan2(self, monkeypatch, fields):
        calls = []
        original = np.arctan2

        def counting(*args, **kwargs):
            calls.append(args)
            return original(*args, **kwargs)

        jd = julian_days_for_day(date(2016, 7, 9), 12, 2.0, Resolution.HOUR)
        monkeypatch.setattr(np, "arctan2", counting)
        arrays = compute_sun_position_arrays(jd, HAMBURG, 0.0, fields)
        monkeypatch.undo()
        return len(calls), arrays

    def test_ascension_only(self, monkeypatch):
        count, arrays = self._count_arctan2(monkeypatch, [PositionField.ASCENSION])
        assert count == 2
        assert set(arrays) == {PositionField.ASCENSION}

    def test_height_adds_declination(self, monkeypatch):
        count, arrays = self._count_arctan2(monkeypatch, [PositionField.HEIGHT])
        assert count == 3
        assert PositionField.HEIGHT in arrays
