# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for sunrise, solar transit and sunset."""
import logging
import math
from datetime import date, datetime, timedelta, timezone

import pytest

from suncompass.domain.julian import Resolution
from suncompass.domain.sun_position import GeoCoordinate, SunPosition
from suncompass.domain.sunrise import (
    ALL_RISE_SET_FIELDS,
    DateHeight,
    RiseSetField,
    SunRiseSet,
    compute_sunrise_transit_sunset,
    horizon_hour_angle,
)

ACCURACY = 1e-6

# NREL/TP-560-34302 Appendix A.2 example day
PAPER_DAY = date(1994, 1, 2)
PAPER_SITE = GeoCoordinate(latitude_deg=35.0, longitude_deg=0.0)


def _assert_clock(instant, hour, minute, second):
    """Local clock time within one second of the expected value."""
    expected = instant.replace(hour=hour, minute=minute, second=second, microsecond=0)
    assert abs((instant - expected).total_seconds()) <= 1.0, instant


class TestPaperExample:

    @pytest.fixture
    def events(self):
        return compute_sunrise_transit_sunset(PAPER_DAY, 0.0, PAPER_SITE)

    def test_sunrise(self, events):
        _assert_clock(events.sunrise.date, 7, 8, 13)
        assert events.sunrise.height_deg == pytest.approx(-0.843002484, abs=ACCURACY)

    def test_transit(self, events):
        _assert_clock(events.transit.date, 12, 4, 0)
        assert events.transit.height_deg == pytest.approx(32.0912504, abs=ACCURACY)

    def test_sunset(self, events):
        _assert_clock(events.sunset.date, 16, 59, 56)
        assert events.sunset.height_deg == pytest.approx(-0.73393324, abs=ACCURACY)

    def test_dates_on_requested_day_at_offset(self, events):
        for event in (events.sunrise, events.transit, events.sunset):
            assert event.date.date() == PAPER_DAY
            assert event.date.utcoffset() == timedelta(0)

    def test_ordering(self, events):
        assert events.sunrise.date < events.transit.date < events.sunset.date


class TestSummerDays:

    def test_northern_germany(self):
        events = compute_sunrise_transit_sunset(
            date(2016, 7, 9), 2.0, GeoCoordinate(53.3249, 10.0),
        )
        _assert_clock(events.sunrise.date, 5, 4, 11)
        _assert_clock(events.transit.date, 13, 25, 17)
        _assert_clock(events.sunset.date, 21, 45, 43)
        assert events.sunset.date.utcoffset() == timedelta(hours=2)

    def test_sunset_only(self):
        events = compute_sunrise_transit_sunset(
            date(2016, 7, 18), 2.0, GeoCoordinate(54.339262, 8.600417),
            [RiseSetField.SUNSET_DATE],
        )
        _assert_clock(events.sunset.date, 21, 47, 16)
        assert events.sunset.height_deg is None
        assert events.sunrise is None
        assert events.transit is None

    def test_datetime_argument_reduced_to_date(self):
        by_date = compute_sunrise_transit_sunset(
            date(2016, 7, 9), 2.0, GeoCoordinate(53.3249, 10.0),
        )
        by_datetime = compute_sunrise_transit_sunset(
            datetime(2016, 7, 9, 15, 30), 2.0, GeoCoordinate(53.3249, 10.0),
        )
        assert by_date == by_datetime


class TestFieldSelection:

    def test_transit_height_only(self):
        events = compute_sunrise_transit_sunset(
            PAPER_DAY, 0.0, PAPER_SITE, [RiseSetField.TRANSIT_HEIGHT],
        )
        assert events.transit.date is None
        assert events.transit.height_deg == pytest.approx(32.0912504, abs=ACCURACY)
        assert events.sunrise is None
        assert events.sunset is None

    def test_sunrise_date_only(self):
        events = compute_sunrise_transit_sunset(
            PAPER_DAY, 0.0, PAPER_SITE, [RiseSetField.SUNRISE_DATE],
        )
        _assert_clock(events.sunrise.date, 7, 8, 13)
        assert events.sunrise.height_deg is None

    def test_sunset_both(self):
        events = compute_sunrise_transit_sunset(
            PAPER_DAY, 0.0, PAPER_SITE,
            [RiseSetField.SUNSET_DATE, RiseSetField.SUNSET_HEIGHT],
        )
        _assert_clock(events.sunset.date, 16, 59, 56)
        assert events.sunset.height_deg == pytest.approx(-0.73393324, abs=ACCURACY)

    def test_selection_does_not_change_values(self):
        full = compute_sunrise_transit_sunset(PAPER_DAY, 0.0, PAPER_SITE, ALL_RISE_SET_FIELDS)
        partial = compute_sunrise_transit_sunset(
            PAPER_DAY, 0.0, PAPER_SITE, [RiseSetField.SUNRISE_DATE, RiseSetField.SUNRISE_HEIGHT],
        )
        assert partial.sunrise == full.sunrise

    def test_no_fields_nothing_computed(self):
        assert compute_sunrise_transit_sunset(PAPER_DAY, 0.0, PAPER_SITE, []).is_empty


class TestCircumpolar:
    """No horizon crossing yields an empty result."""

    def test_polar_day(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="suncompass.domain.sunrise"):
            events = compute_sunrise_transit_sunset(
                date(2016, 6, 21), 0.0, GeoCoordinate(80.0, 0.0),
            )
        assert events.is_empty
        assert events == SunRiseSet.empty()
        assert "circumpolar" in caplog.text

    def test_polar_night(self):
        events = compute_sunrise_transit_sunset(
            date(2016, 12, 21), 0.0, GeoCoordinate(80.0, 0.0),
        )
        assert events.is_empty


class TestHorizonHourAngle:
    """H0 spans the closed range [0, 180]."""

    def test_equinox_equator_is_quarter_day(self):
        assert horizon_hour_angle(0.0, 0.0, horizon_deg=0.0) == pytest.approx(90.0)

    def test_argument_minus_one_gives_full_half_day(self):
        assert horizon_hour_angle(0.0, 0.0, horizon_deg=-90.0) == pytest.approx(180.0)

    def test_argument_plus_one_gives_zero(self):
        assert horizon_hour_angle(0.0, 0.0, horizon_deg=90.0) == pytest.approx(0.0)

    def test_polar_day_has_none(self):
        assert horizon_hour_angle(80.0, math.radians(23.44)) is None

    def test_polar_night_has_none(self):
        assert horizon_hour_angle(80.0, math.radians(-23.44)) is None


class TestIsDaylight:

    @pytest.fixture
    def events(self):
        tz = timezone(timedelta(hours=2))
        return SunRiseSet(
            sunrise=DateHeight(date=datetime(2016, 7, 9, 5, 4, 11, tzinfo=tz)),
            sunset=DateHeight(date=datetime(2016, 7, 9, 21, 45, 43, tzinfo=tz)),
        )

    @staticmethod
    def _at(*args, tzinfo=timezone(timedelta(hours=2))):
        return SunPosition(instant=datetime(*args, tzinfo=tzinfo))

    def test_midday(self, events):
        assert events.is_daylight(self._at(2016, 7, 9, 12, 0))

    def test_night(self, events):
        assert not events.is_daylight(self._at(2016, 7, 9, 2, 0))
        assert not events.is_daylight(self._at(2016, 7, 9, 23, 0))

    def test_sample_containing_sunrise_counts(self, events):
        assert events.is_daylight(self._at(2016, 7, 9, 5, 4), Resolution.MINUTE)
        assert events.is_daylight(self._at(2016, 7, 9, 5, 0), Resolution.HOUR)

    def test_second_resolution_exact(self, events):
        assert not events.is_daylight(self._at(2016, 7, 9, 5, 4, 10), Resolution.SECOND)
        assert events.is_daylight(self._at(2016, 7, 9, 5, 4, 11), Resolution.SECOND)

    def test_sunset_excluded(self, events):
        assert events.is_daylight(self._at(2016, 7, 9, 21, 45, 42), Resolution.SECOND)
        assert not events.is_daylight(self._at(2016, 7, 9, 21, 45, 43), Resolution.SECOND)

    def test_naive_instant_read_at_event_offset(self, events):
        assert events.is_daylight(self._at(2016, 7, 9, 12, 0, tzinfo=None))

    def test_aware_instant_other_zone(self, events):
        # 03:00 UTC is 05:00 at UTC+2, before sunrise at second resolution
        utc = self._at(2016, 7, 9, 3, 0, tzinfo=timezone.utc)
        assert not events.is_daylight(utc, Resolution.SECOND)

    def test_empty_is_never_daylight(self):
        assert not SunRiseSet.empty().is_daylight(self._at(2016, 7, 9, 12, 0))
