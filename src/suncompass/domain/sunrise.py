# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Sunrise, solar transit and sunset for a calendar day.

Non-iterative method of NREL/TP-560-34302 Appendix A.2: the geocentric sun
at 0h UT of the previous day, the day itself and the next day is
interpolated to first estimates of the three events, each refined once.
Days on which the sun never crosses the -0.83337° horizon (polar day or
night) yield an empty SunRiseSet.
"""
import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Iterable, Optional

from suncompass.domain.angles import (
    clamp_to_180_signed,
    degrees_to_radians,
    radians_to_degrees,
    wrap_unit,
)
from suncompass.domain.julian import (
    DELTA_T_SECONDS,
    Resolution,
    fixed_offset,
    julian_day,
    local_date,
)
from suncompass.domain.spa import GeocentricSun, geocentric_sun
from suncompass.domain.sun_position import GeoCoordinate, SunPosition

logger = logging.getLogger(__name__)

# Sun's upper limb on the horizon with standard refraction
HORIZON_ELEVATION_DEG: float = -0.83337

_SIDEREAL_RATE_DEG_PER_DAY: float = 360.985647


class RiseSetField(Enum):
    """Quantities a sunrise/transit/sunset request can ask for."""
    SUNRISE_DATE = "sunrise_date"
    SUNRISE_HEIGHT = "sunrise_height"
    SUNSET_DATE = "sunset_date"
    SUNSET_HEIGHT = "sunset_height"
    TRANSIT_DATE = "transit_date"
    TRANSIT_HEIGHT = "transit_height"


ALL_RISE_SET_FIELDS: frozenset[RiseSetField] = frozenset(RiseSetField)


@dataclass(frozen=True)
class DateHeight:
    """Event time and the sun's topocentric elevation at it."""
    date: Optional[datetime] = None
    height_deg: Optional[float] = None


@dataclass(frozen=True)
class SunRiseSet:
    """Sunrise, sunset and transit of one day; None where not requested."""
    sunrise: Optional[DateHeight] = None
    sunset: Optional[DateHeight] = None
    transit: Optional[DateHeight] = None

    @staticmethod
    def empty() -> "SunRiseSet":
        return SunRiseSet()

    @property
    def is_empty(self) -> bool:
        return self.sunrise is None and self.sunset is None and self.transit is None

    def is_daylight(
        self,
        position: SunPosition,
        resolution: Resolution = Resolution.MINUTE,
    ) -> bool:
        """Whether a sampled position lies between sunrise and sunset.

        A sample one resolution step before sunrise already counts as
        daylight, so the sample containing sunrise is included.
        """
        sunrise = self.sunrise.date if self.sunrise else None
        sunset = self.sunset.date if self.sunset else None
        if sunrise is None or sunset is None:
            return False
        instant = position.instant
        if instant.tzinfo is None:
            # Naive instants are local time at the event offset
            instant = instant.replace(tzinfo=sunrise.tzinfo)
        tolerance = 0 if resolution is Resolution.SECOND else resolution.seconds
        until_sunrise = (sunrise - instant).total_seconds()
        until_sunset = (sunset - instant).total_seconds()
        return until_sunrise <= tolerance and until_sunset > 0


@dataclass(frozen=True)
class _Interpolation:
    """Right ascension and declination differences across three days."""
    a: float
    b: float
    c: float
    a_prime: float
    b_prime: float
    c_prime: float


def horizon_hour_angle(
    latitude_deg: float,
    declination_rad: float,
    horizon_deg: float = HORIZON_ELEVATION_DEG,
) -> Optional[float]:
    """Hour angle H0 at which the sun stands at ``horizon_deg``, in [0, 180].

    None when the sun does not reach that elevation on the day (polar day
    or night).
    """
    lat = degrees_to_radians(latitude_deg)
    argument = ((math.sin(degrees_to_radians(horizon_deg))
                 - math.sin(lat) * math.sin(declination_rad))
                / (math.cos(lat) * math.cos(declination_rad)))
    if not -1.0 <= argument <= 1.0:
        return None
    return radians_to_degrees(math.acos(argument))


def _limited_difference(value: float) -> float:
    if abs(value) > 2.0:
        return wrap_unit(value)
    return value


def _interpolation(
    yesterday: GeocentricSun,
    today: GeocentricSun,
    tomorrow: GeocentricSun,
) -> _Interpolation:
    a = _limited_difference(today.right_ascension_deg - yesterday.right_ascension_deg)
    b = _limited_difference(tomorrow.right_ascension_deg - today.right_ascension_deg)
    a_prime = _limited_difference(
        radians_to_degrees(today.declination_rad - yesterday.declination_rad))
    b_prime = _limited_difference(
        radians_to_degrees(tomorrow.declination_rad - today.declination_rad))
    return _Interpolation(a, b, b - a, a_prime, b_prime, b_prime - a_prime)


def _refine(
    m: float,
    today: GeocentricSun,
    diff: _Interpolation,
    location: GeoCoordinate,
) -> tuple[float, float, float]:
    """Interpolate to day fraction ``m``.

    Returns:
        (local hour angle H' in degrees, declination δ' in radians,
         elevation h' in degrees)
    """
    nu = today.sidereal_time_deg + _SIDEREAL_RATE_DEG_PER_DAY * m
    n = m + DELTA_T_SECONDS / 86400.0

    alpha = today.right_ascension_deg + n * (diff.a + diff.b + diff.c * n) / 2.0
    delta = degrees_to_radians(
        radians_to_degrees(today.declination_rad)
        + n * (diff.a_prime + diff.b_prime + diff.c_prime * n) / 2.0
    )

    hour_angle = clamp_to_180_signed(nu + location.longitude_deg - alpha)
    lat = degrees_to_radians(location.latitude_deg)
    elevation = radians_to_degrees(math.asin(max(-1.0, min(1.0,
        math.sin(lat) * math.sin(delta)
        + math.cos(lat) * math.cos(delta) * math.cos(degrees_to_radians(hour_angle))
    ))))
    return hour_angle, delta, elevation


def _horizon_crossing(
    m: float,
    hour_angle_deg: float,
    delta_rad: float,
    elevation_deg: float,
    location: GeoCoordinate,
) -> float:
    """Day fraction of a sunrise or sunset after the final correction."""
    lat = degrees_to_radians(location.latitude_deg)
    return m + (elevation_deg - HORIZON_ELEVATION_DEG) / (
        360.0 * math.cos(delta_rad) * math.cos(lat)
        * math.sin(degrees_to_radians(hour_angle_deg))
    )


def _local_datetime(day: date, fraction: float, utc_offset_hours: float) -> datetime:
    """Local clock time on ``day`` for a UT day fraction, seconds truncated."""
    local_hours = 24.0 * wrap_unit(fraction + utc_offset_hours / 24.0)
    hours = int(local_hours)
    minutes = (local_hours - hours) * 60.0
    seconds = int(60.0 * (minutes - int(minutes)))
    start = datetime(day.year, day.month, day.day, tzinfo=fixed_offset(utc_offset_hours))
    return start + timedelta(hours=hours, minutes=int(minutes), seconds=seconds)


def _event(
    day: date,
    fraction: float,
    height_deg: float,
    utc_offset_hours: float,
    want_date: bool,
    want_height: bool,
) -> Optional[DateHeight]:
    if not (want_date or want_height):
        return None
    return DateHeight(
        date=_local_datetime(day, fraction, utc_offset_hours) if want_date else None,
        height_deg=height_deg if want_height else None,
    )


def compute_sunrise_transit_sunset(
    day: date,
    utc_offset_hours: float,
    location: GeoCoordinate,
    fields: Iterable[RiseSetField] = ALL_RISE_SET_FIELDS,
) -> SunRiseSet:
    """Sunrise, transit and sunset of a local calendar day.

    Args:
        day: Calendar day (a datetime is reduced to its local date).
        utc_offset_hours: Hours east of UTC; event dates carry this offset.
        location: Observer latitude/longitude.
        fields: Requested event dates/heights.

    Returns:
        SunRiseSet with the requested events. Empty when the sun stays
        above or below the horizon all day.
    """
    fields = frozenset(fields)
    day = local_date(day, utc_offset_hours)

    jd = julian_day(datetime(day.year, day.month, day.day), 0.0)
    yesterday = geocentric_sun(jd - 1.0)
    today = geocentric_sun(jd)
    tomorrow = geocentric_sun(jd + 1.0)

    m0 = (today.right_ascension_deg - location.longitude_deg - today.sidereal_time_deg) / 360.0

    h0 = horizon_hour_angle(location.latitude_deg, today.declination_rad)
    if h0 is None:
        logger.debug("No sunrise or sunset on %s at %s (circumpolar)", day, location)
        return SunRiseSet.empty()

    m0 = wrap_unit(m0)
    diff = _interpolation(yesterday, today, tomorrow)

    transit = sunrise = sunset = None

    if RiseSetField.TRANSIT_DATE in fields or RiseSetField.TRANSIT_HEIGHT in fields:
        hour_angle, _, height = _refine(m0, today, diff, location)
        transit = _event(
            day, m0 - hour_angle / 360.0, height, utc_offset_hours,
            RiseSetField.TRANSIT_DATE in fields, RiseSetField.TRANSIT_HEIGHT in fields,
        )

    if RiseSetField.SUNRISE_DATE in fields or RiseSetField.SUNRISE_HEIGHT in fields:
        m1 = wrap_unit(m0 - h0 / 360.0)
        hour_angle, delta, height = _refine(m1, today, diff, location)
        sunrise = _event(
            day, _horizon_crossing(m1, hour_angle, delta, height, location),
            height, utc_offset_hours,
            RiseSetField.SUNRISE_DATE in fields, RiseSetField.SUNRISE_HEIGHT in fields,
        )

    if RiseSetField.SUNSET_DATE in fields or RiseSetField.SUNSET_HEIGHT in fields:
        m2 = wrap_unit(m0 + h0 / 360.0)
        hour_angle, delta, height = _refine(m2, today, diff, location)
        sunset = _event(
            day, _horizon_crossing(m2, hour_angle, delta, height, location),
            height, utc_offset_hours,
            RiseSetField.SUNSET_DATE in fields, RiseSetField.SUNSET_HEIGHT in fields,
        )

    return SunRiseSet(sunrise=sunrise, sunset=sunset, transit=transit)
