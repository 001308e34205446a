# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Low-precision sun position.

Closed-form mean longitude / mean anomaly model with a linear sidereal
time, good to roughly 0.01° in azimuth and height between 1950 and 2050.
Independent of the SPA series tables; useful when many rough positions
are needed cheaply.
"""
import math
from datetime import datetime, timezone

from suncompass.domain.angles import (
    clamp_to_360,
    degrees_to_radians,
    radians_to_degrees,
)
from suncompass.domain.julian import julian_day
from suncompass.domain.spa import REFRACTION_LIMIT_DEG
from suncompass.domain.sun_position import GeoCoordinate, SunPosition

_J2000_JD: float = 2451545.0


def _as_utc(instant: datetime) -> datetime:
    """Naive datetimes are taken as UTC."""
    if instant.tzinfo is None:
        return instant
    return instant.astimezone(timezone.utc).replace(tzinfo=None)


def approximate_sun_position(instant: datetime, location: GeoCoordinate) -> SunPosition:
    """Azimuth and refraction-corrected height of the sun.

    Args:
        instant: UTC datetime (naive) or an aware datetime.
        location: Observer latitude/longitude.

    Returns:
        SunPosition with only azimuth_deg and height_deg set.
    """
    utc = _as_utc(instant)
    n = julian_day(utc, 0.0) - _J2000_JD

    # Ecliptic longitude from mean longitude and mean anomaly
    mean_longitude = 280.46 + 0.9856474 * n
    g = degrees_to_radians(357.528 + 0.9856003 * n)
    lam = (degrees_to_radians(mean_longitude)
           + degrees_to_radians(1.915) * math.sin(g)
           + degrees_to_radians(0.01997) * math.sin(2.0 * g))
    epsilon = degrees_to_radians(23.439 - 0.0000004 * n)

    alpha = radians_to_degrees(math.atan2(math.cos(epsilon) * math.sin(lam), math.cos(lam)))
    delta = math.asin(math.sin(epsilon) * math.sin(lam))

    midnight = utc.replace(hour=0, minute=0, second=0, microsecond=0)
    t0 = (julian_day(midnight, 0.0) - _J2000_JD) / 36525.0
    hours = utc.hour + utc.minute / 60.0 + (utc.second + utc.microsecond / 1e6) / 3600.0

    sidereal_hours = 6.697376 + 2400.05134 * t0 + 1.002738 * hours
    tau = degrees_to_radians(sidereal_hours * 15.0 + location.longitude_deg - alpha)

    lat = degrees_to_radians(location.latitude_deg)
    azimuth = clamp_to_360(radians_to_degrees(math.atan2(
        math.sin(tau),
        math.cos(tau) * math.sin(lat) - math.tan(delta) * math.cos(lat),
    )) + 180.0)

    height = radians_to_degrees(math.asin(max(-1.0, min(1.0,
        math.cos(delta) * math.cos(tau) * math.cos(lat) + math.sin(delta) * math.sin(lat)
    ))))
    refraction_arcmin = 0.0
    if height >= REFRACTION_LIMIT_DEG:
        refraction_arcmin = 1.02 / math.tan(degrees_to_radians(height + 10.3 / (height + 5.11)))

    return SunPosition(
        instant=instant,
        azimuth_deg=azimuth,
        height_deg=height + refraction_arcmin / 60.0,
    )
