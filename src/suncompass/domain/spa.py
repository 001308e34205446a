# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
NREL Solar Position Algorithm, single instant.

Geocentric stage (apparent longitude, sidereal time, right ascension,
declination) followed by the topocentric stage (parallax, refraction,
azimuth, incidence on a tilted surface, cast shadow). Only the stages the
requested fields need are evaluated.

Accuracy is ±0.0003° in zenith and azimuth over -2000..6000, limited in
practice by the fixed ΔT of julian.DELTA_T_SECONDS.

References:
    Reda, I., Andreas, A. (2008). Solar Position Algorithm for Solar
    Radiation Applications. NREL/TP-560-34302, Sections 3.6-3.16.
"""
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from suncompass.domain.angles import (
    clamp_to_360,
    degrees_to_radians,
    radians_to_degrees,
)
from suncompass.domain.julian import (
    fixed_offset,
    julian_century,
    julian_day,
    julian_ephemeris_day,
    julian_ephemeris_millennium,
)
from suncompass.domain.periodic_series import (
    earth_radius_vector,
    geocentric_latitude,
    geocentric_longitude,
    nutation_and_obliquity,
)
from suncompass.domain.sun_position import (
    ALL_POSITION_FIELDS,
    DEFAULT_BUILDING_HEIGHT_M,
    DEFAULT_PRESSURE_MBAR,
    DEFAULT_SLOPE_DEG,
    DEFAULT_SURFACE_AZIMUTH_DEG,
    DEFAULT_TEMPERATURE_C,
    ComputationMask,
    GeoCoordinate,
    PositionField,
    SunPosition,
    build_sun_position,
)

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

SUN_RADIUS_DEG: float = 0.26667
ATMOSPHERIC_REFRACTION_DEG: float = 0.5667

ABERRATION_ARCSEC: float = -20.4898
PARALLAX_ARCSEC: float = 8.794
EARTH_FLATTENING_RATIO: float = 0.99664719
EARTH_RADIUS_M: float = 6378140.0

SIDEREAL_J2000_DEG: float = 280.46061837
SIDEREAL_RATE_DEG_PER_DAY: float = 360.98564736629

# Below this geometric elevation the refraction correction is dropped
REFRACTION_LIMIT_DEG: float = -(SUN_RADIUS_DEG + ATMOSPHERIC_REFRACTION_DEG)


def _clip_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


# --------------------------------------------------------------------------- #
# Geocentric stage
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class GeocentricSun:
    """Geocentric sun position and the sidereal time at a Julian Day."""
    jd: float
    radius_au: float
    delta_psi_deg: float
    true_obliquity_rad: float
    latitude_rad: float
    apparent_longitude_rad: float
    sidereal_time_deg: float
    right_ascension_deg: float
    declination_rad: float


def apparent_sun_longitude(
    geocentric_longitude_deg: float,
    delta_psi_deg: float,
    radius_au: float,
) -> float:
    """λ = Θ + ΔΨ + Δτ with the aberration Δτ, in radians."""
    aberration = ABERRATION_ARCSEC / (3600.0 * radius_au)
    return degrees_to_radians(geocentric_longitude_deg + delta_psi_deg + aberration)


def apparent_sidereal_time(
    jd: float,
    jc: float,
    true_obliquity_rad: float,
    delta_psi_deg: float,
) -> float:
    """Apparent sidereal time at Greenwich ν, in degrees."""
    mean = (SIDEREAL_J2000_DEG + SIDEREAL_RATE_DEG_PER_DAY * (jd - 2451545.0)
            + jc * jc * (0.000387933 - jc / 38710000.0))
    return clamp_to_360(mean) + delta_psi_deg * math.cos(true_obliquity_rad)


def sun_right_ascension(
    latitude_rad: float,
    true_obliquity_rad: float,
    apparent_longitude_rad: float,
) -> float:
    """Geocentric right ascension α in degrees, [0, 360)."""
    alpha = math.atan2(
        math.sin(apparent_longitude_rad) * math.cos(true_obliquity_rad)
        - math.tan(latitude_rad) * math.sin(true_obliquity_rad),
        math.cos(apparent_longitude_rad),
    )
    return clamp_to_360(radians_to_degrees(alpha))


def sun_declination(
    latitude_rad: float,
    true_obliquity_rad: float,
    apparent_longitude_rad: float,
) -> float:
    """Geocentric declination δ in radians."""
    return math.asin(_clip_unit(
        math.sin(latitude_rad) * math.cos(true_obliquity_rad)
        + math.cos(latitude_rad) * math.sin(true_obliquity_rad)
        * math.sin(apparent_longitude_rad)
    ))


def geocentric_sun(jd: float) -> GeocentricSun:
    """Run the geocentric stage for a Julian Day (UT)."""
    jc = julian_century(jd)
    jce = julian_century(julian_ephemeris_day(jd))
    jme = julian_ephemeris_millennium(jce)

    radius = earth_radius_vector(jme)
    theta = geocentric_longitude(jme)
    beta = degrees_to_radians(geocentric_latitude(jme))
    nutation = nutation_and_obliquity(jce, jme)

    lam = apparent_sun_longitude(theta, nutation.delta_psi_deg, radius)
    epsilon = nutation.true_obliquity_rad

    return GeocentricSun(
        jd=jd,
        radius_au=radius,
        delta_psi_deg=nutation.delta_psi_deg,
        true_obliquity_rad=epsilon,
        latitude_rad=beta,
        apparent_longitude_rad=lam,
        sidereal_time_deg=apparent_sidereal_time(jd, jc, epsilon, nutation.delta_psi_deg),
        right_ascension_deg=sun_right_ascension(beta, epsilon, lam),
        declination_rad=sun_declination(beta, epsilon, lam),
    )


# --------------------------------------------------------------------------- #
# Topocentric stage
# --------------------------------------------------------------------------- #

def atmospheric_refraction(
    elevation_deg: float,
    pressure_mbar: float,
    temperature_c: float,
) -> float:
    """Refraction correction Δe in degrees; zero below the visible horizon."""
    if elevation_deg < REFRACTION_LIMIT_DEG:
        return 0.0
    return ((pressure_mbar / 1010.0) * (283.0 / (273.0 + temperature_c)) * 1.02
            / (60.0 * math.tan(degrees_to_radians(
                elevation_deg + 10.3 / (elevation_deg + 5.11)))))


def shadow_length(building_height_m: float, elevation_deg: float) -> float:
    """Length of the shadow cast by a vertical obstacle.

    Negative below the horizon, infinite with the sun exactly on it.
    """
    e = degrees_to_radians(elevation_deg)
    sin_e = math.sin(e)
    if sin_e == 0.0:
        return math.inf
    return building_height_m * (math.sin(math.pi / 2.0 - e) / sin_e)


def topocentric_values(
    sun: GeocentricSun,
    location: GeoCoordinate,
    elevation_m: float,
    mask: ComputationMask,
    pressure_mbar: float = DEFAULT_PRESSURE_MBAR,
    temperature_c: float = DEFAULT_TEMPERATURE_C,
    slope_deg: float = DEFAULT_SLOPE_DEG,
    surface_azimuth_deg: float = DEFAULT_SURFACE_AZIMUTH_DEG,
    building_height_m: float = DEFAULT_BUILDING_HEIGHT_M,
) -> dict[PositionField, float]:
    """Evaluate the masked topocentric quantities for one geocentric position."""
    values: dict[PositionField, float] = {}

    delta = sun.declination_rad
    hour_angle = clamp_to_360(sun.sidereal_time_deg + location.longitude_deg
                              - sun.right_ascension_deg)
    h_rad = degrees_to_radians(hour_angle)

    # Parallax
    xi = degrees_to_radians(PARALLAX_ARCSEC / (3600.0 * sun.radius_au))
    lat = degrees_to_radians(location.latitude_deg)
    u = math.atan(EARTH_FLATTENING_RATIO * math.tan(lat))
    x = math.cos(u) + elevation_m / EARTH_RADIUS_M * math.cos(lat)
    y = EARTH_FLATTENING_RATIO * math.sin(u) + elevation_m / EARTH_RADIUS_M * math.sin(lat)

    denominator = math.cos(delta) - x * math.sin(xi) * math.cos(h_rad)
    delta_alpha = math.atan2(-x * math.sin(xi) * math.sin(h_rad), denominator)
    delta_alpha_deg = radians_to_degrees(delta_alpha)

    if mask.ascension:
        values[PositionField.ASCENSION] = sun.right_ascension_deg + delta_alpha_deg

    if not (mask.height or mask.azimuth):
        return values

    delta_prime = math.atan2(
        (math.sin(delta) - y * math.sin(xi)) * math.cos(delta_alpha), denominator,
    )
    h_prime = degrees_to_radians(hour_angle - delta_alpha_deg)

    if mask.height:
        e0 = radians_to_degrees(math.asin(_clip_unit(
            math.sin(lat) * math.sin(delta_prime)
            + math.cos(lat) * math.cos(delta_prime) * math.cos(h_prime)
        )))
        e = e0 + atmospheric_refraction(e0, pressure_mbar, temperature_c)
        values[PositionField.HEIGHT] = e
        if mask.zenith:
            values[PositionField.ZENITH] = 90.0 - e
        if mask.shadow_length:
            values[PositionField.SHADOW_LENGTH] = shadow_length(building_height_m, e)

    if mask.azimuth:
        gamma = clamp_to_360(radians_to_degrees(math.atan2(
            math.sin(h_prime),
            math.cos(h_prime) * math.sin(lat) - math.tan(delta_prime) * math.cos(lat),
        )))
        phi = clamp_to_360(gamma + 180.0)
        values[PositionField.AZIMUTH] = phi
        if mask.shadow_direction:
            values[PositionField.SHADOW_DIRECTION] = phi - 180.0
        if mask.incidence:
            zenith = degrees_to_radians(values[PositionField.ZENITH])
            slope = degrees_to_radians(slope_deg)
            incidence = math.acos(_clip_unit(
                math.cos(zenith) * math.cos(slope)
                + math.sin(slope) * math.sin(zenith)
                * math.cos(degrees_to_radians(gamma - surface_azimuth_deg))
            ))
            values[PositionField.INCIDENCE] = radians_to_degrees(incidence)

    return values


def compute_sun_position(
    instant: datetime,
    utc_offset_hours: float,
    location: GeoCoordinate,
    elevation_m: float,
    fields: Iterable[PositionField] = ALL_POSITION_FIELDS,
    pressure_mbar: float = DEFAULT_PRESSURE_MBAR,
    temperature_c: float = DEFAULT_TEMPERATURE_C,
    slope_deg: float = DEFAULT_SLOPE_DEG,
    surface_azimuth_deg: float = DEFAULT_SURFACE_AZIMUTH_DEG,
    building_height_m: float = DEFAULT_BUILDING_HEIGHT_M,
) -> SunPosition:
    """Topocentric sun position for one instant.

    Args:
        instant: Local wall-clock time at ``utc_offset_hours`` (naive), or
            an aware datetime.
        utc_offset_hours: Hours east of UTC.
        location: Observer latitude/longitude.
        elevation_m: Observer elevation above sea level.
        fields: Requested fields. Dependencies are added (zenith needs the
            height, incidence needs azimuth and zenith, ...).
        pressure_mbar, temperature_c: Refraction inputs.
        slope_deg, surface_azimuth_deg: Surface for the incidence angle.
        building_height_m: Obstacle height for the shadow length.

    Returns:
        SunPosition with the requested and implied fields populated. A naive
        instant comes back carrying the fixed ``utc_offset_hours`` zone.
    """
    mask = ComputationMask.from_fields(fields)
    sun = geocentric_sun(julian_day(instant, utc_offset_hours))
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=fixed_offset(utc_offset_hours))
    values = topocentric_values(
        sun, location, elevation_m, mask,
        pressure_mbar=pressure_mbar,
        temperature_c=temperature_c,
        slope_deg=slope_deg,
        surface_azimuth_deg=surface_azimuth_deg,
        building_height_m=building_height_m,
    )
    return build_sun_position(instant, values)
