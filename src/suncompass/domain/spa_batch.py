# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
NREL Solar Position Algorithm over arrays of instants.

Vectorized restatement of suncompass.domain.spa: every stage evaluates the
same formula over a NumPy array of Julian Days. Used to sample a whole day
(or a two-hour window) at hour, minute or second resolution.

Agreement with the scalar engine: ascension, azimuth and shadow direction
within 1e-6°, height, zenith and incidence within 1e-5°, shadow length
within 1e-3 m away from the horizon (its error grows as 1/sin²e).
"""
import logging
from datetime import date
from typing import Iterable, Optional

import numpy as np

from suncompass.domain.angles import (
    clamp_to_360_array,
    degrees_to_radians,
    degrees_to_radians_array,
    radians_to_degrees_array,
)
from suncompass.domain.julian import (
    Resolution,
    instants_for_day,
    julian_centuries,
    julian_days_for_day,
    julian_ephemeris_days,
    julian_ephemeris_millennia,
)
from suncompass.domain.periodic_series import (
    earth_radius_vector_array,
    geocentric_latitude_array,
    geocentric_longitude_array,
    nutation_and_obliquity_array,
)
from suncompass.domain.spa import (
    ABERRATION_ARCSEC,
    EARTH_FLATTENING_RATIO,
    EARTH_RADIUS_M,
    PARALLAX_ARCSEC,
    REFRACTION_LIMIT_DEG,
    SIDEREAL_J2000_DEG,
    SIDEREAL_RATE_DEG_PER_DAY,
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

logger = logging.getLogger(__name__)


def _geocentric_arrays(
    jd: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Radius vector, sidereal time, right ascension and declination.

    Returns:
        (radius_au, sidereal_time_deg, right_ascension_deg,
         declination_rad, true_obliquity_rad)
    """
    jc = julian_centuries(jd)
    jce = julian_centuries(julian_ephemeris_days(jd))
    jme = julian_ephemeris_millennia(jce)

    radius = earth_radius_vector_array(jme)
    theta = geocentric_longitude_array(jme)
    beta = degrees_to_radians_array(geocentric_latitude_array(jme))
    delta_psi, _, epsilon = nutation_and_obliquity_array(jce, jme)

    aberration = ABERRATION_ARCSEC / (3600.0 * radius)
    lam = degrees_to_radians_array(theta + delta_psi + aberration)

    mean_sidereal = (SIDEREAL_J2000_DEG + SIDEREAL_RATE_DEG_PER_DAY * (jd - 2451545.0)
                     + jc * jc * (0.000387933 - jc / 38710000.0))
    nu = clamp_to_360_array(mean_sidereal) + delta_psi * np.cos(epsilon)

    alpha = clamp_to_360_array(radians_to_degrees_array(np.arctan2(
        np.sin(lam) * np.cos(epsilon) - np.tan(beta) * np.sin(epsilon),
        np.cos(lam),
    )))
    delta = np.arcsin(np.clip(
        np.sin(beta) * np.cos(epsilon) + np.cos(beta) * np.sin(epsilon) * np.sin(lam),
        -1.0, 1.0,
    ))
    return radius, nu, alpha, delta, epsilon


def _refraction_array(
    e0: np.ndarray,
    pressure_mbar: float,
    temperature_c: float,
) -> np.ndarray:
    """Elementwise atmospheric_refraction; zero below the visible horizon."""
    below = e0 < REFRACTION_LIMIT_DEG
    with np.errstate(divide="ignore", invalid="ignore"):
        correction = ((pressure_mbar / 1010.0) * (283.0 / (273.0 + temperature_c)) * 1.02
                      / (60.0 * np.tan(degrees_to_radians_array(e0 + 10.3 / (e0 + 5.11)))))
    return np.where(below, 0.0, correction)


def compute_sun_position_arrays(
    julian_days: np.ndarray,
    location: GeoCoordinate,
    elevation_m: float,
    fields: Iterable[PositionField] = ALL_POSITION_FIELDS,
    pressure_mbar: float = DEFAULT_PRESSURE_MBAR,
    temperature_c: float = DEFAULT_TEMPERATURE_C,
    slope_deg: float = DEFAULT_SLOPE_DEG,
    surface_azimuth_deg: float = DEFAULT_SURFACE_AZIMUTH_DEG,
    building_height_m: float = DEFAULT_BUILDING_HEIGHT_M,
) -> dict[PositionField, np.ndarray]:
    """Masked sun position fields for an array of Julian Days (UT).

    Returns:
        One array per field in the computation mask, each the length of
        ``julian_days``.
    """
    mask = ComputationMask.from_fields(fields)
    jd = np.asarray(julian_days, dtype=np.float64)
    arrays: dict[PositionField, np.ndarray] = {}

    radius, nu, alpha, delta, _ = _geocentric_arrays(jd)

    hour_angle = clamp_to_360_array(nu + location.longitude_deg - alpha)
    h_rad = degrees_to_radians_array(hour_angle)

    xi = degrees_to_radians_array(PARALLAX_ARCSEC / (3600.0 * radius))
    lat = degrees_to_radians(location.latitude_deg)
    u = np.arctan(EARTH_FLATTENING_RATIO * np.tan(lat))
    x = np.cos(u) + elevation_m / EARTH_RADIUS_M * np.cos(lat)
    y = EARTH_FLATTENING_RATIO * np.sin(u) + elevation_m / EARTH_RADIUS_M * np.sin(lat)

    denominator = np.cos(delta) - x * np.sin(xi) * np.cos(h_rad)
    delta_alpha = np.arctan2(-x * np.sin(xi) * np.sin(h_rad), denominator)
    delta_alpha_deg = radians_to_degrees_array(delta_alpha)

    if mask.ascension:
        arrays[PositionField.ASCENSION] = alpha + delta_alpha_deg

    if not (mask.height or mask.azimuth):
        return arrays

    delta_prime = np.arctan2(
        (np.sin(delta) - y * np.sin(xi)) * np.cos(delta_alpha), denominator,
    )
    h_prime = degrees_to_radians_array(hour_angle - delta_alpha_deg)

    if mask.height:
        e0 = radians_to_degrees_array(np.arcsin(np.clip(
            np.sin(lat) * np.sin(delta_prime)
            + np.cos(lat) * np.cos(delta_prime) * np.cos(h_prime),
            -1.0, 1.0,
        )))
        e = e0 + _refraction_array(e0, pressure_mbar, temperature_c)
        arrays[PositionField.HEIGHT] = e
        if mask.zenith:
            arrays[PositionField.ZENITH] = 90.0 - e
        if mask.shadow_length:
            e_rad = degrees_to_radians_array(e)
            sin_e = np.sin(e_rad)
            with np.errstate(divide="ignore", invalid="ignore"):
                length = building_height_m * (np.sin(np.pi / 2.0 - e_rad) / sin_e)
            arrays[PositionField.SHADOW_LENGTH] = np.where(sin_e == 0.0, np.inf, length)

    if mask.azimuth:
        gamma = clamp_to_360_array(radians_to_degrees_array(np.arctan2(
            np.sin(h_prime),
            np.cos(h_prime) * np.sin(lat) - np.tan(delta_prime) * np.cos(lat),
        )))
        phi = clamp_to_360_array(gamma + 180.0)
        arrays[PositionField.AZIMUTH] = phi
        if mask.shadow_direction:
            arrays[PositionField.SHADOW_DIRECTION] = phi - 180.0
        if mask.incidence:
            zenith = degrees_to_radians_array(arrays[PositionField.ZENITH])
            slope = degrees_to_radians(slope_deg)
            incidence = np.arccos(np.clip(
                np.cos(zenith) * np.cos(slope)
                + np.sin(slope) * np.sin(zenith)
                * np.cos(degrees_to_radians_array(gamma - surface_azimuth_deg)),
                -1.0, 1.0,
            ))
            arrays[PositionField.INCIDENCE] = radians_to_degrees_array(incidence)

    return arrays


def compute_sun_positions(
    day: date,
    hour: Optional[int],
    resolution: Resolution,
    utc_offset_hours: float,
    location: GeoCoordinate,
    elevation_m: float,
    fields: Iterable[PositionField] = ALL_POSITION_FIELDS,
    pressure_mbar: float = DEFAULT_PRESSURE_MBAR,
    temperature_c: float = DEFAULT_TEMPERATURE_C,
    slope_deg: float = DEFAULT_SLOPE_DEG,
    surface_azimuth_deg: float = DEFAULT_SURFACE_AZIMUTH_DEG,
    building_height_m: float = DEFAULT_BUILDING_HEIGHT_M,
) -> list[SunPosition]:
    """Sun positions sampled across a local calendar day.

    Args:
        day: Local calendar day at ``utc_offset_hours``.
        hour: None for the whole day; otherwise only the window of the
            hour before ``hour`` and ``hour`` itself.
        resolution: Sampling step.
        utc_offset_hours: Hours east of UTC.
        location, elevation_m, fields, ...: As for compute_sun_position.

    Returns:
        One SunPosition per sample, ascending in time, each carrying a
        timezone-aware instant.
    """
    fields = frozenset(fields)
    julian_days = julian_days_for_day(day, hour, utc_offset_hours, resolution)
    instants = instants_for_day(day, hour, utc_offset_hours, resolution)
    logger.debug("Evaluating %d instants at %s resolution", len(instants), resolution.value)

    arrays = compute_sun_position_arrays(
        julian_days, location, elevation_m, fields,
        pressure_mbar=pressure_mbar,
        temperature_c=temperature_c,
        slope_deg=slope_deg,
        surface_azimuth_deg=surface_azimuth_deg,
        building_height_m=building_height_m,
    )

    columns = {field: values.tolist() for field, values in arrays.items()}
    return [
        build_sun_position(
            instant, {field: column[index] for field, column in columns.items()},
        )
        for index, instant in enumerate(instants)
    ]
