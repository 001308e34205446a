# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Periodic series of the NREL Solar Position Algorithm.

Earth heliocentric longitude, latitude and radius vector from the truncated
VSOP87 terms, shifted to geocentric coordinates, plus the 63-term nutation
series and the obliquity of the ecliptic.

Every scalar function has an ``*_array`` twin evaluating the same terms in
the same order over a NumPy array of instants.

References:
    Reda, I., Andreas, A. (2008). NREL/TP-560-34302, Sections 3.2-3.5.
"""
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from suncompass.domain.angles import (
    clamp_to_360,
    clamp_to_360_array,
    degrees_to_radians,
    degrees_to_radians_array,
    radians_to_degrees,
    radians_to_degrees_array,
)
from suncompass.domain.spa_tables import (
    EARTH_LATITUDE_ARRAYS,
    EARTH_LATITUDE_TERMS,
    EARTH_LONGITUDE_ARRAYS,
    EARTH_LONGITUDE_TERMS,
    EARTH_RADIUS_ARRAYS,
    EARTH_RADIUS_TERMS,
    NUTATION_ARGUMENT_MULTIPLIERS,
    NUTATION_COEFFICIENT_ARRAY,
    NUTATION_COEFFICIENTS,
    NUTATION_MULTIPLIER_ARRAY,
)

_SERIES_SCALE: float = 1.0e8

# 0.0001 arcsec -> degrees
_NUTATION_SCALE: float = 36_000_000.0

# Fundamental arguments X0..X4 as ((a*JCE + b)*JCE + c)*JCE + d, degrees:
# mean elongation of the moon, mean anomaly of the sun, mean anomaly of the
# moon, moon's argument of latitude, longitude of the moon's ascending node.
_FUNDAMENTAL_ARGUMENTS: tuple[tuple[float, float, float, float], ...] = (
    (1.0 / 189474.0, -0.0019142, 445267.111480, 297.85036),
    (-1.0 / 300000.0, -0.0001603, 35999.050340, 357.52772),
    (1.0 / 56250.0, 0.0086972, 477198.867398, 134.96298),
    (1.0 / 327270.0, -0.0036825, 483202.017538, 93.27191),
    (1.0 / 450000.0, 0.0020708, -1934.136261, 125.04452),
)

# Mean obliquity in arcsec, polynomial in U = JME/10, ascending powers
_MEAN_OBLIQUITY_ARCSEC: tuple[float, ...] = (
    84381.448, -4680.93, -1.55, 1999.25, -51.38,
    -249.67, -39.05, 7.12, 27.87, 5.79, 2.45,
)


@dataclass(frozen=True)
class Nutation:
    """Nutation in longitude/obliquity and the true obliquity of the ecliptic."""
    delta_psi_deg: float
    delta_epsilon_deg: float
    true_obliquity_rad: float


# --------------------------------------------------------------------------- #
# Series evaluation
# --------------------------------------------------------------------------- #

def series_sum(terms: Sequence[Sequence[float]], x: float) -> float:
    """Sum of A*cos(B + C*x) over (A, B, C) terms."""
    total = 0.0
    for a, b, c in terms:
        total += a * math.cos(b + c * x)
    return total


def series_sums(terms: Sequence[Sequence[float]], x: np.ndarray) -> np.ndarray:
    """Elementwise series_sum over an array of x."""
    total = np.zeros_like(x, dtype=np.float64)
    for a, b, c in terms:
        total += a * np.cos(b + c * x)
    return total


def _power_series(values, x):
    """values[0] + values[1]*x + values[2]*x**2 + ...

    Works for floats and arrays alike.
    """
    total = values[0]
    for power, value in enumerate(values[1:], start=1):
        total = total + value * x ** power
    return total


def _horner(coefficients: Sequence[float], x):
    """Polynomial with ascending coefficients, evaluated innermost-first."""
    result = coefficients[-1]
    for c in reversed(coefficients[:-1]):
        result = c + x * result
    return result


def _third_order(a: float, b: float, c: float, d: float, x):
    return ((a * x + b) * x + c) * x + d


# --------------------------------------------------------------------------- #
# Earth heliocentric position
# --------------------------------------------------------------------------- #

def earth_heliocentric_longitude(jme: float) -> float:
    """Earth heliocentric longitude L in degrees, [0, 360)."""
    values = [series_sum(terms, jme) for terms in EARTH_LONGITUDE_TERMS]
    return clamp_to_360(radians_to_degrees(_power_series(values, jme) / _SERIES_SCALE))


def earth_heliocentric_longitude_array(jme: np.ndarray) -> np.ndarray:
    values = [series_sums(terms, jme) for terms in EARTH_LONGITUDE_ARRAYS]
    return clamp_to_360_array(
        radians_to_degrees_array(_power_series(values, jme) / _SERIES_SCALE)
    )


def earth_heliocentric_latitude(jme: float) -> float:
    """Earth heliocentric latitude B in degrees."""
    values = [radians_to_degrees(series_sum(terms, jme)) for terms in EARTH_LATITUDE_TERMS]
    return _power_series(values, jme) / _SERIES_SCALE


def earth_heliocentric_latitude_array(jme: np.ndarray) -> np.ndarray:
    values = [radians_to_degrees_array(series_sums(terms, jme))
              for terms in EARTH_LATITUDE_ARRAYS]
    return _power_series(values, jme) / _SERIES_SCALE


def earth_radius_vector(jme: float) -> float:
    """Earth-Sun distance R in astronomical units."""
    values = [series_sum(terms, jme) for terms in EARTH_RADIUS_TERMS]
    return _power_series(values, jme) / _SERIES_SCALE


def earth_radius_vector_array(jme: np.ndarray) -> np.ndarray:
    values = [series_sums(terms, jme) for terms in EARTH_RADIUS_ARRAYS]
    return _power_series(values, jme) / _SERIES_SCALE


def geocentric_longitude(jme: float) -> float:
    """Geocentric longitude Θ = L + 180°, in [0, 360)."""
    return clamp_to_360(earth_heliocentric_longitude(jme) + 180.0)


def geocentric_longitude_array(jme: np.ndarray) -> np.ndarray:
    return clamp_to_360_array(earth_heliocentric_longitude_array(jme) + 180.0)


def geocentric_latitude(jme: float) -> float:
    """Geocentric latitude β = -B, in degrees."""
    return -earth_heliocentric_latitude(jme)


def geocentric_latitude_array(jme: np.ndarray) -> np.ndarray:
    return -earth_heliocentric_latitude_array(jme)


# --------------------------------------------------------------------------- #
# Nutation and obliquity
# --------------------------------------------------------------------------- #

def nutation_and_obliquity(jce: float, jme: float) -> Nutation:
    """Nutation ΔΨ, Δε (degrees) and true obliquity ε (radians)."""
    x0, x1, x2, x3, x4 = (_third_order(*coeffs, jce) for coeffs in _FUNDAMENTAL_ARGUMENTS)

    delta_psi = 0.0
    delta_epsilon = 0.0
    for (y0, y1, y2, y3, y4), (a, b, c, d) in zip(
        NUTATION_ARGUMENT_MULTIPLIERS, NUTATION_COEFFICIENTS,
    ):
        arg = degrees_to_radians(x0 * y0 + x1 * y1 + x2 * y2 + x3 * y3 + x4 * y4)
        delta_psi += (a + b * jce) * math.sin(arg)
        delta_epsilon += (c + d * jce) * math.cos(arg)

    delta_psi /= _NUTATION_SCALE
    delta_epsilon /= _NUTATION_SCALE

    mean_obliquity = _horner(_MEAN_OBLIQUITY_ARCSEC, jme / 10.0)
    true_obliquity = mean_obliquity / 3600.0 + delta_epsilon

    return Nutation(
        delta_psi_deg=delta_psi,
        delta_epsilon_deg=delta_epsilon,
        true_obliquity_rad=degrees_to_radians(true_obliquity),
    )


def nutation_and_obliquity_array(
    jce: np.ndarray,
    jme: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Elementwise nutation_and_obliquity.

    Returns:
        (delta_psi_deg, delta_epsilon_deg, true_obliquity_rad) arrays.
    """
    x0, x1, x2, x3, x4 = (_third_order(*coeffs, jce) for coeffs in _FUNDAMENTAL_ARGUMENTS)

    delta_psi = np.zeros_like(jce, dtype=np.float64)
    delta_epsilon = np.zeros_like(jce, dtype=np.float64)
    for (y0, y1, y2, y3, y4), (a, b, c, d) in zip(
        NUTATION_MULTIPLIER_ARRAY, NUTATION_COEFFICIENT_ARRAY,
    ):
        arg = degrees_to_radians_array(x0 * y0 + x1 * y1 + x2 * y2 + x3 * y3 + x4 * y4)
        delta_psi += (a + b * jce) * np.sin(arg)
        delta_epsilon += (c + d * jce) * np.cos(arg)

    delta_psi /= _NUTATION_SCALE
    delta_epsilon /= _NUTATION_SCALE

    mean_obliquity = _horner(_MEAN_OBLIQUITY_ARCSEC, jme / 10.0)
    true_obliquity = mean_obliquity / 3600.0 + delta_epsilon

    return delta_psi, delta_epsilon, degrees_to_radians_array(true_obliquity)
