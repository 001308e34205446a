# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Angle conversions and range reduction.

Scalar helpers use math; the *_array twins take NumPy arrays and apply the
same operations elementwise so both paths round identically.
"""
import math

import numpy as np

_DEG_PER_RAD: float = 180.0 / math.pi
_RAD_PER_DEG: float = math.pi / 180.0


def radians_to_degrees(rad: float) -> float:
    """Convert radians to degrees."""
    return _DEG_PER_RAD * rad


def degrees_to_radians(angle: float) -> float:
    """Convert degrees to radians."""
    return _RAD_PER_DEG * angle


def radians_to_degrees_array(rads: np.ndarray) -> np.ndarray:
    """Elementwise radians_to_degrees."""
    return _DEG_PER_RAD * np.asarray(rads, dtype=np.float64)


def degrees_to_radians_array(angles: np.ndarray) -> np.ndarray:
    """Elementwise degrees_to_radians."""
    return _RAD_PER_DEG * np.asarray(angles, dtype=np.float64)


def clamp_to_360(angle: float) -> float:
    """Reduce an angle in degrees to [0, 360).

    fmod is exact, so values already in range come back unchanged.
    """
    limited = math.fmod(angle, 360.0)
    if limited < 0.0:
        limited += 360.0
    if limited >= 360.0:
        # -tiny + 360 rounds up to 360
        limited = 0.0
    return limited


def clamp_to_360_array(angles: np.ndarray) -> np.ndarray:
    """Elementwise clamp_to_360."""
    limited = np.fmod(np.asarray(angles, dtype=np.float64), 360.0)
    limited = np.where(limited < 0.0, limited + 360.0, limited)
    return np.where(limited >= 360.0, 0.0, limited)


def clamp_to_180_signed(angle: float) -> float:
    """Reduce an angle in degrees to [-180, 180]."""
    limited = clamp_to_360(angle)
    if limited > 180.0:
        limited -= 360.0
    return limited


def wrap_unit(value: float) -> float:
    """Reduce a fraction (e.g. of a day) to [0, 1)."""
    limited = value - math.floor(value)
    if limited >= 1.0:
        limited = 0.0
    return limited
