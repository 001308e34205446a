# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Suncompass

Apparent position of the sun (azimuth, height, zenith, right ascension,
incidence on a tilted surface, cast shadow) and the times of sunrise,
solar transit and sunset for any place and instant, following the NREL
Solar Position Algorithm. Whole days can be sampled at hour, minute or
second resolution through a vectorized NumPy engine; a low-precision
closed-form estimate is included for cheap approximate positions.
"""

from suncompass.domain.angles import (
    radians_to_degrees,
    degrees_to_radians,
    clamp_to_360,
)
from suncompass.domain.julian import (
    DELTA_T_SECONDS,
    Resolution,
    julian_day,
    julian_ephemeris_day,
    julian_century,
    julian_ephemeris_millennium,
    julian_days_for_day,
)
from suncompass.domain.sun_position import (
    GeoCoordinate,
    ObserverConditions,
    PositionField,
    ALL_POSITION_FIELDS,
    ComputationMask,
    Shadow,
    SunPosition,
)
from suncompass.domain.spa import compute_sun_position
from suncompass.domain.spa_batch import (
    compute_sun_positions,
    compute_sun_position_arrays,
)
from suncompass.domain.sunrise import (
    RiseSetField,
    ALL_RISE_SET_FIELDS,
    DateHeight,
    SunRiseSet,
    compute_sunrise_transit_sunset,
)
from suncompass.domain.approximate import approximate_sun_position

__version__ = "1.0.0"

__all__ = [
    "radians_to_degrees",
    "degrees_to_radians",
    "clamp_to_360",
    "DELTA_T_SECONDS",
    "Resolution",
    "julian_day",
    "julian_ephemeris_day",
    "julian_century",
    "julian_ephemeris_millennium",
    "julian_days_for_day",
    "GeoCoordinate",
    "ObserverConditions",
    "PositionField",
    "ALL_POSITION_FIELDS",
    "ComputationMask",
    "Shadow",
    "SunPosition",
    "compute_sun_position",
    "compute_sun_positions",
    "compute_sun_position_arrays",
    "RiseSetField",
    "ALL_RISE_SET_FIELDS",
    "DateHeight",
    "SunRiseSet",
    "compute_sunrise_transit_sunset",
    "approximate_sun_position",
]
