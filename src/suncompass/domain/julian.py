# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Time scales for the solar position algorithm.

Calendar date → Julian Day (JD) → Julian Ephemeris Day (JDE) → Julian
(Ephemeris) Century → Julian Ephemeris Millennium. Each conversion has a
scalar form and a NumPy batch form; the batch forms evaluate the same
expression in the same order so they agree with the scalar forms to the
last bit.

The calendar grid helpers at the bottom build the instants (and their
Julian Days) for a whole day, or a two-hour window, at hour/minute/second
resolution.

References:
    Reda, I., Andreas, A. (2008). Solar Position Algorithm for Solar
    Radiation Applications. NREL/TP-560-34302, Section 3.1.
    Meeus, J. Astronomical Algorithms, Ch. 7.
"""
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional

import numpy as np

# --------------------------------------------------------------------------- #
# Constants
# --------------------------------------------------------------------------- #

DELTA_T_SECONDS: float = 67.0
"""TT - UT1 in seconds. Fixed value, accurate for roughly 2000-2020 only."""

_J2000_JD: float = 2451545.0
_DAYS_PER_JULIAN_CENTURY: float = 36525.0
_SECONDS_PER_DAY: float = 86400.0
_GREGORIAN_START_JD: float = 2299160.0


class Resolution(Enum):
    """Sampling step for whole-day evaluation."""
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"

    @property
    def seconds(self) -> int:
        """Step length in seconds."""
        return _RESOLUTION_SECONDS[self]

    @property
    def samples_per_hour(self) -> int:
        return 3600 // self.seconds


_RESOLUTION_SECONDS = {
    Resolution.HOUR: 3600,
    Resolution.MINUTE: 60,
    Resolution.SECOND: 1,
}


def fixed_offset(utc_offset_hours: float) -> timezone:
    """Fixed-offset tzinfo for an offset in hours east of UTC."""
    return timezone(timedelta(hours=utc_offset_hours))


# --------------------------------------------------------------------------- #
# Julian Day
# --------------------------------------------------------------------------- #

def _gregorian_base(year: int, month: int) -> tuple[float, int]:
    """Integer part of the Julian Day formula and the Gregorian correction."""
    if month < 3:
        month += 12
        year -= 1
    left = int(365.25 * (year + 4716))
    right = int(30.6001 * (month + 1))
    a = year // 100
    return float(left + right), 2 - a + a // 4


def julian_day(instant: datetime, utc_offset_hours: float) -> float:
    """Julian Day of a local wall-clock instant.

    Naive datetimes are read as local time at ``utc_offset_hours``; aware
    datetimes are converted to that offset first.
    """
    if instant.tzinfo is not None:
        instant = instant.astimezone(fixed_offset(utc_offset_hours))

    base, gregorian = _gregorian_base(instant.year, instant.month)

    second_part = (instant.second + instant.microsecond / 1_000_000.0) / 60.0
    minute_part = (instant.minute + second_part) / 60.0
    hour_part = ((instant.hour - utc_offset_hours) + minute_part) / 24.0
    day_decimal = instant.day + hour_part

    jd = base + day_decimal - 1524.5
    if jd > _GREGORIAN_START_JD:
        jd += gregorian
    return jd


def julian_ephemeris_day(jd: float) -> float:
    """JDE = JD + ΔT/86400."""
    return jd + DELTA_T_SECONDS / _SECONDS_PER_DAY


def julian_century(jd: float) -> float:
    """Julian centuries since J2000.0. Also used for JDE → JCE."""
    return (jd - _J2000_JD) / _DAYS_PER_JULIAN_CENTURY


def julian_ephemeris_millennium(jce: float) -> float:
    """JME = JCE / 10."""
    return jce / 10.0


def julian_ephemeris_days(jds: np.ndarray) -> np.ndarray:
    """Elementwise julian_ephemeris_day."""
    return np.asarray(jds, dtype=np.float64) + DELTA_T_SECONDS / _SECONDS_PER_DAY


def julian_centuries(jds: np.ndarray) -> np.ndarray:
    """Elementwise julian_century."""
    return (np.asarray(jds, dtype=np.float64) - _J2000_JD) / _DAYS_PER_JULIAN_CENTURY


def julian_ephemeris_millennia(jces: np.ndarray) -> np.ndarray:
    """Elementwise julian_ephemeris_millennium."""
    return np.asarray(jces, dtype=np.float64) / 10.0


# --------------------------------------------------------------------------- #
# Day grids
# --------------------------------------------------------------------------- #

def hour_window(hour: Optional[int] = None) -> range:
    """Hours covered by a day grid.

    Without a target hour the whole day (0..23). With one, the hour before
    it and the hour itself, truncated at midnight.
    """
    if hour is None:
        return range(0, 24)
    if not 0 <= hour <= 23:
        raise ValueError(f"hour must be in 0..23, got {hour}")
    return range(max(hour - 1, 0), hour + 1)


def local_date(day: date, utc_offset_hours: float) -> date:
    """Calendar date of ``day`` in the local time at ``utc_offset_hours``."""
    if isinstance(day, datetime):
        if day.tzinfo is not None:
            day = day.astimezone(fixed_offset(utc_offset_hours))
        return day.date()
    return day


def _grid_offsets(hours: range, resolution: Resolution) -> np.ndarray:
    """Seconds since the first hour of the window, one per sample."""
    return np.arange(0, len(hours) * 3600, resolution.seconds, dtype=np.int64)


def julian_days_for_day(
    day: date,
    hour: Optional[int],
    utc_offset_hours: float,
    resolution: Resolution,
) -> np.ndarray:
    """Julian Days for every sample of a day (or two-hour window).

    Ascending, ``len(hour_window(hour)) * resolution.samples_per_hour``
    values. Element i equals ``julian_day`` of ``instants_for_day(...)[i]``.
    """
    hours = hour_window(hour)
    day = local_date(day, utc_offset_hours)
    base, gregorian = _gregorian_base(day.year, day.month)

    offsets = _grid_offsets(hours, resolution)
    h = (hours.start + offsets // 3600).astype(np.float64)
    m = ((offsets % 3600) // 60).astype(np.float64)
    s = (offsets % 60).astype(np.float64)

    second_part = s / 60.0
    minute_part = (m + second_part) / 60.0
    hour_part = ((h - utc_offset_hours) + minute_part) / 24.0
    day_decimal = day.day + hour_part

    jd = base + day_decimal - 1524.5
    return np.where(jd > _GREGORIAN_START_JD, jd + gregorian, jd)


def instants_for_day(
    day: date,
    hour: Optional[int],
    utc_offset_hours: float,
    resolution: Resolution,
) -> list[datetime]:
    """Timezone-aware instants matching julian_days_for_day one-to-one."""
    hours = hour_window(hour)
    day = local_date(day, utc_offset_hours)
    start = datetime(day.year, day.month, day.day, hours.start,
                     tzinfo=fixed_offset(utc_offset_hours))
    return [start + timedelta(seconds=int(o))
            for o in _grid_offsets(hours, resolution)]
