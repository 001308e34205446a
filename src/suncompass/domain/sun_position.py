# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Value objects for solar position results.

A caller requests a set of PositionField values; ComputationMask turns the
request into the boolean flags each pipeline stage consults, including the
fields a requested one depends on. SunPosition carries exactly the fields
in the mask and None for everything else.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Optional

DEFAULT_PRESSURE_MBAR: float = 1010.0
DEFAULT_TEMPERATURE_C: float = 10.0
DEFAULT_SLOPE_DEG: float = 30.0
DEFAULT_SURFACE_AZIMUTH_DEG: float = -10.0
DEFAULT_BUILDING_HEIGHT_M: float = 10.0


@dataclass(frozen=True)
class GeoCoordinate:
    """Observer location, WGS84 degrees (longitude positive east)."""
    latitude_deg: float
    longitude_deg: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.latitude_deg <= 90.0:
            raise ValueError(f"latitude_deg must be in [-90, 90], got {self.latitude_deg}")
        if not -180.0 <= self.longitude_deg <= 180.0:
            raise ValueError(f"longitude_deg must be in [-180, 180], got {self.longitude_deg}")


@dataclass(frozen=True)
class ObserverConditions:
    """Atmosphere, surface and obstacle parameters of an observation.

    pressure_mbar, temperature_c: refraction correction inputs
    slope_deg, surface_azimuth_deg: tilted surface for the incidence angle
        (azimuth measured from south, positive towards west)
    building_height_m: obstacle height for the cast shadow
    """
    pressure_mbar: float = DEFAULT_PRESSURE_MBAR
    temperature_c: float = DEFAULT_TEMPERATURE_C
    slope_deg: float = DEFAULT_SLOPE_DEG
    surface_azimuth_deg: float = DEFAULT_SURFACE_AZIMUTH_DEG
    building_height_m: float = DEFAULT_BUILDING_HEIGHT_M


class PositionField(Enum):
    """Quantities a solar position request can ask for."""
    ASCENSION = "ascension"
    AZIMUTH = "azimuth"
    HEIGHT = "height"
    ZENITH = "zenith"
    INCIDENCE = "incidence"
    SHADOW_DIRECTION = "shadow_direction"
    SHADOW_LENGTH = "shadow_length"


ALL_POSITION_FIELDS: frozenset[PositionField] = frozenset(PositionField)

# Fields a requested field cannot be computed without
_IMPLIED_FIELDS: dict[PositionField, frozenset[PositionField]] = {
    PositionField.ZENITH: frozenset({PositionField.HEIGHT}),
    PositionField.INCIDENCE: frozenset({
        PositionField.AZIMUTH, PositionField.HEIGHT, PositionField.ZENITH,
    }),
    PositionField.SHADOW_DIRECTION: frozenset({PositionField.AZIMUTH}),
    PositionField.SHADOW_LENGTH: frozenset({PositionField.HEIGHT}),
}


@dataclass(frozen=True)
class ComputationMask:
    """Which pipeline outputs to compute. Build once per request."""
    ascension: bool = False
    azimuth: bool = False
    height: bool = False
    zenith: bool = False
    incidence: bool = False
    shadow_direction: bool = False
    shadow_length: bool = False

    @staticmethod
    def from_fields(fields: Iterable[PositionField]) -> "ComputationMask":
        """Mask for the requested fields plus the fields they depend on."""
        closed: set[PositionField] = set()
        for field in fields:
            closed.add(PositionField(field))
            closed |= _IMPLIED_FIELDS.get(PositionField(field), frozenset())
        return ComputationMask(**{field.value: True for field in closed})

    @property
    def fields(self) -> frozenset[PositionField]:
        return frozenset(f for f in PositionField if getattr(self, f.value))


@dataclass(frozen=True)
class Shadow:
    """Shadow cast by a vertical obstacle."""
    direction_deg: Optional[float] = None
    length_m: Optional[float] = None


@dataclass(frozen=True)
class SunPosition:
    """Apparent topocentric sun position at an instant.

    Angles in degrees. Azimuth is measured eastward from north. Fields that
    were not requested (or implied) are None.
    """
    instant: datetime
    ascension_deg: Optional[float] = None
    azimuth_deg: Optional[float] = None
    height_deg: Optional[float] = None
    zenith_deg: Optional[float] = None
    incidence_deg: Optional[float] = None
    shadow: Optional[Shadow] = None

    def get(self, field: PositionField) -> Optional[float]:
        """Value of a field, or None when absent."""
        if field is PositionField.SHADOW_DIRECTION:
            return self.shadow.direction_deg if self.shadow else None
        if field is PositionField.SHADOW_LENGTH:
            return self.shadow.length_m if self.shadow else None
        return getattr(self, f"{field.value}_deg")

    def present_fields(self) -> frozenset[PositionField]:
        return frozenset(f for f in PositionField if self.get(f) is not None)


def build_sun_position(
    instant: datetime,
    values: dict[PositionField, float],
) -> SunPosition:
    """Assemble a SunPosition from computed values keyed by field."""
    shadow = None
    if PositionField.SHADOW_DIRECTION in values or PositionField.SHADOW_LENGTH in values:
        shadow = Shadow(
            direction_deg=values.get(PositionField.SHADOW_DIRECTION),
            length_m=values.get(PositionField.SHADOW_LENGTH),
        )
    return SunPosition(
        instant=instant,
        ascension_deg=values.get(PositionField.ASCENSION),
        azimuth_deg=values.get(PositionField.AZIMUTH),
        height_deg=values.get(PositionField.HEIGHT),
        zenith_deg=values.get(PositionField.ZENITH),
        incidence_deg=values.get(PositionField.INCIDENCE),
        shadow=shadow,
    )
