# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for solar position computation.

Usage:
    # Sun position at one instant (NREL SPA), JSON to stdout
    suncompass --date 2003-10-17T12:30:30 --utc-offset -7 \\
        --lat 39.742476 --lon -105.1786 --elevation 1830.14 \\
        --pressure 820 --temperature 11

    # Only some fields
    suncompass --date 2016-07-09T14:00 --lat 53.3 --lon 10 --fields azimuth,height

    # A whole day at minute resolution, or the window around 14h
    suncompass --date 2016-07-09 --lat 53.3 --lon 10 --day --resolution minute
    suncompass --date 2016-07-09 --lat 53.3 --lon 10 --day --hour 14 --resolution second

    # Sunrise, transit and sunset
    suncompass --date 2016-07-09 --utc-offset 2 --lat 53.3249 --lon 10 --rise-set

    # Low-precision estimate (UTC)
    suncompass --date 2006-08-06T06:00 --lat 48.1 --lon 11.6 --approximate

    # Export a sampled day
    suncompass --date 2016-07-09 --lat 53.3 --lon 10 --day --export-csv day.csv
"""
import argparse
import json
import logging
import sys
from datetime import datetime

from suncompass.domain.julian import Resolution
from suncompass.domain.sun_position import (
    ALL_POSITION_FIELDS,
    DEFAULT_BUILDING_HEIGHT_M,
    DEFAULT_PRESSURE_MBAR,
    DEFAULT_SLOPE_DEG,
    DEFAULT_SURFACE_AZIMUTH_DEG,
    DEFAULT_TEMPERATURE_C,
    GeoCoordinate,
    ObserverConditions,
    PositionField,
)
from suncompass.domain.spa import compute_sun_position
from suncompass.domain.spa_batch import compute_sun_positions
from suncompass.domain.sunrise import (
    ALL_RISE_SET_FIELDS,
    RiseSetField,
    compute_sunrise_transit_sunset,
)
from suncompass.domain.approximate import approximate_sun_position
from suncompass.adapters.csv_exporter import CsvSunPositionExporter
from suncompass.adapters.json_io import (
    JsonSunPositionExporter,
    rise_set_to_dict,
    sun_position_to_dict,
)


def parse_fields(text: str | None, rise_set: bool = False) -> frozenset:
    """
    Parse a comma-separated field list.

    Position fields: ascension, azimuth, height, zenith, incidence,
    shadow_direction, shadow_length. Rise/set fields: sunrise_date,
    sunrise_height, sunset_date, sunset_height, transit_date, transit_height.

    Raises:
        ValueError: On an unknown field name.
    """
    kind = RiseSetField if rise_set else PositionField
    if not text:
        return ALL_RISE_SET_FIELDS if rise_set else ALL_POSITION_FIELDS
    names = [name.strip().lower() for name in text.split(',') if name.strip()]
    valid = sorted(f.value for f in kind)
    fields = set()
    for name in names:
        if name not in valid:
            raise ValueError(f"Unknown field '{name}'. Choose from: {', '.join(valid)}")
        fields.add(kind(name))
    return frozenset(fields)


def parse_date(text: str) -> datetime:
    """ISO 8601 date or date-time."""
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid date '{text}', expected ISO 8601 (YYYY-MM-DD[THH:MM[:SS]])") from None


def run(args: argparse.Namespace) -> object:
    """
    Execute the requested computation.

    Returns:
        A JSON-compatible result (dict, or list of dicts for --day).
    """
    location = GeoCoordinate(latitude_deg=args.lat, longitude_deg=args.lon)
    instant = parse_date(args.date)
    conditions = ObserverConditions(
        pressure_mbar=args.pressure,
        temperature_c=args.temperature,
        slope_deg=args.slope,
        surface_azimuth_deg=args.surface_azimuth,
        building_height_m=args.building_height,
    )

    if args.rise_set:
        fields = parse_fields(args.fields, rise_set=True)
        result = compute_sunrise_transit_sunset(
            instant.date(), args.utc_offset, location, fields,
        )
        return rise_set_to_dict(result)

    if args.approximate:
        return sun_position_to_dict(approximate_sun_position(instant, location))

    fields = parse_fields(args.fields)
    if args.day:
        positions = compute_sun_positions(
            instant.date(), args.hour, Resolution(args.resolution),
            args.utc_offset, location, args.elevation, fields,
            pressure_mbar=conditions.pressure_mbar,
            temperature_c=conditions.temperature_c,
            slope_deg=conditions.slope_deg,
            surface_azimuth_deg=conditions.surface_azimuth_deg,
            building_height_m=conditions.building_height_m,
        )
    else:
        positions = [compute_sun_position(
            instant, args.utc_offset, location, args.elevation, fields,
            pressure_mbar=conditions.pressure_mbar,
            temperature_c=conditions.temperature_c,
            slope_deg=conditions.slope_deg,
            surface_azimuth_deg=conditions.surface_azimuth_deg,
            building_height_m=conditions.building_height_m,
        )]

    exported = False
    if args.export_csv:
        n = CsvSunPositionExporter().export(positions, args.export_csv)
        print(f"Exported {n} positions to {args.export_csv}")
        exported = True
    if args.export_json:
        n = JsonSunPositionExporter().export(positions, args.export_json)
        print(f"Exported {n} positions to {args.export_json}")
        exported = True
    if exported:
        return None

    if args.day:
        return [sun_position_to_dict(p) for p in positions]
    return sun_position_to_dict(positions[0])


def main():
    parser = argparse.ArgumentParser(
        description="Compute the sun's position, sunrise and sunset (NREL SPA)"
    )
    parser.add_argument(
        '--date', required=True,
        help="Local date or date-time, ISO 8601 (e.g. 2003-10-17T12:30:30)"
    )
    parser.add_argument(
        '--utc-offset', type=float, default=0.0,
        help="Hours east of UTC (default: 0)"
    )
    parser.add_argument('--lat', type=float, required=True, help="Latitude in degrees")
    parser.add_argument('--lon', type=float, required=True,
                        help="Longitude in degrees, positive east")
    parser.add_argument(
        '--elevation', type=float, default=0.0,
        help="Observer elevation in meters (default: 0)"
    )
    parser.add_argument(
        '--fields',
        help="Comma-separated fields to compute (default: all)"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Log debug output to stderr"
    )

    conditions_group = parser.add_argument_group('atmosphere and surface')
    conditions_group.add_argument(
        '--pressure', type=float, default=DEFAULT_PRESSURE_MBAR,
        help=f"Annual average pressure in mbar (default: {DEFAULT_PRESSURE_MBAR:g})"
    )
    conditions_group.add_argument(
        '--temperature', type=float, default=DEFAULT_TEMPERATURE_C,
        help=f"Annual average temperature in °C (default: {DEFAULT_TEMPERATURE_C:g})"
    )
    conditions_group.add_argument(
        '--slope', type=float, default=DEFAULT_SLOPE_DEG,
        help=f"Surface slope from horizontal in degrees (default: {DEFAULT_SLOPE_DEG:g})"
    )
    conditions_group.add_argument(
        '--surface-azimuth', type=float, default=DEFAULT_SURFACE_AZIMUTH_DEG,
        help="Surface azimuth from south, positive west "
             f"(default: {DEFAULT_SURFACE_AZIMUTH_DEG:g})"
    )
    conditions_group.add_argument(
        '--building-height', type=float, default=DEFAULT_BUILDING_HEIGHT_M,
        help=f"Obstacle height for the shadow in meters (default: {DEFAULT_BUILDING_HEIGHT_M:g})"
    )

    mode_group = parser.add_argument_group('mode')
    mode_group.add_argument(
        '--day', action='store_true', default=False,
        help="Sample the whole local day instead of a single instant"
    )
    mode_group.add_argument(
        '--resolution', choices=[r.value for r in Resolution], default='minute',
        help="Sampling step for --day (default: minute)"
    )
    mode_group.add_argument(
        '--hour', type=int,
        help="With --day, only the hour before HOUR and HOUR itself (0-23)"
    )
    mode_group.add_argument(
        '--rise-set', action='store_true', default=False,
        help="Compute sunrise, transit and sunset for the date"
    )
    mode_group.add_argument(
        '--approximate', action='store_true', default=False,
        help="Low-precision position; --date is read as UTC"
    )

    export_group = parser.add_argument_group('export')
    export_group.add_argument(
        '--export-csv',
        help="Export positions to CSV (one row per instant)"
    )
    export_group.add_argument(
        '--export-json',
        help="Export positions to a JSON array"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if sum([args.day, args.rise_set, args.approximate]) > 1:
        parser.error("--day, --rise-set and --approximate are mutually exclusive")

    try:
        result = run(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if result is not None:
        print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == '__main__':
    main()
