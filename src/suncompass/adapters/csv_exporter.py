# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV sun position exporter.

Exports sampled sun positions as CSV, one row per instant.
External dependencies (csv, file I/O) are confined to this adapter.
"""
import csv

from suncompass.ports.export import SunPositionExporter
from suncompass.domain.sun_position import PositionField, SunPosition
from suncompass.adapters.accuracy import warn_if_delta_t_drifts

_HEADER = ['instant'] + [field.value for field in PositionField]


class CsvSunPositionExporter(SunPositionExporter):
    """Exports sun positions to CSV, empty cells for absent fields."""

    def export(
        self,
        positions: list[SunPosition],
        path: str,
    ) -> int:
        warn_if_delta_t_drifts(positions)

        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_HEADER)

            for position in positions:
                row = [position.instant.isoformat()]
                for field in PositionField:
                    value = position.get(field)
                    row.append('' if value is None else f'{value:.8f}')
                writer.writerow(row)

        return len(positions)
