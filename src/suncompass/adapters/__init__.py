# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
File export adapters for sun positions.
"""
from suncompass.adapters.csv_exporter import CsvSunPositionExporter
from suncompass.adapters.json_io import (
    JsonSunPositionExporter,
    rise_set_to_dict,
    sun_position_to_dict,
)

__all__ = [
    "CsvSunPositionExporter",
    "JsonSunPositionExporter",
    "rise_set_to_dict",
    "sun_position_to_dict",
]
