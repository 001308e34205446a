# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for sun position file output.

Adapters implement these to handle different file formats.
"""
from suncompass.ports.export import SunPositionExporter

__all__ = ["SunPositionExporter"]
