# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interface for sun position export.

Adapters implement this to write sampled sun positions in various formats
(CSV, JSON).
"""
from typing import Protocol, runtime_checkable

from suncompass.domain.sun_position import SunPosition


@runtime_checkable
class SunPositionExporter(Protocol):
    """Port for exporting sun positions to file."""

    def export(
        self,
        positions: list[SunPosition],
        path: str,
    ) -> int:
        """
        Export sun positions to a file.

        Fields absent from a position are left empty (CSV) or omitted
        (JSON), never written as zero.

        Args:
            positions: SunPosition values, typically one sampled day.
            path: Output file path.

        Returns:
            Number of positions exported.
        """
        ...
