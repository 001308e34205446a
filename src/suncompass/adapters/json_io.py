# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON serialisation of sun positions and sunrise/sunset results.

Only present fields are written; absent fields are omitted rather than
written as null or zero.
"""
import json
import math
from typing import Any

from suncompass.adapters.accuracy import warn_if_delta_t_drifts
from suncompass.domain.sun_position import PositionField, SunPosition
from suncompass.domain.sunrise import DateHeight, SunRiseSet
from suncompass.ports.export import SunPositionExporter


def _number(value: float) -> Any:
    # JSON has no infinity; a sun exactly on the horizon casts an endless shadow
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return value


def sun_position_to_dict(position: SunPosition) -> dict[str, Any]:
    """Serialise a SunPosition to a JSON-compatible dict."""
    data: dict[str, Any] = {'instant': position.instant.isoformat()}
    for field in PositionField:
        value = position.get(field)
        if value is not None:
            data[field.value] = _number(value)
    return data


def _date_height_to_dict(event: DateHeight) -> dict[str, Any]:
    data: dict[str, Any] = {}
    if event.date is not None:
        data['date'] = event.date.isoformat()
    if event.height_deg is not None:
        data['height_deg'] = event.height_deg
    return data


def rise_set_to_dict(rise_set: SunRiseSet) -> dict[str, Any]:
    """Serialise a SunRiseSet; absent events are omitted."""
    data: dict[str, Any] = {}
    for name in ('sunrise', 'transit', 'sunset'):
        event = getattr(rise_set, name)
        if event is not None:
            data[name] = _date_height_to_dict(event)
    return data


class JsonSunPositionExporter(SunPositionExporter):
    """Exports sun positions to a JSON array."""

    def export(
        self,
        positions: list[SunPosition],
        path: str,
    ) -> int:
        warn_if_delta_t_drifts(positions)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump([sun_position_to_dict(p) for p in positions], f,
                      indent=2, ensure_ascii=False)
        return len(positions)
