# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Accuracy caveats for exported sun positions.

Shared by all exporters: positions are computed with a fixed ΔT, which
drifts from the true Earth rotation correction away from the present.
"""
import logging

logger = logging.getLogger(__name__)

from suncompass.domain.julian import DELTA_T_SECONDS
from suncompass.domain.sun_position import SunPosition

# Years for which the fixed ΔT stays within a few seconds of the true value
DELTA_T_VALID_YEARS: tuple[int, int] = (1990, 2040)


def warn_if_delta_t_drifts(positions: list[SunPosition]) -> bool:
    """Log one warning when any position lies outside DELTA_T_VALID_YEARS.

    Returns:
        True if a warning was emitted.
    """
    first, last = DELTA_T_VALID_YEARS
    outside = [p.instant.year for p in positions
               if not first <= p.instant.year <= last]
    if not outside:
        return False
    logger.warning(
        "Positions for year(s) %d-%d use a fixed ΔT of %g s; accuracy degrades "
        "outside %d-%d",
        min(outside), max(outside), DELTA_T_SECONDS, first, last,
    )
    return True
