"""Sum category sub-scores into a total and apply the single rounding step."""

from __future__ import annotations

import math
from collections.abc import Mapping

from ..exceptions import ScoreAggregationError


def round_total(total: float) -> float:
    """Round half-up to one decimal place; halves go towards positive infinity."""
    return math.floor(total * 10 + 0.5) / 10


def aggregate(sub_scores: Mapping[str, float], scale_maximum: float) -> float:
    """Return the rounded total of already-clamped sub-scores.

    Raises:
        ScoreAggregationError: The raw total is not finite or lies outside
            ``[0, scale_maximum]``; a scorer or table is wrong.
    """
    total = math.fsum(sub_scores.values())
    if not math.isfinite(total) or total < 0.0 or total > scale_maximum:
        raise ScoreAggregationError(total, scale_maximum)
    return round_total(total)
