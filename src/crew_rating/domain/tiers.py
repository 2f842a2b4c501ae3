"""Tier classification by percentage of a variant's scale maximum.

Usage example:
    from crew_rating.domain.tiers import classify
    from crew_rating.domain.variants import YCI_PLUS

    classify(63.0, YCI_PLUS.scale_maximum, YCI_PLUS.thresholds)  # "Platinum Crew"
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..exceptions import TierTableError
from .aggregation import round_total
from .variants import TierThreshold


@dataclass(frozen=True)
class TierProgress:
    """The next tier above a total and the points still needed to reach it."""

    tier: str
    points_needed: float


def percentage_of_scale(total: float, scale_maximum: float) -> float:
    """Return ``total`` as a percentage of ``scale_maximum``."""
    return total * 100 / scale_maximum


def classify(total: float, scale_maximum: float, thresholds: Sequence[TierThreshold]) -> str:
    """Return the first tier whose minimum percentage the total reaches.

    Thresholds are evaluated top-down; the lowest must be 0 so every total
    classifies.
    """
    percentage = percentage_of_scale(total, scale_maximum)
    for threshold in thresholds:
        if percentage >= threshold.min_percentage:
            return threshold.tier
    raise TierTableError(percentage)


def next_tier(
    total: float, scale_maximum: float, thresholds: Sequence[TierThreshold]
) -> TierProgress | None:
    """Return the next higher tier and points needed, or None at the top tier."""
    percentage = percentage_of_scale(total, scale_maximum)
    above = [threshold for threshold in thresholds if threshold.min_percentage > percentage]
    if not above:
        return None
    target = min(above, key=lambda threshold: threshold.min_percentage)
    points = target.min_percentage * scale_maximum / 100 - total
    return TierProgress(tier=target.tier, points_needed=round_total(points))
