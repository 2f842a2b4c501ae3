"""Fail-fast validation of engine inputs."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping

from ..exceptions import InvalidProfileError, OutOfRangeInputError
from .profiles import CrewProfile, PerformanceInputs, TonnageClass, parse_tonnage_class
from .qualifications import QualificationCatalog
from .variants import ScoringVariant

MIN_GUEST_FEEDBACK_RATING = 1
MAX_GUEST_FEEDBACK_RATING = 5

_PROFILE_COUNTS = (
    "yacht_sea_time_months",
    "merchant_sea_time_months",
    "number_of_yachts_worked",
    "longevity_on_last_yacht_months",
    "sea_miles_logged",
    "largest_vessel_grt",
)

_PERFORMANCE_COUNTS = (
    "charters_completed",
    "repeat_charters",
    "crew_referred",
    "yachts_referred",
)

_PERFORMANCE_OPTIONAL_AMOUNTS = (
    "total_charter_revenue",
    "repeat_guest_charters",
    "monthly_national_salary",
)


def _require_non_negative(field_name: str, value: float) -> None:
    if isinstance(value, bool):
        raise OutOfRangeInputError(field_name, value, ">= 0")
    # Ints are unbounded; math.isfinite overflows on very large ones.
    if isinstance(value, int):
        if value < 0:
            raise OutOfRangeInputError(field_name, value, ">= 0")
        return
    if not math.isfinite(value) or value < 0:
        raise OutOfRangeInputError(field_name, value, ">= 0")


def _require_non_negative_counts(field_name: str, counts: Mapping[str, int]) -> None:
    for name, count in counts.items():
        _require_non_negative(f"{field_name}[{name!r}]", count)


def validate_profile(
    profile: CrewProfile,
    *,
    variants: Iterable[ScoringVariant],
    qualifications: QualificationCatalog,
) -> TonnageClass:
    """Check identity fields and numeric ranges; return the parsed tonnage class.

    Raises:
        InvalidProfileError: Position missing or unknown to the qualification matrix
            and to every variant position table, or tonnage class missing or
            unrecognised.
        OutOfRangeInputError: A count is negative or not finite.
    """
    position = (profile.position or "").strip()
    if not position:
        raise InvalidProfileError("position", "is required")
    tonnage_class = parse_tonnage_class(profile.vessel_tonnage_class)
    if not (
        qualifications.knows_position(position)
        or any(variant.tables.knows_position(position) for variant in variants)
    ):
        raise InvalidProfileError("position", f"{position!r} is not a recognised position")

    for field_name in _PROFILE_COUNTS:
        _require_non_negative(field_name, getattr(profile, field_name))
    return tonnage_class


def validate_performance(performance: PerformanceInputs) -> None:
    """Check performance inputs are non-negative and the rating is a whole number in 1..5."""
    for field_name in _PERFORMANCE_COUNTS:
        _require_non_negative(field_name, getattr(performance, field_name))
    for field_name in _PERFORMANCE_OPTIONAL_AMOUNTS:
        value = getattr(performance, field_name)
        if value is not None:
            _require_non_negative(field_name, value)

    rating = performance.guest_feedback_rating
    if rating is not None and (
        isinstance(rating, bool)
        or (isinstance(rating, float) and not rating.is_integer())
        or rating < MIN_GUEST_FEEDBACK_RATING
        or rating > MAX_GUEST_FEEDBACK_RATING
    ):
        raise OutOfRangeInputError(
            "guest_feedback_rating",
            rating,
            f"{MIN_GUEST_FEEDBACK_RATING}..{MAX_GUEST_FEEDBACK_RATING}",
        )

    _require_non_negative_counts("ocean_crossing_counts", performance.ocean_crossing_counts)
    _require_non_negative_counts("canal_transit_counts", performance.canal_transit_counts)
