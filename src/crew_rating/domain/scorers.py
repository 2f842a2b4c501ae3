"""Category scorers for crew rating.

Every scorer is a pure function of the profile, the performance inputs, the
resolved qualification requirements and the variant's point tables, and returns a
sub-score clamped to its documented cap. Sub-scores keep full precision; rounding
happens once, in aggregation.

Usage example:
    from crew_rating.domain.scorers import score_languages

    score_languages(profile, performance, (), PointTables())
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Protocol

from ..exceptions import UnknownScorerError
from .profiles import CrewProfile, PerformanceInputs
from .variants import PointTables, normalise_key

# YCI+ caps
QUALIFICATION_COVERAGE_CAP = 20.0
EFFECTIVE_SEA_TIME_CAP = 20.0
CHARTER_VOLUME_CAP = 20.0
REFERRALS_CAP = 10.0

MERCHANT_SEA_TIME_WEIGHT = 0.10
REFERRAL_COUNT_CAP = 10

# CRI+ caps
EXPERIENCE_LONGEVITY_CAP = 25.0
CERTIFICATE_OF_COMPETENCY_CAP = 25.0
POSITION_WEIGHTING_CAP = 20.0
CHARTER_PERFORMANCE_CAP = 10.0
NAVIGATED_WATERS_CAP = 10.0
AVAILABILITY_CAP = 5.0
LANGUAGES_CAP = 5.0

LARGE_VESSEL_GRT = 3000
LARGE_VESSEL_BONUS = 5.0
MID_VESSEL_GRT = 500
MID_VESSEL_BONUS = 3.0
HIGH_SALARY_THRESHOLD = 8000.0
HIGH_SALARY_BONUS = 2.0

# No input is consulted for availability; kept for compatibility with published scores.
AVAILABILITY_PLACEHOLDER_SCORE = 4.5


class CategoryScorer(Protocol):
    """Callable computing one category sub-score."""

    def __call__(
        self,
        profile: CrewProfile,
        performance: PerformanceInputs,
        requirements: Sequence[str],
        tables: PointTables,
    ) -> float: ...


def clamp(value: float, cap: float) -> float:
    """Clamp a sub-score to ``[0, cap]``."""
    return max(0.0, min(cap, value))


def score_qualification_coverage(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    """Share of the position's required qualifications the crew member holds, out of 20.

    An empty requirement list scores 0.
    """
    if not requirements:
        return 0.0
    held = {normalise_key(name) for name in profile.held_qualifications}
    matched = sum(1 for name in requirements if normalise_key(name) in held)
    coverage = matched / len(requirements)
    return clamp(coverage * QUALIFICATION_COVERAGE_CAP, QUALIFICATION_COVERAGE_CAP)


def score_effective_sea_time(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    """One point per year of yacht time; merchant time counts at a tenth.

    Counts are capped where the sub-score saturates so unbounded ints never reach
    float arithmetic.
    """
    saturation_months = 12 * EFFECTIVE_SEA_TIME_CAP
    yacht_months = min(profile.yacht_sea_time_months, saturation_months)
    merchant_months = min(
        profile.merchant_sea_time_months, saturation_months / MERCHANT_SEA_TIME_WEIGHT
    )
    effective_months = yacht_months + merchant_months * MERCHANT_SEA_TIME_WEIGHT
    return clamp(effective_months / 12, EFFECTIVE_SEA_TIME_CAP)


def score_charter_volume(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    charters = min(performance.charters_completed, 5 * CHARTER_VOLUME_CAP)
    repeats = min(performance.repeat_charters, CHARTER_VOLUME_CAP)
    return clamp(charters / 5 + repeats, CHARTER_VOLUME_CAP)


def score_referrals(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    crew = min(performance.crew_referred, REFERRAL_COUNT_CAP)
    yachts = min(performance.yachts_referred, REFERRAL_COUNT_CAP)
    return clamp(float(crew + yachts), REFERRALS_CAP)


def score_experience_longevity(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    """Years yachting, yachts worked, last-yacht longevity and sea miles."""
    years = min(profile.yacht_sea_time_months, 60) / 12
    score = (
        min(years * 2, 10.0)
        + min(min(profile.number_of_yachts_worked, 10) * 0.5, 5.0)
        + min(min(profile.longevity_on_last_yacht_months, 4) * 1.5, 5.0)
        + min(min(profile.sea_miles_logged, 10000) / 10000 * 5, 5.0)
    )
    return clamp(score, EXPERIENCE_LONGEVITY_CAP)


def score_certificate_of_competency(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    """Primary certificate points plus a bonus for the largest vessel served on."""
    score = tables.certificate_score(profile.primary_certificate_of_competency)
    if profile.largest_vessel_grt > LARGE_VESSEL_GRT:
        score += LARGE_VESSEL_BONUS
    elif profile.largest_vessel_grt > MID_VESSEL_GRT:
        score += MID_VESSEL_BONUS
    return clamp(score, CERTIFICATE_OF_COMPETENCY_CAP)


def score_position_weighting(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    score = tables.position_score(profile.position)
    salary = performance.monthly_national_salary
    if salary is not None and salary > HIGH_SALARY_THRESHOLD:
        score += HIGH_SALARY_BONUS
    return clamp(score, POSITION_WEIGHTING_CAP)


def score_charter_performance(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    """Revenue, repeat guests, guest feedback and leadership roles."""
    revenue = min(performance.total_charter_revenue or 0.0, 400000.0)
    repeat_guests = min(performance.repeat_guest_charters or 0, 6)
    score = min(revenue / 100000, 4.0) + min(repeat_guests * 0.5, 3.0)
    if performance.guest_feedback_rating is not None:
        score += performance.guest_feedback_rating - 1
    score += len(performance.leadership_roles_held) * 0.5
    return clamp(score, CHARTER_PERFORMANCE_CAP)


def score_navigated_waters(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    crossings = min(sum(performance.ocean_crossing_counts.values()), 12)
    transits = min(sum(performance.canal_transit_counts.values()), 5)
    score = min(crossings * 0.5, 6.0) + min(transits * 0.8, 4.0)
    return clamp(score, NAVIGATED_WATERS_CAP)


def score_availability_placeholder(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    # TODO: replace with a formula once availability inputs (deployment notice,
    # visas, vaccinations) are captured on the crew profile.
    return clamp(AVAILABILITY_PLACEHOLDER_SCORE, AVAILABILITY_CAP)


def score_languages(
    profile: CrewProfile,
    performance: PerformanceInputs,
    requirements: Sequence[str],
    tables: PointTables,
) -> float:
    return clamp(len(profile.languages_spoken) * 1.2, LANGUAGES_CAP)


CATEGORY_SCORERS: Mapping[str, CategoryScorer] = MappingProxyType(
    {
        "qualification_coverage": score_qualification_coverage,
        "effective_sea_time": score_effective_sea_time,
        "charter_volume": score_charter_volume,
        "referrals": score_referrals,
        "experience_longevity": score_experience_longevity,
        "certificate_of_competency": score_certificate_of_competency,
        "position_weighting": score_position_weighting,
        "charter_performance": score_charter_performance,
        "navigated_waters": score_navigated_waters,
        "availability_placeholder": score_availability_placeholder,
        "languages": score_languages,
    }
)


def get_scorer(name: str) -> CategoryScorer:
    """Return the registered scorer for ``name``."""
    try:
        return CATEGORY_SCORERS[name]
    except KeyError:
        raise UnknownScorerError(name, sorted(CATEGORY_SCORERS)) from None
