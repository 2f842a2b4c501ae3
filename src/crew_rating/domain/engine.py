"""Scoring engine façade for crew rating.

Usage example:
    from crew_rating.domain.engine import score_crew
    from crew_rating.domain.profiles import CrewProfile, PerformanceInputs, TonnageClass

    profile = CrewProfile(
        full_name="Sam Reyes",
        position="Deckhand",
        vessel_tonnage_class=TonnageClass.UNDER_200,
        yacht_sea_time_months=24,
        held_qualifications=frozenset({"STCW Basic Training", "ENG1 Medical"}),
    )
    breakdown = score_crew(profile, PerformanceInputs(), "yci-plus")
    assert breakdown.tier in {"Platinum Crew", "Gold Crew", "Silver Crew", "Bronze Crew"}
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

from .aggregation import aggregate
from .profiles import CrewProfile, PerformanceInputs
from .qualifications import DEFAULT_QUALIFICATION_CATALOG, QualificationCatalog
from .scorers import clamp, get_scorer
from .tiers import classify, percentage_of_scale
from .validation import validate_performance, validate_profile
from .variants import DEFAULT_VARIANT_CATALOG, ScoringVariant, VariantCatalog, resolve_variant


@dataclass(frozen=True)
class CategoryScore:
    """One category's clamped sub-score and cap."""

    name: str
    label: str
    value: float
    cap: float


@dataclass(frozen=True)
class ScoreBreakdown:
    """Full result of one scoring call."""

    variant: str
    categories: tuple[CategoryScore, ...]
    total: float
    scale_maximum: float
    tier: str

    @property
    def sub_scores(self) -> MappingProxyType[str, float]:
        return MappingProxyType({category.name: category.value for category in self.categories})

    @property
    def percentage(self) -> float:
        return percentage_of_scale(self.total, self.scale_maximum)

    def to_dict(self) -> dict[str, object]:
        """Return the structured record consumed by report and storage layers."""
        return {
            "variant": self.variant,
            "sub_scores": dict(self.sub_scores),
            "total": self.total,
            "scale_maximum": self.scale_maximum,
            "tier": self.tier,
        }


class ScoringEngine:
    """Stateless orchestration of requirements, scorers, aggregation and tiers.

    Tables are immutable; to reconfigure, build a new engine from a freshly
    loaded catalogue.
    """

    def __init__(
        self,
        *,
        catalog: VariantCatalog = DEFAULT_VARIANT_CATALOG,
        qualifications: QualificationCatalog = DEFAULT_QUALIFICATION_CATALOG,
    ) -> None:
        self._catalog = catalog
        self._qualifications = qualifications

    @property
    def catalog(self) -> VariantCatalog:
        return self._catalog

    @property
    def qualifications(self) -> QualificationCatalog:
        return self._qualifications

    def resolve(self, variant: ScoringVariant | str | None = None) -> ScoringVariant:
        if isinstance(variant, ScoringVariant):
            return variant
        return resolve_variant(self._catalog, variant)

    def score(
        self,
        profile: CrewProfile,
        performance: PerformanceInputs,
        variant: ScoringVariant | str | None = None,
    ) -> ScoreBreakdown:
        """Score one crew member; any invalid input fails the whole call.

        Raises:
            UnknownVariantError: ``variant`` is not registered.
            InvalidProfileError: Position or tonnage class missing or unknown.
            OutOfRangeInputError: A numeric input is outside its range.
        """
        resolved = self.resolve(variant)
        tonnage_class = validate_profile(
            profile,
            variants=(resolved, *self._catalog.variants),
            qualifications=self._qualifications,
        )
        validate_performance(performance)

        requirements = self._qualifications.requirements_for(tonnage_class, profile.position)
        categories = tuple(
            CategoryScore(
                name=spec.name,
                label=spec.label,
                value=clamp(
                    get_scorer(spec.scorer)(profile, performance, requirements, resolved.tables),
                    spec.cap,
                ),
                cap=spec.cap,
            )
            for spec in resolved.categories
        )
        sub_scores = {category.name: category.value for category in categories}
        total = aggregate(sub_scores, resolved.scale_maximum)
        tier = classify(total, resolved.scale_maximum, resolved.thresholds)
        return ScoreBreakdown(
            variant=resolved.name,
            categories=categories,
            total=total,
            scale_maximum=resolved.scale_maximum,
            tier=tier,
        )


_DEFAULT_ENGINE = ScoringEngine()


def score_crew(
    profile: CrewProfile,
    performance: PerformanceInputs,
    variant: ScoringVariant | str | None = None,
) -> ScoreBreakdown:
    """Score with the built-in variant presets and qualification matrix."""
    return _DEFAULT_ENGINE.score(profile, performance, variant)
