"""Scoring variant presets: categories, caps, tier thresholds and point tables.

Both rating schemes share one engine. A variant only names which category
scorers run, their caps, the scale maximum, the tier table and the lookup tables
the table-driven scorers consult.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from ..exceptions import UnknownVariantError


def normalise_key(text: str) -> str:
    """Return the case- and whitespace-insensitive lookup key for table entries."""
    return " ".join(text.split()).casefold()


def point_table(values: Mapping[str, float]) -> MappingProxyType[str, float]:
    """Build a read-only point table keyed by normalised names."""
    return MappingProxyType({normalise_key(key): float(score) for key, score in values.items()})


def _empty_points() -> MappingProxyType[str, float]:
    return MappingProxyType({})


@dataclass(frozen=True)
class PointTables:
    """Lookup tables for the certificate and position scorers."""

    certificate_points: MappingProxyType[str, float] = field(default_factory=_empty_points)
    certificate_default: float = 5.0
    position_points: MappingProxyType[str, float] = field(default_factory=_empty_points)
    position_default: float = 5.0

    def certificate_score(self, certificate: str | None) -> float:
        if certificate is None or not certificate.strip():
            return 0.0
        return self.certificate_points.get(normalise_key(certificate), self.certificate_default)

    def position_score(self, position: str) -> float:
        return self.position_points.get(normalise_key(position), self.position_default)

    def knows_position(self, position: str) -> bool:
        return normalise_key(position) in self.position_points


@dataclass(frozen=True)
class CategorySpec:
    """One scoring category: stable name, display label, scorer key and cap."""

    name: str
    label: str
    scorer: str
    cap: float


@dataclass(frozen=True)
class TierThreshold:
    """A tier awarded when the total reaches ``min_percentage`` of the scale."""

    min_percentage: float
    tier: str


@dataclass(frozen=True)
class ScoringVariant:
    """A named preset of category formulas, caps, scale maximum and tiers."""

    name: str
    label: str
    scale_maximum: float
    categories: tuple[CategorySpec, ...]
    thresholds: tuple[TierThreshold, ...]
    tables: PointTables = field(default_factory=PointTables)

    @property
    def cap_total(self) -> float:
        return sum(category.cap for category in self.categories)


@dataclass(frozen=True)
class VariantCatalog:
    """Registered variants with the default used when none is requested."""

    default_variant: str
    variants: tuple[ScoringVariant, ...]

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(variant.name for variant in self.variants)


def resolve_variant(catalog: VariantCatalog, name: str | None = None) -> ScoringVariant:
    """Resolve a variant by name or label, defaulting to the catalogue default."""
    target = (name or "").strip() or catalog.default_variant
    key = normalise_key(target)
    for variant in catalog.variants:
        if normalise_key(variant.name) == key or normalise_key(variant.label) == key:
            return variant
    raise UnknownVariantError(target, sorted(catalog.names))


YCI_PLUS = ScoringVariant(
    name="yci-plus",
    label="YCI+",
    scale_maximum=70.0,
    categories=(
        CategorySpec("qualifications", "Qualifications", "qualification_coverage", 20.0),
        CategorySpec("experience", "Experience", "effective_sea_time", 20.0),
        CategorySpec("charters", "Charters", "charter_volume", 20.0),
        CategorySpec("contributions", "Contributions", "referrals", 10.0),
    ),
    thresholds=(
        TierThreshold(90.0, "Platinum Crew"),
        TierThreshold(75.0, "Gold Crew"),
        TierThreshold(60.0, "Silver Crew"),
        TierThreshold(0.0, "Bronze Crew"),
    ),
)

CRI_PLUS_CERTIFICATE_POINTS = {
    "Yacht Master": 15.0,
    "Chief Engineer": 15.0,
    "Master 3000 GT": 15.0,
    "Officer of the Watch": 12.0,
    "ENG 1": 10.0,
}

CRI_PLUS_POSITION_POINTS = {
    "Captain": 20.0,
    "First Officer": 16.0,
    "Chief Officer": 16.0,
    "Chief Engineer": 16.0,
    "ETO": 12.0,
    "Second Engineer": 12.0,
    "Chef": 12.0,
    "Chief Steward(ess)": 12.0,
    "Purser": 10.0,
    "Bosun": 10.0,
    "Engineer": 10.0,
    "Deckhand": 6.0,
}

CRI_PLUS = ScoringVariant(
    name="cri-plus",
    label="CRI+",
    scale_maximum=100.0,
    categories=(
        CategorySpec(
            "experience_longevity", "Experience & Longevity", "experience_longevity", 25.0
        ),
        CategorySpec(
            "qualifications_certifications",
            "Qualifications & Certifications",
            "certificate_of_competency",
            25.0,
        ),
        CategorySpec(
            "position_weighting", "Position-Based Role Weighting", "position_weighting", 20.0
        ),
        CategorySpec("charter_performance", "Charter Performance", "charter_performance", 10.0),
        CategorySpec("navigated_waters", "Navigated Waters", "navigated_waters", 10.0),
        CategorySpec(
            "availability_mobility", "Availability & Mobility", "availability_placeholder", 5.0
        ),
        CategorySpec("soft_skills_languages", "Soft Skills & Languages", "languages", 5.0),
    ),
    thresholds=(
        TierThreshold(80.0, "Elite Tier"),
        TierThreshold(60.0, "Pro Tier"),
        TierThreshold(0.0, "Basic Tier"),
    ),
    tables=PointTables(
        certificate_points=point_table(CRI_PLUS_CERTIFICATE_POINTS),
        certificate_default=5.0,
        position_points=point_table(CRI_PLUS_POSITION_POINTS),
        position_default=5.0,
    ),
)

DEFAULT_VARIANT_CATALOG = VariantCatalog(
    default_variant=YCI_PLUS.name,
    variants=(YCI_PLUS, CRI_PLUS),
)
