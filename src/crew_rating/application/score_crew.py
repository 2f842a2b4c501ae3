"""Score run: rate every crew record in an input file and write the results.

A run stops at the first invalid record; no partial output file is written.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path

from ..config import CrewRatingConfig
from ..domain.engine import ScoreBreakdown, ScoringEngine
from ..domain.qualifications import DEFAULT_QUALIFICATION_CATALOG
from ..domain.tiers import next_tier
from ..domain.variants import DEFAULT_VARIANT_CATALOG, ScoringVariant
from ..infrastructure import LocalFileSystem
from ..observability import get_logger
from ..protocols import FileSystem
from .crew_records import load_crew_records
from .qualification_catalog import load_qualification_catalog
from .variant_catalog import load_variant_catalog


@dataclass(frozen=True)
class ScoreRunResult:
    """Summary of a completed score run."""

    output_path: Path
    variant: str
    scored: int
    tier_counts: dict[str, int]


def build_engine(config: CrewRatingConfig, fs: FileSystem) -> ScoringEngine:
    """Build an engine from configured table files, or the built-in tables."""
    catalog = DEFAULT_VARIANT_CATALOG
    if config.variants_path:
        catalog = load_variant_catalog(path=Path(config.variants_path), fs=fs)
    qualifications = DEFAULT_QUALIFICATION_CATALOG
    if config.qualifications_path:
        qualifications = load_qualification_catalog(path=Path(config.qualifications_path), fs=fs)
    return ScoringEngine(catalog=catalog, qualifications=qualifications)


def result_record(
    full_name: str, breakdown: ScoreBreakdown, variant: ScoringVariant
) -> dict[str, object]:
    """Return one output row: the breakdown plus the next-tier hint."""
    progress = next_tier(breakdown.total, breakdown.scale_maximum, variant.thresholds)
    return {
        "full_name": full_name,
        **breakdown.to_dict(),
        "next_tier": None
        if progress is None
        else {"tier": progress.tier, "points_needed": progress.points_needed},
    }


def run_score_crew(
    input_path: str | Path = "data/input/crew.json",
    out_path: str | Path = "data/processed/crew_scores.json",
    config: CrewRatingConfig | None = None,
    fs: FileSystem | None = None,
) -> ScoreRunResult:
    """Score every crew record with the configured variant.

    Args:
        input_path: Crew record JSON file.
        out_path: Destination for the score results JSON.
        config: Crew rating configuration (required; load at entry point).
        fs: Optional filesystem for testing.

    Returns:
        ScoreRunResult with the output path and per-tier counts.
    """
    if config is None:
        raise RuntimeError(
            "CrewRatingConfig is required. Load it once at the entry point with "
            "CrewRatingConfig.from_env() and pass it through."
        )

    fs = fs or LocalFileSystem()
    logger = get_logger("crew_rating.score_crew")
    input_path = Path(input_path)
    out_path = Path(out_path)

    engine = build_engine(config, fs)
    variant = engine.resolve(config.default_variant or None)
    records = load_crew_records(path=input_path, fs=fs)
    logger.info("Scoring: %s crew records with %s", len(records), variant.label)

    results: list[dict[str, object]] = []
    tiers: Counter[str] = Counter()
    for record in records:
        breakdown = engine.score(record.profile, record.performance, variant)
        results.append(result_record(record.profile.full_name, breakdown, variant))
        tiers[breakdown.tier] += 1

    fs.mkdir(out_path.parent, parents=True)
    fs.write_json({"variant": variant.name, "results": results}, out_path)
    logger.info("Scored: %s", out_path)
    for tier, count in sorted(tiers.items()):
        logger.info("Tier %s: %s", tier, count)

    return ScoreRunResult(
        output_path=out_path,
        variant=variant.name,
        scored=len(results),
        tier_counts=dict(tiers),
    )
