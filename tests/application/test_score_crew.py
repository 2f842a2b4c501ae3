"""Tests for the score run."""

from __future__ import annotations

from pathlib import Path

import pytest

from crew_rating.application.score_crew import build_engine, run_score_crew
from crew_rating.config import CrewRatingConfig
from crew_rating.domain.profiles import TonnageClass
from crew_rating.exceptions import InvalidProfileError, UnknownVariantError
from tests.fakes import InMemoryFileSystem
from tests.support.crew_profiles import (
    crew_record_payload,
    object_list,
    write_crew_records,
    write_qualification_matrix,
    write_variant_catalog,
)

_INPUT = Path("data/input/crew.json")
_OUTPUT = Path("data/processed/crew_scores.json")


def _write_two_records(fs: InMemoryFileSystem) -> None:
    write_crew_records(
        fs=fs,
        path=_INPUT,
        entries=[
            crew_record_payload(
                full_name="Ana Ruiz",
                profile_extra={
                    "yacht_sea_time_months": 36,
                    "languages_spoken": ["English"],
                    "held_qualifications": ["STCW Basic Training", "ENG1 Medical"],
                },
                performance={"charters_completed": 10, "repeat_charters": 1},
            ),
            crew_record_payload(full_name="Ben Okafor", position="Captain"),
        ],
    )


def _results(fs: InMemoryFileSystem) -> list[dict[str, object]]:
    output = fs.read_json(_OUTPUT)
    return object_list(output["results"])


def test_run_score_crew_writes_breakdowns_with_default_variant() -> None:
    fs = InMemoryFileSystem()
    _write_two_records(fs)

    result = run_score_crew(_INPUT, _OUTPUT, config=CrewRatingConfig(), fs=fs)

    assert result.output_path == _OUTPUT
    assert result.variant == "yci-plus"
    assert result.scored == 2
    assert result.tier_counts == {"Bronze Crew": 2}
    assert fs.read_json(_OUTPUT)["variant"] == "yci-plus"
    first, second = _results(fs)
    assert first["full_name"] == "Ana Ruiz"
    assert first["total"] == 19.3
    assert first["tier"] == "Bronze Crew"
    assert first["next_tier"] == {"tier": "Silver Crew", "points_needed": 22.7}
    assert second["full_name"] == "Ben Okafor"
    assert second["total"] == 0.0
    assert str(_OUTPUT.parent) in fs.created_dirs


def test_run_score_crew_uses_configured_variant() -> None:
    fs = InMemoryFileSystem()
    _write_two_records(fs)
    config = CrewRatingConfig().with_overrides(default_variant="CRI+")

    result = run_score_crew(_INPUT, _OUTPUT, config=config, fs=fs)

    assert result.variant == "cri-plus"
    first, _ = _results(fs)
    assert first["total"] == 17.7
    assert first["scale_maximum"] == 100.0
    assert first["tier"] == "Basic Tier"
    assert first["next_tier"] == {"tier": "Pro Tier", "points_needed": 42.3}


def test_run_score_crew_stops_at_first_invalid_record() -> None:
    fs = InMemoryFileSystem()
    write_crew_records(
        fs=fs,
        path=_INPUT,
        entries=[crew_record_payload(), crew_record_payload(position="Astronaut")],
    )

    with pytest.raises(InvalidProfileError):
        run_score_crew(_INPUT, _OUTPUT, config=CrewRatingConfig(), fs=fs)

    assert fs.exists(_OUTPUT) is False


def test_run_score_crew_requires_config() -> None:
    with pytest.raises(RuntimeError, match="CrewRatingConfig is required"):
        run_score_crew(_INPUT, _OUTPUT, config=None, fs=InMemoryFileSystem())


def test_unknown_variant_fails_before_reading_records() -> None:
    config = CrewRatingConfig(default_variant="ABC+")

    with pytest.raises(UnknownVariantError):
        run_score_crew(_INPUT, _OUTPUT, config=config, fs=InMemoryFileSystem())


class TestBuildEngine:
    """Tests for engine construction from configuration."""

    def test_defaults_to_built_in_tables(self) -> None:
        engine = build_engine(CrewRatingConfig(), InMemoryFileSystem())

        assert engine.catalog.names == ("yci-plus", "cri-plus")
        assert engine.qualifications.knows_position("Purser")

    def test_loads_configured_table_files(self) -> None:
        fs = InMemoryFileSystem()
        write_variant_catalog(fs=fs, path=Path("variants.json"))
        write_qualification_matrix(fs=fs, path=Path("qualifications.json"))
        config = CrewRatingConfig(
            default_variant="deck-only",
            variants_path="variants.json",
            qualifications_path="qualifications.json",
        )

        engine = build_engine(config, fs)

        assert engine.catalog.names == ("deck-only",)
        assert engine.qualifications.positions_for(TonnageClass.UNDER_500) == ("Bosun",)
        assert engine.resolve(config.default_variant).name == "deck-only"


def test_catalog_default_applies_when_no_variant_is_configured() -> None:
    fs = InMemoryFileSystem()
    _write_two_records(fs)
    write_variant_catalog(fs=fs, path=Path("variants.json"))
    config = CrewRatingConfig().with_overrides(variants_path="variants.json")

    result = run_score_crew(_INPUT, _OUTPUT, config=config, fs=fs)

    assert result.variant == "deck-only"
    assert result.scored == 2
    assert fs.read_json(_OUTPUT)["variant"] == "deck-only"
