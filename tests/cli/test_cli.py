"""Tests for CLI wiring and overrides."""

import re
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from crew_rating import cli
from crew_rating.cli import CliDependencies
from crew_rating.config import CrewRatingConfig
from tests.fakes import InMemoryFileSystem
from tests.support.crew_profiles import (
    crew_record_payload,
    write_crew_records,
    write_qualification_matrix,
    write_variant_catalog,
)

runner = CliRunner()
_ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    return _ANSI_ESCAPE_RE.sub("", text)


@pytest.fixture(autouse=True)
def default_env_config(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_from_env(
        cls: type[CrewRatingConfig], dotenv_path: str | None = None
    ) -> CrewRatingConfig:
        _ = (cls, dotenv_path)
        return CrewRatingConfig()

    monkeypatch.setattr(cli.CrewRatingConfig, "from_env", classmethod(fake_from_env))


def _build_app_with_fs(fs: InMemoryFileSystem) -> typer.Typer:
    def build_with_shared_deps() -> CliDependencies:
        return CliDependencies(fs=fs)

    return cli.create_app(build_with_shared_deps)


def _write_records(fs: InMemoryFileSystem) -> None:
    write_crew_records(
        fs=fs,
        path=Path("crew.json"),
        entries=[
            crew_record_payload(full_name="Ana Ruiz"),
            crew_record_payload(full_name="Ben Okafor", position="Captain"),
        ],
    )


def test_cli_version_option_prints_package_version(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "__version__", "9.9.9", raising=False)

    result = runner.invoke(_build_app_with_fs(InMemoryFileSystem()), ["--version"])

    assert result.exit_code == 0
    assert "crew-rating 9.9.9" in _strip_ansi(result.output)


class TestScoreCommand:
    """Tests for the score command."""

    def test_scores_records_with_default_variant(self) -> None:
        fs = InMemoryFileSystem()
        _write_records(fs)

        result = runner.invoke(
            _build_app_with_fs(fs), ["score", "--input", "crew.json", "--output", "out.json"]
        )

        assert result.exit_code == 0, result.output
        output = _strip_ansi(result.output)
        assert "Scored 2 crew (yci-plus)" in output
        assert "Bronze Crew: 2" in output
        assert fs.read_json(Path("out.json"))["variant"] == "yci-plus"

    def test_variant_option_overrides_config(self) -> None:
        fs = InMemoryFileSystem()
        _write_records(fs)

        result = runner.invoke(
            _build_app_with_fs(fs),
            ["score", "-i", "crew.json", "-o", "out.json", "--variant", "CRI+"],
        )

        assert result.exit_code == 0, result.output
        assert "Scored 2 crew (cri-plus)" in _strip_ansi(result.output)
        assert fs.read_json(Path("out.json"))["variant"] == "cri-plus"

    def test_unknown_variant_exits_with_error(self) -> None:
        fs = InMemoryFileSystem()
        _write_records(fs)

        result = runner.invoke(
            _build_app_with_fs(fs), ["score", "-i", "crew.json", "--variant", "ABC+"]
        )

        assert result.exit_code == 1
        assert "Unknown scoring variant 'ABC+'" in _strip_ansi(result.output)
        assert fs.exists(Path("data/processed/crew_scores.json")) is False

    def test_missing_input_exits_with_error(self) -> None:
        result = runner.invoke(
            _build_app_with_fs(InMemoryFileSystem()), ["score", "-i", "missing.json"]
        )

        assert result.exit_code == 1
        assert "Crew record file not found: missing.json" in _strip_ansi(result.output)


class TestRequirementsCommand:
    """Tests for the requirements command."""

    def test_lists_positions_for_tonnage_class(self) -> None:
        result = runner.invoke(
            _build_app_with_fs(InMemoryFileSystem()), ["requirements", "-t", "Under 200 GRT"]
        )

        assert result.exit_code == 0, result.output
        output = _strip_ansi(result.output)
        assert "<200GRT positions:" in output
        assert "Deckhand" in output

    def test_shows_mandatory_and_optional_items(self) -> None:
        result = runner.invoke(
            _build_app_with_fs(InMemoryFileSystem()),
            ["requirements", "--tonnage", "<200GRT", "--position", "Chief Steward(ess)"],
        )

        assert result.exit_code == 0, result.output
        output = _strip_ansi(result.output)
        assert "Guest Service Training" in output
        assert "optional" in output
        assert "yes" in output

    def test_unlisted_position_prints_notice(self) -> None:
        result = runner.invoke(
            _build_app_with_fs(InMemoryFileSystem()),
            ["requirements", "-t", "<200GRT", "-p", "Purser"],
        )

        assert result.exit_code == 0
        assert "No requirements listed for Purser on <200GRT" in _strip_ansi(result.output)

    def test_unknown_tonnage_class_exits_with_error(self) -> None:
        result = runner.invoke(
            _build_app_with_fs(InMemoryFileSystem()), ["requirements", "-t", "<9000GRT"]
        )

        assert result.exit_code == 1
        assert "vessel_tonnage_class" in _strip_ansi(result.output)


def test_variants_command_lists_presets() -> None:
    result = runner.invoke(_build_app_with_fs(InMemoryFileSystem()), ["variants"])

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "(yci-plus)" in output
    assert "(cri-plus)" in output
    assert "(default)" in output
    assert "Platinum Crew" in output
    assert "Elite Tier" in output


def test_variants_command_marks_catalog_default_from_table_file() -> None:
    fs = InMemoryFileSystem()
    write_variant_catalog(fs=fs, path=Path("variants.json"))
    fs.write_text(
        """
schema_version = 1
[crew_rating]
variants_path = "variants.json"
""".strip(),
        Path("crew_rating.toml"),
    )

    result = runner.invoke(_build_app_with_fs(fs), ["-c", "crew_rating.toml", "variants"])

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "(deck-only)" in output
    assert "(default)" in output
    assert "(yci-plus)" not in output


def test_cli_global_config_file_selects_table_files() -> None:
    fs = InMemoryFileSystem()
    write_qualification_matrix(fs=fs, path=Path("qualifications.json"))
    fs.write_text(
        """
schema_version = 1
[crew_rating]
qualifications_path = "qualifications.json"
""".strip(),
        Path("crew_rating.toml"),
    )

    result = runner.invoke(
        _build_app_with_fs(fs),
        ["--config", "crew_rating.toml", "requirements", "-t", "<500GRT"],
    )

    assert result.exit_code == 0, result.output
    output = _strip_ansi(result.output)
    assert "Bosun" in output
    assert "Captain" not in output


def test_cli_invalid_config_file_exits_with_error() -> None:
    fs = InMemoryFileSystem()
    fs.write_text("schema_version = 1\n[pipeline]\n", Path("crew_rating.toml"))

    result = runner.invoke(_build_app_with_fs(fs), ["-c", "crew_rating.toml", "variants"])

    assert result.exit_code == 1
    assert "Invalid config file crew_rating.toml" in _strip_ansi(result.output)
