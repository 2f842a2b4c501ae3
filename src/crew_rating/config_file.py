"""Typed parsing and validation for crew rating config files."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .io_validation import format_validation_error
from .protocols import FileSystem

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class CrewRatingConfigFile:
    """Validated crew rating config values loaded from a TOML file."""

    default_variant: str | None = None
    variants_path: str | None = None
    qualifications_path: str | None = None


class _CrewRatingSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    default_variant: str | None = None
    variants_path: str | None = None
    qualifications_path: str | None = None

    @field_validator("default_variant", "variants_path", "qualifications_path")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    crew_rating: _CrewRatingSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def load_crew_rating_config_file(*, path: Path, fs: FileSystem) -> CrewRatingConfigFile:
    """Load and validate a crew rating TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), format_validation_error(exc)) from exc

    section = model.crew_rating
    return CrewRatingConfigFile(
        default_variant=section.default_variant,
        variants_path=section.variants_path,
        qualifications_path=section.qualifications_path,
    )
