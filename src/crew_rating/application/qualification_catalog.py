"""Loading and strict validation for qualification matrix files."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..domain.profiles import TonnageClass, parse_tonnage_class
from ..domain.qualifications import (
    QualificationCatalog,
    QualificationItem,
    QualificationRequirement,
    build_qualification_catalog,
)
from ..domain.variants import normalise_key
from ..exceptions import (
    InvalidProfileError,
    QualificationCatalogFileNotFoundError,
    QualificationCatalogValidationError,
)
from ..io_validation import format_validation_error
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


class _QualificationItemModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    mandatory: bool = True

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text


class _RequirementModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    tonnage_class: TonnageClass
    position: str
    qualifications: tuple[_QualificationItemModel, ...]

    @field_validator("tonnage_class", mode="before")
    @classmethod
    def _parse_tonnage_class(cls, value: object) -> TonnageClass:
        if not isinstance(value, str):
            raise ValueError("tonnage class must be a string")
        try:
            return parse_tonnage_class(value)
        except InvalidProfileError as exc:
            raise ValueError(str(exc)) from exc

    @field_validator("position")
    @classmethod
    def _validate_position(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("qualifications")
    @classmethod
    def _validate_unique_names(
        cls, value: tuple[_QualificationItemModel, ...]
    ) -> tuple[_QualificationItemModel, ...]:
        keys = [normalise_key(item.name) for item in value]
        if len(set(keys)) != len(keys):
            raise ValueError("qualification names must be unique per position")
        return value


class _QualificationMatrixModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    requirements: tuple[_RequirementModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_unique_pairs(self) -> _QualificationMatrixModel:
        pairs = [
            (requirement.tonnage_class, normalise_key(requirement.position))
            for requirement in self.requirements
        ]
        if len(set(pairs)) != len(pairs):
            raise ValueError("each (tonnage_class, position) pair may appear once")
        return self


def load_qualification_catalog(*, path: Path, fs: FileSystem) -> QualificationCatalog:
    """Load and validate a qualification matrix from JSON."""
    if not fs.exists(path):
        raise QualificationCatalogFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _QualificationMatrixModel.model_validate_json(payload)
    except ValidationError as exc:
        raise QualificationCatalogValidationError(
            str(path), format_validation_error(exc)
        ) from exc

    return build_qualification_catalog(
        QualificationRequirement(
            tonnage_class=requirement.tonnage_class,
            position=requirement.position,
            items=tuple(
                QualificationItem(name=item.name, mandatory=item.mandatory)
                for item in requirement.qualifications
            ),
        )
        for requirement in model.requirements
    )
