"""Loading and strict validation for scoring variant catalogues."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..domain.scorers import CATEGORY_SCORERS
from ..domain.variants import (
    CategorySpec,
    PointTables,
    ScoringVariant,
    TierThreshold,
    VariantCatalog,
    point_table,
    resolve_variant,
)
from ..exceptions import VariantCatalogFileNotFoundError, VariantCatalogValidationError
from ..io_validation import format_validation_error
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


class _CategoryModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    label: str
    scorer: str
    cap: float

    @field_validator("name", "label")
    @classmethod
    def _validate_non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("scorer")
    @classmethod
    def _validate_scorer(cls, value: str) -> str:
        if value not in CATEGORY_SCORERS:
            raise ValueError
        return value

    @field_validator("cap")
    @classmethod
    def _validate_cap(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError
        return value


class _ThresholdModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    min_percentage: float
    tier: str

    @field_validator("min_percentage")
    @classmethod
    def _validate_percentage(cls, value: float) -> float:
        if value < 0.0 or value > 100.0:
            raise ValueError
        return value

    @field_validator("tier")
    @classmethod
    def _validate_tier(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text


class _PointTablesModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    certificate_points: dict[str, float] = {}
    certificate_default: float = 5.0
    position_points: dict[str, float] = {}
    position_default: float = 5.0

    @field_validator("certificate_points", "position_points")
    @classmethod
    def _validate_points(cls, value: dict[str, float]) -> dict[str, float]:
        cleaned: dict[str, float] = {}
        for key, points in value.items():
            key_text = key.strip()
            if not key_text or points < 0.0:
                raise ValueError
            cleaned[key_text] = points
        return cleaned

    @field_validator("certificate_default", "position_default")
    @classmethod
    def _validate_default(cls, value: float) -> float:
        if value < 0.0:
            raise ValueError
        return value


class _VariantModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    label: str
    scale_maximum: float
    categories: tuple[_CategoryModel, ...]
    thresholds: tuple[_ThresholdModel, ...]
    tables: _PointTablesModel = _PointTablesModel()

    @field_validator("name", "label")
    @classmethod
    def _validate_non_empty(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("scale_maximum")
    @classmethod
    def _validate_scale(cls, value: float) -> float:
        if value <= 0.0:
            raise ValueError
        return value

    @field_validator("categories")
    @classmethod
    def _validate_categories(
        cls, value: tuple[_CategoryModel, ...]
    ) -> tuple[_CategoryModel, ...]:
        names = [category.name for category in value]
        if not names or len(set(names)) != len(names):
            raise ValueError
        return value

    @field_validator("thresholds")
    @classmethod
    def _validate_thresholds(
        cls, value: tuple[_ThresholdModel, ...]
    ) -> tuple[_ThresholdModel, ...]:
        if not value:
            raise ValueError
        minimums = [threshold.min_percentage for threshold in value]
        if any(lower >= higher for higher, lower in zip(minimums, minimums[1:], strict=False)):
            raise ValueError("thresholds must be strictly descending")
        if minimums[-1] != 0.0:
            raise ValueError("the lowest threshold must be 0")
        return value

    @model_validator(mode="after")
    def _validate_caps_within_scale(self) -> _VariantModel:
        if sum(category.cap for category in self.categories) > self.scale_maximum:
            raise ValueError("category caps exceed the scale maximum")
        return self


class _VariantCatalogModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    default_variant: str
    variants: tuple[_VariantModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value

    @model_validator(mode="after")
    def _validate_variants(self) -> _VariantCatalogModel:
        if not self.variants:
            raise ValueError
        names = [variant.name for variant in self.variants]
        if len(set(names)) != len(names):
            raise ValueError
        if self.default_variant.strip() not in set(names):
            raise ValueError
        return self


def _to_domain_variant(model: _VariantModel) -> ScoringVariant:
    return ScoringVariant(
        name=model.name,
        label=model.label,
        scale_maximum=model.scale_maximum,
        categories=tuple(
            CategorySpec(
                name=category.name,
                label=category.label,
                scorer=category.scorer,
                cap=category.cap,
            )
            for category in model.categories
        ),
        thresholds=tuple(
            TierThreshold(min_percentage=threshold.min_percentage, tier=threshold.tier)
            for threshold in model.thresholds
        ),
        tables=PointTables(
            certificate_points=point_table(model.tables.certificate_points),
            certificate_default=model.tables.certificate_default,
            position_points=point_table(model.tables.position_points),
            position_default=model.tables.position_default,
        ),
    )


def load_variant_catalog(*, path: Path, fs: FileSystem) -> VariantCatalog:
    """Load and validate a variant catalogue from JSON."""
    if not fs.exists(path):
        raise VariantCatalogFileNotFoundError(str(path))

    payload = fs.read_text(path)
    try:
        model = _VariantCatalogModel.model_validate_json(payload)
    except ValidationError as exc:
        raise VariantCatalogValidationError(str(path), format_validation_error(exc)) from exc

    return VariantCatalog(
        default_variant=model.default_variant.strip(),
        variants=tuple(_to_domain_variant(variant) for variant in model.variants),
    )


__all__ = ["load_variant_catalog", "resolve_variant"]
