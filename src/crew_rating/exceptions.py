"""Custom exceptions for the crew rating engine.

Scoring errors are raised synchronously to the immediate caller; the engine never
retries and never returns a partial breakdown.
"""

from __future__ import annotations

from collections.abc import Iterable


class CrewRatingError(Exception):
    """Base exception for all crew rating errors."""

    pass


class InvalidProfileError(CrewRatingError):
    """Raised when a required identity field is missing or unrecognised."""

    def __init__(self, field_name: str, reason: str) -> None:
        self.field_name = field_name
        super().__init__(f"Invalid crew profile: {field_name} {reason}.")


class OutOfRangeInputError(CrewRatingError):
    """Raised when a numeric input lies outside its meaningful range.

    User-reported values are rejected rather than clamped so that bad upstream
    validation surfaces here.
    """

    def __init__(self, field_name: str, value: object, expected: str) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f"{field_name}={value!r} is out of range (expected {expected}).")


class UnknownVariantError(CrewRatingError):
    """Raised when a scoring variant is not registered."""

    def __init__(self, name: str, available: Iterable[str]) -> None:
        self.name = name
        self.available = tuple(available)
        choices = ", ".join(self.available) or "<none>"
        super().__init__(f"Unknown scoring variant '{name}'. Available variants: {choices}.")


class ScoreAggregationError(CrewRatingError):
    """Raised when summed sub-scores fall outside the variant scale.

    This indicates a scorer or table defect, so the total is never clamped.
    """

    def __init__(self, total: float, scale_maximum: float) -> None:
        self.total = total
        self.scale_maximum = scale_maximum
        super().__init__(
            f"Aggregated total {total!r} is outside the scale [0, {scale_maximum!r}]."
        )


class UnknownScorerError(CrewRatingError):
    """Raised when a variant references a scorer that does not exist."""

    def __init__(self, scorer: str, available: Iterable[str]) -> None:
        super().__init__(
            f"Unknown category scorer '{scorer}'. Available scorers: {', '.join(available)}."
        )


class VariantCatalogFileNotFoundError(CrewRatingError):
    """Raised when a variant catalogue file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Variant catalogue not found: {path}")


class VariantCatalogValidationError(CrewRatingError):
    """Raised when a variant catalogue fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid variant catalogue {path}: {detail}")


class QualificationCatalogFileNotFoundError(CrewRatingError):
    """Raised when a qualification matrix file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Qualification matrix not found: {path}")


class QualificationCatalogValidationError(CrewRatingError):
    """Raised when a qualification matrix fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid qualification matrix {path}: {detail}")


class CrewRecordFileNotFoundError(CrewRatingError):
    """Raised when a crew record input file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Crew record file not found: {path}")


class CrewRecordValidationError(CrewRatingError):
    """Raised when a crew record payload is structurally invalid."""

    def __init__(self, source: str, detail: str) -> None:
        super().__init__(f"Invalid crew records in {source}: {detail}")


class ConfigFileNotFoundError(CrewRatingError):
    """Raised when a TOML config file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(CrewRatingError):
    """Raised when a TOML config file cannot be parsed."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Could not parse config file {path}: {detail}")


class ConfigFileValidationError(CrewRatingError):
    """Raised when a TOML config file fails schema validation."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Invalid config file {path}: {detail}")


class TierTableError(CrewRatingError):
    """Raised when a tier threshold table does not classify every percentage."""

    def __init__(self, percentage: float) -> None:
        super().__init__(
            f"No tier threshold matches {percentage:.2f}%; the lowest threshold must be 0."
        )
