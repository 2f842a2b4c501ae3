"""Crew record input files: structural validation and mapping onto domain inputs.

Range checks are left to the scoring engine; this module rejects only payloads
whose shape is wrong (unknown keys, wrong types, missing identity fields).

Usage example:
    from pathlib import Path

    from crew_rating.application.crew_records import load_crew_records
    from crew_rating.infrastructure import LocalFileSystem

    records = load_crew_records(path=Path("data/input/crew.json"), fs=LocalFileSystem())
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ..domain.profiles import CrewProfile, PerformanceInputs, readonly_counts
from ..exceptions import CrewRecordFileNotFoundError, CrewRecordValidationError
from ..io_validation import JsonObjectExpectedError, format_validation_error
from ..protocols import FileSystem

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class CrewRecord:
    """One crew member's profile and performance inputs."""

    profile: CrewProfile
    performance: PerformanceInputs


def _strip_names(values: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(text for text in (value.strip() for value in values) if text)


class _ProfileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    full_name: str
    position: str
    vessel_tonnage_class: str
    nationality: str = ""
    yacht_sea_time_months: int = 0
    merchant_sea_time_months: int = 0
    number_of_yachts_worked: int = 0
    longevity_on_last_yacht_months: int = 0
    sea_miles_logged: int = 0
    largest_vessel_grt: int = 0
    primary_certificate_of_competency: str | None = None
    languages_spoken: tuple[str, ...] = ()
    held_qualifications: tuple[str, ...] = ()

    @field_validator("full_name")
    @classmethod
    def _validate_full_name(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("languages_spoken", "held_qualifications")
    @classmethod
    def _validate_names(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _strip_names(value)


class _PerformanceModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    charters_completed: int = 0
    repeat_charters: int = 0
    crew_referred: int = 0
    yachts_referred: int = 0
    total_charter_revenue: float | None = None
    repeat_guest_charters: int | None = None
    guest_feedback_rating: int | None = None
    leadership_roles_held: tuple[str, ...] = ()
    monthly_national_salary: float | None = None
    ocean_crossing_counts: dict[str, int] = {}
    canal_transit_counts: dict[str, int] = {}

    @field_validator("leadership_roles_held")
    @classmethod
    def _validate_roles(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return _strip_names(value)


class _CrewEntryModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    profile: _ProfileModel
    performance: _PerformanceModel = _PerformanceModel()


class _CrewRecordFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    crew: tuple[_CrewEntryModel, ...]

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _to_record(entry: _CrewEntryModel) -> CrewRecord:
    profile = entry.profile
    performance = entry.performance
    return CrewRecord(
        profile=CrewProfile(
            full_name=profile.full_name,
            position=profile.position,
            vessel_tonnage_class=profile.vessel_tonnage_class,
            nationality=profile.nationality,
            yacht_sea_time_months=profile.yacht_sea_time_months,
            merchant_sea_time_months=profile.merchant_sea_time_months,
            number_of_yachts_worked=profile.number_of_yachts_worked,
            longevity_on_last_yacht_months=profile.longevity_on_last_yacht_months,
            sea_miles_logged=profile.sea_miles_logged,
            largest_vessel_grt=profile.largest_vessel_grt,
            primary_certificate_of_competency=profile.primary_certificate_of_competency,
            languages_spoken=frozenset(profile.languages_spoken),
            held_qualifications=frozenset(profile.held_qualifications),
        ),
        performance=PerformanceInputs(
            charters_completed=performance.charters_completed,
            repeat_charters=performance.repeat_charters,
            crew_referred=performance.crew_referred,
            yachts_referred=performance.yachts_referred,
            total_charter_revenue=performance.total_charter_revenue,
            repeat_guest_charters=performance.repeat_guest_charters,
            guest_feedback_rating=performance.guest_feedback_rating,
            leadership_roles_held=frozenset(performance.leadership_roles_held),
            monthly_national_salary=performance.monthly_national_salary,
            ocean_crossing_counts=readonly_counts(performance.ocean_crossing_counts),
            canal_transit_counts=readonly_counts(performance.canal_transit_counts),
        ),
    )


def parse_crew_records(payload: object, *, source: str) -> tuple[CrewRecord, ...]:
    """Validate a decoded crew record payload and map it to domain records."""
    try:
        model = _CrewRecordFileModel.model_validate(payload)
    except ValidationError as exc:
        raise CrewRecordValidationError(source, format_validation_error(exc)) from exc
    return tuple(_to_record(entry) for entry in model.crew)


def load_crew_records(*, path: Path, fs: FileSystem) -> tuple[CrewRecord, ...]:
    """Load crew records from a JSON file."""
    if not fs.exists(path):
        raise CrewRecordFileNotFoundError(str(path))

    try:
        payload = fs.read_json(path)
    except JsonObjectExpectedError as exc:
        raise CrewRecordValidationError(str(path), "expected a JSON object") from exc
    return parse_crew_records(payload, source=str(path))
