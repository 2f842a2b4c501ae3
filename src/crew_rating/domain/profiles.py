"""Crew profile and performance inputs consumed by the rating engine.

Usage example:
    from crew_rating.domain.profiles import CrewProfile, PerformanceInputs, TonnageClass

    profile = CrewProfile(
        full_name="Alex Marin",
        position="Captain",
        vessel_tonnage_class=TonnageClass.UNDER_500,
        yacht_sea_time_months=48,
        languages_spoken=frozenset({"English", "Spanish"}),
    )
    performance = PerformanceInputs(charters_completed=12, repeat_charters=2)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType

from ..exceptions import InvalidProfileError


class TonnageClass(StrEnum):
    """Vessel-size bracket used to select a position's qualifications."""

    UNDER_200 = "<200GRT"
    UNDER_500 = "<500GRT"
    UNDER_3000 = "<3000GRT"


_TONNAGE_ALIASES = {
    "<200grt": TonnageClass.UNDER_200,
    "under200grt": TonnageClass.UNDER_200,
    "<500grt": TonnageClass.UNDER_500,
    "under500grt": TonnageClass.UNDER_500,
    "<3000grt": TonnageClass.UNDER_3000,
    "under3000grt": TonnageClass.UNDER_3000,
}


def parse_tonnage_class(value: TonnageClass | str | None) -> TonnageClass:
    """Resolve a tonnage class from the enum or one of its upstream spellings.

    Accepts ``"<500GRT"``, ``"<500 GRT"`` and ``"Under 500 GRT"`` (any case).
    """
    if isinstance(value, TonnageClass):
        return value
    if value is None or not value.strip():
        raise InvalidProfileError("vessel_tonnage_class", "is required")
    key = "".join(value.split()).lower()
    try:
        return _TONNAGE_ALIASES[key]
    except KeyError:
        raise InvalidProfileError(
            "vessel_tonnage_class", f"{value!r} is not a recognised tonnage class"
        ) from None


def _empty_counts() -> MappingProxyType[str, int]:
    return MappingProxyType({})


def readonly_counts(values: Mapping[str, int]) -> MappingProxyType[str, int]:
    """Copy a name → count mapping into a read-only view."""
    return MappingProxyType(dict(values))


@dataclass(frozen=True)
class CrewProfile:
    """Identity and static career attributes of one crew member."""

    full_name: str
    position: str
    vessel_tonnage_class: TonnageClass | str
    nationality: str = ""
    yacht_sea_time_months: int = 0
    merchant_sea_time_months: int = 0
    number_of_yachts_worked: int = 0
    longevity_on_last_yacht_months: int = 0
    sea_miles_logged: int = 0
    largest_vessel_grt: int = 0
    primary_certificate_of_competency: str | None = None
    languages_spoken: frozenset[str] = frozenset()
    held_qualifications: frozenset[str] = frozenset()


@dataclass(frozen=True)
class PerformanceInputs:
    """Charter activity and platform contributions of one crew member."""

    charters_completed: int = 0
    repeat_charters: int = 0
    crew_referred: int = 0
    yachts_referred: int = 0
    total_charter_revenue: float | None = None
    repeat_guest_charters: int | None = None
    guest_feedback_rating: int | None = None
    leadership_roles_held: frozenset[str] = frozenset()
    monthly_national_salary: float | None = None
    ocean_crossing_counts: Mapping[str, int] = field(default_factory=_empty_counts)
    canal_transit_counts: Mapping[str, int] = field(default_factory=_empty_counts)
