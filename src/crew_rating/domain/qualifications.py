"""Minimum qualification matrix by vessel tonnage class and onboard position.

Usage example:
    from crew_rating.domain.qualifications import DEFAULT_QUALIFICATION_CATALOG
    from crew_rating.domain.profiles import TonnageClass

    DEFAULT_QUALIFICATION_CATALOG.requirements_for(TonnageClass.UNDER_200, "Deckhand")
    # ("STCW Basic Training", "ENG1 Medical", "RYA Powerboat Level 2")
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType

from ..exceptions import InvalidProfileError
from .profiles import TonnageClass, parse_tonnage_class
from .variants import normalise_key


@dataclass(frozen=True)
class QualificationItem:
    """One named qualification and whether the position strictly requires it."""

    name: str
    mandatory: bool = True


@dataclass(frozen=True)
class QualificationRequirement:
    """Ordered qualifications required for a position on a tonnage class."""

    tonnage_class: TonnageClass
    position: str
    items: tuple[QualificationItem, ...]

    @property
    def required_qualifications(self) -> tuple[str, ...]:
        return tuple(item.name for item in self.items)


@dataclass(frozen=True)
class QualificationCatalog:
    """Immutable lookup of qualification requirements.

    Build with ``build_qualification_catalog``; there is no mutation API.
    """

    entries: MappingProxyType[tuple[TonnageClass, str], QualificationRequirement]

    def _lookup(
        self, tonnage_class: TonnageClass | str, position: str
    ) -> QualificationRequirement | None:
        try:
            tonnage = parse_tonnage_class(tonnage_class)
        except InvalidProfileError:
            return None
        return self.entries.get((tonnage, normalise_key(position or "")))

    def requirements_for(
        self, tonnage_class: TonnageClass | str, position: str
    ) -> tuple[str, ...]:
        """Return required qualification names in table order.

        Pairs absent from the catalogue yield an empty tuple, never an error.
        """
        requirement = self._lookup(tonnage_class, position)
        if requirement is None:
            return ()
        return requirement.required_qualifications

    def mandatory_requirements_for(
        self, tonnage_class: TonnageClass | str, position: str
    ) -> tuple[str, ...]:
        """Return only the mandatory qualification names in table order."""
        requirement = self._lookup(tonnage_class, position)
        if requirement is None:
            return ()
        return tuple(item.name for item in requirement.items if item.mandatory)

    def positions_for(self, tonnage_class: TonnageClass | str) -> tuple[str, ...]:
        tonnage = parse_tonnage_class(tonnage_class)
        return tuple(
            requirement.position
            for (entry_tonnage, _), requirement in self.entries.items()
            if entry_tonnage is tonnage
        )

    def known_positions(self) -> frozenset[str]:
        return frozenset(requirement.position for requirement in self.entries.values())

    def knows_position(self, position: str) -> bool:
        """Return True when any tonnage class lists the position."""
        key = normalise_key(position or "")
        return any(entry_position == key for _, entry_position in self.entries)


def build_qualification_catalog(
    requirements: Iterable[QualificationRequirement],
) -> QualificationCatalog:
    """Index requirements by (tonnage class, normalised position)."""
    entries: dict[tuple[TonnageClass, str], QualificationRequirement] = {}
    for requirement in requirements:
        entries[(requirement.tonnage_class, normalise_key(requirement.position))] = (
            requirement
        )
    return QualificationCatalog(entries=MappingProxyType(entries))


def _req(
    tonnage_class: TonnageClass, position: str, *names: str, optional: Iterable[str] = ()
) -> QualificationRequirement:
    optional_names = frozenset(optional)
    return QualificationRequirement(
        tonnage_class=tonnage_class,
        position=position,
        items=tuple(
            QualificationItem(name=name, mandatory=name not in optional_names) for name in names
        ),
    )


_STCW = "STCW Basic Training"
_ENG1 = "ENG1 Medical"
_HELM = "HELM (Human Element Leadership & Management)"

DEFAULT_QUALIFICATION_REQUIREMENTS: tuple[QualificationRequirement, ...] = (
    # Under 200 GRT
    _req(
        TonnageClass.UNDER_200,
        "Captain",
        "RYA Yachtmaster Offshore",
        _STCW,
        _ENG1,
        "VHF Radio License",
        "Basic Fire Fighting",
    ),
    _req(
        TonnageClass.UNDER_200,
        "Engineer",
        "AEC 1 (Assistant Engineer Certificate)",
        _STCW,
        _ENG1,
        "Basic Fire Fighting",
    ),
    _req(TonnageClass.UNDER_200, "Deckhand", _STCW, _ENG1, "RYA Powerboat Level 2"),
    _req(
        TonnageClass.UNDER_200,
        "Chief Steward(ess)",
        _STCW,
        _ENG1,
        "Food Hygiene Level 2",
        "Guest Service Training",
        optional=("Guest Service Training",),
    ),
    _req(TonnageClass.UNDER_200, "2nd Steward(ess)", _STCW, _ENG1, "Food Hygiene Level 2"),
    _req(
        TonnageClass.UNDER_200,
        "Chef",
        _STCW,
        _ENG1,
        "Food Hygiene Level 2",
        "Culinary Certificate",
        optional=("Culinary Certificate",),
    ),
    # Under 500 GRT
    _req(
        TonnageClass.UNDER_500,
        "Captain",
        "MCA Master <500 GT",
        "GMDSS GOC",
        _HELM,
        "STCW Advanced Fire Fighting",
        _ENG1,
    ),
    _req(
        TonnageClass.UNDER_500,
        "Chief Officer",
        "OOW <500 GT",
        _STCW,
        _ENG1,
        "Basic Fire Fighting",
    ),
    _req(
        TonnageClass.UNDER_500,
        "Engineer",
        "MEOL (Y) - Marine Engineer Officer License",
        "AEC 1 & 2",
        _STCW,
        _ENG1,
    ),
    _req(
        TonnageClass.UNDER_500,
        "Deckhand",
        _STCW,
        _ENG1,
        "RYA Powerboat Level 2",
        "PWC License",
        "PDSD (Personal Watercraft)",
    ),
    _req(
        TonnageClass.UNDER_500,
        "Chief Steward(ess)",
        _STCW,
        _ENG1,
        "GUEST (Guest Service Training)",
        "WSET Level 1",
        "Food Hygiene Level 3",
    ),
    _req(
        TonnageClass.UNDER_500,
        "Chef",
        _STCW,
        _ENG1,
        "Culinary Certificate",
        "Food Safety Level 3",
    ),
    # Under 3000 GRT
    _req(
        TonnageClass.UNDER_3000,
        "Captain",
        "MCA Master <3000 GT",
        "ECDIS Certification",
        "GMDSS GOC",
        _HELM,
        "STCW Advanced Fire Fighting",
        "Ship Security Officer (SSO)",
        _ENG1,
    ),
    _req(
        TonnageClass.UNDER_3000,
        "Chief Officer",
        "OOW <3000 GT",
        "ECDIS Certification",
        "STCW Advanced Fire Fighting",
        _ENG1,
    ),
    _req(
        TonnageClass.UNDER_3000,
        "Chief Engineer",
        "Y3/Y4 CoC (Engineer Certificate of Competency)",
        "HV Certificate (High Voltage)",
        "AEC 1, 2 & 3",
        "STCW Advanced Fire Fighting",
        _ENG1,
    ),
    _req(
        TonnageClass.UNDER_3000,
        "ETO",
        "ETO CoC (Electro Technical Officer)",
        "AV/IT Certifications",
        _STCW,
        _ENG1,
    ),
    _req(
        TonnageClass.UNDER_3000,
        "Deckhand",
        _STCW,
        _ENG1,
        "Yacht Rating Certificate",
        "RYA Powerboat Level 2",
    ),
    _req(
        TonnageClass.UNDER_3000,
        "Chief Steward(ess)",
        _STCW,
        _ENG1,
        "WSET Level 2-3",
        "HELM Optional",
        "Food Hygiene Level 3",
        optional=("HELM Optional",),
    ),
    _req(
        TonnageClass.UNDER_3000,
        "Chef",
        _STCW,
        _ENG1,
        "Culinary Diploma",
        "HACCP Certification",
        "Food Safety Level 3",
    ),
    _req(
        TonnageClass.UNDER_3000,
        "Purser",
        "Purser Certificate",
        "Administration & Accounting",
        _STCW,
        _ENG1,
    ),
)

DEFAULT_QUALIFICATION_CATALOG = build_qualification_catalog(DEFAULT_QUALIFICATION_REQUIREMENTS)
