"""Centralised, injectable configuration for the crew rating host."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import CrewRatingConfigFile

@dataclass(frozen=True)
class CrewRatingConfig:
    """Immutable configuration for scoring runs.

    Load from environment with `CrewRatingConfig.from_env()` or construct directly for testing.
    Empty table paths select the built-in variant presets and qualification matrix; an
    empty default variant selects the variant catalogue's own default.
    """

    default_variant: str = ""
    variants_path: str = ""
    qualifications_path: str = ""

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            CrewRatingConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            default_variant=os.getenv("CREW_RATING_DEFAULT_VARIANT", "").strip(),
            variants_path=os.getenv("CREW_RATING_VARIANTS_PATH", "").strip(),
            qualifications_path=os.getenv("CREW_RATING_QUALIFICATIONS_PATH", "").strip(),
        )

    def with_overrides(
        self,
        *,
        default_variant: str | None = None,
        variants_path: str | None = None,
        qualifications_path: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            default_variant=self.default_variant
            if default_variant is None
            else default_variant.strip(),
            variants_path=self.variants_path if variants_path is None else variants_path.strip(),
            qualifications_path=self.qualifications_path
            if qualifications_path is None
            else qualifications_path.strip(),
        )

    def with_file_overrides(self, file_config: CrewRatingConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            default_variant=self.default_variant
            if file_config.default_variant is None
            else file_config.default_variant,
            variants_path=self.variants_path
            if file_config.variants_path is None
            else file_config.variants_path,
            qualifications_path=self.qualifications_path
            if file_config.qualifications_path is None
            else file_config.qualifications_path,
        )
