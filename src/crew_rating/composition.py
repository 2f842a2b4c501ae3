"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .infrastructure import LocalFileSystem


def build_cli_dependencies() -> CliDependencies:
    """Build concrete dependencies for CLI commands."""
    return CliDependencies(fs=LocalFileSystem())


app = create_app(build_cli_dependencies)
