"""CLI for the crew rating engine.

Commands:
- score: Score every crew record in a JSON file with one variant
- requirements: Show the qualification matrix entry for a tonnage class and position
- variants: List registered scoring variants, categories and tiers
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint
from rich.console import Console
from rich.table import Table

from . import __version__
from .application.score_crew import ScoreRunResult, build_engine, run_score_crew
from .config import CrewRatingConfig
from .config_file import load_crew_rating_config_file
from .domain.profiles import TonnageClass, parse_tonnage_class
from .exceptions import CrewRatingError
from .protocols import FileSystem


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: CrewRatingConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder()


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__("CLI context is not initialised. Use the crew-rating entry point.")


DEFAULT_CREW_IN = Path("data/input/crew.json")
DEFAULT_SCORES_OUT = Path("data/processed/crew_scores.json")


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _fail(exc: CrewRatingError) -> typer.Exit:
    rprint(f"[red]✗ {exc}[/red]")
    return typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"crew-rating {__version__}")
        raise typer.Exit()


def _format_points(value: float) -> str:
    return f"{value:g}"


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Crew rating engine: score yacht crew profiles with YCI+ or CRI+",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        config_path: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="TOML config file with a [crew_rating] table",
            ),
        ] = None,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        config = CrewRatingConfig.from_env()
        if config_path is not None:
            deps = deps_builder()
            try:
                file_config = load_crew_rating_config_file(path=config_path, fs=deps.fs)
            except CrewRatingError as exc:
                raise _fail(exc) from exc
            config = config.with_file_overrides(file_config)
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def score(
        ctx: typer.Context,
        input_path: Annotated[
            Path,
            typer.Option(
                "--input",
                "-i",
                help="Crew record JSON file",
            ),
        ] = DEFAULT_CREW_IN,
        out_path: Annotated[
            Path,
            typer.Option(
                "--output",
                "-o",
                help="Output path for score results JSON",
            ),
        ] = DEFAULT_SCORES_OUT,
        variant: Annotated[
            str | None,
            typer.Option(
                "--variant",
                "-v",
                help=(
                    "Scoring variant name or label "
                    "(default: CREW_RATING_DEFAULT_VARIANT, else the catalogue default)"
                ),
            ),
        ] = None,
    ) -> None:
        """Score crew records and write a breakdown per crew member."""
        state = _get_context(ctx)
        config = state.config
        if variant is not None:
            config = config.with_overrides(default_variant=variant)
        deps = state.build_dependencies()
        try:
            result: ScoreRunResult = run_score_crew(
                input_path=input_path,
                out_path=out_path,
                config=config,
                fs=deps.fs,
            )
        except CrewRatingError as exc:
            raise _fail(exc) from exc
        rprint(
            f"[green]✓ Scored {result.scored:,} crew ({result.variant}):[/green] "
            f"{result.output_path}"
        )
        for tier, count in sorted(result.tier_counts.items()):
            rprint(f"  {tier}: {count:,}")

    @app.command()
    def requirements(
        ctx: typer.Context,
        tonnage: Annotated[
            str,
            typer.Option(
                "--tonnage",
                "-t",
                help="Vessel tonnage class, e.g. '<500GRT' or 'Under 500 GRT'",
            ),
        ],
        position: Annotated[
            str | None,
            typer.Option(
                "--position",
                "-p",
                help="Onboard position (omit to list every position for the class)",
            ),
        ] = None,
    ) -> None:
        """Show minimum qualifications for a tonnage class and position."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        try:
            tonnage_class: TonnageClass = parse_tonnage_class(tonnage)
            catalog = build_engine(state.config, deps.fs).qualifications
        except CrewRatingError as exc:
            raise _fail(exc) from exc

        if position is None:
            rprint(f"[bold]{tonnage_class}[/bold] positions:")
            for name in catalog.positions_for(tonnage_class):
                rprint(f"  {name}")
            return

        names = catalog.requirements_for(tonnage_class, position)
        if not names:
            rprint(f"[yellow]No requirements listed for {position} on {tonnage_class}[/yellow]")
            return
        mandatory = set(catalog.mandatory_requirements_for(tonnage_class, position))
        table = Table(title=f"{position} ({tonnage_class})")
        table.add_column("Qualification")
        table.add_column("Mandatory")
        for name in names:
            table.add_row(name, "yes" if name in mandatory else "optional")
        Console().print(table)

    @app.command()
    def variants(ctx: typer.Context) -> None:
        """List scoring variants with their categories, caps and tiers."""
        state = _get_context(ctx)
        deps = state.build_dependencies()
        try:
            engine = build_engine(state.config, deps.fs)
            default_name = engine.resolve(state.config.default_variant or None).name
        except CrewRatingError as exc:
            raise _fail(exc) from exc

        console = Console()
        for item in engine.catalog.variants:
            default = " (default)" if item.name == default_name else ""
            table = Table(
                title=f"{item.label} ({item.name}) out of {_format_points(item.scale_maximum)}"
                f"{default}"
            )
            table.add_column("Category")
            table.add_column("Cap", justify="right")
            for category in item.categories:
                table.add_row(category.label, _format_points(category.cap))
            console.print(table)
            tiers = ", ".join(
                f"{threshold.tier} ≥{_format_points(threshold.min_percentage)}%"
                for threshold in item.thresholds
            )
            rprint(f"  Tiers: {tiers}")

    _ = (
        main,
        score,
        requirements,
        variants,
    )

    return app
