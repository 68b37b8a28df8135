"""CLI application entry point for glyphdupe.

This module provides the main CLI interface using Typer.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from glyphdupe import __version__
from glyphdupe.cli.output import (
    console,
    create_progress,
    print_cancellation_notice,
    print_cancellation_summary,
    print_dump_written,
    print_error,
    print_header,
    print_report,
    print_run_info,
    print_shared_glyphs,
    print_step,
    print_summary,
    print_warning,
)
from glyphdupe.config import build_settings
from glyphdupe.core import DuplicateFinder, RunResult, write_glyph_dump
from glyphdupe.domain import DEFAULT_PROBE_STRING, ProbeSet
from glyphdupe.exceptions import ConfigurationError, FontDiscoveryError, GlyphDupeError
from glyphdupe.io import expand_paths, google_fonts_exemplars

# Create the Typer app
app = typer.Typer(
    name="glyphdupe",
    help="Find font files that share copied glyph outlines.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]glyphdupe[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_location(values: list[str]) -> dict[str, float]:
    """Parse ``tag=value`` variable font coordinates.

    Raises:
        ConfigurationError: If an entry is malformed
    """
    location: dict[str, float] = {}
    for value in values:
        tag, sep, number = value.partition("=")
        tag = tag.strip()
        if not sep or not tag or len(tag) > 4:
            raise ConfigurationError(f"Invalid location '{value}', expected e.g. wght=700")
        try:
            location[tag] = float(number)
        except ValueError:
            raise ConfigurationError(f"Invalid location value in '{value}'") from None
    return location


@app.command()
def find(
    paths: Annotated[
        list[Path] | None,
        typer.Argument(
            help="Font files or directories to compare",
            show_default=False,
        ),
    ] = None,
    match_pct: Annotated[
        float,
        typer.Option(
            "--match-pct",
            "-m",
            help="Percentage of probe glyphs that must match across a whole group",
        ),
    ] = 80.0,
    test_string: Annotated[
        str,
        typer.Option(
            "--test-string",
            help="Characters to compare",
            show_default=False,
        ),
    ] = DEFAULT_PROBE_STRING,
    test_nam: Annotated[
        Path | None,
        typer.Option(
            "--test-nam",
            help="Read probe codepoints from a .nam file (overrides --test-string)",
        ),
    ] = None,
    grid: Annotated[
        float,
        typer.Option(
            "--grid",
            help="Quantization grid in font units at 1000 UPM",
        ),
    ] = 1.0,
    no_normalize_upm: Annotated[
        bool,
        typer.Option(
            "--no-normalize-upm",
            help="Compare raw coordinates without scaling to 1000 UPM",
        ),
    ] = False,
    location: Annotated[
        list[str] | None,
        typer.Option(
            "--location",
            "-l",
            help="Variable font location as tag=value, repeatable (default: default instance)",
        ),
    ] = None,
    google_fonts: Annotated[
        Path | None,
        typer.Option(
            "--google-fonts",
            help="Google Fonts repository root; adds one exemplar font per family",
        ),
    ] = None,
    dump_glyphs: Annotated[
        bool,
        typer.Option(
            "--dump-glyphs",
            help="Write an SVG per probe glyph and an outline listing to --working-dir",
        ),
    ] = False,
    dump_groups: Annotated[
        bool,
        typer.Option(
            "--dump-groups",
            help="List the shared glyphs of each reported group",
        ),
    ] = False,
    working_dir: Annotated[
        Path,
        typer.Option(
            "--working-dir",
            help="Directory for dump files",
        ),
    ] = Path("build"),
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbose console output",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Only print the report",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Group font files whose glyph outlines are identical on most probe characters.

    Each probe glyph is normalized (position, contour order, start point and
    winding removed) and compared exactly. Fonts are grouped only when every
    member of a group agrees on at least --match-pct of the probe glyphs.

    Example:
        glyphdupe fonts/ --match-pct 90
    """
    # Validate mutually exclusive options
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    try:
        settings = build_settings(
            canonical={"grid": grid, "normalize_upm": not no_normalize_upm},
            match={"match_pct": match_pct},
            probe={"test_string": test_string, "test_nam": test_nam},
            font={"location": parse_location(location or [])},
            processing={"max_workers": workers},
            dump={
                "dump_glyphs": dump_glyphs,
                "dump_groups": dump_groups,
                "working_dir": working_dir,
            },
            logging={
                "log_file": log_file,
                "log_level": "DEBUG" if verbose else log_level,
            },
        )
        # Configures logging before discovery and probe parsing can log
        finder = DuplicateFinder(settings, quiet=quiet)
        probe = settings.probe.build_probe_set()
    except ConfigurationError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Unable to open log file: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    font_paths = _collect_fonts(paths or [], google_fonts)
    if not font_paths:
        print_warning("Not much to do with no fonts specified")
        raise typer.Exit(code=0)

    try:
        result = _run(finder, font_paths, probe, quiet)

        for path, reason in result.stats.errors:
            print_warning(f"Skipped {path}: {reason}")

        if settings.dump.dump_glyphs:
            written = write_glyph_dump(
                settings.dump.working_dir, result.index, result.raw_outlines
            )
            if not quiet:
                print_step("Dumping glyphs")
                print_dump_written(str(settings.dump.working_dir), len(written))

        reportable = result.grouping.reportable()
        if not quiet:
            print_step("Report")
        print_report(result.grouping)
        if settings.dump.dump_groups:
            print_shared_glyphs(reportable, result.probe)

        if not quiet:
            print_summary(result.stats, len(reportable))

    except GlyphDupeError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _collect_fonts(paths: list[Path], google_fonts: Path | None) -> list[Path]:
    """Expand CLI paths, warning about anything unusable."""
    font_paths, problems = expand_paths(paths)

    if google_fonts is not None:
        try:
            font_paths = sorted(set(font_paths) | set(google_fonts_exemplars(google_fonts)))
        except FontDiscoveryError as e:
            problems.append(e)

    for problem in problems:
        print_warning(str(problem))

    return font_paths


def _run(
    finder: DuplicateFinder,
    font_paths: list[Path],
    probe: ProbeSet,
    quiet: bool,
) -> RunResult:
    """Run the finder with a progress display."""
    try:
        if quiet:
            return finder.run(font_paths, probe)

        workers = finder.config.processing.max_workers
        print_step("Comparing")
        print_run_info(
            font_count=len(font_paths),
            probe_size=len(probe),
            workers=workers if workers else os.cpu_count() or 1,
            is_auto=workers is None,
        )

        with create_progress() as progress:
            tasks: dict[str, int] = {}

            def update_progress(completed: int, total: int, stage: str) -> None:
                if stage not in tasks:
                    tasks[stage] = progress.add_task(stage, total=total)
                progress.update(tasks[stage], completed=completed, total=total)

            return finder.run(font_paths, probe, progress_callback=update_progress)

    except KeyboardInterrupt:
        if not quiet:
            print_cancellation_notice()
            print_cancellation_summary(cancelled=finder.run_logger.stats.cancelled_count)
        raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
