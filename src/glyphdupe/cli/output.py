"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars and formatted messages. Status output goes to stderr;
the group report goes to stdout as plain, unwrapped text so that runs are
byte-for-byte reproducible and easy to pipe.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

from glyphdupe.core import GroupingResult
from glyphdupe.domain import Group, ProbeSet
from glyphdupe.utils import ProcessingStats

console = Console(stderr=True)
report_console = Console(markup=False, emoji=False, highlight=False, soft_wrap=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_WARN = "!"  # Warning
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for font processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  {task.description:<14}"),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=False,
    )


def print_header(version: str) -> None:
    """Print application header."""
    console.print(f"\n[bold]glyphdupe[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator."""
    console.print(f"\n{SYM_STEP} {message}")


def print_run_info(font_count: int, probe_size: int, workers: int, is_auto: bool = False) -> None:
    """Print run configuration.

    Args:
        font_count: Number of font files to compare
        probe_size: Number of probe codepoints
        workers: Number of parallel workers
        is_auto: Whether the worker count was auto-detected
    """
    auto_suffix = " (auto)" if is_auto else ""
    console.print(f"  {font_count:,} fonts {SYM_DOT} {probe_size} probe glyphs")
    console.print(f"  {workers} workers{auto_suffix} {SYM_DOT} Ctrl+C to cancel")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def format_members(group: Group) -> str:
    """Member paths of a group as ``{a, b, c}``."""
    return "{" + ", ".join(str(p) for p in group.members) + "}"


def format_report(grouping: GroupingResult) -> list[str]:
    """Report lines for a grouping, header first."""
    lines = [
        f"Showing groups where at least {grouping.min_matches}/{grouping.total} glyphs match",
        "",
        "Group, Score",
    ]
    for group in grouping.reportable():
        lines.append(f"{format_members(group)}, {group.matches}/{group.total}")
    return lines


def print_report(grouping: GroupingResult) -> None:
    """Print the group report to stdout."""
    for line in format_report(grouping):
        report_console.print(line)


def print_shared_glyphs(groups: Sequence[Group], probe: ProbeSet) -> None:
    """Print, per group, the probe characters every member draws identically."""
    for group in groups:
        shared = [
            chr(cp)
            for position, cp in enumerate(probe)
            if group.signature and group.signature[position] >= 0
        ]
        report_console.print("")
        report_console.print(format_members(group))
        report_console.print(f"  shared ({len(shared)}): {''.join(shared)}")


def print_dump_written(directory: str, file_count: int) -> None:
    """Print where glyph dumps went."""
    line = Text(f"  {file_count} files written to ")
    line.append(directory, style="bold")
    console.print(line)


def print_summary(stats: ProcessingStats, reported: int) -> None:
    """Print run summary.

    Args:
        stats: Run statistics
        reported: Number of groups in the report
    """
    time_str = _format_time(stats.duration_seconds)
    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    error_style = "red" if stats.fonts_failed > 0 else "green"
    console.print(
        f"  {stats.fonts_loaded} fonts {SYM_DOT} {stats.pairs_compared:,} pairs {SYM_DOT} "
        f"{reported} groups {SYM_DOT} "
        f"[{error_style}]{stats.fonts_failed} skipped[/{error_style}]"
    )
    if stats.rejected_merges:
        console.print(f"  {stats.rejected_merges} merges rejected by group-wide agreement")

    if stats.avg_font_time_ms is not None:
        console.print(f"  {stats.avg_font_time_ms:.1f}ms avg per font")


def print_warning(message: str) -> None:
    """Print a warning that does not stop the run."""
    line = Text(f"{SYM_WARN} ", style="bold yellow")
    line.append(message)
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    line = Text(f"\n{SYM_ERR} Error: ", style="bold red")
    line.append(message)
    console.print(line)
    if details:
        console.print(Text(f"  {details}"))


def print_cancellation_notice() -> None:
    """Print cancellation acknowledgment."""
    console.print(f"\n{SYM_DOT} Cancelling... waiting for in-progress work")


def print_cancellation_summary(cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {cancelled} tasks cancelled {SYM_DOT} no report produced")
