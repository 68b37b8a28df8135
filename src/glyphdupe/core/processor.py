"""Parallel orchestration of a duplicate-detection run.

This module coordinates the full workflow with ProcessPoolExecutor:

1. Canonicalize the probe glyphs of every font (parallel, per font)
2. Intern canonical outlines into an OutlineIndex (main process)
3. Compare every pair of fonts (parallel, per chunk of pair-matrix rows)
4. Merge fonts into groups (main process, single-threaded)

Key components:
- canonicalize_font: Top-level picklable function for step 1
- compare_rows: Top-level picklable function for step 3
- DuplicateFinder: Main orchestrator class
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from glyphdupe.config import CanonicalConfig, GlyphDupeSettings
from glyphdupe.core.canonical import OutlineCanonicalizer
from glyphdupe.core.comparator import OutlineIndex, PairwiseComparator
from glyphdupe.core.dump import raw_to_svg
from glyphdupe.core.grouping import GroupEngine, GroupingResult
from glyphdupe.domain import PairScore, ProbeSet
from glyphdupe.io import FontReader, probe_outlines
from glyphdupe.utils import ProcessingStats, RunLogger, configure_logging

ProgressCallback = Callable[[int, int, str], None]

STAGE_CANONICALIZE = "canonicalize"
STAGE_COMPARE = "compare"

# Comparator installed once per comparison worker
_worker_comparator: PairwiseComparator | None = None


def canonicalize_font(
    path: str,
    codepoints: Sequence[int],
    canonical_dict: dict[str, Any],
    location: dict[str, float] | None = None,
    include_raw: bool = False,
) -> dict[str, Any]:
    """Load one font and canonicalize its probe glyphs.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        path: Font file path
        codepoints: Probe codepoints, in probe order
        canonical_dict: Serialized canonicalization configuration
        location: Variable font user-space location
        include_raw: Also return SVG path data of the raw outlines

    Returns:
        Dictionary containing either:
        - Success: {"path", "outlines", "raw", "duration_ms"}
        - Error: {"path", "error", "traceback", "duration_ms"}
    """
    start_time = time.time()

    try:
        canonicalizer = OutlineCanonicalizer(CanonicalConfig(**canonical_dict))

        with FontReader(Path(path), location) as reader:
            glyphs = probe_outlines(reader, codepoints)

        raw: list[str] = []
        if include_raw:
            raw = [raw_to_svg(g) if g is not None else "" for g in glyphs]

        return {
            "path": path,
            "outlines": [canonicalizer.canonicalize(g) for g in glyphs],
            "raw": raw,
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        # fontTools parses tables lazily; any failure excludes just this font
        return {
            "path": path,
            "error": getattr(e, "reason", None) or str(e) or type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


def init_compare_worker(comparator: PairwiseComparator) -> None:
    """Pool initializer: install the comparator in a worker process."""
    global _worker_comparator
    _worker_comparator = comparator


def compare_rows(rows: Sequence[int], min_matches: int) -> list[PairScore]:
    """Worker entry point for PairwiseComparator.match_rows."""
    if _worker_comparator is None:
        raise RuntimeError("Comparison worker not initialized")
    return _worker_comparator.match_rows(rows, min_matches)


@dataclass
class RunResult:
    """Everything a run produced.

    Attributes:
        probe: Probe set of the run
        index: Canonical outline index of the loaded fonts
        grouping: Final partition
        stats: Run statistics
        raw_outlines: Raw outline SVG path data per font (dump mode only)
    """

    probe: ProbeSet
    index: OutlineIndex
    grouping: GroupingResult
    stats: ProcessingStats
    raw_outlines: dict[Path, list[str]] = field(default_factory=dict)


class DuplicateFinder:
    """Orchestrates parallel duplicate detection across font files.

    Example:
        settings = GlyphDupeSettings()
        finder = DuplicateFinder(settings)
        result = finder.run(paths, settings.probe.build_probe_set())
        for group in result.grouping.reportable():
            print(group.members, group.matches)
    """

    def __init__(self, config: GlyphDupeSettings, quiet: bool = False) -> None:
        """Initialize the finder with configuration.

        Args:
            config: glyphdupe settings
            quiet: Suppress console logging below ERROR
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.run_logger = RunLogger(self.logger)

    def run(
        self,
        font_paths: Sequence[Path],
        probe: ProbeSet,
        progress_callback: ProgressCallback | None = None,
    ) -> RunResult:
        """Canonicalize, compare and group the given fonts.

        Fonts that fail to load are logged, recorded in the stats and left out
        of the partition; the run continues with the rest.

        Args:
            font_paths: Font files (order does not matter)
            probe: Probe set of the run
            progress_callback: Optional callback(completed, total, stage)

        Returns:
            RunResult with the index, grouping and statistics

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        stats = self.run_logger.stats
        stats.start_time = time.time()

        paths = sorted(set(font_paths), key=str)
        stats.fonts_total = len(paths)
        max_workers = self.config.processing.max_workers

        self.logger.info(
            "Starting run",
            fonts=len(paths),
            probe=probe.characters(),
            match_pct=self.config.match.match_pct,
            max_workers=max_workers,
        )

        results = self._canonicalize_fonts(paths, probe, progress_callback)

        index = OutlineIndex(probe)
        raw_outlines: dict[Path, list[str]] = {}
        for path in paths:
            result = results[str(path)]
            if "error" in result:
                self.run_logger.log_font_failed(
                    str(path), result["error"], traceback=result.get("traceback")
                )
                continue
            table = index.add(path, result["outlines"])
            if result["raw"]:
                raw_outlines[path] = result["raw"]
            self.run_logger.log_font_loaded(
                str(path), table.present_count, len(probe), result["duration_ms"]
            )

        engine = GroupEngine(index, self.config.match, run_logger=self.run_logger)
        pair_scores = self._compare_pairs(index, engine.min_matches, progress_callback)
        grouping = engine.build(pair_scores)

        stats.end_time = time.time()

        self.logger.info(
            "Run complete",
            loaded=stats.fonts_loaded,
            failed=stats.fonts_failed,
            pairs=stats.pairs_compared,
            candidate_pairs=stats.candidate_pairs,
            merges=grouping.merges,
            rejected_merges=grouping.rejected_merges,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return RunResult(
            probe=probe,
            index=index,
            grouping=grouping,
            stats=stats,
            raw_outlines=raw_outlines,
        )

    def _canonicalize_fonts(
        self,
        paths: list[Path],
        probe: ProbeSet,
        progress_callback: ProgressCallback | None,
    ) -> dict[str, dict[str, Any]]:
        """Run canonicalize_font for every path, in a pool unless max_workers is 1."""
        args = (
            probe.codepoints,
            self.config.canonical.model_dump(),
            self.config.font.location,
            self.config.dump.dump_glyphs,
        )
        total = len(paths)
        results: dict[str, dict[str, Any]] = {}

        if self.config.processing.max_workers == 1:
            for completed, path in enumerate(paths, start=1):
                results[str(path)] = canonicalize_font(str(path), *args)
                if progress_callback is not None:
                    progress_callback(completed, total, STAGE_CANONICALIZE)
            return results

        pending: dict[Future, str] = {}
        with ProcessPoolExecutor(max_workers=self.config.processing.max_workers) as executor:
            for path in paths:
                pending[executor.submit(canonicalize_font, str(path), *args)] = str(path)

            try:
                for completed, future in enumerate(as_completed(list(pending)), start=1):
                    path_str = pending.pop(future)
                    try:
                        results[path_str] = future.result()
                    except Exception as e:
                        # Executor-level error (e.g. a crashed worker)
                        results[path_str] = {
                            "path": path_str,
                            "error": str(e) or type(e).__name__,
                            "traceback": traceback.format_exc(),
                        }
                    if progress_callback is not None:
                        progress_callback(completed, total, STAGE_CANONICALIZE)

            except KeyboardInterrupt:
                self._cancel(executor, pending)
                raise

        return results

    def _compare_pairs(
        self,
        index: OutlineIndex,
        min_matches: int,
        progress_callback: ProgressCallback | None,
    ) -> list[PairScore]:
        """Score all font pairs, keeping those meeting ``min_matches``."""
        comparator = PairwiseComparator.from_index(index)
        n = len(comparator)
        self.run_logger.stats.pairs_compared = n * (n - 1) // 2

        chunk_size = self.config.processing.chunk_size
        chunks = [list(range(start, min(start + chunk_size, n))) for start in range(0, n, chunk_size)]
        found: list[PairScore] = []

        if self.config.processing.max_workers == 1 or n < 2:
            for completed, rows in enumerate(chunks, start=1):
                found.extend(comparator.match_rows(rows, min_matches))
                if progress_callback is not None:
                    progress_callback(completed, len(chunks), STAGE_COMPARE)
        else:
            pending: dict[Future, int] = {}
            with ProcessPoolExecutor(
                max_workers=self.config.processing.max_workers,
                initializer=init_compare_worker,
                initargs=(comparator,),
            ) as executor:
                for number, rows in enumerate(chunks):
                    pending[executor.submit(compare_rows, rows, min_matches)] = number

                try:
                    for completed, future in enumerate(as_completed(list(pending)), start=1):
                        pending.pop(future)
                        found.extend(future.result())
                        if progress_callback is not None:
                            progress_callback(completed, len(chunks), STAGE_COMPARE)
                except KeyboardInterrupt:
                    self._cancel(executor, pending)
                    raise

        found.sort(key=PairScore.key)
        self.run_logger.stats.candidate_pairs = len(found)
        return found

    def _cancel(self, executor: ProcessPoolExecutor, pending: dict[Future, Any]) -> None:
        """Cancel outstanding work after Ctrl+C."""
        self.logger.info("Cancellation requested by user")
        for future in pending:
            future.cancel()

        stats = self.run_logger.stats
        stats.was_cancelled = True
        stats.cancelled_count = len(pending)

        executor.shutdown(wait=True, cancel_futures=True)
