"""Core comparison algorithms for glyphdupe.

This module contains the core algorithms for:

- Outline canonicalization (position, order and winding independent form)
- Pairwise font comparison over the probe set
- Grouping fonts by all-members agreement
- Parallel orchestration of a run
- Diagnostic glyph dumps

The canonicalization and comparison functions are pure and safe for use in
worker processes; only the grouping step mutates shared state and it runs
single-threaded in the main process.

Key classes:
- OutlineCanonicalizer: Turns raw outlines into CanonicalOutline values
- OutlineIndex: Interns canonical outlines into per-font id tables
- PairwiseComparator: Scores agreement between two fonts
- GroupEngine: Merges fonts into groups
- DuplicateFinder: Runs the whole pipeline
"""

from glyphdupe.core.canonical import CanonicalOutline, OutlineCanonicalizer
from glyphdupe.core.comparator import (
    ABSENT_ID,
    FontTable,
    OutlineIndex,
    PairwiseComparator,
    count_matches,
)
from glyphdupe.core.dump import write_glyph_dump
from glyphdupe.core.grouping import GroupEngine, GroupingResult
from glyphdupe.core.processor import (
    DuplicateFinder,
    RunResult,
    canonicalize_font,
    compare_rows,
)

__all__ = [
    "ABSENT_ID",
    # Canonicalization
    "CanonicalOutline",
    "OutlineCanonicalizer",
    # Comparison
    "FontTable",
    "OutlineIndex",
    "PairwiseComparator",
    "count_matches",
    # Grouping
    "GroupEngine",
    "GroupingResult",
    # Processing
    "DuplicateFinder",
    "RunResult",
    "canonicalize_font",
    "compare_rows",
    # Diagnostics
    "write_glyph_dump",
]
