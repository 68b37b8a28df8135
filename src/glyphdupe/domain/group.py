"""Scores and groups produced by comparison.

This module defines the result types of a run:
- PairScore: agreement between two fonts
- Group: a set of fonts with their all-members agreement
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PairScore:
    """How many probe codepoints two fonts draw identically.

    Attributes:
        path_a: First font
        path_b: Second font
        matches: Probe codepoints present in both with equal canonical outlines
        total: Probe set size
    """

    path_a: Path
    path_b: Path
    matches: int
    total: int

    @property
    def ratio(self) -> float:
        return self.matches / self.total if self.total else 0.0

    def key(self) -> tuple[str, str]:
        """Order-independent identity of the pair."""
        a, b = str(self.path_a), str(self.path_b)
        return (a, b) if a <= b else (b, a)


@dataclass(frozen=True, slots=True)
class Group:
    """Fonts judged to share glyph artwork.

    ``matches`` counts the probe codepoints where every member maps to the
    same canonical outline. ``signature`` holds, per probe position, the
    agreed outline id or -1 where the members disagree or a glyph is absent.

    Attributes:
        members: Member paths, sorted
        matches: All-members agreement count
        total: Probe set size
        signature: Per-codepoint agreed outline ids
    """

    members: tuple[Path, ...]
    matches: int
    total: int
    signature: tuple[int, ...] = ()

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def ratio(self) -> float:
        return self.matches / self.total if self.total else 0.0

    def sort_key(self) -> tuple[int, tuple[str, ...]]:
        """Descending score, then member paths."""
        return (-self.matches, tuple(str(p) for p in self.members))

    def __contains__(self, path: object) -> bool:
        return path in self.members
