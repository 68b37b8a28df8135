"""Pairwise comparison of fonts over the probe set.

Comparing two CanonicalOutline values is cheap but comparing them for every
pair of fonts in a large corpus is not. The OutlineIndex interns each
distinct canonical outline per probe codepoint into a small integer, so a
font becomes a tuple of ids (its FontTable) and a pair comparison is a
single pass over two integer tuples.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from glyphdupe.core.canonical import CanonicalOutline
from glyphdupe.domain import PairScore, ProbeSet

ABSENT_ID = -1


def count_matches(a: Sequence[int], b: Sequence[int]) -> int:
    """Count positions where both tables hold the same present outline."""
    return sum(1 for x, y in zip(a, b) if x == y and x != ABSENT_ID)


@dataclass(frozen=True, slots=True)
class FontTable:
    """A font's outline ids across the probe set.

    Attributes:
        path: Font path
        ids: Outline id per probe position, ABSENT_ID where the glyph is missing
    """

    path: Path
    ids: tuple[int, ...]

    @property
    def present_count(self) -> int:
        return sum(1 for i in self.ids if i != ABSENT_ID)


class OutlineIndex:
    """Interns canonical outlines of many fonts for fast comparison.

    Ids are assigned in the order fonts are added; add fonts in a stable
    order (e.g. sorted paths) for reproducible ids.

    Example:
        index = OutlineIndex(probe)
        index.add(path, [canonicalizer.canonicalize(o) for o in outlines])
    """

    def __init__(self, probe: ProbeSet) -> None:
        self.probe = probe
        self._ids: list[dict[CanonicalOutline, int]] = [{} for _ in range(len(probe))]
        self._variants: list[list[CanonicalOutline]] = [[] for _ in range(len(probe))]
        self._tables: dict[Path, FontTable] = {}

    def add(self, path: Path, outlines: Sequence[CanonicalOutline | None]) -> FontTable:
        """Intern one font's canonical outlines, in probe order.

        Raises:
            ValueError: If the outline count differs from the probe size or
                the path was already added
        """
        if len(outlines) != len(self.probe):
            raise ValueError(
                f"Expected {len(self.probe)} outlines for {path}, got {len(outlines)}"
            )
        if path in self._tables:
            raise ValueError(f"Font already indexed: {path}")

        ids: list[int] = []
        for position, outline in enumerate(outlines):
            if outline is None:
                ids.append(ABSENT_ID)
                continue
            known = self._ids[position]
            outline_id = known.get(outline)
            if outline_id is None:
                outline_id = len(self._variants[position])
                known[outline] = outline_id
                self._variants[position].append(outline)
            ids.append(outline_id)

        table = FontTable(path=path, ids=tuple(ids))
        self._tables[path] = table
        return table

    def table(self, path: Path) -> FontTable:
        return self._tables[path]

    @property
    def paths(self) -> list[Path]:
        """Indexed paths in sorted order."""
        return sorted(self._tables, key=str)

    def tables(self) -> list[FontTable]:
        """Font tables in sorted path order."""
        return [self._tables[p] for p in self.paths]

    def variants(self, position: int) -> list[CanonicalOutline]:
        """Distinct canonical outlines seen at a probe position, by id."""
        return list(self._variants[position])

    def outline(self, path: Path, position: int) -> CanonicalOutline | None:
        outline_id = self._tables[path].ids[position]
        if outline_id == ABSENT_ID:
            return None
        return self._variants[position][outline_id]

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, path: object) -> bool:
        return path in self._tables


class PairwiseComparator:
    """Scores agreement between fonts.

    A probe codepoint counts only when both fonts have a glyph for it and
    the canonical outlines are equal; two fonts both lacking a glyph do not
    match. Scores are symmetric and the pair is reported in path order.

    The comparator holds only the font tables and the probe set, so it can
    be shipped to worker processes once and asked for rows of the pair
    matrix there.

    Example:
        comparator = PairwiseComparator.from_index(index)
        scores = comparator.compare_all(min_matches=8)
    """

    def __init__(self, tables: Sequence[FontTable], probe: ProbeSet) -> None:
        self.tables = sorted(tables, key=lambda t: str(t.path))
        self.probe = probe
        self._by_path = {table.path: table for table in self.tables}

    @classmethod
    def from_index(cls, index: OutlineIndex) -> "PairwiseComparator":
        return cls(index.tables(), index.probe)

    @property
    def total(self) -> int:
        return len(self.probe)

    def __len__(self) -> int:
        return len(self.tables)

    def compare(self, path_a: Path, path_b: Path) -> PairScore:
        """Score two fonts.

        Raises:
            KeyError: If either font is unknown
        """
        if str(path_b) < str(path_a):
            path_a, path_b = path_b, path_a
        matches = count_matches(self._by_path[path_a].ids, self._by_path[path_b].ids)
        return PairScore(path_a=path_a, path_b=path_b, matches=matches, total=self.total)

    def match_rows(self, rows: Iterable[int], min_matches: int = 0) -> list[PairScore]:
        """Score each row font against every later font.

        Args:
            rows: Row indices into the path-sorted tables
            min_matches: Skip pairs scoring below this

        Returns:
            PairScore for each qualifying pair, in sorted path order
        """
        found: list[PairScore] = []
        for i in rows:
            left = self.tables[i]
            for right in self.tables[i + 1 :]:
                score = self.compare(left.path, right.path)
                if score.matches >= min_matches:
                    found.append(score)
        return found

    def compare_all(self, min_matches: int = 0) -> list[PairScore]:
        """Score every unordered pair of distinct fonts, serially."""
        return self.match_rows(range(len(self.tables)), min_matches)
