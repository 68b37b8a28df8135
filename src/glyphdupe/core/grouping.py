"""Folding pairwise agreement into groups of fonts.

Two groups merge only when every font of the union agrees on enough probe
codepoints. This is stricter than taking the transitive closure of
pairwise matches: A~B and B~C does not put A, B and C together unless the
three of them still share enough identical glyphs.

Merge policy:
- Candidate edges are the pairs meeting the threshold, applied best-first
  (descending matches, then path order).
- Each edge proposes merging the groups its two fonts currently belong to.
  The union's all-members score is recomputed; below threshold the merge
  is rejected.
- A rejected merge leaves both groups as they are, so a font stays with
  the partner it agreed with most, which it joined first.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from glyphdupe.config import MatchConfig
from glyphdupe.core.comparator import ABSENT_ID, OutlineIndex
from glyphdupe.domain import Group, PairScore
from glyphdupe.utils import RunLogger


def merge_signatures(a: tuple[int, ...], b: tuple[int, ...]) -> tuple[int, ...]:
    """Per-position agreement of two signatures; disagreement becomes absent."""
    return tuple(x if x == y else ABSENT_ID for x, y in zip(a, b))


def signature_matches(signature: tuple[int, ...]) -> int:
    return sum(1 for outline_id in signature if outline_id != ABSENT_ID)


@dataclass
class GroupingResult:
    """Final partition of the fonts of a run.

    Attributes:
        groups: Every font in exactly one group, sorted by score then paths
        total: Probe set size
        min_matches: Match count a reportable group needs
        merges: Accepted merges
        rejected_merges: Merges refused by the all-members rule
    """

    groups: list[Group]
    total: int
    min_matches: int
    merges: int = 0
    rejected_merges: int = 0

    def reportable(self) -> list[Group]:
        """Multi-member groups meeting the threshold, in report order."""
        return [g for g in self.groups if g.size > 1 and g.matches >= self.min_matches]

    def group_of(self, path: Path) -> Group:
        """Group containing a font.

        Raises:
            KeyError: If the font is not part of the run
        """
        for group in self.groups:
            if path in group:
                return group
        raise KeyError(path)


class GroupEngine:
    """Merges fonts into disjoint groups by group-wide agreement.

    Example:
        engine = GroupEngine(index, MatchConfig(match_pct=80))
        result = engine.build(comparator.compare_all())
    """

    def __init__(
        self,
        index: OutlineIndex,
        match_config: MatchConfig,
        run_logger: RunLogger | None = None,
    ) -> None:
        self.index = index
        self.match_config = match_config
        self.run_logger = run_logger

    @property
    def total(self) -> int:
        return len(self.index.probe)

    @property
    def min_matches(self) -> int:
        return self.match_config.min_matches(self.total)

    def singleton(self, path: Path) -> Group:
        """One-font group; its score is the number of glyphs it has."""
        ids = self.index.table(path).ids
        return Group(
            members=(path,),
            matches=signature_matches(ids),
            total=self.total,
            signature=ids,
        )

    def union(self, left: Group, right: Group) -> Group:
        """Combine two groups, scoring all members together."""
        signature = merge_signatures(left.signature, right.signature)
        members = tuple(sorted(set(left.members) | set(right.members), key=str))
        return Group(
            members=members,
            matches=signature_matches(signature),
            total=self.total,
            signature=signature,
        )

    def build(self, pair_scores: Iterable[PairScore]) -> GroupingResult:
        """Partition the indexed fonts.

        Args:
            pair_scores: Pair scores; pairs below threshold may be omitted

        Returns:
            GroupingResult covering every indexed font
        """
        limit = self.min_matches
        owner: dict[Path, Group] = {path: self.singleton(path) for path in self.index.paths}

        edges = sorted(
            (s for s in pair_scores if s.matches >= limit),
            key=lambda s: (-s.matches, s.key()),
        )

        merges = 0
        rejected = 0
        for edge in edges:
            left = owner[edge.path_a]
            right = owner[edge.path_b]
            if left.members == right.members:
                continue

            merged = self.union(left, right)
            if merged.matches >= limit:
                for path in merged.members:
                    owner[path] = merged
                merges += 1
                if self.run_logger is not None:
                    self.run_logger.log_merge(merged.members, merged.matches, self.total)
            else:
                rejected += 1
                if self.run_logger is not None:
                    self.run_logger.log_merge_rejected(
                        left.members, right.members, merged.matches, limit
                    )

        unique = {group.members: group for group in owner.values()}
        groups = sorted(unique.values(), key=Group.sort_key)

        return GroupingResult(
            groups=groups,
            total=self.total,
            min_matches=limit,
            merges=merges,
            rejected_merges=rejected,
        )
