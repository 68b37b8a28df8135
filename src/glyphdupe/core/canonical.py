"""Outline canonicalization.

Copying a glyph between fonts tends to preserve its geometry but not its
representation: the glyph moves with its side bearings, contours get
reordered, start points and winding flip, coordinates pick up float noise
from instancing or UPM conversion. Canonicalization strips all of that so
two copies of the same shape compare equal with plain ``==``.

Steps, in order:
1. Absent glyphs stay absent (None); blank glyphs become an empty outline.
2. Scale to the reference UPM (optional).
3. Translate so the control box starts at the origin.
4. Quantize coordinates to the grid.
5. Per contour: drop repeated points, orient counter-clockwise, rotate to
   the smallest on-curve start point.
6. Sort contours.
"""

from dataclasses import dataclass

from glyphdupe.config import CanonicalConfig
from glyphdupe.domain import GlyphOutline, PointType

# (x, y, point type value), coordinates in grid steps
CanonicalPoint = tuple[int, int, int]
CanonicalContour = tuple[CanonicalPoint, ...]

_ON_CURVE = PointType.ON_CURVE.value


@dataclass(frozen=True, slots=True)
class CanonicalOutline:
    """Comparison-ready glyph geometry.

    Equality and hashing are structural. ``grid`` records the step the
    integer coordinates are expressed in, so outlines quantized with
    different grids never compare equal.

    Attributes:
        contours: Canonical contours in sorted order
        grid: Quantization step in reference units
    """

    contours: tuple[CanonicalContour, ...]
    grid: float = 1.0

    def is_empty(self) -> bool:
        return not self.contours

    @property
    def point_count(self) -> int:
        return sum(len(c) for c in self.contours)


def _signed_area(points: list[CanonicalPoint]) -> int:
    """Twice the signed area; exact on integer coordinates."""
    n = len(points)
    if n < 3:
        return 0
    area = 0
    for i in range(n):
        x1, y1, _ = points[i]
        x2, y2, _ = points[(i + 1) % n]
        area += x1 * y2 - x2 * y1
    return area


def _drop_repeats(points: list[CanonicalPoint]) -> list[CanonicalPoint]:
    """Remove zero-length on-curve steps, including an explicit closing point."""
    result: list[CanonicalPoint] = []
    for pt in points:
        if result and pt == result[-1] and pt[2] == _ON_CURVE:
            continue
        result.append(pt)
    while len(result) > 1 and result[-1] == result[0] and result[0][2] == _ON_CURVE:
        result.pop()
    return result


def _min_rotation(points: list[CanonicalPoint]) -> CanonicalContour:
    """Rotate a cyclic contour to start at its smallest on-curve point."""
    pool = [i for i, pt in enumerate(points) if pt[2] == _ON_CURVE] or list(range(len(points)))
    start_xy = min(points[i][:2] for i in pool)
    candidates = [i for i in pool if points[i][:2] == start_xy]
    return min(tuple(points[i:] + points[:i]) for i in candidates)


def canonical_contour(points: list[CanonicalPoint]) -> CanonicalContour:
    """Orientation- and start-independent form of one quantized contour.

    Counter-clockwise contours are kept, clockwise ones reversed. When the
    area is zero both orientations are tried and the smaller form wins.
    """
    points = _drop_repeats(points)
    if not points:
        return ()

    area = _signed_area(points)
    if area > 0:
        orientations = [points]
    elif area < 0:
        orientations = [points[::-1]]
    else:
        orientations = [points, points[::-1]]

    return min(_min_rotation(p) for p in orientations)


def _contour_key(contour: CanonicalContour) -> tuple[tuple[int, int, int, int], CanonicalContour]:
    xs = [pt[0] for pt in contour]
    ys = [pt[1] for pt in contour]
    return ((min(xs), min(ys), max(xs), max(ys)), contour)


class OutlineCanonicalizer:
    """Turns raw glyph outlines into CanonicalOutline values.

    Stateless apart from its configuration; safe to use in worker processes.

    Example:
        canonicalizer = OutlineCanonicalizer(CanonicalConfig(grid=2.0))
        canonical = canonicalizer.canonicalize(outline)
    """

    def __init__(self, config: CanonicalConfig | None = None) -> None:
        self.config = config or CanonicalConfig()

    def canonicalize(self, outline: GlyphOutline | None) -> CanonicalOutline | None:
        """Canonicalize an outline.

        Args:
            outline: Raw outline, or None when the font lacks the glyph

        Returns:
            CanonicalOutline, or None for an absent glyph
        """
        if outline is None:
            return None

        grid = self.config.grid
        contours = [c.points for c in outline.contours if c.points]
        if not contours:
            return CanonicalOutline(contours=(), grid=grid)

        scale = self.config.scale_for(outline.units_per_em)
        min_x = min(p.x for points in contours for p in points)
        min_y = min(p.y for points in contours for p in points)

        canonical: list[CanonicalContour] = []
        for points in contours:
            quantized = [
                (
                    round((p.x - min_x) * scale / grid),
                    round((p.y - min_y) * scale / grid),
                    p.point_type.value,
                )
                for p in points
            ]
            contour = canonical_contour(quantized)
            if contour:
                canonical.append(contour)

        canonical.sort(key=_contour_key)
        return CanonicalOutline(contours=tuple(canonical), grid=grid)
