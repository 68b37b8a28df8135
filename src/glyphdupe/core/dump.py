"""Diagnostic glyph dumps.

Writes, for every probe codepoint, an SVG overlaying the distinct canonical
outlines seen across the run, plus a tab-separated listing of each font's
raw and canonical outline per codepoint. Nothing here affects scoring.
"""

from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path

from glyphdupe.core.canonical import CanonicalOutline
from glyphdupe.core.comparator import ABSENT_ID, OutlineIndex
from glyphdupe.domain import GlyphOutline, PointType

# (x, y, point type value) in font units
_DrawPoint = tuple[float, float, int]

_ON = PointType.ON_CURVE.value
_QUAD = PointType.OFF_CURVE_QUAD.value
_CUBIC = PointType.OFF_CURVE_CUBIC.value


def _fmt(value: float) -> str:
    # + 0.0 turns -0.0 into 0.0
    return f"{value + 0.0:g}"


def _xy(x: float, y: float) -> str:
    # SVG y grows downwards
    return f"{_fmt(x)} {_fmt(-y)}"


def contour_to_svg(points: Sequence[_DrawPoint]) -> str:
    """SVG path data for one closed contour.

    Quadratic runs use implied on-curve midpoints as in TrueType; a contour
    of only quadratic control points starts at the midpoint of its last and
    first points.
    """
    if not points:
        return ""

    pts = list(points)
    if not any(p[2] == _ON for p in pts):
        (x0, y0, _), (x1, y1, _) = pts[-1], pts[0]
        start = ((x0 + x1) / 2, (y0 + y1) / 2, _ON)
    else:
        while pts[0][2] != _ON:
            pts = pts[1:] + pts[:1]
        start = pts[0]
        pts = pts[1:]

    parts = [f"M{_xy(start[0], start[1])}"]
    pending: list[_DrawPoint] = []
    for x, y, kind in [*pts, start]:
        if kind != _ON:
            pending.append((x, y, kind))
            continue
        if not pending:
            parts.append(f"L{_xy(x, y)}")
        elif pending[0][2] == _CUBIC and len(pending) == 2:
            (ax, ay, _), (bx, by, _) = pending
            parts.append(f"C{_xy(ax, ay)} {_xy(bx, by)} {_xy(x, y)}")
        elif pending[0][2] == _QUAD:
            for (ax, ay, _), (bx, by, _) in zip(pending, pending[1:]):
                parts.append(f"Q{_xy(ax, ay)} {_xy((ax + bx) / 2, (ay + by) / 2)}")
            lx, ly, _ = pending[-1]
            parts.append(f"Q{_xy(lx, ly)} {_xy(x, y)}")
        else:
            for px, py, _ in pending:
                parts.append(f"L{_xy(px, py)}")
            parts.append(f"L{_xy(x, y)}")
        pending = []

    parts.append("Z")
    return " ".join(parts)


def canonical_to_svg(outline: CanonicalOutline) -> str:
    """SVG path data for a canonical outline, in reference units."""
    return " ".join(
        contour_to_svg([(x * outline.grid, y * outline.grid, t) for x, y, t in contour])
        for contour in outline.contours
    )


def raw_to_svg(outline: GlyphOutline) -> str:
    """SVG path data for a raw outline, in the font's own units."""
    return " ".join(
        contour_to_svg([(p.x, p.y, p.point_type.value) for p in contour.points])
        for contour in outline.contours
        if contour.points
    )


def _extent(outlines: Iterable[CanonicalOutline]) -> tuple[float, float]:
    max_x = max_y = 0.0
    for outline in outlines:
        for contour in outline.contours:
            for x, y, _ in contour:
                max_x = max(max_x, x * outline.grid)
                max_y = max(max_y, y * outline.grid)
    return max_x, max_y


def variants_svg(variants: Sequence[CanonicalOutline]) -> str:
    """Overlay of canonical variants, with a marker on each start point."""
    width, height = _extent(variants)
    margin = 0.1 * max(width, height, 1.0)
    marker_radius = max(width, 1.0) * 0.02

    lines = [
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="'
        f'{_fmt(-margin)} {_fmt(-height - margin)} '
        f'{_fmt(width + 2 * margin)} {_fmt(height + 2 * margin)}">'
    ]
    for outline in variants:
        lines.append(f'<path opacity="0.25" d="{canonical_to_svg(outline)}" />')
    for outline in variants:
        for contour in outline.contours[:1]:
            x, y, _ = contour[0]
            lines.append(
                '<circle fill="darkblue" opacity="0.25" '
                f'cx="{_fmt(x * outline.grid)}" cy="{_fmt(-y * outline.grid)}" '
                f'r="{_fmt(marker_radius)}" />'
            )
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def write_glyph_dump(
    working_dir: Path,
    index: OutlineIndex,
    raw_outlines: Mapping[Path, Sequence[str]] | None = None,
) -> list[Path]:
    """Write per-codepoint SVGs and ``outlines.tsv`` into ``working_dir``.

    SVG files are named ``U+XXXX.svg``, or ``U+XXXX-inconsistent.svg`` when
    the fonts disagree on the outline.

    Args:
        working_dir: Output directory, created if missing
        index: Outline index of the run
        raw_outlines: Per font, SVG path data of the raw outline per probe
            position ("" where absent)

    Returns:
        Paths of the files written
    """
    working_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    for position, codepoint in enumerate(index.probe):
        variants = index.variants(position)
        suffix = "-inconsistent" if len(variants) > 1 else ""
        svg_path = working_dir / f"U+{codepoint:04X}{suffix}.svg"
        svg_path.write_text(variants_svg(variants), encoding="utf-8")
        written.append(svg_path)

    raw_outlines = raw_outlines or {}
    rows = ["path\tcodepoint\tvariant\traw\tcanonical"]
    for table in index.tables():
        raw = raw_outlines.get(table.path, ())
        for position, codepoint in enumerate(index.probe):
            outline_id = table.ids[position]
            outline = index.outline(table.path, position)
            rows.append(
                "\t".join(
                    [
                        str(table.path),
                        f"U+{codepoint:04X}",
                        "absent" if outline_id == ABSENT_ID else str(outline_id),
                        raw[position] if position < len(raw) else "",
                        canonical_to_svg(outline) if outline is not None else "",
                    ]
                )
            )

    listing = working_dir / "outlines.tsv"
    listing.write_text("\n".join(rows) + "\n", encoding="utf-8")
    written.append(listing)

    return written
