"""Shared fixtures: synthetic fonts and outlines."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib.tables.TupleVariation import TupleVariation

from glyphdupe.domain import Contour, GlyphOutline, Point

Polygon = list[tuple[int, int]]


def box(x: int, y: int, w: int, h: int) -> Polygon:
    """Counter-clockwise rectangle."""
    return [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]


def shape(seed: int) -> list[Polygon]:
    """A distinct two-contour shape per seed."""
    return [
        box(0, 0, 100 + seed * 7, 700),
        box(200 + seed * 3, 300, 150, 60 + seed),
    ]


def outline_from_polygons(
    polygons: list[Polygon], upm: int = 1000, dx: float = 0, dy: float = 0
) -> GlyphOutline:
    """Domain outline made of straight-line contours."""
    return GlyphOutline(
        contours=[Contour(points=[Point(x + dx, y + dy) for x, y in poly]) for poly in polygons],
        advance_width=600,
        units_per_em=upm,
    )


def build_font(
    path: Path,
    glyphs: dict[str, list[Polygon]],
    upm: int = 1000,
    dx: int = 0,
    heavy: dict[str, list[Polygon]] | None = None,
) -> Path:
    """Write a TrueType font mapping each character to polygon contours.

    Args:
        path: Output file
        glyphs: Character -> contours (an empty list makes a blank glyph)
        upm: Units per em
        dx: Horizontal offset applied to every point
        heavy: Optional wght=900 master (100-400-900 axis) per character;
            each needs the same point structure as its default glyph

    Returns:
        The written path
    """
    names = {ch: f"uni{ord(ch):04X}" for ch in glyphs}
    glyph_order = [".notdef", *names.values()]

    fb = FontBuilder(upm, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({ord(ch): name for ch, name in names.items()})

    glyf = {".notdef": TTGlyphPen(None).glyph()}
    for ch, polygons in glyphs.items():
        pen = TTGlyphPen(None)
        for poly in polygons:
            pen.moveTo((poly[0][0] + dx, poly[0][1]))
            for x, y in poly[1:]:
                pen.lineTo((x + dx, y))
            pen.closePath()
        glyf[names[ch]] = pen.glyph()

    fb.setupGlyf(glyf)
    fb.setupHorizontalMetrics({name: (upm // 2, 0) for name in glyph_order})
    fb.setupHorizontalHeader(ascent=int(upm * 0.8), descent=-int(upm * 0.2))
    fb.setupNameTable({"familyName": path.stem, "styleName": "Regular"})
    if heavy:
        fb.setupFvar([("wght", 100, 400, 900, "Weight")], [])
        fb.setupGvar(
            {names[ch]: [_wght_variation(glyphs[ch], polys)] for ch, polys in heavy.items()}
        )
    fb.setupOS2()
    fb.setupPost()
    fb.save(str(path))
    return path


def _wght_variation(default: list[Polygon], heavy: list[Polygon]) -> TupleVariation:
    """Deltas moving the default outline to the heavy master at wght=900."""
    deltas: list[tuple[int, int] | None] = [
        (hx - x, hy - y)
        for poly, heavy_poly in zip(default, heavy, strict=True)
        for (x, y), (hx, hy) in zip(poly, heavy_poly, strict=True)
    ]
    # Phantom points keep metrics unchanged
    deltas.extend([(0, 0)] * 4)
    return TupleVariation({"wght": (0.0, 1.0, 1.0)}, deltas)


FontFactory = Callable[..., Path]


@pytest.fixture
def font_factory(tmp_path: Path) -> FontFactory:
    """Build fonts into a temporary directory.

    Call as ``font_factory("a.ttf", glyphs, upm=1000, dx=0, heavy=None)``.
    """

    def factory(name: str, glyphs: dict[str, list[Polygon]], **kwargs: Any) -> Path:
        return build_font(tmp_path / name, glyphs, **kwargs)

    return factory


@pytest.fixture
def probe_text() -> str:
    return "abcdefghij"


@pytest.fixture
def full_glyphs(probe_text: str) -> dict[str, list[Polygon]]:
    """A distinct shape for every probe character."""
    return {ch: shape(i) for i, ch in enumerate(probe_text)}
