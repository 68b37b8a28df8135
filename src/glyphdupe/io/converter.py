"""Converters from fonttools pen recordings to domain models.

This module handles the conversion between fonttools drawing commands
and our domain models (GlyphOutline, Contour, Point).
"""

from typing import Any

from fontTools.pens.recordingPen import DecomposingRecordingPen

from glyphdupe.domain.contour import Contour, Point, PointType
from glyphdupe.domain.glyph import GlyphOutline


def fonttools_glyph_to_outline(
    name: str,
    fonttools_glyph: Any,
    glyph_set: Any,
    units_per_em: int,
) -> GlyphOutline:
    """Convert a fonttools glyph to a domain GlyphOutline.

    Handles both TrueType (quadratic curves) and OpenType/CFF (cubic curves).
    Components are decomposed through the glyph set, so composite glyphs
    compare by their resolved geometry and variable glyph sets keep their
    location.

    Args:
        name: Name of the glyph
        fonttools_glyph: The fonttools glyph object from a glyph set
        glyph_set: Glyph set used to resolve components
        units_per_em: UPM of the source font

    Returns:
        Domain GlyphOutline
    """
    pen = DecomposingRecordingPen(glyph_set)
    fonttools_glyph.draw(pen)

    return GlyphOutline(
        contours=recording_to_contours(pen.value),
        advance_width=int(getattr(fonttools_glyph, "width", 0) or 0),
        units_per_em=units_per_em,
        name=name,
    )


def recording_to_contours(recording: list[tuple[str, tuple[Any, ...]]]) -> list[Contour]:
    """Convert RecordingPen recording to list of Contour objects.

    The RecordingPen records drawing commands like:
    - ('moveTo', ((x, y),))
    - ('lineTo', ((x, y),))
    - ('qCurveTo', ((x1, y1), (x2, y2), ...))  # Quadratic
    - ('curveTo', ((x1, y1), (x2, y2), (x3, y3)))  # Cubic
    - ('closePath', ())

    A quadratic contour made only of off-curve points is drawn as a single
    ``qCurveTo`` whose last argument is None.

    Args:
        recording: List of drawing commands from RecordingPen

    Returns:
        List of Contour objects
    """
    contours: list[Contour] = []
    current_points: list[Point] = []

    for command, args in recording:
        if command == "moveTo":
            if current_points:
                contours.append(Contour(points=current_points))
                current_points = []

            x, y = args[0]
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "lineTo":
            x, y = args[0]
            current_points.append(Point(x, y, PointType.ON_CURVE))

        elif command == "qCurveTo":
            last = len(args) - 1
            for i, pt in enumerate(args):
                if pt is None:
                    continue
                x, y = pt
                point_type = PointType.ON_CURVE if i == last else PointType.OFF_CURVE_QUAD
                current_points.append(Point(x, y, point_type))

        elif command == "curveTo":
            # Several off-curve pairs may be packed into one call
            *controls, (x3, y3) = args
            for x, y in controls:
                current_points.append(Point(x, y, PointType.OFF_CURVE_CUBIC))
            current_points.append(Point(x3, y3, PointType.ON_CURVE))

        elif command == "closePath" or command == "endPath":
            if current_points:
                contours.append(Contour(points=current_points))
                current_points = []

    if current_points:
        contours.append(Contour(points=current_points))

    return contours
