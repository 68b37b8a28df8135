"""Core geometric types for outline representation.

This module defines the geometric types glyph outlines are built from:
- Point: A 2D point with curve type information
- PointType: Enum for point type on a curve
- Contour: A closed, cyclic sequence of points
"""

from dataclasses import dataclass
from enum import Enum


class PointType(Enum):
    """Point type on a contour.

    Points can be:
    - ON_CURVE: Point on the actual curve
    - OFF_CURVE_QUAD: Quadratic Bezier control point (TrueType)
    - OFF_CURVE_CUBIC: Cubic Bezier control point (PostScript/CFF)

    Values are stable integers because they end up inside canonical
    outlines, which must sort and compare deterministically.
    """

    ON_CURVE = 0
    OFF_CURVE_QUAD = 1
    OFF_CURVE_CUBIC = 2


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space with curve metadata.

    Attributes:
        x: X coordinate in font units
        y: Y coordinate in font units
        point_type: Type of point (on-curve or control point)
    """

    x: float
    y: float
    point_type: PointType = PointType.ON_CURVE


@dataclass
class Contour:
    """A closed contour.

    The point list is cyclic: the last point connects back to the first.

    Attributes:
        points: List of points forming the contour
    """

    points: list[Point]
