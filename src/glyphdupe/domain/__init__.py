"""Domain models for glyphdupe.

This module contains the domain models representing glyph geometry, the
probe set and comparison results. All models are:

- Immutable where possible (frozen dataclasses, tuples)
- Picklable for inter-process communication (parallel processing)
- Independent of fonttools implementation details

Key classes:
- Point: A 2D point with curve metadata
- Contour: A closed contour
- GlyphOutline: Raw outline of one glyph
- ProbeSet: Codepoints compared in a run
- PairScore: Agreement between two fonts
- Group: Fonts sharing glyph artwork
"""

from glyphdupe.domain.contour import Contour, Point, PointType
from glyphdupe.domain.glyph import GlyphOutline
from glyphdupe.domain.group import Group, PairScore
from glyphdupe.domain.probe import DEFAULT_PROBE_STRING, ProbeSet, parse_nam_line

__all__: list[str] = [
    # Enums
    "PointType",
    # Geometry
    "Point",
    "Contour",
    "GlyphOutline",
    # Probe set
    "DEFAULT_PROBE_STRING",
    "ProbeSet",
    "parse_nam_line",
    # Results
    "PairScore",
    "Group",
]
