"""Glyph outline as read from a font.

A GlyphOutline is the raw geometry a GlyphSource returns for one
codepoint. It is not yet comparable across fonts; see
``glyphdupe.core.canonical`` for that.
"""

from dataclasses import dataclass, field

from glyphdupe.domain.contour import Contour


@dataclass
class GlyphOutline:
    """Contours of a single glyph plus the metrics carried for dumps.

    Attributes:
        contours: Contours forming the glyph outline
        advance_width: Horizontal advance in font units (not used for matching)
        units_per_em: UPM of the font the outline came from
        name: Glyph name in the source font, if known
    """

    contours: list[Contour] = field(default_factory=list)
    advance_width: int = 0
    units_per_em: int = 1000
    name: str | None = None

    def is_empty(self) -> bool:
        """Check if glyph has no outlines (space and other blank glyphs)."""
        return not any(contour.points for contour in self.contours)

    @property
    def point_count(self) -> int:
        return sum(len(contour.points) for contour in self.contours)
