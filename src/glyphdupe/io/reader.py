"""Font reader for resolving codepoints to glyph outlines.

This module provides the GlyphSource protocol the comparison core
depends on and FontReader, its fonttools-backed implementation.
"""

from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from fontTools.ttLib import TTFont, TTLibError

from glyphdupe.domain.glyph import GlyphOutline
from glyphdupe.exceptions import FontLoadError
from glyphdupe.io.converter import fonttools_glyph_to_outline

COLLECTION_SUFFIXES = frozenset({".ttc", ".otc"})


@runtime_checkable
class GlyphSource(Protocol):
    """Anything that can resolve a codepoint to a glyph outline."""

    @property
    def path(self) -> Path: ...

    @property
    def units_per_em(self) -> int: ...

    def get_outline(self, codepoint: int) -> GlyphOutline | None: ...


class FontReader:
    """Loads TTF/OTF fonts and resolves codepoints to outlines.

    For variable fonts the outlines are taken at ``location`` (user-space
    axis coordinates); axes the font does not have are ignored and missing
    axes stay at their defaults. Without a location the default master is
    used, so every glyph identifier yields exactly one outline.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            outline = reader.get_outline(ord("a"))
    """

    def __init__(self, font_path: Path, location: dict[str, float] | None = None) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the font file
            location: Variable font user-space location, or None for default
        """
        self._font_path = font_path
        self._location = dict(location or {})
        self._font: TTFont | None = None
        self._cmap: dict[int, str] = {}
        self._glyph_set: Any = None

    @property
    def path(self) -> Path:
        return self._font_path

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file is missing or is not a usable font
        """
        if not self._font_path.is_file():
            raise FontLoadError(str(self._font_path), "file not found")

        kwargs: dict[str, Any] = {"lazy": True}
        if self._font_path.suffix.lower() in COLLECTION_SUFFIXES:
            kwargs["fontNumber"] = 0

        try:
            font = TTFont(str(self._font_path), **kwargs)
            cmap = font.getBestCmap()
            if cmap is None:
                raise FontLoadError(str(self._font_path), "no usable cmap")
            location = self._font_location(font)
            glyph_set = font.getGlyphSet(location=location) if location else font.getGlyphSet()
        except FontLoadError:
            raise
        except (TTLibError, OSError, KeyError, ValueError, AssertionError) as e:
            raise FontLoadError(str(self._font_path), str(e) or type(e).__name__) from e

        self._font = font
        self._cmap = cmap
        self._glyph_set = glyph_set

    def _font_location(self, font: TTFont) -> dict[str, float]:
        if not self._location or "fvar" not in font:
            return {}
        tags = {axis.axisTag for axis in font["fvar"].axes}  # type: ignore[attr-defined]
        return {tag: value for tag, value in self._location.items() if tag in tags}

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    def get_outline(self, codepoint: int) -> GlyphOutline | None:
        """Resolve a codepoint to its glyph outline.

        Args:
            codepoint: Unicode scalar value

        Returns:
            The outline, or None if the font does not map the codepoint

        Raises:
            RuntimeError: If font has not been loaded yet
            FontLoadError: If the mapped glyph cannot be drawn
        """
        self._require_font()

        name = self._cmap.get(codepoint)
        if name is None or name not in self._glyph_set:
            return None

        try:
            return fonttools_glyph_to_outline(
                name=name,
                fonttools_glyph=self._glyph_set[name],
                glyph_set=self._glyph_set,
                units_per_em=self.units_per_em,
            )
        except (TTLibError, KeyError, ValueError, IndexError, AssertionError) as e:
            raise FontLoadError(
                str(self._font_path), f"glyph '{name}' (U+{codepoint:04X}): {e}"
            ) from e

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._cmap = {}
            self._glyph_set = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()


def probe_outlines(source: GlyphSource, codepoints: Iterable[int]) -> list[GlyphOutline | None]:
    """Resolve every probe codepoint through a glyph source, in order."""
    return [source.get_outline(codepoint) for codepoint in codepoints]
