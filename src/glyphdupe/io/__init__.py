"""Font I/O layer for glyphdupe.

This module handles reading font files using fonttools. It provides a
clean abstraction layer between fonttools and the domain models, so the
comparison core only ever sees the GlyphSource capability.

Key responsibilities:
- Load TTF/OTF/TTC fonts (including variable fonts at a location)
- Resolve codepoints to domain GlyphOutline models
- Expand directories and Google Fonts checkouts into font lists

Key classes:
- GlyphSource: Protocol for codepoint -> outline lookup
- FontReader: fonttools-backed GlyphSource
"""

from glyphdupe.io.discovery import expand_paths, google_fonts_exemplars
from glyphdupe.io.reader import FontReader, GlyphSource, probe_outlines

__all__ = [
    "FontReader",
    "GlyphSource",
    "expand_paths",
    "google_fonts_exemplars",
    "probe_outlines",
]
