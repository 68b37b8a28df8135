"""glyphdupe - Find fonts that share copied glyph artwork.

glyphdupe is a CLI tool that compares the outlines of a fixed set of probe
characters across many font files and groups the files whose glyphs are
identical after normalization. It is meant for maintainers of large font
collections who need to spot duplicated or derivative glyph sets.

Example:
    $ glyphdupe fonts/ --match-pct 80

This prints every group of fonts where at least 80% of the probe glyphs
have identical canonical outlines across all members.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
