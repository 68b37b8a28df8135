"""Expansion of command-line paths into font files.

Directories are walked for font files. A Google Fonts repository checkout
can also be scanned, picking one exemplar file per family directory.
"""

from collections.abc import Iterable
from pathlib import Path

import structlog

from glyphdupe.exceptions import FontDiscoveryError

FONT_SUFFIXES = frozenset({".ttf", ".otf", ".ttc", ".otc"})

logger = structlog.get_logger("glyphdupe.discovery")


def is_font_file(path: Path) -> bool:
    return path.is_file() and path.suffix.lower() in FONT_SUFFIXES


def expand_paths(paths: Iterable[Path]) -> tuple[list[Path], list[FontDiscoveryError]]:
    """Expand files and directories into a sorted, de-duplicated font list.

    Args:
        paths: Files or directories given by the user

    Returns:
        Tuple of (font paths, problems for paths that could not be used)
    """
    fonts: set[Path] = set()
    problems: list[FontDiscoveryError] = []

    for path in paths:
        if path.is_dir():
            found = [p for p in path.rglob("*") if is_font_file(p)]
            if not found:
                logger.warning("No fonts in directory", path=str(path))
            fonts.update(found)
        elif path.is_file():
            fonts.add(path)
        else:
            problems.append(FontDiscoveryError(str(path), "not a file or directory"))

    return sorted(fonts), problems


def pick_exemplar(font_files: list[Path]) -> Path | None:
    """Pick the font that represents a family directory.

    Italics are ignored. A lone remaining file (the usual variable font
    case) wins; otherwise the ``-Regular`` file is used.
    """
    upright = sorted(f for f in font_files if "-Italic" not in f.name)
    if len(upright) == 1:
        return upright[0]
    for candidate in upright:
        if "-Regular" in candidate.name:
            return candidate
    return None


def google_fonts_exemplars(root: Path) -> list[Path]:
    """Find one exemplar font per family in a Google Fonts checkout.

    Family directories are those holding a ``METADATA.pb`` file.

    Args:
        root: Repository root, e.g. a clone of github.com/google/fonts

    Returns:
        Sorted exemplar font paths

    Raises:
        FontDiscoveryError: If root is not a directory
    """
    if not root.is_dir():
        raise FontDiscoveryError(str(root), "not a directory")

    exemplars: list[Path] = []
    for metadata_file in sorted(root.glob("**/METADATA.pb")):
        family_dir = metadata_file.parent
        font_files = [
            f for f in family_dir.iterdir() if f.is_file() and f.suffix.lower() in {".ttf", ".otf"}
        ]
        exemplar = pick_exemplar(font_files)
        if exemplar is None:
            logger.warning("Unable to identify an exemplar", family_dir=str(family_dir))
            continue
        logger.debug("Picked exemplar", path=str(exemplar))
        exemplars.append(exemplar)

    return exemplars
