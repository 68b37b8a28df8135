"""Probe set: the codepoints a run compares.

The probe set stands in for "the glyphs that matter". Its size is the
denominator of every score in a run, so it is built once and never
changed afterwards.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from glyphdupe.exceptions import ConfigurationError

# Reduced GF Latin Core: letters, digits and ASCII punctuation.
DEFAULT_PROBE_STRING = (
    "abcdefghijklmnopqrstuvwxyz"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "1234567890"
    "!?#$%&'()*+,-./:;<=>[\\]^_{|}"
)

_MAX_CODEPOINT = 0x10FFFF

logger = structlog.get_logger("glyphdupe.probe")


def _is_scalar_value(codepoint: int) -> bool:
    return 0 <= codepoint <= _MAX_CODEPOINT and not 0xD800 <= codepoint <= 0xDFFF


def parse_nam_line(line: str) -> int | None:
    """Parse one line of a Google Fonts ``.nam`` file.

    Lines look like ``0x0041 LATIN CAPITAL LETTER A``; ``#`` starts a comment.

    Args:
        line: Raw line from the file

    Returns:
        The codepoint, or None for blank, comment-only or malformed lines

    Raises:
        ConfigurationError: If the line has a 0x prefix but no valid codepoint
    """
    raw = line.split("#", 1)[0].strip()
    if not raw:
        return None
    if not raw.startswith("0x"):
        logger.warning("Invalid nam line", line=line.rstrip("\n"))
        return None

    token = raw[2:].split(maxsplit=1)[0] if raw[2:] else ""
    try:
        codepoint = int(token, 16)
    except ValueError:
        raise ConfigurationError(f"Bad codepoint in nam line: {line.strip()!r}") from None

    if not _is_scalar_value(codepoint):
        raise ConfigurationError(f"Not a Unicode scalar value: 0x{codepoint:04X}")
    return codepoint


class ProbeSet:
    """Ordered, de-duplicated, immutable sequence of codepoints.

    Order is kept as first seen so output is reproducible; it carries no
    meaning for scoring.

    Example:
        probe = ProbeSet.from_string("abcab")
        len(probe)  # 3
    """

    __slots__ = ("_codepoints", "_positions")

    def __init__(self, codepoints: Iterable[int]) -> None:
        """Build a probe set.

        Args:
            codepoints: Codepoints in preferred order, duplicates allowed

        Raises:
            ConfigurationError: If no codepoints remain or one is invalid
        """
        unique: dict[int, None] = {}
        for codepoint in codepoints:
            if not _is_scalar_value(codepoint):
                raise ConfigurationError(f"Not a Unicode scalar value: {codepoint!r}")
            unique.setdefault(codepoint, None)

        if not unique:
            raise ConfigurationError("Probe set is empty")

        self._codepoints: tuple[int, ...] = tuple(unique)
        self._positions = {cp: i for i, cp in enumerate(self._codepoints)}

    @classmethod
    def from_string(cls, text: str) -> "ProbeSet":
        """Build from the characters of a string."""
        return cls(ord(ch) for ch in text)

    @classmethod
    def from_nam(cls, path: Path) -> "ProbeSet":
        """Build from a ``.nam`` codepoint list.

        Raises:
            ConfigurationError: If the file cannot be read or holds no codepoints
        """
        try:
            lines = path.read_text(encoding="utf-8").splitlines()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Unable to read nam file '{path}': {e}") from e

        return cls(cp for cp in map(parse_nam_line, lines) if cp is not None)

    @property
    def codepoints(self) -> tuple[int, ...]:
        return self._codepoints

    def characters(self) -> str:
        """Probe codepoints as a string, in probe order."""
        return "".join(chr(cp) for cp in self._codepoints)

    def index_of(self, codepoint: int) -> int:
        """Position of a codepoint in the probe order.

        Raises:
            KeyError: If the codepoint is not part of the probe set
        """
        return self._positions[codepoint]

    def __len__(self) -> int:
        return len(self._codepoints)

    def __iter__(self) -> Iterator[int]:
        return iter(self._codepoints)

    def __contains__(self, codepoint: object) -> bool:
        return codepoint in self._positions

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProbeSet):
            return NotImplemented
        return self._codepoints == other._codepoints

    def __hash__(self) -> int:
        return hash(self._codepoints)

    def __repr__(self) -> str:
        return f"ProbeSet({self.characters()!r})"

    def __getstate__(self) -> tuple[int, ...]:
        return self._codepoints

    def __setstate__(self, state: tuple[int, ...]) -> None:
        self._codepoints = state
        self._positions = {cp: i for i, cp in enumerate(state)}
