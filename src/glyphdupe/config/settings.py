"""Configuration settings for glyphdupe."""

import math
from fractions import Fraction
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from glyphdupe.domain.probe import DEFAULT_PROBE_STRING, ProbeSet
from glyphdupe.exceptions import ConfigurationError

LOG_LEVEL_PATTERN = r"(?i)^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$"


class CanonicalConfig(BaseModel):
    """Configuration for outline canonicalization.

    The grid is specified at the reference UPM and scaled along with the
    outline when UPM normalization is on.
    """

    grid: float = Field(
        default=1.0,
        gt=0.0,
        le=100.0,
        description="Quantization grid in font units (at reference UPM)",
    )
    reference_upm: int = Field(
        default=1000,
        ge=16,
        le=16384,
        description="UPM every outline is scaled to before quantizing",
    )
    normalize_upm: bool = Field(
        default=True,
        description="Scale outlines to the reference UPM",
    )

    def scale_for(self, upm: int) -> float:
        """Scale factor taking coordinates at ``upm`` to the reference UPM.

        Args:
            upm: The actual UPM of the font

        Returns:
            Multiplier for coordinates (1.0 when normalization is off)
        """
        if not self.normalize_upm or upm <= 0 or upm == self.reference_upm:
            return 1.0
        return self.reference_upm / upm


class MatchConfig(BaseModel):
    """Configuration for deciding what counts as a match."""

    match_pct: float = Field(
        default=80.0,
        gt=0.0,
        le=100.0,
        description="Percentage of probe codepoints that must match",
    )

    def min_matches(self, total: int) -> int:
        """Smallest match count that meets the threshold for ``total`` probes."""
        return math.ceil(Fraction(str(self.match_pct)) * total / 100)


class ProbeConfig(BaseModel):
    """Where the probe codepoints come from."""

    test_string: str = Field(
        default=DEFAULT_PROBE_STRING,
        description="Characters to compare",
    )
    test_nam: Path | None = Field(
        default=None,
        description=".nam file listing codepoints; overrides test_string",
    )

    def build_probe_set(self) -> ProbeSet:
        """Build the run's probe set.

        Raises:
            ConfigurationError: If the probe set is empty or invalid
        """
        if self.test_nam is not None:
            return ProbeSet.from_nam(self.test_nam)
        return ProbeSet.from_string(self.test_string)


class FontConfig(BaseModel):
    """How glyph outlines are pulled from fonts."""

    location: dict[str, float] = Field(
        default_factory=dict,
        description="Variable font user-space location (axis tag -> value); empty = default",
    )


class ProcessingConfig(BaseModel):
    """Configuration for parallel processing."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker processes (None = auto, 1 = no pool)",
    )
    chunk_size: int = Field(
        default=64,
        ge=1,
        description="Rows of the pair matrix handed to a worker at once",
    )


class DumpConfig(BaseModel):
    """Diagnostic output settings."""

    dump_glyphs: bool = Field(
        default=False,
        description="Write per-codepoint SVGs and an outline listing",
    )
    dump_groups: bool = Field(
        default=False,
        description="List shared codepoints of each reported group",
    )
    working_dir: Path = Field(
        default=Path("build"),
        description="Directory for dump files",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        pattern=LOG_LEVEL_PATTERN,
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        pattern=LOG_LEVEL_PATTERN,
        description="File log level (more verbose)",
    )


class GlyphDupeSettings(BaseModel):
    """Main application settings."""

    canonical: CanonicalConfig = Field(default_factory=CanonicalConfig)
    match: MatchConfig = Field(default_factory=MatchConfig)
    probe: ProbeConfig = Field(default_factory=ProbeConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    dump: DumpConfig = Field(default_factory=DumpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def build_settings(**sections: Any) -> GlyphDupeSettings:
    """Build settings from plain section dictionaries.

    Example:
        build_settings(match={"match_pct": 60}, canonical={"grid": 2.0})

    Raises:
        ConfigurationError: If any value fails validation
    """
    try:
        return GlyphDupeSettings.model_validate(sections)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e
