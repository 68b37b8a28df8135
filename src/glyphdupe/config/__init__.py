"""Configuration management for glyphdupe.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- CanonicalConfig: Outline normalization settings
- MatchConfig: Match threshold
- ProbeConfig: Probe set source
- FontConfig: Variable font location
- ProcessingConfig: Worker pool settings
- DumpConfig: Diagnostic output settings
- LoggingConfig: Logging settings
- GlyphDupeSettings: Main application settings
"""

from glyphdupe.config.settings import (
    CanonicalConfig,
    DumpConfig,
    FontConfig,
    GlyphDupeSettings,
    LoggingConfig,
    MatchConfig,
    ProbeConfig,
    ProcessingConfig,
    build_settings,
)

__all__ = [
    "CanonicalConfig",
    "DumpConfig",
    "FontConfig",
    "GlyphDupeSettings",
    "LoggingConfig",
    "MatchConfig",
    "ProbeConfig",
    "ProcessingConfig",
    "build_settings",
]
