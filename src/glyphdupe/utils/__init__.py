"""Utility functions for glyphdupe.

This module provides:

- Logging setup and configuration
- Run statistics and progress logging
"""

from glyphdupe.utils.logging import (
    ProcessingStats,
    RunLogger,
    configure_logging,
)

__all__ = [
    "ProcessingStats",
    "RunLogger",
    "configure_logging",
]
