"""Command-line interface for glyphdupe.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Progress bars for canonicalization and comparison
- Verbose/quiet output modes
- Glyph and group dumps for diagnosing matches
- Plain, reproducible report on stdout
"""

from glyphdupe.cli.app import cli, main

__all__ = ["cli", "main"]
