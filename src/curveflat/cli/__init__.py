"""Command-line interface for curveflat.

This module provides the CLI using Typer with rich output for
readable tables of curve pieces and polylines.

Key features:
- Flatten quadratic and cubic curves given as coordinates
- Reduce cubics to quadratic chains
- Report cubic inflection points
- Summarize flattening and reduction of a font glyph
"""

from curveflat.cli.app import cli, main

__all__ = ["cli", "main"]
