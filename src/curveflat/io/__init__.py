"""Font I/O layer for curveflat.

This module connects the subdivision engine to fontTools: pens that
rewrite curve segments while a glyph is drawn, and a reader that loads
font files and draws their glyphs.

Key classes:
- FontReader: Load fonts and draw glyphs into pens
- FlatteningPen: Replace curve segments with line segments
- QuadraticReductionPen: Replace cubic segments with quadratic chains
"""

from curveflat.io.pens import FlatteningPen, QuadraticReductionPen
from curveflat.io.reader import FontReader

__all__ = [
    "FlatteningPen",
    "FontReader",
    "QuadraticReductionPen",
]
