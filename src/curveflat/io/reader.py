"""Font reader for loading TTF/OTF fonts.

This module provides the FontReader class for loading font files and
drawing glyph outlines into fontTools pens.
"""

from pathlib import Path
from typing import Any

from fontTools.ttLib import TTFont, TTLibError

from curveflat.exceptions import FontLoadError, GlyphNotFoundError


class FontReader:
    """Loads TTF/OTF fonts and draws their glyphs.

    Example:
        with FontReader(Path("font.otf")) as reader:
            pen = RecordingPen()
            reader.draw_glyph("a", FlatteningPen(pen))
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = Path(font_path)
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If font file is invalid or cannot be parsed
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._font = TTFont(str(self._font_path))
        except (TTLibError, OSError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'OpenType' for CFF-flavoured fonts (cubic outlines), 'TrueType'
            otherwise (quadratic outlines)

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font()["maxp"].numGlyphs

    def glyph_names(self) -> list[str]:
        """Return glyph names in font order.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return list(self._require_font().getGlyphOrder())

    def glyph_set(self) -> Any:
        """Return the font's glyph set, for decomposing components.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        return self._require_font().getGlyphSet()

    def draw_glyph(self, name: str, pen: Any) -> None:
        """Draw a glyph outline into a pen.

        Args:
            name: Glyph name
            pen: Any fontTools segment pen

        Raises:
            RuntimeError: If font has not been loaded yet
            GlyphNotFoundError: If the font has no glyph with this name
        """
        glyph_set = self.glyph_set()
        if name not in glyph_set:
            raise GlyphNotFoundError(name)
        glyph_set[name].draw(pen)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
