"""Exception hierarchy for curveflat."""


class CurveflatError(Exception):
    """Base exception for all curveflat errors."""

    pass


class InvalidArgumentError(CurveflatError, ValueError):
    """A caller passed an argument outside the operation's contract."""

    pass


class MissingCurveError(InvalidArgumentError):
    """A curve was required but None was given."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"{operation} requires a curve, got None")


class ParameterOutOfRangeError(InvalidArgumentError):
    """A split parameter fell outside its valid range."""

    def __init__(self, t: float, valid_range: str = "[0, 1]") -> None:
        self.t = t
        self.valid_range = valid_range
        super().__init__(f"Split parameter {t!r} is outside {valid_range}")


class InvalidCurveError(InvalidArgumentError):
    """Curve data could not be interpreted (wrong number of points, etc.)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class FontError(CurveflatError):
    """Errors related to reading fonts."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")
