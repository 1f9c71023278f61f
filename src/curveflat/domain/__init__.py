"""Domain models for curveflat.

This module contains the value types the subdivision engine consumes and
produces. All models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries
- Independent of any rendering or font library

Key classes:
- Point: A 2D point
- Segment: A straight segment (tangents, polyline edges)
- QuadraticCurve / CubicCurve: Bezier curves
- CurvePiece: A curve plus its parameter window on the original curve
- SegmentChain: A daisy-chained sequence of curve pieces covering [0, 1]
"""

from curveflat.domain.chain import CurvePiece, CurveT, SegmentChain
from curveflat.domain.curve import (
    CubicCurve,
    Curve,
    Point,
    QuadraticCurve,
    Segment,
    curve_from_points,
)

__all__: list[str] = [
    # Core types
    "Point",
    "Segment",
    "QuadraticCurve",
    "CubicCurve",
    "Curve",
    "CurveT",
    # Subdivision results
    "CurvePiece",
    "SegmentChain",
    # Helpers
    "curve_from_points",
]
