"""fontTools pens that flatten or degree-reduce outlines while drawing.

Both pens are filter pens: they receive drawing commands (for example from
`glyph.draw(pen)`), rewrite curve segments, and forward everything to an
output pen.

Example:
    recording = RecordingPen()
    glyph_set[name].draw(FlatteningPen(recording))
    # recording.value now holds only moveTo/lineTo/closePath commands
"""

from typing import Any

from fontTools.pens.basePen import BasePen

from curveflat.core.criteria import SubdivisionCriterion
from curveflat.core.degree_reduction import DEFAULT_PRECISION, iter_adaptive_degree_reduction
from curveflat.core.halving import DEFAULT_MAX_DEPTH, iter_adaptive_halving
from curveflat.domain import CubicCurve, Curve, Point, QuadraticCurve
from curveflat.utils.logging import SubdivisionStats

Coordinate = tuple[float, float]


def _point(pt: Coordinate) -> Point:
    return Point(float(pt[0]), float(pt[1]))


class _FilterBasePen(BasePen):
    """BasePen that forwards path structure to an output pen."""

    def __init__(self, out_pen: Any, glyph_set: Any = None) -> None:
        super().__init__(glyph_set)
        self.out_pen = out_pen
        self.stats = SubdivisionStats()
        self.curves_in = 0

    def _current_point(self) -> Point:
        return _point(self._getCurrentPoint())

    def _moveTo(self, pt: Coordinate) -> None:
        self.out_pen.moveTo(pt)

    def _lineTo(self, pt: Coordinate) -> None:
        self.out_pen.lineTo(pt)

    def _closePath(self) -> None:
        self.out_pen.closePath()

    def _endPath(self) -> None:
        self.out_pen.endPath()


class FlatteningPen(_FilterBasePen):
    """Replaces every curve segment with the lines of its flattened polyline.

    Args:
        out_pen: Pen receiving moveTo/lineTo/closePath/endPath
        criterion: Subdivision criterion (default: robust convex hull at 1e-5)
        max_depth: Maximum halving depth per curve
        glyph_set: Glyph set used to decompose components
    """

    def __init__(
        self,
        out_pen: Any,
        criterion: SubdivisionCriterion | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        glyph_set: Any = None,
    ) -> None:
        super().__init__(out_pen, glyph_set)
        self.criterion = criterion
        self.max_depth = max_depth

    def _flatten_to(self, curve: Curve) -> None:
        self.curves_in += 1
        for piece in iter_adaptive_halving(curve, self.criterion, self.max_depth, self.stats):
            end = piece.curve.end
            self.out_pen.lineTo((end.x, end.y))

    def _curveToOne(self, pt1: Coordinate, pt2: Coordinate, pt3: Coordinate) -> None:
        self._flatten_to(
            CubicCurve(self._current_point(), _point(pt1), _point(pt2), _point(pt3))
        )

    def _qCurveToOne(self, pt1: Coordinate, pt2: Coordinate) -> None:
        self._flatten_to(QuadraticCurve(self._current_point(), _point(pt1), _point(pt2)))


class QuadraticReductionPen(_FilterBasePen):
    """Replaces every cubic segment with a chain of quadratic segments.

    Lines and quadratic segments pass through unchanged.

    Args:
        out_pen: Pen receiving moveTo/lineTo/qCurveTo/closePath/endPath
        precision: Largest accepted deviation from each cubic
        glyph_set: Glyph set used to decompose components
    """

    def __init__(
        self,
        out_pen: Any,
        precision: float = DEFAULT_PRECISION,
        glyph_set: Any = None,
    ) -> None:
        super().__init__(out_pen, glyph_set)
        self.precision = precision

    def _curveToOne(self, pt1: Coordinate, pt2: Coordinate, pt3: Coordinate) -> None:
        self.curves_in += 1
        cubic = CubicCurve(self._current_point(), _point(pt1), _point(pt2), _point(pt3))
        for piece in iter_adaptive_degree_reduction(cubic, self.precision, stats=self.stats):
            quad = piece.curve
            self.out_pen.qCurveTo(quad.control.to_tuple(), quad.end.to_tuple())

    def _qCurveToOne(self, pt1: Coordinate, pt2: Coordinate) -> None:
        self.out_pen.qCurveTo(pt1, pt2)
