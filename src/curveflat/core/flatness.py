"""Flatness algorithms.

A flatness algorithm scores how far a curve is from being a straight line.
Scores are zero for a perfectly flat curve and grow with the deviation of the
control points. Each algorithm reports both a plain and a squared score;
`prefers_squared` tells callers which one is cheaper and exact.

Available algorithms:
- RobustConvexHullFlatness: control point distance to the anchor segment
- NaiveConvexHullFlatness: control point distance to the anchor line
- LineDefectFlatness: control point distance to its position on a straight,
  evenly parametrized curve
"""

import math
from typing import Protocol, runtime_checkable

from curveflat.config import CombineStrategy, DistanceMetric, FlatnessAlgorithmType
from curveflat.core.geometry import (
    point_distance,
    point_to_line_sq_dist,
    point_to_point_sq_dist,
    point_to_segment_sq_dist,
)
from curveflat.domain import CubicCurve, Curve, Point


@runtime_checkable
class FlatnessAlgorithm(Protocol):
    """Scores the flatness of quadratic and cubic curves."""

    @property
    def degeneration_robust(self) -> bool:
        """True if a degenerate curve (collinear but doubling back) scores > 0."""
        ...

    @property
    def prefers_squared(self) -> bool:
        """True if `squared_flatness` is the natural score."""
        ...

    def flatness(self, curve: Curve) -> float: ...

    def squared_flatness(self, curve: Curve) -> float: ...


class RobustConvexHullFlatness:
    """Largest distance from a control point to the anchor segment.

    Controls that lie on the anchor line but outside the segment still count,
    so a collinear curve that overshoots its anchors is not considered flat.
    """

    degeneration_robust = True
    prefers_squared = True

    def squared_flatness(self, curve: Curve) -> float:
        return max(
            point_to_segment_sq_dist(control, curve.start, curve.end)
            for control in curve.controls
        )

    def flatness(self, curve: Curve) -> float:
        return math.sqrt(self.squared_flatness(curve))


class NaiveConvexHullFlatness:
    """Largest distance from a control point to the infinite anchor line.

    Cheaper to reason about but blind to collinear overshoot: a curve whose
    controls lie on the anchor line scores zero even if it doubles back.
    """

    degeneration_robust = False
    prefers_squared = True

    def squared_flatness(self, curve: Curve) -> float:
        return max(
            point_to_line_sq_dist(control, curve.start, curve.end) for control in curve.controls
        )

    def flatness(self, curve: Curve) -> float:
        return math.sqrt(self.squared_flatness(curve))


class LineDefectFlatness:
    """Distance of each control point from its ideal straight-line position.

    A straight curve with uniform speed has its quadratic control at the
    anchor midpoint, and its cubic controls at one and two thirds of the
    anchor segment. The defect is the distance to those positions, summed or
    maxed over the two cubic controls.

    Args:
        metric: Point-to-point distance used for each control
        combine: How the two cubic control defects are combined
    """

    degeneration_robust = True

    def __init__(
        self,
        metric: DistanceMetric = DistanceMetric.EUCLIDEAN,
        combine: CombineStrategy = CombineStrategy.SUM,
    ) -> None:
        self.metric = DistanceMetric(metric)
        self.combine = CombineStrategy(combine)

    @property
    def prefers_squared(self) -> bool:
        return self.metric == DistanceMetric.EUCLIDEAN

    @staticmethod
    def _ideal_pairs(curve: Curve) -> list[tuple[Point, Point]]:
        start = curve.start
        end = curve.end
        if isinstance(curve, CubicCurve):
            third = Point((2.0 * start.x + end.x) / 3.0, (2.0 * start.y + end.y) / 3.0)
            two_thirds = Point((start.x + 2.0 * end.x) / 3.0, (start.y + 2.0 * end.y) / 3.0)
            return [(curve.control1, third), (curve.control2, two_thirds)]
        return [(curve.control, start.midpoint(end))]

    def _combine(self, values: list[float]) -> float:
        if self.combine == CombineStrategy.MAX:
            return max(values)
        return sum(values)

    def flatness(self, curve: Curve) -> float:
        pairs = self._ideal_pairs(curve)
        return self._combine([point_distance(p, ideal, self.metric) for p, ideal in pairs])

    def squared_flatness(self, curve: Curve) -> float:
        if self.metric == DistanceMetric.EUCLIDEAN:
            distances = [point_to_point_sq_dist(c, ideal) for c, ideal in self._ideal_pairs(curve)]
        else:
            distances = [
                point_distance(c, ideal, self.metric) ** 2 for c, ideal in self._ideal_pairs(curve)
            ]
        return self._combine(distances)

    def __repr__(self) -> str:
        return f"LineDefectFlatness(metric={self.metric.value!r}, combine={self.combine.value!r})"


def create_flatness_algorithm(
    algorithm: FlatnessAlgorithmType = FlatnessAlgorithmType.ROBUST_CONVEX_HULL,
    metric: DistanceMetric = DistanceMetric.EUCLIDEAN,
    combine: CombineStrategy = CombineStrategy.SUM,
) -> FlatnessAlgorithm:
    """Build a flatness algorithm from its options.

    Args:
        algorithm: Which algorithm to build
        metric: Distance metric (line defect only)
        combine: Combine strategy (line defect only)

    Returns:
        The flatness algorithm instance

    Raises:
        ValueError: If any option is not a known value
    """
    algorithm = FlatnessAlgorithmType(algorithm)
    if algorithm == FlatnessAlgorithmType.ROBUST_CONVEX_HULL:
        return RobustConvexHullFlatness()
    if algorithm == FlatnessAlgorithmType.NAIVE_CONVEX_HULL:
        return NaiveConvexHullFlatness()
    return LineDefectFlatness(metric, combine)
