"""Subdivision criteria.

A criterion decides whether a curve piece must be split further. The
adaptive drivers ask it once per piece and stop subdividing as soon as it
answers False.
"""

import math
from typing import Protocol, runtime_checkable

from curveflat.config import (
    CombineStrategy,
    DistanceMetric,
    FlatnessAlgorithmType,
    FlatteningConfig,
)
from curveflat.core.flatness import (
    FlatnessAlgorithm,
    RobustConvexHullFlatness,
    create_flatness_algorithm,
)
from curveflat.domain import CubicCurve, Curve
from curveflat.exceptions import InvalidArgumentError

# Smallest tolerance that still has a representable square
MIN_TOLERANCE = 2.0 * math.sqrt(math.ulp(0.0))

MIN_PRECISION = 1.0e-5

DEFAULT_TOLERANCE = 1.0e-5

# Squared error of the mid-point approximation is |dx|^2 * 3 / 1296
_MIDPOINT_ERROR_SQ_FACTOR = 3.0 / 1296.0


def clamp_tolerance(value: float, floor: float = MIN_TOLERANCE) -> float:
    """Raise a tolerance to the given floor.

    Args:
        value: Requested tolerance; zero, negative and NaN values are allowed
        floor: Smallest accepted tolerance

    Returns:
        max(value, floor), or floor if value is NaN
    """
    if math.isnan(value) or value < floor:
        return floor
    return value


@runtime_checkable
class SubdivisionCriterion(Protocol):
    """Decides whether a curve needs further subdivision."""

    def should_split(self, curve: Curve) -> bool: ...


class GenericSubdivisionCriterion:
    """Split while a flatness algorithm's score exceeds a tolerance.

    Uses the squared score against the squared tolerance when the algorithm
    prefers it, which avoids a square root per piece.

    Args:
        algorithm: Flatness algorithm (default: robust convex hull)
        tolerance: Largest accepted flatness score, clamped to MIN_TOLERANCE

    Raises:
        InvalidArgumentError: If algorithm is not a FlatnessAlgorithm
    """

    def __init__(
        self,
        algorithm: FlatnessAlgorithm | None = None,
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> None:
        if algorithm is None:
            algorithm = RobustConvexHullFlatness()
        elif not isinstance(algorithm, FlatnessAlgorithm):
            raise InvalidArgumentError(
                f"algorithm must be a FlatnessAlgorithm, got {type(algorithm).__name__}"
            )
        self.algorithm = algorithm
        self.tolerance = clamp_tolerance(tolerance)
        self.tolerance_sq = self.tolerance * self.tolerance

    def should_split(self, curve: Curve) -> bool:
        if self.algorithm.prefers_squared:
            return self.algorithm.squared_flatness(curve) > self.tolerance_sq
        return self.algorithm.flatness(curve) > self.tolerance

    def __repr__(self) -> str:
        return (
            f"GenericSubdivisionCriterion(algorithm={self.algorithm!r}, "
            f"tolerance={self.tolerance!r})"
        )


class MidPointApproxCriterion:
    """Split a cubic while its mid-point quadratic deviates too much.

    The largest distance between a cubic and its mid-point quadratic
    approximation is (sqrt(3) / 36) * |end - start - 3 * (control2 - control1)|.

    Args:
        precision: Largest accepted deviation, clamped to MIN_PRECISION
    """

    def __init__(self, precision: float = 1.0) -> None:
        self.precision = clamp_tolerance(precision, MIN_PRECISION)
        self.precision_sq = self.precision * self.precision

    def should_split(self, curve: CubicCurve) -> bool:
        start, control1, control2, end = curve.points
        dx = end.x - start.x - 3.0 * (control2.x - control1.x)
        dy = end.y - start.y - 3.0 * (control2.y - control1.y)
        return (dx * dx + dy * dy) * _MIDPOINT_ERROR_SQ_FACTOR > self.precision_sq

    def __repr__(self) -> str:
        return f"MidPointApproxCriterion(precision={self.precision!r})"


def create_subdivision_criterion(
    algorithm: FlatnessAlgorithmType = FlatnessAlgorithmType.ROBUST_CONVEX_HULL,
    tolerance: float = DEFAULT_TOLERANCE,
    metric: DistanceMetric = DistanceMetric.EUCLIDEAN,
    combine: CombineStrategy = CombineStrategy.SUM,
) -> GenericSubdivisionCriterion:
    """Build a generic criterion from flatness options.

    Args:
        algorithm: Flatness algorithm type
        tolerance: Largest accepted flatness score
        metric: Distance metric (line defect only)
        combine: Combine strategy (line defect only)

    Returns:
        Configured GenericSubdivisionCriterion
    """
    return GenericSubdivisionCriterion(
        create_flatness_algorithm(algorithm, metric, combine),
        tolerance,
    )


def criterion_from_config(config: FlatteningConfig) -> GenericSubdivisionCriterion:
    """Build a generic criterion from a FlatteningConfig."""
    return create_subdivision_criterion(
        config.algorithm, config.tolerance, config.metric, config.combine
    )


def default_criterion() -> GenericSubdivisionCriterion:
    """Robust convex hull criterion at the default tolerance."""
    return GenericSubdivisionCriterion()
