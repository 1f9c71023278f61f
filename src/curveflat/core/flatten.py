"""Polyline flattening of Bezier curves."""

from curveflat.config import FlatnessAlgorithmType
from curveflat.core.criteria import SubdivisionCriterion, create_subdivision_criterion
from curveflat.core.halving import DEFAULT_MAX_DEPTH, iter_adaptive_halving
from curveflat.domain import Curve, Point, curve_from_points


def flatten(
    curve: Curve,
    criterion: SubdivisionCriterion | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[Point]:
    """Convert a curve to a polyline by adaptive halving.

    Args:
        curve: Quadratic or cubic curve
        criterion: Subdivision criterion (default: robust convex hull at 1e-5)
        max_depth: Maximum halving depth

    Returns:
        The curve's start anchor followed by the end anchor of every leaf
        piece. A curve that is already flat gives [start, end].
    """
    pieces = iter_adaptive_halving(curve, criterion, max_depth)
    points = [curve.start]
    points.extend(piece.curve.end for piece in pieces)
    return points


def bezier_flatten(
    points: list[Point],
    tolerance: float = 1.0,
    algorithm: FlatnessAlgorithmType = FlatnessAlgorithmType.ROBUST_CONVEX_HULL,
) -> list[Point]:
    """Convert Bezier control points to line segments.

    Handles both quadratic (3 points) and cubic (4 points) Bezier curves.
    Uses adaptive halving until every piece is flat within tolerance.

    Args:
        points: Control points of the Bezier curve (2 for a line, 3 for
            quadratic, 4 for cubic)
        tolerance: Maximum accepted flatness (in input units)
        algorithm: Flatness algorithm used to judge each piece

    Returns:
        List of points forming line segments that approximate the curve

    Raises:
        ValueError: If points list is not of length 2, 3 or 4
    """
    if len(points) == 2:
        # Already a line segment
        return list(points)
    if len(points) not in (3, 4):
        raise ValueError(f"Expected 2-4 points for Bezier curve, got {len(points)}")

    criterion = create_subdivision_criterion(algorithm, tolerance)
    return flatten(curve_from_points(points), criterion)
