"""Geometric primitives for flatness evaluation.

This module provides the distance functions and predicates the flatness
algorithms are built from:
- Point-to-point distances (Euclidean, squared, Manhattan, Chebyshev)
- Point-to-line and point-to-segment distances
- Collinearity and half-plane separation tests
- Curve degeneracy test

All functions are pure and stateless. Degenerate input (coincident points,
zero-length lines) is handled locally and never produces NaN or infinity.
"""

import math

from curveflat.config import DEFAULT_TOLERANCES, DistanceMetric, ToleranceConfig
from curveflat.domain import Curve, Point


def _cross(ax: float, ay: float, bx: float, by: float) -> float:
    return ax * by - ay * bx


def _sign(value: float) -> int:
    if value > 0.0:
        return 1
    if value < 0.0:
        return -1
    return 0


def point_to_point_sq_dist(p: Point, q: Point) -> float:
    """Squared Euclidean distance between two points."""
    dx = q.x - p.x
    dy = q.y - p.y
    return dx * dx + dy * dy


def point_to_point_dist(p: Point, q: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(q.x - p.x, q.y - p.y)


def point_to_point_manhattan(p: Point, q: Point) -> float:
    """Manhattan (taxicab) distance between two points."""
    return abs(q.x - p.x) + abs(q.y - p.y)


def point_to_point_chebyshev(p: Point, q: Point) -> float:
    """Chebyshev (maximum coordinate) distance between two points."""
    return max(abs(q.x - p.x), abs(q.y - p.y))


def point_distance(p: Point, q: Point, metric: DistanceMetric = DistanceMetric.EUCLIDEAN) -> float:
    """Distance between two points under the given metric.

    Args:
        p: First point
        q: Second point
        metric: Distance metric to use

    Returns:
        The distance between p and q

    Raises:
        ValueError: If metric is not a known DistanceMetric
    """
    if metric == DistanceMetric.EUCLIDEAN:
        return point_to_point_dist(p, q)
    if metric == DistanceMetric.MANHATTAN:
        return point_to_point_manhattan(p, q)
    if metric == DistanceMetric.CHEBYSHEV:
        return point_to_point_chebyshev(p, q)
    raise ValueError(f"Unknown distance metric: {metric!r}")


def point_to_line_sq_dist(point: Point, start: Point, end: Point) -> float:
    """Squared distance from a point to the infinite line through two points.

    Computed as cross(point - start, end - start)^2 / |end - start|^2.

    Args:
        point: The point to measure
        start: First point on the line
        end: Second point on the line

    Returns:
        Squared perpendicular distance. When start and end coincide the line
        degenerates to a point and the squared distance to start is returned
        (0 if point also coincides with it).

    Examples:
        >>> point_to_line_sq_dist(Point(5.0, 3.0), Point(0.0, 0.0), Point(1.0, 0.0))
        9.0
    """
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy

    if length_sq == 0.0:
        # Line collapsed to a point
        return point_to_point_sq_dist(point, start)

    cross = _cross(point.x - start.x, point.y - start.y, dx, dy)
    return cross * cross / length_sq


def point_to_line_dist(point: Point, start: Point, end: Point) -> float:
    """Distance from a point to the infinite line through two points."""
    return math.sqrt(point_to_line_sq_dist(point, start, end))


def point_to_segment_sq_dist(point: Point, start: Point, end: Point) -> float:
    """Squared distance from a point to a closed line segment.

    Points beyond either endpoint measure to that endpoint; points alongside
    the segment measure perpendicular to it.

    Args:
        point: The point to measure
        start: Segment start
        end: Segment end

    Returns:
        Squared distance, never negative
    """
    dx = end.x - start.x
    dy = end.y - start.y

    if dx * (point.x - end.x) + dy * (point.y - end.y) >= 0.0:
        return point_to_point_sq_dist(point, end)

    projection = dx * (point.x - start.x) + dy * (point.y - start.y)
    if projection <= 0.0:
        return point_to_point_sq_dist(point, start)

    # Between the endpoints, so the segment has non-zero length here
    length_sq = dx * dx + dy * dy
    dist_sq = point_to_point_sq_dist(point, start) - projection * projection / length_sq
    return max(dist_sq, 0.0)


def point_to_segment_dist(point: Point, start: Point, end: Point) -> float:
    """Distance from a point to a closed line segment."""
    return math.sqrt(point_to_segment_sq_dist(point, start, end))


def are_points_collinear(
    a: Point, b: Point, c: Point, tolerances: ToleranceConfig = DEFAULT_TOLERANCES
) -> bool:
    """Test whether three points lie on one line.

    Args:
        a: First point
        b: Second point
        c: Third point
        tolerances: Tolerance set; the area tolerance bounds the twice-area of
            the triangle abc

    Returns:
        True if |cross(b - a, c - a)| is within the area tolerance
    """
    cross = _cross(b.x - a.x, b.y - a.y, c.x - a.x, c.y - a.y)
    return abs(cross) <= tolerances.area


def line_separates_points(
    start: Point, end: Point, p0: Point, p1: Point, strict: bool = False
) -> bool:
    """Test whether two points lie on opposite sides of a line.

    Args:
        start: First point on the line
        end: Second point on the line
        p0: First point to test
        p1: Second point to test
        strict: If True, a point lying on the line does not count as separated

    Returns:
        True if the line through start and end separates p0 from p1
    """
    dx = end.x - start.x
    dy = end.y - start.y
    cross0 = _cross(dx, dy, p0.x - start.x, p0.y - start.y)
    cross1 = _cross(dx, dy, p1.x - start.x, p1.y - start.y)
    product = _sign(cross0) * _sign(cross1)
    return product < 0 if strict else product <= 0


def is_degenerate(curve: Curve, tolerances: ToleranceConfig = DEFAULT_TOLERANCES) -> bool:
    """Test whether a curve collapses onto a line (or a point).

    Args:
        curve: Quadratic or cubic curve
        tolerances: Tolerance set used for the collinearity test

    Returns:
        True if every control point is collinear with the two anchors
    """
    return all(
        are_points_collinear(curve.start, control, curve.end, tolerances)
        for control in curve.controls
    )
