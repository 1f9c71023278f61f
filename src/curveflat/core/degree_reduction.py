"""Adaptive cubic to quadratic degree reduction.

A cubic is replaced by a chain of quadratics, each the mid-point
approximation of a piece of the cubic, such that no quadratic deviates from
its piece by more than the requested precision.

The mid-point approximation of a cubic (a0, c1, c2, a1) is the quadratic
whose control is the average of P0 = (3*c1 - a0) / 2 and P1 = (3*c2 - a1) / 2.
Its largest deviation from the cubic is (sqrt(3) / 18) * |P1 - P0|, and that
error scales with the cube of the parameter span of the piece. The reduction
therefore computes, for each piece, the defect

    defect = (18 / sqrt(3)) * precision / |P1 - P0|

which is the cube of the largest span fraction whose approximation stays
within precision, and splits off pieces of exactly that span from both ends.
"""

import math
from collections.abc import Iterator

import structlog

from curveflat.core.criteria import MIN_PRECISION, MidPointApproxCriterion, clamp_tolerance
from curveflat.core.geometry import point_to_point_dist
from curveflat.core.halving import PieceConsumer, SegmentCollector, iter_adaptive_halving
from curveflat.core.split import half_split, split_multi
from curveflat.domain import CubicCurve, CurvePiece, Point, QuadraticCurve, SegmentChain
from curveflat.exceptions import InvalidArgumentError, InvalidCurveError, MissingCurveError
from curveflat.utils.logging import SubdivisionStats

logger = structlog.get_logger(__name__)

DEFAULT_PRECISION = 1.0
DEFAULT_MAX_DEPTH = 1024

_DEFECT_FACTOR = 18.0 / math.sqrt(3.0)

# Pieces of half span or less are handled by a single halving
_HALF_SPAN_DEFECT = 0.125


def _approximation_controls(cubic: CubicCurve) -> tuple[Point, Point]:
    start, control1, control2, end = cubic.points
    p0 = Point((3.0 * control1.x - start.x) / 2.0, (3.0 * control1.y - start.y) / 2.0)
    p1 = Point((3.0 * control2.x - end.x) / 2.0, (3.0 * control2.y - end.y) / 2.0)
    return p0, p1


def mid_point_approximation(cubic: CubicCurve) -> QuadraticCurve:
    """Approximate a cubic by a single quadratic.

    The quadratic shares the cubic's anchors; its control is the midpoint of
    the two points where the cubic's end tangents would put a quadratic
    control.

    Args:
        cubic: Cubic curve

    Returns:
        The mid-point quadratic approximation

    Raises:
        MissingCurveError: If cubic is None
    """
    if cubic is None:
        raise MissingCurveError("mid_point_approximation")
    p0, p1 = _approximation_controls(cubic)
    return QuadraticCurve(cubic.start, p0.midpoint(p1), cubic.end)


def approximation_defect(cubic: CubicCurve, precision: float) -> float:
    """Cube of the largest span fraction approximable within precision.

    Args:
        cubic: Cubic curve
        precision: Accepted deviation

    Returns:
        (18 / sqrt(3)) * precision / |P1 - P0|, or infinity if the mid-point
        approximation is exact (P0 == P1)
    """
    p0, p1 = _approximation_controls(cubic)
    distance = point_to_point_dist(p0, p1)
    if distance == 0.0:
        return math.inf
    return _DEFECT_FACTOR * precision / distance


def _check_cubic(cubic: object, operation: str) -> None:
    if cubic is None:
        raise MissingCurveError(operation)
    if not isinstance(cubic, CubicCurve):
        raise InvalidCurveError(
            f"{operation} requires a cubic curve, got {type(cubic).__name__}"
        )


def _reduction_pieces(
    cubic: CubicCurve,
    precision: float,
    max_depth: int,
    stats: SubdivisionStats,
) -> Iterator[CurvePiece[QuadraticCurve]]:
    # Last parts of each step, emitted in reverse once the middle is done
    trailing: list[tuple[CurvePiece[QuadraticCurve], int]] = []

    piece = cubic
    t_start, t_end = 0.0, 1.0
    depth = 0
    emitted_before = stats.piece_count

    while True:
        dt = t_end - t_start
        defect = approximation_defect(piece, precision)

        if defect >= 1.0:
            stats.record_piece(depth)
            yield CurvePiece(mid_point_approximation(piece), t_start, t_end)
            break

        if defect >= _HALF_SPAN_DEFECT:
            first, second = half_split(piece)
            t_mid = t_start + dt / 2.0
            stats.record_piece(depth + 1)
            yield CurvePiece(mid_point_approximation(first), t_start, t_mid)
            stats.record_piece(depth + 1)
            yield CurvePiece(mid_point_approximation(second), t_mid, t_end)
            break

        if depth >= max_depth:
            logger.warning(
                "Depth limit reached, emitting remainder as a single quadratic",
                max_depth=max_depth,
                t_start=t_start,
                t_end=t_end,
                defect=defect,
            )
            stats.record_piece(depth, limited=True)
            yield CurvePiece(mid_point_approximation(piece), t_start, t_end)
            break

        t = defect ** (1.0 / 3.0)
        first, middle, last = split_multi(piece, [t, 1.0 - t])
        t_first = t_start + t * dt
        t_last = t_start + (1.0 - t) * dt

        stats.record_piece(depth + 1)
        yield CurvePiece(mid_point_approximation(first), t_start, t_first)
        trailing.append((CurvePiece(mid_point_approximation(last), t_last, t_end), depth + 1))

        piece = middle
        t_start, t_end = t_first, t_last
        depth += 1

    for tail, tail_depth in reversed(trailing):
        stats.record_piece(tail_depth)
        yield tail

    logger.debug(
        "Degree reduction complete",
        precision=precision,
        quadratics=stats.piece_count - emitted_before,
        split_steps=depth,
    )


def iter_adaptive_degree_reduction(
    cubic: CubicCurve,
    precision: float = DEFAULT_PRECISION,
    max_depth: int = DEFAULT_MAX_DEPTH,
    stats: SubdivisionStats | None = None,
) -> Iterator[CurvePiece[QuadraticCurve]]:
    """Lazily reduce a cubic to a chain of quadratics.

    Each step either accepts the whole piece, halves it, or cuts off the
    largest acceptable span from both ends and continues with the middle.
    The middle part is processed iteratively, so the depth is bounded by
    max_depth and not by the interpreter stack.

    Args:
        cubic: Cubic curve to reduce
        precision: Largest accepted deviation, clamped to at least 1e-5
        max_depth: Number of refinement steps after which the remaining
            middle part is emitted as one quadratic
        stats: Optional statistics object updated as pieces are produced

    Returns:
        Iterator of quadratic CurvePieces ordered by increasing parameter

    Raises:
        MissingCurveError: If cubic is None
        InvalidCurveError: If the curve is not a cubic
        InvalidArgumentError: If max_depth is negative
    """
    _check_cubic(cubic, "adaptive_degree_reduction")
    if max_depth < 0:
        raise InvalidArgumentError(f"max_depth must be >= 0, got {max_depth}")
    if stats is None:
        stats = SubdivisionStats()
    return _reduction_pieces(cubic, clamp_tolerance(precision, MIN_PRECISION), max_depth, stats)


def adaptive_degree_reduction(
    cubic: CubicCurve,
    precision: float,
    consumer: PieceConsumer,
    max_depth: int = DEFAULT_MAX_DEPTH,
    stats: SubdivisionStats | None = None,
) -> SubdivisionStats:
    """Reduce a cubic to quadratics, streaming them to a consumer.

    Args:
        cubic: Cubic curve to reduce
        precision: Largest accepted deviation
        consumer: Called as consumer(quadratic, t_start, t_end) in order
        max_depth: Maximum number of refinement steps
        stats: Optional statistics object to update

    Returns:
        Statistics for this run
    """
    stats = stats if stats is not None else SubdivisionStats()
    for piece in iter_adaptive_degree_reduction(cubic, precision, max_depth, stats):
        consumer(piece.curve, piece.t_start, piece.t_end)
    return stats


def adaptive_degree_reduction_list(
    cubic: CubicCurve,
    precision: float = DEFAULT_PRECISION,
    max_depth: int = DEFAULT_MAX_DEPTH,
    stats: SubdivisionStats | None = None,
) -> SegmentChain[QuadraticCurve]:
    """Reduce a cubic to quadratics and collect them into a SegmentChain."""
    collector = SegmentCollector()
    adaptive_degree_reduction(cubic, precision, collector, max_depth, stats)
    return collector.chain


def iter_adaptive_halving_degree_reduction(
    cubic: CubicCurve,
    precision: float = DEFAULT_PRECISION,
    max_depth: int = 32,
    stats: SubdivisionStats | None = None,
) -> Iterator[CurvePiece[QuadraticCurve]]:
    """Lazily reduce a cubic by plain halving.

    Simpler than the optimal-split reduction but usually produces more
    quadratics: the cubic is halved until each piece passes
    MidPointApproxCriterion, then every leaf is replaced by its mid-point
    approximation.

    Raises:
        MissingCurveError: If cubic is None
        InvalidCurveError: If the curve is not a cubic
    """
    _check_cubic(cubic, "adaptive_halving_degree_reduction")
    leaves = iter_adaptive_halving(cubic, MidPointApproxCriterion(precision), max_depth, stats)
    return (
        CurvePiece(mid_point_approximation(leaf.curve), leaf.t_start, leaf.t_end)
        for leaf in leaves
    )


def adaptive_halving_degree_reduction(
    cubic: CubicCurve,
    precision: float,
    consumer: PieceConsumer,
    max_depth: int = 32,
    stats: SubdivisionStats | None = None,
) -> SubdivisionStats:
    """Reduce a cubic by plain halving, streaming quadratics to a consumer.

    Returns:
        Statistics for this run
    """
    stats = stats if stats is not None else SubdivisionStats()
    for piece in iter_adaptive_halving_degree_reduction(cubic, precision, max_depth, stats):
        consumer(piece.curve, piece.t_start, piece.t_end)
    return stats


def adaptive_halving_degree_reduction_list(
    cubic: CubicCurve,
    precision: float = DEFAULT_PRECISION,
    max_depth: int = 32,
    stats: SubdivisionStats | None = None,
) -> SegmentChain[QuadraticCurve]:
    """Reduce a cubic by plain halving and collect the quadratics."""
    collector = SegmentCollector()
    adaptive_halving_degree_reduction(cubic, precision, collector, max_depth, stats)
    return collector.chain
