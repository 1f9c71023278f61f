"""Adaptive halving.

Recursively halves a curve until every piece satisfies a subdivision
criterion. Pieces are produced left to right, each tagged with the parameter
window it covers on the input curve, so the output is a daisy chain.

Three entry points share one traversal:
- iter_adaptive_halving: lazy iterator of CurvePiece
- adaptive_halving: pushes pieces into a consumer callback
- adaptive_halving_list: collects pieces into a SegmentChain
"""

from collections.abc import Callable, Iterator

import structlog

from curveflat.core.criteria import SubdivisionCriterion, default_criterion
from curveflat.core.split import half_split
from curveflat.domain import CurvePiece, CurveT, SegmentChain
from curveflat.exceptions import InvalidArgumentError, MissingCurveError
from curveflat.utils.logging import SubdivisionStats

logger = structlog.get_logger(__name__)

DEFAULT_MAX_DEPTH = 32

# consumer(curve, t_start, t_end)
PieceConsumer = Callable[[CurveT, float, float], None]


class SegmentCollector:
    """Consumer that accumulates pieces into a SegmentChain.

    Example:
        >>> collector = SegmentCollector()
        >>> adaptive_halving(curve, None, collector)
        >>> polyline = collector.chain.polyline()
    """

    def __init__(self) -> None:
        self.chain: SegmentChain = SegmentChain()

    def __call__(self, curve: CurveT, t_start: float, t_end: float) -> None:
        self.chain.append(curve, t_start, t_end)

    def __len__(self) -> int:
        return len(self.chain)


def _check_arguments(curve: object, max_depth: int, operation: str) -> None:
    if curve is None:
        raise MissingCurveError(operation)
    if max_depth < 0:
        raise InvalidArgumentError(f"max_depth must be >= 0, got {max_depth}")


def _halving_pieces(
    curve: CurveT,
    criterion: SubdivisionCriterion,
    max_depth: int,
    stats: SubdivisionStats,
) -> Iterator[CurvePiece[CurveT]]:
    # Right half is pushed first so the left half is popped first
    stack: list[tuple[CurveT, float, float, int]] = [(curve, 0.0, 1.0, 0)]
    pieces = 0
    deepest = 0
    limited_pieces = 0

    while stack:
        piece, t_start, t_end, depth = stack.pop()

        limited = False
        if criterion.should_split(piece):
            if depth < max_depth:
                first, second = half_split(piece)
                t_mid = (t_start + t_end) / 2.0
                stack.append((second, t_mid, t_end, depth + 1))
                stack.append((first, t_start, t_mid, depth + 1))
                continue
            limited = True
            if not limited_pieces:
                logger.warning(
                    "Depth limit reached, emitting piece without further subdivision",
                    max_depth=max_depth,
                    t_start=t_start,
                    t_end=t_end,
                )

        stats.record_piece(depth, limited)
        pieces += 1
        deepest = max(deepest, depth)
        limited_pieces += limited
        yield CurvePiece(piece, t_start, t_end)

    logger.debug(
        "Adaptive halving complete",
        pieces=pieces,
        max_depth_reached=deepest,
        depth_limited_pieces=limited_pieces,
    )


def iter_adaptive_halving(
    curve: CurveT,
    criterion: SubdivisionCriterion | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    stats: SubdivisionStats | None = None,
) -> Iterator[CurvePiece[CurveT]]:
    """Lazily subdivide a curve by repeated halving.

    Arguments are checked when this function is called, not on the first
    `next()`. The returned iterator is finite and cannot be restarted.

    Args:
        curve: Quadratic or cubic curve
        criterion: Decides whether a piece is split (default: robust convex
            hull at 1e-5)
        max_depth: Pieces at this depth are emitted even if the criterion
            still asks for a split
        stats: Optional statistics object updated as pieces are produced

    Returns:
        Iterator of CurvePiece ordered by increasing parameter

    Raises:
        MissingCurveError: If curve is None
        InvalidArgumentError: If max_depth is negative
    """
    _check_arguments(curve, max_depth, "adaptive_halving")
    if criterion is None:
        criterion = default_criterion()
    if stats is None:
        stats = SubdivisionStats()
    return _halving_pieces(curve, criterion, max_depth, stats)


def adaptive_halving(
    curve: CurveT,
    criterion: SubdivisionCriterion | None,
    consumer: PieceConsumer,
    max_depth: int = DEFAULT_MAX_DEPTH,
    stats: SubdivisionStats | None = None,
) -> SubdivisionStats:
    """Subdivide a curve by repeated halving, streaming pieces to a consumer.

    The consumer is called synchronously on this thread, once per piece, in
    order of increasing parameter.

    Args:
        curve: Quadratic or cubic curve
        criterion: Decides whether a piece is split (None for the default)
        consumer: Called as consumer(curve, t_start, t_end) for every piece
        max_depth: Maximum halving depth
        stats: Optional statistics object to update

    Returns:
        Statistics for this run

    Raises:
        MissingCurveError: If curve is None
        InvalidArgumentError: If max_depth is negative
    """
    stats = stats if stats is not None else SubdivisionStats()
    for piece in iter_adaptive_halving(curve, criterion, max_depth, stats):
        consumer(piece.curve, piece.t_start, piece.t_end)
    return stats


def adaptive_halving_list(
    curve: CurveT,
    criterion: SubdivisionCriterion | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    stats: SubdivisionStats | None = None,
) -> SegmentChain[CurveT]:
    """Subdivide a curve by repeated halving and collect the pieces.

    Returns:
        SegmentChain of the leaf pieces
    """
    collector = SegmentCollector()
    adaptive_halving(curve, criterion, collector, max_depth, stats)
    return collector.chain
