"""Unit tests for the adaptive halving driver."""

from unittest.mock import patch

import pytest

from curveflat.config import FlatnessAlgorithmType
from curveflat.core.criteria import GenericSubdivisionCriterion, create_subdivision_criterion
from curveflat.core.halving import (
    SegmentCollector,
    adaptive_halving,
    adaptive_halving_list,
    iter_adaptive_halving,
)
from curveflat.domain import CubicCurve, Curve, CurvePiece, Point, QuadraticCurve
from curveflat.exceptions import InvalidArgumentError, MissingCurveError
from curveflat.utils import SubdivisionStats


class AlwaysSplit:
    """Criterion that never accepts a piece."""

    def should_split(self, curve: Curve) -> bool:  # noqa: ARG002
        return True


class SplitOnce:
    """Criterion that splits only the full input curve."""

    def __init__(self, curve: Curve) -> None:
        self.curve = curve

    def should_split(self, curve: Curve) -> bool:
        return curve == self.curve


@pytest.fixture
def arch() -> CubicCurve:
    """Symmetric arch cubic."""
    return CubicCurve.from_coords(0, 0, 0, 100, 100, 100, 100, 0)


class TestAdaptiveHalving:
    """Tests for adaptive_halving and its variants."""

    @pytest.mark.parametrize("algorithm", list(FlatnessAlgorithmType))
    def test_straight_cubic_single_leaf(self, algorithm: FlatnessAlgorithmType) -> None:
        """Test a flat, evenly spaced cubic is emitted whole."""
        cubic = CubicCurve.from_coords(0, 0, 1, 0, 2, 0, 3, 0)
        criterion = create_subdivision_criterion(algorithm, 1e-5)
        chain = adaptive_halving_list(cubic, criterion)
        assert len(chain) == 1
        assert chain[0].curve == cubic
        assert (chain[0].t_start, chain[0].t_end) == (0.0, 1.0)

    def test_consumer_receives_pieces_in_order(self, arch: CubicCurve) -> None:
        """Test the consumer is called left to right with contiguous windows."""
        calls: list[tuple[Curve, float, float]] = []
        adaptive_halving(
            arch, GenericSubdivisionCriterion(tolerance=1.0), lambda c, a, b: calls.append((c, a, b))
        )
        assert len(calls) > 1
        assert calls[0][1] == 0.0
        assert calls[-1][2] == 1.0
        for (prev, _, prev_end), (curr, curr_start, _) in zip(calls, calls[1:]):
            assert prev_end == curr_start
            assert prev.end == curr.start

    def test_one_split(self, arch: CubicCurve) -> None:
        """Test a single split produces two halves with half windows."""
        chain = adaptive_halving_list(arch, SplitOnce(arch))
        assert [(p.t_start, p.t_end) for p in chain] == [(0.0, 0.5), (0.5, 1.0)]
        assert chain[0].curve.end == Point(50, 75)

    def test_leaves_satisfy_criterion(self, arch: CubicCurve) -> None:
        """Test every emitted piece is accepted by the criterion."""
        criterion = GenericSubdivisionCriterion(tolerance=0.5)
        chain = adaptive_halving_list(arch, criterion)
        assert chain.is_daisy_chained()
        assert not any(criterion.should_split(piece.curve) for piece in chain)

    def test_default_criterion(self) -> None:
        """Test None selects the default criterion."""
        quad = QuadraticCurve.from_coords(0, 0, 1, 1, 2, 0)
        chain = adaptive_halving_list(quad, None)
        assert len(chain) > 1
        assert chain.is_daisy_chained()

    def test_tighter_tolerance_more_pieces(self, arch: CubicCurve) -> None:
        """Test lowering the tolerance never reduces the piece count."""
        coarse = adaptive_halving_list(arch, GenericSubdivisionCriterion(tolerance=2.0))
        fine = adaptive_halving_list(arch, GenericSubdivisionCriterion(tolerance=0.1))
        assert len(fine) > len(coarse)

    def test_missing_curve(self) -> None:
        """Test a missing curve raises."""
        with pytest.raises(MissingCurveError):
            adaptive_halving_list(None)  # type: ignore[arg-type]

    def test_negative_depth(self, arch: CubicCurve) -> None:
        """Test a negative depth limit is rejected."""
        with pytest.raises(InvalidArgumentError):
            adaptive_halving_list(arch, max_depth=-1)


class TestDepthLimit:
    """Tests for the depth ceiling."""

    def test_depth_limit_bounds_pieces(self, arch: CubicCurve) -> None:
        """Test a never-satisfied criterion stops at 2**max_depth pieces."""
        stats = SubdivisionStats()
        chain = adaptive_halving_list(arch, AlwaysSplit(), max_depth=4, stats=stats)
        assert len(chain) == 16
        assert chain.is_daisy_chained()
        assert stats.depth_limit_hit
        assert stats.depth_limited_pieces == 16
        assert stats.max_depth_reached == 4

    @patch("curveflat.core.halving.logger")
    def test_warns_once_per_call_with_shared_stats(self, mock_logger, arch: CubicCurve) -> None:
        """Test each depth-limited run warns once and logs its own totals."""
        stats = SubdivisionStats()
        adaptive_halving_list(arch, AlwaysSplit(), max_depth=2, stats=stats)
        adaptive_halving_list(arch, AlwaysSplit(), max_depth=3, stats=stats)

        assert mock_logger.warning.call_count == 2
        assert stats.depth_limited_pieces == 12
        last_summary = mock_logger.debug.call_args.kwargs
        assert last_summary["pieces"] == 8
        assert last_summary["max_depth_reached"] == 3
        assert last_summary["depth_limited_pieces"] == 8

    def test_zero_depth(self, arch: CubicCurve) -> None:
        """Test max_depth=0 emits the input unchanged."""
        chain = adaptive_halving_list(arch, AlwaysSplit(), max_depth=0)
        assert chain.curves == [arch]

    def test_stats_without_limit(self, arch: CubicCurve) -> None:
        """Test stats report no limit hit for a satisfiable criterion."""
        stats = adaptive_halving(arch, SplitOnce(arch), SegmentCollector())
        assert stats.piece_count == 2
        assert stats.max_depth_reached == 1
        assert not stats.depth_limit_hit


class TestIterAdaptiveHalving:
    """Tests for the lazy iterator."""

    def test_lazy(self, arch: CubicCurve) -> None:
        """Test pieces are produced on demand."""
        pieces = iter_adaptive_halving(arch, AlwaysSplit(), max_depth=20)
        first = next(pieces)
        assert isinstance(first, CurvePiece)
        assert first.t_start == 0.0
        assert first.t_end == pytest.approx(2.0**-20)

    def test_not_restartable(self, arch: CubicCurve) -> None:
        """Test the iterator is exhausted after one pass."""
        pieces = iter_adaptive_halving(arch, SplitOnce(arch))
        assert len(list(pieces)) == 2
        assert list(pieces) == []

    def test_arguments_checked_eagerly(self) -> None:
        """Test a missing curve raises before iteration starts."""
        with pytest.raises(MissingCurveError):
            iter_adaptive_halving(None)  # type: ignore[arg-type]


class TestSegmentCollector:
    """Tests for SegmentCollector."""

    def test_collects_in_order(self) -> None:
        """Test the collector appends every call."""
        collector = SegmentCollector()
        quad = QuadraticCurve.from_coords(0, 0, 1, 1, 2, 0)
        collector(quad, 0.0, 0.5)
        collector(quad, 0.5, 1.0)
        assert len(collector) == 2
        assert collector.chain[1].t_start == 0.5
