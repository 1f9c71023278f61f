"""Integration tests for the chains produced by the subdivision drivers.

Every driver must cover [0, 1] with contiguous windows, start and end on the
input anchors, and connect consecutive pieces end to start.
"""

import pytest

from curveflat import (
    adaptive_degree_reduction_list,
    adaptive_halving_list,
    flatten,
    split_multi,
)
from curveflat.config import CombineStrategy, DistanceMetric, FlatnessAlgorithmType
from curveflat.core.criteria import create_subdivision_criterion
from curveflat.core.degree_reduction import adaptive_halving_degree_reduction_list
from curveflat.core.evaluate import compute_inflections, point_on_curve
from curveflat.domain import CubicCurve, QuadraticCurve, SegmentChain

CURVES = {
    "arch": CubicCurve.from_coords(0, 0, 0, 100, 100, 100, 100, 0),
    "s_curve": CubicCurve.from_coords(0, 0, 100, 100, 200, -100, 300, 0),
    "loop": CubicCurve.from_coords(0, 0, 200, 200, -100, 200, 100, 0),
    "cusp": CubicCurve.from_coords(0, 0, 100, 100, 0, 100, 100, 0),
    "overshoot": CubicCurve.from_coords(0, 0, 50, 0, 60, 0, 30, 0),
}


def assert_covers_unit_interval(chain: SegmentChain) -> None:
    """Check windows run from 0 to 1 without gaps."""
    assert chain[0].t_start == 0.0
    assert chain[-1].t_end == 1.0
    for prev, curr in zip(chain, list(chain)[1:]):
        assert prev.t_end == pytest.approx(curr.t_start, abs=1e-12)
        assert prev.t_start < prev.t_end


@pytest.mark.parametrize("name", sorted(CURVES))
class TestHalvingChains:
    """Chains from adaptive halving."""

    @pytest.mark.parametrize("algorithm", list(FlatnessAlgorithmType))
    def test_chain_properties(self, name: str, algorithm: FlatnessAlgorithmType) -> None:
        """Test halving chains are contiguous and anchored."""
        curve = CURVES[name]
        criterion = create_subdivision_criterion(algorithm, 0.5)
        chain = adaptive_halving_list(curve, criterion)

        assert chain.is_daisy_chained()
        assert_covers_unit_interval(chain)
        assert chain[0].curve.start == curve.start
        assert chain[-1].curve.end == curve.end

    def test_piece_anchors_on_curve(self, name: str) -> None:
        """Test every piece boundary is the curve evaluated at the window edge."""
        curve = CURVES[name]
        for piece in adaptive_halving_list(curve, create_subdivision_criterion(tolerance=0.5)):
            expected = point_on_curve(curve, piece.t_end)
            assert piece.curve.end.x == pytest.approx(expected.x, abs=1e-9)
            assert piece.curve.end.y == pytest.approx(expected.y, abs=1e-9)

    def test_flatten_matches_chain(self, name: str) -> None:
        """Test flatten returns the chain's polyline."""
        curve = CURVES[name]
        criterion = create_subdivision_criterion(tolerance=0.5)
        assert flatten(curve, criterion) == adaptive_halving_list(curve, criterion).polyline()


@pytest.mark.parametrize("name", sorted(CURVES))
class TestReductionChains:
    """Chains from degree reduction."""

    def test_optimal_split_chain(self, name: str) -> None:
        """Test optimal-split chains are contiguous quadratics."""
        curve = CURVES[name]
        chain = adaptive_degree_reduction_list(curve, 0.25)

        assert all(isinstance(c, QuadraticCurve) for c in chain.curves)
        assert chain.is_daisy_chained(tolerance=1e-9)
        assert_covers_unit_interval(chain)
        assert chain[0].curve.start == curve.start
        assert chain[-1].curve.end == curve.end

    def test_halving_chain(self, name: str) -> None:
        """Test halving reduction chains are contiguous quadratics."""
        curve = CURVES[name]
        chain = adaptive_halving_degree_reduction_list(curve, 0.25)

        assert all(isinstance(c, QuadraticCurve) for c in chain.curves)
        assert chain.is_daisy_chained()
        assert_covers_unit_interval(chain)


class TestSplitAtInflections:
    """Splitting a cubic at its inflections."""

    def test_s_curve_split(self) -> None:
        """Test the pieces between inflections join up into a daisy chain."""
        curve = CURVES["s_curve"]
        params = compute_inflections(curve)
        assert params == [pytest.approx(0.5)]

        pieces = split_multi(curve, list(params))
        chain: SegmentChain[CubicCurve] = SegmentChain()
        bounds = [0.0, *params, 1.0]
        for piece, t0, t1 in zip(pieces, bounds, bounds[1:]):
            chain.append(piece, t0, t1)

        assert chain.is_daisy_chained()
        middle = point_on_curve(curve, params[0])
        assert pieces[0].end.x == pytest.approx(middle.x)
        assert pieces[0].end.y == pytest.approx(middle.y, abs=1e-9)


class TestLineDefectVariants:
    """Every metric and combine strategy yields a valid chain."""

    @pytest.mark.parametrize("metric", list(DistanceMetric))
    @pytest.mark.parametrize("combine", list(CombineStrategy))
    def test_variants(self, metric: DistanceMetric, combine: CombineStrategy) -> None:
        """Test line-defect flattening with each option combination."""
        curve = CURVES["arch"]
        criterion = create_subdivision_criterion(
            FlatnessAlgorithmType.LINE_DEFECT, 1.0, metric, combine
        )
        chain = adaptive_halving_list(curve, criterion)
        assert len(chain) > 1
        assert chain.is_daisy_chained()
