"""Unit tests for flatness algorithms."""

import math

import pytest

from curveflat.config import CombineStrategy, DistanceMetric, FlatnessAlgorithmType
from curveflat.core.flatness import (
    FlatnessAlgorithm,
    LineDefectFlatness,
    NaiveConvexHullFlatness,
    RobustConvexHullFlatness,
    create_flatness_algorithm,
)
from curveflat.domain import CubicCurve, QuadraticCurve


@pytest.fixture
def straight_cubic() -> CubicCurve:
    """Evenly parametrized straight cubic."""
    return CubicCurve.from_coords(0, 0, 1, 0, 2, 0, 3, 0)


@pytest.fixture
def overshoot_cubic() -> CubicCurve:
    """Collinear cubic whose controls lie beyond the end anchor."""
    return CubicCurve.from_coords(0, 0, 5, 0, 6, 0, 3, 0)


@pytest.fixture
def bumpy_cubic() -> CubicCurve:
    """Cubic with both controls lifted off the anchor segment."""
    return CubicCurve.from_coords(0, 0, 1, 3, 2, 4, 3, 0)


ALL_ALGORITHMS = [
    RobustConvexHullFlatness(),
    NaiveConvexHullFlatness(),
    LineDefectFlatness(),
    LineDefectFlatness(DistanceMetric.MANHATTAN, CombineStrategy.MAX),
    LineDefectFlatness(DistanceMetric.CHEBYSHEV, CombineStrategy.SUM),
]


class TestCommonBehavior:
    """Tests every algorithm must satisfy."""

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS, ids=repr)
    def test_straight_curve_is_flat(
        self, algorithm: FlatnessAlgorithm, straight_cubic: CubicCurve
    ) -> None:
        """Test an evenly spaced straight cubic scores zero."""
        assert algorithm.flatness(straight_cubic) == pytest.approx(0.0)
        assert algorithm.squared_flatness(straight_cubic) == pytest.approx(0.0)

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS, ids=repr)
    def test_bumpy_curve_not_flat(
        self, algorithm: FlatnessAlgorithm, bumpy_cubic: CubicCurve
    ) -> None:
        """Test a curved cubic scores above zero."""
        assert algorithm.flatness(bumpy_cubic) > 0.0

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS, ids=repr)
    def test_satisfies_protocol(self, algorithm: FlatnessAlgorithm) -> None:
        """Test every algorithm is a FlatnessAlgorithm."""
        assert isinstance(algorithm, FlatnessAlgorithm)


class TestConvexHull:
    """Tests for the convex hull algorithms."""

    def test_robust_score(self, bumpy_cubic: CubicCurve) -> None:
        """Test the robust score is the largest control distance."""
        algorithm = RobustConvexHullFlatness()
        assert algorithm.squared_flatness(bumpy_cubic) == pytest.approx(16.0)
        assert algorithm.flatness(bumpy_cubic) == pytest.approx(4.0)

    def test_naive_score(self, bumpy_cubic: CubicCurve) -> None:
        """Test the naive score on the same curve."""
        assert NaiveConvexHullFlatness().flatness(bumpy_cubic) == pytest.approx(4.0)

    def test_robust_detects_overshoot(self, overshoot_cubic: CubicCurve) -> None:
        """Test collinear overshoot is not flat for the robust algorithm."""
        assert RobustConvexHullFlatness().flatness(overshoot_cubic) == pytest.approx(3.0)

    def test_naive_misses_overshoot(self, overshoot_cubic: CubicCurve) -> None:
        """Test the naive algorithm is blind to collinear overshoot."""
        assert NaiveConvexHullFlatness().flatness(overshoot_cubic) == 0.0

    def test_flags(self) -> None:
        """Test robustness and squared preference flags."""
        assert RobustConvexHullFlatness().degeneration_robust
        assert not NaiveConvexHullFlatness().degeneration_robust
        assert RobustConvexHullFlatness().prefers_squared
        assert NaiveConvexHullFlatness().prefers_squared

    def test_quadratic(self) -> None:
        """Test quadratic scoring uses its single control."""
        quad = QuadraticCurve.from_coords(0, 0, 1, 2, 2, 0)
        assert RobustConvexHullFlatness().flatness(quad) == pytest.approx(2.0)


class TestLineDefect:
    """Tests for LineDefectFlatness."""

    def test_uneven_straight_cubic_not_flat(self) -> None:
        """Test a straight but unevenly parametrized cubic has a defect."""
        cubic = CubicCurve.from_coords(0, 0, 2, 0, 2, 0, 3, 0)
        # Controls are 1 and 0 away from (1, 0) and (2, 0)
        assert LineDefectFlatness().flatness(cubic) == pytest.approx(1.0)

    def test_sum_and_max(self, bumpy_cubic: CubicCurve) -> None:
        """Test sum and max combine the two control defects."""
        summed = LineDefectFlatness(combine=CombineStrategy.SUM).flatness(bumpy_cubic)
        maxed = LineDefectFlatness(combine=CombineStrategy.MAX).flatness(bumpy_cubic)
        assert summed == pytest.approx(7.0)
        assert maxed == pytest.approx(4.0)

    def test_squared_variant_squares_before_combining(self, bumpy_cubic: CubicCurve) -> None:
        """Test the squared score sums squared distances."""
        assert LineDefectFlatness().squared_flatness(bumpy_cubic) == pytest.approx(25.0)

    def test_metrics(self) -> None:
        """Test each metric on a single displaced control."""
        quad = QuadraticCurve.from_coords(0, 0, 4, 4, 2, 0)
        # Ideal control is (1, 0), actual is (4, 4)
        assert LineDefectFlatness(DistanceMetric.EUCLIDEAN).flatness(quad) == pytest.approx(5.0)
        assert LineDefectFlatness(DistanceMetric.MANHATTAN).flatness(quad) == pytest.approx(7.0)
        assert LineDefectFlatness(DistanceMetric.CHEBYSHEV).flatness(quad) == pytest.approx(4.0)
        assert LineDefectFlatness(DistanceMetric.MANHATTAN).squared_flatness(
            quad
        ) == pytest.approx(49.0)

    def test_combine_ignored_for_quadratics(self) -> None:
        """Test quadratics have one control, so sum equals max."""
        quad = QuadraticCurve.from_coords(0, 0, 4, 4, 2, 0)
        summed = LineDefectFlatness(combine=CombineStrategy.SUM).flatness(quad)
        maxed = LineDefectFlatness(combine=CombineStrategy.MAX).flatness(quad)
        assert summed == maxed

    def test_prefers_squared_only_for_euclidean(self) -> None:
        """Test the squared preference depends on the metric."""
        assert LineDefectFlatness(DistanceMetric.EUCLIDEAN).prefers_squared
        assert not LineDefectFlatness(DistanceMetric.MANHATTAN).prefers_squared
        assert not LineDefectFlatness(DistanceMetric.CHEBYSHEV).prefers_squared
        assert LineDefectFlatness().degeneration_robust

    def test_detects_overshoot(self, overshoot_cubic: CubicCurve) -> None:
        """Test collinear overshoot counts as a defect."""
        assert LineDefectFlatness().flatness(overshoot_cubic) == pytest.approx(4.0 + 4.0)

    def test_accepts_string_options(self) -> None:
        """Test string values are converted to the enums."""
        algorithm = LineDefectFlatness("manhattan", "max")  # type: ignore[arg-type]
        assert algorithm.metric == DistanceMetric.MANHATTAN
        assert algorithm.combine == CombineStrategy.MAX


class TestFactory:
    """Tests for create_flatness_algorithm."""

    def test_default(self) -> None:
        """Test the default algorithm is the robust convex hull."""
        assert isinstance(create_flatness_algorithm(), RobustConvexHullFlatness)

    def test_naive(self) -> None:
        """Test building the naive algorithm."""
        algorithm = create_flatness_algorithm(FlatnessAlgorithmType.NAIVE_CONVEX_HULL)
        assert isinstance(algorithm, NaiveConvexHullFlatness)

    def test_line_defect_options(self) -> None:
        """Test metric and combine are passed to the line defect algorithm."""
        algorithm = create_flatness_algorithm(
            FlatnessAlgorithmType.LINE_DEFECT, DistanceMetric.CHEBYSHEV, CombineStrategy.MAX
        )
        assert isinstance(algorithm, LineDefectFlatness)
        assert algorithm.metric == DistanceMetric.CHEBYSHEV
        assert algorithm.combine == CombineStrategy.MAX

    def test_from_string(self) -> None:
        """Test the algorithm can be named by its value."""
        algorithm = create_flatness_algorithm("line_defect")  # type: ignore[arg-type]
        assert isinstance(algorithm, LineDefectFlatness)

    def test_unknown_raises(self) -> None:
        """Test unknown algorithm names are rejected."""
        with pytest.raises(ValueError):
            create_flatness_algorithm("bogus")  # type: ignore[arg-type]


def test_flatness_is_sqrt_of_squared(bumpy_cubic: CubicCurve) -> None:
    """Test plain and squared convex hull scores agree."""
    algorithm = RobustConvexHullFlatness()
    assert algorithm.flatness(bumpy_cubic) == pytest.approx(
        math.sqrt(algorithm.squared_flatness(bumpy_cubic))
    )
