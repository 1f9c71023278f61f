"""Unit tests for the flattening and degree reduction pens."""

from unittest.mock import patch

import pytest
from fontTools.pens.recordingPen import RecordingPen

from curveflat.core.criteria import GenericSubdivisionCriterion
from curveflat.core.degree_reduction import adaptive_degree_reduction_list
from curveflat.domain import CubicCurve
from curveflat.io import FlatteningPen, QuadraticReductionPen


def draw_arch(pen) -> None:
    """Draw a closed arch: one cubic and a closing line."""
    pen.moveTo((0, 0))
    pen.curveTo((0, 100), (100, 100), (100, 0))
    pen.lineTo((50, -10))
    pen.closePath()


@pytest.fixture
def recording() -> RecordingPen:
    """Empty recording pen."""
    return RecordingPen()


class TestFlatteningPen:
    """Tests for FlatteningPen."""

    def test_only_lines(self, recording: RecordingPen) -> None:
        """Test curves are replaced by lineTo commands."""
        pen = FlatteningPen(recording, GenericSubdivisionCriterion(tolerance=1.0))
        draw_arch(pen)

        ops = [op for op, _ in recording.value]
        assert ops[0] == "moveTo"
        assert ops[-1] == "closePath"
        assert set(ops[1:-1]) == {"lineTo"}
        assert ops.count("lineTo") > 2
        assert pen.curves_in == 1
        assert pen.stats.piece_count == ops.count("lineTo") - 1

    def test_curve_ends_on_endpoint(self, recording: RecordingPen) -> None:
        """Test the last line of a flattened curve reaches the curve's end."""
        pen = FlatteningPen(recording, GenericSubdivisionCriterion(tolerance=1.0))
        draw_arch(pen)

        lines = [args[0] for op, args in recording.value if op == "lineTo"]
        assert lines[-2] == (100.0, 0.0)
        assert lines[-1] == (50, -10)

    def test_quadratic_segments(self, recording: RecordingPen) -> None:
        """Test quadratic segments are flattened too."""
        pen = FlatteningPen(recording, GenericSubdivisionCriterion(tolerance=0.5))
        pen.moveTo((0, 0))
        pen.qCurveTo((50, 100), (100, 0))
        pen.endPath()

        ops = [op for op, _ in recording.value]
        assert "qCurveTo" not in ops
        assert ops[-1] == "endPath"
        assert recording.value[-2] == ("lineTo", ((100.0, 0.0),))

    @patch("curveflat.core.halving.logger")
    def test_depth_limit_warned_per_curve(self, mock_logger, recording: RecordingPen) -> None:
        """Test every depth-limited curve in one outline is reported."""
        pen = FlatteningPen(recording, GenericSubdivisionCriterion(tolerance=1e-5), max_depth=1)
        pen.moveTo((0, 0))
        pen.curveTo((0, 100), (100, 100), (100, 0))
        pen.curveTo((100, -100), (0, -100), (0, 0))
        pen.closePath()

        assert pen.curves_in == 2
        assert pen.stats.depth_limited_pieces == 4
        assert mock_logger.warning.call_count == 2


class TestQuadraticReductionPen:
    """Tests for QuadraticReductionPen."""

    def test_cubics_become_quadratics(self, recording: RecordingPen) -> None:
        """Test each cubic is replaced by its quadratic chain."""
        pen = QuadraticReductionPen(recording, precision=0.5)
        draw_arch(pen)

        expected = adaptive_degree_reduction_list(
            CubicCurve.from_coords(0, 0, 0, 100, 100, 100, 100, 0), 0.5
        )
        quads = [args for op, args in recording.value if op == "qCurveTo"]
        assert len(quads) == len(expected)
        assert "curveTo" not in [op for op, _ in recording.value]
        for args, piece in zip(quads, expected):
            assert args == (piece.curve.control.to_tuple(), piece.curve.end.to_tuple())
        assert pen.stats.piece_count == len(expected)

    def test_quadratics_pass_through(self, recording: RecordingPen) -> None:
        """Test existing quadratic segments are forwarded unchanged."""
        pen = QuadraticReductionPen(recording)
        pen.moveTo((0, 0))
        pen.qCurveTo((50, 100), (100, 0))
        pen.closePath()

        assert recording.value == [
            ("moveTo", ((0, 0),)),
            ("qCurveTo", ((50, 100), (100, 0))),
            ("closePath", ()),
        ]
        assert pen.curves_in == 0

    def test_lines_pass_through(self, recording: RecordingPen) -> None:
        """Test line segments are forwarded unchanged."""
        pen = QuadraticReductionPen(recording)
        pen.moveTo((0, 0))
        pen.lineTo((10, 0))
        pen.endPath()

        assert recording.value == [
            ("moveTo", ((0, 0),)),
            ("lineTo", ((10, 0),)),
            ("endPath", ()),
        ]
