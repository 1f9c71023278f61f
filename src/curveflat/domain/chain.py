"""Tracked curve pieces and daisy-chained sequences of them.

A subdivision driver never returns bare curves: every piece carries the
parameter window it covers on the curve it was cut from, so callers can map
the approximation back onto the original parametrization.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from curveflat.domain.curve import CubicCurve, Point, QuadraticCurve

CurveT = TypeVar("CurveT", QuadraticCurve, CubicCurve)


@dataclass(frozen=True)
class CurvePiece(Generic[CurveT]):
    """A curve together with the parameter window it covers.

    Attributes:
        curve: The sub-curve (or approximating curve)
        t_start: Parameter on the original curve where this piece starts
        t_end: Parameter on the original curve where this piece ends
    """

    curve: CurveT
    t_start: float
    t_end: float

    @property
    def span(self) -> float:
        """Width of the parameter window."""
        return self.t_end - self.t_start

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with curve points and the parameter window
        """
        return {
            "curve": self.curve.to_dict(),
            "t_start": self.t_start,
            "t_end": self.t_end,
        }


@dataclass
class SegmentChain(Generic[CurveT]):
    """An ordered sequence of curve pieces covering [0, 1].

    Drivers build chains in emission order, which is left to right in
    parameter space. Windows are contiguous and consecutive pieces share an
    anchor (the daisy-chain property); `is_daisy_chained` verifies both.

    Attributes:
        pieces: Curve pieces ordered by increasing parameter
    """

    pieces: list[CurvePiece[CurveT]] = field(default_factory=list)

    def append(self, curve: CurveT, t_start: float, t_end: float) -> None:
        """Add a piece at the end of the chain."""
        self.pieces.append(CurvePiece(curve, t_start, t_end))

    @property
    def curves(self) -> list[CurveT]:
        """The curves of every piece, in order."""
        return [piece.curve for piece in self.pieces]

    def polyline(self) -> list[Point]:
        """Join the anchors of the pieces into a polyline.

        Returns:
            The start anchor of the first piece followed by the end anchor of
            every piece. Empty for an empty chain.
        """
        if not self.pieces:
            return []
        points = [self.pieces[0].curve.start]
        points.extend(piece.curve.end for piece in self.pieces)
        return points

    def is_daisy_chained(self, tolerance: float = 1e-9) -> bool:
        """Check the chain invariants.

        Args:
            tolerance: Allowed absolute deviation for both parameter values
                and anchor coordinates

        Returns:
            True if the windows start at 0, end at 1 and are contiguous, and
            every piece starts where the previous one ended
        """
        if not self.pieces:
            return False
        if abs(self.pieces[0].t_start) > tolerance or abs(self.pieces[-1].t_end - 1.0) > tolerance:
            return False

        for prev, curr in zip(self.pieces, self.pieces[1:]):
            if abs(prev.t_end - curr.t_start) > tolerance:
                return False
            if abs(prev.curve.end.x - curr.curve.start.x) > tolerance:
                return False
            if abs(prev.curve.end.y - curr.curve.start.y) > tolerance:
                return False

        return True

    def __len__(self) -> int:
        return len(self.pieces)

    def __iter__(self) -> Iterator[CurvePiece[CurveT]]:
        return iter(self.pieces)

    def __getitem__(self, index: int) -> CurvePiece[CurveT]:
        return self.pieces[index]
