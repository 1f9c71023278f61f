"""Exact curve splitting.

Splitting uses de Casteljau's construction, so every piece is an exact
reparametrization of part of the input curve and consecutive pieces share
their anchor point.

- half_split: split at t=0.5 using averaging only
- split: split at any t in [0, 1], reporting bad input as a failed result
- split_multi: split at an ordered list of parameters
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, cast

from curveflat.core._bezier import divide_cubic, divide_quadratic, halve_cubic, halve_quadratic
from curveflat.domain import CubicCurve, CurveT, QuadraticCurve
from curveflat.exceptions import MissingCurveError, ParameterOutOfRangeError


class SplitFailure(str, Enum):
    """Why a split was not performed."""

    OUT_OF_RANGE = "out_of_range"
    NULL_INPUT = "null_input"


@dataclass(frozen=True)
class SplitResult(Generic[CurveT]):
    """Outcome of `split`.

    Attributes:
        first: Piece covering [0, t], or None if the split failed
        second: Piece covering [t, 1], or None if the split failed
        failure: Reason the split was not performed, None on success
        t: The requested split parameter
    """

    first: CurveT | None = None
    second: CurveT | None = None
    failure: SplitFailure | None = None
    t: float = 0.0

    @property
    def performed(self) -> bool:
        """True if both pieces were produced."""
        return self.failure is None

    def unwrap(self) -> tuple[CurveT, CurveT]:
        """Return both pieces, raising if the split failed.

        Returns:
            Tuple of (first, second)

        Raises:
            MissingCurveError: If no curve was given
            ParameterOutOfRangeError: If t was outside [0, 1]
        """
        if self.failure == SplitFailure.NULL_INPUT:
            raise MissingCurveError("split")
        if self.failure == SplitFailure.OUT_OF_RANGE:
            raise ParameterOutOfRangeError(self.t)
        return cast(CurveT, self.first), cast(CurveT, self.second)


def half_split(curve: CurveT) -> tuple[CurveT, CurveT]:
    """Split a curve at its parametric midpoint.

    Only averages are used, so the result is the most accurate split
    available for t=0.5.

    Args:
        curve: Quadratic or cubic curve

    Returns:
        Tuple of (first half, second half)

    Raises:
        MissingCurveError: If curve is None
    """
    if curve is None:
        raise MissingCurveError("half_split")

    if isinstance(curve, CubicCurve):
        left, right = halve_cubic(*curve.points)
        return CubicCurve(*left), CubicCurve(*right)

    left, right = halve_quadratic(*curve.points)
    return QuadraticCurve(*left), QuadraticCurve(*right)


def _divide(curve: CurveT, t: float) -> tuple[CurveT, CurveT]:
    if isinstance(curve, CubicCurve):
        left, right = divide_cubic(*curve.points, t)
        return CubicCurve(*left), CubicCurve(*right)

    left, right = divide_quadratic(*curve.points, t)
    return QuadraticCurve(*left), QuadraticCurve(*right)


def split(curve: CurveT | None, t: float) -> SplitResult[CurveT]:
    """Split a curve at parameter t.

    Invalid input does not raise: the returned result carries the failure
    reason instead. Use `SplitResult.unwrap()` to get exceptions.

    Args:
        curve: Quadratic or cubic curve
        t: Split parameter, must be in [0, 1]

    Returns:
        SplitResult with the pieces covering [0, t] and [t, 1]

    Examples:
        >>> c = QuadraticCurve.from_coords(0.0, 0.0, 1.0, 2.0, 2.0, 0.0)
        >>> split(c, 0.5).first.end
        Point(x=1.0, y=1.0)
    """
    if curve is None:
        return SplitResult(failure=SplitFailure.NULL_INPUT, t=t)
    if not 0.0 <= t <= 1.0:
        return SplitResult(failure=SplitFailure.OUT_OF_RANGE, t=t)

    first, second = _divide(curve, t)
    return SplitResult(first=first, second=second, t=t)


def split_multi(curve: CurveT, params: list[float]) -> list[CurveT]:
    """Split a curve at several parameters.

    The parameter list is sorted in place. Each split is applied to the
    remaining tail, with the parameter remapped into the tail's own range.

    Args:
        curve: Quadratic or cubic curve
        params: Split parameters, each in [0, 1)

    Returns:
        len(params) + 1 daisy-chained pieces, ordered by parameter. An empty
        list returns [curve].

    Raises:
        MissingCurveError: If curve is None
        ParameterOutOfRangeError: If any parameter is outside [0, 1)
    """
    if curve is None:
        raise MissingCurveError("split_multi")

    params.sort()
    for t in params:
        if not 0.0 <= t < 1.0:
            raise ParameterOutOfRangeError(t, "[0, 1)")

    pieces: list[CurveT] = []
    remainder = curve
    last = 0.0
    for t in params:
        first, remainder = _divide(remainder, (t - last) / (1.0 - last))
        pieces.append(first)
        last = t
    pieces.append(remainder)
    return pieces
