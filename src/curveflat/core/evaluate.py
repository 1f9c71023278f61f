"""Curve evaluation.

Point and tangent evaluation for quadratic and cubic curves, and inflection
point computation for cubics. Evaluation is defined for any real t, not just
[0, 1].
"""

import math

from curveflat.core._bezier import eval_cubic, eval_quadratic
from curveflat.domain import CubicCurve, Curve, Point, Segment
from curveflat.exceptions import MissingCurveError


def point_on_curve(curve: Curve, t: float) -> Point:
    """Evaluate the curve at parameter t.

    Args:
        curve: Quadratic or cubic curve
        t: Parameter; values outside [0, 1] extrapolate the polynomial

    Returns:
        The point on the curve at t

    Raises:
        MissingCurveError: If curve is None
    """
    if curve is None:
        raise MissingCurveError("point_on_curve")
    if isinstance(curve, CubicCurve):
        return eval_cubic(*curve.points, t)
    return eval_quadratic(*curve.points, t)


def tangent_at(curve: Curve, t: float) -> tuple[Point, Segment]:
    """Compute the point and tangent of the curve at parameter t.

    One de Casteljau step short of the full construction: for a cubic the
    tangent joins the two second-level points, for a quadratic the two
    first-level points. The point lies on that segment at ratio t.

    Args:
        curve: Quadratic or cubic curve
        t: Parameter

    Returns:
        Tuple of (point on curve, tangent segment). The segment is not
        normalized and collapses to a point where the derivative vanishes.

    Raises:
        MissingCurveError: If curve is None
    """
    if curve is None:
        raise MissingCurveError("tangent_at")

    if isinstance(curve, CubicCurve):
        ip0 = curve.start.lerp(curve.control1, t)
        ip1 = curve.control1.lerp(curve.control2, t)
        ip2 = curve.control2.lerp(curve.end, t)
        tangent = Segment(ip0.lerp(ip1, t), ip1.lerp(ip2, t))
    else:
        tangent = Segment(curve.start.lerp(curve.control, t), curve.control.lerp(curve.end, t))

    return tangent.start.lerp(tangent.end, t), tangent


def midpoint_and_tangent(curve: Curve) -> tuple[Point, Segment]:
    """Point and tangent at t=0.5, using averaging only.

    Raises:
        MissingCurveError: If curve is None
    """
    if curve is None:
        raise MissingCurveError("midpoint_and_tangent")

    if isinstance(curve, CubicCurve):
        ip0 = curve.start.midpoint(curve.control1)
        ip1 = curve.control1.midpoint(curve.control2)
        ip2 = curve.control2.midpoint(curve.end)
        tangent = Segment(ip0.midpoint(ip1), ip1.midpoint(ip2))
    else:
        tangent = Segment(curve.start.midpoint(curve.control), curve.control.midpoint(curve.end))

    return tangent.start.midpoint(tangent.end), tangent


def compute_inflections(curve: CubicCurve) -> list[float]:
    """Find the inflection points of a cubic.

    Inflections are the roots of the curvature numerator B'(t) x B''(t),
    which reduces (up to a constant factor) to c0 + c1*t + c2*t^2. In
    power-basis terms, with a = control1 - start, b = control2 - control1 - a
    and c = end - control2 - a - 2b, the coefficients are c0 = a x b,
    c1 = a x c and c2 = b x c.

    Args:
        curve: Cubic curve

    Returns:
        Parameters strictly inside (0, 1), ascending and without duplicates.
        Empty if the curve has no inflection (or the numerator vanishes
        identically, as for straight or parabolic cubics).

    Raises:
        MissingCurveError: If curve is None
    """
    if curve is None:
        raise MissingCurveError("compute_inflections")

    p0, k1, k2, p1 = curve.points
    ax = k1.x - p0.x
    ay = k1.y - p0.y
    bx = k2.x - k1.x - ax
    by = k2.y - k1.y - ay
    cx = p1.x - k2.x - ax - 2.0 * bx
    cy = p1.y - k2.y - ay - 2.0 * by

    c0 = ax * by - ay * bx
    c1 = ax * cy - ay * cx
    c2 = bx * cy - by * cx

    roots: list[float] = []
    if c2 != 0.0:
        disc = c1 * c1 - 4.0 * c2 * c0
        if disc >= 0.0:
            q = -0.5 * (c1 + math.copysign(math.sqrt(disc), c1))
            roots.append(q / c2)
            if q != 0.0:
                roots.append(c0 / q)
    elif c1 != 0.0:
        roots.append(-c0 / c1)

    return sorted({t for t in roots if 0.0 < t < 1.0})
