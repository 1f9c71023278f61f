"""Internal de Casteljau kernels.

This is an internal module containing the point-level construction steps
shared by splitting and evaluation. Not intended for public use.
"""

from curveflat.domain import Point

QuadPoints = tuple[Point, Point, Point]
CubicPoints = tuple[Point, Point, Point, Point]


def halve_quadratic(p0: Point, p1: Point, p2: Point) -> tuple[QuadPoints, QuadPoints]:
    """Split a quadratic at t=0.5 using averaging only.

    Args:
        p0: Start anchor
        p1: Control point
        p2: End anchor

    Returns:
        Control points of the left and right halves
    """
    q0 = p0.midpoint(p1)
    q1 = p1.midpoint(p2)
    mid = q0.midpoint(q1)
    return (p0, q0, mid), (mid, q1, p2)


def halve_cubic(p0: Point, p1: Point, p2: Point, p3: Point) -> tuple[CubicPoints, CubicPoints]:
    """Split a cubic at t=0.5 using averaging only.

    Args:
        p0: Start anchor
        p1: First control point
        p2: Second control point
        p3: End anchor

    Returns:
        Control points of the left and right halves
    """
    # First level
    q0 = p0.midpoint(p1)
    q1 = p1.midpoint(p2)
    q2 = p2.midpoint(p3)

    # Second level
    r0 = q0.midpoint(q1)
    r1 = q1.midpoint(q2)

    # Third level (point on curve)
    mid = r0.midpoint(r1)

    return (p0, q0, r0, mid), (mid, r1, q2, p3)


def divide_quadratic(
    p0: Point, p1: Point, p2: Point, t: float
) -> tuple[QuadPoints, QuadPoints]:
    """Split a quadratic at parameter t.

    Args:
        p0: Start anchor
        p1: Control point
        p2: End anchor
        t: Split parameter

    Returns:
        Control points of the pieces covering [0, t] and [t, 1]
    """
    q0 = p0.lerp(p1, t)
    q1 = p1.lerp(p2, t)
    on_curve = q0.lerp(q1, t)
    return (p0, q0, on_curve), (on_curve, q1, p2)


def divide_cubic(
    p0: Point, p1: Point, p2: Point, p3: Point, t: float
) -> tuple[CubicPoints, CubicPoints]:
    """Split a cubic at parameter t.

    Args:
        p0: Start anchor
        p1: First control point
        p2: Second control point
        p3: End anchor
        t: Split parameter

    Returns:
        Control points of the pieces covering [0, t] and [t, 1]
    """
    q0 = p0.lerp(p1, t)
    q1 = p1.lerp(p2, t)
    q2 = p2.lerp(p3, t)

    r0 = q0.lerp(q1, t)
    r1 = q1.lerp(q2, t)

    on_curve = r0.lerp(r1, t)

    return (p0, q0, r0, on_curve), (on_curve, r1, q2, p3)


def eval_quadratic(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    """Evaluate a quadratic in expanded (Horner) polynomial form.

    With a = p1 - p0 and b = p2 - p1 - a, P(t) = p0 + t * (2a + t * b).
    """
    ax = p1.x - p0.x
    ay = p1.y - p0.y
    bx = p2.x - p1.x - ax
    by = p2.y - p1.y - ay
    return Point(p0.x + t * (2.0 * ax + t * bx), p0.y + t * (2.0 * ay + t * by))


def eval_cubic(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate a cubic in expanded (Horner) polynomial form.

    With a = p1 - p0, b = p2 - p1 - a and c = p3 - p2 - a - 2b,
    P(t) = p0 + t * (3a + t * (3b + t * c)).
    """
    ax = p1.x - p0.x
    ay = p1.y - p0.y
    bx = p2.x - p1.x - ax
    by = p2.y - p1.y - ay
    cx = p3.x - p2.x - ax - 2.0 * bx
    cy = p3.y - p2.y - ay - 2.0 * by
    return Point(
        p0.x + t * (3.0 * ax + t * (3.0 * bx + t * cx)),
        p0.y + t * (3.0 * ay + t * (3.0 * by + t * cy)),
    )
