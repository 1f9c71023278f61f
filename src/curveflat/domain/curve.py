"""Core geometric types for curve representation.

This module defines the value types the subdivision engine works with:
- Point: A 2D point
- Segment: A straight line segment between two points
- QuadraticCurve: A quadratic Bezier (two anchors, one control point)
- CubicCurve: A cubic Bezier (two anchors, two control points)
"""

from dataclasses import dataclass
from typing import Any, ClassVar, TypeAlias


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts. Two points are equal
    exactly when their coordinates are.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def lerp(self, other: "Point", t: float) -> "Point":
        """Linear interpolation towards another point.

        Args:
            other: Target point (reached at t=1)
            t: Interpolation ratio, not restricted to [0, 1]

        Returns:
            The point self + t * (other - self)
        """
        return Point(self.x + t * (other.x - self.x), self.y + t * (other.y - self.y))

    def midpoint(self, other: "Point") -> "Point":
        """Return the point halfway between this point and another."""
        return Point((self.x + other.x) / 2.0, (self.y + other.y) / 2.0)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class Segment:
    """A straight line segment between two points.

    Used for tangents (not normalized) and for the edges of flattened
    polylines.

    Attributes:
        start: First point
        end: Second point
    """

    start: Point
    end: Point

    @property
    def direction(self) -> tuple[float, float]:
        """Direction vector (end - start), not normalized."""
        return (self.end.x - self.start.x, self.end.y - self.start.y)

    def to_tuple(self) -> tuple[tuple[float, float], tuple[float, float]]:
        """Convert to ((x0, y0), (x1, y1))."""
        return (self.start.to_tuple(), self.end.to_tuple())


@dataclass(frozen=True, slots=True)
class QuadraticCurve:
    """A quadratic Bezier curve.

    Attributes:
        start: Start anchor (t=0)
        control: Control point
        end: End anchor (t=1)
    """

    start: Point
    control: Point
    end: Point

    degree: ClassVar[int] = 2

    @property
    def points(self) -> tuple[Point, Point, Point]:
        """All defining points, in curve order."""
        return (self.start, self.control, self.end)

    @property
    def controls(self) -> tuple[Point]:
        """The off-curve control points."""
        return (self.control,)

    @classmethod
    def from_coords(
        cls, x0: float, y0: float, cx: float, cy: float, x1: float, y1: float
    ) -> "QuadraticCurve":
        """Build a quadratic from six raw coordinates."""
        return cls(Point(x0, y0), Point(cx, cy), Point(x1, y1))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with a "points" list of point dictionaries
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuadraticCurve":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with a "points" list of 3 point dictionaries

        Returns:
            QuadraticCurve instance
        """
        start, control, end = (Point.from_dict(p) for p in data["points"])
        return cls(start, control, end)


@dataclass(frozen=True, slots=True)
class CubicCurve:
    """A cubic Bezier curve.

    Attributes:
        start: Start anchor (t=0)
        control1: First control point
        control2: Second control point
        end: End anchor (t=1)
    """

    start: Point
    control1: Point
    control2: Point
    end: Point

    degree: ClassVar[int] = 3

    @property
    def points(self) -> tuple[Point, Point, Point, Point]:
        """All defining points, in curve order."""
        return (self.start, self.control1, self.control2, self.end)

    @property
    def controls(self) -> tuple[Point, Point]:
        """The off-curve control points."""
        return (self.control1, self.control2)

    @classmethod
    def from_coords(
        cls,
        x0: float,
        y0: float,
        cx1: float,
        cy1: float,
        cx2: float,
        cy2: float,
        x1: float,
        y1: float,
    ) -> "CubicCurve":
        """Build a cubic from eight raw coordinates."""
        return cls(Point(x0, y0), Point(cx1, cy1), Point(cx2, cy2), Point(x1, y1))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary with a "points" list of point dictionaries
        """
        return {"points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CubicCurve":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with a "points" list of 4 point dictionaries

        Returns:
            CubicCurve instance
        """
        start, control1, control2, end = (Point.from_dict(p) for p in data["points"])
        return cls(start, control1, control2, end)


Curve: TypeAlias = QuadraticCurve | CubicCurve


def curve_from_points(points: list[Point] | tuple[Point, ...]) -> Curve:
    """Build a quadratic or cubic curve from its defining points.

    Args:
        points: 3 points (quadratic) or 4 points (cubic)

    Returns:
        The matching curve type

    Raises:
        ValueError: If the number of points is not 3 or 4
    """
    if len(points) == 3:
        return QuadraticCurve(*points)
    if len(points) == 4:
        return CubicCurve(*points)
    raise ValueError(f"Expected 3 or 4 points for a Bezier curve, got {len(points)}")
