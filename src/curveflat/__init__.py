"""curveflat - Adaptive flattening and degree reduction of Bezier curves.

curveflat approximates quadratic and cubic Bezier curves by line segments
(flattening) or by chains of quadratics (degree reduction) within a
caller-specified tolerance, using exact de Casteljau splitting and pluggable
flatness criteria.

Example:
    >>> from curveflat import CubicCurve, adaptive_degree_reduction_list
    >>> cubic = CubicCurve.from_coords(0, 0, 0, 100, 100, 100, 100, 0)
    >>> chain = adaptive_degree_reduction_list(cubic, precision=0.5)

Or from the command line:
    $ curveflat reduce 0 0 0 100 100 100 100 0 --precision 0.5
"""

from curveflat.core import (
    adaptive_degree_reduction,
    adaptive_degree_reduction_list,
    adaptive_halving,
    adaptive_halving_list,
    compute_inflections,
    flatten,
    half_split,
    point_on_curve,
    split,
    split_multi,
    tangent_at,
)
from curveflat.domain import CubicCurve, Point, QuadraticCurve, Segment, SegmentChain

__version__ = "0.1.0"

__all__ = [
    "CubicCurve",
    "Point",
    "QuadraticCurve",
    "Segment",
    "SegmentChain",
    "__version__",
    "adaptive_degree_reduction",
    "adaptive_degree_reduction_list",
    "adaptive_halving",
    "adaptive_halving_list",
    "compute_inflections",
    "flatten",
    "half_split",
    "point_on_curve",
    "split",
    "split_multi",
    "tangent_at",
]
