"""Core algorithms for curveflat.

This module contains the curve subdivision engine:

- Geometry primitives (distances, collinearity, half-plane separation)
- Exact splitting (de Casteljau at one, half, or several parameters)
- Evaluation (points, tangents, inflections)
- Flatness algorithms and subdivision criteria
- Adaptive halving and adaptive cubic to quadratic degree reduction

All functions are pure and operate on immutable curves. Drivers stream their
output through a consumer callback or a lazy iterator, in parameter order.

Key functions:
- split / half_split / split_multi: Exact curve splitting
- point_on_curve / tangent_at / compute_inflections: Evaluation
- adaptive_halving / adaptive_halving_list: Flatten by repeated halving
- adaptive_degree_reduction / adaptive_degree_reduction_list: Cubic to quadratics
- flatten / bezier_flatten: Polyline output

Key classes:
- RobustConvexHullFlatness, NaiveConvexHullFlatness, LineDefectFlatness
- GenericSubdivisionCriterion, MidPointApproxCriterion
- SegmentCollector: Consumer that builds a SegmentChain
"""

from curveflat.core.criteria import (
    MIN_PRECISION,
    MIN_TOLERANCE,
    GenericSubdivisionCriterion,
    MidPointApproxCriterion,
    SubdivisionCriterion,
    clamp_tolerance,
    create_subdivision_criterion,
    criterion_from_config,
    default_criterion,
)
from curveflat.core.degree_reduction import (
    adaptive_degree_reduction,
    adaptive_degree_reduction_list,
    adaptive_halving_degree_reduction,
    adaptive_halving_degree_reduction_list,
    approximation_defect,
    iter_adaptive_degree_reduction,
    iter_adaptive_halving_degree_reduction,
    mid_point_approximation,
)
from curveflat.core.evaluate import (
    compute_inflections,
    midpoint_and_tangent,
    point_on_curve,
    tangent_at,
)
from curveflat.core.flatness import (
    FlatnessAlgorithm,
    LineDefectFlatness,
    NaiveConvexHullFlatness,
    RobustConvexHullFlatness,
    create_flatness_algorithm,
)
from curveflat.core.flatten import bezier_flatten, flatten
from curveflat.core.geometry import (
    are_points_collinear,
    is_degenerate,
    line_separates_points,
    point_distance,
    point_to_line_dist,
    point_to_line_sq_dist,
    point_to_point_chebyshev,
    point_to_point_dist,
    point_to_point_manhattan,
    point_to_point_sq_dist,
    point_to_segment_dist,
    point_to_segment_sq_dist,
)
from curveflat.core.halving import (
    PieceConsumer,
    SegmentCollector,
    adaptive_halving,
    adaptive_halving_list,
    iter_adaptive_halving,
)
from curveflat.core.split import SplitFailure, SplitResult, half_split, split, split_multi

__all__ = [
    "MIN_PRECISION",
    "MIN_TOLERANCE",
    # Flatness algorithms
    "FlatnessAlgorithm",
    # Criteria
    "GenericSubdivisionCriterion",
    "LineDefectFlatness",
    "MidPointApproxCriterion",
    "NaiveConvexHullFlatness",
    # Drivers
    "PieceConsumer",
    "RobustConvexHullFlatness",
    "SegmentCollector",
    # Splitting
    "SplitFailure",
    "SplitResult",
    "SubdivisionCriterion",
    "adaptive_degree_reduction",
    "adaptive_degree_reduction_list",
    "adaptive_halving",
    "adaptive_halving_degree_reduction",
    "adaptive_halving_degree_reduction_list",
    "adaptive_halving_list",
    "approximation_defect",
    # Geometry functions
    "are_points_collinear",
    "bezier_flatten",
    "clamp_tolerance",
    # Evaluation
    "compute_inflections",
    "create_flatness_algorithm",
    "create_subdivision_criterion",
    "criterion_from_config",
    "default_criterion",
    "flatten",
    "half_split",
    "is_degenerate",
    "iter_adaptive_degree_reduction",
    "iter_adaptive_halving",
    "iter_adaptive_halving_degree_reduction",
    "line_separates_points",
    "mid_point_approximation",
    "midpoint_and_tangent",
    "point_distance",
    "point_on_curve",
    "point_to_line_dist",
    "point_to_line_sq_dist",
    "point_to_point_chebyshev",
    "point_to_point_dist",
    "point_to_point_manhattan",
    "point_to_point_sq_dist",
    "point_to_segment_dist",
    "point_to_segment_sq_dist",
    "split",
    "split_multi",
    "tangent_at",
]
