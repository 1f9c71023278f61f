"""Configuration settings for curveflat."""

import math
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class DistanceMetric(str, Enum):
    """Point-to-point distance used by the line-defect flatness."""

    EUCLIDEAN = "euclidean"
    MANHATTAN = "manhattan"
    CHEBYSHEV = "chebyshev"


class CombineStrategy(str, Enum):
    """How per-control-point distances are combined for cubics."""

    SUM = "sum"
    MAX = "max"


class FlatnessAlgorithmType(str, Enum):
    """Available flatness algorithms."""

    ROBUST_CONVEX_HULL = "robust_convex_hull"
    NAIVE_CONVEX_HULL = "naive_convex_hull"
    LINE_DEFECT = "line_defect"


class ToleranceConfig(BaseModel):
    """Tolerances used by the primitive geometry predicates.

    Values below these thresholds are treated as zero: distances below
    `distance` make points indiscernible, twice-areas below `area` make
    points collinear.
    """

    model_config = ConfigDict(frozen=True)

    distance: float = Field(
        default=1.0e-5,
        gt=0.0,
        description="Distances under this value are considered zero",
    )
    angle: float = Field(
        default=math.pi * 1.0e-5 / 180.0 / 3600.0,
        gt=0.0,
        description="Angles (radians) under this value are considered zero",
    )
    area: float = Field(
        default=1.0e-10,
        gt=0.0,
        description="Areas under this value are considered zero",
    )


class FlatteningConfig(BaseModel):
    """Configuration for adaptive halving (flattening)."""

    algorithm: FlatnessAlgorithmType = Field(
        default=FlatnessAlgorithmType.ROBUST_CONVEX_HULL,
        description="Flatness algorithm driving the subdivision",
    )
    tolerance: float = Field(
        default=1.0e-5,
        gt=0.0,
        description="Maximum accepted flatness defect",
    )
    metric: DistanceMetric = Field(
        default=DistanceMetric.EUCLIDEAN,
        description="Distance metric (line-defect algorithm only)",
    )
    combine: CombineStrategy = Field(
        default=CombineStrategy.SUM,
        description="Sum or max of the control point defects (line-defect, cubics only)",
    )
    max_depth: int = Field(
        default=32,
        ge=1,
        le=64,
        description="Maximum halving depth; pieces at this depth are emitted as-is",
    )


class DegreeReductionConfig(BaseModel):
    """Configuration for cubic to quadratic degree reduction."""

    precision: float = Field(
        default=1.0,
        gt=0.0,
        description="Maximum deviation between the cubic and its quadratic chain",
    )
    max_depth: int = Field(
        default=1024,
        ge=1,
        le=100_000,
        description="Maximum number of one-step refinements of the middle part",
    )
    use_halving: bool = Field(
        default=False,
        description="Use plain adaptive halving instead of optimal split points",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class CurveflatSettings(BaseModel):
    """Main application settings."""

    tolerances: ToleranceConfig = Field(default_factory=ToleranceConfig)
    flattening: FlatteningConfig = Field(default_factory=FlatteningConfig)
    degree_reduction: DegreeReductionConfig = Field(default_factory=DegreeReductionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_TOLERANCES = ToleranceConfig()


def get_default_settings() -> CurveflatSettings:
    """Get default application settings."""
    return CurveflatSettings()
