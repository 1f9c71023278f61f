"""Configuration management for curveflat.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ToleranceConfig: Tolerances for the primitive geometry predicates
- FlatteningConfig: Flatness algorithm, tolerance and depth for halving
- DegreeReductionConfig: Precision and depth for cubic to quadratic reduction
- LoggingConfig: Logging settings
- CurveflatSettings: Main application settings
"""

from curveflat.config.settings import (
    DEFAULT_TOLERANCES,
    CombineStrategy,
    CurveflatSettings,
    DegreeReductionConfig,
    DistanceMetric,
    FlatnessAlgorithmType,
    FlatteningConfig,
    LoggingConfig,
    ToleranceConfig,
    get_default_settings,
)

__all__ = [
    "DEFAULT_TOLERANCES",
    "CombineStrategy",
    "CurveflatSettings",
    "DegreeReductionConfig",
    "DistanceMetric",
    "FlatnessAlgorithmType",
    "FlatteningConfig",
    "LoggingConfig",
    "ToleranceConfig",
    "get_default_settings",
]
