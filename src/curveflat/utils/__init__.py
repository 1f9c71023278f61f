"""Utility functions for curveflat.

This module provides utility functions including:

- Logging setup and configuration
- Subdivision statistics
"""

from curveflat.utils.logging import (
    SubdivisionLogger,
    SubdivisionStats,
    configure_logging,
)

__all__ = [
    "SubdivisionLogger",
    "SubdivisionStats",
    "configure_logging",
]
