"""
Common utilities and infrastructure for geocalc.

This package provides foundational components used across all modules:
- Geodetic constants with provenance and the numerical precision contract
- Value types and the tagged result type used for error reporting
- Unit registry for distance conversions
- Logging infrastructure
"""

from common.constants import GeodeticConstants
from common.units import ureg, Q_, to_meters, from_meters
from common.types import (
    Coordinate,
    DistanceFormula,
    GeoErrorKind,
    GeoResult,
    GeodesyError,
    GeodesyDefect,
)
from common.logging_config import get_logger, set_verbosity

__all__ = [
    "GeodeticConstants",
    "ureg",
    "Q_",
    "to_meters",
    "from_meters",
    "Coordinate",
    "DistanceFormula",
    "GeoErrorKind",
    "GeoResult",
    "GeodesyError",
    "GeodesyDefect",
    "get_logger",
    "set_verbosity",
]
