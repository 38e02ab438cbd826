"""
Type Definitions for the Geodesic Calculation Engine.

This module defines the value types passed between the engine, the sampler
and the command layer: coordinates, the formula selector, and the tagged
result type used to report failures.

Design Rationale
----------------
The engine never signals failure with a sentinel number. Every operation that
can fail returns a `GeoResult`, which holds either a value or one member of
the `GeoErrorKind` taxonomy. Callers cannot mistake a failure for a computed
distance, and the taxonomy tells them which message to show.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Coordinate:
    """A geographic coordinate in decimal degrees.

    Attributes
    ----------
    lat : float
        Latitude in DEGREES. Range: [-90, 90].
    lon : float
        Longitude in DEGREES. Range: (-180, 180] once normalized.

    Notes
    -----
    Coordinates are plain values. No validation happens on construction so
    that out-of-range input can reach the engine and be reported as a
    `GeoErrorKind.RANGE` result instead of an exception.

    Examples
    --------
    >>> oslo = Coordinate(59.9139, 10.7522)
    >>> oslo.as_tuple()
    (59.9139, 10.7522)
    """
    lat: float
    lon: float

    def as_tuple(self) -> Tuple[float, float]:
        """Return ``(lat, lon)``."""
        return self.lat, self.lon

    @property
    def in_range(self) -> bool:
        """True if latitude is within ±90° and longitude within ±180°."""
        return abs(self.lat) <= 90.0 and abs(self.lon) <= 180.0


class DistanceFormula(Enum):
    """Earth model used for distance and bearing queries."""
    SPHERICAL = "haversine"
    ELLIPSOIDAL = "karney"


class GeoErrorKind(Enum):
    """Failure taxonomy for engine operations.

    RANGE
        A coordinate, bearing or distance is outside its valid domain.
    UNDEFINED
        No unique bearing exists (antipodal or coincident points).
    NO_CONVERGENCE
        The ellipsoidal iteration did not stabilize within its cap.
    SAMPLING_EXHAUSTED
        The random sampler used up its attempt budget without a hit.
    DEFECT
        A programming error, such as an unknown formula selector.
    """
    RANGE = "Value out of range"
    UNDEFINED = "Bearing is undefined"
    NO_CONVERGENCE = "Formula did not converge"
    SAMPLING_EXHAUSTED = "Random position sampling did not converge"
    DEFECT = "Internal error"


class GeodesyError(Exception):
    """Raised when a failed `GeoResult` is unwrapped.

    Attributes
    ----------
    kind : GeoErrorKind
        Which failure occurred.
    """

    def __init__(self, kind: GeoErrorKind, message: str = ""):
        self.kind = kind
        super().__init__(message or kind.value)


class GeodesyDefect(GeodesyError):
    """A condition that only a programming error can produce."""

    def __init__(self, message: str):
        super().__init__(GeoErrorKind.DEFECT, message)


@dataclass(frozen=True)
class GeoResult(Generic[T]):
    """Outcome of an engine operation.

    Exactly one of `value` and `error` is set.

    Attributes
    ----------
    value : T, optional
        The computed value on success.
    error : GeoErrorKind, optional
        The failure kind on failure.
    message : str
        Human-readable detail for failures.

    Examples
    --------
    >>> GeoResult.success(42.0).unwrap()
    42.0
    >>> GeoResult.failure(GeoErrorKind.RANGE).ok
    False
    """
    value: Optional[T] = None
    error: Optional[GeoErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: T) -> "GeoResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: GeoErrorKind, message: str = "") -> "GeoResult[T]":
        return cls(error=kind, message=message or kind.value)

    @property
    def ok(self) -> bool:
        """True if the operation produced a value."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise `GeodesyError` for a failure."""
        if self.error is not None:
            raise GeodesyError(self.error, self.message)
        return self.value
