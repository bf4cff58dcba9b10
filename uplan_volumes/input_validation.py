"""Runtime input validation for critical functions.

This module provides raising validators used at the boundaries of the
volume pipeline: configuration scalars, waypoint coordinates and the
compression stride. Each validator raises a library exception with a clear
message; ``ValidationContext`` collects several failures and raises them
together so a caller sees every bad field in one go.

Usage:
    with ValidationContext("Volume configuration") as ctx:
        ctx.validate(tse_h, lambda v: validate_positive(v, "tse_h"), "tse_h")
        ctx.validate(factor, validate_compression_factor, "compression_factor")
"""

import math
from typing import Any, Callable, List

from .exceptions import ConfigurationError, InvalidCoordinateError, InvalidAltitudeError
from .constants import LAT_MIN, LAT_MAX, LON_MIN, LON_MAX, ALT_MIN_M, ALT_MAX_M


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_latitude(lat: float, context: str = "") -> None:
    """
    Validate latitude value.

    Args:
        lat: Latitude value
        context: Optional context for error message

    Raises:
        InvalidCoordinateError: If latitude is not numeric or out of range
    """
    if not _is_number(lat):
        raise InvalidCoordinateError(f"Latitude must be numeric{context}", latitude=lat)

    if not (LAT_MIN <= lat <= LAT_MAX):
        raise InvalidCoordinateError(
            f"Latitude out of range [{LAT_MIN}, {LAT_MAX}]{context}", latitude=lat
        )


def validate_longitude(lon: float, context: str = "") -> None:
    """
    Validate longitude value.

    Args:
        lon: Longitude value
        context: Optional context for error message

    Raises:
        InvalidCoordinateError: If longitude is not numeric or out of range
    """
    if not _is_number(lon):
        raise InvalidCoordinateError(
            f"Longitude must be numeric{context}", longitude=lon
        )

    if not (LON_MIN <= lon <= LON_MAX):
        raise InvalidCoordinateError(
            f"Longitude out of range [{LON_MIN}, {LON_MAX}]{context}", longitude=lon
        )


def validate_altitude(alt: float, context: str = "") -> None:
    """
    Validate altitude value.

    Args:
        alt: Altitude in meters
        context: Optional context for error message

    Raises:
        InvalidAltitudeError: If altitude is not numeric or out of range
    """
    if not _is_number(alt):
        raise InvalidAltitudeError(f"Altitude must be numeric{context}", altitude=alt)

    if not (ALT_MIN_M <= alt <= ALT_MAX_M):
        raise InvalidAltitudeError(
            f"Altitude out of range [{ALT_MIN_M}, {ALT_MAX_M}]m{context}", altitude=alt
        )


def validate_coordinate_pair(lat: float, lon: float, context: str = "") -> None:
    """
    Validate a coordinate pair.

    Raises:
        InvalidCoordinateError: If either value is invalid
    """
    validate_latitude(lat, context)
    validate_longitude(lon, context)


def validate_positive(value: Any, name: str = "value") -> None:
    """
    Validate that a value is a finite positive number.

    Args:
        value: Number to check
        name: Name of the value for error message

    Raises:
        ConfigurationError: If value is not numeric, not finite or not positive
    """
    if not _is_number(value):
        raise ConfigurationError(
            f"{name} must be numeric, got {type(value).__name__}"
        )
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")


def validate_compression_factor(value: Any, name: str = "compression_factor") -> None:
    """
    Validate a waypoint decimation stride.

    Raises:
        ConfigurationError: If value is not an integer >= 1
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigurationError(
            f"{name} must be int, got {type(value).__name__}"
        )
    if value < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {value}")


class ValidationContext:
    """Context manager for validation error collection.

    Collects multiple validation errors and raises them together.

    Example:
        with ValidationContext("Processing waypoint") as ctx:
            ctx.validate(lat, validate_latitude, "latitude")
            ctx.validate(lon, validate_longitude, "longitude")
    """

    def __init__(self, operation: str):
        self.operation = operation
        self.errors: List[str] = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Raise ConfigurationError if any errors were collected.

        Exceptions raised inside the block propagate unchanged.
        """
        if exc_type is None and self.errors:
            error_msg = f"{self.operation} failed:\n" + "\n".join(
                f"  - {err}" for err in self.errors
            )
            raise ConfigurationError(error_msg)
        return False

    def validate(self, value: Any, validator: Callable[[Any], None], name: str) -> None:
        """
        Run a validator and collect any errors.

        Args:
            value: Value to validate
            validator: Validation function to call
            name: Name for error messages
        """
        try:
            validator(value)
        except (ConfigurationError, InvalidCoordinateError, InvalidAltitudeError) as e:
            self.errors.append(f"{name}: {str(e)}")
