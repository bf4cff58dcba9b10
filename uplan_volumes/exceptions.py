"""Custom exceptions for the U-plan volume generator."""

__all__ = [
    "UplanVolumesError",
    "InvalidArgumentError",
    "TrajectoryParseError",
    "InvalidCoordinateError",
    "InvalidAltitudeError",
    "ConfigurationError",
    "DataExportError",
]


class UplanVolumesError(Exception):
    """Base exception for all U-plan volume errors."""

    pass


class InvalidArgumentError(UplanVolumesError, ValueError):
    """Raised when an operation receives an argument it cannot work with."""

    def __init__(self, message: str, argument: str = None):
        self.argument = argument
        if argument:
            message = f"{message} (Argument: {argument})"
        super().__init__(message)


class TrajectoryParseError(UplanVolumesError):
    """Raised when a trajectory CSV cannot be parsed."""

    def __init__(self, message: str, file_path: str = None, line_number: int = None):
        self.file_path = file_path
        self.line_number = line_number
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Format error message with file and line information."""
        parts = [message]
        if self.file_path:
            parts.append(f"File: {self.file_path}")
        if self.line_number:
            parts.append(f"Line: {self.line_number}")
        return " | ".join(parts)


class InvalidCoordinateError(UplanVolumesError):
    """Raised when coordinate data is invalid."""

    def __init__(self, message: str, latitude: float = None, longitude: float = None):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        if self.latitude is not None and self.longitude is not None:
            return f"{message} (lat: {self.latitude}, lon: {self.longitude})"
        if self.latitude is not None:
            return f"{message} (lat: {self.latitude})"
        if self.longitude is not None:
            return f"{message} (lon: {self.longitude})"
        return message


class InvalidAltitudeError(UplanVolumesError):
    """Raised when altitude data is invalid."""

    def __init__(self, message: str, altitude: float = None):
        self.altitude = altitude
        if altitude is not None:
            message = f"{message} (Altitude: {altitude}m)"
        super().__init__(message)


class ConfigurationError(UplanVolumesError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, config_key: str = None):
        self.config_key = config_key
        if config_key:
            message = f"{message} (Key: {config_key})"
        super().__init__(message)


class DataExportError(UplanVolumesError):
    """Raised when writing a U-plan document fails."""

    def __init__(self, message: str, output_path: str = None):
        self.output_path = output_path
        if output_path:
            message = f"{message} (Output: {output_path})"
        super().__init__(message)
