"""Tests for exceptions module."""

import pytest
from uplan_volumes.exceptions import (
    UplanVolumesError,
    InvalidArgumentError,
    TrajectoryParseError,
    InvalidCoordinateError,
    InvalidAltitudeError,
    ConfigurationError,
    DataExportError,
)


class TestUplanVolumesError:
    """Tests for UplanVolumesError base exception."""

    def test_base_exception(self):
        """Test raising base exception."""
        with pytest.raises(UplanVolumesError):
            raise UplanVolumesError("Test error")

    def test_base_exception_message(self):
        """Test base exception message."""
        assert str(UplanVolumesError("Test message")) == "Test message"

    @pytest.mark.parametrize(
        "error_class",
        [
            InvalidArgumentError,
            TrajectoryParseError,
            InvalidCoordinateError,
            InvalidAltitudeError,
            ConfigurationError,
            DataExportError,
        ],
    )
    def test_all_inherit_from_base(self, error_class):
        """Test every library error can be caught as UplanVolumesError."""
        assert issubclass(error_class, UplanVolumesError)


class TestInvalidArgumentError:
    """Tests for InvalidArgumentError exception."""

    def test_simple_message(self):
        """Test error with just a message."""
        assert str(InvalidArgumentError("Bad input")) == "Bad input"

    def test_with_argument(self):
        """Test error naming the argument."""
        error = InvalidArgumentError("Bad input", argument="points")
        assert str(error) == "Bad input (Argument: points)"
        assert error.argument == "points"

    def test_is_value_error(self):
        """Test error can be caught as ValueError."""
        with pytest.raises(ValueError):
            raise InvalidArgumentError("Bad input")


class TestTrajectoryParseError:
    """Tests for TrajectoryParseError exception."""

    def test_simple_parse_error(self):
        """Test parse error with just message."""
        assert str(TrajectoryParseError("Parse failed")) == "Parse failed"

    def test_parse_error_with_file_and_line(self):
        """Test parse error with file and line."""
        error = TrajectoryParseError("Parse failed", file_path="flight.csv", line_number=42)
        assert str(error) == "Parse failed | File: flight.csv | Line: 42"
        assert error.file_path == "flight.csv"
        assert error.line_number == 42

    def test_parse_error_with_line_only(self):
        """Test parse error with line number."""
        error = TrajectoryParseError("Parse failed", line_number=3)
        assert str(error) == "Parse failed | Line: 3"


class TestInvalidCoordinateError:
    """Tests for InvalidCoordinateError exception."""

    def test_with_both_coordinates(self):
        """Test error with latitude and longitude."""
        error = InvalidCoordinateError("Bad point", latitude=95.0, longitude=10.0)
        assert str(error) == "Bad point (lat: 95.0, lon: 10.0)"

    def test_with_latitude_only(self):
        """Test error with latitude."""
        assert str(InvalidCoordinateError("Bad", latitude=95.0)) == "Bad (lat: 95.0)"

    def test_with_longitude_only(self):
        """Test error with longitude."""
        assert str(InvalidCoordinateError("Bad", longitude=200.0)) == "Bad (lon: 200.0)"

    def test_zero_coordinates_included(self):
        """Test zero values are still reported."""
        assert "lat: 0" in str(InvalidCoordinateError("Bad", latitude=0, longitude=0))


class TestOtherErrors:
    """Tests for altitude, configuration and export errors."""

    def test_altitude_error(self):
        """Test altitude error message."""
        error = InvalidAltitudeError("Too high", altitude=60000)
        assert str(error) == "Too high (Altitude: 60000m)"
        assert error.altitude == 60000

    def test_configuration_error(self):
        """Test configuration error names the key."""
        error = ConfigurationError("Invalid value", config_key="UPLAN_TSE_H")
        assert str(error) == "Invalid value (Key: UPLAN_TSE_H)"
        assert error.config_key == "UPLAN_TSE_H"

    def test_export_error(self):
        """Test export error names the output."""
        error = DataExportError("Write failed", output_path="/tmp/plan.json")
        assert str(error) == "Write failed (Output: /tmp/plan.json)"
