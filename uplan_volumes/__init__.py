"""
U-plan Volume Generator

Builds the 4D operation volumes of a drone flight plan from a trajectory.
"""

__version__ = "1.0.0"

# Export key functions
from .config import VolumeConfig, DEFAULT_CONFIG, load_config_from_env
from .geodesy import distance, initial_azimuth, destination_point, bounding_box
from .segments import SegmentType, classify, buffers
from .compression import compress
from .volumes import build_volume, build_all
from .legacy_volumes import build_axis_aligned_volumes
from .trajectory import parse_csv, normalize_waypoints
from .orchestrator import TrajectoryVolumes, generate_volumes, generate_volumes_from_waypoints
from .uplan import build_uplan, export_uplan
from .statistics import calculate_volume_statistics
from .validation import validate_operation_volume, validate_operation_volumes
from .types import Waypoint, OperationVolume
from .exceptions import (
    UplanVolumesError,
    InvalidArgumentError,
    TrajectoryParseError,
    InvalidCoordinateError,
    InvalidAltitudeError,
    ConfigurationError,
    DataExportError,
)

__all__ = [
    # Configuration
    "VolumeConfig",
    "DEFAULT_CONFIG",
    "load_config_from_env",
    # Geodesy
    "distance",
    "initial_azimuth",
    "destination_point",
    "bounding_box",
    # Segments
    "SegmentType",
    "classify",
    "buffers",
    # Volumes
    "compress",
    "build_volume",
    "build_all",
    "build_axis_aligned_volumes",
    # Trajectory
    "parse_csv",
    "normalize_waypoints",
    "TrajectoryVolumes",
    "generate_volumes",
    "generate_volumes_from_waypoints",
    # U-plan
    "build_uplan",
    "export_uplan",
    "calculate_volume_statistics",
    "validate_operation_volume",
    "validate_operation_volumes",
    # Types
    "Waypoint",
    "OperationVolume",
    # Exceptions
    "UplanVolumesError",
    "InvalidArgumentError",
    "TrajectoryParseError",
    "InvalidCoordinateError",
    "InvalidAltitudeError",
    "ConfigurationError",
    "DataExportError",
]
