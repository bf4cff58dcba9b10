"""Trajectory CSV parsing and normalization.

Simulator output is a CSV file with a header row. Only four columns are
used; any others (attitude quaternions, velocities) are ignored:

    SimTime,Lat,Lon,Alt[,qw,qx,qy,qz,Vx,Vy,Vz]

- ``SimTime``: seconds, either an offset or a POSIX timestamp
- ``Lat``/``Lon``: degrees
- ``Alt``: meters, AMSL when a ground elevation is supplied, AGL otherwise

Parsing is lenient row by row and strict on structure: blank lines and
``//`` comment lines are skipped, rows with a missing, non-numeric
or out-of-range value in a required column are dropped (and logged at DEBUG
level), while a header without the required columns rejects the whole file.

Example:
    >>> waypoints = parse_csv("SimTime,Lat,Lon,Alt\\n80,40.0,-3.0,700\\n")
    >>> normalize_waypoints(waypoints, ground_elevation=600)
    [Waypoint(time=0.0, lat=40.0, lon=-3.0, h=100.0)]
"""

import csv
import math
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from .constants import (
    CSV_ALT_COLUMN,
    CSV_COMMENT_PREFIX,
    CSV_LAT_COLUMN,
    CSV_LON_COLUMN,
    CSV_REQUIRED_COLUMNS,
    CSV_TIME_COLUMN,
)
from .exceptions import InvalidAltitudeError, InvalidCoordinateError, TrajectoryParseError
from .input_validation import validate_altitude, validate_coordinate_pair
from .logger import logger
from .types import Waypoint

__all__ = [
    'parse_csv',
    'read_trajectory_file',
    'normalize_waypoints',
]


def _content_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith(CSV_COMMENT_PREFIX):
            continue
        yield line


def _parse_value(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def parse_csv(text: str, file_path: Optional[str] = None) -> List[Waypoint]:
    """
    Parse trajectory CSV text into waypoints.

    Args:
        text: CSV content including the header row
        file_path: Source path, only used in error messages

    Returns:
        Waypoints in file order; empty if the file has a header but no
        usable rows

    Raises:
        TrajectoryParseError: If the header is missing a required column
    """
    reader = csv.DictReader(_content_lines(text.splitlines()), skipinitialspace=True)

    header = [name.strip() for name in (reader.fieldnames or [])]
    missing = [col for col in CSV_REQUIRED_COLUMNS if col not in header]
    if missing:
        raise TrajectoryParseError(
            f"Trajectory CSV is missing required column(s): {', '.join(missing)}",
            file_path=file_path,
            line_number=1,
        )
    reader.fieldnames = header

    waypoints = []
    dropped = 0
    for row in reader:
        values = [_parse_value(row.get(col)) for col in CSV_REQUIRED_COLUMNS]
        if any(v is None for v in values):
            dropped += 1
            logger.debug(f"Dropping malformed trajectory row {reader.line_num}: {row}")
            continue

        row_values = dict(zip(CSV_REQUIRED_COLUMNS, values))
        waypoint = Waypoint(
            time=row_values[CSV_TIME_COLUMN],
            lat=row_values[CSV_LAT_COLUMN],
            lon=row_values[CSV_LON_COLUMN],
            h=row_values[CSV_ALT_COLUMN],
        )

        try:
            validate_coordinate_pair(waypoint.lat, waypoint.lon, f" on line {reader.line_num}")
            validate_altitude(waypoint.h, f" on line {reader.line_num}")
        except (InvalidCoordinateError, InvalidAltitudeError) as e:
            dropped += 1
            logger.debug(f"Dropping out-of-range trajectory row: {e}")
            continue

        waypoints.append(waypoint)

    if dropped:
        logger.warning(f"Dropped {dropped} malformed trajectory row(s)")
    logger.debug(f"Parsed {len(waypoints)} waypoints")
    return waypoints


def read_trajectory_file(path: Union[str, Path]) -> str:
    """
    Read a trajectory CSV file as text.

    Raises:
        TrajectoryParseError: If the file cannot be read
    """
    try:
        return Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise TrajectoryParseError(f"Cannot read trajectory file: {e}", file_path=str(path)) from e


def normalize_waypoints(waypoints: Sequence[Waypoint], ground_elevation: float = 0.0) -> List[Waypoint]:
    """
    Convert altitudes to AGL and re-baseline time to the first waypoint.

    Args:
        waypoints: Parsed waypoints
        ground_elevation: Ground elevation in meters AMSL subtracted from
            every altitude

    Returns:
        New waypoints where the first has ``time == 0``
    """
    if not waypoints:
        return []

    initial_time = waypoints[0].time
    return [
        wp._replace(time=wp.time - initial_time, h=wp.h - ground_elevation)
        for wp in waypoints
    ]
