"""End-to-end volume generation from a trajectory CSV.

Pipeline:
1. Parse CSV rows into waypoints (``trajectory.parse_csv``)
2. Convert altitudes to AGL and re-baseline time to 0
   (``trajectory.normalize_waypoints``)
3. Decimate (``compression.compress``)
4. Build one oriented volume per waypoint pair (``volumes.build_all``)

The result also carries the first and last compressed waypoints, which the
submission document uses as takeoff and landing locations.
"""

from typing import Iterable, List, NamedTuple, Optional, Sequence

from .compression import compress, sample_every
from .config import VolumeConfig, DEFAULT_CONFIG
from .decorators import timed, validate_not_none
from .legacy_volumes import build_axis_aligned_volumes
from .logger import logger
from .trajectory import normalize_waypoints, parse_csv
from .types import OperationVolume, Waypoint
from .volumes import build_all

__all__ = [
    "TrajectoryVolumes",
    "generate_volumes",
    "generate_volumes_from_waypoints",
]


class TrajectoryVolumes(NamedTuple):
    """Generated volumes together with the waypoints they were built from."""

    volumes: List[OperationVolume]
    waypoints: List[Waypoint]
    takeoff: Optional[Waypoint]
    landing: Optional[Waypoint]


def _as_waypoints(points: Iterable[Sequence[float]]) -> List[Waypoint]:
    return [p if isinstance(p, Waypoint) else Waypoint(*p) for p in points]


@validate_not_none('waypoints', 'scheduled_at')
def generate_volumes_from_waypoints(
    waypoints: Iterable[Sequence[float]],
    scheduled_at: float,
    config: VolumeConfig = DEFAULT_CONFIG,
    legacy: bool = False,
) -> TrajectoryVolumes:
    """
    Compress a normalized trajectory and build its volumes.

    Args:
        waypoints: Waypoints or (time, lat, lon, h) tuples in time order,
            altitudes already AGL
        scheduled_at: Scheduled start in POSIX seconds
        config: Volume configuration
        legacy: Build legacy axis-aligned volumes instead of oriented ones

    Returns:
        TrajectoryVolumes
    """
    points = _as_waypoints(waypoints)

    if legacy:
        reduced = sample_every(points, config.compression_factor)
        volumes = build_axis_aligned_volumes(reduced, scheduled_at, config)
    else:
        reduced = compress(points, config.compression_factor)
        volumes = build_all(reduced, scheduled_at, config)

    return TrajectoryVolumes(
        volumes=volumes,
        waypoints=reduced,
        takeoff=reduced[0] if reduced else None,
        landing=reduced[-1] if reduced else None,
    )


@timed
@validate_not_none('csv_text', 'scheduled_at')
def generate_volumes(
    csv_text: str,
    scheduled_at: float,
    config: VolumeConfig = DEFAULT_CONFIG,
    ground_elevation: float = 0.0,
    legacy: bool = False,
    file_path: Optional[str] = None,
) -> TrajectoryVolumes:
    """
    Generate operation volumes from trajectory CSV text.

    Args:
        csv_text: CSV with SimTime, Lat, Lon and Alt columns
        scheduled_at: Scheduled start in POSIX seconds
        config: Volume configuration
        ground_elevation: Ground elevation in meters AMSL subtracted from
            every altitude
        legacy: Build legacy axis-aligned volumes instead of oriented ones
        file_path: Source path, only used in error messages

    Returns:
        TrajectoryVolumes

    Raises:
        TrajectoryParseError: If the CSV header lacks a required column
    """
    raw = parse_csv(csv_text, file_path=file_path)
    waypoints = normalize_waypoints(raw, ground_elevation)

    result = generate_volumes_from_waypoints(waypoints, scheduled_at, config, legacy=legacy)

    logger.info(
        f"Generated {len(result.volumes)} operation volume(s) from "
        f"{len(raw)} waypoint(s) ({len(result.waypoints)} after compression)"
    )
    return result
