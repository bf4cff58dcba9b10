"""Legacy axis-aligned operation volumes.

The generator used before oriented volumes. Each segment is cut into
``N = ceil(d / (alpha_h * tse_h))`` equal sub-segments and every sub-segment
gets a square of half-diagonal ``sqrt(2) * tse_h`` centred on its midpoint,
rotated 45 degrees from the track so that two sides run along it. The
altitude band is the sub-segment centre altitude plus or minus ``tse_v``
with no ground floor.

Kept for comparing plans generated before and after the switch; new plans
should use ``volumes.build_all``.
"""

import math
from typing import List, Sequence

from .config import VolumeConfig, DEFAULT_CONFIG
from .constants import ABSOLUTE_TIME_THRESHOLD_S, COINCIDENT_DISTANCE_M, LEGACY_MIN_DISTANCE_M
from .decorators import timed
from .geodesy import destination_point, distance_and_azimuth, normalize_longitude
from .logger import logger
from .types import OperationVolume, Waypoint
from .volumes import make_volume

__all__ = [
    "square_corners",
    "build_axis_aligned_volumes",
]


def square_corners(center_lat: float, center_lon: float, azimuth: float, half_side: float) -> List[List[float]]:
    """
    Closed ring of a square centred on a point.

    Corners lie ``sqrt(2) * half_side`` meters from the centre on bearings
    azimuth + 45, + 135, + 225 and + 315.

    Returns:
        Five [lat, lon] points, the last repeating the first
    """
    ring = []
    for k in range(4):
        corner = destination_point(
            center_lat, center_lon, azimuth + 45.0 + k * 90.0, math.sqrt(2) * half_side
        )
        ring.append([corner.lat, normalize_longitude(corner.lon)])
    ring.append(list(ring[0]))
    return ring


@timed
def build_axis_aligned_volumes(
    waypoints: Sequence[Waypoint],
    start_timestamp: float,
    config: VolumeConfig = DEFAULT_CONFIG,
) -> List[OperationVolume]:
    """
    Build legacy square volumes, several per segment.

    Args:
        waypoints: Trajectory in time order
        start_timestamp: Scheduled start in POSIX seconds
        config: Volume configuration (tse_h, tse_v, alpha_h and tbuf are used)

    Returns:
        Volumes with contiguous ordinals across all sub-segments
    """
    volumes: List[OperationVolume] = []
    step_length = config.alpha_h * config.tse_h

    for wp1, wp2 in zip(waypoints, waypoints[1:]):
        dist, azimuth, _ = distance_and_azimuth(wp1.lat, wp1.lon, wp2.lat, wp2.lon)
        if not math.isfinite(dist) or dist < LEGACY_MIN_DISTANCE_M:
            dist = COINCIDENT_DISTANCE_M

        n = math.ceil(dist / step_length)
        step = dist / n
        climb = (wp2.h - wp1.h) / n
        dt = (wp2.time - wp1.time) / n

        # Sub-segment boundary times; the last one is the segment end exactly
        times = [wp1.time + k * dt for k in range(n)] + [wp2.time]

        center = destination_point(wp1.lat, wp1.lon, azimuth, step / 2)
        center_h = wp1.h + climb / 2

        for k in range(n):
            if k > 0:
                center = destination_point(center.lat, center.lon, azimuth, step)
                center_h += climb

            t1, t2 = times[k], times[k + 1]
            if t1 > ABSOLUTE_TIME_THRESHOLD_S:
                begin, end = t1 - config.tbuf, t2 + config.tbuf
            else:
                begin = start_timestamp + t1 - config.tbuf
                end = start_timestamp + t2 + config.tbuf

            volumes.append(
                make_volume(
                    square_corners(center.lat, center.lon, azimuth, config.tse_h),
                    begin,
                    end,
                    min_altitude=center_h - config.tse_v,
                    max_altitude=center_h + config.tse_v,
                    ordinal=len(volumes),
                )
            )

    logger.debug(f"Generated {len(volumes)} axis-aligned volumes from {len(waypoints)} waypoints")
    return volumes
