"""Oriented operation volume construction.

Every segment between two consecutive waypoints becomes one operation
volume: a rectangle aligned with the direction of travel, centred on the
segment midpoint, extruded between two AGL altitudes and valid for the
segment's time window widened by ``tbuf`` on both sides.

Algorithm per segment:
1. Geodesic distance and initial azimuth between the waypoints, plus the
   absolute altitude change
2. Classify the segment and size its buffers (see ``segments``)
3. Take the arithmetic midpoint of lat, lon and altitude
4. Project the rectangle corners from the midpoint along the azimuth
5. Resolve the time window (relative offsets or absolute POSIX seconds)
6. Clamp the lower altitude to the regulatory floor of 10 m AGL

The output is fully determined by the waypoints, the start timestamp and
the configuration; identical inputs produce identical volumes.
"""

from typing import List, NamedTuple, Sequence, Tuple

from .config import VolumeConfig, DEFAULT_CONFIG
from .constants import ALTITUDE_REFERENCE, ALTITUDE_UOM, MIN_ALTITUDE_AGL_M
from .decorators import timed
from .geodesy import (
    bounding_box,
    destination_point,
    distance_and_azimuth,
    midpoint,
    normalize_azimuth,
)
from .helpers import format_iso_timestamp, is_absolute_time
from .logger import logger
from .segments import SegmentType, TrackBuffers, buffers, classify
from .types import AltitudeLimit, OperationVolume, Waypoint

__all__ = [
    "SegmentGeometry",
    "describe_segment",
    "rectangle_corners",
    "resolve_time_window",
    "altitude_limit",
    "make_volume",
    "build_volume",
    "build_all",
]


class SegmentGeometry(NamedTuple):
    """Measured and derived properties of one trajectory segment."""

    horizontal_dist: float
    vertical_dist: float
    azimuth: float
    segment_type: SegmentType
    buffers: TrackBuffers


def describe_segment(
    wp1: Waypoint, wp2: Waypoint, config: VolumeConfig = DEFAULT_CONFIG
) -> SegmentGeometry:
    """
    Measure a segment and size its buffers.

    Args:
        wp1: Segment start
        wp2: Segment end
        config: Volume configuration

    Returns:
        SegmentGeometry for the segment
    """
    horizontal, azimuth, _ = distance_and_azimuth(wp1.lat, wp1.lon, wp2.lat, wp2.lon)
    vertical = abs(wp2.h - wp1.h)
    segment_type = classify(horizontal, vertical, config)
    return SegmentGeometry(
        horizontal_dist=horizontal,
        vertical_dist=vertical,
        azimuth=azimuth,
        segment_type=segment_type,
        buffers=buffers(segment_type, horizontal, vertical, config),
    )


def rectangle_corners(
    center_lat: float,
    center_lon: float,
    azimuth: float,
    along_track: float,
    cross_track: float,
) -> List[List[float]]:
    """
    Corners of a rectangle oriented along ``azimuth``.

    The front and back edge centres lie ``along_track`` meters ahead of and
    behind the centre; each corner lies ``cross_track`` meters to the left
    (azimuth - 90) or right (azimuth + 90) of them.

    Args:
        center_lat: Latitude of the rectangle centre in degrees
        center_lon: Longitude of the rectangle centre in degrees
        azimuth: Direction of travel in degrees from north
        along_track: Half-length along the direction of travel in meters
        cross_track: Half-width perpendicular to it in meters

    Returns:
        Five [lat, lon] points in the order front-left, front-right,
        back-right, back-left, front-left. The last point closes the ring.
    """
    forward = normalize_azimuth(azimuth)
    backward = normalize_azimuth(azimuth + 180.0)
    left = normalize_azimuth(azimuth - 90.0)
    right = normalize_azimuth(azimuth + 90.0)

    front = destination_point(center_lat, center_lon, forward, along_track)
    back = destination_point(center_lat, center_lon, backward, along_track)

    front_left = destination_point(front.lat, front.lon, left, cross_track)
    front_right = destination_point(front.lat, front.lon, right, cross_track)
    back_right = destination_point(back.lat, back.lon, right, cross_track)
    back_left = destination_point(back.lat, back.lon, left, cross_track)

    return [
        [front_left.lat, front_left.lon],
        [front_right.lat, front_right.lon],
        [back_right.lat, back_right.lon],
        [back_left.lat, back_left.lon],
        [front_left.lat, front_left.lon],
    ]


def resolve_time_window(
    wp1: Waypoint, wp2: Waypoint, start_timestamp: float, tbuf: float
) -> Tuple[float, float]:
    """
    POSIX time window of a segment, widened by ``tbuf``.

    When the first waypoint's time is below 1,000,000 both times are offsets
    from ``start_timestamp``; otherwise both are taken as absolute POSIX
    seconds.

    Returns:
        (begin, end) in POSIX seconds
    """
    if is_absolute_time(wp1.time):
        t1, t2 = wp1.time, wp2.time
    else:
        t1, t2 = start_timestamp + wp1.time, start_timestamp + wp2.time
    return t1 - tbuf, t2 + tbuf


def altitude_limit(value: float) -> AltitudeLimit:
    """Altitude bound in meters above ground level."""
    return {"value": value, "reference": ALTITUDE_REFERENCE, "uom": ALTITUDE_UOM}


def make_volume(
    corners: Sequence[Sequence[float]],
    time_begin: float,
    time_end: float,
    min_altitude: float,
    max_altitude: float,
    ordinal: int,
) -> OperationVolume:
    """
    Assemble an OperationVolume from [lat, lon] corners.

    The ring is emitted in GeoJSON [lon, lat] order and the bounding box
    covers every corner.
    """
    return {
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[lon, lat] for lat, lon in corners]],
            "bbox": bounding_box(corners),
        },
        "timeBegin": format_iso_timestamp(time_begin),
        "timeEnd": format_iso_timestamp(time_end),
        "minAltitude": altitude_limit(min_altitude),
        "maxAltitude": altitude_limit(max_altitude),
        "ordinal": ordinal,
    }


def build_volume(
    wp1: Waypoint,
    wp2: Waypoint,
    ordinal: int,
    start_timestamp: float,
    config: VolumeConfig = DEFAULT_CONFIG,
) -> OperationVolume:
    """
    Build the operation volume of one segment.

    Args:
        wp1: Segment start
        wp2: Segment end
        ordinal: Position of the volume in the flight (0-based)
        start_timestamp: Scheduled start in POSIX seconds
        config: Volume configuration

    Returns:
        OperationVolume for the segment
    """
    segment = describe_segment(wp1, wp2, config)
    along_track, cross_track, vertical_buffer = segment.buffers

    mid = midpoint(wp1.lat, wp1.lon, wp2.lat, wp2.lon)
    mid_altitude = (wp1.h + wp2.h) / 2

    corners = rectangle_corners(mid.lat, mid.lon, segment.azimuth, along_track, cross_track)
    time_begin, time_end = resolve_time_window(wp1, wp2, start_timestamp, config.tbuf)

    return make_volume(
        corners,
        time_begin,
        time_end,
        min_altitude=max(mid_altitude - vertical_buffer, MIN_ALTITUDE_AGL_M),
        max_altitude=mid_altitude + vertical_buffer,
        ordinal=ordinal,
    )


@timed
def build_all(
    waypoints: Sequence[Waypoint],
    start_timestamp: float,
    config: VolumeConfig = DEFAULT_CONFIG,
) -> List[OperationVolume]:
    """
    Build one operation volume per consecutive waypoint pair.

    Args:
        waypoints: Trajectory in time order
        start_timestamp: Scheduled start in POSIX seconds
        config: Volume configuration

    Returns:
        Volumes with ordinals 0..len(waypoints)-2, or an empty list when
        fewer than two waypoints are given
    """
    if len(waypoints) < 2:
        return []

    volumes = [
        build_volume(waypoints[i], waypoints[i + 1], i, start_timestamp, config)
        for i in range(len(waypoints) - 1)
    ]

    logger.debug(f"Generated {len(volumes)} oriented volumes from {len(waypoints)} waypoints")
    return volumes
