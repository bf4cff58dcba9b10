"""Statistics calculation for generated plans."""

from typing import Optional, Sequence

from .config import VolumeConfig, DEFAULT_CONFIG
from .helpers import format_flight_time
from .segments import SegmentType
from .types import OperationVolume, VolumeStatistics, Waypoint
from .volumes import describe_segment


def calculate_volume_statistics(
    volumes: Sequence[OperationVolume],
    waypoints: Sequence[Waypoint],
    config: Optional[VolumeConfig] = DEFAULT_CONFIG,
) -> VolumeStatistics:
    """
    Calculate summary statistics for a generated plan.

    Args:
        volumes: Operation volumes of the plan
        waypoints: Waypoints the volumes were built from
        config: Configuration used to build them; segment types are
            classified with its thresholds

    Returns:
        Dictionary of statistics
    """
    config = config or DEFAULT_CONFIG

    stats: VolumeStatistics = {
        'num_volumes': len(volumes),
        'num_waypoints': len(waypoints),
        'trajectory_length_m': 0.0,
        'flight_time_seconds': 0.0,
        'flight_time_str': format_flight_time(0),
        'min_altitude_m': None,
        'max_altitude_m': None,
        'time_begin': None,
        'time_end': None,
        'segment_types': {segment_type.value: 0 for segment_type in SegmentType},
        'compression_factor': config.compression_factor,
    }

    # Segment measurements
    total_length = 0.0
    for wp1, wp2 in zip(waypoints, waypoints[1:]):
        segment = describe_segment(wp1, wp2, config)
        total_length += segment.horizontal_dist
        stats['segment_types'][segment.segment_type.value] += 1

    stats['trajectory_length_m'] = total_length

    if len(waypoints) >= 2:
        flight_time = waypoints[-1].time - waypoints[0].time
        stats['flight_time_seconds'] = flight_time
        stats['flight_time_str'] = format_flight_time(flight_time)

    if volumes:
        stats['min_altitude_m'] = min(v['minAltitude']['value'] for v in volumes)
        stats['max_altitude_m'] = max(v['maxAltitude']['value'] for v in volumes)
        # Fixed-width ISO strings sort chronologically
        stats['time_begin'] = min(v['timeBegin'] for v in volumes)
        stats['time_end'] = max(v['timeEnd'] for v in volumes)

    return stats
