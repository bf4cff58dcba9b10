"""Segment classification and buffer sizing.

Each pair of consecutive waypoints is a segment. Its motion is classified
from the horizontal (geodesic) and vertical (altitude change) distances:

    HORIZONTAL  horizontal_dist > alpha_h * vertical_dist
    VERTICAL    vertical_dist   > alpha_v * horizontal_dist
    MIXED       neither

HORIZONTAL is tested first, so a segment satisfying both conditions is
horizontal. A segment with no movement at all, ``(0, 0)``, is MIXED.

Buffers are half the travelled distance plus the total system error along
the dominant axis of motion, and only the system error on the other axes:

    ==========  =====================  ===========  =====================
    type        along_track            cross_track  vertical_buffer
    ==========  =====================  ===========  =====================
    HORIZONTAL  h/2 + tse_h            tse_h        tse_v
    VERTICAL    tse_h                  tse_h        v/2 + tse_v
    MIXED       h/2 + tse_h            tse_h        v/2 + tse_v
    ==========  =====================  ===========  =====================
"""

from enum import Enum
from typing import NamedTuple

from .config import VolumeConfig, DEFAULT_CONFIG

__all__ = [
    "SegmentType",
    "TrackBuffers",
    "classify",
    "buffers",
]


class SegmentType(str, Enum):
    """Dominant motion of a trajectory segment."""

    HORIZONTAL = "HORIZONTAL"
    VERTICAL = "VERTICAL"
    MIXED = "MIXED"


class TrackBuffers(NamedTuple):
    """Half-extents of an operation volume in meters."""

    along_track: float
    cross_track: float
    vertical_buffer: float


def classify(
    horizontal_dist: float,
    vertical_dist: float,
    config: VolumeConfig = DEFAULT_CONFIG,
) -> SegmentType:
    """
    Classify a segment by its dominant direction of motion.

    Args:
        horizontal_dist: Horizontal geodesic distance in meters
        vertical_dist: Absolute altitude change in meters
        config: Configuration providing alpha_h and alpha_v

    Returns:
        SegmentType of the segment
    """
    if horizontal_dist > config.alpha_h * vertical_dist:
        return SegmentType.HORIZONTAL
    if vertical_dist > config.alpha_v * horizontal_dist:
        return SegmentType.VERTICAL
    return SegmentType.MIXED


def buffers(
    segment_type: SegmentType,
    horizontal_dist: float,
    vertical_dist: float,
    config: VolumeConfig = DEFAULT_CONFIG,
) -> TrackBuffers:
    """
    Derive along-track, cross-track and vertical buffers for a segment.

    Args:
        segment_type: Classification from ``classify``
        horizontal_dist: Horizontal geodesic distance in meters
        vertical_dist: Absolute altitude change in meters
        config: Configuration providing tse_h and tse_v

    Returns:
        TrackBuffers in meters
    """
    if segment_type is SegmentType.HORIZONTAL:
        return TrackBuffers(
            along_track=horizontal_dist / 2 + config.tse_h,
            cross_track=config.tse_h,
            vertical_buffer=config.tse_v,
        )

    if segment_type is SegmentType.VERTICAL:
        return TrackBuffers(
            along_track=config.tse_h,
            cross_track=config.tse_h,
            vertical_buffer=vertical_dist / 2 + config.tse_v,
        )

    return TrackBuffers(
        along_track=horizontal_dist / 2 + config.tse_h,
        cross_track=config.tse_h,
        vertical_buffer=vertical_dist / 2 + config.tse_v,
    )
