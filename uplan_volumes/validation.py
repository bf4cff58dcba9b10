"""Operation volume validation utilities."""

import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .constants import (
    ALTITUDE_REFERENCE,
    ALTITUDE_UOMS,
    ISO_TIMESTAMP_PATTERN,
    MIN_ALTITUDE_AGL_M,
    POLYGON_POINT_COUNT,
)
from .helpers import parse_iso_timestamp

__all__ = [
    "validate_ring",
    "validate_time_window",
    "validate_altitude_limits",
    "validate_operation_volume",
    "validate_operation_volumes",
]

_ISO_RE = re.compile(ISO_TIMESTAMP_PATTERN)


def validate_ring(geometry: Mapping[str, Any], context: str = "") -> Tuple[bool, Optional[str]]:
    """
    Validate a polygon geometry and its bounding box.

    Args:
        geometry: Volume geometry dict
        context: Optional context string for error messages

    Returns:
        tuple: (is_valid, error_message)
    """
    if geometry.get("type") != "Polygon":
        return False, f"Geometry type must be Polygon, got {geometry.get('type')!r}{context}"

    rings = geometry.get("coordinates") or []
    if len(rings) != 1:
        return False, f"Polygon must have exactly one ring{context}"

    ring = rings[0]
    if len(ring) != POLYGON_POINT_COUNT:
        return False, f"Polygon ring must have {POLYGON_POINT_COUNT} points, got {len(ring)}{context}"

    if list(ring[0]) != list(ring[-1]):
        return False, f"Polygon ring is not closed{context}"

    bbox = geometry.get("bbox")
    if not bbox or len(bbox) != 4:
        return False, f"Bounding box must have 4 values{context}"

    min_lon, min_lat, max_lon, max_lat = bbox
    for lon, lat in ring:
        if not (min_lon <= lon <= max_lon and min_lat <= lat <= max_lat):
            return False, f"Point [{lon}, {lat}] lies outside the bounding box{context}"

    return True, None


def validate_time_window(time_begin: Any, time_end: Any, context: str = "") -> Tuple[bool, Optional[str]]:
    """
    Validate a volume's ISO time window.

    Both times must be ``YYYY-MM-DDTHH:MM:SS`` and ``time_begin`` must be
    strictly earlier.

    Returns:
        tuple: (is_valid, error_message)
    """
    for label, value in (("timeBegin", time_begin), ("timeEnd", time_end)):
        if not isinstance(value, str) or not _ISO_RE.match(value):
            return False, f"{label} {value!r} is not an ISO timestamp without fraction{context}"

    begin = parse_iso_timestamp(time_begin)
    end = parse_iso_timestamp(time_end)
    for label, value, parsed in (("timeBegin", time_begin, begin), ("timeEnd", time_end, end)):
        if parsed is None:
            return False, f"{label} {value!r} is not a valid date{context}"

    if begin >= end:
        return False, f"timeBegin {time_begin} must be before timeEnd {time_end}{context}"

    return True, None


def validate_altitude_limits(
    min_altitude: Mapping[str, Any], max_altitude: Mapping[str, Any], context: str = ""
) -> Tuple[bool, Optional[str]]:
    """
    Validate the altitude band of a volume.

    Returns:
        tuple: (is_valid, error_message)
    """
    for label, limit in (("minAltitude", min_altitude), ("maxAltitude", max_altitude)):
        if not isinstance(limit.get("value"), (int, float)):
            return False, f"{label} value must be a number{context}"
        if limit.get("reference") != ALTITUDE_REFERENCE:
            return False, f"{label} reference must be {ALTITUDE_REFERENCE}{context}"
        if limit.get("uom") not in ALTITUDE_UOMS:
            return False, f"{label} uom must be one of {', '.join(ALTITUDE_UOMS)}{context}"

    if min_altitude["value"] < MIN_ALTITUDE_AGL_M:
        return False, (
            f"minAltitude {min_altitude['value']} below the {MIN_ALTITUDE_AGL_M:g} m floor{context}"
        )

    if min_altitude["value"] > max_altitude["value"]:
        return False, f"minAltitude exceeds maxAltitude{context}"

    return True, None


def validate_operation_volume(volume: Mapping[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate one operation volume against the submission schema.

    Args:
        volume: OperationVolume dict

    Returns:
        tuple: (is_valid, error_message)
    """
    context = f" (volume {volume.get('ordinal', '?')})"

    missing = [
        key
        for key in ("geometry", "timeBegin", "timeEnd", "minAltitude", "maxAltitude", "ordinal")
        if key not in volume
    ]
    if missing:
        return False, f"Missing field(s): {', '.join(missing)}{context}"

    checks = (
        validate_ring(volume["geometry"], context),
        validate_time_window(volume["timeBegin"], volume["timeEnd"], context),
        validate_altitude_limits(volume["minAltitude"], volume["maxAltitude"], context),
    )
    for is_valid, error in checks:
        if not is_valid:
            return False, error

    return True, None


def validate_operation_volumes(volumes: Sequence[Mapping[str, Any]]) -> List[str]:
    """
    Validate every volume of a plan and their ordering.

    Ordinals must run 0, 1, 2, ... in list order.

    Args:
        volumes: OperationVolume dicts

    Returns:
        List of error messages, empty when the plan is valid
    """
    errors = []
    for index, volume in enumerate(volumes):
        is_valid, error = validate_operation_volume(volume)
        if not is_valid:
            errors.append(error)
        if volume.get("ordinal") != index:
            errors.append(f"Volume at position {index} has ordinal {volume.get('ordinal')!r}")
    return errors
