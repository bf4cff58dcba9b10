"""Geodesic calculations on the WGS84 ellipsoid.

Distances, bearings and destination points are solved on the ellipsoid with
pyproj's ``Geod`` (GeographicLib algorithms). Every ellipsoidal call degrades
to a spherical formula on a sphere of radius ``EARTH_MEAN_RADIUS_M`` when the
solver raises or returns a non-finite value, so none of the functions below
raise for finite inputs. The single exception is ``bounding_box`` of an
empty point set, which has no meaningful answer.

Midpoints and interpolation are deliberately LINEAR in latitude/longitude.
Segments between compressed UAS waypoints are at most a few kilometres long,
where the difference to the geodesic midpoint is far below the TSE buffers
wrapped around it. Do not use them for long-haul geometry.

Example:
    >>> from uplan_volumes.geodesy import distance, initial_azimuth
    >>> round(distance(40.0, -3.0, 40.001, -3.0), 1)
    111.0
    >>> round(initial_azimuth(40.0, -3.0, 40.001, -3.0))
    0
"""

import math
from typing import Iterable, List, NamedTuple, Sequence

import numpy as np
from pyproj import Geod
from pyproj.exceptions import GeodError

from .constants import COINCIDENT_DISTANCE_M, EARTH_MEAN_RADIUS_M, WGS84_ELLIPSOID
from .exceptions import InvalidArgumentError
from .logger import logger

__all__ = [
    "GeoPoint",
    "DistanceAzimuth",
    "distance",
    "initial_azimuth",
    "distance_and_azimuth",
    "destination_point",
    "midpoint",
    "interpolate",
    "perpendicular_offset",
    "bounding_box",
    "normalize_azimuth",
    "normalize_longitude",
    "haversine_distance",
    "spherical_bearing",
    "spherical_destination",
]

_GEOD = Geod(ellps=WGS84_ELLIPSOID)

# Exceptions the ellipsoidal solver may raise on degenerate input
_SOLVER_ERRORS = (GeodError, ValueError, ArithmeticError)


class GeoPoint(NamedTuple):
    """Geographic position in degrees."""

    lat: float
    lon: float


class DistanceAzimuth(NamedTuple):
    """Result of the inverse geodesic problem."""

    distance: float  # meters
    azimuth: float  # initial bearing, degrees [0, 360)
    final_azimuth: float  # bearing on arrival, degrees [0, 360)


def normalize_azimuth(azimuth: float) -> float:
    """
    Normalize an azimuth to the range [0, 360).

    Args:
        azimuth: Azimuth in degrees (any range)

    Returns:
        Equivalent azimuth in [0, 360), never -0.0
    """
    normalized = azimuth % 360.0
    # Tiny negative inputs round up to exactly 360.0
    if normalized >= 360.0:
        normalized -= 360.0
    return normalized + 0.0


def normalize_longitude(lon: float) -> float:
    """
    Normalize a longitude to the range [-180, 180).

    Args:
        lon: Longitude in degrees (any range)

    Returns:
        Equivalent longitude in [-180, 180), never -0.0
    """
    normalized = (lon + 180.0) % 360.0 - 180.0
    if normalized >= 180.0:
        normalized -= 360.0
    return normalized + 0.0


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters on the mean Earth sphere."""
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_MEAN_RADIUS_M * c


def spherical_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial great-circle bearing in degrees [0, 360)."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dlon = math.radians(lon2 - lon1)

    y = math.sin(dlon) * math.cos(phi2)
    x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(dlon)
    return normalize_azimuth(math.degrees(math.atan2(y, x)))


def spherical_destination(lat: float, lon: float, azimuth: float, distance_m: float) -> GeoPoint:
    """Destination point on the mean Earth sphere (direct problem)."""
    delta = distance_m / EARTH_MEAN_RADIUS_M
    theta = math.radians(azimuth)
    phi1 = math.radians(lat)
    lambda1 = math.radians(lon)

    sin_phi2 = math.sin(phi1) * math.cos(delta) + math.cos(phi1) * math.sin(delta) * math.cos(theta)
    sin_phi2 = min(1.0, max(-1.0, sin_phi2))
    phi2 = math.asin(sin_phi2)
    y = math.sin(theta) * math.sin(delta) * math.cos(phi1)
    x = math.cos(delta) - math.sin(phi1) * sin_phi2
    lambda2 = lambda1 + math.atan2(y, x)

    return GeoPoint(math.degrees(phi2), normalize_longitude(math.degrees(lambda2)))


def _is_coincident(lat1: float, lon1: float, lat2: float, lon2: float) -> bool:
    return lat1 == lat2 and lon1 == lon2


def _solve_inverse(lat1: float, lon1: float, lat2: float, lon2: float):
    """Run the ellipsoidal inverse problem, returning None when it fails."""
    try:
        az12, az21, dist = _GEOD.inv(lon1, lat1, lon2, lat2)
    except _SOLVER_ERRORS as e:
        logger.debug(
            f"Ellipsoidal inverse failed for ({lat1}, {lon1}) -> ({lat2}, {lon2}): {e}"
        )
        return None

    if not all(math.isfinite(v) for v in (az12, az21, dist)):
        logger.debug(
            f"Ellipsoidal inverse returned non-finite values for "
            f"({lat1}, {lon1}) -> ({lat2}, {lon2})"
        )
        return None

    return az12, az21, dist


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Geodesic distance between two points on the WGS84 ellipsoid.

    Coincident points yield ``COINCIDENT_DISTANCE_M`` (0.01 m) instead of 0
    so callers can divide by the result. If the ellipsoidal solver fails the
    haversine distance on the mean sphere is returned.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Distance in meters, always > 0
    """
    if _is_coincident(lat1, lon1, lat2, lon2):
        return COINCIDENT_DISTANCE_M

    solution = _solve_inverse(lat1, lon1, lat2, lon2)
    if solution is None:
        dist = haversine_distance(lat1, lon1, lat2, lon2)
    else:
        dist = solution[2]

    if dist <= 0.0:
        return COINCIDENT_DISTANCE_M
    return dist


def initial_azimuth(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Forward azimuth from point 1 to point 2.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        Azimuth in degrees clockwise from true north, in [0, 360).
        0 for coincident points.
    """
    if _is_coincident(lat1, lon1, lat2, lon2):
        return 0.0

    solution = _solve_inverse(lat1, lon1, lat2, lon2)
    if solution is None:
        return spherical_bearing(lat1, lon1, lat2, lon2)
    return normalize_azimuth(solution[0])


def distance_and_azimuth(lat1: float, lon1: float, lat2: float, lon2: float) -> DistanceAzimuth:
    """
    Distance, initial azimuth and final azimuth in a single solver call.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees

    Returns:
        DistanceAzimuth with the same conventions as ``distance`` and
        ``initial_azimuth``
    """
    if _is_coincident(lat1, lon1, lat2, lon2):
        return DistanceAzimuth(COINCIDENT_DISTANCE_M, 0.0, 0.0)

    solution = _solve_inverse(lat1, lon1, lat2, lon2)
    if solution is None:
        bearing = spherical_bearing(lat1, lon1, lat2, lon2)
        # Final bearing is the reversed initial bearing of the return leg
        final = normalize_azimuth(spherical_bearing(lat2, lon2, lat1, lon1) + 180.0)
        dist = haversine_distance(lat1, lon1, lat2, lon2)
        return DistanceAzimuth(max(dist, COINCIDENT_DISTANCE_M), bearing, final)

    az12, az21, dist = solution
    return DistanceAzimuth(
        dist if dist > 0.0 else COINCIDENT_DISTANCE_M,
        normalize_azimuth(az12),
        # pyproj reports the back azimuth at point 2
        normalize_azimuth(az21 + 180.0),
    )


def destination_point(lat: float, lon: float, azimuth: float, distance_m: float) -> GeoPoint:
    """
    Point reached by travelling ``distance_m`` meters along ``azimuth``.

    Solves the direct geodesic problem on the WGS84 ellipsoid, falling back to
    the spherical formula when the solver fails.

    Args:
        lat: Latitude of starting point in degrees
        lon: Longitude of starting point in degrees
        azimuth: Initial bearing in degrees from north
        distance_m: Distance to travel in meters

    Returns:
        Destination as GeoPoint, longitude normalized to [-180, 180)
    """
    try:
        lon2, lat2, _ = _GEOD.fwd(lon, lat, azimuth, distance_m)
    except _SOLVER_ERRORS as e:
        logger.debug(f"Ellipsoidal direct failed from ({lat}, {lon}): {e}")
        return spherical_destination(lat, lon, azimuth, distance_m)

    if not (math.isfinite(lat2) and math.isfinite(lon2)):
        logger.debug(f"Ellipsoidal direct returned non-finite values from ({lat}, {lon})")
        return spherical_destination(lat, lon, azimuth, distance_m)

    return GeoPoint(lat2, normalize_longitude(lon2))


def midpoint(lat1: float, lon1: float, lat2: float, lon2: float) -> GeoPoint:
    """
    Arithmetic midpoint of two positions.

    This is linear interpolation in lat/lon, not the geodesic midpoint. The
    error is negligible for segments shorter than a few kilometres.
    """
    return GeoPoint((lat1 + lat2) / 2, (lon1 + lon2) / 2)


def interpolate(lat1: float, lon1: float, lat2: float, lon2: float, fraction: float) -> GeoPoint:
    """
    Linearly interpolate between two positions.

    Same approximation as ``midpoint``. The fraction is clamped to [0, 1]
    so the result always lies on the segment.

    Args:
        lat1: Latitude of first point in degrees
        lon1: Longitude of first point in degrees
        lat2: Latitude of second point in degrees
        lon2: Longitude of second point in degrees
        fraction: 0 returns the first point, 1 the second

    Returns:
        Interpolated GeoPoint
    """
    if fraction <= 0:
        return GeoPoint(lat1, lon1)
    if fraction >= 1:
        return GeoPoint(lat2, lon2)
    return GeoPoint(lat1 + (lat2 - lat1) * fraction, lon1 + (lon2 - lon1) * fraction)


def perpendicular_offset(lat: float, lon: float, azimuth: float, offset_m: float) -> GeoPoint:
    """
    Offset a point perpendicular to a direction of travel.

    Args:
        lat: Latitude of the point in degrees
        lon: Longitude of the point in degrees
        azimuth: Direction of travel in degrees
        offset_m: Offset in meters; positive moves left, negative right

    Returns:
        Offset GeoPoint
    """
    if offset_m >= 0:
        side = normalize_azimuth(azimuth - 90.0)
    else:
        side = normalize_azimuth(azimuth + 90.0)
    return destination_point(lat, lon, side, abs(offset_m))


def bounding_box(points: Iterable[Sequence[float]]) -> List[float]:
    """
    Axis-aligned bounding box of a set of positions.

    Args:
        points: Iterable of (lat, lon) pairs

    Returns:
        [minLon, minLat, maxLon, maxLat]

    Raises:
        InvalidArgumentError: If no points are given
    """
    coords = np.asarray([(p[0], p[1]) for p in points], dtype=float)
    if coords.size == 0:
        raise InvalidArgumentError(
            "Cannot calculate bounding box of empty point set", argument="points"
        )

    min_lat, min_lon = coords.min(axis=0)
    max_lat, max_lon = coords.max(axis=0)
    return [float(min_lon), float(min_lat), float(max_lon), float(max_lat)]
