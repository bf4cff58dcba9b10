"""Type definitions for uplan-volumes.

This module provides TypedDict definitions for the JSON structures exchanged
with the authorization service, and the immutable ``Waypoint`` record the
pipeline works on. The TypedDicts mirror the wire format key for key, which
is why some keys are camelCase.

Example:
    >>> from uplan_volumes.types import Waypoint, AltitudeLimit
    >>> wp = Waypoint(time=0.0, lat=40.0, lon=-3.0, h=100.0)
    >>> floor: AltitudeLimit = {"value": 10.0, "reference": "AGL", "uom": "M"}
"""

from typing import TypedDict, List, NamedTuple, Optional, Any, Dict, Union
from typing_extensions import NotRequired


class Waypoint(NamedTuple):
    """One time-stamped trajectory sample."""

    time: float  # seconds since flight start, or POSIX seconds
    lat: float  # degrees
    lon: float  # degrees
    h: float  # meters AGL


class AltitudeLimit(TypedDict):
    """Altitude bound of an operation volume."""

    value: float
    reference: str  # "AGL"
    uom: str  # "M" or "FT"


class PolygonGeometry(TypedDict):
    """GeoJSON polygon with its bounding box."""

    type: str  # "Polygon"
    coordinates: List[List[List[float]]]  # [[[lon, lat], ...]]
    bbox: List[float]  # [minLon, minLat, maxLon, maxLat]


class OperationVolume(TypedDict):
    """A 4D region submitted to the authorization service."""

    geometry: PolygonGeometry
    timeBegin: str
    timeEnd: str
    minAltitude: AltitudeLimit
    maxAltitude: AltitudeLimit
    ordinal: int


class PointProperties(TypedDict):
    altitude: float


class PointGeometry(TypedDict):
    """GeoJSON point used for takeoff, landing and GCS locations."""

    type: str  # "Point"
    coordinates: List[float]  # [lon, lat]
    properties: NotRequired[PointProperties]


class DataIdentifier(TypedDict):
    sac: str
    sic: str


class ContactDetails(TypedDict):
    firstName: str
    lastName: str
    phones: Union[str, List[str]]
    emails: Union[str, List[str]]


class FlightDetails(TypedDict):
    mode: str
    category: str
    specialOperation: str
    privateFlight: int


class UplanDocument(TypedDict):
    """Submission payload wrapping the operation volumes."""

    dataOwnerIdentifier: DataIdentifier
    dataSourceIdentifier: DataIdentifier
    contactDetails: ContactDetails
    flightDetails: FlightDetails
    takeoffLocation: PointGeometry
    landingLocation: PointGeometry
    gcsLocation: PointGeometry
    uas: Dict[str, Any]
    operationVolumes: List[OperationVolume]
    operatorId: str
    state: str
    creationTime: str
    updateTime: str


class VolumeStatistics(TypedDict):
    """Summary of a generated plan."""

    num_volumes: int
    num_waypoints: int
    trajectory_length_m: float
    flight_time_seconds: float
    flight_time_str: str
    min_altitude_m: Optional[float]
    max_altitude_m: Optional[float]
    time_begin: Optional[str]
    time_end: Optional[str]
    segment_types: Dict[str, int]
    compression_factor: NotRequired[int]


__all__ = [
    "Waypoint",
    "AltitudeLimit",
    "PolygonGeometry",
    "OperationVolume",
    "PointProperties",
    "PointGeometry",
    "DataIdentifier",
    "ContactDetails",
    "FlightDetails",
    "UplanDocument",
    "VolumeStatistics",
]
