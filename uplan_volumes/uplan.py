"""U-plan submission document assembly and export.

The authorization service receives a "U-plan": the operation volumes wrapped
with operator, contact, UAS and flight details plus takeoff, landing and
ground-control-station locations. Callers supply whatever details they have
as a nested dict using the service's key names; anything missing is filled
with an empty value so the operator can complete it before submission.

Document layout (top-level keys):
- dataOwnerIdentifier / dataSourceIdentifier: {"sac", "sic"}
- contactDetails: firstName, lastName, phones, emails
- flightDetails: mode, category, specialOperation, privateFlight (0/1)
- takeoffLocation / landingLocation: GeoJSON points from the trajectory
- gcsLocation: GeoJSON point
- uas: registration, serial and characteristics
- operationVolumes: the generated volumes
- operatorId, state, creationTime, updateTime

Export writes compact JSON with sorted keys so identical plans produce
byte-identical files.
"""

import copy
import json
import os
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Tuple, Union

from .constants import DEFAULT_GCS_COORDINATES, DEFAULT_UPLAN_STATE
from .exceptions import DataExportError, InvalidArgumentError
from .helpers import format_iso_timestamp, parse_iso_timestamp
from .logger import logger
from .types import PointGeometry, UplanDocument, Waypoint

if TYPE_CHECKING:
    from .orchestrator import TrajectoryVolumes

__all__ = [
    "build_uplan",
    "export_uplan",
    "point_location",
    "normalize_uas",
]

_EMPTY_IDENTIFIER = {"sac": "", "sic": ""}
_EMPTY_CONTACT = {"firstName": "", "lastName": "", "phones": [], "emails": []}
_EMPTY_UAS = {
    "registrationNumber": "",
    "serialNumber": "",
    "flightCharacteristics": {
        "uasMTOM": "",
        "uasMaxSpeed": "",
        "Connectivity": "",
        "idTechnology": "",
        "maxFlightTime": "",
    },
    "generalCharacteristics": {
        "brand": "",
        "model": "",
        "typeCertificate": "",
        "uasType": "",
        "uasClass": "",
        "uasDimension": "",
    },
}


def point_location(waypoint: Waypoint) -> PointGeometry:
    """GeoJSON point for a waypoint, carrying its altitude."""
    return {
        "type": "Point",
        "coordinates": [waypoint.lon, waypoint.lat],
        "properties": {"altitude": waypoint.h},
    }


def _first_present(mapping: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = mapping.get(key)
        if value:
            return value
    return ""


def normalize_uas(uas: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Normalize the UAS block of a U-plan.

    Flight characteristic keys arrive with inconsistent casing from
    different clients; they are mapped to the service's spelling
    (``Connectivity``, ``idTechnology``) and missing ones become "".

    Args:
        uas: Caller supplied UAS details, or None

    Returns:
        A new UAS dict
    """
    if not uas:
        return copy.deepcopy(_EMPTY_UAS)

    normalized = copy.deepcopy(dict(uas))
    fc = normalized.get("flightCharacteristics")
    if fc:
        normalized["flightCharacteristics"] = {
            "uasMTOM": _first_present(fc, "uasMTOM"),
            "uasMaxSpeed": _first_present(fc, "uasMaxSpeed"),
            "Connectivity": _first_present(fc, "connectivity", "Connectivity"),
            "idTechnology": _first_present(fc, "idTechnology", "idtechnology", "IDTechnology"),
            "maxFlightTime": _first_present(fc, "maxFlightTime"),
        }
    return normalized


def _document_time(value: Union[None, str, int, float, datetime], now: datetime) -> str:
    if value is None or value == "":
        return format_iso_timestamp(now)
    if isinstance(value, str):
        parsed = parse_iso_timestamp(value)
        if parsed is None:
            raise InvalidArgumentError(f"Unparseable timestamp {value!r}", argument="details")
        return format_iso_timestamp(parsed)
    return format_iso_timestamp(value)


def build_uplan(
    result: "TrajectoryVolumes",
    details: Optional[Mapping[str, Any]] = None,
    now: Optional[datetime] = None,
) -> UplanDocument:
    """
    Assemble the U-plan submission document.

    Args:
        result: Output of ``generate_volumes``; the first and last of its
            waypoints become the takeoff and landing locations
        details: Caller supplied U-plan fields (service key names)
        now: Timestamp for creationTime/updateTime when details has none
            (defaults to the current UTC time)

    Returns:
        The U-plan document

    Raises:
        InvalidArgumentError: If waypoints is empty or a supplied timestamp
            cannot be parsed
    """
    waypoints = result.waypoints
    if not waypoints:
        raise InvalidArgumentError("Waypoints array is empty", argument="waypoints")

    details = details or {}
    now = now or datetime.now(timezone.utc)
    flight = details.get("flightDetails") or {}

    document: UplanDocument = {
        "dataOwnerIdentifier": copy.deepcopy(details.get("dataOwnerIdentifier") or _EMPTY_IDENTIFIER),
        "dataSourceIdentifier": copy.deepcopy(details.get("dataSourceIdentifier") or _EMPTY_IDENTIFIER),
        "contactDetails": copy.deepcopy(details.get("contactDetails") or _EMPTY_CONTACT),
        "flightDetails": {
            "mode": flight.get("mode") or "",
            "category": flight.get("category") or "",
            "specialOperation": flight.get("specialOperation") or "",
            "privateFlight": 1 if flight.get("privateFlight") else 0,
        },
        "takeoffLocation": point_location(waypoints[0]),
        "landingLocation": point_location(waypoints[-1]),
        "gcsLocation": copy.deepcopy(details.get("gcsLocation"))
        or {"type": "Point", "coordinates": list(DEFAULT_GCS_COORDINATES)},
        "uas": normalize_uas(details.get("uas")),
        "operationVolumes": list(result.volumes),
        "operatorId": details.get("operatorId") or "",
        "state": details.get("state") or DEFAULT_UPLAN_STATE,
        "creationTime": _document_time(details.get("creationTime"), now),
        "updateTime": _document_time(details.get("updateTime"), now),
    }
    return document


def export_uplan(document: Mapping[str, Any], output_path: str) -> Tuple[str, int]:
    """
    Write a U-plan document as compact JSON.

    Args:
        document: Document from ``build_uplan``
        output_path: Destination file; parent directories are created

    Returns:
        Tuple of (output_path, file_size_bytes)

    Raises:
        DataExportError: If the file cannot be written
    """
    try:
        parent = os.path.dirname(output_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(output_path, "w") as f:
            json.dump(document, f, separators=(",", ":"), sort_keys=True)
        file_size = os.path.getsize(output_path)
    except (OSError, TypeError, ValueError) as e:
        raise DataExportError(f"Failed to write U-plan: {e}", output_path=output_path) from e

    logger.info(
        f"  ✓ U-plan with {len(document.get('operationVolumes', []))} volume(s) "
        f"({file_size / 1024:.1f} KB): {output_path}"
    )
    return output_path, file_size
