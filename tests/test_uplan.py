"""Tests for uplan module."""

import json
import os
from datetime import datetime, timezone

import pytest

from uplan_volumes.exceptions import DataExportError, InvalidArgumentError
from uplan_volumes.orchestrator import TrajectoryVolumes, generate_volumes_from_waypoints
from uplan_volumes.types import Waypoint
from uplan_volumes.uplan import build_uplan, export_uplan, normalize_uas, point_location

START = 1704067200
NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def result(three_waypoints):
    """Generated volumes for a short climb and leg."""
    return generate_volumes_from_waypoints(three_waypoints, START)


class TestPointLocation:
    """Tests for point_location function."""

    def test_geojson_point(self):
        """Test waypoints become [lon, lat] points with altitude."""
        assert point_location(Waypoint(0, 40.0, -3.0, 12.5)) == {
            "type": "Point",
            "coordinates": [-3.0, 40.0],
            "properties": {"altitude": 12.5},
        }


class TestNormalizeUas:
    """Tests for normalize_uas function."""

    def test_empty_uas(self):
        """Test missing UAS details become empty fields."""
        uas = normalize_uas(None)
        assert uas["registrationNumber"] == ""
        assert uas["flightCharacteristics"]["Connectivity"] == ""
        assert uas["generalCharacteristics"]["brand"] == ""

    def test_empty_uas_is_a_copy(self):
        """Test callers cannot modify the shared template."""
        normalize_uas(None)["flightCharacteristics"]["uasMTOM"] = 25
        assert normalize_uas(None)["flightCharacteristics"]["uasMTOM"] == ""

    def test_key_spellings_normalized(self):
        """Test alternative key casing is mapped to the service spelling."""
        uas = normalize_uas(
            {
                "registrationNumber": "UAS-1",
                "flightCharacteristics": {
                    "uasMTOM": 4.5,
                    "connectivity": "LTE",
                    "IDTechnology": "NRID",
                },
            }
        )
        fc = uas["flightCharacteristics"]
        assert fc["Connectivity"] == "LTE"
        assert fc["idTechnology"] == "NRID"
        assert fc["uasMTOM"] == 4.5
        assert fc["maxFlightTime"] == ""
        assert "connectivity" not in fc
        assert uas["registrationNumber"] == "UAS-1"


class TestBuildUplan:
    """Tests for build_uplan function."""

    def test_defaults(self, result):
        """Test missing details are filled with empty values."""
        document = build_uplan(result, now=NOW)
        assert document["dataOwnerIdentifier"] == {"sac": "", "sic": ""}
        assert document["contactDetails"]["phones"] == []
        assert document["flightDetails"]["privateFlight"] == 0
        assert document["operatorId"] == ""
        assert document["state"] == "SENT"
        assert document["gcsLocation"] == {"type": "Point", "coordinates": [-0.337337, 39.479984]}
        assert document["creationTime"] == "2024-03-01T12:00:00"
        assert document["updateTime"] == "2024-03-01T12:00:00"

    def test_locations_from_waypoints(self, result):
        """Test takeoff and landing come from the compressed trajectory."""
        document = build_uplan(result, now=NOW)
        first, last = result.waypoints[0], result.waypoints[-1]
        assert document["takeoffLocation"]["coordinates"] == [first.lon, first.lat]
        assert document["landingLocation"]["coordinates"] == [last.lon, last.lat]
        assert document["landingLocation"]["properties"]["altitude"] == last.h

    def test_volumes_included(self, result):
        """Test the generated volumes are embedded unchanged."""
        document = build_uplan(result, now=NOW)
        assert document["operationVolumes"] == result.volumes

    def test_caller_details(self, result):
        """Test caller supplied fields are used."""
        details = {
            "operatorId": "OP-42",
            "state": "DRAFT",
            "contactDetails": {"firstName": "Ana", "lastName": "Gil", "phones": ["600"], "emails": []},
            "flightDetails": {"mode": "VLOS", "category": "OPENA1", "privateFlight": True},
            "gcsLocation": {"type": "Point", "coordinates": [-0.3, 39.4]},
            "creationTime": "2024-02-01T10:00:00Z",
        }
        document = build_uplan(result, details, now=NOW)
        assert document["operatorId"] == "OP-42"
        assert document["state"] == "DRAFT"
        assert document["contactDetails"]["firstName"] == "Ana"
        assert document["flightDetails"] == {
            "mode": "VLOS",
            "category": "OPENA1",
            "specialOperation": "",
            "privateFlight": 1,
        }
        assert document["gcsLocation"]["coordinates"] == [-0.3, 39.4]
        assert document["creationTime"] == "2024-02-01T10:00:00"
        assert document["updateTime"] == "2024-03-01T12:00:00"

    def test_details_not_mutated(self, result):
        """Test the caller's dict is copied, not shared."""
        details = {"contactDetails": {"firstName": "Ana", "lastName": "", "phones": [], "emails": []}}
        document = build_uplan(result, details, now=NOW)
        document["contactDetails"]["phones"].append("600")
        assert details["contactDetails"]["phones"] == []

    def test_numeric_timestamp(self, result):
        """Test POSIX seconds are accepted for document times."""
        document = build_uplan(result, {"updateTime": START}, now=NOW)
        assert document["updateTime"] == "2024-01-01T00:00:00"

    def test_bad_timestamp(self, result):
        """Test unparseable timestamps are rejected."""
        with pytest.raises(InvalidArgumentError):
            build_uplan(result, {"creationTime": "yesterday"}, now=NOW)

    def test_empty_waypoints(self):
        """Test a plan needs at least one waypoint."""
        with pytest.raises(InvalidArgumentError, match="Waypoints array is empty"):
            build_uplan(TrajectoryVolumes([], [], None, None))

    def test_default_now(self, result):
        """Test creation time defaults to the current time."""
        document = build_uplan(result)
        assert document["creationTime"][:4] == str(datetime.now(timezone.utc).year)


class TestExportUplan:
    """Tests for export_uplan function."""

    def test_writes_compact_sorted_json(self, result, tmp_path):
        """Test the file is compact JSON with sorted keys."""
        document = build_uplan(result, now=NOW)
        output = tmp_path / "plan.json"

        path, size = export_uplan(document, str(output))

        text = output.read_text()
        assert path == str(output)
        assert size == os.path.getsize(output)
        assert ": " not in text and ", " not in text
        assert json.loads(text) == json.loads(json.dumps(document))
        assert text.index('"contactDetails"') < text.index('"operationVolumes"')

    def test_deterministic_bytes(self, result, tmp_path):
        """Test identical documents produce identical files."""
        document = build_uplan(result, now=NOW)
        export_uplan(document, str(tmp_path / "a.json"))
        export_uplan(document, str(tmp_path / "b.json"))
        assert (tmp_path / "a.json").read_bytes() == (tmp_path / "b.json").read_bytes()

    def test_creates_parent_directories(self, result, tmp_path):
        """Test missing parent directories are created."""
        output = tmp_path / "nested" / "dir" / "plan.json"
        export_uplan(build_uplan(result, now=NOW), str(output))
        assert output.exists()

    def test_write_failure(self, result, tmp_path):
        """Test I/O errors are wrapped in DataExportError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(DataExportError, match="Output:"):
            export_uplan(build_uplan(result, now=NOW), str(blocker / "plan.json"))

    def test_unserializable_document(self, tmp_path):
        """Test documents that cannot be encoded are rejected."""
        with pytest.raises(DataExportError):
            export_uplan({"bad": object()}, str(tmp_path / "plan.json"))
