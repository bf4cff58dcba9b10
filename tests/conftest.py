"""Pytest configuration and shared fixtures for uplan-volumes tests."""

import logging

import pytest

from uplan_volumes.types import Waypoint


SAMPLE_CSV = """SimTime,Lat,Lon,Alt,qw,qx,qy,qz,Vx,Vy,Vz
0.0,39.4817,-0.3410,10.0,1,0,0,0,0,0,0
10.0,39.4817,-0.3410,70.0,1,0,0,0,0,0,6
20.0,39.4827,-0.3410,70.0,1,0,0,0,11,0,0
30.0,39.4837,-0.3410,70.0,1,0,0,0,11,0,0
40.0,39.4837,-0.3410,10.0,1,0,0,0,0,0,-6
"""


@pytest.fixture(autouse=True)
def reset_log_level():
    """Restore the package logger after tests that enable debug mode."""
    from uplan_volumes.logger import logger

    level = logger.level
    handler_state = [(h.level, h.formatter) for h in logger.handlers]

    yield

    logger.setLevel(level)
    for handler, (handler_level, formatter) in zip(logger.handlers, handler_state):
        handler.setLevel(handler_level)
        handler.setFormatter(formatter)


@pytest.fixture
def sample_csv_text():
    """Short vertical-horizontal-vertical flight in simulator CSV format."""
    return SAMPLE_CSV


@pytest.fixture
def sample_csv_file(tmp_path, sample_csv_text):
    """Sample trajectory written to a .csv file."""
    path = tmp_path / "flight.csv"
    path.write_text(sample_csv_text)
    return path


@pytest.fixture
def make_waypoints():
    """Factory for synthetic straight-line trajectories.

    Waypoints are one second apart and move ``step_deg`` of latitude
    northwards per sample at a constant altitude.
    """

    def _make(count, lat=40.0, lon=-3.0, h=100.0, step_deg=0.0001, start_time=0.0):
        return [
            Waypoint(time=start_time + i, lat=lat + i * step_deg, lon=lon, h=h)
            for i in range(count)
        ]

    return _make


@pytest.fixture
def three_waypoints():
    """Climb, then a horizontal leg northwards."""
    return [
        Waypoint(time=0, lat=40.0, lon=-3.0, h=0),
        Waypoint(time=10, lat=40.0, lon=-3.0, h=50),
        Waypoint(time=30, lat=40.001, lon=-3.0, h=50),
    ]


@pytest.fixture
def capture_debug(caplog):
    """Capture DEBUG records of the package logger."""
    caplog.set_level(logging.DEBUG, logger="uplan_volumes")
    return caplog
