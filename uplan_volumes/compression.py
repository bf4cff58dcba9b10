"""Deterministic waypoint decimation.

Simulator trajectories are sampled far more densely than the authorization
service needs, and every consecutive waypoint pair becomes one operation
volume. ``compress`` bounds the volume count by keeping every N-th waypoint.

The oriented pipeline starts sampling at index 1, not 0: the takeoff sample
is skipped and the first volume starts at the second waypoint. Downstream
consumers depend on the resulting volume boundaries, so this must stay as is.
"""

from typing import List, Sequence

from .exceptions import InvalidArgumentError
from .logger import logger
from .types import Waypoint

__all__ = [
    "compress",
    "sample_every",
]


def _check_factor(factor: int) -> None:
    if not isinstance(factor, int) or isinstance(factor, bool) or factor < 1:
        raise InvalidArgumentError(
            f"Compression factor must be an integer >= 1, got {factor!r}",
            argument="factor",
        )


def compress(waypoints: Sequence[Waypoint], factor: int) -> List[Waypoint]:
    """
    Keep every ``factor``-th waypoint starting from the second one.

    The final waypoint is always kept; it is appended unless the last
    sampled waypoint already has the same ``time``.

    Args:
        waypoints: Trajectory in time order
        factor: Decimation stride (>= 1)

    Returns:
        Compressed waypoints. Inputs with two or fewer waypoints are
        returned unchanged.

    Raises:
        InvalidArgumentError: If factor is not an integer >= 1

    Example:
        >>> [wp.time for wp in compress(waypoints_0_to_99, 20)]
        [1.0, 21.0, 41.0, 61.0, 81.0, 99.0]
    """
    _check_factor(factor)

    if len(waypoints) <= 2:
        return list(waypoints)

    reduced = list(waypoints[1::factor])

    last = waypoints[-1]
    if reduced[-1].time != last.time:
        reduced.append(last)

    logger.debug(
        f"Reduced waypoints from {len(waypoints)} to {len(reduced)} "
        f"(compression_factor={factor})"
    )
    return reduced


def sample_every(waypoints: Sequence[Waypoint], factor: int) -> List[Waypoint]:
    """
    Keep waypoints at indices 0, factor, 2*factor, ...

    Plain stride used by the legacy axis-aligned generator. Unlike
    ``compress`` it keeps the first waypoint and does not force the last.

    Raises:
        InvalidArgumentError: If factor is not an integer >= 1
    """
    _check_factor(factor)
    return list(waypoints[::factor])
