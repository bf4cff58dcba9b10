"""Decorators for timing, call tracing and argument checks.

@timed
------
Logs how long a pipeline stage took, and how many volumes it produced, at
DEBUG level. Warns when a stage takes longer than 5 seconds: volume
generation is linear in the number of waypoints, so a slow stage usually
means an uncompressed trajectory.

Example:
    >>> @timed
    ... def build_all(waypoints, start_timestamp, config):
    ...     ...
    DEBUG: build_all took 0.02s, 12 volume(s)

@log_calls
----------
Logs entry arguments and the return value at DEBUG level, and logs any
exception at ERROR level before re-raising it. Long reprs (a whole CSV
text, a list of waypoints) are shortened.

@validate_not_none
------------------
Raises InvalidArgumentError (a ValueError) before the call when one of the
named parameters is None.

Example:
    >>> @validate_not_none('csv_text', 'scheduled_at')
    ... def generate_volumes(csv_text, scheduled_at, config=None):
    ...     ...
    >>> generate_volumes(None, 0)
    InvalidArgumentError: Parameter 'csv_text' cannot be None in generate_volumes() (Argument: csv_text)

When stacking, keep @timed outermost and @validate_not_none innermost so
invalid calls fail before any work is timed or traced.
"""

import time
import functools
import inspect
from typing import Callable, Any, Optional, TypeVar

from .exceptions import InvalidArgumentError
from .logger import logger

__all__ = [
    "timed",
    "log_calls",
    "validate_not_none",
]

F = TypeVar("F", bound=Callable[..., Any])

SLOW_CALL_WARNING_SECONDS = 5.0
MAX_LOGGED_REPR = 80


def _volume_count(result: Any) -> Optional[int]:
    # TrajectoryVolumes carries .volumes; the builders return the list itself
    volumes = getattr(result, "volumes", result)
    if isinstance(volumes, list):
        return len(volumes)
    return None


def _short_repr(value: Any) -> str:
    text = repr(value)
    if len(text) > MAX_LOGGED_REPR:
        return f"{text[:MAX_LOGGED_REPR]}... ({len(text)} chars)"
    return text


def timed(func: F) -> F:
    """Log the execution time of a pipeline stage.

    Args:
        func: Function to time

    Returns:
        Wrapped function that logs execution time
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = time.perf_counter() - start_time

        count = _volume_count(result)
        produced = f", {count} volume(s)" if count is not None else ""
        logger.debug(f"{func.__name__} took {elapsed:.2f}s{produced}")

        if elapsed > SLOW_CALL_WARNING_SECONDS:
            logger.warning(
                f"{func.__name__} took {elapsed:.2f}s (is the trajectory compressed?)"
            )

        return result

    return wrapper


def log_calls(func: F) -> F:
    """Log calls, return values and exceptions of a function.

    Args:
        func: Function to log

    Returns:
        Wrapped function that logs calls
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        arguments = [_short_repr(a) for a in args]
        arguments += [f"{k}={_short_repr(v)}" for k, v in kwargs.items()]
        logger.debug(f"Calling {func.__name__}({', '.join(arguments)})")

        try:
            result = func(*args, **kwargs)
        except Exception as e:
            logger.error(f"{func.__name__} raised {type(e).__name__}: {e}")
            raise

        logger.debug(f"{func.__name__} returned {_short_repr(result)}")
        return result

    return wrapper


def validate_not_none(*param_names: str) -> Callable[[F], F]:
    """Reject None for the named parameters before calling the function.

    Args:
        *param_names: Names of parameters to validate

    Returns:
        Decorator function
    """

    def decorator(func: F) -> F:
        sig = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            bound = sig.bind(*args, **kwargs)
            bound.apply_defaults()

            for name in param_names:
                if bound.arguments.get(name, ...) is None:
                    raise InvalidArgumentError(
                        f"Parameter '{name}' cannot be None in {func.__name__}()",
                        argument=name,
                    )

            return func(*args, **kwargs)

        return wrapper

    return decorator
